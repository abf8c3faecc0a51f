from __future__ import annotations
from typing import Optional

from .types.aliases import Nanoseconds


class HrswError(Exception):
    def __init__(self, message: str, **kwargs):
        super().__init__(message)
        self.message = message
        self.context = kwargs


class ClockError(HrswError):
    pass


class ClockRegressionError(ClockError):
    def __init__(self, message: str, started_ns: Optional[Nanoseconds] = None,
                 now_ns: Optional[Nanoseconds] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.started_ns = started_ns
        self.now_ns = now_ns


class ClockUnavailableError(ClockError):
    def __init__(self, message: str, clock_source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.clock_source = clock_source


class ConfigurationError(HrswError, ValueError):
    pass


__all__ = [
    'HrswError',
    'ClockError',
    'ClockRegressionError',
    'ClockUnavailableError',
    'ConfigurationError',
]
