from __future__ import annotations
from typing import Protocol, runtime_checkable

from .aliases import Nanoseconds


@runtime_checkable
class IClock(Protocol):
    @property
    def resolution_ns(self) -> Nanoseconds:
        ...
    
    def now_ns(self) -> Nanoseconds:
        ...
