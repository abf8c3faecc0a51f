"""
Configuration for hrsw stopwatches.

Settings resolve in this order:
1. Explicit ``StopwatchConfig(...)`` arguments
2. Environment variables (``HRSW_CLOCK_SOURCE``, ``HRSW_REGRESSION_POLICY``)
3. Defaults below

Environment values are enum member names, matched case-insensitively,
e.g. ``HRSW_CLOCK_SOURCE=perf_counter``.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace as dataclass_replace
from enum import IntEnum
from functools import lru_cache
from typing import Mapping, Optional, Type, TypeVar

from .clocks import get_clock
from .exceptions import ConfigurationError
from .types.enums import ClockSource, RegressionPolicy
from .types.protocols import IClock

logger = logging.getLogger(__name__)

ENV_CLOCK_SOURCE = "HRSW_CLOCK_SOURCE"
ENV_REGRESSION_POLICY = "HRSW_REGRESSION_POLICY"

EnumT = TypeVar('EnumT', bound=IntEnum)


def _parse_enum(enum_type: Type[EnumT], env_name: str, raw: str) -> EnumT:
    try:
        return enum_type[raw.strip().upper()]
    except KeyError:
        choices = ", ".join(member.name.lower() for member in enum_type)
        raise ConfigurationError(
            f"Invalid value for {env_name}: {raw!r} (expected one of: {choices})",
            env_name=env_name,
            value=raw
        ) from None


@dataclass(frozen=True)
class StopwatchConfig:
    clock_source: ClockSource = ClockSource.MONOTONIC
    regression_policy: RegressionPolicy = RegressionPolicy.RAISE

    def __post_init__(self):
        if not isinstance(self.clock_source, ClockSource):
            raise ConfigurationError(f"Invalid clock source: {self.clock_source!r}")

        if not isinstance(self.regression_policy, RegressionPolicy):
            raise ConfigurationError(f"Invalid regression policy: {self.regression_policy!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> StopwatchConfig:
        """Build a config from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        config = cls()

        raw_source = env.get(ENV_CLOCK_SOURCE)
        if raw_source:
            config = dataclass_replace(
                config, clock_source=_parse_enum(ClockSource, ENV_CLOCK_SOURCE, raw_source)
            )

        raw_policy = env.get(ENV_REGRESSION_POLICY)
        if raw_policy:
            config = dataclass_replace(
                config,
                regression_policy=_parse_enum(RegressionPolicy, ENV_REGRESSION_POLICY, raw_policy)
            )

        logger.debug(
            "Loaded stopwatch config: clock_source=%s regression_policy=%s",
            config.clock_source.name, config.regression_policy.name
        )
        return config

    def with_clock_source(self, clock_source: ClockSource) -> StopwatchConfig:
        return dataclass_replace(self, clock_source=clock_source)

    def with_regression_policy(self, regression_policy: RegressionPolicy) -> StopwatchConfig:
        return dataclass_replace(self, regression_policy=regression_policy)

    def create_clock(self) -> IClock:
        return get_clock(self.clock_source)


@lru_cache(maxsize=1)
def get_default_config() -> StopwatchConfig:
    """Get the process-wide default config (read from the environment once)."""
    return StopwatchConfig.from_env()


__all__ = [
    "StopwatchConfig",
    "get_default_config",
    "ENV_CLOCK_SOURCE",
    "ENV_REGRESSION_POLICY",
]
