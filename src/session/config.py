"""Configuration model for work and rest interval durations."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import DEFAULT_REST_SECONDS, DEFAULT_WORK_SECONDS


class SessionConfigurationError(Exception):
    """Raised when session durations are invalid."""


@dataclass(frozen=True)
class SessionConfig:
    """Validated work/rest durations in seconds."""
    work_duration_seconds: float = DEFAULT_WORK_SECONDS
    rest_duration_seconds: float = DEFAULT_REST_SECONDS

    def __post_init__(self) -> None:
        _require_positive(self.work_duration_seconds, "work_duration_seconds")
        _require_positive(self.rest_duration_seconds, "rest_duration_seconds")

    @classmethod
    def from_minutes(cls, work_minutes: float, rest_minutes: float) -> "SessionConfig":
        return cls(
            work_duration_seconds=_minutes_to_seconds(work_minutes, "work_minutes"),
            rest_duration_seconds=_minutes_to_seconds(rest_minutes, "rest_minutes"),
        )

    @classmethod
    def from_settings(cls, settings) -> "SessionConfig":
        return cls.from_minutes(settings.work_minutes, settings.rest_minutes)


def _minutes_to_seconds(value, field: str) -> float:
    if isinstance(value, bool):
        raise SessionConfigurationError(f"{field} must be a number, got: {value!r}")
    try:
        return float(value) * 60.0
    except (TypeError, ValueError) as error:
        raise SessionConfigurationError(f"{field} must be a number, got: {value!r}") from error


def _require_positive(value: float, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SessionConfigurationError(f"{field} must be a number, got: {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise SessionConfigurationError(f"{field} must be greater than zero, got: {value}")
