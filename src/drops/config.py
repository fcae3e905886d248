"""Configuration model for the rest-overlay emoji drop simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

DEFAULT_SYMBOLS: tuple[str, ...] = (
    "😀", "😂", "😎", "🤩", "😭", "🔥", "🍓", "🍉", "💎", "✨", "🎉", "❤️", "🚀",
)
DEFAULT_VIEWPORT: tuple[float, float] = (1920.0, 1080.0)


class DropConfigurationError(Exception):
    """Raised when drop simulation configuration is invalid."""


@dataclass(frozen=True)
class DropConfig:
    """Spawn ranges and physics constants, in pixels, seconds and degrees."""
    count: int = 20
    low_water_ratio: float = 1.0
    min_fall_speed: float = 100.0
    max_fall_speed: float = 250.0
    max_drift: float = 15.0
    gravity: float = 60.0
    terminal_velocity: Optional[float] = None
    max_spin: float = 90.0
    margin: float = 50.0
    symbols: tuple[str, ...] = DEFAULT_SYMBOLS

    def __post_init__(self) -> None:
        if self.count < 0:
            raise DropConfigurationError(f"DROPS_COUNT must be >= 0, got: {self.count}")

        if not 0.0 < self.low_water_ratio <= 1.0:
            raise DropConfigurationError(
                f"DROPS_LOW_WATER_RATIO must be in (0, 1], got: {self.low_water_ratio}"
            )

        if (
            not math.isfinite(self.min_fall_speed)
            or not math.isfinite(self.max_fall_speed)
            or self.min_fall_speed < 0
            or self.max_fall_speed < self.min_fall_speed
        ):
            raise DropConfigurationError(
                "DROPS_FALL_SPEED range is invalid: "
                f"[{self.min_fall_speed}, {self.max_fall_speed}]"
            )

        for name, value in (
            ("max_drift", self.max_drift),
            ("max_spin", self.max_spin),
            ("margin", self.margin),
        ):
            if not math.isfinite(value) or value < 0:
                raise DropConfigurationError(f"DROPS_{name.upper()} must be >= 0, got: {value}")

        if not math.isfinite(self.gravity):
            raise DropConfigurationError(f"DROPS_GRAVITY must be finite, got: {self.gravity}")

        if self.terminal_velocity is not None and not self.terminal_velocity > 0:
            raise DropConfigurationError(
                f"DROPS_TERMINAL_VELOCITY must be > 0, got: {self.terminal_velocity}"
            )

        if not self.symbols:
            raise DropConfigurationError("DROPS_SYMBOLS cannot be empty")

    def low_water_mark(self, density: int) -> int:
        """Live-drop count below which the field is topped back up to `density`."""
        if density <= 0:
            return 0
        return max(1, math.ceil(density * self.low_water_ratio))

    @classmethod
    def from_settings(cls, settings) -> "DropConfig":
        symbols = tuple(getattr(settings, "symbols", ()) or ()) or DEFAULT_SYMBOLS
        return cls(
            count=settings.count,
            low_water_ratio=settings.low_water_ratio,
            min_fall_speed=settings.min_fall_speed,
            max_fall_speed=settings.max_fall_speed,
            max_drift=settings.max_drift,
            gravity=settings.gravity,
            terminal_velocity=settings.terminal_velocity,
            max_spin=settings.max_spin,
            margin=settings.margin,
            symbols=symbols,
        )
