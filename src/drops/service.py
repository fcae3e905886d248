"""Falling emoji drops shown on the rest overlay."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import DEFAULT_VIEWPORT, DropConfig
from .field import DropField, RandomSource, cull, empty_field, integrate, merge, spawn_drops


@dataclass(frozen=True)
class DropSnapshot:
    """Render-ready view of one drop."""
    x: float
    y: float
    rotation: float
    symbol: str


class DropAnimator:
    """Keeps a roughly constant number of drops falling while active."""

    def __init__(
        self,
        config: Optional[DropConfig] = None,
        *,
        viewport_size: tuple[float, float] = DEFAULT_VIEWPORT,
        random_source: Optional[RandomSource] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config or DropConfig()
        self._viewport = _coerce_viewport(viewport_size) or DEFAULT_VIEWPORT
        self._rng: RandomSource = random_source or np.random.default_rng()
        self._logger = logger or logging.getLogger("drops")

        self._active = False
        self._density = 0
        self._clock = 0.0
        self._field = empty_field()

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def density(self) -> int:
        return self._density

    @property
    def viewport_size(self) -> tuple[float, float]:
        return self._viewport

    @property
    def field(self) -> DropField:
        return self._field

    def __len__(self) -> int:
        return len(self._field)

    def activate(
        self,
        viewport_size: Optional[tuple[float, float]] = None,
        count: Optional[int] = None,
    ) -> None:
        """Replace any live drops with a fresh batch of `count` along the top edge."""
        if viewport_size is not None:
            self.resize(viewport_size)
        density = self._config.count if count is None else max(0, int(count))

        self._active = True
        self._density = density
        self._field = spawn_drops(
            self._rng,
            density,
            self._viewport[0],
            self._config,
            self._clock,
        )
        self._logger.debug(
            "Drops activated: count=%d viewport=%sx%s",
            density,
            self._viewport[0],
            self._viewport[1],
        )

    def deactivate(self) -> None:
        if not self._active and len(self._field) == 0:
            return
        self._active = False
        self._density = 0
        self._field = empty_field()
        self._logger.debug("Drops cleared")

    def resize(self, viewport_size: tuple[float, float]) -> None:
        """Update spawn and cull bounds; non-finite sizes keep the current viewport."""
        viewport = _coerce_viewport(viewport_size)
        if viewport is None:
            self._logger.warning("Ignoring non-finite viewport %r", viewport_size)
            return
        self._viewport = viewport

    def advance(self, delta_time: float) -> None:
        if not self._active:
            return

        dt = float(delta_time)
        if not math.isfinite(dt) or dt < 0:
            dt = 0.0
        self._clock += dt

        config = self._config
        width, height = self._viewport
        field = integrate(self._field, dt, config.gravity, config.terminal_velocity)
        field = cull(field, height + config.margin)

        if len(field) < config.low_water_mark(self._density):
            refill = spawn_drops(
                self._rng,
                self._density - len(field),
                width,
                config,
                self._clock,
            )
            field = merge(field, refill)

        self._field = field

    def snapshot(self) -> tuple[DropSnapshot, ...]:
        field = self._field
        symbols = self._config.symbols
        return tuple(
            DropSnapshot(
                x=float(x),
                y=float(y),
                rotation=float(rotation),
                symbol=symbols[int(index) % len(symbols)],
            )
            for x, y, rotation, index in zip(
                field.x,
                field.y,
                field.rotation,
                field.symbol_index,
            )
        )


def _coerce_viewport(viewport_size: tuple[float, float]) -> Optional[tuple[float, float]]:
    width, height = (float(value) for value in viewport_size)
    if not (math.isfinite(width) and math.isfinite(height)):
        return None
    return max(0.0, width), max(0.0, height)
