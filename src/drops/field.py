"""Column-wise drop storage and the pure spawn/integrate/cull steps over it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import numpy as np

from .config import DropConfig


class RandomSource(Protocol):
    """Subset of `numpy.random.Generator` used to randomize new drops."""
    def uniform(self, low: float, high: float, size: int) -> np.ndarray:
        ...

    def integers(self, low: int, high: int, size: int) -> np.ndarray:
        ...


@dataclass(frozen=True)
class DropField:
    """One row per live drop; arrays are never mutated after construction."""
    x: np.ndarray
    y: np.ndarray
    vx: np.ndarray
    vy: np.ndarray
    rotation: np.ndarray
    angular_velocity: np.ndarray
    symbol_index: np.ndarray
    spawn_time: np.ndarray

    def __len__(self) -> int:
        return int(self.x.shape[0])


def empty_field() -> DropField:
    floats = np.zeros(0, dtype=np.float64)
    return DropField(
        x=floats,
        y=floats,
        vx=floats,
        vy=floats,
        rotation=floats,
        angular_velocity=floats,
        symbol_index=np.zeros(0, dtype=np.int64),
        spawn_time=floats,
    )


def spawn_drops(
    rng: RandomSource,
    count: int,
    width: float,
    config: DropConfig,
    spawn_time: float,
) -> DropField:
    """Create `count` drops along the top edge with randomized motion."""
    if count <= 0:
        return empty_field()

    return DropField(
        x=_floats(rng.uniform(0.0, width, count)),
        y=np.zeros(count, dtype=np.float64),
        vx=_floats(rng.uniform(-config.max_drift, config.max_drift, count)),
        vy=_floats(rng.uniform(config.min_fall_speed, config.max_fall_speed, count)),
        rotation=_floats(rng.uniform(0.0, 360.0, count)),
        angular_velocity=_floats(rng.uniform(-config.max_spin, config.max_spin, count)),
        symbol_index=np.asarray(
            rng.integers(0, len(config.symbols), count),
            dtype=np.int64,
        ),
        spawn_time=np.full(count, float(spawn_time), dtype=np.float64),
    )


def integrate(
    field: DropField,
    dt: float,
    gravity: float,
    terminal_velocity: Optional[float] = None,
) -> DropField:
    """Advance one explicit Euler step: position uses the pre-step velocity."""
    vy = field.vy + gravity * dt
    if terminal_velocity is not None:
        vy = np.minimum(vy, terminal_velocity)

    return DropField(
        x=field.x + field.vx * dt,
        y=field.y + field.vy * dt,
        vx=field.vx,
        vy=vy,
        rotation=np.mod(field.rotation + field.angular_velocity * dt, 360.0),
        angular_velocity=field.angular_velocity,
        symbol_index=field.symbol_index,
        spawn_time=field.spawn_time,
    )


def cull(field: DropField, limit_y: float) -> DropField:
    """Drop every row whose `y` is past `limit_y`."""
    keep = field.y <= limit_y
    if bool(keep.all()):
        return field
    return _select(field, keep)


def merge(first: DropField, second: DropField) -> DropField:
    if len(second) == 0:
        return first
    if len(first) == 0:
        return second
    return DropField(
        x=np.concatenate((first.x, second.x)),
        y=np.concatenate((first.y, second.y)),
        vx=np.concatenate((first.vx, second.vx)),
        vy=np.concatenate((first.vy, second.vy)),
        rotation=np.concatenate((first.rotation, second.rotation)),
        angular_velocity=np.concatenate((first.angular_velocity, second.angular_velocity)),
        symbol_index=np.concatenate((first.symbol_index, second.symbol_index)),
        spawn_time=np.concatenate((first.spawn_time, second.spawn_time)),
    )


def _select(field: DropField, mask: np.ndarray) -> DropField:
    return DropField(
        x=field.x[mask],
        y=field.y[mask],
        vx=field.vx[mask],
        vy=field.vy[mask],
        rotation=field.rotation[mask],
        angular_velocity=field.angular_velocity[mask],
        symbol_index=field.symbol_index[mask],
        spawn_time=field.spawn_time[mask],
    )


def _floats(values) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)
