"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class SessionSettings:
    """Work/rest interval lengths from `[session]`."""
    work_minutes: float = 25.0
    rest_minutes: float = 5.0


@dataclass(frozen=True)
class DropSettings:
    """Rest-overlay drop simulation tuning from `[drops]`."""
    count: int = 20
    low_water_ratio: float = 1.0
    min_fall_speed: float = 100.0
    max_fall_speed: float = 250.0
    max_drift: float = 15.0
    gravity: float = 60.0
    terminal_velocity: Optional[float] = None
    max_spin: float = 90.0
    margin: float = 50.0
    symbols: tuple[str, ...] = ()
    viewport_width: float = 1920.0
    viewport_height: float = 1080.0


@dataclass(frozen=True)
class RuntimeSettings:
    """Frame pacing per phase and startup behaviour from `[runtime]`."""
    rest_frame_seconds: float = 0.016
    work_frame_seconds: float = 0.1
    paused_frame_seconds: float = 0.05
    auto_start: bool = False


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    session: SessionSettings
    drops: DropSettings
    runtime: RuntimeSettings
    ui_server: UIServerSettings
    source_file: str
