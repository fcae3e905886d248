"""Protocols describing runtime-facing window and settings capabilities."""

from __future__ import annotations

from typing import Protocol


class WindowManagerError(Exception):
    """Raised by a window manager that could not carry out a command."""


class WindowManagerLike(Protocol):
    """Platform layer that executes overlay and minimize commands."""
    def execute(self, command: str) -> None:
        ...


class RuntimeSettingsLike(Protocol):
    """Subset of `[runtime]` settings used for frame pacing."""
    rest_frame_seconds: float
    work_frame_seconds: float
    paused_frame_seconds: float
    auto_start: bool
