"""Per-frame tick handling: clock, drops, window commands, and UI updates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from drops import DropAnimator
from session import SessionController, SessionSnapshot
from session.constants import ACTION_TICK, ACTION_TRANSITION, REASON_TICK

from .contracts import WindowManagerError, WindowManagerLike
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class TickDependencies:
    """Collaborators advanced or notified once per rendered frame."""
    controller: SessionController
    animator: DropAnimator
    window_manager: WindowManagerLike
    ui: RuntimeUIPublisher
    logger: logging.Logger


class TickProcessor:
    """Advances the session and drops by one frame and publishes the result."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies
        self._last_frame_monotonic: Optional[float] = None
        self._last_published_remaining: Optional[int] = None

    def process_frame(self, now: float) -> SessionSnapshot:
        deps = self._dependencies
        previous = self._last_frame_monotonic
        self._last_frame_monotonic = now
        frame_delta = 0.0 if previous is None else max(0.0, now - previous)

        tick = deps.controller.tick(now)
        deps.animator.advance(frame_delta)
        self.flush_window_commands()

        snapshot = tick.snapshot
        if tick.transitioned:
            deps.ui.publish_session_update(
                snapshot,
                action=ACTION_TRANSITION,
                accepted=True,
                reason=snapshot.phase,
            )
            self._last_published_remaining = snapshot.remaining_seconds
        elif snapshot.is_running and snapshot.remaining_seconds != self._last_published_remaining:
            deps.ui.publish_session_update(
                snapshot,
                action=ACTION_TICK,
                accepted=True,
                reason=REASON_TICK,
            )
            self._last_published_remaining = snapshot.remaining_seconds

        if deps.animator.is_active:
            deps.ui.publish_drops(deps.animator.snapshot())
        return snapshot

    def flush_window_commands(self) -> None:
        """Execute queued window commands in order and mirror them to the UI."""
        deps = self._dependencies
        for command in deps.controller.drain_commands():
            try:
                deps.window_manager.execute(command)
            except WindowManagerError as error:
                deps.logger.error("Window command %s failed: %s", command, error)
                deps.ui.publish_error(f"Window command {command} failed: {error}")
            deps.ui.publish_window_command(command)
