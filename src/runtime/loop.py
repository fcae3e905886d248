"""Cooperative frame loop that drives the session controller and drop animator."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Optional

from drops import DropAnimator
from server import UIServer
from session import SessionController, SessionSnapshot
from session.constants import (
    ACTION_SYNC,
    PHASE_RESTING,
    PHASE_WORKING,
    REASON_STARTUP,
)

from .command_dispatch import RuntimeCommandDispatcher
from .contracts import RuntimeSettingsLike, WindowManagerLike
from .ticks import TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    settings: RuntimeSettingsLike
    controller: SessionController
    animator: DropAnimator
    window_manager: WindowManagerLike
    command_queue: Queue[dict[str, Any]]
    ui_server: Optional[UIServer] = None


class RuntimeEngine:
    """Main loop: apply queued commands, tick one frame, sleep per phase."""
    def __init__(
        self,
        bootstrap: RuntimeBootstrap,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._clock = clock
        self._stop_requested = threading.Event()

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._tick_processor = TickProcessor(
            TickDependencies(
                controller=bootstrap.controller,
                animator=bootstrap.animator,
                window_manager=bootstrap.window_manager,
                ui=self._ui,
                logger=self._logger,
            )
        )
        self._dispatcher = RuntimeCommandDispatcher(
            logger=self._logger,
            controller=bootstrap.controller,
            animator=bootstrap.animator,
            ui=self._ui,
            flush_window_commands=self._tick_processor.flush_window_commands,
        )

    def request_stop(self) -> None:
        self._stop_requested.set()

    def run(self, max_frames: Optional[int] = None) -> int:
        self._publish_startup_sync()
        if self._bootstrap.settings.auto_start:
            self._bootstrap.controller.start(self._clock())

        frames = 0
        try:
            while not self._stop_requested.is_set():
                now = self._clock()
                self._drain_commands(now)
                snapshot = self._tick_processor.process_frame(now)

                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
                self._stop_requested.wait(self._frame_interval(snapshot))
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()
        return 0

    def _drain_commands(self, now: float) -> None:
        queue = self._bootstrap.command_queue
        while True:
            try:
                command = queue.get_nowait()
            except Empty:
                return
            self._dispatcher.handle_command(command, now=now)

    def _frame_interval(self, snapshot: SessionSnapshot) -> float:
        settings = self._bootstrap.settings
        if snapshot.phase == PHASE_RESTING:
            return settings.rest_frame_seconds
        if snapshot.phase == PHASE_WORKING:
            return settings.work_frame_seconds
        return settings.paused_frame_seconds

    def _publish_startup_sync(self) -> None:
        self._ui.publish_session_update(
            self._bootstrap.controller.snapshot(),
            action=ACTION_SYNC,
            accepted=True,
            reason=REASON_STARTUP,
        )

    def _shutdown(self) -> None:
        self._bootstrap.animator.deactivate()

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
