"""Dispatcher that applies UI commands to the session controller and drops."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Mapping, Optional

from app_config_schema import SessionSettings
from contracts.ui_protocol import (
    COMMAND_RECONFIGURE,
    COMMAND_VIEWPORT,
    SESSION_COMMANDS,
)
from drops import DropAnimator
from session import SessionActionResult, SessionConfigurationError, SessionController

from .ui import RuntimeUIPublisher


class RuntimeCommandDispatcher:
    """Routes decoded client commands to session actions or viewport updates."""
    def __init__(
        self,
        *,
        logger: logging.Logger,
        controller: SessionController,
        animator: DropAnimator,
        ui: RuntimeUIPublisher,
        flush_window_commands: Callable[[], None],
    ):
        self._logger = logger
        self._controller = controller
        self._animator = animator
        self._ui = ui
        self._flush_window_commands = flush_window_commands

    def handle_command(
        self,
        command: Mapping[str, Any],
        *,
        now: Optional[float] = None,
    ) -> Optional[SessionActionResult]:
        name = command.get("command")
        if name == COMMAND_VIEWPORT:
            self._handle_viewport(command)
            return None

        if name not in SESSION_COMMANDS:
            self._logger.warning("Unsupported UI command: %s", name)
            return None

        if name == COMMAND_RECONFIGURE:
            try:
                result = self._controller.reconfigure(self._requested_settings(command))
            except SessionConfigurationError as error:
                self._logger.warning("Rejected session configuration: %s", error)
                self._ui.publish_config_rejected(str(error))
                return None
        else:
            result = self._controller.apply(name, now=now)

        self._flush_window_commands()
        self._ui.publish_session_update(
            result.snapshot,
            action=result.action,
            accepted=result.accepted,
            reason=result.reason,
        )
        return result

    def _requested_settings(self, command: Mapping[str, Any]) -> SessionSettings:
        current = self._controller.config
        return SessionSettings(
            work_minutes=command.get(
                "work_minutes",
                current.work_duration_seconds / 60.0,
            ),
            rest_minutes=command.get(
                "rest_minutes",
                current.rest_duration_seconds / 60.0,
            ),
        )

    def _handle_viewport(self, command: Mapping[str, Any]) -> None:
        try:
            width = float(command["width"])
            height = float(command["height"])
        except (KeyError, TypeError, ValueError):
            self._logger.warning("Ignoring viewport command without width/height: %s", command)
            return
        if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
            self._logger.warning("Ignoring invalid viewport %sx%s", width, height)
            return
        self._animator.resize((width, height))
        self._logger.debug("Viewport resized to %sx%s", width, height)
