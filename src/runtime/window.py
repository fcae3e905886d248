"""Headless window executor for overlay and minimize commands."""

from __future__ import annotations

import logging
from collections import deque
from typing import Optional

from session.constants import (
    COMMAND_ENTER_OVERLAY,
    COMMAND_EXIT_OVERLAY,
    COMMAND_MINIMIZE,
)

from .contracts import WindowManagerError

KNOWN_WINDOW_COMMANDS: frozenset[str] = frozenset(
    {COMMAND_ENTER_OVERLAY, COMMAND_EXIT_OVERLAY, COMMAND_MINIMIZE}
)
HISTORY_LIMIT = 32


class LoggingWindowManager:
    """Headless window manager: records commands and tracks overlay state."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        *,
        history_limit: int = HISTORY_LIMIT,
    ):
        self._logger = logger or logging.getLogger("window")
        self.fullscreen = False
        self.minimized = False
        self.history: deque[str] = deque(maxlen=history_limit)

    def execute(self, command: str) -> None:
        if command not in KNOWN_WINDOW_COMMANDS:
            raise WindowManagerError(f"Unknown window command: {command}")

        self.history.append(command)
        if command == COMMAND_ENTER_OVERLAY:
            self.fullscreen = True
            self.minimized = False
        elif command == COMMAND_EXIT_OVERLAY:
            self.fullscreen = False
        elif command == COMMAND_MINIMIZE:
            self.minimized = True
        self._logger.info(
            "Window command %s (fullscreen=%s minimized=%s)",
            command,
            self.fullscreen,
            self.minimized,
        )
