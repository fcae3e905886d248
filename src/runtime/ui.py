from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from contracts.ui_protocol import (
    EVENT_CONFIG_REJECTED,
    EVENT_DROPS,
    EVENT_ERROR,
    EVENT_SESSION,
    EVENT_WINDOW_COMMAND,
)
from drops import DropSnapshot
from session import SessionSnapshot

from .messages import session_status_message


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_session_update(
        self,
        snapshot: SessionSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
    ) -> None:
        payload: dict[str, Any] = {
            "action": action,
            "phase": snapshot.phase,
            "resume_into": snapshot.resume_into,
            "elapsed_seconds": round(snapshot.elapsed_seconds, 3),
            "duration_seconds": snapshot.duration_seconds,
            "remaining_seconds": snapshot.remaining_seconds,
            "overlay": snapshot.overlay_active,
            "message": session_status_message(snapshot),
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        self.publish(EVENT_SESSION, **payload)

    def publish_drops(self, drops: Iterable[DropSnapshot]) -> None:
        self.publish(
            EVENT_DROPS,
            drops=[
                {
                    "x": round(drop.x, 1),
                    "y": round(drop.y, 1),
                    "rotation": round(drop.rotation, 1),
                    "symbol": drop.symbol,
                }
                for drop in drops
            ],
        )

    def publish_window_command(self, command: str) -> None:
        self.publish(EVENT_WINDOW_COMMAND, command=command)

    def publish_config_rejected(self, message: str) -> None:
        self.publish(EVENT_CONFIG_REJECTED, message=message)

    def publish_error(self, message: str) -> None:
        self.publish(EVENT_ERROR, message=message)
