from .config import SessionConfig, SessionConfigurationError
from .service import (
    DropAnimatorLike,
    SessionAction,
    SessionActionResult,
    SessionController,
    SessionSnapshot,
    SessionTick,
)
from .state import Paused, Resting, SessionState, WindowCommand, Working

__all__ = [
    "DropAnimatorLike",
    "Paused",
    "Resting",
    "SessionAction",
    "SessionActionResult",
    "SessionConfig",
    "SessionConfigurationError",
    "SessionController",
    "SessionSnapshot",
    "SessionState",
    "SessionTick",
    "WindowCommand",
    "Working",
]
