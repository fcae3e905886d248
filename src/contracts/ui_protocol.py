"""Web UI websocket event, command, and state constants."""

from __future__ import annotations

# Websocket event types (server -> client)
EVENT_HELLO = "hello"
EVENT_SESSION = "session"
EVENT_DROPS = "drops"
EVENT_WINDOW_COMMAND = "window_command"
EVENT_CONFIG_REJECTED = "config_rejected"
EVENT_ERROR = "error"

# Websocket commands (client -> server), carried in the `command` field
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_SKIP = "skip"
COMMAND_REST = "rest"
COMMAND_RECONFIGURE = "reconfigure"
COMMAND_VIEWPORT = "viewport"

SESSION_COMMANDS: frozenset[str] = frozenset(
    {
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_SKIP,
        COMMAND_REST,
        COMMAND_RECONFIGURE,
    }
)

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_SESSION,
        EVENT_CONFIG_REJECTED,
        EVENT_ERROR,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_CONFIG_REJECTED,
    EVENT_ERROR,
    EVENT_SESSION,
)
