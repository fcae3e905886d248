"""Phase, action, reason, and window-command constants used by the session controller."""

from __future__ import annotations

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_REST_SECONDS = 5 * 60

PHASE_WORKING = "working"
PHASE_RESTING = "resting"
PHASE_PAUSED = "paused"

RUNNING_PHASES: frozenset[str] = frozenset({PHASE_WORKING, PHASE_RESTING})

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_SKIP = "skip"
ACTION_REST = "rest"
ACTION_RECONFIGURE = "reconfigure"

ACTION_SYNC = "sync"
ACTION_TICK = "tick"
ACTION_TRANSITION = "transition"

REASON_STARTED = "started"
REASON_RESUMED = "resumed"
REASON_PAUSED = "paused"
REASON_REST_ENDED = "rest_ended"
REASON_REST_STARTED = "rest_started"
REASON_RECONFIGURED = "reconfigured"
REASON_NOT_PAUSED = "not_paused"
REASON_ALREADY_PAUSED = "already_paused"
REASON_NOT_RESTING = "not_resting"
REASON_ALREADY_RESTING = "already_resting"
REASON_UNSUPPORTED_ACTION = "unsupported_action"

REASON_TICK = "tick"
REASON_STARTUP = "startup"

COMMAND_ENTER_OVERLAY = "enter_overlay"
COMMAND_EXIT_OVERLAY = "exit_overlay"
COMMAND_MINIMIZE = "minimize"
