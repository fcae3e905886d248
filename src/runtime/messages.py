"""Status text builders for session snapshots."""

from __future__ import annotations

from session import SessionSnapshot
from session.constants import PHASE_PAUSED, PHASE_RESTING, PHASE_WORKING


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def session_status_message(snapshot: SessionSnapshot) -> str:
    remaining = format_duration(snapshot.remaining_seconds)
    if snapshot.phase == PHASE_WORKING:
        return f"Focusing ({remaining} left)"
    if snapshot.phase == PHASE_RESTING:
        return f"Rest time ({remaining} left)"
    if snapshot.phase == PHASE_PAUSED and snapshot.resume_into is not None:
        return f"Paused ({remaining} left)"
    return f"Ready ({remaining})"
