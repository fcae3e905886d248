"""Immutable session states and the pure transitions between them.

Every function here takes a state and returns a `Transition` holding the next
state plus the window commands the change implies. Nothing is mutated; the
controller in `service.py` owns the current state and commits transitions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, Optional, Union

from .config import SessionConfig
from .constants import (
    COMMAND_ENTER_OVERLAY,
    COMMAND_EXIT_OVERLAY,
    COMMAND_MINIMIZE,
    PHASE_PAUSED,
    PHASE_RESTING,
    PHASE_WORKING,
)

SessionPhase = Literal["working", "resting", "paused"]
ResumablePhase = Literal["working", "resting"]
WindowCommand = Literal["enter_overlay", "exit_overlay", "minimize"]


@dataclass(frozen=True)
class Working:
    elapsed: float = 0.0
    phase: ClassVar[SessionPhase] = PHASE_WORKING


@dataclass(frozen=True)
class Resting:
    elapsed: float = 0.0
    phase: ClassVar[SessionPhase] = PHASE_RESTING


@dataclass(frozen=True)
class Paused:
    """Stopped clock; `resume_into` is None after a finished rest or at startup."""
    resume_into: Optional[ResumablePhase] = None
    elapsed_at_pause: float = 0.0
    phase: ClassVar[SessionPhase] = PHASE_PAUSED


SessionState = Union[Working, Resting, Paused]


@dataclass(frozen=True)
class Transition:
    state: SessionState
    commands: tuple[WindowCommand, ...] = ()


def phase_duration(phase: Optional[str], config: SessionConfig) -> float:
    """Duration of a phase; a paused session with nothing to resume shows work."""
    if phase == PHASE_RESTING:
        return config.rest_duration_seconds
    return config.work_duration_seconds


def elapsed_of(state: SessionState) -> float:
    if isinstance(state, Paused):
        return state.elapsed_at_pause
    return state.elapsed


def advance(state: SessionState, config: SessionConfig, delta_seconds: float) -> Transition:
    """Accrue `delta_seconds` of wall-clock time and fire at most one transition.

    Time beyond the phase end is dropped: the next phase always starts at zero.
    """
    delta = max(0.0, delta_seconds)
    if isinstance(state, Working):
        elapsed = _accrue(state.elapsed, delta, config.work_duration_seconds)
        if elapsed >= config.work_duration_seconds:
            return begin_rest()
        return Transition(Working(elapsed))

    if isinstance(state, Resting):
        elapsed = _accrue(state.elapsed, delta, config.rest_duration_seconds)
        if elapsed >= config.rest_duration_seconds:
            return end_rest()
        return Transition(Resting(elapsed))

    return Transition(state)


def begin_rest() -> Transition:
    return Transition(Resting(0.0), (COMMAND_ENTER_OVERLAY,))


def end_rest() -> Transition:
    return Transition(Paused(None, 0.0), (COMMAND_EXIT_OVERLAY, COMMAND_MINIMIZE))


def pause(state: SessionState, config: SessionConfig, delta_seconds: float) -> Transition:
    """Freeze a running phase after accruing time up to the pause instant."""
    if isinstance(state, Paused):
        return Transition(state)

    duration = phase_duration(state.phase, config)
    elapsed = _accrue(state.elapsed, max(0.0, delta_seconds), duration)
    paused = Paused(resume_into=state.phase, elapsed_at_pause=elapsed)
    if isinstance(state, Resting):
        return Transition(paused, (COMMAND_EXIT_OVERLAY,))
    return Transition(paused)


def resume(state: Paused, config: SessionConfig) -> Transition:
    if state.resume_into == PHASE_RESTING:
        elapsed = min(state.elapsed_at_pause, config.rest_duration_seconds)
        return Transition(Resting(elapsed), (COMMAND_ENTER_OVERLAY,))
    if state.resume_into == PHASE_WORKING:
        return Transition(Working(min(state.elapsed_at_pause, config.work_duration_seconds)))
    return Transition(Working(0.0))


def _accrue(elapsed: float, delta: float, duration: float) -> float:
    return min(duration, elapsed + delta)
