"""Frame-driven work/rest/pause state machine with monotonic timing."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Literal, Optional, Protocol, Union

from . import state as transitions
from .config import SessionConfig, SessionConfigurationError
from .constants import (
    ACTION_PAUSE,
    ACTION_RECONFIGURE,
    ACTION_REST,
    ACTION_SKIP,
    ACTION_START,
    PHASE_RESTING,
    REASON_ALREADY_PAUSED,
    REASON_ALREADY_RESTING,
    REASON_NOT_PAUSED,
    REASON_NOT_RESTING,
    REASON_PAUSED,
    REASON_RECONFIGURED,
    REASON_REST_ENDED,
    REASON_REST_STARTED,
    REASON_RESUMED,
    REASON_STARTED,
    REASON_UNSUPPORTED_ACTION,
    RUNNING_PHASES,
)
from .state import (
    Paused,
    ResumablePhase,
    Resting,
    SessionPhase,
    SessionState,
    Transition,
    WindowCommand,
)

SessionAction = Literal["start", "pause", "skip", "rest", "reconfigure"]


class DropAnimatorLike(Protocol):
    """Lifecycle hooks the controller drives on entering and leaving rest."""
    def activate(self) -> None:
        ...

    def deactivate(self) -> None:
        ...


class SessionSettingsLike(Protocol):
    work_minutes: float
    rest_minutes: float


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable session view exposed to the runtime and UI publishers."""
    phase: SessionPhase
    resume_into: Optional[ResumablePhase]
    elapsed_seconds: float
    duration_seconds: float
    remaining_seconds: int

    @property
    def is_running(self) -> bool:
        return self.phase in RUNNING_PHASES

    @property
    def overlay_active(self) -> bool:
        return self.phase == PHASE_RESTING


@dataclass(frozen=True)
class SessionActionResult:
    """Result envelope returned after applying a user command."""
    action: SessionAction
    accepted: bool
    reason: str
    snapshot: SessionSnapshot


@dataclass(frozen=True)
class SessionTick:
    """Outcome of one frame's clock evaluation."""
    snapshot: SessionSnapshot
    transitioned: bool = False


class SessionController:
    """Owns the session state, its clock baseline, and the window-command queue."""

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        *,
        animator: Optional[DropAnimatorLike] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config or SessionConfig()
        self._animator = animator
        self._logger = logger or logging.getLogger("session")

        self._state: SessionState = Paused()
        self._last_tick_monotonic: Optional[float] = None
        self._commands: list[WindowCommand] = []

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def state(self) -> SessionState:
        return self._state

    def snapshot(self) -> SessionSnapshot:
        state = self._state
        if isinstance(state, Paused):
            resume_into = state.resume_into
            duration = transitions.phase_duration(resume_into, self._config)
        else:
            resume_into = None
            duration = transitions.phase_duration(state.phase, self._config)

        elapsed = transitions.elapsed_of(state)
        remaining = int(math.ceil(duration - elapsed))
        return SessionSnapshot(
            phase=state.phase,
            resume_into=resume_into,
            elapsed_seconds=elapsed,
            duration_seconds=duration,
            remaining_seconds=max(0, remaining),
        )

    def drain_commands(self) -> list[WindowCommand]:
        """Return pending window commands in emission order and clear the queue."""
        commands = self._commands
        self._commands = []
        return commands

    def tick(self, now: Optional[float] = None) -> SessionTick:
        delta = self._sample_clock(now)
        transitioned = self._commit(
            transitions.advance(self._state, self._config, delta)
        )
        return SessionTick(snapshot=self.snapshot(), transitioned=transitioned)

    def start(self, now: Optional[float] = None) -> SessionActionResult:
        state = self._state
        if not isinstance(state, Paused):
            return self._reject(ACTION_START, REASON_NOT_PAUSED)

        self._last_tick_monotonic = _monotonic(now)
        self._commit(transitions.resume(state, self._config))
        reason = REASON_STARTED if state.resume_into is None else REASON_RESUMED
        return self._result(ACTION_START, True, reason)

    def pause(self, now: Optional[float] = None) -> SessionActionResult:
        if isinstance(self._state, Paused):
            return self._reject(ACTION_PAUSE, REASON_ALREADY_PAUSED)

        delta = self._sample_clock(now)
        self._commit(transitions.pause(self._state, self._config, delta))
        return self._result(ACTION_PAUSE, True, REASON_PAUSED)

    def skip_or_end_rest(self) -> SessionActionResult:
        if not isinstance(self._state, Resting):
            return self._reject(ACTION_SKIP, REASON_NOT_RESTING)

        self._commit(transitions.end_rest())
        return self._result(ACTION_SKIP, True, REASON_REST_ENDED)

    def start_rest(self, now: Optional[float] = None) -> SessionActionResult:
        """Enter a rest right away, from work or from a pause."""
        if isinstance(self._state, Resting):
            return self._reject(ACTION_REST, REASON_ALREADY_RESTING)

        self._last_tick_monotonic = _monotonic(now)
        self._commit(transitions.begin_rest())
        return self._result(ACTION_REST, True, REASON_REST_STARTED)

    def reconfigure(
        self,
        new_config: Union[SessionConfig, SessionSettingsLike],
    ) -> SessionActionResult:
        """Replace durations while paused.

        Raises `SessionConfigurationError` for non-positive durations; the
        current configuration is left untouched in that case.
        """
        if not isinstance(self._state, Paused):
            return self._reject(ACTION_RECONFIGURE, REASON_NOT_PAUSED)

        if not isinstance(new_config, SessionConfig):
            new_config = SessionConfig.from_settings(new_config)

        self._config = new_config
        self._logger.info(
            "Session reconfigured: work=%ss rest=%ss",
            new_config.work_duration_seconds,
            new_config.rest_duration_seconds,
        )
        return self._result(ACTION_RECONFIGURE, True, REASON_RECONFIGURED)

    def apply(
        self,
        action: str,
        *,
        now: Optional[float] = None,
        config: Any = None,
    ) -> SessionActionResult:
        if action == ACTION_START:
            return self.start(now)
        if action == ACTION_PAUSE:
            return self.pause(now)
        if action == ACTION_SKIP:
            return self.skip_or_end_rest()
        if action == ACTION_REST:
            return self.start_rest(now)
        if action == ACTION_RECONFIGURE:
            if config is None:
                raise SessionConfigurationError("reconfigure requires new durations")
            return self.reconfigure(config)
        return self._reject(action, REASON_UNSUPPORTED_ACTION)  # type: ignore[arg-type]

    def _sample_clock(self, now: Optional[float]) -> float:
        current = _monotonic(now)
        previous = self._last_tick_monotonic
        self._last_tick_monotonic = current
        if previous is None:
            return 0.0
        return max(0.0, current - previous)

    def _commit(self, transition: Transition) -> bool:
        previous = self._state
        current = transition.state
        self._state = current
        self._commands.extend(transition.commands)

        was_resting = isinstance(previous, Resting)
        is_resting = isinstance(current, Resting)
        if self._animator is not None:
            if is_resting and not was_resting:
                self._animator.activate()
            elif was_resting and not is_resting:
                self._animator.deactivate()

        if previous.phase == current.phase:
            return False

        self._logger.info(
            "Session %s -> %s (commands=%s)",
            previous.phase,
            current.phase,
            ",".join(transition.commands) or "-",
        )
        return True

    def _reject(self, action: SessionAction, reason: str) -> SessionActionResult:
        self._logger.debug("Session %s ignored: %s", action, reason)
        return self._result(action, False, reason)

    def _result(self, action: SessionAction, accepted: bool, reason: str) -> SessionActionResult:
        return SessionActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self.snapshot(),
        )


def _monotonic(now: Optional[float]) -> float:
    return time.monotonic() if now is None else float(now)
