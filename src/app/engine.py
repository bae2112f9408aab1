from __future__ import annotations

import random
import sys
import threading
from typing import Callable

from match_state import MatchState
from protocol import CHOICES, Choice, MatchResult, compare_scores, determine_outcome
from reveal import RevealTask
from settings import RevealSettings

Listener = Callable[[MatchState], None]
Log = Callable[[str], None]


def _report_to_stderr(message: str) -> None:
    print(message, file=sys.stderr)


class RoundEngine:
    """Owns the match state and drives each round from pick to resolution.

    Listeners get a copy of the state after every mutation. They are called
    under the engine lock, on whichever thread made the change (the reveal
    runs on its own thread).

    ``log`` receives one line per engine event; ``report_error`` receives
    failures from the reveal thread, which has no caller to raise into.
    """

    def __init__(
        self,
        *,
        settings: RevealSettings | None = None,
        rng: random.Random | None = None,
        state: MatchState | None = None,
        log: Log | None = None,
        report_error: Log = _report_to_stderr,
    ) -> None:
        self.settings = settings or RevealSettings()
        self._rng = rng or random.Random()
        self._state = state.copy() if state is not None else MatchState()
        self._log = log
        self._report_error = report_error
        self._lock = threading.RLock()
        self._reveal: RevealTask | None = None
        self._listeners: list[Listener] = []

    @property
    def state(self) -> MatchState:
        with self._lock:
            return self._state.copy()

    @property
    def is_busy(self) -> bool:
        with self._lock:
            # A reveal whose thread died on an error no longer counts.
            return self._reveal is not None and not self._reveal.done

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def select_choice(self, choice: Choice) -> bool:
        with self._lock:
            if self.is_busy:
                self._debug(f"ignoring {choice.label}: reveal already in flight")
                return False
            if self._state.is_over:
                self._debug(f"ignoring {choice.label}: match is over")
                return False

            self._state.player_choice = choice
            self._state.computer_choice = None
            self._state.last_outcome = None

            task = RevealTask(
                steps=self.settings.steps,
                interval=self.settings.interval,
                pick=self._pick,
                on_step=lambda c: self._reveal_step(task, c),
                on_done=lambda c: self._reveal_done(task, c),
                on_error=lambda exc: self._reveal_failed(task, exc),
            )
            # The reveal thread blocks on the lock until this notification is out.
            task.start()
            self._reveal = task
            self._debug(f"round {self._state.round}: player chose {choice.label}")
            self._notify()
            return True

    def resolve_round(self) -> None:
        with self._lock:
            if self.is_busy:
                # The reveal resolves the round itself once the final pick lands.
                return
            self._resolve()

    def reset(self) -> None:
        with self._lock:
            if self._reveal is not None:
                self._reveal.cancel()
                self._debug("reset abandoned in-flight reveal")
            self._reveal = None
            self._state = MatchState()
            self._debug("match reset")
            self._notify()

    def match_summary(self) -> MatchResult:
        with self._lock:
            return compare_scores(self._state.player_score, self._state.computer_score)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the in-flight reveal (if any) has finished."""
        with self._lock:
            task = self._reveal
        if task is None:
            return True
        return task.join(timeout)

    def _resolve(self) -> None:
        player = self._state.player_choice
        computer = self._state.computer_choice
        if player is None or computer is None or self._state.is_over:
            return
        if self._state.last_outcome is not None:
            # Already tallied; a pick is needed before the next resolution.
            return

        outcome = determine_outcome(player, computer)
        round_no = self._state.round
        self._state.record(outcome)
        self._debug(
            f"round {round_no}: {player.label} vs {computer.label} -> {outcome.value} "
            f"(score {self._state.player_score}-{self._state.computer_score})"
        )
        if self._state.is_over:
            self._debug(f"match over: {self.match_summary().value}")
        self._notify()

    def _pick(self) -> Choice:
        return self._rng.choice(CHOICES)

    def _reveal_step(self, task: RevealTask, choice: Choice) -> None:
        with self._lock:
            if task is not self._reveal or task.cancelled:
                return
            self._state.computer_choice = choice
            self._notify()

    def _reveal_done(self, task: RevealTask, choice: Choice) -> None:
        with self._lock:
            if task is not self._reveal or task.cancelled:
                return
            self._state.computer_choice = choice
            self._notify()
            # A listener may have reset the match in the meantime.
            if task is self._reveal:
                self._resolve()
            if task is self._reveal:
                self._reveal = None

    def _reveal_failed(self, task: RevealTask, exc: Exception) -> None:
        with self._lock:
            if task is self._reveal:
                if self._state.last_outcome is None:
                    # Drop the half-revealed pick so it can never be tallied.
                    self._state.computer_choice = None
                self._reveal = None
            self._report_error(f"reveal failed: {type(exc).__name__}: {exc}")

    def _notify(self) -> None:
        snapshot = self._state.copy()
        for listener in list(self._listeners):
            listener(snapshot)

    def _debug(self, message: str) -> None:
        if self._log is not None:
            self._log(message)
