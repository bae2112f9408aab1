from __future__ import annotations

import threading
from typing import Callable

from protocol import Choice


class RevealTask:
    """Timed sequence of opponent picks, run on a background thread.

    ``on_step`` receives each intermediate pick and ``on_done`` the final one.
    Every pick is preceded by a wait of ``interval`` seconds on the cancel
    event, so ``cancel()`` stops the sequence at the next suspension point.
    An exception from a callback ends the sequence and is handed to
    ``on_error``.
    """

    def __init__(
        self,
        *,
        steps: int,
        interval: float,
        pick: Callable[[], Choice],
        on_step: Callable[[Choice], None],
        on_done: Callable[[Choice], None],
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        self.steps = steps
        self.interval = interval
        self.error: Exception | None = None
        self._pick = pick
        self._on_step = on_step
        self._on_done = on_done
        self._on_error = on_error
        self._cancelled = threading.Event()
        self._thread = threading.Thread(target=self._run, name="rps-reveal", daemon=True)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def done(self) -> bool:
        return self._thread.ident is not None and not self._thread.is_alive()

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._cancelled.set()

    def join(self, timeout: float | None = None) -> bool:
        if self._thread.ident is None:
            return True
        if self._thread is threading.current_thread():
            # A listener on the reveal thread cannot wait for itself.
            return False
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        try:
            for _ in range(self.steps):
                if self._cancelled.wait(self.interval):
                    return
                self._on_step(self._pick())

            if self._cancelled.is_set():
                return
            self._on_done(self._pick())
        except Exception as exc:  # surfaced through on_error
            self.error = exc
            if self._on_error is not None:
                self._on_error(exc)
