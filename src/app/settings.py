from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, Mapping

STEPS_ENV: Final[str] = "RPS_REVEAL_STEPS"
INTERVAL_ENV: Final[str] = "RPS_REVEAL_INTERVAL"


@dataclass(frozen=True)
class RevealSettings:
    # 20 shuffles, one every 0.1s, before the opponent's choice is locked in.
    steps: int = 20
    interval: float = 0.1

    def __post_init__(self) -> None:
        if self.steps < 0:
            raise ValueError(f"reveal steps must be >= 0, got {self.steps}")
        if self.interval < 0:
            raise ValueError(f"reveal interval must be >= 0, got {self.interval}")


def settings_from_env(environ: Mapping[str, str] | None = None) -> RevealSettings:
    env = os.environ if environ is None else environ
    defaults = RevealSettings()

    steps = defaults.steps
    raw_steps = env.get(STEPS_ENV)
    if raw_steps:
        try:
            steps = int(raw_steps)
        except ValueError:
            raise ValueError(f"{STEPS_ENV} must be an integer, got {raw_steps!r}") from None

    interval = defaults.interval
    raw_interval = env.get(INTERVAL_ENV)
    if raw_interval:
        try:
            interval = float(raw_interval)
        except ValueError:
            raise ValueError(f"{INTERVAL_ENV} must be a number, got {raw_interval!r}") from None

    return RevealSettings(steps=steps, interval=interval)
