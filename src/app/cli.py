from __future__ import annotations

import argparse
import random
import sys
from typing import Callable

from engine import RoundEngine
from match_state import (
    MatchState,
    format_outcome,
    format_round,
    format_score,
    format_tiles,
    summary_message,
)
from protocol import Choice, parse_choice
from settings import RevealSettings, settings_from_env

RESET = "reset"
QUIT = "quit"

Prompt = Callable[[str], str]


def main(argv: list[str] | None = None, *, prompt: Prompt = input) -> int:
    parser = argparse.ArgumentParser(prog="rps", description="Rock Paper Scissors against the computer")
    parser.add_argument("--reveal-steps", type=int, default=None, help="Opponent shuffles before the final pick")
    parser.add_argument("--reveal-interval", type=float, default=None, help="Seconds between shuffles")
    parser.add_argument("--seed", type=int, default=None, help="Seed the opponent for a repeatable match")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print engine events to stderr")
    args = parser.parse_args(argv)

    try:
        settings = _resolve_settings(args)
    except ValueError as exc:
        raise SystemExit(f"rps: {exc}") from None

    engine = RoundEngine(
        settings=settings,
        rng=random.Random(args.seed),
        log=_log_to_stderr if args.verbose else None,
    )
    view = TerminalView()
    engine.subscribe(view.render)

    print("Rock Paper Scissors")
    try:
        _play(engine, prompt)
    except (EOFError, KeyboardInterrupt):
        print()
    print("Bye!")
    return 0


class TerminalView:
    def __init__(self, echo: Callable[[str], None] = print) -> None:
        self._echo = echo

    def render(self, state: MatchState) -> None:
        if state.last_outcome is not None:
            self._echo(format_outcome(state.last_outcome))
            self._echo(f"Score {format_score(state)}")
        elif state.player_choice is not None:
            # Pick made, reveal in progress.
            self._echo(format_tiles(state))


def _play(engine: RoundEngine, prompt: Prompt) -> None:
    while True:
        state = engine.state
        if state.is_over:
            print(f"\n{'=' * 40}")
            print("Game Over")
            print(f"   {summary_message(state)}")
            print(f"{'=' * 40}\n")
            if not _ask_play_again(prompt):
                return
            engine.reset()
            continue

        print(f"\n{format_round(state)}  |  Score {format_score(state)}")
        action = _prompt_for_action(prompt, reset_enabled=state.reset_enabled)
        if action == QUIT:
            return
        if action == RESET:
            engine.reset()
            print("Scores reset.")
            continue

        engine.select_choice(action)
        engine.wait()


def _prompt_for_action(prompt: Prompt, *, reset_enabled: bool) -> Choice | str:
    """Interactive prompt for the player's next move."""
    options = "(r)ock, (p)aper, (s)cissors"
    if reset_enabled:
        options += ", (x) reset"
    options += ", (q)uit"
    while True:
        raw = prompt(f"Choose your move - {options}: ").strip().lower()
        if raw in ("q", "quit"):
            return QUIT
        if reset_enabled and raw in ("x", "reset"):
            return RESET
        try:
            return parse_choice(raw)
        except ValueError:
            print("❌ Invalid choice. Please enter r, p, or s.")


def _ask_play_again(prompt: Prompt) -> bool:
    answer = prompt("Play again? [y/N]: ").strip().lower()
    return answer in ("y", "yes")


def _log_to_stderr(message: str) -> None:
    print(f"[rps] {message}", file=sys.stderr)


def _resolve_settings(args: argparse.Namespace) -> RevealSettings:
    settings = settings_from_env()
    steps = settings.steps if args.reveal_steps is None else args.reveal_steps
    interval = settings.interval if args.reveal_interval is None else args.reveal_interval
    return RevealSettings(steps=steps, interval=interval)


if __name__ == "__main__":
    raise SystemExit(main())
