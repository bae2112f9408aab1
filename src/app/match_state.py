from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final

from protocol import Choice, MatchResult, RoundOutcome, compare_scores

MAX_ROUNDS: Final[int] = 5


@dataclass
class MatchState:
    round: int = 1
    player_score: int = 0
    computer_score: int = 0
    draws: int = 0
    player_choice: Choice | None = None
    computer_choice: Choice | None = None
    last_outcome: RoundOutcome | None = None
    is_over: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.round <= MAX_ROUNDS:
            raise ValueError(f"round must be between 1 and {MAX_ROUNDS}, got {self.round}")
        for name in ("player_score", "computer_score", "draws"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")

    @property
    def rounds_played(self) -> int:
        return self.player_score + self.computer_score + self.draws

    @property
    def reset_enabled(self) -> bool:
        # Nothing to reset before the first round has been scored.
        return self.round != 1 or self.is_over

    def copy(self) -> "MatchState":
        return replace(self)

    def record(self, outcome: RoundOutcome) -> None:
        """Tally one resolved round and advance the round counter.

        The deciding round's score is counted before the match is flagged
        as over, so the round counter stays at MAX_ROUNDS on the last round.
        """
        if outcome is RoundOutcome.PLAYER_WINS:
            self.player_score += 1
        elif outcome is RoundOutcome.COMPUTER_WINS:
            self.computer_score += 1
        else:
            self.draws += 1
        self.last_outcome = outcome

        if self.round < MAX_ROUNDS:
            self.round += 1
        else:
            self.is_over = True


def format_round(state: MatchState) -> str:
    return f"Round {state.round} of {MAX_ROUNDS}"


def format_score(state: MatchState) -> str:
    return f"{state.player_score} - {state.computer_score}"


def format_choice(choice: Choice | None) -> str:
    if choice is None:
        return "N/A"
    return f"{choice.symbol} {choice.label}"


def format_tiles(state: MatchState) -> str:
    left = f"Your choice: {format_choice(state.player_choice)}"
    right = f"Computer's choice: {format_choice(state.computer_choice)}"
    return f"{left:28}  {right}"


def format_outcome(outcome: RoundOutcome) -> str:
    if outcome is RoundOutcome.PLAYER_WINS:
        return "🎉 You win this round!"
    if outcome is RoundOutcome.COMPUTER_WINS:
        return "😞 Computer wins this round"
    return "🤝 Draw"


def summary_message(state: MatchState) -> str:
    score = format_score(state)
    result = compare_scores(state.player_score, state.computer_score)
    if result is MatchResult.PLAYER_WON:
        return f"🎉 You Win! Final Score: {score}"
    if result is MatchResult.COMPUTER_WON:
        return f"🤖 Computer Wins! Final Score: {score}"
    return f"🤝 It's a Draw! Final Score: {score}"
