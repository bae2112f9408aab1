from __future__ import annotations

from enum import Enum


class Choice(Enum):
    ROCK = ("Rock", "✊")
    PAPER = ("Paper", "✋")
    SCISSORS = ("Scissors", "✌️")

    def __init__(self, label: str, symbol: str) -> None:
        self.label = label
        self.symbol = symbol

    def beats(self, other: Choice) -> bool:
        return _BEATS[self] is other


class RoundOutcome(Enum):
    PLAYER_WINS = "player_wins"
    COMPUTER_WINS = "computer_wins"
    DRAW = "draw"


class MatchResult(Enum):
    PLAYER_WON = "player_won"
    COMPUTER_WON = "computer_won"
    DRAW = "draw"


CHOICES: tuple[Choice, ...] = tuple(Choice)

# Each choice maps to the one it beats.
_BEATS: dict[Choice, Choice] = {
    Choice.ROCK: Choice.SCISSORS,
    Choice.SCISSORS: Choice.PAPER,
    Choice.PAPER: Choice.ROCK,
}

_ALIASES: dict[str, Choice] = {}
for _choice in Choice:
    _ALIASES[_choice.label.lower()] = _choice
    _ALIASES[_choice.label[0].lower()] = _choice


def parse_choice(value: str) -> Choice:
    choice = _ALIASES.get(value.strip().lower())
    if choice is None:
        raise ValueError(f"invalid choice {value!r}: expected rock|paper|scissors")
    return choice


def determine_outcome(player: Choice, computer: Choice) -> RoundOutcome:
    if player is computer:
        return RoundOutcome.DRAW
    return RoundOutcome.PLAYER_WINS if player.beats(computer) else RoundOutcome.COMPUTER_WINS


def compare_scores(player_score: int, computer_score: int) -> MatchResult:
    if player_score > computer_score:
        return MatchResult.PLAYER_WON
    if computer_score > player_score:
        return MatchResult.COMPUTER_WON
    return MatchResult.DRAW
