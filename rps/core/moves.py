"""
Moves and round outcomes.

The resolver is a pure function over the 3x3 move space; nothing here keeps
state or touches the transport.
"""

from enum import Enum
from typing import Optional


class Move(str, Enum):
    """The three legal moves."""
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    @property
    def beats(self) -> 'Move':
        """The move this one defeats."""
        return _BEATS[self]

    @classmethod
    def parse(cls, value) -> Optional['Move']:
        """Return the Move for a wire value, or None if it isn't one."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


_BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}


class Outcome(str, Enum):
    """Result of one round, seen from player1 (A) against player2 (B)."""
    DRAW = "DRAW"
    A_WINS = "A_WINS"
    B_WINS = "B_WINS"


def resolve(move_a: Move, move_b: Move) -> Outcome:
    """Resolve two simultaneous moves."""
    if move_a == move_b:
        return Outcome.DRAW
    if move_a.beats == move_b:
        return Outcome.A_WINS
    return Outcome.B_WINS
