from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations
from typing import Dict, List, Mapping, Optional, Tuple


class RPSError(Exception):
    """Base class for every error raised by the game."""


class InvalidMove(RPSError, ValueError):
    pass


class ConfigError(RPSError, ValueError):
    pass


class GameStateError(RPSError, RuntimeError):
    pass


class Result(str, Enum):
    WON = "won"
    LOST = "lost"
    TIED = "tied"


@dataclass(frozen=True, eq=False)
class Vocabulary:
    """
    Closed set of hand signs plus the table of winning pairs.
    `options` maps the one-letter symbol to the move name; its order is the
    order used by weighted draws and prompts.
    `wins` maps (winner, loser) symbol pairs to the sentence shown to the player.
    """
    key: str
    options: Mapping[str, str]
    wins: Mapping[Tuple[str, str], str] = field(repr=False)

    def __post_init__(self):
        symbols = list(self.options)
        if len(symbols) < 2:
            raise ConfigError(f"vocabulary '{self.key}' needs at least two moves")
        for (winner, loser) in self.wins:
            if winner not in self.options or loser not in self.options:
                raise ConfigError(f"win table of '{self.key}' references unknown move {winner}{loser}")
            if winner == loser:
                raise ConfigError(f"win table of '{self.key}' lists '{winner}' beating itself")
        # each unordered pair must be decided exactly one way
        for a, b in combinations(symbols, 2):
            forward, backward = (a, b) in self.wins, (b, a) in self.wins
            if forward == backward:
                raise ConfigError(
                    f"win table of '{self.key}' must decide {self.options[a]} vs {self.options[b]} exactly once"
                )

    @property
    def symbols(self) -> List[str]:
        return list(self.options)

    def __len__(self):
        return len(self.options)

    def __contains__(self, symbol) -> bool:
        return symbol in self.options

    def moves(self) -> List["Move"]:
        return [Move(s, self) for s in self.options]

    def parse(self, text: str) -> "Move":
        """Accept a symbol or a full move name, case-insensitive."""
        value = (text or "").strip().lower()
        for symbol, name in self.options.items():
            if value == name:
                return Move(symbol, self)
        return Move(value, self)

    def prompt(self) -> str:
        opts = [_mark_symbol(symbol, name) for symbol, name in self.options.items()]
        return ", ".join(opts[:-1]) + " or " + opts[-1] + "?"


def _mark_symbol(symbol: str, name: str) -> str:
    idx = name.find(symbol)
    if idx < 0:
        return f"{name} ({symbol.upper()})"
    return name[:idx] + f"({symbol.upper()})" + name[idx + 1:]


CLASSIC = Vocabulary(
    key="classic",
    options={"p": "paper", "r": "rock", "s": "scissors"},
    wins={
        ("s", "p"): "Scissors cut Paper.",
        ("p", "r"): "Paper covers Rock.",
        ("r", "s"): "Rock crushes Scissors.",
    },
)

EXTENDED = Vocabulary(
    key="extended",
    options={"p": "paper", "r": "rock", "s": "scissors", "k": "spock", "l": "lizard"},
    wins={
        ("s", "p"): "Scissors cut Paper.",
        ("p", "r"): "Paper covers Rock.",
        ("r", "l"): "Rock crushes Lizard.",
        ("l", "k"): "Lizard poisons Spock.",
        ("k", "s"): "Spock smashes Scissors.",
        ("s", "l"): "Scissors decapitates Lizard.",
        ("l", "p"): "Lizard eats Paper.",
        ("p", "k"): "Paper disproves Spock.",
        ("k", "r"): "Spock vaporizes Rock.",
        ("r", "s"): "Rock crushes Scissors.",
    },
)

VOCABULARIES: Dict[str, Vocabulary] = {v.key: v for v in (CLASSIC, EXTENDED)}


def get_vocabulary(variant: str) -> Vocabulary:
    try:
        return VOCABULARIES[(variant or "").lower()]
    except KeyError:
        raise ConfigError(f"unknown variant '{variant}', expected one of: {', '.join(VOCABULARIES)}") from None


@dataclass(frozen=True)
class Move:
    symbol: str
    vocabulary: Vocabulary = field(repr=False, compare=False)

    def __post_init__(self):
        if self.symbol not in self.vocabulary:
            raise InvalidMove(
                f"Unrecognized move value: '{self.symbol}'. "
                f"Acceptable values: {', '.join(self.vocabulary.symbols)}."
            )

    def __str__(self):
        return self.symbol

    @property
    def name(self) -> str:
        return self.vocabulary.options[self.symbol]

    def beats(self, other: "Move") -> bool:
        return (self.symbol, other.symbol) in self.vocabulary.wins

    def loses_to(self, other: "Move") -> bool:
        return (other.symbol, self.symbol) in self.vocabulary.wins

    def explain(self, other: "Move") -> Optional[str]:
        """Sentence describing how this move beats `other`, or None."""
        return self.vocabulary.wins.get((self.symbol, other.symbol))

    def counter_moves(self) -> List["Move"]:
        return [m for m in self.vocabulary.moves() if m.beats(self)]

    def counter_move(self, rng: Optional[random.Random] = None) -> "Move":
        return (rng or random).choice(self.counter_moves())


def adjudicate(player: Move, opponent: Move) -> Result:
    """Result of a round from the player's point of view."""
    if player.beats(opponent):
        return Result.WON
    if opponent.beats(player):
        return Result.LOST
    return Result.TIED
