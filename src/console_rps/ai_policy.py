from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple

from loguru import logger

from console_rps.game_logic import ConfigError, Move, Vocabulary
from console_rps.results import Results

HUNDRED_PERCENT = 100.0


def weighted_choice(weights: Mapping[str, int], vocabulary: Vocabulary,
                    rng: Optional[random.Random] = None) -> Move:
    """
    Draw r uniformly from [0, sum(weights)] and walk the moves in vocabulary
    order, subtracting each weight; the first move that brings r to <= 0 wins.
    Zero-weight moves are never returned.
    """
    rng = rng or random
    total = sum(weights.get(s, 0) for s in vocabulary.symbols)
    if total <= 0:
        raise ConfigError("weighted choice needs at least one positive weight")
    rnd = rng.randint(0, total)
    for symbol in vocabulary.symbols:
        weight = weights.get(symbol, 0)
        if weight <= 0:
            continue
        rnd -= weight
        if rnd <= 0:
            return Move(symbol, vocabulary)
    raise AssertionError("unreachable: draw exceeded the weight total")


@dataclass(frozen=True)
class Personality:
    name: str
    weights: Mapping[str, int]
    vocabulary: Vocabulary = field(repr=False, compare=False)

    def __post_init__(self):
        missing = [s for s in self.vocabulary.symbols if s not in self.weights]
        extra = [s for s in self.weights if s not in self.vocabulary]
        if missing or extra:
            raise ConfigError(
                f"personality '{self.name}' weights must cover exactly "
                f"{', '.join(self.vocabulary.symbols)} (missing={missing}, unknown={extra})"
            )
        for symbol, weight in self.weights.items():
            if isinstance(weight, bool) or not isinstance(weight, int) or weight < 0:
                raise ConfigError(f"personality '{self.name}': weight for '{symbol}' must be a non-negative integer")
        if sum(self.weights.values()) <= 0:
            raise ConfigError(f"personality '{self.name}' needs at least one positive weight")


class AIPolicy:
    name = "base"

    def choose(self, results: Results) -> Move:
        raise NotImplementedError


class RandomPolicy(AIPolicy):
    name = "random"

    def __init__(self, vocabulary: Vocabulary, rng: Optional[random.Random] = None):
        self.vocabulary = vocabulary
        self.rng = rng or random.Random()

    def choose(self, results):
        return self.rng.choice(self.vocabulary.moves())


class PersonalityPolicy(AIPolicy):
    """Fixed per-personality odds, independent of the player's history."""
    name = "personality"

    def __init__(self, personality: Personality, rng: Optional[random.Random] = None):
        self.personality = personality
        self.rng = rng or random.Random()

    def choose(self, results):
        move = weighted_choice(self.personality.weights, self.personality.vocabulary, self.rng)
        logger.debug(f"{self.personality.name} drew {move.name} from {dict(self.personality.weights)}")
        return move


class CounterFrequencyPolicy(AIPolicy):
    """
    Predict the player's next move from how often they played each move so far,
    then answer with a move that beats the prediction.
    Until `min_history` rounds exist it plays uniformly at random.
    """
    name = "counter"

    def __init__(self, vocabulary: Vocabulary, rng: Optional[random.Random] = None, min_history: int = 3):
        self.vocabulary = vocabulary
        self.rng = rng or random.Random()
        self.min_history = min_history
        self.fallback = RandomPolicy(vocabulary, self.rng)

    def unused_move_weight(self) -> int:
        # half of the average share, so untried moves are never ruled out
        return math.ceil(HUNDRED_PERCENT / len(self.vocabulary) / 2)

    def move_weights(self, results: Results) -> Dict[str, int]:
        total = len(results)
        counts = results.player_move_counts()
        weights = {}
        for symbol in self.vocabulary.symbols:
            n = counts.get(symbol, 0)
            weights[symbol] = math.ceil(n / total * HUNDRED_PERCENT) if n else self.unused_move_weight()
        return weights

    def choose(self, results):
        if len(results) < self.min_history:
            return self.fallback.choose(results)
        weights = self.move_weights(results)
        predicted = weighted_choice(weights, self.vocabulary, self.rng)
        move = predicted.counter_move(self.rng)
        logger.debug(f"counter: weights={weights} predicted={predicted.name} -> {move.name}")
        return move


class Opponent:
    """Computer side of the game: a fixed personality plus a move-selection policy."""

    def __init__(self, personality: Personality, policy: AIPolicy):
        self.personality = personality
        self.policy = policy

    @property
    def name(self) -> str:
        return self.personality.name

    def make_move(self, results: Results) -> Move:
        return self.policy.choose(results)


def make_policy(personality: Personality, use_personalities: bool,
                rng: Optional[random.Random] = None, min_history: int = 3) -> Tuple[AIPolicy, str]:
    if use_personalities:
        return PersonalityPolicy(personality, rng), PersonalityPolicy.name
    return CounterFrequencyPolicy(personality.vocabulary, rng, min_history), CounterFrequencyPolicy.name


def make_opponent(personalities: Sequence[Personality], use_personalities: bool = True,
                  rng: Optional[random.Random] = None, min_history: int = 3) -> Opponent:
    if not personalities:
        raise ConfigError("at least one personality is required")
    rng = rng or random.Random()
    personality = rng.choice(list(personalities))
    policy, label = make_policy(personality, use_personalities, rng, min_history)
    logger.info(f"Opponent {personality.name} using {label} policy")
    return Opponent(personality, policy)
