from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from loguru import logger

from console_rps.game_logic import Move, Result


@dataclass(frozen=True)
class RoundOutcome:
    result: Result
    player: Move
    opponent: Move
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class Results:
    """Append-only log of the current session's rounds."""
    _log: List[RoundOutcome] = field(default_factory=list)

    @property
    def log(self) -> List[RoundOutcome]:
        return list(self._log)

    def __len__(self):
        return len(self._log)

    def record(self, outcome: RoundOutcome) -> None:
        self._log.append(outcome)
        logger.info(
            f"Round {len(self._log)}: {outcome.result.value} "
            f"({outcome.player.name} vs {outcome.opponent.name})"
        )

    def count(self, result: Result) -> int:
        return sum(1 for o in self._log if o.result == result)

    def stats(self) -> Dict[str, int]:
        return {
            "total": len(self._log),
            "won": self.count(Result.WON),
            "lost": self.count(Result.LOST),
            "tied": self.count(Result.TIED),
        }

    def percentages(self) -> Dict[str, float]:
        total = len(self._log)
        if total == 0:
            return {r.value: 0.0 for r in Result}
        return {r.value: round(self.count(r) / total * 100, 2) for r in Result}

    def player_move_counts(self) -> "Counter[str]":
        return Counter(o.player.symbol for o in self._log)

    def reset(self) -> None:
        self._log.clear()
        logger.debug("Results cleared")
