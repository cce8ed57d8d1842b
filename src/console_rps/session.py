from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from loguru import logger

from console_rps.ai_policy import Opponent
from console_rps.game_logic import GameStateError, Move, Result, adjudicate
from console_rps.results import Results, RoundOutcome

WINS_LIMIT = 3


class State(Enum):
    AWAITING_PLAYER_MOVE = "awaiting_player_move"
    AWAITING_OPPONENT_MOVE = "awaiting_opponent_move"
    RESOLVED = "resolved"
    SESSION_OVER = "session_over"


class Session:
    """
    Best-of-N match between the player and one opponent.

    AWAITING_PLAYER_MOVE -> AWAITING_OPPONENT_MOVE -> RESOLVED
        -> AWAITING_PLAYER_MOVE | SESSION_OVER

    The opponent (and its personality) is kept by `new_session`; only the
    results are cleared.
    """

    def __init__(self, opponent: Opponent, results: Optional[Results] = None, wins_limit: int = WINS_LIMIT):
        if wins_limit < 1:
            raise ValueError("wins_limit must be at least 1")
        self.opponent = opponent
        self.results = results if results is not None else Results()
        self.wins_limit = wins_limit
        self.state = State.AWAITING_PLAYER_MOVE
        self.player_move: Optional[Move] = None
        self.opponent_move: Optional[Move] = None

    def _expect(self, *states: State) -> None:
        if self.state not in states:
            raise GameStateError(f"cannot do that while {self.state.value}")

    def submit_player_move(self, move: Move) -> None:
        self._expect(State.AWAITING_PLAYER_MOVE)
        self.player_move = move
        self.opponent_move = None
        self.state = State.AWAITING_OPPONENT_MOVE

    def resolve_round(self) -> RoundOutcome:
        self._expect(State.AWAITING_OPPONENT_MOVE)
        self.opponent_move = self.opponent.make_move(self.results)
        outcome = RoundOutcome(
            result=adjudicate(self.player_move, self.opponent_move),
            player=self.player_move,
            opponent=self.opponent_move,
        )
        self.results.record(outcome)
        self.state = State.RESOLVED
        return outcome

    def advance(self) -> State:
        self._expect(State.RESOLVED)
        if self.wins_limit_reached():
            self.state = State.SESSION_OVER
            logger.info(f"Session over: {self.winner().value} {self.stats()}")
        else:
            self.state = State.AWAITING_PLAYER_MOVE
        return self.state

    def play_round(self, move: Move) -> RoundOutcome:
        """Run one full round; the caller checks `is_over` afterwards."""
        self.submit_player_move(move)
        outcome = self.resolve_round()
        self.advance()
        return outcome

    def stop(self) -> None:
        """End the session early, e.g. when the player quits between rounds."""
        if self.state != State.SESSION_OVER:
            logger.info(f"Session stopped early at {self.stats()}")
        self.state = State.SESSION_OVER

    def new_session(self) -> None:
        self._expect(State.SESSION_OVER)
        self.results.reset()
        self.player_move = self.opponent_move = None
        self.state = State.AWAITING_PLAYER_MOVE
        logger.info(f"New session against {self.opponent.name}")

    @property
    def is_over(self) -> bool:
        return self.state == State.SESSION_OVER

    def stats(self) -> Dict[str, int]:
        return self.results.stats()

    def wins_limit_reached(self) -> bool:
        s = self.stats()
        return s["won"] >= self.wins_limit or s["lost"] >= self.wins_limit

    def winner(self) -> Result:
        """Match result for the player: WON, LOST or TIED (stopped level)."""
        s = self.stats()
        if s["won"] > s["lost"]:
            return Result.WON
        if s["lost"] > s["won"]:
            return Result.LOST
        return Result.TIED
