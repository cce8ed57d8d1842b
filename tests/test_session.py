import pytest

from console_rps.ai_policy import AIPolicy, Opponent, Personality
from console_rps.game_logic import CLASSIC, GameStateError, Move, Result
from console_rps.session import WINS_LIMIT, Session, State


class ScriptedPolicy(AIPolicy):
    name = "scripted"

    def __init__(self, symbols):
        self.symbols = list(symbols)

    def choose(self, results):
        return Move(self.symbols.pop(0), CLASSIC)


def _session(opponent_symbols, wins_limit=WINS_LIMIT):
    personality = Personality("Tester", {"p": 1, "r": 1, "s": 1}, CLASSIC)
    return Session(Opponent(personality, ScriptedPolicy(opponent_symbols)), wins_limit=wins_limit)


def test_wins_limit_default():
    assert WINS_LIMIT == 3


def test_transitions_of_one_round():
    session = _session("s")
    assert session.state == State.AWAITING_PLAYER_MOVE
    session.submit_player_move(Move("r", CLASSIC))
    assert session.state == State.AWAITING_OPPONENT_MOVE
    outcome = session.resolve_round()
    assert session.state == State.RESOLVED
    assert outcome.result == Result.WON
    assert outcome.opponent.name == "scissors"
    assert session.advance() == State.AWAITING_PLAYER_MOVE


def test_out_of_order_transition_fails():
    session = _session("s")
    with pytest.raises(GameStateError):
        session.resolve_round()
    with pytest.raises(GameStateError):
        session.advance()
    with pytest.raises(GameStateError):
        session.new_session()


def test_session_ends_exactly_on_third_win():
    # player rock each round; opponent: s (win), p (loss), r (tie), s (win), p (loss), s (win)
    session = _session("sprsps")
    rock = Move("r", CLASSIC)
    states = []
    for _ in range(6):
        session.play_round(rock)
        states.append(session.state)
    assert states[:5] == [State.AWAITING_PLAYER_MOVE] * 5
    assert states[5] == State.SESSION_OVER
    assert session.stats() == {"total": 6, "won": 3, "lost": 2, "tied": 1}
    assert session.winner() == Result.WON


def test_session_ends_on_third_loss():
    session = _session("ppp")
    rock = Move("r", CLASSIC)
    session.play_round(rock)
    session.play_round(rock)
    assert not session.is_over
    session.play_round(rock)
    assert session.is_over
    assert session.winner() == Result.LOST


def test_custom_wins_limit():
    session = _session("s", wins_limit=1)
    session.play_round(Move("r", CLASSIC))
    assert session.is_over


def test_new_session_resets_results_and_keeps_opponent():
    session = _session("sss" + "p")
    opponent = session.opponent
    rock = Move("r", CLASSIC)
    for _ in range(3):
        session.play_round(rock)
    assert session.is_over
    session.new_session()
    assert session.state == State.AWAITING_PLAYER_MOVE
    assert session.stats() == {"total": 0, "won": 0, "lost": 0, "tied": 0}
    assert session.opponent is opponent
    assert session.play_round(rock).result == Result.LOST


def test_stop_early_with_level_score_is_a_tie():
    session = _session("sp")
    rock = Move("r", CLASSIC)
    session.play_round(rock)
    session.play_round(rock)
    session.stop()
    assert session.is_over
    assert session.winner() == Result.TIED


def test_wins_limit_must_be_positive():
    with pytest.raises(ValueError):
        _session("", wins_limit=0)
