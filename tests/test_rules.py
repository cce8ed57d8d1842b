import random
from collections import Counter

import pytest

from console_rps.game_logic import (
    CLASSIC,
    EXTENDED,
    ConfigError,
    InvalidMove,
    Move,
    Result,
    Vocabulary,
    adjudicate,
    get_vocabulary,
)


def test_adjudicate_rules():
    rock, paper, scissors = (Move(s, CLASSIC) for s in "rps")
    assert adjudicate(rock, scissors) == Result.WON
    assert adjudicate(rock, paper) == Result.LOST
    assert adjudicate(rock, rock) == Result.TIED


@pytest.mark.parametrize("vocab", [CLASSIC, EXTENDED])
def test_exactly_one_relation_holds_for_every_pair(vocab):
    for a in vocab.moves():
        for b in vocab.moves():
            holds = [a.beats(b), b.beats(a), a == b]
            assert holds.count(True) == 1, (a.name, b.name)
            assert a.loses_to(b) == b.beats(a)


@pytest.mark.parametrize("vocab", [CLASSIC, EXTENDED])
def test_unknown_symbol_is_invalid(vocab):
    with pytest.raises(InvalidMove):
        Move("x", vocab)


def test_extended_symbols_are_invalid_in_classic():
    with pytest.raises(InvalidMove):
        Move("k", CLASSIC)
    assert Move("k", EXTENDED).name == "spock"


def test_invalid_move_is_a_value_error():
    with pytest.raises(ValueError):
        CLASSIC.parse("lizard")


def test_counter_moves_for_rock_in_extended():
    rock = Move("r", EXTENDED)
    names = sorted(m.name for m in rock.counter_moves())
    assert names == ["paper", "spock"]


def test_counter_move_in_classic_is_the_only_winner():
    assert Move("r", CLASSIC).counter_move().name == "paper"
    assert Move("p", CLASSIC).counter_move().name == "scissors"


def test_explain_uses_win_table():
    paper, rock = Move("p", CLASSIC), Move("r", CLASSIC)
    assert paper.explain(rock) == "Paper covers Rock."
    assert rock.explain(paper) is None
    assert Move("k", EXTENDED).explain(Move("r", EXTENDED)) == "Spock vaporizes Rock."


def test_parse_accepts_symbol_or_name_case_insensitive():
    assert CLASSIC.parse("R").name == "rock"
    assert CLASSIC.parse("  Scissors\n").symbol == "s"
    assert EXTENDED.parse("L").name == "lizard"


def test_prompt_marks_the_symbol_letter():
    assert CLASSIC.prompt() == "(P)aper, (R)ock or (S)cissors?"
    assert EXTENDED.prompt() == "(P)aper, (R)ock, (S)cissors, spoc(K) or (L)izard?"


def test_moves_compare_by_symbol():
    assert Move("r", CLASSIC) == Move("r", EXTENDED)
    assert Move("r", CLASSIC) != Move("p", CLASSIC)
    assert len({Move("r", CLASSIC), Move("r", CLASSIC)}) == 1


def test_win_table_must_decide_each_pair_once():
    with pytest.raises(ConfigError):
        Vocabulary("broken", {"a": "alpha", "b": "beta"}, {})
    with pytest.raises(ConfigError):
        Vocabulary("broken", {"a": "alpha", "b": "beta"}, {("a", "b"): "x", ("b", "a"): "y"})


def test_get_vocabulary():
    assert get_vocabulary("Extended") is EXTENDED
    with pytest.raises(ConfigError):
        get_vocabulary("prskl")


def test_counter_move_splits_evenly_between_two_winners():
    rng = random.Random(2024)
    rock = Move("r", EXTENDED)
    draws = Counter(rock.counter_move(rng).name for _ in range(10_000))
    assert set(draws) == {"paper", "spock"}
    assert abs(draws["paper"] / 10_000 - 0.5) < 0.03
