"""
出拳判定测试
Game Rules Tests
"""
import sys
from itertools import product
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rps_game.game.game_logic import Choice, GameRules, GameResult, evaluate
from rps_game.utils.exceptions import InvalidChoice


def test_beats_relation():
    """石头胜剪刀，剪刀胜布，布胜石头"""
    assert evaluate("rock", "scissors") == GameResult.WIN
    assert evaluate("scissors", "paper") == GameResult.WIN
    assert evaluate("paper", "rock") == GameResult.WIN
    assert evaluate("scissors", "rock") == GameResult.LOSE
    assert evaluate("paper", "scissors") == GameResult.LOSE
    assert evaluate("rock", "paper") == GameResult.LOSE


def test_all_pairs_are_symmetric():
    """任意两种出拳：相同为平局，不同时正反两次判定一胜一负"""
    for a, b in product(Choice, repeat=2):
        forward = evaluate(a, b)
        backward = evaluate(b, a)
        if a == b:
            assert forward == backward == GameResult.TIE
        else:
            assert forward != GameResult.TIE
            assert (forward == GameResult.WIN) == (backward == GameResult.LOSE)


def test_input_is_trimmed_and_case_insensitive():
    assert evaluate("  ROCK ", "Scissors") == GameResult.WIN
    assert Choice.from_string("PaPeR") is Choice.PAPER


@pytest.mark.parametrize("token", ["lizard", "", "   ", None, 3, "rocks"])
def test_invalid_tokens_raise(token):
    with pytest.raises(InvalidChoice) as exc_info:
        evaluate(token, "rock")
    assert exc_info.value.token == token

    with pytest.raises(InvalidChoice):
        evaluate("rock", token)


def test_choice_helpers():
    assert Choice.values() == ["rock", "paper", "scissors"]
    assert Choice.is_valid("Scissors")
    assert not Choice.is_valid("spock")
    assert str(Choice.ROCK) == "rock"


def test_winning_and_losing_choice():
    assert GameRules.get_winning_choice(Choice.ROCK) is Choice.PAPER
    assert GameRules.get_winning_choice(Choice.PAPER) is Choice.SCISSORS
    assert GameRules.get_winning_choice(Choice.SCISSORS) is Choice.ROCK
    assert GameRules.get_losing_choice(Choice.ROCK) is Choice.SCISSORS
