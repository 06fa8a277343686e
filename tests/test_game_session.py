"""
游戏会话测试
Game Session Tests
"""
import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rps_game.game import (
    GameSession, SessionState, Stats, Choice, GameResult, ComputerPlayer,
    FixedChoiceSource, SeededRandomSource, LocalOpponentProvider, OpponentConfig
)
from rps_game.game.opponent import OpponentProvider
from rps_game.storage import MemoryStorage, StorageBase, SCORES_KEY, HISTORY_KEY, STATS_KEY
from rps_game.game.state_machine import SessionStateMachine
from rps_game.utils.exceptions import GameException, InvalidChoice, StorageFailure, TransportFailure


def fixed_session(choice="scissors", storage=None, **kwargs):
    opponent = LocalOpponentProvider(ComputerPlayer(FixedChoiceSource(choice)))
    return GameSession(opponent, storage=storage, **kwargs)


class ScriptedOpponent(OpponentProvider):
    """按顺序给出预设出拳"""

    def __init__(self, moves):
        self.moves = list(moves)
        self.seen_history = []

    def respond(self, player_choice, player_history):
        self.seen_history.append(list(player_history))
        return self.moves.pop(0)


class BrokenStorage(StorageBase):
    """写入总是失败的存储"""

    def __init__(self):
        self.fail = True
        self.records = {}

    def get(self, key):
        return self.records.get(key)

    def set(self, key, value):
        if self.fail:
            raise StorageFailure("disk full", key=key, operation="set")
        self.records[key] = value

    def remove(self, key):
        if self.fail:
            raise StorageFailure("disk full", key=key, operation="remove")
        self.records.pop(key, None)


def test_play_round_end_to_end():
    session = fixed_session("scissors")
    assert session.state == SessionState.IDLE

    round_result = session.play_round("ROCK")

    assert round_result.player_choice is Choice.ROCK
    assert round_result.computer_choice is Choice.SCISSORS
    assert round_result.result is GameResult.WIN
    assert round_result.to_dict()["playerChoice"] == "rock"
    score = session.get_score()
    assert score.player_score == 1
    assert score.games_played == 1
    assert score.win_rate == 100
    assert session.state == SessionState.ROUND_COMPLETE
    assert session.get_view().result is GameResult.WIN


def test_invalid_choice_leaves_state_unchanged():
    session = fixed_session()
    session.play_round("paper")
    before = (session.get_score(), session.get_history(), session.get_stats())

    with pytest.raises(InvalidChoice):
        session.play_round("lizard")

    assert (session.get_score(), session.get_history(), session.get_stats()) == before
    assert not session.request_slot.in_flight


def test_score_invariants_over_many_rounds():
    opponent = LocalOpponentProvider(ComputerPlayer(SeededRandomSource(seed=3)))
    session = GameSession(opponent)
    moves = ["rock", "paper", "scissors", "rock"] * 10
    for move in moves:
        session.play_round(move)

    score = session.get_score()
    stats = session.get_stats()
    assert score.player_score + score.computer_score <= score.games_played == len(moves)
    assert stats.wins + stats.losses + stats.ties == score.games_played == stats.total_games
    assert stats.wins == score.player_score
    assert stats.losses == score.computer_score
    assert not (stats.win_streak > 0 and stats.loss_streak > 0)
    assert score.win_rate == int(100 * score.player_score / score.games_played + 0.5)


def test_history_is_capped_newest_first():
    session = fixed_session()
    for _ in range(55):
        session.play_round("rock")

    history = session.get_history()
    assert len(history) == 50
    assert [item.round_id for item in history] == list(range(55, 5, -1))
    assert session.get_score().games_played == 55
    assert len(session.get_recent_games(5)) == 5


def test_reset_round_keeps_scores():
    session = fixed_session("scissors")
    session.play_round("rock")
    session.reset_round()

    assert session.state == SessionState.IDLE
    assert session.get_view().player_choice is None
    assert session.get_view().result is None
    assert session.get_score().player_score == 1
    assert len(session.get_history()) == 1

    session.play_round("rock")
    assert session.get_score().player_score == 2


def test_reset_all_restores_defaults():
    session = fixed_session(storage=MemoryStorage())
    for move in ["rock", "paper", "scissors"] * 7:
        session.play_round(move)

    session.reset_all()

    assert session.get_stats() == Stats()
    assert session.get_score().games_played == 0
    assert session.get_history() == []
    assert session.state == SessionState.IDLE
    session.reset_all()
    assert session.get_stats() == Stats()


def test_opponent_sees_player_history_newest_first():
    opponent = ScriptedOpponent(["rock", "rock", "rock"])
    session = GameSession(opponent)
    session.play_round("paper")
    session.play_round("scissors")
    session.play_round("rock")
    assert opponent.seen_history == [
        [],
        [Choice.PAPER],
        [Choice.SCISSORS, Choice.PAPER],
    ]


def test_current_streak():
    session = GameSession(ScriptedOpponent(["scissors", "paper", "paper", "paper"]))
    assert session.get_current_streak() == {"type": "none", "count": 0}
    session.play_round("rock")
    session.play_round("rock")
    session.play_round("rock")
    assert session.get_current_streak() == {"type": "lose", "count": 2}


def test_superseded_request_does_not_mutate():
    """进行中的请求被新请求取代后，其结果被丢弃"""
    class ReentrantOpponent(OpponentProvider):
        def __init__(self):
            self.session = None
            self.calls = 0

        def respond(self, player_choice, player_history):
            self.calls += 1
            if self.calls == 1:
                # 第一个请求等待期间用户又出了一次拳
                self.session.play_round("paper")
            return Choice.SCISSORS

    opponent = ReentrantOpponent()
    session = GameSession(opponent)
    opponent.session = session

    superseded = session.play_round("rock")

    assert superseded is None
    history = session.get_history()
    assert len(history) == 1
    assert history[0].player_choice is Choice.PAPER
    assert session.get_score().games_played == 1
    assert session.get_stats().total_games == 1


def test_cancelled_request_does_not_mutate():
    class CancellingOpponent(OpponentProvider):
        def __init__(self):
            self.session = None

        def respond(self, player_choice, player_history):
            self.session.cancel_request()
            return Choice.ROCK

    opponent = CancellingOpponent()
    session = GameSession(opponent)
    opponent.session = session

    assert session.play_round("rock") is None
    assert session.get_score().games_played == 0
    assert session.state == SessionState.IDLE


def test_transport_failure_propagates_without_mutation():
    class OfflineOpponent(OpponentProvider):
        def respond(self, player_choice, player_history):
            raise TransportFailure("offline")

    session = GameSession(OfflineOpponent())
    with pytest.raises(TransportFailure):
        session.play_round("rock")
    assert session.get_score().games_played == 0
    assert not session.request_slot.in_flight


def test_state_persists_and_restores():
    storage = MemoryStorage()
    session = fixed_session("scissors", storage=storage)
    session.play_round("rock")
    session.play_round("paper")

    assert storage.get(SCORES_KEY)["gamesPlayed"] == 2
    assert storage.get(HISTORY_KEY)[0]["playerChoice"] == "paper"
    assert storage.get(STATS_KEY)["totalGames"] == 2

    restored = fixed_session("scissors", storage=storage)
    assert restored.get_score() == session.get_score()
    assert restored.get_stats() == session.get_stats()
    assert [r.to_dict() for r in restored.get_history()] == [r.to_dict() for r in session.get_history()]

    next_round = restored.play_round("rock")
    assert next_round.round_id == 3


def test_reset_all_removes_records():
    storage = MemoryStorage()
    session = fixed_session(storage=storage)
    session.play_round("rock")
    session.reset_all()
    assert storage.get(SCORES_KEY) is None
    assert storage.get(HISTORY_KEY) is None
    assert storage.get(STATS_KEY) is None


def test_storage_failure_keeps_memory_state_and_retries():
    storage = BrokenStorage()
    session = fixed_session("scissors", storage=storage)

    round_result = session.play_round("rock")

    assert round_result.result is GameResult.WIN
    assert session.get_score().player_score == 1
    warnings = session.pop_storage_warnings()
    assert len(warnings) == 3
    assert all(isinstance(w, StorageFailure) for w in warnings)
    assert session.pop_storage_warnings() == []

    storage.fail = False
    assert session.flush() is True
    assert storage.records[SCORES_KEY]["playerScore"] == 1


def test_corrupt_records_fall_back_to_defaults():
    storage = MemoryStorage()
    storage.set(SCORES_KEY, {"playerScore": 5, "computerScore": 0, "gamesPlayed": 5})
    storage.set(STATS_KEY, {"totalGames": 1, "wins": 1, "losses": 0, "ties": 0})

    session = fixed_session(storage=storage)

    assert session.get_score().games_played == 0
    assert session.get_stats() == Stats()
    assert len(session.pop_storage_warnings()) == 1


def test_strategic_local_opponent_counters_player():
    opponent = LocalOpponentProvider(
        ComputerPlayer(SeededRandomSource(seed=0)),
        OpponentConfig(strategy="strategic", difficulty=1.0)
    )
    session = GameSession(opponent)
    for _ in range(3):
        session.play_round("rock")
    assert session.play_round("rock").computer_choice is Choice.PAPER


def test_failed_reset_removal_is_retried_by_flush():
    """reset_all 删除记录失败时保留待删除，之后 flush 重试，重启后不会恢复旧进度"""
    storage = BrokenStorage()
    storage.fail = False
    session = fixed_session("scissors", storage=storage)
    for _ in range(3):
        session.play_round("rock")
    assert storage.records[SCORES_KEY]["gamesPlayed"] == 3

    storage.fail = True
    session.reset_all()
    assert session.get_score().games_played == 0
    assert len(session.pop_storage_warnings()) == 3
    assert SCORES_KEY in storage.records

    storage.fail = False
    assert session.flush() is True
    assert storage.records == {}

    restarted = fixed_session("scissors", storage=storage)
    assert restarted.get_score().games_played == 0
    assert restarted.get_stats() == Stats()


def test_round_after_failed_reset_overwrites_stale_records():
    storage = BrokenStorage()
    storage.fail = False
    session = fixed_session("scissors", storage=storage)
    session.play_round("rock")
    session.play_round("rock")

    storage.fail = True
    session.reset_all()
    storage.fail = False
    session.play_round("paper")

    assert storage.records[SCORES_KEY]["gamesPlayed"] == 1
    assert storage.records[STATS_KEY]["totalGames"] == 1
    assert session.flush() is True
    assert fixed_session(storage=storage).get_score().games_played == 1


def test_invalid_opponent_reply_is_not_player_error():
    session = GameSession(ScriptedOpponent(["lizard"]))
    with pytest.raises(GameException) as exc_info:
        session.play_round("rock")

    assert not isinstance(exc_info.value, InvalidChoice)
    assert "lizard" in exc_info.value.message
    assert session.get_score().games_played == 0
    assert not session.request_slot.in_flight


def test_opponent_reply_token_is_accepted():
    session = GameSession(ScriptedOpponent([" Paper "]))
    assert session.play_round("rock").computer_choice is Choice.PAPER


def test_state_machine_transitions():
    machine = SessionStateMachine()
    assert machine.is_in_state(SessionState.IDLE)
    cleared = []
    machine.register_transition_handler(SessionState.ROUND_COMPLETE, SessionState.IDLE,
                                        lambda: cleared.append(True))

    machine.transition_to(SessionState.ROUND_COMPLETE)
    assert machine.is_in_state(SessionState.ROUND_COMPLETE)
    assert not machine.is_in_state(SessionState.IDLE)

    machine.transition_to(SessionState.IDLE)
    assert cleared == [True]
    assert machine.is_in_state(SessionState.IDLE)
