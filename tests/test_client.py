"""
对局服务客户端测试
Game API Client Tests
"""
import socket
import sys
import threading
from pathlib import Path

import pytest
from werkzeug.serving import make_server

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rps_game.api import create_app, GameApiClient, CONNECTION_ERROR_MESSAGE, INVALID_CHOICE_MESSAGE
from rps_game.utils.config_loader import ConfigLoader, DEFAULT_CONFIG
from rps_game.game import GameSession, Choice, GameResult, RemoteOpponentProvider
from rps_game.game.game_logic import FixedChoiceSource
from rps_game.game.opponent import ComputerPlayer
from rps_game.utils.exceptions import GameApiError, TransportFailure


@pytest.fixture
def live_server():
    app = create_app(computer_player=ComputerPlayer(FixedChoiceSource("paper")))
    server = make_server("127.0.0.1", 0, app)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_port}/api"
    server.shutdown()
    thread.join(timeout=5)


def unused_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_play_game(live_server):
    client = GameApiClient(live_server)
    data = client.play_game("Scissors")
    assert data["playerChoice"] == "scissors"
    assert data["computerChoice"] == "paper"
    assert data["result"] == "win"


def test_choices_and_health(live_server):
    client = GameApiClient(live_server)
    assert client.get_valid_choices() == {"choices": ["rock", "paper", "scissors"]}
    assert client.check_health()["status"] == "healthy"
    assert client.is_connected()


def test_error_response_becomes_api_error(live_server):
    client = GameApiClient(live_server)
    with pytest.raises(GameApiError) as exc_info:
        client.play_game("lizard")
    assert exc_info.value.status == 400
    assert exc_info.value.message == INVALID_CHOICE_MESSAGE


def test_choice_is_required():
    with pytest.raises(GameApiError):
        GameApiClient("http://127.0.0.1:1/api").play_game("")


def test_unreachable_server_is_transport_failure():
    client = GameApiClient(f"http://127.0.0.1:{unused_port()}/api", timeout=2)
    with pytest.raises(TransportFailure) as exc_info:
        client.check_health()
    assert exc_info.value.message == CONNECTION_ERROR_MESSAGE
    assert not client.is_connected()


def test_session_with_remote_opponent(live_server):
    session = GameSession(RemoteOpponentProvider(GameApiClient(live_server)))
    round_result = session.play_round("rock")
    assert round_result.computer_choice is Choice.PAPER
    assert round_result.result is GameResult.LOSE
    assert session.get_score().computer_score == 1


def test_session_with_offline_remote_opponent():
    client = GameApiClient(f"http://127.0.0.1:{unused_port()}/api", timeout=2)
    session = GameSession(RemoteOpponentProvider(client))
    with pytest.raises(TransportFailure):
        session.play_round("rock")
    assert session.get_score().games_played == 0


class RecordingClient:
    """记录请求并返回预设响应的客户端"""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def play_game(self, player_choice, history=None):
        self.calls.append((player_choice, history))
        return self.response


def test_remote_opponent_sends_player_history():
    client = RecordingClient({"computerChoice": "rock"})
    session = GameSession(RemoteOpponentProvider(client))
    session.play_round("paper")
    session.play_round("scissors")
    assert client.calls == [("paper", []), ("scissors", ["paper"])]


@pytest.mark.parametrize("response", [
    {"playerChoice": "rock", "result": "win"},
    {"computerChoice": "lizard"},
    ["not", "a", "mapping"],
])
def test_malformed_remote_response_is_api_error(response):
    session = GameSession(RemoteOpponentProvider(RecordingClient(response)))
    with pytest.raises(GameApiError):
        session.play_round("rock")
    assert session.get_score().games_played == 0


def test_strategic_server_counters_remote_history():
    config = ConfigLoader.merge(DEFAULT_CONFIG, {"opponent": {"strategy": "strategic", "difficulty": 1.0}})
    app = create_app(config, computer_player=ComputerPlayer(FixedChoiceSource("rock")))
    server = make_server("127.0.0.1", 0, app)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        client = GameApiClient(f"http://127.0.0.1:{server.server_port}/api")
        session = GameSession(RemoteOpponentProvider(client))
        # 首回合没有历史，随机出拳
        assert session.play_round("paper").computer_choice is Choice.ROCK
        assert session.play_round("paper").computer_choice is Choice.SCISSORS
    finally:
        server.shutdown()
        thread.join(timeout=5)
