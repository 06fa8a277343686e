"""
对手出拳提供者
Opponent Providers - 本地电脑对手或远程对局服务
"""
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence
from ..game_logic.choice import Choice
from .computer_player import ComputerPlayer
from .opponent_config import OpponentConfig
from ...utils.exceptions import GameApiError
from ...utils.logger import setup_logger

logger = setup_logger("RPS.OpponentProvider")


class OpponentProvider(ABC):
    """对手出拳提供者抽象基类"""

    @abstractmethod
    def respond(self, player_choice: Choice, player_history: Sequence[Choice]) -> Choice:
        """
        给出对手本回合的出拳

        Args:
            player_choice: 玩家本回合出拳
            player_history: 玩家之前的出拳（最新在前）

        Returns:
            Choice: 对手出拳
        """
        pass


class LocalOpponentProvider(OpponentProvider):
    """使用本地 ComputerPlayer 的对手"""

    def __init__(self, player: Optional[ComputerPlayer] = None,
                 config: Optional[OpponentConfig] = None):
        self.player = player or ComputerPlayer()
        self.config = config or OpponentConfig()

    def respond(self, player_choice: Choice, player_history: Sequence[Choice]) -> Choice:
        return self.player.choose_move(self.config.with_history(player_history))


class RemoteOpponentProvider(OpponentProvider):
    """通过对局服务获取电脑出拳，网络错误原样向上抛出，响应中出拳无效时抛出 GameApiError"""

    def __init__(self, client: Any):
        """
        Args:
            client: 提供 play_game(choice, history) 的客户端，如 GameApiClient
        """
        self.client = client

    def respond(self, player_choice: Choice, player_history: Sequence[Choice]) -> Choice:
        history = [Choice.from_string(item).value for item in player_history]
        response = self.client.play_game(player_choice.value, history=history)
        token = response.get('computerChoice') if isinstance(response, dict) else None
        if not Choice.is_valid(token):
            raise GameApiError(f"Invalid computerChoice in server response: {token!r}", data=response)
        computer_choice = Choice.from_string(token)
        logger.debug(f"远程对手出拳: {computer_choice}")
        return computer_choice
