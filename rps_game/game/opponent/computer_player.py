"""
电脑对手
Computer Player - 随机策略与克制策略
"""
from collections import Counter
from collections.abc import Sequence
from typing import Any, Dict, Iterable, List, Optional
from ..game_logic.choice import Choice
from ..game_logic.choice_source import ChoiceSource, SeededRandomSource
from ..game_logic.game_rules import GameRules
from .opponent_config import OpponentConfig, Strategy
from ...utils.exceptions import InvalidConfiguration
from ...utils.logger import setup_logger

logger = setup_logger("RPS.ComputerPlayer")


def filter_valid_history(history: Iterable[Any]) -> List[Choice]:
    """过滤掉无法识别的历史出拳，并统一为 Choice"""
    return [Choice.from_string(move) for move in history if Choice.is_valid(move)]


def most_frequent_choice(history: Iterable[Any]) -> Optional[Choice]:
    """
    统计玩家最常用的出拳

    出现次数相同时按 rock, paper, scissors 的固定顺序取第一个，
    与历史中的出现顺序无关。

    Args:
        history: 玩家历史出拳

    Returns:
        Optional[Choice]: 最常用的出拳，历史为空或全部无效时返回None
    """
    counts = Counter(filter_valid_history(history))
    if not counts:
        return None
    return max(Choice, key=lambda choice: counts[choice])


class ComputerPlayer:
    """电脑对手类"""

    def __init__(self, source: Optional[ChoiceSource] = None):
        """
        初始化电脑对手

        Args:
            source: 随机来源，默认使用无种子的 SeededRandomSource
        """
        self.source = source or SeededRandomSource()

    def generate_random_move(self) -> Choice:
        """均匀随机出拳"""
        return self.source.next_choice()

    def generate_strategic_move(self, player_history: Iterable[Any] = ()) -> Choice:
        """
        克制玩家最常用的出拳，历史为空或全部无效时随机出拳

        Args:
            player_history: 玩家历史出拳

        Returns:
            Choice: 电脑出拳
        """
        favorite = most_frequent_choice(player_history)
        if favorite is None:
            logger.debug("玩家历史为空，随机出拳")
            return self.generate_random_move()

        counter = GameRules.get_winning_choice(favorite)
        logger.debug(f"玩家最常出 {favorite}，电脑出 {counter}")
        return counter

    def choose_move(self, config: Optional[Any] = None) -> Choice:
        """
        按配置选择电脑出拳

        Args:
            config: OpponentConfig 或等价的字典，None 表示默认配置

        Returns:
            Choice: 电脑出拳

        Raises:
            InvalidConfiguration: 配置不合法
        """
        if config is None:
            config = OpponentConfig()
        elif isinstance(config, dict):
            config = OpponentConfig.from_dict(config)
        elif not isinstance(config, OpponentConfig):
            raise InvalidConfiguration(f"Unsupported opponent configuration: {type(config).__name__}")

        if config.strategy == Strategy.RANDOM:
            return self.generate_random_move()

        # 以 difficulty 的概率使用克制策略
        if self.source.next_uniform() < config.difficulty:
            return self.generate_strategic_move(config.player_history)
        return self.generate_random_move()


def get_computer_stats(move_history: Any = ()) -> Dict[str, Any]:
    """
    统计电脑出拳分布

    Args:
        move_history: 电脑历史出拳

    Returns:
        Dict[str, Any]: totalMoves、distribution 与四舍五入后的 percentages
    """
    if isinstance(move_history, (str, bytes)) or not isinstance(move_history, Sequence):
        raise InvalidConfiguration("Move history must be a sequence", config_key="move_history")

    valid_moves = filter_valid_history(move_history)
    total_moves = len(valid_moves)
    counts = Counter(valid_moves)
    distribution = {choice.value: counts[choice] for choice in Choice}

    if total_moves == 0:
        percentages = {choice.value: 0 for choice in Choice}
    else:
        percentages = {
            move: int(count / total_moves * 100 + 0.5)
            for move, count in distribution.items()
        }

    return {
        'totalMoves': total_moves,
        'distribution': distribution,
        'percentages': percentages
    }
