"""
电脑对手配置
Opponent Configuration
"""
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple
from ...utils.exceptions import InvalidConfiguration


class Strategy(Enum):
    """电脑对手策略"""
    RANDOM = "random"          # 均匀随机
    STRATEGIC = "strategic"    # 克制玩家最常用的出拳

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value: Any) -> "Strategy":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidConfiguration("Strategy must be a string", config_key="strategy")
        for strategy in cls:
            if strategy.value == value.strip().lower():
                return strategy
        raise InvalidConfiguration(
            f"Unknown strategy: {value}. Use 'random' or 'strategic'",
            config_key="strategy"
        )


def get_available_strategies() -> list:
    """获取所有可用策略名称"""
    return [strategy.value for strategy in Strategy]


@dataclass(frozen=True)
class OpponentConfig:
    """
    电脑对手配置，构造时完成校验

    Attributes:
        strategy: 策略（random / strategic）
        player_history: 玩家历史出拳，元素可以是任意值，无效项在使用时被过滤
        difficulty: 使用克制策略的概率，取值 [0, 1]
    """
    strategy: Strategy = Strategy.RANDOM
    player_history: Tuple[Any, ...] = field(default_factory=tuple)
    difficulty: float = 0.5

    FIELDS = ('strategy', 'player_history', 'difficulty')

    def __post_init__(self):
        object.__setattr__(self, 'strategy', Strategy.from_string(self.strategy))

        history = self.player_history
        if isinstance(history, (str, bytes)) or not isinstance(history, Sequence):
            raise InvalidConfiguration("Player history must be a sequence", config_key="player_history")
        object.__setattr__(self, 'player_history', tuple(history))

        difficulty = self.difficulty
        if isinstance(difficulty, bool) or not isinstance(difficulty, (int, float)) \
                or not 0 <= difficulty <= 1:
            raise InvalidConfiguration("Difficulty must be a number between 0 and 1",
                                       config_key="difficulty")
        object.__setattr__(self, 'difficulty', float(difficulty))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OpponentConfig":
        """
        从字典创建配置，拒绝未知字段

        Args:
            data: 配置字典（strategy, player_history, difficulty）

        Returns:
            OpponentConfig: 校验后的配置
        """
        if not isinstance(data, dict):
            raise InvalidConfiguration("Opponent configuration must be a mapping")
        unknown = set(data) - set(cls.FIELDS)
        if unknown:
            raise InvalidConfiguration(
                f"Unknown opponent option(s): {', '.join(sorted(unknown))}",
                config_key=sorted(unknown)[0]
            )
        return cls(**data)

    def with_history(self, player_history) -> "OpponentConfig":
        """返回替换了玩家历史的新配置"""
        return OpponentConfig(self.strategy, player_history, self.difficulty)
