"""
随机出拳来源
Choice Source - 可替换的随机数来源
"""
import random
from abc import ABC, abstractmethod
from typing import Any, Optional
from .choice import Choice


class ChoiceSource(ABC):
    """随机来源抽象基类，电脑对手的所有随机性都从这里获取"""

    @abstractmethod
    def next_choice(self) -> Choice:
        """
        均匀随机地给出一个出拳

        Returns:
            Choice: 出拳
        """
        pass

    @abstractmethod
    def next_uniform(self) -> float:
        """
        给出 [0, 1) 区间内均匀分布的实数

        Returns:
            float: 随机数
        """
        pass


class SeededRandomSource(ChoiceSource):
    """基于 random.Random 的随机来源，可指定种子以复现"""

    def __init__(self, seed: Optional[Any] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_choice(self) -> Choice:
        return self._rng.choice(list(Choice))

    def next_uniform(self) -> float:
        return self._rng.random()


class FixedChoiceSource(ChoiceSource):
    """总是给出同一出拳的来源，用于固定对手或测试"""

    def __init__(self, choice: Any, uniform: float = 0.0):
        """
        Args:
            choice: 固定的出拳
            uniform: next_uniform 返回的固定值
        """
        self.choice = Choice.from_string(choice)
        self.uniform = uniform

    def next_choice(self) -> Choice:
        return self.choice

    def next_uniform(self) -> float:
        return self.uniform
