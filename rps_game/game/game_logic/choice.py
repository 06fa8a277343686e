"""
出拳枚举类型
Choice Enumeration
"""
from enum import Enum
from typing import Any, List

from ...utils.exceptions import InvalidChoice


class Choice(Enum):
    """出拳类型枚举，定义顺序即平局时的优先顺序"""
    ROCK = "rock"          # 石头
    PAPER = "paper"        # 布
    SCISSORS = "scissors"  # 剪刀

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value: Any) -> "Choice":
        """
        从字符串创建出拳枚举（忽略首尾空白和大小写）

        Args:
            value: 出拳字符串（rock, paper, scissors）或 Choice

        Returns:
            Choice: 出拳枚举值

        Raises:
            InvalidChoice: 无法识别的输入
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise InvalidChoice(
                f"Invalid choice: {value!r}. Must be one of: {', '.join(cls.values())}",
                token=value
            )
        value_lower = value.strip().lower()
        for choice in cls:
            if choice.value == value_lower:
                return choice
        raise InvalidChoice(
            f"Invalid choice: {value}. Must be one of: {', '.join(cls.values())}",
            token=value
        )

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        """检查输入能否识别为出拳"""
        try:
            cls.from_string(value)
        except InvalidChoice:
            return False
        return True

    @classmethod
    def values(cls) -> List[str]:
        """按固定顺序返回所有合法出拳"""
        return [choice.value for choice in cls]
