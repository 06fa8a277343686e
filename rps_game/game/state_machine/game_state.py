"""
会话状态枚举
Session State Enumeration
"""
from enum import Enum, auto


class SessionState(Enum):
    """会话状态枚举"""
    IDLE = auto()              # 尚未出拳或已重置当前回合
    ROUND_COMPLETE = auto()    # 已完成一回合

    def __str__(self):
        return self.name
