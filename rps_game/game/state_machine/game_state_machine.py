"""
会话状态机
Session State Machine
"""
from typing import Optional, Callable, Dict, List
from .game_state import SessionState
from ...utils.exceptions import GameException
from ...utils.logger import setup_logger

logger = setup_logger("RPS.SessionStateMachine")


class SessionStateMachine:
    """会话状态机类"""

    # 状态转换规则；ROUND_COMPLETE -> ROUND_COMPLETE 表示连续出拳
    VALID_TRANSITIONS: Dict[SessionState, List[SessionState]] = {
        SessionState.IDLE: [SessionState.ROUND_COMPLETE, SessionState.IDLE],
        SessionState.ROUND_COMPLETE: [SessionState.ROUND_COMPLETE, SessionState.IDLE],
    }

    def __init__(self, initial_state: SessionState = SessionState.IDLE):
        """
        初始化状态机

        Args:
            initial_state: 初始状态
        """
        self.current_state = initial_state
        self.previous_state: Optional[SessionState] = None
        self.transition_handlers: Dict[tuple, Callable] = {}

        logger.debug(f"会话状态机初始化，初始状态: {self.current_state}")

    def register_transition_handler(self, from_state: SessionState, to_state: SessionState,
                                    handler: Callable):
        """
        注册状态转换处理函数

        Args:
            from_state: 源状态
            to_state: 目标状态
            handler: 处理函数
        """
        self.transition_handlers[(from_state, to_state)] = handler
        logger.debug(f"注册转换处理函数: {from_state} -> {to_state}")

    def transition_to(self, new_state: SessionState):
        """
        转换到新状态

        Args:
            new_state: 新状态

        Raises:
            GameException: 不允许的状态转换
        """
        if not self.can_transition_to(new_state):
            raise GameException(f"无效的状态转换: {self.current_state} -> {new_state}",
                                game_state=str(self.current_state))

        old_state = self.current_state
        self.previous_state = old_state
        self.current_state = new_state

        if old_state != new_state:
            logger.debug(f"状态转换: {old_state} -> {new_state}")

        handler = self.transition_handlers.get((old_state, new_state))
        if handler:
            handler()

    def get_current_state(self) -> SessionState:
        """获取当前状态"""
        return self.current_state

    def can_transition_to(self, state: SessionState) -> bool:
        """检查是否可以转换到指定状态"""
        return state in self.VALID_TRANSITIONS.get(self.current_state, [])

    def reset(self, state: SessionState = SessionState.IDLE):
        """
        重置状态机

        Args:
            state: 重置后的状态
        """
        self.previous_state = self.current_state
        self.current_state = state
        logger.debug(f"状态机已重置到: {state}")

    def is_in_state(self, state: SessionState) -> bool:
        """检查是否在指定状态"""
        return self.current_state == state
