"""
会话状态机模块
Session State Machine Module
"""
from .game_state import SessionState
from .game_state_machine import SessionStateMachine

__all__ = ['SessionState', 'SessionStateMachine']
