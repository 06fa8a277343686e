"""
游戏逻辑模块
Game Logic Module
"""
from .game_session import GameSession, SessionView
from .game_logic import (
    Choice, GameRules, GameResult, evaluate, ScoreBoard, Round, Score,
    ChoiceSource, SeededRandomSource, FixedChoiceSource
)
from .opponent import (
    ComputerPlayer, OpponentConfig, Strategy, LocalOpponentProvider, RemoteOpponentProvider
)
from .request_slot import RequestSlot
from .state_machine import SessionState, SessionStateMachine
from .statistics import StatsAggregator, Stats, ChoiceStats

__all__ = [
    'GameSession',
    'SessionView',
    'Choice',
    'GameRules',
    'GameResult',
    'evaluate',
    'ScoreBoard',
    'Round',
    'Score',
    'ChoiceSource',
    'SeededRandomSource',
    'FixedChoiceSource',
    'ComputerPlayer',
    'OpponentConfig',
    'Strategy',
    'LocalOpponentProvider',
    'RemoteOpponentProvider',
    'RequestSlot',
    'SessionState',
    'SessionStateMachine',
    'StatsAggregator',
    'Stats',
    'ChoiceStats'
]
