"""
电脑对手模块
Computer Opponent Module
"""
from .opponent_config import OpponentConfig, Strategy, get_available_strategies
from .computer_player import (
    ComputerPlayer, get_computer_stats, most_frequent_choice, filter_valid_history
)
from .providers import OpponentProvider, LocalOpponentProvider, RemoteOpponentProvider

__all__ = [
    'OpponentConfig',
    'Strategy',
    'get_available_strategies',
    'ComputerPlayer',
    'get_computer_stats',
    'most_frequent_choice',
    'filter_valid_history',
    'OpponentProvider',
    'LocalOpponentProvider',
    'RemoteOpponentProvider'
]
