"""
游戏逻辑模块
Game Logic Module
"""
from .choice import Choice
from .game_rules import GameRules, GameResult, evaluate
from .choice_source import ChoiceSource, SeededRandomSource, FixedChoiceSource
from .score_board import ScoreBoard, Round, Score, DEFAULT_HISTORY_LIMIT

__all__ = [
    'Choice',
    'GameRules',
    'GameResult',
    'evaluate',
    'ChoiceSource',
    'SeededRandomSource',
    'FixedChoiceSource',
    'ScoreBoard',
    'Round',
    'Score',
    'DEFAULT_HISTORY_LIMIT'
]
