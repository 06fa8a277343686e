"""
游戏规则实现
Game Rules Implementation
"""
from enum import Enum
from typing import Any, Dict
from .choice import Choice
from ...utils.logger import setup_logger

logger = setup_logger("RPS.GameRules")


class GameResult(Enum):
    """游戏结果枚举（玩家视角）"""
    WIN = "win"     # 玩家获胜
    LOSE = "lose"   # 电脑获胜
    TIE = "tie"     # 平局

    def __str__(self):
        return self.value


class GameRules:
    """游戏规则类"""

    # 胜负规则：key胜value
    WIN_RULES: Dict[Choice, Choice] = {
        Choice.ROCK: Choice.SCISSORS,      # 石头胜剪刀
        Choice.PAPER: Choice.ROCK,         # 布胜石头
        Choice.SCISSORS: Choice.PAPER      # 剪刀胜布
    }

    @staticmethod
    def judge(player_choice: Any, opponent_choice: Any) -> GameResult:
        """
        判断游戏结果

        Args:
            player_choice: 玩家出拳（Choice 或不区分大小写的字符串）
            opponent_choice: 对手出拳

        Returns:
            GameResult: 玩家视角的结果

        Raises:
            InvalidChoice: 任一出拳无法识别
        """
        player = Choice.from_string(player_choice)
        opponent = Choice.from_string(opponent_choice)

        if player == opponent:
            logger.debug(f"平局: {player}")
            return GameResult.TIE

        if GameRules.WIN_RULES[player] == opponent:
            logger.debug(f"玩家获胜: {player} 胜 {opponent}")
            return GameResult.WIN

        logger.debug(f"电脑获胜: {opponent} 胜 {player}")
        return GameResult.LOSE

    @staticmethod
    def get_winning_choice(choice: Choice) -> Choice:
        """
        获取能战胜指定出拳的出拳

        Args:
            choice: 目标出拳

        Returns:
            Choice: 能战胜目标的出拳
        """
        for winner, loser in GameRules.WIN_RULES.items():
            if loser == choice:
                return winner
        raise KeyError(choice)

    @staticmethod
    def get_losing_choice(choice: Choice) -> Choice:
        """获取会被指定出拳战胜的出拳"""
        return GameRules.WIN_RULES[choice]


def evaluate(player_choice: Any, opponent_choice: Any) -> GameResult:
    """判定一回合结果，等同于 GameRules.judge"""
    return GameRules.judge(player_choice, opponent_choice)
