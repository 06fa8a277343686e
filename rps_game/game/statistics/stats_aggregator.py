"""
统计聚合器
Statistics Aggregator - 胜负、连胜连败与出拳偏好
"""
import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from ..game_logic.choice import Choice
from ..game_logic.game_rules import GameResult
from ...utils.logger import setup_logger

logger = setup_logger("RPS.StatsAggregator")


@dataclass
class ChoiceStats:
    """单个出拳的使用统计"""
    played: int = 0
    won: int = 0

    def to_dict(self) -> dict:
        return {'played': self.played, 'won': self.won}


def _default_per_choice() -> Dict[Choice, ChoiceStats]:
    return {choice: ChoiceStats() for choice in Choice}


@dataclass
class Stats:
    """统计信息，完全由回合序列推导"""
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    win_streak: int = 0
    max_win_streak: int = 0
    loss_streak: int = 0
    max_loss_streak: int = 0
    favorite_choice: Optional[Choice] = None
    per_choice: Dict[Choice, ChoiceStats] = field(default_factory=_default_per_choice)
    last_played_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'totalGames': self.total_games,
            'wins': self.wins,
            'losses': self.losses,
            'ties': self.ties,
            'winStreak': self.win_streak,
            'maxWinStreak': self.max_win_streak,
            'lossStreak': self.loss_streak,
            'maxLossStreak': self.max_loss_streak,
            'favoriteChoice': self.favorite_choice.value if self.favorite_choice else None,
            'choiceStats': {choice.value: stats.to_dict() for choice, stats in self.per_choice.items()},
            'lastPlayed': self.last_played_at.isoformat() if self.last_played_at else None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stats":
        """从字典恢复统计信息"""
        per_choice = _default_per_choice()
        for key, value in (data.get('choiceStats') or {}).items():
            per_choice[Choice.from_string(key)] = ChoiceStats(
                played=int(value.get('played', 0)),
                won=int(value.get('won', 0))
            )
        favorite = data.get('favoriteChoice')
        last_played = data.get('lastPlayed')
        stats = cls(
            total_games=int(data.get('totalGames', 0)),
            wins=int(data.get('wins', 0)),
            losses=int(data.get('losses', 0)),
            ties=int(data.get('ties', 0)),
            win_streak=int(data.get('winStreak', 0)),
            max_win_streak=int(data.get('maxWinStreak', 0)),
            loss_streak=int(data.get('lossStreak', 0)),
            max_loss_streak=int(data.get('maxLossStreak', 0)),
            favorite_choice=Choice.from_string(favorite) if favorite else None,
            per_choice=per_choice,
            last_played_at=datetime.fromisoformat(last_played) if last_played else None
        )
        if stats.wins + stats.losses + stats.ties != stats.total_games:
            raise ValueError(f"统计记录不一致: {data}")
        if stats.win_streak > 0 and stats.loss_streak > 0:
            raise ValueError(f"连胜与连败不能同时存在: {data}")
        return stats


class StatsAggregator:
    """统计聚合器类，每回合增量更新"""

    def __init__(self, stats: Optional[Stats] = None):
        """
        初始化统计聚合器

        Args:
            stats: 初始统计（从存储恢复时使用）
        """
        self.stats = stats or Stats()

    def record_round(self, result: GameResult, player_choice: Choice,
                     computer_choice: Choice) -> Stats:
        """
        记录一回合并返回新的统计快照

        Args:
            result: 玩家视角的结果
            player_choice: 玩家出拳
            computer_choice: 电脑出拳

        Returns:
            Stats: 更新后的统计（副本）
        """
        result = GameResult(result)
        player_choice = Choice.from_string(player_choice)
        Choice.from_string(computer_choice)  # 校验

        stats = self.stats
        stats.total_games += 1

        if result == GameResult.WIN:
            stats.wins += 1
            stats.win_streak += 1
            stats.loss_streak = 0
            stats.max_win_streak = max(stats.max_win_streak, stats.win_streak)
            stats.per_choice[player_choice].won += 1
        elif result == GameResult.LOSE:
            stats.losses += 1
            stats.loss_streak += 1
            stats.win_streak = 0
            stats.max_loss_streak = max(stats.max_loss_streak, stats.loss_streak)
        else:
            stats.ties += 1
            stats.win_streak = 0
            stats.loss_streak = 0

        stats.per_choice[player_choice].played += 1
        stats.favorite_choice = self._favorite(stats)
        stats.last_played_at = datetime.now()

        logger.debug(f"统计更新: 胜{stats.wins} 负{stats.losses} 平{stats.ties}, "
                     f"连胜{stats.win_streak} 连败{stats.loss_streak}")
        return self.get_stats()

    @staticmethod
    def _favorite(stats: Stats) -> Choice:
        # 次数相同时取 rock, paper, scissors 中靠前者
        return max(Choice, key=lambda choice: stats.per_choice[choice].played)

    def get_stats(self) -> Stats:
        """获取统计快照"""
        return copy.deepcopy(self.stats)

    def reset(self):
        """重置为默认统计"""
        self.stats = Stats()
        logger.info("统计已重置")
