"""
比分与对局历史
Score Board - 比分、回合记录与有限长度历史
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional
from .choice import Choice
from .game_rules import GameResult
from ...utils.logger import setup_logger

logger = setup_logger("RPS.ScoreBoard")

DEFAULT_HISTORY_LIMIT = 50


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass(frozen=True)
class Round:
    """回合记录，创建后不可修改"""
    player_choice: Choice
    computer_choice: Choice
    result: GameResult
    timestamp: datetime = field(default_factory=datetime.now)
    round_id: int = 0

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'id': self.round_id,
            'playerChoice': self.player_choice.value,
            'computerChoice': self.computer_choice.value,
            'result': self.result.value,
            'timestamp': self.timestamp.isoformat()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """从字典恢复回合记录"""
        return cls(
            player_choice=Choice.from_string(data['playerChoice']),
            computer_choice=Choice.from_string(data['computerChoice']),
            result=GameResult(data['result']),
            timestamp=_parse_time(data.get('timestamp')) or datetime.now(),
            round_id=int(data.get('id', 0))
        )


@dataclass
class Score:
    """比分"""
    player_score: int = 0
    computer_score: int = 0
    games_played: int = 0
    last_updated: Optional[datetime] = None

    @property
    def win_rate(self) -> int:
        """
        玩家胜率

        Returns:
            int: 四舍五入后的百分比（0-100），未进行游戏时为0
        """
        if self.games_played == 0:
            return 0
        # 与 Math.round 一致：.5 向上取整
        return int(100 * self.player_score / self.games_played + 0.5)

    def apply(self, result: GameResult):
        """按回合结果更新比分"""
        if result == GameResult.WIN:
            self.player_score += 1
        elif result == GameResult.LOSE:
            self.computer_score += 1
        self.games_played += 1
        self.last_updated = datetime.now()

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'playerScore': self.player_score,
            'computerScore': self.computer_score,
            'gamesPlayed': self.games_played,
            'winRate': self.win_rate,
            'lastUpdated': self.last_updated.isoformat() if self.last_updated else None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Score":
        """从字典恢复比分，winRate 字段被忽略并重新计算"""
        score = cls(
            player_score=int(data.get('playerScore', 0)),
            computer_score=int(data.get('computerScore', 0)),
            games_played=int(data.get('gamesPlayed', 0)),
            last_updated=_parse_time(data.get('lastUpdated'))
        )
        if min(score.player_score, score.computer_score, score.games_played) < 0 \
                or score.player_score + score.computer_score > score.games_played:
            raise ValueError(f"比分记录不一致: {data}")
        return score


class ScoreBoard:
    """比分板类，维护比分和最新在前的有限历史"""

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT):
        """
        初始化比分板

        Args:
            history_limit: 历史记录容量，超出时淘汰最旧的回合
        """
        self.history_limit = history_limit
        self.score = Score()
        self._history: Deque[Round] = deque(maxlen=history_limit)

    def record(self, round_result: Round):
        """记录一回合：更新比分并把回合放到历史最前面"""
        self.score.apply(round_result.result)
        self._history.appendleft(round_result)
        logger.debug(f"记录回合 #{round_result.round_id}: {round_result.result}, "
                     f"比分 {self.score.player_score}:{self.score.computer_score}")

    def get_history(self) -> List[Round]:
        """获取历史（最新在前）"""
        return list(self._history)

    def get_recent_games(self, limit: int = 10) -> List[Round]:
        """获取最近的若干回合"""
        return list(self._history)[:max(0, limit)]

    def get_last_round(self) -> Optional[Round]:
        """获取最近一回合"""
        return self._history[0] if self._history else None

    def restore(self, score: Score, history: List[Round]):
        """用持久化数据恢复比分板"""
        self.score = score
        self._history = deque(history[:self.history_limit], maxlen=self.history_limit)

    def reset(self):
        """清空比分和历史"""
        self.score = Score()
        self._history.clear()
        logger.info("比分板已重置")
