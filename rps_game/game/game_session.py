"""
游戏会话
Game Session - 整合出拳判定、电脑对手、比分、历史与统计
"""
import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from .game_logic import Choice, GameRules, GameResult, Round, Score, ScoreBoard, DEFAULT_HISTORY_LIMIT
from .opponent import OpponentProvider
from .request_slot import RequestSlot
from .state_machine import SessionState, SessionStateMachine
from .statistics import Stats, StatsAggregator
from ..storage import StorageBase, RecordStore, SCORES_KEY, HISTORY_KEY, STATS_KEY, ALL_KEYS
from ..utils.error_handler import global_error_handler
from ..utils.exceptions import GameException, InvalidChoice, StorageFailure
from ..utils.logger import setup_logger

logger = setup_logger("RPS.GameSession")


@dataclass(frozen=True)
class SessionView:
    """当前回合的显示内容，IDLE 状态下全部为None"""
    player_choice: Optional[Choice] = None
    computer_choice: Optional[Choice] = None
    result: Optional[GameResult] = None

    def to_dict(self) -> dict:
        return {
            'playerChoice': self.player_choice.value if self.player_choice else None,
            'computerChoice': self.computer_choice.value if self.computer_choice else None,
            'result': self.result.value if self.result else None
        }


class GameSession:
    """游戏会话类"""

    def __init__(self,
                 opponent: OpponentProvider,
                 storage: Optional[StorageBase] = None,
                 history_limit: int = DEFAULT_HISTORY_LIMIT):
        """
        初始化游戏会话

        Args:
            opponent: 对手出拳提供者
            storage: 持久化存储（可选），提供时从中恢复比分、历史和统计
            history_limit: 历史记录容量
        """
        self.opponent = opponent
        self.score_board = ScoreBoard(history_limit=history_limit)
        self.stats_aggregator = StatsAggregator()
        self.state_machine = SessionStateMachine(initial_state=SessionState.IDLE)
        self.state_machine.register_transition_handler(
            SessionState.ROUND_COMPLETE, SessionState.IDLE, self._clear_view
        )
        self.request_slot = RequestSlot()
        self.view = SessionView()
        self.storage_warnings: List[StorageFailure] = []

        self._round_counter = 0
        self._dirty: set = set()
        self._pending_remove: set = set()
        self.records: Optional[RecordStore] = None
        if storage is not None:
            self.records = RecordStore(storage, history_limit=history_limit)
            self._restore()

        logger.info("游戏会话初始化完成")

    @property
    def state(self) -> SessionState:
        """当前会话状态"""
        return self.state_machine.get_current_state()

    def play_round(self, player_choice: Any) -> Optional[Round]:
        """
        进行一回合

        Args:
            player_choice: 玩家出拳（不区分大小写）

        Returns:
            Optional[Round]: 回合记录；请求在完成前被取代或取消时返回None，且不修改任何状态

        Raises:
            InvalidChoice: 玩家出拳无法识别，不修改任何状态
        """
        choice = Choice.from_string(player_choice)

        ticket = self.request_slot.begin()
        player_history = [item.player_choice for item in self.score_board.get_history()]
        try:
            computer_choice = self._opponent_choice(self.opponent.respond(choice, player_history))
        except Exception:
            if not self.request_slot.finish(ticket):
                logger.info(f"已失效的请求 #{ticket} 出错，结果被丢弃", exc_info=True)
                return None
            raise

        if not self.request_slot.finish(ticket):
            return None

        result = GameRules.judge(choice, computer_choice)
        self._round_counter += 1
        round_result = Round(
            player_choice=choice,
            computer_choice=computer_choice,
            result=result,
            round_id=self._round_counter
        )

        self.score_board.record(round_result)
        self.stats_aggregator.record_round(result, choice, computer_choice)
        self.state_machine.transition_to(SessionState.ROUND_COMPLETE)
        self.view = SessionView(choice, computer_choice, result)

        score = self.score_board.score
        logger.info(f"回合 {round_result.round_id}: 玩家 {choice} vs 电脑 {computer_choice} -> {result}, "
                    f"比分 {score.player_score}:{score.computer_score}")

        self._dirty.update(ALL_KEYS)
        self._pending_remove.difference_update(ALL_KEYS)
        self.flush()
        return round_result

    def reset_round(self):
        """清除当前回合显示内容，比分、历史和统计保持不变"""
        self.state_machine.transition_to(SessionState.IDLE)

    def reset_all(self):
        """重置比分、历史和统计，并删除已保存的记录"""
        self.request_slot.cancel()
        self.score_board.reset()
        self.stats_aggregator.reset()
        self.state_machine.reset(SessionState.IDLE)
        self._clear_view()
        self._round_counter = 0
        self._dirty.clear()
        self._pending_remove = set(ALL_KEYS)

        self.flush()
        logger.info("会话已全部重置")

    def cancel_request(self) -> bool:
        """取消进行中的出拳请求"""
        return self.request_slot.cancel()

    def flush(self) -> bool:
        """
        把有变化的记录写入存储，并删除已重置的记录，失败的操作保留到下次重试

        Returns:
            bool: 是否全部写入成功（没有存储时总是True）
        """
        if self.records is None:
            self._dirty.clear()
            self._pending_remove.clear()
            return True

        for key in sorted(self._pending_remove):
            result = self.records.remove(key)
            if result.ok:
                self._pending_remove.discard(key)
            else:
                self.storage_warnings.append(result.error)

        for key in sorted(self._dirty):
            result = self.records.save(key, self._payload(key))
            if result.ok:
                self._dirty.discard(key)
            else:
                self.storage_warnings.append(result.error)
        return not self._dirty and not self._pending_remove

    def pop_storage_warnings(self) -> List[StorageFailure]:
        """取出并清空累积的存储警告"""
        warnings, self.storage_warnings = self.storage_warnings, []
        return warnings

    def get_score(self) -> Score:
        """获取比分（副本）"""
        return dataclasses.replace(self.score_board.score)

    def get_history(self) -> List[Round]:
        """获取历史（最新在前）"""
        return self.score_board.get_history()

    def get_recent_games(self, limit: int = 10) -> List[Round]:
        return self.score_board.get_recent_games(limit)

    def get_stats(self) -> Stats:
        """获取统计快照"""
        return self.stats_aggregator.get_stats()

    def get_view(self) -> SessionView:
        return self.view

    def get_win_percentage(self) -> int:
        return self.score_board.score.win_rate

    def get_current_streak(self) -> Dict[str, Any]:
        """
        获取历史中从最新一回合开始的连续相同结果

        Returns:
            Dict[str, Any]: {'type': 'win'/'lose'/'tie'/'none', 'count': int}
        """
        history = self.score_board.get_history()
        if not history:
            return {'type': 'none', 'count': 0}

        streak_type = history[0].result
        count = 0
        for item in history:
            if item.result != streak_type:
                break
            count += 1
        return {'type': streak_type.value, 'count': count}

    def _clear_view(self):
        self.view = SessionView()

    def _opponent_choice(self, reply: Any) -> Choice:
        """校验对手给出的出拳，无效时抛出 GameException（与玩家的 InvalidChoice 区分）"""
        if isinstance(reply, Choice):
            return reply
        try:
            return Choice.from_string(reply)
        except InvalidChoice as e:
            raise GameException(f"对手给出了无效出拳: {reply!r}",
                                game_state=str(self.state)) from e

    def _payload(self, key: str):
        if key == SCORES_KEY:
            return self.score_board.score.to_dict()
        if key == HISTORY_KEY:
            return [item.to_dict() for item in self.score_board.get_history()]
        return self.stats_aggregator.stats.to_dict()

    def _restore(self):
        """从存储恢复比分、历史和统计，记录损坏时使用默认值"""
        try:
            score_data = self.records.load(SCORES_KEY)
            history_data = self.records.load(HISTORY_KEY)
            stats_data = self.records.load(STATS_KEY)
        except StorageFailure as e:
            global_error_handler.handle(e, "恢复会话")
            self.storage_warnings.append(e)
            return

        try:
            score = Score.from_dict(score_data) if score_data else Score()
            history = [Round.from_dict(item) for item in history_data or []]
            stats = Stats.from_dict(stats_data) if stats_data else Stats()
        except (InvalidChoice, KeyError, TypeError, ValueError, AttributeError) as e:
            failure = StorageFailure(f"记录格式错误: {e}", operation="get")
            global_error_handler.handle(failure, "恢复会话")
            self.storage_warnings.append(failure)
            return

        if score.games_played != stats.total_games:
            failure = StorageFailure(
                f"比分与统计不一致 (gamesPlayed={score.games_played}, totalGames={stats.total_games})",
                operation="get"
            )
            global_error_handler.handle(failure, "恢复会话")
            self.storage_warnings.append(failure)
            return

        self.score_board.restore(score, history)
        self.stats_aggregator = StatsAggregator(stats)
        self._round_counter = max([score.games_played] + [item.round_id for item in history])
        logger.info(f"已恢复会话: {score.games_played} 局, 历史 {len(history)} 条")
