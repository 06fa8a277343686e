"""
单请求槽
Request Slot - 同一会话只允许一个进行中的出拳请求，后来者覆盖先来者
"""
from typing import Optional
from ..utils.logger import setup_logger

logger = setup_logger("RPS.RequestSlot")


class RequestSlot:
    """单请求槽类"""

    def __init__(self):
        self._counter = 0
        self._current: Optional[int] = None

    def begin(self) -> int:
        """
        开始一个新请求，之前未完成的请求随即失效

        Returns:
            int: 请求票据
        """
        if self._current is not None:
            logger.info(f"请求 #{self._current} 被新请求取代")
        self._counter += 1
        self._current = self._counter
        return self._current

    def is_current(self, ticket: int) -> bool:
        """检查票据是否仍然有效"""
        return ticket == self._current

    def finish(self, ticket: int) -> bool:
        """
        结束请求

        Args:
            ticket: begin() 返回的票据

        Returns:
            bool: 票据仍然有效时返回True，此时调用者可以提交结果
        """
        if ticket != self._current:
            logger.info(f"请求 #{ticket} 已失效，结果被丢弃")
            return False
        self._current = None
        return True

    def cancel(self) -> bool:
        """
        取消进行中的请求

        Returns:
            bool: 是否存在被取消的请求
        """
        if self._current is None:
            return False
        logger.info(f"请求 #{self._current} 已取消")
        self._current = None
        return True

    @property
    def in_flight(self) -> bool:
        """是否存在进行中的请求"""
        return self._current is not None
