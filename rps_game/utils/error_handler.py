"""
错误处理工具模块
Error Handler Utility Module
"""
import traceback
from typing import Optional, Callable
from .exceptions import (
    GameException, InvalidChoice, ConfigurationException, InvalidConfiguration,
    StorageFailure, TransportFailure, GameApiError
)
from .logger import setup_logger

logger = setup_logger("RPS.ErrorHandler")


class ErrorHandler:
    """错误处理器类"""

    def __init__(self):
        """初始化错误处理器"""
        self.error_callbacks: dict = {}
        self.setup_default_handlers()

    def setup_default_handlers(self):
        """设置默认错误处理函数（子类在前，按注册顺序匹配）"""
        self.error_callbacks[InvalidChoice] = self._handle_invalid_choice
        self.error_callbacks[GameException] = self._handle_game_error
        self.error_callbacks[InvalidConfiguration] = self._handle_invalid_configuration
        self.error_callbacks[ConfigurationException] = self._handle_config_error
        self.error_callbacks[StorageFailure] = self._handle_storage_error
        self.error_callbacks[TransportFailure] = self._handle_transport_error
        self.error_callbacks[GameApiError] = self._handle_api_error

    def register_handler(self, exception_type: type, handler: Callable):
        """
        注册错误处理函数

        Args:
            exception_type: 异常类型
            handler: 处理函数，签名为 handler(exception, context)
        """
        self.error_callbacks[exception_type] = handler
        logger.debug(f"注册错误处理函数: {exception_type.__name__}")

    def handle(self, exception: Exception, context: Optional[str] = None) -> bool:
        """
        处理异常

        Args:
            exception: 异常对象
            context: 上下文信息

        Returns:
            bool: 是否由已注册的处理函数处理
        """
        exception_type = type(exception)

        handler = None
        for exc_type, handler_func in self.error_callbacks.items():
            if issubclass(exception_type, exc_type):
                handler = handler_func
                break

        if handler:
            try:
                handler(exception, context)
                return True
            except Exception as e:
                logger.error(f"错误处理函数执行异常: {e}", exc_info=True)
                return False
        else:
            self._handle_generic_error(exception, context)
            return False

    @staticmethod
    def _prefix(context: Optional[str]) -> str:
        return f"[{context}] " if context else ""

    def _handle_invalid_choice(self, exception: InvalidChoice, context: Optional[str]):
        """处理无效出拳"""
        logger.warning(f"{self._prefix(context)}无效出拳 [{exception.token!r}]: {exception.message}")

    def _handle_game_error(self, exception: GameException, context: Optional[str]):
        """处理游戏逻辑错误"""
        logger.error(f"{self._prefix(context)}游戏逻辑错误 [状态: {exception.game_state}]: {exception.message}")

    def _handle_invalid_configuration(self, exception: InvalidConfiguration, context: Optional[str]):
        """处理对手配置错误"""
        logger.error(f"{self._prefix(context)}对手配置错误 [键: {exception.config_key}]: {exception.message}")

    def _handle_config_error(self, exception: ConfigurationException, context: Optional[str]):
        """处理配置错误"""
        logger.error(f"{self._prefix(context)}配置错误 [键: {exception.config_key}]: {exception.message}")

    def _handle_storage_error(self, exception: StorageFailure, context: Optional[str]):
        """处理存储错误，内存状态继续有效"""
        logger.warning(f"{self._prefix(context)}存储失败 [{exception.operation} {exception.key}]: {exception.message}")

    def _handle_transport_error(self, exception: TransportFailure, context: Optional[str]):
        """处理网络连接错误"""
        logger.warning(f"{self._prefix(context)}网络连接失败 [{exception.url}]: {exception.message}")

    def _handle_api_error(self, exception: GameApiError, context: Optional[str]):
        """处理服务端错误响应"""
        logger.error(f"{self._prefix(context)}服务端错误 [HTTP {exception.status}]: {exception.message}")

    def _handle_generic_error(self, exception: Exception, context: Optional[str]):
        """处理通用错误"""
        logger.error(f"{self._prefix(context)}未处理的异常: {type(exception).__name__}: {str(exception)}")
        logger.debug(traceback.format_exc())


# 全局错误处理器实例
global_error_handler = ErrorHandler()
