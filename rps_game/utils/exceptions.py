"""
自定义异常类
Custom Exception Classes
"""
from typing import Any, Optional


class GameException(Exception):
    """游戏逻辑异常"""
    def __init__(self, message: str, game_state: Optional[str] = None):
        super().__init__(message)
        self.game_state = game_state
        self.message = message


class InvalidChoice(GameException):
    """无效出拳（非 rock / paper / scissors）"""
    def __init__(self, message: str, token: Any = None, game_state: Optional[str] = None):
        super().__init__(message, game_state=game_state)
        self.token = token


class ConfigurationException(Exception):
    """配置异常"""
    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
        self.message = message


class InvalidConfiguration(ConfigurationException):
    """电脑对手配置不合法"""
    pass


class StorageFailure(Exception):
    """持久化存储异常"""
    def __init__(self, message: str, key: Optional[str] = None, operation: Optional[str] = None):
        super().__init__(message)
        self.key = key
        self.operation = operation
        self.message = message


class TransportFailure(Exception):
    """网络连接异常（可重试）"""
    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url
        self.message = message


class GameApiError(Exception):
    """服务端返回的错误响应"""
    def __init__(self, message: str, status: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.status = status
        self.data = data
        self.message = message
