"""
对局服务接口模块
Game API Module
"""
from .server import create_app, SERVICE_NAME, INVALID_CHOICE_MESSAGE
from .client import GameApiClient, CONNECTION_ERROR_MESSAGE

__all__ = [
    'create_app',
    'SERVICE_NAME',
    'INVALID_CHOICE_MESSAGE',
    'GameApiClient',
    'CONNECTION_ERROR_MESSAGE'
]
