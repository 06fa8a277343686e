"""
配置加载工具模块
Configuration Loader Utility
"""
import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from .exceptions import ConfigurationException
from ..utils.logger import setup_logger

logger = setup_logger("RPS.ConfigLoader")

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    'game': {
        'history_limit': 50,
    },
    'opponent': {
        'strategy': 'random',
        'difficulty': 0.5,
        'seed': None,
    },
    'storage': {
        'type': 'memory',
        'directory': 'data',
    },
    'server': {
        'host': '127.0.0.1',
        'port': 3001,
        'frontend_url': 'http://localhost:3000',
        'timeout': 5.0,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


class ConfigLoader:
    """配置加载器类"""

    @staticmethod
    def load_config(config_path: str) -> Dict[str, Any]:
        """
        从YAML文件加载配置

        Args:
            config_path: 配置文件路径

        Returns:
            Dict[str, Any]: 配置字典

        Raises:
            FileNotFoundError: 配置文件不存在
            yaml.YAMLError: YAML解析错误
            ConfigurationException: 顶层不是映射
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f"配置文件不存在: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML解析错误: {e}")
            raise

        if config is None:
            logger.warning(f"配置文件为空: {config_path}")
            return {}

        if not isinstance(config, dict):
            raise ConfigurationException(f"配置文件顶层必须是映射: {config_path}")

        logger.info(f"成功加载配置文件: {config_path}")
        return config

    @staticmethod
    def load_with_defaults(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        加载配置并与默认值合并；文件不存在时返回默认配置

        Args:
            config_path: 配置文件路径，None 表示使用默认路径

        Returns:
            Dict[str, Any]: 合并后的完整配置
        """
        path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        try:
            loaded = ConfigLoader.load_config(str(path))
        except FileNotFoundError:
            logger.warning(f"配置文件不存在，使用默认配置: {path}")
            loaded = {}
        return ConfigLoader.merge(DEFAULT_CONFIG, loaded)

    @staticmethod
    def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """按节合并配置，override 中的值优先"""
        merged = copy.deepcopy(base)
        for section, values in override.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        return merged

    @staticmethod
    def save_config(config: Dict[str, Any], config_path: str) -> bool:
        """
        保存配置到YAML文件

        Args:
            config: 配置字典
            config_path: 配置文件路径

        Returns:
            bool: 保存是否成功
        """
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(config_file, 'w', encoding='utf-8') as f:
                yaml.dump(config, f, default_flow_style=False,
                          allow_unicode=True, sort_keys=False)

            logger.info(f"成功保存配置文件: {config_path}")
            return True

        except (OSError, yaml.YAMLError) as e:
            logger.error(f"保存配置文件失败: {e}")
            return False

    @staticmethod
    def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = config.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationException(f"配置节必须是映射: {name}", config_key=name)
        return section

    @staticmethod
    def get_game_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取游戏配置"""
        game_config = ConfigLoader._section(config, 'game')
        limit = game_config.get('history_limit', 50)
        if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
            raise ConfigurationException(f"history_limit 必须是正整数: {limit!r}",
                                         config_key='game.history_limit')
        return game_config

    @staticmethod
    def get_opponent_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取电脑对手配置"""
        return ConfigLoader._section(config, 'opponent')

    @staticmethod
    def get_storage_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取存储配置"""
        return ConfigLoader._section(config, 'storage')

    @staticmethod
    def get_server_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取HTTP服务配置"""
        server_config = ConfigLoader._section(config, 'server')
        port = server_config.get('port', 3001)
        if not isinstance(port, int) or isinstance(port, bool) or not 0 < port < 65536:
            raise ConfigurationException(f"端口号不合法: {port!r}", config_key='server.port')
        return server_config

    @staticmethod
    def get_logging_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """获取日志配置"""
        return ConfigLoader._section(config, 'logging')
