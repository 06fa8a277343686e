"""
日志工具模块
Logger Utility Module
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any

ROOT_LOGGER_NAME = "RPS"
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_log_level(level_str: str) -> int:
    """
    从字符串获取日志级别

    Args:
        level_str: 日志级别字符串（DEBUG, INFO, WARNING, ERROR, CRITICAL）

    Returns:
        int: 日志级别，无法识别时返回 INFO
    """
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    return level_map.get(str(level_str).upper(), logging.INFO)


def _file_handler(log_file: str, level: int, formatter: logging.Formatter) -> logging.FileHandler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    return file_handler


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    设置日志记录器

    各模块使用 "RPS.<组件名>" 形式的名称，消息只由本记录器的处理器输出，
    不向父记录器传播。

    Args:
        name: 日志记录器名称
        log_file: 日志文件路径（可选）
        level: 日志级别
        format_string: 日志格式字符串（可选）

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # 避免重复添加处理器
    if logger.handlers:
        return logger

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        logger.addHandler(_file_handler(log_file, level, formatter))

    return logger


def setup_logger_from_config(config: Dict[str, Any], name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    从配置字典设置日志记录器，并把级别和日志文件应用到所有已创建的 RPS.* 记录器

    Args:
        config: 配置字典（包含 level 和 file 键）
        name: 日志记录器名称

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    level = get_log_level(config.get('level', 'INFO'))
    log_file = config.get('file')

    logger = setup_logger(name=name, log_file=log_file, level=level)

    # 模块级记录器在导入时已经创建，这里统一调整
    for logger_name in list(logging.root.manager.loggerDict):
        if logger_name != ROOT_LOGGER_NAME and not logger_name.startswith(ROOT_LOGGER_NAME + "."):
            continue
        existing = logging.getLogger(logger_name)
        existing.setLevel(level)
        for handler in existing.handlers:
            handler.setLevel(level)
        if log_file and not any(isinstance(h, logging.FileHandler) for h in existing.handlers):
            existing.addHandler(_file_handler(log_file, level, logging.Formatter(DEFAULT_FORMAT)))

    return logger


# 默认日志记录器
default_logger = setup_logger()
