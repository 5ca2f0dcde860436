"""Logging setup for AngelaBot."""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
HANDLER_PREFIX = 'angelabot.'


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_size: int = 10485760,
    backup_count: int = 5
) -> logging.Logger:
    """
    配置 angelabot 日志记录器。

    始终输出到控制台；如果提供了 log_file，则额外写入按大小轮转的日志文件。

    Args:
        log_level: 日志级别名称
        log_file: 日志文件路径（可选）
        max_size: 单个日志文件的最大字节数
        backup_count: 保留的备份文件数量

    Returns:
        angelabot 根日志记录器
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # 处理器挂在根日志记录器上，discord.py 和 wavelink 的记录也使用同一格式输出
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        if (handler.get_name() or "").startswith(HANDLER_PREFIX):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(f"{HANDLER_PREFIX}console")
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_size,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.set_name(f"{HANDLER_PREFIX}file")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger("angelabot")
    logger.setLevel(level)

    # discord.py 和 wavelink 的调试输出过于冗长
    logging.getLogger("discord").setLevel(max(level, logging.INFO))
    logging.getLogger("wavelink").setLevel(max(level, logging.INFO))

    return logger
