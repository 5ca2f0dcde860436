"""
命令日志

为前缀命令和Slash命令提供结构化日志记录：
- 命令开始 / 成功 / 失败
- 执行耗时
"""

import logging
from typing import Any, Dict, Optional, Union

import discord

Invocation = Union[discord.Message, discord.Interaction]


class CommandLogger:
    """
    命令专用日志记录器

    每条记录都附带 ``context`` 额外字段，便于结构化日志处理器使用。
    """

    def __init__(self, name: str):
        """
        初始化日志记录器

        Args:
            name: 日志记录器名称
        """
        self.logger = logging.getLogger(f"angelabot.{name}")

    @staticmethod
    def _context(invocation: Invocation, command_name: str, **kwargs) -> Dict[str, Any]:
        user = invocation.author if isinstance(invocation, discord.Message) else invocation.user
        guild = invocation.guild
        return {
            'user_id': getattr(user, 'id', None),
            'user_name': getattr(user, 'display_name', None),
            'guild_id': guild.id if guild else None,
            'command': command_name,
            **kwargs
        }

    @staticmethod
    def _describe(invocation: Invocation) -> str:
        user = invocation.author if isinstance(invocation, discord.Message) else invocation.user
        guild = invocation.guild
        return f"用户: {getattr(user, 'display_name', user)} | 服务器: {guild.name if guild else 'DM'}"

    def log_command_start(self, invocation: Invocation, command_name: str, **kwargs) -> None:
        """
        记录命令开始执行

        Args:
            invocation: 触发命令的消息或交互
            command_name: 命令名称
            **kwargs: 额外的上下文信息
        """
        self.logger.info(
            f"命令开始 - {command_name} | {self._describe(invocation)}",
            extra={'context': self._context(invocation, command_name, **kwargs)}
        )

    def log_command_success(
        self,
        invocation: Invocation,
        command_name: str,
        execution_time: Optional[float] = None,
        **kwargs
    ) -> None:
        """
        记录命令成功执行

        Args:
            invocation: 触发命令的消息或交互
            command_name: 命令名称
            execution_time: 执行时间（秒）
            **kwargs: 额外的上下文信息
        """
        time_info = f" | 耗时: {execution_time:.2f}s" if execution_time else ""
        context = self._context(
            invocation, command_name, execution_time=execution_time, status='success', **kwargs
        )

        self.logger.info(f"命令成功 - {command_name}{time_info}", extra={'context': context})

    def log_command_error(
        self,
        invocation: Invocation,
        command_name: str,
        error: BaseException,
        execution_time: Optional[float] = None,
        **kwargs
    ) -> None:
        """
        记录命令执行错误

        Args:
            invocation: 触发命令的消息或交互
            command_name: 命令名称
            error: 异常对象
            execution_time: 执行时间（秒）
            **kwargs: 额外的上下文信息
        """
        time_info = f" | 耗时: {execution_time:.2f}s" if execution_time else ""
        context = self._context(
            invocation,
            command_name,
            error_type=type(error).__name__,
            error_message=str(error),
            execution_time=execution_time,
            status='error',
            **kwargs
        )

        self.logger.error(
            f"❌ 命令错误 - {command_name} | {self._describe(invocation)} | "
            f"错误: {type(error).__name__}: {error}{time_info}",
            extra={'context': context},
            exc_info=error
        )
