"""
命令分发器

把收到的消息和交互路由到已加载的命令处理器：
- MessageDispatcher：前缀命令
- InteractionDispatcher：Slash命令（支持延迟响应）

任何处理器异常都在分发边界被捕获、记录，并以通用错误回复用户。
"""

import time
from typing import List, Optional, Tuple

import discord

from .context import BotContext
from .logging_config import CommandLogger

NO_PREFIX_SUPPORT_MESSAGE = "❌ This command has no prefix support."
PREFIX_ERROR_MESSAGE = "❌ An error occurred executing the command."
SLASH_ERROR_MESSAGE = "❌ Failed to process your command."


def parse_prefixed(content: str, prefix: str) -> Optional[Tuple[str, List[str]]]:
    """
    解析带前缀的消息内容

    Args:
        content: 消息文本
        prefix: 有效前缀

    Returns:
        (小写命令名, 参数列表)，不是命令时返回None
    """
    if not content.startswith(prefix):
        return None

    tokens = content[len(prefix):].split()
    if not tokens:
        return None

    return tokens[0].lower(), tokens[1:]


class MessageDispatcher:
    """前缀命令分发器"""

    def __init__(self, context: BotContext):
        """
        初始化分发器

        Args:
            context: 机器人运行上下文
        """
        self.context = context
        self.command_logger = CommandLogger("dispatcher.message")
        self.logger = self.command_logger.logger

    async def dispatch(self, message: discord.Message) -> bool:
        """
        处理一条消息

        Args:
            message: Discord 消息

        Returns:
            如果消息匹配到已加载的命令返回True
        """
        if message.guild is None or message.author.bot:
            return False

        prefix = self.context.prefixes.resolve(message.guild.id)
        parsed = parse_prefixed(message.content, prefix)
        if parsed is None:
            return False

        command_name, args = parsed
        definition = self.context.registry.get(command_name)
        if definition is None:
            return False

        start_time = time.perf_counter()
        try:
            if definition.has_prefix_support:
                self.command_logger.log_command_start(message, command_name, args=args)
                await definition.prefix(message, args, self.context)
                self.command_logger.log_command_success(
                    message, command_name, time.perf_counter() - start_time
                )
            else:
                await message.reply(content=NO_PREFIX_SUPPORT_MESSAGE)

        except Exception as e:
            self.command_logger.log_command_error(
                message, command_name, e, time.perf_counter() - start_time
            )
            await self._send_error_reply(message)

        return True

    async def _send_error_reply(self, message: discord.Message) -> None:
        try:
            await message.reply(content=PREFIX_ERROR_MESSAGE)
        except Exception as e:
            self.logger.error(f"发送错误回复失败: {e}")


class InteractionDispatcher:
    """Slash命令分发器"""

    def __init__(self, context: BotContext):
        """
        初始化分发器

        Args:
            context: 机器人运行上下文
        """
        self.context = context
        self.command_logger = CommandLogger("dispatcher.interaction")
        self.logger = self.command_logger.logger

    async def dispatch(self, interaction: discord.Interaction) -> bool:
        """
        处理一次交互

        流程：守卫检查 → （长耗时命令）延迟响应 → 执行Slash处理器。

        Args:
            interaction: Discord交互对象

        Returns:
            如果交互匹配到已加载的Slash命令返回True
        """
        if interaction.type != discord.InteractionType.application_command:
            return False

        command_name = (interaction.data or {}).get("name")
        definition = self.context.registry.get(command_name) if command_name else None
        if definition is None or definition.slash is None:
            return False

        start_time = time.perf_counter()
        try:
            self.command_logger.log_command_start(interaction, command_name)

            if definition.guard is not None:
                rejection = await definition.guard(interaction, self.context)
                if rejection:
                    await interaction.response.send_message(rejection)
                    return True

            if definition.long_running:
                await interaction.response.defer()

            await definition.slash(interaction, self.context)
            self.command_logger.log_command_success(
                interaction, command_name, time.perf_counter() - start_time
            )

        except Exception as e:
            self.command_logger.log_command_error(
                interaction, command_name, e, time.perf_counter() - start_time
            )
            await self._send_error_response(interaction)

        return True

    async def _send_error_response(self, interaction: discord.Interaction) -> None:
        try:
            if interaction.response.is_done():
                await interaction.followup.send(SLASH_ERROR_MESSAGE, ephemeral=True)
            else:
                await interaction.response.send_message(SLASH_ERROR_MESSAGE, ephemeral=True)
        except Exception as e:
            self.logger.error(f"发送错误响应失败: {e}")
