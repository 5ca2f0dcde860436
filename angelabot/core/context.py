"""机器人运行上下文"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import discord

from .prefix_store import PrefixStore
from .registry import CommandRegistry
from angelabot.utils.config_manager import ConfigManager

if TYPE_CHECKING:
    from angelabot.audio.engine import AudioEngine


@dataclass
class BotContext:
    """
    进程级共享上下文

    启动时构建一次，作为参数传入每个命令处理器，代替全局变量。
    """
    config: ConfigManager
    client: discord.Client
    prefixes: PrefixStore
    registry: CommandRegistry
    audio: "AudioEngine"
