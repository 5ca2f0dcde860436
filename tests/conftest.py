"""
测试配置

提供测试所需的fixtures：模拟的 Discord 对象、临时命令目录和运行上下文
"""

import logging
import textwrap
from pathlib import Path
from typing import Dict, Optional
from unittest.mock import AsyncMock, Mock

import discord
import pytest

from angelabot.core import BotContext, CommandRegistry, PrefixStore
from angelabot.utils.config_manager import ConfigManager


PREFIX_ONLY_SOURCE = '''
from angelabot.core import prefix_command


async def run(message, args, context):
    await message.reply(content="prefix:" + " ".join(args))


command = prefix_command(run)
'''

DUAL_SOURCE = '''
from angelabot.core import SlashOption, SlashSchema, slash_command


async def slash(interaction, context):
    await interaction.response.send_message("slash:{name}")


async def prefix(message, args, context):
    await message.reply(content="prefix:{name}")


command = slash_command(
    SlashSchema(
        name="{name}",
        description="{name} command",
        options=(SlashOption("query", "search terms"),)
    ),
    slash=slash,
    prefix=prefix
)
'''

SLASH_ONLY_HANDLER_SOURCE = '''
from angelabot.core import SlashSchema, slash_command


async def slash(interaction, context):
    await interaction.response.send_message("slash:{name}")


command = slash_command(SlashSchema(name="{name}", description="{name} command"), slash=slash)
'''

INVALID_SOURCE = '''
async def execute(message, args):
    pass
'''

BROKEN_SOURCE = '''
raise RuntimeError("module failed to import")
'''


def write_command_tree(root: Path, files: Dict[str, str]) -> Path:
    """
    在临时目录中创建命令目录

    Args:
        root: 根目录
        files: ``{"category/name.py": source}``

    Returns:
        命令根目录
    """
    for relative, source in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
    return root


@pytest.fixture
def command_root(tmp_path):
    """创建命令根目录"""
    root = tmp_path / "commands"
    root.mkdir()
    return root


@pytest.fixture
def config(tmp_path):
    """使用默认值的配置管理器（配置文件不存在）"""
    return ConfigManager(str(tmp_path / "missing.yaml"))


@pytest.fixture
def mock_audio():
    """创建模拟音频引擎"""
    audio = Mock()
    audio.play = AsyncMock(return_value=Mock(name="queue"))
    audio.skip = AsyncMock(return_value=None)
    audio.stop = AsyncMock(return_value=True)
    audio.pause = AsyncMock(return_value=True)
    audio.resume = AsyncMock(return_value=True)
    audio.get_player = Mock(return_value=None)
    audio.get_queue = Mock(return_value=(None, None))
    return audio


@pytest.fixture
def context(config, mock_audio):
    """创建运行上下文"""
    client = Mock(spec=discord.Client)
    client.latency = 0.042
    return BotContext(
        config=config,
        client=client,
        prefixes=PrefixStore(),
        registry=CommandRegistry(),
        audio=mock_audio
    )


@pytest.fixture
def make_message():
    """创建模拟Discord消息的工厂"""
    def factory(content: str, guild_id: Optional[int] = 12345, bot: bool = False, voice_channel=None):
        message = Mock(spec=discord.Message)
        message.content = content
        if guild_id is None:
            message.guild = None
        else:
            message.guild = Mock()
            message.guild.id = guild_id
            message.guild.name = "Test Guild"
        message.author = Mock()
        message.author.id = 67890
        message.author.bot = bot
        message.author.display_name = "TestUser"
        message.author.voice = Mock(channel=voice_channel) if voice_channel else None
        message.channel = Mock()
        message.reply = AsyncMock()
        return message
    return factory


@pytest.fixture
def make_interaction():
    """创建模拟Discord交互对象的工厂"""
    def factory(name: str, options: Optional[Dict[str, str]] = None, voice_channel=None,
                interaction_type=discord.InteractionType.application_command):
        interaction = Mock(spec=discord.Interaction)
        interaction.type = interaction_type
        interaction.data = {
            "name": name,
            "options": [
                {"name": key, "type": 3, "value": value}
                for key, value in (options or {}).items()
            ]
        }
        interaction.guild = Mock()
        interaction.guild.id = 12345
        interaction.guild.name = "Test Guild"
        interaction.user = Mock()
        interaction.user.id = 67890
        interaction.user.display_name = "TestUser"
        interaction.user.voice = Mock(channel=voice_channel) if voice_channel else None
        interaction.channel = Mock()
        interaction.response = Mock()
        interaction.response.is_done = Mock(return_value=False)
        interaction.response.send_message = AsyncMock()
        interaction.response.defer = AsyncMock()
        interaction.followup = Mock()
        interaction.followup.send = AsyncMock()
        return interaction
    return factory


@pytest.fixture(autouse=True)
def setup_logging():
    """设置测试日志"""
    # 禁用日志输出以保持测试输出清洁
    logging.getLogger("angelabot").setLevel(logging.CRITICAL)
    yield
    logging.getLogger("angelabot").setLevel(logging.NOTSET)
