"""
机器人启动流程测试

验证就绪时的加载顺序、发布失败后的继续运行以及登录失败处理
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest
import yaml

from angelabot.bot import AngelaBot
from angelabot.core import CommandKind, LoginError
from angelabot.utils.config_manager import ConfigManager

from conftest import DUAL_SOURCE, PREFIX_ONLY_SOURCE, write_command_tree


@pytest.fixture
def bot_config(tmp_path):
    """指向临时命令目录和前缀文件的配置"""
    commands_root = write_command_tree(tmp_path / "commands", {
        "general/ping.py": PREFIX_ONLY_SOURCE,
        "music/play.py": DUAL_SOURCE.replace("{name}", "play")
    })
    prefixes = tmp_path / "prefixes.json"
    prefixes.write_text(json.dumps({"12345": "xx!"}), encoding="utf-8")

    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "commands": {"directory": str(commands_root)},
        "prefixes": {"path": str(prefixes)},
        "music": {"enabled": False}
    }), encoding="utf-8")
    return ConfigManager(str(path))


@pytest.fixture
def bot(bot_config):
    """使用模拟客户端的机器人"""
    with patch("angelabot.bot.discord.Client") as client_cls:
        client = MagicMock()
        client.application_id = 999
        client.http.bulk_upsert_global_commands = AsyncMock(return_value=[{"name": "play"}])
        client_cls.return_value = client
        yield AngelaBot(bot_config)


class TestAngelaBotStartup:
    """测试启动流程"""

    def test_intents(self, bot_config):
        """客户端启用消息内容、成员和语音状态意图"""
        with patch("angelabot.bot.discord.Client") as client_cls:
            AngelaBot(bot_config)

        intents = client_cls.call_args.kwargs["intents"]
        assert intents.message_content
        assert intents.members
        assert intents.voice_states
        assert intents.guild_messages

    @pytest.mark.asyncio
    async def test_ready_loads_prefixes_commands_and_publishes(self, bot):
        """就绪时加载前缀和命令并发布Slash目录"""
        report = await bot.initialize()

        assert bot.prefixes.resolve("12345") == "xx!"
        assert bot.registry.get("ping").kind is CommandKind.PREFIX_ONLY
        assert bot.registry.get("play").kind is CommandKind.DUAL
        assert report.valid_slash_count == 1
        bot.client.http.bulk_upsert_global_commands.assert_awaited_once_with(
            999, payload=report.slash_payloads
        )

    @pytest.mark.asyncio
    async def test_ready_only_initializes_once(self, bot):
        """重连触发的就绪事件不会重复加载"""
        await bot._on_ready()
        await bot._on_ready()

        assert bot.client.http.bulk_upsert_global_commands.await_count == 1

    @pytest.mark.asyncio
    async def test_invalid_module_does_not_block_startup(self, bot, bot_config):
        """无效的命令模块不影响发布和音频连接"""
        root = bot_config.get_commands_directory()
        write_command_tree(Path(root), {"general/broken.py": DUAL_SOURCE.replace("{name}", "")})
        bot.audio.connect = AsyncMock(return_value=False)

        report = await bot.initialize()

        assert report.invalid_count == 1
        assert "play" in bot.registry
        bot.client.http.bulk_upsert_global_commands.assert_awaited_once()
        bot.audio.connect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_registration_failure_keeps_serving(self, bot, make_message):
        """场景E：发布失败后仍然正常分发命令"""
        bot.client.http.bulk_upsert_global_commands.side_effect = RuntimeError("401 Unauthorized")

        await bot.initialize()

        assert bot.publisher.last_error is not None
        message = make_message("xx!ping hello")
        assert await bot.message_dispatcher.dispatch(message)
        message.reply.assert_awaited_once_with(content="prefix:hello")


class TestAngelaBotLogin:
    """测试登录处理"""

    def test_missing_token(self, bot):
        """令牌缺失是致命错误"""
        with pytest.raises(LoginError) as exc_info:
            bot.run(None)

        assert exc_info.value.fatal
        bot.client.run.assert_not_called()

    def test_login_failure(self, bot):
        """登录被拒绝时抛出 LoginError"""
        bot.client.run.side_effect = discord.LoginFailure("Improper token has been passed.")

        with pytest.raises(LoginError):
            bot.run("bad-token")

        bot.client.run.assert_called_once_with("bad-token", log_handler=None)
