"""AngelaBot 音乐机器人主实现"""
import logging
from typing import Optional

import discord

from angelabot.audio.engine import AudioEngine
from angelabot.core.context import BotContext
from angelabot.core.dispatcher import InteractionDispatcher, MessageDispatcher
from angelabot.core.errors import LoginError
from angelabot.core.prefix_store import PrefixStore
from angelabot.core.publisher import RegistrationPublisher
from angelabot.core.registry import CommandRegistry, LoadReport
from angelabot.utils.config_manager import ConfigManager


class AngelaBot:
    """
    AngelaBot 音乐机器人主实现类。

    - 前缀命令与 Slash 命令双通道分发
    - 启动时从命令目录动态加载命令
    - 服务器自定义前缀
    - 通过 Lavalink 播放音乐
    """

    def __init__(self, config: ConfigManager):
        """
        Initialize the Discord client and the command pipeline.

        Args:
            config: Configuration manager
        """
        self.logger = logging.getLogger("angelabot.bot")
        self.config = config

        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        intents.members = True
        intents.message_content = True
        intents.voice_states = True

        self.client = discord.Client(intents=intents)

        self.prefixes = PrefixStore(config.get_default_prefix())
        self.registry = CommandRegistry()
        self.audio = AudioEngine(self.client, config)
        self.publisher = RegistrationPublisher(self.client)

        self.context = BotContext(
            config=config,
            client=self.client,
            prefixes=self.prefixes,
            registry=self.registry,
            audio=self.audio
        )

        self.message_dispatcher = MessageDispatcher(self.context)
        self.interaction_dispatcher = InteractionDispatcher(self.context)

        self._initialized = False
        self._setup_event_handlers()

        self.logger.info("🎵 音乐机器人初始化成功")

    def _setup_event_handlers(self) -> None:
        """设置 Discord 事件处理器。"""
        @self.client.event
        async def on_ready():
            await self._on_ready()

        @self.client.event
        async def on_message(message: discord.Message):
            await self.message_dispatcher.dispatch(message)

        @self.client.event
        async def on_interaction(interaction: discord.Interaction):
            await self.interaction_dispatcher.dispatch(interaction)

        @self.client.event
        async def on_wavelink_track_start(payload):
            await self.audio.on_track_start(payload)

        self.logger.debug("事件处理器设置完成")

    async def _on_ready(self) -> None:
        """机器人就绪时的初始化任务，重连触发的就绪事件不会重复加载"""
        self.logger.info(f"🤖 机器人已就绪: {self.client.user}")

        if self._initialized:
            return
        self._initialized = True

        await self.initialize()

    async def initialize(self) -> LoadReport:
        """
        加载前缀和命令，发布 Slash 命令，连接音频节点。

        Returns:
            命令目录扫描结果
        """
        self.prefixes.load(self.config.get_prefixes_path())

        report = self.registry.load_all(self.config.get_commands_directory())

        await self.publisher.publish(report.slash_payloads)
        await self.audio.connect()

        self.logger.info("✅ 机器人初始化完成")
        return report

    def run(self, token: Optional[str]) -> None:
        """
        运行 Discord 机器人（阻塞式）。

        Args:
            token: Discord 机器人令牌

        Raises:
            LoginError: 令牌缺失或登录被拒绝
        """
        if not token:
            raise LoginError("Discord 令牌为空")

        try:
            self.client.run(token, log_handler=None)
        except discord.LoginFailure as e:
            self.logger.error(f"❌ 登录失败: {e}")
            raise LoginError(f"登录失败: {e}") from e

    @property
    def user(self) -> Optional[discord.ClientUser]:
        """获取机器人用户。"""
        return self.client.user
