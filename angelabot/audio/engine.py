"""
音频引擎适配器

把外部的 wavelink（Lavalink 客户端）包装成命令层使用的简单接口。
语音连接、搜索和播放都由 Lavalink 节点及其来源插件完成。
"""

import logging
from typing import Dict, Optional, Tuple, cast

import discord
import wavelink

from angelabot.utils.config_manager import ConfigManager


class AudioEngine:
    """
    音频引擎

    每个服务器对应一个 wavelink.Player，播放队列由播放器持有。
    """

    def __init__(self, client: discord.Client, config: ConfigManager):
        """
        初始化音频引擎

        Args:
            client: Discord 客户端
            config: 配置管理器
        """
        self.client = client
        self.config = config
        self.logger = logging.getLogger("angelabot.audio")

        # 服务器ID -> 发送播放通知的文字频道
        self._home_channels: Dict[int, discord.abc.Messageable] = {}

        self.logger.debug("音频引擎适配器初始化完成")

    async def connect(self) -> bool:
        """
        连接 Lavalink 节点

        Returns:
            连接成功返回True
        """
        if not self.config.is_music_enabled():
            self.logger.info("音乐功能已禁用，跳过 Lavalink 连接")
            return False

        try:
            node = wavelink.Node(
                uri=self.config.get_lavalink_uri(),
                password=self.config.get_lavalink_password()
            )
            await wavelink.Pool.connect(nodes=[node], client=self.client)
            self.logger.info(f"✅ 已连接 Lavalink 节点: {self.config.get_lavalink_uri()}")
            return True
        except Exception as e:
            self.logger.error(f"❌ 连接 Lavalink 节点失败: {e}", exc_info=True)
            return False

    def get_player(self, guild: Optional[discord.Guild]) -> Optional[wavelink.Player]:
        """
        获取服务器当前的播放器

        Args:
            guild: Discord 服务器

        Returns:
            播放器或None
        """
        if guild is None or not isinstance(guild.voice_client, wavelink.Player):
            return None
        return cast(wavelink.Player, guild.voice_client)

    async def play(
        self,
        voice_channel: discord.VoiceChannel,
        query: str,
        text_channel: Optional[discord.abc.Messageable] = None,
        member: Optional[discord.Member] = None
    ) -> Optional[wavelink.Queue]:
        """
        搜索并加入队列，空闲时立即开始播放

        Args:
            voice_channel: 目标语音频道
            query: 歌曲名称或链接
            text_channel: 发送播放通知的文字频道
            member: 点歌的成员

        Returns:
            播放器队列；没有找到可播放的结果时返回None
        """
        guild = voice_channel.guild
        player = self.get_player(guild)
        if player is None:
            player = await voice_channel.connect(cls=wavelink.Player, self_deaf=True)
            player.autoplay = wavelink.AutoPlayMode.partial
            await player.set_volume(self.config.get_music_volume())
            self.logger.debug(f"已连接语音频道: {voice_channel.name}")

        if text_channel is not None:
            self._home_channels[guild.id] = text_channel

        tracks = await wavelink.Playable.search(query, source=self.config.get_music_search_source())
        if not tracks:
            self.logger.info(f"没有找到可播放的结果: {query}")
            return None

        if isinstance(tracks, wavelink.Playlist):
            added = await player.queue.put_wait(tracks)
            self.logger.info(f"已添加播放列表 {tracks.name} ({added} 首) - 点歌人: {member}")
        else:
            track = tracks[0]
            await player.queue.put_wait(track)
            self.logger.info(f"已添加歌曲 {track.title} - 点歌人: {member}")

        if not player.playing:
            await player.play(player.queue.get())

        return player.queue

    async def skip(self, guild: discord.Guild) -> Optional[wavelink.Playable]:
        """
        跳过当前歌曲

        Returns:
            被跳过的歌曲，没有正在播放的歌曲时返回None
        """
        player = self.get_player(guild)
        if player is None or player.current is None:
            return None
        return await player.skip(force=True)

    async def stop(self, guild: discord.Guild) -> bool:
        """
        清空队列并断开语音连接

        Returns:
            如果存在播放器返回True
        """
        player = self.get_player(guild)
        if player is None:
            return False

        player.queue.clear()
        await player.disconnect()
        self._home_channels.pop(guild.id, None)
        return True

    async def pause(self, guild: discord.Guild) -> bool:
        """暂停播放"""
        player = self.get_player(guild)
        if player is None or player.current is None or player.paused:
            return False
        await player.pause(True)
        return True

    async def resume(self, guild: discord.Guild) -> bool:
        """恢复播放"""
        player = self.get_player(guild)
        if player is None or not player.paused:
            return False
        await player.pause(False)
        return True

    def get_queue(
        self, guild: discord.Guild
    ) -> Tuple[Optional[wavelink.Playable], Optional[wavelink.Queue]]:
        """
        获取服务器当前播放的歌曲和待播队列

        Returns:
            (当前歌曲, 队列)，没有播放器时为 (None, None)
        """
        player = self.get_player(guild)
        if player is None:
            return None, None
        return player.current, player.queue

    async def on_track_start(self, payload: wavelink.TrackStartEventPayload) -> None:
        """
        新歌曲开始播放时通知点歌频道

        Args:
            payload: wavelink 事件数据
        """
        if not self.config.should_announce_new_songs() or payload.player is None:
            return

        channel = self._home_channels.get(payload.player.guild.id)
        if channel is None:
            return

        try:
            await channel.send(f"🎶 Now playing: **{payload.track.title}**")
        except discord.HTTPException as e:
            self.logger.warning(f"发送播放通知失败: {e}")
