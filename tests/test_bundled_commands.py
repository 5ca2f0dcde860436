"""内置命令测试"""

from pathlib import Path
from unittest.mock import Mock

import discord
import pytest

from angelabot.core import InteractionDispatcher, MessageDispatcher

BUNDLED_COMMANDS = Path(__file__).resolve().parents[1] / "angelabot" / "commands"


@pytest.fixture
def loaded(context):
    """加载内置命令的上下文"""
    context.registry.load_all(BUNDLED_COMMANDS)
    return context


class TestGeneralCommands:
    """测试通用命令"""

    @pytest.mark.asyncio
    async def test_ping_prefix(self, loaded, make_message):
        """前缀 ping 回复延迟"""
        message = make_message("angela^ping")

        await MessageDispatcher(loaded).dispatch(message)

        message.reply.assert_awaited_once_with(content="🏓 Pong! `42ms`")

    @pytest.mark.asyncio
    async def test_ping_slash(self, loaded, make_interaction):
        """Slash ping 回复延迟"""
        interaction = make_interaction("ping")

        await InteractionDispatcher(loaded).dispatch(interaction)

        interaction.response.send_message.assert_awaited_once_with("🏓 Pong! `42ms`")

    @pytest.mark.asyncio
    async def test_ping_before_first_heartbeat(self, loaded, make_interaction):
        """延迟尚未测量时不报错"""
        loaded.client.latency = float("nan")
        interaction = make_interaction("ping")

        await InteractionDispatcher(loaded).dispatch(interaction)

        interaction.response.send_message.assert_awaited_once_with(
            "🏓 Pong! Latency is not available yet."
        )

    @pytest.mark.asyncio
    async def test_prefix_command_shows_prefix(self, loaded, make_message):
        """prefix 命令显示当前前缀"""
        message = make_message("angela^prefix")

        await MessageDispatcher(loaded).dispatch(message)

        message.reply.assert_awaited_once_with(content="🔧 The prefix for this server is `angela^`")

    @pytest.mark.asyncio
    async def test_help_lists_commands(self, loaded, make_interaction):
        """help 命令列出Slash命令和前缀命令"""
        interaction = make_interaction("help")

        await InteractionDispatcher(loaded).dispatch(interaction)

        kwargs = interaction.response.send_message.await_args.kwargs
        assert kwargs["ephemeral"] is True
        embed = kwargs["embed"]
        assert isinstance(embed, discord.Embed)
        fields = {field.name: field.value for field in embed.fields}
        assert "`/play` - Play a song from YouTube, SoundCloud or Spotify" in fields["🚀 Slash commands"]
        assert "`angela^prefix`" in fields["🧃 Prefix commands"]


class TestMusicCommands:
    """测试音乐命令"""

    @pytest.mark.asyncio
    async def test_play_prefix_joins_query(self, loaded, make_message):
        """前缀点歌把参数拼接成搜索词"""
        voice_channel = Mock()
        message = make_message("angela^play lofi  beats", voice_channel=voice_channel)

        await MessageDispatcher(loaded).dispatch(message)

        loaded.audio.play.assert_awaited_once_with(
            voice_channel, "lofi beats", text_channel=message.channel, member=message.author
        )
        message.reply.assert_awaited_once_with(content="🔄 Searching for your song: **lofi beats**")

    @pytest.mark.asyncio
    async def test_play_prefix_requires_voice_channel(self, loaded, make_message):
        """前缀点歌需要在语音频道中"""
        message = make_message("angela^play lofi")

        await MessageDispatcher(loaded).dispatch(message)

        message.reply.assert_awaited_once_with(content="❌ You need to join a voice channel first!")
        loaded.audio.play.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_play_prefix_requires_query(self, loaded, make_message):
        """前缀点歌需要搜索词"""
        message = make_message("angela^play", voice_channel=Mock())

        await MessageDispatcher(loaded).dispatch(message)

        message.reply.assert_awaited_once_with(content="❌ Please provide a song name or URL to play.")

    @pytest.mark.asyncio
    async def test_skip_nothing_playing(self, loaded, make_interaction):
        """没有播放时跳过失败"""
        interaction = make_interaction("skip")

        await InteractionDispatcher(loaded).dispatch(interaction)

        interaction.response.send_message.assert_awaited_once_with("❌ Nothing is playing right now.")

    @pytest.mark.asyncio
    async def test_skip_current_song(self, loaded, make_message):
        """跳过当前歌曲"""
        loaded.audio.skip.return_value = Mock(title="Song A")
        message = make_message("angela^skip")

        await MessageDispatcher(loaded).dispatch(message)

        loaded.audio.skip.assert_awaited_once_with(message.guild)
        message.reply.assert_awaited_once_with(content="⏭️ Skipped **Song A**")

    @pytest.mark.asyncio
    async def test_stop(self, loaded, make_interaction):
        """停止播放"""
        interaction = make_interaction("stop")

        await InteractionDispatcher(loaded).dispatch(interaction)

        loaded.audio.stop.assert_awaited_once_with(interaction.guild)
        interaction.response.send_message.assert_awaited_once_with(
            "⏹️ Stopped playback and cleared the queue."
        )

    @pytest.mark.asyncio
    async def test_pause_and_resume(self, loaded, make_message):
        """暂停与恢复"""
        pause = make_message("angela^pause")
        resume = make_message("angela^resume")
        loaded.audio.resume.return_value = False

        await MessageDispatcher(loaded).dispatch(pause)
        await MessageDispatcher(loaded).dispatch(resume)

        pause.reply.assert_awaited_once_with(content="⏸️ Paused.")
        resume.reply.assert_awaited_once_with(content="❌ Playback is not paused.")

    @pytest.mark.asyncio
    async def test_queue_empty(self, loaded, make_interaction):
        """没有播放器时显示空队列"""
        interaction = make_interaction("queue")

        await InteractionDispatcher(loaded).dispatch(interaction)

        embed = interaction.response.send_message.await_args.kwargs["embed"]
        assert embed.description == "The queue is empty."

    @pytest.mark.asyncio
    async def test_queue_shows_current_track(self, loaded, make_message):
        """队列命令通过音频引擎读取当前歌曲和队列"""
        current = Mock(title="Song A", author="Artist", length=200_000)
        upcoming = Mock(title="Song B", author="Artist", length=60_000)
        loaded.audio.get_queue.return_value = (current, [upcoming])
        message = make_message("angela^queue")

        await MessageDispatcher(loaded).dispatch(message)

        loaded.audio.get_queue.assert_called_once_with(message.guild)
        embed = message.reply.await_args.kwargs["embed"]
        assert "**Song A**" in embed.fields[0].value
        assert embed.fields[1].name == "📋 Up next (1)"
