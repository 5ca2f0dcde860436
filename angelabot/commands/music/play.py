"""
点歌命令

Slash形式需要先延迟响应：音频引擎的搜索和连接可能超过 Discord 的即时响应时限。
"""

import logging
from typing import List, Optional

import discord

from angelabot.core import BotContext, SlashOption, SlashSchema, get_option, slash_command

logger = logging.getLogger("angelabot.commands.play")

NOT_IN_VOICE_MESSAGE = "❌ You need to join a voice channel first!"
MISSING_QUERY_MESSAGE = "❌ Please provide a song name or URL to play."
NOT_FOUND_MESSAGE = "❌ Failed to find the song."
PLAY_ERROR_MESSAGE = "❌ An error occurred while trying to play your song."


def _voice_channel(member) -> Optional[discord.VoiceChannel]:
    voice = getattr(member, "voice", None)
    return voice.channel if voice else None


async def guard(interaction: discord.Interaction, context: BotContext) -> Optional[str]:
    """延迟响应前检查语音频道和搜索词"""
    if _voice_channel(interaction.user) is None:
        return NOT_IN_VOICE_MESSAGE
    if not get_option(interaction, "query"):
        return MISSING_QUERY_MESSAGE
    return None


async def play_slash(interaction: discord.Interaction, context: BotContext) -> None:
    query = get_option(interaction, "query")

    try:
        queue = await context.audio.play(
            _voice_channel(interaction.user),
            query,
            text_channel=interaction.channel,
            member=interaction.user
        )
    except Exception as e:
        logger.error(f"点歌失败: {e}", exc_info=True)
        await interaction.followup.send(PLAY_ERROR_MESSAGE)
        return

    if queue is not None:
        await interaction.followup.send(f"🔄 Searching for your song: **{query}**")
    else:
        await interaction.followup.send(NOT_FOUND_MESSAGE)


async def play_prefix(message: discord.Message, args: List[str], context: BotContext) -> None:
    voice_channel = _voice_channel(message.author)
    if voice_channel is None:
        await message.reply(content=NOT_IN_VOICE_MESSAGE)
        return

    query = " ".join(args)
    if not query:
        await message.reply(content=MISSING_QUERY_MESSAGE)
        return

    try:
        queue = await context.audio.play(
            voice_channel,
            query,
            text_channel=message.channel,
            member=message.author
        )
    except Exception as e:
        logger.error(f"点歌失败: {e}", exc_info=True)
        await message.reply(content=PLAY_ERROR_MESSAGE)
        return

    if queue is not None:
        await message.reply(content=f"🔄 Searching for your song: **{query}**")
    else:
        await message.reply(content=NOT_FOUND_MESSAGE)


command = slash_command(
    SlashSchema(
        name="play",
        description="Play a song from YouTube, SoundCloud or Spotify",
        options=(SlashOption("query", "Song name or URL", required=True),)
    ),
    slash=play_slash,
    prefix=play_prefix,
    long_running=True,
    guard=guard
)
