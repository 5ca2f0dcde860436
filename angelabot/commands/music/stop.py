"""停止播放并断开语音连接"""

from typing import List

import discord

from angelabot.core import BotContext, SlashSchema, slash_command


async def _stop(guild: discord.Guild, context: BotContext) -> str:
    if await context.audio.stop(guild):
        return "⏹️ Stopped playback and cleared the queue."
    return "❌ I'm not connected to a voice channel."


async def stop_slash(interaction: discord.Interaction, context: BotContext) -> None:
    await interaction.response.send_message(await _stop(interaction.guild, context))


async def stop_prefix(message: discord.Message, args: List[str], context: BotContext) -> None:
    await message.reply(content=await _stop(message.guild, context))


command = slash_command(
    SlashSchema(name="stop", description="Stop playback, clear the queue and leave the voice channel"),
    slash=stop_slash,
    prefix=stop_prefix
)
