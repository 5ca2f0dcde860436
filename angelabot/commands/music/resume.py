"""恢复播放"""

from typing import List

import discord

from angelabot.core import BotContext, SlashSchema, slash_command


async def _resume(guild: discord.Guild, context: BotContext) -> str:
    if await context.audio.resume(guild):
        return "▶️ Resumed."
    return "❌ Playback is not paused."


async def resume_slash(interaction: discord.Interaction, context: BotContext) -> None:
    await interaction.response.send_message(await _resume(interaction.guild, context))


async def resume_prefix(message: discord.Message, args: List[str], context: BotContext) -> None:
    await message.reply(content=await _resume(message.guild, context))


command = slash_command(
    SlashSchema(name="resume", description="Resume a paused song"),
    slash=resume_slash,
    prefix=resume_prefix
)
