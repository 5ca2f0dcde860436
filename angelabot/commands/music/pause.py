"""暂停播放"""

from typing import List

import discord

from angelabot.core import BotContext, SlashSchema, slash_command


async def _pause(guild: discord.Guild, context: BotContext) -> str:
    if await context.audio.pause(guild):
        return "⏸️ Paused."
    return "❌ Nothing is playing right now."


async def pause_slash(interaction: discord.Interaction, context: BotContext) -> None:
    await interaction.response.send_message(await _pause(interaction.guild, context))


async def pause_prefix(message: discord.Message, args: List[str], context: BotContext) -> None:
    await message.reply(content=await _pause(message.guild, context))


command = slash_command(
    SlashSchema(name="pause", description="Pause the current song"),
    slash=pause_slash,
    prefix=pause_prefix
)
