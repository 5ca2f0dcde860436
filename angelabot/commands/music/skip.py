"""跳过当前歌曲"""

from typing import List

import discord

from angelabot.core import BotContext, SlashSchema, slash_command

NOTHING_PLAYING_MESSAGE = "❌ Nothing is playing right now."


async def _skip(guild: discord.Guild, context: BotContext) -> str:
    skipped = await context.audio.skip(guild)
    if skipped is None:
        return NOTHING_PLAYING_MESSAGE
    return f"⏭️ Skipped **{skipped.title}**"


async def skip_slash(interaction: discord.Interaction, context: BotContext) -> None:
    await interaction.response.send_message(await _skip(interaction.guild, context))


async def skip_prefix(message: discord.Message, args: List[str], context: BotContext) -> None:
    await message.reply(content=await _skip(message.guild, context))


command = slash_command(
    SlashSchema(name="skip", description="Skip the current song"),
    slash=skip_slash,
    prefix=skip_prefix
)
