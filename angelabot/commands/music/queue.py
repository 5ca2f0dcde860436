"""显示播放队列"""

from typing import List

import discord

from angelabot.core import BotContext, SlashSchema, slash_command
from angelabot.ui import EmbedBuilder


def _queue_embed(guild: discord.Guild, context: BotContext) -> discord.Embed:
    current, queue = context.audio.get_queue(guild)
    return EmbedBuilder.create_queue_embed(current, queue)


async def queue_slash(interaction: discord.Interaction, context: BotContext) -> None:
    await interaction.response.send_message(embed=_queue_embed(interaction.guild, context))


async def queue_prefix(message: discord.Message, args: List[str], context: BotContext) -> None:
    await message.reply(embed=_queue_embed(message.guild, context))


command = slash_command(
    SlashSchema(name="queue", description="Show the current music queue"),
    slash=queue_slash,
    prefix=queue_prefix
)
