"""帮助命令"""

from typing import List

import discord

from angelabot.core import BotContext, SlashSchema, slash_command
from angelabot.ui import EmbedBuilder


def _help_embed(guild: discord.Guild, context: BotContext) -> discord.Embed:
    prefix = context.prefixes.resolve(guild.id if guild else None)
    return EmbedBuilder.create_help_embed(context.registry.commands.values(), prefix)


async def help_slash(interaction: discord.Interaction, context: BotContext) -> None:
    await interaction.response.send_message(embed=_help_embed(interaction.guild, context), ephemeral=True)


async def help_prefix(message: discord.Message, args: List[str], context: BotContext) -> None:
    await message.reply(embed=_help_embed(message.guild, context))


command = slash_command(
    SlashSchema(name="help", description="List the available commands"),
    slash=help_slash,
    prefix=help_prefix
)
