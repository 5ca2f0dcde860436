"""显示当前服务器的命令前缀"""

from typing import List

import discord

from angelabot.core import BotContext, prefix_command


async def show_prefix(message: discord.Message, args: List[str], context: BotContext) -> None:
    current = context.prefixes.resolve(message.guild.id)
    await message.reply(content=f"🔧 The prefix for this server is `{current}`")


command = prefix_command(show_prefix)
