"""延迟检测命令"""

import math
from typing import List

import discord

from angelabot.core import BotContext, SlashSchema, slash_command


def _pong(context: BotContext) -> str:
    latency = context.client.latency
    # 第一次心跳之前 discord.py 报告的延迟是 nan
    if not math.isfinite(latency):
        return "🏓 Pong! Latency is not available yet."
    return f"🏓 Pong! `{round(latency * 1000)}ms`"


async def ping_slash(interaction: discord.Interaction, context: BotContext) -> None:
    await interaction.response.send_message(_pong(context))


async def ping_prefix(message: discord.Message, args: List[str], context: BotContext) -> None:
    await message.reply(content=_pong(context))


command = slash_command(
    SlashSchema(name="ping", description="Check the bot's latency"),
    slash=ping_slash,
    prefix=ping_prefix
)
