"""
嵌入消息构建器

提供统一的嵌入消息构建功能：
- 标准化的消息格式
- 主题色彩管理
- 队列与帮助信息模板
"""

from typing import Iterable, List, Optional

import discord
import wavelink

from angelabot.core.command import CommandDefinition, CommandKind

# Discord 嵌入字段值的长度上限
FIELD_VALUE_LIMIT = 1024


def format_duration(milliseconds: int) -> str:
    """把毫秒格式化为 ``m:ss`` 或 ``h:mm:ss``"""
    seconds = max(int(milliseconds // 1000), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def truncate(text: str, limit: int) -> str:
    """超过 limit 个字符时截断并以省略号结尾"""
    text = str(text)
    if len(text) <= limit:
        return text
    return text[:limit - 1].rstrip() + "…"


def join_limited(lines: List[str], separator: str, total: Optional[int] = None,
                 limit: int = FIELD_VALUE_LIMIT) -> str:
    """
    拼接字段内容，放不下的行以 "... and N more" 结尾

    Args:
        lines: 待拼接的行
        separator: 分隔符
        total: 条目总数（可大于 lines 的数量），默认等于 lines 的数量
        limit: 结果的最大长度

    Returns:
        不超过 limit 的字段值
    """
    total = len(lines) if total is None else total
    shown: List[str] = []
    for index, line in enumerate(lines):
        remaining = total - index - 1
        tail = f"{separator}... and {remaining} more" if remaining else ""
        candidate = separator.join(shown + [line])
        if len(candidate) + len(tail) > limit:
            break
        shown.append(line)

    value = separator.join(shown)
    omitted = total - len(shown)
    if omitted:
        tail = f"... and {omitted} more"
        value = f"{value}{separator}{tail}" if value else tail
    return value[:limit]


class EmbedBuilder:
    """
    嵌入消息构建器

    提供统一的嵌入消息构建方法，确保UI一致性
    """

    # 主题色彩
    COLORS = {
        'info': discord.Color.blue(),
        'music': discord.Color.purple()
    }

    # 队列中最多显示的歌曲数量
    MAX_QUEUE_ENTRIES = 10
    # 歌曲标题的最大显示长度
    MAX_TITLE_LENGTH = 60

    @classmethod
    def create_queue_embed(
        cls,
        current: Optional[wavelink.Playable],
        queue: Optional[wavelink.Queue]
    ) -> discord.Embed:
        """
        创建播放队列嵌入

        Args:
            current: 当前播放的歌曲
            queue: 播放队列

        Returns:
            Discord嵌入消息
        """
        embed = discord.Embed(title="🎵 Music Queue", color=cls.COLORS['music'])

        if current is None and not queue:
            embed.description = "The queue is empty."
            return embed

        if current is not None:
            embed.add_field(
                name="▶️ Now playing",
                value=truncate(
                    f"**{truncate(current.title, cls.MAX_TITLE_LENGTH)}** - "
                    f"{truncate(current.author, cls.MAX_TITLE_LENGTH)} `{format_duration(current.length)}`",
                    FIELD_VALUE_LIMIT
                ),
                inline=False
            )

        if queue:
            lines = [
                f"`{index}.` **{truncate(track.title, cls.MAX_TITLE_LENGTH)}** `{format_duration(track.length)}`"
                for index, track in enumerate(list(queue)[:cls.MAX_QUEUE_ENTRIES], start=1)
            ]
            embed.add_field(
                name=f"📋 Up next ({len(queue)})",
                value=join_limited(lines, "\n", total=len(queue)),
                inline=False
            )

        return embed

    @classmethod
    def create_help_embed(cls, definitions: Iterable[CommandDefinition], prefix: str) -> discord.Embed:
        """
        创建帮助信息嵌入

        Args:
            definitions: 已加载的命令
            prefix: 当前服务器的前缀

        Returns:
            Discord嵌入消息
        """
        slash_lines = []
        prefix_lines = []
        for definition in sorted(definitions, key=lambda d: d.name):
            if definition.kind is CommandKind.DUAL:
                slash_lines.append(
                    f"`/{definition.name}` - {truncate(definition.schema.description, 100)}"
                )
            if definition.has_prefix_support:
                prefix_lines.append(f"`{prefix}{definition.name}`")

        embed = discord.Embed(
            title="🤖 Angela Help",
            description=f"Prefix for this server: `{truncate(prefix, 100)}`",
            color=cls.COLORS['info']
        )
        if slash_lines:
            embed.add_field(name="🚀 Slash commands", value=join_limited(slash_lines, "\n"), inline=False)
        if prefix_lines:
            embed.add_field(name="🧃 Prefix commands", value=join_limited(prefix_lines, " "), inline=False)
        return embed
