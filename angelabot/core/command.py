"""
命令定义

每个命令模块通过显式的注册调用声明自己的类型：
- ``slash_command(...)``：Slash + 前缀双模式命令
- ``prefix_command(...)``：仅前缀命令

模块把结果赋值给模块级变量 ``command``，由命令注册器加载。
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, TYPE_CHECKING

import discord

if TYPE_CHECKING:
    from .context import BotContext

PrefixHandler = Callable[[discord.Message, List[str], "BotContext"], Awaitable[Any]]
SlashHandler = Callable[[discord.Interaction, "BotContext"], Awaitable[Any]]
SlashGuard = Callable[[discord.Interaction, "BotContext"], Awaitable[Optional[str]]]

# Discord application command type: CHAT_INPUT
CHAT_INPUT = 1


class CommandKind(Enum):
    """命令类型"""
    DUAL = "dual"                # Slash & 前缀
    PREFIX_ONLY = "prefix_only"  # 仅前缀


@dataclass(frozen=True)
class SlashOption:
    """Slash命令参数描述"""
    name: str
    description: str
    type: discord.AppCommandOptionType = discord.AppCommandOptionType.string
    required: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "required": self.required,
        }


@dataclass(frozen=True)
class SlashSchema:
    """
    Slash命令描述符

    发布到 Discord 全局命令目录的结构化元数据。
    """
    name: str
    description: str
    options: Sequence[SlashOption] = ()

    def to_payload(self) -> Dict[str, Any]:
        """转换为 Discord 应用命令 JSON"""
        return {
            "type": CHAT_INPUT,
            "name": self.name,
            "description": self.description,
            "options": [option.to_payload() for option in self.options],
        }


@dataclass(frozen=True)
class CommandDefinition:
    """
    已加载的命令定义

    Attributes:
        name: 命令名称（注册表中的唯一键）
        kind: 命令类型
        prefix: 前缀模式处理器
        slash: Slash模式处理器
        schema: Slash命令描述符
        long_running: 是否需要先延迟响应再跟进
        guard: 延迟响应之前执行的检查，返回错误消息表示拒绝
    """
    name: Optional[str]
    kind: CommandKind
    prefix: Optional[PrefixHandler] = None
    slash: Optional[SlashHandler] = None
    schema: Optional[SlashSchema] = None
    long_running: bool = False
    guard: Optional[SlashGuard] = None

    @property
    def has_prefix_support(self) -> bool:
        return self.prefix is not None

    def with_name(self, name: str) -> "CommandDefinition":
        """返回使用新名称的副本"""
        return replace(self, name=name)


def slash_command(
    schema: SlashSchema,
    slash: SlashHandler,
    prefix: Optional[PrefixHandler] = None,
    long_running: bool = False,
    guard: Optional[SlashGuard] = None,
) -> CommandDefinition:
    """
    声明一个 Slash & 前缀双模式命令

    Args:
        schema: Slash命令描述符，其名称即命令名称
        slash: Slash模式处理器
        prefix: 前缀模式处理器（可选）
        long_running: 执行时间较长，需要延迟响应
        guard: 延迟响应前的检查

    Returns:
        命令定义
    """
    if schema is None or slash is None:
        raise ValueError("Slash命令需要描述符和处理器")

    return CommandDefinition(
        name=schema.name,
        kind=CommandKind.DUAL,
        prefix=prefix,
        slash=slash,
        schema=schema,
        long_running=long_running,
        guard=guard,
    )


def prefix_command(prefix: PrefixHandler, name: Optional[str] = None) -> CommandDefinition:
    """
    声明一个仅前缀命令

    Args:
        prefix: 前缀模式处理器
        name: 命令名称，省略时由注册器使用文件名

    Returns:
        命令定义
    """
    if prefix is None:
        raise ValueError("前缀命令需要处理器")

    return CommandDefinition(
        name=name.lower() if name else None,
        kind=CommandKind.PREFIX_ONLY,
        prefix=prefix,
    )


def get_option(interaction: discord.Interaction, name: str, default: Any = None) -> Any:
    """
    读取Slash命令的参数值

    Args:
        interaction: Discord交互对象
        name: 参数名称
        default: 参数缺失时的默认值

    Returns:
        参数值或默认值
    """
    data = interaction.data or {}
    for option in data.get("options", []):
        if option.get("name") == name:
            return option.get("value", default)
    return default
