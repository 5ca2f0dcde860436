"""
AngelaBot Core Infrastructure

提供命令系统的核心基础设施，包括：
- 命令定义与注册
- 服务器前缀存储
- Slash命令发布
- 消息与交互分发
"""

from .command import (
    CommandDefinition,
    CommandKind,
    SlashOption,
    SlashSchema,
    get_option,
    prefix_command,
    slash_command
)
from .context import BotContext
from .dispatcher import InteractionDispatcher, MessageDispatcher
from .errors import (
    BotError,
    CommandDefinitionError,
    ConfigurationError,
    ErrorCategory,
    LoginError,
    RegistrationError
)
from .prefix_store import PrefixLoadStatus, PrefixStore
from .publisher import RegistrationPublisher
from .registry import CommandRegistry, LoadReport

__all__ = [
    'CommandDefinition',
    'CommandKind',
    'SlashOption',
    'SlashSchema',
    'get_option',
    'prefix_command',
    'slash_command',
    'BotContext',
    'InteractionDispatcher',
    'MessageDispatcher',
    'BotError',
    'CommandDefinitionError',
    'ConfigurationError',
    'ErrorCategory',
    'LoginError',
    'RegistrationError',
    'PrefixLoadStatus',
    'PrefixStore',
    'RegistrationPublisher',
    'CommandRegistry',
    'LoadReport'
]
