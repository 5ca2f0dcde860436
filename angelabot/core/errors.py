"""
错误分类

区分启动期和运行期的各类失败：
- 配置缺失（非致命，使用默认值）
- 命令模块定义错误（跳过并计数）
- Slash命令注册失败（记录日志，继续运行）
- 命令处理器异常（在分发边界捕获）
- 登录失败（致命）
"""

from enum import Enum
from typing import Optional


class ErrorCategory(Enum):
    """错误分类枚举"""
    CONFIGURATION = "configuration"            # 配置缺失或格式错误
    COMMAND_DEFINITION = "command_definition"  # 命令模块缺少定义或导入失败
    REGISTRATION = "registration"              # Slash命令发布失败
    HANDLER = "handler"                        # 命令执行错误
    LOGIN = "login"                            # 令牌缺失或无效


class BotError(Exception):
    """机器人自定义异常基类"""

    category = ErrorCategory.HANDLER
    fatal = False

    def __init__(self, message: str, user_message: Optional[str] = None, **context):
        """
        初始化自定义异常

        Args:
            message: 错误消息
            user_message: 用户友好的错误消息
            **context: 额外的上下文信息
        """
        super().__init__(message)
        self.user_message = user_message or message
        self.context = context


class ConfigurationError(BotError):
    """配置错误，使用默认值继续运行"""

    category = ErrorCategory.CONFIGURATION


class CommandDefinitionError(BotError):
    """命令模块无法被加载或分类"""

    category = ErrorCategory.COMMAND_DEFINITION


class RegistrationError(BotError):
    """Slash命令目录发布失败"""

    category = ErrorCategory.REGISTRATION


class LoginError(BotError):
    """登录失败，进程无法开始处理事件"""

    category = ErrorCategory.LOGIN
    fatal = True
