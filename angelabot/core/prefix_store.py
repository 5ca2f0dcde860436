"""
服务器前缀存储

启动时从 JSON 文件一次性加载 ``{guild_id: prefix}`` 映射，
运行期间只读。文件缺失或格式错误都不会中断启动。
"""

import json
import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from .errors import ConfigurationError
from angelabot.utils.config_manager import DEFAULT_PREFIX


class PrefixLoadStatus(Enum):
    """前缀文件加载结果"""
    LOADED = "loaded"
    MISSING = "missing"
    MALFORMED = "malformed"


class PrefixStore:
    """
    服务器前缀存储

    每个服务器最多一个自定义前缀，没有自定义前缀的服务器使用默认前缀。
    """

    def __init__(self, default_prefix: str = DEFAULT_PREFIX):
        """
        初始化前缀存储

        Args:
            default_prefix: 默认命令前缀
        """
        if not default_prefix:
            raise ValueError("默认前缀不能为空")

        self.default_prefix = default_prefix
        self.logger = logging.getLogger("angelabot.prefixes")
        self._prefixes: Dict[str, str] = {}
        self.last_error: Optional[ConfigurationError] = None

    def load(self, path: str) -> PrefixLoadStatus:
        """
        从 JSON 文件加载前缀映射

        任何读取或解析失败都会被记录并吞掉，映射保持为空。

        Args:
            path: 前缀文件路径

        Returns:
            加载结果
        """
        self._prefixes = {}
        self.last_error = None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            self.last_error = ConfigurationError(f"前缀文件不存在: {path}", path=path)
            self.logger.info("⚠️ 未找到前缀文件，所有服务器使用默认前缀 %s", self.default_prefix)
            return PrefixLoadStatus.MISSING
        except (OSError, ValueError) as e:
            self.last_error = ConfigurationError(f"前缀文件无法读取: {e}", path=path)
            self.logger.warning(f"⚠️ 前缀文件 {path} 格式错误，使用默认前缀: {e}")
            return PrefixLoadStatus.MALFORMED

        if not isinstance(data, dict):
            self.last_error = ConfigurationError("前缀文件必须是 JSON 对象", path=path)
            self.logger.warning(f"⚠️ 前缀文件 {path} 不是 JSON 对象，使用默认前缀")
            return PrefixLoadStatus.MALFORMED

        self._prefixes = self._parse(data)
        self.logger.info(f"✅ 已从 {path} 加载 {len(self._prefixes)} 个服务器前缀")
        return PrefixLoadStatus.LOADED

    def _parse(self, data: Mapping[str, Any]) -> Dict[str, str]:
        prefixes = {}
        for guild_id, prefix in data.items():
            if not isinstance(prefix, str) or not prefix:
                self.logger.warning(f"跳过服务器 {guild_id} 的无效前缀: {prefix!r}")
                continue
            prefixes[str(guild_id)] = prefix
        return prefixes

    def resolve(self, guild_id: Union[int, str, None]) -> str:
        """
        获取服务器的有效前缀

        Args:
            guild_id: 服务器ID

        Returns:
            自定义前缀，没有时返回默认前缀
        """
        if guild_id is None:
            return self.default_prefix
        return self._prefixes.get(str(guild_id), self.default_prefix)

    def __len__(self) -> int:
        return len(self._prefixes)

    def __contains__(self, guild_id: object) -> bool:
        return str(guild_id) in self._prefixes
