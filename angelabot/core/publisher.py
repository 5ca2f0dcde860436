"""Slash命令目录发布"""

import logging
from typing import Any, Dict, List, Optional

import discord

from .errors import RegistrationError


class RegistrationPublisher:
    """
    将Slash命令描述符批量发布到 Discord 全局命令目录

    每次发布都会整体替换之前注册的命令集合。失败只记录日志，不重试。
    """

    def __init__(self, client: discord.Client):
        """
        初始化发布器

        Args:
            client: Discord 客户端
        """
        self.client = client
        self.logger = logging.getLogger("angelabot.publisher")
        self.last_error: Optional[RegistrationError] = None

    async def publish(self, payloads: List[Dict[str, Any]]) -> bool:
        """
        全局发布Slash命令

        Args:
            payloads: Discord 应用命令 JSON 列表

        Returns:
            发布成功返回True
        """
        self.last_error = None

        try:
            application_id = self.client.application_id
            if application_id is None:
                raise RegistrationError("应用ID不可用，客户端尚未登录")

            synced = await self.client.http.bulk_upsert_global_commands(application_id, payload=payloads)
            self.logger.info(f"✅ 已全局注册 {len(synced)} 个Slash命令")
            return True

        except Exception as e:
            self.last_error = e if isinstance(e, RegistrationError) else RegistrationError(str(e))
            self.logger.error(f"❌ 注册Slash命令失败: {e}", exc_info=True)
            return False
