"""
UI Components

提供回复消息的构建工具
"""

from .embed_builder import EmbedBuilder, format_duration

__all__ = [
    'EmbedBuilder',
    'format_duration'
]
