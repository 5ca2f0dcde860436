"""
AngelaBot

Discord 音乐机器人：前缀命令与 Slash 命令分发、服务器自定义前缀、
基于 Lavalink 的音乐播放。
"""

__version__ = "1.0.0"
