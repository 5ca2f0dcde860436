"""AngelaBot 音频模块。"""

from .engine import AudioEngine

__all__ = [
    "AudioEngine"
]
