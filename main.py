#!/usr/bin/env python3
"""
AngelaBot 音乐机器人 - 支持前缀命令和 Slash 命令的 Discord 音乐机器人

主程序入口点，负责环境变量与配置加载、日志设置和机器人启动。
"""
import logging

from dotenv import load_dotenv

from angelabot.bot import AngelaBot
from angelabot.core.errors import LoginError
from angelabot.utils.config_manager import ConfigManager
from angelabot.utils.logger import setup_logger


def main() -> int:
    """
    AngelaBot 主入口函数。

    Returns:
        int: 退出代码（0表示成功，1表示错误）
    """
    load_dotenv()

    config = ConfigManager()

    setup_logger(
        log_level=config.get_log_level(),
        log_file=config.get_log_file(),
        max_size=config.get_log_max_size(),
        backup_count=config.get_log_backup_count()
    )
    logger = logging.getLogger("angelabot")

    logger.info("=" * 60)
    logger.info("🎵 AngelaBot 音乐机器人启动中...")
    logger.info("=" * 60)

    try:
        try:
            discord_token = config.get_discord_token()
        except ValueError as e:
            logger.error(f"❌ Discord 令牌配置错误: {e}")
            logger.error("请在 .env 中设置 TOKEN，或在 config/config.yaml 中设置 discord.token")
            return 1

        bot = AngelaBot(config)
        logger.info(f"   默认前缀: {config.get_default_prefix()}")
        logger.info(f"   命令目录: {config.get_commands_directory()}")
        logger.info(f"   前缀文件: {config.get_prefixes_path()}")

        logger.info("🚀 启动音乐机器人...")
        bot.run(discord_token)

    except KeyboardInterrupt:
        logger.info("🛑 用户停止了机器人 (Ctrl+C)")
        return 0
    except LoginError as e:
        logger.error(f"❌ {e}")
        return 1
    except Exception as e:
        logger.error(f"❌ 启动音乐机器人时发生意外错误: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
