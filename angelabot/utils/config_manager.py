"""Configuration manager for AngelaBot."""
import logging
import os
from typing import Any, Dict, Optional
import yaml

DEFAULT_PREFIX = "angela^"


class ConfigManager:
    """
    Configuration manager for AngelaBot.

    Handles loading and accessing configuration values from the config file.
    A missing config file is not fatal: every getter falls back to its default.
    """

    def __init__(self, config_path: str = "config/config.yaml"):
        """
        Initialize the ConfigManager.

        Args:
            config_path: Path to the configuration file

        Raises:
            yaml.YAMLError: If the configuration file is not valid YAML
        """
        self.logger = logging.getLogger("angelabot.config")
        self.config_path = config_path
        self.config: Dict[str, Any] = {}

        self._load_config()

    def _load_config(self) -> None:
        """
        Load the configuration from the config file.

        Raises:
            yaml.YAMLError: If the configuration file is not valid YAML
        """
        if not os.path.exists(self.config_path):
            example_path = f"{self.config_path}.example"
            if os.path.exists(example_path):
                self.logger.warning(
                    f"Configuration file {self.config_path} not found, using defaults. "
                    f"Copy {example_path} to {self.config_path} to customise the bot."
                )
            else:
                self.logger.warning(f"Configuration file {self.config_path} not found, using defaults.")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as config_file:
                self.config = yaml.safe_load(config_file) or {}
                self.logger.debug(f"Loaded configuration from {self.config_path}")
        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing configuration file: {e}")
            raise

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: The configuration key (dot notation for nested keys)
            default: Default value to return if the key is not found

        Returns:
            The configuration value or the default value if not found
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                self.logger.debug(f"Configuration key '{key}' not found, using default: {default}")
                return default

        return value

    def get_discord_token(self) -> str:
        """
        Get the Discord bot token.

        The process environment (``TOKEN`` or ``DISCORD_TOKEN``) takes precedence
        over ``discord.token`` in the config file.

        Returns:
            The Discord bot token

        Raises:
            ValueError: If the Discord bot token is not set
        """
        token = os.getenv('TOKEN') or os.getenv('DISCORD_TOKEN') or self.get('discord.token')
        if not token or token == "YOUR_DISCORD_BOT_TOKEN_HERE":
            self.logger.error("Discord bot token not set in environment or configuration")
            raise ValueError("Discord bot token not set in environment or configuration")
        return token

    def get_default_prefix(self) -> str:
        """
        Get the fallback prefix used by guilds without a custom one.

        Returns:
            The default command prefix
        """
        return self.get('discord.default_prefix', DEFAULT_PREFIX) or DEFAULT_PREFIX

    def get_prefixes_path(self) -> str:
        """
        Get the path of the per-guild prefix file.

        Returns:
            Path to the JSON prefix file
        """
        return self.get('prefixes.path', 'prefixes.json')

    def get_commands_directory(self) -> str:
        """
        Get the root directory scanned for command modules.

        Returns:
            The command directory, defaulting to the bundled commands package
        """
        bundled = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'commands')
        return self.get('commands.directory', None) or bundled

    def get_log_level(self) -> str:
        """
        Get the logging level.

        Returns:
            The logging level
        """
        return self.get('logging.level', 'INFO')

    def get_log_file(self) -> Optional[str]:
        """
        Get the log file path.

        Returns:
            The log file path or None if not set
        """
        return self.get('logging.file', None)

    def get_log_max_size(self) -> int:
        """
        Get the maximum log file size.

        Returns:
            The maximum log file size in bytes
        """
        return self.get('logging.max_size', 10485760)  # 10 MB

    def get_log_backup_count(self) -> int:
        """
        Get the number of backup log files to keep.

        Returns:
            The number of backup log files
        """
        return self.get('logging.backup_count', 5)

    # Music Configuration Methods
    def is_music_enabled(self) -> bool:
        """
        Check if music functionality is enabled.

        Returns:
            True if music is enabled, False otherwise
        """
        return self.get('music.enabled', True)

    def get_lavalink_uri(self) -> str:
        """
        获取 Lavalink 节点地址

        Returns:
            节点 URI
        """
        return self.get('music.lavalink.uri', 'http://localhost:2333')

    def get_lavalink_password(self) -> str:
        """
        获取 Lavalink 节点密码

        Returns:
            节点密码
        """
        return self.get('music.lavalink.password', 'youshallnotpass')

    def get_music_search_source(self) -> str:
        """
        获取默认搜索源（Lavalink 搜索前缀）

        Returns:
            搜索前缀，例如 ``ytsearch``、``scsearch``、``spsearch``
        """
        return self.get('music.search_source', 'ytsearch')

    def get_music_volume(self) -> int:
        """
        Get the default player volume.

        Returns:
            Default volume (0-100)
        """
        return self.get('music.volume', 50)

    def should_announce_new_songs(self) -> bool:
        """
        检查是否在新歌曲开始时发送通知

        Returns:
            如果应该发送通知则返回True
        """
        return self.get('music.announce_new_songs', True)
