"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations

The calculation engine never reads this module: scripts load the settings
here and pass `preferences` into every engine call.
"""

import logging
import os
from pathlib import Path
from typing import Optional
import yaml

from pydantic_settings import BaseSettings, SettingsConfigDict
from wagebook.domain.models import PaySettings

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.yaml"
DATABASE_FILE_NAME = "wagebook.db"


class Settings(BaseSettings):
    """
    Wagebook settings, resolved in this order:
    1. Default values (hardcoded)
    2. settings.yaml (pay preferences only)
    3. Environment variables (highest priority)
    """
    model_config = SettingsConfigDict(
        env_prefix='WAGEBOOK_',
        env_file='.env',
        env_file_encoding='utf-8',
        env_nested_delimiter='__'
    )

    # Application paths
    app_name: str = "Wagebook"
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None

    # Database
    database_url: Optional[str] = None

    # Pay and crediting preferences
    preferences: PaySettings = PaySettings()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()
        if 'preferences' not in kwargs:
            self._load_yaml_config()

    def _init_paths(self):
        """Resolve config/data directories per OS and make sure they exist"""
        if self.config_dir is None:
            self.config_dir = _user_dir('.config') / self.app_name.lower()
        if self.data_dir is None:
            self.data_dir = _user_dir('.local', 'share') / self.app_name.lower()

        for directory in (self.config_dir, self.data_dir):
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def settings_file(self) -> Path:
        """A workspace config/settings.yaml wins over the one in config_dir"""
        workspace_file = Path("config") / SETTINGS_FILE_NAME
        if workspace_file.exists():
            return workspace_file
        return self.config_dir / SETTINGS_FILE_NAME

    def _load_yaml_config(self):
        """Load pay preferences from the settings file, if there is one"""
        config_file = self.settings_file
        if not config_file.exists():
            return

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)
        if config_data:
            self.preferences = PaySettings(**config_data)
            logger.info(f"Loaded preferences from {config_file}")

    def save_preferences(self):
        """Write preferences to config_dir, enums stored by value"""
        config_file = self.config_dir / SETTINGS_FILE_NAME
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.preferences.model_dump(mode='json'), f, default_flow_style=False)
        logger.info(f"Saved preferences to {config_file}")

    def get_db_url(self) -> str:
        """Configured URL, else a SQLite file in data_dir"""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.data_dir / DATABASE_FILE_NAME}"


def _user_dir(*posix_parts: str) -> Path:
    """%APPDATA% on Windows, ~/<posix_parts> elsewhere"""
    if os.name == 'nt':
        return Path(os.getenv('APPDATA'))
    return Path.home().joinpath(*posix_parts)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings from file"""
    global _settings
    _settings = Settings()
    return _settings
