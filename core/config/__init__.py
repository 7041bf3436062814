"""
Configuration management - externalized and extensible.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .environment import EnvironmentConfig


@dataclass
class TrackerSettings:
    """Remote tracker client settings."""
    timeout: int = 30
    max_issues: int = 1000

    @classmethod
    def from_env(cls) -> 'TrackerSettings':
        """Create settings from environment variables."""
        return cls(**EnvironmentConfig.get_tracker_config())


@dataclass
class LoggingSettings:
    """Logging settings."""
    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = True

    @classmethod
    def from_env(cls) -> 'LoggingSettings':
        """Create settings from environment variables."""
        return cls(**EnvironmentConfig.get_logging_config())

    @property
    def level_number(self) -> int:
        return getattr(logging, self.level.upper(), logging.INFO)


@dataclass
class AppConfig:
    """Application-wide configuration."""
    tracker: TrackerSettings
    logging: LoggingSettings
    projects_dir: Optional[str] = None
    default_project: Optional[str] = None

    @classmethod
    def load(cls) -> 'AppConfig':
        """Load application configuration."""
        return cls(
            tracker=TrackerSettings.from_env(),
            logging=LoggingSettings.from_env(),
            projects_dir=EnvironmentConfig.PROJECTS_CONFIG_DIR,
            default_project=EnvironmentConfig.DEFAULT_PROJECT
        )
