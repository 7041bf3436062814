"""
Environment Configuration Module

Loads environment variables for the scope sync service.
Per-project tracker credentials are managed through YAML files in projects/configs/.
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {value!r}")


class EnvironmentConfig:
    """Environment configuration loaded from environment variables."""

    # Jira / remote tracker
    JIRA_TIMEOUT: int = _int_env("JIRA_TIMEOUT", 30)
    JIRA_MAX_ISSUES: int = _int_env("JIRA_MAX_ISSUES", 1000)
    JIRA_API_TOKEN: Optional[str] = os.getenv("JIRA_API_TOKEN")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE")
    LOG_JSON: bool = os.getenv("LOG_JSON", "true").lower() == "true"

    # Projects
    PROJECTS_CONFIG_DIR: Optional[str] = os.getenv("PROJECTS_CONFIG_DIR")
    DEFAULT_PROJECT: Optional[str] = os.getenv("DEFAULT_PROJECT")

    @classmethod
    def get_tracker_config(cls) -> dict:
        """Get tracker configuration as a dictionary."""
        return {
            'timeout': cls.JIRA_TIMEOUT,
            'max_issues': cls.JIRA_MAX_ISSUES,
        }

    @classmethod
    def get_logging_config(cls) -> dict:
        """Get logging configuration as a dictionary."""
        return {
            'level': cls.LOG_LEVEL,
            'log_file': cls.LOG_FILE,
            'json_format': cls.LOG_JSON,
        }
