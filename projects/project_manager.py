"""
Project Manager - Handles loading and looking up project configurations.
"""
from typing import Dict, Optional, List
from pathlib import Path

from core.config.environment import EnvironmentConfig
from core.domain.tracker import TrackerCredentials
from core.interfaces.logger import ILogger
from core.interfaces.repository import IProjectRepository
from .project_config import ProjectConfig


class ProjectManager(IProjectRepository):
    """
    Manages multiple project configurations.
    Loads YAML files from the configs directory and serves per-project
    tracker credentials to the rest of the system.
    """

    # Default configs directory
    CONFIGS_DIR = Path(__file__).parent / "configs"

    def __init__(self, configs_dir: Optional[str] = None, logger: Optional[ILogger] = None):
        """
        Args:
            configs_dir: Directory of project YAML files. Defaults to projects/configs.
            logger: Structured logger for load problems
        """
        self._projects: Dict[str, ProjectConfig] = {}
        self._configs_dir = Path(configs_dir) if configs_dir else self.CONFIGS_DIR
        self._logger = logger

        self.load_from_directory(str(self._configs_dir))

    @property
    def configs_dir(self) -> Path:
        return self._configs_dir

    def load_from_directory(self, directory: str = None) -> int:
        """
        Load all YAML project configurations from a directory.

        Args:
            directory: Path to configs directory. Defaults to projects/configs.

        Returns:
            Number of configurations loaded.
        """
        config_dir = Path(directory) if directory else self._configs_dir
        loaded = 0

        if not config_dir.exists():
            return loaded

        for yaml_file in sorted(config_dir.glob("*.yaml")):
            try:
                config = ProjectConfig.load_from_yaml(str(yaml_file))
            except Exception as e:
                if self._logger:
                    self._logger.warning("project_config_invalid", path=str(yaml_file), error=str(e))
                continue
            self._projects[config.project_id] = config
            loaded += 1
            if self._logger:
                self._logger.debug("project_config_loaded", project_id=config.project_id)

        return loaded

    def load_project(self, yaml_path: str) -> ProjectConfig:
        """
        Load a specific project configuration from YAML.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            The loaded ProjectConfig.
        """
        config = ProjectConfig.load_from_yaml(yaml_path)
        self._projects[config.project_id] = config
        return config

    def get_project(self, project_id: str) -> Optional[ProjectConfig]:
        """Get a project configuration by ID."""
        return self._projects.get(project_id)

    def get_credentials(self, target_id: str) -> Optional[TrackerCredentials]:
        """Tracker credentials of a project, None when absent or incomplete."""
        config = self._projects.get(target_id)
        if config is None:
            return None
        return config.get_credentials()

    def list_projects(self) -> List[str]:
        """List all available project IDs."""
        return list(self._projects.keys())

    def register_project(self, config: ProjectConfig) -> None:
        """Register a new project configuration."""
        self._projects[config.project_id] = config

    def save_project(self, project_id: str, path: str = None) -> str:
        """
        Save a project configuration to YAML.

        Args:
            project_id: ID of the project to save.
            path: Optional custom path. Defaults to <configs dir>/{project_id}.yaml.

        Returns:
            Path where the file was saved.
        """
        config = self._projects.get(project_id)
        if not config:
            raise ValueError(f"Project not found: {project_id}")

        if path is None:
            path = str(self._configs_dir / f"{project_id}.yaml")

        return config.save(path)


# Global project manager instance
_project_manager: Optional[ProjectManager] = None


def get_project_manager() -> ProjectManager:
    """Get the global project manager instance."""
    global _project_manager
    if _project_manager is None:
        _project_manager = ProjectManager(EnvironmentConfig.PROJECTS_CONFIG_DIR)
    return _project_manager
