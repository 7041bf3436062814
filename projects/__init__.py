"""
Project configuration management for multi-project support.
Each project file says which tracker project a target maps to and how to reach it.
"""
from .project_config import ProjectConfig, JiraProjectConfig
from .project_manager import ProjectManager, get_project_manager

__all__ = [
    'ProjectConfig',
    'JiraProjectConfig',
    'ProjectManager',
    'get_project_manager'
]
