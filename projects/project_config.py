"""
Project configuration data classes for multi-project support.
Defines where each target project lives in the tracker and how to reach it.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Any
from pathlib import Path
import os
import re

import yaml

from core.domain.tracker import TrackerCredentials

DEFAULT_TOKEN_ENV = 'JIRA_API_TOKEN'


@dataclass
class JiraProjectConfig:
    """Jira project configuration."""
    base_url: str  # e.g., "https://company.atlassian.net"
    project_key: str  # e.g., "PROJ", "TEST"
    email: str  # User email for authentication
    api_token: Optional[str] = None  # API token (usually from env var)

    # Environment variable holding the token when it is not in the file
    api_token_env: str = DEFAULT_TOKEN_ENV

    @property
    def organization(self) -> str:
        """Extract organization from base URL."""
        match = re.search(r'https?://([^.]+)', self.base_url)
        return match.group(1) if match else ''

    def to_credentials(self) -> TrackerCredentials:
        """Credentials for the tracker client."""
        return TrackerCredentials(
            url=self.base_url,
            email=self.email,
            api_token=self.api_token or '',
            project_key=self.project_key
        )


@dataclass
class ProjectConfig:
    """
    Configuration of one target project.

    Only the Jira section is needed for synchronization; a project without
    it is known but cannot be synchronized.
    """
    # Project identifier (used for config file naming)
    project_id: str  # e.g., "acme-portal"

    name: str = ""
    description: str = ""

    jira: Optional[JiraProjectConfig] = None

    # Free-form values kept for other tools reading the same file
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or self.project_id

    def get_credentials(self) -> Optional[TrackerCredentials]:
        """Credentials when the Jira section is complete, None otherwise."""
        if not self.jira:
            return None
        credentials = self.jira.to_credentials()
        return credentials if credentials.is_complete else None

    @classmethod
    def load_from_yaml(cls, yaml_path: str) -> 'ProjectConfig':
        """Load project configuration from a YAML file."""
        with open(yaml_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if 'project_id' not in data:
            data['project_id'] = Path(yaml_path).stem

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """Create ProjectConfig from a dictionary."""
        known_keys = {'project_id', 'name', 'description', 'jira'}

        # Extract Jira config (optional)
        jira_data = data.get('jira') or {}
        jira = None
        if jira_data:
            token_env = jira_data.get('api_token_env', DEFAULT_TOKEN_ENV)
            jira = JiraProjectConfig(
                base_url=jira_data.get('base_url', os.getenv('JIRA_BASE_URL', '')),
                project_key=jira_data.get('project_key', os.getenv('JIRA_PROJECT_KEY', '')),
                email=jira_data.get('email', os.getenv('JIRA_EMAIL', '')),
                api_token=jira_data.get('api_token') or os.getenv(token_env),
                api_token_env=token_env
            )

        return cls(
            project_id=str(data['project_id']),
            name=data.get('name', ''),
            description=data.get('description', ''),
            jira=jira,
            extra={k: v for k, v in data.items() if k not in known_keys}
        )

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string. The API token is never written."""
        data: Dict[str, Any] = {
            'project_id': self.project_id,
            'name': self.name,
            'description': self.description,
        }

        if self.jira:
            data['jira'] = {
                'base_url': self.jira.base_url,
                'project_key': self.jira.project_key,
                'email': self.jira.email,
                'api_token_env': self.jira.api_token_env,
            }
        data.update(self.extra)
        return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def save(self, path: str = None) -> str:
        """Save configuration to YAML file."""
        if path is None:
            path = f"projects/configs/{self.project_id}.yaml"

        # Ensure directory exists
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_yaml())

        return path
