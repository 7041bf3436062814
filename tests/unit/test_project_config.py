"""
Unit tests for project configuration and the project manager.
"""
import sys
from pathlib import Path

import pytest
import yaml

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from projects.project_config import JiraProjectConfig, ProjectConfig
from projects.project_manager import ProjectManager
from tests.fakes import RecordingLogger

PORTAL_YAML = """
name: Portal do Cliente
description: Customer portal
jira:
  base_url: https://acme.atlassian.net
  project_key: PC
  email: po@acme.com
team: squad-a
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('JIRA_API_TOKEN', 'PORTAL_TOKEN', 'JIRA_BASE_URL', 'JIRA_PROJECT_KEY', 'JIRA_EMAIL'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def configs_dir(tmp_path):
    (tmp_path / "portal.yaml").write_text(PORTAL_YAML, encoding="utf-8")
    (tmp_path / "internal.yaml").write_text("project_id: internal\nname: Internal\n", encoding="utf-8")
    return tmp_path


class TestProjectConfig:
    """Test loading and serializing a project file."""

    def test_project_id_from_file_name(self, configs_dir):
        config = ProjectConfig.load_from_yaml(str(configs_dir / "portal.yaml"))

        assert config.project_id == "portal"
        assert config.display_name == "Portal do Cliente"
        assert config.jira.organization == "acme"
        assert config.extra == {'team': 'squad-a'}

    def test_token_from_environment(self, configs_dir, monkeypatch):
        monkeypatch.setenv('JIRA_API_TOKEN', 'env-token')

        credentials = ProjectConfig.load_from_yaml(str(configs_dir / "portal.yaml")).get_credentials()

        assert credentials.api_token == 'env-token'
        assert credentials.project_key == 'PC'
        assert credentials.url == 'https://acme.atlassian.net'

    def test_custom_token_variable(self, monkeypatch):
        monkeypatch.setenv('PORTAL_TOKEN', 'portal-token')
        config = ProjectConfig.from_dict({
            'project_id': 'portal',
            'jira': {
                'base_url': 'https://acme.atlassian.net',
                'project_key': 'PC',
                'email': 'po@acme.com',
                'api_token_env': 'PORTAL_TOKEN',
            },
        })

        assert config.get_credentials().api_token == 'portal-token'

    def test_missing_token_means_no_credentials(self, configs_dir):
        config = ProjectConfig.load_from_yaml(str(configs_dir / "portal.yaml"))
        assert config.get_credentials() is None

    def test_without_jira_section(self):
        assert ProjectConfig(project_id="internal").get_credentials() is None

    def test_to_yaml_never_writes_token(self):
        config = ProjectConfig(
            project_id="portal",
            name="Portal",
            jira=JiraProjectConfig(
                base_url="https://acme.atlassian.net",
                project_key="PC",
                email="po@acme.com",
                api_token="secret"
            )
        )

        dumped = config.to_yaml()
        data = yaml.safe_load(dumped)

        assert "secret" not in dumped
        assert data['jira']['api_token_env'] == 'JIRA_API_TOKEN'
        assert data['jira']['project_key'] == 'PC'

    def test_save_and_reload(self, tmp_path):
        config = ProjectConfig(project_id="portal", name="Portal", extra={'team': 'squad-a'})

        path = config.save(str(tmp_path / "nested" / "portal.yaml"))
        reloaded = ProjectConfig.load_from_yaml(path)

        assert reloaded.name == "Portal"
        assert reloaded.extra == {'team': 'squad-a'}


class TestProjectManager:
    """Test directory loading and credential lookup."""

    def test_loads_directory(self, configs_dir):
        manager = ProjectManager(str(configs_dir))
        assert sorted(manager.list_projects()) == ["internal", "portal"]

    def test_get_credentials(self, configs_dir, monkeypatch):
        monkeypatch.setenv('JIRA_API_TOKEN', 'env-token')
        manager = ProjectManager(str(configs_dir))

        assert manager.get_credentials("portal").project_key == "PC"
        assert manager.get_credentials("internal") is None
        assert manager.get_credentials("unknown") is None

    def test_invalid_file_is_skipped(self, configs_dir):
        (configs_dir / "broken.yaml").write_text("jira: [unclosed\n", encoding="utf-8")
        logger = RecordingLogger()

        manager = ProjectManager(str(configs_dir), logger=logger)

        assert "broken" not in manager.list_projects()
        assert "project_config_invalid" in logger.events('warning')

    def test_missing_directory(self, tmp_path):
        assert ProjectManager(str(tmp_path / "absent")).list_projects() == []

    def test_register_and_save(self, tmp_path):
        manager = ProjectManager(str(tmp_path))
        manager.register_project(ProjectConfig(project_id="new", name="New"))

        path = manager.save_project("new")

        assert Path(path) == tmp_path / "new.yaml"
        assert ProjectManager(str(tmp_path)).list_projects() == ["new"]

    def test_save_unknown_project(self, tmp_path):
        with pytest.raises(ValueError, match="Project not found"):
            ProjectManager(str(tmp_path)).save_project("ghost")
