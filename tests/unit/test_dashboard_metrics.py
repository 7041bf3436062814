"""
Unit tests for dashboard metrics and the dashboard read path.
"""
import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.application.use_cases.fetch_dashboard import DashboardService
from core.domain.exceptions import (
    DashboardFetchError,
    MissingCredentials,
    RemoteUnavailableError,
    RemoteValidationError
)
from core.domain.tracker import TrackerCredentials, TrackerIssue, TrackerSprint
from core.services.metrics.dashboard_metrics import (
    StatusClassifier,
    calculate_metrics,
    percentage,
    round_half_up
)
from tests.fakes import FakeTrackerClient, RecordingLogger

NOW = datetime(2025, 10, 1, tzinfo=timezone.utc)


def make_issue(key, status, issue_type='Story', points=0, created='2025-09-01T10:00:00.000+0000',
               updated=None, resolved=None, sprint=None):
    return TrackerIssue(
        id=key.split('-')[1],
        key=key,
        summary=f"Issue {key}",
        status=status,
        issue_type=issue_type,
        created=created,
        updated=updated or created,
        story_points=points,
        resolved=resolved,
        sprint=sprint
    )


ISSUES = [
    make_issue('PC-1', 'Done', 'Story', 5,
               updated='2025-09-05T10:00:00.000+0000',
               resolved='2025-09-11T10:00:00.000+0000', sprint='Sprint 1'),
    make_issue('PC-2', 'In Progress', 'Bug', 3,
               created='2025-09-20T10:00:00.000+0000',
               updated='2025-09-30T10:00:00.000+0000', sprint='Sprint 2'),
    make_issue('PC-3', 'To Do', 'Task', 2, updated='2025-09-02T10:00:00.000+0000'),
    make_issue('PC-4', 'Blocked', 'Epic', 0,
               created='2025-08-01T10:00:00.000+0000',
               updated='2025-09-01T10:00:00.000+0000'),
    make_issue('PC-5', 'Aceito', 'Story', 8,
               created='2025-09-21T10:00:00.000+0000',
               updated='2025-09-25T10:00:00.000+0000',
               resolved='2025-09-25T10:00:00.000+0000', sprint='Sprint 2'),
]

SPRINTS = [
    TrackerSprint(id=1, name='Sprint 1', state='closed'),
    TrackerSprint(id=2, name='Sprint 2', state='closed'),
    TrackerSprint(id=3, name='Sprint 3', state='active'),
]

CREDENTIALS = TrackerCredentials(
    url="https://acme.atlassian.net",
    email="po@acme.com",
    api_token="secret",
    project_key="PC"
)


class TestRounding:

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(6.5) == 7
        assert round_half_up(2.49) == 2

    def test_percentage(self):
        assert percentage(1, 3) == 33
        assert percentage(2, 3) == 67
        assert percentage(5, 0) == 0


class TestStatusClassifier:
    """Test status bucketing."""

    def test_keyword_buckets(self):
        mapping = StatusClassifier(ISSUES).mapping

        assert mapping['Done'] == 'completed'
        assert mapping['In Progress'] == 'in_progress'
        assert mapping['To Do'] == 'todo'
        assert mapping['Blocked'] == 'blocked'

    def test_unknown_status_with_resolution_is_completed(self):
        assert StatusClassifier(ISSUES).mapping['Aceito'] == 'completed'

    def test_unknown_status_without_resolution_is_todo(self):
        issues = [make_issue('PC-9', 'Triagem')]
        assert StatusClassifier(issues).mapping == {'Triagem': 'todo'}

    def test_portuguese_statuses(self):
        issues = [
            make_issue('PC-1', 'Concluído'),
            make_issue('PC-2', 'Em Progresso'),
            make_issue('PC-3', 'A Fazer'),
            make_issue('PC-4', 'Bloqueado'),
        ]
        classifier = StatusClassifier(issues)

        assert [classifier.bucket(issue) for issue in issues] == [
            'completed', 'in_progress', 'todo', 'blocked'
        ]


class TestCalculateMetrics:
    """Test the aggregated metrics over a small project."""

    @pytest.fixture
    def metrics(self):
        return calculate_metrics(ISSUES, SPRINTS, now=NOW)

    def test_counts(self, metrics):
        assert metrics.total_issues == 5
        assert metrics.completed_issues == 2
        assert metrics.in_progress_issues == 1
        assert metrics.todo_issues == 1
        assert metrics.blocked_issues == 1
        assert metrics.completion_rate == 40

    def test_story_points(self, metrics):
        assert metrics.total_story_points == 18
        assert metrics.completed_story_points == 13

    def test_velocity_over_closed_sprints(self, metrics):
        """(5 + 8) points over two closed sprints."""
        assert metrics.average_velocity == 7

    def test_lead_time(self, metrics):
        """Ten and four days from creation to resolution."""
        assert metrics.average_lead_time == 7

    def test_rework_rate(self, metrics):
        """Long running in-progress issue and stale unresolved issue."""
        assert metrics.rework_rate == 40

    def test_recent_completions(self, metrics):
        assert metrics.recent_completed_issues == 2

    def test_recent_window_excludes_old_resolutions(self):
        later = datetime(2025, 10, 20, tzinfo=timezone.utc)
        assert calculate_metrics(ISSUES, SPRINTS, now=later).recent_completed_issues == 1

    def test_throughput(self, metrics):
        assert metrics.throughput == {'stories': 2, 'bugs': 1, 'tasks': 1, 'epics': 1}

    def test_to_dict(self, metrics):
        data = metrics.to_dict()

        assert data['statusDistribution'] == {
            'todo': 1, 'inProgress': 1, 'completed': 2, 'blocked': 1
        }
        assert data['completionRate'] == 40

    def test_resolved_in_progress_issue_is_rework(self):
        issues = [make_issue('PC-1', 'In Progress', resolved='2025-09-01T12:00:00.000+0000')]
        assert calculate_metrics(issues, [], now=NOW).rework_rate == 100

    def test_empty_project(self):
        metrics = calculate_metrics([], [], now=NOW)

        assert metrics.total_issues == 0
        assert metrics.completion_rate == 0
        assert metrics.average_velocity == 0
        assert metrics.average_lead_time == 0


class TestDashboardService:
    """Test the dashboard read path and its error messages."""

    @pytest.fixture
    def client(self):
        client = FakeTrackerClient()
        client.sprints = list(SPRINTS)
        client.issues = list(ISSUES)
        return client

    @pytest.fixture
    def logger(self):
        return RecordingLogger()

    @pytest.fixture
    def service(self, client, logger):
        return DashboardService(lambda credentials: client, logger)

    def test_project_data(self, service):
        data = service.get_project_data(CREDENTIALS, now=NOW)

        assert data.project.key == 'PC'
        assert len(data.sprints) == 3
        assert data.metrics.completion_rate == 40
        assert data.to_dict()['issueCount'] == 5

    def test_no_board(self, client, logger, service):
        client.board_id = None

        data = service.get_project_data(CREDENTIALS, now=NOW)

        assert data.sprints == []
        assert data.metrics.average_velocity == 0
        assert "dashboard_board_not_found" in logger.events('warning')

    def test_sprint_listing_failure_is_tolerated(self, client, service):
        with patch.object(client, 'list_sprints', side_effect=RemoteUnavailableError("down")):
            data = service.get_project_data(CREDENTIALS, now=NOW)

        assert data.sprints == []

    def test_invalid_credentials(self, client, service):
        error = RemoteValidationError("unauthorized", status_code=401)
        with patch.object(client, 'search_issues', side_effect=error):
            with pytest.raises(DashboardFetchError, match="Invalid Jira credentials"):
                service.get_project_data(CREDENTIALS)

    def test_project_not_found(self, client, service):
        error = RemoteValidationError("missing", status_code=404)
        with patch.object(client, 'get_project', side_effect=error):
            with pytest.raises(DashboardFetchError, match="Jira project 'PC' not found"):
                service.get_project_data(CREDENTIALS)

    def test_unreachable(self, client, service):
        with patch.object(client, 'get_project', side_effect=RemoteUnavailableError("timeout")):
            with pytest.raises(DashboardFetchError, match="Could not connect to Jira"):
                service.get_project_data(CREDENTIALS)

    def test_missing_credentials(self, service):
        with pytest.raises(MissingCredentials):
            service.get_project_data(TrackerCredentials(url="", email="", api_token="", project_key="PC"))
