"""
Use case: Read a project back from the tracker and compute dashboard metrics.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from core.domain.exceptions import (
    DashboardFetchError,
    RemoteTrackerError,
    RemoteUnavailableError
)
from core.domain.tracker import TrackerCredentials, TrackerIssue, TrackerProject, TrackerSprint
from core.interfaces.logger import ILogger
from core.interfaces.tracker_client import ITrackerClient
from core.services.metrics.dashboard_metrics import DashboardMetrics, calculate_metrics


@dataclass
class DashboardData:
    project: TrackerProject
    sprints: List[TrackerSprint] = field(default_factory=list)
    issues: List[TrackerIssue] = field(default_factory=list)
    metrics: DashboardMetrics = field(default_factory=DashboardMetrics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'project': {'key': self.project.key, 'name': self.project.name},
            'sprints': [
                {
                    'id': sprint.id,
                    'name': sprint.name,
                    'state': sprint.state,
                    'startDate': sprint.start_date,
                    'endDate': sprint.end_date,
                    'completeDate': sprint.complete_date,
                    'goal': sprint.goal,
                }
                for sprint in self.sprints
            ],
            'issueCount': len(self.issues),
            'metrics': self.metrics.to_dict(),
        }


class DashboardService:
    """Dashboard read path over a tracker project."""

    def __init__(
        self,
        client_factory: Callable[[TrackerCredentials], ITrackerClient],
        logger: ILogger
    ):
        self.client_factory = client_factory
        self.logger = logger

    def get_project_data(
        self,
        credentials: TrackerCredentials,
        now: Optional[datetime] = None
    ) -> DashboardData:
        """
        Fetch project, sprints and issues and compute metrics.

        Args:
            credentials: Tracker credentials including the project key
            now: Reference time for time-window metrics

        Returns:
            DashboardData

        Raises:
            MissingCredentials: If credentials are incomplete
            DashboardFetchError: If the tracker rejects or cannot serve the request
        """
        credentials.ensure_complete()
        client = self.client_factory(credentials)
        project_key = credentials.project_key

        try:
            project = client.get_project(project_key)
            sprints = self._get_sprints(client, project_key)
            issues = client.search_issues(project_key)
        except RemoteUnavailableError as e:
            self.logger.error("dashboard_fetch_failed", project_key=project_key, error=str(e))
            raise DashboardFetchError(
                "Could not connect to Jira. Check the URL", details={'project_key': project_key}
            ) from e
        except RemoteTrackerError as e:
            self.logger.error(
                "dashboard_fetch_failed", project_key=project_key, status_code=e.status_code, error=str(e)
            )
            if e.status_code == 401:
                message = "Invalid Jira credentials"
            elif e.status_code == 404:
                message = f"Jira project '{project_key}' not found"
            else:
                message = f"Failed to fetch Jira data: {e.message}"
            raise DashboardFetchError(message, details={'project_key': project_key}) from e

        metrics = calculate_metrics(issues, sprints, now=now)
        self.logger.info(
            "dashboard_fetched",
            project_key=project_key,
            sprints=len(sprints),
            issues=len(issues),
            completion_rate=metrics.completion_rate
        )
        return DashboardData(project=project, sprints=sprints, issues=issues, metrics=metrics)

    def _get_sprints(self, client: ITrackerClient, project_key: str) -> List[TrackerSprint]:
        """Sprints of the project's first board; empty when there is none."""
        try:
            board_id = client.get_board_id(project_key)
            if board_id is None:
                self.logger.warning("dashboard_board_not_found", project_key=project_key)
                return []
            return client.list_sprints(board_id)
        except RemoteTrackerError as e:
            self.logger.warning("dashboard_sprints_unavailable", project_key=project_key, error=str(e))
            return []
