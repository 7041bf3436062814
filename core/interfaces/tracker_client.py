"""
Remote tracker client interface.

The synthesizer and the dashboard depend on this contract only; the Jira
implementation lives in infrastructure.jira.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain.tracker import CreatedIssue, TrackerIssue, TrackerProject, TrackerSprint


class ITrackerClient(ABC):
    """Interface for the operations used against a Jira-like tracker.

    Implementations raise RemoteValidationError when the tracker rejects a
    request (4xx) and RemoteUnavailableError when it cannot be reached.
    """

    @abstractmethod
    def list_issue_types(self, project_key: str) -> List[str]:
        """List the issue type names available in a project.

        Args:
            project_key: Tracker project key (e.g., "PROJ")

        Returns:
            Lower-cased, unique issue type names in tracker order
        """
        pass

    @abstractmethod
    def create_issue(
        self,
        project_key: str,
        summary: str,
        description: str,
        issue_type_name: str
    ) -> CreatedIssue:
        """Create an issue.

        Args:
            project_key: Tracker project key
            summary: Issue summary (title)
            description: Plain text, sent as a rich-text document
            issue_type_name: Name of the issue type to use

        Returns:
            Key and id assigned by the tracker
        """
        pass

    @abstractmethod
    def get_board_id(self, project_key: str) -> Optional[int]:
        """Return the id of the first board of a project, or None."""
        pass

    @abstractmethod
    def create_sprint(
        self,
        board_id: int,
        name: str,
        start_date: str,
        end_date: str,
        goal: str
    ) -> int:
        """Create a sprint on a board.

        Args:
            board_id: Board that owns the sprint
            name: Sprint name (at most 30 characters)
            start_date: ISO-8601 start timestamp
            end_date: ISO-8601 end timestamp
            goal: Sprint goal

        Returns:
            Sprint id assigned by the tracker
        """
        pass

    @abstractmethod
    def assign_issue_to_sprint(self, sprint_id: int, issue_key: str) -> None:
        """Move an issue into a sprint."""
        pass

    def get_project(self, project_key: str) -> TrackerProject:
        """Fetch basic project information."""
        raise NotImplementedError

    def list_sprints(self, board_id: int) -> List[TrackerSprint]:
        """List the sprints of a board."""
        raise NotImplementedError

    def search_issues(self, project_key: str) -> List[TrackerIssue]:
        """List the issues of a project, newest first."""
        raise NotImplementedError
