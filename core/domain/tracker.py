"""
Value objects exchanged with the remote issue tracker.
"""
from dataclasses import dataclass
from typing import List, Optional

from .exceptions import MissingCredentials


@dataclass(frozen=True)
class TrackerCredentials:
    """Per-project credentials for the remote tracker."""
    url: str
    email: str
    api_token: str
    project_key: str = ""

    def missing_fields(self) -> List[str]:
        """Names of the required fields that are empty."""
        required = {'url': self.url, 'email': self.email, 'api_token': self.api_token}
        return [name for name, value in required.items() if not value]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def ensure_complete(self) -> 'TrackerCredentials':
        """Return self, or raise MissingCredentials naming the empty fields."""
        missing = self.missing_fields()
        if missing:
            raise MissingCredentials(missing)
        return self


@dataclass(frozen=True)
class CreatedIssue:
    """Identifiers of an issue created in the tracker."""
    remote_key: str
    remote_id: str


@dataclass(frozen=True)
class TrackerProject:
    key: str
    name: str


@dataclass(frozen=True)
class TrackerSprint:
    """A sprint as read back from the tracker's board."""
    id: int
    name: str
    state: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    complete_date: Optional[str] = None
    goal: Optional[str] = None


@dataclass(frozen=True)
class TrackerIssue:
    """An issue as read back from the tracker for dashboard metrics."""
    id: str
    key: str
    summary: str
    status: str
    issue_type: str
    created: str
    updated: str
    story_points: float = 0
    assignee: Optional[str] = None
    resolved: Optional[str] = None
    sprint: Optional[str] = None
