"""
User Story domain entity.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple


class Priority(str, Enum):
    """Story priority as understood by the tracker."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class UserStory:
    """Domain entity representing a user story extracted from an analysis."""
    id: str
    title: str
    description: str
    story_points: int
    priority: Priority
    acceptance_criteria: str
    definition_of_done: str
    dependencies: Tuple[str, ...] = ()
    hours: int = 0
    start_date: str = ""
    end_date: str = ""
    epic_link: str = ""
    sprint_link: str = ""
    remote_key: Optional[str] = None
    remote_id: Optional[str] = None

    def __post_init__(self):
        """Validate story after initialization."""
        if not self.id:
            raise ValueError("Story ID cannot be empty")
        if self.story_points < 0:
            raise ValueError("Story points cannot be negative")

    @property
    def is_synced(self) -> bool:
        """True once the story exists in the remote tracker."""
        return self.remote_key is not None

    def with_remote(self, remote_key: str, remote_id: str) -> 'UserStory':
        """Return a copy carrying the identifiers assigned by the tracker."""
        return replace(self, remote_key=remote_key, remote_id=remote_id)
