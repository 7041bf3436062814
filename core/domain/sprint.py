"""
Sprint domain entity.
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple


# Jira rejects sprint names longer than this
MAX_SPRINT_NAME_LENGTH = 30


@dataclass(frozen=True)
class Sprint:
    """A time-boxed container of stories.

    Dates are kept as written in the source document (usually DD/MM/YYYY,
    sometimes prefixed with a duration such as "2 semanas - ") and are only
    normalized when sent to the tracker.
    """
    name: str
    objective: str
    start_date: str = ""
    end_date: str = ""
    hours_total: int = 0
    story_points: int = 0
    member_story_ids: Tuple[str, ...] = ()
    source_id: Optional[str] = None  # e.g. "SPRINT-1" in structured documents
    remote_id: Optional[int] = None

    def __post_init__(self):
        if self.hours_total < 0 or self.story_points < 0:
            raise ValueError("Sprint hours and story points cannot be negative")

    @property
    def remote_name(self) -> str:
        """Name truncated to the tracker's length limit."""
        if len(self.name) > MAX_SPRINT_NAME_LENGTH:
            return self.name[:MAX_SPRINT_NAME_LENGTH - 3] + '...'
        return self.name

    def with_remote(self, remote_id: int) -> 'Sprint':
        """Return a copy carrying the identifier assigned by the tracker."""
        return replace(self, remote_id=remote_id)
