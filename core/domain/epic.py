"""
Epic domain entity.
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class Epic:
    """A large grouping of related stories."""
    name: str
    description: str
    story_points: int = 0
    related_story_ids: Tuple[str, ...] = ()
    source_id: Optional[str] = None  # e.g. "EPIC-1" in structured documents
    remote_key: Optional[str] = None
    remote_id: Optional[str] = None

    def __post_init__(self):
        if self.story_points < 0:
            raise ValueError("Epic story points cannot be negative")

    def with_remote(self, remote_key: str, remote_id: str) -> 'Epic':
        """Return a copy carrying the identifiers assigned by the tracker."""
        return replace(self, remote_key=remote_key, remote_id=remote_id)
