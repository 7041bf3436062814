"""
Repository interfaces for data access abstraction.

Following the Repository pattern to abstract data access from business logic.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain.tracker import TrackerCredentials


class IProjectRepository(ABC):
    """Interface for looking up persisted target projects."""

    @abstractmethod
    def get_credentials(self, target_id: str) -> Optional[TrackerCredentials]:
        """Retrieve usable tracker credentials for a target project.

        Args:
            target_id: The project identifier

        Returns:
            TrackerCredentials when url, email and API token are all set,
            None otherwise
        """
        pass

    @abstractmethod
    def list_projects(self) -> List[str]:
        """List all known project identifiers."""
        pass
