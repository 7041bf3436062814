"""
Tracker client factory.

Creates tracker client implementations from credentials and settings.
"""
from typing import Optional

from core.config import TrackerSettings
from core.domain.tracker import TrackerCredentials
from core.interfaces.tracker_client import ITrackerClient
from infrastructure.jira.http_client import JiraHttpClient
from infrastructure.jira.jira_tracker_client import JiraTrackerClient


class TrackerClientFactory:
    """
    Factory for creating tracker clients.

    The synthesizer receives the factory instead of a client because
    credentials are only known per request.
    """

    def __init__(self, settings: Optional[TrackerSettings] = None):
        self._settings = settings or TrackerSettings.from_env()

    def create(self, credentials: TrackerCredentials) -> ITrackerClient:
        """
        Create a tracker client for a set of credentials.

        Args:
            credentials: Complete tracker credentials

        Returns:
            Tracker client implementation

        Raises:
            MissingCredentials: If a required credential is empty
        """
        credentials.ensure_complete()
        http_client = JiraHttpClient(
            base_url=credentials.url,
            email=credentials.email,
            api_token=credentials.api_token,
            timeout=self._settings.timeout
        )
        return JiraTrackerClient(http_client, max_issues=self._settings.max_issues)

    def __call__(self, credentials: TrackerCredentials) -> ITrackerClient:
        return self.create(credentials)


def get_tracker_client(credentials: TrackerCredentials) -> ITrackerClient:
    """Convenience function to get a tracker client with environment settings."""
    return TrackerClientFactory().create(credentials)
