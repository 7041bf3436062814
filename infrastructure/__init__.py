"""
Infrastructure layer - implementations of interfaces.

Contains:
- jira: Jira integration (issues, boards, sprints)
- repository_factory: Tracker client creation
"""
from .jira import (
    JiraHttpClient,
    JiraTrackerClient
)
from .repository_factory import (
    TrackerClientFactory,
    get_tracker_client
)

__all__ = [
    # Jira
    'JiraHttpClient',
    'JiraTrackerClient',
    # Factory
    'TrackerClientFactory',
    'get_tracker_client',
]
