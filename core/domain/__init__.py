"""
Domain entities and value objects.
"""
from .analysis import ScopeAnalysis
from .diagnostics import DiagnosticEvent
from .epic import Epic
from .sprint import Sprint, MAX_SPRINT_NAME_LENGTH
from .story import UserStory, Priority
from .tracker import (
    TrackerCredentials,
    CreatedIssue,
    TrackerProject,
    TrackerSprint,
    TrackerIssue
)
from .exceptions import (
    ScopeSyncError,
    ParseFailure,
    MissingCredentials,
    RemoteTrackerError,
    RemoteValidationError,
    RemoteUnavailableError,
    DashboardFetchError
)
