"""
Core services - business logic and domain services.
"""
from .analysis import AnalysisParser
from .date_utils import convert_date_to_iso, parse_date_string, strip_duration_prefix
from .issue_type_resolver import (
    IssueTypeResolution,
    resolve_epic_issue_type,
    resolve_story_issue_type
)
from .sprint_assignment import SprintAssignment, resolve_target_sprint
from .metrics import (
    DashboardMetrics,
    StatusClassifier,
    calculate_metrics,
    StructuredLogger,
    StructuredFormatter
)

__all__ = [
    'AnalysisParser',
    'convert_date_to_iso',
    'parse_date_string',
    'strip_duration_prefix',
    'IssueTypeResolution',
    'resolve_epic_issue_type',
    'resolve_story_issue_type',
    'SprintAssignment',
    'resolve_target_sprint',
    'DashboardMetrics',
    'StatusClassifier',
    'calculate_metrics',
    'StructuredLogger',
    'StructuredFormatter',
]
