"""
Dashboard metrics over the issues and sprints of a tracker project.
"""
import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from dateutil import parser as date_parser

from core.domain.tracker import TrackerIssue, TrackerSprint

COMPLETED = 'completed'
IN_PROGRESS = 'in_progress'
TODO = 'todo'
BLOCKED = 'blocked'

# Matched in this order, case-insensitive substring
STATUS_KEYWORDS = (
    (COMPLETED, ('done', 'closed', 'resolved', 'finalizado', 'concluído', 'concluido')),
    (IN_PROGRESS, ('in progress', 'em progresso', 'development', 'desenvolvimento')),
    (TODO, ('to do', 'a fazer', 'open', 'aberto', 'backlog')),
    (BLOCKED, ('blocked', 'bloqueado', 'impediment')),
)

THROUGHPUT_TYPES = {
    'stories': ('Story', 'História', 'User Story'),
    'bugs': ('Bug', 'Defeito', 'Error'),
    'tasks': ('Task', 'Tarefa', 'Subtask'),
    'epics': ('Epic', 'Épico'),
}

VELOCITY_SPRINT_WINDOW = 6
RECENT_COMPLETION_DAYS = 28
REWORK_IN_PROGRESS_DAYS = 7
REWORK_STALE_DAYS = 14


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(part: int, total: int) -> int:
    return round_half_up(part / total * 100) if total > 0 else 0


def _to_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 86400


class StatusClassifier:
    """
    Maps the status names of a project onto dashboard buckets.

    Each distinct status is classified once. Statuses that match no keyword
    count as completed when an issue in that status has a resolution date,
    otherwise as to do.
    """

    def __init__(self, issues: Sequence[TrackerIssue]):
        self._buckets: Dict[str, str] = {}
        for issue in issues:
            status = issue.status or ''
            if status not in self._buckets:
                self._buckets[status] = self._match_keywords(status)
        for status, bucket in list(self._buckets.items()):
            if bucket is None:
                resolved = any(i.resolved for i in issues if (i.status or '') == status)
                self._buckets[status] = COMPLETED if resolved else TODO

    @staticmethod
    def _match_keywords(status: str) -> Optional[str]:
        lowered = status.lower()
        for bucket, keywords in STATUS_KEYWORDS:
            if any(keyword in lowered for keyword in keywords):
                return bucket
        return None

    def bucket(self, issue: TrackerIssue) -> str:
        status = issue.status or ''
        if status not in self._buckets:
            return self._match_keywords(status) or (COMPLETED if issue.resolved else TODO)
        return self._buckets[status]

    def is_completed(self, issue: TrackerIssue) -> bool:
        return self.bucket(issue) == COMPLETED

    def is_in_progress(self, issue: TrackerIssue) -> bool:
        return self.bucket(issue) == IN_PROGRESS

    @property
    def mapping(self) -> Dict[str, str]:
        return dict(self._buckets)


@dataclass
class DashboardMetrics:
    """Aggregated project metrics."""
    total_issues: int = 0
    completed_issues: int = 0
    in_progress_issues: int = 0
    todo_issues: int = 0
    blocked_issues: int = 0
    total_story_points: float = 0
    completed_story_points: float = 0
    average_velocity: int = 0
    average_lead_time: int = 0
    rework_rate: int = 0
    recent_completed_issues: int = 0
    completion_rate: int = 0
    throughput: Dict[str, int] = field(default_factory=dict)
    status_distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            'totalIssues': data['total_issues'],
            'completedIssues': data['completed_issues'],
            'inProgressIssues': data['in_progress_issues'],
            'todoIssues': data['todo_issues'],
            'blockedIssues': data['blocked_issues'],
            'totalStoryPoints': data['total_story_points'],
            'completedStoryPoints': data['completed_story_points'],
            'averageVelocity': data['average_velocity'],
            'averageLeadTime': data['average_lead_time'],
            'reworkRate': data['rework_rate'],
            'recentCompletedIssues': data['recent_completed_issues'],
            'completionRate': data['completion_rate'],
            'throughput': data['throughput'],
            'statusDistribution': data['status_distribution'],
        }


def _average_velocity(
    issues: Sequence[TrackerIssue],
    sprints: Sequence[TrackerSprint],
    classifier: StatusClassifier
) -> int:
    closed = [s for s in sprints if s.state == 'closed'][-VELOCITY_SPRINT_WINDOW:]
    if not closed:
        return 0
    total = 0
    for sprint in closed:
        total += sum(
            issue.story_points for issue in issues
            if issue.sprint == sprint.name and classifier.is_completed(issue)
        )
    return round_half_up(total / len(closed))


def _is_rework(issue: TrackerIssue, classifier: StatusClassifier) -> bool:
    created = _to_datetime(issue.created)
    updated = _to_datetime(issue.updated)
    in_progress = classifier.is_in_progress(issue)
    if issue.resolved and in_progress:
        return True
    if not (created and updated):
        return False
    days = _days_between(created, updated)
    return (
        (days > REWORK_IN_PROGRESS_DAYS and in_progress)
        or (days > REWORK_STALE_DAYS and not issue.resolved)
    )


def _average_lead_time(issues: Sequence[TrackerIssue]) -> int:
    lead_times: List[float] = []
    for issue in issues:
        created = _to_datetime(issue.created)
        resolved = _to_datetime(issue.resolved)
        if created and resolved:
            lead_times.append(_days_between(created, resolved))
    if not lead_times:
        return 0
    return round_half_up(sum(lead_times) / len(lead_times))


def calculate_metrics(
    issues: Sequence[TrackerIssue],
    sprints: Sequence[TrackerSprint],
    now: Optional[datetime] = None
) -> DashboardMetrics:
    """
    Compute dashboard metrics.

    Args:
        issues: Project issues
        sprints: Project sprints, oldest first
        now: Reference time for the recent completion window

    Returns:
        DashboardMetrics
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    classifier = StatusClassifier(issues)
    counts = {COMPLETED: 0, IN_PROGRESS: 0, TODO: 0, BLOCKED: 0}
    for issue in issues:
        counts[classifier.bucket(issue)] += 1

    total = len(issues)
    recent_cutoff = now - timedelta(days=RECENT_COMPLETION_DAYS)
    recent_completed = 0
    for issue in issues:
        resolved = _to_datetime(issue.resolved)
        if resolved and resolved >= recent_cutoff and classifier.is_completed(issue):
            recent_completed += 1

    rework = sum(1 for issue in issues if _is_rework(issue, classifier))

    return DashboardMetrics(
        total_issues=total,
        completed_issues=counts[COMPLETED],
        in_progress_issues=counts[IN_PROGRESS],
        todo_issues=counts[TODO],
        blocked_issues=counts[BLOCKED],
        total_story_points=sum(issue.story_points for issue in issues),
        completed_story_points=sum(
            issue.story_points for issue in issues if classifier.is_completed(issue)
        ),
        average_velocity=_average_velocity(issues, sprints, classifier),
        average_lead_time=_average_lead_time(issues),
        rework_rate=percentage(rework, total),
        recent_completed_issues=recent_completed,
        completion_rate=percentage(counts[COMPLETED], total),
        throughput={
            name: sum(1 for issue in issues if issue.issue_type in types)
            for name, types in THROUGHPUT_TYPES.items()
        },
        status_distribution={
            'todo': counts[TODO],
            'inProgress': counts[IN_PROGRESS],
            'completed': counts[COMPLETED],
            'blocked': counts[BLOCKED],
        },
    )
