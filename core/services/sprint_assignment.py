"""
Choice of the sprint a newly created story goes into.
"""
import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence, Tuple

from core.domain.diagnostics import DiagnosticEvent
from core.domain.sprint import Sprint
from core.domain.story import UserStory
from .date_utils import date_in_range

_SPRINT_REFERENCE_RE = re.compile(r'SPRINT-(\d+)', re.IGNORECASE)


@dataclass(frozen=True)
class SprintAssignment:
    """Sprint chosen for a story, and the rule that chose it."""
    sprint: Optional[Sprint]
    strategy: str
    events: Tuple[DiagnosticEvent, ...] = field(default=(), compare=False)


def _explicit_reference(story: UserStory, sprints: Sequence[Sprint]) -> Optional[Sprint]:
    match = _SPRINT_REFERENCE_RE.search(story.sprint_link or '')
    if not match:
        return None
    index = int(match.group(1)) - 1
    if 0 <= index < len(sprints):
        return sprints[index]
    return None


def _by_date(
    story: UserStory,
    sprints: Sequence[Sprint],
    now: Optional[datetime] = None
) -> Optional[Sprint]:
    if not story.start_date:
        return None
    for sprint in sprints:
        if date_in_range(story.start_date, sprint.start_date, sprint.end_date, now):
            return sprint
    return None


def _proportional(story_index: int, total_stories: int, sprints: Sequence[Sprint]) -> Optional[Sprint]:
    if story_index < 0 or total_stories <= 0:
        return None
    chunk = math.ceil(total_stories / len(sprints))
    return sprints[min(story_index // chunk, len(sprints) - 1)]


def resolve_target_sprint(
    story: UserStory,
    story_index: int,
    total_stories: int,
    created_sprints: Sequence[Sprint],
    now: Optional[datetime] = None
) -> SprintAssignment:
    """
    Choose the sprint for a story. First rule that matches wins:

    1. explicit ``SPRINT-<n>`` reference selects the n-th created sprint;
    2. the sprint whose date range contains the story's start date;
    3. proportional split of the full story list over the sprints;
    4. the first sprint.

    Args:
        story: Story being assigned
        story_index: Position of the story in the parsed story list
        total_stories: Length of the parsed story list
        created_sprints: Sprints created in the tracker, in creation order
        now: Reference time for sprints with missing dates

    Returns:
        SprintAssignment; sprint is None when there are no sprints
    """
    if not created_sprints:
        return SprintAssignment(None, 'none', (
            DiagnosticEvent.debug("no_sprint_available", story_id=story.id),
        ))

    rules = (
        ('explicit_reference', lambda: _explicit_reference(story, created_sprints)),
        ('date_range', lambda: _by_date(story, created_sprints, now)),
        ('proportional', lambda: _proportional(story_index, total_stories, created_sprints)),
        ('first_sprint', lambda: created_sprints[0]),
    )
    for strategy, rule in rules:
        sprint = rule()
        if sprint is not None:
            return SprintAssignment(sprint, strategy, (
                DiagnosticEvent.debug(
                    "sprint_resolved", story_id=story.id, sprint=sprint.name, strategy=strategy
                ),
            ))

    return SprintAssignment(None, 'none')
