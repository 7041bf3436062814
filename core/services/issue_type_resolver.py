"""
Choice of tracker issue types for epics and stories.

Issue type names differ per tracker instance and language, so they are
discovered at runtime and matched by keyword. The resolution is a pure
function over the set of available names.
"""
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from core.domain.diagnostics import DiagnosticEvent

# Used for stories when nothing suitable is available
DEFAULT_STORY_ISSUE_TYPE = "Task"

EPIC_KEYWORDS = ('epic', 'épico')
STORY_KEYWORDS = ('story', 'história')
TASK_KEYWORDS = ('task', 'tarefa')
SUBTASK_KEYWORDS = ('subtask', 'sub-task', 'subtarefa', 'sub-tarefa')


@dataclass(frozen=True)
class IssueTypeResolution:
    """Outcome of an issue type lookup.

    ``type_name`` is None only when nothing was found and there is no
    default to fall back on (epics).
    """
    type_name: Optional[str]
    strategy: str
    events: Tuple[DiagnosticEvent, ...] = field(default=(), compare=False)

    @property
    def found(self) -> bool:
        return self.type_name is not None


def _is_subtask(name: str) -> bool:
    return any(keyword in name for keyword in SUBTASK_KEYWORDS)


def _is_plain_task(name: str) -> bool:
    return any(keyword in name for keyword in TASK_KEYWORDS) and not _is_subtask(name)


def _first(names: Sequence[str], predicate: Callable[[str], bool]) -> Optional[str]:
    for name in names:
        if predicate(name):
            return name
    return None


def _contains_any(keywords: Sequence[str]) -> Callable[[str], bool]:
    return lambda name: any(keyword in name for keyword in keywords)


def _normalize(available: Sequence[str]) -> List[str]:
    names = []
    for name in available:
        lowered = (name or '').strip().lower()
        if lowered and lowered not in names:
            names.append(lowered)
    return names


def resolve_epic_issue_type(available: Sequence[str]) -> IssueTypeResolution:
    """
    Pick the issue type used for epics.

    Search order: a name containing epic/épico, then a task/tarefa that is
    not a subtask, then the first type that is not a subtask.

    Args:
        available: Issue type names of the project

    Returns:
        IssueTypeResolution; not found when no candidate exists
    """
    names = _normalize(available)
    searches = (
        ('epic', _contains_any(EPIC_KEYWORDS)),
        ('task', _is_plain_task),
        ('first_non_subtask', lambda name: not _is_subtask(name)),
    )
    for strategy, predicate in searches:
        chosen = _first(names, predicate)
        if chosen:
            return IssueTypeResolution(chosen, strategy, (
                DiagnosticEvent.info("epic_issue_type_resolved", issue_type=chosen, strategy=strategy),
            ))

    return IssueTypeResolution(None, 'not_found', (
        DiagnosticEvent.error("epic_issue_type_not_found", available=names),
    ))


def resolve_story_issue_type(available: Sequence[str]) -> IssueTypeResolution:
    """
    Pick the issue type used for user stories.

    Search order: story/história, then task/tarefa, then the first type that
    is not a subtask. A subtask choice is replaced by a task that is not a
    subtask, else by the default. Nothing found resolves to the default.

    Args:
        available: Issue type names of the project

    Returns:
        IssueTypeResolution, always with a type name
    """
    names = _normalize(available)
    searches = (
        ('story', _contains_any(STORY_KEYWORDS)),
        ('task', _contains_any(TASK_KEYWORDS)),
        ('first_non_subtask', lambda name: not _is_subtask(name)),
    )
    for strategy, predicate in searches:
        chosen = _first(names, predicate)
        if not chosen:
            continue
        if not _is_subtask(chosen):
            return IssueTypeResolution(chosen, strategy, (
                DiagnosticEvent.info("story_issue_type_resolved", issue_type=chosen, strategy=strategy),
            ))

        replacement = _first(names, _is_plain_task)
        events = [DiagnosticEvent.warning("story_issue_type_is_subtask", issue_type=chosen)]
        if replacement:
            events.append(DiagnosticEvent.info(
                "story_issue_type_resolved", issue_type=replacement, strategy='task_instead_of_subtask'
            ))
            return IssueTypeResolution(replacement, 'task_instead_of_subtask', tuple(events))
        events.append(DiagnosticEvent.info(
            "story_issue_type_resolved", issue_type=DEFAULT_STORY_ISSUE_TYPE, strategy='default'
        ))
        return IssueTypeResolution(DEFAULT_STORY_ISSUE_TYPE, 'default', tuple(events))

    return IssueTypeResolution(DEFAULT_STORY_ISSUE_TYPE, 'default', (
        DiagnosticEvent.warning(
            "story_issue_type_not_found", available=names, fallback=DEFAULT_STORY_ISSUE_TYPE
        ),
    ))
