"""
Analysis document parser.

Composes the extractor functions into the fixed tier order and resolves
their results into a single ScopeAnalysis.
"""
import re
from dataclasses import dataclass, replace
from typing import Callable, List, Sequence, Tuple, TypeVar

from core.domain.analysis import ScopeAnalysis
from core.domain.diagnostics import DiagnosticEvent
from core.domain.epic import Epic
from core.domain.exceptions import ParseFailure
from core.domain.sprint import Sprint
from core.domain.story import UserStory
from .constants import DEFAULT_PROJECT_NAME
from .epic_extractors import extract_structured_epics, extract_traditional_epics
from .sprint_extractors import extract_structured_sprints, extract_traditional_sprints
from .story_extractors import (
    extract_bullet_stories,
    extract_catch_all_stories,
    extract_generic_stories,
    extract_jira_style_stories,
    extract_numbered_requirements,
    extract_structured_stories,
    extract_traditional_requirements,
)

T = TypeVar('T')

_PROJECT_NAME_RE = re.compile(r'PROJETO\s*\n([^\n]+)')


@dataclass(frozen=True)
class Tier:
    """A named extractor in the resolution order."""
    name: str
    extract: Callable[[str], list]
    fallback_only: bool = False


EPIC_TIERS: Tuple[Tier, ...] = (
    Tier('structured', extract_structured_epics),
    Tier('traditional', extract_traditional_epics),
)

SPRINT_TIERS: Tuple[Tier, ...] = (
    Tier('structured', extract_structured_sprints),
    Tier('traditional', extract_traditional_sprints),
)

STORY_TIERS: Tuple[Tier, ...] = (
    Tier('structured', extract_structured_stories),
    Tier('numbered_requirements', extract_numbered_requirements),
    Tier('traditional_requirements', extract_traditional_requirements),
    Tier('bullets', extract_bullet_stories),
    Tier('jira_style', extract_jira_style_stories),
    Tier('generic', extract_generic_stories, fallback_only=True),
    Tier('catch_all', extract_catch_all_stories, fallback_only=True),
)


def first_non_empty(text: str, tiers: Sequence[Tier]) -> Tuple[List[T], str]:
    """Run tiers in order and keep the first non-empty result.

    Later tiers are never invoked once one has produced items.

    Returns:
        Tuple of (items, tier name); ([], '') when no tier matched
    """
    for tier in tiers:
        items = tier.extract(text)
        if items:
            return items, tier.name
    return [], ''


def collect_stories(
    text: str,
    tiers: Sequence[Tier] = STORY_TIERS
) -> Tuple[List[UserStory], List[DiagnosticEvent]]:
    """Merge stories of all regular tiers, first occurrence of an id wins.

    Fallback tiers only run while nothing has been found, and stop at the
    first one that finds something.
    """
    stories: List[UserStory] = []
    seen_ids = set()
    events: List[DiagnosticEvent] = []

    for tier in tiers:
        if tier.fallback_only and stories:
            break
        found = tier.extract(text)
        if not found:
            continue

        added = 0
        for story in found:
            if story.id in seen_ids:
                events.append(DiagnosticEvent.debug(
                    "duplicate_story_skipped", story_id=story.id, tier=tier.name
                ))
                continue
            seen_ids.add(story.id)
            stories.append(story)
            added += 1
        events.append(DiagnosticEvent.debug(
            "story_tier_matched", tier=tier.name, found=len(found), added=added
        ))

    return stories, events


def extract_project_name(text: str) -> str:
    match = _PROJECT_NAME_RE.search(text)
    if not match or not match.group(1).strip():
        return DEFAULT_PROJECT_NAME
    return match.group(1).strip()


def link_epics(epics: List[Epic], stories: List[UserStory]) -> List[Epic]:
    """Fill related story ids of document epics from the stories' epic links."""
    linked = []
    for epic in epics:
        if epic.source_id and not epic.related_story_ids:
            related = tuple(s.id for s in stories if s.epic_link == epic.source_id)
            if related:
                epic = replace(epic, related_story_ids=related)
        linked.append(epic)
    return linked


def link_sprints(sprints: List[Sprint], stories: List[UserStory]) -> List[Sprint]:
    """Fill members of sprints that list none from the stories' sprint links."""
    linked = []
    for sprint in sprints:
        if sprint.source_id and not sprint.member_story_ids:
            members = tuple(s.id for s in stories if s.sprint_link == sprint.source_id)
            if members:
                sprint = replace(sprint, member_story_ids=members)
        linked.append(sprint)
    return linked


class AnalysisParser:
    """Turns an analysis document into epics, sprints and user stories.

    Stateless: the same text always yields an equal ScopeAnalysis. A text in
    which nothing is recognized is a valid, empty result.
    """

    def parse(self, document_text: str) -> ScopeAnalysis:
        """
        Parse an analysis document.

        Args:
            document_text: Raw document text

        Returns:
            ScopeAnalysis with the extracted items and diagnostic events

        Raises:
            ParseFailure: If an extractor fails unexpectedly
        """
        text = document_text or ''
        try:
            return self._parse(text)
        except Exception as e:
            raise ParseFailure(len(text)) from e

    def _parse(self, text: str) -> ScopeAnalysis:
        events: List[DiagnosticEvent] = []

        project_name = extract_project_name(text)

        epics, epic_tier = first_non_empty(text, EPIC_TIERS)
        sprints, sprint_tier = first_non_empty(text, SPRINT_TIERS)
        stories, story_events = collect_stories(text)
        events.extend(story_events)

        epics = link_epics(epics, stories)
        sprints = link_sprints(sprints, stories)

        events.append(DiagnosticEvent.info(
            "analysis_parsed",
            project_name=project_name,
            epics=len(epics),
            epic_tier=epic_tier or None,
            sprints=len(sprints),
            sprint_tier=sprint_tier or None,
            user_stories=len(stories),
        ))
        if not (epics or sprints or stories):
            events.append(DiagnosticEvent.warning(
                "analysis_empty", document_length=len(text)
            ))

        return ScopeAnalysis(
            project_name=project_name,
            epics=tuple(epics),
            sprints=tuple(sprints),
            user_stories=tuple(stories),
            diagnostics=tuple(events),
        )
