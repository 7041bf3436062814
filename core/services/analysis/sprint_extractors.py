"""
Sprint extractors.

Each extractor is a pure function over the document text. The parser keeps
the result of the first one that finds anything.
"""
import re
from typing import List, Optional

from core.domain.sprint import Sprint
from .constants import SPRINTS_SECTION
from .text_utils import (
    extract_section,
    is_table_header,
    parse_int,
    split_pipe_line,
    unique_story_tokens,
)

_SPRINT_HEADER_RE = re.compile(
    r'Sprint (\d+) - ([^(\n]+)\s*\(([^)]+)\)\s*'
    r'Objetivo da Sprint: ([^\n]+)\s*'
    r'Horas totais: (\d+)h\s*'
    r'Story Points estimados: (\d+) pts'
)

# The sprint plan section runs until the backlog or the schedule
_SPRINT_PLAN_RE = re.compile(
    r'ORGANIZAÇÃO EM SPRINTS[\s\S]*?(?=BACKLOG ORGANIZADO|CRONOGRAMA|\Z)'
)


def extract_structured_sprints(text: str) -> List[Sprint]:
    """Sprints from the pipe-delimited "SPRINTS:" section.

    Expected line format:
    ``SPRINT-1|Name|Objective|01/09/2025|15/09/2025|40h|13``
    """
    section = extract_section(text, SPRINTS_SECTION)
    if not section:
        return []

    sprints = []
    for line in section.split('\n'):
        if '|' not in line:
            continue
        parts = split_pipe_line(line)
        if len(parts) < 7 or is_table_header(parts):
            continue
        sprint_id, name, objective, start_date, end_date, hours, points = parts[:7]
        if not name:
            continue
        sprints.append(Sprint(
            name=name,
            objective=objective,
            start_date=start_date,
            end_date=end_date,
            hours_total=parse_int(hours),
            story_points=parse_int(points),
            source_id=sprint_id or None,
        ))
    return sprints


def extract_traditional_sprints(text: str) -> List[Sprint]:
    """Sprints written as prose headers.

    When the document has an "ORGANIZAÇÃO EM SPRINTS" section, each sprint
    block in it (header up to the next header) also yields the story ids it
    lists. Headers found elsewhere carry no members.
    """
    plan_match = _SPRINT_PLAN_RE.search(text)
    if plan_match:
        sprints = _sprints_from_blocks(plan_match.group(0))
        if sprints:
            return sprints

    return [_sprint_from_header(match) for match in _SPRINT_HEADER_RE.finditer(text)]


def _sprints_from_blocks(plan: str) -> List[Sprint]:
    matches = list(_SPRINT_HEADER_RE.finditer(plan))
    sprints = []
    for index, match in enumerate(matches):
        block_end = matches[index + 1].start() if index + 1 < len(matches) else len(plan)
        sprints.append(_sprint_from_header(match, plan[match.start():block_end]))
    return sprints


def _sprint_from_header(match: re.Match, block: Optional[str] = None) -> Sprint:
    number, name, date_range, objective, hours, points = match.groups()
    dates = date_range.split(' a ')
    start_date = dates[0].strip() if dates else ''
    end_date = dates[1].strip() if len(dates) > 1 else ''
    return Sprint(
        name=name.strip(),
        objective=objective.strip(),
        start_date=start_date,
        end_date=end_date,
        hours_total=parse_int(hours),
        story_points=parse_int(points),
        member_story_ids=unique_story_tokens(block) if block else (),
        source_id=f"SPRINT-{number}",
    )
