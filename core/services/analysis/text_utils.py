"""
Small text helpers shared by the extractors.
"""
import re
from typing import List, Optional, Tuple

from core.domain.story import Priority
from .constants import (
    ACCEPTANCE_CRITERIA_LABEL,
    ACCEPTANCE_CRITERIA_PLACEHOLDER,
    COMPLEXITY_POINTS,
    COMPLEXITY_PRIORITY,
    DEFAULT_STORY_POINTS,
    DESCRIPTION_LABEL,
    NO_DEPENDENCY_MARKERS,
    WHAT_TO_DO_LABEL,
)

_LEADING_INT_RE = re.compile(r'\s*(\d+)')
_TABLE_RULE_RE = re.compile(r'^:?-*:?$')
STORY_ID_TOKEN_RE = re.compile(r'[A-Z]+-\d+')


def extract_section(text: str, section_name: str) -> Optional[str]:
    """Return the body of a named section, up to the next "HEADER:" line.

    Args:
        text: Full document text
        section_name: Section marker, e.g. "STORIES:"

    Returns:
        Stripped section body, or None when the marker is absent
    """
    pattern = re.compile(
        re.escape(section_name) + r'([\s\S]*?)(?=\n[A-ZÀ-Ý]+:|\Z)',
        re.IGNORECASE
    )
    match = pattern.search(text)
    return match.group(1).strip() if match else None


def parse_int(value: Optional[str], default: int = 0) -> int:
    """Parse the leading integer of a field ("40h", "8 pts"), else default."""
    if not value:
        return default
    match = _LEADING_INT_RE.match(value)
    if not match:
        return default
    return int(match.group(1))


def split_pipe_line(line: str) -> List[str]:
    """Cells of a pipe-delimited line.

    Markdown table rows (a leading pipe, usually with a trailing one) are
    accepted; a table separator row such as ``|---|:---:|`` yields no cells.
    """
    line = line.strip()
    if line.startswith('|'):
        line = line[1:]
        if line.endswith('|'):
            line = line[:-1]
    cells = [part.strip() for part in line.split('|')]
    if all(_TABLE_RULE_RE.match(cell) for cell in cells):
        return []
    return cells


def is_table_header(cells: List[str]) -> bool:
    """True for the column header row of a markdown table (first cell "ID" or "#")."""
    return bool(cells) and cells[0].upper() in ('ID', '#')


def split_ids(value: str) -> Tuple[str, ...]:
    """Split a comma separated id list, dropping empties."""
    return tuple(part.strip() for part in value.split(',') if part.strip())


def parse_dependencies(value: Optional[str]) -> Tuple[str, ...]:
    """Dependencies list, empty when the source says there are none."""
    if value is None or value.strip().upper() in NO_DEPENDENCY_MARKERS:
        return ()
    return split_ids(value)


def unique_story_tokens(text: str) -> Tuple[str, ...]:
    """Story-like id tokens of a text block, unique, in order of appearance."""
    seen = []
    for token in STORY_ID_TOKEN_RE.findall(text):
        if token.startswith(('SPRINT-', 'EPIC-')):
            continue
        if token not in seen:
            seen.append(token)
    return tuple(seen)


def complexity_to_points(complexity: str) -> int:
    return COMPLEXITY_POINTS.get(complexity.strip(), DEFAULT_STORY_POINTS)


def complexity_to_priority(complexity: str) -> Priority:
    return COMPLEXITY_PRIORITY.get(complexity.strip(), Priority.LOW)


def label_to_priority(label: Optional[str]) -> Priority:
    """Map an explicit priority label (English or Portuguese)."""
    if not label:
        return Priority.MEDIUM
    lowered = label.lower()
    if 'alta' in lowered or 'high' in lowered:
        return Priority.HIGH
    if 'baixa' in lowered or 'low' in lowered:
        return Priority.LOW
    return Priority.MEDIUM


def hours_to_points(hours: int) -> int:
    """Rough story point estimate when only hours are given."""
    if hours <= 4:
        return 3
    if hours <= 8:
        return 5
    if hours <= 16:
        return 8
    return 13


def build_story_description(
    base_description: str,
    what_to_do: str = "",
    acceptance_criteria: str = ""
) -> str:
    """Assemble the labelled description blocks of a story."""
    blocks = [f"{DESCRIPTION_LABEL}\n{base_description.strip()}"]
    if what_to_do and what_to_do.strip():
        blocks.append(f"{WHAT_TO_DO_LABEL}\n{what_to_do.strip()}")
    criteria = acceptance_criteria.strip() if acceptance_criteria else ""
    blocks.append(f"{ACCEPTANCE_CRITERIA_LABEL}\n{criteria or ACCEPTANCE_CRITERIA_PLACEHOLDER}")
    return "\n\n".join(blocks)
