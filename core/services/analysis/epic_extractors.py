"""
Epic extractors.

Each extractor is a pure function over the document text. The parser keeps
the result of the first one that finds anything.
"""
import re
from typing import List

from core.domain.epic import Epic
from .constants import EPICS_SECTION
from .text_utils import extract_section, is_table_header, parse_int, split_ids, split_pipe_line

_TRADITIONAL_EPIC_RE = re.compile(
    r'\d+\. ([^-\n]+) - ([^-\n]+) - (\d+) story points\s*'
    r'Stories relacionadas: ([^\n]+)'
)


def extract_structured_epics(text: str) -> List[Epic]:
    """Epics from the pipe-delimited "ÉPICOS:" section.

    Expected line format: ``EPIC-1|Name|Description|8``
    """
    section = extract_section(text, EPICS_SECTION)
    if not section:
        return []

    epics = []
    for line in section.split('\n'):
        if '|' not in line:
            continue
        parts = split_pipe_line(line)
        if len(parts) < 4 or is_table_header(parts):
            continue
        epic_id, name, description, points = parts[:4]
        if not name:
            continue
        epics.append(Epic(
            name=name,
            description=description,
            story_points=parse_int(points),
            source_id=epic_id or None,
        ))
    return epics


def extract_traditional_epics(text: str) -> List[Epic]:
    """Epics written as numbered prose.

    Expected format::

        1. Autenticação - Login e cadastro - 21 story points
        Stories relacionadas: AUTH-1, AUTH-2
    """
    epics = []
    for match in _TRADITIONAL_EPIC_RE.finditer(text):
        name, description, points, stories = match.groups()
        epics.append(Epic(
            name=name.strip(),
            description=description.strip(),
            story_points=parse_int(points),
            related_story_ids=split_ids(stories),
        ))
    return epics
