"""
User story extractors.

One pure function per document dialect. The parser runs them in a fixed
order, merges what they find (first occurrence of an id wins) and only
falls back to the permissive generic extractors when nothing else matched.
"""
import re
from typing import List, Optional

from core.domain.story import Priority, UserStory
from .constants import (
    ACCEPTANCE_CRITERIA_PLACEHOLDER,
    DEFAULT_STORY_POINTS,
    DEFINITION_OF_DONE,
    NON_STORY_TITLE_PREFIXES,
    STORIES_SECTION,
)
from .text_utils import (
    build_story_description,
    complexity_to_points,
    complexity_to_priority,
    extract_section,
    hours_to_points,
    is_table_header,
    label_to_priority,
    parse_dependencies,
    parse_int,
    split_pipe_line,
)

# Body shared by the "1 - ID – ..." and "N - ID – ..." requirement formats
_REQUIREMENT_BODY = (
    r'([A-Z]+-\d+) [–-] ([^\n]+)\s*'
    r'Módulo: ([^\n]+)\s*'
    r'Tipo: ([^\n]+)\s*'
    r'Descrição: ([^\n]+)[\s\S]*?'
    r'Critérios de aceite: ([^\n]+)[\s\S]*?'
    r'(?:O que fazer: ([^\n]*(?:\n(?![\w\s]*:)[^\n]*)*))?\s*'
    r'Complexidade: ([^\n]+)\s*'
    r'Estimativa: (\d+)h\s*'
    r'(?:Data início: ([^\n]+))?\s*'
    r'(?:Data fim: ([^\n]+))?\s*'
    r'Dependências: ([^\n]+)'
)
_NUMBERED_REQUIREMENT_RE = re.compile(r'\d+ - ' + _REQUIREMENT_BODY)
_TRADITIONAL_REQUIREMENT_RE = re.compile(r'N - ' + _REQUIREMENT_BODY)

_BULLET_STORY_RE = re.compile(
    r'•\s*([A-Z]+-?\d+)\s*[-–]\s*([^|\n]+)'
    r'(?:\s*\|\s*(\d+)h)?'
    r'(?:\s*\|\s*(\d+)\s*pts)?'
    r'(?:\s*\|\s*Priority:\s*(Alta|Média|Baixa|High|Medium|Low))?',
    re.IGNORECASE
)

_JIRA_STORY_START_RE = re.compile(
    r'•\s*Story:\s*Como\s+([^,\n]+),\s*quero\s+([^,\n]+),\s*para\s+([^\n]+)',
    re.IGNORECASE
)
_JIRA_FIELD_LABELS = (
    r'ID|O que fazer|Estimativa|Data início|Data fim|Acceptance Criteria|Story Points|Priority'
)

_GENERIC_STORY_RE = re.compile(
    r'^[ \t]*(?:[-*•][ \t]*)?([A-Z]{2,6}[-_]?\d{1,4})[ \t]*[-–:][ \t]*([^\n|]+)'
    r'(?:[ \t]*\|[ \t]*([^\n]+))?',
    re.MULTILINE
)
_CATCH_ALL_STORY_RE = re.compile(
    r'^[ \t]*([A-Z]{2,6}[-_]?\d{1,4})(?:[ \t]*[-–:.][ \t]*)?([^\n]+)',
    re.MULTILINE
)


def _simple_story(
    story_id: str,
    title: str,
    story_points: int = DEFAULT_STORY_POINTS,
    priority: Priority = Priority.MEDIUM,
    hours: int = 0
) -> UserStory:
    """Story for formats that carry only an id and a title."""
    return UserStory(
        id=story_id.strip(),
        title=title.strip(),
        description=build_story_description(f"Story: {title.strip()}"),
        story_points=story_points,
        priority=priority,
        acceptance_criteria=ACCEPTANCE_CRITERIA_PLACEHOLDER,
        definition_of_done=DEFINITION_OF_DONE,
        hours=hours,
    )


def extract_structured_stories(text: str) -> List[UserStory]:
    """Stories from the pipe-delimited "STORIES:" section.

    Field order: id, title, description, acceptance criteria, epic link,
    sprint link, hours, story points, priority, start date, end date,
    dependencies. Template lines starting with "EXEMPLO" are ignored.
    """
    section = extract_section(text, STORIES_SECTION)
    if not section:
        return []

    stories = []
    for line in section.split('\n'):
        line = line.strip()
        if not line or '|' not in line:
            continue
        parts = split_pipe_line(line)
        if len(parts) < 12 or is_table_header(parts):
            continue
        (story_id, title, description, acceptance_criteria, epic_link, sprint_link,
         hours, points, priority, start_date, end_date, dependencies) = parts[:12]
        if not story_id or story_id.startswith('EXEMPLO'):
            continue

        if priority.lower() == 'high':
            mapped_priority = Priority.HIGH
        elif priority.lower() == 'low':
            mapped_priority = Priority.LOW
        else:
            mapped_priority = Priority.MEDIUM

        stories.append(UserStory(
            id=story_id,
            title=title,
            description=build_story_description(description, acceptance_criteria=acceptance_criteria),
            story_points=parse_int(points, DEFAULT_STORY_POINTS),
            priority=mapped_priority,
            acceptance_criteria=acceptance_criteria or ACCEPTANCE_CRITERIA_PLACEHOLDER,
            definition_of_done=DEFINITION_OF_DONE,
            dependencies=parse_dependencies(dependencies),
            hours=parse_int(hours),
            start_date=start_date,
            end_date=end_date,
            epic_link=epic_link,
            sprint_link=sprint_link,
        ))
    return stories


def _requirement_story(match: re.Match) -> UserStory:
    (story_id, title, _module, _kind, description, acceptance_criteria, what_to_do,
     complexity, hours, start_date, end_date, dependencies) = match.groups()
    criteria = (acceptance_criteria or '').strip() or ACCEPTANCE_CRITERIA_PLACEHOLDER
    return UserStory(
        id=story_id.strip(),
        title=title.strip(),
        description=build_story_description(description, what_to_do or '', criteria),
        story_points=complexity_to_points(complexity),
        priority=complexity_to_priority(complexity),
        acceptance_criteria=criteria,
        definition_of_done=DEFINITION_OF_DONE,
        dependencies=parse_dependencies(dependencies),
        hours=parse_int(hours),
        start_date=(start_date or '').strip(),
        end_date=(end_date or '').strip(),
    )


def extract_numbered_requirements(text: str) -> List[UserStory]:
    """Stories written as numbered requirements ("1 - ABC-1 – Title ...")."""
    return [_requirement_story(match) for match in _NUMBERED_REQUIREMENT_RE.finditer(text)]


def extract_traditional_requirements(text: str) -> List[UserStory]:
    """Stories written as "N - ABC-1 – Title ..." requirement blocks."""
    return [_requirement_story(match) for match in _TRADITIONAL_REQUIREMENT_RE.finditer(text)]


def extract_bullet_stories(text: str) -> List[UserStory]:
    """Stories written as bullets.

    Expected format: ``• ABC-1 - Title | 8h | 5 pts | Priority: Alta``.
    Hours, points and priority are optional; without points the estimate
    is derived from the hours.
    """
    stories = []
    for match in _BULLET_STORY_RE.finditer(text):
        story_id, title, hours, points, priority = match.groups()
        if points:
            story_points = parse_int(points, DEFAULT_STORY_POINTS)
        elif hours:
            story_points = hours_to_points(parse_int(hours))
        else:
            story_points = DEFAULT_STORY_POINTS
        stories.append(_simple_story(
            story_id,
            title,
            story_points=story_points,
            priority=label_to_priority(priority),
            hours=parse_int(hours),
        ))
    return stories


def _jira_field(block: str, label: str) -> Optional[str]:
    """Value of a "Label: value" field of a Jira-style block, up to the next label."""
    pattern = re.compile(
        rf'{label}:\s*(.*?)(?=\n\s*(?:[-•]\s*)?(?:{_JIRA_FIELD_LABELS})\s*:|\Z)',
        re.IGNORECASE | re.DOTALL
    )
    match = pattern.search(block)
    if not match:
        return None
    return match.group(1).strip() or None


def extract_jira_style_stories(text: str) -> List[UserStory]:
    """Stories written as "• Story: Como <persona>, quero <ação>, para <benefício>" blocks.

    The block runs until the next "• Story:" bullet and must carry an
    ``ID:``, ``Story Points:`` and ``Priority:`` field.
    """
    starts = list(_JIRA_STORY_START_RE.finditer(text))
    stories = []
    for index, start in enumerate(starts):
        block_end = starts[index + 1].start() if index + 1 < len(starts) else len(text)
        block = text[start.end():block_end]

        id_match = re.search(r'ID:\s*([A-Z]+-?\d+)', block, re.IGNORECASE)
        points_match = re.search(r'Story Points:\s*(\d+)', block, re.IGNORECASE)
        priority_match = re.search(
            r'Priority:\s*(High|Medium|Low|Alta|Média|Baixa)', block, re.IGNORECASE
        )
        if not (id_match and points_match and priority_match):
            continue

        persona, want, benefit = (part.strip() for part in start.groups())
        criteria = _jira_field(block, 'Acceptance Criteria') or ACCEPTANCE_CRITERIA_PLACEHOLDER
        stories.append(UserStory(
            id=id_match.group(1).strip(),
            title=f"Como {persona}, quero {want}",
            description=build_story_description(
                f"Como {persona}, quero {want}, para {benefit}",
                _jira_field(block, 'O que fazer') or '',
                criteria,
            ),
            story_points=parse_int(points_match.group(1), DEFAULT_STORY_POINTS),
            priority=label_to_priority(priority_match.group(1)),
            acceptance_criteria=criteria,
            definition_of_done=DEFINITION_OF_DONE,
            hours=parse_int(_jira_field(block, 'Estimativa')),
            start_date=_jira_field(block, 'Data início') or '',
            end_date=_jira_field(block, 'Data fim') or '',
        ))
    return stories


def extract_generic_stories(text: str) -> List[UserStory]:
    """Any "KEY-12 - Title | extra" line; extra may carry hours, points, priority."""
    stories = []
    for match in _GENERIC_STORY_RE.finditer(text):
        story_id, title, extra = match.groups()
        story_points = DEFAULT_STORY_POINTS
        priority = Priority.MEDIUM
        hours = 0

        if extra:
            hours_match = re.search(r'(\d+)h', extra, re.IGNORECASE)
            points_match = re.search(r'(\d+)\s*pts?', extra, re.IGNORECASE)
            priority_match = re.search(r'(alta|média|baixa|high|medium|low)', extra, re.IGNORECASE)
            if hours_match:
                hours = parse_int(hours_match.group(1))
            if points_match:
                story_points = parse_int(points_match.group(1), DEFAULT_STORY_POINTS)
            elif hours_match:
                story_points = hours_to_points(hours)
            if priority_match:
                priority = label_to_priority(priority_match.group(1))

        stories.append(_simple_story(story_id, title, story_points, priority, hours))
    return stories


def extract_catch_all_stories(text: str) -> List[UserStory]:
    """Last resort: any line that starts with an uppercase key-like token.

    The rest of the line must be longer than ten characters, not a bare
    number, and not start with a section word (sprint, epic, projeto).
    """
    stories = []
    for match in _CATCH_ALL_STORY_RE.finditer(text):
        story_id, title = match.groups()
        title = title.strip()
        if len(title) <= 10 or title.isdigit():
            continue
        if title.lower().startswith(NON_STORY_TITLE_PREFIXES):
            continue
        stories.append(_simple_story(story_id, title))
    return stories
