"""
Intermediate model produced by parsing an analysis document.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .diagnostics import DiagnosticEvent
from .epic import Epic
from .sprint import Sprint
from .story import UserStory


@dataclass(frozen=True)
class ScopeAnalysis:
    """Epics, sprints and user stories extracted from one document.

    Created fresh per parse and discarded after synthesis. Diagnostics are
    not part of equality, so parsing the same text twice compares equal.
    """
    project_name: str
    epics: Tuple[Epic, ...] = ()
    sprints: Tuple[Sprint, ...] = ()
    user_stories: Tuple[UserStory, ...] = ()
    diagnostics: Tuple[DiagnosticEvent, ...] = field(default=(), compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not (self.epics or self.sprints or self.user_stories)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used by the dry-run workflow."""
        return {
            'projectName': self.project_name,
            'epics': [
                {
                    'id': epic.source_id,
                    'name': epic.name,
                    'description': epic.description,
                    'storyPoints': epic.story_points,
                    'relatedStories': list(epic.related_story_ids),
                }
                for epic in self.epics
            ],
            'sprints': [
                {
                    'id': sprint.source_id,
                    'name': sprint.name,
                    'objective': sprint.objective,
                    'startDate': sprint.start_date,
                    'endDate': sprint.end_date,
                    'hoursTotal': sprint.hours_total,
                    'storyPoints': sprint.story_points,
                    'userStories': list(sprint.member_story_ids),
                }
                for sprint in self.sprints
            ],
            'userStories': [
                {
                    'id': story.id,
                    'title': story.title,
                    'description': story.description,
                    'storyPoints': story.story_points,
                    'priority': story.priority.value,
                    'acceptanceCriteria': story.acceptance_criteria,
                    'definitionOfDone': story.definition_of_done,
                    'dependencies': list(story.dependencies),
                    'hours': story.hours,
                    'startDate': story.start_date,
                    'endDate': story.end_date,
                    'epicLink': story.epic_link,
                    'sprint': story.sprint_link,
                }
                for story in self.user_stories
            ],
        }
