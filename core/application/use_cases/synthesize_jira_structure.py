"""
Use case: Create epics, sprints and stories of a scope analysis in Jira.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.domain.analysis import ScopeAnalysis
from core.domain.epic import Epic
from core.domain.exceptions import MissingCredentials, RemoteTrackerError
from core.domain.sprint import Sprint
from core.domain.story import UserStory
from core.domain.tracker import TrackerCredentials
from core.interfaces.logger import ILogger
from core.interfaces.tracker_client import ITrackerClient
from core.services.date_utils import convert_date_to_iso
from core.services.issue_type_resolver import (
    resolve_epic_issue_type,
    resolve_story_issue_type
)
from core.services.sprint_assignment import resolve_target_sprint

TrackerClientFactory = Callable[[TrackerCredentials], ITrackerClient]


@dataclass
class SynthesisResult:
    """Outcome of one synthesis run."""
    success: bool
    message: str
    epics: Tuple[Epic, ...] = ()
    sprints: Tuple[Sprint, ...] = ()
    stories: Tuple[UserStory, ...] = ()
    stories_assigned: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def epics_created(self) -> int:
        return len(self.epics)

    @property
    def sprints_created(self) -> int:
        return len(self.sprints)

    @property
    def stories_created(self) -> int:
        return len(self.stories)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'message': self.message,
            'counts': {
                'epics': self.epics_created,
                'sprints': self.sprints_created,
                'userStories': self.stories_created,
                'assignedToSprints': self.stories_assigned,
                'failures': len(self.failures),
            },
        }


def epic_description(epic: Epic) -> str:
    return f"📋 ÉPICO\n{epic.description}\n\n📊 STORY POINTS: {epic.story_points}"


def story_description(story: UserStory) -> str:
    """Story description with the planning details appended."""
    description = story.description
    if story.hours:
        description += f"\n\n⏱️ ESTIMATIVA: {story.hours} horas"
    if story.start_date:
        description += f"\n📅 DATA INÍCIO: {story.start_date}"
    if story.end_date:
        description += f"\n📅 DATA FIM: {story.end_date}"
    if story.dependencies:
        description += f"\n🔗 DEPENDÊNCIAS: {', '.join(story.dependencies)}"
    return description


class JiraStructureSynthesizer:
    """
    Re-projects a ScopeAnalysis onto the tracker.

    Items are created one at a time, epics first, then sprints, then
    stories. A failing item is logged and skipped; the run continues.
    """

    def __init__(self, client_factory: TrackerClientFactory, logger: ILogger):
        """Initialize use case with dependencies.

        Args:
            client_factory: Builds a tracker client for a set of credentials
            logger: Structured logger
        """
        self.client_factory = client_factory
        self.logger = logger

    def synthesize(
        self,
        credentials: TrackerCredentials,
        analysis: ScopeAnalysis
    ) -> SynthesisResult:
        """
        Create the analysis structure in the tracker. Never raises.

        Args:
            credentials: Tracker credentials of the target project
            analysis: Parsed analysis

        Returns:
            SynthesisResult with the created items
        """
        try:
            credentials.ensure_complete()
        except MissingCredentials as e:
            self.logger.error("jira_credentials_missing", missing=e.missing_fields)
            return SynthesisResult(success=False, message=e.message)

        try:
            return self._synthesize(credentials, analysis)
        except Exception as e:
            self.logger.error(
                "jira_synthesis_failed",
                project_key=credentials.project_key,
                error_type=type(e).__name__,
                error=str(e)
            )
            return SynthesisResult(
                success=False,
                message=f"Failed to create Jira structure: {e}"
            )

    def _synthesize(
        self,
        credentials: TrackerCredentials,
        analysis: ScopeAnalysis
    ) -> SynthesisResult:
        client = self.client_factory(credentials)
        project_key = credentials.project_key
        failures: List[str] = []

        self.logger.info(
            "jira_synthesis_started",
            project_key=project_key,
            project_name=analysis.project_name,
            epics=len(analysis.epics),
            sprints=len(analysis.sprints),
            user_stories=len(analysis.user_stories)
        )

        issue_types = self._list_issue_types(client, project_key)
        epic_type = resolve_epic_issue_type(issue_types)
        story_type = resolve_story_issue_type(issue_types)
        self.logger.emit(epic_type.events)
        self.logger.emit(story_type.events)

        created_epics = self._create_epics(client, project_key, analysis.epics, epic_type.type_name, failures)

        board_id = self._get_board_id(client, project_key)
        if board_id is None:
            self.logger.warning("jira_board_not_found", project_key=project_key, sprints_skipped=len(analysis.sprints))
            created_sprints: List[Sprint] = []
        else:
            created_sprints = self._create_sprints(client, board_id, analysis.sprints, failures)

        created_stories, assigned = self._create_stories(
            client, project_key, analysis.user_stories, story_type.type_name, created_sprints, failures
        )

        message = (
            f"Jira structure created: {len(created_epics)}/{len(analysis.epics)} epics, "
            f"{len(created_sprints)}/{len(analysis.sprints)} sprints, "
            f"{len(created_stories)}/{len(analysis.user_stories)} user stories"
        )
        self.logger.info(
            "jira_synthesis_completed",
            project_key=project_key,
            epics_created=len(created_epics),
            sprints_created=len(created_sprints),
            stories_created=len(created_stories),
            stories_assigned=assigned,
            failures=len(failures)
        )
        return SynthesisResult(
            success=True,
            message=message,
            epics=tuple(created_epics),
            sprints=tuple(created_sprints),
            stories=tuple(created_stories),
            stories_assigned=assigned,
            failures=failures
        )

    def _list_issue_types(self, client: ITrackerClient, project_key: str) -> List[str]:
        try:
            issue_types = client.list_issue_types(project_key)
        except RemoteTrackerError as e:
            self.logger.error("jira_issue_types_failed", project_key=project_key, error=str(e))
            return []
        self.logger.debug("jira_issue_types", project_key=project_key, issue_types=issue_types)
        return issue_types

    def _get_board_id(self, client: ITrackerClient, project_key: str) -> Optional[int]:
        try:
            return client.get_board_id(project_key)
        except RemoteTrackerError as e:
            self.logger.error("jira_board_lookup_failed", project_key=project_key, error=str(e))
            return None

    def _create_epics(
        self,
        client: ITrackerClient,
        project_key: str,
        epics: Tuple[Epic, ...],
        issue_type: Optional[str],
        failures: List[str]
    ) -> List[Epic]:
        if not epics:
            return []
        if issue_type is None:
            self.logger.error("jira_epics_skipped", reason="no usable issue type", count=len(epics))
            failures.extend(f"epic:{epic.name}" for epic in epics)
            return []

        created: List[Epic] = []
        for epic in epics:
            try:
                issue = client.create_issue(project_key, epic.name, epic_description(epic), issue_type)
            except Exception as e:
                self.logger.error(
                    "jira_epic_failed",
                    epic=epic.name,
                    status_code=getattr(e, 'status_code', None),
                    error_type=type(e).__name__,
                    error=str(e)
                )
                failures.append(f"epic:{epic.name}")
                continue
            created.append(epic.with_remote(issue.remote_key, issue.remote_id))
            self.logger.info("jira_epic_created", epic=epic.name, key=issue.remote_key)
        return created

    def _create_sprints(
        self,
        client: ITrackerClient,
        board_id: int,
        sprints: Tuple[Sprint, ...],
        failures: List[str]
    ) -> List[Sprint]:
        created: List[Sprint] = []
        for sprint in sprints:
            name = sprint.remote_name
            if name != sprint.name:
                self.logger.debug("jira_sprint_name_truncated", original=sprint.name, name=name)
            try:
                sprint_id = client.create_sprint(
                    board_id,
                    name,
                    convert_date_to_iso(sprint.start_date),
                    convert_date_to_iso(sprint.end_date),
                    sprint.objective
                )
            except Exception as e:
                self.logger.error(
                    "jira_sprint_failed",
                    sprint=sprint.name,
                    status_code=getattr(e, 'status_code', None),
                    error_type=type(e).__name__,
                    error=str(e)
                )
                failures.append(f"sprint:{sprint.name}")
                continue
            created.append(sprint.with_remote(sprint_id))
            self.logger.info("jira_sprint_created", sprint=name, sprint_id=sprint_id)
        return created

    def _create_stories(
        self,
        client: ITrackerClient,
        project_key: str,
        stories: Tuple[UserStory, ...],
        issue_type: str,
        created_sprints: List[Sprint],
        failures: List[str]
    ) -> Tuple[List[UserStory], int]:
        created: List[UserStory] = []
        assigned = 0
        for index, story in enumerate(stories):
            try:
                issue = client.create_issue(project_key, story.title, story_description(story), issue_type)
            except Exception as e:
                self.logger.error(
                    "jira_story_failed",
                    story_id=story.id,
                    status_code=getattr(e, 'status_code', None),
                    error_type=type(e).__name__,
                    error=str(e)
                )
                failures.append(f"story:{story.id}")
                continue

            story = story.with_remote(issue.remote_key, issue.remote_id)
            created.append(story)
            self.logger.info("jira_story_created", story_id=story.id, key=issue.remote_key)

            if self._assign_to_sprint(client, story, index, len(stories), created_sprints):
                assigned += 1
        return created, assigned

    def _assign_to_sprint(
        self,
        client: ITrackerClient,
        story: UserStory,
        index: int,
        total: int,
        created_sprints: List[Sprint]
    ) -> bool:
        assignment = resolve_target_sprint(story, index, total, created_sprints)
        self.logger.emit(assignment.events)
        sprint = assignment.sprint
        if sprint is None:
            return False
        if sprint.remote_id is None:
            self.logger.error("jira_sprint_without_id", story_id=story.id, sprint=sprint.name)
            return False

        try:
            client.assign_issue_to_sprint(sprint.remote_id, story.remote_key)
        except Exception as e:
            self.logger.error(
                "jira_sprint_assignment_failed",
                story_id=story.id,
                sprint=sprint.name,
                status_code=getattr(e, 'status_code', None),
                error_type=type(e).__name__,
                error=str(e)
            )
            return False
        self.logger.info(
            "jira_story_assigned",
            story_id=story.id,
            key=story.remote_key,
            sprint=sprint.name,
            strategy=assignment.strategy
        )
        return True
