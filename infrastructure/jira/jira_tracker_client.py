"""
Jira implementation of the tracker client interface.
"""
import re
from typing import Any, Dict, List, Optional

from core.domain.exceptions import RemoteTrackerError
from core.domain.tracker import CreatedIssue, TrackerIssue, TrackerProject, TrackerSprint
from core.interfaces.tracker_client import ITrackerClient
from .http_client import JiraHttpClient

STORY_POINTS_FIELD = 'customfield_10016'
SPRINT_FIELD = 'customfield_10020'
SEARCH_FIELDS = [
    'summary', 'status', 'issuetype', 'assignee', 'created', 'updated',
    'resolutiondate', STORY_POINTS_FIELD, SPRINT_FIELD
]
SEARCH_PAGE_SIZE = 100

_SPRINT_NAME_RE = re.compile(r'name=([^,\]]+)')


def build_adf_document(text: str) -> Dict[str, Any]:
    """Wrap plain text into a minimal Atlassian Document Format document."""
    return {
        'type': 'doc',
        'version': 1,
        'content': [
            {
                'type': 'paragraph',
                'content': [{'type': 'text', 'text': text}]
            }
        ]
    }


def extract_sprint_name(sprint_field: Any) -> Optional[str]:
    """Name of the most recent sprint in an issue's sprint field.

    Jira Cloud returns a list of sprint objects; older instances return
    serialized strings like "...Sprint@1a2b[id=1,name=Sprint 1,...]".
    """
    if not sprint_field or not isinstance(sprint_field, list):
        return None
    latest = sprint_field[-1]
    if isinstance(latest, dict):
        return latest.get('name')
    match = _SPRINT_NAME_RE.search(str(latest))
    return match.group(1) if match else None


def _require_fields(response: Any, *fields: str) -> None:
    """Raise RemoteTrackerError when a create response lacks identifying fields."""
    if not isinstance(response, dict):
        raise RemoteTrackerError("Unexpected Jira response", payload=response)
    missing = [name for name in fields if response.get(name) in (None, '')]
    if missing:
        raise RemoteTrackerError(
            f"Jira response missing {', '.join(missing)}", payload=response
        )


class JiraTrackerClient(ITrackerClient):
    """Tracker operations over the Jira REST v3 and Agile v1.0 APIs."""

    def __init__(self, http_client: JiraHttpClient, max_issues: int = 1000):
        """
        Initialize the tracker client.

        Args:
            http_client: Authenticated HTTP client
            max_issues: Upper bound for issue searches
        """
        self._client = http_client
        self._max_issues = max_issues

    def list_issue_types(self, project_key: str) -> List[str]:
        """Issue type names from the project's status listing, lower-cased."""
        response = self._client.get(f"project/{project_key}/statuses")
        names: List[str] = []
        for entry in response or []:
            name = (entry.get('name') or '').lower()
            if name and name not in names:
                names.append(name)
        return names

    def create_issue(
        self,
        project_key: str,
        summary: str,
        description: str,
        issue_type_name: str
    ) -> CreatedIssue:
        payload = {
            'fields': {
                'project': {'key': project_key},
                'summary': summary,
                'description': build_adf_document(description),
                'issuetype': {'name': issue_type_name}
            }
        }
        response = self._client.post("issue", payload)
        _require_fields(response, 'key', 'id')
        return CreatedIssue(remote_key=response['key'], remote_id=str(response['id']))

    def get_board_id(self, project_key: str) -> Optional[int]:
        response = self._client.get("board", params={'projectKeyOrId': project_key}, agile=True)
        boards = response.get('values') or []
        if not boards:
            return None
        return boards[0]['id']

    def create_sprint(
        self,
        board_id: int,
        name: str,
        start_date: str,
        end_date: str,
        goal: str
    ) -> int:
        payload = {
            'name': name,
            'startDate': start_date,
            'endDate': end_date,
            'goal': goal,
            'originBoardId': board_id
        }
        response = self._client.post("sprint", payload, agile=True)
        _require_fields(response, 'id')
        return response['id']

    def assign_issue_to_sprint(self, sprint_id: int, issue_key: str) -> None:
        self._client.post(f"sprint/{sprint_id}/issue", {'issues': [issue_key]}, agile=True)

    def get_project(self, project_key: str) -> TrackerProject:
        response = self._client.get(f"project/{project_key}")
        return TrackerProject(key=response['key'], name=response.get('name', ''))

    def list_sprints(self, board_id: int) -> List[TrackerSprint]:
        response = self._client.get(
            f"board/{board_id}/sprint", params={'maxResults': 50}, agile=True
        )
        return [
            TrackerSprint(
                id=sprint['id'],
                name=sprint.get('name', ''),
                state=sprint.get('state', ''),
                start_date=sprint.get('startDate'),
                end_date=sprint.get('endDate'),
                complete_date=sprint.get('completeDate'),
                goal=sprint.get('goal')
            )
            for sprint in response.get('values') or []
        ]

    def search_issues(self, project_key: str) -> List[TrackerIssue]:
        """
        Fetch the issues of a project, newest first.

        Pages through the search API 100 issues at a time and stops at the
        configured maximum.
        """
        issues: List[TrackerIssue] = []
        start_at = 0
        while True:
            response = self._client.get("search", params={
                'jql': f"project = {project_key} ORDER BY created DESC",
                'startAt': start_at,
                'maxResults': SEARCH_PAGE_SIZE,
                'fields': ','.join(SEARCH_FIELDS)
            })
            page = response.get('issues') or []
            issues.extend(self._to_issue(raw) for raw in page)

            total = response.get('total', 0)
            start_at += SEARCH_PAGE_SIZE
            if not page or start_at >= total or start_at >= self._max_issues:
                break
        return issues[:self._max_issues]

    @staticmethod
    def _to_issue(raw: Dict[str, Any]) -> TrackerIssue:
        fields = raw.get('fields') or {}
        assignee = fields.get('assignee') or {}
        return TrackerIssue(
            id=str(raw.get('id', '')),
            key=raw.get('key', ''),
            summary=fields.get('summary') or '',
            status=(fields.get('status') or {}).get('name', ''),
            issue_type=(fields.get('issuetype') or {}).get('name', ''),
            created=fields.get('created') or '',
            updated=fields.get('updated') or '',
            story_points=fields.get(STORY_POINTS_FIELD) or 0,
            assignee=assignee.get('displayName'),
            resolved=fields.get('resolutiondate'),
            sprint=extract_sprint_name(fields.get(SPRINT_FIELD))
        )
