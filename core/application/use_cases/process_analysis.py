"""
Use case: Turn an analysis document into a Jira structure for a project.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from core.domain.exceptions import MissingCredentials
from core.interfaces.logger import ILogger
from core.interfaces.repository import IProjectRepository
from core.services.analysis import AnalysisParser
from .synthesize_jira_structure import JiraStructureSynthesizer, SynthesisResult


@dataclass(frozen=True)
class CredentialStatus:
    """Whether a project can be synchronized with the tracker."""
    target_id: str
    configured: bool
    project_key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'projectId': self.target_id,
            'hasJiraConfig': self.configured,
            'jiraProjectKey': self.project_key,
        }


class ProcessAnalysisUseCase:
    """Parse-then-synthesize entry point."""

    def __init__(
        self,
        project_repository: IProjectRepository,
        parser: AnalysisParser,
        synthesizer: JiraStructureSynthesizer,
        logger: ILogger
    ):
        self.project_repository = project_repository
        self.parser = parser
        self.synthesizer = synthesizer
        self.logger = logger

    def execute(self, document_text: str, target_id: str) -> SynthesisResult:
        """
        Parse an analysis document and create its structure in the project's tracker.

        Args:
            document_text: Analysis document
            target_id: Project identifier used for the credentials lookup

        Returns:
            SynthesisResult; unsuccessful when credentials are missing

        Raises:
            ParseFailure: If the extraction pipeline fails unexpectedly
        """
        analysis = self.parser.parse(document_text)
        self.logger.emit(analysis.diagnostics)

        credentials = self.project_repository.get_credentials(target_id)
        if credentials is None:
            error = MissingCredentials()
            self.logger.warning("jira_credentials_missing", project_id=target_id)
            return SynthesisResult(success=False, message=error.message)

        return self.synthesizer.synthesize(credentials, analysis)

    def check_credentials(self, target_id: str) -> CredentialStatus:
        """Report whether a project has usable tracker credentials."""
        credentials = self.project_repository.get_credentials(target_id)
        if credentials is None:
            return CredentialStatus(target_id=target_id, configured=False)
        return CredentialStatus(
            target_id=target_id,
            configured=True,
            project_key=credentials.project_key or None
        )
