#!/usr/bin/env python3
"""
Scope Sync Workflows - Multi-Project Support

Workflow engine exposing the analysis synchronization operations:
1. Parse an analysis document and create its epics, sprints and stories in Jira
2. Check whether a project has usable Jira credentials
3. Dry-run parse of a document into the intermediate model
4. Dashboard metrics read back from Jira

Usage:
    python3 workflows.py process-analysis --project acme --file analysis.txt
    python3 workflows.py jira-status --project acme
    python3 workflows.py parse --file analysis.txt --output analysis.json
    python3 workflows.py dashboard --project acme
    python3 workflows.py list-projects
"""
import argparse
import json
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
from enum import Enum

from core.application.use_cases import (
    DashboardService,
    JiraStructureSynthesizer,
    ProcessAnalysisUseCase
)
from core.config import AppConfig
from core.domain.exceptions import MissingCredentials, ScopeSyncError
from core.interfaces.logger import ILogger
from core.services.analysis import AnalysisParser
from core.services.metrics import StructuredLogger
from infrastructure.repository_factory import TrackerClientFactory
from projects import ProjectManager


# =============================================================================
# DOMAIN: Workflow Result
# =============================================================================

class WorkflowStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"


@dataclass
class WorkflowResult:
    """Result of workflow execution."""
    status: WorkflowStatus
    message: str
    data: Dict[str, Any] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


@dataclass
class WorkflowContext:
    """Collaborators shared by all workflows."""
    project_manager: ProjectManager
    client_factory: TrackerClientFactory
    logger: ILogger
    default_project: Optional[str] = None

    def resolve_project_id(self, project_id: Optional[str]) -> Optional[str]:
        return project_id or self.default_project


def _read_document(path: str) -> str:
    return Path(path).read_text(encoding='utf-8')


def _print_json(data: Dict[str, Any]) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


# =============================================================================
# INTERFACE: IWorkflow
# =============================================================================

class IWorkflow(ABC):
    """Interface for all workflows."""

    # Whether the workflow operates on a configured project
    requires_project = True

    @property
    @abstractmethod
    def name(self) -> str:
        """Workflow name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Workflow description."""
        pass

    @abstractmethod
    def execute(self, context: WorkflowContext, **kwargs) -> WorkflowResult:
        """Execute the workflow."""
        pass

    @abstractmethod
    def validate_inputs(self, context: WorkflowContext, **kwargs) -> Optional[str]:
        """Validate inputs. Returns error message or None if valid."""
        pass


# =============================================================================
# WORKFLOW 1: Process Analysis
# =============================================================================

class ProcessAnalysisWorkflow(IWorkflow):
    """
    Parse an analysis document and create its structure in the project's Jira.
    """

    @property
    def name(self) -> str:
        return "process-analysis"

    @property
    def description(self) -> str:
        return "Create epics, sprints and stories of an analysis document in Jira"

    def validate_inputs(self, context: WorkflowContext, **kwargs) -> Optional[str]:
        if not context.resolve_project_id(kwargs.get('project_id')):
            return "project is required"
        if not kwargs.get('file'):
            return "file is required"
        return None

    def execute(self, context: WorkflowContext, **kwargs) -> WorkflowResult:
        project_id = context.resolve_project_id(kwargs.get('project_id'))
        document_path = kwargs['file']

        try:
            document_text = _read_document(document_path)
        except OSError as e:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"Could not read document {document_path}: {e}"
            )

        use_case = ProcessAnalysisUseCase(
            project_repository=context.project_manager,
            parser=AnalysisParser(),
            synthesizer=JiraStructureSynthesizer(context.client_factory, context.logger),
            logger=context.logger
        )

        print(f"\n{'='*60}")
        print("WORKFLOW: Process Analysis")
        print(f"Project: {project_id}")
        print(f"Document: {document_path}")
        print(f"{'='*60}\n")

        try:
            result = use_case.execute(document_text, project_id)
        except ScopeSyncError as e:
            return WorkflowResult(status=WorkflowStatus.FAILED, message=e.message)

        _print_json(result.to_dict())

        if not result.success:
            status = WorkflowStatus.FAILED
        elif result.failures:
            status = WorkflowStatus.PARTIAL
        else:
            status = WorkflowStatus.SUCCESS
        return WorkflowResult(status=status, message=result.message, data=result.to_dict())


# =============================================================================
# WORKFLOW 2: Jira Status
# =============================================================================

class JiraStatusWorkflow(IWorkflow):
    """Report whether a project has usable Jira credentials."""

    @property
    def name(self) -> str:
        return "jira-status"

    @property
    def description(self) -> str:
        return "Check whether a project has Jira credentials configured"

    def validate_inputs(self, context: WorkflowContext, **kwargs) -> Optional[str]:
        if not context.resolve_project_id(kwargs.get('project_id')):
            return "project is required"
        return None

    def execute(self, context: WorkflowContext, **kwargs) -> WorkflowResult:
        project_id = context.resolve_project_id(kwargs.get('project_id'))
        use_case = ProcessAnalysisUseCase(
            project_repository=context.project_manager,
            parser=AnalysisParser(),
            synthesizer=JiraStructureSynthesizer(context.client_factory, context.logger),
            logger=context.logger
        )
        status = use_case.check_credentials(project_id)
        _print_json(status.to_dict())

        if status.configured:
            message = f"Jira configured for {project_id} (project key: {status.project_key})"
        else:
            message = f"Jira not configured for {project_id}"
        return WorkflowResult(status=WorkflowStatus.SUCCESS, message=message, data=status.to_dict())


# =============================================================================
# WORKFLOW 3: Parse (dry run)
# =============================================================================

class ParseWorkflow(IWorkflow):
    """Parse an analysis document without touching Jira."""

    requires_project = False

    @property
    def name(self) -> str:
        return "parse"

    @property
    def description(self) -> str:
        return "Parse an analysis document into epics, sprints and stories"

    def validate_inputs(self, context: WorkflowContext, **kwargs) -> Optional[str]:
        if not kwargs.get('file'):
            return "file is required"
        return None

    def execute(self, context: WorkflowContext, **kwargs) -> WorkflowResult:
        document_path = kwargs['file']
        output_path = kwargs.get('output')

        try:
            document_text = _read_document(document_path)
        except OSError as e:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"Could not read document {document_path}: {e}"
            )

        try:
            analysis = AnalysisParser().parse(document_text)
        except ScopeSyncError as e:
            return WorkflowResult(status=WorkflowStatus.FAILED, message=e.message)
        context.logger.emit(analysis.diagnostics)

        data = analysis.to_dict()
        if output_path:
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            Path(output_path).write_text(
                json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8'
            )
        else:
            _print_json(data)

        message = (
            f"Parsed {len(analysis.epics)} epics, {len(analysis.sprints)} sprints, "
            f"{len(analysis.user_stories)} user stories"
        )
        status = WorkflowStatus.PARTIAL if analysis.is_empty else WorkflowStatus.SUCCESS
        return WorkflowResult(status=status, message=message, data=data)


# =============================================================================
# WORKFLOW 4: Dashboard
# =============================================================================

class DashboardWorkflow(IWorkflow):
    """Read a project back from Jira and compute dashboard metrics."""

    @property
    def name(self) -> str:
        return "dashboard"

    @property
    def description(self) -> str:
        return "Fetch sprints and issues from Jira and compute metrics"

    def validate_inputs(self, context: WorkflowContext, **kwargs) -> Optional[str]:
        if not context.resolve_project_id(kwargs.get('project_id')):
            return "project is required"
        return None

    def execute(self, context: WorkflowContext, **kwargs) -> WorkflowResult:
        project_id = context.resolve_project_id(kwargs.get('project_id'))
        credentials = context.project_manager.get_credentials(project_id)
        if credentials is None:
            return WorkflowResult(status=WorkflowStatus.FAILED, message=MissingCredentials().message)

        service = DashboardService(context.client_factory, context.logger)
        try:
            dashboard = service.get_project_data(credentials)
        except ScopeSyncError as e:
            return WorkflowResult(status=WorkflowStatus.FAILED, message=e.message)

        data = dashboard.to_dict()
        _print_json(data)
        metrics = dashboard.metrics
        return WorkflowResult(
            status=WorkflowStatus.SUCCESS,
            message=(
                f"{metrics.total_issues} issues, {metrics.completion_rate}% complete, "
                f"velocity {metrics.average_velocity}"
            ),
            data=data
        )


# =============================================================================
# WORKFLOW 5: List Projects
# =============================================================================

class ListProjectsWorkflow(IWorkflow):
    """List all available project configurations."""

    requires_project = False

    @property
    def name(self) -> str:
        return "list-projects"

    @property
    def description(self) -> str:
        return "List all available project configurations"

    def validate_inputs(self, context: WorkflowContext, **kwargs) -> Optional[str]:
        return None

    def execute(self, context: WorkflowContext, **kwargs) -> WorkflowResult:
        manager = context.project_manager
        projects = manager.list_projects()

        print(f"\n{'='*60}")
        print("Available Projects")
        print(f"{'='*60}\n")

        for project_id in projects:
            proj_config = manager.get_project(project_id)
            default = " (default)" if project_id == context.default_project else ""
            print(f"  {project_id}{default}")
            print(f"    Name: {proj_config.display_name}")
            if proj_config.jira:
                print(f"    Jira: {proj_config.jira.base_url} [{proj_config.jira.project_key}]")
            else:
                print("    Jira: not configured")
            print()

        return WorkflowResult(
            status=WorkflowStatus.SUCCESS,
            message=f"Found {len(projects)} projects",
            data={'projects': projects}
        )


# =============================================================================
# WORKFLOW ENGINE
# =============================================================================

def create_logger(config: AppConfig) -> StructuredLogger:
    """Structured logger configured from the environment."""
    return StructuredLogger(
        level=config.logging.level_number,
        enable_file=bool(config.logging.log_file),
        log_file=config.logging.log_file,
        json_format=config.logging.json_format
    )


class WorkflowEngine:
    """Orchestrates workflow execution with project configuration."""

    def __init__(self, context: Optional[WorkflowContext] = None):
        self._workflows: Dict[str, IWorkflow] = {}
        self._context = context or self._create_context()
        self._register_workflows()

    @staticmethod
    def _create_context() -> WorkflowContext:
        config = AppConfig.load()
        logger = create_logger(config)
        return WorkflowContext(
            project_manager=ProjectManager(config.projects_dir, logger=logger),
            client_factory=TrackerClientFactory(config.tracker),
            logger=logger,
            default_project=config.default_project
        )

    def _register_workflows(self):
        """Register all available workflows."""
        workflows = [
            ProcessAnalysisWorkflow(),
            JiraStatusWorkflow(),
            ParseWorkflow(),
            DashboardWorkflow(),
            ListProjectsWorkflow(),
        ]
        for workflow in workflows:
            self._workflows[workflow.name] = workflow

    def get_workflow(self, name: str) -> Optional[IWorkflow]:
        """Get workflow by name."""
        return self._workflows.get(name)

    def list_workflows(self) -> List[str]:
        """List all available workflow names."""
        return list(self._workflows.keys())

    def execute(self, workflow_name: str, project_id: str = None, **kwargs) -> WorkflowResult:
        """Execute a workflow by name."""
        workflow = self.get_workflow(workflow_name)

        if not workflow:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"Unknown workflow: {workflow_name}. Available: {self.list_workflows()}"
            )

        project_id = self._context.resolve_project_id(project_id)
        if project_id and workflow.requires_project:
            if self._context.project_manager.get_project(project_id) is None:
                return WorkflowResult(
                    status=WorkflowStatus.FAILED,
                    message=f"Project not found: {project_id}. Run 'list-projects' to see available projects."
                )

        # Validate inputs
        error = workflow.validate_inputs(self._context, project_id=project_id, **kwargs)
        if error:
            return WorkflowResult(
                status=WorkflowStatus.FAILED,
                message=f"Validation error: {error}"
            )

        return workflow.execute(self._context, project_id=project_id, **kwargs)


# =============================================================================
# CLI
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scope Sync Workflows - Multi-Project Support",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflows:
  process-analysis  Parse a document and create its structure in Jira
  jira-status       Check whether a project has Jira credentials
  parse             Parse a document without touching Jira
  dashboard         Compute dashboard metrics from Jira
  list-projects     List all available project configurations

Examples:
  python3 workflows.py process-analysis --project acme --file analysis.txt
  python3 workflows.py parse --file analysis.txt --output out/analysis.json
  python3 workflows.py dashboard --project acme
        """
    )

    # Global arguments
    parser.add_argument('--project', '-p', dest='project_id', help='Project configuration to use')

    subparsers = parser.add_subparsers(dest='workflow', help='Workflow to execute')

    def add_project_argument(sub: argparse.ArgumentParser) -> None:
        # Only overrides the global --project when given after the workflow name
        sub.add_argument('--project', '-p', dest='project_id', default=argparse.SUPPRESS,
                         help='Project configuration to use')

    process_parser = subparsers.add_parser('process-analysis', help='Create analysis structure in Jira')
    add_project_argument(process_parser)
    process_parser.add_argument('--file', '-f', required=True, help='Analysis document (UTF-8 text)')

    status_parser = subparsers.add_parser('jira-status', help='Check Jira credentials of a project')
    add_project_argument(status_parser)

    parse_parser = subparsers.add_parser('parse', help='Parse an analysis document (dry run)')
    parse_parser.add_argument('--file', '-f', required=True, help='Analysis document (UTF-8 text)')
    parse_parser.add_argument('--output', '-o', default=None, help='Write the parsed model to this JSON file')

    dashboard_parser = subparsers.add_parser('dashboard', help='Dashboard metrics from Jira')
    add_project_argument(dashboard_parser)

    subparsers.add_parser('list-projects', help='List all projects')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.workflow:
        parser.print_help()
        return 1

    # Convert args to kwargs
    kwargs = vars(args).copy()
    workflow_name = kwargs.pop('workflow')
    project_id = kwargs.pop('project_id', None)

    # Execute workflow
    engine = WorkflowEngine()
    result = engine.execute(workflow_name, project_id=project_id, **kwargs)

    # Exit code
    if result.status == WorkflowStatus.FAILED:
        print(f"\nERROR: {result.message}")
        return 1
    elif result.status == WorkflowStatus.PARTIAL:
        print(f"\nWARNING: {result.message}")
        return 0
    else:
        print(f"\nSUCCESS: {result.message}")
        return 0


if __name__ == '__main__':
    sys.exit(main())
