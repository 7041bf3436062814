"""
Application use cases.
"""
from .synthesize_jira_structure import JiraStructureSynthesizer, SynthesisResult
from .process_analysis import ProcessAnalysisUseCase, CredentialStatus
from .fetch_dashboard import DashboardService, DashboardData

__all__ = [
    'JiraStructureSynthesizer',
    'SynthesisResult',
    'ProcessAnalysisUseCase',
    'CredentialStatus',
    'DashboardService',
    'DashboardData'
]
