"""
Jira infrastructure module.

Provides the HTTP client and the tracker client implementation for Jira.
"""
from .http_client import JiraHttpClient
from .jira_tracker_client import JiraTrackerClient, build_adf_document, extract_sprint_name

__all__ = ['JiraHttpClient', 'JiraTrackerClient', 'build_adf_document', 'extract_sprint_name']
