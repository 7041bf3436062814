"""
Tests for the scope sync service.

Test modules:
- unit/test_analysis_parser: Tier resolution and end-to-end parsing
- unit/test_story_extractors: Individual story extractors
- unit/test_text_extractors: Epic and sprint extractors, text helpers
- unit/test_date_utils: Document date handling
- unit/test_issue_type_resolver: Issue type choice
- unit/test_sprint_assignment: Sprint choice for created stories
- unit/test_synthesizer: Jira structure synthesis against a fake tracker
- unit/test_dashboard_metrics: Dashboard metrics and read path
- unit/test_project_config: Project configuration and credentials lookup
- integration/test_jira_integration: Jira client with requests patched
- test_workflows: Workflow engine and CLI
"""
