"""
Unit tests for the analysis document parser.

Tests tier resolution, story merging and end-to-end parsing.
"""
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock, patch

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.domain.exceptions import ParseFailure
from core.domain.story import Priority
from core.services.analysis import AnalysisParser, Tier, first_non_empty, collect_stories
from core.services.analysis.parser import STORY_TIERS, extract_project_name
from tests.fakes import STRUCTURED_DOCUMENT


DECOY_DOCUMENT = """PROJETO
Loja Online

ÉPICOS:
EPIC-1|Catálogo|Listagem de produtos|13

OBSERVAÇÕES
1. Decoy - Não deve aparecer - 99 story points
Stories relacionadas: X-1, X-2
"""


class TestProjectName:
    """Test project name extraction."""

    def test_line_after_marker(self):
        assert extract_project_name("PROJETO\nPortal do Cliente\n") == "Portal do Cliente"

    def test_default_when_missing(self):
        assert extract_project_name("Documento qualquer") == "Projeto Sem Nome"


class TestTierResolution:
    """Test first_non_empty and collect_stories."""

    def test_first_non_empty_stops_at_first_match(self):
        """Later tiers are never invoked once one yields items."""
        first = Mock(return_value=['epic'])
        second = Mock(return_value=['other'])
        items, name = first_non_empty("text", [Tier('a', first), Tier('b', second)])

        assert items == ['epic']
        assert name == 'a'
        second.assert_not_called()

    def test_first_non_empty_falls_through(self):
        empty = Mock(return_value=[])
        second = Mock(return_value=['x'])
        items, name = first_non_empty("text", [Tier('a', empty), Tier('b', second)])

        assert items == ['x']
        assert name == 'b'

    def test_first_non_empty_nothing_found(self):
        assert first_non_empty("text", [Tier('a', Mock(return_value=[]))]) == ([], '')

    def test_fallback_tiers_skipped_when_stories_found(self):
        parser = AnalysisParser()
        story = parser.parse(STRUCTURED_DOCUMENT).user_stories[0]
        fallback = Mock(return_value=[])
        tiers = [Tier('main', Mock(return_value=[story])), Tier('fallback', fallback, fallback_only=True)]

        stories, _ = collect_stories("text", tiers)

        assert stories == [story]
        fallback.assert_not_called()

    def test_second_fallback_not_run_after_first_finds(self):
        parser = AnalysisParser()
        story = parser.parse(STRUCTURED_DOCUMENT).user_stories[0]
        first_fallback = Mock(return_value=[story])
        second_fallback = Mock(return_value=[])
        tiers = [
            Tier('main', Mock(return_value=[])),
            Tier('generic', first_fallback, fallback_only=True),
            Tier('catch_all', second_fallback, fallback_only=True),
        ]

        stories, _ = collect_stories("text", tiers)

        assert [s.id for s in stories] == ['AUTH-1']
        second_fallback.assert_not_called()

    def test_story_tier_order(self):
        names = [tier.name for tier in STORY_TIERS]
        assert names.index('structured') < names.index('bullets') < names.index('generic')
        assert [t.name for t in STORY_TIERS if t.fallback_only] == ['generic', 'catch_all']


class TestAnalysisParser:
    """Test AnalysisParser end to end."""

    def setup_method(self):
        self.parser = AnalysisParser()

    def test_structured_document(self):
        """One epic, one sprint and one story, linked together."""
        analysis = self.parser.parse(STRUCTURED_DOCUMENT)

        assert analysis.project_name == "Portal do Cliente"
        assert len(analysis.epics) == 1
        assert len(analysis.sprints) == 1
        assert len(analysis.user_stories) == 1

        epic = analysis.epics[0]
        assert epic.name == "Login"
        assert epic.description == "Auth module"
        assert epic.story_points == 8
        assert epic.related_story_ids == ("AUTH-1",)

        sprint = analysis.sprints[0]
        assert sprint.name == "Sprint 1"
        assert sprint.objective == "MVP"
        assert sprint.start_date == "01/09/2025"
        assert sprint.end_date == "15/09/2025"
        assert sprint.hours_total == 40
        assert sprint.story_points == 13
        assert sprint.member_story_ids == ("AUTH-1",)

        story = analysis.user_stories[0]
        assert story.id == "AUTH-1"
        assert story.title == "Login screen"
        assert story.story_points == 5
        assert story.priority == Priority.HIGH
        assert story.hours == 8
        assert story.sprint_link == "SPRINT-1"
        assert story.epic_link == "EPIC-1"
        assert story.dependencies == ()

    def test_idempotent(self):
        """Parsing the same text twice yields equal models."""
        assert self.parser.parse(STRUCTURED_DOCUMENT) == self.parser.parse(STRUCTURED_DOCUMENT)

    def test_structured_epics_exclude_traditional_decoy(self):
        analysis = self.parser.parse(DECOY_DOCUMENT)

        assert [epic.name for epic in analysis.epics] == ["Catálogo"]

    def test_traditional_epics_when_no_structured_section(self):
        text = "1. Autenticação - Login e cadastro - 21 story points\nStories relacionadas: AUTH-1, AUTH-2\n"
        analysis = self.parser.parse(text)

        assert len(analysis.epics) == 1
        assert analysis.epics[0].name == "Autenticação"
        assert analysis.epics[0].related_story_ids == ("AUTH-1", "AUTH-2")

    def test_duplicate_story_id_across_tiers(self):
        """First tier's data wins for a duplicated id."""
        text = STRUCTURED_DOCUMENT + "\nBACKLOG\n• AUTH-1 - Different title | 4h\n• AUTH-2 - Logout button | 4h\n"
        analysis = self.parser.parse(text)

        ids = [story.id for story in analysis.user_stories]
        assert ids == ["AUTH-1", "AUTH-2"]
        assert analysis.user_stories[0].title == "Login screen"
        assert analysis.user_stories[1].story_points == 3

    def test_markdown_table_stories(self):
        document = (
            "PROJETO\nPortal\n\n"
            "STORIES:\n"
            "| ID | Título | Descrição | Critérios | Épico | Sprint | Horas | Pontos"
            " | Prioridade | Início | Fim | Dependências |\n"
            "|---|---|---|---|---|---|---|---|---|---|---|---|\n"
            "| AUTH-1 | Login screen | Desc | AC | EPIC-1 | SPRINT-1 | 8h | 5 | High"
            " | 01/09/2025 | 05/09/2025 | NONE |\n"
        )
        analysis = self.parser.parse(document)

        assert [story.id for story in analysis.user_stories] == ["AUTH-1"]
        assert analysis.user_stories[0].priority == Priority.HIGH

    def test_empty_document_is_valid(self):
        analysis = self.parser.parse("")

        assert analysis.is_empty
        assert analysis.project_name == "Projeto Sem Nome"
        assert "analysis_empty" in [event.event for event in analysis.diagnostics]

    def test_parse_reports_summary_event(self):
        analysis = self.parser.parse(STRUCTURED_DOCUMENT)
        assert any(event.event == "analysis_parsed" for event in analysis.diagnostics)

    def test_to_dict(self):
        data = self.parser.parse(STRUCTURED_DOCUMENT).to_dict()

        assert data['projectName'] == "Portal do Cliente"
        assert data['userStories'][0]['priority'] == "High"
        assert data['sprints'][0]['userStories'] == ["AUTH-1"]

    @patch('core.services.analysis.parser.collect_stories', side_effect=RuntimeError("boom"))
    def test_unexpected_error_wrapped(self, mock_collect):
        """Internal errors surface as ParseFailure carrying only the length."""
        with pytest.raises(ParseFailure) as exc_info:
            self.parser.parse("segredo do cliente")

        assert exc_info.value.document_length == len("segredo do cliente")
        assert "segredo" not in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
