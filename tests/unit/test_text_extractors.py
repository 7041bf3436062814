"""
Unit tests for epic and sprint extractors and the text helpers.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from core.domain.story import Priority
from core.services.analysis.epic_extractors import (
    extract_structured_epics,
    extract_traditional_epics
)
from core.services.analysis.sprint_extractors import (
    extract_structured_sprints,
    extract_traditional_sprints
)
from core.services.analysis.text_utils import (
    build_story_description,
    complexity_to_points,
    complexity_to_priority,
    extract_section,
    parse_dependencies,
    parse_int,
    split_pipe_line,
    unique_story_tokens
)


SPRINT_PLAN = """ORGANIZAÇÃO EM SPRINTS

Sprint 1 - Fundação (01/09/2025 a 14/09/2025)
Objetivo da Sprint: Base do sistema
Horas totais: 80h
Story Points estimados: 21 pts
Stories: AUTH-1, AUTH-2, AUTH-1

Sprint 2 - Pagamentos (15/09/2025 a 28/09/2025)
Objetivo da Sprint: Checkout
Horas totais: 60h
Story Points estimados: 13 pts
Stories: PAY-1

CRONOGRAMA
Entrega final: OUT-1
"""


class TestComplexityMapping:
    """Test complexity labels."""

    def test_points(self):
        assert complexity_to_points("Baixa") == 3
        assert complexity_to_points("Média") == 5
        assert complexity_to_points("Alta") == 8
        assert complexity_to_points("Muito Alta") == 13
        assert complexity_to_points("Desconhecida") == 5

    def test_priority(self):
        assert complexity_to_priority("Baixa") == Priority.LOW
        assert complexity_to_priority("Média") == Priority.MEDIUM
        assert complexity_to_priority("Alta") == Priority.HIGH
        assert complexity_to_priority(" Muito Alta ") == Priority.HIGH


class TestTextHelpers:
    """Test small parsing helpers."""

    def test_extract_section_stops_at_next_header(self):
        text = "ÉPICOS:\nEPIC-1|A|B|1\nSPRINTS:\nSPRINT-1|x\n"
        assert extract_section(text, "ÉPICOS:") == "EPIC-1|A|B|1"
        assert extract_section(text, "STORIES:") is None

    def test_parse_int(self):
        assert parse_int("40h") == 40
        assert parse_int(" 8 pts") == 8
        assert parse_int("abc") == 0
        assert parse_int(None, 5) == 5

    def test_parse_dependencies(self):
        assert parse_dependencies("NONE") == ()
        assert parse_dependencies("—") == ()
        assert parse_dependencies("Nenhuma") == ()
        assert parse_dependencies("") == ()
        assert parse_dependencies("AUTH-1, AUTH-2") == ("AUTH-1", "AUTH-2")

    def test_split_pipe_line(self):
        assert split_pipe_line("A-1 | Title |") == ["A-1", "Title", ""]
        assert split_pipe_line("| A-1 | Title |") == ["A-1", "Title"]
        assert split_pipe_line("|---|:---:|---:|") == []
        assert split_pipe_line("| | Title |") == ["", "Title"]

    def test_unique_story_tokens(self):
        assert unique_story_tokens("SPRINT-1 AUTH-1 AUTH-2 AUTH-1 EPIC-3") == ("AUTH-1", "AUTH-2")

    def test_description_placeholder(self):
        description = build_story_description("Base")
        assert description == "📋 DESCRIÇÃO\nBase\n\n📝 CRITÉRIOS DE ACEITE\nA definir conforme análise detalhada"


class TestEpicExtractors:
    """Test epic extractors."""

    def test_structured(self):
        epics = extract_structured_epics("ÉPICOS:\nEPIC-1|Login|Auth module|8\nEPIC-2|Short|x\n")

        assert len(epics) == 1
        assert epics[0].source_id == "EPIC-1"
        assert epics[0].story_points == 8

    def test_structured_markdown_table(self):
        text = (
            "ÉPICOS:\n"
            "| ID | Nome | Descrição | Pontos |\n"
            "|----|------|-----------|--------|\n"
            "| EPIC-1 | Login | Auth module | 8 |\n"
        )
        epics = extract_structured_epics(text)

        assert [epic.name for epic in epics] == ["Login"]
        assert epics[0].source_id == "EPIC-1"
        assert epics[0].story_points == 8

    def test_traditional(self):
        text = (
            "1. Autenticação - Login e cadastro - 21 story points\n"
            "Stories relacionadas: AUTH-1, AUTH-2\n"
            "2. Pagamentos - Checkout - 13 story points\n"
            "Stories relacionadas: PAY-1\n"
        )
        epics = extract_traditional_epics(text)

        assert [epic.name for epic in epics] == ["Autenticação", "Pagamentos"]
        assert epics[0].description == "Login e cadastro"
        assert epics[0].story_points == 21
        assert epics[1].related_story_ids == ("PAY-1",)


class TestSprintExtractors:
    """Test sprint extractors."""

    def test_structured(self):
        sprints = extract_structured_sprints(
            "SPRINTS:\nSPRINT-1|Sprint 1|MVP|01/09/2025|15/09/2025|40h|13\nSPRINT-2|incompleto\n"
        )

        assert len(sprints) == 1
        assert sprints[0].source_id == "SPRINT-1"
        assert sprints[0].hours_total == 40

    def test_structured_markdown_table(self):
        text = (
            "SPRINTS:\n"
            "| ID | Nome | Objetivo | Início | Fim | Horas | Pontos |\n"
            "|---|---|---|---|---|---|---|\n"
            "| SPRINT-1 | Sprint 1 | MVP | 01/09/2025 | 15/09/2025 | 40h | 13 |\n"
        )
        sprints = extract_structured_sprints(text)

        assert [sprint.name for sprint in sprints] == ["Sprint 1"]
        assert sprints[0].end_date == "15/09/2025"
        assert sprints[0].story_points == 13

    def test_traditional_plan_collects_members(self):
        sprints = extract_traditional_sprints(SPRINT_PLAN)

        assert [sprint.name for sprint in sprints] == ["Fundação", "Pagamentos"]
        assert sprints[0].start_date == "01/09/2025"
        assert sprints[0].end_date == "14/09/2025"
        assert sprints[0].objective == "Base do sistema"
        assert sprints[0].hours_total == 80
        assert sprints[0].story_points == 21
        assert sprints[0].member_story_ids == ("AUTH-1", "AUTH-2")
        assert sprints[1].member_story_ids == ("PAY-1",)
        assert sprints[1].source_id == "SPRINT-2"

    def test_traditional_headers_outside_plan(self):
        text = SPRINT_PLAN.replace("ORGANIZAÇÃO EM SPRINTS", "SPRINTS PREVISTOS")
        sprints = extract_traditional_sprints(text)

        assert len(sprints) == 2
        assert sprints[0].member_story_ids == ()
