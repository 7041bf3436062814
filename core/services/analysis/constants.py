"""
Vocabulary of the analysis documents produced by the scope summarizer.
"""
from core.domain.story import Priority

DEFAULT_PROJECT_NAME = "Projeto Sem Nome"
ACCEPTANCE_CRITERIA_PLACEHOLDER = "A definir conforme análise detalhada"
DEFINITION_OF_DONE = "Código revisado, testado e deployado"
DEFAULT_STORY_POINTS = 5

# Section headers of the structured (pipe-delimited) format
EPICS_SECTION = "ÉPICOS:"
SPRINTS_SECTION = "SPRINTS:"
STORIES_SECTION = "STORIES:"
SPRINT_PLAN_SECTION = "ORGANIZAÇÃO EM SPRINTS"

# Description block labels
DESCRIPTION_LABEL = "📋 DESCRIÇÃO"
WHAT_TO_DO_LABEL = "🎯 O QUE FAZER"
ACCEPTANCE_CRITERIA_LABEL = "📝 CRITÉRIOS DE ACEITE"

COMPLEXITY_POINTS = {
    'Baixa': 3,
    'Média': 5,
    'Alta': 8,
    'Muito Alta': 13,
}

COMPLEXITY_PRIORITY = {
    'Muito Alta': Priority.HIGH,
    'Alta': Priority.HIGH,
    'Média': Priority.MEDIUM,
}

# Markers meaning "no dependencies"
NO_DEPENDENCY_MARKERS = {'', 'NONE', '—', '-', 'NENHUMA', 'NENHUM', 'N/A'}

# Fallback titles starting with these words are section text, not stories
NON_STORY_TITLE_PREFIXES = ('sprint', 'epic', 'projeto')
