"""
Text extraction engine for analysis documents.
"""
from .parser import (
    AnalysisParser,
    Tier,
    EPIC_TIERS,
    SPRINT_TIERS,
    STORY_TIERS,
    first_non_empty,
    collect_stories
)

__all__ = [
    'AnalysisParser',
    'Tier',
    'EPIC_TIERS',
    'SPRINT_TIERS',
    'STORY_TIERS',
    'first_non_empty',
    'collect_stories'
]
