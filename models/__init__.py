"""
Models package for the Fantasy Squad Analyst.

Provides data models for players, squads, analysis results and CSV imports.
"""
from .constants import Position, InjuryStatus, SuggestionType, Priority, Grade
from .fantasy_team import (
    Player,
    Squad,
    Suggestion,
    TeamAnalysis,
    ImportResult
)

__all__ = [
    'Position',
    'InjuryStatus',
    'SuggestionType',
    'Priority',
    'Grade',
    'Player',
    'Squad',
    'Suggestion',
    'TeamAnalysis',
    'ImportResult'
]
