"""
Services Package - Business Logic Layer

This package contains service classes that encapsulate business logic,
keeping route handlers thin and focused on HTTP concerns.
"""

from .team_grader_service import TeamGraderService
from .roster_csv_service import RosterCSVService
from .squad_builder_service import SquadBuilderService, SquadFullError
from .player_mapper_service import PlayerMapperService
from .upload_service import UploadService
from .squad_analysis_manager import SquadAnalysisManager

__all__ = [
    'TeamGraderService',
    'RosterCSVService',
    'SquadBuilderService',
    'SquadFullError',
    'PlayerMapperService',
    'UploadService',
    'SquadAnalysisManager'
]
