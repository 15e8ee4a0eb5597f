"""
Squad Analysis Manager - Orchestrates the squad workflows behind the API.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from models.constants import DEFAULT_FORMATION
from models.fantasy_team import ImportResult, Player, Squad, TeamAnalysis
from schemas.squad import (
    SquadSchema,
    AddPlayerRequestSchema,
    MovePlayerRequestSchema,
    PlayerSearchRequestSchema,
    format_validation_errors
)
from services.player_mapper_service import PlayerMapperService
from services.roster_csv_service import RosterCSVService
from services.squad_builder_service import SquadBuilderService, SquadFullError
from services.team_grader_service import TeamGraderService

logger = logging.getLogger(__name__)

Lineup = Tuple[List[Player], List[Player]]


class SquadAnalysisManager:
    """Manages the end-to-end squad analysis and import process."""

    def __init__(self):
        self.grader = TeamGraderService()
        self.builder = SquadBuilderService()
        self.csv_service = RosterCSVService()
        self.mapper = PlayerMapperService()

    def analyze_payload(self, payload: Optional[Dict[str, Any]]) -> Tuple[Optional[TeamAnalysis], List[str]]:
        """
        Validate a submitted squad and analyse it.
        1. Validates the payload
        2. Builds the squad with recomputed totals
        3. Checks the lineup is complete
        4. Grades the squad
        """
        if not isinstance(payload, dict):
            return None, ["Request body must be a JSON object"]

        try:
            schema = SquadSchema.model_validate(payload)
        except ValidationError as ve:
            errors = format_validation_errors(ve)
            logger.warning(f"Rejected squad payload: {errors}")
            return None, errors

        squad = self.builder.build_squad(
            name=schema.name,
            starting=[p.to_player() for p in schema.starting],
            bench=[p.to_player() for p in schema.bench],
            formation=schema.formation,
            squad_id=schema.id
        )

        is_valid, errors = self.builder.validate_submission(squad)
        if not is_valid:
            logger.warning(f"Squad '{squad.name}' not ready for analysis: {errors}")
            return None, errors

        try:
            analysis = self.grader.evaluate(squad)
        except Exception as e:
            logger.exception(f"Analysis error for squad '{squad.name}'")
            return None, [f"Processing error: {str(e)}"]

        logger.info(f"Analysed squad '{squad.name}': grade {analysis.overall_grade.value}")
        return analysis, []

    def add_player(self, payload: Optional[Dict[str, Any]]) -> Tuple[Optional[Lineup], List[str]]:
        """
        Add a player to a submitted lineup.

        Returns:
            ((starting, bench), []) or (None, errors)
        """
        if not isinstance(payload, dict):
            return None, ["Request body must be a JSON object"]

        try:
            edit = AddPlayerRequestSchema.model_validate(payload)
        except ValidationError as ve:
            return None, format_validation_errors(ve)

        try:
            lineup = self.builder.add_player(
                [p.to_player() for p in edit.starting],
                [p.to_player() for p in edit.bench],
                edit.player.to_player(),
                edit.formation
            )
        except SquadFullError as e:
            return None, [str(e)]

        return lineup, []

    def move_player(self, payload: Optional[Dict[str, Any]]) -> Tuple[Optional[Lineup], List[str]]:
        """
        Move a player between the starting lineup and bench.

        Returns:
            ((starting, bench), []) or (None, errors)
        """
        if not isinstance(payload, dict):
            return None, ["Request body must be a JSON object"]

        try:
            edit = MovePlayerRequestSchema.model_validate(payload)
        except ValidationError as ve:
            return None, format_validation_errors(ve)

        try:
            lineup = self.builder.move_player(
                [p.to_player() for p in edit.starting],
                [p.to_player() for p in edit.bench],
                edit.player_id,
                edit.from_starting
            )
        except KeyError as e:
            return None, [e.args[0]]

        return lineup, []

    def search_players(self, payload: Optional[Dict[str, Any]]) -> Tuple[Optional[List[Player]], List[str]]:
        """
        Map a data feed to players and select from them.
        1. Validates the payload
        2. Maps every feed element to a Player
        3. Resolves picks, looks up one player id, or runs the search

        Returns:
            (players, []) or (None, errors)
        """
        if not isinstance(payload, dict):
            return None, ["Request body must be a JSON object"]

        try:
            search = PlayerSearchRequestSchema.model_validate(payload)
        except ValidationError as ve:
            return None, format_validation_errors(ve)

        try:
            players = self.mapper.map_elements(search.elements, search.teams)
        except Exception as e:
            logger.exception("Failed to map feed elements")
            return None, [f"Processing error: {str(e)}"]

        if search.picks is not None:
            picks = [pick.model_dump() for pick in search.picks]
            return self.mapper.convert_picks(picks, players), []

        if search.player_id is not None:
            player = self.mapper.find_player(players, search.player_id)
            if player is None:
                return None, [f"Player {search.player_id} not found"]
            return [player], []

        results = self.mapper.search_players(players, search.position, search.search, search.limit)
        logger.debug(f"Player search '{search.search}' matched {len(results)} of {len(players)}")
        return results, []

    def import_csv(
        self,
        content: str,
        team_name: str = 'Imported Team',
        formation: str = DEFAULT_FORMATION
    ) -> Tuple[ImportResult, Squad]:
        """
        Import a squad from CSV text and arrange it by formation.

        Import errors are advisory; the squad is built from whatever parsed.
        """
        result = self.csv_service.parse_csv(content)
        starting, bench = self.builder.arrange_by_formation(result.players, formation)
        squad = self.builder.build_squad(team_name, starting, bench, formation)

        if result.has_errors:
            logger.info(f"Imported '{team_name}' with {len(result.errors)} advisory error(s)")

        return result, squad
