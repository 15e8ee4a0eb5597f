"""
Squad Builder Service - Assembles squads from a pool of players.

Handles formation parsing, arranging players into a starting XI and bench,
adding and moving players, squad totals and pre-analysis validation.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from models.constants import (
    Position,
    FORMATIONS,
    STARTING_XI_SIZE,
    MAX_BENCH_SIZE,
    MAX_SQUAD_SIZE,
)
from models.fantasy_team import Player, Squad

logger = logging.getLogger(__name__)


class SquadFullError(ValueError):
    """Raised when adding a player to a squad that is already full."""
    pass


@dataclass(frozen=True)
class FormationSlots:
    """Outfield slots for a formation (one goalkeeper is implied)."""
    defenders: int
    midfielders: int
    forwards: int

    def slots_for(self, position: Position) -> int:
        """Starting slots available for a position."""
        if position == Position.GK:
            return 1
        if position == Position.DEF:
            return self.defenders
        if position == Position.MID:
            return self.midfielders
        return self.forwards


# Defenders, midfielders, forwards used for missing formation parts
DEFAULT_SLOT_COUNTS = (4, 3, 3)


class SquadBuilderService:
    """Service for assembling and validating squads."""

    FORMATIONS = FORMATIONS

    @staticmethod
    def parse_formation(formation: str) -> FormationSlots:
        """
        Parse a formation label such as "3-4-3".

        Missing, unparsable or zero parts fall back to the 4-3-3 defaults.

        Args:
            formation: Formation label

        Returns:
            FormationSlots for defenders, midfielders and forwards
        """
        parts = (formation or '').split('-')
        values = []
        for index, default in enumerate(DEFAULT_SLOT_COUNTS):
            try:
                value = int(parts[index].strip())
            except (IndexError, ValueError):
                value = 0
            values.append(value or default)
        return FormationSlots(*values)

    @classmethod
    def arrange_by_formation(cls, players: List[Player], formation: str) -> Tuple[List[Player], List[Player]]:
        """
        Split a player pool into starting lineup and bench.

        The first goalkeeper starts; the first N defenders, midfielders and
        forwards start according to the formation. Everyone else is benched.
        Input order is preserved within each position.

        Args:
            players: Player pool
            formation: Formation label

        Returns:
            Tuple of (starting, bench)
        """
        slots = cls.parse_formation(formation)
        starting: List[Player] = []
        bench: List[Player] = []

        for position in Position:
            at_position = [p for p in players if p.position == position]
            limit = slots.slots_for(position)
            starting.extend(at_position[:limit])
            bench.extend(at_position[limit:])

        return starting, bench

    @classmethod
    def add_player(
        cls,
        starting: List[Player],
        bench: List[Player],
        player: Player,
        formation: str
    ) -> Tuple[List[Player], List[Player]]:
        """
        Add a player to the squad without modifying the given lists.

        The player starts if the formation has a free slot for their position,
        otherwise they go to the bench. Players already in the squad are ignored.

        Args:
            starting: Current starting lineup
            bench: Current bench
            player: Player to add
            formation: Current formation label

        Returns:
            Tuple of new (starting, bench) lists

        Raises:
            SquadFullError: If the squad already has the maximum number of players
        """
        new_starting = list(starting)
        new_bench = list(bench)
        all_players = new_starting + new_bench

        if any(p.id == player.id for p in all_players):
            return new_starting, new_bench

        if len(all_players) >= MAX_SQUAD_SIZE:
            raise SquadFullError(f"You can only have {MAX_SQUAD_SIZE} players in your squad")

        slots = cls.parse_formation(formation)
        starting_at_position = sum(1 for p in new_starting if p.position == player.position)

        if starting_at_position < slots.slots_for(player.position):
            new_starting.append(player)
        else:
            new_bench.append(player)

        return new_starting, new_bench

    @staticmethod
    def move_player(
        starting: List[Player],
        bench: List[Player],
        player_id: str,
        from_starting: bool
    ) -> Tuple[List[Player], List[Player]]:
        """
        Move a player between the starting lineup and the bench.

        Args:
            starting: Current starting lineup
            bench: Current bench
            player_id: Player to move
            from_starting: True to bench a starter, False to start a bench player

        Returns:
            Tuple of new (starting, bench) lists

        Raises:
            KeyError: If the player is not in the source list
        """
        source = starting if from_starting else bench
        player = next((p for p in source if p.id == player_id), None)
        if player is None:
            location = 'starting lineup' if from_starting else 'bench'
            raise KeyError(f"Player {player_id} is not in the {location}")

        if from_starting:
            return [p for p in starting if p.id != player_id], list(bench) + [player]
        return list(starting) + [player], [p for p in bench if p.id != player_id]

    @staticmethod
    def calculate_total_cost(players: List[Player]) -> float:
        """Sum of player prices (missing prices count as 0)."""
        return sum(p.get_price() for p in players)

    @staticmethod
    def calculate_projected_points(players: List[Player]) -> float:
        """Sum of projected points (missing projections count as 0)."""
        return sum(p.get_projected_points() for p in players)

    @classmethod
    def build_squad(
        cls,
        name: str,
        starting: List[Player],
        bench: List[Player],
        formation: str,
        squad_id: Optional[str] = None
    ) -> Squad:
        """
        Build a Squad with totals computed from its players.

        Total cost covers the whole squad; projected points cover starters only.
        """
        return Squad(
            id=squad_id,
            name=name,
            starting=list(starting),
            bench=list(bench),
            formation=formation,
            total_cost=cls.calculate_total_cost(list(starting) + list(bench)),
            total_projected_points=cls.calculate_projected_points(starting)
        )

    @staticmethod
    def validate_submission(squad: Squad) -> Tuple[bool, List[str]]:
        """
        Check a squad is ready to be analysed.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if len(squad.starting) != STARTING_XI_SIZE:
            errors.append(f"Please select exactly {STARTING_XI_SIZE} players for your starting lineup")

        if not squad.name or not squad.name.strip():
            errors.append('Please enter a team name')

        if len(squad.bench) > MAX_BENCH_SIZE:
            errors.append(f"Bench has too many players (maximum {MAX_BENCH_SIZE})")

        if squad.get_squad_size() > MAX_SQUAD_SIZE:
            errors.append(f"Squad has too many players (maximum {MAX_SQUAD_SIZE})")

        player_ids = [p.id for p in squad.get_all_players()]
        if len(player_ids) != len(set(player_ids)):
            errors.append('Each player can only appear once in a squad')

        if errors:
            logger.debug(f"Squad '{squad.name}' failed validation: {errors}")

        return (len(errors) == 0, errors)
