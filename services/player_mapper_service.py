"""
Player Mapper Service - Converts sports-data feed records into Players.

Maps the raw "element" records of the fantasy data feed (positions as
element types, prices in tenths, availability codes) to Player models and
derives projected points adjusted for availability. Mapped players can
then be searched, or resolved from a manager's team picks.
"""

from typing import Any, Dict, List, Optional

from models.constants import Position, InjuryStatus, SEARCH_RESULT_LIMIT
from models.fantasy_team import Player

ELEMENT_TYPE_POSITIONS = {
    1: Position.GK,
    2: Position.DEF,
    3: Position.MID,
    4: Position.FWD,
}

# Availability codes: a=available, d=doubtful, i=injured, s=suspended
UNAVAILABLE_CODES = {'i', 's'}


class PlayerMapperService:
    """Service for mapping feed records to Player models."""

    @staticmethod
    def get_injury_status(status: Optional[str], chance_of_playing: Optional[float] = None) -> InjuryStatus:
        """
        Classify availability.

        Rules (first match wins):
        - a: Healthy
        - d: Questionable if chance of playing > 50, else Doubtful
        - i/s: Out
        - anything else: Healthy
        """
        if status == 'a':
            return InjuryStatus.HEALTHY
        if status == 'd':
            if chance_of_playing and chance_of_playing > 50:
                return InjuryStatus.QUESTIONABLE
            return InjuryStatus.DOUBTFUL
        if status in UNAVAILABLE_CODES:
            return InjuryStatus.OUT
        return InjuryStatus.HEALTHY

    @staticmethod
    def get_injury_multiplier(status: Optional[str], chance_of_playing: Optional[float] = None) -> float:
        """
        Scale factor applied to projected points for availability.

        Doubtful players are scaled by their chance of playing (0 if unknown);
        injured and suspended players project 0.
        """
        if status == 'a':
            return 1.0
        if status == 'd':
            return (chance_of_playing or 0) / 100
        if status in UNAVAILABLE_CODES:
            return 0.0
        return 1.0

    @classmethod
    def calculate_projected_points(cls, element: Dict[str, Any]) -> float:
        """
        Project points from form and points per game.

        Uses the higher of the two, scaled by the injury multiplier and
        rounded to one decimal place.
        """
        form = cls._to_float(element.get('form'))
        points_per_game = cls._to_float(element.get('points_per_game'))
        multiplier = cls.get_injury_multiplier(
            element.get('status'),
            element.get('chance_of_playing_this_round')
        )
        return round(max(form, points_per_game) * multiplier, 1)

    @classmethod
    def map_element(cls, element: Dict[str, Any], teams: List[Dict[str, Any]]) -> Player:
        """
        Convert one feed element to a Player.

        Args:
            element: Raw player record
            teams: Raw team records used to resolve the club short name

        Returns:
            Player model
        """
        team = next((t for t in teams if t.get('id') == element.get('team')), None)
        now_cost = element.get('now_cost')

        return Player(
            id=str(element['id']),
            name=element.get('web_name', ''),
            position=ELEMENT_TYPE_POSITIONS.get(element.get('element_type'), Position.GK),
            team=team.get('short_name', 'UNK') if team else 'UNK',
            price=now_cost / 10 if now_cost is not None else None,
            projected_points=cls.calculate_projected_points(element),
            total_points=element.get('total_points'),
            form=cls._to_float(element.get('form')),
            ownership=cls._to_float(element.get('selected_by_percent')),
            injury_status=cls.get_injury_status(
                element.get('status'),
                element.get('chance_of_playing_this_round')
            ),
            news=element.get('news') or None
        )

    @classmethod
    def map_elements(cls, elements: List[Dict[str, Any]], teams: List[Dict[str, Any]]) -> List[Player]:
        """Convert a list of feed elements, preserving order."""
        return [cls.map_element(element, teams) for element in elements]

    @staticmethod
    def filter_by_position(players: List[Player], position: Position) -> List[Player]:
        """Players in one position, preserving order."""
        return [p for p in players if p.position == position]

    @staticmethod
    def find_player(players: List[Player], player_id: str) -> Optional[Player]:
        """First player with the given id, or None."""
        return next((p for p in players if p.id == player_id), None)

    @staticmethod
    def convert_picks(picks: List[Dict[str, Any]], players: List[Player]) -> List[Player]:
        """
        Resolve team picks to players.

        Each pick references a feed element id under 'element'. Picks whose
        element is not among the players are skipped; pick order is kept.
        """
        players_by_id = {p.id: p for p in players}
        resolved = []
        for pick in picks:
            player = players_by_id.get(str(pick.get('element')))
            if player is not None:
                resolved.append(player)
        return resolved

    @classmethod
    def search_players(
        cls,
        players: List[Player],
        position: Optional[Position] = None,
        term: str = '',
        limit: int = SEARCH_RESULT_LIMIT
    ) -> List[Player]:
        """
        Search players by name or club.

        Matching is a case-insensitive substring test on name and team.
        Names starting with the term rank first, then higher total points.

        Args:
            players: Players to search
            position: Optional position filter
            term: Search text; blank matches everyone
            limit: Maximum number of results

        Returns:
            Ranked matches
        """
        term = (term or '').strip().lower()
        if position is not None:
            players = cls.filter_by_position(players, position)

        matches = [p for p in players if term in p.name.lower() or term in p.team.lower()]
        matches.sort(key=lambda p: (not p.name.lower().startswith(term), -(p.total_points or 0)))
        return matches[:limit]

    @staticmethod
    def _to_float(value: Any) -> float:
        """Parse a feed number (often sent as a string), 0 if missing or invalid."""
        if value is None:
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0
