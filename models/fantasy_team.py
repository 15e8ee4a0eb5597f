"""
Fantasy Team Data Models

This module contains dataclasses for representing fantasy football squads,
the players in them, and the results of analysing or importing a squad.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from .constants import Position, InjuryStatus, SuggestionType, Priority, Grade


@dataclass(frozen=True)
class Player:
    """
    Represents a single fantasy football player.

    Attributes:
        id: Identifier, unique within a squad
        name: Display name
        position: Position (GK, DEF, MID, FWD)
        team: Club label (free text, e.g. "LIV")
        price: Price in millions
        projected_points: Expected points for the upcoming gameweek
        total_points: Season points total
        form: Recent form score
        ownership: Ownership percentage
        injury_status: Availability classification
        bye_week: Optional conflict period (blank gameweek / fixture clash)
        news: Free-text availability news
    """

    id: str
    name: str
    position: Position
    team: str
    price: Optional[float] = None
    projected_points: Optional[float] = None
    total_points: Optional[int] = None
    form: Optional[float] = None
    ownership: Optional[float] = None
    injury_status: Optional[InjuryStatus] = None
    bye_week: Optional[int] = None
    news: Optional[str] = None

    def get_projected_points(self) -> float:
        """Projected points, treating a missing projection as 0."""
        return self.projected_points if self.projected_points is not None else 0.0

    def get_price(self) -> float:
        """Price, treating a missing price as 0."""
        return self.price if self.price is not None else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'position': self.position.value,
            'team': self.team,
            'price': self.price,
            'projected_points': self.projected_points,
            'total_points': self.total_points,
            'form': self.form,
            'ownership': self.ownership,
            'injury_status': self.injury_status.value if self.injury_status else None,
            'bye_week': self.bye_week,
            'news': self.news,
        }


@dataclass
class Squad:
    """
    Represents a user's squad split into starting lineup and bench.

    Attributes:
        name: Team name
        starting: Starting lineup (11 when submitted for analysis)
        bench: Bench players (0-4)
        formation: Formation label, e.g. "3-4-3"
        total_cost: Sum of all player prices
        total_projected_points: Sum of starting projected points, if known
        id: Optional identifier assigned by the caller
    """

    name: str
    starting: List[Player] = field(default_factory=list)
    bench: List[Player] = field(default_factory=list)
    formation: str = "3-4-3"
    total_cost: float = 0.0
    total_projected_points: Optional[float] = None
    id: Optional[str] = None

    def get_all_players(self) -> List[Player]:
        """Starting players followed by bench players."""
        return list(self.starting) + list(self.bench)

    def get_squad_size(self) -> int:
        """Get total number of players in squad."""
        return len(self.starting) + len(self.bench)

    def get_position_counts(self, starting_only: bool = True) -> Dict[Position, int]:
        """
        Count players per position.

        Every position is present in the result, with 0 for positions that
        have no players.

        Args:
            starting_only: Count the starting lineup only (default) or the full squad

        Returns:
            Dictionary mapping Position to player count
        """
        players = self.starting if starting_only else self.get_all_players()
        counts = {position: 0 for position in Position}
        for player in players:
            counts[player.position] += 1
        return counts

    def get_starting_projected_points(self) -> float:
        """Sum of projected points across the starting lineup."""
        return sum(p.get_projected_points() for p in self.starting)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'formation': self.formation,
            'starting': [p.to_dict() for p in self.starting],
            'bench': [p.to_dict() for p in self.bench],
            'total_cost': self.total_cost,
            'total_projected_points': self.total_projected_points,
        }


@dataclass
class Suggestion:
    """
    A single improvement suggestion produced by squad analysis.

    Attributes:
        id: Stable identifier for the rule that produced it
        type: Kind of action (add, drop, start, bench, trade)
        priority: Urgency band (high, medium, low)
        title: Short headline
        description: What was found
        reasoning: Why it matters
        projected_impact: Estimated points gained by acting on it
    """

    id: str
    type: SuggestionType
    priority: Priority
    title: str
    description: str
    reasoning: str
    projected_impact: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type.value,
            'priority': self.priority.value,
            'title': self.title,
            'description': self.description,
            'reasoning': self.reasoning,
            'projected_impact': self.projected_impact,
        }


@dataclass
class TeamAnalysis:
    """
    Complete analysis of a squad.

    Attributes:
        team: The analysed squad, echoed back
        suggestions: Suggestions in the order the checks produced them
        overall_grade: Letter grade (A-F)
        strengths: Human-readable strengths
        weaknesses: Human-readable weaknesses
        summary: Composed summary paragraph
    """

    team: Squad
    suggestions: List[Suggestion] = field(default_factory=list)
    overall_grade: Grade = Grade.F
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    summary: str = ""

    def get_suggestions_by_priority(self, priority: Priority) -> List[Suggestion]:
        """Get all suggestions in a priority band, preserving order."""
        return [s for s in self.suggestions if s.priority == priority]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'team': self.team.to_dict(),
            'suggestions': [s.to_dict() for s in self.suggestions],
            'overall_grade': self.overall_grade.value,
            'strengths': list(self.strengths),
            'weaknesses': list(self.weaknesses),
            'summary': self.summary,
        }


@dataclass
class ImportResult:
    """
    Result of importing a squad from CSV.

    Attributes:
        players: Successfully parsed players
        errors: Line-level and composition errors, in the order found
    """

    players: List[Player] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'players': [p.to_dict() for p in self.players],
            'errors': list(self.errors),
        }
