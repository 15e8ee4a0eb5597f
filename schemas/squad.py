"""
Squad Validation Schemas

Pydantic models for validating squad analysis, lineup, import and
player search requests.
Provides type-safe validation with automatic sanitization.
"""

from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Any, Dict, List, Optional

from models.constants import (
    Position,
    InjuryStatus,
    POSITION_SYNONYMS,
    DEFAULT_FORMATION,
    SEARCH_RESULT_LIMIT,
    MAX_SEARCH_RESULTS,
)
from models.fantasy_team import Player


class PlayerSchema(BaseModel):
    """
    Validation schema for a single player.

    Accepts any known position synonym (e.g. "Goalkeeper", "gkp").
    Numbers must be finite.
    """
    model_config = ConfigDict(str_strip_whitespace=True, allow_inf_nan=False)

    id: str = Field(..., min_length=1, max_length=64, description="Player identifier")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    position: Position = Field(..., description="GK, DEF, MID or FWD")
    team: str = Field(..., min_length=1, max_length=50, description="Club label")
    price: Optional[float] = Field(default=None, ge=0)
    projected_points: Optional[float] = Field(default=None)
    total_points: Optional[int] = Field(default=None)
    form: Optional[float] = Field(default=None)
    ownership: Optional[float] = Field(default=None, ge=0, le=100)
    injury_status: Optional[InjuryStatus] = Field(default=None)
    bye_week: Optional[int] = Field(default=None, ge=1)
    news: Optional[str] = Field(default=None, max_length=500)

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        """Accept numeric identifiers from data feeds."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('position', mode='before')
    @classmethod
    def normalize_position(cls, v):
        """Map position synonyms to the canonical value."""
        return lookup_position(v)

    @field_validator('injury_status', mode='before')
    @classmethod
    def normalize_injury_status(cls, v):
        """Accept injury statuses in any case; blank means unknown."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if isinstance(v, str):
            return v.strip().capitalize()
        return v

    def to_player(self) -> Player:
        """Convert to the domain model."""
        return Player(
            id=self.id,
            name=self.name,
            position=self.position,
            team=self.team,
            price=self.price,
            projected_points=self.projected_points,
            total_points=self.total_points,
            form=self.form,
            ownership=self.ownership,
            injury_status=self.injury_status,
            bye_week=self.bye_week,
            news=self.news
        )


class SquadSchema(BaseModel):
    """
    Validation schema for a squad submitted for analysis.

    Lineup size rules are enforced by the squad builder, not here, so that
    callers get the same messages regardless of how the squad was assembled.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = Field(default=None, max_length=64)
    name: str = Field(default='', max_length=100, description="Team name")
    formation: str = Field(default=DEFAULT_FORMATION, max_length=10)
    starting: List[PlayerSchema] = Field(default_factory=list)
    bench: List[PlayerSchema] = Field(default_factory=list)

    @field_validator('formation')
    @classmethod
    def validate_formation(cls, v: str) -> str:
        """Formation must look like "3-4-3"."""
        return check_formation(v)


class LineupEditSchema(BaseModel):
    """
    Validation schema shared by lineup edit requests.

    Carries the current lineup; the edit itself is described by subclasses.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    formation: str = Field(default=DEFAULT_FORMATION, max_length=10)
    starting: List[PlayerSchema] = Field(default_factory=list)
    bench: List[PlayerSchema] = Field(default_factory=list)

    @field_validator('formation')
    @classmethod
    def validate_formation(cls, v: str) -> str:
        return check_formation(v)


class AddPlayerRequestSchema(LineupEditSchema):
    """Add a player to the lineup."""
    player: PlayerSchema


class MovePlayerRequestSchema(LineupEditSchema):
    """Move a player between starting lineup and bench."""
    player_id: str = Field(..., min_length=1, max_length=64)
    from_starting: bool = Field(default=True, description="True benches a starter")


class ImportRequestSchema(BaseModel):
    """Validation schema for a JSON CSV import request."""
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., max_length=1024 * 1024, description="Raw CSV text")
    team_name: str = Field(default='Imported Team', max_length=100)
    formation: str = Field(default=DEFAULT_FORMATION, max_length=10)

    @field_validator('team_name')
    @classmethod
    def default_team_name(cls, v: str) -> str:
        """Blank team names fall back to the default."""
        return v or 'Imported Team'


class FeedPickSchema(BaseModel):
    """One pick from a manager's team, referencing a feed element id."""
    element: int = Field(..., ge=1)


class PlayerSearchRequestSchema(BaseModel):
    """
    Validation schema for searching the players of a data feed.

    'elements' and 'teams' are the raw feed records. The request either
    resolves 'picks', looks up one 'player_id', or searches with the
    optional 'position' and 'search' filters, in that order of precedence.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    elements: List[Dict[str, Any]] = Field(..., description="Feed player records")
    teams: List[Dict[str, Any]] = Field(default_factory=list, description="Feed team records")
    position: Optional[Position] = Field(default=None)
    search: str = Field(default='', max_length=100)
    limit: int = Field(default=SEARCH_RESULT_LIMIT, ge=1, le=MAX_SEARCH_RESULTS)
    player_id: Optional[str] = Field(default=None, max_length=64)
    picks: Optional[List[FeedPickSchema]] = Field(default=None)

    @field_validator('elements')
    @classmethod
    def elements_have_ids(cls, v: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Every feed record needs an id."""
        if any(element.get('id') is None for element in v):
            raise ValueError("Each element needs an 'id'")
        return v

    @field_validator('position', mode='before')
    @classmethod
    def normalize_position(cls, v):
        """Blank means no filter; otherwise accept position synonyms."""
        if isinstance(v, str) and not v.strip():
            return None
        return lookup_position(v)

    @field_validator('player_id', mode='before')
    @classmethod
    def coerce_player_id(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


def lookup_position(value):
    """Map a position synonym to a Position, raising ValueError if unknown."""
    if isinstance(value, str):
        position = POSITION_SYNONYMS.get(value.strip().lower())
        if position is None:
            raise ValueError(f"Unknown position '{value}'")
        return position
    return value


def check_formation(value: str) -> str:
    """Raise ValueError unless the formation has three numeric parts."""
    parts = value.split('-')
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Formation must look like '3-4-3', got '{value}'")
    return value


def format_validation_errors(error) -> List[str]:
    """
    Convert a pydantic ValidationError to readable messages.

    Args:
        error: pydantic ValidationError

    Returns:
        List of "field.path: message" strings
    """
    messages = []
    for detail in error.errors():
        location = '.'.join(str(part) for part in detail.get('loc', ()))
        messages.append(f"{location}: {detail.get('msg')}" if location else detail.get('msg'))
    return messages
