"""
Roster CSV Service for squad imports.

Parses comma-separated squad exports in one of several column layouts,
validates each row and reports problems without aborting the import.
"""
import logging
import math
import re
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern

from models.constants import (
    Position,
    POSITION_SYNONYMS,
    IMPORT_POSITION_MINIMUMS,
    IMPORT_MIN_PLAYERS,
    MAX_SQUAD_SIZE,
)
from models.fantasy_team import Player, ImportResult

logger = logging.getLogger(__name__)


class RowValidationError(ValueError):
    """Raised when a single CSV row cannot be turned into a player."""
    pass


@dataclass(frozen=True)
class CSVLayout:
    """
    One accepted column layout.

    Required columns must be non-empty in the raw line; the final column of
    layouts that carry projected points may be empty.
    """
    name: str
    pattern: Pattern
    columns: tuple

    def match(self, line: str) -> Optional[Dict[str, str]]:
        """Return the raw fields keyed by column name, or None if the line does not fit."""
        match = self.pattern.match(line)
        if not match:
            return None
        return dict(zip(self.columns, match.groups()))


# Tried in order, first match wins
CSV_LAYOUTS = [
    CSVLayout(
        name='name_position_team_points',
        pattern=re.compile(r'^([^,]+),([^,]+),([^,]+),([^,]*)$'),
        columns=('name', 'position', 'team', 'projected_points'),
    ),
    CSVLayout(
        name='name_position_team',
        pattern=re.compile(r'^([^,]+),([^,]+),([^,]+)$'),
        columns=('name', 'position', 'team'),
    ),
    CSVLayout(
        name='name_position_team_price_points',
        pattern=re.compile(r'^([^,]+),([^,]+),([^,]+),([^,]+),([^,]*)$'),
        columns=('name', 'position', 'team', 'price', 'projected_points'),
    ),
]

SAMPLE_CSV = """Name,Position,Team,ProjectedPoints
Alisson,GK,LIV,5.8
Virgil van Dijk,DEF,LIV,6.2
Trent Alexander-Arnold,DEF,LIV,8.5
Kyle Walker,DEF,MCI,5.5
Mohamed Salah,MID,LIV,13.0
Kevin De Bruyne,MID,MCI,10.5
Bruno Fernandes,MID,MUN,8.5
Erling Haaland,FWD,MCI,14.0
Harry Kane,FWD,BAY,12.5"""


class RosterCSVService:
    """
    CSV parser for squad imports.

    Validates structure, normalizes positions, and reports errors.
    """

    EXPECTED_FORMAT = 'Name,Position,Team,ProjectedPoints'

    @classmethod
    def parse_csv(cls, csv_content: str) -> ImportResult:
        """
        Parse CSV content into players.

        Malformed rows are reported and skipped; composition problems are
        reported alongside the parsed players. Nothing is raised for bad data.

        Args:
            csv_content: Raw CSV file content as string

        Returns:
            ImportResult with parsed players and error messages
        """
        errors = []
        players = []

        try:
            lines = [line for line in csv_content.split('\n') if line.strip()]

            if not lines:
                errors.append('CSV file is empty')
                return ImportResult(players=players, errors=errors)

            # Skip header row if present
            data_lines = lines[1:] if 'name' in lines[0].lower() else lines

            for index, line in enumerate(data_lines):
                line_number = index + 1
                try:
                    players.append(cls.parse_player_line(line.strip(), line_number))
                except RowValidationError as e:
                    errors.append(f"Line {line_number}: {e}")

            errors.extend(cls.validate_team_composition(players))

        except Exception as e:
            logger.exception("Unexpected error parsing roster CSV")
            return ImportResult(players=[], errors=[f"Failed to parse CSV: {e}"])

        logger.info(f"Parsed {len(players)} players from CSV with {len(errors)} error(s)")
        return ImportResult(players=players, errors=errors)

    @classmethod
    def parse_player_line(cls, line: str, line_number: int) -> Player:
        """
        Parse a single data line.

        Args:
            line: Trimmed CSV line
            line_number: Line number for error reporting

        Returns:
            Player built from the line

        Raises:
            RowValidationError: If the line matches no layout or a field is invalid
        """
        fields = cls.match_layout(line)
        if fields is None:
            raise RowValidationError(f"Invalid format. Expected: {cls.EXPECTED_FORMAT}")

        name = fields['name'].strip()
        raw_position = fields['position'].strip()
        position = cls.normalize_position(raw_position)
        team = fields['team'].strip()

        if not name:
            raise RowValidationError('Player name is required')

        if position is None:
            raise RowValidationError(
                f"Valid position is required (GK, DEF, MID, FWD), got '{raw_position}'"
            )

        if not team:
            raise RowValidationError('Team is required')

        price = None
        if 'price' in fields:
            price = cls._parse_number(fields['price'])

        return Player(
            id=f"imported-{line_number}-{uuid.uuid4().hex[:12]}",
            name=name,
            position=position,
            team=team,
            price=price,
            projected_points=cls._parse_number(fields.get('projected_points'))
        )

    @staticmethod
    def match_layout(line: str) -> Optional[Dict[str, str]]:
        """Try each accepted layout in order and return the first match."""
        for layout in CSV_LAYOUTS:
            fields = layout.match(line)
            if fields is not None:
                return fields
        return None

    @staticmethod
    def normalize_position(position: str) -> Optional[Position]:
        """Map a position synonym (any case) to a Position, or None if unknown."""
        return POSITION_SYNONYMS.get(position.strip().lower())

    @staticmethod
    def validate_team_composition(players: List[Player]) -> List[str]:
        """
        Check per-position minimums and squad size limits.

        Args:
            players: Parsed players

        Returns:
            Advisory error messages (empty if the squad is valid)
        """
        errors = []
        counts = {position: 0 for position in Position}
        for player in players:
            counts[player.position] += 1

        if counts[Position.GK] < IMPORT_POSITION_MINIMUMS[Position.GK]:
            errors.append('Team needs at least 1 goalkeeper')
        if counts[Position.DEF] < IMPORT_POSITION_MINIMUMS[Position.DEF]:
            errors.append('Team needs at least 3 defenders')
        if counts[Position.MID] < IMPORT_POSITION_MINIMUMS[Position.MID]:
            errors.append('Team needs at least 3 midfielders')
        if counts[Position.FWD] < IMPORT_POSITION_MINIMUMS[Position.FWD]:
            errors.append('Team needs at least 1 forward')

        total_players = len(players)
        if total_players > MAX_SQUAD_SIZE:
            errors.append(f"Team has too many players (maximum {MAX_SQUAD_SIZE})")
        if total_players < IMPORT_MIN_PLAYERS:
            errors.append(f"Team needs at least {IMPORT_MIN_PLAYERS} players")

        return errors

    @staticmethod
    def generate_sample_csv() -> str:
        """Return a sample import file in the four-column layout."""
        return SAMPLE_CSV

    @staticmethod
    def _parse_number(value: Optional[str]) -> float:
        """Parse a numeric field, treating missing or unparsable values as 0."""
        if value is None or not value.strip():
            return 0.0
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
        return number if math.isfinite(number) else 0.0
