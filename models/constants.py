"""
Centralized constants and thresholds for squad analysis and import.
"""

from enum import Enum


class Position(Enum):
    GK = "GK"
    DEF = "DEF"
    MID = "MID"
    FWD = "FWD"


class InjuryStatus(Enum):
    HEALTHY = "Healthy"
    QUESTIONABLE = "Questionable"
    DOUBTFUL = "Doubtful"
    OUT = "Out"


class SuggestionType(Enum):
    ADD = "add"
    DROP = "drop"
    START = "start"
    BENCH = "bench"
    TRADE = "trade"


class Priority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Grade(Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


# Case-insensitive position synonyms accepted on import
POSITION_SYNONYMS = {
    # Goalkeeper
    "gk": Position.GK,
    "gkp": Position.GK,
    "goalkeeper": Position.GK,
    "keeper": Position.GK,

    # Defender
    "def": Position.DEF,
    "defender": Position.DEF,
    "defence": Position.DEF,
    "defense": Position.DEF,

    # Midfielder
    "mid": Position.MID,
    "midfielder": Position.MID,
    "midfield": Position.MID,

    # Forward
    "fwd": Position.FWD,
    "forward": Position.FWD,
    "striker": Position.FWD,
    "attacker": Position.FWD,
}

# Supported formations (defenders-midfielders-forwards, one goalkeeper)
FORMATIONS = ["3-4-3", "3-5-2", "4-3-3", "4-4-2", "4-5-1", "5-3-2", "5-4-1"]
DEFAULT_FORMATION = "3-4-3"

# Squad size limits
STARTING_XI_SIZE = 11
MAX_BENCH_SIZE = 4
MAX_SQUAD_SIZE = 15

# Grader thresholds
LOW_PROJECTION_THRESHOLD = 4.0
BUDGET_CEILING = 95.0
CAPTAIN_THRESHOLD = 8.0
MIN_CAPTAIN_OPTIONS = 2
HIGH_POINTS_THRESHOLD = 80.0
PREMIUM_PRICE_THRESHOLD = 8.0
MIN_PREMIUM_PLAYERS = 3
EFFICIENT_BUDGET_CEILING = 90.0
EFFICIENT_POINTS_FLOOR = 70.0

# Import composition minimums
IMPORT_POSITION_MINIMUMS = {
    Position.GK: 1,
    Position.DEF: 3,
    Position.MID: 3,
    Position.FWD: 1,
}
IMPORT_MIN_PLAYERS = 11

# Player search
SEARCH_RESULT_LIMIT = 10
MAX_SEARCH_RESULTS = 100
