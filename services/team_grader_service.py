"""
Team Grader Service - Heuristic analysis of a fantasy squad.

Runs a fixed sequence of checks over the starting lineup, collecting
suggestions, strengths and weaknesses, then grades the team and composes
a summary. The order of checks is the order suggestions are displayed in.
"""

import logging
from collections import Counter
from typing import Dict, List, Tuple

from models.constants import (
    Position,
    Priority,
    SuggestionType,
    LOW_PROJECTION_THRESHOLD,
    BUDGET_CEILING,
    CAPTAIN_THRESHOLD,
    MIN_CAPTAIN_OPTIONS,
    HIGH_POINTS_THRESHOLD,
    PREMIUM_PRICE_THRESHOLD,
    MIN_PREMIUM_PLAYERS,
    EFFICIENT_BUDGET_CEILING,
    EFFICIENT_POINTS_FLOOR,
)
from models.fantasy_team import Player, Squad, Suggestion, TeamAnalysis
from services.grading_engine import GradingEngine

logger = logging.getLogger(__name__)


# Positional minimums for the starting lineup:
# position -> (minimum, priority, suggestion id, title, reasoning, impact, weakness)
POSITION_REQUIREMENTS = [
    (
        Position.GK, 1, Priority.HIGH, 'need-gk',
        'Add a Goalkeeper',
        'Every fantasy team needs at least one goalkeeper to be competitive.',
        15,
        'Missing starting goalkeeper',
    ),
    (
        Position.DEF, 3, Priority.HIGH, 'need-def',
        'Add More Defenders',
        'Defenders are crucial for clean sheets and can provide consistent points.',
        12,
        'Insufficient defensive depth',
    ),
    (
        Position.MID, 3, Priority.MEDIUM, 'need-mid',
        'Add More Midfielders',
        'Midfielders provide goals, assists, and bonus points through tackles and passes.',
        10,
        'Limited midfield depth',
    ),
    (
        Position.FWD, 2, Priority.MEDIUM, 'need-fwd',
        'Add More Forwards',
        'Forwards are your primary goal scorers and can provide high point hauls.',
        8,
        'Limited forward depth',
    ),
]

POSITION_LABELS = {
    Position.GK: 'goalkeeper',
    Position.DEF: 'defender',
    Position.MID: 'midfielder',
    Position.FWD: 'forward',
}


class TeamGraderService:
    """Service for grading a squad and suggesting improvements."""

    def __init__(self):
        self.grading_engine = GradingEngine()

    def evaluate(self, squad: Squad) -> TeamAnalysis:
        """
        Analyse a squad.

        Pure function of its input: the squad is not modified and repeated
        calls with an equal squad return equal analyses.

        Args:
            squad: Squad to analyse

        Returns:
            TeamAnalysis with grade, suggestions, strengths, weaknesses and summary
        """
        suggestions: List[Suggestion] = []
        strengths: List[str] = []
        weaknesses: List[str] = []

        position_counts = squad.get_position_counts(starting_only=True)
        total_points = squad.get_starting_projected_points()

        self._check_positions(position_counts, suggestions, weaknesses)
        self._check_low_performers(squad.starting, suggestions, weaknesses)
        self._check_budget(squad.total_cost, suggestions)
        self._check_captain_options(squad.starting, suggestions, strengths)
        self._check_bye_weeks(squad.starting, suggestions)
        self._check_strengths(squad, position_counts, total_points, strengths)

        analysis = TeamAnalysis(
            team=squad,
            suggestions=suggestions,
            strengths=strengths,
            weaknesses=weaknesses
        )

        high_count, medium_count = self._count_priorities(analysis)
        analysis.overall_grade = self.grading_engine.calculate_grade(high_count, medium_count, total_points)
        analysis.summary = self._generate_summary(analysis, total_points, high_count)

        logger.debug(
            f"Graded '{squad.name}': {analysis.overall_grade.value} "
            f"({high_count} high, {medium_count} medium, {total_points:.1f} pts)"
        )

        return analysis

    def _check_positions(
        self,
        position_counts: Dict[Position, int],
        suggestions: List[Suggestion],
        weaknesses: List[str]
    ):
        """Flag positions below their starting minimum."""
        for position, minimum, priority, suggestion_id, title, reasoning, impact, weakness in POSITION_REQUIREMENTS:
            count = position_counts.get(position, 0)
            if count >= minimum:
                continue

            if position == Position.GK:
                description = 'Your team needs a starting goalkeeper.'
            else:
                description = (
                    f"You have {count} {POSITION_LABELS[position]}(s). "
                    f"Consider adding more for depth."
                )

            suggestions.append(Suggestion(
                id=suggestion_id,
                type=SuggestionType.ADD,
                priority=priority,
                title=title,
                description=description,
                reasoning=reasoning,
                projected_impact=impact
            ))
            weaknesses.append(weakness)

    def _check_low_performers(
        self,
        starting: List[Player],
        suggestions: List[Suggestion],
        weaknesses: List[str]
    ):
        """Flag starters projected below the low-performance threshold."""
        low_performers = [p for p in starting if p.get_projected_points() < LOW_PROJECTION_THRESHOLD]
        if not low_performers:
            return

        suggestions.append(Suggestion(
            id='upgrade-low-performers',
            type=SuggestionType.DROP,
            priority=Priority.MEDIUM,
            title='Consider Upgrading Low Performers',
            description=(
                f"You have {len(low_performers)} player(s) with low projected points "
                f"(< {LOW_PROJECTION_THRESHOLD:.1f})."
            ),
            reasoning='Players with consistently low projections may not provide good value for money.',
            projected_impact=5
        ))
        weaknesses.append('Some players have low projected performance')

    def _check_budget(self, total_cost: float, suggestions: List[Suggestion]):
        """Flag squads spending close to the full budget."""
        if total_cost <= BUDGET_CEILING:
            return

        suggestions.append(Suggestion(
            id='budget-optimization',
            type=SuggestionType.TRADE,
            priority=Priority.MEDIUM,
            title='Budget Optimization',
            description=f"Your team costs £{total_cost:.1f}m, leaving little room for flexibility.",
            reasoning='Consider cheaper alternatives to free up budget for premium players in key positions.',
            projected_impact=3
        ))

    def _check_captain_options(
        self,
        starting: List[Player],
        suggestions: List[Suggestion],
        strengths: List[str]
    ):
        """Check there are enough high scorers to captain."""
        captain_options = [p for p in starting if p.get_projected_points() > CAPTAIN_THRESHOLD]

        if len(captain_options) >= MIN_CAPTAIN_OPTIONS:
            strengths.append('Multiple captain options')
            return

        suggestions.append(Suggestion(
            id='captain-options',
            type=SuggestionType.ADD,
            priority=Priority.LOW,
            title='More Captain Options',
            description='Consider adding more high-scoring players for captain choices.',
            reasoning='Having multiple captain options gives you flexibility and reduces risk.',
            projected_impact=4
        ))

    def _check_bye_weeks(self, starting: List[Player], suggestions: List[Suggestion]):
        """Flag conflict periods shared by two or more starters."""
        conflicts = self.find_bye_week_conflicts(starting)
        if not conflicts:
            return

        weeks = ', '.join(str(week) for week in conflicts)
        suggestions.append(Suggestion(
            id='bye-week-planning',
            type=SuggestionType.ADD,
            priority=Priority.MEDIUM,
            title='Plan for Bye Weeks',
            description=f"You have potential bye week conflicts in weeks: {weeks}",
            reasoning='Having multiple players on bye the same week can hurt your lineup.',
            projected_impact=10
        ))

    @staticmethod
    def find_bye_week_conflicts(players: List[Player]) -> List[int]:
        """
        Find conflict periods shared by two or more players.

        Args:
            players: Players to group (players without a bye week are ignored)

        Returns:
            Conflicting periods in ascending order
        """
        week_counts = Counter(p.bye_week for p in players if p.bye_week is not None)
        return sorted(week for week, count in week_counts.items() if count >= 2)

    def _check_strengths(
        self,
        squad: Squad,
        position_counts: Dict[Position, int],
        total_points: float,
        strengths: List[str]
    ):
        """Record strengths independently of the weakness checks."""
        if position_counts[Position.DEF] >= 4:
            strengths.append('Strong defensive depth')
        if position_counts[Position.MID] >= 4:
            strengths.append('Good midfield depth')
        if position_counts[Position.FWD] >= 2:
            strengths.append('Strong forward options')
        if total_points > HIGH_POINTS_THRESHOLD:
            strengths.append('High projected point total')

        premium_players = [p for p in squad.starting if p.get_price() > PREMIUM_PRICE_THRESHOLD]
        if len(premium_players) >= MIN_PREMIUM_PLAYERS:
            strengths.append('Good premium player coverage')

        if squad.total_cost < EFFICIENT_BUDGET_CEILING and total_points > EFFICIENT_POINTS_FLOOR:
            strengths.append('Good budget efficiency')

    @staticmethod
    def _count_priorities(analysis: TeamAnalysis) -> Tuple[int, int]:
        """Count high and medium priority suggestions."""
        high = len(analysis.get_suggestions_by_priority(Priority.HIGH))
        medium = len(analysis.get_suggestions_by_priority(Priority.MEDIUM))
        return high, medium

    @staticmethod
    def _generate_summary(analysis: TeamAnalysis, total_points: float, high_count: int) -> str:
        """Compose the summary paragraph from a graded analysis."""
        summary = (
            f"Your {analysis.team.name} team has a projected total of {total_points:.1f} points "
            f"and receives a grade of {analysis.overall_grade.value}. "
        )

        if analysis.strengths:
            summary += f"Strengths include: {', '.join(analysis.strengths)}. "

        if analysis.weaknesses:
            summary += f"Areas for improvement: {', '.join(analysis.weaknesses)}. "

        if analysis.suggestions:
            summary += f"I recommend focusing on {high_count} high-priority suggestions to improve your team."
        else:
            summary += 'Your team looks well-balanced with no major issues identified.'

        return summary
