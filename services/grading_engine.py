"""
Grading Engine - Rule-based system for overall team grades.

Grades are an ordered list of bands; the first band whose condition holds wins.
"""

from typing import List, Callable
from dataclasses import dataclass
from models.constants import Grade


@dataclass(frozen=True)
class GradeContext:
    """Inputs that determine a team's grade."""
    high_priority_count: int
    medium_priority_count: int
    projected_points: float


class GradeRule:
    """A single grade band."""

    def __init__(self, name: str, condition: Callable[[GradeContext], bool], grade: Grade):
        self.name = name
        self.condition = condition
        self.grade = grade

    def applies(self, context: GradeContext) -> bool:
        """Check if this band applies to the given context."""
        return self.condition(context)


class GradingEngine:
    """
    Rule-based grading engine.

    Evaluates bands top to bottom and returns the grade of the first match.
    """

    def __init__(self):
        self.rules: List[GradeRule] = self._initialize_rules()

    def _initialize_rules(self) -> List[GradeRule]:
        """Initialize grade bands in priority order."""
        return [
            GradeRule(
                name="excellent",
                condition=lambda ctx: (ctx.high_priority_count == 0
                                       and ctx.medium_priority_count <= 1
                                       and ctx.projected_points > 100),
                grade=Grade.A
            ),
            GradeRule(
                name="good",
                condition=lambda ctx: (ctx.high_priority_count == 0
                                       and ctx.medium_priority_count <= 2
                                       and ctx.projected_points > 80),
                grade=Grade.B
            ),
            GradeRule(
                name="average",
                condition=lambda ctx: (ctx.high_priority_count <= 1
                                       and ctx.medium_priority_count <= 3
                                       and ctx.projected_points > 60),
                grade=Grade.C
            ),
            GradeRule(
                name="below_average",
                condition=lambda ctx: (ctx.high_priority_count <= 2
                                       and ctx.projected_points > 40),
                grade=Grade.D
            ),
            # Catch-all
            GradeRule(
                name="failing",
                condition=lambda ctx: True,
                grade=Grade.F
            ),
        ]

    def calculate_grade(
        self,
        high_priority_count: int,
        medium_priority_count: int,
        projected_points: float
    ) -> Grade:
        """
        Classify a team from its suggestion counts and projected points.

        Args:
            high_priority_count: Number of high-priority suggestions
            medium_priority_count: Number of medium-priority suggestions
            projected_points: Total starting projected points

        Returns:
            Grade enum value
        """
        context = GradeContext(
            high_priority_count=high_priority_count,
            medium_priority_count=medium_priority_count,
            projected_points=projected_points
        )

        for rule in self.rules:
            if rule.applies(context):
                return rule.grade

        # Unreachable due to catch-all band
        return Grade.F
