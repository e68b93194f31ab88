"""
Velocity Calculator

Normalizes historical sprints to points per available day and turns the
rolling average into a commitment recommendation for an upcoming sprint.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .models import (
    SprintRecord,
    Team,
    available_days as _available_days,
    require_non_negative,
    require_positive,
)

logger = logging.getLogger(__name__)

# Most recent sprints considered; the baseline only fills in below this
MAX_DATA_POINTS = 5
# Fewest available days a sprint may have and still be used
MIN_AVAILABLE_DAYS = 1


class Outcome(Enum):
    """Terminal results that are not numbers."""
    UNUSABLE = "unusable"  # sprint had too much leave to be meaningful
    NO_DATA = "no_data"    # nothing to base a recommendation on


UNUSABLE = Outcome.UNUSABLE
NO_DATA = Outcome.NO_DATA


class CapacityLevel(Enum):
    """Capacity band used for display."""
    HIGH = "high"      # 80%+
    MEDIUM = "medium"  # 50-80%
    LOW = "low"        # under 50%


@dataclass
class DataPointSelection:
    """Velocity values chosen for averaging."""
    data_points: list[float] = field(default_factory=list)
    includes_baseline: bool = False


@dataclass
class VelocityResult:
    """Average velocity across the selected data points."""
    average_velocity_per_day: float
    data_point_count: int
    includes_baseline: bool
    velocity_data_points: list[float] = field(default_factory=list)

    @property
    def sprint_count(self) -> int:
        """Number of historical sprints behind the average."""
        if self.includes_baseline:
            return self.data_point_count - 1
        return self.data_point_count

    @property
    def description(self) -> str:
        """Human-readable description of where the average came from."""
        if self.sprint_count == 0 and self.includes_baseline:
            return "Based on baseline estimate"

        sprint_text = "1 sprint" if self.sprint_count == 1 else f"{self.sprint_count} sprints"
        if self.includes_baseline:
            return f"Based on {sprint_text} + baseline"
        return f"Based on {sprint_text}"

    def to_dict(self) -> dict:
        return {
            "average_velocity_per_day": self.average_velocity_per_day,
            "data_point_count": self.data_point_count,
            "sprint_count": self.sprint_count,
            "includes_baseline": self.includes_baseline,
            "velocity_data_points": list(self.velocity_data_points),
            "description": self.description
        }


@dataclass
class SprintPlan:
    """Commitment recommendation for an upcoming sprint."""
    recommended_points: int
    full_capacity_points: int
    comparison_delta: int  # negative when leave reduces capacity
    capacity_percentage: float  # not rounded; formatting is left to display
    available_days: float

    @property
    def is_full_capacity(self) -> bool:
        return self.comparison_delta == 0

    @property
    def comparison_text(self) -> str:
        if self.is_full_capacity:
            return "Full capacity"
        return f"{self.comparison_delta:+d} points vs full capacity"

    @property
    def bar_width(self) -> float:
        """Capacity percentage clamped for a progress bar."""
        return max(0.0, min(self.capacity_percentage, 100.0))

    def capacity_level(self, high: float = 80, medium: float = 50) -> CapacityLevel:
        if self.capacity_percentage >= high:
            return CapacityLevel.HIGH
        elif self.capacity_percentage >= medium:
            return CapacityLevel.MEDIUM
        return CapacityLevel.LOW

    def to_dict(self) -> dict:
        return {
            "recommended_points": self.recommended_points,
            "full_capacity_points": self.full_capacity_points,
            "comparison_delta": self.comparison_delta,
            "comparison_text": self.comparison_text,
            "capacity_percentage": self.capacity_percentage,
            "capacity_level": self.capacity_level().value,
            "available_days": self.available_days
        }


def normalize(record: SprintRecord) -> Union[float, Outcome]:
    """
    Velocity per available day for one sprint.

    available days = sprint_length_days - (leave_days / developer_count), using
    the record's own snapshot values. Sprints with fewer than one available
    day are UNUSABLE and drop out of averaging without raising. A zero-point
    sprint yields 0.0, which still counts.
    """
    days = record.available_days
    if days < MIN_AVAILABLE_DAYS:
        logger.debug(
            "Excluding sprint ending %s: %.2f available days", record.end_date, days
        )
        return UNUSABLE
    return record.points_completed / days


def convert_baseline(baseline_velocity: float, sprint_length_days: int) -> float:
    """Convert a points-per-sprint baseline to points per day."""
    return baseline_velocity / sprint_length_days


def select_data_points(
    sprint_velocities: list[float],
    baseline_velocity_per_day: Optional[float] = None
) -> DataPointSelection:
    """
    Choose which velocities go into the average.

    Args:
        sprint_velocities: Usable per-day velocities, newest first
        baseline_velocity_per_day: Converted baseline, or None when the team has none

    At most the MAX_DATA_POINTS most recent sprints are taken. The baseline is
    appended only while fewer than that many sprints are available.
    """
    sprint_points = list(sprint_velocities[:MAX_DATA_POINTS])

    if baseline_velocity_per_day is not None and len(sprint_points) < MAX_DATA_POINTS:
        return DataPointSelection(
            data_points=sprint_points + [baseline_velocity_per_day],
            includes_baseline=True
        )

    if baseline_velocity_per_day is not None:
        logger.debug("Baseline dropped: %d sprints available", len(sprint_velocities))
    return DataPointSelection(data_points=sprint_points, includes_baseline=False)


def aggregate(data_points: list[float]) -> Union[float, Outcome]:
    """Arithmetic mean of the data points, or NO_DATA when there are none."""
    if not data_points:
        return NO_DATA
    return sum(data_points) / len(data_points)


def plan(
    average_velocity_per_day: Union[float, Outcome],
    sprint_length_days: int,
    developer_count: int,
    expected_leave_days: float
) -> Union[SprintPlan, Outcome]:
    """
    Plan an upcoming sprint from the average velocity and expected leave.

    Points are floored, never rounded. Returns NO_DATA when there is no
    velocity or when the leave leaves fewer than one available day, the
    same boundary used when normalizing history.

    Raises:
        InputContractError: on negative or non-finite inputs
    """
    if average_velocity_per_day is NO_DATA:
        return NO_DATA

    require_non_negative("average_velocity_per_day", average_velocity_per_day)
    require_positive("sprint_length_days", sprint_length_days)
    require_positive("developer_count", developer_count)
    require_non_negative("expected_leave_days", expected_leave_days)

    days = _available_days(sprint_length_days, developer_count, expected_leave_days)
    if days < MIN_AVAILABLE_DAYS:
        return NO_DATA

    recommended = math.floor(average_velocity_per_day * days)
    full_capacity = math.floor(average_velocity_per_day * sprint_length_days)

    return SprintPlan(
        recommended_points=recommended,
        full_capacity_points=full_capacity,
        comparison_delta=recommended - full_capacity,
        capacity_percentage=(days / sprint_length_days) * 100,
        available_days=days
    )


class VelocityCalculator:
    """
    Computes team velocity and sprint recommendations from sprint history.

    Stateless: every call recomputes from the records it is given.

    Usage:
        calculator = VelocityCalculator()
        result = calculator.calculate(sprints, team)
        sprint_plan = calculator.plan(sprints, team, expected_leave_days=8)
    """

    def calculate(
        self,
        sprints: list[SprintRecord],
        team: Team
    ) -> Union[VelocityResult, Outcome]:
        """
        Average velocity per day for a team.

        Args:
            sprints: Logged sprints, newest first
            team: Team providing the optional baseline
        """
        sprint_velocities = []
        for sprint in sprints:
            velocity = normalize(sprint)
            if velocity is not UNUSABLE:
                sprint_velocities.append(velocity)

        baseline = None
        if team.has_baseline:
            baseline = convert_baseline(team.baseline_velocity, team.sprint_length_days)

        selection = select_data_points(sprint_velocities, baseline)
        average = aggregate(selection.data_points)
        if average is NO_DATA:
            return NO_DATA

        return VelocityResult(
            average_velocity_per_day=average,
            data_point_count=len(selection.data_points),
            includes_baseline=selection.includes_baseline,
            velocity_data_points=selection.data_points
        )

    def has_data(self, sprints: list[SprintRecord], team: Team) -> bool:
        """Whether there is enough data to make a recommendation."""
        return self.calculate(sprints, team) is not NO_DATA

    def describe(self, sprints: list[SprintRecord], team: Team) -> str:
        result = self.calculate(sprints, team)
        if result is NO_DATA:
            return "No velocity data available"
        return result.description

    def plan(
        self,
        sprints: list[SprintRecord],
        team: Team,
        expected_leave_days: float
    ) -> Union[SprintPlan, Outcome]:
        """
        Recommend points for the next sprint.

        History is normalized with each sprint's snapshot; the forward plan
        uses the team's current sprint length and developer count.
        """
        result = self.calculate(sprints, team)
        if result is NO_DATA:
            return NO_DATA

        return plan(
            result.average_velocity_per_day,
            team.sprint_length_days,
            team.developer_count,
            expected_leave_days
        )


# Convenience function
def recommend_commitment(
    sprints: list[SprintRecord],
    team: Team,
    expected_leave_days: float = 0
) -> Union[SprintPlan, Outcome]:
    """
    Quick function to recommend a sprint commitment.

    Example:
        sprint_plan = recommend_commitment(sprints, team, expected_leave_days=8)

        if sprint_plan is NO_DATA:
            print("Log a sprint or set a baseline first")
        else:
            print(f"Commit to {sprint_plan.recommended_points} points")
    """
    calculator = VelocityCalculator()
    return calculator.plan(sprints, team, expected_leave_days)
