"""
Domain Models for Velocity Planner

Teams and the sprint records logged against them, as handed to the
velocity engine by whatever stores them.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional


class InputContractError(ValueError):
    """Raised when a value breaks the engine's input contract.

    Negative counts, non-finite numbers and zero lengths are supposed to be
    caught upstream; reaching the engine with one is a caller bug.
    """


def _require_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputContractError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InputContractError(f"{name} must be finite, got {value!r}")


def require_non_negative(name: str, value: float) -> None:
    """Reject negative or non-finite values."""
    _require_finite(name, value)
    if value < 0:
        raise InputContractError(f"{name} cannot be negative, got {value!r}")


def require_positive(name: str, value: float) -> None:
    """Reject values below 1 (counts and lengths)."""
    _require_finite(name, value)
    if value < 1:
        raise InputContractError(f"{name} must be at least 1, got {value!r}")


def available_days(sprint_length_days: float, developer_count: float, leave_days: float) -> float:
    """Sprint length minus leave converted to team-equivalent days."""
    return sprint_length_days - (leave_days / developer_count)


@dataclass(frozen=True)
class Team:
    """A team whose sprint capacity is being planned."""
    name: str
    developer_count: int
    sprint_length_days: int
    member_count: Optional[int] = None  # total headcount, display only
    baseline_velocity: Optional[float] = None  # points per sprint, not per day

    def __post_init__(self):
        require_positive("developer_count", self.developer_count)
        require_positive("sprint_length_days", self.sprint_length_days)
        if self.member_count is not None:
            require_positive("member_count", self.member_count)
            if self.developer_count > self.member_count:
                raise InputContractError(
                    f"developer_count ({self.developer_count}) cannot exceed member_count ({self.member_count})"
                )
        if self.baseline_velocity is not None:
            require_non_negative("baseline_velocity", self.baseline_velocity)

    @property
    def has_baseline(self) -> bool:
        return self.baseline_velocity is not None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "developer_count": self.developer_count,
            "sprint_length_days": self.sprint_length_days,
            "member_count": self.member_count,
            "baseline_velocity": self.baseline_velocity,
        }


@dataclass(frozen=True)
class SprintRecord:
    """
    One completed sprint.

    ``sprint_length_days`` and ``developer_count`` are snapshots of the team
    configuration when the sprint was logged. Normalization always reads
    these, so later changes to the team do not rewrite history.
    """
    points_completed: float
    leave_days: float
    sprint_length_days: int
    developer_count: int
    end_date: Optional[date] = None

    def __post_init__(self):
        require_non_negative("points_completed", self.points_completed)
        require_non_negative("leave_days", self.leave_days)
        require_positive("sprint_length_days", self.sprint_length_days)
        require_positive("developer_count", self.developer_count)

    @property
    def available_days(self) -> float:
        return available_days(self.sprint_length_days, self.developer_count, self.leave_days)

    @classmethod
    def from_dict(cls, data: dict) -> "SprintRecord":
        """Build a record from a plain mapping (e.g. a stored document)."""
        end_date = data.get("end_date")
        if isinstance(end_date, str):
            end_date = date.fromisoformat(end_date)
        return cls(
            points_completed=data["points_completed"],
            leave_days=data.get("leave_days", 0),
            sprint_length_days=data["sprint_length_days"],
            developer_count=data["developer_count"],
            end_date=end_date,
        )

    @classmethod
    def logged_for(
        cls,
        team: Team,
        points_completed: float,
        leave_days: float = 0,
        end_date: Optional[date] = None
    ) -> "SprintRecord":
        """Log a sprint against a team, snapshotting its current configuration."""
        return cls(
            points_completed=points_completed,
            leave_days=leave_days,
            sprint_length_days=team.sprint_length_days,
            developer_count=team.developer_count,
            end_date=end_date,
        )

    def to_dict(self) -> dict:
        return {
            "points_completed": self.points_completed,
            "leave_days": self.leave_days,
            "sprint_length_days": self.sprint_length_days,
            "developer_count": self.developer_count,
            "end_date": self.end_date.isoformat() if self.end_date else None,
        }


def newest_first(records: list[SprintRecord]) -> list[SprintRecord]:
    """
    Order sprint records by end date, most recent first.

    This is the ordering the velocity engine expects its input in. The engine
    itself never sorts, so callers holding unordered records use this first.
    """
    undated = [r for r in records if r.end_date is None]
    if undated:
        raise InputContractError(f"{len(undated)} sprint record(s) have no end_date to order by")
    return sorted(records, key=lambda r: r.end_date, reverse=True)
