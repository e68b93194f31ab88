"""
Visualizer for Velocity Planner

Formats velocity averages and sprint plans as text and Slack reports.
"""

from typing import Literal, Optional, Union

from .models import Team
from .velocity import (
    NO_DATA,
    CapacityLevel,
    Outcome,
    SprintPlan,
    VelocityResult,
)

NO_DATA_MESSAGE = "No velocity data available"


# ASCII art for terminal output
class ASCIICharts:
    """Generate ASCII art charts for terminal/text output."""

    @staticmethod
    def horizontal_bar(
        value: float,
        max_value: float = 100,
        width: int = 20,
        filled_char: str = "█",
        empty_char: str = "░"
    ) -> str:
        """Create a horizontal bar chart."""
        if max_value <= 0:
            return empty_char * width

        filled = int((value / max_value) * width)
        filled = max(0, min(filled, width))
        return filled_char * filled + empty_char * (width - filled)

    @staticmethod
    def capacity_bar(sprint_plan: SprintPlan, width: int = 20, high: float = 80, medium: float = 50) -> str:
        """Capacity bar with a level indicator."""
        bar = ASCIICharts.horizontal_bar(sprint_plan.bar_width, 100, width)
        status = {
            CapacityLevel.HIGH: "🟢",
            CapacityLevel.MEDIUM: "🟡",
            CapacityLevel.LOW: "🔴"
        }[sprint_plan.capacity_level(high, medium)]
        return f"{bar} {sprint_plan.capacity_percentage:5.1f}% {status}"


class TextReporter:
    """Generate plain text reports."""

    def __init__(self, high: float = 80, medium: float = 50):
        self.high = high
        self.medium = medium

    def velocity_report(self, team: Team, result: Union[VelocityResult, Outcome]) -> str:
        """Generate a text report of a team's average velocity."""
        lines = []

        lines.append("╔" + "═" * 60 + "╗")
        lines.append("║" + f"VELOCITY: {team.name}".center(60) + "║")
        lines.append("╠" + "═" * 60 + "╣")
        lines.append(f"║  Sprint length: {team.sprint_length_days} days".ljust(61) + "║")
        lines.append(f"║  Developers: {team.developer_count}".ljust(61) + "║")
        lines.append("║" + "─" * 60 + "║")

        if result is NO_DATA:
            lines.append(f"║  {NO_DATA_MESSAGE}".ljust(61) + "║")
        else:
            lines.append(f"║  Average: {result.average_velocity_per_day:.2f} points/day".ljust(61) + "║")
            lines.append(f"║  {result.description}".ljust(61) + "║")

        lines.append("╚" + "═" * 60 + "╝")

        return "\n".join(lines)

    def plan_report(
        self,
        team: Team,
        result: Union[VelocityResult, Outcome],
        sprint_plan: Union[SprintPlan, Outcome],
        expected_leave_days: float
    ) -> str:
        """Generate a text report of a sprint plan."""
        lines = []

        lines.append("╔" + "═" * 60 + "╗")
        lines.append("║" + f"SPRINT PLAN: {team.name}".center(60) + "║")
        lines.append("╠" + "═" * 60 + "╣")
        lines.append(f"║  Expected leave: {expected_leave_days:g} person-days".ljust(61) + "║")
        lines.append("║" + "─" * 60 + "║")

        if result is NO_DATA:
            lines.append(f"║  {NO_DATA_MESSAGE}".ljust(61) + "║")
            lines.append("║  Log a sprint or set a baseline velocity.".ljust(61) + "║")
        elif sprint_plan is NO_DATA:
            lines.append("║  ⚠ Leave days too high: less than 1 day available".ljust(61) + "║")
        else:
            bar = ASCIICharts.capacity_bar(sprint_plan, 30, self.high, self.medium)
            lines.append(f"║  Recommended: {sprint_plan.recommended_points} points".ljust(61) + "║")
            lines.append(f"║  {sprint_plan.comparison_text}".ljust(61) + "║")
            lines.append(f"║  Capacity: {bar}".ljust(61) + "║")
            lines.append(f"║  Team is at {sprint_plan.capacity_percentage:.0f}% capacity".ljust(61) + "║")
            lines.append("║" + "─" * 60 + "║")
            lines.append(f"║  {result.description}".ljust(61) + "║")

        lines.append("╚" + "═" * 60 + "╝")

        return "\n".join(lines)


class SlackFormatter:
    """Format plans as Slack Block Kit messages."""

    @staticmethod
    def plan_message(
        team: Team,
        result: Union[VelocityResult, Outcome],
        sprint_plan: Union[SprintPlan, Outcome],
        expected_leave_days: float
    ) -> dict:
        """Create Slack message for a sprint plan."""
        header = {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": f"🎯 Sprint Plan: {team.name}",
                "emoji": True
            }
        }

        if result is NO_DATA or sprint_plan is NO_DATA:
            text = NO_DATA_MESSAGE if result is NO_DATA else "*Leave days too high* to plan this sprint"
            return {
                "blocks": [
                    header,
                    {"type": "section", "text": {"type": "mrkdwn", "text": text}}
                ]
            }

        return {
            "blocks": [
                header,
                {
                    "type": "section",
                    "fields": [
                        {
                            "type": "mrkdwn",
                            "text": f"*Recommended:*\n{sprint_plan.recommended_points} points"
                        },
                        {
                            "type": "mrkdwn",
                            "text": f"*Full Capacity:*\n{sprint_plan.full_capacity_points} points"
                        },
                        {
                            "type": "mrkdwn",
                            "text": f"*Capacity:*\n{sprint_plan.capacity_percentage:.0f}%"
                        },
                        {
                            "type": "mrkdwn",
                            "text": f"*Expected Leave:*\n{expected_leave_days:g} person-days"
                        }
                    ]
                },
                {
                    "type": "context",
                    "elements": [
                        {"type": "mrkdwn", "text": f"{sprint_plan.comparison_text} · {result.description}"}
                    ]
                }
            ]
        }


# Main visualization class
class Visualizer:
    """
    Main visualizer class that supports multiple output formats.

    Usage:
        viz = Visualizer()
        print(viz.plan_report(team, result, sprint_plan, 8, format="text"))
        slack_payload = viz.plan_report(team, result, sprint_plan, 8, format="slack")
    """

    def __init__(self, thresholds: Optional[dict] = None):
        thresholds = thresholds or {}
        self.high = thresholds.get("high", 80)
        self.medium = thresholds.get("medium", 50)
        self.text = TextReporter(self.high, self.medium)
        self.slack = SlackFormatter()

    def velocity_report(
        self,
        team: Team,
        result: Union[VelocityResult, Outcome],
        format: Literal["text", "dict"] = "text"
    ):
        """Generate velocity report in specified format."""
        if format == "text":
            return self.text.velocity_report(team, result)
        elif format == "dict":
            if result is NO_DATA:
                return {"has_data": False, "description": NO_DATA_MESSAGE, "velocity": None}
            return {"has_data": True, "description": result.description, "velocity": result.to_dict()}
        else:
            raise ValueError(f"Unknown format: {format}")

    def plan_report(
        self,
        team: Team,
        result: Union[VelocityResult, Outcome],
        sprint_plan: Union[SprintPlan, Outcome],
        expected_leave_days: float,
        format: Literal["text", "slack", "dict"] = "text"
    ):
        """Generate sprint plan report in specified format."""
        if format == "text":
            return self.text.plan_report(team, result, sprint_plan, expected_leave_days)
        elif format == "slack":
            return self.slack.plan_message(team, result, sprint_plan, expected_leave_days)
        elif format == "dict":
            description = NO_DATA_MESSAGE if result is NO_DATA else result.description
            if sprint_plan is NO_DATA:
                reason = "no_velocity_data" if result is NO_DATA else "leave_too_high"
                return {"has_data": False, "description": description, "plan": None, "reason": reason}
            data = sprint_plan.to_dict()
            data["capacity_level"] = sprint_plan.capacity_level(self.high, self.medium).value
            data["bar_width"] = sprint_plan.bar_width
            return {"has_data": True, "description": description, "plan": data}
        else:
            raise ValueError(f"Unknown format: {format}")
