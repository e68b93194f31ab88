"""
Tests for report formatting.
"""

import pytest

from velocity_planner.models import Team
from velocity_planner.velocity import NO_DATA, VelocityResult, plan
from velocity_planner.visualizer import ASCIICharts, Visualizer


@pytest.fixture
def team():
    return Team(name="Platform", developer_count=4, sprint_length_days=14)


@pytest.fixture
def result():
    return VelocityResult(2.0, 3, False, [2.0, 2.0, 2.0])


class TestASCIICharts:
    """Tests for ASCII bars."""

    def test_horizontal_bar(self):
        assert ASCIICharts.horizontal_bar(50, 100, 10) == "█" * 5 + "░" * 5

    def test_bar_clamped(self):
        assert ASCIICharts.horizontal_bar(150, 100, 10) == "█" * 10

    def test_capacity_bar(self):
        bar = ASCIICharts.capacity_bar(plan(2.0, 14, 4, 8), width=10)
        assert "85.7%" in bar
        assert "🟢" in bar


class TestTextReports:
    """Tests for plain text reports."""

    def test_plan_report(self, team, result):
        sprint_plan = plan(2.0, 14, 4, 8)
        report = Visualizer().plan_report(team, result, sprint_plan, 8)

        assert "SPRINT PLAN: Platform" in report
        assert "Recommended: 24 points" in report
        assert "-4 points vs full capacity" in report
        assert "Team is at 86% capacity" in report
        assert "Based on 3 sprints" in report

    def test_plan_report_full_capacity(self, team, result):
        report = Visualizer().plan_report(team, result, plan(2.0, 14, 4, 0), 0)
        assert "Full capacity" in report
        assert "Team is at 100% capacity" in report

    def test_plan_report_no_data(self, team):
        report = Visualizer().plan_report(team, NO_DATA, NO_DATA, 0)
        assert "No velocity data available" in report

    def test_plan_report_leave_too_high(self, team, result):
        report = Visualizer().plan_report(team, result, NO_DATA, 56)
        assert "Leave days too high" in report

    def test_velocity_report(self, team, result):
        report = Visualizer().velocity_report(team, result)
        assert "2.00 points/day" in report
        assert "Based on 3 sprints" in report


class TestStructuredReports:
    """Tests for dict and Slack output."""

    def test_plan_dict(self, team, result):
        data = Visualizer().plan_report(team, result, plan(2.0, 14, 4, 8), 8, format="dict")
        assert data["has_data"] is True
        assert data["plan"]["recommended_points"] == 24
        assert data["plan"]["capacity_level"] == "high"
        assert data["description"] == "Based on 3 sprints"

    def test_plan_dict_uses_configured_thresholds(self, team, result):
        viz = Visualizer({"high": 90, "medium": 50})
        data = viz.plan_report(team, result, plan(2.0, 14, 4, 8), 8, format="dict")
        assert data["plan"]["capacity_level"] == "medium"

    def test_plan_dict_no_data(self, team):
        data = Visualizer().plan_report(team, NO_DATA, NO_DATA, 0, format="dict")
        assert data == {
            "has_data": False,
            "description": "No velocity data available",
            "plan": None,
            "reason": "no_velocity_data"
        }

    def test_velocity_dict_no_data(self, team):
        data = Visualizer().velocity_report(team, NO_DATA, format="dict")
        assert data["has_data"] is False
        assert data["velocity"] is None

    def test_slack_message(self, team, result):
        payload = Visualizer().plan_report(team, result, plan(2.0, 14, 4, 8), 8, format="slack")
        fields = payload["blocks"][1]["fields"]
        assert "24 points" in fields[0]["text"]
        assert "86%" in fields[2]["text"]

    def test_unknown_format(self, team, result):
        with pytest.raises(ValueError):
            Visualizer().plan_report(team, result, NO_DATA, 0, format="html")
