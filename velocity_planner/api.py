"""
FastAPI Backend for Velocity Planner

Stateless REST API: callers send a team and its sprint history with each
request and get velocity and sprint planning figures back.
"""

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator, model_validator

from . import __version__
from .config import Config, setup_logging
from .models import InputContractError, SprintRecord, Team, newest_first
from .velocity import NO_DATA, VelocityCalculator, plan
from .visualizer import Visualizer

logger = logging.getLogger(__name__)

# Global instances
config = Config()
calculator = VelocityCalculator()
visualizer = Visualizer(config.thresholds)


# Pydantic models for API
class TeamIn(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    developer_count: int = Field(ge=1)
    sprint_length_days: int = Field(ge=1, le=30)
    member_count: Optional[int] = Field(default=None, ge=1)
    baseline_velocity: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def developers_within_members(self):
        if self.member_count is not None and self.developer_count > self.member_count:
            raise ValueError("developer_count cannot exceed member_count")
        return self

    def to_team(self) -> Team:
        return Team(
            name=self.name,
            developer_count=self.developer_count,
            sprint_length_days=self.sprint_length_days,
            member_count=self.member_count,
            baseline_velocity=self.baseline_velocity,
        )


class SprintIn(BaseModel):
    end_date: date
    points_completed: float = Field(ge=0)
    leave_days: float = Field(ge=0)
    sprint_length_days: int = Field(ge=1, le=30)  # snapshot at logging time
    developer_count: int = Field(ge=1)  # snapshot at logging time

    @field_validator("end_date")
    @classmethod
    def not_in_future(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("end_date cannot be in the future")
        return value

    def to_record(self) -> SprintRecord:
        return SprintRecord(
            points_completed=self.points_completed,
            leave_days=self.leave_days,
            sprint_length_days=self.sprint_length_days,
            developer_count=self.developer_count,
            end_date=self.end_date,
        )


class VelocityRequest(BaseModel):
    team: TeamIn
    sprints: list[SprintIn] = Field(default_factory=list)

    def to_domain(self) -> tuple[Team, list[SprintRecord]]:
        records = newest_first([s.to_record() for s in self.sprints])
        return self.team.to_team(), records


class PlanRequest(VelocityRequest):
    expected_leave_days: float = Field(default=0, ge=0)


# Lifespan context manager
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging(config.log_level)
    logger.info("Velocity Planner API %s starting up", __version__)
    yield
    logger.info("Velocity Planner API shutting down")


# Create FastAPI app
app = FastAPI(
    title="Velocity Planner",
    description="API for team velocity and sprint commitment recommendations",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InputContractError)
async def input_contract_error_handler(request: Request, exc: InputContractError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def _velocity_and_plan(team: Team, records: list[SprintRecord], expected_leave_days: float):
    """Velocity for the history and the forward plan built on it, computed once."""
    result = calculator.calculate(records, team)
    if result is NO_DATA:
        return result, NO_DATA

    sprint_plan = plan(
        result.average_velocity_per_day,
        team.sprint_length_days,
        team.developer_count,
        expected_leave_days
    )
    return result, sprint_plan


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": __version__
    }


@app.post("/api/velocity")
async def get_velocity(request: VelocityRequest):
    """Average velocity per day for the submitted history."""
    team, records = request.to_domain()
    result = calculator.calculate(records, team)
    return visualizer.velocity_report(team, result, format="dict")


@app.post("/api/plan")
async def get_sprint_plan(request: PlanRequest):
    """Recommended commitment for the next sprint given expected leave."""
    team, records = request.to_domain()
    result, sprint_plan = _velocity_and_plan(team, records, request.expected_leave_days)
    return visualizer.plan_report(
        team, result, sprint_plan, request.expected_leave_days, format="dict"
    )


@app.post("/api/reports/plan/text")
async def get_plan_text_report(request: PlanRequest):
    """Get text report for a sprint plan."""
    team, records = request.to_domain()
    result, sprint_plan = _velocity_and_plan(team, records, request.expected_leave_days)
    report = visualizer.plan_report(
        team, result, sprint_plan, request.expected_leave_days, format="text"
    )
    return {"report": report}


@app.post("/api/slack/plan")
async def get_slack_plan(request: PlanRequest):
    """Get Slack-formatted sprint plan."""
    team, records = request.to_domain()
    result, sprint_plan = _velocity_and_plan(team, records, request.expected_leave_days)
    return visualizer.plan_report(
        team, result, sprint_plan, request.expected_leave_days, format="slack"
    )


# Sample data endpoint (for testing)
@app.get("/api/sample-data")
async def get_sample_data(expected_leave_days: float = Query(default=8, ge=0)):
    """Velocity and plan for a built-in sample team."""
    team = Team(
        name="Platform",
        developer_count=4,
        sprint_length_days=14,
        member_count=5,
        baseline_velocity=28
    )

    today = date.today()
    history = [(30, 0), (24, 8), (26, 2.5), (0, 0)]
    sprints = [
        SprintRecord.logged_for(
            team, points, leave, end_date=today - timedelta(days=14 * (i + 1))
        )
        for i, (points, leave) in enumerate(history)
    ]

    result, sprint_plan = _velocity_and_plan(team, sprints, expected_leave_days)

    return {
        "team": team.to_dict(),
        "sprints": [s.to_dict() for s in sprints],
        "velocity": visualizer.velocity_report(team, result, format="dict"),
        "plan": visualizer.plan_report(team, result, sprint_plan, expected_leave_days, format="dict")
    }


# Run with: uvicorn velocity_planner.api:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.api_host, port=config.api_port)
