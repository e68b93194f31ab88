"""
Velocity Planner

Recommends how many points a team should commit to in a sprint, from its
own historical velocity corrected for planned leave.
"""

__version__ = "1.0.0"

from .models import (
    Team,
    SprintRecord,
    InputContractError,
    newest_first
)

from .velocity import (
    VelocityCalculator,
    VelocityResult,
    SprintPlan,
    DataPointSelection,
    CapacityLevel,
    Outcome,
    UNUSABLE,
    NO_DATA,
    MAX_DATA_POINTS,
    normalize,
    convert_baseline,
    select_data_points,
    aggregate,
    plan,
    recommend_commitment
)

from .visualizer import (
    Visualizer,
    TextReporter,
    SlackFormatter
)

__all__ = [
    # Version
    "__version__",

    # Models
    "Team",
    "SprintRecord",
    "InputContractError",
    "newest_first",

    # Velocity
    "VelocityCalculator",
    "VelocityResult",
    "SprintPlan",
    "DataPointSelection",
    "CapacityLevel",
    "Outcome",
    "UNUSABLE",
    "NO_DATA",
    "MAX_DATA_POINTS",
    "normalize",
    "convert_baseline",
    "select_data_points",
    "aggregate",
    "plan",
    "recommend_commitment",

    # Visualizer
    "Visualizer",
    "TextReporter",
    "SlackFormatter",
]
