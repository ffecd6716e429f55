"""S-T boundary mapping for speed planning."""

from st_boundary_mapper.boundary_mapper import StBoundaryMapper
from st_boundary_mapper.config import StBoundaryConfig, StBoundaryMapperConfig, VehicleParam
from st_boundary_mapper.dynamic_boundary import DynamicObstacleBoundaryBuilder
from st_boundary_mapper.lane_map import Lane, LaneMap
from st_boundary_mapper.reference_line import ReferenceLine, ReferenceLinePoint, SLPoint
from st_boundary_mapper.status import Status, StatusCode
from st_boundary_mapper.stop_boundary import StopBoundaryBuilder
from st_boundary_mapper.types import (
    UNBOUNDED_TIME,
    BoundaryType,
    DecisionData,
    EnforcedLine,
    FollowDecision,
    IgnoreDecision,
    MainCruise,
    MainMissionComplete,
    MainStop,
    NudgeDecision,
    Obstacle,
    OvertakeDecision,
    PathData,
    PathPoint,
    PredictionTrajectory,
    StGraphBoundary,
    STPoint,
    TrajectoryPoint,
    YieldDecision,
)

__all__ = [
    "UNBOUNDED_TIME",
    "BoundaryType",
    "DecisionData",
    "DynamicObstacleBoundaryBuilder",
    "EnforcedLine",
    "FollowDecision",
    "IgnoreDecision",
    "Lane",
    "LaneMap",
    "MainCruise",
    "MainMissionComplete",
    "MainStop",
    "NudgeDecision",
    "Obstacle",
    "OvertakeDecision",
    "PathData",
    "PathPoint",
    "PredictionTrajectory",
    "ReferenceLine",
    "ReferenceLinePoint",
    "SLPoint",
    "STPoint",
    "Status",
    "StatusCode",
    "StBoundaryConfig",
    "StBoundaryMapper",
    "StBoundaryMapperConfig",
    "StGraphBoundary",
    "StopBoundaryBuilder",
    "TrajectoryPoint",
    "VehicleParam",
    "YieldDecision",
]
