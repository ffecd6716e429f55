"""Scenario file definition for running one planning cycle offline."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from st_boundary_mapper.lane_map import LaneMap
from st_boundary_mapper.reference_line import ReferenceLine
from st_boundary_mapper.types import (
    DecisionData,
    EnforcedLine,
    FollowDecision,
    IgnoreDecision,
    MainCruise,
    MainDecision,
    MainMissionComplete,
    MainStop,
    NudgeDecision,
    ObjectDecision,
    Obstacle,
    OvertakeDecision,
    PathData,
    PathPoint,
    PredictionTrajectory,
    TrajectoryPoint,
    YieldDecision,
)


class PoseConfig(BaseModel):
    """Pose with optional relative time."""

    x: float = Field(description="X coordinate [m]")
    y: float = Field(description="Y coordinate [m]")
    theta: float = Field(default=0.0, description="Yaw angle [rad]")
    relative_time: float = Field(default=0.0, description="Relative time [s]")


class PathPointConfig(BaseModel):
    """Ego path point; s is accumulated from xy when omitted."""

    x: float = Field(description="X coordinate [m]")
    y: float = Field(description="Y coordinate [m]")
    theta: float = Field(default=0.0, description="Yaw angle [rad]")
    s: float | None = Field(default=None, description="Arc length [m]")


class TrajectoryConfig(BaseModel):
    """Obstacle prediction trajectory."""

    start_timestamp: float = Field(default=0.0, description="Prediction start time [s]")
    points: list[PoseConfig] = Field(description="Trajectory points")


class DecisionConfig(BaseModel):
    """Object decision."""

    type: Literal["follow", "yield", "overtake", "ignore", "nudge"] = Field(
        description="Decision type"
    )
    distance_s: float = Field(default=0.0, description="Longitudinal distance [m]")
    distance_l: float = Field(default=0.0, description="Lateral distance (nudge) [m]")

    def to_decision(self) -> ObjectDecision:
        if self.type == "follow":
            return FollowDecision(distance_s=self.distance_s)
        if self.type == "yield":
            return YieldDecision(distance_s=self.distance_s)
        if self.type == "overtake":
            return OvertakeDecision(distance_s=self.distance_s)
        if self.type == "nudge":
            return NudgeDecision(distance_l=self.distance_l)
        return IgnoreDecision()


class ObstacleConfig(BaseModel):
    """Obstacle with predictions and decisions."""

    id: str = Field(description="Obstacle ID")
    type: Literal["static", "dynamic"] = Field(default="dynamic", description="Obstacle type")
    speed: float = Field(default=0.0, description="Speed [m/s]")
    length: float = Field(gt=0.0, description="Length [m]")
    width: float = Field(gt=0.0, description="Width [m]")
    trajectories: list[TrajectoryConfig] = Field(default_factory=list)
    decisions: list[DecisionConfig] = Field(default_factory=list)

    def to_obstacle(self) -> Obstacle:
        return Obstacle(
            id=self.id,
            speed=self.speed,
            length=self.length,
            width=self.width,
            prediction_trajectories=[
                PredictionTrajectory(
                    points=[
                        TrajectoryPoint(
                            x=p.x, y=p.y, theta=p.theta, relative_time=p.relative_time
                        )
                        for p in trajectory.points
                    ],
                    start_timestamp=trajectory.start_timestamp,
                )
                for trajectory in self.trajectories
            ],
            decisions=[d.to_decision() for d in self.decisions],
        )


class MainDecisionConfig(BaseModel):
    """Main decision applying to the ego vehicle."""

    type: Literal["stop", "mission_complete", "cruise"] = Field(description="Decision type")
    lane_id: str | None = Field(default=None, description="Stop line lane ID")
    distance_s: float = Field(default=0.0, description="Stop line position on the lane [m]")

    def to_decision(self) -> MainDecision:
        if self.type == "stop":
            if self.lane_id is None:
                msg = "Stop decision must have lane_id"
                raise ValueError(msg)
            return MainStop(
                enforced_line=EnforcedLine(lane_id=self.lane_id, distance_s=self.distance_s)
            )
        if self.type == "mission_complete":
            return MainMissionComplete()
        return MainCruise()


@dataclass
class ScenarioInputs:
    """Domain objects built from a scenario file."""

    initial_planning_point: TrajectoryPoint
    decision_data: DecisionData
    path_data: PathData
    reference_line: ReferenceLine
    lane_map: LaneMap
    planning_distance: float
    planning_time: float
    current_timestamp: float


class ScenarioConfig(BaseModel):
    """One planning cycle."""

    reference_line: list[tuple[float, float]] = Field(description="Reference line xy points")
    path: list[PathPointConfig] = Field(description="Ego path points")
    lanes: dict[str, list[tuple[float, float]]] = Field(default_factory=dict)
    initial_point: PoseConfig = Field(default_factory=lambda: PoseConfig(x=0.0, y=0.0))
    main_decision: MainDecisionConfig | None = Field(default=None)
    obstacles: list[ObstacleConfig] = Field(default_factory=list)
    planning_distance: float = Field(description="Planning horizon distance [m]")
    planning_time: float = Field(description="Planning horizon time [s]")
    current_timestamp: float = Field(default=0.0, description="Current cycle timestamp [s]")

    @classmethod
    def from_yaml(cls, path: str | Path) -> ScenarioConfig:
        """Load scenario from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def build_path_data(self) -> PathData:
        points: list[PathPoint] = []
        s = 0.0
        for i, p in enumerate(self.path):
            if i > 0:
                prev = self.path[i - 1]
                s += math.hypot(p.x - prev.x, p.y - prev.y)
            points.append(PathPoint(x=p.x, y=p.y, theta=p.theta, s=p.s if p.s is not None else s))
        return PathData(points=points)

    def to_inputs(self) -> ScenarioInputs:
        """Convert the scenario into mapper inputs."""
        static_obstacles: list[Obstacle | None] = []
        dynamic_obstacles: list[Obstacle | None] = []
        for obs in self.obstacles:
            if obs.type == "static":
                static_obstacles.append(obs.to_obstacle())
            else:
                dynamic_obstacles.append(obs.to_obstacle())

        return ScenarioInputs(
            initial_planning_point=TrajectoryPoint(
                x=self.initial_point.x,
                y=self.initial_point.y,
                theta=self.initial_point.theta,
                relative_time=self.initial_point.relative_time,
            ),
            decision_data=DecisionData(
                main_decision=self.main_decision.to_decision() if self.main_decision else None,
                static_obstacles=static_obstacles,
                dynamic_obstacles=dynamic_obstacles,
            ),
            path_data=self.build_path_data(),
            reference_line=ReferenceLine.from_xy(self.reference_line),
            lane_map=LaneMap.from_centerlines(self.lanes),
            planning_distance=self.planning_distance,
            planning_time=self.planning_time,
            current_timestamp=self.current_timestamp,
        )
