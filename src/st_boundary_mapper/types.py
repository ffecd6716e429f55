"""Data structures for S-T boundary mapping."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from shapely.geometry import Point, Polygon

# 時間方向の上限なしを表す番兵値
UNBOUNDED_TIME = -1.0


@dataclass
class STPoint:
    """S-T平面上の1点."""

    s: float  # 経路長 [m]
    t: float  # 計画開始からの時間 [s]


class BoundaryType(Enum):
    """境界の種類."""

    UNKNOWN = "unknown"
    STOP = "stop"
    FOLLOW = "follow"
    YIELD = "yield"
    OVERTAKE = "overtake"


@dataclass
class StGraphBoundary:
    """S-T平面上の禁止領域 (4頂点の四角形).

    Vertex 0/1 form the lower edge (earlier/later time) and vertex 2/3 the
    upper edge (later/earlier time).
    """

    points: list[STPoint]
    boundary_type: BoundaryType = BoundaryType.UNKNOWN
    characteristic_length: float = 1.0

    def __post_init__(self) -> None:
        if len(self.points) != 4:
            msg = f"StGraphBoundary requires 4 points, got {len(self.points)}"
            raise ValueError(msg)

    @property
    def min_s(self) -> float:
        return min(p.s for p in self.points)

    @property
    def max_s(self) -> float:
        return max(p.s for p in self.points)

    @property
    def min_t(self) -> float:
        return min(self._bounded_times(), default=math.inf)

    @property
    def max_t(self) -> float:
        """Latest covered time, ``inf`` when a vertex has no time cutoff."""
        if self.is_time_unbounded:
            return math.inf
        return max(self._bounded_times(), default=math.inf)

    @property
    def is_time_unbounded(self) -> bool:
        return any(p.t == UNBOUNDED_TIME for p in self.points)

    def _bounded_times(self) -> list[float]:
        return [p.t for p in self.points if p.t != UNBOUNDED_TIME]

    def is_point_in_boundary(self, point: STPoint) -> bool:
        """Check whether an S-T point lies inside or on the boundary.

        An unbounded vertex is closed at the earliest sampled time. Past the
        last sampled time the boundary keeps its s-range at that time.
        """
        times = self._bounded_times()
        if not times:
            return False
        first_t, last_t = min(times), max(times)
        polygon = Polygon(
            [(first_t if p.t == UNBOUNDED_TIME else p.t, p.s) for p in self.points]
        )
        t = point.t
        if t > last_t and self.is_time_unbounded:
            t = last_t
        return polygon.intersects(Point(t, point.s))


@dataclass
class PathPoint:
    """自車経路上の1点."""

    x: float  # X座標 [m]
    y: float  # Y座標 [m]
    theta: float  # ヨー角 [rad]
    s: float  # 経路長 [m]


@dataclass
class PathData:
    """自車の固定経路."""

    points: list[PathPoint]

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, idx: int) -> PathPoint:
        return self.points[idx]

    @property
    def num_of_points(self) -> int:
        return len(self.points)


@dataclass
class TrajectoryPoint:
    """軌道上の1点 (相対時刻付き)."""

    x: float  # X座標 [m]
    y: float  # Y座標 [m]
    theta: float  # ヨー角 [rad]
    relative_time: float = 0.0  # 軌道開始からの時間 [s]


@dataclass
class PredictionTrajectory:
    """障害物の予測軌道."""

    points: list[TrajectoryPoint]
    start_timestamp: float = 0.0  # 予測開始時刻 [s]

    @property
    def num_of_points(self) -> int:
        return len(self.points)

    def trajectory_point_at(self, idx: int) -> TrajectoryPoint:
        return self.points[idx]


@dataclass(frozen=True)
class FollowDecision:
    distance_s: float


@dataclass(frozen=True)
class YieldDecision:
    distance_s: float


@dataclass(frozen=True)
class OvertakeDecision:
    distance_s: float


@dataclass(frozen=True)
class IgnoreDecision:
    pass


@dataclass(frozen=True)
class NudgeDecision:
    distance_l: float = 0.0


ObjectDecision = FollowDecision | YieldDecision | OvertakeDecision | IgnoreDecision | NudgeDecision


@dataclass
class Obstacle:
    """予測軌道と判断を持つ障害物."""

    id: str  # 障害物ID
    speed: float  # 速度 [m/s]
    length: float  # 長さ [m]
    width: float  # 幅 [m]
    prediction_trajectories: list[PredictionTrajectory] = field(default_factory=list)
    decisions: list[ObjectDecision] = field(default_factory=list)


@dataclass(frozen=True)
class EnforcedLine:
    """停止線 (レーンID + レーン上の距離)."""

    lane_id: str
    distance_s: float


@dataclass(frozen=True)
class MainStop:
    enforced_line: EnforcedLine


@dataclass(frozen=True)
class MainMissionComplete:
    pass


@dataclass(frozen=True)
class MainCruise:
    pass


MainDecision = MainStop | MainMissionComplete | MainCruise


@dataclass
class DecisionData:
    """1計画周期分の判断結果."""

    main_decision: MainDecision | None = None
    static_obstacles: list[Obstacle | None] = field(default_factory=list)
    dynamic_obstacles: list[Obstacle | None] = field(default_factory=list)
