"""Lane lookup using Shapely centerlines."""

from dataclasses import dataclass

from shapely.geometry import LineString


@dataclass
class Lane:
    """レーン (中心線のみ)."""

    id: str
    centerline: LineString

    @property
    def length(self) -> float:
        return float(self.centerline.length)

    def get_smooth_point(self, s: float) -> tuple[float, float]:
        """Point on the centerline at arc length s (clamped to the lane ends)."""
        s = min(max(s, 0.0), self.length)
        point = self.centerline.interpolate(s)
        return float(point.x), float(point.y)


class LaneMap:
    """Lane repository keyed by lane id."""

    def __init__(self, lanes: list[Lane] | None = None) -> None:
        self._lanes: dict[str, Lane] = {}
        for lane in lanes or []:
            self.add_lane(lane)

    @classmethod
    def from_centerlines(cls, centerlines: dict[str, list[tuple[float, float]]]) -> "LaneMap":
        """Build a map from {lane_id: [(x, y), ...]}."""
        lanes = []
        for lane_id, coords in centerlines.items():
            if len(coords) < 2:
                msg = f"Lane {lane_id} needs at least 2 centerline points"
                raise ValueError(msg)
            lanes.append(Lane(id=lane_id, centerline=LineString(coords)))
        return cls(lanes)

    def add_lane(self, lane: Lane) -> None:
        self._lanes[lane.id] = lane

    def get_lane_by_id(self, lane_id: str) -> Lane | None:
        return self._lanes.get(lane_id)

    def __len__(self) -> int:
        return len(self._lanes)
