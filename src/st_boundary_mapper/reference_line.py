"""Reference line with Cartesian to Frenet conversion."""

import logging
from dataclasses import dataclass

import numpy as np
from scipy.spatial import KDTree

logger = logging.getLogger(__name__)


@dataclass
class ReferenceLinePoint:
    """参照線上の1点."""

    x: float  # X座標 [m]
    y: float  # Y座標 [m]
    yaw: float  # ヨー角 [rad]


@dataclass
class SLPoint:
    """Frenet座標."""

    s: float  # 経路長 [m]
    l: float  # noqa: E741  横方向偏差 [m] (左が正)


class ReferenceLine:
    """Reference line used to express points in the Frenet frame."""

    def __init__(self, points: list[ReferenceLinePoint]):
        """Initialize with reference points.

        Args:
            points: Ordered points along the line
        """
        self.points = points
        self._x = np.array([p.x for p in points], dtype=float)
        self._y = np.array([p.y for p in points], dtype=float)
        self._yaw = np.array([p.yaw for p in points], dtype=float)

        self._s = np.zeros(len(points))
        if len(points) > 1:
            dist = np.hypot(np.diff(self._x), np.diff(self._y))
            self._s[1:] = np.cumsum(dist)

        self._tree = KDTree(np.column_stack((self._x, self._y))) if len(points) > 0 else None

    @classmethod
    def from_xy(cls, xy: list[tuple[float, float]]) -> "ReferenceLine":
        """Build a reference line from xy points, deriving yaw from segments."""
        points = []
        for i, (x, y) in enumerate(xy):
            if i < len(xy) - 1:
                nx, ny = xy[i + 1]
                yaw = float(np.arctan2(ny - y, nx - x))
            elif i > 0:
                yaw = points[-1].yaw
            else:
                yaw = 0.0
            points.append(ReferenceLinePoint(x=float(x), y=float(y), yaw=yaw))
        return cls(points)

    def __len__(self) -> int:
        return len(self.points)

    def length(self) -> float:
        """Total arc length [m]."""
        return float(self._s[-1]) if len(self.points) > 0 else 0.0

    def get_point_in_frenet_frame(self, x: float, y: float) -> SLPoint | None:
        """Project (x, y) onto the line.

        Args:
            x: Global X coordinate
            y: Global Y coordinate

        Returns:
            SLPoint, or None if the line is degenerate or the projection
            lies beyond its end
        """
        if self._tree is None or len(self.points) < 2:
            logger.error("Reference line has too few points for projection.")
            return None

        _, idx = self._tree.query([x, y])
        idx = int(idx)

        # Choose the segment the point projects onto
        if idx == len(self.points) - 1:
            idx -= 1
        elif idx > 0:
            dot = (x - self._x[idx]) * np.cos(self._yaw[idx]) + (y - self._y[idx]) * np.sin(
                self._yaw[idx]
            )
            if dot < 0:
                idx -= 1

        dx_seg = self._x[idx + 1] - self._x[idx]
        dy_seg = self._y[idx + 1] - self._y[idx]
        seg_len = np.hypot(dx_seg, dy_seg)
        dx_p = x - self._x[idx]
        dy_p = y - self._y[idx]

        if seg_len < 1e-6:
            proj = 0.0
            lat = 0.0
        else:
            proj = (dx_p * dx_seg + dy_p * dy_seg) / seg_len
            lat = (dx_seg * dy_p - dy_seg * dx_p) / seg_len

        s = float(self._s[idx] + proj)
        if s > self.length() + 1e-6:
            logger.error(f"Projected s={s:.2f} is beyond reference line length {self.length():.2f}.")
            return None
        return SLPoint(s=s, l=float(lat))
