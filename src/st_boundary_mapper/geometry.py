"""Geometry helpers for overlap testing and boundary validation."""

import math
from collections.abc import Sequence

from shapely.geometry import Polygon

from st_boundary_mapper.config import VehicleParam
from st_boundary_mapper.types import PathPoint, STPoint

EPSILON = 1e-6


def compare(a: float, b: float, epsilon: float = EPSILON) -> int:
    """Compare two floats with tolerance.

    Returns:
        -1 if a < b, 1 if a > b, 0 if they are within epsilon
    """
    diff = a - b
    if abs(diff) < epsilon:
        return 0
    return -1 if diff < 0.0 else 1


def _oriented_rectangle(
    x: float,
    y: float,
    yaw: float,
    front_edge_dist: float,
    rear_edge_dist: float,
    half_width: float,
) -> Polygon:
    # Local frame: x forward, y left
    corners = [
        (front_edge_dist, half_width),
        (front_edge_dist, -half_width),
        (rear_edge_dist, -half_width),
        (rear_edge_dist, half_width),
    ]

    cos_yaw = math.cos(yaw)
    sin_yaw = math.sin(yaw)

    points = []
    for lx, ly in corners:
        gx = lx * cos_yaw - ly * sin_yaw
        gy = lx * sin_yaw + ly * cos_yaw
        points.append((gx + x, gy + y))

    return Polygon(points)


def obstacle_box(x: float, y: float, theta: float, length: float, width: float) -> Polygon:
    """Create an obstacle footprint centered at (x, y).

    Args:
        x: Center X [m]
        y: Center Y [m]
        theta: Heading [rad]
        length: Box length along heading [m]
        width: Box width [m]

    Returns:
        Shapely Polygon
    """
    half_length = length / 2.0
    return _oriented_rectangle(x, y, theta, half_length, -half_length, width / 2.0)


def vehicle_box(path_point: PathPoint, vehicle: VehicleParam, buffer: float = 0.0) -> Polygon:
    """Create the ego footprint at a path point, grown by buffer on every side."""
    return _oriented_rectangle(
        path_point.x,
        path_point.y,
        path_point.theta,
        vehicle.front_edge_to_center + buffer,
        -(vehicle.back_edge_to_center + buffer),
        vehicle.width / 2.0 + buffer,
    )


def check_overlap(
    path_point: PathPoint,
    vehicle: VehicleParam,
    obs_box: Polygon,
    buffer: float,
) -> bool:
    """Check whether the ego footprint at path_point intersects an obstacle box.

    Args:
        path_point: Ego pose on the path
        vehicle: Ego dimensions
        obs_box: Obstacle footprint (already expanded)
        buffer: Extra margin around the ego footprint [m]

    Returns:
        True if the footprints overlap
    """
    return vehicle_box(path_point, vehicle, buffer).intersects(obs_box)


def get_area(points: Sequence[STPoint]) -> float:
    """Signed area of an S-T polygon.

    Time is the abscissa and arc length the ordinate, so a boundary listed
    lower edge first (earlier then later time) and upper edge back has a
    positive area.
    """
    if len(points) < 3:
        return 0.0
    area = 0.0
    for i, p in enumerate(points):
        q = points[(i + 1) % len(points)]
        area += p.t * q.s - q.t * p.s
    return area * 0.5
