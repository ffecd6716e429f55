"""Boundaries for moving obstacles with predicted trajectories."""

import logging

from shapely.geometry import Polygon

from st_boundary_mapper.config import StBoundaryMapperConfig
from st_boundary_mapper.geometry import check_overlap, compare, get_area, obstacle_box
from st_boundary_mapper.status import Status
from st_boundary_mapper.types import (
    UNBOUNDED_TIME,
    BoundaryType,
    FollowDecision,
    ObjectDecision,
    Obstacle,
    OvertakeDecision,
    PathData,
    PredictionTrajectory,
    StGraphBoundary,
    STPoint,
    TrajectoryPoint,
    YieldDecision,
)

logger = logging.getLogger(__name__)

# Lower edge shrink when the yield distance would push it behind the vehicle
YIELD_FALLBACK_SHRINK = (2.0, 4.0)


class DynamicObstacleBoundaryBuilder:
    """Maps a predicted obstacle trajectory onto the S-T plane."""

    def __init__(self, config: StBoundaryMapperConfig):
        """Initialize DynamicObstacleBoundaryBuilder.

        Args:
            config: Mapper configuration
        """
        self.config = config

    def map_obstacle_with_prediction_trajectory(
        self,
        initial_planning_point: TrajectoryPoint,
        obstacle: Obstacle,
        decision: ObjectDecision,
        path_data: PathData,
        planning_distance: float,
        planning_time: float,
        boundaries: list[StGraphBoundary],
        current_timestamp: float = 0.0,
    ) -> Status:
        """Build one boundary per prediction trajectory of the obstacle.

        For every trajectory sample the ego path is searched for the first
        and last path points whose footprint overlaps the obstacle. The
        resulting lower/upper S series span a quadrilateral which is then
        shaped by the decision (follow, yield or overtake).

        Args:
            initial_planning_point: Ego planning start point
            obstacle: Obstacle with prediction trajectories
            decision: Decision attached to the obstacle
            path_data: Ego path, monotone in s
            planning_distance: Planning horizon distance [m]
            planning_time: Planning horizon time [s]
            boundaries: Output list; boundaries are appended
            current_timestamp: Timestamp of the current planning cycle [s]

        Returns:
            OK if at least one boundary was added, otherwise SKIP
        """
        st_config = self.config.st_boundary

        follow_distance = -1.0
        if isinstance(decision, FollowDecision):
            follow_distance = (
                max(obstacle.speed * st_config.minimal_follow_time, abs(decision.distance_s))
                + self.config.vehicle.front_edge_to_center
            )

        if len(obstacle.prediction_trajectories) == 0:
            logger.warning(f"Obstacle (id = {obstacle.id}) has NO prediction trajectory.")

        skip = True
        for trajectory in obstacle.prediction_trajectories:
            lower_points, upper_points = self._collect_overlap_series(
                obstacle, decision, trajectory, path_data, current_timestamp
            )
            if len(lower_points) == 0:
                continue

            points = self._build_boundary_points(lower_points, upper_points)
            boundary_type = self._apply_decision(points, decision, follow_distance)

            if compare(get_area(points), 0.0) > 0:
                boundaries.append(StGraphBoundary(points=points, boundary_type=boundary_type))
                logger.debug(
                    f"Added {boundary_type.value} boundary for obstacle {obstacle.id}: "
                    f"s=[{boundaries[-1].min_s:.2f}, {boundaries[-1].max_s:.2f}]"
                )
                skip = False

        if skip:
            return Status.skip(f"No boundary for obstacle {obstacle.id}.")
        return Status.ok()

    def _collect_overlap_series(
        self,
        obstacle: Obstacle,
        decision: ObjectDecision,
        trajectory: PredictionTrajectory,
        path_data: PathData,
        current_timestamp: float,
    ) -> tuple[list[STPoint], list[STPoint]]:
        st_config = self.config.st_boundary
        lower_points: list[STPoint] = []
        upper_points: list[STPoint] = []

        for j in range(trajectory.num_of_points):
            trajectory_point = trajectory.trajectory_point_at(j)
            point_time = (
                trajectory_point.relative_time + trajectory.start_timestamp - current_timestamp
            )
            obs_box = obstacle_box(
                trajectory_point.x,
                trajectory_point.y,
                trajectory_point.theta,
                obstacle.length * st_config.expending_coeff,
                obstacle.width * st_config.expending_coeff,
            )

            overlap = self.find_overlap_range(path_data, obs_box)
            if overlap is None:
                if isinstance(decision, (YieldDecision, OvertakeDecision)):
                    logger.info(f"Point[{j}] cannot find low or high index.")
                continue

            low, high = overlap
            lower_points.append(STPoint(s=path_data[low].s - st_config.point_extension, t=point_time))
            upper_points.append(
                STPoint(s=path_data[high].s + st_config.point_extension, t=point_time)
            )

        return lower_points, upper_points

    def find_overlap_range(self, path_data: PathData, obs_box: Polygon) -> tuple[int, int] | None:
        """Find the first and last path indices overlapping the obstacle box.

        Two pointers walk in from both ends of the path and stop at their
        first overlap, so a narrow overlap island between them is not
        searched.

        Returns:
            (low, high) indices, or None if either end found no overlap
        """
        vehicle = self.config.vehicle
        buffer = self.config.st_boundary.boundary_buffer

        low = 0
        high = path_data.num_of_points - 1
        find_low = False
        find_high = False
        while low < high:
            if find_low and find_high:
                break
            if not find_low:
                if not check_overlap(path_data[low], vehicle, obs_box, buffer):
                    low += 1
                else:
                    find_low = True
            if not find_high:
                if not check_overlap(path_data[high], vehicle, obs_box, buffer):
                    high -= 1
                else:
                    find_high = True

        if find_low and find_high:
            return low, high
        return None

    def _build_boundary_points(
        self, lower_points: list[STPoint], upper_points: list[STPoint]
    ) -> list[STPoint]:
        st_config = self.config.st_boundary
        buffer = st_config.follow_buffer

        if (
            lower_points[0].t > lower_points[-1].t
            or upper_points[0].t > upper_points[-1].t
        ):
            logger.warning("lower/upper points are reversed.")

        return [
            STPoint(s=lower_points[0].s - buffer, t=lower_points[0].t),
            STPoint(s=lower_points[-1].s - buffer, t=lower_points[-1].t),
            STPoint(
                s=upper_points[-1].s + buffer + st_config.boundary_buffer,
                t=upper_points[-1].t,
            ),
            STPoint(s=upper_points[0].s + buffer, t=upper_points[0].t),
        ]

    @staticmethod
    def _apply_decision(
        points: list[STPoint], decision: ObjectDecision, follow_distance: float
    ) -> BoundaryType:
        if isinstance(decision, FollowDecision):
            points[0].s -= follow_distance
            points[1].s -= follow_distance
            points[3].t = UNBOUNDED_TIME
            return BoundaryType.FOLLOW

        if isinstance(decision, YieldDecision):
            dis = abs(decision.distance_s)
            for point, fallback in zip(points[:2], YIELD_FALLBACK_SHRINK):
                if point.s - dis < 0.0:
                    point.s = max(point.s - fallback, 0.0)
                else:
                    point.s = max(point.s - dis, 0.0)
            return BoundaryType.YIELD

        if isinstance(decision, OvertakeDecision):
            dis = abs(decision.distance_s)
            points[2].s += dis
            points[3].s += dis

        # Overtake keeps UNKNOWN
        return BoundaryType.UNKNOWN
