"""Obstacle decisions to S-T graph boundaries."""

import logging

from st_boundary_mapper.config import StBoundaryMapperConfig
from st_boundary_mapper.dynamic_boundary import DynamicObstacleBoundaryBuilder
from st_boundary_mapper.lane_map import LaneMap
from st_boundary_mapper.reference_line import ReferenceLine
from st_boundary_mapper.status import Status
from st_boundary_mapper.stop_boundary import StopBoundaryBuilder
from st_boundary_mapper.types import (
    DecisionData,
    FollowDecision,
    MainMissionComplete,
    MainStop,
    Obstacle,
    OvertakeDecision,
    PathData,
    StGraphBoundary,
    TrajectoryPoint,
    YieldDecision,
)

logger = logging.getLogger(__name__)


class StBoundaryMapper:
    """Maps the main decision and obstacle decisions to S-T boundaries."""

    def __init__(self, config: StBoundaryMapperConfig, lane_map: LaneMap | None = None):
        """Initialize StBoundaryMapper.

        Args:
            config: Mapper configuration
            lane_map: Lane repository for stop line lookup
        """
        self.config = config
        self.lane_map = lane_map if lane_map is not None else LaneMap()
        self.stop_builder = StopBoundaryBuilder(config, self.lane_map)
        self.dynamic_builder = DynamicObstacleBoundaryBuilder(config)

    def get_graph_boundary(
        self,
        initial_planning_point: TrajectoryPoint,
        decision_data: DecisionData,
        path_data: PathData,
        reference_line: ReferenceLine,
        planning_distance: float,
        planning_time: float,
        current_timestamp: float = 0.0,
    ) -> tuple[Status, list[StGraphBoundary]]:
        """Compute the boundaries for one planning cycle.

        Args:
            initial_planning_point: Ego planning start point
            decision_data: Main decision and obstacles with decisions
            path_data: Ego path
            reference_line: Reference line
            planning_distance: Planning horizon distance [m]
            planning_time: Planning horizon time [s]
            current_timestamp: Timestamp of the current planning cycle [s]

        Returns:
            Tuple of (status, boundaries). An ERROR from the dynamic builder
            ends mapping early with OK and the boundaries mapped so far. The
            builder currently reports only OK or SKIP; the branch is kept for
            future builder errors.
        """
        boundaries: list[StGraphBoundary] = []

        if planning_time < 0.0:
            msg = "Fail to get params since planning_time < 0."
            logger.error(msg)
            return Status.error(msg), boundaries

        if path_data.num_of_points < 2:
            msg = (
                f"Fail to get params because of too few path points. "
                f"path points size: {path_data.num_of_points}."
            )
            logger.error(msg)
            return Status.error(msg), boundaries

        main_decision = decision_data.main_decision
        ret = Status.ok()
        if isinstance(main_decision, MainStop):
            ret = self.stop_builder.map_main_decision_stop(
                main_decision, reference_line, planning_distance, planning_time, boundaries
            )
        elif isinstance(main_decision, MainMissionComplete):
            ret = self.stop_builder.map_mission_complete(
                reference_line, planning_distance, planning_time, boundaries
            )
        if not ret.is_ok and not ret.is_skip:
            return Status.error(f"Fail to map main decision: {ret.message}"), boundaries

        for obs in decision_data.static_obstacles:
            if obs is None:
                continue
            ret = self.map_obstacle_without_trajectory(
                initial_planning_point, obs, path_data, planning_distance, planning_time, boundaries
            )
            if not ret.is_ok:
                logger.error(f"Fail to map static obstacle with id[{obs.id}].")
                return Status.error("Fail to map static obstacle"), boundaries

        for obs in decision_data.dynamic_obstacles:
            if obs is None:
                continue
            for decision in obs.decisions:
                if isinstance(decision, FollowDecision):
                    ret = self.map_obstacle_with_planning(
                        initial_planning_point,
                        obs,
                        path_data,
                        planning_distance,
                        planning_time,
                        boundaries,
                    )
                    if not ret.is_ok:
                        logger.error(f"Fail to map follow dynamic obstacle with id {obs.id}.")
                        return Status.error("Fail to map follow dynamic obstacle"), boundaries
                elif isinstance(decision, (YieldDecision, OvertakeDecision)):
                    ret = self.dynamic_builder.map_obstacle_with_prediction_trajectory(
                        initial_planning_point,
                        obs,
                        decision,
                        path_data,
                        planning_distance,
                        planning_time,
                        boundaries,
                        current_timestamp=current_timestamp,
                    )
                    if ret.is_error:
                        # Not reported by the builder yet; returns OK with the boundaries so far
                        logger.error(f"Fail to map dynamic obstacle with id {obs.id}.")
                        return Status.ok(), boundaries

        return Status.ok(), boundaries

    def map_obstacle_without_trajectory(
        self,
        initial_planning_point: TrajectoryPoint,
        obstacle: Obstacle,
        path_data: PathData,
        planning_distance: float,
        planning_time: float,
        boundaries: list[StGraphBoundary],
    ) -> Status:
        """Static obstacle mapping; contributes no boundary yet."""
        return Status.ok()

    def map_obstacle_with_planning(
        self,
        initial_planning_point: TrajectoryPoint,
        obstacle: Obstacle,
        path_data: PathData,
        planning_distance: float,
        planning_time: float,
        boundaries: list[StGraphBoundary],
    ) -> Status:
        """Follow mapping along the planned path; contributes no boundary yet."""
        return Status.ok()
