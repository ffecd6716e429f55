"""Boundaries for mandated stops and mission completion."""

import logging

from st_boundary_mapper.config import StBoundaryMapperConfig
from st_boundary_mapper.geometry import compare, get_area
from st_boundary_mapper.lane_map import LaneMap
from st_boundary_mapper.reference_line import ReferenceLine
from st_boundary_mapper.status import Status
from st_boundary_mapper.types import BoundaryType, MainStop, StGraphBoundary, STPoint

logger = logging.getLogger(__name__)


class StopBoundaryBuilder:
    """Builds STOP boundaries for the main decision."""

    def __init__(self, config: StBoundaryMapperConfig, lane_map: LaneMap):
        """Initialize StopBoundaryBuilder.

        Args:
            config: Mapper configuration
            lane_map: Lane repository used to resolve stop lines
        """
        self.config = config
        self.lane_map = lane_map

    def map_main_decision_stop(
        self,
        main_stop: MainStop,
        reference_line: ReferenceLine,
        planning_distance: float,
        planning_time: float,
        boundaries: list[StGraphBoundary],
    ) -> Status:
        """Map a stop line to a STOP boundary.

        Args:
            main_stop: Stop decision with its enforced line
            reference_line: Reference line for the Frenet conversion
            planning_distance: Planning horizon distance [m]
            planning_time: Planning horizon time [s]
            boundaries: Output list; the boundary is appended on success

        Returns:
            OK when a boundary was added, SKIP when the stop lies beyond the
            mapped horizon or the boundary is degenerate, ERROR on lookup failure
        """
        enforced_line = main_stop.enforced_line
        lane = self.lane_map.get_lane_by_id(enforced_line.lane_id)
        if lane is None:
            msg = f"Fail to map_main_decision_stop since lane [{enforced_line.lane_id}] is unknown."
            logger.error(msg)
            return Status.error(msg)

        x, y = lane.get_smooth_point(enforced_line.distance_s)
        sl_point = reference_line.get_point_in_frenet_frame(x, y)
        if sl_point is None:
            msg = "Fail to map_main_decision_stop since get_point_in_frenet_frame failed."
            logger.error(msg)
            return Status.error(msg)

        routing_distance = self.config.backward_routing_distance
        stop_s = sl_point.s - routing_distance
        stop_rear_center_s = (
            stop_s
            - self.config.decision_valid_stop_range
            - self.config.vehicle.front_edge_to_center
        )
        if compare(stop_rear_center_s, 0.0) < 0:
            logger.error(
                f"Fail to map main_decision_stop since stop_rear_center_s"
                f"[{stop_rear_center_s:.2f}] behind adc."
            )
        elif stop_rear_center_s >= reference_line.length() - routing_distance:
            msg = (
                f"Skip to map_main_decision_stop since stop_rear_center_s"
                f"[{stop_rear_center_s:.2f}] > path length[{reference_line.length():.2f}]."
            )
            logger.warning(msg)
            return Status.skip(msg)

        s_min = max(stop_rear_center_s, 0.0)
        s_max = max(s_min + 1.0, planning_distance, reference_line.length())
        return self._append_stop_boundary(s_min, s_max, planning_time, boundaries)

    def map_mission_complete(
        self,
        reference_line: ReferenceLine,
        planning_distance: float,
        planning_time: float,
        boundaries: list[StGraphBoundary],
    ) -> Status:
        """Map mission completion to a STOP boundary beyond the success tunnel."""
        s_min = self.config.st_boundary.success_tunnel
        s_max = min(
            planning_distance, reference_line.length() - self.config.backward_routing_distance
        )
        return self._append_stop_boundary(s_min, s_max, planning_time, boundaries)

    def _append_stop_boundary(
        self,
        s_min: float,
        s_max: float,
        planning_time: float,
        boundaries: list[StGraphBoundary],
    ) -> Status:
        boundary_buffer = self.config.st_boundary.boundary_buffer
        points = [
            STPoint(s=s_min, t=0.0),
            STPoint(s=s_min, t=planning_time),
            STPoint(s=s_max + boundary_buffer, t=planning_time),
            STPoint(s=s_max, t=0.0),
        ]

        if compare(get_area(points), 0.0) <= 0:
            return Status.skip(f"Degenerate stop boundary s=[{s_min:.2f}, {s_max:.2f}].")

        boundaries.append(
            StGraphBoundary(
                points=points,
                boundary_type=BoundaryType.STOP,
                characteristic_length=boundary_buffer,
            )
        )
        logger.debug(f"Added STOP boundary s=[{s_min:.2f}, {s_max:.2f}] t=[0, {planning_time:.2f}]")
        return Status.ok()
