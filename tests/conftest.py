import pytest
from st_boundary_mapper.config import StBoundaryConfig, StBoundaryMapperConfig, VehicleParam
from st_boundary_mapper.lane_map import LaneMap
from st_boundary_mapper.types import PathData, PathPoint, TrajectoryPoint


@pytest.fixture
def mapper_config() -> StBoundaryMapperConfig:
    return StBoundaryMapperConfig(
        backward_routing_distance=10.0,
        decision_valid_stop_range=0.5,
        st_boundary=StBoundaryConfig(
            boundary_buffer=0.1,
            minimal_follow_time=2.0,
            expending_coeff=1.0,
            point_extension=1.0,
            follow_buffer=2.5,
            success_tunnel=5.0,
        ),
        vehicle=VehicleParam(front_edge_to_center=3.0, back_edge_to_center=1.0, width=2.0),
    )


@pytest.fixture
def straight_path() -> PathData:
    """Ten ego path points along the x axis, 10 m apart, with s equal to x."""
    points = [PathPoint(x=i * 10.0, y=0.0, theta=0.0, s=i * 10.0) for i in range(10)]
    return PathData(points=points)


@pytest.fixture
def lane_map() -> LaneMap:
    return LaneMap.from_centerlines({"lane_1": [(0.0, 0.0), (100.0, 0.0)]})


@pytest.fixture
def initial_point() -> TrajectoryPoint:
    return TrajectoryPoint(x=0.0, y=0.0, theta=0.0)
