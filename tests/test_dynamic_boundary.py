"""Tests for dynamic obstacle boundaries."""

import logging

import pytest
from st_boundary_mapper.dynamic_boundary import DynamicObstacleBoundaryBuilder
from st_boundary_mapper.geometry import get_area, obstacle_box
from st_boundary_mapper.status import StatusCode
from st_boundary_mapper.types import (
    UNBOUNDED_TIME,
    BoundaryType,
    FollowDecision,
    Obstacle,
    OvertakeDecision,
    PathData,
    PathPoint,
    PredictionTrajectory,
    STPoint,
    TrajectoryPoint,
    YieldDecision,
)


def create_straight_path(num_points=10, step=10.0):
    return PathData(
        points=[PathPoint(x=i * step, y=0.0, theta=0.0, s=i * step) for i in range(num_points)]
    )


def create_obstacle(decisions, times=(0.0, 1.0, 2.0), y=0.0, speed=5.0, start_timestamp=0.0):
    """Obstacle parked over path indices 2..5 of the straight path."""
    trajectory = PredictionTrajectory(
        points=[TrajectoryPoint(x=35.0, y=y, theta=0.0, relative_time=t) for t in times],
        start_timestamp=start_timestamp,
    )
    return Obstacle(
        id="obs_1",
        speed=speed,
        length=30.0,
        width=2.0,
        prediction_trajectories=[trajectory],
        decisions=list(decisions),
    )


def run_builder(builder, obstacle, decision, path, initial_point, current_timestamp=0.0):
    boundaries = []
    status = builder.map_obstacle_with_prediction_trajectory(
        initial_point,
        obstacle,
        decision,
        path,
        100.0,
        8.0,
        boundaries,
        current_timestamp=current_timestamp,
    )
    return status, boundaries


class TestFindOverlapRange:
    """Tests for the dual pointer overlap search."""

    def test_finds_first_and_last_overlap(self, mapper_config, straight_path) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        # Obstacle spans x in [20, 50]
        obs_box = obstacle_box(35.0, 0.0, 0.0, 30.0, 2.0)

        assert builder.find_overlap_range(straight_path, obs_box) == (2, 5)

    def test_no_overlap(self, mapper_config, straight_path) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obs_box = obstacle_box(35.0, 50.0, 0.0, 30.0, 2.0)

        assert builder.find_overlap_range(straight_path, obs_box) is None

    def test_single_point_island_is_missed(self, mapper_config) -> None:
        """Pointers meeting on the only overlapping point report no range."""
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        path = create_straight_path(num_points=6)
        obs_box = obstacle_box(31.0, 0.0, 0.0, 2.0, 2.0)

        assert builder.find_overlap_range(path, obs_box) is None

    def test_overlap_at_both_ends(self, mapper_config) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        path = create_straight_path(num_points=3)
        obs_box = obstacle_box(10.0, 0.0, 0.0, 40.0, 2.0)

        assert builder.find_overlap_range(path, obs_box) == (0, 2)


class TestFollowDecision:
    """Tests for follow boundaries."""

    def test_follow_boundary(self, mapper_config, straight_path, initial_point) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([FollowDecision(distance_s=-4.0)])

        status, boundaries = run_builder(
            builder, obstacle, obstacle.decisions[0], straight_path, initial_point
        )

        assert status.code == StatusCode.OK
        assert len(boundaries) == 1
        boundary = boundaries[0]
        assert boundary.boundary_type == BoundaryType.FOLLOW

        # follow_distance = max(5.0 * 2.0, 4.0) + front edge 3.0
        follow_distance = 13.0
        raw_lower = 20.0 - 1.0  # path[2].s - point_extension
        assert boundary.points[0].s == pytest.approx(raw_lower - 2.5 - follow_distance)
        assert boundary.points[1].s == pytest.approx(raw_lower - 2.5 - follow_distance)
        assert boundary.points[3].t == UNBOUNDED_TIME
        assert boundary.points[0].t == 0.0
        assert boundary.points[1].t == 2.0
        assert boundary.points[2].t == 2.0
        # path[5].s + point_extension + follow_buffer + boundary_buffer
        assert boundary.points[2].s == pytest.approx(51.0 + 2.5 + 0.1)
        assert boundary.points[3].s == pytest.approx(51.0 + 2.5)
        assert get_area(boundary.points) > 0.0

    def test_follow_is_deterministic(self, mapper_config, straight_path, initial_point) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([FollowDecision(distance_s=-4.0)])

        first = run_builder(builder, obstacle, obstacle.decisions[0], straight_path, initial_point)
        second = run_builder(builder, obstacle, obstacle.decisions[0], straight_path, initial_point)

        assert first == second

    def test_follow_distance_from_decision(
        self, mapper_config, straight_path, initial_point
    ) -> None:
        """A long decision distance dominates the speed based headway."""
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([FollowDecision(distance_s=-12.0)], speed=1.0)

        _, boundaries = run_builder(
            builder, obstacle, obstacle.decisions[0], straight_path, initial_point
        )

        assert boundaries[0].points[0].s == pytest.approx(19.0 - 2.5 - 15.0)


class TestYieldDecision:
    """Tests for yield boundaries."""

    def test_yield_shift(self, mapper_config, straight_path, initial_point) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([YieldDecision(distance_s=10.0)])

        status, boundaries = run_builder(
            builder, obstacle, obstacle.decisions[0], straight_path, initial_point
        )

        assert status.is_ok
        boundary = boundaries[0]
        assert boundary.boundary_type == BoundaryType.YIELD
        assert boundary.points[0].s == pytest.approx(16.5 - 10.0)
        assert boundary.points[1].s == pytest.approx(16.5 - 10.0)
        assert boundary.points[3].t == 0.0

    def test_yield_fallback_shrink(self, mapper_config, straight_path, initial_point) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([YieldDecision(distance_s=-20.0)])

        _, boundaries = run_builder(
            builder, obstacle, obstacle.decisions[0], straight_path, initial_point
        )

        assert boundaries[0].points[0].s == pytest.approx(16.5 - 2.0)
        assert boundaries[0].points[1].s == pytest.approx(16.5 - 4.0)

    def test_yield_fallback_never_negative(self) -> None:
        points = [STPoint(1.0, 0.0), STPoint(3.0, 2.0), STPoint(20.0, 2.0), STPoint(20.0, 0.0)]

        boundary_type = DynamicObstacleBoundaryBuilder._apply_decision(
            points, YieldDecision(distance_s=10.0), -1.0
        )

        assert boundary_type == BoundaryType.YIELD
        assert points[0].s == 0.0
        assert points[1].s == 0.0
        assert points[2].s == 20.0

    def test_no_overlap_is_skipped(
        self, mapper_config, straight_path, initial_point, caplog
    ) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([YieldDecision(distance_s=5.0)], y=50.0)

        with caplog.at_level(logging.INFO):
            status, boundaries = run_builder(
                builder, obstacle, obstacle.decisions[0], straight_path, initial_point
            )

        assert status.code == StatusCode.SKIP
        assert boundaries == []
        assert "cannot find low or high index" in caplog.text

    def test_single_sample_is_degenerate(
        self, mapper_config, straight_path, initial_point
    ) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([YieldDecision(distance_s=5.0)], times=(1.0,))

        status, boundaries = run_builder(
            builder, obstacle, obstacle.decisions[0], straight_path, initial_point
        )

        assert status.code == StatusCode.SKIP
        assert boundaries == []

    def test_reversed_samples_warn(
        self, mapper_config, straight_path, initial_point, caplog
    ) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([YieldDecision(distance_s=10.0)], times=(2.0, 1.0, 0.0))

        with caplog.at_level(logging.WARNING):
            status, boundaries = run_builder(
                builder, obstacle, obstacle.decisions[0], straight_path, initial_point
            )

        assert "reversed" in caplog.text
        # Reversed time edges wind the polygon the wrong way
        assert status.code == StatusCode.SKIP
        assert boundaries == []


class TestOvertakeDecision:
    """Tests for overtake boundaries."""

    def test_overtake_shift(self, mapper_config, straight_path, initial_point) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([OvertakeDecision(distance_s=-5.0)])

        status, boundaries = run_builder(
            builder, obstacle, obstacle.decisions[0], straight_path, initial_point
        )

        assert status.is_ok
        boundary = boundaries[0]
        assert boundary.boundary_type == BoundaryType.UNKNOWN
        assert boundary.points[0].s == pytest.approx(16.5)
        assert boundary.points[1].s == pytest.approx(16.5)
        assert boundary.points[2].s == pytest.approx(53.6 + 5.0)
        assert boundary.points[3].s == pytest.approx(53.5 + 5.0)


class TestTrajectories:
    """Tests for trajectory handling."""

    def test_one_boundary_per_trajectory(
        self, mapper_config, straight_path, initial_point
    ) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([YieldDecision(distance_s=5.0)])
        obstacle.prediction_trajectories.append(
            PredictionTrajectory(
                points=[
                    TrajectoryPoint(x=65.0, y=0.0, theta=0.0, relative_time=t)
                    for t in (0.0, 1.0)
                ]
            )
        )

        status, boundaries = run_builder(
            builder, obstacle, obstacle.decisions[0], straight_path, initial_point
        )

        assert status.is_ok
        assert len(boundaries) == 2
        assert boundaries[1].max_s > boundaries[0].max_s

    def test_no_trajectory(self, mapper_config, straight_path, initial_point, caplog) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([YieldDecision(distance_s=5.0)])
        obstacle.prediction_trajectories.clear()

        with caplog.at_level(logging.WARNING):
            status, boundaries = run_builder(
                builder, obstacle, obstacle.decisions[0], straight_path, initial_point
            )

        assert status.code == StatusCode.SKIP
        assert boundaries == []
        assert "NO prediction trajectory" in caplog.text

    def test_times_relative_to_cycle(self, mapper_config, straight_path, initial_point) -> None:
        builder = DynamicObstacleBoundaryBuilder(mapper_config)
        obstacle = create_obstacle([YieldDecision(distance_s=5.0)], start_timestamp=10.0)

        _, boundaries = run_builder(
            builder,
            obstacle,
            obstacle.decisions[0],
            straight_path,
            initial_point,
            current_timestamp=9.0,
        )

        assert boundaries[0].min_t == pytest.approx(1.0)
        assert boundaries[0].max_t == pytest.approx(3.0)

    def test_expending_coeff_grows_obstacle(
        self, mapper_config, straight_path, initial_point
    ) -> None:
        config = mapper_config.model_copy(
            update={
                "st_boundary": mapper_config.st_boundary.model_copy(
                    update={"expending_coeff": 2.0}
                )
            }
        )
        builder = DynamicObstacleBoundaryBuilder(config)
        obstacle = create_obstacle([OvertakeDecision(distance_s=0.0)])

        _, boundaries = run_builder(
            builder, obstacle, obstacle.decisions[0], straight_path, initial_point
        )

        # Obstacle spans x in [5, 65]: path indices 1..6
        assert boundaries[0].points[0].s == pytest.approx(10.0 - 1.0 - 2.5)
        assert boundaries[0].points[3].s == pytest.approx(60.0 + 1.0 + 2.5)
