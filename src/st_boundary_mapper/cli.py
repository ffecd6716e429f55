#!/usr/bin/env python3
"""Map one planning cycle from a scenario file to S-T boundaries."""

import argparse
import json
import logging
import sys
from pathlib import Path

from st_boundary_mapper.boundary_mapper import StBoundaryMapper
from st_boundary_mapper.config import StBoundaryMapperConfig
from st_boundary_mapper.scenario import ScenarioConfig
from st_boundary_mapper.status import Status
from st_boundary_mapper.types import StGraphBoundary

logger = logging.getLogger(__name__)


def boundaries_to_dict(status: Status, boundaries: list[StGraphBoundary]) -> dict:
    """Convert a mapping result to a JSON serializable dict."""
    return {
        "status": status.code.value,
        "message": status.message,
        "boundaries": [
            {
                "type": b.boundary_type.value,
                "characteristic_length": b.characteristic_length,
                "points": [{"s": p.s, "t": p.t} for p in b.points],
            }
            for b in boundaries
        ],
    }


def main(argv: list[str] | None = None) -> int:
    """Run the mapper on a scenario."""
    parser = argparse.ArgumentParser(description="Map obstacle decisions to S-T boundaries")
    parser.add_argument("--scenario", type=str, required=True, help="Path to scenario YAML")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to mapper configuration YAML (packaged default if omitted)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s: %(message)s")

    scenario_path = Path(args.scenario)
    if not scenario_path.exists():
        logger.error(f"Scenario file '{scenario_path}' not found.")
        return 1

    config = (
        StBoundaryMapperConfig.from_yaml(args.config)
        if args.config
        else StBoundaryMapperConfig.default()
    )
    inputs = ScenarioConfig.from_yaml(scenario_path).to_inputs()

    mapper = StBoundaryMapper(config, inputs.lane_map)
    status, boundaries = mapper.get_graph_boundary(
        inputs.initial_planning_point,
        inputs.decision_data,
        inputs.path_data,
        inputs.reference_line,
        inputs.planning_distance,
        inputs.planning_time,
        current_timestamp=inputs.current_timestamp,
    )
    logger.info(f"Mapped {len(boundaries)} boundaries ({status.code.value}).")

    print(json.dumps(boundaries_to_dict(status, boundaries), indent=2))
    return 1 if status.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
