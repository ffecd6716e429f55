"""Configuration for the S-T boundary mapper."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path(__file__).parent / "params" / "default.yaml"


class StBoundaryConfig(BaseModel):
    """Boundary shaping parameters."""

    boundary_buffer: float = Field(..., ge=0.0, description="Buffer added to upper edges [m]")
    minimal_follow_time: float = Field(..., ge=0.0, description="Minimal time headway [s]")
    expending_coeff: float = Field(..., gt=0.0, description="Obstacle size expansion coefficient")
    point_extension: float = Field(..., ge=0.0, description="Extension of overlap bounds [m]")
    follow_buffer: float = Field(..., ge=0.0, description="Buffer around dynamic boundaries [m]")
    success_tunnel: float = Field(..., ge=0.0, description="Mission complete tunnel length [m]")


class VehicleParam(BaseModel):
    """自車の形状パラメータ."""

    front_edge_to_center: float = Field(..., ge=0.0, description="Reference point to front [m]")
    back_edge_to_center: float = Field(..., ge=0.0, description="Reference point to rear [m]")
    width: float = Field(..., gt=0.0, description="Vehicle width [m]")

    @property
    def length(self) -> float:
        """車長 (computed) [m]."""
        return self.front_edge_to_center + self.back_edge_to_center


class StBoundaryMapperConfig(BaseModel):
    """Complete mapper configuration."""

    backward_routing_distance: float = Field(
        ..., ge=0.0, description="Routing margin behind the reference line end [m]"
    )
    decision_valid_stop_range: float = Field(
        ..., ge=0.0, description="Margin kept before a stop line [m]"
    )
    st_boundary: StBoundaryConfig
    vehicle: VehicleParam

    @classmethod
    def from_yaml(cls, path: str | Path) -> StBoundaryMapperConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML file

        Returns:
            StBoundaryMapperConfig instance
        """
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if "st_boundary_mapper" in data and isinstance(data["st_boundary_mapper"], dict):
            data = data["st_boundary_mapper"]
        return cls(**data)

    @classmethod
    def default(cls) -> StBoundaryMapperConfig:
        """Load the packaged default configuration."""
        return cls.from_yaml(DEFAULT_CONFIG_PATH)
