"""
Input parameters for the BM11 structure.

Lengths of the structure itself are in feet; frame stock dimensions are in
inches (that is how the tubing is sold). Angles are radians.
"""

import math
from dataclasses import dataclass, field, fields, replace as _replace
from typing import Tuple


# =============================================================================
# CONSTANTS
# =============================================================================

INCHES_PER_FOOT = 12.0
MPH_TO_FT_PER_SEC = 1.46667

# Dynamic pressure q = 0.00256 * V^2 (lb/ft^2 with V in mph*1.46667)
DYNAMIC_PRESSURE_COEFF = 0.00256
DEFAULT_DRAG_COEFF = 1.0

# Wind table speeds (mph)
WIND_SPEED_START = 5.0
WIND_SPEED_STOP = 100.0
WIND_SPEED_STEP = 5.0

# squareSideLength sweep (ft)
SWEEP_START = 16.0
SWEEP_STOP = 8.0
SWEEP_STEP = -0.5

LAW_OF_SINES_TOLERANCE = 1.0e-3


@dataclass(frozen=True)
class UnitCosts:
    """Cost rates used by the frame and mirror estimates."""

    frame_metal: float = 4.4                      # $ / ft
    mirror: float = 220.0 / (8.0 * 4.0)           # $ / ft^2 (one 4x8 sheet)
    # McMaster 90585A537, 1/4"-20 x 1/2" flat head, sold in packs of 10
    mirror_bolt: float = 3.67 / 10.0              # $ / each
    frame_through_hole_drill: float = 695.0 / 160.0  # $ / each
    frame_through_hole_tap: float = 480.0 / 320.0    # $ / each

    def __post_init__(self):
        for f in fields(self):
            _require_positive(f"unit_cost.{f.name}", getattr(self, f.name))


@dataclass(frozen=True)
class InputParameters:
    """
    Physical inputs of one BM11 evaluation.

    Attributes:
        square_side_length: Side of the starting square that forms each
            lateral triangle (ft)
        base_cut_back_length: Cut back on the base of the square (ft)
        angle_abc: Angle on the ground plane between the two triangles (rad)
        frame_cross_section: Outer (width, height) of the hollow frame stock (in)
        frame_wall_thickness: Wall thickness of the frame stock (in)
        metal_density: lb / in^3
        shoulder_height: Height at which the walkway shoulder width is measured (ft)
        mirror_bolt_spacing: Spacing between mirror bolts along the frame (ft)
        unit_cost: Cost rates
    """

    square_side_length: float = 16.0
    base_cut_back_length: float = 2.0
    angle_abc: float = math.radians(110.0)
    frame_cross_section: Tuple[float, float] = (0.75, 1.5)
    frame_wall_thickness: float = 1.0 / 16.0
    metal_density: float = 0.289
    shoulder_height: float = 5.0
    mirror_bolt_spacing: float = 2.0
    unit_cost: UnitCosts = field(default_factory=UnitCosts)

    def __post_init__(self):
        for name in ('square_side_length', 'base_cut_back_length', 'angle_abc',
                     'frame_wall_thickness', 'metal_density', 'shoulder_height',
                     'mirror_bolt_spacing'):
            _require_positive(name, getattr(self, name))

        if not self.angle_abc < math.pi:
            raise ValueError(f"angle_abc must be in (0, pi), got {self.angle_abc!r}")

        if len(self.frame_cross_section) != 2:
            raise ValueError("frame_cross_section must be a (width, height) pair")
        # Normalise lists to a tuple so instances stay hashable
        object.__setattr__(self, 'frame_cross_section', tuple(self.frame_cross_section))

        for dim in self.frame_cross_section:
            _require_positive('frame_cross_section', dim)
            if dim <= 2.0 * self.frame_wall_thickness:
                raise ValueError(
                    f"frame_cross_section {self.frame_cross_section} leaves no hollow "
                    f"for a {self.frame_wall_thickness} in wall"
                )

        if not isinstance(self.unit_cost, UnitCosts):
            raise TypeError("unit_cost must be a UnitCosts instance")

    def replace(self, **changes) -> 'InputParameters':
        """Return a copy with the given fields changed."""
        return _replace(self, **changes)


def default_input_parameters() -> InputParameters:
    """The parameters the structure was originally sized with."""
    return InputParameters()


def _require_positive(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
