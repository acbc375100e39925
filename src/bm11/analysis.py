"""
Frame, Mirror and Wind Load Estimates for the BM11 Structure.

Everything here is derived from a solved Geometry plus the cost and material
inputs. Estimates are closed form; nothing is optimised or iterated.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .geometry import (
    Geometry,
    Point3D,
    project_xy,
    project_yz,
    triangle_area,
)
from .parameters import (
    InputParameters,
    INCHES_PER_FOOT,
    MPH_TO_FT_PER_SEC,
    DYNAMIC_PRESSURE_COEFF,
    DEFAULT_DRAG_COEFF,
    WIND_SPEED_START,
    WIND_SPEED_STOP,
    WIND_SPEED_STEP,
)

# Four triangles, each framed on its own (OB is framed twice per side)
TRIANGLE_COUNT = 4
# Both sides of every triangle are clad
MIRROR_FACE_COUNT = 8
# Assumes 3 braces per triangle, each about 1.6x BA long
REINFORCE_FACTOR = 1.6
# Mirror is attached on both sides of the frame
TAPS_PER_HOLE = 2


@dataclass(frozen=True)
class FrameEstimate:
    perimeter_length: float          # ft
    reinforce_length: float          # ft
    total_length: float              # ft
    cross_section: Tuple[float, float]  # in
    wall_thickness: float            # in
    metal_cross_section_area: float  # in^2
    metal_volume: float              # in^3
    metal_density: float             # lb / in^3
    metal_mass: float                # lb
    metal_cost: float                # $
    drill_count: float
    drill_cost: float                # $
    tap_count: float
    tap_cost: float                  # $

    @property
    def metal_volume_ft3(self) -> float:
        return self.metal_volume / INCHES_PER_FOOT**3


@dataclass(frozen=True)
class MirrorEstimate:
    surface_area: float  # ft^2
    cost: float          # $
    bolt_count: float
    bolt_cost: float     # $


@dataclass(frozen=True)
class WindEstimate:
    """Projected area (ft^2) of the two faces catching wind on each plane."""
    total_surface_area_XY: float
    total_surface_area_YZ: float


@dataclass(frozen=True)
class Totals:
    mass: float  # lb, frame metal only
    cost: float  # $


# =============================================================================
# STRUCTURE
# =============================================================================

def hollow_section_area(cross_section: Tuple[float, float], wall_thickness: float) -> float:
    """Metal area of a hollow rectangular section: outer minus inner rectangle."""
    width, height = cross_section
    inner_width = width - wall_thickness * 2.0
    inner_height = height - wall_thickness * 2.0
    return width * height - inner_width * inner_height


def estimate_frame(geometry: Geometry, params: InputParameters) -> FrameEstimate:
    """
    Estimate frame length, mass and machining cost.

    The reinforcement length is a rough allowance until the bracing is
    actually designed: three braces per triangle at about 1.6 x BA each,
    plus one cross-bar from B0 to B1.
    """
    edges = geometry.edge_length
    costs = params.unit_cost

    perimeter_length = TRIANGLE_COUNT * (edges.BA + edges.OA + edges.OB)
    reinforce_length = (edges.BA * REINFORCE_FACTOR * TRIANGLE_COUNT +
                        geometry.overall_structure.walkway_base_width)
    total_length = perimeter_length + reinforce_length

    metal_area = hollow_section_area(params.frame_cross_section, params.frame_wall_thickness)
    metal_volume = metal_area * (total_length * INCHES_PER_FOOT)

    drill_count = total_length / params.mirror_bolt_spacing
    tap_count = drill_count * TAPS_PER_HOLE

    return FrameEstimate(
        perimeter_length=perimeter_length,
        reinforce_length=reinforce_length,
        total_length=total_length,
        cross_section=tuple(params.frame_cross_section),
        wall_thickness=params.frame_wall_thickness,
        metal_cross_section_area=metal_area,
        metal_volume=metal_volume,
        metal_density=params.metal_density,
        metal_mass=metal_volume * params.metal_density,
        metal_cost=total_length * costs.frame_metal,
        drill_count=drill_count,
        drill_cost=drill_count * costs.frame_through_hole_drill,
        tap_count=tap_count,
        tap_cost=tap_count * costs.frame_through_hole_tap,
    )


def estimate_mirror(geometry: Geometry, frame: FrameEstimate,
                    params: InputParameters) -> MirrorEstimate:
    costs = params.unit_cost
    surface_area = geometry.overall_structure.triangle_area * MIRROR_FACE_COUNT
    # One bolt per tapped hole
    bolt_count = frame.tap_count

    return MirrorEstimate(
        surface_area=surface_area,
        cost=surface_area * costs.mirror,
        bolt_count=bolt_count,
        bolt_cost=bolt_count * costs.mirror_bolt,
    )


def estimate_totals(frame: FrameEstimate, mirror: MirrorEstimate) -> Totals:
    # TODO: add mirror panel and bolt mass once panel thickness is chosen
    return Totals(
        mass=frame.metal_mass,
        cost=(frame.metal_cost + frame.drill_cost + frame.tap_cost +
              mirror.cost + mirror.bolt_cost),
    )


# =============================================================================
# WIND
# =============================================================================

def projected_face_area(O: Point3D, A: Point3D, B: Point3D, plane: str) -> float:
    """
    Area of triangle OBA projected onto a coordinate plane.

    Args:
        plane: 'XY' (drop z) or 'YZ' (drop x)
    """
    if plane == 'XY':
        project = project_xy
    elif plane == 'YZ':
        project = project_yz
    else:
        raise ValueError(f"Unknown projection plane: {plane!r}")
    return triangle_area(project(A), project(B), project(O))


def estimate_wind(geometry: Geometry) -> WindEstimate:
    """
    Projected areas of face OBA on the XY and YZ planes.

    The opposite face (OB1A1) projects to the same area, hence the x2.
    """
    coords = geometry.vertex_coord
    O, A0, B0 = coords.O, coords.A0, coords.B0

    return WindEstimate(
        total_surface_area_XY=projected_face_area(O, A0, B0, 'XY') * 2.0,
        total_surface_area_YZ=projected_face_area(O, A0, B0, 'YZ') * 2.0,
    )


def mph_to_ft_per_sec(mph: float) -> float:
    return mph * MPH_TO_FT_PER_SEC


def wind_pressure(mph: float) -> float:
    """Dynamic wind pressure (lb/ft^2) at a given speed."""
    return mph_to_ft_per_sec(mph)**2 * DYNAMIC_PRESSURE_COEFF


def wind_force(area: float, mph: float, drag_coefficient: float = DEFAULT_DRAG_COEFF) -> float:
    """Side force (lb) on a projected area (ft^2) at a given wind speed (mph)."""
    return area * wind_pressure(mph) * drag_coefficient


def default_wind_speeds() -> List[float]:
    """5, 10, ... 100 mph."""
    speeds = []
    mph = WIND_SPEED_START
    while mph <= WIND_SPEED_STOP:
        speeds.append(mph)
        mph += WIND_SPEED_STEP
    return speeds


def wind_force_table(wind: WindEstimate,
                     speeds: Optional[Iterable[float]] = None,
                     drag_coefficient: float = DEFAULT_DRAG_COEFF) -> Dict[str, List[Tuple[float, float]]]:
    """
    Side force vs. wind speed for both projection planes.

    Returns:
        Dict mapping 'XY' and 'YZ' to lists of (mph, force_lb)
    """
    if speeds is None:
        speeds = default_wind_speeds()
    speeds = list(speeds)

    areas = {
        'XY': wind.total_surface_area_XY,
        'YZ': wind.total_surface_area_YZ,
    }
    return {
        plane: [(mph, wind_force(area, mph, drag_coefficient)) for mph in speeds]
        for plane, area in areas.items()
    }
