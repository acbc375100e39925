"""
Human-readable and JSON reports of an evaluated BM11 structure.
"""

import json
import math
from typing import Any, Dict

from .analysis import wind_force_table
from .geometry import Point3D
from .model import OutputParameters


def _deg(rad: float) -> float:
    return rad * 180.0 / math.pi


def _format_point(p: Point3D) -> str:
    return f"[{p[0]:+.3f}, {p[1]:+.3f}, {p[2]:+.3f}]"


def format_report(output: OutputParameters) -> str:
    """
    Format an evaluation as a text report.

    Lengths are feet unless marked, angles are degrees, and wind forces are
    rounded to the nearest pound.

    Args:
        output: Result of evaluate()

    Returns:
        Formatted string report
    """
    edges = output.edge_length
    angles = output.vertex_angle
    coords = output.vertex_coord
    shape = output.overall_structure
    dihedral = output.dihedral_angle
    frame = output.frame
    mirror = output.mirror
    wind = output.wind

    lines = []
    lines.append("=" * 70)
    lines.append("BM11 STRUCTURE REPORT")
    lines.append("=" * 70)

    lines.append("\nEdge lengths:")
    lines.append(f"   length_OB = {edges.OB:.3f} ft")
    lines.append(f"   length_BA = {edges.BA:.3f} ft")
    lines.append(f"   length_OA = {edges.OA:.3f} ft")
    lines.append(f"   length_AC = {edges.AC:.3f} ft")

    lines.append("Scalene triangle OBA and OBC vertex angles:")
    lines.append(f"   angle_OAB = angle_OCB = {_deg(angles.OAB):.3f} degrees")
    lines.append(f"   angle_AOB = angle_COB = {_deg(angles.AOB):.3f} degrees")
    lines.append(f"   angle_ABO = angle_CBO = {_deg(angles.ABO):.3f} degrees")

    lines.append("Isoceles triangle ABC vertex angles:")
    lines.append(f"   angle_ABC             = {_deg(angles.ABC):.3f} degrees")
    lines.append(f"   angle_BAC = angle_BCA = {_deg(angles.BAC):.3f} degrees")

    lines.append("Isoceles triangle AOC vertex angles:")
    lines.append(f"   angle_AOC             = {_deg(angles.AOC):.3f} degrees")
    lines.append(f"   angle_OAC = angle_OCA = {_deg(angles.OAC):.3f} degrees")

    lines.append("Vertex coordinates:")
    for name in ('O', 'B0', 'A0', 'C0', 'B1', 'A1', 'C1'):
        lines.append(f"   {name:<2} = {_format_point(getattr(coords, name))}")

    lines.append("Structural shape summary:")
    lines.append(f"   Footprint dimensions   = [{shape.footprint[0]:.3f}, {shape.footprint[1]:.3f}] ft")
    lines.append(f"   Footprint surface area = {shape.footprint_area:.3f} ft^2")
    lines.append(f"   Footprint aspect ratio = {shape.footprint_aspect_ratio:.3f}")
    lines.append(f"   Height                 = {shape.height:.3f} ft")
    lines.append(f"   Triangle surface area  = {shape.triangle_area:.3f} ft^2")
    lines.append(f"   Walkway top angle      = {_deg(shape.walkway_top_angle):.3f} degrees")
    lines.append(f"   Walkway base width     = {shape.walkway_base_width:.3f} ft")
    lines.append(f"   Walkway shoulder width = {shape.walkway_shoulder_width:.3f} ft "
                 f"(at {shape.shoulder_height:.3f} ft shoulder height)")

    lines.append("Important dihedral angles:")
    lines.append(f"   Between triangle pairs (angle_BOA_BOC)      = {_deg(dihedral.BOA_BOC):.3f} degrees")
    lines.append(f"   Between triangle and ground (angle_BOA_ABC) = {_deg(dihedral.BOA_ABC):.3f} degrees")

    lines.append("Frame info:")
    lines.append(f"   Perimeter length         = {frame.perimeter_length:.3f} ft")
    lines.append(f"   Reinforce length         = {frame.reinforce_length:.3f} ft")
    lines.append(f"   Total length             = {frame.total_length:.3f} ft")
    lines.append(f"   Cross-section dimensions = [{frame.cross_section[0]:.3f}, {frame.cross_section[1]:.3f}] in")
    lines.append(f"   Wall thickness           = {frame.wall_thickness:.3f} in")
    lines.append(f"   Cross-section metal area = {frame.metal_cross_section_area:.3f} in^2")
    lines.append(f"   Metal volume             = {frame.metal_volume:.3f} in^3 ({frame.metal_volume_ft3:.3f} ft^3)")
    lines.append(f"   Metal density            = {frame.metal_density:.3f} lb/in^3")
    lines.append(f"   Mass                     = {frame.metal_mass:.3f} lb")
    lines.append(f"   Cost                     = ${frame.metal_cost:.3f}")
    lines.append(f"   Drill count              = {frame.drill_count:.3f}")
    lines.append(f"   Drill cost               = ${frame.drill_cost:.3f}")
    lines.append(f"   Tap count                = {frame.tap_count:.3f}")
    lines.append(f"   Tap cost                 = ${frame.tap_cost:.3f}")

    lines.append("Mirror coating info:")
    lines.append(f"   Total surface area       = {mirror.surface_area:.3f} ft^2")
    lines.append(f"   Mirror cost              = ${mirror.cost:.3f}")
    lines.append(f"   Mirror bolt count        = {mirror.bolt_count:.3f}")
    lines.append(f"   Mirror bolt cost         = ${mirror.bolt_cost:.3f}")

    table = wind_force_table(wind)
    areas = {'XY': wind.total_surface_area_XY, 'YZ': wind.total_surface_area_YZ}
    lines.append("Wind:")
    for plane in ('XY', 'YZ'):
        lines.append(f"   {plane} plane:")
        lines.append(f"      Total surface area = {areas[plane]:.3f} ft^2")
        for mph, force in table[plane]:
            lines.append(f"      Side force at {mph:.0f} MPH = {force:.0f} lbs")

    lines.append("Total:")
    lines.append(f"   Mass (frame only)        = {output.total.mass:.3f} lb")
    lines.append(f"   Cost                     = ${output.total.cost:.3f}")

    lines.append("\n" + "=" * 70)

    return "\n".join(lines)


def report_data(output: OutputParameters) -> Dict[str, Any]:
    """All reported quantities as plain data, wind force tables included."""
    data = output.to_dict()
    table = wind_force_table(output.wind)
    data['wind']['force_table'] = {
        plane: [{'mph': mph, 'force_lb': force} for mph, force in rows]
        for plane, rows in table.items()
    }
    return data


def report_to_json(output: OutputParameters, indent: int = 2) -> str:
    return json.dumps(report_data(output), indent=indent)
