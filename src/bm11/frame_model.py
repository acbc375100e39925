"""
CadQuery Model of the BM11 Frame and Mirror Panels.

Each of the four triangles is framed separately with hollow rectangular
tube, plus one cross-bar from B0 to B1. Mirror panels are thin triangular
plates lying in the triangle planes. The model is built in inches.
"""

import logging
from typing import Dict, List, Optional, Tuple

import cadquery as cq
from OCP.BRepBuilderAPI import BRepBuilderAPI_MakePolygon
from OCP.BRepOffsetAPI import BRepOffsetAPI_ThruSections
from OCP.gp import gp_Pnt

from .geometry import (
    GROUND_NORMAL,
    Point3D,
    VertexCoords,
    add,
    cross,
    norm,
    normalize,
    scale,
    sub,
)
from .parameters import INCHES_PER_FOOT
from .model import OutputParameters

logger = logging.getLogger(__name__)

# Triangles as (apex, base vertex, outer vertex)
FRAME_TRIANGLES = (
    ('O', 'B0', 'A0'),
    ('O', 'B0', 'C0'),
    ('O', 'B1', 'A1'),
    ('O', 'B1', 'C1'),
)
CROSS_BAR = ('B0', 'B1')

MIRROR_PANEL_THICKNESS_IN = 0.25


def _to_inches(p: Point3D) -> Point3D:
    return scale(p, INCHES_PER_FOOT)


def compute_member_profile(
    start: Point3D,
    end: Point3D,
    width: float,
    height: float,
    face_normal: Point3D
) -> List[Point3D]:
    """
    Compute the 4 corners of a rectangular tube profile at the start of a member.

    Args:
        start: Start point of the member axis
        end: End point of the member axis
        width: Section dimension along the face normal
        height: Section dimension in the face plane, across the member
        face_normal: Normal of the triangle the member belongs to

    Returns:
        List of 4 corners in order around the profile
    """
    axis = normalize(sub(end, start))

    # In-plane direction across the member
    side = normalize(cross(face_normal, axis))

    # Handle degenerate case where the member runs along the face normal
    if norm(side) < 1e-9:
        if abs(axis[2]) < 0.9:
            side = normalize(cross(axis, (0, 0, 1)))
        else:
            side = normalize(cross(axis, (1, 0, 0)))

    up = cross(axis, side)

    half_w = width / 2.0
    half_h = height / 2.0

    return [
        add(sub(start, scale(side, half_h)), scale(up, -half_w)),
        add(add(start, scale(side, half_h)), scale(up, -half_w)),
        add(add(start, scale(side, half_h)), scale(up, half_w)),
        add(sub(start, scale(side, half_h)), scale(up, half_w)),
    ]


def loft_profiles(corners_start: List[Point3D], corners_end: List[Point3D]) -> cq.Shape:
    """
    Loft a solid between two matching closed polygons (ruled ThruSections).

    Args:
        corners_start: Corner points at the start
        corners_end: Corner points at the end, in matching order

    Returns:
        CadQuery Shape of the lofted solid
    """
    builder = BRepOffsetAPI_ThruSections(True, True)  # solid, ruled

    for corners in (corners_start, corners_end):
        wire = BRepBuilderAPI_MakePolygon()
        for pt in corners:
            wire.Add(gp_Pnt(pt[0], pt[1], pt[2]))
        wire.Close()
        builder.AddWire(wire.Wire())

    builder.Build()

    return cq.Shape(builder.Shape())


def create_tube_member(
    start: Point3D,
    end: Point3D,
    cross_section: Tuple[float, float],
    wall_thickness: float,
    face_normal: Point3D
) -> cq.Shape:
    """
    Create a hollow rectangular tube between two points.

    Args:
        start: Start point (in)
        end: End point (in)
        cross_section: Outer (width, height) of the tube (in)
        wall_thickness: Tube wall thickness (in)
        face_normal: Normal of the triangle the member belongs to

    Returns:
        CadQuery Shape of the tube
    """
    width, height = cross_section
    offset = sub(end, start)

    outer_start = compute_member_profile(start, end, width, height, face_normal)
    outer_end = [add(p, offset) for p in outer_start]
    outer = loft_profiles(outer_start, outer_end)

    # Run the bore past both ends so the cut goes clean through
    axis = normalize(offset)
    bore_start = sub(start, scale(axis, wall_thickness))
    bore_end = add(end, scale(axis, wall_thickness))
    inner_start = compute_member_profile(bore_start, bore_end,
                                         width - 2.0 * wall_thickness,
                                         height - 2.0 * wall_thickness,
                                         face_normal)
    inner_end = [add(p, sub(bore_end, bore_start)) for p in inner_start]
    inner = loft_profiles(inner_start, inner_end)

    return outer.cut(inner)


def create_mirror_panel(
    a: Point3D,
    b: Point3D,
    c: Point3D,
    thickness: float = MIRROR_PANEL_THICKNESS_IN
) -> cq.Shape:
    """Create a triangular plate on triangle abc, extruded along its normal."""
    normal = normalize(cross(sub(b, a), sub(c, a)))
    offset = scale(normal, thickness)
    front = [a, b, c]
    back = [add(p, offset) for p in front]
    return loft_profiles(front, back)


def _triangle_normal(coords: VertexCoords, names: Tuple[str, str, str]) -> Point3D:
    apex, base, outer = (getattr(coords, n) for n in names)
    return normalize(cross(sub(base, apex), sub(outer, apex)))


def build_frame_members(output: OutputParameters) -> List[cq.Shape]:
    """
    Frame tubes for the four triangles and the B0-B1 cross-bar.

    Returns:
        List of 13 tube shapes (3 per triangle, then the cross-bar)
    """
    coords = output.vertex_coord
    cross_section = output.frame.cross_section
    wall = output.frame.wall_thickness

    members = []
    for names in FRAME_TRIANGLES:
        normal = _triangle_normal(coords, names)
        points = [_to_inches(getattr(coords, n)) for n in names]
        for i in range(3):
            start, end = points[i], points[(i + 1) % 3]
            members.append(create_tube_member(start, end, cross_section, wall, normal))

    b0, b1 = (_to_inches(getattr(coords, n)) for n in CROSS_BAR)
    members.append(create_tube_member(b0, b1, cross_section, wall, GROUND_NORMAL))

    return members


def build_mirror_panels(output: OutputParameters,
                        thickness: float = MIRROR_PANEL_THICKNESS_IN) -> List[cq.Shape]:
    """One panel per triangle; the cladding on the far side is not modelled."""
    coords = output.vertex_coord
    panels = []
    for names in FRAME_TRIANGLES:
        a, b, c = (_to_inches(getattr(coords, n)) for n in names)
        panels.append(create_mirror_panel(a, b, c, thickness))
    return panels


def build_structure(
    output: OutputParameters,
    include_mirrors: bool = True
) -> Tuple[cq.Compound, Dict]:
    """
    Build the full structure as one compound.

    Args:
        output: Result of evaluate()
        include_mirrors: Add the mirror panels to the compound

    Returns:
        Tuple of (compound, info dict)
    """
    members = build_frame_members(output)
    panels = build_mirror_panels(output) if include_mirrors else []

    compound = cq.Compound.makeCompound(members + panels)

    info = {
        'num_members': len(members),
        'num_panels': len(panels),
        'cross_section_in': output.frame.cross_section,
        'wall_thickness_in': output.frame.wall_thickness,
        'height_ft': output.overall_structure.height,
    }

    logger.info("Built structure: %d frame members, %d mirror panels",
                info['num_members'], info['num_panels'])

    return compound, info


def export_structure(
    structure: cq.Compound,
    step_path: Optional[str] = None,
    stl_path: Optional[str] = None
) -> None:
    """
    Export the structure to STEP and/or STL files.

    Args:
        structure: The compound to export
        step_path: Path for STEP file (None to skip)
        stl_path: Path for STL file (None to skip)
    """
    # Wrap the compound in a Workplane for export
    wp = cq.Workplane("XY").newObject([structure])

    if step_path:
        cq.exporters.export(wp, step_path)
        logger.info("Exported STEP to: %s", step_path)

    if stl_path:
        cq.exporters.export(wp, stl_path)
        logger.info("Exported STL to: %s", stl_path)
