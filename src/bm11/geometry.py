r"""
Tetrahedron pair geometry.
Pure Python (numpy only for the single-precision law-of-sines gate), so it can
be tested without CadQuery installed.

                        O
                       /|\
                      / | \
                     /  |  \
                    /   |   \
                   /   -B-   \
                  /  -/   \-  \
                 / -/       \- \
                A . . . . . . . C

    - A, B, C and O are vertices of an irregular tetrahedron
    - The structure is two such tetrahedrons sharing vertex O, mirrored
      through the z = 0 plane
    - OBA, OBC are identical scalene triangles
    - ABC and AOC are isoceles triangles
    - |OA| = |OC|, |BA| = |BC|

Y is up. The ground plane is y = 0.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .parameters import InputParameters, LAW_OF_SINES_TOLERANCE

logger = logging.getLogger(__name__)

# Type aliases for clarity
Point3D = Tuple[float, float, float]
Vector2D = Tuple[float, float]

GROUND_NORMAL: Point3D = (0.0, 1.0, 0.0)


class GeometryInvalidError(ValueError):
    """The inputs do not describe a physically possible tetrahedron pair."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid tetrahedron: {reason}")
        self.reason = reason


# =============================================================================
# VECTOR MATH HELPERS
# =============================================================================

def dot(a: Point3D, b: Point3D) -> float:
    return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]

def cross(a: Point3D, b: Point3D) -> Point3D:
    return (a[1]*b[2] - a[2]*b[1],
            a[2]*b[0] - a[0]*b[2],
            a[0]*b[1] - a[1]*b[0])

def sub(a: Point3D, b: Point3D) -> Point3D:
    return (a[0]-b[0], a[1]-b[1], a[2]-b[2])

def add(a: Point3D, b: Point3D) -> Point3D:
    return (a[0]+b[0], a[1]+b[1], a[2]+b[2])

def scale(a: Point3D, s: float) -> Point3D:
    return (a[0]*s, a[1]*s, a[2]*s)

def norm(a: Point3D) -> float:
    return math.sqrt(dot(a, a))

def normalize(a: Point3D) -> Point3D:
    l = norm(a)
    if l < 1e-9: return (0.0, 0.0, 0.0)
    return scale(a, 1.0/l)

def mirror_z(p: Point3D) -> Point3D:
    """Reflect a point through the z = 0 plane."""
    return (p[0], p[1], -p[2])

def project_xy(p: Point3D) -> Point3D:
    return (p[0], p[1], 0.0)

def project_yz(p: Point3D) -> Point3D:
    return (0.0, p[1], p[2])

def triangle_area(a: Point3D, b: Point3D, c: Point3D) -> float:
    """Area of triangle abc, half the magnitude of (a - b) x (c - b)."""
    return norm(cross(sub(a, b), sub(c, b))) * 0.5


# =============================================================================
# GUARDED MATH
# =============================================================================
# The closed-form solution only has meaning inside the domains of these
# functions. Anything outside is an impossible combination of inputs.

def _acos(x: float, what: str) -> float:
    if not -1.0 <= x <= 1.0:
        raise GeometryInvalidError(f"acos argument {x:.6g} out of range computing {what}")
    return math.acos(x)


def _asin(x: float, what: str) -> float:
    if not -1.0 <= x <= 1.0:
        raise GeometryInvalidError(f"asin argument {x:.6g} out of range computing {what}")
    return math.asin(x)


def _sqrt(x: float, what: str) -> float:
    if not x >= 0.0:
        raise GeometryInvalidError(f"square root of {x:.6g} computing {what}")
    return math.sqrt(x)


def _divide(num: float, den: float, what: str) -> float:
    if den == 0.0:
        raise GeometryInvalidError(f"division by zero computing {what}")
    return num / den


def _cosine_law(a: float, b: float, c: float, what: str) -> float:
    """Angle opposite side c of a triangle with sides a, b, c."""
    return _acos(_divide(a*a + b*b - c*c, 2.0 * a * b, what), what)


# =============================================================================
# RESULT RECORDS
# =============================================================================

@dataclass(frozen=True)
class EdgeLengths:
    """Tetrahedron edge lengths (ft)."""
    OB: float
    BA: float
    OA: float
    AC: float

    @property
    def OC(self) -> float:
        return self.OA

    @property
    def BC(self) -> float:
        return self.BA


@dataclass(frozen=True)
class VertexAngles:
    """
    Face angles of the tetrahedron (rad).

    angle_XYZ is the angle at Y in triangle XYZ. Triangle OBC has the same
    angles as OBA, and the isoceles base angles are equal, so those are
    exposed as aliases rather than stored twice.
    """
    OAB: float
    AOB: float
    ABO: float
    ABC: float
    BAC: float
    AOC: float
    OAC: float

    @property
    def OCB(self) -> float:
        return self.OAB

    @property
    def COB(self) -> float:
        return self.AOB

    @property
    def CBO(self) -> float:
        return self.ABO

    @property
    def BCA(self) -> float:
        return self.BAC

    @property
    def OCA(self) -> float:
        return self.OAC


@dataclass(frozen=True)
class VertexCoords:
    """Vertex positions (ft). Index 0 is the first tetrahedron, 1 its mirror image."""
    O: Point3D
    A0: Point3D
    B0: Point3D
    C0: Point3D
    A1: Point3D
    B1: Point3D
    C1: Point3D


@dataclass(frozen=True)
class OverallStructure:
    footprint: Vector2D
    footprint_area: float
    footprint_aspect_ratio: float
    height: float
    triangle_area: float
    walkway_top_angle: float
    walkway_base_width: float
    walkway_shoulder_width: float
    shoulder_height: float


@dataclass(frozen=True)
class DihedralAngles:
    """Angle between triangles OBA and OBC, and between OBA and the ground (rad)."""
    BOA_BOC: float
    BOA_ABC: float


@dataclass(frozen=True)
class Geometry:
    edge_length: EdgeLengths
    vertex_angle: VertexAngles
    vertex_coord: VertexCoords
    overall_structure: OverallStructure
    dihedral_angle: DihedralAngles


# =============================================================================
# SOLVER STEPS
# =============================================================================

def compute_edge_lengths(params: InputParameters) -> EdgeLengths:
    """
    Edge lengths from the starting square.

    The lateral triangle OBA is cut from a square of side S: OA is its
    diagonal, and moving B in by the cut back length gives BA and OB.
    """
    side = params.square_side_length
    cut = params.base_cut_back_length

    length_OB = math.sqrt(side*side + cut*cut)
    length_BA = side - cut
    length_OA = side * math.sqrt(2.0)
    length_AC = 2.0 * length_BA * math.sin(params.angle_abc * 0.5)

    edges = EdgeLengths(OB=length_OB, BA=length_BA, OA=length_OA, AC=length_AC)

    for name in ('OB', 'BA', 'OA', 'AC'):
        value = getattr(edges, name)
        if not (math.isfinite(value) and value > 0.0):
            raise GeometryInvalidError(f"edge {name} has non-positive length {value:.6g}")

    return edges


def compute_vertex_angles(edges: EdgeLengths, angle_abc: float) -> VertexAngles:
    """Face angles of all four triangles of the tetrahedron."""
    # Scalene triangles OBA and OBC
    angle_OAB = _cosine_law(edges.OA, edges.BA, edges.OB, 'angle OAB')
    angle_AOB = _cosine_law(edges.OA, edges.OB, edges.BA, 'angle AOB')
    angle_ABO = math.pi - angle_OAB - angle_AOB

    # Isoceles triangle ABC
    angle_BAC = (math.pi - angle_abc) * 0.5

    # Isoceles triangle AOC
    angle_AOC = 2.0 * _asin(edges.AC / (2.0 * edges.OA), 'angle AOC')
    angle_OAC = (math.pi - angle_AOC) * 0.5

    return VertexAngles(
        OAB=angle_OAB,
        AOB=angle_AOB,
        ABO=angle_ABO,
        ABC=angle_abc,
        BAC=angle_BAC,
        AOC=angle_AOC,
        OAC=angle_OAC,
    )


# (vertex, face) -> (lhs angles, rhs angles) whose sine products must agree
LAW_OF_SINES_FACES = (
    ('O,ABC', ('OAC', 'OCB', 'ABO'), ('OCA', 'CBO', 'OAB')),
    ('A,OBC', ('AOC', 'BCA', 'ABO'), ('OCA', 'ABC', 'AOB')),
    ('B,AOC', ('BAC', 'OCB', 'AOB'), ('BCA', 'COB', 'OAB')),
    ('C,ABO', ('OAC', 'COB', 'ABC'), ('AOC', 'CBO', 'BAC')),
)


def _sine_product(angles: VertexAngles, names: Tuple[str, ...]) -> np.float32:
    values = np.array([getattr(angles, n) for n in names], dtype=np.float32)
    return np.prod(np.sin(values), dtype=np.float32)


def check_law_of_sines(angles: VertexAngles,
                       tolerance: float = LAW_OF_SINES_TOLERANCE) -> None:
    """
    Validate the tetrahedron with the 3D law of sines.

    Evaluated in single precision, matching the tolerance the check was
    tuned for.

    Raises:
        GeometryInvalidError: if any of the four faces disagrees by more than
            the tolerance
    """
    eps = np.float32(tolerance)
    for label, lhs_names, rhs_names in LAW_OF_SINES_FACES:
        lhs = _sine_product(angles, lhs_names)
        rhs = _sine_product(angles, rhs_names)
        if not np.abs(lhs - rhs) <= eps:
            raise GeometryInvalidError(
                f"law of sines fails for {label} (|{float(lhs):.6f} - {float(rhs):.6f}| > {tolerance})"
            )


def compute_vertex_coords(edges: EdgeLengths) -> VertexCoords:
    """
    Place the vertices of both tetrahedrons.

    M, the midpoint of AC, starts at the origin with AC along x. B lies on
    the perpendicular bisector plane of AC, in the ground plane. O is found
    from |OA| and |OB|, then everything is shifted along z so O sits on z = 0
    and the second tetrahedron is the mirror image through that plane.
    """
    length_AM = edges.AC * 0.5

    A0 = (-length_AM, 0.0, 0.0)
    C0 = (+length_AM, 0.0, 0.0)
    B0_z = _sqrt(edges.BA**2 - length_AM**2, 'B.z')

    O_z = _divide(edges.OB**2 - edges.OA**2 + length_AM**2 - B0_z**2,
                  -2.0 * B0_z, 'O.z')
    O_y = _sqrt(edges.OA**2 - length_AM**2 - O_z**2, 'O.y')
    if O_y <= 0.0:
        raise GeometryInvalidError("apex O lies in the ground plane")

    # Translate so that O.z = 0
    A0 = (A0[0], A0[1], A0[2] - O_z)
    C0 = (C0[0], C0[1], C0[2] - O_z)
    B0 = (0.0, 0.0, B0_z - O_z)
    O = (0.0, O_y, 0.0)

    return VertexCoords(
        O=O,
        A0=A0,
        B0=B0,
        C0=C0,
        A1=mirror_z(A0),
        B1=mirror_z(B0),
        C1=mirror_z(C0),
    )


def compute_overall_structure(coords: VertexCoords, shoulder_height: float) -> OverallStructure:
    O, A0, B0, C0, A1, B1 = (coords.O, coords.A0, coords.B0,
                             coords.C0, coords.A1, coords.B1)

    footprint = (C0[0] - A0[0], A1[2] - A0[2])
    height = O[1]

    return OverallStructure(
        footprint=footprint,
        footprint_area=footprint[0] * footprint[1],
        footprint_aspect_ratio=_divide(footprint[0], footprint[1], 'footprint aspect ratio'),
        height=height,
        triangle_area=triangle_area(O, B0, A0),
        walkway_top_angle=math.atan(B1[2] / height) * 2.0,
        walkway_base_width=B1[2] - B0[2],
        walkway_shoulder_width=((height - shoulder_height) * B1[2] * 2.0) / height,
        shoulder_height=shoulder_height,
    )


def compute_dihedral_angles(coords: VertexCoords) -> DihedralAngles:
    O, A0, B0, C0 = coords.O, coords.A0, coords.B0, coords.C0

    BO = sub(B0, O)
    norm_BOA = normalize(cross(BO, sub(B0, A0)))
    norm_BOC = normalize(cross(BO, sub(B0, C0)))

    # Unit normals: only rounding can push the dot product past +/-1
    cos_pair = max(-1.0, min(1.0, dot(norm_BOA, norm_BOC)))
    cos_ground = max(-1.0, min(1.0, dot(norm_BOA, GROUND_NORMAL)))

    return DihedralAngles(
        BOA_BOC=math.acos(cos_pair),
        BOA_ABC=math.acos(cos_ground),
    )


def solve_geometry(params: InputParameters) -> Geometry:
    """
    Solve the tetrahedron pair for a set of input parameters.

    Args:
        params: Input parameters

    Returns:
        Geometry with edge lengths, angles, coordinates, shape metrics and
        dihedral angles

    Raises:
        GeometryInvalidError: if the inputs do not form a valid tetrahedron
    """
    edges = compute_edge_lengths(params)
    angles = compute_vertex_angles(edges, params.angle_abc)
    check_law_of_sines(angles)
    coords = compute_vertex_coords(edges)
    overall = compute_overall_structure(coords, params.shoulder_height)
    dihedral = compute_dihedral_angles(coords)

    logger.debug("Solved geometry: OB=%.3f BA=%.3f OA=%.3f AC=%.3f height=%.3f",
                 edges.OB, edges.BA, edges.OA, edges.AC, overall.height)

    return Geometry(
        edge_length=edges,
        vertex_angle=angles,
        vertex_coord=coords,
        overall_structure=overall,
        dihedral_angle=dihedral,
    )
