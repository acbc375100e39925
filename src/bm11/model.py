"""
BM11 model evaluation.

`evaluate` is the whole computation: solve the geometry, then run the frame,
mirror and wind estimates on it. `BM11Model` wraps it with a cached result
for callers that hold on to one set of inputs and change it over time.
"""

import logging
import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .analysis import (
    FrameEstimate,
    MirrorEstimate,
    Totals,
    WindEstimate,
    estimate_frame,
    estimate_mirror,
    estimate_totals,
    estimate_wind,
)
from .geometry import (
    DihedralAngles,
    EdgeLengths,
    OverallStructure,
    VertexAngles,
    VertexCoords,
    solve_geometry,
)
from .parameters import InputParameters, default_input_parameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputParameters:
    """Everything derived from one set of InputParameters."""
    edge_length: EdgeLengths
    vertex_angle: VertexAngles
    vertex_coord: VertexCoords
    overall_structure: OverallStructure
    dihedral_angle: DihedralAngles
    frame: FrameEstimate
    mirror: MirrorEstimate
    wind: WindEstimate
    total: Totals

    def to_dict(self) -> Dict[str, Any]:
        """Nested plain-dict view, aliases included."""
        result = asdict(self)
        edges = self.edge_length
        angles = self.vertex_angle
        result['edge_length'].update(OC=edges.OC, BC=edges.BC)
        result['vertex_angle'].update(
            OCB=angles.OCB, COB=angles.COB, CBO=angles.CBO,
            BCA=angles.BCA, OCA=angles.OCA,
        )
        result['frame']['metal_volume_ft3'] = self.frame.metal_volume_ft3
        return result


def evaluate(params: Optional[InputParameters] = None) -> OutputParameters:
    """
    Evaluate the structure for a set of input parameters.

    Args:
        params: Input parameters (defaults if None)

    Returns:
        Fully populated OutputParameters

    Raises:
        GeometryInvalidError: if the inputs do not form a valid tetrahedron pair
    """
    if params is None:
        params = default_input_parameters()

    geometry = solve_geometry(params)

    frame = estimate_frame(geometry, params)
    mirror = estimate_mirror(geometry, frame, params)
    wind = estimate_wind(geometry)
    total = estimate_totals(frame, mirror)

    logger.debug("Evaluated: frame %.3f ft, total cost $%.2f", frame.total_length, total.cost)

    return OutputParameters(
        edge_length=geometry.edge_length,
        vertex_angle=geometry.vertex_angle,
        vertex_coord=geometry.vertex_coord,
        overall_structure=geometry.overall_structure,
        dihedral_angle=geometry.dihedral_angle,
        frame=frame,
        mirror=mirror,
        wind=wind,
        total=total,
    )


class BM11Model:
    """
    Holds one set of input parameters and lazily evaluates them.

    Assigning `input_parameters` marks the output dirty; the next read of
    `output` re-evaluates and caches the result. The cached output is only
    ever replaced whole, so a reader gets either the previous or the new
    result.
    """

    def __init__(self, params: Optional[InputParameters] = None):
        self._lock = threading.Lock()
        self._params = params if params is not None else default_input_parameters()
        self._output: Optional[OutputParameters] = None
        self._dirty = True

    @property
    def input_parameters(self) -> InputParameters:
        return self._params

    @input_parameters.setter
    def input_parameters(self, params: InputParameters) -> None:
        if not isinstance(params, InputParameters):
            raise TypeError("input_parameters must be an InputParameters instance")
        with self._lock:
            self._params = params
            self._output = None
            self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def output(self) -> OutputParameters:
        """
        The evaluated output for the current inputs.

        Raises:
            GeometryInvalidError: every time it is read while the current
                inputs are invalid
        """
        with self._lock:
            if self._dirty:
                logger.debug("Inputs changed, re-evaluating")
                self._output = evaluate(self._params)
                self._dirty = False
            return self._output
