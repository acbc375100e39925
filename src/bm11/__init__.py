"""
BM11 - Tetrahedron Pair Structure Estimator

Geometry, frame, mirror cladding and wind load estimates for the BM11
mirrored tetrahedron structure. The CadQuery model lives in
`bm11.frame_model` and is imported on demand.
"""

from .parameters import (
    InputParameters,
    UnitCosts,
    default_input_parameters,
)

from .geometry import (
    Point3D,
    Geometry,
    GeometryInvalidError,
    solve_geometry,
    check_law_of_sines,
)

from .analysis import (
    estimate_frame,
    estimate_mirror,
    estimate_wind,
    estimate_totals,
    wind_force,
    wind_force_table,
)

from .model import (
    OutputParameters,
    BM11Model,
    evaluate,
)

from .report import (
    format_report,
    report_to_json,
)

from .sweep import (
    sweep_square_side_length,
    read_sweep_csv,
    write_sweep_csv,
)

__version__ = "0.1.0"
__all__ = [
    # Types
    "Point3D",
    "InputParameters",
    "UnitCosts",
    "Geometry",
    "OutputParameters",
    "BM11Model",
    "GeometryInvalidError",
    # Parameters
    "default_input_parameters",
    # Geometry
    "solve_geometry",
    "check_law_of_sines",
    # Estimates
    "estimate_frame",
    "estimate_mirror",
    "estimate_wind",
    "estimate_totals",
    "wind_force",
    "wind_force_table",
    # Evaluation and output
    "evaluate",
    "format_report",
    "report_to_json",
    "sweep_square_side_length",
    "read_sweep_csv",
    "write_sweep_csv",
]
