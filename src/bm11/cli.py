"""
Command line entry point.

    bm11 report [--json]
    bm11 sweep [--start 16 --stop 8 --step -0.5] [--output costs.csv]
    bm11 export --step bm11.step --stl bm11.stl
"""

import argparse
import logging
import math
import sys
from typing import List, Optional

from .geometry import GeometryInvalidError
from .logging_config import setup_logging
from .model import evaluate
from .parameters import (
    InputParameters,
    default_input_parameters,
    SWEEP_START,
    SWEEP_STOP,
    SWEEP_STEP,
)

logger = logging.getLogger(__name__)


def _add_parameter_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("structure parameters (defaults in parentheses)")
    defaults = default_input_parameters()
    group.add_argument("--square-side-length", type=float,
                       help=f"Starting square side, ft ({defaults.square_side_length})")
    group.add_argument("--base-cut-back", type=float,
                       help=f"Base cut back length, ft ({defaults.base_cut_back_length})")
    group.add_argument("--angle-abc-deg", type=float,
                       help=f"Ground angle between triangles, degrees ({math.degrees(defaults.angle_abc):.0f})")
    group.add_argument("--shoulder-height", type=float,
                       help=f"Walkway shoulder height, ft ({defaults.shoulder_height})")
    group.add_argument("--bolt-spacing", type=float,
                       help=f"Mirror bolt spacing, ft ({defaults.mirror_bolt_spacing})")


def parameters_from_args(args: argparse.Namespace) -> InputParameters:
    """Defaults with any command line overrides applied."""
    overrides = {}
    if args.square_side_length is not None:
        overrides['square_side_length'] = args.square_side_length
    if args.base_cut_back is not None:
        overrides['base_cut_back_length'] = args.base_cut_back
    if args.angle_abc_deg is not None:
        overrides['angle_abc'] = math.radians(args.angle_abc_deg)
    if args.shoulder_height is not None:
        overrides['shoulder_height'] = args.shoulder_height
    if args.bolt_spacing is not None:
        overrides['mirror_bolt_spacing'] = args.bolt_spacing
    return default_input_parameters().replace(**overrides)


def _run_report(args: argparse.Namespace) -> int:
    from .report import format_report, report_to_json

    output = evaluate(parameters_from_args(args))
    print(report_to_json(output) if args.json else format_report(output))
    return 0


def _run_sweep(args: argparse.Namespace) -> int:
    from .sweep import sweep_square_side_length, write_sweep_csv

    rows = sweep_square_side_length(parameters_from_args(args),
                                    start=args.start, stop=args.stop, step=args.step)
    if args.output:
        with open(args.output, 'w', newline='') as f:
            write_sweep_csv(rows, f)
        logger.info("Wrote %d rows to %s", len(rows), args.output)
    else:
        write_sweep_csv(rows, sys.stdout)
    return 0


def _run_export(args: argparse.Namespace) -> int:
    if not args.step and not args.stl:
        logger.error("Nothing to export: pass --step and/or --stl")
        return 2

    # CadQuery is optional and slow to import; only pay for it here
    try:
        from .frame_model import build_structure, export_structure
    except ImportError as e:
        logger.error("CAD export needs CadQuery (pip install bm11[cad]): %s", e)
        return 2

    output = evaluate(parameters_from_args(args))
    structure, _ = build_structure(output, include_mirrors=not args.no_mirrors)
    export_structure(structure, step_path=args.step, stl_path=args.stl)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bm11", description="BM11 structure estimator")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Sub-commands")

    cmd_report = subparsers.add_parser("report", help="Evaluate and print the full report")
    _add_parameter_arguments(cmd_report)
    cmd_report.add_argument("--json", action="store_true", help="Print JSON instead of text")
    cmd_report.set_defaults(func=_run_report)

    cmd_sweep = subparsers.add_parser("sweep", help="Total cost vs. squareSideLength as CSV")
    _add_parameter_arguments(cmd_sweep)
    cmd_sweep.add_argument("--start", type=float, default=SWEEP_START)
    cmd_sweep.add_argument("--stop", type=float, default=SWEEP_STOP)
    cmd_sweep.add_argument("--step", type=float, default=SWEEP_STEP)
    cmd_sweep.add_argument("--output", "-o", help="CSV file (stdout if omitted)")
    cmd_sweep.set_defaults(func=_run_sweep)

    cmd_export = subparsers.add_parser("export", help="Export the frame as STEP/STL")
    _add_parameter_arguments(cmd_export)
    cmd_export.add_argument("--step", help="STEP output path")
    cmd_export.add_argument("--stl", help="STL output path")
    cmd_export.add_argument("--no-mirrors", action="store_true", help="Frame only")
    cmd_export.set_defaults(func=_run_export)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        return args.func(args)
    except GeometryInvalidError as e:
        logger.error("%s", e)
        return 1
    except ValueError as e:
        # Bad parameter values from the command line
        logger.error("Invalid parameters: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
