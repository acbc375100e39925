"""
Parameter sweep over the starting square size.

Holds every input at its base value and steps squareSideLength, recording
the total cost at each step. Used for sizing studies, not part of a normal
evaluation.
"""

import csv
import logging
from typing import List, Optional, TextIO, Tuple

import numpy as np

from .model import evaluate
from .parameters import (
    InputParameters,
    default_input_parameters,
    SWEEP_START,
    SWEEP_STOP,
    SWEEP_STEP,
)

logger = logging.getLogger(__name__)

SWEEP_CSV_HEADER = ("squareSideLength", "TotalCost")
# Read back with csv skipinitialspace
SWEEP_CSV_SEPARATOR = ", "


def sweep_values(start: float = SWEEP_START,
                 stop: float = SWEEP_STOP,
                 step: float = SWEEP_STEP) -> List[float]:
    """
    Values from start to stop inclusive.

    Raises:
        ValueError: if step is zero or points away from stop
    """
    if step == 0 or (stop - start) * step < 0:
        raise ValueError(f"step {step} cannot reach {stop} from {start}")
    count = int(np.floor((stop - start) / step + 1e-9)) + 1
    return [float(v) for v in np.round(start + step * np.arange(count), 9)]


def sweep_square_side_length(base: Optional[InputParameters] = None,
                             start: float = SWEEP_START,
                             stop: float = SWEEP_STOP,
                             step: float = SWEEP_STEP) -> List[Tuple[float, float]]:
    """
    Total cost as a function of squareSideLength.

    Args:
        base: Parameters for everything except squareSideLength (defaults if None)
        start, stop, step: Sweep range, both ends included

    Returns:
        List of (square_side_length, total_cost)

    Raises:
        GeometryInvalidError: if any step of the sweep is not a valid structure
    """
    if base is None:
        base = default_input_parameters()

    rows = []
    for side in sweep_values(start, stop, step):
        output = evaluate(base.replace(square_side_length=side))
        rows.append((side, output.total.cost))
        logger.debug("squareSideLength=%.3f total cost=$%.2f", side, output.total.cost)

    logger.info("Swept squareSideLength %.3f -> %.3f (%d rows)", start, stop, len(rows))
    return rows


def write_sweep_csv(rows: List[Tuple[float, float]], stream: TextIO) -> None:
    """Write sweep rows with a `squareSideLength, TotalCost` header, comma-space separated."""
    stream.write(SWEEP_CSV_SEPARATOR.join(SWEEP_CSV_HEADER) + "\n")
    for side, cost in rows:
        stream.write(f"{side:.3f}{SWEEP_CSV_SEPARATOR}{cost:.3f}\n")


def read_sweep_csv(stream: TextIO) -> List[Tuple[float, float]]:
    """
    Read rows written by write_sweep_csv.

    Raises:
        ValueError: if the header is not a sweep header
    """
    reader = csv.reader(stream, skipinitialspace=True)
    header = next(reader, None)
    if header is None or tuple(header) != SWEEP_CSV_HEADER:
        raise ValueError(f"not a sweep CSV header: {header!r}")
    return [(float(side), float(cost)) for side, cost in reader]
