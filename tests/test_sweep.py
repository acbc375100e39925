import io

import pytest

from bm11 import GeometryInvalidError, evaluate, sweep_square_side_length, write_sweep_csv
from bm11.parameters import InputParameters
from bm11.sweep import read_sweep_csv, sweep_values


def test_sweep_values_inclusive():
    values = sweep_values(16.0, 8.0, -0.5)

    assert len(values) == 17
    assert values[0] == 16.0
    assert values[-1] == 8.0
    assert values[1] == 15.5


@pytest.mark.parametrize("start,stop,step", [
    (16.0, 8.0, 0.0),
    (16.0, 8.0, 0.5),
    (8.0, 16.0, -0.5),
])
def test_sweep_values_rejects_bad_step(start, stop, step):
    with pytest.raises(ValueError):
        sweep_values(start, stop, step)


def test_sweep_cost_decreases_with_square_size():
    rows = sweep_square_side_length()

    assert rows[0][0] == 16.0
    assert rows[-1][0] == 8.0
    costs = [cost for _, cost in rows]
    assert all(later < earlier for earlier, later in zip(costs, costs[1:]))


def test_sweep_matches_evaluate():
    rows = sweep_square_side_length(start=12.0, stop=11.0, step=-0.5)

    assert [side for side, _ in rows] == [12.0, 11.5, 11.0]
    assert rows[1][1] == evaluate(InputParameters(square_side_length=11.5)).total.cost


def test_sweep_propagates_invalid_geometry():
    base = InputParameters(base_cut_back_length=9.0)

    with pytest.raises(GeometryInvalidError):
        sweep_square_side_length(base, start=10.0, stop=9.0, step=-0.5)


def test_write_sweep_csv():
    stream = io.StringIO()
    write_sweep_csv([(16.0, 8755.642), (15.5, 8265.5228)], stream)

    lines = stream.getvalue().splitlines()
    assert lines[0] == "squareSideLength, TotalCost"
    assert lines[1] == "16.000, 8755.642"
    assert lines[2] == "15.500, 8265.523"


def test_read_sweep_csv():
    stream = io.StringIO("squareSideLength, TotalCost\n16.000, 8755.642\n8.000, 4100.5\n")

    assert read_sweep_csv(stream) == [(16.0, 8755.642), (8.0, 4100.5)]


def test_read_sweep_csv_rejects_other_header():
    with pytest.raises(ValueError, match="sweep CSV header"):
        read_sweep_csv(io.StringIO("side,cost\n16,1\n"))
