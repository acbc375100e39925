import json

import pytest

from bm11 import evaluate, format_report, report_to_json
from bm11.report import report_data


@pytest.fixture(scope="module")
def output():
    return evaluate()


def test_report_sections(output):
    text = format_report(output)

    for header in ("Edge lengths:",
                   "Scalene triangle OBA and OBC vertex angles:",
                   "Isoceles triangle ABC vertex angles:",
                   "Isoceles triangle AOC vertex angles:",
                   "Vertex coordinates:",
                   "Structural shape summary:",
                   "Important dihedral angles:",
                   "Frame info:",
                   "Mirror coating info:",
                   "Wind:",
                   "Total:"):
        assert header in text


def test_report_values_formatted(output):
    text = format_report(output)

    assert "length_BA = 14.000 ft" in text
    assert "angle_ABC             = 110.000 degrees" in text
    assert "angle_BAC = angle_BCA = 35.000 degrees" in text
    assert "Triangle surface area  = 112.000 ft^2" in text


def test_report_wind_tables(output):
    lines = format_report(output).splitlines()
    force_lines = [l for l in lines if "Side force at" in l]

    # 5..100 mph for both planes
    assert len(force_lines) == 40
    assert force_lines[0].strip().startswith("Side force at 5 MPH = ")
    assert force_lines[19].strip().startswith("Side force at 100 MPH = ")
    assert force_lines[0].endswith(" lbs")


def test_report_data_and_json(output):
    data = report_data(output)
    assert len(data['wind']['force_table']['XY']) == 20
    assert data['wind']['force_table']['YZ'][0]['mph'] == 5.0

    parsed = json.loads(report_to_json(output))
    assert parsed['edge_length']['BA'] == 14.0
    assert parsed['total']['cost'] == pytest.approx(output.total.cost)
    assert parsed['vertex_coord']['B1'] == list(output.vertex_coord.B1)
