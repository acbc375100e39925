import json
import math
import sys

import pytest

from bm11.cli import build_parser, main, parameters_from_args


def test_parameters_from_args_overrides():
    args = build_parser().parse_args(
        ["report", "--square-side-length", "12", "--angle-abc-deg", "90", "--bolt-spacing", "1.5"])
    params = parameters_from_args(args)

    assert params.square_side_length == 12.0
    assert params.angle_abc == pytest.approx(math.pi / 2)
    assert params.mirror_bolt_spacing == 1.5
    assert params.base_cut_back_length == 2.0


def test_report_command(capsys):
    assert main(["report"]) == 0

    out = capsys.readouterr().out
    assert "Edge lengths:" in out
    assert "length_BA = 14.000 ft" in out


def test_report_json_command(capsys):
    assert main(["report", "--json", "--square-side-length", "12"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data['edge_length']['BA'] == 10.0


def test_invalid_geometry_exits_nonzero(capsys):
    assert main(["report", "--base-cut-back", "16"]) == 1
    assert "Edge lengths:" not in capsys.readouterr().out


def test_invalid_parameter_exits_nonzero():
    assert main(["report", "--square-side-length", "-1"]) == 2


def test_sweep_command_to_file(tmp_path):
    path = tmp_path / "sweep.csv"

    assert main(["sweep", "--output", str(path)]) == 0

    lines = path.read_text().splitlines()
    assert lines[0] == "squareSideLength, TotalCost"
    assert len(lines) == 18
    assert lines[1].startswith("16.000, ")
    assert lines[-1].startswith("8.000, ")


def test_sweep_command_to_stdout(capsys):
    assert main(["sweep", "--start", "10", "--stop", "9", "--step", "-1"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "squareSideLength, TotalCost"
    assert [l.split(",")[0] for l in lines[1:]] == ["10.000", "9.000"]


def test_export_requires_a_path():
    assert main(["export"]) == 2


def test_export_without_cadquery_exits_nonzero(monkeypatch, tmp_path):
    # A None entry makes the import fail as if CadQuery were not installed
    monkeypatch.setitem(sys.modules, "bm11.frame_model", None)

    assert main(["export", "--step", str(tmp_path / "bm11.step")]) == 2
    assert not (tmp_path / "bm11.step").exists()
