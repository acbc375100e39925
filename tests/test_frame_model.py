import pytest

cq = pytest.importorskip("cadquery")

from bm11 import evaluate
from bm11.frame_model import (
    build_frame_members,
    build_mirror_panels,
    build_structure,
    compute_member_profile,
    create_mirror_panel,
    create_tube_member,
    export_structure,
)
from bm11.geometry import dot, norm, normalize, sub


@pytest.fixture(scope="module")
def output():
    return evaluate()


def test_member_profile_is_rectangle_across_axis():
    corners = compute_member_profile((0, 0, 0), (10, 0, 0), 0.75, 1.5, (0, 0, 1))

    assert len(corners) == 4
    for corner in corners:
        assert corner[0] == pytest.approx(0.0)
    assert norm(sub(corners[1], corners[0])) == pytest.approx(1.5)
    assert norm(sub(corners[2], corners[1])) == pytest.approx(0.75)
    # Width runs along the face normal
    assert abs(dot(normalize(sub(corners[2], corners[1])), (0, 0, 1))) == pytest.approx(1.0)


def test_tube_member_volume():
    tube = create_tube_member((0, 0, 0), (120, 0, 0), (0.75, 1.5), 1.0 / 16.0, (0, 0, 1))

    # Metal area 0.265625 in^2 over 120 in
    assert tube.Volume() == pytest.approx(0.265625 * 120, rel=1e-3)


def test_mirror_panel_volume():
    panel = create_mirror_panel((0, 0, 0), (24, 0, 0), (0, 24, 0), thickness=0.25)

    assert panel.Volume() == pytest.approx(24 * 24 / 2 * 0.25, rel=1e-3)


def test_member_and_panel_counts(output):
    assert len(build_frame_members(output)) == 13
    assert len(build_mirror_panels(output)) == 4


def test_build_structure(output):
    structure, info = build_structure(output)

    assert info['num_members'] == 13
    assert info['num_panels'] == 4
    assert len(structure.Solids()) == 17

    frame_only, info = build_structure(output, include_mirrors=False)
    assert info['num_panels'] == 0
    assert len(frame_only.Solids()) == 13


def test_export_structure(output, tmp_path):
    structure, _ = build_structure(output, include_mirrors=False)
    step_path = tmp_path / "bm11.step"
    stl_path = tmp_path / "bm11.stl"

    export_structure(structure, step_path=str(step_path), stl_path=str(stl_path))

    assert step_path.stat().st_size > 0
    assert stl_path.stat().st_size > 0
