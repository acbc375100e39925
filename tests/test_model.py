import threading

import pytest

from bm11 import BM11Model, GeometryInvalidError, evaluate
from bm11.parameters import InputParameters, default_input_parameters


def test_evaluate_defaults():
    output = evaluate()

    assert output.edge_length.BA == 14.0
    assert output.total.cost > 0
    assert output == evaluate(default_input_parameters())


def test_evaluate_is_idempotent():
    params = InputParameters(square_side_length=13.0, base_cut_back_length=1.0)

    first = evaluate(params)
    second = evaluate(params)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_evaluate_invalid_input_raises():
    params = InputParameters(square_side_length=6.0, base_cut_back_length=6.0)

    with pytest.raises(GeometryInvalidError):
        evaluate(params)


def test_to_dict_groups():
    data = evaluate().to_dict()

    assert set(data) == {
        'edge_length', 'vertex_angle', 'vertex_coord', 'overall_structure',
        'dihedral_angle', 'frame', 'mirror', 'wind', 'total',
    }
    assert data['edge_length']['OC'] == data['edge_length']['OA']
    assert data['vertex_angle']['OCA'] == data['vertex_angle']['OAC']
    assert len(data['vertex_coord']) == 7
    assert data['frame']['metal_volume_ft3'] > 0


def test_model_is_lazy_and_cached():
    model = BM11Model()
    assert model.dirty

    output = model.output
    assert not model.dirty
    assert model.output is output


def test_model_recomputes_after_input_change():
    model = BM11Model()
    before = model.output

    model.input_parameters = model.input_parameters.replace(square_side_length=12.0)
    assert model.dirty

    after = model.output
    assert after is not before
    assert after.total.cost < before.total.cost
    assert after == evaluate(InputParameters(square_side_length=12.0))


def test_model_invalid_input_raises_until_fixed():
    model = BM11Model(InputParameters(square_side_length=5.0, base_cut_back_length=5.0))

    with pytest.raises(GeometryInvalidError):
        model.output
    with pytest.raises(GeometryInvalidError):
        model.output

    model.input_parameters = default_input_parameters()
    assert model.output == evaluate()


def test_model_rejects_wrong_parameter_type():
    model = BM11Model()
    with pytest.raises(TypeError):
        model.input_parameters = {'square_side_length': 12.0}


def test_model_concurrent_readers_see_whole_outputs():
    model = BM11Model()
    expected = {evaluate(), evaluate(InputParameters(square_side_length=10.0))}
    seen = []

    def read():
        for _ in range(50):
            seen.append(model.output)

    readers = [threading.Thread(target=read) for _ in range(4)]
    for t in readers:
        t.start()
    for side in (10.0, 16.0, 10.0):
        model.input_parameters = model.input_parameters.replace(square_side_length=side)
    for t in readers:
        t.join()

    assert all(output in expected for output in seen)
