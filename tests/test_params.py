import dataclasses
import json
import logging

import pytest

from muscles import ActuatorParams, load_params, Muscle, MusclePair, Gaussian, DomainError, params


def test_params_snapshot_fields():
    m = Muscle(init_state=0.1, state_lims=(0.0, 2.0), action_lims=(-0.5, 0.5), mnoise_sd=0.3, dt=0.01)
    p = params(m)
    assert p.as_dict() == {
        'mnoise_sd': 0.3,
        'state_lims': (0.0, 2.0),
        'action_lims': (-0.5, 0.5),
        'dt': 0.01,
    }


def test_params_are_immutable():
    p = Muscle(0.5).params()
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.dt = 2.0


def test_params_unchanged_by_updates():
    m = Muscle(0.5)
    before = m.params()
    m.step(Gaussian(0.9, 0.5))
    assert m.params() == before


def test_list_limits_normalised():
    p = ActuatorParams(state_lims=[0, 1], action_lims=[-1, 1])
    assert p.state_lims == (0.0, 1.0)
    assert p.action_lims == (-1.0, 1.0)


@pytest.mark.parametrize("kwargs", [
    {'state_lims': (1.0, 0.0)},
    {'state_lims': (0.0, 0.5, 1.0)},
    {'mnoise_sd': -1.0},
    {'dt': 0.0},
])
def test_invalid_params(kwargs):
    with pytest.raises(ValueError):
        ActuatorParams(**kwargs)


def test_load_params(tmp_path):
    path = tmp_path / "muscle.json"
    path.write_text(json.dumps({"mnoise_sd": 0.1, "state_lims": [0.0, 0.8], "dt": 0.5}))
    p = load_params(path)
    assert p == ActuatorParams(mnoise_sd=0.1, state_lims=(0.0, 0.8), dt=0.5)

    m = Muscle.from_params(p, init_state=0.7)
    m.update(Gaussian(1.0, 0.1))
    assert m.state == 0.8

    pair = MusclePair.from_params(p)
    assert pair.params() is p
    assert pair.sensation[0].variance() == pytest.approx(0.01)


def test_load_params_rejects_unknown_keys(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"gain": 2.0}))
    with pytest.raises(ValueError):
        load_params(path)


def test_rejected_prediction_is_logged(caplog):
    m = Muscle(0.5)
    with caplog.at_level(logging.WARNING, logger="muscles.actuator"):
        with pytest.raises(DomainError):
            m.update(Gaussian(0.5, 0.0))
    assert any("variance" in r.getMessage() for r in caplog.records)
