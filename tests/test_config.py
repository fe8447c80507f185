"""Tests for kerasport.config and kerasport.dtype."""
import numpy as np
import pytest

import kerasport as kp
from kerasport import config


@pytest.fixture(autouse=True)
def _restore_config():
    yield
    config.set_floatx('float32')
    config.set_epsilon(1e-7)


def test_defaults():
    assert kp.floatx() == 'float32'
    assert kp.epsilon() == pytest.approx(1e-7)


def test_set_floatx_changes_loss_dtype():
    config.set_floatx('float64')
    value = kp.losses.MeanSquaredError()([[1, 2]], [[1, 3]])
    assert value.dtype == np.float64
    with pytest.raises(ValueError):
        config.set_floatx('int8')


def test_set_epsilon_validates():
    config.set_epsilon(1e-3)
    assert config.epsilon() == 1e-3
    with pytest.raises(ValueError):
        config.set_epsilon(0)


def test_reload_from_env(monkeypatch):
    monkeypatch.setenv('KERASPORT_FLOATX', 'float16')
    monkeypatch.setenv('KERASPORT_EPSILON', '1e-4')
    config.reload_from_env()
    assert config.floatx() == 'float16'
    assert config.epsilon() == pytest.approx(1e-4)
    monkeypatch.delenv('KERASPORT_FLOATX')
    monkeypatch.delenv('KERASPORT_EPSILON')
    config.reload_from_env()
    assert config.floatx() == 'float32'


def test_dtype_resolution():
    assert kp.dtype.resolve('float64').to_numpy() == np.float64
    assert kp.dtype.resolve(np.int32) is kp.dtype.resolve('int32')
    with pytest.raises((TypeError, ValueError)):
        kp.dtype.resolve('complex128')
