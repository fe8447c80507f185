"""Tests for kerasport.losses — formulas, reductions and registry."""
import math

import numpy as np
import pytest

import kerasport as kp
from kerasport import losses
from kerasport.losses import functional as F


def _column(values):
    return np.asarray(values, dtype=np.float64)[:, np.newaxis]


# ──────────────────────── Huber ───────────────────────────────────────

def test_huber_quadratic_inside_delta():
    delta = 1.5
    errors = np.array([-1.5, -1.0, -0.2, 0.0, 0.3, 1.49, 1.5])
    out = F.huber(np.zeros((len(errors), 1)), _column(errors), delta=delta)
    np.testing.assert_allclose(out, 0.5 * errors ** 2, rtol=1e-12)


def test_huber_linear_outside_delta():
    delta = 1.5
    errors = np.array([-10.0, -1.51, 1.51, 4.0, 100.0])
    out = F.huber(np.zeros((len(errors), 1)), _column(errors), delta=delta)
    expected = delta * np.abs(errors) - 0.5 * delta ** 2
    np.testing.assert_allclose(out, expected, rtol=1e-12)


def test_huber_branches_agree_at_delta():
    delta = 2.0
    eps = 1e-9
    errors = _column([delta - eps, delta, delta + eps])
    out = F.huber(np.zeros((3, 1)), errors, delta=delta)
    np.testing.assert_allclose(out, [0.5 * delta ** 2] * 3, atol=1e-7)


@pytest.mark.parametrize('delta', [0.0, -1.0])
def test_huber_rejects_non_positive_delta(delta):
    with pytest.raises(ValueError):
        losses.Huber(delta=delta)
    with pytest.raises(ValueError):
        F.huber([[0.0]], [[1.0]], delta=delta)


# ──────────────────────── Log-cosh ────────────────────────────────────

def test_log_cosh_symmetric_and_non_negative():
    errors = np.array([0.0, 1e-6, 0.01, 0.5, 3.0, 50.0, 800.0, 1e4])
    zeros = np.zeros((len(errors), 1))
    pos = F.log_cosh(zeros, _column(errors))
    neg = F.log_cosh(zeros, _column(-errors))
    np.testing.assert_array_equal(pos, neg)
    assert np.all(pos >= 0.0)
    assert np.all(np.isfinite(pos)), "log-cosh must not overflow to NaN/inf"


def test_log_cosh_asymptotes():
    small = F.log_cosh([[0.0]], [[0.01]])[0]
    assert small == pytest.approx(0.01 ** 2 / 2, rel=1e-3)
    large = F.log_cosh([[0.0]], [[50.0]])[0]
    assert large == pytest.approx(50.0 - math.log(2.0), rel=1e-12)
    mid = F.log_cosh([[0.0]], [[1.0]])[0]
    assert mid == pytest.approx(math.log(math.cosh(1.0)), rel=1e-12)


# ──────────────────────── Crossentropy ────────────────────────────────

def test_binary_crossentropy_label_smoothing_weights():
    """With ls=0.1 the target weight is 0.95 and the non-target weight 0.05."""
    y_true = [[1.0, 0.0]]
    y_pred = [[0.7, 0.2]]
    out = F.binary_crossentropy(y_true, y_pred, label_smoothing=0.1)
    expected = np.mean([
        -(0.95 * math.log(0.7) + 0.05 * math.log(0.3)),
        -(0.05 * math.log(0.2) + 0.95 * math.log(0.8)),
    ])
    np.testing.assert_allclose(out, [expected], rtol=1e-10)
    explicit = F.binary_crossentropy([[0.95, 0.05]], y_pred)
    np.testing.assert_allclose(out, explicit, rtol=1e-10)


def test_binary_crossentropy_from_logits_matches_probabilities():
    logits = np.array([[-2.0, 0.5, 3.0]])
    probs = 1.0 / (1.0 + np.exp(-logits))
    y_true = [[0.0, 1.0, 1.0]]
    np.testing.assert_allclose(
        F.binary_crossentropy(y_true, logits, from_logits=True),
        F.binary_crossentropy(y_true, probs), rtol=1e-6)


def test_binary_focal_with_zero_gamma_is_binary_crossentropy():
    y_true = [[0.0, 1.0], [1.0, 1.0]]
    y_pred = [[0.2, 0.6], [0.9, 0.4]]
    np.testing.assert_allclose(
        F.binary_focal_crossentropy(y_true, y_pred, gamma=0.0),
        F.binary_crossentropy(y_true, y_pred), rtol=1e-12)


def test_categorical_crossentropy_label_smoothing():
    y_pred = [[0.2, 0.5, 0.3]]
    smoothed = F.categorical_crossentropy([[0.0, 1.0, 0.0]], y_pred,
                                          label_smoothing=0.3)
    explicit = F.categorical_crossentropy([[0.1, 0.8, 0.1]], y_pred)
    np.testing.assert_allclose(smoothed, explicit, rtol=1e-10)


def test_categorical_crossentropy_rejects_shape_mismatch():
    with pytest.raises(ValueError):
        F.categorical_crossentropy(np.zeros((2, 3)), np.ones((2, 4)))


def test_sparse_matches_categorical():
    logits = np.array([[2.0, 1.0, 0.1], [0.5, 2.5, 0.3]])
    labels = np.array([0, 1])
    one_hot = np.eye(3)[labels]
    np.testing.assert_allclose(
        F.sparse_categorical_crossentropy(labels, logits, from_logits=True),
        F.categorical_crossentropy(one_hot, logits, from_logits=True),
        rtol=1e-10)
    # trailing singleton label axis is accepted
    np.testing.assert_allclose(
        F.sparse_categorical_crossentropy(labels[:, None], logits,
                                          from_logits=True),
        F.categorical_crossentropy(one_hot, logits, from_logits=True),
        rtol=1e-10)


def test_sparse_ignore_class_excluded_from_average():
    logits = np.array([[2.0, 1.0, 0.1], [0.5, 2.5, 0.3]])
    loss = losses.SparseCategoricalCrossentropy(from_logits=True,
                                                ignore_class=-1)
    value = loss([0, -1], logits)
    first = F.sparse_categorical_crossentropy([0], logits[:1],
                                              from_logits=True)[0]
    assert value == pytest.approx(first, rel=1e-10)


def test_sparse_rejects_out_of_range_labels():
    with pytest.raises(ValueError):
        F.sparse_categorical_crossentropy([3], [[0.2, 0.3, 0.5]])


def test_label_smoothing_must_be_in_unit_interval():
    for cls in (losses.BinaryCrossentropy, losses.CategoricalCrossentropy):
        with pytest.raises(ValueError):
            cls(label_smoothing=1.5)
        with pytest.raises(ValueError):
            cls(label_smoothing=-0.1)


# ──────────────────────── Other formulas ──────────────────────────────

def test_hinge_family():
    assert F.hinge([[0.0, 1.0]], [[0.3, 0.8]])[0] == pytest.approx(0.75)
    assert F.squared_hinge([[0.0, 1.0]], [[0.3, 0.8]])[0] == \
        pytest.approx(0.865)
    assert F.categorical_hinge([[0.0, 1.0, 0.0]],
                               [[0.2, 0.6, 0.5]])[0] == pytest.approx(0.9)


def test_cosine_similarity():
    assert F.cosine_similarity([[1.0, 2.0]], [[2.0, 4.0]])[0] == \
        pytest.approx(-1.0)
    assert F.cosine_similarity([[1.0, 0.0]], [[0.0, 3.0]])[0] == \
        pytest.approx(0.0)


def test_regression_losses():
    assert F.mean_absolute_percentage_error([[2.0, 4.0]],
                                            [[1.0, 5.0]])[0] == \
        pytest.approx(37.5)
    assert F.mean_absolute_error([[1.0, 2.0]], [[2.0, 4.0]])[0] == \
        pytest.approx(1.5)
    assert F.mean_squared_error([[1.0, 2.0]], [[2.0, 4.0]])[0] == \
        pytest.approx(2.5)
    assert F.mean_squared_logarithmic_error([[0.0]],
                                            [[math.e - 1.0]])[0] == \
        pytest.approx(1.0, rel=1e-5)
    assert F.kl_divergence([[0.5, 0.5]], [[0.5, 0.5]])[0] == \
        pytest.approx(0.0, abs=1e-12)
    assert F.poisson([[1.0]], [[1.0]])[0] == pytest.approx(1.0, rel=1e-6)


def test_broadcast_mismatch_propagates():
    with pytest.raises(ValueError):
        F.mean_squared_error(np.zeros((2, 3)), np.zeros((2, 4)))


# ──────────────────────── Reduction ───────────────────────────────────

def test_reductions():
    y_true = [[0.0, 0.0], [0.0, 0.0]]
    y_pred = [[1.0, 1.0], [2.0, 2.0]]
    assert losses.MeanSquaredError()(y_true, y_pred) == pytest.approx(2.5)
    assert losses.MeanSquaredError(reduction='sum_over_batch_size')(
        y_true, y_pred) == pytest.approx(2.5)
    assert losses.MeanSquaredError(reduction='sum')(y_true, y_pred) == \
        pytest.approx(5.0)
    per_sample = losses.MeanSquaredError(reduction='none')(y_true, y_pred)
    np.testing.assert_allclose(per_sample, [1.0, 4.0])


def test_sample_weight():
    y_true = [[0.0, 0.0], [0.0, 0.0]]
    y_pred = [[1.0, 1.0], [2.0, 2.0]]
    value = losses.MeanSquaredError()(y_true, y_pred, sample_weight=[1.0, 0.0])
    assert value == pytest.approx(0.5)


def test_empty_batch_reduces_to_zero():
    value = losses.MeanSquaredError()(np.zeros((0, 2)), np.zeros((0, 2)))
    assert value == 0.0


def test_invalid_reduction():
    with pytest.raises(ValueError):
        losses.MeanSquaredError(reduction='mean')
    with pytest.raises(ValueError):
        losses.Reduction.validate('batch')


def test_integer_inputs_use_floatx():
    value = losses.MeanSquaredError()([[1, 2]], [[1, 3]])
    assert value.dtype == np.dtype(kp.floatx())


# ──────────────────────── Registry ────────────────────────────────────

def test_get_resolves_names_and_aliases():
    assert losses.get('mse') is F.mean_squared_error
    assert losses.get('logcosh') is F.log_cosh
    assert isinstance(losses.get('Huber'), losses.Huber)
    with pytest.raises(ValueError):
        losses.get('no_such_loss')
    with pytest.raises(TypeError):
        losses.get(42)


def test_serialize_round_trip():
    loss = losses.Huber(delta=2.0, reduction='sum', name='robust')
    restored = losses.deserialize(losses.serialize(loss))
    assert isinstance(restored, losses.Huber)
    assert restored.get_config() == loss.get_config()
    assert restored.get_config()['delta'] == 2.0
    assert losses.get(losses.serialize(loss)).reduction is \
        losses.Reduction.SUM
