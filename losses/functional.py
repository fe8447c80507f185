# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""losses.functional — stateless per-sample loss formulas.

Every function takes ``(y_true, y_pred, ...)`` as array-likes and returns
the unreduced loss: one value per sample, i.e. the feature axis has been
collapsed but the batch axis has not.  Reduction over the batch is the
job of :class:`kerasport.losses.Loss`.
"""
from __future__ import annotations

import math
import numpy as np

from .. import config

_LOG_2 = math.log(2.0)
_L2_EPSILON = 1e-12


# ──────────────────────── Input preparation ───────────────────────────

def squeeze_or_expand_to_same_rank(x1: np.ndarray, x2: np.ndarray,
                                   expand_rank_1: bool = True):
    """Align ranks that differ by a trailing singleton dimension."""
    r1, r2 = x1.ndim, x2.ndim
    if r1 == r2:
        return x1, x2
    if r1 == r2 + 1 and x1.shape[-1] == 1:
        if r2 == 1 and expand_rank_1:
            x2 = np.expand_dims(x2, -1)
        else:
            x1 = np.squeeze(x1, -1)
    if r2 == r1 + 1 and x2.shape[-1] == 1:
        if r1 == 1 and expand_rank_1:
            x1 = np.expand_dims(x1, -1)
        else:
            x2 = np.squeeze(x2, -1)
    return x1, x2


def _as_float(x) -> np.ndarray:
    arr = np.asarray(x)
    if arr.dtype.kind != 'f':
        arr = arr.astype(config.floatx_dtype())
    return arr


def _prepare(y_true, y_pred):
    y_pred = _as_float(y_pred)
    y_true = np.asarray(y_true).astype(y_pred.dtype)
    return squeeze_or_expand_to_same_rank(y_true, y_pred)


def _check_same_shape(y_true: np.ndarray, y_pred: np.ndarray, what: str):
    if y_true.shape != y_pred.shape:
        raise ValueError(
            f"{what}: arguments `y_true` and `y_pred` must have the same "
            f"shape, got y_true.shape={y_true.shape}, "
            f"y_pred.shape={y_pred.shape}")


def check_label_smoothing(label_smoothing) -> float:
    ls = float(label_smoothing)
    if not 0.0 <= ls <= 1.0:
        raise ValueError(
            f"`label_smoothing` must be in [0, 1], got {label_smoothing}")
    return ls


def check_delta(delta) -> float:
    d = float(delta)
    if not d > 0.0:
        raise ValueError(f"`delta` must be positive, got {delta}")
    return d


# ──────────────────────── Numeric helpers ─────────────────────────────

def _logsumexp(x: np.ndarray, axis: int) -> np.ndarray:
    x_max = np.max(x, axis=axis, keepdims=True)
    x_max = np.where(np.isfinite(x_max), x_max, 0.0)
    return np.log(np.sum(np.exp(x - x_max), axis=axis, keepdims=True)) + x_max


def _log_softmax(x: np.ndarray, axis: int) -> np.ndarray:
    return x - _logsumexp(x, axis)


def _sigmoid(x: np.ndarray) -> np.ndarray:
    # Two-sided form keeps exp() from overflowing for large |x|.
    e = np.exp(-np.abs(x))
    return np.where(x >= 0, 1.0 / (1.0 + e), e / (1.0 + e)).astype(x.dtype)


def _l2_normalize(x: np.ndarray, axis: int) -> np.ndarray:
    square_sum = np.sum(np.square(x), axis=axis, keepdims=True)
    return x / np.sqrt(np.maximum(square_sum, _L2_EPSILON))


def _elementwise_log_cosh(x: np.ndarray) -> np.ndarray:
    # log(cosh(x)) == |x| + log1p(exp(-2|x|)) - log(2); never forms cosh(x).
    ax = np.abs(x)
    return np.maximum(ax + np.log1p(np.exp(-2.0 * ax)) - _LOG_2, 0.0)


def _maybe_convert_labels(y_true: np.ndarray) -> np.ndarray:
    """Map {0, 1} labels to {-1, 1}; leave other labelings alone."""
    is_binary = np.all((y_true == 0) | (y_true == 1))
    if is_binary:
        return 2.0 * y_true - 1.0
    return y_true


def _binary_crossentropy_elementwise(y_true, y_pred, from_logits):
    if from_logits:
        return (np.maximum(y_pred, 0) - y_pred * y_true
                + np.log1p(np.exp(-np.abs(y_pred))))
    eps = config.epsilon()
    p = np.clip(y_pred, eps, 1.0 - eps)
    return -(y_true * np.log(p) + (1.0 - y_true) * np.log(1.0 - p))


# ──────────────────────── Regression losses ───────────────────────────

def mean_squared_error(y_true, y_pred) -> np.ndarray:
    y_true, y_pred = _prepare(y_true, y_pred)
    return np.mean(np.square(y_pred - y_true), axis=-1)


def mean_absolute_error(y_true, y_pred) -> np.ndarray:
    y_true, y_pred = _prepare(y_true, y_pred)
    return np.mean(np.abs(y_pred - y_true), axis=-1)


def mean_absolute_percentage_error(y_true, y_pred) -> np.ndarray:
    y_true, y_pred = _prepare(y_true, y_pred)
    eps = config.epsilon()
    diff = np.abs((y_true - y_pred) / np.maximum(np.abs(y_true), eps))
    return 100.0 * np.mean(diff, axis=-1)


def mean_squared_logarithmic_error(y_true, y_pred) -> np.ndarray:
    y_true, y_pred = _prepare(y_true, y_pred)
    eps = config.epsilon()
    first_log = np.log1p(np.maximum(y_pred, eps))
    second_log = np.log1p(np.maximum(y_true, eps))
    return np.mean(np.square(first_log - second_log), axis=-1)


def huber(y_true, y_pred, delta: float = 1.0) -> np.ndarray:
    """Huber loss.

    For each error ``e = y_pred - y_true``::

        0.5 * e**2                           if |e| <= delta
        delta * |e| - 0.5 * delta**2         otherwise
    """
    delta = check_delta(delta)
    y_true, y_pred = _prepare(y_true, y_pred)
    abs_error = np.abs(y_pred - y_true)
    quadratic = 0.5 * np.square(abs_error)
    linear = delta * abs_error - 0.5 * delta * delta
    return np.mean(np.where(abs_error <= delta, quadratic, linear), axis=-1)


def log_cosh(y_true, y_pred) -> np.ndarray:
    """Logarithm of the hyperbolic cosine of the prediction error.

    Behaves like ``x**2 / 2`` for small errors and ``|x| - log(2)`` for
    large ones.  Evaluated in a form that stays finite for every finite
    input instead of materialising ``cosh``.
    """
    y_true, y_pred = _prepare(y_true, y_pred)
    return np.mean(_elementwise_log_cosh(y_pred - y_true), axis=-1)


def poisson(y_true, y_pred) -> np.ndarray:
    y_true, y_pred = _prepare(y_true, y_pred)
    eps = config.epsilon()
    return np.mean(y_pred - y_true * np.log(y_pred + eps), axis=-1)


def kl_divergence(y_true, y_pred) -> np.ndarray:
    y_true, y_pred = _prepare(y_true, y_pred)
    eps = config.epsilon()
    y_true = np.clip(y_true, eps, 1.0)
    y_pred = np.clip(y_pred, eps, 1.0)
    return np.sum(y_true * np.log(y_true / y_pred), axis=-1)


def cosine_similarity(y_true, y_pred, axis: int = -1) -> np.ndarray:
    """Negated cosine similarity; -1 means perfectly aligned."""
    y_true, y_pred = _prepare(y_true, y_pred)
    y_true = _l2_normalize(y_true, axis)
    y_pred = _l2_normalize(y_pred, axis)
    return -np.sum(y_true * y_pred, axis=axis)


# ──────────────────────── Hinge losses ────────────────────────────────

def hinge(y_true, y_pred) -> np.ndarray:
    y_true, y_pred = _prepare(y_true, y_pred)
    y_true = _maybe_convert_labels(y_true)
    return np.mean(np.maximum(1.0 - y_true * y_pred, 0.0), axis=-1)


def squared_hinge(y_true, y_pred) -> np.ndarray:
    y_true, y_pred = _prepare(y_true, y_pred)
    y_true = _maybe_convert_labels(y_true)
    return np.mean(np.square(np.maximum(1.0 - y_true * y_pred, 0.0)),
                   axis=-1)


def categorical_hinge(y_true, y_pred) -> np.ndarray:
    y_true, y_pred = _prepare(y_true, y_pred)
    pos = np.sum(y_true * y_pred, axis=-1)
    neg = np.max((1.0 - y_true) * y_pred, axis=-1)
    return np.maximum(neg - pos + 1.0, 0.0)


# ──────────────────────── Crossentropy losses ─────────────────────────

def binary_crossentropy(y_true, y_pred, from_logits: bool = False,
                        label_smoothing: float = 0.0,
                        axis: int = -1) -> np.ndarray:
    """Binary crossentropy averaged over ``axis``.

    With label smoothing ``ls`` targets are squeezed towards 0.5:
    ``y * (1 - ls) + 0.5 * ls``.
    """
    label_smoothing = check_label_smoothing(label_smoothing)
    y_true, y_pred = _prepare(y_true, y_pred)
    if label_smoothing:
        y_true = y_true * (1.0 - label_smoothing) + 0.5 * label_smoothing
    bce = _binary_crossentropy_elementwise(y_true, y_pred, from_logits)
    return np.mean(bce, axis=axis)


def binary_focal_crossentropy(y_true, y_pred,
                              apply_class_balancing: bool = False,
                              alpha: float = 0.25, gamma: float = 2.0,
                              from_logits: bool = False,
                              label_smoothing: float = 0.0,
                              axis: int = -1) -> np.ndarray:
    """Binary crossentropy down-weighted by ``(1 - p_t) ** gamma``."""
    label_smoothing = check_label_smoothing(label_smoothing)
    y_true, y_pred = _prepare(y_true, y_pred)
    if label_smoothing:
        y_true = y_true * (1.0 - label_smoothing) + 0.5 * label_smoothing
    if from_logits:
        y_pred = _sigmoid(y_pred)
    bce = _binary_crossentropy_elementwise(y_true, y_pred, False)
    p_t = y_true * y_pred + (1.0 - y_true) * (1.0 - y_pred)
    focal_bce = np.power(1.0 - p_t, gamma) * bce
    if apply_class_balancing:
        weight = y_true * alpha + (1.0 - y_true) * (1.0 - alpha)
        focal_bce = weight * focal_bce
    return np.mean(focal_bce, axis=axis)


def categorical_crossentropy(y_true, y_pred, from_logits: bool = False,
                             label_smoothing: float = 0.0,
                             axis: int = -1) -> np.ndarray:
    """Categorical crossentropy summed over the class ``axis``.

    Label smoothing spreads ``ls / num_classes`` onto every class and
    keeps the complement on the target.
    """
    label_smoothing = check_label_smoothing(label_smoothing)
    y_pred = _as_float(y_pred)
    y_true = np.asarray(y_true).astype(y_pred.dtype)
    _check_same_shape(y_true, y_pred, 'categorical_crossentropy')
    if y_pred.ndim < 1:
        raise ValueError(
            "categorical_crossentropy expects inputs with a class axis, "
            "got a scalar")
    if label_smoothing:
        num_classes = y_true.shape[axis]
        y_true = (y_true * (1.0 - label_smoothing)
                  + label_smoothing / num_classes)
    if from_logits:
        log_prob = _log_softmax(y_pred, axis)
    else:
        eps = config.epsilon()
        p = y_pred / np.sum(y_pred, axis=axis, keepdims=True)
        p = np.clip(p, eps, 1.0 - eps)
        log_prob = np.log(p)
    return -np.sum(y_true * log_prob, axis=axis)


def sparse_categorical_crossentropy(y_true, y_pred, from_logits: bool = False,
                                    ignore_class: int | None = None,
                                    axis: int = -1) -> np.ndarray:
    """Crossentropy against integer class labels.

    Entries equal to ``ignore_class`` produce a loss of 0.
    """
    y_pred = _as_float(y_pred)
    labels = np.asarray(y_true)
    if labels.ndim == y_pred.ndim and labels.shape[-1] == 1:
        labels = np.squeeze(labels, -1)
    num_classes = y_pred.shape[axis]
    logits_last = np.moveaxis(y_pred, axis, -1)
    if labels.shape != logits_last.shape[:-1]:
        raise ValueError(
            "sparse_categorical_crossentropy: `y_true` must have the shape "
            f"of `y_pred` without the class axis; got "
            f"y_true.shape={np.shape(y_true)}, y_pred.shape={y_pred.shape}")

    valid = None
    if ignore_class is not None:
        valid = labels != ignore_class
        labels = np.where(valid, labels, 0)
    if labels.dtype.kind == 'f':
        if not np.all(np.mod(labels, 1) == 0):
            raise ValueError("sparse_categorical_crossentropy labels must "
                             "be integers")
    labels = labels.astype(np.intp)
    if labels.size and (labels.min() < 0 or labels.max() >= num_classes):
        raise ValueError(
            f"sparse_categorical_crossentropy labels must be in "
            f"[0, {num_classes}), got range "
            f"[{labels.min()}, {labels.max()}]")

    if from_logits:
        log_prob = _log_softmax(logits_last, -1)
    else:
        eps = config.epsilon()
        p = logits_last / np.sum(logits_last, axis=-1, keepdims=True)
        log_prob = np.log(np.clip(p, eps, 1.0 - eps))
    picked = np.take_along_axis(log_prob, labels[..., np.newaxis], axis=-1)
    result = -np.squeeze(picked, -1)
    if valid is not None:
        result = np.where(valid, result, 0.0).astype(y_pred.dtype)
    return result


# ──────────────────────── Registry ────────────────────────────────────

ALL_FUNCTIONS = {
    'mean_squared_error': mean_squared_error,
    'mean_absolute_error': mean_absolute_error,
    'mean_absolute_percentage_error': mean_absolute_percentage_error,
    'mean_squared_logarithmic_error': mean_squared_logarithmic_error,
    'huber': huber,
    'log_cosh': log_cosh,
    'poisson': poisson,
    'kl_divergence': kl_divergence,
    'cosine_similarity': cosine_similarity,
    'hinge': hinge,
    'squared_hinge': squared_hinge,
    'categorical_hinge': categorical_hinge,
    'binary_crossentropy': binary_crossentropy,
    'binary_focal_crossentropy': binary_focal_crossentropy,
    'categorical_crossentropy': categorical_crossentropy,
    'sparse_categorical_crossentropy': sparse_categorical_crossentropy,
}

ALIASES = {
    'mse': 'mean_squared_error',
    'mae': 'mean_absolute_error',
    'mape': 'mean_absolute_percentage_error',
    'msle': 'mean_squared_logarithmic_error',
    'kld': 'kl_divergence',
    'kullback_leibler_divergence': 'kl_divergence',
    'logcosh': 'log_cosh',
    'huber_loss': 'huber',
}
