# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Forwarding functions — one per loss and per preprocessing layer.

Each ``loss_*`` function either computes a loss right away or hands
back a configured loss object::

    loss_huber(y_true, y_pred, delta=2)     # reduced loss value
    huber = loss_huber(delta=2)             # reusable Loss
    huber(y_true, y_pred)

Each ``layer_*`` function builds a layer, and applies it when input
data is passed as ``object``.

Axis arguments use the 1-based convention of the calling side: ``1``
is the first axis, ``-1`` (the default) the last one.
"""
from __future__ import annotations

import numpy as np

from . import losses as _losses
from . import layers as _layers


# ──────────────────────── Argument marshalling ────────────────────────

def _as_axis(axis):
    """Translate a 1-based (or negative) axis into a 0-based one."""
    if axis is None:
        return None
    if isinstance(axis, (list, tuple)):
        return tuple(_as_axis(a) for a in axis)
    if isinstance(axis, (bool, np.bool_)):
        raise ValueError(f"`axis` must be an integer, got {axis!r}")
    as_int = int(axis)
    if as_int != axis:
        raise ValueError(f"`axis` must be an integer, got {axis!r}")
    if as_int == 0:
        raise ValueError("`axis` is 1-based; use 1 for the first axis or "
                         "-1 for the last")
    return as_int - 1 if as_int > 0 else as_int


def _call_or_configure(loss: _losses.Loss, y_true, y_pred, sample_weight):
    if y_true is None and y_pred is None:
        if sample_weight is not None:
            raise ValueError("`sample_weight` needs `y_true` and `y_pred`")
        return loss
    if y_true is None or y_pred is None:
        raise ValueError(
            f"{loss.name}: supply both `y_true` and `y_pred` to compute the "
            f"loss, or neither to get a configured loss object")
    return loss(y_true, y_pred, sample_weight=sample_weight)


def _compose(layer: _layers.Layer, object):
    if object is None:
        return layer
    return layer(object)


# ──────────────────────── Probabilistic losses ────────────────────────

def loss_binary_crossentropy(y_true=None, y_pred=None, *,
                             from_logits: bool = False,
                             label_smoothing: float = 0.0, axis: int = -1,
                             reduction: str = 'auto',
                             name: str = 'binary_crossentropy',
                             sample_weight=None):
    loss = _losses.BinaryCrossentropy(
        from_logits=from_logits, label_smoothing=label_smoothing,
        axis=_as_axis(axis), reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_binary_focal_crossentropy(y_true=None, y_pred=None, *,
                                   apply_class_balancing: bool = False,
                                   alpha: float = 0.25, gamma: float = 2.0,
                                   from_logits: bool = False,
                                   label_smoothing: float = 0.0,
                                   axis: int = -1, reduction: str = 'auto',
                                   name: str = 'binary_focal_crossentropy',
                                   sample_weight=None):
    loss = _losses.BinaryFocalCrossentropy(
        apply_class_balancing=apply_class_balancing, alpha=alpha,
        gamma=gamma, from_logits=from_logits,
        label_smoothing=label_smoothing, axis=_as_axis(axis),
        reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_categorical_crossentropy(y_true=None, y_pred=None, *,
                                  from_logits: bool = False,
                                  label_smoothing: float = 0.0,
                                  axis: int = -1, reduction: str = 'auto',
                                  name: str = 'categorical_crossentropy',
                                  sample_weight=None):
    loss = _losses.CategoricalCrossentropy(
        from_logits=from_logits, label_smoothing=label_smoothing,
        axis=_as_axis(axis), reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_sparse_categorical_crossentropy(
        y_true=None, y_pred=None, *, from_logits: bool = False,
        ignore_class: int | None = None, axis: int = -1,
        reduction: str = 'auto',
        name: str = 'sparse_categorical_crossentropy', sample_weight=None):
    if ignore_class is not None:
        if isinstance(ignore_class, (bool, np.bool_)):
            raise ValueError(f"`ignore_class` must be an integer, got "
                             f"{ignore_class!r}")
        as_int = int(ignore_class)
        if as_int != ignore_class:
            raise ValueError(f"`ignore_class` must be an integer, got "
                             f"{ignore_class!r}")
        ignore_class = as_int
    loss = _losses.SparseCategoricalCrossentropy(
        from_logits=from_logits, ignore_class=ignore_class,
        axis=_as_axis(axis), reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_poisson(y_true=None, y_pred=None, *, reduction: str = 'auto',
                 name: str = 'poisson', sample_weight=None):
    loss = _losses.Poisson(reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_kl_divergence(y_true=None, y_pred=None, *, reduction: str = 'auto',
                       name: str = 'kl_divergence', sample_weight=None):
    loss = _losses.KLDivergence(reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


# ──────────────────────── Regression losses ───────────────────────────

def loss_mean_squared_error(y_true=None, y_pred=None, *,
                            reduction: str = 'auto',
                            name: str = 'mean_squared_error',
                            sample_weight=None):
    loss = _losses.MeanSquaredError(reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_mean_absolute_error(y_true=None, y_pred=None, *,
                             reduction: str = 'auto',
                             name: str = 'mean_absolute_error',
                             sample_weight=None):
    loss = _losses.MeanAbsoluteError(reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_mean_absolute_percentage_error(
        y_true=None, y_pred=None, *, reduction: str = 'auto',
        name: str = 'mean_absolute_percentage_error', sample_weight=None):
    loss = _losses.MeanAbsolutePercentageError(reduction=reduction,
                                               name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_mean_squared_logarithmic_error(
        y_true=None, y_pred=None, *, reduction: str = 'auto',
        name: str = 'mean_squared_logarithmic_error', sample_weight=None):
    loss = _losses.MeanSquaredLogarithmicError(reduction=reduction,
                                               name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_cosine_similarity(y_true=None, y_pred=None, *, axis: int = -1,
                           reduction: str = 'auto',
                           name: str = 'cosine_similarity',
                           sample_weight=None):
    loss = _losses.CosineSimilarity(axis=_as_axis(axis),
                                    reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_huber(y_true=None, y_pred=None, *, delta: float = 1.0,
               reduction: str = 'auto', name: str = 'huber_loss',
               sample_weight=None):
    loss = _losses.Huber(delta=delta, reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_log_cosh(y_true=None, y_pred=None, *, reduction: str = 'auto',
                  name: str = 'log_cosh', sample_weight=None):
    loss = _losses.LogCosh(reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


# ──────────────────────── Hinge losses ────────────────────────────────

def loss_hinge(y_true=None, y_pred=None, *, reduction: str = 'auto',
               name: str = 'hinge', sample_weight=None):
    loss = _losses.Hinge(reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_squared_hinge(y_true=None, y_pred=None, *, reduction: str = 'auto',
                       name: str = 'squared_hinge', sample_weight=None):
    loss = _losses.SquaredHinge(reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


def loss_categorical_hinge(y_true=None, y_pred=None, *,
                           reduction: str = 'auto',
                           name: str = 'categorical_hinge',
                           sample_weight=None):
    loss = _losses.CategoricalHinge(reduction=reduction, name=name)
    return _call_or_configure(loss, y_true, y_pred, sample_weight)


# ──────────────────────── Preprocessing layers ────────────────────────

def layer_text_vectorization(object=None, *, max_tokens=None,
                             standardize='lower_and_strip_punctuation',
                             split='whitespace', ngrams=None,
                             output_mode='int', output_sequence_length=None,
                             pad_to_max_tokens=False, vocabulary=None,
                             idf_weights=None, ragged=False,
                             encoding='utf-8', name=None, dtype=None):
    layer = _layers.TextVectorization(
        max_tokens=max_tokens, standardize=standardize, split=split,
        ngrams=ngrams, output_mode=output_mode,
        output_sequence_length=output_sequence_length,
        pad_to_max_tokens=pad_to_max_tokens, vocabulary=vocabulary,
        idf_weights=idf_weights, ragged=ragged, encoding=encoding,
        name=name, dtype=dtype)
    return _compose(layer, object)


def layer_string_lookup(object=None, *, max_tokens=None, num_oov_indices=1,
                        mask_token='', oov_token='[UNK]', vocabulary=None,
                        idf_weights=None, encoding='utf-8', invert=False,
                        output_mode='int', pad_to_max_tokens=False,
                        name=None, dtype=None):
    layer = _layers.StringLookup(
        max_tokens=max_tokens, num_oov_indices=num_oov_indices,
        mask_token=mask_token, oov_token=oov_token, vocabulary=vocabulary,
        idf_weights=idf_weights, encoding=encoding, invert=invert,
        output_mode=output_mode, pad_to_max_tokens=pad_to_max_tokens,
        name=name, dtype=dtype)
    return _compose(layer, object)


def layer_integer_lookup(object=None, *, max_tokens=None, num_oov_indices=1,
                         mask_token=0, oov_token=-1, vocabulary=None,
                         vocabulary_dtype='int64', idf_weights=None,
                         invert=False, output_mode='int',
                         pad_to_max_tokens=False, name=None, dtype=None):
    layer = _layers.IntegerLookup(
        max_tokens=max_tokens, num_oov_indices=num_oov_indices,
        mask_token=mask_token, oov_token=oov_token, vocabulary=vocabulary,
        vocabulary_dtype=vocabulary_dtype, idf_weights=idf_weights,
        invert=invert, output_mode=output_mode,
        pad_to_max_tokens=pad_to_max_tokens, name=name, dtype=dtype)
    return _compose(layer, object)


def layer_normalization(object=None, *, axis=-1, mean=None, variance=None,
                        invert=False, name=None, dtype=None):
    layer = _layers.Normalization(axis=_as_axis(axis), mean=mean,
                                  variance=variance, invert=invert,
                                  name=name, dtype=dtype)
    return _compose(layer, object)


def layer_discretization(object=None, *, bin_boundaries=None, num_bins=None,
                         epsilon=0.01, output_mode='int', name=None,
                         dtype=None):
    layer = _layers.Discretization(
        bin_boundaries=bin_boundaries, num_bins=num_bins, epsilon=epsilon,
        output_mode=output_mode, name=name, dtype=dtype)
    return _compose(layer, object)


def layer_hashing(object=None, *, num_bins, mask_value=None, salt=None,
                  output_mode='int', name=None, dtype=None):
    layer = _layers.Hashing(num_bins=num_bins, mask_value=mask_value,
                            salt=salt, output_mode=output_mode, name=name,
                            dtype=dtype)
    return _compose(layer, object)


def layer_category_encoding(object=None, *, num_tokens,
                            output_mode='multi_hot', name=None, dtype=None):
    layer = _layers.CategoryEncoding(num_tokens=num_tokens,
                                     output_mode=output_mode, name=name,
                                     dtype=dtype)
    return _compose(layer, object)


def layer_hashed_crossing(object=None, *, num_bins, output_mode='int',
                          name=None, dtype=None):
    layer = _layers.HashedCrossing(num_bins=num_bins,
                                   output_mode=output_mode, name=name,
                                   dtype=dtype)
    return _compose(layer, object)


# ──────────────────────── Layer state helpers ─────────────────────────

def adapt(object, data, batch_size=None, steps=None):
    """Fit a preprocessing layer's state to ``data`` and return the layer."""
    if not isinstance(object, _layers.PreprocessingLayer):
        raise TypeError(f"adapt() needs a preprocessing layer, got "
                        f"{type(object).__name__}")
    return object.adapt(data, batch_size=batch_size, steps=steps)


def get_vocabulary(object, include_special_tokens=True):
    if not hasattr(object, 'get_vocabulary'):
        raise TypeError(f"{type(object).__name__} has no vocabulary")
    return object.get_vocabulary(include_special_tokens=include_special_tokens)


def set_vocabulary(object, vocabulary, idf_weights=None):
    if not hasattr(object, 'set_vocabulary'):
        raise TypeError(f"{type(object).__name__} has no vocabulary")
    object.set_vocabulary(vocabulary, idf_weights=idf_weights)
    return object
