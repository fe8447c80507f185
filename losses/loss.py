# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Configured loss objects and batch reduction.

A :class:`Loss` binds a loss formula to its parameters and a reduction
policy.  Calling it with ``(y_true, y_pred)`` computes the per-sample
values and reduces them to the requested shape.
"""
from __future__ import annotations

import enum
import re
from typing import Callable

import numpy as np

from . import functional as F


class Reduction(str, enum.Enum):
    """How per-sample losses are collapsed."""
    AUTO = 'auto'
    NONE = 'none'
    SUM = 'sum'
    SUM_OVER_BATCH_SIZE = 'sum_over_batch_size'

    @classmethod
    def validate(cls, value) -> 'Reduction':
        try:
            return cls(value)
        except ValueError:
            valid = ', '.join(repr(r.value) for r in cls)
            raise ValueError(
                f"Invalid reduction {value!r}; expected one of {valid}"
            ) from None


def _to_snake_case(name: str) -> str:
    name = re.sub(r'(.)([A-Z][a-z]+)', r'\1_\2', name)
    return re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name).lower()


def reduce_weighted_values(values, sample_weight=None, mask=None,
                           reduction='auto'):
    """Weight, mask and reduce a per-sample loss array."""
    reduction = Reduction.validate(reduction)
    values = np.asarray(values)
    if values.dtype.kind != 'f':
        values = values.astype(np.float32)

    if sample_weight is not None:
        sw = np.asarray(sample_weight, dtype=values.dtype)
        sw, values = F.squeeze_or_expand_to_same_rank(sw, values, False)
        while sw.ndim < values.ndim:
            sw = sw[..., np.newaxis]
        values = values * sw

    if mask is not None:
        mask = np.asarray(mask, dtype=values.dtype)
        values = values * mask

    if reduction is Reduction.NONE:
        return values

    total = np.sum(values, dtype=values.dtype)
    if reduction is Reduction.SUM:
        return values.dtype.type(total)

    # AUTO and SUM_OVER_BATCH_SIZE
    count = float(np.sum(mask)) if mask is not None else float(values.size)
    if count == 0.0:
        return values.dtype.type(0.0)
    return values.dtype.type(total / count)


# ──────────────────────── Base classes ────────────────────────────────

class Loss:
    """Base class for configured losses."""

    def __init__(self, reduction='auto', name: str | None = None):
        self.reduction = Reduction.validate(reduction)
        self.name = name or _to_snake_case(type(self).__name__)

    def __call__(self, y_true, y_pred, sample_weight=None):
        values = self.call(y_true, y_pred)
        mask = self.compute_mask(y_true, y_pred)
        return reduce_weighted_values(values, sample_weight, mask,
                                      self.reduction)

    def call(self, y_true, y_pred):
        raise NotImplementedError

    def compute_mask(self, y_true, y_pred):
        return None

    def get_config(self) -> dict:
        return {'name': self.name, 'reduction': self.reduction.value}

    @classmethod
    def from_config(cls, config: dict) -> 'Loss':
        return cls(**config)

    def extra_repr(self) -> str:
        return ''

    def __repr__(self) -> str:
        extra = self.extra_repr()
        extra = f", {extra}" if extra else ''
        return (f"{type(self).__name__}(name={self.name!r}, "
                f"reduction={self.reduction.value!r}{extra})")


class LossFunctionWrapper(Loss):
    """Adapts a plain ``fn(y_true, y_pred, **kwargs)`` into a :class:`Loss`."""

    def __init__(self, fn: Callable, reduction='auto',
                 name: str | None = None, **kwargs):
        super().__init__(reduction=reduction,
                         name=name or getattr(fn, '__name__', None))
        self.fn = fn
        self._fn_kwargs = kwargs

    def call(self, y_true, y_pred):
        return self.fn(y_true, y_pred, **self._fn_kwargs)

    def get_config(self) -> dict:
        config = super().get_config()
        config.update(self._fn_kwargs)
        return config

    @classmethod
    def from_config(cls, config: dict) -> 'Loss':
        if cls is LossFunctionWrapper:
            raise TypeError("LossFunctionWrapper needs a function; "
                            "rebuild it explicitly")
        return cls(**config)

    def extra_repr(self) -> str:
        return ', '.join(f"{k}={v!r}" for k, v in self._fn_kwargs.items())


# ──────────────────────── Regression ──────────────────────────────────

class MeanSquaredError(LossFunctionWrapper):
    def __init__(self, reduction='auto', name='mean_squared_error'):
        super().__init__(F.mean_squared_error, reduction=reduction, name=name)


class MeanAbsoluteError(LossFunctionWrapper):
    def __init__(self, reduction='auto', name='mean_absolute_error'):
        super().__init__(F.mean_absolute_error, reduction=reduction,
                         name=name)


class MeanAbsolutePercentageError(LossFunctionWrapper):
    def __init__(self, reduction='auto',
                 name='mean_absolute_percentage_error'):
        super().__init__(F.mean_absolute_percentage_error,
                         reduction=reduction, name=name)


class MeanSquaredLogarithmicError(LossFunctionWrapper):
    def __init__(self, reduction='auto',
                 name='mean_squared_logarithmic_error'):
        super().__init__(F.mean_squared_logarithmic_error,
                         reduction=reduction, name=name)


class Huber(LossFunctionWrapper):
    """Quadratic for ``|error| <= delta``, linear beyond."""

    def __init__(self, delta: float = 1.0, reduction='auto',
                 name='huber_loss'):
        delta = F.check_delta(delta)
        super().__init__(F.huber, reduction=reduction, name=name,
                         delta=delta)


class LogCosh(LossFunctionWrapper):
    def __init__(self, reduction='auto', name='log_cosh'):
        super().__init__(F.log_cosh, reduction=reduction, name=name)


class Poisson(LossFunctionWrapper):
    def __init__(self, reduction='auto', name='poisson'):
        super().__init__(F.poisson, reduction=reduction, name=name)


class KLDivergence(LossFunctionWrapper):
    def __init__(self, reduction='auto', name='kl_divergence'):
        super().__init__(F.kl_divergence, reduction=reduction, name=name)


class CosineSimilarity(LossFunctionWrapper):
    def __init__(self, axis: int = -1, reduction='auto',
                 name='cosine_similarity'):
        super().__init__(F.cosine_similarity, reduction=reduction, name=name,
                         axis=int(axis))


# ──────────────────────── Hinge ───────────────────────────────────────

class Hinge(LossFunctionWrapper):
    def __init__(self, reduction='auto', name='hinge'):
        super().__init__(F.hinge, reduction=reduction, name=name)


class SquaredHinge(LossFunctionWrapper):
    def __init__(self, reduction='auto', name='squared_hinge'):
        super().__init__(F.squared_hinge, reduction=reduction, name=name)


class CategoricalHinge(LossFunctionWrapper):
    def __init__(self, reduction='auto', name='categorical_hinge'):
        super().__init__(F.categorical_hinge, reduction=reduction, name=name)


# ──────────────────────── Crossentropy ────────────────────────────────

class BinaryCrossentropy(LossFunctionWrapper):
    """Binary crossentropy between labels in [0, 1] and predictions."""

    def __init__(self, from_logits: bool = False,
                 label_smoothing: float = 0.0, axis: int = -1,
                 reduction='auto', name='binary_crossentropy'):
        label_smoothing = F.check_label_smoothing(label_smoothing)
        super().__init__(F.binary_crossentropy, reduction=reduction,
                         name=name, from_logits=bool(from_logits),
                         label_smoothing=label_smoothing, axis=int(axis))


class BinaryFocalCrossentropy(LossFunctionWrapper):
    def __init__(self, apply_class_balancing: bool = False,
                 alpha: float = 0.25, gamma: float = 2.0,
                 from_logits: bool = False, label_smoothing: float = 0.0,
                 axis: int = -1, reduction='auto',
                 name='binary_focal_crossentropy'):
        label_smoothing = F.check_label_smoothing(label_smoothing)
        if gamma < 0:
            raise ValueError(f"`gamma` must be non-negative, got {gamma}")
        super().__init__(F.binary_focal_crossentropy, reduction=reduction,
                         name=name,
                         apply_class_balancing=bool(apply_class_balancing),
                         alpha=float(alpha), gamma=float(gamma),
                         from_logits=bool(from_logits),
                         label_smoothing=label_smoothing, axis=int(axis))


class CategoricalCrossentropy(LossFunctionWrapper):
    """Crossentropy against one-hot targets."""

    def __init__(self, from_logits: bool = False,
                 label_smoothing: float = 0.0, axis: int = -1,
                 reduction='auto', name='categorical_crossentropy'):
        label_smoothing = F.check_label_smoothing(label_smoothing)
        super().__init__(F.categorical_crossentropy, reduction=reduction,
                         name=name, from_logits=bool(from_logits),
                         label_smoothing=label_smoothing, axis=int(axis))


class SparseCategoricalCrossentropy(LossFunctionWrapper):
    """Crossentropy against integer targets.

    Samples whose label equals ``ignore_class`` contribute nothing and
    are left out of the batch average.
    """

    def __init__(self, from_logits: bool = False,
                 ignore_class: int | None = None, axis: int = -1,
                 reduction='auto', name='sparse_categorical_crossentropy'):
        super().__init__(F.sparse_categorical_crossentropy,
                         reduction=reduction, name=name,
                         from_logits=bool(from_logits),
                         ignore_class=ignore_class, axis=int(axis))

    def compute_mask(self, y_true, y_pred):
        ignore_class = self._fn_kwargs['ignore_class']
        if ignore_class is None:
            return None
        labels = np.asarray(y_true)
        if labels.ndim == np.ndim(y_pred) and labels.shape[-1] == 1:
            labels = np.squeeze(labels, -1)
        return labels != ignore_class
