# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Normalization — feature-wise standardization from adapted statistics."""
from __future__ import annotations

import logging

import numpy as np

from .. import config
from .base import PreprocessingLayer

logger = logging.getLogger(__name__)


class Normalization(PreprocessingLayer):
    """Shift and scale inputs to zero mean and unit variance.

    ``axis`` names the axes that keep separate statistics (default: the
    last one, i.e. per feature); every other axis is reduced over during
    ``adapt``.  ``axis=None`` computes one scalar mean and variance.
    Output is ``(x - mean) / max(sqrt(variance), epsilon)``, or the
    inverse mapping when ``invert=True``.
    """

    def __init__(self, axis=-1, mean=None, variance=None,
                 invert: bool = False, name: str | None = None, dtype=None):
        super().__init__(name=name, dtype=dtype)
        if axis is None:
            self.axis = ()
        elif isinstance(axis, (int, np.integer)):
            self.axis = (int(axis),)
        else:
            self.axis = tuple(int(a) for a in axis)
        if 0 in self.axis:
            raise ValueError("Normalization cannot keep statistics along "
                             "the batch axis 0")
        if (mean is None) != (variance is None):
            raise ValueError("`mean` and `variance` must be set together, "
                             f"got mean={mean!r}, variance={variance!r}")
        self.invert = bool(invert)

        self.register_state('mean', None)
        self.register_state('variance', None)
        self.reset_state()
        if mean is not None:
            variance = np.asarray(variance, dtype=np.float64)
            if np.any(variance < 0):
                raise ValueError("`variance` must be non-negative")
            self.mean = np.asarray(mean, dtype=np.float64)
            self.variance = variance
            self._is_adapted = True

    def _kept_axes(self, ndim: int) -> tuple[int, ...]:
        kept = []
        for a in self.axis:
            if not -ndim <= a < ndim:
                raise ValueError(f"axis {a} is out of range for input of "
                                 f"rank {ndim}")
            kept.append(a % ndim)
        return tuple(sorted(kept))

    # ---- Adapt ----

    def reset_state(self):
        self._count = 0
        self._running_mean = None
        self._running_var = None

    def update_state(self, data):
        x = np.asarray(data, dtype=np.float64)
        if x.ndim == 1 and self.axis:
            x = x[:, np.newaxis]
        kept = self._kept_axes(x.ndim)
        reduce_axes = tuple(d for d in range(x.ndim) if d not in kept)
        batch_count = int(np.prod([x.shape[d] for d in reduce_axes]))
        if batch_count == 0:
            return
        batch_mean = np.mean(x, axis=reduce_axes)
        batch_var = np.var(x, axis=reduce_axes)

        if self._running_mean is None:
            self._count = batch_count
            self._running_mean = batch_mean
            self._running_var = batch_var
            return
        if batch_mean.shape != self._running_mean.shape:
            raise ValueError(
                f"Normalization.adapt got batches with inconsistent feature "
                f"shapes: {self._running_mean.shape} vs {batch_mean.shape}")
        # parallel (Chan et al.) combination of two sets of moments
        total = self._count + batch_count
        delta = batch_mean - self._running_mean
        new_mean = self._running_mean + delta * (batch_count / total)
        m2 = (self._running_var * self._count + batch_var * batch_count
              + np.square(delta) * self._count * batch_count / total)
        self._count = total
        self._running_mean = new_mean
        self._running_var = m2 / total

    def finalize_state(self):
        if self._running_mean is None:
            raise ValueError("Normalization.adapt received an empty dataset")
        self.mean = self._running_mean
        self.variance = self._running_var
        logger.debug("%s: statistics over %d samples per feature",
                     self.name, self._count)
        self.reset_state()

    # ---- Call ----

    def _broadcast_stat(self, stat: np.ndarray, x: np.ndarray) -> np.ndarray:
        if stat.size == 1:
            return stat.reshape(())
        kept = self._kept_axes(x.ndim)
        shape = [x.shape[d] if d in kept else 1 for d in range(x.ndim)]
        if int(np.prod(shape)) != stat.size:
            raise ValueError(
                f"Normalization statistics of shape {stat.shape} do not "
                f"match input shape {x.shape} along axis {self.axis}")
        return stat.reshape(shape)

    def call(self, inputs):
        self._check_adapted()
        out_dtype = (self.dtype.to_numpy() if self.dtype is not None
                     else config.floatx_dtype())
        x = np.asarray(inputs, dtype=np.float64)
        if x.ndim == 1 and self.axis and self.mean.size > 1:
            x = x[np.newaxis, :]
        mean = self._broadcast_stat(np.asarray(self.mean), x)
        std = np.maximum(np.sqrt(self._broadcast_stat(
            np.asarray(self.variance), x)), config.epsilon())
        if self.invert:
            out = x * std + mean
        else:
            out = (x - mean) / std
        return out.reshape(np.shape(inputs)).astype(out_dtype)

    def get_config(self) -> dict:
        config_ = super().get_config()
        config_.update(
            axis=list(self.axis) if self.axis else None,
            mean=np.asarray(self.mean).tolist() if self.mean is not None else None,
            variance=(np.asarray(self.variance).tolist()
                      if self.variance is not None else None),
            invert=self.invert,
        )
        return config_

    def extra_repr(self) -> str:
        return f"axis={self.axis}, invert={self.invert}"
