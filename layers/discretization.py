# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Discretization — bucket continuous values by boundaries.

When boundaries are learned, ``adapt`` keeps an approximate quantile
summary: a ``(2, n)`` array of sorted values and the weight each one
stands for.  Summaries of successive batches are merged and compressed
to roughly ``1 / epsilon`` points, so memory does not grow with the
dataset.
"""
from __future__ import annotations

import logging

import numpy as np

from .base import PreprocessingLayer, normalize_output_mode, check_positive_int
from .encoding import encode_categorical_inputs

logger = logging.getLogger(__name__)


# ──────────────────────── Quantile summaries ──────────────────────────

def summarize(values, epsilon: float) -> np.ndarray:
    values = np.sort(np.reshape(values, [-1]))
    elements = values.size
    num_buckets = 1.0 / epsilon
    increment = elements / num_buckets
    step = max(increment, 1.0)
    picked = values[int(increment)::int(step)]
    weights = np.full(picked.shape, step, dtype=np.float64)
    return np.stack([picked.astype(np.float64), weights])


def compress_summary(summary: np.ndarray, epsilon: float) -> np.ndarray:
    if summary.shape[1] * epsilon < 1:
        return summary
    percents = epsilon + np.arange(0.0, 1.0, epsilon)
    cum_weights = summary[1].cumsum()
    cum_weight_percents = cum_weights / cum_weights[-1]
    new_bins = np.interp(percents, cum_weight_percents, summary[0])
    cum_weights = np.interp(percents, cum_weight_percents, cum_weights)
    new_weights = cum_weights - np.concatenate(([0.0], cum_weights[:-1]))
    return np.stack((new_bins, new_weights))


def merge_summaries(prev: np.ndarray, nxt: np.ndarray,
                    epsilon: float) -> np.ndarray:
    merged = np.concatenate((prev, nxt), axis=1)
    merged = merged[:, np.argsort(merged[0], kind='stable')]
    return compress_summary(merged, epsilon)


def get_bin_boundaries(summary: np.ndarray, num_bins: int) -> np.ndarray:
    """``num_bins - 1`` boundaries at evenly spaced weighted quantiles."""
    if num_bins == 1:
        return np.zeros(0, dtype=np.float64)
    cum_weights = summary[1].cumsum()
    cum_weight_percents = cum_weights / cum_weights[-1]
    percents = np.arange(1, num_bins) / num_bins
    return np.interp(percents, cum_weight_percents, summary[0])


# ──────────────────────── Layer ───────────────────────────────────────

class Discretization(PreprocessingLayer):
    """Map continuous values to bucket ids.

    Bucket ``i`` holds values with ``b[i-1] <= x < b[i]``; values below
    the first boundary go to bucket 0 and values at or above the last
    boundary go to bucket ``len(b)``.
    """

    def __init__(self, bin_boundaries=None, num_bins: int | None = None,
                 epsilon: float = 0.01, output_mode: str = 'int',
                 name: str | None = None, dtype=None):
        super().__init__(name=name, dtype=dtype)
        self.output_mode = normalize_output_mode(
            output_mode, ('int', 'one_hot', 'multi_hot', 'count'))
        if bin_boundaries is not None and num_bins is not None:
            raise ValueError("Set either `bin_boundaries` or `num_bins`, "
                             "not both")
        if bin_boundaries is None and num_bins is None:
            raise ValueError("One of `bin_boundaries` or `num_bins` must "
                             "be set")
        self.num_bins = check_positive_int(num_bins, 'num_bins',
                                           allow_none=True)
        self.epsilon = float(epsilon)
        if not 0.0 < self.epsilon < 1.0:
            raise ValueError(f"`epsilon` must be in (0, 1), got {epsilon}")

        self.register_state('bin_boundaries', None)
        self.reset_state()
        if bin_boundaries is not None:
            boundaries = np.asarray(bin_boundaries, dtype=np.float64)
            if boundaries.ndim != 1:
                raise ValueError("`bin_boundaries` must be a flat list")
            if np.any(np.diff(boundaries) < 0):
                raise ValueError("`bin_boundaries` must be sorted in "
                                 f"increasing order, got {bin_boundaries}")
            self.bin_boundaries = boundaries
            self._is_adapted = True

    @property
    def depth(self) -> int:
        if self.bin_boundaries is not None:
            return len(self.bin_boundaries) + 1
        return self.num_bins

    # ---- Adapt ----

    def adapt(self, data, batch_size=None, steps=None):
        if self.num_bins is None:
            raise ValueError("Discretization.adapt needs `num_bins`; this "
                             "layer was built with fixed `bin_boundaries`")
        return super().adapt(data, batch_size=batch_size, steps=steps)

    def reset_state(self):
        self._summary = np.zeros((2, 0), dtype=np.float64)

    def update_state(self, data):
        values = np.asarray(data, dtype=np.float64).reshape(-1)
        values = values[~np.isnan(values)]
        if values.size == 0:
            return
        batch_summary = summarize(values, self.epsilon)
        self._summary = merge_summaries(self._summary, batch_summary,
                                        self.epsilon)

    def finalize_state(self):
        if self._summary.shape[1] == 0:
            raise ValueError("Discretization.adapt received no finite values")
        boundaries = get_bin_boundaries(self._summary, self.num_bins)
        if len(np.unique(boundaries)) < len(boundaries):
            logger.warning("%s: data has too few distinct values for %d "
                           "bins; some buckets will stay empty",
                           self.name, self.num_bins)
        self.bin_boundaries = boundaries
        self.reset_state()

    # ---- Call ----

    def call(self, inputs):
        self._check_adapted()
        x = np.asarray(inputs, dtype=np.float64)
        buckets = np.digitize(x, self.bin_boundaries).astype(np.int64)
        if self.output_mode == 'int':
            return buckets
        dtype = self.dtype.to_numpy() if self.dtype is not None else None
        return encode_categorical_inputs(buckets, self.output_mode,
                                         self.depth, dtype=dtype)

    def get_config(self) -> dict:
        config = super().get_config()
        config.update(
            bin_boundaries=(self.bin_boundaries.tolist()
                            if self.bin_boundaries is not None
                            and self.num_bins is None else None),
            num_bins=self.num_bins,
            epsilon=self.epsilon,
            output_mode=self.output_mode,
        )
        return config

    def extra_repr(self) -> str:
        return f"depth={self.depth}, output_mode={self.output_mode!r}"
