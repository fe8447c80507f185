# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""HashedCrossing — hash feature crosses into a fixed number of bins."""
from __future__ import annotations

import numpy as np

from .base import Layer, normalize_output_mode, check_positive_int
from .encoding import encode_categorical_inputs
from .hashing import fingerprint64, value_to_bytes

_SEPARATOR = b'_X_'


class HashedCrossing(Layer):
    """Cross two or more categorical features with the hashing trick.

    ``layer((a, b))`` hashes the joined pair ``a_X_b`` of every aligned
    element into ``[0, num_bins)``.
    """

    def __init__(self, num_bins: int, output_mode: str = 'int',
                 name: str | None = None, dtype=None):
        super().__init__(name=name, dtype=dtype)
        self.num_bins = check_positive_int(num_bins, 'num_bins')
        self.output_mode = normalize_output_mode(output_mode,
                                                 ('int', 'one_hot'))

    def call(self, inputs):
        if not isinstance(inputs, (tuple, list)) or len(inputs) < 2:
            raise ValueError("HashedCrossing expects a tuple of at least "
                             "two features")
        features = np.broadcast_arrays(
            *[np.asarray(f, dtype=object) for f in inputs])
        shape = features[0].shape
        columns = [f.reshape(-1) for f in features]
        flat = []
        for row in zip(*columns):
            crossed = _SEPARATOR.join(value_to_bytes(v) for v in row)
            flat.append(fingerprint64(crossed) % self.num_bins)
        bins = np.asarray(flat, dtype=np.int64).reshape(shape)
        if self.output_mode == 'int':
            return bins
        dtype = self.dtype.to_numpy() if self.dtype is not None else None
        return encode_categorical_inputs(bins, 'one_hot', self.num_bins,
                                         dtype=dtype)

    def get_config(self) -> dict:
        config = super().get_config()
        config.update(num_bins=self.num_bins, output_mode=self.output_mode)
        return config

    def extra_repr(self) -> str:
        return f"num_bins={self.num_bins}"
