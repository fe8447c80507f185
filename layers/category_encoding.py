# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""CategoryEncoding — dense encoding of integer category ids."""
from __future__ import annotations

import numpy as np

from .base import Layer, normalize_output_mode, check_positive_int
from .encoding import encode_categorical_inputs


class CategoryEncoding(Layer):
    """Encode ids in ``[0, num_tokens)`` as one-hot, multi-hot or counts."""

    def __init__(self, num_tokens: int, output_mode: str = 'multi_hot',
                 name: str | None = None, dtype=None):
        super().__init__(name=name, dtype=dtype)
        self.num_tokens = check_positive_int(num_tokens, 'num_tokens')
        self.output_mode = normalize_output_mode(
            output_mode, ('one_hot', 'multi_hot', 'count'))

    def call(self, inputs, count_weights=None):
        ids = np.asarray(inputs)
        if ids.dtype.kind not in 'iu':
            if ids.dtype.kind != 'f' or not np.all(np.mod(ids, 1) == 0):
                raise ValueError("CategoryEncoding expects integer inputs")
        if ids.size and (ids.min() < 0 or ids.max() >= self.num_tokens):
            raise ValueError(
                f"CategoryEncoding inputs must be in [0, {self.num_tokens}), "
                f"got values in [{ids.min()}, {ids.max()}]")
        if count_weights is not None and self.output_mode != 'count':
            raise ValueError("`count_weights` is only supported with "
                             "output_mode='count'")
        dtype = self.dtype.to_numpy() if self.dtype is not None else None
        return encode_categorical_inputs(ids.astype(np.int64),
                                         self.output_mode, self.num_tokens,
                                         dtype=dtype,
                                         count_weights=count_weights)

    def get_config(self) -> dict:
        config = super().get_config()
        config.update(num_tokens=self.num_tokens,
                      output_mode=self.output_mode)
        return config

    def extra_repr(self) -> str:
        return f"num_tokens={self.num_tokens}, output_mode={self.output_mode!r}"
