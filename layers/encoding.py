# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Output-mode encoding shared by the categorical layers.

Index arrays use ``-1`` for entries that must be dropped from the
encoding (masked inputs); every other entry must lie in ``[0, depth)``.
"""
from __future__ import annotations

import numpy as np

from .. import config


def encode_categorical_inputs(inputs, output_mode: str, depth: int,
                              dtype=None, count_weights=None,
                              idf_weights=None) -> np.ndarray:
    """Turn integer indices into ``one_hot``/``multi_hot``/``count``/``tf_idf``.

    ``one_hot`` appends a ``depth`` axis (replacing a trailing axis of
    size 1).  The other modes reduce the last axis of a rank-2
    ``(batch, n)`` input to ``(batch, depth)``; rank-1 input is read as
    one value per sample.
    """
    indices = np.asarray(inputs)
    if output_mode == 'int':
        return indices
    out_dtype = np.dtype(dtype) if dtype is not None else config.floatx_dtype()
    if indices.ndim == 0:
        indices = indices.reshape(1)

    if output_mode == 'one_hot':
        if indices.ndim > 1 and indices.shape[-1] == 1:
            indices = np.squeeze(indices, -1)
        flat = indices.reshape(-1).astype(np.intp)
        out = np.zeros((flat.size, depth), dtype=out_dtype)
        rows = np.nonzero(flat >= 0)[0]
        out[rows, flat[rows]] = 1
        return out.reshape(indices.shape + (depth,))

    if indices.ndim == 1:
        indices = indices[:, np.newaxis]
    if indices.ndim != 2:
        raise ValueError(
            f"output_mode={output_mode!r} expects inputs of rank <= 2, "
            f"got shape {np.shape(inputs)}")

    batch, width = indices.shape
    rows = np.repeat(np.arange(batch), width)
    cols = indices.reshape(-1).astype(np.intp)
    if count_weights is not None:
        weights = np.broadcast_to(
            np.asarray(count_weights, dtype=out_dtype), indices.shape
        ).reshape(-1)
    else:
        weights = np.ones(cols.shape, dtype=out_dtype)
    keep = cols >= 0

    out = np.zeros((batch, depth), dtype=out_dtype)
    np.add.at(out, (rows[keep], cols[keep]), weights[keep])

    if output_mode == 'multi_hot':
        return (out > 0).astype(out_dtype)
    if output_mode == 'tf_idf':
        if idf_weights is None:
            raise ValueError("output_mode='tf_idf' requires idf weights")
        idf = np.asarray(idf_weights, dtype=out_dtype)
        return out * idf[np.newaxis, :depth]
    return out
