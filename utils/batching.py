# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""utils.batching — split ``adapt`` data into batches."""
from __future__ import annotations

from typing import Iterator

import numpy as np


def _is_array_like(data) -> bool:
    return isinstance(data, (np.ndarray, list, tuple)) or np.isscalar(data)


def iter_batches(data, batch_size: int | None = None,
                 steps: int | None = None) -> Iterator:
    """Yield batches of ``data``.

    Arrays, lists and tuples are treated as one dataset and sliced along
    the first axis into chunks of ``batch_size`` (the whole array when
    ``batch_size`` is ``None``).  Any other iterable is assumed to yield
    batches already; ``batch_size`` must then be left unset.  ``steps``
    caps the number of batches yielded.
    """
    if batch_size is not None and int(batch_size) < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    if steps is not None and int(steps) < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")

    if _is_array_like(data):
        arr = np.asarray(data)
        if arr.ndim == 0:
            arr = arr.reshape(1)
        if batch_size is None:
            batches = (arr,)
        else:
            size = int(batch_size)
            batches = (arr[i:i + size] for i in range(0, len(arr), size))
    else:
        if batch_size is not None:
            raise ValueError("batch_size cannot be set when `data` is an "
                             "iterable of batches")
        try:
            batches = iter(data)
        except TypeError:
            raise TypeError(f"Cannot adapt on data of type "
                            f"{type(data).__name__}") from None

    for step, batch in enumerate(batches):
        if steps is not None and step >= int(steps):
            break
        yield np.asarray(batch)
