# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Data type names accepted by layers and their NumPy counterparts."""
from __future__ import annotations

import enum
import numpy as np


class dtype(enum.Enum):
    """Kerasport data types — the names layers accept for ``dtype=``."""
    float16 = "float16"
    float32 = "float32"
    float64 = "float64"
    int32 = "int32"
    int64 = "int64"
    string = "string"
    bool = "bool"

    def to_numpy(self) -> np.dtype:
        """Convert to numpy dtype."""
        _map = {
            dtype.float16: np.float16,
            dtype.float32: np.float32,
            dtype.float64: np.float64,
            dtype.int32: np.int32,
            dtype.int64: np.int64,
            dtype.string: np.object_,  # variable-length python str
            dtype.bool: np.bool_,
        }
        return np.dtype(_map[self])

    @staticmethod
    def from_numpy(np_dtype: np.dtype) -> 'dtype':
        """Convert numpy dtype to kerasport dtype."""
        np_dtype = np.dtype(np_dtype)
        if np_dtype.kind in ('U', 'S', 'O'):
            return dtype.string
        _map = {
            np.dtype(np.float16): dtype.float16,
            np.dtype(np.float32): dtype.float32,
            np.dtype(np.float64): dtype.float64,
            np.dtype(np.int32): dtype.int32,
            np.dtype(np.int64): dtype.int64,
            np.dtype(np.bool_): dtype.bool,
        }
        return _map.get(np_dtype, dtype.float32)

    def __repr__(self) -> str:
        return f"kerasport.{self.name}"


def resolve(value) -> dtype:
    """Normalize a dtype given as name, numpy dtype or :class:`dtype`."""
    if isinstance(value, dtype):
        return value
    if isinstance(value, str):
        try:
            return dtype(value)
        except ValueError:
            raise ValueError(f"Unknown dtype {value!r}") from None
    return dtype.from_numpy(value)


# Convenience aliases
float16 = dtype.float16
float32 = dtype.float32
float64 = dtype.float64
int32 = dtype.int32
int64 = dtype.int64
string = dtype.string
bool = dtype.bool
