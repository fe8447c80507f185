# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Hashing — the hashing trick for categorical values.

Each value is fingerprinted with 64-bit BLAKE2b over its text form and
the fingerprint is taken modulo ``num_bins``.  The fingerprint is keyed
by the salt, so a given ``(value, salt)`` pair always lands in the same
bucket across calls, processes and machines.
"""
from __future__ import annotations

import hashlib
import struct

import numpy as np

from .base import Layer, normalize_output_mode, check_positive_int
from .encoding import encode_categorical_inputs

_MASK64 = (1 << 64) - 1


# ──────────────────────── Fingerprints ────────────────────────────────

def value_to_bytes(value) -> bytes:
    """Canonical byte form of a categorical value."""
    if isinstance(value, (bytes, np.bytes_)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, (bool, np.bool_)):
        raise ValueError(f"Cannot hash boolean value {value!r}")
    if isinstance(value, (int, np.integer)):
        return str(int(value)).encode('ascii')
    if isinstance(value, (float, np.floating)):
        if float(value).is_integer():
            return str(int(value)).encode('ascii')
        raise ValueError(
            f"Only string and integer values can be hashed, got {value!r}")
    raise ValueError(f"Cannot hash value of type {type(value).__name__}")


def salt_to_key(salt) -> bytes:
    """Pack a salt (int or pair of ints) into a 16-byte BLAKE2b key."""
    if salt is None:
        return b''
    if isinstance(salt, (int, np.integer)) and not isinstance(salt, bool):
        pair = (int(salt), int(salt))
    else:
        try:
            pair = tuple(int(s) for s in salt)
        except TypeError:
            raise ValueError(f"`salt` must be an int or a pair of ints, "
                             f"got {salt!r}") from None
        if len(pair) != 2:
            raise ValueError(f"`salt` must be an int or a pair of ints, "
                             f"got {salt!r}")
    return struct.pack('<QQ', pair[0] & _MASK64, pair[1] & _MASK64)


def fingerprint64(value, key: bytes = b'') -> int:
    digest = hashlib.blake2b(value_to_bytes(value), digest_size=8,
                             key=key).digest()
    return int.from_bytes(digest, 'little')


def hash_to_buckets(values, num_bins: int, key: bytes = b'') -> np.ndarray:
    arr = np.asarray(values, dtype=object)
    flat = [fingerprint64(v, key) % num_bins for v in arr.reshape(-1)]
    return np.asarray(flat, dtype=np.int64).reshape(arr.shape)


# ──────────────────────── Hashing layer ───────────────────────────────

class Hashing(Layer):
    """Hash string or integer features into ``num_bins`` buckets.

    With ``mask_value`` set, that value maps to bucket 0 and every other
    value hashes into ``[1, num_bins)``.  The layer keeps no state.
    """

    def __init__(self, num_bins: int, mask_value=None, salt=None,
                 output_mode: str = 'int', name: str | None = None,
                 dtype=None):
        super().__init__(name=name, dtype=dtype)
        self.num_bins = check_positive_int(num_bins, 'num_bins')
        if mask_value is not None and self.num_bins < 2:
            raise ValueError("`num_bins` must be >= 2 when `mask_value` "
                             "is set")
        self.mask_value = mask_value
        self.salt = salt
        self._key = salt_to_key(salt)
        self.output_mode = normalize_output_mode(
            output_mode, ('int', 'one_hot', 'multi_hot', 'count'))

    def call(self, inputs):
        arr = np.asarray(inputs, dtype=object)
        if self.mask_value is None:
            bins = hash_to_buckets(arr, self.num_bins, self._key)
        else:
            flat = []
            for value in arr.reshape(-1):
                if value == self.mask_value:
                    flat.append(0)
                else:
                    fp = fingerprint64(value, self._key)
                    flat.append(fp % (self.num_bins - 1) + 1)
            bins = np.asarray(flat, dtype=np.int64).reshape(arr.shape)
        if self.output_mode == 'int':
            return bins
        dtype = self.dtype.to_numpy() if self.dtype is not None else None
        return encode_categorical_inputs(bins, self.output_mode,
                                         self.num_bins, dtype=dtype)

    def get_config(self) -> dict:
        config = super().get_config()
        config.update(num_bins=self.num_bins, mask_value=self.mask_value,
                      salt=self.salt, output_mode=self.output_mode)
        return config

    def extra_repr(self) -> str:
        return f"num_bins={self.num_bins}, output_mode={self.output_mode!r}"
