# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Vocabulary lookup layers — IndexLookup, StringLookup, IntegerLookup.

Index layout in ``output_mode='int'``::

    0                       mask token (if ``mask_token`` is set)
    next num_oov_indices    out-of-vocabulary buckets
    remaining               vocabulary, most frequent first

In the other output modes the mask slot is not part of the encoding and
masked inputs are dropped.
"""
from __future__ import annotations

import logging
from collections import Counter

import numpy as np

from .base import PreprocessingLayer, normalize_output_mode, check_positive_int
from .encoding import encode_categorical_inputs
from .hashing import fingerprint64
from ..utils import vocab_io

logger = logging.getLogger(__name__)


class IndexLookup(PreprocessingLayer):
    """Map tokens to integer indices through a vocabulary.

    Subclasses decide what a token is by implementing :meth:`_to_key`.
    """

    def __init__(self, max_tokens: int | None, num_oov_indices: int,
                 mask_token, oov_token, vocabulary=None, idf_weights=None,
                 invert: bool = False, output_mode: str = 'int',
                 pad_to_max_tokens: bool = False, name: str | None = None,
                 dtype=None):
        super().__init__(name=name, dtype=dtype)
        self.output_mode = normalize_output_mode(output_mode)
        self.num_oov_indices = check_positive_int(
            num_oov_indices, 'num_oov_indices', minimum=0)
        self.max_tokens = check_positive_int(max_tokens, 'max_tokens',
                                             allow_none=True)
        self.mask_token = mask_token
        self.oov_token = oov_token
        self.invert = bool(invert)
        self.pad_to_max_tokens = bool(pad_to_max_tokens)

        if self.invert and self.output_mode != 'int':
            raise ValueError("`invert=True` requires output_mode='int', "
                             f"got {self.output_mode!r}")
        if self.max_tokens is not None and \
                self.max_tokens <= self._token_start_index():
            raise ValueError(
                f"`max_tokens` must be greater than the number of reserved "
                f"indices ({self._token_start_index()}), got {max_tokens}")
        if self.pad_to_max_tokens and self.max_tokens is None:
            raise ValueError("`pad_to_max_tokens=True` requires `max_tokens`")
        if idf_weights is not None and self.output_mode != 'tf_idf':
            raise ValueError("`idf_weights` is only used with "
                             "output_mode='tf_idf'")

        self.register_state('vocabulary_tokens', None)
        self.register_state('idf_weights', None)
        self._index_table: dict = {}
        self._oov_idf = 0.0
        self.reset_state()

        if vocabulary is not None:
            self.set_vocabulary(vocabulary, idf_weights)

    # ---- Token handling (subclass hooks) ----

    def _to_key(self, value):
        return value

    def _output_token_dtype(self):
        return object

    def _oov_bucket(self, key) -> int:
        if self.num_oov_indices == 1:
            return 0
        return fingerprint64(key) % self.num_oov_indices

    # ---- Index layout ----

    def _mask_slots(self) -> int:
        return int(self.mask_token is not None and self.output_mode == 'int')

    def _token_start_index(self) -> int:
        return self._mask_slots() + self.num_oov_indices

    def vocabulary_size(self) -> int:
        tokens = self.vocabulary_tokens or []
        return self._token_start_index() + len(tokens)

    def get_vocabulary(self, include_special_tokens: bool = True) -> list:
        tokens = list(self.vocabulary_tokens or [])
        if not include_special_tokens:
            return tokens
        special = []
        if self._mask_slots():
            special.append(self.mask_token)
        special.extend([self.oov_token] * self.num_oov_indices)
        return special + tokens

    def _is_special(self, key) -> bool:
        return ((self.mask_token is not None and key == self.mask_token)
                or key == self.oov_token)

    # ---- Vocabulary ----

    def set_vocabulary(self, vocabulary, idf_weights=None):
        """Replace the vocabulary (and IDF weights for ``tf_idf``).

        ``vocabulary`` is a sequence of tokens or the path of a vocabulary
        file.  Reserved tokens at the front, laid out as
        :meth:`get_vocabulary` returns them, are accepted and stripped.
        """
        if self.output_mode == 'tf_idf' and idf_weights is None:
            raise ValueError("output_mode='tf_idf' requires `idf_weights` "
                             "when setting a vocabulary")
        if self.output_mode != 'tf_idf' and idf_weights is not None:
            raise ValueError("`idf_weights` is only used with "
                             "output_mode='tf_idf'")

        if vocab_io.is_vocabulary_path(vocabulary):
            vocabulary = vocab_io.load_vocabulary(vocabulary)
        tokens = [self._to_key(v) for v in np.asarray(vocabulary,
                                                      dtype=object).reshape(-1)]
        idf = None
        if idf_weights is not None:
            idf = np.asarray(idf_weights, dtype=np.float64).reshape(-1)
            if idf.shape[0] != len(tokens):
                raise ValueError(
                    f"`idf_weights` must have one weight per vocabulary "
                    f"token; got {idf.shape[0]} weights for {len(tokens)} "
                    f"tokens")

        n_leading = 0
        if (self.mask_token is not None and tokens
                and tokens[0] == self.mask_token):
            n_leading = 1
        n_oov = 0
        while (n_oov < self.num_oov_indices and n_leading < len(tokens)
               and tokens[n_leading] == self.oov_token):
            n_leading += 1
            n_oov += 1
        tokens = tokens[n_leading:]
        if idf is not None:
            idf = idf[n_leading:]

        for token in tokens:
            if self._is_special(token):
                raise ValueError(
                    f"Reserved token {token!r} may only appear at the start "
                    f"of the vocabulary")
        repeated = [t for t, c in Counter(tokens).items() if c > 1]
        if repeated:
            raise ValueError(
                f"The vocabulary must not contain duplicates; repeated "
                f"tokens: {repeated[:10]}")
        if (self.max_tokens is not None
                and len(tokens) + self._token_start_index() > self.max_tokens):
            raise ValueError(
                f"Vocabulary of {len(tokens)} tokens plus "
                f"{self._token_start_index()} reserved indices exceeds "
                f"max_tokens={self.max_tokens}")

        self._set_vocab(tokens, idf)
        self._is_adapted = True

    def _set_vocab(self, tokens: list, idf):
        start = self._token_start_index()
        self.vocabulary_tokens = tokens
        self._index_table = {tok: start + i for i, tok in enumerate(tokens)}
        if idf is not None:
            self.idf_weights = np.asarray(idf, dtype=np.float64)
            self._oov_idf = float(np.mean(idf)) if len(idf) else 0.0
        else:
            self.idf_weights = None
            self._oov_idf = 0.0

    # ---- Adapt ----

    def reset_state(self):
        self._token_counts = Counter()
        self._doc_counts = Counter()
        self._num_documents = 0

    def update_state(self, data):
        arr = np.asarray(data, dtype=object)
        if arr.ndim == 0:
            arr = arr.reshape(1)
        docs = arr.reshape(arr.shape[0], -1) if arr.ndim > 1 else arr[:, None]
        self.count_documents([[self._to_key(v) for v in row] for row in docs])

    def count_documents(self, documents):
        """Accumulate token and document frequencies for ``adapt``."""
        for doc in documents:
            self._token_counts.update(doc)
            if self.output_mode == 'tf_idf':
                self._doc_counts.update(set(doc))
            self._num_documents += 1

    def finalize_state(self):
        counts = self._token_counts
        for special in (self.mask_token, self.oov_token):
            if special is not None:
                counts.pop(special, None)
        # frequency descending, ties by value ascending
        tokens = sorted(counts, key=lambda t: (-counts[t], t))
        if self.max_tokens is not None:
            budget = self.max_tokens - self._token_start_index()
            if len(tokens) > budget:
                logger.debug("%s: keeping %d of %d distinct tokens "
                             "(max_tokens=%d)", self.name, budget,
                             len(tokens), self.max_tokens)
                tokens = tokens[:budget]
        idf = None
        if self.output_mode == 'tf_idf':
            n_docs = self._num_documents
            idf = np.array([np.log(1.0 + n_docs / (1.0 + self._doc_counts[t]))
                            for t in tokens], dtype=np.float64)
        self._set_vocab(tokens, idf)
        logger.debug("%s: vocabulary size %d", self.name,
                     self.vocabulary_size())
        self.reset_state()

    # ---- Lookup ----

    def lookup_indices(self, tokens) -> np.ndarray:
        """Indices for a flat sequence of keys; dropped masks become -1."""
        self._check_adapted()
        mask_index = 0 if self._mask_slots() else -1
        oov_start = self._mask_slots()
        out = np.empty(len(tokens), dtype=np.int64)
        for i, key in enumerate(tokens):
            if self.mask_token is not None and key == self.mask_token:
                out[i] = mask_index
                continue
            index = self._index_table.get(key)
            if index is None:
                if self.num_oov_indices == 0:
                    raise ValueError(
                        f"{type(self).__name__} got out-of-vocabulary value "
                        f"{key!r} but num_oov_indices=0")
                index = oov_start + self._oov_bucket(key)
            out[i] = index
        return out

    def encode(self, indices) -> np.ndarray:
        """Apply the configured output mode to lookup indices."""
        if self.output_mode == 'int':
            return indices
        depth = (self.max_tokens if self.pad_to_max_tokens
                 else self.vocabulary_size())
        idf = None
        if self.output_mode == 'tf_idf':
            idf = np.zeros(depth, dtype=np.float64)
            idf[:self.num_oov_indices] = self._oov_idf
            weights = self.idf_weights
            if weights is not None and len(weights):
                start = self._token_start_index()
                idf[start:start + len(weights)] = weights
        dtype = self.dtype.to_numpy() if self.dtype is not None else None
        return encode_categorical_inputs(indices, self.output_mode, depth,
                                         dtype=dtype, idf_weights=idf)

    def call(self, inputs):
        arr = np.asarray(inputs, dtype=object)
        if self.invert:
            return self._invert(arr)
        keys = [self._to_key(v) for v in arr.reshape(-1)]
        indices = self.lookup_indices(keys).reshape(arr.shape)
        return self.encode(indices)

    def _invert(self, arr: np.ndarray) -> np.ndarray:
        self._check_adapted()
        vocab = self.get_vocabulary()
        size = len(vocab)
        flat = []
        for v in arr.reshape(-1):
            idx = int(v)
            flat.append(vocab[idx] if 0 <= idx < size else self.oov_token)
        return np.asarray(flat, dtype=self._output_token_dtype()).reshape(
            arr.shape)

    # ---- Config ----

    def get_config(self) -> dict:
        config = super().get_config()
        config.update(
            max_tokens=self.max_tokens,
            num_oov_indices=self.num_oov_indices,
            mask_token=self.mask_token,
            oov_token=self.oov_token,
            invert=self.invert,
            output_mode=self.output_mode,
            pad_to_max_tokens=self.pad_to_max_tokens,
            vocabulary=(self.get_vocabulary(include_special_tokens=False)
                        if self.is_adapted else None),
            idf_weights=(self.idf_weights.tolist()
                         if self.idf_weights is not None else None),
        )
        return config

    def extra_repr(self) -> str:
        return (f"vocabulary_size={self.vocabulary_size()}, "
                f"output_mode={self.output_mode!r}")


class StringLookup(IndexLookup):
    """Map strings to integer indices.

    With default settings ``''`` (the missing value) maps to 0 and any
    string not in the vocabulary maps to 1.
    """

    def __init__(self, max_tokens: int | None = None,
                 num_oov_indices: int = 1, mask_token: str | None = '',
                 oov_token: str = '[UNK]', vocabulary=None,
                 idf_weights=None, encoding: str = 'utf-8',
                 invert: bool = False, output_mode: str = 'int',
                 pad_to_max_tokens: bool = False, name: str | None = None,
                 dtype=None):
        self.encoding = encoding
        super().__init__(max_tokens=max_tokens,
                         num_oov_indices=num_oov_indices,
                         mask_token=mask_token, oov_token=oov_token,
                         vocabulary=vocabulary, idf_weights=idf_weights,
                         invert=invert, output_mode=output_mode,
                         pad_to_max_tokens=pad_to_max_tokens, name=name,
                         dtype=dtype)

    def _to_key(self, value):
        if isinstance(value, (bytes, np.bytes_)):
            return bytes(value).decode(self.encoding)
        if isinstance(value, str):
            return str(value)
        raise ValueError(f"StringLookup expects string inputs, got "
                         f"{type(value).__name__} {value!r}")

    def get_config(self) -> dict:
        config = super().get_config()
        config['encoding'] = self.encoding
        return config


class IntegerLookup(IndexLookup):
    """Map integers to contiguous indices.

    With default settings the value 0 (the missing value) maps to 0 and
    any integer not in the vocabulary maps to 1.
    """

    def __init__(self, max_tokens: int | None = None,
                 num_oov_indices: int = 1, mask_token: int | None = 0,
                 oov_token: int = -1, vocabulary=None,
                 vocabulary_dtype: str = 'int64', idf_weights=None,
                 invert: bool = False, output_mode: str = 'int',
                 pad_to_max_tokens: bool = False, name: str | None = None,
                 dtype=None):
        if vocabulary_dtype not in ('int32', 'int64'):
            raise ValueError(f"`vocabulary_dtype` must be 'int32' or "
                             f"'int64', got {vocabulary_dtype!r}")
        self.vocabulary_dtype = vocabulary_dtype
        if mask_token is not None:
            mask_token = self._to_key(mask_token)
        oov_token = self._to_key(oov_token)
        super().__init__(max_tokens=max_tokens,
                         num_oov_indices=num_oov_indices,
                         mask_token=mask_token, oov_token=oov_token,
                         vocabulary=vocabulary, idf_weights=idf_weights,
                         invert=invert, output_mode=output_mode,
                         pad_to_max_tokens=pad_to_max_tokens, name=name,
                         dtype=dtype)

    def _to_key(self, value):
        if isinstance(value, (bool, np.bool_)):
            raise ValueError(f"IntegerLookup expects integer inputs, got "
                             f"{value!r}")
        if isinstance(value, (int, np.integer)):
            return int(value)
        if isinstance(value, (float, np.floating)) and float(value).is_integer():
            return int(value)
        if isinstance(value, str):
            # vocabulary files hold one decimal integer per line
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ValueError(f"IntegerLookup expects integer inputs, got "
                         f"{type(value).__name__} {value!r}")

    def _oov_bucket(self, key) -> int:
        return key % self.num_oov_indices

    def _output_token_dtype(self):
        return np.dtype(self.vocabulary_dtype)

    def get_config(self) -> dict:
        config = super().get_config()
        config['vocabulary_dtype'] = self.vocabulary_dtype
        return config
