# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""TextVectorization — strings to token indices or bag-of-words vectors.

Processing per input string::

    standardize  →  split  →  ngrams  →  vocabulary lookup  →  output mode
"""
from __future__ import annotations

import re
from typing import Callable

import numpy as np

from .base import PreprocessingLayer, normalize_output_mode, check_positive_int
from .index_lookup import StringLookup

DEFAULT_STRIP_REGEX = r'[!"#$%&()\*\+,-\./:;<=>?@\[\\\]^_`{|}~\']'
_STRIP_PATTERN = re.compile(DEFAULT_STRIP_REGEX)

_STANDARDIZE_MODES = ('lower_and_strip_punctuation', 'lower',
                      'strip_punctuation')
_SPLIT_MODES = ('whitespace', 'character')


def _standardize_fn(standardize) -> Callable[[str], str] | None:
    if standardize is None or callable(standardize):
        return standardize
    if standardize == 'lower_and_strip_punctuation':
        return lambda s: _STRIP_PATTERN.sub('', s.lower())
    if standardize == 'lower':
        return str.lower
    if standardize == 'strip_punctuation':
        return lambda s: _STRIP_PATTERN.sub('', s)
    raise ValueError(f"Unknown `standardize` {standardize!r}; expected one "
                     f"of {_STANDARDIZE_MODES}, None or a callable")


def _split_fn(split) -> Callable[[str], list] | None:
    if split is None or callable(split):
        return split
    if split == 'whitespace':
        return str.split
    if split == 'character':
        return list
    raise ValueError(f"Unknown `split` {split!r}; expected one of "
                     f"{_SPLIT_MODES}, None or a callable")


def _ngram_widths(ngrams) -> tuple[int, ...] | None:
    if ngrams is None:
        return None
    if isinstance(ngrams, (int, np.integer, float)):
        n = check_positive_int(ngrams, 'ngrams')
        return tuple(range(1, n + 1))
    widths = tuple(check_positive_int(n, 'ngrams') for n in ngrams)
    if not widths:
        raise ValueError("`ngrams` must not be empty")
    return widths


def make_ngrams(tokens: list, widths) -> list:
    out = []
    for n in widths:
        out.extend(' '.join(tokens[i:i + n])
                   for i in range(len(tokens) - n + 1))
    return out


class TextVectorization(PreprocessingLayer):
    """Turn raw strings into token index sequences or token-count vectors.

    In ``output_mode='int'`` index 0 is padding and index 1 is the
    out-of-vocabulary token.  Rows are padded (or truncated) to
    ``output_sequence_length`` or, when that is unset, to the longest
    row in the batch.
    """

    def __init__(self, max_tokens: int | None = None,
                 standardize='lower_and_strip_punctuation',
                 split='whitespace', ngrams=None, output_mode: str = 'int',
                 output_sequence_length: int | None = None,
                 pad_to_max_tokens: bool = False, vocabulary=None,
                 idf_weights=None, ragged: bool = False,
                 encoding: str = 'utf-8', name: str | None = None,
                 dtype=None):
        super().__init__(name=name, dtype=dtype)
        self.output_mode = normalize_output_mode(
            output_mode, ('int', 'multi_hot', 'count', 'tf_idf'))
        self.standardize = standardize
        self.split = split
        self._standardize = _standardize_fn(standardize)
        self._split = _split_fn(split)
        self.ngrams = ngrams
        self._ngram_widths = _ngram_widths(ngrams)
        if self._ngram_widths is not None and self._split is None:
            raise ValueError("`ngrams` requires `split` to be set")
        self.output_sequence_length = check_positive_int(
            output_sequence_length, 'output_sequence_length',
            allow_none=True)
        self.ragged = bool(ragged)
        if self.output_mode != 'int':
            if self.output_sequence_length is not None:
                raise ValueError("`output_sequence_length` is only used "
                                 "with output_mode='int'")
            if self.ragged:
                raise ValueError("`ragged=True` requires output_mode='int'")
        if self.ragged and self.output_sequence_length is not None:
            raise ValueError("`ragged=True` cannot be combined with "
                             "`output_sequence_length`")

        self._lookup = StringLookup(
            max_tokens=max_tokens, num_oov_indices=1, mask_token='',
            oov_token='[UNK]', vocabulary=vocabulary,
            idf_weights=idf_weights, encoding=encoding,
            output_mode=self.output_mode,
            pad_to_max_tokens=pad_to_max_tokens,
            name=f"{self.name}_lookup", dtype=dtype)
        self._is_adapted = self._lookup.is_adapted

    # ---- Tokenization ----

    def _as_documents(self, inputs) -> np.ndarray:
        arr = np.asarray(inputs, dtype=object)
        if arr.ndim == 0:
            arr = arr.reshape(1)
        if arr.ndim == 2 and arr.shape[-1] == 1:
            arr = arr[:, 0]
        if arr.ndim != 1:
            raise ValueError(
                "TextVectorization expects a batch of strings of shape "
                f"(batch,) or (batch, 1), got shape {np.shape(inputs)}")
        return arr

    def tokenize(self, text) -> list:
        """Standardized, split and n-grammed tokens of one string."""
        text = self._lookup._to_key(text)
        if self._standardize is not None:
            text = self._standardize(text)
        if self._split is None:
            return [text]
        tokens = list(self._split(text))
        if self._ngram_widths is not None:
            tokens = make_ngrams(tokens, self._ngram_widths)
        return tokens

    # ---- Adapt ----

    def reset_state(self):
        self._lookup.reset_state()

    def update_state(self, data):
        docs = self._as_documents(data)
        self._lookup.count_documents([self.tokenize(d) for d in docs])

    def finalize_state(self):
        self._lookup.finalize_state()
        self._lookup._is_adapted = True

    # ---- Vocabulary ----

    def get_vocabulary(self, include_special_tokens: bool = True) -> list:
        return self._lookup.get_vocabulary(include_special_tokens)

    def set_vocabulary(self, vocabulary, idf_weights=None):
        self._lookup.set_vocabulary(vocabulary, idf_weights)
        self._is_adapted = True

    def vocabulary_size(self) -> int:
        return self._lookup.vocabulary_size()

    def state_dict(self) -> dict:
        return self._lookup.state_dict()

    # ---- Call ----

    def call(self, inputs):
        self._check_adapted()
        docs = self._as_documents(inputs)
        rows = [self._lookup.lookup_indices(self.tokenize(d)) for d in docs]

        if self.output_mode == 'int':
            if self.ragged:
                return rows
            length = self.output_sequence_length
            if length is None:
                length = max((len(r) for r in rows), default=0)
            out = np.zeros((len(rows), length), dtype=np.int64)
            for i, r in enumerate(rows):
                r = r[:length]
                out[i, :len(r)] = r
            return out

        width = max((len(r) for r in rows), default=0)
        padded = np.full((len(rows), max(width, 1)), -1, dtype=np.int64)
        for i, r in enumerate(rows):
            padded[i, :len(r)] = r
        return self._lookup.encode(padded)

    # ---- Config ----

    def get_config(self) -> dict:
        config = super().get_config()
        lookup_config = self._lookup.get_config()
        config.update(
            max_tokens=lookup_config['max_tokens'],
            standardize=self.standardize,
            split=self.split,
            ngrams=self.ngrams,
            output_mode=self.output_mode,
            output_sequence_length=self.output_sequence_length,
            pad_to_max_tokens=lookup_config['pad_to_max_tokens'],
            vocabulary=lookup_config['vocabulary'],
            idf_weights=lookup_config['idf_weights'],
            ragged=self.ragged,
            encoding=lookup_config['encoding'],
        )
        return config

    def extra_repr(self) -> str:
        return (f"vocabulary_size={self.vocabulary_size()}, "
                f"output_mode={self.output_mode!r}")
