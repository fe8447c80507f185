# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Layer — base class for all preprocessing layers."""
from __future__ import annotations

import logging
from collections import OrderedDict

import numpy as np

from .. import dtype as _dtype
from ..utils.batching import iter_batches

logger = logging.getLogger(__name__)

OUTPUT_MODES = ('int', 'one_hot', 'multi_hot', 'count', 'tf_idf')


def normalize_output_mode(output_mode: str, allowed=OUTPUT_MODES) -> str:
    mode = str(output_mode).replace('-', '_')
    if mode not in allowed:
        raise ValueError(
            f"Unknown `output_mode` {output_mode!r}; expected one of "
            f"{tuple(allowed)}")
    return mode


def check_positive_int(value, name: str, allow_none: bool = False,
                       minimum: int = 1):
    if value is None:
        if allow_none:
            return None
        raise ValueError(f"`{name}` is required")
    if isinstance(value, (bool, np.bool_)):
        raise ValueError(f"`{name}` must be an integer, got {value!r}")
    try:
        as_int = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"`{name}` must be an integer, got {value!r}") from None
    if as_int != value or as_int < minimum:
        raise ValueError(f"`{name}` must be an integer >= {minimum}, "
                         f"got {value!r}")
    return as_int


class Layer:
    """Base class for all layers.

    Holds layer configuration as plain attributes and derived numeric
    state in an ordered ``_state`` table exposed via :meth:`state_dict`.
    """

    _state: OrderedDict

    def __init__(self, name: str | None = None, dtype=None):
        object.__setattr__(self, '_state', OrderedDict())
        self.name = name or _default_name(type(self).__name__)
        self.dtype = _dtype.resolve(dtype) if dtype is not None else None

    def call(self, inputs):
        raise NotImplementedError

    def __call__(self, inputs, *args, **kwargs):
        return self.call(inputs, *args, **kwargs)

    # ---- State ----

    def register_state(self, name: str, value):
        self._state[name] = value

    def __getattr__(self, name: str):
        state = self.__dict__.get('_state') or {}
        if name in state:
            return state[name]
        raise AttributeError(f"'{type(self).__name__}' has no attribute '{name}'")

    def __setattr__(self, name: str, value):
        state = self.__dict__.get('_state')
        if state is not None and name in state:
            state[name] = value
        else:
            object.__setattr__(self, name, value)

    def state_dict(self) -> dict:
        sd = OrderedDict()
        for name, value in self._state.items():
            if value is not None:
                sd[name] = value
        return sd

    # ---- Config ----

    def get_config(self) -> dict:
        config = {'name': self.name}
        if self.dtype is not None:
            config['dtype'] = self.dtype.value
        return config

    @classmethod
    def from_config(cls, config: dict) -> 'Layer':
        return cls(**config)

    def extra_repr(self) -> str:
        return ''

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.extra_repr()})"


class PreprocessingLayer(Layer):
    """A layer whose state is computed from sample data by :meth:`adapt`.

    Subclasses implement ``reset_state``, ``update_state`` and
    ``finalize_state``.  Every ``adapt`` call starts from a clean state,
    so state from a previous ``adapt`` never leaks into the next one.
    """

    def __init__(self, name: str | None = None, dtype=None):
        super().__init__(name=name, dtype=dtype)
        self._is_adapted = False

    @property
    def is_adapted(self) -> bool:
        return self._is_adapted

    def adapt(self, data, batch_size: int | None = None,
              steps: int | None = None) -> 'PreprocessingLayer':
        self.reset_state()
        n_batches = 0
        for batch in iter_batches(data, batch_size=batch_size, steps=steps):
            self.update_state(batch)
            n_batches += 1
        if n_batches == 0:
            raise ValueError(f"{type(self).__name__}.adapt received no data")
        self.finalize_state()
        self._is_adapted = True
        logger.debug("%s adapted on %d batch(es)", self.name, n_batches)
        return self

    def reset_state(self):
        raise NotImplementedError

    def update_state(self, data):
        raise NotImplementedError

    def finalize_state(self):
        pass

    def _check_adapted(self):
        if not self._is_adapted:
            raise RuntimeError(
                f"{type(self).__name__} has no state yet. Call `adapt()` "
                f"or pass the state to the constructor before using it.")


_NAME_COUNTS: dict[str, int] = {}


def _default_name(class_name: str) -> str:
    base = ''.join('_' + c.lower() if c.isupper() else c
                   for c in class_name).lstrip('_')
    count = _NAME_COUNTS.get(base, 0)
    _NAME_COUNTS[base] = count + 1
    return base if count == 0 else f"{base}_{count}"
