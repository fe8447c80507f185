# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""kerasport.config — numeric configuration.

Exposes the two knobs every loss and preprocessing layer reads:
``floatx`` (the default floating dtype of computed outputs) and
``epsilon`` (the fuzz factor used for clipping and safe division).

Initial values may be set through the environment::

    KERASPORT_FLOATX=float64
    KERASPORT_EPSILON=1e-9
"""
from __future__ import annotations

import os

import numpy as np

_VALID_FLOATX = ('float16', 'float32', 'float64')


class _Config:
    """Module-level numeric configuration singleton."""
    __slots__ = ('_floatx', '_epsilon')

    def __init__(self):
        self._floatx = _check_floatx(
            os.environ.get('KERASPORT_FLOATX', 'float32'))
        self._epsilon = _check_epsilon(
            os.environ.get('KERASPORT_EPSILON', '1e-7'))

    # ── floatx ──
    @property
    def floatx(self) -> str:
        return self._floatx

    @floatx.setter
    def floatx(self, value: str):
        self._floatx = _check_floatx(value)

    # ── epsilon ──
    @property
    def epsilon(self) -> float:
        return self._epsilon

    @epsilon.setter
    def epsilon(self, value: float):
        self._epsilon = _check_epsilon(value)

    def __repr__(self) -> str:
        return (f"kerasport.config(floatx={self._floatx!r}, "
                f"epsilon={self._epsilon!r})")


def _check_floatx(value) -> str:
    name = str(value)
    if name not in _VALID_FLOATX:
        raise ValueError(
            f"Unknown floatx {value!r}; expected one of {_VALID_FLOATX}")
    return name


def _check_epsilon(value) -> float:
    try:
        eps = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"epsilon must be a number, got {value!r}") from None
    if not eps > 0.0:
        raise ValueError(f"epsilon must be positive, got {eps}")
    return eps


_config = _Config()


def floatx() -> str:
    """Default float dtype name, e.g. ``'float32'``."""
    return _config.floatx


def set_floatx(value: str) -> None:
    _config.floatx = value


def floatx_dtype() -> np.dtype:
    return np.dtype(_config.floatx)


def epsilon() -> float:
    """Fuzz factor used in numeric expressions."""
    return _config.epsilon


def set_epsilon(value: float) -> None:
    _config.epsilon = value


def reload_from_env() -> None:
    """Re-read ``KERASPORT_*`` environment variables into the singleton."""
    global _config
    _config = _Config()
