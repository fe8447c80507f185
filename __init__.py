# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""
Kerasport — the Keras loss library and preprocessing-layer API on NumPy.

Two ways in: the classes under :mod:`kerasport.losses` and
:mod:`kerasport.layers`, or the flat forwarding functions
(``loss_huber``, ``layer_string_lookup``, ``adapt`` ...) re-exported
here from :mod:`kerasport.wrappers`.

Usage::

    import numpy as np
    import kerasport as kp

    kp.loss_huber([[0., 1.]], [[0.5, 3.]], delta=1.0)
    lookup = kp.adapt(kp.layer_string_lookup(), np.array(["a", "b", "a"]))
    lookup(np.array(["a", "zzz", ""]))      # -> [2, 1, 0]
"""
from __future__ import annotations

import logging

__version__ = "0.1.0"
__author__ = "Pictofeed, LLC"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# ── Configuration ──
from .config import floatx, set_floatx, epsilon, set_epsilon

# ── Dtypes ──
from . import dtype

# ── Sub-packages ──
from . import losses
from . import layers
from . import utils

# ── Forwarding functions ──
from .wrappers import (
    loss_binary_crossentropy,
    loss_binary_focal_crossentropy,
    loss_categorical_crossentropy,
    loss_sparse_categorical_crossentropy,
    loss_poisson,
    loss_kl_divergence,
    loss_mean_squared_error,
    loss_mean_absolute_error,
    loss_mean_absolute_percentage_error,
    loss_mean_squared_logarithmic_error,
    loss_cosine_similarity,
    loss_huber,
    loss_log_cosh,
    loss_hinge,
    loss_squared_hinge,
    loss_categorical_hinge,
    layer_text_vectorization,
    layer_string_lookup,
    layer_integer_lookup,
    layer_normalization,
    layer_discretization,
    layer_hashing,
    layer_category_encoding,
    layer_hashed_crossing,
    adapt,
    get_vocabulary,
    set_vocabulary,
)

__all__ = [
    "__version__",
    "__author__",

    # Config
    'floatx', 'set_floatx', 'epsilon', 'set_epsilon',

    # Sub-packages
    'dtype', 'losses', 'layers', 'utils',

    # Losses
    'loss_binary_crossentropy', 'loss_binary_focal_crossentropy',
    'loss_categorical_crossentropy', 'loss_sparse_categorical_crossentropy',
    'loss_poisson', 'loss_kl_divergence',
    'loss_mean_squared_error', 'loss_mean_absolute_error',
    'loss_mean_absolute_percentage_error',
    'loss_mean_squared_logarithmic_error',
    'loss_cosine_similarity', 'loss_huber', 'loss_log_cosh',
    'loss_hinge', 'loss_squared_hinge', 'loss_categorical_hinge',

    # Layers
    'layer_text_vectorization', 'layer_string_lookup',
    'layer_integer_lookup', 'layer_normalization', 'layer_discretization',
    'layer_hashing', 'layer_category_encoding', 'layer_hashed_crossing',
    'adapt', 'get_vocabulary', 'set_vocabulary',
]
