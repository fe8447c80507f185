# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""kerasport.layers — preprocessing layers."""
from __future__ import annotations

# Base classes
from .base import Layer, PreprocessingLayer

# Stateless
from .category_encoding import CategoryEncoding
from .hashing import Hashing
from .hashed_crossing import HashedCrossing

# Adapted
from .index_lookup import IndexLookup, StringLookup, IntegerLookup
from .text_vectorization import TextVectorization
from .normalization import Normalization
from .discretization import Discretization

__all__ = [
    'Layer', 'PreprocessingLayer',
    'CategoryEncoding', 'Hashing', 'HashedCrossing',
    'IndexLookup', 'StringLookup', 'IntegerLookup',
    'TextVectorization', 'Normalization', 'Discretization',
]
