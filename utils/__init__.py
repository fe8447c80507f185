# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""kerasport.utils — Utility modules."""
from __future__ import annotations

from . import batching
from . import vocab_io

__all__ = ['batching', 'vocab_io']
