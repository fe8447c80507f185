# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Kerasport — Losses & Preprocessing Layers                           ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""utils.vocab_io — vocabulary files.

A vocabulary file is UTF-8 text with one token per line; line ``i`` is
the token at vocabulary position ``i``.
"""
from __future__ import annotations

import os


def is_vocabulary_path(value) -> bool:
    return isinstance(value, (str, os.PathLike))


def load_vocabulary(path) -> list[str]:
    if not os.path.isfile(path):
        raise ValueError(f"Vocabulary file {os.fspath(path)!r} does not exist")
    with open(path, 'r', encoding='utf-8') as fh:
        text = fh.read()
    lines = text.split('\n')
    # A trailing newline does not start an extra token.
    if lines and lines[-1] == '':
        lines.pop()
    return [line.rstrip('\r') for line in lines]


def save_vocabulary(vocabulary, path) -> None:
    with open(path, 'w', encoding='utf-8') as fh:
        for token in vocabulary:
            fh.write(f"{token}\n")
