"""Sentence segmentation on terminal punctuation.

Splitting is punctuation-only: an abbreviation such as ``Dr. Smith`` is
split into two fragments. Confidence thresholds downstream are tuned
against this behaviour.
"""

from __future__ import annotations

import re

_SENTENCE_BREAK = re.compile(r"[.!?]+")


def split_into_fragments(text: str, *, min_length: int = 10) -> list[str]:
    """Split ``text`` into trimmed fragments longer than ``min_length`` characters."""
    if not text:
        return []
    fragments = (part.strip() for part in _SENTENCE_BREAK.split(text))
    return [f for f in fragments if len(f) > min_length]
