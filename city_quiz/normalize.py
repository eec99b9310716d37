"""
Canonical comparison keys for free-text place names.

Rules, applied in order:
  1. Decompose accented characters and drop the combining marks
  2. Lowercase
  3. Standalone "saint" becomes "st"
  4. Remove periods and apostrophes; hyphens separate words
  5. Collapse whitespace and trim
"""

from __future__ import annotations

import re
import unicodedata

_SAINT_RE = re.compile(r"\bsaint\b")
_DROP_RE = re.compile(r"[.'’]")
_HYPHEN_RE = re.compile(r"[-‐‑–]")
_SPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Return the comparison key for a place name. Empty input gives ""."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    key = stripped.lower()
    key = _SAINT_RE.sub("st", key)
    key = _DROP_RE.sub("", key)
    key = _HYPHEN_RE.sub(" ", key)
    return _SPACE_RE.sub(" ", key).strip()
