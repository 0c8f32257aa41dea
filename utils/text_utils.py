"""
Text utilities for handling Swedish text with accents.

Used for header matching and search comparison.
"""

import re
import unicodedata
from typing import Any

_NON_ALNUM = re.compile(r"[\W_]+")
_HEADER_PUNCTUATION = re.compile(r"[\s\-()]")


def strip_accents(text: str) -> str:
    """
    Remove combining marks after NFD decomposition.

    - "Färg" → "Farg"
    - "Höjd" → "Hojd"
    """
    normalized = unicodedata.normalize("NFD", text)
    return "".join(
        c for c in normalized
        if unicodedata.category(c) != "Mn"
    )


def normalize_search_text(value: Any) -> str:
    """
    Normalize text for search comparison.

    Lower-cases, strips accents, turns every non letter/digit into a space
    and collapses whitespace:
    - "Blå Stol-XL" → "bla stol xl"
    - "  KÖKS  (bord) " → "koks bord"

    Args:
        value: Field value or query (None becomes "")

    Returns:
        Normalized string, possibly empty
    """
    if value is None:
        return ""
    text = strip_accents(str(value).lower())
    return " ".join(_NON_ALNUM.sub(" ", text).split())


def normalize_header(header: Any) -> str:
    """Trim and lower-case a column header."""
    return str(header).strip().lower()


def compact_header(header: str) -> str:
    """
    Remove whitespace, hyphens and parentheses from a header.

    "pris exkl. moms (värde)" → "prisexkl.momsvärde"
    """
    return _HEADER_PUNCTUATION.sub("", header)
