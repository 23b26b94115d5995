"""Shared text normalisation for page labels and catalog aliases."""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def _replace_punctuation(value: str) -> str:
    return "".join(
        " " if char != "-" and unicodedata.category(char).startswith("P") else char
        for char in value
    )


def normalize_label(value: str | None) -> str:
    """Trim, collapse whitespace, case-fold and turn punctuation except hyphens into spaces.

    >>> normalize_label("  1st   Horn (Eb). ")
    '1st horn eb'
    >>> normalize_label("Tpt. 1/2")
    'tpt 1 2'
    """

    if not value:
        return ""
    normalized = _replace_punctuation(unicodedata.normalize("NFC", value))
    normalized = _WHITESPACE_RE.sub(" ", normalized).strip()
    return normalized.casefold()


__all__ = ["normalize_label"]
