"""Output filename helpers for split parts."""

from __future__ import annotations

import re
from pathlib import PurePath

_DISALLOWED_RE = re.compile(r"[^\w\s-]|_")
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")
_PDF_SUFFIX_RE = re.compile(r"\.pdf$", re.IGNORECASE)


def sanitize_instrument(instrument: str) -> str:
    """Keep letters, digits and hyphens; whitespace runs become one hyphen."""

    sanitized = _DISALLOWED_RE.sub("", instrument)
    sanitized = _WHITESPACE_RE.sub("-", sanitized)
    return _HYPHENS_RE.sub("-", sanitized)


def derive_filename(base: str, instrument: str) -> str:
    """Build ``{base}-{instrument}.pdf``; ``base`` is used verbatim.

    >>> derive_filename("MyBand", "1st Horn (Eb)!")
    'MyBand-1st-Horn-Eb.pdf'
    """

    return f"{base}-{sanitize_instrument(instrument)}.pdf"


def base_filename_from_upload(name: str) -> str:
    """Default base name for an uploaded document: no directory, no ``.pdf``."""

    return _PDF_SUFFIX_RE.sub("", PurePath(name).name)


__all__ = ["base_filename_from_upload", "derive_filename", "sanitize_instrument"]
