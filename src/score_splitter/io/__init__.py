"""Filename derivation and page-text ingestion helpers."""

from score_splitter.io.filenames import (
    base_filename_from_upload,
    derive_filename,
    sanitize_instrument,
)
from score_splitter.io.page_text import load_page_texts

__all__ = [
    "base_filename_from_upload",
    "derive_filename",
    "load_page_texts",
    "sanitize_instrument",
]
