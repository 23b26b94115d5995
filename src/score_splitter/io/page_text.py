"""Read per-page label text produced by the text-extraction step."""

from __future__ import annotations

import json
from pathlib import Path

import yaml


def _coerce(values: object, source: Path) -> list[str | None]:
    if not isinstance(values, list):
        raise ValueError(f"Expected a list of page labels in {source}")
    texts: list[str | None] = []
    for value in values:
        if value is None:
            texts.append(None)
        else:
            text = str(value)
            texts.append(text if text.strip() else None)
    return texts


def load_page_texts(path: Path) -> list[str | None]:
    """Return one entry per page, page 1 first; ``None`` marks a page with no text.

    JSON and YAML files hold a list (``null`` for empty pages). Anything else is
    read as plain text with one line per page, blank lines meaning no text.
    """

    if not path.exists():
        raise FileNotFoundError(f"Page text file not found: {path}")

    content = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".json":
        return _coerce(json.loads(content), path)
    if suffix in {".yml", ".yaml"}:
        return _coerce(yaml.safe_load(content) or [], path)

    return [line if line.strip() else None for line in content.splitlines()]


__all__ = ["load_page_texts"]
