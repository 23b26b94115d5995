"""Utilities for loading the instrument catalog template."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Mapping

import yaml

from score_splitter.text import normalize_label

DEFAULT_CATALOG_PATH = Path(__file__).with_name("instruments.yml")
DEFAULT_MATCH_THRESHOLD = 0.8


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One canonical instrument and the normalised spellings that denote it."""

    canonical_name: str
    aliases: frozenset[str]


@dataclass(frozen=True, slots=True)
class InstrumentCatalog:
    """Read-only container with loaded catalog entries."""

    version: int
    entries: tuple[CatalogEntry, ...]
    match_threshold: float = DEFAULT_MATCH_THRESHOLD

    def all_aliases_normalized(self) -> tuple[tuple[str, str], ...]:
        """Return ``(alias, canonical_name)`` pairs in catalog order."""
        return _alias_pairs(self.entries)

    def lookup(self, normalized_text: str) -> str | None:
        """Exact alias lookup; fuzzy matching lives in the label resolver."""
        for alias, canonical in self.all_aliases_normalized():
            if alias == normalized_text:
                return canonical
        return None

    def canonical_names(self) -> tuple[str, ...]:
        return tuple(entry.canonical_name for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@lru_cache(maxsize=None)
def _alias_pairs(entries: tuple[CatalogEntry, ...]) -> tuple[tuple[str, str], ...]:
    pairs: list[tuple[str, str]] = []
    for entry in entries:
        for alias in sorted(entry.aliases):
            pairs.append((alias, entry.canonical_name))
    return tuple(pairs)


def _normalize_aliases(canonical: str, raw_aliases: Iterable[object] | None) -> frozenset[str]:
    aliases = {normalize_label(canonical)}
    for alias in raw_aliases or ():
        if alias is None:
            continue
        normalized = normalize_label(str(alias))
        if normalized:
            aliases.add(normalized)
    aliases.discard("")
    return frozenset(aliases)


def build_catalog(
    mapping: Mapping[str, Iterable[str] | None],
    *,
    version: int = 1,
    match_threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> InstrumentCatalog:
    """Create a catalog from ``{canonical_name: aliases}`` in insertion order."""

    entries = tuple(
        CatalogEntry(
            canonical_name=str(name),
            aliases=_normalize_aliases(str(name), aliases),
        )
        for name, aliases in mapping.items()
    )
    return InstrumentCatalog(
        version=version, entries=entries, match_threshold=float(match_threshold)
    )


def load_catalog_config(
    path: Path | None = None, *, strict: bool = True
) -> InstrumentCatalog:
    """Read the YAML file describing canonical instruments."""

    source = path or DEFAULT_CATALOG_PATH
    if not source.exists():
        message = f"Instrument catalog not found: {source}"
        if strict:
            raise FileNotFoundError(message)
        return InstrumentCatalog(version=1, entries=())

    data = yaml.safe_load(source.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Invalid instrument catalog format: {source}")

    instruments = data.get("instruments") or {}
    if not isinstance(instruments, Mapping):
        raise ValueError(f"'instruments' must be a mapping in {source}")

    mapping: dict[str, list[str]] = {}
    for name, node in instruments.items():
        if isinstance(node, Mapping):
            raw_aliases = node.get("aliases")
        elif isinstance(node, list):
            raw_aliases = node
        else:
            raw_aliases = None
        mapping[str(name)] = list(raw_aliases or ())

    return build_catalog(
        mapping,
        version=int(data.get("version", 1)),
        match_threshold=float(data.get("match_threshold", DEFAULT_MATCH_THRESHOLD)),
    )


@lru_cache(maxsize=1)
def default_catalog() -> InstrumentCatalog:
    """Process-wide catalog shipped with the package, loaded on first use."""
    return load_catalog_config(DEFAULT_CATALOG_PATH)


__all__ = [
    "DEFAULT_CATALOG_PATH",
    "DEFAULT_MATCH_THRESHOLD",
    "CatalogEntry",
    "InstrumentCatalog",
    "build_catalog",
    "default_catalog",
    "load_catalog_config",
]
