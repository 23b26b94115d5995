"""Resolve free-text page headers to canonical instrument names."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from difflib import SequenceMatcher
from pathlib import Path
from typing import Iterable

from score_splitter.config.catalog import (
    DEFAULT_MATCH_THRESHOLD,
    InstrumentCatalog,
    default_catalog,
    load_catalog_config,
)
from score_splitter.text import normalize_label

logger = logging.getLogger(__name__)

# Desk/voice numbers: "2", "2nd", and after the name also "II".
_NUMBER_RE = re.compile(r"(\d+)(?:st|nd|rd|th)?")
_ROMAN_RE = re.compile(r"i{1,3}|iv|vi{0,3}|ix")


@dataclass(frozen=True, slots=True)
class Page:
    """One page as handed over by the text-extraction step."""

    index: int  # 1-based
    raw_text: str | None = None


@dataclass(frozen=True, slots=True)
class ResolvedLabel:
    """Instrument attributed to a single page."""

    page_index: int
    instrument: str
    matched: bool
    score: float = 0.0  # best similarity seen, inherited on continuation pages


@dataclass(slots=True)
class ResolverConfig:
    """Tunables for label matching.

    ``carry_forward`` enables the continuation rule: a page without a label
    inherits the label of the page before it. ``part_numbers`` matches the
    instrument without its desk number and appends the number afterwards, so
    "Cornet 1" and "Cornet 2" stay separate parts.
    """

    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    carry_forward: bool = True
    part_numbers: bool = True


def similarity(left: str, right: str) -> float:
    """Similarity ratio in ``[0, 1]`` between two normalised strings."""
    if not left or not right:
        return 0.0
    return SequenceMatcher(None, left, right).ratio()


def _designator(token: str, *, allow_roman: bool) -> str | None:
    number = _NUMBER_RE.fullmatch(token)
    if number:
        return number.group(1)
    if allow_roman and _ROMAN_RE.fullmatch(token):
        return token.upper()
    return None


def split_part_number(normalized: str) -> tuple[str, str | None]:
    """Separate a desk/voice number from a normalised header.

    >>> split_part_number("2nd cornet")
    ('cornet', '2')
    >>> split_part_number("trumpet 1 2")
    ('trumpet', '1/2')
    """

    tokens = normalized.split(" ")
    leading: list[str] = []
    trailing: list[str] = []
    while len(tokens) > 1:
        value = _designator(tokens[-1], allow_roman=True)
        if value is None:
            break
        trailing.insert(0, value)
        tokens.pop()
    while len(tokens) > 1:
        value = _designator(tokens[0], allow_roman=False)
        if value is None:
            break
        leading.append(value)
        tokens.pop(0)
    designators = leading + trailing
    return " ".join(tokens), "/".join(designators) if designators else None


@dataclass(slots=True)
class LabelResolver:
    """Fuzzy-match normalised page text against the instrument catalog."""

    catalog: InstrumentCatalog
    config: ResolverConfig = field(default_factory=ResolverConfig)
    _aliases: tuple[tuple[str, str], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._aliases = self.catalog.all_aliases_normalized()

    @classmethod
    def from_yaml(
        cls, path: Path | None = None, *, carry_forward: bool = True
    ) -> "LabelResolver":
        """Convenience constructor using the threshold stored in the YAML file."""

        catalog = default_catalog() if path is None else load_catalog_config(path)
        config = ResolverConfig(
            match_threshold=catalog.match_threshold, carry_forward=carry_forward
        )
        return cls(catalog=catalog, config=config)

    def best_match(self, normalized: str) -> tuple[str | None, float]:
        """Return the best canonical name and its score; ties keep catalog order."""

        best_name: str | None = None
        best_score = 0.0
        for alias, canonical in self._aliases:
            score = 1.0 if alias == normalized else similarity(normalized, alias)
            if score > best_score:
                best_name, best_score = canonical, score
                if score == 1.0:
                    break
        return best_name, best_score

    def resolve(
        self,
        raw: str | None,
        previous: ResolvedLabel | None = None,
        *,
        page_index: int | None = None,
    ) -> ResolvedLabel:
        """Attribute one page to an instrument. Never raises."""

        if page_index is None:
            page_index = previous.page_index + 1 if previous is not None else 1

        normalized = normalize_label(raw)
        if not normalized:
            if previous is not None and self.config.carry_forward:
                return ResolvedLabel(
                    page_index=page_index,
                    instrument=previous.instrument,
                    matched=previous.matched,
                    score=previous.score,
                )
            return ResolvedLabel(page_index=page_index, instrument="", matched=False)

        instrument_text, number = normalized, None
        if self.config.part_numbers:
            instrument_text, number = split_part_number(normalized)

        canonical, score = self.best_match(instrument_text)
        if canonical is not None and score >= self.config.match_threshold:
            if number is not None:
                canonical = f"{canonical} {number}"
            return ResolvedLabel(
                page_index=page_index, instrument=canonical, matched=True, score=score
            )

        logger.debug(
            "page %d: no catalog match for %r (best %.2f)", page_index, normalized, score
        )
        return ResolvedLabel(
            page_index=page_index, instrument=normalized, matched=False, score=score
        )

    def resolve_page(
        self, page: Page, previous: ResolvedLabel | None = None
    ) -> ResolvedLabel:
        return self.resolve(page.raw_text, previous, page_index=page.index)

    def resolve_pages(self, texts: Iterable[str | None]) -> list[ResolvedLabel]:
        """Resolve an ordered run of page texts, page 1 first."""

        resolved: list[ResolvedLabel] = []
        previous: ResolvedLabel | None = None
        for index, raw in enumerate(texts, start=1):
            previous = self.resolve(raw, previous, page_index=index)
            resolved.append(previous)
        return resolved


__all__ = [
    "LabelResolver",
    "Page",
    "ResolvedLabel",
    "ResolverConfig",
    "similarity",
    "split_part_number",
]
