"""Group resolved page labels into contiguous instrument splits."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from score_splitter.segments.label_resolver import LabelResolver, ResolvedLabel


class StructuralViolation(AssertionError):
    """Raised when a split list no longer covers its pages exactly once, in order."""


@dataclass(slots=True)
class Split:
    """A contiguous run of pages assigned to one instrument."""

    instrument: str
    pages: list[int] = field(default_factory=list)
    matched: bool = True

    @property
    def start_page(self) -> int:
        return self.pages[0]

    @property
    def end_page(self) -> int:
        return self.pages[-1]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def to_dict(self) -> dict[str, object]:
        return {
            "instrument": self.instrument,
            "start_page": self.start_page,
            "end_page": self.end_page,
            "pages": list(self.pages),
            "matched": self.matched,
        }


def segment(resolved_labels: Iterable[ResolvedLabel]) -> list[Split]:
    """Run-length encode pages by their exact resolved instrument string."""

    splits: list[Split] = []
    current: Split | None = None
    for label in resolved_labels:
        if current is None or label.instrument != current.instrument:
            current = Split(instrument=label.instrument, matched=label.matched)
            splits.append(current)
        current.pages.append(label.page_index)
    return splits


def check_coverage(splits: Sequence[Split], page_count: int | None = None) -> None:
    """Assert the splits reconstruct pages ``1..N`` with no gaps or overlaps."""

    expected = 1
    for position, split in enumerate(splits):
        if not split.pages:
            raise StructuralViolation(f"split {position} has no pages")
        for page in split.pages:
            if page != expected:
                raise StructuralViolation(
                    f"split {position} ({split.instrument!r}) has page {page}, expected {expected}"
                )
            expected += 1
    if page_count is not None and expected - 1 != page_count:
        raise StructuralViolation(
            f"splits cover {expected - 1} pages, expected {page_count}"
        )


def split_pages(
    texts: Iterable[str | None], resolver: LabelResolver | None = None
) -> list[Split]:
    """Resolve page texts and segment them in one go."""

    resolver = resolver or LabelResolver.from_yaml()
    splits = segment(resolver.resolve_pages(texts))
    check_coverage(splits)
    return splits


__all__ = ["Split", "StructuralViolation", "check_coverage", "segment", "split_pages"]
