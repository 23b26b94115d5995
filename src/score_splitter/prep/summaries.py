"""Summaries of detected splits for previews and tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import pandas as pd

from score_splitter.segments.segmenter import Split
from score_splitter.session.edit_session import EditSession

SUMMARY_COLUMNS = ("#", "Instrument", "Pages", "Count", "File", "Matched")


def _page_span(start_page: int, end_page: int) -> str:
    if start_page == end_page:
        return f"Page {start_page}"
    return f"Pages {start_page}-{end_page}"


def page_range_label(split: Split) -> str:
    """Human readable page span, e.g. ``Page 3`` or ``Pages 1-2``."""
    return _page_span(split.start_page, split.end_page)


@dataclass(slots=True)
class SplitSummary:
    """Preview row for one split."""

    index: int
    instrument: str
    start_page: int
    end_page: int
    page_count: int
    filename: str
    matched: bool

    @property
    def page_range(self) -> str:
        return _page_span(self.start_page, self.end_page)

    def as_row(self) -> tuple[str, ...]:
        """Return human readable values for tables."""

        label = "page" if self.page_count == 1 else "pages"
        return (
            str(self.index + 1),
            self.instrument or "(unlabelled)",
            self.page_range,
            f"{self.page_count} {label}",
            self.filename,
            "yes" if self.matched else "no",
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "index": self.index,
            "instrument": self.instrument,
            "start_page": self.start_page,
            "end_page": self.end_page,
            "page_count": self.page_count,
            "filename": self.filename,
            "matched": self.matched,
        }


def summarize_session(session: EditSession) -> list[SplitSummary]:
    """Collect one summary per split in session order."""

    summaries: list[SplitSummary] = []
    for index, output in enumerate(session.outputs()):
        split = output.split
        summaries.append(
            SplitSummary(
                index=index,
                instrument=split.instrument,
                start_page=split.start_page,
                end_page=split.end_page,
                page_count=split.page_count,
                filename=output.filename,
                matched=split.matched,
            )
        )
    return summaries


def summary_frame(summaries: Sequence[SplitSummary]) -> pd.DataFrame:
    """Tabular view of the summaries, one row per split."""

    return pd.DataFrame(
        [summary.as_row() for summary in summaries], columns=list(SUMMARY_COLUMNS)
    )


def stats_line(session: EditSession) -> str:
    """One-line overview, e.g. ``Found 3 instrument parts in 12 pages``."""

    return f"Found {len(session)} instrument parts in {session.page_count} pages"


__all__ = [
    "SUMMARY_COLUMNS",
    "SplitSummary",
    "page_range_label",
    "stats_line",
    "summarize_session",
    "summary_frame",
]
