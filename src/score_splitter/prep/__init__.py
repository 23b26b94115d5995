"""Preview summaries for detected splits."""

from score_splitter.prep.summaries import (
    SplitSummary,
    page_range_label,
    stats_line,
    summarize_session,
    summary_frame,
)

__all__ = [
    "SplitSummary",
    "page_range_label",
    "stats_line",
    "summarize_session",
    "summary_frame",
]
