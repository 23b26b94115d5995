"""Page label resolution and contiguous split detection."""

from score_splitter.segments.label_resolver import (
    LabelResolver,
    Page,
    ResolvedLabel,
    ResolverConfig,
)
from score_splitter.segments.segmenter import (
    Split,
    StructuralViolation,
    check_coverage,
    segment,
    split_pages,
)

__all__: list[str] = [
    "LabelResolver",
    "Page",
    "ResolvedLabel",
    "ResolverConfig",
    "Split",
    "StructuralViolation",
    "check_coverage",
    "segment",
    "split_pages",
]
