"""Command-line surface for previewing how a score would be split."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from score_splitter.config.catalog import default_catalog, load_catalog_config
from score_splitter.io.filenames import base_filename_from_upload
from score_splitter.io.page_text import load_page_texts
from score_splitter.logging import configure_logging
from score_splitter.prep.summaries import stats_line, summarize_session, summary_frame
from score_splitter.segments.label_resolver import LabelResolver, ResolverConfig
from score_splitter.session.edit_session import EditSession


def build_parser() -> argparse.ArgumentParser:
    """Create a reusable argument parser for scripts and tests."""
    parser = argparse.ArgumentParser(
        prog="score-splitter",
        description="Group per-page instrument labels into contiguous parts.",
    )
    parser.add_argument(
        "pages",
        nargs="?",
        type=Path,
        help="Page label file (one line per page, or a JSON/YAML list).",
    )
    parser.add_argument(
        "--base",
        default=None,
        help="Base name for output files (defaults to the page file's stem).",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        type=Path,
        help="Alternative instruments.yml for custom ensembles.",
    )
    parser.add_argument(
        "--threshold",
        default=None,
        type=float,
        help="Similarity needed to accept a catalog match (0-1).",
    )
    parser.add_argument(
        "--no-carry-forward",
        action="store_true",
        help="Do not attribute unlabelled pages to the preceding part.",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json", "table"),
        default="text",
        help="Output format for the split preview.",
    )
    parser.add_argument(
        "--inspect-catalog",
        action="store_true",
        help="List canonical instruments and their aliases, then exit.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level for diagnostics on stderr.",
    )
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    """Entry point invoked by `python -m score_splitter.cli` or the script hook."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(args.log_level)

    catalog = load_catalog_config(args.catalog) if args.catalog else default_catalog()

    if args.inspect_catalog:
        for entry in catalog.entries:
            aliases = ", ".join(sorted(entry.aliases))
            print(f"{entry.canonical_name}: {aliases}")
        return 0

    if args.pages is None:
        parser.error("a page label file is required unless --inspect-catalog is given")

    config = ResolverConfig(
        match_threshold=(
            args.threshold if args.threshold is not None else catalog.match_threshold
        ),
        carry_forward=not args.no_carry_forward,
    )
    resolver = LabelResolver(catalog=catalog, config=config)
    texts = load_page_texts(args.pages)
    base = args.base or base_filename_from_upload(args.pages.stem)
    session = EditSession.from_page_texts(texts, base, resolver=resolver)
    summaries = summarize_session(session)

    if args.format == "json":
        payload = {
            "base_filename": session.base_filename,
            "page_count": session.page_count,
            "splits": [summary.to_dict() for summary in summaries],
        }
        print(json.dumps(payload, indent=2))
        return 0

    print(stats_line(session))
    if args.format == "table":
        print(summary_frame(summaries).to_string(index=False))
        return 0

    for summary in summaries:
        number, instrument, pages, count, filename, _ = summary.as_row()
        flag = "" if summary.matched else "  [unmatched]"
        print(f"  {number}. {instrument}: {pages} ({count}) -> {filename}{flag}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
