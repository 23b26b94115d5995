"""Mutable split list that a user corrects by renaming and merging parts."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

from score_splitter.io.filenames import derive_filename
from score_splitter.segments.label_resolver import LabelResolver
from score_splitter.segments.segmenter import Split, check_coverage, segment

logger = logging.getLogger(__name__)

Assembler = Callable[[Split], bytes]


class EditRejected(ValueError):
    """An edit request that would be invalid; the session is left untouched."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = reason


@dataclass(slots=True)
class SplitOutput:
    """Derived artefacts for one split, rebuilt whenever the split changes."""

    filename: str
    split: Split
    data: bytes | None = None


@dataclass(slots=True)
class EditSession:
    """Ordered splits for one document plus the base name used for output files.

    ``assembler`` is the external step that copies a split's pages into a new
    document; without it only filenames are produced.
    """

    splits: list[Split]
    base_filename: str
    assembler: Assembler | None = None
    _default_base: str = field(init=False, repr=False)
    _page_count: int = field(init=False, repr=False)
    _outputs: dict[int, SplitOutput] = field(init=False, repr=False)
    _lock: threading.Lock = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._default_base = self.base_filename
        self._page_count = sum(split.page_count for split in self.splits)
        self._outputs = {}
        self._lock = threading.Lock()
        check_coverage(self.splits, self._page_count)

    @classmethod
    def from_page_texts(
        cls,
        texts: Iterable[str | None],
        base_filename: str,
        *,
        resolver: LabelResolver | None = None,
        assembler: Assembler | None = None,
    ) -> "EditSession":
        """Resolve and segment page texts into a fresh session."""

        resolver = resolver or LabelResolver.from_yaml()
        splits = segment(resolver.resolve_pages(texts))
        logger.info("detected %d splits", len(splits))
        return cls(splits=splits, base_filename=base_filename, assembler=assembler)

    @property
    def page_count(self) -> int:
        return self._page_count

    def __len__(self) -> int:
        return len(self.splits)

    def __iter__(self) -> Iterator[Split]:
        return iter(self.splits)

    def _require_index(self, operation: str, index: int) -> None:
        if not 0 <= index < len(self.splits):
            raise EditRejected(operation, f"no split at index {index}")

    def _reject(self, operation: str, reason: str) -> EditRejected:
        logger.debug("rejected %s: %s", operation, reason)
        return EditRejected(operation, reason)

    def rename(self, index: int, new_name: str) -> Split:
        """Give the split at ``index`` a new instrument name."""

        with self._lock:
            self._require_index("rename", index)
            name = new_name.strip()
            if not name:
                raise self._reject("rename", "instrument name is empty")
            split = self.splits[index]
            split.instrument = name
            split.matched = True
            self._invalidate(index)
            return split

    def merge_with_previous(self, index: int) -> Split:
        """Fold the split at ``index`` into the one above it; the upper name wins."""

        with self._lock:
            self._require_index("merge_with_previous", index)
            if index == 0:
                raise self._reject("merge_with_previous", "first split has no previous split")
            upper = self.splits[index - 1]
            lower = self.splits.pop(index)
            upper.pages = upper.pages + lower.pages
            self._after_merge(index - 1, removed=index)
            return upper

    def merge_with_next(self, index: int) -> Split:
        """Fold the split below into the one at ``index``; the lower name wins."""

        with self._lock:
            self._require_index("merge_with_next", index)
            if index == len(self.splits) - 1:
                raise self._reject("merge_with_next", "last split has no next split")
            upper = self.splits[index]
            lower = self.splits.pop(index + 1)
            upper.pages = upper.pages + lower.pages
            upper.instrument = lower.instrument
            upper.matched = lower.matched
            self._after_merge(index, removed=index + 1)
            return upper

    def set_base_filename(self, base_filename: str) -> str:
        """Change the output base name; a blank value restores the original one."""

        with self._lock:
            self.base_filename = base_filename.strip() or self._default_base
            self._outputs.clear()
            return self.base_filename

    def _after_merge(self, index: int, *, removed: int) -> None:
        check_coverage(self.splits, self._page_count)
        # Cached outputs after the removed position shift up by one.
        self._outputs = {
            (position - 1 if position > removed else position): output
            for position, output in self._outputs.items()
            if position != removed
        }
        self._invalidate(index)
        logger.debug("merged split %d into %d", removed, index)

    def _invalidate(self, index: int) -> None:
        self._outputs.pop(index, None)

    def _build_output(self, index: int) -> SplitOutput:
        split = self.splits[index]
        data = self.assembler(split) if self.assembler is not None else None
        return SplitOutput(
            filename=derive_filename(self.base_filename, split.instrument),
            split=split,
            data=data,
        )

    def output(self, index: int) -> SplitOutput:
        """Return the output for one split, rebuilding it if stale."""

        with self._lock:
            self._require_index("output", index)
            cached = self._outputs.get(index)
            if cached is None:
                cached = self._outputs[index] = self._build_output(index)
            return cached

    def outputs(self) -> list[SplitOutput]:
        return [self.output(index) for index in range(len(self.splits))]

    def filenames(self) -> list[str]:
        return [output.filename for output in self.outputs()]


__all__ = ["Assembler", "EditRejected", "EditSession", "SplitOutput"]
