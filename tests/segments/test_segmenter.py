import pytest

from score_splitter.config.catalog import build_catalog
from score_splitter.segments import (
    LabelResolver,
    ResolvedLabel,
    Split,
    StructuralViolation,
    check_coverage,
    segment,
    split_pages,
)


def build_resolver() -> LabelResolver:
    return LabelResolver(
        catalog=build_catalog({"Cornet": ["cnt"], "Trombone": ["tbn"], "Tuba": ["bass"]})
    )


def flatten(splits):
    return [page for split in splits for page in split.pages]


def test_continuation_pages_join_preceding_part():
    splits = split_pages(["Cornet", None, None, "Trombone"], build_resolver())

    assert [(s.instrument, s.pages) for s in splits] == [
        ("Cornet", [1, 2, 3]),
        ("Trombone", [4]),
    ]
    assert splits[0].start_page == 1
    assert splits[0].end_page == 3


@pytest.mark.parametrize(
    "texts",
    [
        ["Cornet"],
        [None],
        [None, None, "Tuba"],
        ["Cornet", "Trombone", "Cornet", "Trombone"],
        ["unknown", "other", None, "Tuba", "bass", None],
        ["Cornet"] * 12,
    ],
)
def test_splits_cover_every_page_in_order(texts):
    splits = split_pages(texts, build_resolver())

    assert splits
    assert flatten(splits) == list(range(1, len(texts) + 1))


def test_leading_unlabelled_pages_form_their_own_split():
    splits = split_pages([None, None, "Cornet"], build_resolver())

    assert [(s.instrument, s.pages, s.matched) for s in splits] == [
        ("", [1, 2], False),
        ("Cornet", [3], True),
    ]


def test_identical_placeholders_collapse_into_one_split():
    splits = split_pages(["Lyrics", "lyrics", "LYRICS."], build_resolver())

    assert len(splits) == 1
    assert splits[0].instrument == "lyrics"
    assert splits[0].pages == [1, 2, 3]


def test_segment_compares_exact_strings():
    labels = [
        ResolvedLabel(page_index=1, instrument="Cornet", matched=True),
        ResolvedLabel(page_index=2, instrument="cornet", matched=False),
    ]

    assert [split.instrument for split in segment(labels)] == ["Cornet", "cornet"]


def test_segment_of_nothing_is_empty():
    assert segment([]) == []


def test_check_coverage_detects_gaps_and_overlaps():
    check_coverage([Split("A", [1, 2]), Split("B", [3])], page_count=3)

    with pytest.raises(StructuralViolation):
        check_coverage([Split("A", [1, 2]), Split("B", [4])])
    with pytest.raises(StructuralViolation):
        check_coverage([Split("A", [1, 2]), Split("B", [2, 3])])
    with pytest.raises(StructuralViolation):
        check_coverage([Split("A", [])])
    with pytest.raises(StructuralViolation):
        check_coverage([Split("A", [1, 2])], page_count=3)


def test_split_to_dict_reports_derived_bounds():
    split = Split("Tuba", [4, 5, 6], matched=True)

    assert split.to_dict() == {
        "instrument": "Tuba",
        "start_page": 4,
        "end_page": 6,
        "pages": [4, 5, 6],
        "matched": True,
    }


def test_numbered_parts_become_separate_splits():
    texts = ["Cornet 1", None, "Cornet 2", None, "Trombone 1", "Trombone 2"]

    splits = split_pages(texts, LabelResolver.from_yaml())

    assert [(s.instrument, s.pages) for s in splits] == [
        ("Cornet 1", [1, 2]),
        ("Cornet 2", [3, 4]),
        ("Trombone 1", [5]),
        ("Trombone 2", [6]),
    ]
