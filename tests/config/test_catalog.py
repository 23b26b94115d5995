from pathlib import Path

import pytest

from score_splitter.config.catalog import (
    DEFAULT_CATALOG_PATH,
    build_catalog,
    default_catalog,
    load_catalog_config,
)


def test_default_catalog_loads_shipped_yaml():
    catalog = default_catalog()

    assert DEFAULT_CATALOG_PATH.exists()
    assert catalog.version == 1
    assert catalog.match_threshold == pytest.approx(0.8)
    assert "Cornet" in catalog.canonical_names()
    assert "Trombone" in catalog.canonical_names()
    assert default_catalog() is catalog


def test_aliases_are_normalized_and_include_canonical_name():
    catalog = build_catalog({"Bass Trombone": ["B. Tbn.", "  BASS   tbn "]})
    entry = catalog.entries[0]

    assert entry.aliases == frozenset({"bass trombone", "b tbn", "bass tbn"})
    assert catalog.lookup("b tbn") == "Bass Trombone"
    assert catalog.lookup("tuba") is None


def test_all_aliases_follow_catalog_order():
    catalog = build_catalog({"Flute": ["fl"], "Oboe": ["ob"]})

    assert catalog.all_aliases_normalized() == (
        ("fl", "Flute"),
        ("flute", "Flute"),
        ("ob", "Oboe"),
        ("oboe", "Oboe"),
    )


def test_default_catalog_knows_common_abbreviations():
    catalog = default_catalog()

    assert catalog.lookup("tpt") == "Trumpet"
    assert catalog.lookup("klarinette") == "Clarinet"
    assert catalog.lookup("partitur") == "Conductor"


def test_custom_yaml_accepts_mapping_and_list_nodes(tmp_path: Path):
    path = tmp_path / "brass.yml"
    path.write_text(
        "version: 2\n"
        "match_threshold: 0.9\n"
        "instruments:\n"
        "  Cornet:\n"
        "    aliases: [cnt]\n"
        "  Tuba: [bass, eb bass]\n",
        encoding="utf-8",
    )

    catalog = load_catalog_config(path)

    assert catalog.version == 2
    assert catalog.match_threshold == pytest.approx(0.9)
    assert catalog.canonical_names() == ("Cornet", "Tuba")
    assert catalog.lookup("eb bass") == "Tuba"


def test_missing_catalog_raises_when_strict(tmp_path: Path):
    missing = tmp_path / "nope.yml"

    with pytest.raises(FileNotFoundError):
        load_catalog_config(missing)

    empty = load_catalog_config(missing, strict=False)
    assert len(empty) == 0
    assert empty.all_aliases_normalized() == ()


def test_non_mapping_catalog_is_rejected(tmp_path: Path):
    path = tmp_path / "list.yml"
    path.write_text("- Cornet\n- Tuba\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_catalog_config(path)


def test_instruments_list_is_rejected(tmp_path: Path):
    path = tmp_path / "flat.yml"
    path.write_text("instruments:\n  - Cornet\n  - Tuba\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_catalog_config(path)
