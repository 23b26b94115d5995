from score_splitter.text import normalize_label


def test_normalize_label_trims_collapses_and_casefolds():
    assert normalize_label("  Solo   CORNET\t") == "solo cornet"


def test_normalize_label_keeps_hyphens_and_splits_on_other_punctuation():
    assert normalize_label("1st Horn (Eb)!") == "1st horn eb"
    assert normalize_label("E-flat Clarinet.") == "e-flat clarinet"
    assert normalize_label("Tpt. 1/2") == "tpt 1 2"
    assert normalize_label("B.Cl.") == "b cl"


def test_normalize_label_handles_empty_values():
    assert normalize_label(None) == ""
    assert normalize_label("   ") == ""
    assert normalize_label("...") == ""
