from pathlib import Path

import pytest

from acronyms.loader import load
from acronyms.models import AcronymIndex
from acronyms.search import lookup


def _index(tmp: Path, text: str) -> AcronymIndex:
    p = tmp / "acronyms.db"
    p.write_text(text, encoding="utf-8")
    return load(str(p))


@pytest.mark.e2e
def test_lol_returns_both_definitions_in_order(tmp_path: Path):
    idx = _index(tmp_path, "LOL\tlaugh out loud\nLOL\tlots of love\n")
    r = lookup(idx, "lol")
    assert r.found
    assert list(r.definitions) == ["laugh out loud", "lots of love"]
    assert r.acronym == "LOL" and r.query == "lol"


@pytest.mark.e2e
def test_btw_found_idk_not_found(tmp_path: Path):
    idx = _index(tmp_path, "BTW\tby the way\n")
    assert list(lookup(idx, "btw").definitions) == ["by the way"]
    miss = lookup(idx, "idk")
    assert not miss.found
    assert miss.definitions == ()
    assert miss.acronym == "IDK"


def test_lookup_is_case_insensitive(tmp_path: Path):
    idx = _index(tmp_path, "USA\tUnited States of America\n")
    assert lookup(idx, "usa").definitions == lookup(idx, "USA").definitions == ("United States of America",)


def test_dotted_input_matches_plain_key(tmp_path: Path):
    idx = _index(tmp_path, "USA\tUnited States of America\nNASA\tspace agency\n")
    assert lookup(idx, "U.S.A.").definitions == ("United States of America",)
    assert lookup(idx, "NASA").definitions == ("space agency",)


def test_dotted_key_in_file_cannot_be_reached_by_dotted_query(tmp_path: Path):
    # query "U.S." is normalized to "US" before matching
    idx = _index(tmp_path, "U.S.\tdotted\n")
    assert not lookup(idx, "U.S.").found


def test_order_is_per_key_across_interleaved_lines(tmp_path: Path):
    idx = _index(tmp_path, "A\t1\nB\tx\nA\t2\nB\ty\nA\t3\n")
    assert lookup(idx, "a").definitions == ("1", "2", "3")
    assert lookup(idx, "b").definitions == ("x", "y")


def test_empty_or_blank_query_is_not_found():
    idx = AcronymIndex({"": ["line starting with a tab"]})
    for q in ("", "   ", "\t"):
        r = lookup(idx, q)
        assert not r.found


def test_absent_key_in_empty_index_never_raises():
    r = lookup(AcronymIndex(), "anything")
    assert not r.found
