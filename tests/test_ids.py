"""Tests for sibling/child generation and unique allocation."""

from folgezettel.core.ids import allocate_unique, first_child, level, next_sibling

SAMPLE_IDS = ["1", "2", "10", "1a", "1z", "1a9", "1a1b", "12zz3", "3Ab", "1.2"]


def test_next_sibling():
    """Test that only the trailing segment changes."""
    assert next_sibling("1") == "2"
    assert next_sibling("1a9") == "1a10"
    assert next_sibling("1z") == "1aa"
    assert next_sibling("1a1b") == "1a1c"


def test_next_sibling_no_successor():
    """Test trailing other segment is left unchanged."""
    assert next_sibling("1a.") == "1a."
    assert next_sibling("") == ""


def test_first_child():
    """Test child segment alternates type."""
    assert first_child("1") == "1a"
    assert first_child("1a") == "1a1"
    assert first_child("1a1") == "1a1a"


def test_first_child_other():
    """Test no child for other-trailing or empty identifiers."""
    assert first_child("1-") == "1-"
    assert first_child("") == ""


def test_level():
    """Test level counts segments."""
    assert level("") == 0
    assert level("1") == 1
    assert level("1a") == 2
    assert level("12ab3") == 3


def test_sibling_keeps_level():
    """Test sibling generation never changes depth."""
    for ident in SAMPLE_IDS:
        assert level(next_sibling(ident)) == level(ident)


def test_child_adds_level():
    """Test child generation adds exactly one level."""
    for ident in SAMPLE_IDS:
        assert level(first_child(ident)) == level(ident) + 1


def test_allocate_skips_taken():
    """Test allocation advances past taken identifiers."""
    assert allocate_unique("1a", {"1a", "1b", "1c"}, 50) == "1d"


def test_allocate_free_candidate():
    """Test a free candidate is returned as is."""
    assert allocate_unique("2", {"1"}) == "2"


def test_allocate_budget_exhausted():
    """Test None once the attempt budget runs out."""
    letters = "abcdefghijklmnopqrstuvwxyz"
    taken = {f"1{c}" for c in letters} | {f"1a{c}" for c in letters}
    assert allocate_unique("1a", taken, 50) is None


def test_allocate_budget_boundary():
    """Test the last attempt within budget still succeeds."""
    taken = {str(n) for n in range(1, 50)}
    assert allocate_unique("1", taken, 50) == "50"
    assert allocate_unique("1", taken, 49) is None


def test_allocate_cannot_advance():
    """Test a taken identifier without successor yields None."""
    assert allocate_unique("1.", {"1."}) is None
