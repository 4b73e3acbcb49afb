"""Tests for TagSet aggregation."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from genrefixer.tag_set import TagSet


def test_case_insensitive_dedupe_keeps_first_casing():
    tags = TagSet()
    tags.add(["Rock", "rock", "Pop"])
    assert tags.as_list() == ["Rock", "Pop"]
    assert tags.as_string() == "Rock Pop"


def test_order_across_adds():
    tags = TagSet(["jazz"])
    tags.add(["Blues", "JAZZ"])
    tags.add(["soul"])
    assert list(tags) == ["jazz", "Blues", "soul"]


def test_blank_and_none_dropped():
    tags = TagSet()
    tags.add(["", "  ", None, " indie "])
    tags.add(None)
    assert tags.as_list() == ["indie"]
    assert len(tags) == 1


def test_contains_and_str():
    tags = TagSet(["Hip-Hop"])
    assert "hip-hop" in tags
    assert "rock" not in tags
    assert str(tags) == "Hip-Hop"


def test_empty_string_form():
    assert TagSet().as_string() == ""
