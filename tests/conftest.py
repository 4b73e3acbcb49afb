"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from genrefixer.genre.index import CanonicalGenreIndex, parse_genre_table


SMALL_TABLE = [
    "# test table",
    "Hip-Hop/Rap=Hip Hop,Hiphop",
    "Jazz=Jazz,Bebop",
    "",
    "Reggae=Reggae,Dub",
    "Rock=Rock,Hard Rock",
    "New Age",
    "R&B/Soul=R&B,Rnb,Soul",
    "Dance=Dance,Disco",
]


class FakeTagSource:
    """Tag source returning canned tags per name and recording queries"""

    def __init__(self, tags_by_name=None):
        self.tags_by_name = tags_by_name or {}
        self.calls = []

    def find_tags(self, name):
        self.calls.append(name)
        return list(self.tags_by_name.get(name, []))


@pytest.fixture
def small_index():
    """Index over a short, fixed table"""
    return CanonicalGenreIndex(parse_genre_table(SMALL_TABLE))


@pytest.fixture
def packaged_index():
    """Index over the genre table shipped with the package"""
    return CanonicalGenreIndex()


@pytest.fixture
def make_tag_source():
    """Factory for FakeTagSource instances"""
    return FakeTagSource
