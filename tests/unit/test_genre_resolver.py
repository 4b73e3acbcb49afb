"""Unit tests for tag collection and genre reconciliation."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from genrefixer.artist_cache import SessionCache
from genrefixer.genre_resolver import GenreResolver, ResolutionResult


@pytest.fixture
def resolver_for(small_index, make_tag_source):
    def build(tags_by_name=None):
        source = make_tag_source(tags_by_name)
        return GenreResolver(small_index, source), source
    return build


class TestFindGenre:
    """Test the first-wins walk over tags."""

    def test_first_resolving_tag_wins(self, resolver_for):
        resolver, _ = resolver_for()
        assert resolver.find_genre(["xyz-unmatched", "Rock", "Jazz"]) == "Rock"

    def test_nothing_resolves(self, resolver_for):
        resolver, _ = resolver_for()
        assert resolver.find_genre(["xyz-unmatched", "zzz-unmatched"]) == ""
        assert resolver.find_genre([]) == ""

    def test_backup_does_not_stop_walk(self, resolver_for):
        resolver, _ = resolver_for()
        assert resolver.find_genre(["1985", "Jazz"]) == "Jazz"

    def test_backup_used_when_nothing_resolves(self, resolver_for):
        resolver, _ = resolver_for()
        assert resolver.find_genre(["1985", "zzz-unmatched"]) == "Oldies"
        assert resolver.find_genre(["60s"]) == "Oldies"

    def test_first_backup_wins(self, resolver_for):
        resolver, _ = resolver_for()
        assert resolver.find_genre(["folk", "1960s"]) == "Folk"
        assert resolver.find_genre(["1960s", "folk"]) == "Oldies"

    def test_decade_outside_range_is_not_a_backup(self, resolver_for):
        resolver, _ = resolver_for()
        assert resolver.find_genre(["80s"]) == ""


class TestTagToGenre:
    """Test single-tag mapping rules."""

    @pytest.mark.parametrize("tag", ["rap", "danish", "rumba", "brooklyn", "naija", "ballad", "RAP"])
    def test_exceptions_never_resolve(self, resolver_for, tag):
        resolver, _ = resolver_for()
        assert resolver.tag_to_genre(tag) == ""

    def test_exception_collides_in_index(self, resolver_for, small_index):
        resolver, _ = resolver_for()
        assert small_index.resolve("rap") == "R&B/Soul"
        assert small_index.resolve("danish") == "Dance"
        assert resolver.tag_to_genre("R&B") == "R&B/Soul"

    @pytest.mark.parametrize("tag", ["Reggae", "reggae", "Reggaeton", "roots REGGAE"])
    def test_reggae_substring(self, resolver_for, tag):
        resolver, _ = resolver_for()
        assert resolver.tag_to_genre(tag) == "Reggae"

    def test_backup_tag_records_and_returns_empty(self, resolver_for):
        resolver, _ = resolver_for()
        backups = []
        assert resolver.tag_to_genre("1985", backups) == ""
        assert backups == ["Oldies"]


class TestLookup:
    """Test full lookups with a fake tag source."""

    def test_tags_and_genre(self, resolver_for):
        resolver, source = resolver_for({"Bob Marley": ["reggae", "Reggae", "jamaica"]})
        result = resolver.lookup(("Bob Marley", "Bob Marley"))
        assert result == ResolutionResult(genre="Reggae", tags="reggae jamaica", cached=False)
        assert source.calls == ["Bob Marley"]

    def test_variants_queried_in_order(self, resolver_for):
        resolver, source = resolver_for({
            "Artist feat. Other": ["xyz-unmatched"],
            "Artist & Other": ["Jazz"],
        })
        result = resolver.lookup(("Artist feat. Other", ""))
        assert source.calls == ["Artist feat. Other", "Artist & Other"]
        assert result.tags == "xyz-unmatched Jazz"
        assert result.genre == "Jazz"

    def test_cache_round_trip(self, resolver_for):
        resolver, source = resolver_for({"Miles Davis": ["Jazz", "trumpet"]})
        first = resolver.lookup(("Miles Davis", "Miles Davis"))
        second = resolver.lookup(("Miles Davis", "Miles Davis"))
        assert source.calls == ["Miles Davis"]
        assert second.cached is True
        assert (second.genre, second.tags) == (first.genre, first.tags)

    def test_cache_key_is_ordered(self, resolver_for):
        resolver, source = resolver_for({"A1": ["Jazz"], "B2": ["Rock"]})
        resolver.lookup(("A1", "B2"))
        result = resolver.lookup(("B2", "A1"))
        assert result.cached is False
        assert result.genre == "Rock"

    def test_shared_cache(self, small_index, make_tag_source):
        cache = SessionCache()
        source = make_tag_source({"Miles Davis": ["Jazz"]})
        GenreResolver(small_index, source, cache=cache).lookup(("Miles Davis",))
        assert ("Miles Davis",) in cache
        assert len(cache) == 1

    @pytest.mark.parametrize("names", [(), ("", None), ("Various Artists", "VARIOUS")])
    def test_empty_input_makes_no_queries(self, resolver_for, names):
        resolver, source = resolver_for()
        result = resolver.lookup(names)
        assert result.genre == ""
        assert result.tags == ""
        assert source.calls == []
