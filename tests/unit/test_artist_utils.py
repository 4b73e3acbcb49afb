"""Tests for artist name permutations."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from genrefixer.artist_utils import permute_artist_names


class TestPermuteArtistNames:
    """Tests for permute_artist_names."""

    def test_featuring_becomes_ampersand(self):
        variants = permute_artist_names(["Artist feat. Other"])
        assert variants == ["Artist feat. Other", "Artist & Other"]

    def test_ampersand_to_and(self):
        assert permute_artist_names(["Simon & Garfunkel"]) == [
            "Simon & Garfunkel",
            "Simon and Garfunkel",
        ]

    def test_originals_first_and_deduplicated(self):
        variants = permute_artist_names(["Radiohead", "Radiohead"])
        assert variants == ["Radiohead"]

    def test_article_dropped(self):
        variants = permute_artist_names(["The Beatles"])
        assert variants == ["The Beatles", "Beatles"]

    def test_versus_and_with(self):
        assert "Jay & Kanye" in permute_artist_names(["Jay vs. Kanye"])
        assert "Jay & Kanye" in permute_artist_names(["Jay with Kanye"])

    def test_separators(self):
        variants = permute_artist_names(["Alpha, Beta"])
        assert "Alpha & Beta" in variants

    def test_whitespace_collapsed(self):
        for variant in permute_artist_names(["Artist  ft  Other", "The  Band"]):
            assert "  " not in variant
            assert variant == variant.strip()

    def test_various_excluded(self):
        assert permute_artist_names(["Various Artists"]) == []
        variants = permute_artist_names(["Real Artist", "VARIOUS ARTISTS"])
        assert all("various" not in v.lower() for v in variants)
        assert variants == ["Real Artist"]

    def test_empty_and_short_names(self):
        assert permute_artist_names([]) == []
        assert permute_artist_names([None, ""]) == []
        assert permute_artist_names(["X"]) == []
