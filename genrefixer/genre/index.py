"""
Canonical Genre Index
=====================
Phonetic lookup from free-text tags to a small curated set of genres.

Each synonym in the genre table is normalized (title case, no hyphens,
"N"/"And" -> "&") and reduced to a soundex-style key. Lookups reduce the
query tag the same way, so "Hip Hop", "hip-hop" and "HipHop!" share a key.

Keys from different genres can collide. The table is loaded in line order
and a later synonym overwrites an earlier one (a warning is logged). Table
order is part of the behavior.
"""

import logging
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..errors import IndexLoadFailure

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).with_name("genres.txt")

_SOUNDEX_TABLE = str.maketrans(
    "AEHIOUWYBFPVCGJKQSXZDTLMNR",
    "00000000111122222222334556",
)
_NON_LETTERS = re.compile(r"[^A-Z]")
_REPEATED = re.compile(r"(.)\1+")


@dataclass(frozen=True)
class GenreDefinition:
    """One line of the genre table: a canonical genre and its synonyms."""
    genre: str
    synonyms: Tuple[str, ...]


def normalize_tag(tag: str) -> str:
    """
    Normalize a tag before keying it.

    Title-cases each whitespace-separated word, drops hyphens and turns the
    connector words "N" and "And" into "&".
    """
    text = " ".join(word.capitalize() for word in tag.split())
    text = text.replace("-", "")
    return text.replace(" N ", " & ").replace(" And ", " & ")


def phonetic_key(text: str) -> Optional[str]:
    """
    Compute the soundex-style key of a string.

    Returns:
        First letter plus three digits, or None when the string has no
        letters A-Z.
    """
    letters = _NON_LETTERS.sub("", text.upper())
    if not letters:
        return None
    codes = _REPEATED.sub(r"\1", letters.translate(_SOUNDEX_TABLE))
    digits = codes[1:].replace("0", "")
    return letters[0] + (digits + "000")[:3]


def parse_genre_table(lines: Iterable[str]) -> List[GenreDefinition]:
    """
    Parse genre table lines of the form ``Genre=syn1,syn2``.

    A bare ``Genre`` line is its own sole synonym. Blank lines and lines
    starting with ``#`` are skipped.
    """
    definitions = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        genre, sep, synonyms = line.partition("=")
        if not sep:
            synonyms = genre
        definitions.append(GenreDefinition(genre, tuple(synonyms.split(","))))
    return definitions


def load_genre_table(path: Union[str, Path]) -> List[GenreDefinition]:
    """Read and parse a genre table file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_genre_table(f)
    except OSError as e:
        raise IndexLoadFailure(f"Cannot read genre table {path}: {e}") from e


class CanonicalGenreIndex:
    """Maps phonetic keys of genre synonyms to canonical genre names"""

    def __init__(
        self,
        definitions: Optional[Iterable[GenreDefinition]] = None,
        table_path: Optional[Union[str, Path]] = None,
    ):
        """
        Initialize the index. Nothing is read until the first lookup.

        Args:
            definitions: Pre-parsed genre definitions (takes precedence)
            table_path: Genre table to load; defaults to the packaged table
        """
        self._definitions = list(definitions) if definitions is not None else None
        self.table_path = Path(table_path) if table_path else DEFAULT_TABLE_PATH
        self._genres: Dict[str, str] = {}
        self._built = False
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CanonicalGenreIndex":
        """Create an index that loads the given table on first use."""
        return cls(table_path=path)

    def build(self) -> None:
        """Build the key -> genre mapping (idempotent)."""
        with self._lock:
            if self._built:
                return
            definitions = self._definitions
            source = "injected definitions"
            if definitions is None:
                definitions = load_genre_table(self.table_path)
                source = str(self.table_path)
            genres: Dict[str, str] = {}
            for definition in definitions:
                for synonym in definition.synonyms:
                    key = phonetic_key(normalize_tag(synonym))
                    if key is None:
                        continue
                    old = genres.get(key)
                    if old is not None:
                        logger.warning(
                            f"Conflicting key ({key}): {old} is being overwritten "
                            f"by {synonym} as {definition.genre}"
                        )
                    genres[key] = definition.genre
            self._genres = genres
            self._built = True
            logger.debug(f"Built genre index: {len(genres)} keys from {source}")

    def resolve(self, tag: str) -> str:
        """
        Resolve a tag to its canonical genre.

        Returns:
            Canonical genre name, or "" when the tag has no match
        """
        if not self._built:
            self.build()
        key = phonetic_key(normalize_tag(tag))
        if key is None:
            return ""
        return self._genres.get(key, "")

    @property
    def mapping(self) -> Dict[str, str]:
        """Copy of the key -> genre mapping."""
        if not self._built:
            self.build()
        return dict(self._genres)

    @property
    def genres(self) -> List[str]:
        """Distinct canonical genres reachable through the index, sorted."""
        return sorted(set(self.mapping.values()))

    def __len__(self) -> int:
        return len(self.mapping)

    def __contains__(self, tag: str) -> bool:
        return bool(self.resolve(tag))
