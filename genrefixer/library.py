"""
Media Library Access
====================
Reads artist fields from the selected tracks and writes the resolved tag
string (grouping) and genre back.

LibraryDriver is the seam the run depends on; MutagenLibrary implements it
for audio files on disk using mutagen's "easy" tag interface, which exposes
artist / albumartist / grouping / genre uniformly for ID3, MP4 and Vorbis
comments.
"""
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Union

import mutagen

from .errors import GenreFixerError

logger = logging.getLogger(__name__)

AUDIO_EXTENSIONS = {'.mp3', '.flac', '.m4a', '.mp4', '.ogg', '.opus'}


class TrackAccessError(GenreFixerError):
    """Raised when a track's tags cannot be read or written"""
    pass


class Track:
    """One selected track. Subclasses provide storage."""

    label: str = ''

    @property
    def artist(self) -> str:
        raise NotImplementedError

    @property
    def album_artist(self) -> str:
        raise NotImplementedError

    def set_grouping(self, text: str) -> None:
        raise NotImplementedError

    def set_genre(self, text: str) -> None:
        raise NotImplementedError


class LibraryDriver:
    """Source of the current selection, in selection order"""

    def selection(self) -> Iterable[Track]:
        raise NotImplementedError


def _first(audio: Any, key: str) -> str:
    """Get the first value of an easy tag, '' when absent"""
    try:
        values = audio.get(key) if audio is not None else None
    except (KeyError, ValueError):
        return ''
    if isinstance(values, list):
        return str(values[0]) if values else ''
    return str(values) if values else ''


class MutagenTrack(Track):
    """An audio file whose tags are read and written through mutagen"""

    def __init__(self, path: Union[str, Path], dry_run: bool = False):
        self.path = Path(path)
        self.label = self.path.name
        self.dry_run = dry_run
        self._audio = None

    def _load(self):
        if self._audio is None:
            try:
                audio = mutagen.File(self.path, easy=True)
            except (mutagen.MutagenError, OSError) as e:
                raise TrackAccessError(f"Cannot read {self.path}: {e}") from e
            if audio is None:
                raise TrackAccessError(f"Unsupported file format: {self.path}")
            self._audio = audio
        return self._audio

    @property
    def artist(self) -> str:
        return _first(self._load(), 'artist')

    @property
    def album_artist(self) -> str:
        return _first(self._load(), 'albumartist')

    def _write(self, key: str, text: str) -> None:
        if self.dry_run:
            logger.debug(f"[DRY RUN] Would set {key}={text!r} on {self.path}")
            return
        audio = self._load()
        try:
            audio[key] = [text]
            audio.save()
        except (mutagen.MutagenError, OSError, KeyError, ValueError) as e:
            raise TrackAccessError(f"Cannot write {key} to {self.path}: {e}") from e

    def set_grouping(self, text: str) -> None:
        self._write('grouping', text)

    def set_genre(self, text: str) -> None:
        self._write('genre', text)


def expand_paths(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """
    Expand files and directories into audio files, keeping argument order.

    Directories are walked recursively and sorted; explicit files are kept
    as given even with an unknown extension.
    """
    files: List[Path] = []
    seen = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found = sorted(
                p for p in path.rglob('*')
                if p.is_file() and p.suffix.lower() in AUDIO_EXTENSIONS
            )
        elif path.exists():
            found = [path]
        else:
            logger.warning(f"Path not found, skipping: {path}")
            found = []
        for p in found:
            if p not in seen:
                seen.add(p)
                files.append(p)
    return files


class MutagenLibrary(LibraryDriver):
    """Library driver over audio files on disk"""

    def __init__(self, paths: Iterable[Union[str, Path]], dry_run: bool = False):
        """
        Initialize library

        Args:
            paths: Files and/or directories making up the selection
            dry_run: Log intended writes instead of saving files
        """
        self.files = expand_paths(paths)
        self.dry_run = dry_run
        logger.info(f"Selected {len(self.files)} audio files")

    def selection(self) -> Iterator[MutagenTrack]:
        for path in self.files:
            yield MutagenTrack(path, dry_run=self.dry_run)
