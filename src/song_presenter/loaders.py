"""File loaders for songs, templates and sessions.

Stand-ins for the song and template stores when previewing decks from the
command line. Songs and templates are JSON records; a session is either a
JSON list of entries or a CSV backup with the columns
``songId,songName,singerId,singerName,pitch``.
"""

import csv
import io
import json
from pathlib import Path
from typing import Dict, List, Optional

from song_presenter.logging_config import get_logger
from song_presenter.models import SessionEntry, Song, Template
from song_presenter.pitch import is_valid_pitch

logger = get_logger(__name__)

SESSION_CSV_HEADERS = ["songId", "songName", "singerId", "singerName", "pitch"]


class SongLibrary:
    """Songs indexed by ID and by case-folded name."""

    def __init__(self, songs: Optional[List[Song]] = None):
        self._by_id: Dict[str, Song] = {}
        self._by_name: Dict[str, Song] = {}
        for song in songs or []:
            self.add(song)

    def add(self, song: Song) -> None:
        if song.id:
            self._by_id[song.id] = song
        self._by_name.setdefault(song.name.strip().casefold(), song)

    def find(self, song_id: Optional[str] = None, song_name: Optional[str] = None) -> Optional[Song]:
        """Find a song by ID, falling back to its name.

        Args:
            song_id: Store ID of the song
            song_name: Song name, matched case-insensitively

        Returns:
            Matching song or None
        """
        if song_id and song_id in self._by_id:
            return self._by_id[song_id]
        if song_name:
            return self._by_name.get(song_name.strip().casefold())
        return None

    def __len__(self) -> int:
        return len(self._by_name)


def _read_json(path: Path):
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")


def load_song(path: Path) -> Song:
    """Load a song record from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a valid song record
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a song object in {path}")
    return Song.from_dict(data)


def load_template(path: Path) -> Template:
    """Load a template record from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a valid template record
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a template object in {path}")

    template = Template.from_dict(data)
    if not template.is_multi_slide:
        logger.warning(f"Template {path.name} is not a multi-slide template; static slides will be skipped")
    return template


def load_song_library(directory: Path) -> SongLibrary:
    """Load every song JSON file under a directory.

    Files that can't be parsed are logged and skipped.

    Args:
        directory: Folder containing song .json files

    Returns:
        SongLibrary with the loaded songs

    Raises:
        FileNotFoundError: If the directory doesn't exist
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Songs directory not found: {directory}")

    library = SongLibrary()
    for path in sorted(directory.rglob("*.json")):
        try:
            library.add(load_song(path))
        except ValueError as e:
            logger.warning(f"Skipping {path}: {e}")

    logger.info(f"Loaded {len(library)} song(s) from {directory}")
    return library


def parse_session_csv(csv_text: str) -> List[Dict[str, str]]:
    """Parse a session CSV backup into rows.

    Column names are matched case-insensitively; missing columns read as
    empty strings. Blank lines are ignored.

    Args:
        csv_text: CSV content with a header row

    Returns:
        One dict per row keyed by SESSION_CSV_HEADERS
    """
    lines = [line for line in csv_text.splitlines() if line.strip()]
    if len(lines) < 2:
        return []

    reader = csv.reader(io.StringIO("\n".join(lines)))
    header = [column.strip().lower() for column in next(reader)]
    positions = {name: header.index(name.lower()) for name in SESSION_CSV_HEADERS if name.lower() in header}

    rows = []
    for cols in reader:
        row = {}
        for name in SESSION_CSV_HEADERS:
            position = positions.get(name)
            row[name] = cols[position].strip() if position is not None and position < len(cols) else ""
        rows.append(row)
    return rows


def build_session_csv(entries: List[SessionEntry]) -> str:
    """Write session entries in the CSV backup format."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(SESSION_CSV_HEADERS)
    for entry in entries:
        writer.writerow([entry.song.id or "", entry.song.name, "", entry.singer_name or "", entry.pitch or ""])
    return buffer.getvalue()


def load_session(path: Path, library: Optional[SongLibrary] = None) -> List[SessionEntry]:
    """Load a session from a JSON or CSV file.

    JSON sessions hold a list of entries (or {"entries": [...]}); each entry
    either embeds its "song" record or names it by "song_id"/"song_name".
    CSV rows always name their songs and are resolved through the library.

    Args:
        path: Session file
        library: Songs that named entries resolve against

    Returns:
        Session entries in order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is malformed or a song can't be resolved
    """
    if path.suffix.lower() == ".csv":
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        raw_entries = [
            {
                "song_id": row["songId"],
                "song_name": row["songName"],
                "singer_name": row["singerName"],
                "pitch": row["pitch"],
            }
            for row in parse_session_csv(path.read_text(encoding="utf-8"))
        ]
    else:
        data = _read_json(path)
        raw_entries = data.get("entries") if isinstance(data, dict) else data
        if not isinstance(raw_entries, list):
            raise ValueError(f"Expected a list of session entries in {path}")

    entries = [_session_entry(raw, library, position) for position, raw in enumerate(raw_entries, start=1)]
    logger.info(f"Loaded session {path.name} with {len(entries)} song(s)")
    return entries


def _session_entry(raw: dict, library: Optional[SongLibrary], position: int) -> SessionEntry:
    if not isinstance(raw, dict):
        raise ValueError(f"Session entry {position} is not an object")

    if isinstance(raw.get("song"), dict):
        song = Song.from_dict(raw["song"])
    else:
        song_id, song_name = raw.get("song_id") or None, raw.get("song_name") or None
        song = library.find(song_id, song_name) if library is not None else None
        if song is None:
            raise ValueError(f"Session entry {position}: song not found ({song_id or song_name or 'unnamed'})")

    pitch = raw.get("pitch") or None
    if pitch is not None and not is_valid_pitch(pitch):
        logger.warning(f"Session entry {position}: unrecognised pitch '{pitch}' for '{song.name}', shown as-is")

    return SessionEntry(
        song=song,
        singer_name=raw.get("singer_name") or None,
        pitch=pitch,
    )
