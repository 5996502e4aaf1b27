"""Shared fixtures for song-presenter tests."""

import pytest

from song_presenter.models import SessionEntry, Song, Template


def make_lines(count: int, prefix: str = "Line") -> str:
    """Build lyrics with one numbered line per row."""
    return "\n".join(f"{prefix} {i}" for i in range(1, count + 1))


@pytest.fixture
def short_song():
    """Three-line song that fits on one slide."""
    return Song(name="Short Song", lyrics="L1\nL2\nL3")


@pytest.fixture
def verse_song():
    """Two verses of six lines each, separated by a blank line."""
    lyrics = make_lines(6, "Verse one") + "\n\n" + make_lines(6, "Verse two")
    meaning = "First meaning line\nSecond meaning line\n\nOther verse meaning"
    return Song(name="Verse Song", lyrics=lyrics, meaning=meaning)


@pytest.fixture
def long_song():
    """Fifteen lines without any verse breaks."""
    return Song(name="Long Song", lyrics=make_lines(15), meaning="Meaning one<br>Meaning two")


@pytest.fixture
def framing_template():
    """Four-slide template: one intro, the reference slide, two outros."""
    return Template(
        slides=({"id": "intro"}, {"id": "reference"}, {"id": "outro-1"}, {"id": "outro-2"}),
        reference_slide_index=1,
        name="Framing",
    )


@pytest.fixture
def outro_only_template():
    """Template whose first slide is the reference slide, followed by one outro."""
    return Template(
        slides=({"id": "reference"}, {"id": "closing"}),
        reference_slide_index=0,
        name="Outro only",
    )


@pytest.fixture
def two_song_session():
    """Session of song A (two slides) and song B (one slide)."""
    song_a = Song(name="A", lyrics=make_lines(6, "A") + "\n\n" + make_lines(6, "A2"))
    song_b = Song(name="B", lyrics="B1\nB2")
    return [
        SessionEntry(song=song_a, singer_name="Asha", pitch="C major"),
        SessionEntry(song=song_b, singer_name="Ben", pitch="D# minor"),
    ]
