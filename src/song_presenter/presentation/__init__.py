"""Presentation deck composition.

Turns songs, an optional template and session context into the flat list
of slides shown in presentation mode.
"""

from song_presenter.presentation.annotate import annotate
from song_presenter.presentation.deck import build_deck, build_session_deck
from song_presenter.presentation.verses import split_song

__all__ = ["annotate", "build_deck", "build_session_deck", "split_song"]
