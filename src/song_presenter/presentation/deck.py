"""Deck builders for single-song previews and whole sessions.

A deck is the song content slides framed by the template's static intro
and outro slides. Both builders recompute the whole deck from their
inputs on every call and finish with the next-slide annotation pass.
"""

from dataclasses import replace
from typing import Any, Iterable, List, Optional, Sequence

from song_presenter.config import DeckSettings
from song_presenter.logging_config import get_logger
from song_presenter.models import SessionEntry, Slide, SlideType, Song, Template
from song_presenter.presentation.annotate import annotate
from song_presenter.presentation.verses import split_song

logger = get_logger(__name__)


def build_deck(
    song: Song,
    template: Optional[Template] = None,
    singer_name: Optional[str] = None,
    pitch: Optional[str] = None,
    config: Optional[DeckSettings] = None,
) -> List[Slide]:
    """Build the deck for presenting a single song.

    Without a multi-slide template (or when static slides are switched off
    for previews) the deck is just the song's content slides.

    Args:
        song: Song to present
        template: Visual template framing the song
        singer_name: Singer shown with the song
        pitch: Pitch shown with the song
        config: Deck settings (defaults apply when omitted)

    Returns:
        Annotated slides with contiguous indexes
    """
    config = config or DeckSettings()

    song_slides = [
        replace(slide, singer_name=singer_name, pitch=pitch)
        for slide in split_song(song, config)
    ]

    if not _uses_static_slides(template, config):
        return _finish(song_slides)

    deck = (
        _static_slides(template.intro_slides, song.name)
        + song_slides
        + _static_slides(template.outro_slides, song.name)
    )
    return _finish(deck)


def build_session_deck(
    entries: Sequence[SessionEntry],
    template: Optional[Template] = None,
    config: Optional[DeckSettings] = None,
) -> List[Slide]:
    """Build one deck for a whole session.

    The template intro is shown once before the first song and the outro
    once after the last song. Every content slide carries its song's
    singer, pitch and position in the session.

    Args:
        entries: Songs in the order they are sung
        template: Visual template framing the session
        config: Deck settings (defaults apply when omitted)

    Returns:
        Annotated slides with contiguous indexes; empty for an empty session
    """
    config = config or DeckSettings()
    total_songs = len(entries)
    framed = template is not None and template.is_multi_slide

    deck: List[Slide] = []
    for position, entry in enumerate(entries, start=1):
        if framed and position == 1:
            deck.extend(
                _static_slides(
                    template.intro_slides,
                    entry.song.name,
                    session_song_index=1,
                    total_songs=total_songs,
                )
            )

        deck.extend(
            replace(
                slide,
                singer_name=entry.singer_name,
                pitch=entry.pitch,
                session_song_index=position,
                total_songs=total_songs,
            )
            for slide in split_song(entry.song, config)
        )

        if framed and position == total_songs:
            deck.extend(_static_slides(template.outro_slides, entry.song.name))

    logger.debug(f"Built session deck: {total_songs} song(s), {len(deck)} slide(s)")
    return _finish(deck)


def _uses_static_slides(template: Optional[Template], config: DeckSettings) -> bool:
    if template is None or not template.is_multi_slide:
        return False
    return not config.skip_static_slides


def _static_slides(
    template_slides: Iterable[Any],
    song_name: str,
    session_song_index: Optional[int] = None,
    total_songs: Optional[int] = None,
) -> List[Slide]:
    return [
        Slide(
            index=0,
            content="",
            song_name=song_name,
            slide_type=SlideType.STATIC,
            template_slide=template_slide,
            session_song_index=session_song_index,
            total_songs=total_songs,
        )
        for template_slide in template_slides
    ]


def _finish(slides: List[Slide]) -> List[Slide]:
    """Renumber indexes across the deck and add lookahead hints."""
    return annotate([replace(slide, index=index) for index, slide in enumerate(slides)])
