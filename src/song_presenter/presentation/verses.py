"""Verse splitting: one song's lyrics and translation into content slides.

Short songs fit on one slide. Longer songs are split on the author's verse
breaks when there are any, otherwise into fixed-size chunks of lines.
"""

import re
from dataclasses import replace
from typing import List, Optional

from song_presenter.config import DeckSettings
from song_presenter.logging_config import get_logger
from song_presenter.models import Slide, SlideType, Song
from song_presenter.presentation.markup import strip_markup, truncate_lines

logger = get_logger(__name__)

# A blank line (optionally holding stray spaces) separates verses
VERSE_BREAK_RE = re.compile(r"\n[ \t]*\n")


def split_verses(text: Optional[str]) -> List[str]:
    """Split text into trimmed, non-empty verses.

    Args:
        text: Lyrics or translation text

    Returns:
        Verses in order
    """
    if not text:
        return []
    verses = (verse.strip() for verse in VERSE_BREAK_RE.split(_normalize_newlines(text)))
    return [verse for verse in verses if verse]


def split_song(song: Song, config: Optional[DeckSettings] = None) -> List[Slide]:
    """Split a song into numbered content slides.

    Never raises: a song without lyrics yields a single placeholder slide.
    Slide indexes are local to the song; deck builders renumber them.

    Args:
        song: Song to split
        config: Deck settings (defaults apply when omitted)

    Returns:
        At least one song slide, each carrying its k/N position
    """
    config = config or DeckSettings()

    if not song.lyrics or not isinstance(song.lyrics, str):
        logger.debug(f"No usable lyrics for '{song.name}', using placeholder slide")
        return _number([Slide(index=0, content=config.placeholder_text, song_name=song.name)])

    lyrics = _normalize_newlines(song.lyrics)
    all_lines = [line for line in lyrics.split("\n") if line.strip()]
    has_verse_breaks = VERSE_BREAK_RE.search(lyrics) is not None
    translations = split_verses(song.meaning if isinstance(song.meaning, str) else None)

    if len(all_lines) <= config.max_lines_per_slide:
        # Short song: one slide, verse breaks ignored
        blocks = ["\n".join(all_lines)]
        block_translations = translations[:1]
    elif has_verse_breaks:
        # Author verse breaks are kept even when a verse is long
        blocks = split_verses(lyrics)
        block_translations = translations
    else:
        size = config.max_lines_per_slide
        blocks = ["\n".join(all_lines[i : i + size]) for i in range(0, len(all_lines), size)]
        # A mechanically split song shows its translation once
        block_translations = translations[:1]

    slides = []
    for position, block in enumerate(blocks):
        if position == 0 and config.prepend_title:
            block = _prepend_title(block, song.name)

        translation = None
        if position < len(block_translations):
            translation = truncate_lines(block_translations[position], config.max_translation_lines) or None

        slides.append(
            Slide(
                index=position,
                content=block,
                song_name=song.name,
                slide_type=SlideType.SONG,
                translation=translation,
            )
        )

    logger.debug(
        f"Split '{song.name}' ({len(all_lines)} lines, verse breaks: {has_verse_breaks}) "
        f"into {len(slides)} slide(s)"
    )
    return _number(slides)


def _number(slides: List[Slide]) -> List[Slide]:
    """Set the 1-based song position and run length on each slide."""
    total = len(slides)
    return [
        replace(slide, index=position, song_slide_number=position + 1, song_slide_count=total)
        for position, slide in enumerate(slides)
    ]


def _prepend_title(content: str, song_name: str) -> str:
    lines = [line for line in content.split("\n") if line.strip()]
    if not lines or not song_name:
        return content

    first_line = " ".join(strip_markup(lines[0]).split()).lower()
    title = " ".join(strip_markup(song_name).split()).lower()
    if first_line != title:
        return f"{song_name}\n{content}"
    return content


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")
