"""Data models for the presentation deck composer.

Provides dataclasses for the records consumed from the song and template
stores (Song, Template, SessionEntry) and for the Slide records produced
for the renderer.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional


class SlideType(str, Enum):
    """Kind of deck entry."""

    SONG = "song"
    STATIC = "static"


@dataclass(frozen=True)
class Song:
    """A song as loaded from the song store.

    Attributes:
        name: Display name of the song
        lyrics: Lyrics text; verses separated by a blank line
        meaning: Translation text, same verse convention, may contain markup
        id: Optional store ID, used to resolve session rows
    """

    name: str
    lyrics: Optional[str] = None
    meaning: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Song":
        """Create a Song from a store record.

        Args:
            data: Mapping with "name", "lyrics" and "meaning" keys

        Returns:
            Song instance

        Raises:
            ValueError: If the record has no name or a text field isn't a string
        """
        name = data.get("name")
        if not name:
            raise ValueError("Song record is missing a name")

        for key in ("lyrics", "meaning"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise ValueError(f"Song '{name}': {key} must be a string, got {type(data[key]).__name__}")

        song_id = data.get("id")
        return cls(
            name=str(name),
            lyrics=data.get("lyrics"),
            meaning=data.get("meaning"),
            id=str(song_id) if song_id is not None else None,
        )


@dataclass(frozen=True)
class Template:
    """A multi-slide visual template.

    Slides are opaque payloads handed to the renderer unchanged. The slide
    at reference_slide_index styles every generated song slide; the slides
    before it form the intro and the slides after it form the outro.

    Attributes:
        slides: Ordered template slide definitions
        reference_slide_index: Position of the reference slide, if set
        name: Optional template name
    """

    slides: tuple[Any, ...] = ()
    reference_slide_index: Optional[int] = None
    name: Optional[str] = None

    @property
    def is_multi_slide(self) -> bool:
        """Whether the template can frame songs with intro/outro slides."""
        if len(self.slides) < 2 or self.reference_slide_index is None:
            return False
        return 0 <= self.reference_slide_index < len(self.slides)

    @property
    def intro_slides(self) -> tuple[Any, ...]:
        """Template slides shown before the song content."""
        if not self.is_multi_slide:
            return ()
        return self.slides[: self.reference_slide_index]

    @property
    def outro_slides(self) -> tuple[Any, ...]:
        """Template slides shown after the song content."""
        if not self.is_multi_slide:
            return ()
        return self.slides[self.reference_slide_index + 1 :]

    @classmethod
    def from_dict(cls, data: dict) -> "Template":
        """Create a Template from a store record.

        Accepts both snake_case and the camelCase keys written by the
        template editor.

        Args:
            data: Mapping with "slides" and "reference_slide_index" keys

        Returns:
            Template instance

        Raises:
            ValueError: If slides is not a list or the index is not an integer
        """
        slides = data.get("slides") or []
        if not isinstance(slides, list):
            raise ValueError("Template slides must be a list")

        ref = data.get("reference_slide_index", data.get("referenceSlideIndex"))
        if ref is not None and (isinstance(ref, bool) or not isinstance(ref, int)):
            raise ValueError(f"Invalid reference slide index: {ref!r}")

        return cls(slides=tuple(slides), reference_slide_index=ref, name=data.get("name"))


@dataclass(frozen=True)
class SessionEntry:
    """A song within a session, with who sings it and in which pitch."""

    song: Song
    singer_name: Optional[str] = None
    pitch: Optional[str] = None


@dataclass(frozen=True)
class Slide:
    """A single renderable deck entry.

    Attributes:
        index: Position in the final deck (0-based)
        content: Lyrics text; empty for static slides
        song_name: Song this slide belongs to (or frames, for static slides)
        slide_type: Song content or static template slide
        translation: Translation markup, when attached
        song_slide_number: 1-based position within the song's run
        song_slide_count: Number of slides in the song's run
        template_slide: Template slide to render verbatim (static only)
        singer_name: Singer for this song
        pitch: Pitch for this song
        session_song_index: 1-based song position in a session
        total_songs: Number of songs in a session
        next_song_name: Song shown on the following slide
        next_singer_name: Singer of the following song
        next_pitch: Pitch of the following song
        next_is_continuation: Whether the following slide continues this song
    """

    index: int
    content: str
    song_name: str
    slide_type: SlideType = SlideType.SONG
    translation: Optional[str] = None
    song_slide_number: Optional[int] = None
    song_slide_count: Optional[int] = None
    template_slide: Any = None
    singer_name: Optional[str] = None
    pitch: Optional[str] = None
    session_song_index: Optional[int] = None
    total_songs: Optional[int] = None
    next_song_name: Optional[str] = None
    next_singer_name: Optional[str] = None
    next_pitch: Optional[str] = None
    next_is_continuation: Optional[bool] = None

    @property
    def is_static(self) -> bool:
        return self.slide_type == SlideType.STATIC

    @property
    def song_identity(self) -> tuple[str, Optional[int]]:
        """Key that distinguishes one song run from another in a deck."""
        return (self.song_name, self.session_song_index)

    @property
    def position_label(self) -> str:
        """Per-song position as "k/N", or an empty string."""
        if self.song_slide_number is None or self.song_slide_count is None:
            return ""
        return f"{self.song_slide_number}/{self.song_slide_count}"

    def to_dict(self) -> dict[str, Any]:
        """Convert Slide to dictionary, omitting unset fields.

        Returns:
            Dictionary representation of the slide
        """
        data = asdict(self)
        data["slide_type"] = self.slide_type.value
        # asdict() deep-copies; keep the template payload as given
        data["template_slide"] = self.template_slide
        return {key: value for key, value in data.items() if value is not None}
