"""Next-slide annotation for "coming up" hints on the projector."""

from dataclasses import replace
from typing import List, Sequence

from song_presenter.models import Slide

_LOOKAHEAD_CLEARED = {
    "next_song_name": None,
    "next_singer_name": None,
    "next_pitch": None,
    "next_is_continuation": None,
}


def annotate(slides: Sequence[Slide]) -> List[Slide]:
    """Fill in lookahead fields describing each slide's successor.

    - The last slide, and any slide followed by a static slide, gets no hint.
    - A song slide followed by more of the same song is a continuation.
    - Anything else is a transition to the successor's song, singer and pitch.

    Args:
        slides: Deck in presentation order

    Returns:
        New list of annotated slides
    """
    annotated = []
    for current, following in zip(slides, list(slides[1:]) + [None]):
        if following is None or following.is_static:
            annotated.append(replace(current, **_LOOKAHEAD_CLEARED))
        elif not current.is_static and following.song_identity == current.song_identity:
            # Singer and pitch are unchanged within a song
            annotated.append(
                replace(
                    current,
                    next_song_name=current.song_name,
                    next_singer_name=None,
                    next_pitch=None,
                    next_is_continuation=True,
                )
            )
        else:
            annotated.append(
                replace(
                    current,
                    next_song_name=following.song_name,
                    next_singer_name=following.singer_name,
                    next_pitch=following.pitch,
                    next_is_continuation=False,
                )
            )
    return annotated
