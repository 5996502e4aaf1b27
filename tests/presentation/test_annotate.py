"""Tests for next-slide annotation."""

from song_presenter.models import Slide, SlideType
from song_presenter.presentation.annotate import annotate


def song_slide(index, name, singer=None, pitch=None, session_index=None):
    return Slide(
        index=index,
        content=f"{name} lyrics",
        song_name=name,
        singer_name=singer,
        pitch=pitch,
        session_song_index=session_index,
    )


def static_slide(index, name):
    return Slide(index=index, content="", song_name=name, slide_type=SlideType.STATIC, template_slide={"n": index})


class TestAnnotate:
    """Tests for lookahead rules."""

    def test_empty_deck(self):
        assert annotate([]) == []

    def test_last_slide_has_no_hint(self):
        slides = annotate([song_slide(0, "A"), song_slide(1, "A")])

        assert slides[-1].next_song_name is None
        assert slides[-1].next_is_continuation is None

    def test_continuation_omits_singer_and_pitch(self):
        """Verify same-song successors only name the song."""
        slides = annotate([song_slide(0, "A", "Asha", "C"), song_slide(1, "A", "Asha", "C")])

        assert slides[0].next_song_name == "A"
        assert slides[0].next_is_continuation is True
        assert slides[0].next_singer_name is None
        assert slides[0].next_pitch is None

    def test_transition_carries_next_singer_and_pitch(self):
        slides = annotate([song_slide(0, "A", "Asha", "C"), song_slide(1, "B", "Ben", "G minor")])

        assert slides[0].next_song_name == "B"
        assert slides[0].next_singer_name == "Ben"
        assert slides[0].next_pitch == "G minor"
        assert slides[0].next_is_continuation is False

    def test_static_successor_clears_hint(self):
        """Verify no hint is shown before a static slide."""
        slides = annotate([song_slide(0, "A"), static_slide(1, "A")])

        assert slides[0].next_song_name is None
        assert slides[0].next_singer_name is None
        assert slides[0].next_is_continuation is None

    def test_static_to_static_has_no_hint(self):
        slides = annotate([static_slide(0, "A"), static_slide(1, "A")])

        assert slides[0].next_song_name is None

    def test_static_before_song_is_a_transition(self):
        """Verify a static slide announces the song that follows it."""
        slides = annotate([static_slide(0, "A"), song_slide(1, "A", "Asha")])

        assert slides[0].next_song_name == "A"
        assert slides[0].next_singer_name == "Asha"
        assert slides[0].next_is_continuation is False

    def test_session_position_separates_songs(self):
        """Verify the same song sung twice in a row is a transition."""
        slides = annotate([song_slide(0, "A", session_index=1), song_slide(1, "A", session_index=2)])

        assert slides[0].next_is_continuation is False

    def test_stale_hints_replaced(self):
        """Verify re-annotating a deck recomputes every hint."""
        stale = Slide(index=0, content="x", song_name="A", next_song_name="Old", next_is_continuation=False)

        slides = annotate([stale, static_slide(1, "A")])

        assert slides[0].next_song_name is None
        assert slides[0].next_is_continuation is None

    def test_continuity_property(self):
        """Verify next_is_continuation matches successor identity on every slide."""
        deck = [
            static_slide(0, "A"),
            song_slide(1, "A", session_index=1),
            song_slide(2, "A", session_index=1),
            song_slide(3, "B", session_index=2),
            static_slide(4, "B"),
        ]

        slides = annotate(deck)

        for current, following in zip(slides, slides[1:]):
            expected = (
                not current.is_static
                and following.slide_type == SlideType.SONG
                and following.song_identity == current.song_identity
            )
            assert bool(current.next_is_continuation) == expected

    def test_input_not_mutated(self):
        deck = [song_slide(0, "A"), song_slide(1, "B")]

        annotate(deck)

        assert deck[0].next_song_name is None
