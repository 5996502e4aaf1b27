"""Musical pitch names and their numeric display notation.

Singers record their pitch as a western note ("D#", "G major", "A minor")
or a Madhyam pitch ("2.5 Madhyam"). The projector shows the compact
numeric form: "C" -> "1", "C major" -> "1M", "D# minor" -> "2.5m".
"""

from typing import List, Optional

BASE_PITCHES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

PITCH_TO_NUMBER = {
    "C": "1",
    "C#": "1.5",
    "D": "2",
    "D#": "2.5",
    "E": "3",
    "F": "4",
    "F#": "4.5",
    "G": "5",
    "G#": "5.5",
    "A": "6",
    "A#": "6.5",
    "B": "7",
}

MADHYAM_PITCHES = [f"{number} Madhyam" for number in PITCH_TO_NUMBER.values()]


def all_pitch_options() -> List[str]:
    """All recognised pitches: each base note plain, major and minor, then Madhyam."""
    options = []
    for base in BASE_PITCHES:
        options.extend([base, f"{base} major", f"{base} minor"])
    return options + MADHYAM_PITCHES


def is_valid_pitch(pitch: Optional[str]) -> bool:
    return bool(pitch) and pitch in all_pitch_options()


def format_pitch(pitch: Optional[str]) -> str:
    """Format a pitch in numeric notation.

    Madhyam pitches and values that aren't recognised are returned as-is.

    Args:
        pitch: Pitch name

    Returns:
        Numeric notation, or an empty string when no pitch is set
    """
    if not pitch:
        return ""
    if "Madhyam" in pitch:
        return pitch

    if pitch.endswith(" major"):
        base, suffix = pitch[: -len(" major")], "M"
    elif pitch.endswith(" minor"):
        base, suffix = pitch[: -len(" minor")], "m"
    else:
        base, suffix = pitch, ""

    number = PITCH_TO_NUMBER.get(base)
    if number is None:
        return pitch
    return f"{number}{suffix}"
