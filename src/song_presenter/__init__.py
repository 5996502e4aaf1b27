"""Song Presenter - presentation deck composer for a song library.

This package provides tools for:
- Splitting song lyrics and translations into projector slides
- Framing songs with the intro/outro slides of a visual template
- Composing whole sessions (setlists) into a single deck
"""

__version__ = "0.3.0"
