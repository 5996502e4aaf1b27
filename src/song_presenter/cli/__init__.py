"""Command line interface for song-presenter."""
