"""Deckhand - actionable error classification for build/deploy pipelines."""

__version__ = "0.4.0"
