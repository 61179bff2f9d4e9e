"""Deckhand CLI commands."""

from .explain import explain
from .problems import problems

__all__ = ["explain", "problems"]
