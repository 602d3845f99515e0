"""Swipe deck and shortlist state machine."""

from .tracker import DeckSnapshot, DeckState, DeckStateError, DeckTracker

__all__ = ["DeckSnapshot", "DeckState", "DeckStateError", "DeckTracker"]
