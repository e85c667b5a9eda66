"""drill — flashcard study tool with a review-session scheduling engine."""

__version__ = "0.1.0"

from drill.models import CardView, HistoryEntry, ImportRow, Item
from drill.state import Session
from drill.app import App

__all__ = ["App", "CardView", "HistoryEntry", "ImportRow", "Item", "Session"]
