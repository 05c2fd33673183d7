"""Journal module: daily learning log."""

from .entries import JournalEntry, JournalRepository, Mood, paginate

__all__ = [
    "JournalEntry",
    "JournalRepository",
    "Mood",
    "paginate",
]
