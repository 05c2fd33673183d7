"""Daily journal stored in the remote `daily_journals` table.

One entry per user per day; saving an existing day overwrites it.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, List, Dict, Any

from ..errors import SyncError, ValidationError

JOURNALS_TABLE = "daily_journals"
ENTRIES_PER_PAGE = 5


class Mood(Enum):
    """How the day went."""
    GREAT = "great"
    OKAY = "okay"
    BAD = "bad"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Mood":
        """Unknown or empty values fall back to OKAY."""
        try:
            return cls(value)
        except ValueError:
            return cls.OKAY


def _clean_items(items: Optional[List[str]]) -> List[str]:
    return [i.strip() for i in items or [] if i and i.strip()]


def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    """A list-of-strings field; missing or null gives an empty list."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(i, str) for i in value):
        raise ValidationError(f"{key} must be a list of strings")
    return list(value)


@dataclass
class JournalEntry:
    entry_date: date
    completed_tasks: List[str] = field(default_factory=list)
    learnings: List[str] = field(default_factory=list)
    activities: List[str] = field(default_factory=list)
    notes: str = ""
    mood: Mood = Mood.OKAY
    id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_row(self, user_id: str) -> dict:
        """Row for upsert; blank list items are dropped."""
        return {
            "entry_date": self.entry_date.isoformat(),
            "completed_tasks": _clean_items(self.completed_tasks),
            "learnings": _clean_items(self.learnings),
            "activities": _clean_items(self.activities),
            "notes": self.notes or "",
            "mood": self.mood.value,
            "user_id": user_id,
        }

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "entry_date": self.entry_date.isoformat(),
            "completed_tasks": list(self.completed_tasks),
            "learnings": list(self.learnings),
            "activities": list(self.activities),
            "notes": self.notes,
            "mood": self.mood.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JournalEntry":
        """
        Build from a table row or request JSON.

        Raises:
            ValidationError: entry_date missing or not YYYY-MM-DD, or a
                field has the wrong type
        """
        raw_date = data.get("entry_date")
        if not isinstance(raw_date, str):
            raise ValidationError(f"Invalid entry_date: {raw_date!r}")
        try:
            entry_date = date.fromisoformat(raw_date[:10])
        except ValueError as e:
            raise ValidationError(f"Invalid entry_date: {raw_date!r}") from e

        notes = data.get("notes")
        if notes is not None and not isinstance(notes, str):
            raise ValidationError("notes must be a string")
        mood = data.get("mood")
        if mood is not None and not isinstance(mood, str):
            raise ValidationError("mood must be a string")

        return cls(
            entry_date=entry_date,
            completed_tasks=_string_list(data, "completed_tasks"),
            learnings=_string_list(data, "learnings"),
            activities=_string_list(data, "activities"),
            notes=notes or "",
            mood=Mood.parse(mood),
            id=str(data["id"]) if data.get("id") is not None else None,
            user_id=data.get("user_id"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


def paginate(entries: List[JournalEntry], page: int, per_page: int = ENTRIES_PER_PAGE) -> Dict[str, Any]:
    """
    Slice entries for one page (0-based).

    Returns:
        {entries, page, total_pages}
    """
    total_pages = math.ceil(len(entries) / per_page) if per_page > 0 else 0
    page = max(0, min(page, total_pages - 1)) if total_pages else 0
    start = page * per_page
    return {
        "entries": entries[start:start + per_page],
        "page": page,
        "total_pages": total_pages,
    }


class JournalRepository:
    """List and upsert a user's daily entries."""

    def __init__(self, client, table_name: str = JOURNALS_TABLE):
        self.client = client
        self.table_name = table_name

    async def list(self, user_id: str) -> List[JournalEntry]:
        """Entries of a user, most recent day first."""
        try:
            response = await (
                self.client.table(self.table_name)
                .select("*")
                .eq("user_id", user_id)
                .order("entry_date", desc=True)
                .execute()
            )
        except Exception as e:
            raise SyncError(f"Fetching journal failed: {e}") from e
        return [JournalEntry.from_dict(row) for row in response.data or []]

    async def get(self, user_id: str, entry_date: date) -> Optional[JournalEntry]:
        try:
            response = await (
                self.client.table(self.table_name)
                .select("*")
                .eq("user_id", user_id)
                .eq("entry_date", entry_date.isoformat())
                .execute()
            )
        except Exception as e:
            raise SyncError(f"Fetching journal entry failed: {e}") from e
        rows = response.data or []
        return JournalEntry.from_dict(rows[0]) if rows else None

    async def upsert(self, user_id: str, entry: JournalEntry) -> JournalEntry:
        """Create or overwrite the entry for its day."""
        row = entry.to_row(user_id)
        try:
            response = await (
                self.client.table(self.table_name)
                .upsert(row, on_conflict="user_id,entry_date")
                .execute()
            )
        except Exception as e:
            raise SyncError(f"Saving journal entry failed: {e}") from e

        rows = response.data or []
        return JournalEntry.from_dict(rows[0]) if rows else entry
