"""Curriculum tree: tracks, months, weeks and their goals.

The tree is built once at startup and never mutated afterwards.
Week ids are the join key for remote completion records and the
local goal cache, so they must be unique across the whole curriculum.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, List, Dict, Any, Tuple, Iterator

from ..errors import CurriculumError, NotFoundError


def _parse_date(value: Any, week_id: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise CurriculumError(f"Week {week_id}: invalid date {value!r}") from e


@dataclass(frozen=True)
class Week:
    """Atomic planning unit with a fixed goal list and a date range."""
    id: str
    title: str
    start_date: date
    end_date: date
    goals: Tuple[str, ...] = ()
    description: Optional[str] = None

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "goals": list(self.goals),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Week":
        week_id = data.get("id")
        if not week_id:
            raise CurriculumError(f"Week without id: {data!r}")
        return cls(
            id=week_id,
            title=data.get("title", week_id),
            start_date=_parse_date(data.get("start_date"), week_id),
            end_date=_parse_date(data.get("end_date"), week_id),
            goals=tuple(data.get("goals", [])),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Month:
    title: str
    weeks: Tuple[Week, ...] = ()

    def to_dict(self) -> dict:
        return {"title": self.title, "weeks": [w.to_dict() for w in self.weeks]}

    @classmethod
    def from_dict(cls, data: dict) -> "Month":
        return cls(
            title=data.get("title", ""),
            weeks=tuple(Week.from_dict(w) for w in data.get("weeks", [])),
        )


@dataclass(frozen=True)
class Track:
    """Top-level curriculum division (a subject area)."""
    id: str
    title: str
    months: Tuple[Month, ...] = ()
    description: Optional[str] = None

    def weeks(self) -> Iterator[Week]:
        for month in self.months:
            yield from month.weeks

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "months": [m.to_dict() for m in self.months],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Track":
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            description=data.get("description"),
            months=tuple(Month.from_dict(m) for m in data.get("months", [])),
        )


@dataclass(frozen=True)
class Curriculum:
    """
    Full roadmap as an immutable value.

    Lookups flatten the tree with a linear scan; curricula are in the
    order of tens of weeks.
    """
    title: str
    tracks: Tuple[Track, ...] = ()
    _index: Dict[str, Week] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        index = {}
        for week in self.weeks():
            if week.id in index:
                raise CurriculumError(f"Duplicate week id: {week.id}")
            if week.start_date > week.end_date:
                raise CurriculumError(f"Week {week.id} ends before it starts")
            index[week.id] = week
        object.__setattr__(self, "_index", index)

    def weeks(self) -> Iterator[Week]:
        """All weeks in curriculum order (track, then month, then week)."""
        for track in self.tracks:
            yield from track.weeks()

    def week_ids(self) -> List[str]:
        return [w.id for w in self.weeks()]

    @property
    def total_weeks(self) -> int:
        return len(self._index)

    @property
    def first_week(self) -> Optional[Week]:
        return next(self.weeks(), None)

    @property
    def last_week(self) -> Optional[Week]:
        """Last week of the last month of the last track."""
        last = None
        for week in self.weeks():
            last = week
        return last

    def get_week(self, week_id: str) -> Optional[Week]:
        return self._index.get(week_id)

    def find_week(self, week_id: str) -> Week:
        """
        Look up a week by id.

        Raises:
            NotFoundError: if no week has this id
        """
        week = self.get_week(week_id)
        if week is None:
            raise NotFoundError(week_id)
        return week

    def track_for(self, week_id: str) -> Optional[Track]:
        for track in self.tracks:
            if any(w.id == week_id for w in track.weeks()):
                return track
        return None

    def get_overview(self) -> List[Dict[str, Any]]:
        """
        Get overview of all tracks.

        Returns:
            List of track summaries with their months and week titles
        """
        overview = []
        for track in self.tracks:
            overview.append({
                "id": track.id,
                "title": track.title,
                "description": track.description,
                "week_count": sum(1 for _ in track.weeks()),
                "months": [
                    {
                        "title": month.title,
                        "weeks": [{"id": w.id, "title": w.title} for w in month.weeks],
                    }
                    for month in track.months
                ],
            })
        return overview

    def to_dict(self) -> dict:
        return {"title": self.title, "tracks": [t.to_dict() for t in self.tracks]}

    @classmethod
    def from_dict(cls, data: dict) -> "Curriculum":
        return cls(
            title=data.get("title", ""),
            tracks=tuple(Track.from_dict(t) for t in data.get("tracks", [])),
        )
