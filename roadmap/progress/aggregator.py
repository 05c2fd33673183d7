"""Derived progress metrics.

Pure functions of the curriculum, the completed week ids and the
current time. Nothing here is stored; summaries are recomputed on every
mutation.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, List, Dict, Any, Iterable, Union

from ..curriculum.models import Curriculum, Week


@dataclass(frozen=True)
class ProgressSummary:
    """Aggregate roadmap progress."""
    total_weeks: int
    completed_weeks: int
    percent_complete: int
    days_until_end: int
    current_week: Optional[Week]

    def to_dict(self) -> dict:
        return {
            "total_weeks": self.total_weeks,
            "completed_weeks": self.completed_weeks,
            "percent_complete": self.percent_complete,
            "days_until_end": self.days_until_end,
            "current_week": self.current_week.to_dict() if self.current_week else None,
        }


def percent(part: int, whole: int) -> int:
    """Percentage rounded half up; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(part * 100 / whole + 0.5))


def _as_date(now: Union[datetime, date]) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def find_current_week(curriculum: Curriculum, today: date) -> Optional[Week]:
    """
    Resolve the week that is active on a given day.

    The first week in curriculum order whose range contains the day wins.
    Outside any range: the earliest upcoming week, or, once the program
    is over, the latest finished week.
    """
    weeks = list(curriculum.weeks())
    if not weeks:
        return None

    for week in weeks:
        if week.contains(today):
            return week

    upcoming = [w for w in weeks if w.start_date > today]
    if upcoming:
        return min(upcoming, key=lambda w: w.start_date)

    return max(weeks, key=lambda w: w.end_date)


def compute_summary(
    curriculum: Curriculum,
    completed_week_ids: Iterable[str],
    now: Union[datetime, date],
) -> ProgressSummary:
    """
    Compute the progress summary.

    Args:
        curriculum: Roadmap definition
        completed_week_ids: Ids of weeks marked complete; ids unknown to
            the curriculum are ignored
        now: Current time

    Returns:
        ProgressSummary
    """
    today = _as_date(now)
    completed = set(completed_week_ids)

    total = curriculum.total_weeks
    done = sum(1 for week_id in curriculum.week_ids() if week_id in completed)

    last = curriculum.last_week
    # Negative once the program has ended
    days_until_end = (last.end_date - today).days if last else 0

    return ProgressSummary(
        total_weeks=total,
        completed_weeks=done,
        percent_complete=percent(done, total),
        days_until_end=days_until_end,
        current_week=find_current_week(curriculum, today),
    )


def week_goal_percent(week: Week, checked_count: int) -> int:
    """Share of a week's goals that are checked, independent of week completion."""
    # Stale indices from an older curriculum can push the count past the goal list
    return percent(min(checked_count, len(week.goals)), len(week.goals))


def week_progress(curriculum: Curriculum, week_id: str, checked_count: int) -> int:
    """Per-week partial percentage by id. Raises NotFoundError for unknown ids."""
    return week_goal_percent(curriculum.find_week(week_id), checked_count)


def track_progress(curriculum: Curriculum, completed_week_ids: Iterable[str]) -> List[Dict[str, Any]]:
    """
    Completion per track.

    Returns:
        List of {track_id, title, completed_weeks, total_weeks, percent_complete}
    """
    completed = set(completed_week_ids)
    result = []
    for track in curriculum.tracks:
        week_ids = [w.id for w in track.weeks()]
        done = sum(1 for week_id in week_ids if week_id in completed)
        result.append({
            "track_id": track.id,
            "title": track.title,
            "completed_weeks": done,
            "total_weeks": len(week_ids),
            "percent_complete": percent(done, len(week_ids)),
        })
    return result
