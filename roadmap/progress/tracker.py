"""Roadmap screen state: curriculum, week completion and goal checklists together.

Week completion and goal checks are independent signals; the per-week
percentage comes from goal checks alone.
"""

from datetime import date, datetime
from typing import Optional, List, Dict, Any, Union

from ..curriculum.models import Curriculum, Week
from .aggregator import compute_summary, track_progress, week_goal_percent
from .goal_cache import GoalChecklistCache
from .store import ProgressStore


class RoadmapTracker:
    """
    Single entry point for the presentation layer.

    All mutations go through the store and the goal cache; this class
    only combines their state into JSON-ready views.
    """

    def __init__(self, curriculum: Curriculum, store: ProgressStore, goal_cache: GoalChecklistCache):
        self.curriculum = curriculum
        self.store = store
        self.goal_cache = goal_cache

    def summary(self, now: Optional[Union[datetime, date]] = None) -> Dict[str, Any]:
        """
        Get the progress summary.

        Returns:
            Summary dict, or {"loading": True} until progress has loaded
        """
        if not self.store.loaded:
            return {"loading": True}

        if now is None:
            now = datetime.now()

        result = compute_summary(self.curriculum, self.store.completed_week_ids, now).to_dict()
        result["loading"] = False
        return result

    def week_view(self, week_id: str) -> Dict[str, Any]:
        """State of one week. Raises NotFoundError for unknown ids."""
        week = self.curriculum.find_week(week_id)
        return self._week_state(week)

    def _week_state(self, week: Week) -> Dict[str, Any]:
        checked = self.goal_cache.get_checked_goals(week.id)
        return {
            **week.to_dict(),
            "complete": self.store.is_complete(week.id),
            "checked_goals": sorted(checked),
            "goal_percent": week_goal_percent(week, len(checked)),
        }

    def track_views(self) -> List[Dict[str, Any]]:
        """Full roadmap with per-week state, grouped by track and month."""
        totals = {t["track_id"]: t for t in track_progress(self.curriculum, self.store.completed_week_ids)}

        views = []
        for track in self.curriculum.tracks:
            views.append({
                "id": track.id,
                "title": track.title,
                "description": track.description,
                "progress": totals[track.id],
                "months": [
                    {
                        "title": month.title,
                        "weeks": [self._week_state(w) for w in month.weeks],
                    }
                    for month in track.months
                ],
            })
        return views

    async def toggle_week(self, week_id: str) -> Dict[str, Any]:
        """Flip week completion. Returns the week view."""
        await self.store.toggle(week_id)
        return self.week_view(week_id)

    def toggle_goal(self, week_id: str, goal_index: int) -> Dict[str, Any]:
        """Flip one goal checkbox. Returns the week view."""
        self.goal_cache.toggle_goal(week_id, goal_index)
        return self.week_view(week_id)
