"""Progress module: completed weeks, goal checklists and derived metrics."""

from .aggregator import (
    ProgressSummary,
    compute_summary,
    find_current_week,
    track_progress,
    week_goal_percent,
    week_progress,
)
from .goal_cache import GoalChecklistCache, dump_selections, parse_selections
from .store import ProgressStore
from .tracker import RoadmapTracker

__all__ = [
    "ProgressSummary",
    "compute_summary",
    "find_current_week",
    "track_progress",
    "week_goal_percent",
    "week_progress",
    "GoalChecklistCache",
    "dump_selections",
    "parse_selections",
    "ProgressStore",
    "RoadmapTracker",
]
