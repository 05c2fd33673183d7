# Roadmap Tracker - learning roadmap, project showcase and daily journal
from .curriculum import Curriculum, load_curriculum
from .progress import GoalChecklistCache, ProgressStore, ProgressSummary, RoadmapTracker, compute_summary

__all__ = [
    "Curriculum",
    "load_curriculum",
    "GoalChecklistCache",
    "ProgressStore",
    "ProgressSummary",
    "RoadmapTracker",
    "compute_summary",
]
