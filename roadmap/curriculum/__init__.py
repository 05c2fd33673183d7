"""Curriculum module: the static track/month/week roadmap."""

from .models import Curriculum, Track, Month, Week
from .loader import load_curriculum, save_curriculum
from .default_roadmap import DEFAULT_ROADMAP

__all__ = [
    "Curriculum",
    "Track",
    "Month",
    "Week",
    "load_curriculum",
    "save_curriculum",
    "DEFAULT_ROADMAP",
]
