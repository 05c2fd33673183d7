"""Loading the curriculum definition.

A JSON file can override the built-in roadmap; without one the
default roadmap is used.
"""

import json
from pathlib import Path
from typing import Optional

from ..errors import CurriculumError
from .default_roadmap import DEFAULT_ROADMAP
from .models import Curriculum


def load_curriculum(path: Optional[Path] = None) -> Curriculum:
    """
    Load the curriculum.

    Args:
        path: JSON file with the roadmap. If None or missing, the
            built-in roadmap is used.

    Returns:
        Immutable curriculum

    Raises:
        CurriculumError: if the file exists but is not a valid roadmap
    """
    if path is None or not Path(path).exists():
        return Curriculum.from_dict(DEFAULT_ROADMAP)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise CurriculumError(f"Could not read curriculum {path}: {e}") from e

    if not isinstance(data, dict):
        raise CurriculumError(f"Curriculum {path} must be a JSON object")

    return Curriculum.from_dict(data)


def save_curriculum(curriculum: Curriculum, path: Path):
    """Write the curriculum as JSON (for editing a copy of the default roadmap)."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(curriculum.to_dict(), f, indent=2, ensure_ascii=False)
