"""Per-goal checklist state, kept on the local device only.

The whole mapping of week id to checked goal indices is rewritten after
every toggle. It is never synchronized with the remote store.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional, Dict, Iterable, FrozenSet, Set

from ..curriculum.models import Curriculum
from ..errors import CacheWriteError, InvalidGoalError, MalformedCacheError

# Name of the local record the browser kept the selections under
CACHE_RECORD = "weekGoals"


def dump_selections(selections: Dict[str, Iterable[int]]) -> str:
    """Serialize {week_id: {goal indices}} to a JSON object of sorted lists."""
    return json.dumps(
        {week_id: sorted(goals) for week_id, goals in selections.items()},
        indent=2,
        sort_keys=True,
    )


def parse_selections(text: str) -> Dict[str, Set[int]]:
    """
    Parse persisted selections.

    Raises:
        MalformedCacheError: if the text is not an object mapping
            strings to arrays of non-negative integers
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise MalformedCacheError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedCacheError("Expected a JSON object")

    selections = {}
    for week_id, goals in data.items():
        if not isinstance(goals, list):
            raise MalformedCacheError(f"Goals for {week_id} must be a list")
        for index in goals:
            # bool is an int subclass but never a valid index
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise MalformedCacheError(f"Invalid goal index for {week_id}: {index!r}")
        selections[week_id] = set(goals)
    return selections


class GoalChecklistCache:
    """
    Tracks individually checked goals per week.

    Independent of whole-week completion: checking every goal of a week
    does not mark the week complete.

    Changes are built on a copy and only become visible once the file
    write succeeded. The published mapping and its sets are never
    mutated, so readers need no lock.
    """

    def __init__(self, curriculum: Curriculum, cache_path: Optional[Path] = None):
        """
        Initialize the goal cache.

        Args:
            curriculum: Roadmap used to validate goal indices
            cache_path: Path to the selections JSON file
        """
        if cache_path is None:
            cache_path = Path("data") / "week_goals.json"

        self.curriculum = curriculum
        self.cache_path = Path(cache_path)
        self._selections: Dict[str, FrozenSet[int]] = {}
        self._lock = threading.Lock()

    def hydrate(self):
        """Load persisted selections. Missing or malformed data gives an empty cache."""
        selections = {}
        try:
            if self.cache_path.exists():
                text = self.cache_path.read_text(encoding="utf-8")
                selections = {
                    week_id: frozenset(goals)
                    for week_id, goals in parse_selections(text).items()
                    if goals
                }
        except (OSError, UnicodeDecodeError, MalformedCacheError):
            selections = {}

        with self._lock:
            self._selections = selections

    def _save(self, selections: Dict[str, FrozenSet[int]]):
        """
        Overwrite the whole cache file; a crash mid-write leaves the old file intact.

        Raises:
            CacheWriteError: the file could not be written
        """
        tmp_path = None
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.cache_path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(dump_selections(selections))
            os.replace(tmp_path, self.cache_path)
        except OSError as e:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            raise CacheWriteError(f"Could not write {self.cache_path}: {e}") from e

    def _commit(self, selections: Dict[str, FrozenSet[int]]):
        # Caller holds self._lock
        self._save(selections)
        self._selections = selections

    def toggle_goal(self, week_id: str, goal_index: int) -> bool:
        """
        Flip a goal's checked state.

        Args:
            week_id: Week the goal belongs to
            goal_index: 0-based index into the week's goals

        Returns:
            True if the goal is now checked

        Raises:
            NotFoundError: unknown week
            InvalidGoalError: index outside the week's goal list
            CacheWriteError: the file write failed; nothing changed
        """
        week = self.curriculum.find_week(week_id)
        if not 0 <= goal_index < len(week.goals):
            raise InvalidGoalError(
                f"Week {week_id} has {len(week.goals)} goals, got index {goal_index}"
            )

        with self._lock:
            goals = set(self._selections.get(week_id, ()))
            checked = goal_index not in goals
            if checked:
                goals.add(goal_index)
            else:
                goals.discard(goal_index)

            updated = dict(self._selections)
            if goals:
                updated[week_id] = frozenset(goals)
            else:
                # No empty entries: unchecking the last goal restores the prior state
                updated.pop(week_id, None)
            self._commit(updated)

        return checked

    def get_checked_count(self, week_id: str) -> int:
        return len(self._selections.get(week_id, ()))

    def get_checked_goals(self, week_id: str) -> FrozenSet[int]:
        return self._selections.get(week_id, frozenset())

    def is_checked(self, week_id: str, goal_index: int) -> bool:
        return goal_index in self._selections.get(week_id, ())

    def clear_week(self, week_id: str):
        """Uncheck every goal of a week."""
        with self._lock:
            if week_id not in self._selections:
                return
            updated = dict(self._selections)
            del updated[week_id]
            self._commit(updated)

    def clear(self):
        """Forget all selections."""
        with self._lock:
            self._commit({})

    def snapshot(self) -> Dict[str, FrozenSet[int]]:
        return dict(self._selections)
