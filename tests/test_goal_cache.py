"""Tests for the local goal checklist cache."""

import json
import threading

import pytest

from roadmap.errors import CacheWriteError, InvalidGoalError, MalformedCacheError, NotFoundError
from roadmap.progress import GoalChecklistCache, dump_selections, parse_selections
from roadmap.progress import goal_cache as goal_cache_module


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "data" / "week_goals.json"


@pytest.fixture
def cache(curriculum, cache_path):
    goal_cache = GoalChecklistCache(curriculum, cache_path)
    goal_cache.hydrate()
    return goal_cache


class TestSerialization:
    """Test the persisted representation."""

    def test_dump_sorted_lists(self):
        data = json.loads(dump_selections({"w1": {2, 0}, "w3": set()}))
        assert data == {"w1": [0, 2], "w3": []}

    def test_parse(self):
        assert parse_selections('{"w1": [0, 2]}') == {"w1": {0, 2}}

    @pytest.mark.parametrize("text", [
        "{not json",
        "[1, 2]",
        '{"w1": 3}',
        '{"w1": ["a"]}',
        '{"w1": [-1]}',
        '{"w1": [true]}',
        '{"w1": [1.5]}',
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedCacheError):
            parse_selections(text)


class TestHydrate:
    """Test loading persisted selections."""

    def test_missing_file_is_empty(self, cache):
        assert cache.get_checked_count("w1") == 0
        assert cache.snapshot() == {}

    def test_malformed_file_is_empty(self, curriculum, cache_path):
        cache_path.parent.mkdir(parents=True)
        cache_path.write_text("{broken", encoding="utf-8")

        goal_cache = GoalChecklistCache(curriculum, cache_path)
        goal_cache.hydrate()

        assert goal_cache.snapshot() == {}

    def test_survives_restart(self, curriculum, cache, cache_path):
        cache.toggle_goal("w1", 0)
        cache.toggle_goal("w2", 2)

        reopened = GoalChecklistCache(curriculum, cache_path)
        reopened.hydrate()

        assert reopened.get_checked_goals("w1") == frozenset({0})
        assert reopened.get_checked_goals("w2") == frozenset({2})

    def test_stale_week_ids_kept(self, curriculum, cache_path):
        cache_path.parent.mkdir(parents=True)
        cache_path.write_text('{"retired-week": [0, 1]}', encoding="utf-8")

        goal_cache = GoalChecklistCache(curriculum, cache_path)
        goal_cache.hydrate()

        assert goal_cache.get_checked_count("retired-week") == 2


class TestToggle:
    """Test checking and unchecking goals."""

    def test_two_goals(self, cache):
        cache.toggle_goal("w1", 0)
        cache.toggle_goal("w1", 1)
        assert cache.get_checked_count("w1") == 2

    def test_toggle_twice_restores(self, cache):
        cache.toggle_goal("w1", 2)
        before = cache.get_checked_goals("w1")

        assert cache.toggle_goal("w1", 0) is True
        assert cache.toggle_goal("w1", 0) is False
        assert cache.get_checked_goals("w1") == before

    def test_count_bounded_by_goals(self, cache, curriculum):
        for _ in range(3):
            for index in range(3):
                cache.toggle_goal("w2", index)
                assert cache.get_checked_count("w2") <= len(curriculum.find_week("w2").goals)

    def test_written_after_every_toggle(self, cache, cache_path):
        cache.toggle_goal("w3", 1)
        assert json.loads(cache_path.read_text(encoding="utf-8")) == {"w3": [1]}

        cache.toggle_goal("w3", 1)
        assert json.loads(cache_path.read_text(encoding="utf-8")) == {}

    def test_toggle_back_leaves_no_empty_entry(self, cache):
        before = cache.snapshot()
        cache.toggle_goal("w1", 0)
        cache.toggle_goal("w1", 0)
        assert cache.snapshot() == before == {}

    def test_no_temp_files_left(self, cache, cache_path):
        cache.toggle_goal("w1", 0)
        assert [p.name for p in cache_path.parent.iterdir()] == ["week_goals.json"]

    def test_unknown_week(self, cache):
        with pytest.raises(NotFoundError):
            cache.toggle_goal("nope", 0)

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_invalid_index(self, cache, index):
        with pytest.raises(InvalidGoalError):
            cache.toggle_goal("w1", index)
        assert cache.get_checked_count("w1") == 0

    def test_is_checked(self, cache):
        cache.toggle_goal("w4", 1)
        assert cache.is_checked("w4", 1)
        assert not cache.is_checked("w4", 0)


class TestClear:
    """Test explicit clearing."""

    def test_clear_week(self, cache, curriculum, cache_path):
        cache.toggle_goal("w1", 0)
        cache.toggle_goal("w2", 0)
        cache.clear_week("w1")

        assert cache.get_checked_count("w1") == 0
        assert cache.get_checked_count("w2") == 1

        reopened = GoalChecklistCache(curriculum, cache_path)
        reopened.hydrate()
        assert reopened.get_checked_count("w1") == 0

    def test_clear_all(self, cache):
        cache.toggle_goal("w1", 0)
        cache.clear()
        assert cache.snapshot() == {}


def fail_replace(src, dst):
    raise OSError("disk full")


class TestWriteFailure:
    """Test that a failed file write leaves memory and disk unchanged."""

    def test_toggle_not_applied(self, cache, cache_path, monkeypatch):
        monkeypatch.setattr(goal_cache_module.os, "replace", fail_replace)

        with pytest.raises(CacheWriteError):
            cache.toggle_goal("w1", 0)

        assert cache.get_checked_count("w1") == 0
        assert not cache_path.exists()
        assert list(cache_path.parent.iterdir()) == []

    def test_earlier_state_kept(self, curriculum, cache, cache_path, monkeypatch):
        cache.toggle_goal("w1", 0)
        monkeypatch.setattr(goal_cache_module.os, "replace", fail_replace)

        with pytest.raises(CacheWriteError):
            cache.toggle_goal("w1", 1)
        with pytest.raises(CacheWriteError):
            cache.clear_week("w1")

        assert cache.get_checked_goals("w1") == frozenset({0})
        assert json.loads(cache_path.read_text(encoding="utf-8")) == {"w1": [0]}


class TestThreads:
    """Test toggles arriving from several request threads."""

    def test_concurrent_toggles(self, curriculum, cache, cache_path):
        errors = []
        start = threading.Barrier(2)

        def worker(week_id, goal_index, times):
            start.wait()
            try:
                for _ in range(times):
                    cache.toggle_goal(week_id, goal_index)
            except Exception as e:
                errors.append(e)

        threads = [
            threading.Thread(target=worker, args=("w1", 0, 40)),
            threading.Thread(target=worker, args=("w2", 1, 41)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert cache.snapshot() == {"w2": frozenset({1})}

        reopened = GoalChecklistCache(curriculum, cache_path)
        reopened.hydrate()
        assert reopened.snapshot() == {"w2": frozenset({1})}
