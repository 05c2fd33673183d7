"""Error types raised by the roadmap tracker.

None of these are fatal: every failure degrades to a safe default
(empty or unknown state) and the action can be retried.
"""


class RoadmapError(Exception):
    """Base class for roadmap tracker errors."""


class SyncError(RoadmapError):
    """A remote read or write failed (network, auth, conflict or timeout)."""


class AuthError(SyncError):
    """Sign in, sign up or sign out was rejected by the backend."""


class NotFoundError(RoadmapError, KeyError):
    """A referenced week id has no match in the curriculum."""

    def __init__(self, week_id: str):
        super().__init__(week_id)
        self.week_id = week_id

    def __str__(self):
        return f"Unknown week: {self.week_id}"


class InvalidGoalError(RoadmapError, ValueError):
    """A goal index is outside the week's goal list."""


class MalformedCacheError(RoadmapError):
    """Locally persisted goal selections could not be parsed."""


class CurriculumError(RoadmapError):
    """The curriculum definition is inconsistent or unreadable."""


class ValidationError(RoadmapError, ValueError):
    """A project or journal form is missing required fields."""


class CacheWriteError(RoadmapError):
    """The goal checklist file could not be written; the change was not applied."""
