"""Which weeks the signed-in user has marked complete.

The completed set lives in memory and mirrors the remote completion
table. Mutations are applied optimistically and rolled back when the
remote write fails. Writes for the same week are serialized so they
reach the table in the order they were issued.
"""

import asyncio
from typing import Optional, Dict, Set, FrozenSet

from ..curriculum.models import Curriculum
from ..errors import SyncError

DEFAULT_TIMEOUT = 10.0


class ProgressStore:
    """
    Completed-week set synchronized with a remote per-user table.

    The table is any object with the async methods
    fetch_completed(user_id), upsert_complete(user_id, week_id) and
    delete(user_id, week_id) (see roadmap.remote.CompletionTable).
    """

    def __init__(self, table, curriculum: Curriculum, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize progress store.

        Args:
            table: Remote completion table
            curriculum: Roadmap; completion rows for unknown weeks are dropped
            timeout: Seconds before a remote call fails with SyncError
        """
        self.table = table
        self.curriculum = curriculum
        self.timeout = timeout

        self._user_id: Optional[str] = None
        self._loaded = False
        self._completed: Set[str] = set()
        # Last state acknowledged by the server, used for rollback
        self._confirmed: Set[str] = set()
        self._locks: Dict[str, asyncio.Lock] = {}
        self._issued: Dict[str, int] = {}

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def completed_week_ids(self) -> FrozenSet[str]:
        return frozenset(self._completed)

    async def _remote(self, coro, action: str):
        try:
            return await asyncio.wait_for(coro, self.timeout)
        except SyncError:
            raise
        except asyncio.TimeoutError as e:
            raise SyncError(f"{action} timed out after {self.timeout}s") from e
        except Exception as e:
            raise SyncError(f"{action} failed: {e}") from e

    async def load(self, user_id: str):
        """
        Fetch all completion records for a user.

        Raises:
            SyncError: transport or auth failure; the store stays unloaded
        """
        if user_id != self._user_id:
            self._loaded = False
            self._completed = set()
            self._confirmed = set()
            self._user_id = user_id

        rows = await self._remote(self.table.fetch_completed(user_id), "Loading progress")

        known = {
            week_id for week_id in rows
            if self.curriculum.get_week(week_id) is not None
        }
        self._completed = set(known)
        self._confirmed = set(known)
        self._loaded = True

    def reset(self):
        """Forget the user and the completed set (sign out)."""
        self._user_id = None
        self._loaded = False
        self._completed = set()
        self._confirmed = set()
        self._issued = {}

    def is_complete(self, week_id: str) -> bool:
        return week_id in self._completed

    def _lock_for(self, week_id: str) -> asyncio.Lock:
        lock = self._locks.get(week_id)
        if lock is None:
            lock = self._locks[week_id] = asyncio.Lock()
        return lock

    async def _write(self, week_id: str, complete: bool):
        self.curriculum.find_week(week_id)

        if not self._loaded or self._user_id is None:
            raise SyncError("Progress has not been loaded yet")

        user_id = self._user_id
        ticket = self._issued.get(week_id, 0) + 1
        self._issued[week_id] = ticket

        if complete:
            self._completed.add(week_id)
        else:
            self._completed.discard(week_id)

        async with self._lock_for(week_id):
            try:
                if complete:
                    await self._remote(
                        self.table.upsert_complete(user_id, week_id),
                        f"Marking {week_id} complete",
                    )
                else:
                    await self._remote(
                        self.table.delete(user_id, week_id),
                        f"Marking {week_id} incomplete",
                    )
            except SyncError:
                # A newer toggle for this week owns the optimistic state now
                if self._issued.get(week_id) == ticket:
                    if week_id in self._confirmed:
                        self._completed.add(week_id)
                    else:
                        self._completed.discard(week_id)
                raise

            if complete:
                self._confirmed.add(week_id)
            else:
                self._confirmed.discard(week_id)

    async def mark_complete(self, week_id: str):
        """
        Mark a week complete.

        Raises:
            NotFoundError: unknown week
            SyncError: not loaded, or the upsert failed (change rolled back)
        """
        await self._write(week_id, True)

    async def mark_incomplete(self, week_id: str):
        """
        Mark a week incomplete.

        Raises:
            NotFoundError: unknown week
            SyncError: not loaded, or the delete failed (change rolled back)
        """
        await self._write(week_id, False)

    async def toggle(self, week_id: str) -> bool:
        """Flip a week's completion. Returns the new state."""
        if self.is_complete(week_id):
            await self.mark_incomplete(week_id)
            return False
        await self.mark_complete(week_id)
        return True
