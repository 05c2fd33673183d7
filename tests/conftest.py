"""
Shared fixtures: a small curriculum and in-memory fakes of the Supabase tables.

The small curriculum has 2 tracks, each with 1 month of 2 weeks
(w1..w4), 3 goals per week, and a gap between w2 and w3.
"""

import asyncio
from types import SimpleNamespace

import pytest

from roadmap.curriculum import Curriculum
from roadmap.errors import AuthError
from roadmap.journal import JournalRepository
from roadmap.portfolio import ProjectRepository
from roadmap.remote import AuthUser, CompletionTable


def make_curriculum_dict():
    def week(week_id, start, end):
        return {
            "id": week_id,
            "title": f"Week {week_id}",
            "start_date": start,
            "end_date": end,
            "goals": ["read", "build", "review"],
        }

    return {
        "title": "Test roadmap",
        "tracks": [
            {
                "id": "t1",
                "title": "Track 1",
                "months": [{"title": "Month 1", "weeks": [
                    week("w1", "2026-01-05", "2026-01-11"),
                    week("w2", "2026-01-12", "2026-01-18"),
                ]}],
            },
            {
                "id": "t2",
                "title": "Track 2",
                "months": [{"title": "Month 2", "weeks": [
                    week("w3", "2026-02-02", "2026-02-08"),
                    week("w4", "2026-02-09", "2026-02-15"),
                ]}],
            },
        ],
    }


class FakeCompletionTable:
    """
    In-memory completion table.

    fail_next: number of upcoming calls that raise
    delays: per-week seconds to sleep before a write applies
    """

    def __init__(self, rows=None):
        self.rows = {}
        for user_id, week_id in rows or []:
            self.rows.setdefault(user_id, set()).add(week_id)
        self.calls = []
        self.fail_next = 0
        self.delays = {}

    def _maybe_fail(self):
        if self.fail_next > 0:
            self.fail_next -= 1
            raise ConnectionError("network down")

    async def fetch_completed(self, user_id):
        self.calls.append(("fetch", user_id, None))
        self._maybe_fail()
        return sorted(self.rows.get(user_id, set()))

    async def upsert_complete(self, user_id, week_id):
        self.calls.append(("upsert", user_id, week_id))
        await asyncio.sleep(self.delays.get(week_id, 0))
        self._maybe_fail()
        self.rows.setdefault(user_id, set()).add(week_id)

    async def delete(self, user_id, week_id):
        self.calls.append(("delete", user_id, week_id))
        await asyncio.sleep(self.delays.get(week_id, 0))
        self._maybe_fail()
        self.rows.get(user_id, set()).discard(week_id)


class FakeAuth:
    def __init__(self):
        self.accounts = {"ana@example.com": "secret"}

    async def sign_in(self, email, password):
        if self.accounts.get(email) != password:
            raise AuthError("Sign in failed: Invalid login credentials")
        return AuthUser(id="user-1", email=email)

    async def sign_up(self, email, password):
        self.accounts[email] = password
        return AuthUser(id="user-2", email=email)

    async def sign_out(self):
        return None


class FakeQuery:
    """Chainable query mimicking the supabase-py builder."""

    def __init__(self, client, name):
        self.client = client
        self.name = name
        self.op = "select"
        self.filters = []
        self.payload = None
        self.on_conflict = None
        self.order_by = None

    def select(self, columns="*"):
        self.op = "select"
        return self

    def insert(self, row):
        self.op = "insert"
        self.payload = row
        return self

    def upsert(self, row, on_conflict=None):
        self.op = "upsert"
        self.payload = row
        self.on_conflict = on_conflict
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def _new_row(self, payload):
        self.client.counter += 1
        stamp = f"2026-01-01T00:00:{self.client.counter:02d}+00:00"
        row = {"id": str(self.client.counter), "created_at": stamp, "updated_at": stamp}
        row.update(payload)
        return row

    async def execute(self):
        self.client.queries.append((self.name, self.op, list(self.filters)))
        if self.client.fail_next > 0:
            self.client.fail_next -= 1
            raise ConnectionError("network down")

        rows = self.client.tables.setdefault(self.name, [])

        if self.op == "select":
            data = [dict(r) for r in rows if self._matches(r)]
            if self.order_by:
                column, desc = self.order_by
                data.sort(key=lambda r: r.get(column) or "", reverse=desc)
        elif self.op == "insert":
            row = self._new_row(self.payload)
            rows.append(row)
            data = [dict(row)]
        elif self.op == "upsert":
            keys = self.on_conflict.split(",") if self.on_conflict else ["id"]
            existing = [r for r in rows if all(r.get(k) == self.payload.get(k) for k in keys)]
            if existing:
                existing[0].update(self.payload)
                data = [dict(existing[0])]
            else:
                row = self._new_row(self.payload)
                rows.append(row)
                data = [dict(row)]
        else:
            data = [dict(r) for r in rows if self._matches(r)]
            rows[:] = [r for r in rows if not self._matches(r)]

        return SimpleNamespace(data=data)


class FakeSupabaseClient:
    """In-memory tables behind the supabase-py query interface."""

    def __init__(self):
        self.tables = {}
        self.queries = []
        self.fail_next = 0
        self.counter = 0

    def table(self, name):
        return FakeQuery(self, name)


def make_backend(client=None):
    """Backend with fake auth and the real table gateways on a fake client."""
    client = client or FakeSupabaseClient()
    return SimpleNamespace(
        client=client,
        auth=FakeAuth(),
        completions=CompletionTable(client),
        projects=ProjectRepository(client),
        journals=JournalRepository(client),
    )


@pytest.fixture
def curriculum():
    return Curriculum.from_dict(make_curriculum_dict())


@pytest.fixture
def table():
    return FakeCompletionTable()


@pytest.fixture
def client():
    return FakeSupabaseClient()
