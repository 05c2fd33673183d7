"""Supabase backend: authentication and the roadmap completion table.

Every backend failure is re-raised as SyncError (or AuthError) with the
original exception chained.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, List

from supabase import AsyncClient, acreate_client

from ..errors import AuthError, SyncError
from ..journal.entries import JournalRepository
from ..portfolio.projects import ProjectRepository

COMPLETIONS_TABLE = "roadmap_progress"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class AuthUser:
    id: str
    email: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email}


async def connect(url: str, key: str) -> "SupabaseBackend":
    """
    Create a backend for a Supabase project.

    Raises:
        SyncError: missing settings or client creation failed
    """
    if not url or not key:
        raise SyncError("SUPABASE_URL and SUPABASE_KEY are not configured")

    try:
        client = await acreate_client(url, key)
    except Exception as e:
        raise SyncError(f"Could not connect to Supabase: {e}") from e

    return SupabaseBackend(client)


class SupabaseBackend:
    """Owns one async Supabase client and the gateways built on it."""

    def __init__(self, client: AsyncClient):
        self.client = client
        self.auth = AuthGateway(client)
        self.completions = CompletionTable(client)
        self.projects = ProjectRepository(client)
        self.journals = JournalRepository(client)


class AuthGateway:
    """Email/password sessions."""

    def __init__(self, client: AsyncClient):
        self.client = client

    @staticmethod
    def _user_from(response) -> AuthUser:
        user = getattr(response, "user", None)
        if user is None:
            raise AuthError("No user in auth response (email confirmation pending?)")
        return AuthUser(id=str(user.id), email=getattr(user, "email", None))

    async def sign_in(self, email: str, password: str) -> AuthUser:
        try:
            response = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise AuthError(f"Sign in failed: {e}") from e
        return self._user_from(response)

    async def sign_up(self, email: str, password: str) -> AuthUser:
        try:
            response = await self.client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            raise AuthError(f"Sign up failed: {e}") from e
        return self._user_from(response)

    async def sign_out(self):
        try:
            await self.client.auth.sign_out()
        except Exception as e:
            raise AuthError(f"Sign out failed: {e}") from e


class CompletionTable:
    """
    Per-user week completion records.

    One row per (user_id, week_id); a missing row means not complete.
    """

    def __init__(self, client: AsyncClient, table_name: str = COMPLETIONS_TABLE):
        self.client = client
        self.table_name = table_name

    async def fetch_completed(self, user_id: str) -> List[str]:
        """Week ids with a true completion record for the user."""
        try:
            response = await (
                self.client.table(self.table_name)
                .select("week_id, completed")
                .eq("user_id", user_id)
                .eq("completed", True)
                .execute()
            )
        except Exception as e:
            raise SyncError(f"Fetching {self.table_name} failed: {e}") from e

        return [row["week_id"] for row in response.data or [] if row.get("completed", True)]

    async def upsert_complete(self, user_id: str, week_id: str):
        now = utc_now_iso()
        try:
            await (
                self.client.table(self.table_name)
                .upsert(
                    {
                        "user_id": user_id,
                        "week_id": week_id,
                        "completed": True,
                        "completed_at": now,
                        "updated_at": now,
                    },
                    on_conflict="user_id,week_id",
                )
                .execute()
            )
        except Exception as e:
            raise SyncError(f"Upserting {week_id} failed: {e}") from e

    async def delete(self, user_id: str, week_id: str):
        try:
            await (
                self.client.table(self.table_name)
                .delete()
                .eq("user_id", user_id)
                .eq("week_id", week_id)
                .execute()
            )
        except Exception as e:
            raise SyncError(f"Deleting {week_id} failed: {e}") from e
