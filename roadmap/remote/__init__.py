"""Remote module: Supabase authentication and tables."""

from .client import (
    COMPLETIONS_TABLE,
    AuthGateway,
    AuthUser,
    CompletionTable,
    SupabaseBackend,
    connect,
)

__all__ = [
    "COMPLETIONS_TABLE",
    "AuthGateway",
    "AuthUser",
    "CompletionTable",
    "SupabaseBackend",
    "connect",
]
