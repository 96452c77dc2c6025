"""
Supabase persistence layer for conversations.

Each conversation is one row in the `conversations` table. Messages and
learning progress are stored as JSON columns on the row, so the store layer
reads and writes whole ConversationRecord documents.
"""

import logging
import os
from typing import Optional

from supabase import create_client, Client

logger = logging.getLogger(__name__)

TABLE = "conversations"

_client: Optional[Client] = None


def _get_client() -> Client:
    global _client
    if _client is None:
        url = os.getenv("SUPABASE_URL", "")
        key = os.getenv("SUPABASE_ANON_KEY", "")
        if not url or not key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        _client = create_client(url, key)
    return _client


def insert_conversation(row: dict) -> dict:
    """Insert a conversation row and return it."""
    res = _get_client().table(TABLE).insert(row).execute()
    logger.info("Inserted conversation %s for user %s", row.get("id"), row.get("user_id"))
    return res.data[0] if res.data else row


def fetch_conversation(conversation_id: str) -> Optional[dict]:
    """Load one conversation row. Returns None if no row exists."""
    res = _get_client().table(TABLE).select("*").eq("id", conversation_id).execute()
    if res.data:
        return res.data[0]
    return None


def update_conversation(conversation_id: str, row: dict) -> None:
    """Overwrite the stored columns of a conversation row."""
    _get_client().table(TABLE).update(row).eq("id", conversation_id).execute()


def fetch_conversations(
    user_id: str,
    persona_id: Optional[str] = None,
    status: Optional[str] = None,
) -> list[dict]:
    """All rows for a user, newest first, optionally filtered."""
    query = _get_client().table(TABLE).select("*").eq("user_id", user_id)
    if persona_id:
        query = query.eq("persona_id", persona_id)
    if status:
        query = query.eq("status", status)
    res = query.order("updated_at", desc=True).execute()
    return res.data
