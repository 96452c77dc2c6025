"""
Conversation history routes and per-user analytics.

Owns the shared ConversationStore. Without auth every request names its
user explicitly; the `guest` user is the default.
"""

import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from conversate.models import ConversationAction, ConversationUpdate
from conversate.services.conversation_store import ConversationNotFoundError, ConversationStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["conversations"])

GUEST_USER = "guest"

# Shared store instance, instantiated once.
_store = ConversationStore()


def get_conversation_store() -> ConversationStore:
    return _store


def reset_conversation_store() -> None:
    global _store
    _store = ConversationStore()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/api/conversations")
async def list_conversations(
    user_id: str = GUEST_USER,
    limit: int = 20,
    offset: int = 0,
    persona_id: Optional[str] = None,
    include_archived: bool = False,
):
    """The user's conversations, newest first."""
    limit = max(1, min(limit, 100))
    offset = max(0, offset)
    records = _store.list_conversations(
        user_id,
        limit=limit,
        offset=offset,
        persona_id=persona_id,
        include_archived=include_archived,
    )
    return {
        "success": True,
        "data": {
            "conversations": [r.model_dump(mode="json") for r in records],
            "limit": limit,
            "offset": offset,
        },
    }


@router.post("/api/conversations")
async def conversation_action(body: ConversationAction):
    """Archive a conversation or end its session."""
    try:
        if body.action == "archive":
            record = _store.archive_conversation(body.conversation_id, body.user_id)
            return {"success": True, "data": {"conversation": record.model_dump(mode="json")}}
        if body.action == "end_session":
            summary = _store.end_conversation(body.conversation_id, body.user_id)
            return {"success": True, "data": {"summary": summary.model_dump()}}
    except ConversationNotFoundError as e:
        return _error(404, str(e))
    return _error(400, f"Invalid action: {body.action}")


@router.get("/api/conversations/{conversation_id}")
async def get_conversation(conversation_id: str, user_id: str = GUEST_USER):
    record = _store.get_conversation(conversation_id, user_id)
    if record is None:
        return _error(404, f"Conversation {conversation_id} not found")
    return {"success": True, "data": {"conversation": record.model_dump(mode="json")}}


@router.patch("/api/conversations/{conversation_id}")
async def update_conversation(conversation_id: str, body: ConversationUpdate):
    """Update status, rating or feedback."""
    try:
        record = _store.update_conversation(
            conversation_id,
            body.user_id,
            status=body.status,
            rating=body.rating,
            feedback=body.feedback,
        )
    except ConversationNotFoundError as e:
        return _error(404, str(e))
    except ValidationError as e:
        return _error(400, str(e))
    return {"success": True, "data": {"conversation": record.model_dump(mode="json")}}


@router.delete("/api/conversations/{conversation_id}")
async def delete_conversation(conversation_id: str, user_id: str = GUEST_USER):
    """Soft delete: the conversation is archived, not removed."""
    try:
        _store.archive_conversation(conversation_id, user_id)
    except ConversationNotFoundError as e:
        return _error(404, str(e))
    return {"success": True, "message": "Conversation archived"}


@router.get("/api/analytics")
async def analytics(user_id: str = GUEST_USER):
    return {"success": True, "data": _store.analytics(user_id)}
