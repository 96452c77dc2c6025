"""
Chat routes: one learner message in, one persona reply out.

REST:
    POST /api/chat      # send a message, create or resume the conversation
    GET  /api/chat      # one conversation, or the user's session list

WebSocket /ws/chat, frontend sends:
    {"type": "message", "content": "Bonjour", "user_id": "...", "persona_id": "maya"}

Backend responds:
    {"type": "status", "step": "thinking"}          # progress update
    {"type": "persona_response", "data": {...}}     # same payload as POST /api/chat
    {"type": "error", "message": "..."}             # error during processing
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from conversate.config import DEFAULT_PROFICIENCY_LEVEL, DEFAULT_TARGET_LANGUAGE
from conversate.models import ChatRequest, ChatResponse, ConversationContext, PreviousMessage
from conversate.routes.conversations import get_conversation_store
from conversate.routes.personas import get_persona_service
from conversate.services.conversation_store import ConversationNotFoundError
from conversate.services.persona_service import PersonaNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

MISSING_FIELDS_ERROR = "Missing required fields: message, userId, or personaId"
MAX_MESSAGE_LENGTH = 1000
HISTORY_WINDOW = 10

_LEVELS = ("beginner", "intermediate", "advanced")


class ChatInputError(ValueError):
    """The chat request is missing fields or has an unusable message."""


def _validate(req: ChatRequest) -> None:
    if not req.message.strip() or not req.user_id or not req.persona_id:
        raise ChatInputError(MISSING_FIELDS_ERROR)
    if len(req.message) > MAX_MESSAGE_LENGTH:
        raise ChatInputError(f"Message must be at most {MAX_MESSAGE_LENGTH} characters")


def handle_chat(req: ChatRequest) -> dict:
    """Run one chat turn and persist both sides of it.

    Raises:
        ChatInputError: Missing fields or an over-long message.
        PersonaNotFoundError: Unknown persona id.
        ConversationNotFoundError: conversation_id is unknown or not the user's.
    """
    _validate(req)
    service = get_persona_service()
    store = get_conversation_store()

    if service.get_persona_info(req.persona_id) is None:
        raise PersonaNotFoundError(f"Persona {req.persona_id} not found")

    if req.conversation_id:
        conversation = store.get_conversation(req.conversation_id, req.user_id)
        if conversation is None:
            raise ConversationNotFoundError(f"Conversation {req.conversation_id} not found")
    else:
        conversation = store.get_active_conversation(req.user_id, req.persona_id)
        if conversation is None:
            conversation = store.create_conversation(
                user_id=req.user_id,
                persona_id=req.persona_id,
                target_language=req.target_language or DEFAULT_TARGET_LANGUAGE,
                proficiency_level=req.proficiency_level or DEFAULT_PROFICIENCY_LEVEL,
                scenario=req.scenario or "general_conversation",
            )

    level = req.proficiency_level or conversation.proficiency_level
    context = ConversationContext(
        user_level=level if level in _LEVELS else "intermediate",
        scenario=req.scenario or conversation.scenario,
        previous_messages=[
            PreviousMessage(role=m.role, content=m.content)
            for m in conversation.messages[-HISTORY_WINDOW:]
        ],
    )

    response = service.generate_persona_response(req.persona_id, req.message, context)

    store.add_message(conversation.id, "user", req.message, metadata={
        "intent": response.analysis.intent if response.analysis else None,
        "language": response.analysis.language if response.analysis else None,
    })
    store.add_message(conversation.id, "persona", response.content, metadata={
        "grammar_points": response.grammar_points,
        "cultural_notes": response.cultural_notes,
    })
    conversation = store.update_learning_progress(conversation.id, response)

    return ChatResponse(
        message=response.content,
        metadata=response.model_dump(mode="json", exclude={"content", "response"}),
        conversation_id=conversation.id,
        learning_progress=conversation.learning_progress,
    ).model_dump(mode="json")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/api/chat")
async def chat(req: ChatRequest):
    """Send a learner message to a persona."""
    try:
        data = handle_chat(req)
    except ChatInputError as e:
        return _error(400, str(e))
    except (PersonaNotFoundError, ConversationNotFoundError) as e:
        return _error(404, str(e))
    return {"success": True, "data": data}


@router.get("/api/chat")
async def chat_history(user_id: str = "", conversation_id: Optional[str] = None):
    """One conversation by id, or a summary list of the user's conversations."""
    if not user_id:
        return _error(400, "Missing user_id parameter")

    store = get_conversation_store()
    if conversation_id:
        conversation = store.get_conversation(conversation_id, user_id)
        if conversation is None:
            return _error(404, f"Conversation {conversation_id} not found")
        return {"success": True, "data": {"conversation": conversation.model_dump(mode="json")}}

    sessions = [
        {
            "conversation_id": c.id,
            "persona_id": c.persona_id,
            "title": c.title,
            "status": c.status,
            "message_count": len(c.messages),
            "updated_at": c.updated_at.isoformat(),
        }
        for c in store.list_conversations(user_id)
    ]
    return {"success": True, "data": {"sessions": sessions}}


@router.websocket("/ws/chat")
async def chat_ws(websocket: WebSocket) -> None:
    """WebSocket endpoint for real-time chat with a persona."""
    await websocket.accept()

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                await websocket.send_json({"type": "error", "message": "Invalid JSON"})
                continue

            msg_type = message.get("type", "") if isinstance(message, dict) else ""
            if msg_type != "message":
                await websocket.send_json(
                    {"type": "error", "message": f"Unknown message type: {msg_type}"}
                )
                continue

            try:
                req = ChatRequest(
                    message=message.get("content", ""),
                    user_id=message.get("user_id", ""),
                    persona_id=message.get("persona_id", ""),
                    target_language=message.get("target_language"),
                    proficiency_level=message.get("proficiency_level"),
                    conversation_id=message.get("conversation_id"),
                    scenario=message.get("scenario"),
                )
                await websocket.send_json({"type": "status", "step": "thinking"})
                data = handle_chat(req)
                await websocket.send_json({"type": "persona_response", "data": data})
            except (ChatInputError, PersonaNotFoundError, ConversationNotFoundError, ValidationError) as exc:
                await websocket.send_json({"type": "error", "message": str(exc)})
            except Exception as exc:
                logger.exception("Error processing chat message")
                await websocket.send_json({"type": "error", "message": str(exc)})

    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected")
