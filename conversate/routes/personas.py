"""
Persona routes: configurations, conversation starters and matched patterns.

Owns the shared EnhancedPersonaConversationService used by chat and
pattern routes.
"""

import logging
from typing import Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from conversate.services.persona_service import EnhancedPersonaConversationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/personas", tags=["personas"])

# Shared service instance, instantiated once.
_persona_service = EnhancedPersonaConversationService()


def get_persona_service() -> EnhancedPersonaConversationService:
    return _persona_service


def reset_persona_service() -> None:
    global _persona_service
    _persona_service = EnhancedPersonaConversationService()


def _not_found(persona_id: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"Persona {persona_id} not found"})


@router.get("")
async def list_personas() -> list[dict]:
    """Summaries of all personas."""
    return [
        {
            "id": p.id,
            "name": p.name,
            "description": p.description,
            "correction_style": p.base_personality.correction_style,
            "preferred_scenarios": p.preferred_scenarios,
        }
        for p in _persona_service.list_personas()
    ]


@router.get("/{persona_id}")
async def get_persona(persona_id: str):
    persona = _persona_service.get_persona_info(persona_id)
    if persona is None:
        return _not_found(persona_id)
    return persona.model_dump()


@router.get("/{persona_id}/starter")
async def get_starter(
    persona_id: str,
    difficulty: Literal["beginner", "intermediate", "advanced"] = "beginner",
    scenario: str = "",
):
    """A random conversation opener for the persona, or null if none matches."""
    if _persona_service.get_persona_info(persona_id) is None:
        return _not_found(persona_id)
    starter = _persona_service.get_conversation_starter(persona_id, difficulty, scenario or None)
    return {"starter": starter.model_dump() if starter else None}


@router.get("/{persona_id}/patterns")
async def get_persona_patterns(persona_id: str):
    """Loaded patterns relevant to the persona (score >= 6)."""
    if _persona_service.get_persona_info(persona_id) is None:
        return _not_found(persona_id)
    patterns = _persona_service.get_conversation_patterns_for_persona(persona_id)
    return {"count": len(patterns), "patterns": [p.model_dump() for p in patterns]}
