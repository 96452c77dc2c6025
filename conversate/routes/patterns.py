"""
Pattern routes: process transcripts and inspect the processed patterns.

Processing feeds the shared persona service, so new transcripts change
persona replies immediately.
"""

import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from conversate.models import ProcessTranscriptRequest
from conversate.routes.personas import get_persona_service
from conversate.services.conversation_data_processor import ConversationDataProcessor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/patterns", tags=["patterns"])

_processor = ConversationDataProcessor()


def get_processor() -> ConversationDataProcessor:
    return _processor


def reset_processor() -> None:
    global _processor
    _processor = ConversationDataProcessor()


def sync_persona_service() -> None:
    """Hand every accumulated pattern to the shared persona service."""
    get_persona_service().load_conversation_patterns(_processor.get_processed_patterns())


@router.post("/process")
async def process_transcript(body: ProcessTranscriptRequest):
    """Process raw transcript text and load the result into the personas."""
    if not body.content.strip():
        return JSONResponse(status_code=400, content={"error": "Transcript content is required"})

    if body.replace:
        reset_processor()
    produced = _processor.process_transcript_file(body.content)
    sync_persona_service()
    logger.info("Transcript processing produced %d patterns", len(produced))

    return {
        "success": True,
        "data": {
            "processed": len(produced),
            "pattern_ids": [p.id for p in produced],
            "stats": _processor.processing_stats(),
        },
    }


@router.get("")
async def list_patterns(
    difficulty: Optional[str] = None,
    topic: Optional[str] = None,
    persona_id: Optional[str] = None,
):
    """Processed patterns, filtered by every given criterion."""
    patterns = _processor.get_processed_patterns()
    if difficulty:
        allowed = {p.id for p in _processor.get_patterns_by_difficulty(difficulty)}
        patterns = [p for p in patterns if p.id in allowed]
    if topic:
        allowed = {p.id for p in _processor.get_patterns_by_topic(topic)}
        patterns = [p for p in patterns if p.id in allowed]
    if persona_id:
        allowed = {p.id for p in _processor.get_patterns_for_persona(persona_id)}
        patterns = [p for p in patterns if p.id in allowed]
    return {"count": len(patterns), "patterns": [p.model_dump() for p in patterns]}


@router.get("/stats")
async def pattern_stats():
    return _processor.processing_stats()
