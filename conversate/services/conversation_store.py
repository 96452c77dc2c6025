"""
Conversation persistence for the chat flow.

Mock mode: Conversations live in an in-memory dict keyed by id.
Real mode: Conversations are rows in the Supabase `conversations` table,
           read and written through supabase_service.

A conversation belongs to exactly one user. Lookups with another user's id
behave exactly like a missing conversation.
"""

import logging
import uuid
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional

from conversate.config import MOCK_MODE
from conversate.models import (
    ChatMessage,
    ConversationRecord,
    ConversationSummary,
    PersonaResponse,
)

logger = logging.getLogger(__name__)

TITLE_WORDS = 6
ANALYTICS_WINDOW = 100
WEEK_DAYS = 7


class ConversationNotFoundError(LookupError):
    """Raised when a conversation is missing or owned by another user."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _title_from(message: str) -> str:
    words = message.split(" ")
    title = " ".join(words[:TITLE_WORDS])
    return title + "..." if len(words) > TITLE_WORDS else title


def _dedupe_extend(target: list[str], items) -> None:
    for item in items:
        if item and item not in target:
            target.append(item)


class ConversationStore:
    """Stores conversations, their messages and learning progress."""

    def __init__(self):
        self.mock_mode = MOCK_MODE
        self._conversations: dict[str, ConversationRecord] = {}

    # -- Storage primitives -------------------------------------------------

    def _load(self, conversation_id: str) -> Optional[ConversationRecord]:
        if self.mock_mode:
            return self._conversations.get(conversation_id)
        from conversate.services import supabase_service

        row = supabase_service.fetch_conversation(conversation_id)
        return ConversationRecord.model_validate(row) if row else None

    def _save(self, record: ConversationRecord, new: bool = False) -> None:
        if self.mock_mode:
            self._conversations[record.id] = record
            return
        from conversate.services import supabase_service

        row = record.model_dump(mode="json")
        if new:
            supabase_service.insert_conversation(row)
        else:
            supabase_service.update_conversation(record.id, row)

    def _all_for_user(self, user_id: str, persona_id: Optional[str] = None) -> list[ConversationRecord]:
        """All of a user's conversations, newest first."""
        if self.mock_mode:
            records = [
                r for r in self._conversations.values()
                if r.user_id == user_id and (not persona_id or r.persona_id == persona_id)
            ]
            return sorted(records, key=lambda r: r.updated_at, reverse=True)
        from conversate.services import supabase_service

        rows = supabase_service.fetch_conversations(user_id, persona_id=persona_id)
        return [ConversationRecord.model_validate(row) for row in rows]

    def _require(self, conversation_id: str, user_id: Optional[str] = None) -> ConversationRecord:
        record = self._load(conversation_id)
        if record is None or (user_id is not None and record.user_id != user_id):
            raise ConversationNotFoundError(f"Conversation {conversation_id} not found")
        return record

    # -- Conversations ------------------------------------------------------

    def create_conversation(
        self,
        user_id: str,
        persona_id: str,
        target_language: str = "French",
        proficiency_level: str = "intermediate",
        scenario: str = "general_conversation",
    ) -> ConversationRecord:
        record = ConversationRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            persona_id=persona_id,
            target_language=target_language,
            proficiency_level=proficiency_level,
            scenario=scenario,
        )
        self._save(record, new=True)
        logger.info("Created conversation %s (%s with %s)", record.id, user_id, persona_id)
        return record

    def get_conversation(self, conversation_id: str, user_id: str) -> Optional[ConversationRecord]:
        record = self._load(conversation_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    def get_active_conversation(self, user_id: str, persona_id: str) -> Optional[ConversationRecord]:
        """Most recently updated active conversation with this persona."""
        for record in self._all_for_user(user_id, persona_id=persona_id):
            if record.status == "active":
                return record
        return None

    def list_conversations(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0,
        persona_id: Optional[str] = None,
        include_archived: bool = False,
    ) -> list[ConversationRecord]:
        records = self._all_for_user(user_id, persona_id=persona_id)
        if not include_archived:
            records = [r for r in records if r.status != "archived"]
        return records[offset:offset + limit]

    def add_message(
        self,
        conversation_id: str,
        role: str,
        content: str,
        metadata: Optional[dict] = None,
    ) -> ChatMessage:
        """Append a message and bump updated_at.

        The first user message also becomes the conversation title.

        Raises:
            ConversationNotFoundError: If the conversation does not exist.
            pydantic.ValidationError: If content is empty or over 1000 chars.
        """
        record = self._require(conversation_id)
        message = ChatMessage(
            id=str(uuid.uuid4()),
            role=role,
            content=content,
            metadata=metadata or {},
        )
        if role == "user" and not any(m.role == "user" for m in record.messages):
            record.title = _title_from(content)
        record.messages.append(message)
        record.updated_at = _now()
        self._save(record)
        return message

    def update_learning_progress(self, conversation_id: str, response: PersonaResponse) -> ConversationRecord:
        """Fold one persona reply's teaching content into the conversation."""
        record = self._require(conversation_id)
        progress = record.learning_progress

        _dedupe_extend(progress.vocabulary_learned, (v.word for v in response.vocabulary_highlights))
        _dedupe_extend(progress.grammar_points_covered, response.grammar_points)
        _dedupe_extend(progress.cultural_insights_gained, [response.cultural_notes])

        if response.analysis is not None:
            progress.mistakes_corrected += len(response.analysis.errors)
            if response.analysis.intent == "question":
                progress.questions_asked += 1

        record.updated_at = _now()
        self._save(record)
        return record

    def update_conversation(
        self,
        conversation_id: str,
        user_id: str,
        status: Optional[str] = None,
        rating: Optional[int] = None,
        feedback: Optional[str] = None,
    ) -> ConversationRecord:
        record = self._require(conversation_id, user_id)
        # Re-validate so bounds on status and rating apply to updates too
        changes = {k: v for k, v in {"status": status, "rating": rating, "feedback": feedback}.items() if v is not None}
        record = ConversationRecord.model_validate({**record.model_dump(), **changes, "updated_at": _now()})
        self._save(record)
        return record

    def archive_conversation(self, conversation_id: str, user_id: str) -> ConversationRecord:
        record = self.update_conversation(conversation_id, user_id, status="archived")
        logger.info("Archived conversation %s", conversation_id)
        return record

    def end_conversation(self, conversation_id: str, user_id: str) -> ConversationSummary:
        record = self.update_conversation(conversation_id, user_id, status="completed")
        logger.info("Ended conversation %s", conversation_id)
        return self.summarize(record)

    # -- Reporting ----------------------------------------------------------

    @staticmethod
    def assess_quality(record: ConversationRecord) -> str:
        """Rate engagement from average words per user message."""
        user_messages = [m for m in record.messages if m.role == "user"]
        words = sum(len(m.content.split()) for m in user_messages)
        avg_words = words / max(len(user_messages), 1)
        if avg_words < 3:
            return "poor"
        if avg_words < 5:
            return "fair"
        if avg_words < 8:
            return "good"
        return "excellent"

    def summarize(self, record: ConversationRecord) -> ConversationSummary:
        progress = record.learning_progress
        vocabulary = progress.vocabulary_learned

        progress_made = []
        if vocabulary:
            progress_made.append(f"Learned {len(vocabulary)} new vocabulary words")
        if progress.mistakes_corrected > 0:
            progress_made.append(f"Received corrections for {progress.mistakes_corrected} grammar/usage mistakes")
        if progress.questions_asked > 0:
            progress_made.append(f"Asked {progress.questions_asked} engaging questions")

        areas_to_improve = []
        if progress.mistakes_corrected > 5:
            areas_to_improve.append("Grammar and sentence structure")
        if progress.questions_asked < 2:
            areas_to_improve.append("Active participation and curiosity")

        recommended = []
        if vocabulary:
            recommended.append(f"Practice using the new vocabulary: {', '.join(vocabulary[:3])}")
        recommended.append("Focus on grammar patterns that came up in our conversation")
        recommended.append(f"Try having conversations about {record.scenario.replace('_', ' ') or 'daily activities'}")

        return ConversationSummary(
            conversation_id=record.id,
            summary=(
                f"Covered {len(vocabulary)} new vocabulary words and "
                f"{len(progress.grammar_points_covered)} grammar points in {record.target_language} "
                f"over {len(record.messages)} messages."
            ),
            progress_made=progress_made,
            areas_to_improve=areas_to_improve,
            recommended_practice=recommended,
            vocabulary_gained=list(vocabulary),
            cultural_learning=list(progress.cultural_insights_gained),
            total_messages=len(record.messages),
            quality=self.assess_quality(record),
        )

    @staticmethod
    def duration_seconds(record: ConversationRecord) -> int:
        """Seconds between the first write and the latest update."""
        return max(int((record.updated_at - record.created_at).total_seconds()), 0)

    @staticmethod
    def weekly_progress(records: list[ConversationRecord]) -> list[dict]:
        """Conversations started on each of the last 7 UTC days, oldest first."""
        today = _now().date()
        started = Counter(r.created_at.astimezone(timezone.utc).date() for r in records)
        days = [today - timedelta(days=offset) for offset in range(WEEK_DAYS - 1, -1, -1)]
        return [{"date": day.isoformat(), "conversations": started[day]} for day in days]

    def analytics(self, user_id: str) -> dict:
        """Usage statistics over the user's most recent conversations."""
        records = self._all_for_user(user_id)[:ANALYTICS_WINDOW]
        if not records:
            return {
                "total_conversations": 0,
                "most_used_persona": None,
                "quality_distribution": {},
                "total_messages": 0,
                "average_messages": 0,
                "average_duration": 0,
                "weekly_progress": self.weekly_progress([]),
            }

        personas = Counter(r.persona_id for r in records)
        total_messages = sum(len(r.messages) for r in records)
        total_duration = sum(self.duration_seconds(r) for r in records)
        return {
            "total_conversations": len(records),
            "most_used_persona": personas.most_common(1)[0][0],
            "quality_distribution": dict(Counter(self.assess_quality(r) for r in records)),
            "total_messages": total_messages,
            "average_messages": round(total_messages / len(records), 1),
            "average_duration": round(total_duration / len(records)),
            "weekly_progress": self.weekly_progress(records),
        }
