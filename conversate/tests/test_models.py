"""
Tests for conversate.models Pydantic models.

Verifies:
- All models validate correctly with valid data
- All models reject invalid data with appropriate errors
- Persona data and pattern fixtures validate against their models
"""

import pytest
from pydantic import ValidationError

from conversate.models import (
    ChatMessage,
    ChatRequest,
    ConversationAction,
    ConversationContext,
    ConversationRecord,
    ConversationUpdate,
    GrammarStructure,
    PersonaConfiguration,
    PersonaMapping,
    PersonaPersonality,
    PersonaRelevance,
    PersonaResponse,
    ProcessedConversationPattern,
)
from conversate.persona_data import PERSONAS


# ---------------------------------------------------------------------------
# Processed pattern tests
# ---------------------------------------------------------------------------

class TestProcessedConversationPattern:
    """Tests for the ProcessedConversationPattern model."""

    def test_valid_pattern(self, sample_pattern_dict):
        """A complete pattern dict should validate."""
        pattern = ProcessedConversationPattern.model_validate(sample_pattern_dict)
        assert pattern.scenario == "recreational"
        assert pattern.context.participants == ["Margot", "Paul"]
        assert pattern.persona_mapping.alex.score == 8

    def test_invalid_difficulty_raises(self, sample_pattern_dict):
        """Difficulty must be beginner, intermediate or advanced."""
        sample_pattern_dict["difficulty"] = "expert"
        with pytest.raises(ValidationError):
            ProcessedConversationPattern.model_validate(sample_pattern_dict)

    def test_missing_persona_raises(self, sample_pattern_dict):
        """Every pattern maps all three personas."""
        del sample_pattern_dict["persona_mapping"]["luna"]
        with pytest.raises(ValidationError):
            ProcessedConversationPattern.model_validate(sample_pattern_dict)

    def test_json_round_trip_preserves_fields(self, sample_pattern_dict):
        pattern = ProcessedConversationPattern.model_validate(sample_pattern_dict)
        restored = ProcessedConversationPattern.model_validate_json(pattern.model_dump_json())
        assert restored == pattern


class TestPersonaRelevance:
    """Tests for persona relevance scores."""

    def test_score_above_ten_raises(self):
        with pytest.raises(ValidationError):
            PersonaRelevance(score=10.5)

    def test_negative_score_raises(self):
        with pytest.raises(ValidationError):
            PersonaRelevance(score=-1)

    def test_boundaries_accepted(self):
        assert PersonaRelevance(score=0).score == 0
        assert PersonaRelevance(score=10).score == 10

    def test_mapping_get(self, sample_pattern_dict):
        """PersonaMapping.get returns None for unknown persona ids."""
        mapping = PersonaMapping.model_validate(sample_pattern_dict["persona_mapping"])
        assert mapping.get("alex").score == 8
        assert mapping.get("bob") is None
        assert mapping.get("model_fields") is None


class TestGrammarStructure:
    """Tests for the GrammarStructure model."""

    def test_at_most_three_examples(self):
        with pytest.raises(ValidationError):
            GrammarStructure(pattern="negation_ne_pas", examples=["a", "b", "c", "d"])


# ---------------------------------------------------------------------------
# Persona configuration tests
# ---------------------------------------------------------------------------

class TestPersonaConfiguration:
    """Tests for persona configuration models."""

    def test_authored_personas_validate(self):
        """Every authored persona should validate."""
        personas = [PersonaConfiguration.model_validate(p) for p in PERSONAS]
        assert [p.id for p in personas] == ["maya", "alex", "luna"]

    def test_personality_slider_bounds(self):
        """Personality sliders are limited to 1-10."""
        with pytest.raises(ValidationError):
            PersonaPersonality(patience=11, energy=5, formality=5, cultural_focus=5)
        with pytest.raises(ValidationError):
            PersonaPersonality(patience=5, energy=0, formality=5, cultural_focus=5)

    def test_invalid_correction_style_raises(self):
        with pytest.raises(ValidationError):
            PersonaPersonality(patience=5, energy=5, formality=5, cultural_focus=5, correction_style="harsh")


# ---------------------------------------------------------------------------
# Runtime model tests
# ---------------------------------------------------------------------------

class TestConversationContext:
    """Tests for the ConversationContext defaults."""

    def test_defaults(self):
        context = ConversationContext()
        assert context.user_level == "intermediate"
        assert context.scenario == "general_conversation"
        assert context.previous_messages == []
        assert context.learning_style == "conversational"


class TestPersonaResponse:
    """Tests for the PersonaResponse model."""

    def test_defaults_for_optional_fields(self):
        """Only content is required."""
        response = PersonaResponse(content="Bonjour !")
        assert response.cultural_notes == ""
        assert response.grammar_points == []
        assert response.teaching_elements.suggested_follow_up is None
        assert response.analysis is None

    def test_missing_content_raises(self):
        with pytest.raises(ValidationError):
            PersonaResponse()


# ---------------------------------------------------------------------------
# Persistence model tests
# ---------------------------------------------------------------------------

class TestChatMessage:
    """Tests for the ChatMessage model."""

    def test_valid_message(self):
        message = ChatMessage(id="m1", role="user", content="Salut")
        assert message.metadata == {}
        assert message.created_at.tzinfo is not None

    def test_empty_content_raises(self):
        with pytest.raises(ValidationError):
            ChatMessage(id="m1", role="user", content="")

    def test_content_over_1000_chars_raises(self):
        with pytest.raises(ValidationError):
            ChatMessage(id="m1", role="user", content="a" * 1001)

    def test_content_at_1000_chars_accepted(self):
        assert len(ChatMessage(id="m1", role="persona", content="a" * 1000).content) == 1000

    def test_invalid_role_raises(self):
        with pytest.raises(ValidationError):
            ChatMessage(id="m1", role="system", content="Salut")


class TestConversationRecord:
    """Tests for the ConversationRecord model."""

    def test_defaults(self):
        record = ConversationRecord(id="c1", user_id="u1", persona_id="maya")
        assert record.title == "New Conversation"
        assert record.status == "active"
        assert record.learning_progress.mistakes_corrected == 0
        assert record.rating is None

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range_raises(self, rating):
        with pytest.raises(ValidationError):
            ConversationRecord(id="c1", user_id="u1", persona_id="maya", rating=rating)

    def test_invalid_status_raises(self):
        with pytest.raises(ValidationError):
            ConversationRecord(id="c1", user_id="u1", persona_id="maya", status="deleted")


# ---------------------------------------------------------------------------
# API payload tests
# ---------------------------------------------------------------------------

class TestApiPayloads:
    """Tests for request body models."""

    def test_chat_request_all_optional(self):
        """Missing fields are reported by the route, not the model."""
        request = ChatRequest()
        assert request.message == ""
        assert request.conversation_id is None

    def test_chat_request_invalid_level_raises(self):
        with pytest.raises(ValidationError):
            ChatRequest(message="Salut", user_id="u1", persona_id="maya", proficiency_level="expert")

    def test_conversation_action_defaults_to_guest(self):
        action = ConversationAction(action="archive", conversation_id="c1")
        assert action.user_id == "guest"

    def test_conversation_update_rating_bounds(self):
        with pytest.raises(ValidationError):
            ConversationUpdate(rating=9)
        assert ConversationUpdate(rating=5, feedback="Très bien").rating == 5
