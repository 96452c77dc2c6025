"""
Pydantic models for Conversate.

Defines the data contract between the transcript processor, the persona
engine, the conversation store, and the API routes. Processed patterns are
serialized to JSON with these models, so field names double as the on-disk
format of pattern files.
"""

from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Transcript processing
# ---------------------------------------------------------------------------

class RawConversationData(BaseModel):
    """A timestamped transcript segment before analysis."""

    timestamp: str = Field(..., description="Segment start time (HH:MM)")
    chapter: str = Field(default="", description="Chapter label, e.g. 'Chapter 3: Au café'")
    transcript: str = Field(..., description="Concatenated transcript text")
    participants: list[str] = Field(default_factory=list)
    setting: str = Field(default="")


class PatternContext(BaseModel):
    """Setting and communicative purpose inferred from a transcript."""

    setting: str = Field(..., description="Setting, e.g. university, travel, dining")
    participants: list[str] = Field(default_factory=list)
    topic: str = Field(..., description="Topic key, e.g. academic_life, food_meals")
    communicative_function: str = Field(..., description="e.g. social_interaction, travel_planning")


class DialogueSegment(BaseModel):
    """A single sentence of dialogue with its heuristic annotations."""

    speaker: str
    content: str
    intent: str = Field(..., description="question, request, response, greeting, politeness, correction, statement")
    emotional_tone: str = Field(default="neutral")
    response_patterns: list[str] = Field(default_factory=list)


class VocabularyHighlight(BaseModel):
    """A vocabulary entry surfaced to the learner."""

    word: str
    definition: str = ""
    category: str = "general"
    usage: str = ""
    language: Optional[str] = None


class VocabularyPattern(BaseModel):
    theme: str
    words: list[VocabularyHighlight] = Field(default_factory=list)
    frequency: int = Field(default=0, ge=0)
    difficulty: str = "beginner"


class GrammarStructure(BaseModel):
    pattern: str
    examples: list[str] = Field(default_factory=list, max_length=3)
    level: str = "beginner"
    usage: str = ""


class CulturalElement(BaseModel):
    aspect: str
    description: str
    example: str = ""
    significance: str = ""


class PersonaRelevance(BaseModel):
    """How well a processed pattern fits one persona."""

    score: float = Field(..., ge=0.0, le=10.0, description="Relevance score (0-10)")
    matching_traits: list[str] = Field(default_factory=list)
    applicable_scenarios: list[str] = Field(default_factory=list)
    adaptation_notes: list[str] = Field(default_factory=list)


class PersonaMapping(BaseModel):
    """Relevance of a processed pattern for each built-in persona."""

    maya: PersonaRelevance
    alex: PersonaRelevance
    luna: PersonaRelevance

    def get(self, persona_id: str) -> Optional[PersonaRelevance]:
        return getattr(self, persona_id, None) if persona_id in type(self).model_fields else None


class ProcessedConversationPattern(BaseModel):
    """A structured conversational pattern extracted from a transcript segment."""

    id: str
    scenario: str
    difficulty: Literal["beginner", "intermediate", "advanced"]
    context: PatternContext
    dialogue_segments: list[DialogueSegment] = Field(default_factory=list)
    vocabulary_patterns: list[VocabularyPattern] = Field(default_factory=list)
    grammar_structures: list[GrammarStructure] = Field(default_factory=list)
    cultural_elements: list[CulturalElement] = Field(default_factory=list)
    persona_mapping: PersonaMapping


# ---------------------------------------------------------------------------
# Persona configuration
# ---------------------------------------------------------------------------

class PersonaPersonality(BaseModel):
    """Personality sliders (1-10) and correction style for a persona."""

    patience: int = Field(..., ge=1, le=10)
    energy: int = Field(..., ge=1, le=10)
    formality: int = Field(..., ge=1, le=10)
    cultural_focus: int = Field(..., ge=1, le=10)
    correction_style: Literal["gentle", "direct", "encouraging"] = "gentle"


class ResponsePattern(BaseModel):
    pattern: str
    triggers: list[str] = Field(default_factory=list)
    responses: list[str] = Field(default_factory=list)
    cultural_notes: list[str] = Field(default_factory=list)
    vocabulary_focus: list[str] = Field(default_factory=list)


class ConversationStarter(BaseModel):
    scenario: str
    difficulty: Literal["beginner", "intermediate", "advanced"]
    opener: str
    context: str = ""
    expected_responses: list[str] = Field(default_factory=list)


class PersonaConfiguration(BaseModel):
    """A template-driven tutor personality."""

    id: str
    name: str
    description: str
    base_personality: PersonaPersonality
    preferred_scenarios: list[str] = Field(default_factory=list)
    response_patterns: list[ResponsePattern] = Field(default_factory=list)
    conversation_starters: list[ConversationStarter] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Runtime analysis and responses
# ---------------------------------------------------------------------------

class MessageAnalysis(BaseModel):
    """Keyword-based analysis of a single user message."""

    intent: str
    topic: str
    difficulty: Literal["beginner", "intermediate", "advanced"]
    emotional_tone: str
    errors: list[str] = Field(default_factory=list)
    vocabulary: list[str] = Field(default_factory=list)
    language: Literal["french", "spanish", "english"]
    complexity: Literal["simple", "moderate", "complex"]


class PreviousMessage(BaseModel):
    role: str
    content: str


class ConversationContext(BaseModel):
    """Conversation state handed to the persona engine for one turn."""

    user_level: Literal["beginner", "intermediate", "advanced"] = "intermediate"
    scenario: str = "general_conversation"
    previous_messages: list[PreviousMessage] = Field(default_factory=list)
    focus_areas: list[str] = Field(default_factory=list)
    learning_style: str = "conversational"


class GrammarExplanation(BaseModel):
    concept: str
    explanation: str
    examples: list[str] = Field(default_factory=list)


class CulturalInsight(BaseModel):
    aspect: str
    description: str
    language: str


class TeachingElements(BaseModel):
    vocabulary_highlights: list[VocabularyHighlight] = Field(default_factory=list)
    grammar_explanations: list[GrammarExplanation] = Field(default_factory=list)
    cultural_insights: list[CulturalInsight] = Field(default_factory=list)
    suggested_follow_up: Optional[str] = None


class PersonaResponse(BaseModel):
    """A persona reply plus the teaching metadata attached to it."""

    content: str = Field(..., description="The persona's reply text")
    cultural_notes: str = ""
    grammar_points: list[str] = Field(default_factory=list)
    vocabulary_highlights: list[VocabularyHighlight] = Field(default_factory=list)
    next_suggestions: list[str] = Field(default_factory=list)
    response: str = Field(default="", description="Alias of content kept for API compatibility")
    teaching_elements: TeachingElements = Field(default_factory=TeachingElements)
    analysis: Optional[MessageAnalysis] = None


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

class ChatMessage(BaseModel):
    id: str
    role: Literal["user", "persona"]
    content: str = Field(..., min_length=1, max_length=1000)
    created_at: datetime = Field(default_factory=_utcnow)
    metadata: dict = Field(default_factory=dict)


class LearningProgress(BaseModel):
    vocabulary_learned: list[str] = Field(default_factory=list)
    grammar_points_covered: list[str] = Field(default_factory=list)
    cultural_insights_gained: list[str] = Field(default_factory=list)
    mistakes_corrected: int = Field(default=0, ge=0)
    questions_asked: int = Field(default=0, ge=0)


class ConversationRecord(BaseModel):
    """A persisted conversation between one user and one persona."""

    id: str
    user_id: str
    persona_id: str
    title: str = "New Conversation"
    target_language: str = "French"
    proficiency_level: str = "intermediate"
    scenario: str = "general_conversation"
    status: Literal["active", "completed", "archived"] = "active"
    messages: list[ChatMessage] = Field(default_factory=list)
    learning_progress: LearningProgress = Field(default_factory=LearningProgress)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    feedback: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ConversationSummary(BaseModel):
    conversation_id: str
    summary: str
    progress_made: list[str] = Field(default_factory=list)
    areas_to_improve: list[str] = Field(default_factory=list)
    recommended_practice: list[str] = Field(default_factory=list)
    vocabulary_gained: list[str] = Field(default_factory=list)
    cultural_learning: list[str] = Field(default_factory=list)
    total_messages: int = 0
    quality: Literal["poor", "fair", "good", "excellent"] = "poor"


# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------

class ChatRequest(BaseModel):
    message: str = ""
    user_id: str = ""
    persona_id: str = ""
    target_language: Optional[str] = None
    proficiency_level: Optional[Literal["beginner", "intermediate", "advanced"]] = None
    conversation_id: Optional[str] = None
    scenario: Optional[str] = None


class ChatResponse(BaseModel):
    """Payload of one chat turn, shared by REST and WebSocket."""

    message: str
    metadata: dict = Field(default_factory=dict)
    conversation_id: str
    learning_progress: LearningProgress


class ConversationAction(BaseModel):
    action: str
    conversation_id: str
    user_id: str = "guest"


class ConversationUpdate(BaseModel):
    user_id: str = "guest"
    status: Optional[Literal["active", "completed", "archived"]] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    feedback: Optional[str] = None


class ProcessTranscriptRequest(BaseModel):
    content: str = Field(..., description="Raw timestamped transcript text")
    replace: bool = Field(default=False, description="Replace loaded patterns instead of appending")
