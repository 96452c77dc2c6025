"""
Rule-based persona conversation engine.

Simulates the Maya, Alex and Luna tutors from authored templates plus
patterns processed from real transcripts. A reply is chosen in this order:
1. a persona response template whose triggers match the message
2. a dialogue segment from the best-scoring processed pattern
3. a contextual default from persona_data tables

Template choice is random. Pass a seeded random.Random for repeatable output.
"""

import logging
import random
from typing import Optional

from conversate import persona_data
from conversate.models import (
    ConversationContext,
    ConversationStarter,
    CulturalInsight,
    DialogueSegment,
    GrammarExplanation,
    MessageAnalysis,
    PersonaConfiguration,
    PersonaResponse,
    ProcessedConversationPattern,
    ResponsePattern,
    TeachingElements,
    VocabularyHighlight,
)
from conversate.services.message_analysis import analyze_user_message, detect_pattern_language

logger = logging.getLogger(__name__)

RELEVANT_SCORE = 6
CANDIDATE_SCORE = 4
MAX_RELEVANT_PATTERNS = 10
MAX_DERIVED_RESPONSE_PATTERNS = 10
MAX_DERIVED_STARTERS = 5

_DIFFICULTY_LEVELS = {"beginner": 1, "intermediate": 2, "advanced": 3}
_COMPLEXITY_LEVELS = {"simple": 1, "moderate": 2, "complex": 3}

# user intent -> communicative functions that suit it
_INTENT_CONTEXTS = {
    "question": ("teaching_learning", "informational", "academic_discussion"),
    "request": ("service_interaction", "professional_discussion"),
    "greeting": ("social_interaction", "casual_conversation"),
    "politeness": ("cultural_exchange", "formal_interaction"),
    "statement": ("conversation", "sharing", "discussion"),
}


class PersonaNotFoundError(LookupError):
    """Raised when a persona id is not one of the configured personas."""


def _base_personas() -> dict[str, PersonaConfiguration]:
    return {p["id"]: PersonaConfiguration.model_validate(p) for p in persona_data.PERSONAS}


class EnhancedPersonaConversationService:
    """Generates persona replies from templates and processed patterns."""

    def __init__(
        self,
        processed_patterns: Optional[list[ProcessedConversationPattern]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._rng = rng or random.Random()
        self._patterns: list[ProcessedConversationPattern] = []
        self._personas = _base_personas()
        if processed_patterns:
            self.load_conversation_patterns(processed_patterns)

    # -- Pattern loading ----------------------------------------------------

    @property
    def patterns(self) -> list[ProcessedConversationPattern]:
        return list(self._patterns)

    def load_conversation_patterns(self, patterns: list[ProcessedConversationPattern]) -> None:
        """Replace loaded patterns and re-derive persona templates from them.

        Each persona is reset to its authored configuration first, so
        reloading never stacks derived templates from an earlier load.
        """
        self._patterns = list(patterns)
        self._personas = _base_personas()

        for persona_id, persona in self._personas.items():
            relevant = self.get_conversation_patterns_for_persona(persona_id)
            derived_patterns = self._response_patterns_from_data(relevant)
            derived_starters = self._starters_from_data(relevant)
            persona.response_patterns.extend(derived_patterns)
            persona.conversation_starters.extend(derived_starters)
            logger.info(
                "Updated %s with %d derived patterns and %d derived starters",
                persona_id, len(derived_patterns), len(derived_starters),
            )

        logger.info("Loaded %d conversation patterns", len(self._patterns))

    @staticmethod
    def _response_patterns_from_data(patterns: list[ProcessedConversationPattern]) -> list[ResponsePattern]:
        by_intent: dict[str, ResponsePattern] = {}
        for pattern in patterns:
            for segment in pattern.dialogue_segments:
                if not segment.response_patterns:
                    continue
                existing = by_intent.get(segment.intent)
                if existing is not None:
                    existing.responses.append(segment.content)
                    continue
                by_intent[segment.intent] = ResponsePattern(
                    pattern=segment.intent,
                    triggers=[segment.intent],
                    responses=[segment.content],
                    cultural_notes=[c.description for c in pattern.cultural_elements],
                    vocabulary_focus=[w.category for v in pattern.vocabulary_patterns for w in v.words],
                )
        return list(by_intent.values())[:MAX_DERIVED_RESPONSE_PATTERNS]

    @staticmethod
    def _starters_from_data(patterns: list[ProcessedConversationPattern]) -> list[ConversationStarter]:
        starters = [
            ConversationStarter(
                scenario=pattern.scenario,
                difficulty=pattern.difficulty,
                opener=pattern.dialogue_segments[0].content,
                context=f"From real conversation: {pattern.context.topic}",
                expected_responses=[w.category for v in pattern.vocabulary_patterns for w in v.words],
            )
            for pattern in patterns
            if pattern.dialogue_segments
        ]
        return starters[:MAX_DERIVED_STARTERS]

    # -- Persona lookups ----------------------------------------------------

    def list_personas(self) -> list[PersonaConfiguration]:
        return list(self._personas.values())

    def get_persona_info(self, persona_id: str) -> Optional[PersonaConfiguration]:
        return self._personas.get(persona_id)

    def get_conversation_patterns_for_persona(self, persona_id: str) -> list[ProcessedConversationPattern]:
        result = []
        for pattern in self._patterns:
            relevance = pattern.persona_mapping.get(persona_id)
            if relevance is not None and relevance.score >= RELEVANT_SCORE:
                result.append(pattern)
        return result

    def get_conversation_starter(
        self,
        persona_id: str,
        difficulty: str,
        scenario: Optional[str] = None,
    ) -> Optional[ConversationStarter]:
        persona = self._personas.get(persona_id)
        if persona is None:
            return None
        starters = [
            s for s in persona.conversation_starters
            if s.difficulty == difficulty and (not scenario or s.scenario == scenario)
        ]
        if not starters:
            return None
        return self._rng.choice(starters)

    # -- Reply generation ---------------------------------------------------

    def generate_persona_response(
        self,
        persona_id: str,
        message: str,
        context: Optional[ConversationContext] = None,
    ) -> PersonaResponse:
        """Build a persona reply for one learner message.

        Args:
            persona_id: One of the configured persona ids.
            message: The learner's message text.
            context: Conversation state; defaults to an empty context.

        Returns:
            PersonaResponse with the reply and its teaching metadata.

        Raises:
            PersonaNotFoundError: If persona_id is unknown.
        """
        persona = self._personas.get(persona_id)
        if persona is None:
            raise PersonaNotFoundError(f"Persona {persona_id} not found")
        context = context or ConversationContext()

        analysis = analyze_user_message(message)
        relevant = self.find_relevant_patterns(persona_id, analysis)

        content = ""
        cultural_notes = ""
        grammar_points: list[str] = []
        vocabulary: list[VocabularyHighlight] = []

        template = self.find_best_response_pattern(persona, analysis)
        if template is not None:
            content = self._select_contextual_response(template, analysis)
            if template.cultural_notes:
                cultural_notes = template.cultural_notes[0]
        elif relevant:
            selected = self.select_best_pattern(relevant, analysis)
            segment = self.select_best_dialogue_segment(selected, analysis) if selected.dialogue_segments else None
            if segment is not None and self.is_content_appropriate(segment.content, analysis):
                content = self._adapt_content_to_persona(segment.content, persona, analysis)
                grammar_points = [g.pattern for g in selected.grammar_structures]
                vocabulary = [w for v in selected.vocabulary_patterns for w in v.words]
                if selected.cultural_elements:
                    cultural_notes = selected.cultural_elements[0].description
            else:
                content = self.contextual_default_response(persona, analysis)
        else:
            content = self.contextual_default_response(persona, analysis)

        if analysis.errors:
            content = self._correction(persona, analysis) + " " + content

        if len(content) < 10:
            content = self.contextual_default_response(persona, analysis)

        suggestions = self._next_suggestions(persona, analysis)
        teaching = TeachingElements(
            vocabulary_highlights=[
                VocabularyHighlight(
                    word=w.word,
                    definition=w.definition,
                    category=w.category or "general",
                    usage=w.usage,
                    language=analysis.language,
                )
                for w in vocabulary[:5]
            ],
            grammar_explanations=[
                GrammarExplanation(
                    concept=point,
                    explanation=get_grammar_explanation(point),
                    examples=get_grammar_examples(point, analysis.language),
                )
                for point in grammar_points[:3]
            ],
            cultural_insights=[
                CulturalInsight(
                    aspect=extract_cultural_aspect(cultural_notes),
                    description=cultural_notes,
                    language=analysis.language,
                )
            ] if cultural_notes else [],
            suggested_follow_up=suggestions[0] if suggestions else None,
        )

        return PersonaResponse(
            content=content,
            cultural_notes=cultural_notes,
            grammar_points=grammar_points,
            vocabulary_highlights=vocabulary,
            next_suggestions=suggestions,
            response=content,
            teaching_elements=teaching,
            analysis=analysis,
        )

    # -- Pattern scoring ----------------------------------------------------

    def find_relevant_patterns(self, persona_id: str, analysis: MessageAnalysis) -> list[ProcessedConversationPattern]:
        """Candidate patterns for a persona (score >= 4), best first, at most 10."""
        scored = []
        for pattern in self._patterns:
            relevance = pattern.persona_mapping.get(persona_id)
            if relevance is None or relevance.score < CANDIDATE_SCORE:
                continue

            score = relevance.score
            if detect_pattern_language(pattern) == analysis.language:
                score += 3
            if pattern.context.topic == analysis.topic:
                score += 2
            if pattern.difficulty == analysis.difficulty:
                score += 1
            elif _within_one_level(pattern.difficulty, analysis.difficulty):
                score += 0.5
            if pattern.context.communicative_function in _INTENT_CONTEXTS.get(analysis.intent, ()):
                score += 1
            if pattern.cultural_elements and analysis.topic == "culture":
                score += 1
            if _vocabulary_appropriate(pattern, analysis.complexity):
                score += 0.5
            scored.append((score, pattern))

        # sorted() is stable, ties keep load order
        scored.sort(key=lambda item: item[0], reverse=True)
        return [pattern for _, pattern in scored[:MAX_RELEVANT_PATTERNS]]

    @staticmethod
    def find_best_response_pattern(
        persona: PersonaConfiguration,
        analysis: MessageAnalysis,
    ) -> Optional[ResponsePattern]:
        best, best_score = None, 0
        vocabulary = [w.lower() for w in analysis.vocabulary]
        for template in persona.response_patterns:
            hits = [
                trigger for trigger in template.triggers
                if trigger in analysis.topic
                or trigger == analysis.intent
                or any(trigger.lower() in word for word in vocabulary)
            ]
            score = len(hits) * 2
            if analysis.topic in template.vocabulary_focus:
                score += 1
            if score > best_score:
                best, best_score = template, score
        return best

    def _select_contextual_response(self, template: ResponsePattern, analysis: MessageAnalysis) -> str:
        if analysis.emotional_tone == "enthusiastic" and len(template.responses) > 1:
            return template.responses[0]
        return self._rng.choice(template.responses)

    def select_best_pattern(
        self,
        patterns: list[ProcessedConversationPattern],
        analysis: MessageAnalysis,
    ) -> ProcessedConversationPattern:
        if not patterns:
            return self._fallback_pattern(analysis)

        topic = analysis.topic.lower()
        best, best_score = None, None
        for pattern in patterns:
            score = 0
            if detect_pattern_language(pattern) == analysis.language:
                score += 5
            if topic in pattern.context.topic.lower():
                score += 3
            if pattern.difficulty == analysis.difficulty:
                score += 2
            if any(s.intent == analysis.intent or topic in s.content.lower() for s in pattern.dialogue_segments):
                score += 2
            segments = pattern.dialogue_segments
            if segments and sum(len(s.content.split(" ")) for s in segments) / len(segments) < 20:
                score += 1
            if best_score is None or score > best_score:
                best, best_score = pattern, score
        return best

    def select_best_dialogue_segment(
        self,
        pattern: ProcessedConversationPattern,
        analysis: MessageAnalysis,
    ) -> DialogueSegment:
        if not pattern.dialogue_segments:
            return self._fallback_segment(analysis)

        topic_words = analysis.topic.lower().split("_")
        vocabulary = [w.lower() for w in analysis.vocabulary]
        best, best_score = None, None
        for segment in pattern.dialogue_segments:
            content = segment.content.lower()
            score = 0
            if segment.intent == analysis.intent:
                score += 5
            score += 2 * sum(1 for word in topic_words if word in content)
            score += sum(1 for word in vocabulary if word in content)
            if segment.emotional_tone == analysis.emotional_tone:
                score += 1
            word_count = len(segment.content.split(" "))
            if 5 <= word_count <= 25:
                score += 1
            elif word_count > 50:
                score -= 2
            if "..." in segment.content or len(segment.content) < 10:
                score -= 3
            if best_score is None or score > best_score:
                best, best_score = segment, score

        return best if best_score > 0 else pattern.dialogue_segments[0]

    @staticmethod
    def is_content_appropriate(content: str, analysis: MessageAnalysis) -> bool:
        """Reject long, fragmentary or off-topic dialogue before reuse."""
        if len(content) > 200:
            return False
        if len(content) < 10 or "..." in content or len(content.split(" ")) < 3:
            return False
        if analysis.topic == "general":
            return True
        content_words = content.lower().split(" ")
        topic_words = analysis.topic.lower().split("_")
        return any(
            word in content_word or content_word in word
            for word in topic_words
            for content_word in content_words
        )

    @staticmethod
    def _adapt_content_to_persona(content: str, persona: PersonaConfiguration, analysis: MessageAnalysis) -> str:
        personality = persona.base_personality
        if persona.id == "maya" and personality.correction_style == "gentle":
            if analysis.emotional_tone == "confused":
                return f"Ne t'inquiète pas, c'est normal. {content}"
        elif persona.id == "alex" and personality.energy > 8:
            if analysis.emotional_tone == "positive":
                return f"{content} C'est génial !"
        # Luna's cultural framing travels in cultural_notes
        return content

    # -- Fallbacks ----------------------------------------------------------

    def contextual_default_response(self, persona: PersonaConfiguration, analysis: MessageAnalysis) -> str:
        """Topic reply, then intent reply, then the per-language fallback."""
        by_topic = persona_data.TOPIC_RESPONSES.get(analysis.language, {}).get(persona.id, {})
        if analysis.topic in by_topic:
            return self._rng.choice(by_topic[analysis.topic])

        general = persona_data.GENERAL_RESPONSES.get(analysis.language, persona_data.GENERAL_RESPONSES["english"])
        by_intent = general.get(persona.id, {})
        if analysis.intent in by_intent:
            return self._rng.choice(by_intent[analysis.intent])

        return persona_data.ULTIMATE_FALLBACKS.get(analysis.language, persona_data.ULTIMATE_FALLBACKS["english"])

    @staticmethod
    def _fallback_content(analysis: MessageAnalysis) -> str:
        templates = persona_data.FALLBACK_TEMPLATES.get(analysis.language, persona_data.FALLBACK_TEMPLATES["english"])
        template = templates.get(analysis.intent, templates["default"])
        return template.format(topic=analysis.topic)

    def _fallback_segment(self, analysis: MessageAnalysis) -> DialogueSegment:
        return DialogueSegment(
            speaker="assistant",
            content=self._fallback_content(analysis),
            intent=analysis.intent,
            emotional_tone=analysis.emotional_tone or "neutral",
        )

    def _fallback_pattern(self, analysis: MessageAnalysis) -> ProcessedConversationPattern:
        neutral = {"score": 5, "applicable_scenarios": ["general_conversation"]}
        return ProcessedConversationPattern.model_validate({
            "id": "fallback",
            "scenario": "general_conversation",
            "difficulty": analysis.difficulty,
            "context": {
                "setting": "casual",
                "participants": ["user", "assistant"],
                "topic": analysis.topic,
                "communicative_function": "conversation",
            },
            "dialogue_segments": [self._fallback_segment(analysis).model_dump()],
            "persona_mapping": {
                "maya": {**neutral, "matching_traits": ["supportive", "educational"],
                         "adaptation_notes": ["Use encouraging tone", "Provide grammar support"]},
                "alex": {**neutral, "matching_traits": ["casual", "friendly"],
                         "adaptation_notes": ["Keep conversation light", "Use informal expressions"]},
                "luna": {**neutral, "matching_traits": ["informative", "cultural"],
                         "adaptation_notes": ["Include cultural context", "Explain traditions"]},
            },
        })

    @staticmethod
    def _correction(persona: PersonaConfiguration, analysis: MessageAnalysis) -> str:
        templates = persona_data.CORRECTION_TEMPLATES.get(analysis.language, persona_data.CORRECTION_TEMPLATES["english"])
        style = persona.base_personality.correction_style or "gentle"
        template = templates.get(style, templates["gentle"])
        return template.format(error=analysis.errors[0])

    @staticmethod
    def _next_suggestions(persona: PersonaConfiguration, analysis: MessageAnalysis) -> list[str]:
        suggestions = list(persona_data.TOPIC_SUGGESTIONS.get(analysis.topic, []))
        suggestions.extend(persona_data.PERSONA_SUGGESTIONS.get(persona.id, []))
        return suggestions[:3]


def _within_one_level(pattern_difficulty: str, user_difficulty: str) -> bool:
    pattern_level = _DIFFICULTY_LEVELS.get(pattern_difficulty, 1)
    user_level = _DIFFICULTY_LEVELS.get(user_difficulty, 1)
    return abs(pattern_level - user_level) <= 1


def _vocabulary_appropriate(pattern: ProcessedConversationPattern, user_complexity: str) -> bool:
    """Average vocabulary level within 1.5 of the message's complexity level."""
    if not pattern.vocabulary_patterns:
        return True
    user_level = _COMPLEXITY_LEVELS.get(user_complexity, 1)
    levels = [_DIFFICULTY_LEVELS.get(v.difficulty, 1) for v in pattern.vocabulary_patterns]
    return abs(sum(levels) / len(levels) - user_level) <= 1.5


def get_grammar_explanation(concept: str) -> str:
    return persona_data.GRAMMAR_EXPLANATIONS.get(concept, f"Structure grammaticale: {concept}")


def get_grammar_examples(concept: str, language: str) -> list[str]:
    examples = persona_data.GRAMMAR_EXAMPLES.get(language, persona_data.GRAMMAR_EXAMPLES["english"])
    return list(examples.get(concept, [f"Example of {concept}"]))


def extract_cultural_aspect(cultural_notes: str) -> str:
    """Short French label for a cultural note."""
    if any(k in cultural_notes for k in ("formality", "tu", "vous")):
        return "Niveaux de formalité"
    if any(k in cultural_notes for k in ("food", "breakfast", "déjeuner")):
        return "Culture culinaire française"
    if "Europe" in cultural_notes or "geography" in cultural_notes:
        return "Conscience européenne"
    if "education" in cultural_notes or "school" in cultural_notes:
        return "Système éducatif français"
    return "Culture française"
