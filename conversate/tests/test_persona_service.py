"""
Tests for conversate.services.persona_service module.

Verifies:
- Persona lookups, starters and derived templates from processed patterns
- Reply selection order: template, processed dialogue, contextual default
- Corrections, suggestions and teaching elements on replies
- Fallback pattern and dialogue scoring helpers
- Relevance bonuses, the candidate cap and best-pattern ranking
- Contextual default lookup order
"""

import copy
import random

import pytest

from conversate import persona_data
from conversate.models import MessageAnalysis, ProcessedConversationPattern
from conversate.services.persona_service import (
    EnhancedPersonaConversationService,
    PersonaNotFoundError,
    extract_cultural_aspect,
    get_grammar_examples,
    get_grammar_explanation,
)


def _analysis(**overrides):
    values = {
        "intent": "statement",
        "topic": "general",
        "difficulty": "beginner",
        "emotional_tone": "neutral",
        "language": "french",
        "complexity": "simple",
    }
    values.update(overrides)
    return MessageAnalysis(**values)


def _pattern(data, pattern_id, alex_score=8, mutate=None):
    data = copy.deepcopy(data)
    data["id"] = pattern_id
    data["persona_mapping"]["alex"]["score"] = alex_score
    if mutate is not None:
        mutate(data)
    return ProcessedConversationPattern.model_validate(data)


def _english_dialogue(data):
    data["dialogue_segments"][0]["content"] = "Do you play tennis with your friends today"


def _long_dialogue(data):
    data["dialogue_segments"][0]["content"] = " ".join(["Est-ce que tu fais du tennis avec tes amis"] * 3)


def _general_topic(data):
    data["context"]["topic"] = "general"


def _travel_topic(data):
    data["context"]["topic"] = "travel_tourism"


def _advanced(data):
    data["difficulty"] = "advanced"


def _intermediate(data):
    data["difficulty"] = "intermediate"


def _greeting_context(data):
    data["context"]["communicative_function"] = "social_interaction"


def _greeting_segment(data):
    data["dialogue_segments"][0]["intent"] = "greeting"


def _cultural(data):
    data["cultural_elements"] = [{"aspect": "formality_levels", "description": "French uses tu and vous"}]


def _advanced_vocabulary(data):
    data["vocabulary_patterns"][0]["difficulty"] = "advanced"


# The base sample pattern earns no relevance bonus against this message.
_RANKING_ANALYSIS = {
    "intent": "greeting",
    "topic": "general",
    "difficulty": "advanced",
    "language": "english",
    "complexity": "complex",
}


@pytest.fixture
def service(rng):
    return EnhancedPersonaConversationService(rng=rng)


@pytest.fixture
def loaded_service(rng, processed_patterns):
    return EnhancedPersonaConversationService(processed_patterns, rng=rng)


class TestPersonaLookups:
    """Tests for persona listing, info and starters."""

    def test_list_personas(self, service):
        assert [p.id for p in service.list_personas()] == ["maya", "alex", "luna"]

    def test_unknown_persona_info(self, service):
        assert service.get_persona_info("bob") is None

    def test_starter_by_difficulty(self, service):
        starter = service.get_conversation_starter("maya", "beginner")
        assert starter.scenario == "grammar_lesson"

    def test_starter_by_scenario(self, service):
        starter = service.get_conversation_starter("alex", "intermediate", scenario="sports_discussion")
        assert "tennis" in starter.opener

    def test_no_matching_starter(self, service):
        assert service.get_conversation_starter("maya", "advanced") is None
        assert service.get_conversation_starter("bob", "beginner") is None


class TestPatternLoading:
    """Tests for deriving templates and starters from processed patterns."""

    def test_patterns_for_persona(self, loaded_service):
        maya = loaded_service.get_conversation_patterns_for_persona("maya")
        assert [p.scenario for p in maya] == ["educational"]

    def test_derived_templates_per_intent(self, loaded_service):
        maya = loaded_service.get_persona_info("maya")
        derived = [t.pattern for t in maya.response_patterns[2:]]
        assert derived == ["question", "response"]
        assert maya.response_patterns[2].responses == ["Est-ce que tu connais la capitale de la Finlande"]

    def test_derived_starter(self, loaded_service):
        luna = loaded_service.get_persona_info("luna")
        derived = luna.conversation_starters[-1]
        assert derived.opener == "Le petit-déjeuner est servi"
        assert derived.context == "From real conversation: food_meals"
        assert loaded_service.get_conversation_starter("luna", "beginner", scenario="dining") == derived

    def test_reload_does_not_stack(self, loaded_service, processed_patterns):
        loaded_service.load_conversation_patterns(processed_patterns)
        maya = loaded_service.get_persona_info("maya")
        assert len(maya.response_patterns) == 4
        assert len(maya.conversation_starters) == 3

    def test_reload_with_nothing_restores_authored(self, loaded_service):
        loaded_service.load_conversation_patterns([])
        assert loaded_service.patterns == []
        assert len(loaded_service.get_persona_info("maya").response_patterns) == 2


class TestGeneratePersonaResponse:
    """Tests for reply generation."""

    def test_unknown_persona_raises(self, service):
        with pytest.raises(PersonaNotFoundError):
            service.generate_persona_response("bob", "Bonjour")

    def test_template_match(self, service):
        response = service.generate_persona_response("alex", "J'adore le sport le weekend !")
        templates = persona_data.PERSONAS[1]["response_patterns"][0]
        assert response.content in templates["responses"]
        assert response.cultural_notes == "French youth often express enthusiasm this way"
        assert response.response == response.content
        assert response.analysis.topic == "sports"

    def test_enthusiastic_tone_takes_first_template_reply(self, service):
        response = service.generate_persona_response("alex", "Super, j'adore le sport !")
        assert response.content == "Oh là là, c'est génial ! Raconte-moi tout !"

    def test_next_suggestions(self, service):
        response = service.generate_persona_response("alex", "J'adore le sport le weekend !")
        assert response.next_suggestions == [
            "Quel est ton sport préféré ?",
            "Tu fais du sport souvent ?",
            "Et toi, qu'est-ce que tu en penses ?",
        ]
        assert response.teaching_elements.suggested_follow_up == "Quel est ton sport préféré ?"

    def test_contextual_default_by_topic(self, service):
        response = service.generate_persona_response("maya", "Je mange du pain avec de la confiture, c'est très bon")
        assert response.content in persona_data.TOPIC_RESPONSES["french"]["maya"]["food"]
        assert response.grammar_points == []

    def test_derived_template_from_patterns(self, loaded_service):
        response = loaded_service.generate_persona_response("maya", "Comment dit-on bonjour ?")
        assert response.content == "Est-ce que tu connais la capitale de la Finlande"
        assert response.cultural_notes.startswith("French education emphasizes European geography")

    def test_dialogue_from_processed_pattern(self, loaded_service, processed_patterns):
        response = loaded_service.generate_persona_response("luna", "Vous voulez de la confiture")
        dining = processed_patterns[2]
        assert response.content == "Vous voulez du café avec de la confiture"
        assert response.grammar_points == [g.pattern for g in dining.grammar_structures]
        assert [v.word for v in response.vocabulary_highlights] == ["petit-déjeuner", "café", "confiture", "dîner"]
        assert response.cultural_notes == dining.cultural_elements[0].description

    def test_teaching_elements_from_pattern(self, loaded_service):
        response = loaded_service.generate_persona_response("luna", "Vous voulez de la confiture")
        teaching = response.teaching_elements
        assert len(teaching.vocabulary_highlights) == 4
        assert {v.language for v in teaching.vocabulary_highlights} == {"french"}
        assert len(teaching.grammar_explanations) <= 3
        assert teaching.cultural_insights[0].aspect == "Culture culinaire française"
        assert teaching.suggested_follow_up == persona_data.PERSONA_SUGGESTIONS["luna"][0]

    @pytest.mark.parametrize("persona_id,prefix", [
        ("maya", "Petite correction : Past participle agreement with être."),
        ("alex", "Presque ! Past participle agreement with être."),
        ("luna", "Past participle agreement with être."),
    ])
    def test_correction_prefix_follows_persona_style(self, service, persona_id, prefix):
        response = service.generate_persona_response(persona_id, "Bonjour, hier je suis aller au cinéma avec mes amis")
        assert response.content.startswith(prefix)
        assert response.analysis.errors == ["Past participle agreement with être"]

    def test_seeded_rng_is_repeatable(self):
        first = EnhancedPersonaConversationService(rng=random.Random(7))
        second = EnhancedPersonaConversationService(rng=random.Random(7))
        message = "J'adore le sport le weekend !"
        replies = [first.generate_persona_response("alex", message).content for _ in range(5)]
        assert replies == [second.generate_persona_response("alex", message).content for _ in range(5)]

    def test_gentle_correction_replies_are_complete(self):
        service = EnhancedPersonaConversationService(rng=random.Random(0))
        replies = {service.generate_persona_response("maya", "I made a mistake").content for _ in range(10)}
        authored = persona_data.PERSONAS[0]["response_patterns"][0]["responses"]
        assert replies <= set(authored)
        assert not any("{" in reply or "}" in reply for reply in replies)

    def test_authored_replies_have_no_placeholders(self):
        for persona in persona_data.PERSONAS:
            for template in persona["response_patterns"]:
                assert not any("{" in reply for reply in template["responses"]), template["pattern"]


class TestPatternScoring:
    """Tests for candidate patterns and dialogue selection."""

    def test_candidates_require_score_four(self, loaded_service):
        analysis = _analysis()
        assert [p.scenario for p in loaded_service.find_relevant_patterns("alex", analysis)] == ["recreational"]
        assert [p.scenario for p in loaded_service.find_relevant_patterns("luna", analysis)] == ["dining"]

    def test_empty_candidates_use_fallback_pattern(self, service):
        analysis = _analysis(intent="question", topic="travel", language="spanish")
        pattern = service.select_best_pattern([], analysis)
        assert pattern.id == "fallback"
        assert pattern.dialogue_segments[0].content == (
            "Es una buena pregunta sobre travel. ¿Puede darme más detalles?"
        )

    def test_fallback_segment_for_empty_pattern(self, service, processed_patterns):
        analysis = _analysis(intent="greeting", language="english")
        empty = processed_patterns[0].model_copy(update={"dialogue_segments": []})
        segment = service.select_best_dialogue_segment(empty, analysis)
        assert segment.content == "Hello! How are you?"
        assert segment.speaker == "assistant"

    def test_best_segment_prefers_intent_and_vocabulary(self, service, processed_patterns):
        analysis = _analysis(intent="question", vocabulary=["jogging"])
        segment = service.select_best_dialogue_segment(processed_patterns[1], analysis)
        assert segment.content == "Est-ce que tu fais du jogging ce matin"


class TestRelevanceRanking:
    """Tests for the bonuses and cap applied to candidate patterns."""

    @pytest.mark.parametrize("mutate,bonus,overrides", [
        pytest.param(_english_dialogue, 3, {}, id="language"),
        pytest.param(_general_topic, 2, {}, id="topic"),
        pytest.param(_advanced, 1, {}, id="exact-difficulty"),
        pytest.param(_intermediate, 0.5, {}, id="adjacent-difficulty"),
        pytest.param(_greeting_context, 1, {}, id="intent-context"),
        pytest.param(_cultural, 1, {"topic": "culture"}, id="culture"),
        pytest.param(_advanced_vocabulary, 0.5, {}, id="vocabulary-level"),
    ])
    def test_bonus_size(self, service, sample_pattern_dict, mutate, bonus, overrides):
        analysis = _analysis(**{**_RANKING_ANALYSIS, **overrides})
        service.load_conversation_patterns([
            _pattern(sample_pattern_dict, "base", 8),
            _pattern(sample_pattern_dict, "ahead", 8 - bonus + 0.25, mutate),
            _pattern(sample_pattern_dict, "behind", 8 - bonus - 0.25, mutate),
        ])
        ranked = service.find_relevant_patterns("alex", analysis)
        assert [p.id for p in ranked] == ["ahead", "base", "behind"]

    def test_keeps_ten_best(self, service, sample_pattern_dict):
        service.load_conversation_patterns(
            [_pattern(sample_pattern_dict, f"p{i}", 4 + i * 0.5) for i in range(12)]
        )
        ranked = service.find_relevant_patterns("alex", _analysis(**_RANKING_ANALYSIS))
        assert [p.id for p in ranked] == [f"p{i}" for i in range(11, 1, -1)]

    def test_ties_keep_load_order(self, service, sample_pattern_dict):
        service.load_conversation_patterns([_pattern(sample_pattern_dict, pid) for pid in ("b", "a", "c")])
        ranked = service.find_relevant_patterns("alex", _analysis(**_RANKING_ANALYSIS))
        assert [p.id for p in ranked] == ["b", "a", "c"]


class TestBestPatternRanking:
    """Tests for choosing one pattern among the candidates."""

    @pytest.fixture
    def analysis(self):
        return _analysis(**{**_RANKING_ANALYSIS, "topic": "travel"})

    @pytest.mark.parametrize("mutate", [
        pytest.param(_english_dialogue, id="language"),
        pytest.param(_travel_topic, id="topic"),
        pytest.param(_advanced, id="difficulty"),
        pytest.param(_greeting_segment, id="segment-intent"),
    ])
    def test_single_factor_wins(self, service, sample_pattern_dict, analysis, mutate):
        base = _pattern(sample_pattern_dict, "base")
        better = _pattern(sample_pattern_dict, "better", mutate=mutate)
        assert service.select_best_pattern([base, better], analysis).id == "better"

    def test_language_outweighs_topic(self, service, sample_pattern_dict, analysis):
        topic = _pattern(sample_pattern_dict, "topic", mutate=_travel_topic)
        language = _pattern(sample_pattern_dict, "language", mutate=_english_dialogue)
        assert service.select_best_pattern([topic, language], analysis).id == "language"

    def test_topic_outweighs_difficulty(self, service, sample_pattern_dict, analysis):
        difficulty = _pattern(sample_pattern_dict, "difficulty", mutate=_advanced)
        topic = _pattern(sample_pattern_dict, "topic", mutate=_travel_topic)
        assert service.select_best_pattern([difficulty, topic], analysis).id == "topic"

    def test_tie_keeps_first(self, service, sample_pattern_dict, analysis):
        difficulty = _pattern(sample_pattern_dict, "difficulty", mutate=_advanced)
        segment = _pattern(sample_pattern_dict, "segment", mutate=_greeting_segment)
        assert service.select_best_pattern([difficulty, segment], analysis).id == "difficulty"

    def test_short_dialogue_preferred(self, service, sample_pattern_dict, analysis):
        long = _pattern(sample_pattern_dict, "long", mutate=_long_dialogue)
        short = _pattern(sample_pattern_dict, "short")
        assert service.select_best_pattern([long, short], analysis).id == "short"


class TestContextualDefaults:
    """Tests for the topic, intent and fallback lookup order."""

    def test_intent_reply_when_no_topic_reply(self, service):
        maya = service.get_persona_info("maya")
        reply = service.contextual_default_response(maya, _analysis(intent="greeting"))
        assert reply in persona_data.GENERAL_RESPONSES["french"]["maya"]["greeting"]

    def test_fallback_when_intent_has_no_reply(self, service):
        maya = service.get_persona_info("maya")
        reply = service.contextual_default_response(maya, _analysis(intent="request"))
        assert reply == persona_data.ULTIMATE_FALLBACKS["french"]

    def test_fallback_when_persona_has_no_language_table(self, service):
        luna = service.get_persona_info("luna")
        analysis = _analysis(intent="question", topic="sports", language="spanish")
        assert service.contextual_default_response(luna, analysis) == persona_data.ULTIMATE_FALLBACKS["spanish"]


class TestContentAppropriate:
    """Tests for the dialogue reuse filter."""

    def test_general_topic_accepts_reasonable_text(self):
        assert EnhancedPersonaConversationService.is_content_appropriate("Tu viens avec moi ce soir", _analysis())

    @pytest.mark.parametrize("content", ["Oui", "Bon, alors...", "mot " * 60, "deux mots"])
    def test_rejects_fragments(self, content):
        assert not EnhancedPersonaConversationService.is_content_appropriate(content, _analysis())

    def test_topic_must_appear(self):
        analysis = _analysis(topic="sports")
        assert EnhancedPersonaConversationService.is_content_appropriate("On fait du sport demain", analysis)
        assert not EnhancedPersonaConversationService.is_content_appropriate("On mange une crêpe ici", analysis)


class TestHelpers:
    """Tests for grammar and cultural helper functions."""

    def test_grammar_explanation(self):
        assert get_grammar_explanation("negation").startswith("La négation")
        assert get_grammar_explanation("gerund") == "Structure grammaticale: gerund"

    def test_grammar_examples(self):
        assert get_grammar_examples("spanish_questions", "spanish")[0] == "¿Cómo estás?"
        assert get_grammar_examples("present_tense", "klingon")[0] == "I am a student"
        assert get_grammar_examples("gerund", "french") == ["Example of gerund"]

    @pytest.mark.parametrize("notes,aspect", [
        ("French uses tu and vous", "Niveaux de formalité"),
        ("Traditional French breakfast includes coffee", "Culture culinaire française"),
        ("Reflects France's position in Europe", "Conscience européenne"),
        ("The French school system", "Système éducatif français"),
        ("Something else entirely", "Culture française"),
    ])
    def test_cultural_aspect(self, notes, aspect):
        assert extract_cultural_aspect(notes) == aspect
