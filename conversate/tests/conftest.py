"""
Shared test fixtures for Conversate tests.

Provides the test client, fresh shared services, and sample transcript and
pattern data used across all test modules.
"""

import random

import pytest
from fastapi.testclient import TestClient


SAMPLE_TRANSCRIPT = """Conversations en français
Notes before the first timestamp are ignored.

00:00 chapitre 1 La Géographie bonjour Benoît ! Est-ce que tu connais la capitale de la Finlande ?
Oui, c'est Helsinki. Je ne suis pas sûr des langues du pays. Ne t'inquiète pas, courage !

01:30 chapitre 2 Au Club salut Margot ! Est-ce que tu fais du jogging ce matin ?
Non, je fais du tennis avec Paul. C'est super, quelle chance ! Et toi, tu joues au basket ?

03:05 Le petit-déjeuner est servi. Vous voulez du café avec de la confiture ?
Bien sûr, merci madame. Je prends aussi du pain pour le dîner.

04:10 Trop court.
"""


@pytest.fixture(autouse=True)
def mock_mode_env(monkeypatch):
    """Ensure MOCK_MODE=true and no Supabase credentials for all tests."""
    monkeypatch.setenv("MOCK_MODE", "true")
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "")
    monkeypatch.setenv("PATTERNS_PATH", "")


@pytest.fixture
def test_client():
    """Create a FastAPI TestClient with fresh shared services."""
    from conversate.main import app
    from conversate.routes.conversations import reset_conversation_store
    from conversate.routes.patterns import reset_processor
    from conversate.routes.personas import reset_persona_service

    reset_conversation_store()
    reset_persona_service()
    reset_processor()
    return TestClient(app)


@pytest.fixture
def sample_transcript():
    """Three usable timestamped segments plus one too short to process."""
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def processor():
    from conversate.services.conversation_data_processor import ConversationDataProcessor
    return ConversationDataProcessor()


@pytest.fixture
def processed_patterns(processor, sample_transcript):
    """Patterns produced from the sample transcript."""
    return processor.process_transcript_file(sample_transcript)


@pytest.fixture
def rng():
    """Seeded RNG so template choice is repeatable."""
    return random.Random(1234)


@pytest.fixture
def sample_pattern_dict():
    """Return a minimal valid ProcessedConversationPattern dict."""
    relevance = {
        "score": 8,
        "matching_traits": ["curious"],
        "applicable_scenarios": ["casual_chat"],
        "adaptation_notes": ["Maintain casual and friendly tone"],
    }
    return {
        "id": "conv_00_00_test",
        "scenario": "recreational",
        "difficulty": "beginner",
        "context": {
            "setting": "recreational",
            "participants": ["Margot", "Paul"],
            "topic": "sports_activities",
            "communicative_function": "leisure_discussion",
        },
        "dialogue_segments": [
            {
                "speaker": "speaker_1",
                "content": "Est-ce que tu fais du tennis avec tes amis",
                "intent": "question",
                "emotional_tone": "neutral",
                "response_patterns": ["yes_no_question"],
            },
        ],
        "vocabulary_patterns": [
            {
                "theme": "sports_activities",
                "words": [{"word": "tennis", "definition": "tennis", "category": "sports", "usage": ""}],
                "frequency": 1,
                "difficulty": "beginner",
            },
        ],
        "grammar_structures": [],
        "cultural_elements": [],
        "persona_mapping": {"maya": {**relevance, "score": 2}, "alex": relevance, "luna": {**relevance, "score": 0}},
    }
