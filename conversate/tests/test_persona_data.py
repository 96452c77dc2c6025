"""
Tests for conversate.persona_data module.

Verifies:
- The three personas are authored with starters and templates
- Reply tables are keyed by language and persona ids that exist
- Format templates only use their documented placeholders
"""

from conversate.persona_data import (
    CORRECTION_TEMPLATES,
    FALLBACK_TEMPLATES,
    GENERAL_RESPONSES,
    PERSONA_IDS,
    PERSONA_SUGGESTIONS,
    PERSONAS,
    TOPIC_RESPONSES,
    ULTIMATE_FALLBACKS,
)

LANGUAGES = {"french", "spanish", "english"}


class TestPersonas:
    """Tests for the authored persona configurations."""

    def test_three_personas(self):
        assert PERSONA_IDS == ("maya", "alex", "luna")

    def test_correction_styles(self):
        """Maya is gentle, Alex encouraging, Luna direct."""
        styles = {p["id"]: p["base_personality"]["correction_style"] for p in PERSONAS}
        assert styles == {"maya": "gentle", "alex": "encouraging", "luna": "direct"}

    def test_every_persona_has_templates_and_starters(self):
        for persona in PERSONAS:
            assert persona["response_patterns"], persona["id"]
            assert persona["conversation_starters"], persona["id"]
            for template in persona["response_patterns"]:
                assert template["triggers"]
                assert template["responses"]


class TestReplyTables:
    """Tests for the contextual default reply tables."""

    def test_tables_use_known_languages_and_personas(self):
        for table in (TOPIC_RESPONSES, GENERAL_RESPONSES):
            assert set(table) <= LANGUAGES
            for by_persona in table.values():
                assert set(by_persona) <= set(PERSONA_IDS)

    def test_reply_lists_not_empty(self):
        for table in (TOPIC_RESPONSES, GENERAL_RESPONSES):
            for by_persona in table.values():
                for replies in by_persona.values():
                    for candidates in replies.values():
                        assert candidates

    def test_ultimate_fallback_for_every_language(self):
        assert set(ULTIMATE_FALLBACKS) == LANGUAGES

    def test_fallback_templates_have_default(self):
        for language, templates in FALLBACK_TEMPLATES.items():
            assert "default" in templates
            assert templates["statement"].format(topic="sports")

    def test_correction_templates_cover_styles(self):
        for templates in CORRECTION_TEMPLATES.values():
            assert set(templates) == {"gentle", "encouraging", "direct"}
            assert "oops" in templates["direct"].format(error="oops")

    def test_persona_suggestions(self):
        assert set(PERSONA_SUGGESTIONS) == set(PERSONA_IDS)
