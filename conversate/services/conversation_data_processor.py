"""
Transcript processing for the persona engine.

Turns timestamped transcript text (French or Spanish audio transcripts) into
ProcessedConversationPattern records: setting and topic, sentence-level
dialogue annotations, topic vocabulary, grammar structures, cultural notes,
and a relevance score for each built-in persona.

Everything here is keyword heuristics. No NLP library is involved, so the
output is deterministic apart from the id suffix.
"""

import json
import logging
import re
import uuid
from collections import Counter
from typing import Iterable, Optional, Union

from conversate.models import (
    CulturalElement,
    DialogueSegment,
    GrammarStructure,
    PatternContext,
    PersonaMapping,
    PersonaRelevance,
    ProcessedConversationPattern,
    RawConversationData,
    VocabularyHighlight,
    VocabularyPattern,
)

logger = logging.getLogger(__name__)

RELEVANT_SCORE = 6
MIN_TRANSCRIPT_LENGTH = 20

_TIMESTAMP_RE = re.compile(r"^(\d{2}:\d{2})")
# Title ends before the first whitespace followed by a lowercase letter
_CHAPTER_RE = re.compile(r"(?i:chapitre) (\d+) (.+?)(?=\s[a-z])")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NAME_RE = re.compile(r"\b([A-ZÀ-Ý][a-zà-ÿ]+)\b")

KNOWN_NAMES = {
    "Benoît", "Raphaël", "Bertrand", "Jérôme", "Virginie", "Alexandre",
    "Frédéric", "Émilie", "Gaspard", "Margot", "Bastien", "Véronique",
    "Isabelle", "Paul", "François", "Quentin",
}

# (transcript keywords, chapter keyword, setting, topic, communicative function)
# Evaluated in order, first match wins.
_CONTEXT_RULES = [
    (("cité universitaire", "examen", "cours"), "universitaire",
     "university", "academic_life", "academic_discussion"),
    (("géographie", "finlande", "helsinki"), "géographie",
     "educational", "geography_learning", "teaching_learning"),
    (("travaille", "société", "technicien", "travail"), None,
     "workplace", "professional_life", "professional_discussion"),
    (("sport", "jogging", "tennis", "basket"), None,
     "recreational", "sports_activities", "leisure_discussion"),
    (("vacances", "voyage", "italie", "hôtel"), None,
     "travel", "vacation_planning", "travel_planning"),
    (("club de gym", "musculation", "stretching", "régime"), None,
     "health_fitness", "health_wellness", "service_interaction"),
    (("famille", "enfants", "valise", "papa"), None,
     "family_home", "family_life", "family_interaction"),
    (("universidad", "examen", "clase", "estudios"), None,
     "university", "academic_life", "academic_discussion"),
    (("trabajo", "empresa", "negocio", "oficina"), None,
     "workplace", "professional_life", "professional_discussion"),
    (("vacaciones", "viaje", "hotel", "turismo"), None,
     "travel", "vacation_planning", "travel_planning"),
    (("comida", "restaurante", "desayuno", "cena"), None,
     "dining", "food_meals", "dining_discussion"),
    (("familia", "casa", "niños", "padre"), None,
     "family_home", "family_life", "family_interaction"),
    (("cultura", "tradición", "fiesta", "celebración"), None,
     "cultural", "cultural_discussion", "cultural_exchange"),
    (("petit-déjeuner", "café", "confiture", "dîner"), None,
     "dining", "food_meals", "dining_discussion"),
]

_DEFAULT_CONTEXT = ("general", "daily_conversation", "social_interaction")

# intent -> keywords, checked in order
_SEGMENT_INTENTS = [
    ("question", ("est-ce que", "où", "quand", "comment", "pourquoi", "qu'est-ce que")),
    ("request", ("je voudrais", "j'aimerais", "pouvez-vous", "s'il vous plaît")),
    ("response", ("oui", "non", "bien sûr", "d'accord")),
    ("greeting", ("bonjour", "salut", "au revoir")),
    ("politeness", ("merci", "excusez-moi", "désolé")),
    ("correction", ("mais non", "au contraire", "ce n'est pas")),
]

_SEGMENT_TONES = [
    ("enthusiastic", ("super", "génial", "excellent", "formidable", "quelle chance")),
    ("disappointed", ("dommage", "désolé", "malheureusement")),
    ("sympathetic", ("ma pauvre", "courage", "ne t'inquiète pas")),
    ("concerned", ("vraiment", "c'est difficile", "compliqué")),
]

# Case-sensitive: these tags describe how the sentence opens
_RESPONSE_PATTERN_TAGS = [
    ("yes_no_question", ("Est-ce que",)),
    ("wh_question", ("Où", "Quand", "Comment")),
    ("direct_answer", ("Oui", "Non")),
    ("uncertainty_expression", ("Je ne sais pas",)),
    ("polite_request", ("s'il vous plaît", "s'il te plaît")),
]

# topic -> [(word, definition, category)]
TOPIC_VOCABULARIES = {
    "academic_life": [
        ("cité universitaire", "university residence", "education"),
        ("examen", "exam", "education"),
        ("cours", "class/course", "education"),
        ("vacances", "vacation/holidays", "time"),
    ],
    "geography_learning": [
        ("géographie", "geography", "academic_subject"),
        ("capitale", "capital city", "geography"),
        ("pays", "country", "geography"),
        ("langues", "languages", "linguistics"),
    ],
    "professional_life": [
        ("travaille", "works", "work"),
        ("société", "company", "work"),
        ("technicien", "technician", "profession"),
        ("collègues", "colleagues", "work"),
    ],
    "sports_activities": [
        ("jogging", "jogging", "sports"),
        ("tennis", "tennis", "sports"),
        ("basket", "basketball", "sports"),
        ("natation", "swimming", "sports"),
    ],
    "cultural_discussion": [
        ("cultura", "culture", "social"),
        ("tradición", "tradition", "social"),
        ("fiesta", "party/celebration", "social"),
        ("celebración", "celebration", "social"),
    ],
    "vacation_planning": [
        ("vacaciones", "vacation", "travel"),
        ("viaje", "trip/journey", "travel"),
        ("hotel", "hotel", "travel"),
        ("turismo", "tourism", "travel"),
    ],
    "food_meals": [
        ("petit-déjeuner", "breakfast", "food"),
        ("café", "coffee", "food"),
        ("confiture", "jam", "food"),
        ("dîner", "dinner", "food"),
        ("comida", "food/meal", "food"),
        ("restaurante", "restaurant", "food"),
        ("desayuno", "breakfast", "food"),
        ("cena", "dinner", "food"),
    ],
}

_FRENCH_PRESENT_VERBS = ("suis", "es", "est", "sommes", "êtes", "sont", "ai", "as", "a", "avons", "avez", "ont")
_SPANISH_PRESENT_VERBS = (
    "soy", "eres", "es", "somos", "sois", "son",
    "estoy", "estás", "está", "estamos", "estáis", "están",
    "tengo", "tienes", "tiene", "tenemos", "tenéis", "tienen",
)

MAX_GRAMMAR_EXAMPLES = 3


def _sentences(text: str) -> list[str]:
    return _SENTENCE_SPLIT_RE.split(text)


def _first_match(text: str, rules) -> Optional[str]:
    for label, keywords in rules:
        if any(k in text for k in keywords):
            return label
    return None


class ConversationDataProcessor:
    """Extracts and accumulates conversational patterns from transcripts."""

    def __init__(self):
        self._patterns: list[ProcessedConversationPattern] = []

    # -- Parsing ------------------------------------------------------------

    def process_transcript_file(self, content: str) -> list[ProcessedConversationPattern]:
        """Parse a transcript file and process every segment.

        Produced patterns are returned and also accumulated on the processor,
        so the query methods see them.

        Args:
            content: Raw transcript text with HH:MM timestamped lines.

        Returns:
            Patterns produced by this call, in transcript order.
        """
        produced = []
        for raw in self.parse_transcript_file(content):
            pattern = self.process_segment(raw)
            if pattern is not None:
                produced.append(pattern)
        self._patterns.extend(produced)
        logger.info("Processed %d patterns from transcript", len(produced))
        return produced

    def parse_transcript_file(self, content: str) -> list[RawConversationData]:
        """Split transcript text into timestamped raw segments.

        A line starting with HH:MM opens a new segment. Non-empty lines
        after it are joined with a space. Lines before the first timestamp
        are dropped.
        """
        segments: list[RawConversationData] = []
        timestamp: Optional[str] = None
        chapter = ""
        transcript = ""

        def flush():
            if timestamp and transcript:
                segments.append(RawConversationData(
                    timestamp=timestamp, chapter=chapter, transcript=transcript.strip(),
                ))

        for line in content.split("\n"):
            stripped = line.strip()
            match = _TIMESTAMP_RE.match(stripped)
            if match:
                flush()
                timestamp = match.group(1)
                chapter = ""
                transcript = stripped[match.end():].strip()
                chapter_match = _CHAPTER_RE.search(transcript)
                if chapter_match:
                    chapter = f"Chapter {chapter_match.group(1)}: {chapter_match.group(2)}"
                    transcript = transcript[chapter_match.end():].strip()
            elif stripped and timestamp:
                transcript += " " + stripped

        flush()
        return segments

    def process_segment(self, raw: RawConversationData) -> Optional[ProcessedConversationPattern]:
        """Analyze one raw segment. Returns None for transcripts under 20 chars."""
        if len(raw.transcript) < MIN_TRANSCRIPT_LENGTH:
            return None

        context = self.analyze_context(raw)
        dialogue = self.extract_dialogue_segments(raw.transcript)
        vocabulary = self.extract_vocabulary_patterns(raw.transcript, context.topic)
        grammar = self.extract_grammar_structures(raw.transcript)
        cultural = self.extract_cultural_elements(raw.transcript, context)

        return ProcessedConversationPattern(
            id=f"conv_{raw.timestamp.replace(':', '_')}_{uuid.uuid4().hex[:12]}",
            scenario=context.setting,
            difficulty=self.assess_difficulty(raw.transcript, vocabulary, grammar),
            context=context,
            dialogue_segments=dialogue,
            vocabulary_patterns=vocabulary,
            grammar_structures=grammar,
            cultural_elements=cultural,
            persona_mapping=self.map_to_personas(context, dialogue),
        )

    # -- Context ------------------------------------------------------------

    def analyze_context(self, raw: RawConversationData) -> PatternContext:
        transcript = raw.transcript.lower()
        chapter = raw.chapter.lower()

        setting, topic, function = _DEFAULT_CONTEXT
        for keywords, chapter_kw, rule_setting, rule_topic, rule_function in _CONTEXT_RULES:
            if any(k in transcript for k in keywords) or (chapter_kw and chapter_kw in chapter):
                setting, topic, function = rule_setting, rule_topic, rule_function
                break

        return PatternContext(
            setting=setting,
            participants=self.extract_participants(raw.transcript),
            topic=topic,
            communicative_function=function,
        )

    def extract_participants(self, transcript: str) -> list[str]:
        """Known French first names in order of appearance, else generic roles."""
        names: list[str] = []
        for name in _NAME_RE.findall(transcript):
            if name in KNOWN_NAMES and name not in names:
                names.append(name)
        if names:
            return names

        if "papa" in transcript or "maman" in transcript:
            return ["parent", "child"]
        if "madame" in transcript or "monsieur" in transcript:
            return ["customer", "service_provider"]
        return ["speaker_a", "speaker_b"]

    # -- Dialogue -----------------------------------------------------------

    def extract_dialogue_segments(self, transcript: str) -> list[DialogueSegment]:
        sentences = [s.strip() for s in _sentences(transcript) if len(s.strip()) > 5]
        return [
            DialogueSegment(
                speaker=f"speaker_{(index % 2) + 1}",
                content=sentence,
                intent=self.analyze_intent(sentence),
                emotional_tone=self.analyze_emotional_tone(sentence),
                response_patterns=self.extract_response_patterns(sentence),
            )
            for index, sentence in enumerate(sentences)
        ]

    @staticmethod
    def analyze_intent(sentence: str) -> str:
        return _first_match(sentence.lower(), _SEGMENT_INTENTS) or "statement"

    @staticmethod
    def analyze_emotional_tone(sentence: str) -> str:
        return _first_match(sentence.lower(), _SEGMENT_TONES) or "neutral"

    @staticmethod
    def extract_response_patterns(sentence: str) -> list[str]:
        return [tag for tag, keywords in _RESPONSE_PATTERN_TAGS if any(k in sentence for k in keywords)]

    # -- Vocabulary and grammar ---------------------------------------------

    def extract_vocabulary_patterns(self, transcript: str, topic: str) -> list[VocabularyPattern]:
        words = self.get_topic_vocabulary(topic, transcript)
        if not words:
            return []
        return [VocabularyPattern(
            theme=topic,
            words=words,
            frequency=len(words),
            difficulty=self.assess_vocabulary_difficulty(words),
        )]

    def get_topic_vocabulary(self, topic: str, transcript: str) -> list[VocabularyHighlight]:
        lower = transcript.lower()
        return [
            VocabularyHighlight(
                word=word,
                definition=definition,
                category=category,
                usage=self.extract_usage_example(transcript, word),
            )
            for word, definition, category in TOPIC_VOCABULARIES.get(topic, [])
            if word.lower() in lower
        ]

    @staticmethod
    def extract_usage_example(transcript: str, word: str) -> str:
        """First sentence containing the word, or an empty string."""
        word = word.lower()
        for sentence in _sentences(transcript):
            if word in sentence.lower():
                return sentence.strip()
        return ""

    def extract_grammar_structures(self, transcript: str) -> list[GrammarStructure]:
        structures = []

        if "Est-ce que" in transcript:
            structures.append(GrammarStructure(
                pattern="est_ce_que_questions",
                examples=self._examples(transcript, r"est-ce que"),
                level="beginner",
                usage="Formal way to ask yes/no questions",
            ))

        if "ne" in transcript and "pas" in transcript:
            structures.append(GrammarStructure(
                pattern="negation_ne_pas",
                examples=self._examples(transcript, r"ne.*pas"),
                level="beginner",
                usage="Standard negation in French",
            ))

        if any(verb in transcript for verb in _FRENCH_PRESENT_VERBS):
            structures.append(GrammarStructure(
                pattern="present_tense",
                examples=self._verb_examples(transcript, _FRENCH_PRESENT_VERBS),
                level="beginner",
                usage="Present tense conjugation",
            ))

        if "¿" in transcript or "?" in transcript:
            structures.append(GrammarStructure(
                pattern="spanish_questions",
                # sentence splitting drops the closing "?", so match on the opener
                examples=self._examples(transcript, r"¿"),
                level="beginner",
                usage="Spanish question formation with inverted question marks",
            ))

        if any(verb in transcript for verb in _SPANISH_PRESENT_VERBS):
            structures.append(GrammarStructure(
                pattern="spanish_present_tense",
                examples=self._verb_examples(transcript, _SPANISH_PRESENT_VERBS),
                level="beginner",
                usage="Spanish present tense conjugation (ser/estar/tener)",
            ))

        if any(article in transcript for article in ("el ", "la ", "los ", "las ")):
            structures.append(GrammarStructure(
                pattern="spanish_articles",
                examples=self._examples(transcript, r"\b(el|la|los|las) \w+"),
                level="beginner",
                usage="Spanish definite articles (gender and number agreement)",
            ))

        return structures

    @staticmethod
    def _examples(transcript: str, pattern: str) -> list[str]:
        regex = re.compile(pattern, re.IGNORECASE)
        found = [s.strip() for s in _sentences(transcript) if regex.search(s)]
        return found[:MAX_GRAMMAR_EXAMPLES]

    @staticmethod
    def _verb_examples(transcript: str, verbs: Iterable[str]) -> list[str]:
        found = [
            s.strip() for s in _sentences(transcript)
            if any(f" {verb} " in s for verb in verbs)
        ]
        return found[:MAX_GRAMMAR_EXAMPLES]

    # -- Culture ------------------------------------------------------------

    def extract_cultural_elements(self, transcript: str, context: PatternContext) -> list[CulturalElement]:
        elements = []

        if "tu" in transcript and "vous" in transcript:
            elements.append(CulturalElement(
                aspect="formality_levels",
                description="French uses tu (informal) and vous (formal) to indicate relationship and respect levels",
                example="The conversation switches between tu and vous",
                significance="Understanding when to use formal vs informal address is crucial in French culture",
            ))

        if context.topic == "food_meals":
            elements.append(CulturalElement(
                aspect="french_breakfast_culture",
                description="Traditional French breakfast includes coffee/tea, bread with butter and jam",
                example="Pain avec du beurre et de la confiture",
                significance="French breakfast is typically lighter than American breakfast",
            ))

        if context.topic == "geography_learning":
            elements.append(CulturalElement(
                aspect="european_awareness",
                description="French education emphasizes European geography and cultural diversity",
                example="Discussion of European Union countries and languages",
                significance="Reflects France's position in European context",
            ))

        if "tú " in transcript and "usted " in transcript:
            elements.append(CulturalElement(
                aspect="spanish_formality",
                description="Spanish uses tú (informal) and usted (formal) for different levels of respect",
                example="Switching between tú and usted based on relationship",
                significance="Proper address forms are essential in Spanish-speaking cultures",
            ))

        if context.topic == "cultural_discussion" and ("fiesta" in transcript or "celebración" in transcript):
            elements.append(CulturalElement(
                aspect="spanish_celebrations",
                description="Spanish culture places great importance on family celebrations and community festivals",
                example="Discussion of traditional fiestas and family gatherings",
                significance="Family and community bonds are central to Spanish-speaking cultures",
            ))

        if context.setting == "workplace" and ("trabajo" in transcript or "empresa" in transcript):
            elements.append(CulturalElement(
                aspect="spanish_business_culture",
                description="Spanish business culture emphasizes personal relationships and respect for hierarchy",
                example="Professional discussions with formal address and personal connection",
                significance="Building personal relationships is crucial in Spanish business contexts",
            ))

        return elements

    # -- Persona mapping ----------------------------------------------------

    def map_to_personas(self, context: PatternContext, dialogue: list[DialogueSegment]) -> PersonaMapping:
        return PersonaMapping(**{
            persona: PersonaRelevance(
                score=self.calculate_persona_score(persona, context, dialogue),
                matching_traits=self._matching_traits(persona, context, dialogue),
                applicable_scenarios=self._applicable_scenarios(persona, context),
                adaptation_notes=self._adaptation_notes(persona, context),
            )
            for persona in ("maya", "alex", "luna")
        })

    @staticmethod
    def calculate_persona_score(persona: str, context: PatternContext, dialogue: list[DialogueSegment]) -> float:
        """Relevance of a pattern for a persona, capped at 10."""
        intents = {s.intent for s in dialogue}
        tones = {s.emotional_tone for s in dialogue}
        score = 0

        if persona == "maya":
            if context.setting in ("educational", "university"):
                score += 3
            if context.communicative_function == "teaching_learning":
                score += 3
            if "correction" in intents:
                score += 2
            if "sympathetic" in tones:
                score += 2
        elif persona == "alex":
            if context.setting in ("recreational", "family_home"):
                score += 3
            if context.communicative_function == "social_interaction":
                score += 3
            if "question" in intents:
                score += 2
            if "enthusiastic" in tones:
                score += 2
        elif persona == "luna":
            if context.setting in ("travel", "dining"):
                score += 3
            if "culture" in context.topic or "food" in context.topic:
                score += 3
            if "statement" in intents:
                score += 2
            if len(context.participants) > 2:
                score += 1

        return float(min(score, 10))

    @staticmethod
    def _matching_traits(persona: str, context: PatternContext, dialogue: list[DialogueSegment]) -> list[str]:
        traits = []
        if persona == "maya":
            if any(s.emotional_tone == "sympathetic" for s in dialogue):
                traits.append("empathetic")
            if any(s.intent == "correction" for s in dialogue):
                traits.append("corrective")
            if context.communicative_function == "teaching_learning":
                traits.append("educational")
        elif persona == "alex":
            if any(s.emotional_tone == "enthusiastic" for s in dialogue):
                traits.append("energetic")
            if context.setting == "recreational":
                traits.append("sporty")
            if any(s.intent == "question" for s in dialogue):
                traits.append("curious")
        elif persona == "luna":
            if context.setting == "travel":
                traits.append("worldly")
            if "food" in context.topic:
                traits.append("culinary")
            if len(dialogue) > 5:
                traits.append("conversational")
        return traits

    @staticmethod
    def _applicable_scenarios(persona: str, context: PatternContext) -> list[str]:
        if persona == "maya":
            scenarios = ["grammar_lessons", "vocabulary_building", "error_correction"]
            if context.setting == "university":
                scenarios.append("academic_conversation")
        elif persona == "alex":
            scenarios = ["casual_chat", "daily_activities", "social_interactions"]
            if context.setting == "recreational":
                scenarios.append("sports_discussion")
        else:
            scenarios = ["cultural_exploration", "travel_planning", "food_discussion"]
            if context.setting == "travel":
                scenarios.append("vacation_conversation")
        return scenarios

    @staticmethod
    def _adaptation_notes(persona: str, context: PatternContext) -> list[str]:
        if persona == "maya":
            notes = ["Use patient and encouraging tone", "Provide clear explanations for corrections"]
            if context.setting == "university":
                notes.append("Include academic vocabulary")
        elif persona == "alex":
            notes = ["Maintain casual and friendly tone", "Use contemporary expressions"]
            if context.setting == "recreational":
                notes.append("Include sports terminology")
        else:
            notes = ["Emphasize cultural context", "Provide background information"]
            if context.setting == "travel":
                notes.append("Include practical travel tips")
        return notes

    # -- Difficulty ---------------------------------------------------------

    @staticmethod
    def assess_difficulty(
        transcript: str,
        vocabulary: list[VocabularyPattern],
        grammar: list[GrammarStructure],
    ) -> str:
        level_points = {"intermediate": 1, "advanced": 2}
        score = sum(level_points.get(v.difficulty, 0) for v in vocabulary)
        score += sum(level_points.get(g.level, 0) for g in grammar)

        sentences = _sentences(transcript)
        avg_sentence_length = sum(len(s.strip().split(" ")) for s in sentences) / len(sentences)
        if avg_sentence_length > 15:
            score += 2
        elif avg_sentence_length > 10:
            score += 1

        if score >= 6:
            return "advanced"
        if score >= 3:
            return "intermediate"
        return "beginner"

    @staticmethod
    def assess_vocabulary_difficulty(words: list[VocabularyHighlight]) -> str:
        if not words:
            return "beginner"
        avg_length = sum(len(w.word) for w in words) / len(words)
        if avg_length > 12:
            return "advanced"
        if avg_length > 8:
            return "intermediate"
        return "beginner"

    # -- Queries ------------------------------------------------------------

    def get_processed_patterns(self) -> list[ProcessedConversationPattern]:
        return list(self._patterns)

    def get_patterns_for_persona(self, persona: str) -> list[ProcessedConversationPattern]:
        result = []
        for pattern in self._patterns:
            relevance = pattern.persona_mapping.get(persona)
            if relevance is not None and relevance.score >= RELEVANT_SCORE:
                result.append(pattern)
        return result

    def get_patterns_by_difficulty(self, difficulty: str) -> list[ProcessedConversationPattern]:
        return [p for p in self._patterns if p.difficulty == difficulty]

    def get_patterns_by_topic(self, topic: str) -> list[ProcessedConversationPattern]:
        return [p for p in self._patterns if topic in p.context.topic or topic in p.scenario]

    # -- Persistence --------------------------------------------------------

    def load_patterns(
        self,
        data: Union[str, list],
        replace: bool = False,
    ) -> list[ProcessedConversationPattern]:
        """Load previously processed patterns.

        Args:
            data: A JSON array string, or a list of dicts / pattern models.
            replace: Drop already accumulated patterns first.

        Returns:
            The loaded patterns.

        Raises:
            ValueError: If the JSON is not an array.
            pydantic.ValidationError: If an entry does not match the schema.
        """
        if isinstance(data, str):
            data = json.loads(data)
        if not isinstance(data, list):
            raise ValueError("Pattern data must be a JSON array")

        loaded = [ProcessedConversationPattern.model_validate(item) for item in data]
        if replace:
            self._patterns = []
        self._patterns.extend(loaded)
        logger.info("Loaded %d processed patterns", len(loaded))
        return loaded

    def dump_patterns(self, patterns: Optional[list[ProcessedConversationPattern]] = None) -> str:
        """Serialize patterns (all accumulated ones by default) to a JSON array."""
        if patterns is None:
            patterns = self._patterns
        return json.dumps([p.model_dump() for p in patterns], ensure_ascii=False, indent=2)

    def processing_stats(self) -> dict:
        patterns = self._patterns
        return {
            "total_patterns": len(patterns),
            "by_difficulty": dict(Counter(p.difficulty for p in patterns)),
            "by_scenario": dict(Counter(p.scenario for p in patterns)),
            "vocabulary_items": sum(len(v.words) for p in patterns for v in p.vocabulary_patterns),
            "grammar_structures": sum(len(p.grammar_structures) for p in patterns),
            "cultural_elements": sum(len(p.cultural_elements) for p in patterns),
            "persona_matches": {
                persona: len(self.get_patterns_for_persona(persona))
                for persona in ("maya", "alex", "luna")
            },
        }
