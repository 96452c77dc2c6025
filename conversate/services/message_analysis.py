"""
Keyword-based analysis of learner messages.

Pure functions over French, Spanish and English keyword lists. The persona
engine runs analyze_user_message() on every turn and scores templates and
processed patterns against the result.
"""

import re

from conversate.models import MessageAnalysis, ProcessedConversationPattern

# ---------------------------------------------------------------------------
# Language detection
# ---------------------------------------------------------------------------

FRENCH_INDICATORS = [
    "je", "tu", "il", "elle", "nous", "vous", "ils", "elles",
    "le", "la", "les", "un", "une", "des",
    "de", "du", "de la", "à", "au", "aux",
    "est", "sont", "était", "avez", "avoir", "être",
    "bonjour", "merci", "excusez-moi", "au revoir", "comment allez-vous",
    "très", "bien", "de rien", "désolé", "pardon", "s'il vous plaît",
    "français", "france", "géographie", "université", "comprends",
    "voudrais", "pouvez", "différence", "petit-déjeuner",
    "qu'est-ce que", "est-ce que", "c'est", "n'est", "qu'", "où", "quand",
]

SPANISH_INDICATORS = [
    "yo", "tú", "él", "ella", "nosotros", "vosotros", "ellos", "ellas",
    "el", "la", "los", "las", "un", "una", "unos", "unas",
    "de", "del", "de la", "de los", "de las", "a", "al", "a la",
    "es", "son", "era", "tenéis", "tener", "ser", "estar", "está", "están",
    "hola", "gracias", "por favor", "buenos días", "buenas tardes",
    "muy", "bien", "de nada", "lo siento", "perdón", "disculpe",
    "español", "españa", "geografía", "universidad", "comprendo",
    "quisiera", "puede", "diferencia", "desayuno",
    "qué", "cómo", "dónde", "cuándo", "por qué", "¿", "¡",
]

ENGLISH_INDICATORS = [
    "i", "you", "he", "she", "we", "they",
    "the", "a", "an", "this", "that", "these", "those",
    "is", "are", "was", "were", "have", "has", "had",
    "hello", "thank you", "please", "good morning", "good afternoon",
    "very", "well", "you're welcome", "sorry", "excuse me",
    "english", "geography", "university", "understand",
    "would like", "can you", "difference", "breakfast",
    "what", "how", "where", "when", "why",
]

_ENGLISH_AUXILIARIES_RE = re.compile(r"\b(do|does|did|will|would|could|should)\b")
_FRENCH_ACCENTS_RE = re.compile(r"[àâäéèêëîïôöùûüÿç]")
_SPANISH_ACCENTS_RE = re.compile(r"[áéíóúñü]")


def _indicator_score(text: str, indicators: list[str]) -> int:
    # Substring hits, longer indicators weigh more
    return sum(2 if len(ind) > 3 else 1 for ind in indicators if ind in text)


def language_scores(message: str) -> dict[str, int]:
    """Raw french/spanish/english scores behind detect_language()."""
    lower = message.lower()
    french = _indicator_score(lower, FRENCH_INDICATORS)
    spanish = _indicator_score(lower, SPANISH_INDICATORS)
    english = _indicator_score(lower, ENGLISH_INDICATORS)

    if "qu'est-ce que" in lower or "est-ce que" in lower:
        french += 5
    if "¿" in lower or "¡" in lower:
        spanish += 5
    if _ENGLISH_AUXILIARIES_RE.search(lower):
        english += 3
    if _FRENCH_ACCENTS_RE.search(lower):
        french += 3
    if _SPANISH_ACCENTS_RE.search(lower):
        spanish += 3

    return {"french": french, "spanish": spanish, "english": english}


def detect_language(message: str) -> str:
    """Return "french", "spanish" or "english". Defaults to French."""
    scores = language_scores(message)
    french, spanish, english = scores["french"], scores["spanish"], scores["english"]

    if french > spanish and french > english and french > 0:
        return "french"
    if spanish > english and spanish > 0:
        return "spanish"
    if english > 0:
        return "english"
    return "french"


# ---------------------------------------------------------------------------
# Intent, topic, tone
# ---------------------------------------------------------------------------

# Checked in this order; first intent with any keyword hit wins
INTENT_KEYWORDS = [
    ("question", {
        "french": ["?", "est-ce que", "où", "quand", "comment", "pourquoi", "qu'est-ce que"],
        "spanish": ["?", "¿", "dónde", "cuándo", "cómo", "por qué", "qué", "cuál"],
        "english": ["?", "where", "when", "how", "why", "what", "which"],
    }),
    ("request", {
        "french": ["je voudrais", "pouvez-vous", "pourriez-vous", "j'aimerais"],
        "spanish": ["me gustaría", "podría", "puede", "quisiera"],
        "english": ["could you", "would you", "can you", "i would like"],
    }),
    ("politeness", {
        "french": ["merci", "excusez-moi", "s'il vous plaît", "pardon"],
        "spanish": ["gracias", "por favor", "disculpe", "perdón"],
        "english": ["thank you", "please", "excuse me", "sorry"],
    }),
    ("greeting", {
        "french": ["bonjour", "salut", "au revoir", "bonsoir"],
        "spanish": ["hola", "buenos días", "buenas tardes", "adiós"],
        "english": ["hello", "good morning", "good afternoon", "goodbye"],
    }),
]

TOPIC_KEYWORDS = [
    ("sports", {
        "french": ["sport", "tennis", "football", "jogging", "natation", "basket"],
        "spanish": ["deporte", "fútbol", "tenis", "natación", "baloncesto", "correr"],
        "english": ["sport", "tennis", "football", "swimming", "basketball", "running"],
    }),
    ("food", {
        "french": ["manger", "restaurant", "cuisine", "déjeuner", "dîner", "café", "pain"],
        "spanish": ["comer", "restaurante", "cocina", "almuerzo", "cena", "café", "pan"],
        "english": ["eat", "restaurant", "food", "lunch", "dinner", "coffee", "bread"],
    }),
    ("travel", {
        "french": ["voyage", "vacances", "partir", "visiter", "hôtel", "avion"],
        "spanish": ["viaje", "vacaciones", "viajar", "visitar", "hotel", "avión"],
        "english": ["travel", "vacation", "trip", "visit", "hotel", "airplane"],
    }),
    ("work", {
        "french": ["travail", "bureau", "collègue", "entreprise", "métier", "patron"],
        "spanish": ["trabajo", "oficina", "colega", "empresa", "profesión", "jefe"],
        "english": ["work", "office", "colleague", "company", "job", "boss"],
    }),
    ("family", {
        "french": ["famille", "parents", "enfants", "frère", "sœur", "père", "mère"],
        "spanish": ["familia", "padres", "niños", "hermano", "hermana", "padre", "madre"],
        "english": ["family", "parents", "children", "brother", "sister", "father", "mother"],
    }),
    ("education", {
        "french": ["école", "université", "cours", "étudier", "apprendre", "professeur"],
        "spanish": ["escuela", "universidad", "clase", "estudiar", "aprender", "profesor"],
        "english": ["school", "university", "class", "study", "learn", "teacher"],
    }),
    ("shopping", {
        "french": ["acheter", "magasin", "prix", "cher", "vendre", "argent"],
        "spanish": ["comprar", "tienda", "precio", "caro", "vender", "dinero"],
        "english": ["buy", "store", "price", "expensive", "sell", "money"],
    }),
    ("culture", {
        "french": ["culture", "tradition", "histoire", "art", "musique", "festival"],
        "spanish": ["cultura", "tradición", "historia", "arte", "música", "festival"],
        "english": ["culture", "tradition", "history", "art", "music", "festival"],
    }),
]


def _first_keyword_match(text: str, table, default: str) -> str:
    for label, by_language in table:
        for keywords in by_language.values():
            if any(k in text for k in keywords):
                return label
    return default


def detect_intent(message_lower: str) -> str:
    """question > request > politeness > greeting, else statement."""
    return _first_keyword_match(message_lower, INTENT_KEYWORDS, "statement")


def detect_topic(message_lower: str) -> str:
    return _first_keyword_match(message_lower, TOPIC_KEYWORDS, "general")


def detect_emotional_tone(message_lower: str) -> str:
    if any(k in message_lower for k in ("super", "génial", "excellent")):
        return "enthusiastic"
    if any(k in message_lower for k in ("difficile", "problème", "ne comprends pas")):
        return "confused"
    if "merci" in message_lower or "content" in message_lower:
        return "positive"
    return "neutral"


# ---------------------------------------------------------------------------
# Difficulty, errors, vocabulary, complexity
# ---------------------------------------------------------------------------

def assess_message_difficulty(message: str) -> str:
    words = len(message.split(" "))
    avg_word_length = len(re.sub(r"\s", "", message)) / words
    has_complex_grammar = "que" in message or "dont" in message or "si" in message

    if words > 15 or avg_word_length > 8 or has_complex_grammar:
        return "advanced"
    if words > 8 or avg_word_length > 6:
        return "intermediate"
    return "beginner"


# substring -> explanation shown to the learner
KNOWN_ERRORS = [
    ("je suis aller", "Past participle agreement with être"),
    ("j'ai allé", "Incorrect auxiliary verb - should use être"),
]


def detect_potential_errors(message: str) -> list[str]:
    return [explanation for needle, explanation in KNOWN_ERRORS if needle in message]


def extract_vocabulary(message: str) -> list[str]:
    return [word for word in message.split(" ") if len(word) > 3]


_COMPLEXITY_PATTERNS = [
    # subordinate clauses
    re.compile(r"\b(que|qui|dont|où|si|quand|parce que|bien que|aunque|mientras|porque)\b", re.IGNORECASE),
    # conditionals
    re.compile(r"\b(si|if|would|could|should|podría|debería|sería)\b", re.IGNORECASE),
    # subjunctive
    re.compile(r"\b(que.*[aeiou]e|que.*[aeiou]es|que.*[aeiou]en)\b", re.IGNORECASE),
    # complex tenses
    re.compile(r"\b(avais|était|serait|habría|había|sería)\b", re.IGNORECASE),
]


def assess_grammatical_complexity(message: str) -> str:
    hits = sum(len(pattern.findall(message)) for pattern in _COMPLEXITY_PATTERNS)
    sentence_count = len(re.split(r"[.!?]+", message))
    avg_words_per_sentence = len(message.split(" ")) / sentence_count

    if hits >= 3 or avg_words_per_sentence > 15:
        return "complex"
    if hits >= 1 or avg_words_per_sentence > 8:
        return "moderate"
    return "simple"


def analyze_user_message(message: str) -> MessageAnalysis:
    lower = message.lower()
    return MessageAnalysis(
        intent=detect_intent(lower),
        topic=detect_topic(lower),
        difficulty=assess_message_difficulty(message),
        emotional_tone=detect_emotional_tone(lower),
        errors=detect_potential_errors(message),
        vocabulary=extract_vocabulary(message),
        language=detect_language(message),
        complexity=assess_grammatical_complexity(message),
    )


# ---------------------------------------------------------------------------
# Pattern language
# ---------------------------------------------------------------------------

_PATTERN_SPANISH_INDICATORS = ["es", "son", "está", "están", "muy", "pero", "con", "por", "para", "que", "qué", "cómo"]
_PATTERN_FRENCH_INDICATORS = ["est", "sont", "très", "mais", "avec", "pour", "que", "qu'", "comment", "où"]


def detect_pattern_language(pattern: ProcessedConversationPattern) -> str:
    """Guess the language of a processed pattern from its dialogue text."""
    text = " ".join(segment.content for segment in pattern.dialogue_segments).lower()
    spanish = sum(1 for ind in _PATTERN_SPANISH_INDICATORS if ind in text)
    french = sum(1 for ind in _PATTERN_FRENCH_INDICATORS if ind in text)

    if spanish > french and spanish > 2:
        return "spanish"
    if french > 2:
        return "french"
    return "english"
