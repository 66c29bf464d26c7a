from __future__ import annotations

import re

# Very small, local-first entity extraction:
# - Capitalized words: "Apple", "California"
# - Multi-word Capitalized sequences (2-4 words): "Carl Jung", "New York"
# - All-caps acronyms: "NLP", "NASA"
_NON_WORD_RE = re.compile(r"[^\w]")
_CAPITALIZED_RE = re.compile(r"^[A-Z][a-z]+")
_PHRASE_RE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,3}\b")
_ACRONYM_RE = re.compile(r"\b[A-Z]{2,}\b")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

# Titlecase words that are rarely meaningful entities alone (mostly sentence
# starters): articles, prepositions, conjunctions, auxiliaries and light verbs.
_STOP = {
    "The", "This", "That", "These", "Those", "A", "An", "And", "Or", "But",
    "In", "On", "At", "To", "For", "Of", "With", "By", "From", "Up", "About",
    "Into", "Through", "During", "Before", "After", "Above", "Below", "Between",
    "Among", "Under", "Over", "Since", "Until", "While", "Because", "Although",
    "If", "When", "Where", "How", "Why", "What", "Which", "Who", "Whom", "Whose",
    "Can", "Could", "May", "Might", "Must", "Should", "Would", "Will", "Shall",
    "Do", "Does", "Did", "Have", "Has", "Had", "Be", "Is", "Are", "Was", "Were",
    "Been", "Being", "Get", "Got", "Getting", "Make", "Made", "Making", "Take",
    "Took", "Taking", "Come", "Came", "Coming", "Go", "Went", "Going", "See",
    "Saw", "Seeing", "Know", "Knew", "Knowing", "Think", "Thought", "Thinking",
    "Say", "Said", "Saying", "Tell", "Told", "Telling", "Ask", "Asked", "Asking",
    "Work", "Worked", "Working", "Play", "Played", "Playing", "Run", "Ran", "Running",
}

# Lowercase closed-class words skipped by the frequency pass. Only words longer
# than 4 characters reach this check, the short ones are kept for parity with
# the titlecase list above.
_CONCEPT_STOP = {
    "the", "this", "that", "with", "from", "they", "have", "been", "were",
    "will", "would", "could", "should", "might", "must", "shall", "does", "did",
    "has", "had", "are", "was", "for", "and", "but", "not", "you", "can", "may",
    "get", "got", "make", "take", "come", "went", "see", "know", "say", "tell",
    "ask", "work", "play", "run", "about", "there", "their", "which", "these",
    "those", "other", "where", "while",
}

_EDGE_PUNCT = "\"'`.,;:!?()[]{}<>*_-–—“”‘’"


def norm_entity(name: str) -> str:
    # Normalize for stable matching.
    return re.sub(r"\s+", " ", name.strip()).lower()


def slugify(label: str) -> str:
    return re.sub(r"\s+", "-", label.strip().lower())


def split_sentences(text: str) -> list[str]:
    return _SENTENCE_SPLIT_RE.split(text)


def extract_entities(text: str, *, min_chars: int = 3) -> list[str]:
    """Return candidate entities in first-seen order, without duplicates.

    Three heuristic passes are unioned: capitalized single words, 2-4 word
    capitalized phrases within a sentence, and 2-6 letter acronyms. Identity is
    the exact string, so "Apple" and "Apple Inc" are separate candidates.
    Nothing shorter than ``min_chars`` is returned.
    """
    found: dict[str, None] = {}

    def add(candidate: str) -> None:
        if len(candidate) >= min_chars:
            found.setdefault(candidate, None)

    for word in text.split():
        cleaned = _NON_WORD_RE.sub("", word)
        if len(cleaned) > 2 and _CAPITALIZED_RE.match(cleaned) and cleaned not in _STOP:
            add(cleaned)

    for sentence in split_sentences(text):
        for m in _PHRASE_RE.finditer(sentence):
            phrase = m.group(0).strip()
            if len(phrase) > 5 and phrase.split()[0] not in _STOP:
                add(phrase)

    for m in _ACRONYM_RE.finditer(text):
        term = m.group(0)
        if len(term) <= 6:
            add(term)

    return list(found)


def word_frequencies(text: str) -> dict[str, int]:
    """Lowercase word counts for words longer than 4 characters, in first-seen order."""
    counts: dict[str, int] = {}
    for raw in text.lower().split():
        word = raw.strip(_EDGE_PUNCT)
        if len(word) <= 4 or word in _CONCEPT_STOP:
            continue
        counts[word] = counts.get(word, 0) + 1
    return counts


def top_concepts(freqs: dict[str, int], *, limit: int = 10) -> list[str]:
    # sorted() is stable, so ties keep first-seen order.
    ranked = sorted(freqs.items(), key=lambda kv: kv[1], reverse=True)
    return [word for word, _ in ranked[:limit]]
