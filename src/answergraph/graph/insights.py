from __future__ import annotations

from .models import Cluster, Insights, Node


CONTEXT_QUESTION = "What additional context would help understand these relationships?"

# Static exploration prompts: not derived from the text.
ENTITY_GAPS = [
    "Consider exploring the historical context of these entities",
    "Additional relationships between entities could be investigated",
    "The temporal aspects of these connections might provide insights",
]
CONCEPT_GAPS = [
    "Consider exploring the historical context of these concepts",
    "Additional relationships between key entities could provide insights",
    "The temporal aspects of these connections might reveal patterns",
]

# (trigger words, question)
_KEYWORD_QUESTIONS = [
    (("conclusion", "summary"), "What are the key implications of these findings?"),
    (("data", "results"), "What additional data would strengthen this analysis?"),
    (("recommend", "suggest"), "What are the potential risks of implementing these recommendations?"),
]
_GENERIC_QUESTIONS = [
    "How does this relate to other parts of the document?",
    "What questions does this raise for further investigation?",
]

MAX_CLUSTER_CONCEPTS = 5


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _triggered(text: str) -> list[str]:
    return [q for words, q in _KEYWORD_QUESTIONS if any(w in text for w in words)]


def keyword_questions(text: str, *, limit: int = 3) -> list[str]:
    """Keyword-triggered questions followed by generic ones, at most ``limit``."""
    return (_triggered(text) + _GENERIC_QUESTIONS)[:limit]


def _bucket(cid: int, label: str, concepts: list[str]) -> Cluster:
    return Cluster(id=cid, label=label, concepts=concepts[:MAX_CLUSTER_CONCEPTS])


def generate_insights(nodes: list[Node], text: str) -> Insights:
    """Insights for a graph built from knowledge-graph hits.

    The pairing question names the two highest-scoring nodes (ties keep graph
    order) and is omitted when there are fewer than two.
    """
    questions: list[str] = []
    top = sorted(nodes, key=lambda n: n.score, reverse=True)[:2]
    if len(top) == 2:
        questions.append(f"What is the relationship between {top[0].label} and {top[1].label}?")
    questions.append("How do these entities connect to the main topic?")
    questions.append(CONTEXT_QUESTION)

    buckets = [
        _bucket(0, "People & Organizations", [n.label for n in nodes if n.cluster <= 1]),
        _bucket(1, "Places & Events", [n.label for n in nodes if 2 <= n.cluster <= 3]),
        _bucket(2, "Concepts & Things", [n.label for n in nodes if n.cluster >= 4]),
    ]
    return Insights(
        gaps=list(ENTITY_GAPS),
        questions=questions,
        clusters=[b for b in buckets if b.concepts],
    )


def fallback_insights(entities: list[str], concepts: list[str], text: str) -> Insights:
    """Insights for the heuristic graph; ``text`` drives the keyword questions."""
    questions: list[str] = []
    if entities:
        questions.append(f"How do {' and '.join(entities[:2])} relate to the main topic?")
    if concepts:
        questions.append(f"What are the implications of {' and '.join(concepts[:2])}?")
    questions.extend(_triggered(text))
    questions.append(CONTEXT_QUESTION)

    buckets = [
        _bucket(0, "Key Entities", entities),
        _bucket(1, "Main Concepts", concepts),
    ]
    return Insights(
        gaps=list(CONCEPT_GAPS),
        questions=_dedupe(questions),
        clusters=[b for b in buckets if b.concepts],
    )
