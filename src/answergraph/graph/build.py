"""Graph synthesis: turn candidates into sized, colored, clustered nodes and edges.

Two node builders share one edge rule. The enriched builder works from typed,
scored knowledge-graph hits; the fallback builder works from extracted
entities plus frequent words. Edges come from sentence co-occurrence, plus a
randomly sparsified share of same-cluster pairs.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from itertools import combinations
from typing import Callable

from .extract import extract_entities, norm_entity, slugify, split_sentences, top_concepts, word_frequencies
from .models import Edge, Graph, KGEntity, Node


# Returns a float in [0, 1); injected so tests can pin same-cluster edges.
Decide = Callable[[], float]

GRAY = "#6B7280"

_TYPE_COLORS = {
    "Person": "#3B82F6",
    "Organization": "#10B981",
    "Place": "#F59E0B",
    "Thing": "#8B5CF6",
    "Event": "#EF4444",
    "CreativeWork": "#EC4899",
    "Product": "#06B6D4",
}

_TYPE_CLUSTERS = (
    ("Person", 0),
    ("Organization", 1),
    ("Place", 2),
    ("Event", 3),
    ("CreativeWork", 4),
)
OTHER_CLUSTER = 5

ENTITY_COLOR = "#3B82F6"
CONCEPT_COLOR = "#10B981"

CO_OCCUR_WEIGHT = 0.8
RELATED_WEIGHT = 0.4

MAX_FALLBACK_ENTITIES = 8
MAX_FALLBACK_CONCEPTS = 7
MAX_FALLBACK_NODES = 12


def color_for_type(type_name: str) -> str:
    for key, color in _TYPE_COLORS.items():
        if key in type_name:
            return color
    return GRAY


def cluster_for_type(type_name: str) -> int:
    for key, cluster in _TYPE_CLUSTERS:
        if key in type_name:
            return cluster
    return OTHER_CLUSTER


def co_occurs(a: str, b: str, sentences: list[str]) -> bool:
    a_n = norm_entity(a)
    b_n = norm_entity(b)
    for s in sentences:
        s_n = norm_entity(s)
        if a_n in s_n and b_n in s_n:
            return True
    return False


def infer_edges(
    nodes: list[Node],
    text: str,
    *,
    decide: Decide | None = None,
    threshold: float = 0.7,
) -> list[Edge]:
    """Connect co-occurring pairs; connect same-cluster pairs when ``decide() > threshold``.

    Pairs in different clusters that never share a sentence are never joined.
    """
    draw = decide or random.random
    sentences = split_sentences(text)
    edges: list[Edge] = []

    for a, b in combinations(nodes, 2):
        if a.id == b.id:
            continue
        together = co_occurs(a.label, b.label, sentences)
        same_cluster = a.cluster == b.cluster
        # Only draw for pairs that need it so stubs see a predictable call count.
        if together or (same_cluster and draw() > threshold):
            edges.append(
                Edge(
                    source=a.id,
                    target=b.id,
                    weight=CO_OCCUR_WEIGHT if together else RELATED_WEIGHT,
                    relationship="related" if same_cluster else "co-occurs",
                )
            )
    return edges


def _enriched_size(score: float) -> float:
    # Always within [5, 25]; negative or non-finite scores get the minimum.
    if not math.isfinite(score):
        score = 0.0
    return min(max(score, 0.0) * 2, 20) + 5


def _unique(nodes: list[Node]) -> list[Node]:
    seen: set[str] = set()
    out: list[Node] = []
    for n in nodes:
        if n.id in seen:
            continue
        seen.add(n.id)
        out.append(n)
    return out


def build_graph(
    entities: list[KGEntity],
    text: str,
    *,
    decide: Decide | None = None,
    threshold: float = 0.7,
) -> Graph:
    """Build a graph from knowledge-graph hits found for ``text``."""
    nodes: list[Node] = []
    for idx, ent in enumerate(entities):
        primary = ent.types[0] if ent.types else "Thing"
        nodes.append(
            Node(
                id=ent.id or slugify(ent.name) or f"entity-{idx}",
                label=ent.name,
                size=_enriched_size(ent.score),
                color=color_for_type(primary),
                cluster=cluster_for_type(primary),
                type=primary,
                score=ent.score,
                description=ent.description,
            )
        )

    nodes = _unique(nodes)
    return Graph(nodes=nodes, edges=infer_edges(nodes, text, decide=decide, threshold=threshold))


@dataclass(frozen=True)
class FallbackGraph:
    graph: Graph
    # Extractor output and the top frequency words, kept for insight generation.
    entities: list[str]
    concepts: list[str]


def fallback_graph(
    text: str,
    *,
    decide: Decide | None = None,
    threshold: float = 0.6,
) -> FallbackGraph:
    """Build a graph from local heuristics only (no lookups)."""
    entities = extract_entities(text)
    freqs = word_frequencies(text)
    concepts = top_concepts(freqs, limit=10)
    max_freq = max(freqs.values(), default=1)

    picked: dict[str, None] = {}
    for item in entities[:MAX_FALLBACK_ENTITIES] + concepts[:MAX_FALLBACK_CONCEPTS]:
        picked.setdefault(item, None)
    candidates = list(picked)[:MAX_FALLBACK_NODES]

    entity_set = set(entities)
    nodes: list[Node] = []
    for idx, item in enumerate(candidates):
        is_entity = item in entity_set
        freq = freqs.get(item.lower(), 1)
        nodes.append(
            Node(
                id=slugify(item),
                label=item,
                size=min(freq * 3 + 5, 20),
                color=ENTITY_COLOR if is_entity else CONCEPT_COLOR,
                cluster=0 if is_entity else idx // 4 + 1,
                type="Entity" if is_entity else "Concept",
                score=freq / max_freq,
            )
        )

    # "Apple" and the frequency word "apple" share a slug; the entity wins.
    nodes = _unique(nodes)
    graph = Graph(nodes=nodes, edges=infer_edges(nodes, text, decide=decide, threshold=threshold))
    return FallbackGraph(graph=graph, entities=entities, concepts=concepts)
