from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone

from .config import Settings
from .errors import InvalidTextError
from .graph.build import Decide, build_graph, fallback_graph
from .graph.extract import extract_entities
from .graph.insights import fallback_insights, generate_insights
from .graph.lookup import KnowledgeGraphClient, lookup_entities
from .graph.models import (
    SOURCE_DEGRADED,
    SOURCE_ENRICHED,
    SOURCE_FALLBACK,
    AnalysisResult,
    Graph,
    Metadata,
    Node,
)


logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check_text(text: object) -> str:
    if not isinstance(text, str):
        raise InvalidTextError(f"Expected answer text as str, got {type(text).__name__}")
    return text


def top_types(nodes: list[Node], *, limit: int = 3) -> list[str]:
    counts = Counter(n.type.split("/")[-1] or "Thing" for n in nodes)
    return [t for t, _ in counts.most_common(limit)]


def fallback_analysis(
    text: str,
    *,
    decide: Decide | None = None,
    threshold: float = 0.6,
    source: str = SOURCE_FALLBACK,
) -> AnalysisResult:
    """Self-contained analysis: local extraction, frequency concepts, no lookups."""
    text = _check_text(text)
    fb = fallback_graph(text, decide=decide, threshold=threshold)
    nodes = fb.graph.nodes
    return AnalysisResult(
        graph=fb.graph,
        insights=fallback_insights(fb.entities, fb.concepts, text),
        summary=(
            f"Analyzed {len(nodes)} key concepts and entities using text analysis. "
            f"Identified {len(fb.entities)} entities and {len(fb.concepts)} main concepts."
        ),
        metadata=Metadata(entity_count=len(nodes), timestamp=_timestamp(), source=source),
    )


def _enriched_result(graph: Graph, text: str) -> AnalysisResult:
    types = ", ".join(top_types(graph.nodes))
    return AnalysisResult(
        graph=graph,
        insights=generate_insights(graph.nodes, text),
        summary=f"Identified {len(graph.nodes)} entities from the knowledge graph, including {types}.",
        metadata=Metadata(entity_count=len(graph.nodes), timestamp=_timestamp(), source=SOURCE_ENRICHED),
    )


def analyze_text(
    text: str,
    *,
    settings: Settings | None = None,
    client: KnowledgeGraphClient | None = None,
    decide: Decide | None = None,
) -> AnalysisResult:
    """Analyze one answer text into a graph plus insights.

    Enrichment runs only when ``settings.enrichment_enabled``. Lookup errors and
    empty lookups never fail the call: they produce a ``degraded-fallback``
    result. Only non-string input raises (InvalidTextError).
    """
    text = _check_text(text)
    settings = settings or Settings()

    if not settings.enrichment_enabled:
        logger.debug("enrichment disabled; using local analysis")
        return fallback_analysis(text, decide=decide, threshold=settings.fallback_edge_threshold)

    candidates = extract_entities(text)
    if client is None:
        client = KnowledgeGraphClient(
            api_key=settings.kg_api_key,
            base_url=settings.kg_base_url,
            timeout_s=settings.kg_timeout_s,
        )

    try:
        hits = lookup_entities(
            client,
            candidates,
            max_lookups=settings.max_lookups,
            per_lookup=settings.per_lookup,
            max_entities=settings.max_entities,
            max_workers=settings.max_workers,
            timeout_s=settings.kg_timeout_s,
        )
    except Exception as e:
        logger.warning("enrichment failed, falling back to local analysis: %s", e)
        return fallback_analysis(
            text, decide=decide, threshold=settings.fallback_edge_threshold, source=SOURCE_DEGRADED
        )

    if not hits:
        logger.info("enrichment found no entities for %d candidates; using local analysis", len(candidates))
        return fallback_analysis(
            text, decide=decide, threshold=settings.fallback_edge_threshold, source=SOURCE_DEGRADED
        )

    graph = build_graph(hits, text, decide=decide, threshold=settings.enriched_edge_threshold)
    return _enriched_result(graph, text)


def generate_follow_up_questions(
    text: str,
    *,
    settings: Settings | None = None,
    client: KnowledgeGraphClient | None = None,
    decide: Decide | None = None,
) -> list[str]:
    return analyze_text(text, settings=settings, client=client, decide=decide).insights.questions
