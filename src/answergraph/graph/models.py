from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


SOURCE_ENRICHED = "enriched"
SOURCE_FALLBACK = "fallback"
SOURCE_DEGRADED = "degraded-fallback"


@dataclass(frozen=True)
class KGEntity:
    """One hit from the knowledge-graph lookup, normalized."""

    id: str
    name: str
    types: list[str] = field(default_factory=list)
    description: str | None = None
    score: float = 0.0


@dataclass(frozen=True)
class Node:
    id: str
    label: str
    size: float
    color: str
    cluster: int
    type: str
    score: float
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "size": self.size,
            "color": self.color,
            "cluster": self.cluster,
            "type": self.type,
            "score": self.score,
        }
        if self.description:
            d["description"] = self.description
        return d


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    weight: float
    relationship: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
            "relationship": self.relationship,
        }


@dataclass(frozen=True)
class Graph:
    nodes: list[Node]
    edges: list[Edge]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


@dataclass(frozen=True)
class Cluster:
    id: int
    label: str
    concepts: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "concepts": list(self.concepts)}


@dataclass(frozen=True)
class Insights:
    gaps: list[str]
    questions: list[str]
    clusters: list[Cluster]

    def to_dict(self) -> dict[str, Any]:
        return {
            "gaps": list(self.gaps),
            "questions": list(self.questions),
            "clusters": [c.to_dict() for c in self.clusters],
        }


@dataclass(frozen=True)
class Metadata:
    entity_count: int
    timestamp: str
    # One of SOURCE_ENRICHED, SOURCE_FALLBACK, SOURCE_DEGRADED.
    source: str

    def to_dict(self) -> dict[str, Any]:
        return {"entityCount": self.entity_count, "timestamp": self.timestamp, "source": self.source}


@dataclass(frozen=True)
class AnalysisResult:
    graph: Graph
    insights: Insights
    metadata: Metadata
    summary: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "graph": self.graph.to_dict(),
            "insights": self.insights.to_dict(),
            "metadata": self.metadata.to_dict(),
        }
        if self.summary is not None:
            d["summary"] = self.summary
        return d
