from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    # Knowledge Graph Search API (enrichment). Empty key means fallback-only.
    kg_api_key: str = os.getenv("ANSWERGRAPH_KG_API_KEY", os.getenv("GOOGLE_API_KEY", ""))
    kg_base_url: str = os.getenv("ANSWERGRAPH_KG_BASE_URL", "https://kgsearch.googleapis.com/v1/entities:search")
    kg_timeout_s: float = float(os.getenv("ANSWERGRAPH_KG_TIMEOUT", "5.0"))
    enrich: bool = _flag("ANSWERGRAPH_ENRICH", "1")

    # Lookup fan-out
    max_workers: int = int(os.getenv("ANSWERGRAPH_MAX_WORKERS", "5"))
    max_lookups: int = 10
    per_lookup: int = 3
    max_entities: int = 15

    # Same-cluster edges are kept only when a random draw exceeds these.
    enriched_edge_threshold: float = 0.7
    fallback_edge_threshold: float = 0.6

    @property
    def enrichment_enabled(self) -> bool:
        return bool(self.enrich and self.kg_api_key.strip())
