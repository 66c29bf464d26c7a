from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any

import httpx

from ..errors import EnrichmentError
from .models import KGEntity


logger = logging.getLogger(__name__)


class KnowledgeGraphClient:
    """Minimal client for the Knowledge Graph Search API (``entities:search``)."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://kgsearch.googleapis.com/v1/entities:search",
        timeout_s: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_s = float(timeout_s)
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout_s, transport=self._transport)

    def search(self, query: str, *, limit: int = 3) -> list[KGEntity]:
        params = {"query": query, "key": self.api_key, "limit": int(limit), "indent": "True"}
        try:
            with self._client() as client:
                r = client.get(self.base_url, params=params)
        except Exception as e:
            raise EnrichmentError(f"Knowledge graph lookup failed for {query!r} ({e})") from e

        if r.status_code != 200:
            raise EnrichmentError(f"Knowledge graph error {r.status_code} for {query!r}: {r.text[:200]}")

        try:
            data = r.json()
        except ValueError as e:
            raise EnrichmentError(f"Knowledge graph returned non-JSON for {query!r}") from e
        if not isinstance(data, dict):
            raise EnrichmentError(f"Unexpected knowledge graph response: {data!r}")

        items = data.get("itemListElement") or []
        out: list[KGEntity] = []
        for item in items[: int(limit)]:
            ent = parse_entity(item)
            if ent is not None:
                out.append(ent)
        return out

    def ping(self) -> None:
        """Issue one tiny query; raises EnrichmentError when the service is unusable."""
        self.search("Python", limit=1)


def parse_entity(item: Any) -> KGEntity | None:
    """Normalize one ``itemListElement`` entry.

    The API wraps each entity as ``{"result": {...}, "resultScore": n}``; a flat
    entity dict carrying its own ``resultScore`` is accepted too.
    """
    if not isinstance(item, dict):
        return None
    body = item.get("result") if isinstance(item.get("result"), dict) else item

    name = body.get("name")
    if not isinstance(name, str) or not name.strip():
        return None

    raw_types = body.get("@type") or []
    if isinstance(raw_types, str):
        raw_types = [raw_types]
    types = [str(t) for t in raw_types if t]

    description = body.get("description")
    if not isinstance(description, str) or not description:
        detailed = body.get("detailedDescription") or {}
        article = detailed.get("articleBody") if isinstance(detailed, dict) else None
        description = article[:200] if isinstance(article, str) and article else None

    try:
        score = float(item.get("resultScore", body.get("resultScore", 0.0)) or 0.0)
    except (TypeError, ValueError):
        score = 0.0
    if not math.isfinite(score):
        score = 0.0

    return KGEntity(
        id=str(body.get("@id") or ""),
        name=name.strip(),
        types=types,
        description=description,
        score=score,
    )


def lookup_entities(
    client: KnowledgeGraphClient,
    candidates: list[str],
    *,
    max_lookups: int = 10,
    per_lookup: int = 3,
    max_entities: int = 15,
    max_workers: int = 5,
    timeout_s: float | None = None,
) -> list[KGEntity]:
    """Resolve candidates in parallel; a failed or late lookup contributes nothing.

    ``timeout_s`` bounds each lookup as a whole (httpx only bounds each read),
    so the gather waits at most ``timeout_s`` per wave of ``max_workers``
    lookups. Results are flattened in candidate order and capped at
    ``max_entities``.
    """
    queries = candidates[:max_lookups]
    if not queries:
        return []

    def one(query: str) -> list[KGEntity]:
        try:
            return client.search(query, limit=per_lookup)
        except Exception as e:
            logger.warning("lookup skipped for %r: %s", query, e)
            return []

    workers = max(1, min(max_workers, len(queries)))
    deadline = None
    if timeout_s is not None:
        waves = -(-len(queries) // workers)
        deadline = float(timeout_s) * waves

    pool = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = [pool.submit(one, q) for q in queries]
        wait(futures, timeout=deadline)
    finally:
        # Don't block on stragglers; they finish in the background and are ignored.
        pool.shutdown(wait=False, cancel_futures=True)

    out: list[KGEntity] = []
    for query, fut in zip(queries, futures):
        if not fut.done() or fut.cancelled():
            logger.warning("lookup for %r timed out after %ss", query, timeout_s)
            continue
        out.extend(fut.result())
    logger.debug("lookup: %d queries, %d entities", len(queries), len(out))
    return out[:max_entities]
