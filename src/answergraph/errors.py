from __future__ import annotations


class AnswerGraphError(RuntimeError):
    pass


class EnrichmentError(AnswerGraphError):
    """A knowledge-graph lookup failed (transport, HTTP status or response shape)."""


class InvalidTextError(AnswerGraphError, TypeError):
    """Raised when the engine is handed something other than a string."""
