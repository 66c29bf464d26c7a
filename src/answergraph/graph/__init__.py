"""Text-to-knowledge-graph analysis.

Extraction is heuristic so it works offline: capitalized words and phrases,
acronyms and frequent terms become nodes, sentence co-occurrence becomes
edges. When a Knowledge Graph API key is configured, candidates are first
resolved against the lookup service for typed, scored entities.
"""
