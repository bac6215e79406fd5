"""Fuzzy person-name matching between subscriber input and heat sheet text."""

from __future__ import annotations

import re


_NON_LATIN_RE = re.compile(r"[^a-z\s]")


def name_tokens(name: str) -> list[str]:
    """Lowercase, drop everything but Latin letters and whitespace, sort tokens."""

    cleaned = _NON_LATIN_RE.sub("", name.lower())
    return sorted(token for token in cleaned.split() if token)


def _covers(shorter: list[str], longer: list[str]) -> bool:
    return all(
        any(candidate.startswith(token) or token.startswith(candidate) for candidate in longer)
        for token in shorter
    )


def matches_identity(query: str, candidate: str) -> bool:
    """Return True when both strings plausibly name the same person.

    Handles "Last, First" versus "First Last", case, punctuation and
    abbreviated tokens ("Sam" ~ "Samuel").  Every token of the shorter name
    must share a prefix with some token of the longer one.
    """

    query_tokens = name_tokens(query)
    candidate_tokens = name_tokens(candidate)
    if not query_tokens or not candidate_tokens:
        return False

    if len(query_tokens) == len(candidate_tokens):
        return _covers(query_tokens, candidate_tokens) and _covers(candidate_tokens, query_tokens)
    if len(query_tokens) < len(candidate_tokens):
        return _covers(query_tokens, candidate_tokens)
    return _covers(candidate_tokens, query_tokens)
