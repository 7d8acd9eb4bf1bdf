"""Ranked search over capability descriptors.

Filters drop descriptors whose classification differs from the query; the
survivors are scored additively and ranked by score, then by name.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from .models import CapabilityDescriptor, SearchQuery

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 50

COMPONENT_MATCH_SCORE = 50
SEVERITY_MATCH_SCORE = 30
SCOPE_MATCH_SCORE = 30
CATEGORY_MATCH_SCORE = 30

NAME_EXACT_SCORE = 100
NAME_PARTIAL_SCORE = 80
KEYWORD_ENTRY_SCORE = 20
DESCRIPTION_SCORE = 10
COMPONENT_KEYWORD_SCORE = 15
NAME_WORD_SCORE = 5

_UPPERCASE_RE = re.compile(r"([A-Z])")


class ScoredResult(NamedTuple):
    descriptor: CapabilityDescriptor
    score: int


def search(registry: Iterable[CapabilityDescriptor], query: SearchQuery) -> list[CapabilityDescriptor]:
    scored: list[ScoredResult] = []
    for descriptor in registry:
        score = _score_descriptor(descriptor, query)
        if score is not None:
            scored.append(ScoredResult(descriptor, score))

    scored.sort(key=lambda result: (-result.score, result.descriptor.name))
    return [result.descriptor for result in scored[: normalize_limit(query.limit)]]


def normalize_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    if limit <= 0:
        logger.warning("Non-positive search limit %d, using default %d", limit, DEFAULT_LIMIT)
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def _score_descriptor(descriptor: CapabilityDescriptor, query: SearchQuery) -> int | None:
    """Return the descriptor's total score, or None when a present filter rejects it."""
    score = 0

    if query.component:
        if descriptor.component is None or descriptor.component.lower() != query.component.lower():
            return None
        score += COMPONENT_MATCH_SCORE

    if query.severity:
        if descriptor.severity != query.severity:
            return None
        score += SEVERITY_MATCH_SCORE

    if query.scope:
        if descriptor.scope != query.scope:
            return None
        score += SCOPE_MATCH_SCORE

    if query.category:
        if descriptor.category != query.category:
            return None
        score += CATEGORY_MATCH_SCORE

    if query.keyword:
        matched = keyword_score(descriptor, query.keyword)
        if matched == 0:
            return None
        score += matched

    return score


def keyword_score(descriptor: CapabilityDescriptor, keyword: str) -> int:
    kw = keyword.lower()
    name = descriptor.name.lower()
    score = 0

    if name == kw:
        score += NAME_EXACT_SCORE
    elif kw in name:
        score += NAME_PARTIAL_SCORE

    for entry in descriptor.keywords:
        entry_lc = entry.lower()
        if entry_lc == kw or kw in entry_lc or entry_lc in kw:
            score += KEYWORD_ENTRY_SCORE

    if kw in descriptor.description.lower():
        score += DESCRIPTION_SCORE

    if descriptor.component is not None and kw in descriptor.component.lower():
        score += COMPONENT_KEYWORD_SCORE

    if any(kw in word or word in kw for word in _name_words(descriptor.name)):
        score += NAME_WORD_SCORE

    return score


def _name_words(name: str) -> list[str]:
    # getFailingPods -> ["get", "failing", "pods"]
    return _UPPERCASE_RE.sub(r" \1", name).lower().split()


def suggest_capability(
    descriptors: Sequence[CapabilityDescriptor],
    intent_patterns: Iterable[tuple[str, str]],
    text: str,
) -> CapabilityDescriptor | None:
    """Map a free-text intent such as "why are pods failing" onto a single capability.

    Patterns are tried in declaration order and the first one that matches wins.
    """
    text_lc = text.lower()
    by_name = {descriptor.name: descriptor for descriptor in descriptors}
    for pattern, capability_name in intent_patterns:
        if re.search(pattern, text_lc) and capability_name in by_name:
            return by_name[capability_name]
    return None
