"""Capability registry, models, and search."""

from .models import CapabilityDescriptor, CapabilitySummary, Parameter, SearchQuery
from .registry import CapabilityRegistry
from .search import DEFAULT_LIMIT, MAX_LIMIT, ScoredResult, keyword_score, search, suggest_capability

__all__ = [
    "CapabilityDescriptor",
    "CapabilityRegistry",
    "CapabilitySummary",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "Parameter",
    "ScoredResult",
    "SearchQuery",
    "keyword_score",
    "search",
    "suggest_capability",
]
