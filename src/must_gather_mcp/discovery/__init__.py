"""Caller-facing analysis discovery operations."""

from .errors import DiscoveryError, InvalidInputError, TypeNotFoundError
from .models import SearchAnalysisResult, TypeDefinitionRequest, TypeDefinitionResult
from .service import AnalysisDiscovery

__all__ = [
    "AnalysisDiscovery",
    "DiscoveryError",
    "InvalidInputError",
    "SearchAnalysisResult",
    "TypeDefinitionRequest",
    "TypeDefinitionResult",
    "TypeNotFoundError",
]
