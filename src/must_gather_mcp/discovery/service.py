import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..capabilities import CapabilityRegistry, SearchQuery, search, suggest_capability
from ..typedefs import TypeGraph
from .errors import InvalidInputError, TypeNotFoundError
from .models import SearchAnalysisResult, TypeDefinitionRequest, TypeDefinitionResult

logger = logging.getLogger(__name__)

DEFAULT_TYPE_DEPTH = 1
MIN_TYPE_DEPTH = 1
MAX_TYPE_DEPTH = 3


class AnalysisDiscovery:
    """The two progressive disclosure operations over a registry and a type graph.

    Both the registry and the type graph are read-only, so one instance can
    serve concurrent callers.
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        type_graph: TypeGraph,
        usage_hint: str = "",
    ) -> None:
        self.registry = registry
        self.type_graph = type_graph
        self.usage_hint = usage_hint

    def search_analysis(self, args: Mapping[str, Any] | None = None) -> SearchAnalysisResult:
        try:
            query = SearchQuery.model_validate(dict(args or {}))
        except ValidationError as exc:
            raise InvalidInputError(f"invalid search arguments: {_describe_validation_error(exc)}") from exc

        methods = search(self.registry, query)
        suggested = None
        if query.keyword:
            suggestion = suggest_capability(self.registry.descriptors, self.registry.intent_patterns, query.keyword)
            suggested = suggestion.name if suggestion else None

        plural = "" if len(methods) == 1 else "s"
        return SearchAnalysisResult(
            summary=f"Found {len(methods)} matching analysis method{plural}",
            total_methods=len(methods),
            methods=[method.to_summary() for method in methods],
            suggested_method=suggested,
            usage=self.usage_hint,
        )

    def get_type_definition(self, args: Mapping[str, Any] | None = None) -> TypeDefinitionResult:
        available_types = self.type_graph.known_type_names()
        try:
            request = TypeDefinitionRequest.model_validate(dict(args or {}))
        except ValidationError as exc:
            raise InvalidInputError(
                f"invalid type definition arguments: {_describe_validation_error(exc)}. "
                f"Available types: {', '.join(available_types)}"
            ) from exc

        if not request.type_names:
            raise InvalidInputError(f"typeNames array is required. Available types: {', '.join(available_types)}")

        depth = _clamp_depth(request.depth)
        types = self.type_graph.expand(request.type_names, depth, bool(request.include_examples))
        if not types:
            raise TypeNotFoundError(available_types)

        return TypeDefinitionResult(types=types, available_types=available_types)


def _clamp_depth(depth: int | None) -> int:
    if depth is None:
        return DEFAULT_TYPE_DEPTH
    clamped = min(max(depth, MIN_TYPE_DEPTH), MAX_TYPE_DEPTH)
    if clamped != depth:
        logger.warning("Type depth %d out of range, clamped to %d", depth, clamped)
    return clamped


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(problems)
