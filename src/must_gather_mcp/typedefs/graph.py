import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from .models import TypeDescriptor

logger = logging.getLogger(__name__)

DEFAULT_TYPES_PATH = Path(__file__).parent / "types.yaml"


class TypeGraph:
    """Immutable map of type name to descriptor, in declaration order."""

    def __init__(self, types_path: Path = DEFAULT_TYPES_PATH) -> None:
        self.types_path = types_path
        self._types: Mapping[str, TypeDescriptor] = MappingProxyType({})
        self._load_types()

    def _load_types(self) -> None:
        with self.types_path.open("r", encoding="utf-8") as types_file:
            raw = yaml.safe_load(types_file) or {}

        types: dict[str, TypeDescriptor] = {}
        for entry in raw.get("types", []):
            descriptor = self._entry_to_descriptor(entry)
            if descriptor.name in types:
                raise ValueError(f"duplicate type name in {self.types_path}: {descriptor.name}")
            types[descriptor.name] = descriptor

        self._types = MappingProxyType(types)
        logger.info("Loaded %d type definitions from %s", len(types), self.types_path)

    @staticmethod
    def _entry_to_descriptor(entry: dict[str, Any]) -> TypeDescriptor:
        return TypeDescriptor(
            name=entry["name"],
            definition=str(entry["definition"]).rstrip("\n"),
            source_note=entry.get("source", ""),
            referenced_type_names=tuple(entry.get("references", [])),
            example_value=entry.get("example"),
        )

    @property
    def types(self) -> Mapping[str, TypeDescriptor]:
        return self._types

    def known_type_names(self) -> list[str]:
        return list(self._types)

    def expand(self, requested: Iterable[str], max_depth: int, include_examples: bool = False) -> list[TypeDescriptor]:
        return expand(self._types, requested, max_depth, include_examples)


def expand(
    type_map: Mapping[str, TypeDescriptor],
    requested: Iterable[str],
    max_depth: int,
    include_examples: bool = False,
) -> list[TypeDescriptor]:
    """Resolve requested type names plus the types they reference, depth-first.

    A dotted name such as ``Pod.status`` resolves to its base type ``Pod``.
    Each base type is emitted at most once per call, so reference cycles
    terminate. Names missing from ``type_map`` are skipped.

    Args:
        type_map: Type name to descriptor.
        requested: Top-level names, processed in order.
        max_depth: Number of reference hops followed from each top-level name.
        include_examples: Keep ``example_value`` on the returned descriptors.

    Returns:
        Descriptors in traversal order.
    """
    processed: set[str] = set()
    resolved: list[TypeDescriptor] = []
    for type_name in requested:
        _visit(type_map, type_name, 0, max_depth, include_examples, processed, resolved)
    return resolved


def _visit(
    type_map: Mapping[str, TypeDescriptor],
    type_name: str,
    depth: int,
    max_depth: int,
    include_examples: bool,
    processed: set[str],
    resolved: list[TypeDescriptor],
) -> None:
    base_name = type_name.split(".", 1)[0]
    if base_name in processed:
        return
    processed.add(base_name)

    descriptor = type_map.get(base_name)
    if descriptor is None:
        return
    # callers get their own copy of example values
    resolved.append(descriptor.model_copy(deep=True) if include_examples else descriptor.without_example())

    if depth >= max_depth:
        return
    for referenced_name in descriptor.referenced_type_names:
        if referenced_name not in processed:
            _visit(type_map, referenced_name, depth + 1, max_depth, include_examples, processed, resolved)


def render_declarations(type_graph: TypeGraph, depth: int = 2) -> str:
    descriptors = type_graph.expand(type_graph.known_type_names(), depth)
    return "\n\n".join(descriptor.definition for descriptor in descriptors)
