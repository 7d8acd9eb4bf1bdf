import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from .models import CapabilityDescriptor

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_PATH = Path(__file__).parent / "manifest.yaml"


class CapabilityRegistry:
    """Read-only, ordered set of capability descriptors loaded once from a manifest."""

    def __init__(self, manifest_path: Path = DEFAULT_MANIFEST_PATH) -> None:
        self.manifest_path = manifest_path
        self._descriptors: tuple[CapabilityDescriptor, ...] = ()
        self._by_name: dict[str, CapabilityDescriptor] = {}
        self._intent_patterns: tuple[tuple[str, str], ...] = ()
        self._load_manifest()

    def _load_manifest(self) -> None:
        with self.manifest_path.open("r", encoding="utf-8") as manifest_file:
            raw = yaml.safe_load(manifest_file) or {}

        descriptors: list[CapabilityDescriptor] = []
        by_name: dict[str, CapabilityDescriptor] = {}
        for entry in raw.get("capabilities", []):
            descriptor = self._entry_to_descriptor(entry)
            if descriptor.name in by_name:
                raise ValueError(f"duplicate capability name in {self.manifest_path}: {descriptor.name}")
            descriptors.append(descriptor)
            by_name[descriptor.name] = descriptor

        intent_patterns: list[tuple[str, str]] = []
        for pattern in raw.get("intent_patterns", []):
            capability_name = pattern["capability"]
            if capability_name not in by_name:
                raise ValueError(f"intent pattern references unknown capability: {capability_name}")
            intent_patterns.append((pattern["pattern"], capability_name))

        self._descriptors = tuple(descriptors)
        self._by_name = by_name
        self._intent_patterns = tuple(intent_patterns)
        logger.info("Loaded %d capabilities from %s", len(descriptors), self.manifest_path)

    @staticmethod
    def _entry_to_descriptor(entry: dict[str, Any]) -> CapabilityDescriptor:
        return CapabilityDescriptor(
            name=entry["name"],
            signature=entry.get("signature", entry["name"]),
            description=entry.get("description", ""),
            component=entry.get("component"),
            severity=entry["severity"],
            scope=entry["scope"],
            category=entry["category"],
            parameters=tuple(entry.get("parameters", [])),
            returns=entry.get("returns", "void"),
            example=str(entry.get("example", "")).rstrip("\n"),
            keywords=tuple(entry.get("keywords", [])),
        )

    @property
    def descriptors(self) -> tuple[CapabilityDescriptor, ...]:
        return self._descriptors

    @property
    def intent_patterns(self) -> tuple[tuple[str, str], ...]:
        return self._intent_patterns

    def get(self, name: str) -> CapabilityDescriptor | None:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return [descriptor.name for descriptor in self._descriptors]

    def __iter__(self) -> Iterator[CapabilityDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)
