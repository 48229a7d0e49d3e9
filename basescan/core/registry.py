"""Read-only feature registry keyed by canonical feature id.

The registry file uses the web-features layout, either the full
``{"features": {id: entry}}`` document or a flat ``{id: entry}`` mapping.
Each entry carries at least a ``name`` and a ``status.baseline`` value of
``"high"``, ``"low"`` or ``false``.
"""
from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Union

logger = logging.getLogger("basescan").getChild("registry")

ENV_VAR = "BASESCAN_FEATURES"
BUNDLED_REGISTRY = Path(__file__).resolve().parent.parent / "data" / "features.json"


@dataclass(frozen=True)
class RegistryEntry:
    id: str
    name: str
    baseline: Union[str, bool]
    data: Mapping[str, Any]


class FeatureRegistry:
    def __init__(self, entries: Optional[Mapping[str, Mapping[str, Any]]] = None, source: Optional[str] = None) -> None:
        self.source = source
        self._entries: Dict[str, RegistryEntry] = {}
        for feature_id, raw in (entries or {}).items():
            if not isinstance(raw, Mapping):
                continue
            status = raw.get("status") if isinstance(raw.get("status"), Mapping) else {}
            self._entries[feature_id] = RegistryEntry(
                id=feature_id,
                name=str(raw.get("name", feature_id)),
                baseline=status.get("baseline", raw.get("baseline", False)),
                data=raw,
            )

    @classmethod
    def from_mapping(cls, entries: Mapping[str, Mapping[str, Any]]) -> "FeatureRegistry":
        return cls(entries, source="<memory>")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FeatureRegistry":
        """Load a registry document; IO and JSON errors propagate."""
        with Path(path).open("r", encoding="utf-8") as f:
            document = json.load(f)
        if not isinstance(document, Mapping):
            raise ValueError(f"{path}: expected a JSON object")
        features = document.get("features", document)
        if not isinstance(features, Mapping):
            raise ValueError(f"{path}: 'features' must be a JSON object")
        return cls(features, source=str(path))

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, feature_id: str) -> Optional[RegistryEntry]:
        return self._entries.get(feature_id)

    def baseline(self, feature_id: str) -> Union[str, bool, None]:
        entry = self._entries.get(feature_id)
        return entry.baseline if entry is not None else None


def resolve_registry_path(explicit: Optional[Union[str, Path]] = None) -> Path:
    if explicit:
        return Path(explicit)
    env = os.environ.get(ENV_VAR)
    if env:
        return Path(env)
    return BUNDLED_REGISTRY


def load_registry(path: Optional[Union[str, Path]] = None) -> FeatureRegistry:
    """Load a registry, degrading to an empty one instead of failing."""
    target = resolve_registry_path(path)
    try:
        registry = FeatureRegistry.from_file(target)
    except (OSError, ValueError) as exc:
        logger.warning("Feature registry unavailable (%s); every feature will be rejected", exc)
        return FeatureRegistry({}, source=str(target))
    if not len(registry):
        logger.warning("Feature registry %s is empty; every feature will be rejected", target)
    else:
        logger.info("Loaded %d feature(s) from %s", len(registry), target)
    return registry


_default_lock = threading.Lock()
_default_registry: Optional[FeatureRegistry] = None


def load_default_registry() -> FeatureRegistry:
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = load_registry()
        return _default_registry


def reset_default_registry() -> None:
    global _default_registry
    with _default_lock:
        _default_registry = None
