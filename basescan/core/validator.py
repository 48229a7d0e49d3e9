"""Turn raw parser tokens into canonical registry features.

Every raw feature goes through the same steps: framework names are rejected,
the token is resolved to a registry id, the context is reshaped for display,
and finally duplicates sharing (id, file, line, column) are folded into the
first occurrence.
"""
from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from ..catalog.feature_ids import CUSTOM_PROPERTY_ID, CUSTOM_PROPERTY_PREFIX, FEATURE_ID_MAP
from ..catalog.framework import is_framework_name
from .memory import iter_batches
from .models import DetectedFeature, FeatureType
from .registry import FeatureRegistry, load_default_registry

CONTEXT_MAX_LENGTH = 100

DedupeKey = Tuple[str, Optional[str], int, int]


class FeatureValidator:
    def __init__(
        self,
        registry: Optional[FeatureRegistry] = None,
        *,
        id_map: Optional[Mapping[str, str]] = None,
        context_max_length: int = CONTEXT_MAX_LENGTH,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry if registry is not None else load_default_registry()
        self.id_map = FEATURE_ID_MAP if id_map is None else id_map
        self.context_max_length = context_max_length
        base_logger = logger or logging.getLogger("basescan")
        self.logger = base_logger.getChild("validator")

    def validate_features(self, raw: List[DetectedFeature], concurrency: int = 10) -> List[DetectedFeature]:
        """Validate, canonicalize and deduplicate ``raw``.

        Input order is preserved. Only a non-list argument raises; a feature
        that cannot be validated is logged and dropped.
        """
        if not isinstance(raw, list):
            raise TypeError(f"features must be a list, got {type(raw).__name__}")
        if not raw:
            return []

        workers = max(1, concurrency)
        resolved: List[Optional[DetectedFeature]] = []
        with ThreadPoolExecutor(max_workers=workers) as pool:
            for batch in iter_batches(raw, workers):
                resolved.extend(pool.map(self._validate_one, batch))

        seen: Set[DedupeKey] = set()
        unique: List[DetectedFeature] = []
        for feature in resolved:
            if feature is None:
                continue
            key = (feature.feature, feature.file, feature.line, feature.column)
            if key in seen:
                continue
            seen.add(key)
            unique.append(feature)

        dropped = len(raw) - len(unique)
        if dropped:
            self.logger.debug("Kept %d of %d raw feature(s)", len(unique), len(raw))
        return unique

    def _validate_one(self, feature: DetectedFeature) -> Optional[DetectedFeature]:
        try:
            name = feature.feature
            if is_framework_name(name):
                return None
            feature_id = self.resolve_id(name)
            if feature_id is None or feature_id not in self.registry:
                return None
            return dataclasses.replace(
                feature,
                feature=feature_id,
                context=self.format_context(feature.context, feature.type),
            )
        except Exception as exc:
            self.logger.warning("Dropping feature %r: %s", getattr(feature, "feature", feature), exc)
            return None

    def resolve_id(self, name: str) -> Optional[str]:
        mapped = self.id_map.get(name)
        if mapped is not None:
            return mapped

        if "." in name:
            parts = name.split(".")
            # full name, then the member, then the owning object
            for candidate in (name, parts[-1], parts[0]):
                if candidate and candidate in self.id_map:
                    return self.id_map[candidate]

        if name.startswith(CUSTOM_PROPERTY_PREFIX):
            return CUSTOM_PROPERTY_ID

        if name in self.registry:
            return name
        return None

    def format_context(self, context: str, kind: FeatureType) -> str:
        text = context or ""
        if len(text) > self.context_max_length:
            text = text[:self.context_max_length] + "..."
        if kind is FeatureType.STYLE:
            return text if ":" in text else f"{text}: ..."
        if kind is FeatureType.MARKUP:
            return text if text.startswith("<") else f"<{text}>"
        return text

    # ------------------------------------------------------------- registry

    def is_feature_supported(self, feature_id: str) -> bool:
        return feature_id in self.registry

    def get_feature_data(self, feature_id: str) -> Optional[Dict[str, Any]]:
        entry = self.registry.get(feature_id)
        if entry is None:
            return None
        return {"id": entry.id, "name": entry.name, "baseline": entry.baseline, **dict(entry.data)}

    def supported_features(self) -> List[str]:
        return sorted(self.registry)
