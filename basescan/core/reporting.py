from __future__ import annotations
import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List

from .models import DetectedFeature
from .registry import FeatureRegistry


class Reporter:
    def __init__(self, out_dir: Path, registry: FeatureRegistry) -> None:
        self.out_dir = out_dir
        self.registry = registry

    def write_all(self, features: List[DetectedFeature], scanned_files: int) -> Dict[str, Any]:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        (self.out_dir / "features.json").write_text(
            json.dumps([f.to_dict() for f in features], indent=2), encoding="utf-8"
        )

        by_id = Counter(f.feature for f in features)
        by_type = Counter(f.type.value for f in features)
        summary = {
            "files": scanned_files,
            "features": len(features),
            "distinct_features": len(by_id),
        }

        # summary.md: totals, then one row per feature id
        lines = ["# Feature Scan Summary", ""]
        for k, v in summary.items():
            lines.append(f"- {k}: {v}")
        lines.append("")
        lines.append("## By type")
        for kind, count in sorted(by_type.items()):
            lines.append(f"- {kind}: {count}")
        lines.append("")
        lines.append("## By feature")
        lines.append("")
        lines.append("| feature | name | baseline | count |")
        lines.append("|---|---|---|---|")
        for feature_id, count in sorted(by_id.items(), key=lambda kv: (-kv[1], kv[0])):
            entry = self.registry.get(feature_id)
            name = entry.name if entry else feature_id
            baseline = entry.baseline if entry else "unknown"
            lines.append(f"| {feature_id} | {name} | {baseline} | {count} |")
        lines.append("")
        (self.out_dir / "summary.md").write_text("\n".join(lines), encoding="utf-8")
        return summary
