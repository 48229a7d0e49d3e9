from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FeatureType(str, Enum):
    MARKUP = "markup"
    STYLE = "style"
    SCRIPT = "script"


@dataclass(frozen=True)
class DetectedFeature:
    feature: str  # raw token from a parser, canonical registry id after validation
    type: FeatureType
    context: str
    line: int  # 1-based
    column: int  # 0-based
    file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feature": self.feature,
            "type": self.type.value,
            "context": self.context,
            "file": self.file,
            "line": self.line,
            "column": self.column,
        }


@dataclass(frozen=True)
class FileMetadata:
    path: str
    modified_time: int  # st_mtime_ns
    size_bytes: int
    content_hash: str


@dataclass
class CachedParseResult:
    features: List[DetectedFeature]
    metadata: FileMetadata
    timestamp: float


@dataclass
class ChangeSet:
    changed: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)
