from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Tuple

from ..core.models import DetectedFeature
from .base import DialectParser

# extension -> (region kind, grammar)
_DISPATCH: Dict[str, Tuple[str, str]] = {
    ".js": ("script", "javascript"),
    ".mjs": ("script", "javascript"),
    ".cjs": ("script", "javascript"),
    ".ts": ("script", "typescript"),
    ".mts": ("script", "typescript"),
    ".css": ("style", "css"),
    ".html": ("markup", "html"),
    ".htm": ("markup", "html"),
}


class VanillaParser(DialectParser):
    """Plain scripts, stylesheets and HTML documents."""
    NAME = "vanilla"
    SUPPORTED_EXTENSIONS = list(_DISPATCH)
    REQUIRED_GRAMMARS = ["javascript", "typescript", "css", "html"]

    def extract(self, content: str, path: str) -> List[DetectedFeature]:
        region, grammar = _DISPATCH[Path(path).suffix.lower()]
        walker = self.walker(content, path)
        if region == "script":
            walker.walk_script(grammar)
        elif region == "style":
            walker.walk_style()
        else:
            walker.walk_document()
        return walker.features
