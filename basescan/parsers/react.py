from __future__ import annotations
from pathlib import Path
from typing import List

from ..catalog.framework import REACT_APIS
from ..core.models import DetectedFeature
from .base import DialectParser


class ReactParser(DialectParser):
    """JSX/TSX modules. Markup comes from intrinsic JSX elements."""
    NAME = "react"
    SUPPORTED_EXTENSIONS = [".jsx", ".tsx"]
    REQUIRED_GRAMMARS = ["javascript", "tsx"]
    EXCLUDED_APIS = REACT_APIS
    INLINE_STYLES = True

    def extract(self, content: str, path: str) -> List[DetectedFeature]:
        grammar = "tsx" if Path(path).suffix.lower() == ".tsx" else "javascript"
        walker = self.walker(content, path)
        walker.walk_script(grammar)
        return walker.features
