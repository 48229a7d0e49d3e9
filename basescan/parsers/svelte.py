from __future__ import annotations
from typing import List

from ..catalog.framework import SVELTE_APIS, SVELTE_DIRECTIVE_PREFIXES
from ..core.models import DetectedFeature
from .base import DialectParser


class SvelteParser(DialectParser):
    NAME = "svelte"
    SUPPORTED_EXTENSIONS = [".svelte"]
    REQUIRED_GRAMMARS = ["html", "javascript", "typescript", "css"]
    EXCLUDED_APIS = SVELTE_APIS
    DIRECTIVE_PREFIXES = SVELTE_DIRECTIVE_PREFIXES

    def extract(self, content: str, path: str) -> List[DetectedFeature]:
        # template expressions ({#if}, {value}) are plain text to the host grammar
        walker = self.walker(content, path)
        walker.walk_document()
        return walker.features
