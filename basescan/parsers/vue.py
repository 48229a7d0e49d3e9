from __future__ import annotations
from typing import List

from ..catalog.framework import VUE_APIS, VUE_DIRECTIVE_PREFIXES
from ..core.models import DetectedFeature
from .base import DialectParser


class VueParser(DialectParser):
    """Single-file components: <template>, <script>/<script setup>, <style>."""
    NAME = "vue"
    SUPPORTED_EXTENSIONS = [".vue"]
    REQUIRED_GRAMMARS = ["html", "javascript", "typescript", "css"]
    EXCLUDED_APIS = VUE_APIS
    DIRECTIVE_PREFIXES = VUE_DIRECTIVE_PREFIXES

    def extract(self, content: str, path: str) -> List[DetectedFeature]:
        walker = self.walker(content, path)
        walker.walk_document()
        return walker.features
