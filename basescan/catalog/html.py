from __future__ import annotations
from typing import FrozenSet

MODERN_ELEMENTS: FrozenSet[str] = frozenset([
    # Semantic
    "dialog", "details", "summary", "main", "article", "section", "nav", "aside",
    "header", "footer", "figure", "figcaption", "time", "mark", "progress", "meter",
    "search",
    # Media
    "canvas", "video", "audio", "source", "track", "embed", "object", "picture",
    # Forms
    "datalist", "output",
    # Components
    "slot", "template",
])

MODERN_ATTRIBUTES: FrozenSet[str] = frozenset([
    "loading", "decoding", "fetchpriority", "enterkeyhint", "inputmode",
    "autocomplete", "crossorigin", "integrity", "referrerpolicy",
    "popover", "popovertarget", "inert", "srcset", "sizes",
])
