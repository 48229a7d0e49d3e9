from __future__ import annotations
from typing import Tuple

# Matched by substring against a rule's selector text. An entry ending in
# "(" is reported with a closing paren appended (":has(" -> ":has()").
MODERN_SELECTORS: Tuple[str, ...] = (
    ":has(", ":is(", ":where(", ":not(", ":focus-visible", ":focus-within",
    ":any-link", ":scope", ":fullscreen", ":picture-in-picture",
    ":user-invalid", ":user-valid", ":placeholder-shown",
    "::backdrop", "::placeholder", "::marker", "::selection",
    "::file-selector-button",
)

CSS_FUNCTIONS: Tuple[str, ...] = ("var", "calc", "clamp", "min", "max", "minmax")

# Style blocks in any other language are skipped.
CSS_LANGS = frozenset(["", "css", "postcss"])


def selector_feature(token: str) -> str:
    return token + ")" if token.endswith("(") else token

# Keys that mark a JS object literal as an inline style object.
STYLE_OBJECT_PROPERTIES = frozenset([
    "container-type", "container-name", "container",
    "display", "grid-template-columns", "grid-template-rows", "gap", "grid-gap",
    "flex", "flex-direction", "flex-wrap", "justify-content", "align-items",
    "aspect-ratio", "object-fit", "object-position", "backdrop-filter",
    "color-scheme", "accent-color", "scroll-behavior", "scroll-snap-type",
    "overscroll-behavior", "touch-action", "user-select",
    "transform", "transform-origin", "perspective", "backface-visibility",
    "animation", "transition", "will-change",
    "position", "top", "right", "bottom", "left", "z-index",
    "width", "height", "margin", "padding", "border", "outline",
])
