"""Tree walkers shared by every dialect.

A file is one host document, parsed either as a script, a stylesheet, or an
HTML-like markup document. Markup documents embed further script and style
regions (``<script>``/``<style>`` elements); those are re-parsed with their
own grammar and their coordinates are shifted back into the host's line and
column space before features are recorded.

tree-sitter reports (row, byte column) pairs. Rows become 1-based lines and
byte columns become 0-based character columns of the host line.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

from tree_sitter import Node

from ..catalog.css import CSS_FUNCTIONS, CSS_LANGS, MODERN_SELECTORS, STYLE_OBJECT_PROPERTIES, selector_feature
from ..catalog.html import MODERN_ATTRIBUTES, MODERN_ELEMENTS
from ..catalog.web_apis import WEB_PLATFORM_APIS
from ..core.errors import DialectSyntaxError
from ..core.grammars import GrammarRegistry
from ..core.models import DetectedFeature, FeatureType

FUNCTION_KINDS = frozenset([
    "function_declaration",
    "function_expression",
    "function",
    "arrow_function",
    "method_definition",
    "generator_function",
    "generator_function_declaration",
])

OPTIONAL_CHAIN_HOSTS = frozenset(["member_expression", "call_expression", "subscript_expression"])
FIELD_KINDS = frozenset(["field_definition", "public_field_definition"])
JSX_TAG_KINDS = frozenset(["jsx_opening_element", "jsx_self_closing_element"])
HTML_TAG_KINDS = frozenset(["start_tag", "self_closing_tag"])
STYLE_KEY_KINDS = frozenset(["property_identifier", "string"])
UPPER = re.compile(r"[A-Z]")

# <script lang="..."> / <script type="..."> -> grammar; None means skip
SCRIPT_LANGS: Dict[str, Optional[str]] = {
    "": "javascript",
    "js": "javascript",
    "javascript": "javascript",
    "jsx": "javascript",
    "module": "javascript",
    "text/javascript": "javascript",
    "application/javascript": "javascript",
    "ts": "typescript",
    "typescript": "typescript",
    "tsx": "tsx",
}


@dataclass(frozen=True)
class Offset:
    """Start of an embedded region inside its host, as (row, byte column)."""
    row: int = 0
    column: int = 0
    byte: int = 0

    def translate(self, point: Tuple[int, int]) -> Tuple[int, int]:
        row, column = point
        if row == 0:
            column += self.column
        return self.row + row, column


HOST = Offset()


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def dotted_name(node: Optional[Node]) -> str:
    """Resolve ``a.b.c`` style expressions; unnamed links are left out.

    Anything other than an identifier ends the chain, so ``this.fetch`` and
    ``arr[0].URL`` resolve to ``fetch`` and ``URL``.
    """
    parts: List[str] = []
    current = node
    while current is not None:
        if current.type == "identifier":
            parts.append(node_text(current))
            break
        if current.type != "member_expression":
            break
        prop = current.child_by_field_name("property")
        if prop is not None and prop.type == "property_identifier":
            parts.append(node_text(prop))
        current = current.child_by_field_name("object")
    return ".".join(reversed(parts))


def style_property(key: str) -> str:
    """``aspectRatio`` -> ``aspect-ratio``; custom properties are kept as written."""
    if key.startswith("--"):
        return key
    return UPPER.sub(lambda m: "-" + m.group(0).lower(), key)


def style_key(prop: Node) -> str:
    if prop.type == "shorthand_property_identifier":
        return node_text(prop)
    if prop.type != "pair":
        return ""
    key = prop.child_by_field_name("key")
    if key is None or key.type not in STYLE_KEY_KINDS:
        return ""
    return node_text(key).strip("'\"")


def first_error(node: Node) -> Optional[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


def tag_attributes(tag: Node) -> Dict[str, str]:
    attrs: Dict[str, str] = {}
    for child in tag.children:
        if child.type != "attribute":
            continue
        name = ""
        value = ""
        for part in child.children:
            if part.type == "attribute_name":
                name = node_text(part)
            elif part.type == "attribute_value":
                value = node_text(part)
            elif part.type == "quoted_attribute_value":
                value = node_text(part).strip("\"'")
        if name:
            attrs[name.lower()] = value.strip().lower()
    return attrs


class RegionWalker:
    def __init__(
        self,
        source: bytes,
        path: str,
        grammars: GrammarRegistry,
        *,
        excluded_apis: FrozenSet[str] = frozenset(),
        directive_prefixes: Tuple[str, ...] = (),
        inline_styles: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.source = source
        self.path = path
        self.grammars = grammars
        self.excluded_apis = excluded_apis
        self.directive_prefixes = directive_prefixes
        self.inline_styles = inline_styles
        self.logger = logger or logging.getLogger("basescan").getChild("regions")
        self.features: List[DetectedFeature] = []
        self._lines = source.split(b"\n")

    # ------------------------------------------------------------------ output

    def line_text(self, row: int) -> str:
        if 0 <= row < len(self._lines):
            return self._lines[row].decode("utf-8", errors="replace").strip()
        return ""

    def char_column(self, row: int, byte_column: int) -> int:
        if 0 <= row < len(self._lines):
            return len(self._lines[row][:byte_column].decode("utf-8", errors="ignore"))
        return byte_column

    def emit(
        self,
        name: str,
        kind: FeatureType,
        node: Node,
        offset: Offset,
        context: Optional[str] = None,
    ) -> None:
        row, byte_column = offset.translate(node.start_point)
        self.features.append(
            DetectedFeature(
                feature=name,
                type=kind,
                context=self.line_text(row) if context is None else context,
                line=row + 1,
                column=self.char_column(row, byte_column),
                file=self.path,
            )
        )

    # ------------------------------------------------------------------ script

    def walk_script(self, grammar: str, offset: Offset = HOST, data: Optional[bytes] = None) -> None:
        """Parse a script region and record API and syntax features.

        Raises DialectSyntaxError when the region does not parse cleanly.
        """
        tree = self.grammars.parse(grammar, self.source if data is None else data)
        broken = first_error(tree.root_node)
        if broken is not None:
            row, column = offset.translate(broken.start_point)
            raise DialectSyntaxError(self.path, row + 1, self.char_column(row, column))

        stack: List[Tuple[Node, bool]] = [(tree.root_node, False)]
        while stack:
            node, in_function = stack.pop()
            self._visit_script(node, in_function, offset)
            nested = in_function or node.type in FUNCTION_KINDS
            stack.extend((child, nested) for child in reversed(node.children))

    def _visit_script(self, node: Node, in_function: bool, offset: Offset) -> None:
        kind = node.type
        if kind in OPTIONAL_CHAIN_HOSTS and any(c.type == "optional_chain" for c in node.children):
            self.emit("optional-chaining", FeatureType.SCRIPT, node, offset)

        if kind == "member_expression":
            self._platform_api(dotted_name(node), node, offset)
        elif kind == "call_expression":
            callee = node.child_by_field_name("function")
            if callee is not None and callee.type == "import":
                self.emit("dynamic-import", FeatureType.SCRIPT, node, offset)
            elif callee is not None and callee.type in ("identifier", "member_expression"):
                self._platform_api(dotted_name(callee), node, offset)
        elif kind == "new_expression":
            self._platform_api(dotted_name(node.child_by_field_name("constructor")), node, offset)
        elif kind == "binary_expression":
            operator = node.child_by_field_name("operator")
            if operator is not None and operator.type == "??":
                self.emit("nullish-coalescing", FeatureType.SCRIPT, node, offset)
        elif kind in FIELD_KINDS:
            if any(c.type == "private_property_identifier" for c in node.children):
                self.emit("private-fields", FeatureType.SCRIPT, node, offset)
        elif kind == "method_definition":
            if any(c.type == "private_property_identifier" for c in node.children):
                self.emit("private-methods", FeatureType.SCRIPT, node, offset)
        elif kind == "await_expression":
            if not in_function:
                self.emit("top-level-await", FeatureType.SCRIPT, node, offset)
        elif kind == "number":
            raw = node_text(node)
            if raw.endswith("n"):
                self.emit("bigint", FeatureType.SCRIPT, node, offset)
            if "_" in raw:
                self.emit("numeric-separators", FeatureType.SCRIPT, node, offset)
        elif kind in JSX_TAG_KINDS:
            self._jsx_tag(node, offset)
        elif kind == "object" and self.inline_styles:
            self._style_object(node, offset)

    def _platform_api(self, name: str, node: Node, offset: Offset) -> None:
        if not name or name in self.excluded_apis:
            return
        if name in WEB_PLATFORM_APIS:
            self.emit(name, FeatureType.SCRIPT, node, offset)

    def _jsx_tag(self, node: Node, offset: Offset) -> None:
        name = node.child_by_field_name("name")
        # lower-case identifiers are intrinsic elements, others are components
        tag = node_text(name) if name is not None and name.type == "identifier" else ""
        if not tag or not tag[0].islower():
            return
        if tag in MODERN_ELEMENTS:
            self.emit(tag, FeatureType.MARKUP, node, offset)
        for child in node.children:
            if child.type != "jsx_attribute" or not child.named_children:
                continue
            attr_node = child.named_children[0]
            if attr_node.type != "property_identifier":
                continue
            attr = node_text(attr_node).lower()
            if attr in MODERN_ATTRIBUTES:
                self.emit(attr, FeatureType.MARKUP, child, offset)

    def _style_object(self, node: Node, offset: Offset) -> None:
        """Report the CSS properties of an object literal that looks like inline style."""
        keyed = [(prop, style_key(prop)) for prop in node.named_children]
        keyed = [(prop, key) for prop, key in keyed if key]
        if not any(style_property(key) in STYLE_OBJECT_PROPERTIES or "-" in key for _, key in keyed):
            return
        for prop, key in keyed:
            name = style_property(key)
            if name not in STYLE_OBJECT_PROPERTIES and "-" not in name:
                continue
            value = prop.child_by_field_name("value") if prop.type == "pair" else None
            context = f"{name}: {node_text(value).strip() or '...'}"
            self.emit(name, FeatureType.STYLE, prop, offset, context=context)

    # ------------------------------------------------------------------- style

    def walk_style(self, offset: Offset = HOST, data: Optional[bytes] = None) -> None:
        # stylesheets are walked with tree-sitter's error recovery in place
        tree = self.grammars.parse("css", self.source if data is None else data)
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            self._visit_style(node, offset)
            stack.extend(reversed(node.children))

    def _visit_style(self, node: Node, offset: Offset) -> None:
        kind = node.type
        if kind == "declaration":
            self._declaration(node, offset)
        elif kind == "rule_set":
            selectors = next((c for c in node.children if c.type == "selectors"), None)
            text = node_text(selectors)
            for token in MODERN_SELECTORS:
                if token in text:
                    self.emit(selector_feature(token), FeatureType.STYLE, node, offset, context=text.strip())
        elif kind == "at_rule" or kind.endswith("_statement"):
            if node.children:
                keyword = node_text(node.children[0])
                if keyword.startswith("@"):
                    header = node_text(node).split("{", 1)[0].strip()
                    self.emit(keyword.lower(), FeatureType.STYLE, node, offset, context=header)

    def _declaration(self, node: Node, offset: Offset) -> None:
        prop_node = next((c for c in node.children if c.type == "property_name"), None)
        if prop_node is None:
            return
        prop = node_text(prop_node)
        raw = node_text(node)
        value = raw.split(":", 1)[1] if ":" in raw else ""
        context = f"{prop}: {value.strip().rstrip(';').strip()}"
        self.emit(prop, FeatureType.STYLE, node, offset, context=context)

        seen = set()
        stack = list(node.children)
        while stack:
            child = stack.pop()
            if child.type == "call_expression":
                fn = next((c for c in child.children if c.type == "function_name"), None)
                fn_name = node_text(fn).lower()
                if fn_name in CSS_FUNCTIONS and fn_name not in seen:
                    seen.add(fn_name)
                    self.emit(f"{fn_name}()", FeatureType.STYLE, node, offset, context=context)
            stack.extend(child.children)

    # ------------------------------------------------------------------ markup

    def walk_document(self) -> None:
        """Walk an HTML-like host and every script/style region inside it."""
        tree = self.grammars.parse("html", self.source)
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            kind = node.type
            if kind == "script_element":
                self._embedded(node, script=True)
                continue
            if kind == "style_element":
                self._embedded(node, script=False)
                continue
            if kind == "element" and self._foreign_template(node):
                continue
            if kind in HTML_TAG_KINDS:
                self._html_tag(node)
            stack.extend(reversed(node.children))

    def _html_tag(self, tag: Node) -> None:
        for child in tag.children:
            if child.type == "tag_name":
                name = node_text(child).lower()
                if name in MODERN_ELEMENTS:
                    self.emit(name, FeatureType.MARKUP, tag, HOST)
            elif child.type == "attribute":
                attr_node = next((c for c in child.children if c.type == "attribute_name"), None)
                raw = node_text(attr_node)
                if not raw or raw.startswith(self.directive_prefixes):
                    continue
                attr = raw.lower()
                if attr in MODERN_ATTRIBUTES:
                    self.emit(attr, FeatureType.MARKUP, child, HOST)

    def _foreign_template(self, element: Node) -> bool:
        start = next((c for c in element.children if c.type == "start_tag"), None)
        if start is None:
            return False
        tag = next((c for c in start.children if c.type == "tag_name"), None)
        if node_text(tag).lower() != "template":
            return False
        return tag_attributes(start).get("lang", "html") not in ("", "html")

    def _embedded(self, element: Node, script: bool) -> None:
        start = next((c for c in element.children if c.type == "start_tag"), None)
        body = next((c for c in element.children if c.type == "raw_text"), None)
        if body is None:
            return
        attrs = tag_attributes(start) if start is not None else {}
        offset = Offset(row=body.start_point[0], column=body.start_point[1], byte=body.start_byte)
        data = self.source[body.start_byte:body.end_byte]

        if not script:
            if attrs.get("lang", "") in CSS_LANGS:
                self.walk_style(offset, data)
            return

        grammar = SCRIPT_LANGS.get(attrs.get("lang", ""))
        if "lang" not in attrs:
            grammar = SCRIPT_LANGS.get(attrs.get("type", ""))
        if grammar is None:
            return
        try:
            self.walk_script(grammar, offset, data)
        except DialectSyntaxError as exc:
            # one broken block does not hide the rest of the document
            self.logger.warning("Syntax error in %s: %s", self.path, exc)
