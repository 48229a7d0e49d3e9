import logging

from basescan.core.models import FeatureType
from basescan.parsers.react import ReactParser
from basescan.parsers.regions import RegionWalker
from basescan.parsers.vanilla import VanillaParser


def test_optional_chaining_and_nullish_coalescing():
    features = VanillaParser().parse_features("const x = a?.b ?? c;\n", "app.js")
    assert sorted(f.feature for f in features) == ["nullish-coalescing", "optional-chaining"]
    for f in features:
        assert (f.type, f.line, f.column, f.file) == (FeatureType.SCRIPT, 1, 10, "app.js")
        assert f.context == "const x = a?.b ?? c;"


def test_calls_members_and_constructors():
    source = (
        "const ctrl = new AbortController();\n"
        "fetch('/api', { signal: ctrl.signal });\n"
        "navigator.serviceWorker.register('/sw.js');\n"
    )
    features = VanillaParser().parse_features(source, "app.mjs")
    assert [(f.feature, f.line, f.column) for f in features] == [
        ("AbortController", 1, 13),
        ("fetch", 2, 0),
        ("navigator.serviceWorker", 3, 0),
    ]


def test_modern_syntax_by_node_kind():
    source = (
        "class Counter {\n"
        "  #count = 0;\n"
        "  #bump() { return ++this.#count; }\n"
        "}\n"
        "const big = 9007199254740993n;\n"
        "const million = 1_000_000;\n"
        "const mod = await import('./mod.js');\n"
    )
    features = VanillaParser().parse_features(source, "modern.js")
    assert sorted((f.feature, f.line) for f in features) == [
        ("bigint", 5),
        ("dynamic-import", 7),
        ("numeric-separators", 6),
        ("private-fields", 2),
        ("private-methods", 3),
        ("top-level-await", 7),
    ]


def test_await_inside_a_function_is_not_top_level():
    source = "async function load() {\n  await fetch('/a');\n}\nconst f = async () => { await 1; };\n"
    features = VanillaParser().parse_features(source, "load.js")
    assert [f.feature for f in features] == ["fetch"]


def test_typescript_module():
    source = (
        "interface Opts { signal?: AbortSignal }\n"
        "const ctrl: AbortController = new AbortController();\n"
        "export const name = (o?: { n: string }) => o?.n;\n"
    )
    features = VanillaParser().parse_features(source, "app.ts")
    assert sorted(f.feature for f in features) == ["AbortController", "optional-chaining"]


def test_columns_are_character_offsets():
    features = VanillaParser().parse_features('const s = "é"; fetch(s);\n', "u.js")
    assert [(f.feature, f.column) for f in features] == [("fetch", 15)]


def test_syntax_error_yields_nothing_and_is_logged(caplog):
    caplog.set_level(logging.WARNING)
    assert VanillaParser().parse_features("const = ;\n", "broken.js") == []
    assert "Syntax error in broken.js" in caplog.text


def test_excluded_dialect_names_are_not_emitted(grammars):
    walker = RegionWalker(b"fetch('/a');\n", "x.js", grammars, excluded_apis=frozenset({"fetch"}))
    walker.walk_script("javascript")
    assert walker.features == []


def test_react_jsx_intrinsic_elements_only():
    source = (
        "import { useState } from 'react';\n"
        "export function App() {\n"
        "  const [open, setOpen] = useState(false);\n"
        "  return (\n"
        "    <dialog open={open}>\n"
        "      <img src=\"a.png\" loading=\"lazy\" />\n"
        "      <Widget loading=\"eager\" />\n"
        "    </dialog>\n"
        "  );\n"
        "}\n"
    )
    features = ReactParser().parse_features(source, "App.jsx")
    assert [(f.feature, f.type, f.line) for f in features] == [
        ("dialog", FeatureType.MARKUP, 5),
        ("loading", FeatureType.MARKUP, 6),
    ]


def test_react_tsx():
    source = (
        "export const View = (props: { q?: string }) => (\n"
        "  <search><input inputMode=\"numeric\" value={props?.q} /></search>\n"
        ");\n"
    )
    features = ReactParser().parse_features(source, "View.tsx")
    assert sorted(f.feature for f in features) == ["inputmode", "optional-chaining", "search"]


def test_parsers_claim_their_extensions():
    react, vanilla = ReactParser(), VanillaParser()
    assert react.can_parse("src/App.TSX")
    assert not react.can_parse("src/app.js")
    assert vanilla.can_parse("index.html")
    assert not vanilla.can_parse("App.vue")
    assert react.name() == "react"
    assert ".jsx" in react.supported_extensions()


def test_react_inline_style_object_properties():
    source = "export const A = () => <div style={{ display: 'grid', gap: 8, 'aspect-ratio': '1' }} />;\n"
    features = ReactParser().parse_features(source, "A.jsx")
    assert [(f.feature, f.type, f.line, f.column, f.context) for f in features] == [
        ("display", FeatureType.STYLE, 1, 37, "display: 'grid'"),
        ("gap", FeatureType.STYLE, 1, 54, "gap: 8"),
        ("aspect-ratio", FeatureType.STYLE, 1, 62, "aspect-ratio: '1'"),
    ]


def test_style_objects_map_camel_case_and_skip_plain_objects():
    source = (
        "const s = { aspectRatio: '16 / 9', backdropFilter: 'blur(4px)', '--accent': 'red' };\n"
        "const opts = { method: 'POST', headers: {} };\n"
    )
    features = ReactParser().parse_features(source, "Theme.jsx")
    assert [f.feature for f in features] == ["aspect-ratio", "backdrop-filter", "--accent"]
    assert VanillaParser().parse_features(source, "theme.js") == []
