import pytest

from basescan.core.models import DetectedFeature, FeatureType
from basescan.core.registry import FeatureRegistry
from basescan.core.validator import FeatureValidator


def raw(name, kind=FeatureType.SCRIPT, context="", line=1, column=0, file="app.js"):
    return DetectedFeature(name, kind, context, line, column, file)


@pytest.fixture()
def validator(registry):
    return FeatureValidator(registry)


def test_exact_lookup_rewrites_to_canonical_id(validator):
    out = validator.validate_features([raw("container-type", FeatureType.STYLE, "container-type: inline-size")])
    assert [f.feature for f in out] == ["container-queries"]
    assert out[0].context == "container-type: inline-size"
    assert out[0].type is FeatureType.STYLE


def test_dotted_names_fall_back_to_member_then_object(validator):
    out = validator.validate_features([
        raw("navigator.serviceWorker", line=1),
        raw("window.fetch", line=2),
        raw("crypto.unknownThing", line=3),
        raw("navigator.somethingNew", line=4),
    ])
    assert [(f.feature, f.line) for f in out] == [
        ("serviceworkers", 1),
        ("fetch", 2),
        ("cryptography", 3),
    ]


def test_custom_property_prefix(validator):
    out = validator.validate_features([raw("--brand-color", FeatureType.STYLE, "--brand-color: red")])
    assert [f.feature for f in out] == ["css-variables"]


def test_direct_registry_id_is_accepted():
    registry = FeatureRegistry.from_mapping({"view-transitions": {"name": "View transitions"}})
    out = FeatureValidator(registry).validate_features([raw("view-transitions")])
    assert [f.feature for f in out] == ["view-transitions"]


def test_unknown_and_unregistered_features_are_dropped():
    registry = FeatureRegistry.from_mapping({"fetch": {"name": "Fetch"}})
    validator = FeatureValidator(registry)
    out = validator.validate_features([raw("totallyUnknown"), raw("ResizeObserver"), raw("fetch")])
    assert [f.feature for f in out] == ["fetch"]


def test_framework_names_lose_even_when_registered():
    registry = FeatureRegistry.from_mapping({
        "useFoo": {"name": "not a platform feature"},
        "v-model": {"name": "nor this"},
        "fetch": {"name": "Fetch"},
    })
    out = FeatureValidator(registry).validate_features([raw("useFoo"), raw("v-model"), raw("fetch")])
    assert [f.feature for f in out] == ["fetch"]


def test_empty_registry_rejects_everything():
    validator = FeatureValidator(FeatureRegistry({}))
    assert validator.validate_features([raw("fetch"), raw("optional-chaining")]) == []


def test_deduplicates_on_id_file_line_column(validator):
    out = validator.validate_features([
        raw("document.querySelector", context="a", line=3, column=2),
        raw("querySelectorAll", context="b", line=3, column=2),
        raw("querySelector", line=3, column=2, file="other.js"),
        raw("querySelector", line=4, column=2),
    ])
    assert [(f.feature, f.file, f.line, f.context) for f in out] == [
        ("queryselector", "app.js", 3, "a"),
        ("queryselector", "other.js", 3, ""),
        ("queryselector", "app.js", 4, ""),
    ]


def test_context_is_truncated_and_shaped(validator):
    long_context = "x" * 150
    out = validator.validate_features([
        raw("fetch", context=long_context),
        raw("gap", FeatureType.STYLE, "gap", line=2),
        raw("dialog", FeatureType.MARKUP, "dialog open", line=3),
        raw("popover", FeatureType.MARKUP, "<div popover>", line=4),
    ])
    by_line = {f.line: f.context for f in out}
    assert by_line[1] == "x" * 100 + "..."
    assert by_line[2] == "gap: ..."
    assert by_line[3] == "<dialog open>"
    assert by_line[4] == "<div popover>"


def test_order_is_preserved_across_batches(validator):
    features = [raw("fetch", line=i) for i in range(1, 26)]
    out = validator.validate_features(features, concurrency=3)
    assert [f.line for f in out] == list(range(1, 26))


def test_non_list_input_raises(validator):
    with pytest.raises(TypeError):
        validator.validate_features(tuple([raw("fetch")]))
    with pytest.raises(TypeError):
        validator.validate_features(None)


def test_malformed_item_is_dropped_not_raised(validator, caplog):
    out = validator.validate_features([object(), raw("fetch")])
    assert [f.feature for f in out] == ["fetch"]
    assert "Dropping feature" in caplog.text


def test_registry_queries(validator):
    assert validator.is_feature_supported("fetch")
    assert not validator.is_feature_supported("not-a-feature")
    data = validator.get_feature_data("fetch")
    assert data["id"] == "fetch"
    assert data["baseline"] == "high"
    assert validator.get_feature_data("not-a-feature") is None
    assert "container-queries" in validator.supported_features()
