import pytest

from basescan.core.errors import GrammarLoadError
from basescan.core.grammars import GRAMMAR_SOURCES, GrammarRegistry


@pytest.mark.parametrize("name", sorted(GRAMMAR_SOURCES))
def test_bundled_grammars_load(grammars, name):
    assert grammars.is_available(name)
    assert grammars.acquire(name) is grammars.acquire(name)


def test_parse_returns_a_tree(grammars):
    tree = grammars.parse("javascript", b"const a = 1;\n")
    assert tree.root_node.type == "program"
    assert not tree.root_node.has_error


def test_failed_grammar_is_remembered_and_logged_once(caplog):
    registry = GrammarRegistry({"broken": ("basescan_no_such_grammar_module", "language")})
    with pytest.raises(GrammarLoadError):
        registry.acquire("broken")
    with pytest.raises(GrammarLoadError):
        registry.acquire("broken")
    assert not registry.is_available("broken")
    assert caplog.text.count("Could not load broken grammar") == 1
    assert registry.loaded() == {"broken": False}


def test_reset_forgets_everything():
    registry = GrammarRegistry({"css": GRAMMAR_SOURCES["css"], "broken": ("basescan_no_such_grammar_module", "language")})
    registry.acquire("css")
    assert not registry.is_available("broken")
    assert registry.loaded() == {"css": True, "broken": False}
    registry.reset()
    assert registry.loaded() == {}
