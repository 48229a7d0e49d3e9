"""Process-scoped tree-sitter grammars.

Grammar packages are imported the first time a dialect asks for them and the
resulting :class:`tree_sitter.Language` objects are kept for the rest of the
process. A grammar that fails to load is remembered as failed, logged once,
and every later ``acquire`` re-raises the same :class:`GrammarLoadError`.
``reset`` drops both the loaded grammars and the remembered failures so tests
can start from a clean slate.
"""
from __future__ import annotations

import importlib
import logging
import threading
from typing import Dict, Tuple

from tree_sitter import Language, Parser, Tree

from .errors import GrammarLoadError

logger = logging.getLogger("basescan").getChild("grammars")

# grammar name -> (module, factory attribute)
GRAMMAR_SOURCES: Dict[str, Tuple[str, str]] = {
    "javascript": ("tree_sitter_javascript", "language"),
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
    "css": ("tree_sitter_css", "language"),
    "html": ("tree_sitter_html", "language"),
}


class GrammarRegistry:
    def __init__(self, sources: Dict[str, Tuple[str, str]] = GRAMMAR_SOURCES) -> None:
        self._sources = dict(sources)
        self._lock = threading.Lock()
        self._languages: Dict[str, Language] = {}
        self._failures: Dict[str, GrammarLoadError] = {}

    def acquire(self, name: str) -> Language:
        with self._lock:
            language = self._languages.get(name)
            if language is not None:
                return language
            failure = self._failures.get(name)
            if failure is not None:
                raise failure
            try:
                module_name, factory = self._sources[name]
                module = importlib.import_module(module_name)
                language = Language(getattr(module, factory)())
            except Exception as exc:
                failure = GrammarLoadError(name, exc)
                self._failures[name] = failure
                logger.warning("Could not load %s grammar; dependent dialects are disabled: %s", name, exc)
                raise failure from exc
            self._languages[name] = language
            return language

    def is_available(self, name: str) -> bool:
        try:
            self.acquire(name)
        except GrammarLoadError:
            return False
        return True

    def parse(self, name: str, source: bytes) -> Tree:
        # Parser instances are cheap and not shared between threads
        return Parser(self.acquire(name)).parse(source)

    def loaded(self) -> Dict[str, bool]:
        with self._lock:
            status = {name: False for name in self._failures}
            status.update({name: True for name in self._languages})
            return status

    def reset(self) -> None:
        with self._lock:
            self._languages.clear()
            self._failures.clear()


_REGISTRY = GrammarRegistry()


def get_grammars() -> GrammarRegistry:
    return _REGISTRY
