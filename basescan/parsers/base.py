from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple, Union

from ..core.errors import DialectSyntaxError, GrammarLoadError
from ..core.grammars import GrammarRegistry, get_grammars
from ..core.models import DetectedFeature
from .regions import RegionWalker


class DialectParser:
    """Base class for dialect parsers.

    Subclasses set NAME, SUPPORTED_EXTENSIONS and REQUIRED_GRAMMARS, and the
    dialect vocabulary (EXCLUDED_APIS, DIRECTIVE_PREFIXES, INLINE_STYLES) at
    the top, then implement ``extract``. ``parse_features`` wraps ``extract`` so that one
    bad file never escapes as an exception.
    """
    NAME: str = "base"
    SUPPORTED_EXTENSIONS: List[str] = []  # lower-case, with the leading dot
    REQUIRED_GRAMMARS: List[str] = []
    EXCLUDED_APIS: FrozenSet[str] = frozenset()
    DIRECTIVE_PREFIXES: Tuple[str, ...] = ()
    INLINE_STYLES: bool = False  # report CSS properties in style object literals

    def __init__(
        self,
        grammars: Optional[GrammarRegistry] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.grammars = grammars or get_grammars()
        base_logger = logger or logging.getLogger("basescan")
        self.logger = base_logger.getChild(self.NAME)

    def name(self) -> str:
        return self.NAME

    def supported_extensions(self) -> List[str]:
        return list(self.SUPPORTED_EXTENSIONS)

    def required_grammars(self) -> List[str]:
        return list(self.REQUIRED_GRAMMARS)

    def can_parse(self, path: Union[str, Path]) -> bool:
        return Path(path).suffix.lower() in self.SUPPORTED_EXTENSIONS

    def is_available(self) -> bool:
        return all(self.grammars.is_available(g) for g in self.REQUIRED_GRAMMARS)

    def parse_features(self, content: str, path: Union[str, Path]) -> List[DetectedFeature]:
        file_path = str(path)
        try:
            return self.extract(content, file_path)
        except DialectSyntaxError as exc:
            self.logger.warning("Syntax error in %s: %s", file_path, exc)
        except GrammarLoadError as exc:
            # already reported once by the grammar registry
            self.logger.debug("Skipping %s: %s", file_path, exc)
        except Exception as exc:
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.exception("Could not parse %s", file_path)
            else:
                self.logger.warning("Could not parse %s: %s", file_path, exc)
        return []

    def extract(self, content: str, path: str) -> List[DetectedFeature]:
        raise NotImplementedError("extract must be implemented in subclasses")

    def walker(self, content: str, path: str) -> RegionWalker:
        return RegionWalker(
            content.encode("utf-8"),
            path,
            self.grammars,
            excluded_apis=self.EXCLUDED_APIS,
            directive_prefixes=self.DIRECTIVE_PREFIXES,
            inline_styles=self.INLINE_STYLES,
            logger=self.logger,
        )
