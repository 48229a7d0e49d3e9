from __future__ import annotations
import logging
from typing import List, Optional, Type

from ..parsers.base import DialectParser
from ..parsers.react import ReactParser
from ..parsers.svelte import SvelteParser
from ..parsers.vanilla import VanillaParser
from ..parsers.vue import VueParser
from .grammars import GrammarRegistry

# Dispatch order: the first parser claiming an extension handles it.
PARSER_CLASSES: List[Type[DialectParser]] = [
    ReactParser,
    VueParser,
    SvelteParser,
    VanillaParser,
]


def default_parsers(
    grammars: Optional[GrammarRegistry] = None,
    logger: Optional[logging.Logger] = None,
) -> List[DialectParser]:
    return [cls(grammars, logger=logger) for cls in PARSER_CLASSES]
