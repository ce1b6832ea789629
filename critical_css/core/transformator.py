"""Entry point bundling parsing, serialization, filter and merge."""

import logging
from typing import Any, Dict, Iterable, Optional

from .filter import filter_ast
from .matcher import matches_force_include, strip_kept_pseudo_selectors
from .merge import merge_ast
from .nodes import Stylesheet
from .parser import parse, stringify
from ..utils.config import DEFAULT_PARSE_OPTIONS, DEFAULT_STRINGIFY_OPTIONS
from ..utils.error import ConfigurationError, ParseFailure

logger = logging.getLogger(__name__)

class CssTransformator:
    """Transforms critical CSS between text and stylesheet trees.

    Options are merged over the defaults in ``utils.config``; ``silent`` and
    ``source`` apply to parsing, the remaining keys to serialization.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = {**DEFAULT_PARSE_OPTIONS, **DEFAULT_STRINGIFY_OPTIONS}
        for key, value in (options or {}).items():
            if key not in self.options:
                raise ConfigurationError(f"Unknown option: {key}")
            self.options[key] = value

    def get_ast(self, css_content: str) -> Optional[Stylesheet]:
        """Parse css_content, returning None if it cannot be parsed at all."""
        try:
            logger.debug("Parsing CSS to AST")
            ast = parse(
                css_content,
                silent=self.options['silent'],
                source=self.options['source']
            )
            logger.debug("CSS successfully parsed to AST")
            return ast
        except ParseFailure as e:
            logger.error(f"Error parsing CSS: {e}")
            return None

    def get_css_from_ast(self, ast: Stylesheet) -> str:
        logger.debug("Creating CSS string from AST")
        return stringify(
            ast,
            indent=self.options['indent'],
            compress=self.options['compress'],
            sourcemap=self.options['sourcemap'],
            input_sourcemaps=self.options['input_sourcemaps']
        )

    def filter(self, source_ast: Optional[Stylesheet], target_ast: Stylesheet) -> Stylesheet:
        return filter_ast(source_ast, target_ast)

    def merge(self, target_ast: Stylesheet, fragment_ast: Stylesheet) -> Stylesheet:
        return merge_ast(target_ast, fragment_ast)

    def matches_force_include(self, selector: str, force_include: Iterable[Any]) -> bool:
        return matches_force_include(selector, force_include)

    def strip_pseudo_selectors(self, selector: str) -> str:
        return strip_kept_pseudo_selectors(selector)

# Exported class
__all__ = ['CssTransformator']
