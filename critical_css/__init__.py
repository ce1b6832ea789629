"""Filter and merge critical CSS collected from several page states."""

from .utils.config import VERSION as __version__
from .core import (
    Declaration,
    Rule,
    MediaRule,
    AtRule,
    Stylesheet,
    filter_ast,
    merge_ast,
    CriticalCssAccumulator,
    parse,
    stringify,
    CssTransformator,
)
from .utils.error import CriticalCssError, ParseFailure, MalformedAst

__all__ = [
    'Declaration',
    'Rule',
    'MediaRule',
    'AtRule',
    'Stylesheet',
    'filter_ast',
    'merge_ast',
    'CriticalCssAccumulator',
    'parse',
    'stringify',
    'CssTransformator',
    'CriticalCssError',
    'ParseFailure',
    'MalformedAst',
]
