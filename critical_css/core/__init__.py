"""Core functionality for critical CSS filtering and merging."""

from .nodes import Declaration, Rule, MediaRule, AtRule, Stylesheet
from .matcher import (
    selectors_equal,
    media_equivalent,
    declarations_equal,
    is_rule_duplicate,
    at_rules_match,
    is_at_rule_duplicate,
    ForceIncludeSelector,
    matches_force_include,
    strip_kept_pseudo_selectors,
)
from .filter import filter_ast
from .merge import merge_ast, CriticalCssAccumulator
from .parser import parse, stringify
from .codec import stylesheet_from_dict, stylesheet_to_dict, loads_ast, dumps_ast
from .transformator import CssTransformator

__all__ = [
    'Declaration',
    'Rule',
    'MediaRule',
    'AtRule',
    'Stylesheet',
    'selectors_equal',
    'media_equivalent',
    'declarations_equal',
    'is_rule_duplicate',
    'at_rules_match',
    'is_at_rule_duplicate',
    'ForceIncludeSelector',
    'matches_force_include',
    'strip_kept_pseudo_selectors',
    'filter_ast',
    'merge_ast',
    'CriticalCssAccumulator',
    'parse',
    'stringify',
    'stylesheet_from_dict',
    'stylesheet_to_dict',
    'loads_ast',
    'dumps_ast',
    'CssTransformator',
]
