"""Reduce a stylesheet to the rules another stylesheet uses."""

import logging
from typing import List, Optional

from typing_extensions import assert_never

from .matcher import at_rules_match, media_equivalent, selectors_equal
from .nodes import (
    AtRule,
    Node,
    Rule,
    Stylesheet,
    is_at_rule,
    is_media_rule,
    media_condition,
    media_rules,
    rule_selectors,
    validate_stylesheet,
)

logger = logging.getLogger(__name__)

def _has_matching_selectors(rule: Rule, candidates: List[Rule]) -> bool:
    selectors = rule_selectors(rule)
    return any(selectors_equal(rule_selectors(c), selectors) for c in candidates)

def _pool_media_rules(media: str, source_rules: List[Node]) -> List[Rule]:
    """Collect the inner rules of every source media block matching media."""
    pooled = []
    for source_rule in source_rules:
        if is_media_rule(source_rule) and media_equivalent(media, media_condition(source_rule)):
            pooled.extend(media_rules(source_rule))
    return pooled

def filter_ast(source_ast: Optional[Stylesheet], target_ast: Stylesheet) -> Stylesheet:
    """Filter target_ast down to the rules whose selectors appear in source_ast.

    Plain rules are kept when a top-level source rule has exactly the same
    selector list. Media blocks are matched against every source media block
    with an equivalent condition; their surviving rules are kept and a block
    left empty is dropped. Other at-rules are handled like plain rules, with
    keyword and prelude standing in for the selectors. Relative order is
    preserved.

    The returned stylesheet is target_ast itself with its rule lists
    replaced; source_ast is not modified.

    Args:
        source_ast: Stylesheet holding the used selectors, may be None
        target_ast: Stylesheet to reduce

    Returns:
        The filtered target stylesheet

    Raises:
        MalformedAst: If either tree lacks the stylesheet/rules shape
    """
    logger.debug("Filtering AST from source")
    validate_stylesheet(target_ast, "Target AST")
    if source_ast is None:
        source_ast = Stylesheet()
    validate_stylesheet(source_ast, "Source AST")

    source_rules = source_ast.rules
    plain_source_rules = [r for r in source_rules if isinstance(r, Rule)]
    source_at_rules: List[AtRule] = [r for r in source_rules if is_at_rule(r)]

    kept = []
    for target_rule in target_ast.rules:
        if is_media_rule(target_rule):
            pooled = _pool_media_rules(media_condition(target_rule), source_rules)
            target_rule.rules = [
                inner for inner in media_rules(target_rule)
                if _has_matching_selectors(inner, pooled)
            ]
            if media_rules(target_rule):
                kept.append(target_rule)
            else:
                logger.debug(f"Dropping empty media block '{media_condition(target_rule)}'")
        elif is_at_rule(target_rule):
            if any(at_rules_match(target_rule, s) for s in source_at_rules):
                kept.append(target_rule)
        elif isinstance(target_rule, Rule):
            if _has_matching_selectors(target_rule, plain_source_rules):
                kept.append(target_rule)
        else:
            assert_never(target_rule)

    logger.debug(f"Filtered AST from {len(target_ast.rules)} to {len(kept)} rules")
    target_ast.rules = kept
    return target_ast

# Exported functions
__all__ = ['filter_ast']
