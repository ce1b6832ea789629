"""Merge critical CSS fragments into one stylesheet."""

import logging
import threading
from dataclasses import replace
from typing import List, Optional

from typing_extensions import assert_never

from .matcher import is_at_rule_duplicate, is_rule_duplicate, media_equivalent
from .nodes import (
    AtRule,
    MediaRule,
    Node,
    Rule,
    Stylesheet,
    at_rule_name,
    is_at_rule,
    is_media_rule,
    media_condition,
    media_rules,
    rule_selectors,
    validate_stylesheet,
)
from ..utils.config import LEADING_AT_RULES

logger = logging.getLogger(__name__)

def merge_ast(target_ast: Stylesheet, fragment_ast: Stylesheet) -> Stylesheet:
    """Merge fragment_ast into target_ast, keeping target_ast's rules on duplicates.

    NOTE: Mutates target_ast. Both trees are checked before anything is
    changed.

    Args:
        target_ast: Stylesheet to merge into
        fragment_ast: Stylesheet whose rules are added

    Returns:
        target_ast, for chaining

    Raises:
        MalformedAst: If either tree lacks the stylesheet/rules shape
    """
    logger.debug("Merging into target AST")
    validate_stylesheet(target_ast, "Target AST")
    validate_stylesheet(fragment_ast, "Merge AST")

    # Copy so merging a stylesheet into itself does not walk a growing list
    for rule in list(fragment_ast.rules):
        merge_rule(rule, target_ast.rules)

    logger.debug(f"Merged target AST now holds {len(target_ast.rules)} rules")
    return target_ast

def merge_rule(rule: Node, target_rules: List[Node]) -> None:
    """Merge rule into target_rules unless an identical rule is already there.

    NOTE: Mutates target_rules. New rules are always appended, so their
    position in the cascade is the end of the list. The one exception is
    @charset, @import and @namespace, which only take effect ahead of every
    other rule.
    """
    if is_media_rule(rule):
        merge_media_rule(rule, target_rules)
    elif is_at_rule(rule):
        merge_at_rule(rule, target_rules)
    elif isinstance(rule, Rule):
        for target_rule in target_rules:
            if isinstance(target_rule, Rule) and is_rule_duplicate(target_rule, rule):
                logger.debug(f"Ignoring duplicate rule {', '.join(rule_selectors(rule))}")
                return
        target_rules.append(rule)
    else:
        assert_never(rule)

def merge_media_rule(rule: MediaRule, target_rules: List[Node]) -> None:
    """Merge a media block into the first block with an equivalent condition.

    Without such a block the incoming one is appended with its condition
    unchanged.
    """
    media = media_condition(rule)
    for target_rule in target_rules:
        if is_media_rule(target_rule) and media_equivalent(media, media_condition(target_rule)):
            for media_rule in list(media_rules(rule)):
                merge_rule(media_rule, media_rules(target_rule))
            return

    # Own list so later merges never write into the fragment
    target_rules.append(replace(rule, rules=list(media_rules(rule))))

def merge_at_rule(rule: AtRule, target_rules: List[Node]) -> None:
    """Add an at-rule unless one with the same keyword, prelude and body exists."""
    for target_rule in target_rules:
        if is_at_rule(target_rule) and is_at_rule_duplicate(target_rule, rule):
            logger.debug(f"Ignoring duplicate @{at_rule_name(rule)} rule")
            return

    if at_rule_name(rule) not in LEADING_AT_RULES:
        target_rules.append(rule)
        return

    position = 0
    while (position < len(target_rules) and is_at_rule(target_rules[position]) and
           at_rule_name(target_rules[position]) in LEADING_AT_RULES):
        position += 1
    target_rules.insert(position, rule)

class CriticalCssAccumulator:
    """Collects critical CSS of one extraction run into a single stylesheet.

    Fragments from several viewports or page states are merged in the order
    they are added. The accumulator owns its stylesheet; read it through
    ``stylesheet`` once all fragments are in.
    """

    def __init__(self, initial: Optional[Stylesheet] = None):
        self._stylesheet = validate_stylesheet(initial, "Initial AST") if initial is not None else Stylesheet()
        self._lock = threading.Lock()
        self.fragment_count = 0

    def add(self, fragment: Stylesheet) -> 'CriticalCssAccumulator':
        with self._lock:
            merge_ast(self._stylesheet, fragment)
            self.fragment_count += 1
        return self

    def add_all(self, fragments) -> 'CriticalCssAccumulator':
        for fragment in fragments:
            self.add(fragment)
        return self

    @property
    def stylesheet(self) -> Stylesheet:
        return self._stylesheet

    def __len__(self) -> int:
        return len(self._stylesheet.rules)

# Exported names
__all__ = [
    'merge_ast',
    'merge_rule',
    'merge_media_rule',
    'merge_at_rule',
    'CriticalCssAccumulator',
]
