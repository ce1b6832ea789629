"""Stylesheet tree model and the accessors the engines read it through."""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from typing_extensions import TypeIs

from ..utils.error import MalformedAst

@dataclass
class Declaration:
    """A single ``property: value`` pair."""
    property: str
    value: str

@dataclass
class Rule:
    """A selector-qualified declaration block."""
    selectors: List[str]
    declarations: List[Declaration] = field(default_factory=list)

@dataclass
class MediaRule:
    """An ``@media`` block holding plain rules."""
    media: str
    rules: List[Rule] = field(default_factory=list)

@dataclass
class AtRule:
    """Any other at-rule, carried through unchanged.

    ``name`` is the keyword without ``@`` (``font-face``, ``import``),
    ``prelude`` the text between keyword and block, and ``body`` the raw
    block content, or None for statements like ``@import url(a.css);``.
    """
    name: str
    prelude: str = ''
    body: Optional[str] = None

Node = Union[Rule, MediaRule, AtRule]

@dataclass
class Stylesheet:
    """Root of a parsed stylesheet. Rule order is cascade order."""
    rules: List[Node] = field(default_factory=list)
    source: Optional[str] = None

def is_media_rule(node: Node) -> TypeIs[MediaRule]:
    """Returns True if node is an @media block."""
    return isinstance(node, MediaRule)

def is_at_rule(node: Node) -> TypeIs[AtRule]:
    """Returns True if node is a passthrough at-rule."""
    return isinstance(node, AtRule)

def rule_selectors(node: Rule) -> List[str]:
    return node.selectors

def rule_declarations(node: Rule) -> List[Declaration]:
    return node.declarations

def media_condition(node: MediaRule) -> str:
    return node.media

def media_rules(node: MediaRule) -> List[Rule]:
    return node.rules

def at_rule_name(node: AtRule) -> str:
    return node.name

def at_rule_prelude(node: AtRule) -> str:
    return node.prelude

def at_rule_body(node: AtRule) -> Optional[str]:
    return node.body

def _validate_at_rule(node: AtRule, where: str) -> None:
    if not isinstance(node.name, str) or not node.name:
        raise MalformedAst(f"{where}: at-rule has no name")
    if not isinstance(node.prelude, str):
        raise MalformedAst(f"{where}: at-rule prelude must be a string")
    if node.body is not None and not isinstance(node.body, str):
        raise MalformedAst(f"{where}: at-rule body must be a string")

def _validate_rule(rule, where: str) -> None:
    if not isinstance(rule, Rule):
        raise MalformedAst(f"{where}: expected a rule, got {type(rule).__name__}")
    if not isinstance(rule.selectors, list) or not rule.selectors:
        raise MalformedAst(f"{where}: rule has no selectors")
    if not all(isinstance(s, str) for s in rule.selectors):
        raise MalformedAst(f"{where}: selectors must be strings")
    if not isinstance(rule.declarations, list):
        raise MalformedAst(f"{where}: declarations must be a list")
    for decl in rule.declarations:
        if not isinstance(decl, Declaration):
            raise MalformedAst(f"{where}: expected a declaration, got {type(decl).__name__}")
        if not isinstance(decl.property, str) or not isinstance(decl.value, str):
            raise MalformedAst(f"{where}: declaration property and value must be strings")

def validate_stylesheet(ast, role: str = "AST") -> Stylesheet:
    """Check that ast has the stylesheet/rules shape filter and merge rely on.

    The whole tree is checked before anything touches it so a transformation
    never stops halfway.

    Args:
        ast: Tree to check
        role: Name used in error messages, e.g. "Target AST"

    Returns:
        The same stylesheet

    Raises:
        MalformedAst: If any node has the wrong shape
    """
    if not isinstance(ast, Stylesheet):
        raise MalformedAst(f"{role} has no root node stylesheet, got {type(ast).__name__}")
    if not isinstance(ast.rules, list):
        raise MalformedAst(f"{role} stylesheet has no rules list")

    for index, node in enumerate(ast.rules):
        where = f"{role} rule {index}"
        if isinstance(node, MediaRule):
            if not isinstance(node.media, str):
                raise MalformedAst(f"{where}: media condition must be a string")
            if not isinstance(node.rules, list):
                raise MalformedAst(f"{where}: media block has no rules list")
            for inner_index, inner in enumerate(node.rules):
                _validate_rule(inner, f"{where}.{inner_index}")
        elif isinstance(node, AtRule):
            _validate_at_rule(node, where)
        else:
            _validate_rule(node, where)

    return ast

# Exported names
__all__ = [
    'Declaration',
    'Rule',
    'MediaRule',
    'AtRule',
    'Node',
    'Stylesheet',
    'is_media_rule',
    'is_at_rule',
    'rule_selectors',
    'rule_declarations',
    'media_condition',
    'media_rules',
    'at_rule_name',
    'at_rule_prelude',
    'at_rule_body',
    'validate_stylesheet',
]
