"""Parse CSS text into stylesheet trees with cssutils and write trees back as text."""

import logging
import re
import textwrap
from typing import List, Optional

import csscompressor
import cssutils

from .nodes import (
    AtRule,
    Declaration,
    MediaRule,
    Node,
    Rule,
    Stylesheet,
    at_rule_body,
    at_rule_name,
    at_rule_prelude,
    is_at_rule,
    is_media_rule,
    media_condition,
    media_rules,
    rule_declarations,
    rule_selectors,
    validate_stylesheet,
)
from ..utils.config import DEFAULT_INDENT, DROPPED_AT_RULES
from ..utils.error import ParseFailure, SerializationError

logger = logging.getLogger(__name__)

# Disable cssutils logging
cssutils.log.setLevel(logging.CRITICAL)

# Keyword, prelude and optional block of a serialized at-rule
_AT_RULE_RE = re.compile(r'^@([-\w]+)\s*(.*?)\s*(?:;|\{(.*)\})\s*$', re.DOTALL)

def _declarations(style) -> List[Declaration]:
    declarations = []
    for prop in style.getProperties(all=True):
        value = prop.value
        if prop.priority:
            value = f"{value} !{prop.priority}"
        declarations.append(Declaration(prop.name, value))
    return declarations

def _declaration_text(declarations: List[Declaration]) -> str:
    return '; '.join(f"{decl.property}: {decl.value}" for decl in declarations)

def _style_rule(css_rule) -> Optional[Rule]:
    selectors = [selector.selectorText for selector in css_rule.selectorList]
    if not selectors:
        logger.debug("Skipping style rule without selectors")
        return None
    return Rule(selectors, _declarations(css_rule.style))

def _media_rule(css_rule) -> MediaRule:
    rules = []
    for inner in css_rule.cssRules:
        if inner.type == inner.STYLE_RULE:
            rule = _style_rule(inner)
            if rule is not None:
                rules.append(rule)
        elif inner.type != inner.COMMENT:
            logger.debug(f"Skipping nested {inner.typeString} inside @media")
    return MediaRule(css_rule.media.mediaText, rules)

def _at_rule(css_rule) -> Optional[AtRule]:
    match = _AT_RULE_RE.match(css_rule.cssText)
    if match is None:
        logger.debug(f"Dropping unreadable {css_rule.typeString} rule")
        return None

    name, prelude, body = match.groups()
    name = name.lower()
    if name.endswith(DROPPED_AT_RULES):
        logger.debug(f"Dropping @{name} rule")
        return None

    # @font-face and @page carry declarations cssutils already parsed
    style = getattr(css_rule, 'style', None)
    if style is not None:
        body = _declaration_text(_declarations(style))
    elif body is not None:
        body = body.strip()
    return AtRule(name, prelude, body)

def parse(css_text: str, silent: bool = True, source: Optional[str] = None) -> Stylesheet:
    """Parse CSS text into a stylesheet tree.

    Style rules and @media blocks become rules and media rules. Other
    at-rules such as @font-face, @import or @supports are kept as AtRule
    nodes holding their text. @keyframes and comments are dropped.

    Args:
        css_text: CSS source
        silent: Recover from syntax errors with a best-effort tree
        source: Provenance tag kept on the stylesheet for diagnostics

    Returns:
        Parsed stylesheet

    Raises:
        ParseFailure: If no tree can be produced
    """
    if not isinstance(css_text, str):
        raise ParseFailure(f"CSS content must be a string, got {type(css_text).__name__}")

    logger.debug(f"Parsing CSS from {source or '<string>'}")
    parser = cssutils.CSSParser(
        loglevel=logging.CRITICAL,
        raiseExceptions=not silent,
        validate=False
    )
    try:
        sheet = parser.parseString(css_text, href=source)
    except Exception as e:
        raise ParseFailure(f"Failed to parse CSS from {source or '<string>'}: {e}") from e

    rules: List[Node] = []
    for css_rule in sheet.cssRules:
        if css_rule.type == css_rule.STYLE_RULE:
            rule = _style_rule(css_rule)
            if rule is not None:
                rules.append(rule)
        elif css_rule.type == css_rule.MEDIA_RULE:
            rules.append(_media_rule(css_rule))
        elif css_rule.type == css_rule.COMMENT:
            continue
        else:
            at_rule = _at_rule(css_rule)
            if at_rule is not None:
                rules.append(at_rule)

    logger.debug(f"Parsed {len(rules)} rules from {source or '<string>'}")
    return Stylesheet(rules, source=source)

def _rule_text(rule: Rule, indent: str) -> str:
    selectors = ', '.join(rule_selectors(rule))
    declarations = rule_declarations(rule)
    if not declarations:
        return f"{selectors} {{}}"
    lines = ';\n'.join(f"{indent}{decl.property}: {decl.value}" for decl in declarations)
    return f"{selectors} {{\n{lines}\n}}"

def _media_rule_text(node: MediaRule, indent: str) -> str:
    head = f"@media {media_condition(node)}"
    inner = [textwrap.indent(_rule_text(rule, indent), indent) for rule in media_rules(node)]
    if not inner:
        return f"{head} {{}}"
    return f"{head} {{\n" + '\n'.join(inner) + "\n}"

def _at_rule_text(node: AtRule, indent: str) -> str:
    prelude = at_rule_prelude(node)
    head = f"@{at_rule_name(node)} {prelude}" if prelude else f"@{at_rule_name(node)}"
    body = at_rule_body(node)
    if body is None:
        return f"{head};"
    if not body:
        return f"{head} {{}}"
    return f"{head} {{\n{textwrap.indent(body, indent)}\n}}"

def stringify(stylesheet: Stylesheet, indent: str = DEFAULT_INDENT, compress: bool = False,
              sourcemap: bool = True, input_sourcemaps: bool = True) -> str:
    """Serialize a stylesheet tree to CSS text.

    Selectors, media conditions, at-rule text and declarations are written
    exactly as the tree holds them, so parsing the output of a parsed tree
    gives the same tree back. Only whitespace follows ``indent``. With
    ``compress`` the text is then minified by csscompressor, which may
    shorten values. Source map options are accepted for interface
    compatibility; no map is produced.

    Args:
        stylesheet: Tree to serialize
        indent: Indentation of declarations and media block contents
        compress: Minify the output with csscompressor
        sourcemap: Ignored
        input_sourcemaps: Ignored

    Returns:
        CSS text

    Raises:
        MalformedAst: If the tree lacks the stylesheet/rules shape
        SerializationError: If minification fails
    """
    validate_stylesheet(stylesheet, "Stylesheet")

    blocks = []
    for node in stylesheet.rules:
        if is_media_rule(node):
            blocks.append(_media_rule_text(node, indent))
        elif is_at_rule(node):
            blocks.append(_at_rule_text(node, indent))
        else:
            blocks.append(_rule_text(node, indent))
    css_text = '\n'.join(blocks)

    if compress:
        try:
            css_text = csscompressor.compress(css_text)
        except Exception as e:
            raise SerializationError(f"Failed to compress stylesheet: {e}") from e
    return css_text

# Exported functions
__all__ = ['parse', 'stringify']
