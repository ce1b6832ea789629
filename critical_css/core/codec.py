"""Convert stylesheet trees to and from the JSON shape of the css module.

The shape is ``{"type": "stylesheet", "stylesheet": {"rules": [...]}}`` with
rule nodes typed ``"rule"`` or ``"media"`` and declaration nodes typed
``"declaration"``. Any other node type becomes an at-rule named after it,
except comments and keyframes, which are dropped the same way the parser
drops them.
"""

import logging
from typing import Any, Dict, List, Union

import orjson

from .nodes import AtRule, Declaration, MediaRule, Node, Rule, Stylesheet, validate_stylesheet
from .parser import stringify
from ..utils.config import DROPPED_AT_RULES
from ..utils.error import MalformedAst

logger = logging.getLogger(__name__)

def _require_list(node: Dict[str, Any], key: str, where: str) -> List[Any]:
    value = node.get(key)
    if not isinstance(value, list):
        raise MalformedAst(f"{where}: missing '{key}' list")
    return value

def _declarations_from_dict(node: Dict[str, Any], where: str) -> List[Declaration]:
    declarations = []
    for decl in node.get('declarations') or []:
        if not isinstance(decl, dict):
            raise MalformedAst(f"{where}: declaration must be an object")
        if decl.get('type', 'declaration') != 'declaration':
            continue
        prop, value = decl.get('property'), decl.get('value')
        if not isinstance(prop, str) or not isinstance(value, str):
            raise MalformedAst(f"{where}: declaration property and value must be strings")
        declarations.append(Declaration(prop, value))
    return declarations

def _rule_from_dict(node: Dict[str, Any], where: str) -> Rule:
    selectors = _require_list(node, 'selectors', where)
    return Rule(list(selectors), _declarations_from_dict(node, where))

def _media_from_dict(node: Dict[str, Any], where: str) -> MediaRule:
    rules = []
    for index, inner in enumerate(_require_list(node, 'rules', where)):
        if isinstance(inner, dict) and inner.get('type') == 'rule':
            rules.append(_rule_from_dict(inner, f"{where}.{index}"))
    return MediaRule(node.get('media'), rules)

def _at_rule_from_dict(node: Dict[str, Any], node_type: str, where: str) -> AtRule:
    """Build an at-rule from css-module nodes such as import, font-face or supports.

    The prelude sits under the node's own type key (``{"type": "import",
    "import": "url(a.css)"}``) or, for @page, in ``selectors``. A block is
    taken from ``body``, or rendered from ``declarations`` or nested
    ``rules``.
    """
    if node_type in node:
        prelude = node[node_type]
    elif isinstance(node.get('selectors'), list):
        prelude = ', '.join(node['selectors'])
    else:
        prelude = ''

    if 'body' in node:
        body = node['body']
    elif 'declarations' in node:
        body = '; '.join(
            f"{d.property}: {d.value}" for d in _declarations_from_dict(node, where)
        )
    elif 'rules' in node:
        inner = _nodes_from_list(_require_list(node, 'rules', where), where)
        body = stringify(Stylesheet(inner))
    else:
        body = None
    return AtRule(node_type, prelude, body)

def _nodes_from_list(items: List[Any], where: str) -> List[Node]:
    nodes: List[Node] = []
    for index, node in enumerate(items):
        node_where = f"{where} rule {index}"
        if not isinstance(node, dict):
            raise MalformedAst(f"{node_where} must be an object")
        node_type = node.get('type')
        if node_type == 'rule':
            nodes.append(_rule_from_dict(node, node_where))
        elif node_type == 'media':
            nodes.append(_media_from_dict(node, node_where))
        elif not isinstance(node_type, str) or node_type == 'comment' or node_type.endswith(DROPPED_AT_RULES):
            logger.debug(f"Dropping {node_type} node")
        else:
            nodes.append(_at_rule_from_dict(node, node_type, node_where))
    return nodes

def stylesheet_from_dict(data: Any) -> Stylesheet:
    """Build a stylesheet tree from a css-module style dict.

    Raises:
        MalformedAst: If the dict lacks the stylesheet/rules shape
    """
    if not isinstance(data, dict) or data.get('type') != 'stylesheet':
        raise MalformedAst("AST has no root node of type stylesheet")
    body = data.get('stylesheet')
    if not isinstance(body, dict):
        raise MalformedAst("AST has no root node stylesheet")

    rules = _nodes_from_list(_require_list(body, 'rules', "Stylesheet"), "Stylesheet")
    return validate_stylesheet(Stylesheet(rules, source=body.get('source')))

def _rule_to_dict(rule: Rule) -> Dict[str, Any]:
    return {
        'type': 'rule',
        'selectors': list(rule.selectors),
        'declarations': [
            {'type': 'declaration', 'property': d.property, 'value': d.value}
            for d in rule.declarations
        ],
    }

def _at_rule_to_dict(node: AtRule) -> Dict[str, Any]:
    data: Dict[str, Any] = {'type': node.name}
    if node.prelude:
        data[node.name] = node.prelude
    if node.body is not None:
        data['body'] = node.body
    return data

def stylesheet_to_dict(stylesheet: Stylesheet) -> Dict[str, Any]:
    """Convert a stylesheet tree to a css-module style dict.

    At-rules keep their prelude under their own type key and their block
    as raw ``body`` text.
    """
    validate_stylesheet(stylesheet, "Stylesheet")
    rules = []
    for node in stylesheet.rules:
        if isinstance(node, MediaRule):
            rules.append({
                'type': 'media',
                'media': node.media,
                'rules': [_rule_to_dict(r) for r in node.rules],
            })
        elif isinstance(node, AtRule):
            rules.append(_at_rule_to_dict(node))
        else:
            rules.append(_rule_to_dict(node))

    body: Dict[str, Any] = {'rules': rules}
    if stylesheet.source is not None:
        body['source'] = stylesheet.source
    return {'type': 'stylesheet', 'stylesheet': body}

def loads_ast(data: Union[str, bytes]) -> Stylesheet:
    """Read a stylesheet tree from JSON text.

    Raises:
        MalformedAst: If the text is not JSON or lacks the stylesheet shape
    """
    try:
        parsed = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise MalformedAst(f"AST is not valid JSON: {e}") from e
    return stylesheet_from_dict(parsed)

def dumps_ast(stylesheet: Stylesheet, indent: bool = False) -> bytes:
    """Write a stylesheet tree as JSON."""
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(stylesheet_to_dict(stylesheet), option=option)

# Exported functions
__all__ = [
    'stylesheet_from_dict',
    'stylesheet_to_dict',
    'loads_ast',
    'dumps_ast',
]
