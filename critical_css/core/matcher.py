"""Predicates used to match rules, media conditions and selectors."""

import re
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence

from typing_extensions import Literal

from .nodes import (
    AtRule,
    Declaration,
    Rule,
    at_rule_body,
    at_rule_name,
    at_rule_prelude,
    rule_declarations,
    rule_selectors,
)
from ..utils.config import MEDIA_ALL_PREFIX, PSEUDO_SELECTORS_TO_KEEP
from ..utils.error import ConfigurationError

logger = logging.getLogger(__name__)

# Regular expression flags as written in browser-side configuration
_REGEXP_FLAGS = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    # no effect on a single re.search over str
    'g': 0,
    'u': 0,
    'y': 0,
    'd': 0,
}

# Match the kept pseudo selectors whether one or two colons are used
_PSEUDO_SELECTOR_RE = re.compile(
    '|'.join(':?' + re.escape(s) for s in PSEUDO_SELECTORS_TO_KEEP)
)

def selectors_equal(a: Sequence[str], b: Sequence[str]) -> bool:
    """Returns True if both selector lists hold the same strings in the same order."""
    return list(a) == list(b)

def _strip_all_prefix(media: str) -> str:
    if media.startswith(MEDIA_ALL_PREFIX):
        return media[len(MEDIA_ALL_PREFIX):]
    return media

def media_equivalent(m1: str, m2: str) -> bool:
    """Returns True if two media conditions select the same block.

    The "all" media type is the default and often elided by producers, so
    "all and (min-width: 1px)" matches "(min-width: 1px)". Only one literal
    leading prefix is removed; the media query grammar is not parsed.
    """
    stripped_1 = _strip_all_prefix(m1)
    stripped_2 = _strip_all_prefix(m2)
    return (
        m1 == m2 or
        m1 == stripped_2 or
        stripped_1 == m2 or
        stripped_1 == stripped_2
    )

def declarations_equal(d1: Sequence[Declaration], d2: Sequence[Declaration]) -> bool:
    """Returns True if both declaration lists hold the same pairs in any order.

    Every declaration of d1 needs a (property, value) counterpart in d2 and
    both lists must have the same length.
    """
    if len(d1) != len(d2):
        return False

    matches = 0
    for decl_1 in d1:
        for decl_2 in d2:
            if decl_2.property == decl_1.property and decl_2.value == decl_1.value:
                matches += 1
                break

    return matches == len(d1)

def is_rule_duplicate(rule_1: Rule, rule_2: Rule) -> bool:
    """Returns True if rule_1 has the same selectors and declarations as rule_2."""
    if not selectors_equal(rule_selectors(rule_1), rule_selectors(rule_2)):
        return False
    return declarations_equal(rule_declarations(rule_1), rule_declarations(rule_2))

def at_rules_match(node_1: AtRule, node_2: AtRule) -> bool:
    """Returns True if both at-rules share keyword and prelude.

    This is the at-rule counterpart of selector equality: the block content
    is not compared.
    """
    return (
        at_rule_name(node_1) == at_rule_name(node_2) and
        at_rule_prelude(node_1) == at_rule_prelude(node_2)
    )

def is_at_rule_duplicate(node_1: AtRule, node_2: AtRule) -> bool:
    """Returns True if both at-rules have the same keyword, prelude and body."""
    return at_rules_match(node_1, node_2) and at_rule_body(node_1) == at_rule_body(node_2)

@dataclass
class ForceIncludeSelector:
    """A selector that is kept regardless of visibility analysis.

    Either a literal selector string or a regular expression source with
    its flags.
    """
    kind: Literal['literal', 'regexp']
    value: str
    flags: str = ''
    _pattern: Optional[re.Pattern] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.kind not in ('literal', 'regexp'):
            raise ConfigurationError(f"Unknown force include kind: {self.kind!r}")
        if not isinstance(self.value, str):
            raise ConfigurationError(f"Force include value must be a string, got {type(self.value).__name__}")
        if self.kind == 'regexp':
            try:
                self._pattern = re.compile(self.value, _translate_flags(self.flags))
            except re.error as e:
                raise ConfigurationError(f"Invalid regular expression {self.value!r}: {e}")

    @classmethod
    def literal(cls, selector: str) -> 'ForceIncludeSelector':
        return cls('literal', selector)

    @classmethod
    def regexp(cls, source: str, flags: str = '') -> 'ForceIncludeSelector':
        return cls('regexp', source, flags)

    @classmethod
    def from_value(cls, value: Any) -> 'ForceIncludeSelector':
        """Build an entry from a configuration value.

        Accepts a selector string, a compiled pattern, or a mapping such as
        ``{"kind": "regexp", "source": "^\\.nav", "flags": "i"}``. The
        ``{"type": "RegExp", ...}`` and ``{"value": ".x"}`` spellings are
        accepted too.

        Raises:
            ConfigurationError: If the value cannot be understood
        """
        if isinstance(value, ForceIncludeSelector):
            return value
        if isinstance(value, str):
            return cls.literal(value)
        if isinstance(value, re.Pattern):
            entry = cls('regexp', value.pattern)
            entry._pattern = value
            return entry
        if isinstance(value, dict):
            kind = str(value.get('kind') or value.get('type') or 'literal').lower()
            if kind == 'regexp':
                if 'source' not in value:
                    raise ConfigurationError(f"Regular expression entry without source: {value!r}")
                return cls.regexp(value['source'], value.get('flags', ''))
            if kind == 'literal' and 'value' in value:
                return cls.literal(value['value'])
        raise ConfigurationError(f"Invalid force include entry: {value!r}")

    def matches(self, selector: str) -> bool:
        if self._pattern is not None:
            return self._pattern.search(selector) is not None
        return self.value == selector

def _translate_flags(flags: str) -> int:
    result = 0
    for flag in flags or '':
        if flag not in _REGEXP_FLAGS:
            raise ConfigurationError(f"Unsupported regular expression flag: {flag!r}")
        result |= _REGEXP_FLAGS[flag]
    return result

def load_force_include(values: Iterable[Any]) -> List[ForceIncludeSelector]:
    """Normalize a configured force include list, keeping its order."""
    entries = [ForceIncludeSelector.from_value(value) for value in values]
    logger.debug(f"Loaded {len(entries)} force include selectors")
    return entries

def matches_force_include(selector: str, include_list: Iterable[Any]) -> bool:
    """Returns True if selector equals a literal entry or matches a regexp entry."""
    return any(
        ForceIncludeSelector.from_value(entry).matches(selector)
        for entry in include_list
    )

def strip_kept_pseudo_selectors(selector: str) -> str:
    """Remove pseudo selectors like ::before that a live document cannot be queried for."""
    return _PSEUDO_SELECTOR_RE.sub('', selector)

# Exported names
__all__ = [
    'selectors_equal',
    'media_equivalent',
    'declarations_equal',
    'is_rule_duplicate',
    'at_rules_match',
    'is_at_rule_duplicate',
    'ForceIncludeSelector',
    'load_force_include',
    'matches_force_include',
    'strip_kept_pseudo_selectors',
]
