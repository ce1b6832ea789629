"""Tests for the JSON AST codec."""

import orjson
import pytest

from ..core.codec import dumps_ast, loads_ast, stylesheet_from_dict, stylesheet_to_dict
from ..core.nodes import AtRule, Declaration, MediaRule, Rule, Stylesheet
from ..utils.error import MalformedAst

CSS_MODULE_AST = {
    'type': 'stylesheet',
    'stylesheet': {
        'source': 'main.css',
        'rules': [
            {'type': 'comment', 'comment': ' header '},
            {
                'type': 'rule',
                'selectors': ['.a', '.b'],
                'declarations': [
                    {'type': 'declaration', 'property': 'color', 'value': 'red'},
                    {'type': 'comment', 'comment': ' why '},
                ],
            },
            {
                'type': 'media',
                'media': 'all and (min-width: 768px)',
                'rules': [
                    {'type': 'rule', 'selectors': ['.c'], 'declarations': []},
                ],
            },
            {'type': 'keyframes', 'name': 'spin', 'keyframes': []},
        ],
    },
}

class TestCodec:
    """Tests for the css-module dict shape."""

    def test_from_dict(self):
        ast = stylesheet_from_dict(CSS_MODULE_AST)
        assert ast == Stylesheet([
            Rule(['.a', '.b'], [Declaration('color', 'red')]),
            MediaRule('all and (min-width: 768px)', [Rule(['.c'], [])]),
        ], source='main.css')

    def test_to_dict(self):
        data = stylesheet_to_dict(stylesheet_from_dict(CSS_MODULE_AST))
        assert data['type'] == 'stylesheet'
        assert data['stylesheet']['source'] == 'main.css'
        assert [r['type'] for r in data['stylesheet']['rules']] == ['rule', 'media']
        assert data['stylesheet']['rules'][0]['declarations'] == [
            {'type': 'declaration', 'property': 'color', 'value': 'red'}
        ]

    def test_json_round_trip(self):
        ast = stylesheet_from_dict(CSS_MODULE_AST)
        assert loads_ast(dumps_ast(ast)) == ast
        assert orjson.loads(dumps_ast(ast, indent=True)) == stylesheet_to_dict(ast)

    @pytest.mark.parametrize('data', [
        None,
        [],
        {'type': 'stylesheet'},
        {'type': 'rule', 'stylesheet': {'rules': []}},
        {'type': 'stylesheet', 'stylesheet': {'rules': {}}},
        {'type': 'stylesheet', 'stylesheet': {'rules': [{'type': 'rule'}]}},
        {'type': 'stylesheet', 'stylesheet': {'rules': [{'type': 'rule', 'selectors': []}]}},
        {'type': 'stylesheet', 'stylesheet': {'rules': [{'type': 'media', 'media': 'print'}]}},
    ])
    def test_malformed(self, data):
        with pytest.raises(MalformedAst):
            stylesheet_from_dict(data)

    def test_invalid_json(self):
        with pytest.raises(MalformedAst):
            loads_ast(b'{"type": ')

class TestAtRuleCodec:
    """Tests for at-rule nodes in the css-module shape."""

    def wrap(self, *rules):
        return {'type': 'stylesheet', 'stylesheet': {'rules': list(rules)}}

    def test_statement(self):
        ast = stylesheet_from_dict(self.wrap({'type': 'import', 'import': 'url(a.css)'}))
        assert ast.rules == [AtRule('import', 'url(a.css)')]

    def test_declaration_block(self):
        ast = stylesheet_from_dict(self.wrap({
            'type': 'font-face',
            'declarations': [
                {'type': 'declaration', 'property': 'font-family', 'value': 'X'},
                {'type': 'comment', 'comment': ' local '},
                {'type': 'declaration', 'property': 'src', 'value': 'url(x.woff2)'},
            ],
        }))
        assert ast.rules == [AtRule('font-face', '', 'font-family: X; src: url(x.woff2)')]

    def test_page_selectors_become_prelude(self):
        ast = stylesheet_from_dict(self.wrap({
            'type': 'page',
            'selectors': [':first'],
            'declarations': [{'type': 'declaration', 'property': 'margin', 'value': '1in'}],
        }))
        assert ast.rules == [AtRule('page', ':first', 'margin: 1in')]

    def test_nested_rules_become_body(self):
        ast = stylesheet_from_dict(self.wrap({
            'type': 'supports',
            'supports': '(display:grid)',
            'rules': [{'type': 'rule', 'selectors': ['.g'], 'declarations': [
                {'type': 'declaration', 'property': 'display', 'value': 'grid'},
            ]}],
        }))
        assert ast.rules == [AtRule('supports', '(display:grid)', '.g {\n  display: grid\n}')]

    def test_keyframes_are_dropped(self):
        ast = stylesheet_from_dict(self.wrap(
            {'type': 'keyframes', 'name': 'spin', 'keyframes': []},
            {'type': '-webkit-keyframes', 'name': 'spin', 'keyframes': []},
        ))
        assert ast.rules == []

    def test_to_dict(self):
        data = stylesheet_to_dict(Stylesheet([
            AtRule('import', 'url(a.css)'),
            AtRule('font-face', '', 'font-family: X'),
        ]))
        assert data['stylesheet']['rules'] == [
            {'type': 'import', 'import': 'url(a.css)'},
            {'type': 'font-face', 'body': 'font-family: X'},
        ]

    def test_json_round_trip(self):
        ast = Stylesheet([
            AtRule('charset', '"utf-8"'),
            AtRule('supports', '(display:grid)', '.g {\n  display: grid\n}'),
            AtRule('page', '', ''),
        ])
        assert loads_ast(dumps_ast(ast)) == ast

    @pytest.mark.parametrize('node', [
        {'type': 'import', 'import': 42},
        {'type': 'font-face', 'body': ['font-family: X']},
        {'type': 'font-face', 'declarations': [{'type': 'declaration', 'property': 'src'}]},
        {'type': 'supports', 'supports': '(display:grid)', 'rules': None},
    ])
    def test_malformed(self, node):
        with pytest.raises(MalformedAst):
            stylesheet_from_dict(self.wrap(node))
