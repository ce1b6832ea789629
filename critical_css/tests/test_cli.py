"""Tests for the command-line interface."""

import orjson

from ..cli import main, parse_args
from ..core.nodes import Rule
from ..core.parser import parse

class TestCli:
    """Tests for the critical-css command."""

    def test_parse_args(self):
        args = parse_args(['merge', 'a.css', 'b.css', '--compress'])
        assert args.command == 'merge'
        assert [str(p) for p in args.fragments] == ['a.css', 'b.css']
        assert args.compress is True

    def test_filter(self, tmp_path, sample_css, used_css):
        full = tmp_path / 'full.css'
        used = tmp_path / 'used.css'
        output = tmp_path / 'out' / 'critical.css'
        full.write_text(sample_css)
        used.write_text(used_css)

        assert main(['filter', '--source', str(used), str(full), '-o', str(output)]) == 0

        result = parse(output.read_text())
        assert [r.selectors for r in result.rules if isinstance(r, Rule)] == [
            ['body'], ['.header', '.header--sticky']
        ]

    def test_merge(self, tmp_path):
        desktop = tmp_path / 'desktop.css'
        mobile = tmp_path / 'mobile.css'
        output = tmp_path / 'critical.css'
        desktop.write_text(".a { color: red } @media (min-width: 768px) { .c { color: green } }")
        mobile.write_text(".a { color: red } @media (min-width: 768px) { .d { color: yellow } }")

        assert main(['merge', str(desktop), str(mobile), '-o', str(output)]) == 0

        result = parse(output.read_text())
        assert len(result.rules) == 2
        assert [r.selectors for r in result.rules[1].rules] == [['.c'], ['.d']]

    def test_merge_json(self, tmp_path):
        fragment = tmp_path / 'fragment.json'
        output = tmp_path / 'critical.json'
        fragment.write_bytes(orjson.dumps({
            'type': 'stylesheet',
            'stylesheet': {'rules': [
                {'type': 'rule', 'selectors': ['.a'], 'declarations': [
                    {'type': 'declaration', 'property': 'color', 'value': 'red'}
                ]},
            ]},
        }))

        assert main(['merge', str(fragment), str(fragment), '--json', '-o', str(output)]) == 0

        data = orjson.loads(output.read_bytes())
        assert len(data['stylesheet']['rules']) == 1

    def test_stdout(self, tmp_path, capsys):
        fragment = tmp_path / 'fragment.css'
        fragment.write_text(".a { color: red }")

        assert main(['merge', str(fragment), '--compress']) == 0

        assert capsys.readouterr().out == '.a{color:red}\n'

    def test_missing_file(self, tmp_path):
        assert main(['merge', str(tmp_path / 'missing.css')]) == 1

    def test_malformed_json(self, tmp_path):
        fragment = tmp_path / 'fragment.json'
        fragment.write_text('{"type": "rule"}')
        assert main(['merge', str(fragment), '--json']) == 1
