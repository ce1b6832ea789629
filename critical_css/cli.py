#!/usr/bin/env python3
"""
Command-line interface for Critical CSS.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from critical_css.core.codec import dumps_ast, loads_ast
from critical_css.core.merge import CriticalCssAccumulator
from critical_css.core.nodes import Stylesheet
from critical_css.core.parser import parse
from critical_css.core.transformator import CssTransformator
from critical_css.utils.config import DEFAULT_INDENT, VERSION
from critical_css.utils.error import CriticalCssError
from critical_css.utils.file import safe_read_file, safe_write_file
from critical_css.utils.logging import setup_logging

logger = logging.getLogger(__name__)

def load_stylesheet(path: Path, as_json: bool = False, strict: bool = False) -> Stylesheet:
    """Read a stylesheet from a CSS file or, with as_json, a JSON AST file."""
    content = safe_read_file(str(path))
    if as_json:
        return loads_ast(content)
    return parse(content, silent=not strict, source=str(path))

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='critical-css',
        description='Filter and merge critical CSS'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {VERSION}'
    )

    # Shared options
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        '-o', '--output',
        help='Output file (default: stdout)',
        type=Path
    )
    common.add_argument(
        '--json',
        help='Read and write JSON ASTs instead of CSS',
        action='store_true'
    )
    common.add_argument(
        '--compress',
        help='Minify the output CSS',
        action='store_true'
    )
    common.add_argument(
        '--indent',
        help='Indentation used in the output CSS',
        type=str,
        default=DEFAULT_INDENT
    )
    common.add_argument(
        '--strict',
        help='Fail on CSS syntax errors instead of skipping them',
        action='store_true'
    )
    common.add_argument(
        '-v', '--verbose',
        help='Enable verbose output',
        action='store_true'
    )
    common.add_argument(
        '--log-file',
        help='Also write log messages to this file',
        type=str
    )

    commands = parser.add_subparsers(dest='command', required=True)

    filter_parser = commands.add_parser(
        'filter',
        parents=[common],
        help='Keep only the rules whose selectors appear in a source stylesheet'
    )
    filter_parser.add_argument(
        '-s', '--source',
        help='Stylesheet holding the used selectors',
        type=Path,
        required=True
    )
    filter_parser.add_argument(
        'target',
        help='Stylesheet to filter',
        type=Path
    )

    merge_parser = commands.add_parser(
        'merge',
        parents=[common],
        help='Merge critical CSS fragments into one stylesheet'
    )
    merge_parser.add_argument(
        'fragments',
        help='Fragments to merge, earlier ones win on duplicates',
        type=Path,
        nargs='+'
    )

    return parser.parse_args(argv)

def run(args: argparse.Namespace) -> Stylesheet:
    """Run the selected command and return the resulting stylesheet."""
    if args.command == 'filter':
        source_ast = load_stylesheet(args.source, args.json, args.strict)
        target_ast = load_stylesheet(args.target, args.json, args.strict)
        return CssTransformator().filter(source_ast, target_ast)

    accumulator = CriticalCssAccumulator()
    for path in args.fragments:
        accumulator.add(load_stylesheet(path, args.json, args.strict))
    logger.info(f"Merged {accumulator.fragment_count} fragments into {len(accumulator)} rules")
    return accumulator.stylesheet

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        result = run(args)

        if args.json:
            output = dumps_ast(result, indent=True).decode('utf-8')
        else:
            transformator = CssTransformator({
                'indent': args.indent,
                'compress': args.compress
            })
            output = transformator.get_css_from_ast(result)

        if args.output:
            safe_write_file(str(args.output), output)
            logger.info(f"CSS saved to {args.output}")
        else:
            sys.stdout.write(output)
            if output and not output.endswith('\n'):
                sys.stdout.write('\n')

        return 0

    except CriticalCssError as e:
        logger.error(f"Error: {str(e)}")
        return 1

if __name__ == '__main__':
    sys.exit(main())
