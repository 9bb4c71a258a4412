"""CLI entry point for the infix expression tree builder."""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from infix_tree.converter.rules import RulesError
from infix_tree.converter.translator import FORMATS, convert_expression, convert_lines, save_output
from infix_tree.parser.infix_parser import MalformedExpression

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description='Build an expression tree from space-separated infix tokens')
    p.add_argument('expression', nargs='?', help='Tokens separated by spaces, e.g. "( 1 + 2 ) * 3"')
    p.add_argument('--input', help='Path to a file with one expression per line')
    p.add_argument('--output', help='Write the rendered trees to this file instead of stdout')
    p.add_argument('--operators', nargs='+', metavar='OP',
                   help='Operator ordering, loosest first (overrides --rules)')
    p.add_argument('--rules', help='Path to a rules.yaml with an "operators" list')
    p.add_argument('--format', choices=sorted(FORMATS), default='sexpr', help='Output format')
    p.add_argument('--debug', action='store_true', help='Enable debug logging')
    return p


def main(argv=None) -> int:
    p = build_arg_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    if args.expression is None and not args.input:
        p.error('give an expression or --input')
    if args.expression is not None and args.input:
        p.error('give either an expression or --input, not both')
    if args.rules and not Path(args.rules).exists():
        print(f'Rules file not found: {args.rules}', file=sys.stderr)
        return 2

    try:
        if args.input:
            input_path = Path(args.input)
            if not input_path.exists():
                print(f'Input file not found: {input_path}', file=sys.stderr)
                return 2
            source = input_path.read_text(encoding='utf-8')
            out = convert_lines(source, operators=args.operators, fmt=args.format, rules_path=args.rules)
        else:
            out = convert_expression(args.expression, operators=args.operators, fmt=args.format,
                                     rules_path=args.rules)
    except MalformedExpression as e:
        print(f'Malformed expression: {e.reason}', file=sys.stderr)
        return 1
    except RulesError as e:
        print(f'Invalid rules: {e}', file=sys.stderr)
        return 2

    if args.output:
        save_output(out, args.output)
        logger.info('wrote %s', args.output)
        print(f'Wrote: {args.output}')
    else:
        print(out)
    return 0


if __name__ == '__main__':
    sys.exit(main())
