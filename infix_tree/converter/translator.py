"""Translator that renders expression trees (from the parser) as text.

Supported formats: prefix s-expressions, fully parenthesized infix, JSON and
an indented outline. Placeholders render as ``_`` in the text formats.
"""
from __future__ import annotations
from typing import Iterable, List, Optional
import json
import logging
from pathlib import Path

from ..parser.ast_builder import Grouped, Leaf, Node, Operator
from ..parser.infix_parser import Parser
from .rules import load_operator_order

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = '_'


def to_sexpr(node: Node) -> str:
    if isinstance(node, Operator):
        return f'({node.label} {to_sexpr(node.left)} {to_sexpr(node.right)})'
    if isinstance(node, Grouped):
        return f'(group {to_sexpr(node.inner)})'
    if isinstance(node, Leaf):
        return node.token
    return PLACEHOLDER_TEXT


def to_infix(node: Node) -> str:
    """Fully parenthesized infix; explicit groups keep their own parentheses."""
    if isinstance(node, Operator):
        return f'({to_infix(node.left)} {node.label} {to_infix(node.right)})'
    if isinstance(node, Grouped):
        return f'({to_infix(node.inner)})'
    if isinstance(node, Leaf):
        return node.token
    return PLACEHOLDER_TEXT


def to_dict(node: Node) -> dict:
    if isinstance(node, Operator):
        return {'type': 'operator', 'label': node.label,
                'left': to_dict(node.left), 'right': to_dict(node.right)}
    if isinstance(node, Grouped):
        return {'type': 'grouped', 'inner': to_dict(node.inner)}
    if isinstance(node, Leaf):
        return {'type': 'leaf', 'token': node.token}
    return {'type': 'placeholder'}


def to_json(node: Node, indent: Optional[int] = 2) -> str:
    return json.dumps(to_dict(node), indent=indent)


def to_tree_text(node: Node, depth: int = 0) -> str:
    """Indented outline with one node per line."""
    pad = '    ' * depth
    if isinstance(node, Operator):
        lines = [f'{pad}Operator {node.label}',
                 to_tree_text(node.left, depth + 1),
                 to_tree_text(node.right, depth + 1)]
        return '\n'.join(lines)
    if isinstance(node, Grouped):
        return f'{pad}Grouped\n{to_tree_text(node.inner, depth + 1)}'
    if isinstance(node, Leaf):
        return f'{pad}Leaf {node.token}'
    return f'{pad}Placeholder'


FORMATS = {
    'sexpr': to_sexpr,
    'infix': to_infix,
    'json': to_json,
    'tree': to_tree_text,
}


def _renderer(fmt: str):
    try:
        return FORMATS[fmt]
    except KeyError:
        raise ValueError(f'unknown output format {fmt!r}, expected one of {", ".join(FORMATS)}') from None


def render(node: Node, fmt: str = 'sexpr') -> str:
    return _renderer(fmt)(node)


def resolve_operators(operators: Optional[Iterable[str]] = None, rules_path: Optional[str] = None) -> List[str]:
    # explicit operators > provided rules file > packaged default rules
    if operators is not None:
        return list(operators)
    return load_operator_order(rules_path)


def convert_expression(text: str, operators: Optional[Iterable[str]] = None, fmt: str = 'sexpr',
                       rules_path: Optional[str] = None) -> str:
    """Parse one whitespace-separated expression and render it in ``fmt``.

    Raises MalformedExpression when the tokens do not form an expression.
    """
    parser = Parser(resolve_operators(operators, rules_path))
    tree = parser.parse(text.split())
    return render(tree, fmt)


def convert_lines(source: str, operators: Optional[Iterable[str]] = None, fmt: str = 'sexpr',
                  rules_path: Optional[str] = None) -> str:
    """Convert every non-blank line of ``source`` as its own expression.

    JSON output is a single list with one tree per line.
    """
    renderer = _renderer(fmt)
    parser = Parser(resolve_operators(operators, rules_path))
    trees = [parser.parse(line.split()) for line in source.splitlines() if line.strip()]
    logger.info('converted %d expressions to %s', len(trees), fmt)
    if fmt == 'json':
        return json.dumps([to_dict(t) for t in trees], indent=2)
    return '\n'.join(renderer(t) for t in trees)


def save_output(code: str, output_path: str) -> None:
    p = Path(output_path)
    p.write_text(code, encoding='utf-8')


if __name__ == '__main__':
    sample = '''1 + 2 * 3
- 1 * 2 + 3
( 1 + 2 ) * 3
'''
    print(convert_lines(sample, operators=['+', '-', '*']))
