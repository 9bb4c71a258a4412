"""Precedence-climbing parser for pre-tokenized infix expressions.

The parser keeps two stacks while it scans the tokens once from left to
right: a stack of finished sub-trees and a stack of pending operator frames.
An operator first reduces every pending operator of equal or higher rank,
which gives left-associativity, and is then pushed itself. ``(`` pushes a
barrier that stops those reductions until the matching ``)`` closes the group.

Operands that are missing at a syntactic boundary (start or end of input,
next to a parenthesis, next to another operator) are filled with a
Placeholder node instead of being reported as errors, so ``- 1`` parses as
``Operator('-', Placeholder(), Leaf('1'))``.

Any input the two stacks cannot resolve into exactly one tree raises
MalformedExpression; no partial tree is ever returned.
"""
from __future__ import annotations
import logging
from typing import Iterable, List, Optional

from .ast_builder import Barrier, Frame, Grouped, Leaf, Node, Operator, OperatorFrame, Placeholder
from .priority import CLOSE_GROUP, OPEN_GROUP, PriorityTable

logger = logging.getLogger(__name__)


class MalformedExpression(ValueError):
    """The token sequence does not reduce to a single expression tree."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def needs_placeholder(priorities: PriorityTable, token_before: Optional[str], token_after: Optional[str]) -> bool:
    """Decide whether an operand is missing between two tokens.

    ``None`` stands for start of input (before) or end of input (after). An
    operand is missing when the left side cannot end an operand (start, ``(``
    or an operator) and the right side cannot start one (end, ``)`` or an
    operator).
    """
    open_before = (
        token_before is None
        or token_before == OPEN_GROUP
        or priorities.is_operator(token_before)
    )
    open_after = (
        token_after is None
        or token_after == CLOSE_GROUP
        or priorities.is_operator(token_after)
    )
    return open_before and open_after


def _group_floor(frames: List[Frame]) -> int:
    for frame in reversed(frames):
        if isinstance(frame, Barrier):
            return frame.depth
    return 0


def _drain(nodes: List[Node], frames: List[Frame], threshold: int) -> None:
    """Reduce pending operators of rank >= threshold, stopping at a barrier."""
    floor = _group_floor(frames)
    while frames and isinstance(frames[-1], OperatorFrame) and frames[-1].rank >= threshold:
        frame = frames.pop()
        if len(nodes) - floor < 2:
            raise MalformedExpression(f'operator {frame.label!r} is missing an operand')
        right = nodes.pop()
        left = nodes.pop()
        nodes.append(Operator(frame.label, left, right))


def _close_group(nodes: List[Node], frames: List[Frame]) -> None:
    _drain(nodes, frames, 0)
    if not frames:
        raise MalformedExpression('unmatched ")"')
    barrier = frames.pop()
    if len(nodes) != barrier.depth + 1:
        raise MalformedExpression(
            f'group holds {len(nodes) - barrier.depth} expressions, expected 1'
        )
    nodes.append(Grouped(nodes.pop()))


class Parser:
    """Reusable parser configured with an operator ordering.

    ``operators`` lists operator tokens from loosest to tightest binding. The
    priority table is the only state kept between calls; the working stacks
    live inside each ``parse`` call, so one instance can be reused after a
    failed parse.
    """

    def __init__(self, operators: Iterable[str] = ()):
        self.priorities = PriorityTable(operators)

    def parse(self, tokens: Iterable[str]) -> Node:
        """Parse ``tokens`` into a tree, raising MalformedExpression on failure."""
        nodes: List[Node] = []
        frames: List[Frame] = []
        previous: Optional[str] = None
        for token in tokens:
            if needs_placeholder(self.priorities, previous, token):
                nodes.append(Placeholder())
            if token == OPEN_GROUP:
                frames.append(Barrier(len(nodes)))
            elif token == CLOSE_GROUP:
                _close_group(nodes, frames)
            else:
                rank = self.priorities.rank(token)
                if rank is None:
                    nodes.append(Leaf(token))
                else:
                    _drain(nodes, frames, rank)
                    frames.append(OperatorFrame(token, rank))
            previous = token

        if previous is None:
            raise MalformedExpression('empty expression')
        if needs_placeholder(self.priorities, previous, None):
            nodes.append(Placeholder())
        _drain(nodes, frames, 0)
        if frames:
            raise MalformedExpression('unmatched "("')
        if len(nodes) != 1:
            raise MalformedExpression(f'expression reduced to {len(nodes)} trees, expected 1')
        return nodes[0]

    def try_parse(self, tokens: Iterable[str]) -> Optional[Node]:
        """Like parse, but return None for malformed input."""
        tokens = list(tokens)
        try:
            return self.parse(tokens)
        except MalformedExpression as e:
            logger.debug('rejected %s: %s', ' '.join(tokens), e.reason)
            return None


def parse_tokens(tokens: Iterable[str], operators: Iterable[str]) -> Node:
    return Parser(operators).parse(tokens)


if __name__ == '__main__':
    parser = Parser(['+', '-', '*'])
    for sample in ('1 + 2 * 3', '- 1 * 2 + 3', '( - 1 ) * 2 + 3'):
        print(parser.parse(sample.split()))
