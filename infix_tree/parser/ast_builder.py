"""AST node and operator-frame types produced by the infix parser.

Trees are built from four frozen dataclasses: Operator, Grouped, Leaf and
Placeholder. Every child is owned by exactly one parent, so trees compare by
value and can be shared between threads once built.
"""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Iterator, Union


@dataclass(frozen=True)
class Operator:
    label: str
    left: 'Node'
    right: 'Node'


@dataclass(frozen=True)
class Grouped:
    inner: 'Node'


@dataclass(frozen=True)
class Leaf:
    token: str


@dataclass(frozen=True)
class Placeholder:
    pass


Node = Union[Operator, Grouped, Leaf, Placeholder]


@dataclass(frozen=True)
class OperatorFrame:
    label: str
    rank: int


@dataclass(frozen=True)
class Barrier:
    # number of nodes on the node stack when the group was opened
    depth: int


Frame = Union[OperatorFrame, Barrier]


def walk(node: Node) -> Iterator[Node]:
    """Yield every node of the tree in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Operator):
            stack.append(current.right)
            stack.append(current.left)
        elif isinstance(current, Grouped):
            stack.append(current.inner)


def count_nodes(node: Node) -> Counter:
    """Count nodes by variant name ('Operator', 'Grouped', 'Leaf', 'Placeholder')."""
    return Counter(type(n).__name__ for n in walk(node))

