"""Operator priority table.

Rank is the operator's position in the ordering given by the caller, so
operators listed later bind tighter. Parentheses are never operators.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

OPEN_GROUP = '('
CLOSE_GROUP = ')'
RESERVED = (OPEN_GROUP, CLOSE_GROUP)


class PriorityTable:
    def __init__(self, operators: Iterable[str] = ()):
        ranks: Dict[str, int] = {}
        for index, op in enumerate(operators):
            if op in RESERVED:
                logger.warning('ignoring reserved token %r in operator ordering', op)
                continue
            if op in ranks:
                # last occurrence wins
                logger.debug('operator %r listed twice, rank %d -> %d', op, ranks[op], index)
            ranks[op] = index
        self._ranks = ranks
        logger.debug('priority table built: %s', ranks)

    def rank(self, token: str) -> Optional[int]:
        """Return the binding rank of ``token``, or None when it is not an operator."""
        return self._ranks.get(token)

    def is_operator(self, token: Optional[str]) -> bool:
        return token is not None and token in self._ranks

    def __contains__(self, token: object) -> bool:
        return token in self._ranks

    def __iter__(self) -> Iterator[str]:
        # loosest first
        return iter(sorted(self._ranks, key=self._ranks.__getitem__))

    def __len__(self) -> int:
        return len(self._ranks)

    def __repr__(self) -> str:
        return f'PriorityTable({list(self)!r})'
