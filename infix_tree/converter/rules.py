"""Loading operator orderings from YAML rules files.

A rules file lists operators from loosest to tightest binding::

    operators:
      - "+"
      - "-"
      - "*"

When no path is given the ``rules.yaml`` shipped next to the package is used.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).resolve().parent.parent / 'rules.yaml'


class RulesError(ValueError):
    """A rules file is unreadable or does not describe an operator ordering."""


def parse_operator_order(text: str) -> List[str]:
    """Read an inline ordering such as ``"+ - * /"`` (whitespace separated)."""
    return text.split()


def load_operator_order(rules_path: Optional[Union[str, Path]] = None) -> List[str]:
    path = Path(rules_path) if rules_path else DEFAULT_RULES_PATH
    try:
        with open(path, 'r', encoding='utf-8') as f:
            rules = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RulesError(f'{path}: invalid YAML: {e}') from e

    if not isinstance(rules, dict) or 'operators' not in rules:
        raise RulesError(f'{path}: expected a mapping with an "operators" list')
    operators = rules['operators']
    if not isinstance(operators, list) or not all(isinstance(op, str) for op in operators):
        raise RulesError(f'{path}: "operators" must be a list of strings')
    logger.info('loaded %d operators from %s', len(operators), path)
    return operators
