"""Intermediate node used while the syntax tree is being built."""

from __future__ import annotations

import enum
from collections import defaultdict, deque
from typing import Any, Optional


class RuleType(enum.IntEnum):
    """Grammar rules and token types a node can collect items under."""

    NONE = 0
    EOF = enum.auto()
    EMPTY = enum.auto()
    COMMENT = enum.auto()
    TAG_LINE = enum.auto()
    FEATURE_LINE = enum.auto()
    RULE_LINE = enum.auto()
    BACKGROUND_LINE = enum.auto()
    SCENARIO_LINE = enum.auto()
    EXAMPLES_LINE = enum.auto()
    STEP_LINE = enum.auto()
    DOC_STRING_SEPARATOR = enum.auto()
    TABLE_ROW = enum.auto()
    LANGUAGE = enum.auto()
    OTHER = enum.auto()
    GHERKIN_DOCUMENT = enum.auto()
    FEATURE = enum.auto()
    FEATURE_HEADER = enum.auto()
    RULE = enum.auto()
    RULE_HEADER = enum.auto()
    BACKGROUND = enum.auto()
    SCENARIO_DEFINITION = enum.auto()
    SCENARIO = enum.auto()
    EXAMPLES_DEFINITION = enum.auto()
    EXAMPLES = enum.auto()
    EXAMPLES_TABLE = enum.auto()
    STEP = enum.auto()
    STEP_ARG = enum.auto()
    DATA_TABLE = enum.auto()
    DOC_STRING = enum.auto()
    TAGS = enum.auto()
    DESCRIPTION_HELPER = enum.auto()
    DESCRIPTION = enum.auto()


class AstNode:
    """A node that queues the items it receives, separately per rule type."""

    def __init__(self, rule_type: RuleType) -> None:
        self.rule_type = rule_type
        self._items: defaultdict[RuleType, deque[Any]] = defaultdict(deque)

    def add(self, rule_type: RuleType, obj: Any) -> None:
        """Queue ``obj`` under ``rule_type``."""
        self._items[rule_type].append(obj)

    def get_single(self, rule_type: RuleType) -> Optional[Any]:
        """Remove and return the first item queued under ``rule_type``, or None."""
        queue = self._items[rule_type]
        return queue.popleft() if queue else None

    def get_items(self, rule_type: RuleType) -> deque[Any]:
        """Return the live queue of items under ``rule_type``."""
        return self._items[rule_type]

    def __repr__(self) -> str:
        return f"AstNode({self.rule_type.name})"