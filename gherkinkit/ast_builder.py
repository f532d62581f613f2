"""Builds the syntax tree from the tokens and rule events of a parser."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from gherkinkit.ast import (
    Background,
    Comment,
    DataTable,
    DocString,
    ExampleTable,
    Feature,
    GherkinDocument,
    Location,
    Rule,
    Scenario,
    Step,
    StepArgument,
    TableCell,
    TableRow,
    Tag,
)
from gherkinkit.ast_node import AstNode, RuleType


@dataclass(frozen=True)
class MatchedItem:
    """A piece of a matched line, such as a tag or a table cell, with its column."""

    column: int
    text: str


@dataclass
class Token:
    """A line of the source as matched by the token matcher."""

    matched_type: RuleType
    location: Location
    matched_keyword: Optional[str] = None
    matched_text: Optional[str] = None
    matched_language: Optional[str] = None
    matched_items: list[MatchedItem] = field(default_factory=list)
    line: Optional[str] = None


class InconsistentCellCountError(ValueError):
    """A table row has a different number of cells than the rows before it."""

    def __init__(self, location: Location) -> None:
        self.location = location
        super().__init__(
            f"({location.line}:{location.column}): inconsistent cell count"
        )


@dataclass
class _ExamplesTableOnly:
    header: Optional[TableRow]
    body: list[TableRow]


@dataclass
class _Description:
    text: Optional[str]


def _is_blank(token: Token) -> bool:
    raw = token.line if token.line is not None else (token.matched_text or "")
    return not raw.strip()


def _table_row(token: Token) -> TableRow:
    line = token.location.line
    cells = [
        TableCell(Location(line, item.column), item.text)
        for item in token.matched_items
    ]
    return TableRow(token.location, cells)


def _table_header(node: AstNode) -> Optional[TableRow]:
    token = node.get_single(RuleType.TABLE_ROW)
    return _table_row(token) if token is not None else None


def _table_body(node: AstNode) -> list[TableRow]:
    queue = node.get_items(RuleType.TABLE_ROW)
    rows = [_table_row(token) for token in queue]
    queue.clear()
    return rows


def _ensure_cell_count(rows: list[TableRow], header: Optional[TableRow]) -> None:
    if not rows:
        return
    expected = len(header.cells) if header is not None else len(rows[0].cells)
    for row in rows:
        if len(row.cells) != expected:
            raise InconsistentCellCountError(
                Location(row.location.line, row.location.column)
            )


def _tags(node: AstNode) -> list[Tag]:
    tags_node = node.get_single(RuleType.TAGS)
    if tags_node is None:
        return []
    tags: list[Tag] = []
    queue = tags_node.get_items(RuleType.TAG_LINE)
    while queue:
        token = queue.popleft()
        line = token.location.line
        tags.extend(
            Tag(Location(line, item.column), item.text)
            for item in token.matched_items
        )
    return tags


def _description_text(node: AstNode) -> Optional[str]:
    lines = list(node.get_items(RuleType.OTHER))
    last = 0
    for number, token in enumerate(lines, start=1):
        if not _is_blank(token):
            last = number
    if last == 0:
        return None
    return "\n".join(token.matched_text or "" for token in lines[:last])


def _doc_string_text(node: AstNode) -> Optional[str]:
    lines = node.get_items(RuleType.OTHER)
    if not lines:
        return None
    return "\n".join(token.matched_text or "" for token in lines)


def _description(node: AstNode) -> Optional[str]:
    description = node.get_single(RuleType.DESCRIPTION)
    return description.text if description is not None else None


def _steps(node: AstNode) -> list[Step]:
    queue = node.get_items(RuleType.STEP)
    steps = list(queue)
    queue.clear()
    return steps


def _step_argument(node: AstNode) -> Optional[StepArgument]:
    argument = node.get_single(RuleType.DATA_TABLE)
    if argument is None:
        argument = node.get_single(RuleType.DOC_STRING)
    return argument


def _examples(node: AstNode) -> list[ExampleTable]:
    queue = node.get_items(RuleType.EXAMPLES_DEFINITION)
    examples = list(queue)
    queue.clear()
    return examples


def _children(node: AstNode) -> list[Union[Background, Scenario, Rule]]:
    children: list[Union[Background, Scenario, Rule]] = []
    background = node.get_single(RuleType.BACKGROUND)
    if background is not None:
        children.append(background)
    for rule_type in (RuleType.SCENARIO_DEFINITION, RuleType.RULE):
        queue = node.get_items(rule_type)
        children.extend(queue)
        queue.clear()
    return children


class AstBuilder:
    """Collects tokens into nodes and turns finished rules into syntax objects."""

    def __init__(self) -> None:
        self._stack: list[AstNode] = []
        self._comments: deque[Token] = deque()
        self.reset()

    def reset(self) -> None:
        """Discard everything built so far and start a new document."""
        self._stack = [AstNode(RuleType.NONE)]
        self._comments = deque()

    @property
    def _current_node(self) -> Optional[AstNode]:
        return self._stack[-1] if self._stack else None

    def build(self, token: Token) -> None:
        """Take a matched token: comments are kept aside, others go to the open node."""
        if token.matched_type == RuleType.COMMENT:
            self._comments.append(token)
            return
        node = self._current_node
        if node is not None:
            node.add(RuleType(token.matched_type), token)

    def start_rule(self, rule_type: RuleType) -> None:
        """Open a node for ``rule_type``."""
        self._stack.append(AstNode(rule_type))

    def end_rule(self, rule_type: RuleType) -> None:
        """Close the open node and hand its result to the node around it."""
        node = self._stack.pop()
        obj = self._transform(node)
        self._stack[-1].add(rule_type, obj)

    def get_result(self, uri: Optional[str]) -> Optional[GherkinDocument]:
        """Return the finished document, labelled with ``uri``."""
        document = self._current_node.get_single(RuleType.GHERKIN_DOCUMENT)
        if document is not None:
            document.uri = uri
        return document

    def _comments_list(self) -> list[Comment]:
        comments = [
            Comment(token.location, token.matched_text) for token in self._comments
        ]
        self._comments.clear()
        return comments

    def _transform(self, node: AstNode) -> Any:
        rule_type = node.rule_type
        if rule_type == RuleType.STEP:
            token = node.get_single(RuleType.STEP_LINE)
            return Step(
                token.location,
                token.matched_keyword,
                token.matched_text,
                _step_argument(node),
            )
        if rule_type == RuleType.DATA_TABLE:
            rows = _table_body(node)
            _ensure_cell_count(rows, None)
            return DataTable(rows[0].location, rows)
        if rule_type == RuleType.DOC_STRING:
            token = node.get_single(RuleType.DOC_STRING_SEPARATOR)
            return DocString(
                token.location,
                delimiter=token.matched_keyword,
                content_type=token.matched_text or None,
                content=_doc_string_text(node),
            )
        if rule_type == RuleType.BACKGROUND:
            token = node.get_single(RuleType.BACKGROUND_LINE)
            return Background(
                token.location,
                keyword=token.matched_keyword,
                name=token.matched_text,
                description=_description(node),
                steps=_steps(node),
            )
        if rule_type == RuleType.SCENARIO_DEFINITION:
            inner = node.get_single(RuleType.SCENARIO)
            token = inner.get_single(RuleType.SCENARIO_LINE)
            return Scenario(
                token.location,
                keyword=token.matched_keyword,
                name=token.matched_text,
                description=_description(inner),
                tags=_tags(node),
                steps=_steps(inner),
                examples=_examples(inner),
            )
        if rule_type == RuleType.EXAMPLES_DEFINITION:
            inner = node.get_single(RuleType.EXAMPLES)
            token = inner.get_single(RuleType.EXAMPLES_LINE)
            table = inner.get_single(RuleType.EXAMPLES_TABLE)
            return ExampleTable(
                token.location,
                keyword=token.matched_keyword,
                name=token.matched_text,
                description=_description(inner),
                tags=_tags(node),
                table_header=table.header if table is not None else None,
                table_body=table.body if table is not None else [],
            )
        if rule_type == RuleType.EXAMPLES_TABLE:
            header = _table_header(node)
            body = _table_body(node)
            _ensure_cell_count(body, header)
            return _ExamplesTableOnly(header, body)
        if rule_type == RuleType.DESCRIPTION:
            return _Description(_description_text(node))
        if rule_type == RuleType.RULE:
            header = node.get_single(RuleType.RULE_HEADER)
            token = header.get_single(RuleType.RULE_LINE)
            return Rule(
                token.location,
                keyword=token.matched_keyword,
                name=token.matched_text,
                description=_description(header),
                children=_children(node),
            )
        if rule_type == RuleType.FEATURE:
            header = node.get_single(RuleType.FEATURE_HEADER)
            if header is None:
                return None
            token = header.get_single(RuleType.FEATURE_LINE)
            if token is None:
                return None
            return Feature(
                token.location,
                language=token.matched_language,
                keyword=token.matched_keyword,
                name=token.matched_text,
                description=_description(header),
                tags=_tags(header),
                children=_children(node),
            )
        if rule_type == RuleType.GHERKIN_DOCUMENT:
            feature = node.get_single(RuleType.FEATURE)
            return GherkinDocument(feature=feature, comments=self._comments_list())
        return node