"""Syntax tree of a parsed Gherkin document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True, order=True)
class Location:
    """A position in the source: line and column, both counted from 1."""

    line: int
    column: int = 0


@dataclass
class Comment:
    """A comment line of the source."""

    location: Location
    text: Optional[str] = None


@dataclass
class Tag:
    """A single tag, such as ``@smoke``."""

    location: Location
    name: str


@dataclass
class TableCell:
    """One cell of a table row."""

    location: Location
    value: str = ""


@dataclass
class TableRow:
    """A row of a data table or an examples table."""

    location: Location
    cells: list[TableCell] = field(default_factory=list)


@dataclass
class DataTable:
    """A table given as the argument of a step."""

    location: Location
    rows: list[TableRow] = field(default_factory=list)


@dataclass
class DocString:
    """A multi-line string given as the argument of a step."""

    location: Location
    delimiter: Optional[str] = None
    content_type: Optional[str] = None
    content: Optional[str] = None


StepArgument = Union[DataTable, DocString]


@dataclass
class Step:
    """A Given/When/Then step."""

    location: Location
    keyword: Optional[str]
    text: str
    argument: Optional[StepArgument] = None


@dataclass
class Background:
    """Steps that run before every scenario of a feature or rule."""

    location: Location
    keyword: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    steps: list[Step] = field(default_factory=list)


@dataclass
class ExampleTable:
    """An ``Examples`` block of a scenario outline."""

    location: Location
    keyword: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    tags: list[Tag] = field(default_factory=list)
    table_header: Optional[TableRow] = None
    table_body: list[TableRow] = field(default_factory=list)


@dataclass
class Scenario:
    """A scenario or a scenario outline."""

    location: Location
    keyword: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    tags: list[Tag] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)
    examples: list[ExampleTable] = field(default_factory=list)


@dataclass
class Rule:
    """A business rule grouping a background and scenarios."""

    location: Location
    keyword: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    children: list[Union[Background, Scenario]] = field(default_factory=list)


@dataclass
class Feature:
    """The feature a document describes."""

    location: Location
    language: str
    keyword: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    tags: list[Tag] = field(default_factory=list)
    children: list[Union[Background, Scenario, Rule]] = field(default_factory=list)


@dataclass
class GherkinDocument:
    """A whole parsed document: its feature, comments and source uri."""

    feature: Optional[Feature] = None
    comments: list[Comment] = field(default_factory=list)
    uri: Optional[str] = None