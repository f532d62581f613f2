"""Compiles a Gherkin document into pickles: flat, executable scenarios."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Sequence, Union

from gherkinkit.ast import (
    Background,
    DataTable,
    DocString,
    GherkinDocument,
    Location,
    Rule,
    Scenario,
    Step,
    StepArgument,
    TableRow,
    Tag,
)


@dataclass(frozen=True)
class PickleLocation:
    """A line and column a pickle element was compiled from."""

    line: int
    column: int


@dataclass
class PickleTag:
    """A tag inherited by a pickle."""

    name: str
    location: PickleLocation


@dataclass
class PickleCell:
    """A cell of a pickle table."""

    location: PickleLocation
    value: str


@dataclass
class PickleRow:
    """A row of a pickle table."""

    cells: list[PickleCell] = field(default_factory=list)


@dataclass
class PickleTable:
    """A data table argument of a pickle step."""

    rows: list[PickleRow] = field(default_factory=list)


@dataclass
class PickleString:
    """A doc string argument of a pickle step."""

    location: PickleLocation
    content: Optional[str]
    content_type: Optional[str] = None


PickleArgument = Union[PickleTable, PickleString]


@dataclass
class PickleStep:
    """A step of a pickle, with placeholders already expanded."""

    locations: list[PickleLocation]
    text: str
    argument: Optional[PickleArgument] = None


@dataclass
class Pickle:
    """A single compiled scenario, ready to be run."""

    uri: Optional[str]
    language: Optional[str]
    locations: list[PickleLocation]
    tags: list[PickleTag]
    name: str
    steps: list[PickleStep]
    id: Optional[str] = None


IdGenerator = Callable[[Optional[str], Sequence[PickleLocation]], str]


def _pickle_location(location: Location, column_offset: int = 0) -> PickleLocation:
    return PickleLocation(location.line, location.column + column_offset)


def expand_text(text: Optional[str], header: TableRow, row: TableRow) -> str:
    """Replace ``<name>`` placeholders in ``text`` by the matching cells of ``row``.

    A placeholder matches a header cell when the text after ``<`` starts with
    the cell's value and at least one more character follows; that character
    is taken to be the closing ``>``.
    """
    text = text or ""
    length = len(text)
    replacements: list[tuple[int, int, str]] = []
    for start, char in enumerate(text):
        if char != "<":
            continue
        for header_cell, body_cell in zip(header.cells, row.cells):
            name = header_cell.value or ""
            if len(name) < length - start - 1 and text.startswith(name, start + 1):
                replacements.append((start, len(name) + 2, body_cell.value or ""))
    pieces: list[str] = []
    position = 0
    for start, old_length, new_text in replacements:
        if start < position:
            continue
        pieces.append(text[position:start])
        pieces.append(new_text)
        position = start + old_length
    pieces.append(text[position:])
    return "".join(pieces)


def _pickle_tags(*sources: Sequence[Tag]) -> list[PickleTag]:
    return [
        PickleTag(tag.name, _pickle_location(tag.location))
        for source in sources
        for tag in source
    ]


def _pickle_table(
    table: DataTable, header: Optional[TableRow], row: Optional[TableRow]
) -> PickleTable:
    def value(text: str) -> str:
        if header is None or row is None:
            return text
        return expand_text(text, header, row)

    return PickleTable(
        [
            PickleRow(
                [
                    PickleCell(_pickle_location(cell.location), value(cell.value))
                    for cell in table_row.cells
                ]
            )
            for table_row in table.rows
        ]
    )


def _pickle_argument(
    argument: Optional[StepArgument],
    header: Optional[TableRow],
    row: Optional[TableRow],
) -> Optional[PickleArgument]:
    if isinstance(argument, DataTable):
        return _pickle_table(argument, header, row)
    if isinstance(argument, DocString):
        location = _pickle_location(argument.location)
        if header is None or row is None:
            return PickleString(location, argument.content, argument.content_type)
        content = (
            expand_text(argument.content, header, row)
            if argument.content is not None
            else None
        )
        content_type = (
            expand_text(argument.content_type, header, row)
            if argument.content_type
            else None
        )
        return PickleString(location, content, content_type)
    return None


def _keyword_offset(step: Step) -> int:
    return len(step.keyword) if step.keyword else 0


def _copy_steps(steps: Sequence[Step]) -> list[PickleStep]:
    return [
        PickleStep(
            [_pickle_location(step.location, _keyword_offset(step))],
            step.text,
            _pickle_argument(step.argument, None, None),
        )
        for step in steps
    ]


def _expand_outline_step(
    step: Step, header: TableRow, row: TableRow
) -> PickleStep:
    locations = [
        _pickle_location(step.location, _keyword_offset(step)),
        _pickle_location(row.location),
    ]
    return PickleStep(
        locations,
        expand_text(step.text, header, row),
        _pickle_argument(step.argument, header, row),
    )


class Compiler:
    """Turns documents into pickles and hands them out in order."""

    def __init__(self, id_generator: Optional[IdGenerator] = None) -> None:
        self._pickles: deque[Pickle] = deque()
        self._id_generator = id_generator

    def compile(self, document: GherkinDocument, source: Optional[str] = None) -> None:
        """Compile every scenario of ``document`` and queue the resulting pickles."""
        feature = document.feature
        if feature is None:
            return
        self._compile_container(
            feature.children,
            feature.tags,
            document.uri,
            feature.language,
            source,
            [],
        )

    def has_more_pickles(self) -> bool:
        """Tell whether compiled pickles are waiting to be taken."""
        return bool(self._pickles)

    def next_pickle(self) -> Optional[Pickle]:
        """Remove and return the next pickle, or None when there is none."""
        return self._pickles.popleft() if self._pickles else None

    def __iter__(self) -> Iterator[Pickle]:
        while self._pickles:
            yield self._pickles.popleft()

    def _make_id(
        self, source: Optional[str], locations: Sequence[PickleLocation]
    ) -> Optional[str]:
        if self._id_generator is None:
            return None
        return self._id_generator(source, locations)

    def _compile_container(
        self,
        children: Sequence[Union[Background, Scenario, Rule]],
        feature_tags: Sequence[Tag],
        uri: Optional[str],
        language: Optional[str],
        source: Optional[str],
        context_background_steps: Sequence[Step],
    ) -> None:
        background_steps: Sequence[Step] = []
        for child in children:
            if isinstance(child, Background):
                background_steps = child.steps
            elif isinstance(child, Scenario):
                prefix = [*context_background_steps, *background_steps]
                if child.examples:
                    self._compile_outline(
                        child, feature_tags, uri, language, source, prefix
                    )
                else:
                    self._compile_scenario(
                        child, feature_tags, uri, language, source, prefix
                    )
            elif isinstance(child, Rule):
                self._compile_container(
                    child.children,
                    feature_tags,
                    uri,
                    language,
                    source,
                    background_steps,
                )

    def _compile_scenario(
        self,
        scenario: Scenario,
        feature_tags: Sequence[Tag],
        uri: Optional[str],
        language: Optional[str],
        source: Optional[str],
        background_steps: Sequence[Step],
    ) -> None:
        locations = [_pickle_location(scenario.location)]
        steps: list[PickleStep] = []
        if scenario.steps:
            steps = _copy_steps(background_steps) + _copy_steps(scenario.steps)
        self._pickles.append(
            Pickle(
                uri,
                language,
                locations,
                _pickle_tags(feature_tags, scenario.tags),
                scenario.name or "",
                steps,
                self._make_id(source, locations),
            )
        )

    def _compile_outline(
        self,
        scenario: Scenario,
        feature_tags: Sequence[Tag],
        uri: Optional[str],
        language: Optional[str],
        source: Optional[str],
        background_steps: Sequence[Step],
    ) -> None:
        for examples in scenario.examples:
            header = examples.table_header
            if header is None:
                continue
            for row in examples.table_body:
                locations = [
                    _pickle_location(scenario.location),
                    _pickle_location(row.location),
                ]
                steps: list[PickleStep] = []
                if scenario.steps:
                    steps = _copy_steps(background_steps) + [
                        _expand_outline_step(step, header, row)
                        for step in scenario.steps
                    ]
                self._pickles.append(
                    Pickle(
                        uri,
                        language,
                        locations,
                        _pickle_tags(feature_tags, scenario.tags, examples.tags),
                        expand_text(scenario.name, header, row),
                        steps,
                        self._make_id(source, locations),
                    )
                )