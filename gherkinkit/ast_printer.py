"""JSON rendering of a parsed Gherkin document."""

from __future__ import annotations

import json
from typing import Any, Optional, TextIO

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
    TableCell,
    TableRow,
    Tag,
)

JsonDict = dict[str, Any]


def _location(location: Location) -> JsonDict:
    return {"line": location.line, "column": location.column}


def _add_name(result: JsonDict, name: Optional[str]) -> None:
    if name:
        result["name"] = name


def _add_description(result: JsonDict, description: Optional[str]) -> None:
    if description is not None:
        result["description"] = description


def _add_tags(result: JsonDict, tags: list[Tag]) -> None:
    if tags:
        result["tags"] = [_tag(tag) for tag in tags]


def _table_cell(cell: TableCell) -> JsonDict:
    result: JsonDict = {"location": _location(cell.location)}
    if cell.value:
        result["value"] = cell.value
    return result


def _table_row(row: TableRow) -> JsonDict:
    return {
        "location": _location(row.location),
        "cells": [_table_cell(cell) for cell in row.cells],
    }


def _data_table(table: DataTable) -> JsonDict:
    return {
        "location": _location(table.location),
        "rows": [_table_row(row) for row in table.rows],
    }


def _doc_string(doc_string: DocString) -> JsonDict:
    result: JsonDict = {"location": _location(doc_string.location)}
    if doc_string.delimiter is not None:
        result["delimiter"] = doc_string.delimiter
    if doc_string.content_type is not None:
        result["contentType"] = doc_string.content_type
    if doc_string.content is not None:
        result["content"] = doc_string.content
    return result


def _step(step: Step) -> JsonDict:
    result: JsonDict = {
        "keyword": step.keyword or "",
        "text": step.text or "",
        "location": _location(step.location),
    }
    if isinstance(step.argument, DataTable):
        result["dataTable"] = _data_table(step.argument)
    elif isinstance(step.argument, DocString):
        result["docString"] = _doc_string(step.argument)
    return result


def _background(background: Background) -> JsonDict:
    result: JsonDict = {"keyword": background.keyword or ""}
    _add_name(result, background.name)
    _add_description(result, background.description)
    result["location"] = _location(background.location)
    if background.steps:
        result["steps"] = [_step(step) for step in background.steps]
    return {"background": result}


def _tag(tag: Tag) -> JsonDict:
    return {"location": _location(tag.location), "name": tag.name or ""}


def _example_table(table: ExampleTable) -> JsonDict:
    result: JsonDict = {}
    _add_description(result, table.description)
    result["keyword"] = table.keyword or ""
    _add_name(result, table.name)
    _add_tags(result, table.tags)
    result["location"] = _location(table.location)
    if table.table_header is not None:
        result["tableHeader"] = _table_row(table.table_header)
    if table.table_body:
        result["tableBody"] = [_table_row(row) for row in table.table_body]
    return result


def _scenario(scenario: Scenario) -> JsonDict:
    result: JsonDict = {}
    _add_tags(result, scenario.tags)
    result["keyword"] = scenario.keyword or ""
    _add_name(result, scenario.name)
    _add_description(result, scenario.description)
    result["location"] = _location(scenario.location)
    if scenario.steps:
        result["steps"] = [_step(step) for step in scenario.steps]
    if scenario.examples:
        result["examples"] = [_example_table(table) for table in scenario.examples]
    return {"scenario": result}


def _comment(comment: Comment) -> JsonDict:
    return {"text": comment.text or "", "location": _location(comment.location)}


def _child(child: Any, allow_rules: bool) -> Optional[JsonDict]:
    if isinstance(child, Background):
        return _background(child)
    if isinstance(child, Scenario):
        return _scenario(child)
    if allow_rules and isinstance(child, Rule):
        return _rule(child)
    return None


def _children(children: list[Any], allow_rules: bool) -> list[JsonDict]:
    rendered = (_child(child, allow_rules) for child in children)
    return [item for item in rendered if item is not None]


def _rule(rule: Rule) -> JsonDict:
    result: JsonDict = {"keyword": rule.keyword or ""}
    _add_name(result, rule.name)
    _add_description(result, rule.description)
    result["location"] = _location(rule.location)
    if rule.children:
        result["children"] = _children(rule.children, allow_rules=False)
    return {"rule": result}


def _feature(feature: Feature) -> JsonDict:
    result: JsonDict = {}
    _add_tags(result, feature.tags)
    result["language"] = feature.language or ""
    result["keyword"] = feature.keyword or ""
    _add_name(result, feature.name)
    _add_description(result, feature.description)
    result["location"] = _location(feature.location)
    if feature.children:
        result["children"] = _children(feature.children, allow_rules=True)
    return result


def document_to_dict(document: GherkinDocument) -> JsonDict:
    """Return ``document`` as a JSON-ready dictionary with the wire key order."""
    result: JsonDict = {"uri": document.uri or ""}
    if document.feature is not None:
        result["feature"] = _feature(document.feature)
    if document.comments:
        result["comments"] = [_comment(comment) for comment in document.comments]
    return result


def format_gherkin_document(document: GherkinDocument) -> str:
    """Return ``document`` as compact JSON."""
    return json.dumps(
        document_to_dict(document), ensure_ascii=False, separators=(",", ":")
    )


def print_gherkin_document(file: TextIO, document: GherkinDocument) -> None:
    """Write ``document`` to ``file`` as compact JSON."""
    file.write(format_gherkin_document(document))