# gherkinkit

A Gherkin document model, with a builder that assembles it from parser
events, a JSON renderer, and a compiler that turns documents into *pickles*.

A pickle is a flat, runnable scenario. Background steps are placed in front
of the scenario's own steps. A scenario outline gives one pickle for each row
of each examples table, and its `<placeholder>`s are filled in from that row.

## Installation

```
pip install gherkinkit
```

The test dependencies come with the `test` extra:

```
pip install "gherkinkit[test]"
```

## Modules

- `gherkinkit.ast` holds the document model as dataclasses: `Location`,
  `Comment`, `Tag`, `TableCell`, `TableRow`, `DataTable`, `DocString`, `Step`,
  `Background`, `ExampleTable`, `Scenario`, `Rule`, `Feature` and
  `GherkinDocument`.
- `gherkinkit.ast_node` holds `RuleType`, the grammar rules and token types,
  and `AstNode`. An `AstNode` is an intermediate node that queues the items
  it is given, one queue for each rule type. Its methods are `add`,
  `get_single` and `get_items`.
- `gherkinkit.ast_builder` holds `AstBuilder`. It takes parser callbacks
  (`start_rule`, `build`, `end_rule`) and returns a `GherkinDocument` from
  `get_result(uri)`. The module also holds the input types `Token` and
  `MatchedItem`. When a table row has a different number of cells from the
  header, or from the first row of a data table, `end_rule` raises
  `InconsistentCellCountError`, a `ValueError` that carries the row's
  `location`.
- `gherkinkit.ast_printer` renders a document as JSON with three functions:
  - `document_to_dict(document)` returns a dictionary with keys in wire order.
  - `format_gherkin_document(document)` returns compact JSON.
  - `print_gherkin_document(file, document)` writes that JSON to a file.
- `gherkinkit.compiler` holds `Compiler`, the pickle types (`Pickle`,
  `PickleStep`, `PickleTag`, `PickleTable`, `PickleRow`, `PickleCell`,
  `PickleString`, `PickleLocation`) and `expand_text(text, header, row)`,
  which fills in outline placeholders.
- `gherkinkit.attachment` holds `AttachmentEvent`, which reports an error
  message at a location in a file. It has three methods:
  - `to_dict()` returns the event as a dictionary.
  - `to_json()` returns it as one line of JSON.
  - `print(file)` writes that line to a file.

## Usage

Feed parser events to the builder:

```python
from gherkinkit.ast import Location
from gherkinkit.ast_builder import AstBuilder, Token
from gherkinkit.ast_node import RuleType as R

builder = AstBuilder()
builder.start_rule(R.GHERKIN_DOCUMENT)
builder.start_rule(R.FEATURE)
builder.start_rule(R.FEATURE_HEADER)
builder.build(Token(R.FEATURE_LINE, Location(1, 1), "Feature", "Apples", "en"))
builder.end_rule(R.FEATURE_HEADER)
builder.start_rule(R.SCENARIO_DEFINITION)
builder.start_rule(R.SCENARIO)
builder.build(Token(R.SCENARIO_LINE, Location(2, 3), "Scenario", "Eat one"))
builder.start_rule(R.STEP)
builder.build(Token(R.STEP_LINE, Location(3, 5), "Given ", "I have an apple"))
builder.end_rule(R.STEP)
builder.end_rule(R.SCENARIO)
builder.end_rule(R.SCENARIO_DEFINITION)
builder.end_rule(R.FEATURE)
builder.end_rule(R.GHERKIN_DOCUMENT)
document = builder.get_result("apples.feature")
```

Render the document and compile it:

```python
from gherkinkit.ast_printer import format_gherkin_document
from gherkinkit.compiler import Compiler

print(format_gherkin_document(document))

compiler = Compiler()
compiler.compile(document)
for pickle in compiler:
    print(pickle.name, [step.text for step in pickle.steps])
```

Pickles can also be taken one at a time with `has_more_pickles()` and
`next_pickle()`. Each step location is moved right past the step keyword, so
the step above gets column 11.

Pickle ids are left as `None` by default. To set them, pass
`Compiler(id_generator=...)` a callable that takes the text given to
`compile(document, source)` and the pickle's locations, and returns a string.

Outline placeholders can be filled in directly:

```python
from gherkinkit.ast import Location, TableCell, TableRow
from gherkinkit.compiler import expand_text

header = TableRow(Location(5, 7), [TableCell(Location(5, 9), "count")])
row = TableRow(Location(6, 7), [TableCell(Location(6, 9), "3")])
expand_text("I have <count> apples", header, row)  # "I have 3 apples"
```

## What this package does not do

The package has no tokenizer and no grammar parser. It does not read
`.feature` files, and it has no language dialect tables. Tokens have to be
supplied to `AstBuilder` by the caller. The package provides no command-line
program. It renders documents as JSON but not pickles. It computes no pickle
ids unless an `id_generator` is given.

## Running the tests

```
pytest
```