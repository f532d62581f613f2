import pytest

from gherkinkit.ast import (
    Background,
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
from gherkinkit.compiler import (
    Compiler,
    PickleLocation,
    PickleString,
    PickleTable,
    expand_text,
)


def row(line, *values):
    return TableRow(
        Location(line, 3),
        [TableCell(Location(line, 5 + 4 * i), v) for i, v in enumerate(values)],
    )


def document(*children, tags=()):
    feature = Feature(
        Location(1, 1),
        language="en",
        keyword="Feature",
        name="f",
        tags=list(tags),
        children=list(children),
    )
    return GherkinDocument(feature=feature, uri="features/a.feature")


def compile_all(doc, **kwargs):
    compiler = Compiler(**kwargs)
    compiler.compile(doc, "source text")
    return list(compiler)


def test_expand_text_replaces_placeholder():
    header = row(1, "count")
    body = row(2, "12")
    assert expand_text("I have <count> cukes", header, body) == "I have 12 cukes"


def test_expand_text_placeholder_covering_whole_text():
    assert expand_text("<a>", row(1, "a"), row(2, "x")) == "x"


def test_expand_text_without_placeholders_is_unchanged():
    text = "plain text without placeholders"
    assert expand_text(text, row(1, "a"), row(2, "x")) == text


def test_expand_text_unknown_placeholder_is_unchanged():
    assert expand_text("<other>", row(1, "a"), row(2, "x")) == "<other>"


def test_expand_text_several_placeholders():
    header = row(1, "a", "b")
    body = row(2, "1", "2")
    assert expand_text("<a> and <b> and <a>", header, body) == "1 and 2 and 1"


def test_document_without_feature_gives_no_pickles():
    compiler = Compiler()
    compiler.compile(GherkinDocument(uri="x.feature"), "")
    assert not compiler.has_more_pickles()
    assert compiler.next_pickle() is None


def test_scenario_with_background_steps_first():
    background = Background(
        Location(2, 3), "Background", steps=[Step(Location(3, 5), "Given ", "bg")]
    )
    scenario = Scenario(
        Location(5, 3),
        "Scenario",
        name="s",
        tags=[Tag(Location(4, 3), "@s")],
        steps=[Step(Location(6, 5), "When ", "act")],
    )
    doc = document(background, scenario, tags=[Tag(Location(0, 1), "@f")])
    compiler = Compiler()
    compiler.compile(doc, "")
    assert compiler.has_more_pickles()
    pickle = compiler.next_pickle()
    assert not compiler.has_more_pickles()
    assert pickle.name == "s"
    assert pickle.uri == "features/a.feature"
    assert pickle.language == "en"
    assert [s.text for s in pickle.steps] == ["bg", "act"]
    assert [t.name for t in pickle.tags] == ["@f", "@s"]
    assert pickle.locations == [PickleLocation(5, 3)]
    assert pickle.steps[0].locations == [PickleLocation(3, 11)]


def test_scenario_without_steps_has_no_background_steps():
    background = Background(
        Location(2, 3), "Background", steps=[Step(Location(3, 5), "Given ", "bg")]
    )
    scenario = Scenario(Location(5, 3), "Scenario", name="empty")
    (pickle,) = compile_all(document(background, scenario))
    assert pickle.steps == []


def test_outline_expands_each_row():
    header = row(8, "who")
    body = [row(9, "Ann"), row(10, "Bob")]
    examples = ExampleTable(
        Location(7, 3),
        "Examples",
        tags=[Tag(Location(6, 3), "@e")],
        table_header=header,
        table_body=body,
    )
    scenario = Scenario(
        Location(4, 3),
        "Scenario Outline",
        name="greet <who>",
        tags=[Tag(Location(3, 3), "@o")],
        steps=[Step(Location(5, 5), "Given ", "hello <who>")],
        examples=[examples],
    )
    pickles = compile_all(document(scenario))
    assert [p.name for p in pickles] == ["greet Ann", "greet Bob"]
    assert [p.steps[0].text for p in pickles] == ["hello Ann", "hello Bob"]
    assert pickles[1].locations == [PickleLocation(4, 3), PickleLocation(10, 3)]
    assert [t.name for t in pickles[0].tags] == ["@o", "@e"]
    assert pickles[0].steps[0].locations[1] == PickleLocation(9, 3)


def test_examples_without_header_are_skipped():
    scenario = Scenario(
        Location(4, 3),
        "Scenario Outline",
        name="n",
        steps=[Step(Location(5, 5), "Given ", "x")],
        examples=[ExampleTable(Location(7, 3), "Examples")],
    )
    assert compile_all(document(scenario)) == []


def test_rule_gets_feature_and_rule_background():
    feature_bg = Background(
        Location(2, 3), "Background", steps=[Step(Location(3, 5), "Given ", "f")]
    )
    rule_bg = Background(
        Location(6, 5), "Background", steps=[Step(Location(7, 7), "Given ", "r")]
    )
    scenario = Scenario(
        Location(8, 5), "Scenario", name="s", steps=[Step(Location(9, 7), "Then ", "s")]
    )
    rule = Rule(Location(5, 3), "Rule", name="r", children=[rule_bg, scenario])
    (pickle,) = compile_all(document(feature_bg, rule))
    assert [s.text for s in pickle.steps] == ["f", "r", "s"]


def test_data_table_argument_is_expanded_in_outline():
    table = DataTable(Location(6, 7), [row(6, "<x>", "fixed")])
    scenario = Scenario(
        Location(4, 3),
        "Scenario Outline",
        name="n",
        steps=[Step(Location(5, 5), "Given ", "t", table)],
        examples=[
            ExampleTable(
                Location(7, 3), "Examples", table_header=row(8, "x"), table_body=[row(9, "v")]
            )
        ],
    )
    (pickle,) = compile_all(document(scenario))
    argument = pickle.steps[0].argument
    assert isinstance(argument, PickleTable)
    assert [c.value for c in argument.rows[0].cells] == ["v", "fixed"]
    assert argument.rows[0].cells[0].location == PickleLocation(6, 5)


def test_doc_string_argument_in_plain_scenario_and_outline():
    doc_string = DocString(Location(6, 7), '"""', "<t>", "value <x>")
    step = Step(Location(5, 5), "Given ", "d", doc_string)
    plain = Scenario(Location(4, 3), "Scenario", name="p", steps=[step])
    outline = Scenario(
        Location(10, 3),
        "Scenario Outline",
        name="o",
        steps=[step],
        examples=[
            ExampleTable(
                Location(11, 3),
                "Examples",
                table_header=row(12, "x", "t"),
                table_body=[row(13, "1", "json")],
            )
        ],
    )
    first, second = compile_all(document(plain, outline))
    assert first.steps[0].argument == PickleString(
        PickleLocation(6, 7), "value <x>", "<t>"
    )
    assert second.steps[0].argument == PickleString(
        PickleLocation(6, 7), "value 1", "json"
    )


def test_id_generator_receives_source_and_locations():
    calls = []

    def generator(source, locations):
        calls.append((source, list(locations)))
        return f"id-{len(calls)}"

    scenario = Scenario(
        Location(4, 3), "Scenario", name="s", steps=[Step(Location(5, 5), "Given ", "x")]
    )
    (pickle,) = compile_all(document(scenario), id_generator=generator)
    assert pickle.id == "id-1"
    assert calls == [("source text", [PickleLocation(4, 3)])]


@pytest.mark.parametrize("keyword", [None, ""])
def test_step_without_keyword_keeps_column(keyword):
    scenario = Scenario(
        Location(4, 3), "Scenario", name="s", steps=[Step(Location(5, 5), keyword, "x")]
    )
    (pickle,) = compile_all(document(scenario))
    assert pickle.steps[0].locations == [PickleLocation(5, 5)]