import pytest

from swiftguard.rules import LintContext
from swiftguard.rules.optional_initialization import OptionalInitializationRule, find_violations
from swiftguard.severity import Severity
from swiftguard.source import SourceFile, Span
from swiftguard.utils.syntax import SwiftSyntaxClassifier

DESCRIPTION = OptionalInitializationRule.description


def violations_in(contents):
    return find_violations(contents, SwiftSyntaxClassifier().classify(contents))


def correct(contents):
    return OptionalInitializationRule().correct(LintContext.build(SourceFile(contents))).contents


@pytest.mark.parametrize("example", DESCRIPTION.non_triggering_examples)
def test_non_triggering_examples(example):
    assert violations_in(example) == []


@pytest.mark.parametrize("example", DESCRIPTION.triggering_examples)
def test_triggering_examples_report_only_the_assignment_tail(example):
    matches = violations_in(example)

    assert len(matches) == 1
    tail = example[matches[0].span.start:matches[0].span.end]
    assert tail.lstrip() == "= nil"
    assert matches[0].extent == Span(0, len(example))


@pytest.mark.parametrize("before, after", DESCRIPTION.corrections)
def test_corrections_round_trip(before, after):
    corrected = correct(before)

    assert corrected == after
    assert len(corrected) == len(before)
    assert violations_in(corrected) == []


def test_sentinel_inside_comments_and_strings_is_ignored():
    contents = (
        "// var a: Int? = nil\n"
        'let s = """\n'
        "var b: Int? = nil\n"
        '"""\n'
        "/* var c: Int? = nil\n"
        "*/\n"
    )

    assert violations_in(contents) == []


def test_comment_before_real_declaration_does_not_hide_it():
    contents = "// TODO: drop this var\nvar a: Int? = nil\n"

    matches = violations_in(contents)

    assert len(matches) == 1
    assert matches[0].extent.start == contents.index("var a")


def test_multi_declarator_isolation():
    leading = "var a: Bool? = nil, b: Bool?"
    assert violations_in(leading) == []
    assert correct(leading) == leading

    trailing = "var b: Bool?, a: Bool? = nil"
    matches = violations_in(trailing)
    assert len(matches) == 1
    assert matches[0].span.start == trailing.rindex("?") + 1
    corrected = correct(trailing)
    assert corrected[: trailing.rindex("?") + 1] == trailing[: trailing.rindex("?") + 1]


def test_declarations_on_separate_lines_do_not_bridge():
    contents = "var a: Int\nvar b: String? = nil\n"

    matches = violations_in(contents)

    assert len(matches) == 1
    assert matches[0].extent.start == contents.index("var b")


def test_cross_line_assignment_keeps_line_count():
    contents = "var onCallback: ((NSData) -> Void)?\n= nil\nlet x = 1\n"

    assert len(violations_in(contents)) == 1
    corrected = correct(contents)
    assert corrected == "var onCallback: ((NSData) -> Void)?\n     \nlet x = 1\n"
    assert corrected.count("\n") == contents.count("\n")


@pytest.mark.parametrize(
    "contents",
    [
        "var a: Int? = nil // reset",
        "var a: Int? = nilValue",
        "var a: Int? = nil; print(a)",
        "var a: Int = nil",
    ],
)
def test_content_after_sentinel_is_not_a_match(contents):
    assert violations_in(contents) == []


def test_crlf_line_endings():
    contents = "var a: Int? = nil\r\nvar b: Int? = nil\r\n"

    assert len(violations_in(contents)) == 2
    assert correct(contents) == "var a: Int?      \r\nvar b: Int?      \r\n"


def test_correcting_one_violation_keeps_offsets_of_the_next():
    contents = "var a: Int? = nil\nvar b: String? = nil\n"
    original = violations_in(contents)

    corrected = correct(contents)

    assert len(corrected) == len(contents)
    for match in original:
        assert corrected[match.span.start:match.span.end].strip() == ""
    assert violations_in(corrected) == []


def test_validate_reports_location_and_configured_severity():
    file = SourceFile("struct S {\n    var image: UIImage? = nil\n}\n", path="S.swift")

    violations = OptionalInitializationRule(severity=Severity.ERROR).validate(LintContext.build(file))

    assert len(violations) == 1
    violation = violations[0]
    assert violation.rule_id == "optional_initialization"
    assert violation.severity is Severity.ERROR
    assert (violation.location.line, violation.location.character) == (2, 24)
    assert violation.format() == (
        "S.swift:2:24: error: Optional Initialization Violation: "
        "Optionals do not need to be initialized to nil (optional_initialization)"
    )


def test_default_severity_is_warning():
    assert OptionalInitializationRule().severity is Severity.WARNING
    assert OptionalInitializationRule.opt_in is True


def test_disable_directive_filters_validation_and_correction():
    contents = (
        "// swiftguard:disable:next optional_initialization\n"
        "var a: Int? = nil\n"
        "var b: Int? = nil\n"
    )
    context = LintContext.build(SourceFile(contents))
    rule = OptionalInitializationRule()

    assert [violation.location.line for violation in rule.validate(context)] == [3]
    result = rule.correct(context)
    assert [correction.location.line for correction in result.corrections] == [3]
    assert "var a: Int? = nil\n" in result.contents
    assert "var b: Int?      \n" in result.contents


def test_long_body_between_declarations():
    contents = "var x = 1\n" + "    foo(a: b?, c: d?)\n" * 3000 + "var y: Int? = nil\n"

    matches = violations_in(contents)

    assert len(matches) == 1
    assert matches[0].extent.start == contents.index("var y")
