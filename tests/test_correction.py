import pytest

from swiftguard.correction import Rewrite, apply_corrections, rewrite_contents
from swiftguard.errors import CorrectionError
from swiftguard.source import SourceFile, Span

BLANK_NIL = Rewrite(pattern=r"(\s*)=(\s*)nil", replacement=r"\1 \2   ")


def recording_writer(calls):
    def writer(path, contents):
        calls.append((path, contents))

    return writer


def test_rewrite_preserves_length_and_surrounding_text():
    contents = "a = nil; b = nil"

    rewritten = rewrite_contents(contents, [Span(1, 7), Span(10, 16)], BLANK_NIL)

    assert rewritten == "a      ; b      "
    assert len(rewritten) == len(contents)


def test_rewrite_accepts_spans_out_of_order():
    contents = "a = nil; b = nil"

    assert rewrite_contents(contents, [Span(10, 16), Span(1, 7)], BLANK_NIL) == "a      ; b      "


def test_empty_span_list_performs_no_write():
    calls = []
    file = SourceFile("var a: Int?", path="A.swift")

    result = apply_corrections(file, [], BLANK_NIL, "optional_initialization", "Optional Initialization",
                               writer=recording_writer(calls))

    assert result.contents == file.contents
    assert result.corrections == ()
    assert not result.applied
    assert calls == []


def test_buffer_without_path_is_never_written():
    calls = []
    file = SourceFile("var a: Int? = nil")

    result = apply_corrections(file, [Span(11, 17)], BLANK_NIL, "rule", "Rule", writer=recording_writer(calls))

    assert result.contents == "var a: Int?      "
    assert calls == []


def test_corrections_write_once_and_keep_input_order(tmp_path):
    path = tmp_path / "A.swift"
    path.write_text("var a: Int? = nil\nvar b: Int? = nil\n", encoding="utf-8")
    file = SourceFile.from_path(path)

    result = apply_corrections(
        file,
        [Span(29, 35), Span(11, 17)],
        BLANK_NIL,
        "optional_initialization",
        "Optional Initialization",
    )

    assert path.read_text(encoding="utf-8") == "var a: Int?      \nvar b: Int?      \n"
    assert [correction.location.line for correction in result.corrections] == [2, 1]
    assert result.corrections[0].format().endswith("Corrected Optional Initialization (optional_initialization)")


def test_overlapping_spans_are_rejected_without_writing():
    calls = []
    file = SourceFile("a = nil", path="A.swift")

    with pytest.raises(CorrectionError):
        apply_corrections(file, [Span(1, 7), Span(2, 7)], BLANK_NIL, "rule", "Rule", writer=recording_writer(calls))
    assert calls == []


def test_failed_batch_leaves_file_untouched(tmp_path):
    path = tmp_path / "A.swift"
    original = "var a: Int? = nil\nlet b = 1\n"
    path.write_text(original, encoding="utf-8")

    with pytest.raises(CorrectionError):
        apply_corrections(SourceFile.from_path(path), [Span(11, 17), Span(18, 27)], BLANK_NIL, "rule", "Rule")

    assert path.read_text(encoding="utf-8") == original


def test_uncompilable_pattern_is_a_correction_error():
    with pytest.raises(CorrectionError):
        rewrite_contents("a = nil", [Span(1, 7)], Rewrite(pattern="(", replacement=""))


def test_bad_replacement_template_is_a_correction_error():
    with pytest.raises(CorrectionError):
        rewrite_contents("a = nil", [Span(1, 7)], Rewrite(pattern=r"(\s*)=(\s*)nil", replacement=r"\3 "))


def test_length_changing_rewrite_is_rejected():
    with pytest.raises(CorrectionError):
        rewrite_contents("a = nil", [Span(1, 7)], Rewrite(pattern=r"\s*=\s*nil", replacement=""))


def test_span_the_pattern_does_not_match_is_rejected():
    with pytest.raises(CorrectionError):
        rewrite_contents("a = 1", [Span(1, 5)], BLANK_NIL)


def test_span_past_end_of_buffer_is_rejected():
    with pytest.raises(CorrectionError):
        rewrite_contents("a = nil", [Span(1, 9)], BLANK_NIL)
