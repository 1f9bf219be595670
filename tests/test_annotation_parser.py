"""Tests for the annotation block parser."""

import textwrap
from pathlib import Path

import pytest

from annodoc.parsers.annotation_parser import (
    FIELD_PATTERNS,
    AnnotationParser,
    match_field,
)
from annodoc.parsers.record import FieldKind


class TestMatchField:
    """Tests for single-line field classification."""

    def test_pattern_order(self) -> None:
        kinds = [kind for kind, _ in FIELD_PATTERNS]
        assert kinds == [
            FieldKind.AUTHOR,
            FieldKind.DATE,
            FieldKind.FILE,
            FieldKind.PROBLEM,
            FieldKind.SOLUTION_START,
            FieldKind.SOLUTION_END,
            FieldKind.NOTE_START,
            FieldKind.NOTE_END,
            FieldKind.TIME_COMPLEXITY,
            FieldKind.SPACE_COMPLEXITY,
        ]

    def test_scalar_value_is_trimmed(self) -> None:
        assert match_field("Author:   Jane Doe  ") == (FieldKind.AUTHOR, "Jane Doe")

    def test_keywords_are_case_insensitive(self) -> None:
        assert match_field("AUTHOR: a") == (FieldKind.AUTHOR, "a")
        assert match_field("time complexity: O(1)") == (
            FieldKind.TIME_COMPLEXITY,
            "O(1)",
        )

    def test_start_markers(self) -> None:
        assert match_field("Solution: {") == (FieldKind.SOLUTION_START, "")
        assert match_field("Solution:{") == (FieldKind.SOLUTION_START, "")
        assert match_field("Note: {") == (FieldKind.NOTE_START, "")

    def test_closing_brace_matches_first_end_marker(self) -> None:
        assert match_field("}") == (FieldKind.SOLUTION_END, "")

    def test_first_match_wins(self) -> None:
        # Author precedes the bare-brace end marker.
        assert match_field("Author: x }") == (FieldKind.AUTHOR, "x }")

    def test_keyword_without_value_does_not_match(self) -> None:
        assert match_field("Author:") is None

    def test_unrecognized_line(self) -> None:
        assert match_field("just some prose") is None


class TestParseSource:
    """Tests for parsing whole source texts."""

    def test_full_annotation(self, parser: AnnotationParser, annotated_source: str) -> None:
        record = parser.parse_source(annotated_source)
        assert record.author == "Jane Doe"
        assert record.date == "2024-03-01"
        assert record.file_label == "two_sum.go"
        assert record.problem == "Find two numbers that add up to a target"
        assert record.solution == "Walk the slice once.\nKeep a map of seen values."
        assert record.note == "Returns nil when no pair exists."
        assert record.time_complexity == "O(n)"
        assert record.space_complexity == "O(n)"
        assert record.is_documentable

    def test_body_follows_block_verbatim(
        self, parser: AnnotationParser, annotated_source: str
    ) -> None:
        record = parser.parse_source(annotated_source)
        assert record.body.startswith("package main\n")
        assert "\treturn nil\n" in record.body
        assert "Author" not in record.body

    def test_body_splits_on_newline_only(self, parser: AnnotationParser) -> None:
        body = "package main\n\nvar s = `a\u2028b\x0cc\x85d`\r\n"
        record = parser.parse_source("/*\nAuthor: A\nFile: F\n*/\n" + body)
        assert record.body == body

    def test_body_without_trailing_newline(self, parser: AnnotationParser) -> None:
        record = parser.parse_source("/*\nAuthor: A\nFile: F\n*/\npackage main")
        assert record.body == "package main\n"

    def test_no_comment_block(self, parser: AnnotationParser) -> None:
        source = "package main\n\nfunc main() {}\n"
        record = parser.parse_source(source)
        assert record.author == ""
        assert record.date == ""
        assert record.file_label == ""
        assert record.problem == ""
        assert record.solution == ""
        assert record.note == ""
        assert record.time_complexity == ""
        assert record.space_complexity == ""
        assert record.body == source
        assert not record.is_documentable

    def test_empty_source(self, parser: AnnotationParser) -> None:
        record = parser.parse_source("")
        assert record.body == ""
        assert not record.is_documentable

    def test_last_scalar_wins(self, parser: AnnotationParser) -> None:
        source = textwrap.dedent("""\
            /*
            Date: 2023-01-01
            Date: 2024-12-31
            */
        """)
        assert parser.parse_source(source).date == "2024-12-31"

    def test_note_block_between_markers(self, parser: AnnotationParser) -> None:
        source = textwrap.dedent("""\
            /*
            Note: {
                first line
              second line
            }
            */
        """)
        assert parser.parse_source(source).note == "first line\nsecond line"

    def test_compact_solution_marker(self, parser: AnnotationParser) -> None:
        source = "/*\nSolution:{\nuse a stack\n}\n*/\n"
        assert parser.parse_source(source).solution == "use a stack"

    def test_first_brace_terminates_block(self, parser: AnnotationParser) -> None:
        source = textwrap.dedent("""\
            /*
            Solution: {
            if x { y }
            after the brace
            }
            */
        """)
        record = parser.parse_source(source)
        # The line holding the brace ends the block before being added.
        assert record.solution == ""

    def test_scalar_line_inside_block_is_accumulated(
        self, parser: AnnotationParser
    ) -> None:
        source = textwrap.dedent("""\
            /*
            Note: {
            Date: 2024-05-05
            }
            */
        """)
        record = parser.parse_source(source)
        assert record.date == "2024-05-05"
        assert record.note == "Date: 2024-05-05"

    def test_unmatched_lines_outside_blocks_are_ignored(
        self, parser: AnnotationParser
    ) -> None:
        source = "/*\nsome prose\nAuthor: A\nFile: F\n*/\n"
        record = parser.parse_source(source)
        assert record.solution == ""
        assert record.note == ""
        assert record.body == ""

    def test_only_first_block_is_inspected(self, parser: AnnotationParser) -> None:
        source = textwrap.dedent("""\
            /*
            Author: First
            File: f.go
            */
            package main
            /*
            Author: Second
            */
        """)
        record = parser.parse_source(source)
        assert record.author == "First"
        assert "Author: Second" in record.body
        assert record.body.startswith("package main\n/*\n")

    def test_lines_before_block_are_body(self, parser: AnnotationParser) -> None:
        source = "// Code generated.\n/*\nAuthor: A\nFile: F\n*/\npackage x\n"
        record = parser.parse_source(source)
        assert record.author == "A"
        assert record.body == "// Code generated.\npackage x\n"

    def test_unterminated_block(self, parser: AnnotationParser) -> None:
        record = parser.parse_source("/*\nAuthor: A\nFile: F\npackage main\n")
        assert record.author == "A"
        assert record.body == ""

    def test_custom_comment_tokens(self) -> None:
        parser = AnnotationParser(comment_open='"""', comment_close='"""')
        source = '"""\nAuthor: A\nFile: f.py\n"""\nimport os\n'
        record = parser.parse_source(source)
        assert record.author == "A"
        assert record.file_label == "f.py"
        assert record.body == "import os\n"

    def test_record_is_immutable(self, parser: AnnotationParser, annotated_source: str) -> None:
        record = parser.parse_source(annotated_source)
        with pytest.raises(AttributeError):
            record.author = "someone else"  # type: ignore[misc]


class TestParseFile:
    """Tests for parsing files from disk."""

    def test_parse_file(
        self, parser: AnnotationParser, annotated_source: str, tmp_path: Path
    ) -> None:
        path = tmp_path / "two_sum.go"
        path.write_text(annotated_source, encoding="utf-8")
        record = parser.parse_file(str(path))
        assert record.author == "Jane Doe"

    def test_missing_file(self, parser: AnnotationParser, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            parser.parse_file(str(tmp_path / "missing.go"))
