"""Annotation block parser.

Scans the leading comment block of a source file line by line and
extracts the labelled fields (Author, Date, File, Problem, Solution,
Note, Time/Space Complexity) into a Record. Everything outside the
block is kept verbatim as the record body.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from annodoc.parsers.record import FieldKind, Record

logger = logging.getLogger(__name__)

# Checked in order; the first pattern that matches a line decides its kind.
FIELD_PATTERNS: tuple[tuple[FieldKind, re.Pattern[str]], ...] = (
    (FieldKind.AUTHOR, re.compile(r"(?i)Author:\s*(.+)")),
    (FieldKind.DATE, re.compile(r"(?i)Date:\s*(.+)")),
    (FieldKind.FILE, re.compile(r"(?i)File:\s*(.+)")),
    (FieldKind.PROBLEM, re.compile(r"(?i)Problem:\s*(.+)")),
    (FieldKind.SOLUTION_START, re.compile(r"(?i)Solution:\s*\{")),
    (FieldKind.SOLUTION_END, re.compile(r"\}")),
    (FieldKind.NOTE_START, re.compile(r"(?i)Note:\s*\{")),
    (FieldKind.NOTE_END, re.compile(r"\}")),
    (FieldKind.TIME_COMPLEXITY, re.compile(r"(?i)Time Complexity:\s*(.+)")),
    (FieldKind.SPACE_COMPLEXITY, re.compile(r"(?i)Space Complexity:\s*(.+)")),
)

_SCALAR_FIELDS = {
    FieldKind.AUTHOR: "author",
    FieldKind.DATE: "date",
    FieldKind.FILE: "file_label",
    FieldKind.PROBLEM: "problem",
    FieldKind.TIME_COMPLEXITY: "time_complexity",
    FieldKind.SPACE_COMPLEXITY: "space_complexity",
}

_SOLUTION_PREFIX = re.compile(r"(?i)^Solution:\s*\{")
_NOTE_PREFIX = re.compile(r"(?i)^Note:\s*\{")


def match_field(line: str) -> Optional[tuple[FieldKind, str]]:
    """Classify a single annotation line.

    Args:
        line: A trimmed line from inside the annotation block.

    Returns:
        The kind of the first matching pattern and its captured value
        (empty for start/end markers), or None if nothing matches.
    """
    for kind, pattern in FIELD_PATTERNS:
        match = pattern.search(line)
        if match:
            value = match.group(1).strip() if pattern.groups else ""
            return kind, value
    return None


def _clean_multiline(text: str, prefix: re.Pattern[str]) -> str:
    """Strip the closing brace and the opening marker from a block value."""
    text = text.strip()
    if text.endswith("}"):
        text = text[:-1].strip()
    return prefix.sub("", text, count=1).strip()


class AnnotationParser:
    """Parses source files into Records.

    Only the first comment block is inspected. Multi-line fields end at
    the first line containing a closing brace; braces are not balanced,
    so a nested ``}`` inside a Solution or Note terminates it early.
    """

    def __init__(self, comment_open: str = "/*", comment_close: str = "*/") -> None:
        """Initialize the parser.

        Args:
            comment_open: Token that opens the annotation block.
            comment_close: Token that closes the annotation block.
        """
        self.comment_open = comment_open
        self.comment_close = comment_close

    def parse_file(self, file_path: str) -> Record:
        """Parse a source file.

        Args:
            file_path: Path to the source file.

        Returns:
            The extracted Record.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        source = path.read_text(encoding="utf-8")
        record = self.parse_source(source)
        logger.debug(
            "Parsed %s: author=%r file=%r body=%d chars",
            file_path,
            record.author,
            record.file_label,
            len(record.body),
        )
        return record

    def parse_source(self, source: str) -> Record:
        """Parse source text into a Record.

        Args:
            source: Full text of a source file.

        Returns:
            The extracted Record. Missing fields are empty strings.
        """
        fields = {name: "" for name in _SCALAR_FIELDS.values()}
        multiline = {"solution": "", "note": ""}
        body: list[str] = []

        in_block = False
        block_seen = False
        active: Optional[str] = None

        lines = source.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        for raw_line in lines:
            line = raw_line.strip()

            if not in_block:
                if not block_seen and line.startswith(self.comment_open):
                    in_block = True
                    block_seen = True
                    continue
                body.append(raw_line + "\n")
                continue

            if line.startswith(self.comment_close):
                in_block = False
                active = None
                continue

            matched = match_field(line)
            if matched is not None:
                kind, value = matched
                if kind in _SCALAR_FIELDS:
                    fields[_SCALAR_FIELDS[kind]] = value
                elif kind is FieldKind.SOLUTION_START:
                    active = "solution"
                elif kind is FieldKind.NOTE_START:
                    active = "note"
                else:
                    active = None

            # Independent of dispatch: any line seen while a block is active
            # is accumulated, including lines that matched a scalar pattern.
            if active is not None:
                multiline[active] += line + "\n"

        if in_block:
            logger.warning("Annotation block is never closed")

        return Record(
            solution=_clean_multiline(multiline["solution"], _SOLUTION_PREFIX),
            note=_clean_multiline(multiline["note"], _NOTE_PREFIX),
            body="".join(body),
            **fields,
        )
