"""Data models for parsed annotation blocks.

Defines the Record produced by the annotation parser, the field kinds
recognised inside an annotation block, and the Document pairing a
source path with its rendered Markdown.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    """Kinds of lines recognised inside an annotation block."""

    AUTHOR = "author"
    DATE = "date"
    FILE = "file"
    PROBLEM = "problem"
    SOLUTION_START = "solution_start"
    SOLUTION_END = "solution_end"
    NOTE_START = "note_start"
    NOTE_END = "note_end"
    TIME_COMPLEXITY = "time_complexity"
    SPACE_COMPLEXITY = "space_complexity"


@dataclass(frozen=True)
class Record:
    """Structured metadata and body extracted from one source file.

    Attributes:
        author: Author named in the annotation block.
        date: Free-form date string.
        file_label: Label given by the ``File:`` field.
        problem: One-line problem statement.
        solution: Multi-line solution narrative.
        note: Multi-line free-form note.
        time_complexity: Time complexity notation.
        space_complexity: Space complexity notation.
        body: Source text outside the annotation block.
    """

    author: str = ""
    date: str = ""
    file_label: str = ""
    problem: str = ""
    solution: str = ""
    note: str = ""
    time_complexity: str = ""
    space_complexity: str = ""
    body: str = ""

    @property
    def is_documentable(self) -> bool:
        """Whether both required fields (author and file label) are set."""
        return bool(self.author) and bool(self.file_label)

    def to_dict(self) -> dict[str, str]:
        """Serialize to a dictionary keyed by display name.

        Returns:
            Dictionary representation of this record.
        """
        return {
            "Author": self.author,
            "Date": self.date,
            "File": self.file_label,
            "Problem": self.problem,
            "Solution": self.solution,
            "Note": self.note,
            "TimeComplexity": self.time_complexity,
            "SpaceComplexity": self.space_complexity,
            "Code": self.body,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Record:
        """Deserialize from a dictionary keyed by display name.

        Args:
            data: Dictionary with record fields.

        Returns:
            A new Record instance.
        """
        return cls(
            author=data.get("Author", ""),
            date=data.get("Date", ""),
            file_label=data.get("File", ""),
            problem=data.get("Problem", ""),
            solution=data.get("Solution", ""),
            note=data.get("Note", ""),
            time_complexity=data.get("TimeComplexity", ""),
            space_complexity=data.get("SpaceComplexity", ""),
            body=data.get("Code", ""),
        )


@dataclass(frozen=True)
class Document:
    """Rendered Markdown for a single source file.

    Attributes:
        path: Path of the source file the document was rendered from.
        content: Rendered Markdown text.
    """

    path: str
    content: str
