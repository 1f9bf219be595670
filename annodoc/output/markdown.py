"""Markdown rendering and output for annotated source files.

Renders a parsed Record into the fixed Notes template (Jinja2), embeds
the formatted source body in a fenced code block, and writes rendered
documents to the output directory.
"""

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from annodoc.output.formatter import SourceFormatter
from annodoc.parsers.record import Record

logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
_DOCUMENT_TEMPLATE = "document.md.j2"


def fence(code: str, language: str) -> str:
    """Wrap code in a fenced Markdown block."""
    return f"```{language}\n{code}\n```"


def extract_code_block(content: str, language: str = "go") -> str:
    """Extract the embedded source from a rendered document.

    Args:
        content: Rendered Markdown document.
        language: Language tag of the fenced block.

    Returns:
        The code between the opening fence and the last closing fence.

    Raises:
        ValueError: If the document has no fenced block for the language.
    """
    opening = f"```{language}\n"
    start = content.find(opening)
    end = content.rfind("\n```")
    if start == -1 or end < start + len(opening) - 1:
        raise ValueError(f"No ```{language} block found")
    return content[start + len(opening) : end]


def document_filename(source_path: str, suffix: str = ".go") -> str:
    """Build the output filename for a source file.

    Args:
        source_path: Path of the source file.
        suffix: Source extension to drop from the basename.

    Returns:
        ``<basename without suffix>.md``.
    """
    name = Path(source_path).name
    if suffix and name.endswith(suffix):
        name = name[: -len(suffix)]
    return f"{name}.md"


class MarkdownRenderer:
    """Renders Records into Markdown documents.

    The renderer does not check whether a record is documentable;
    callers skip records without an author or file label.
    """

    def __init__(
        self,
        formatter: Optional[SourceFormatter] = None,
        language: str = "go",
        templates_dir: Optional[str] = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            formatter: Formatter applied to the record body. Defaults to
                running ``gofmt``.
            language: Language tag used on the fenced code block.
            templates_dir: Directory holding ``document.md.j2``. Uses the
                bundled templates if not specified.
        """
        self.formatter = formatter if formatter is not None else SourceFormatter(["gofmt"])
        self.language = language
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or _TEMPLATES_DIR)),
            keep_trailing_newline=True,
            autoescape=False,
        )

    def code_block(self, record: Record) -> str:
        """Format the record body and wrap it in a fenced block.

        Args:
            record: The parsed record.

        Returns:
            The fenced code block.

        Raises:
            FormatError: If the formatter rejects the body.
        """
        return fence(self.formatter.format(record.body), self.language)

    def render(self, record: Record, code_block: Optional[str] = None) -> str:
        """Render a record into the Notes document.

        Args:
            record: The parsed record.
            code_block: Pre-rendered fenced block, as returned by
                ``code_block()``. Computed from the record if omitted.

        Returns:
            The Markdown document.

        Raises:
            FormatError: If the formatter rejects the body.
        """
        if code_block is None:
            code_block = self.code_block(record)
        template = self._env.get_template(_DOCUMENT_TEMPLATE)
        rendered = template.render(record=record, code_block=code_block)
        logger.debug("Rendered document for %s (%d chars)", record.file_label, len(rendered))
        return rendered


class MarkdownWriter:
    """Writes rendered documents into an output directory."""

    def __init__(self, output_dir: str = "annodoc_out") -> None:
        """Initialize the Markdown writer.

        Args:
            output_dir: Directory where Markdown files will be written.
        """
        self.output_dir = Path(output_dir)

    def write(self, content: str, filename: str) -> Path:
        """Write a document, creating the output directory on demand.

        Args:
            content: Rendered Markdown.
            filename: Name of the file inside the output directory.

        Returns:
            Path to the written Markdown file.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        md_path = self.output_dir / filename
        md_path.write_text(content, encoding="utf-8")

        logger.info("Wrote document: %s", md_path)
        return md_path
