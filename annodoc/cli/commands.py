"""CLI for the annotated source documenter.

Provides the Click command 'annodoc' with three non-exclusive modes:
render a single file, render every source file under a directory, and
serve the rendered batch over HTTP.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from annodoc import __version__
from annodoc.collector import collect_documents
from annodoc.output.formatter import FormatError, SourceFormatter
from annodoc.output.markdown import MarkdownRenderer, MarkdownWriter, document_filename
from annodoc.output.server import parse_address, serve
from annodoc.parsers.annotation_parser import AnnotationParser
from annodoc.utils.config import AppConfig, load_config
from annodoc.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def _build_pipeline(config: AppConfig) -> tuple[AnnotationParser, MarkdownRenderer]:
    """Create the parser and renderer described by the configuration."""
    parser = AnnotationParser(
        comment_open=config.parser.comment_open,
        comment_close=config.parser.comment_close,
    )
    renderer = MarkdownRenderer(
        formatter=SourceFormatter(config.source.formatter),
        language=config.source.language,
    )
    return parser, renderer


def _process_file(
    input_file: str,
    output_name: str,
    parser: AnnotationParser,
    renderer: MarkdownRenderer,
    writer: MarkdownWriter,
    preview: bool,
) -> Optional[Path]:
    """Render one source file into the output directory.

    Returns:
        Path of the written file, or None if the file is not documentable.
    """
    record = parser.parse_file(input_file)
    if not record.is_documentable:
        logger.info("Skipped %s: Author or File is empty", input_file)
        return None

    block = renderer.code_block(record)
    if preview:
        click.echo(block)
    return writer.write(renderer.render(record, code_block=block), output_name)


@click.command(name="annodoc")
@click.version_option(version=__version__, prog_name="annodoc")
@click.option(
    "--input",
    "-i",
    "input_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Source file to document.",
)
@click.option(
    "--output",
    "-o",
    "output_name",
    default=None,
    help="Name of the Markdown file written for --input.",
)
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    help="Document every source file under --root.",
)
@click.option(
    "--http",
    "http_addr",
    default=None,
    help="Serve the rendered documents on this address (e.g. :6060).",
)
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Directory walked by --recursive and --http.",
)
@click.option("--output-dir", type=click.Path(), default=None, help="Output directory.")
@click.option("--config", "config_path", type=click.Path(), default=None, help="Config file.")
@click.option("--preview", is_flag=True, help="Print each formatted code block.")
def cli(
    input_file: Optional[str],
    output_name: Optional[str],
    recursive: bool,
    http_addr: Optional[str],
    root: str,
    output_dir: Optional[str],
    config_path: Optional[str],
    preview: bool,
) -> None:
    """Annotated Source Documenter: render annotation comments to Markdown.

    Reads the leading comment block of source files (Author, Date, File,
    Problem, Solution, Note, Time/Space Complexity) and writes a Notes
    document with the formatted source embedded.
    """
    if not input_file and not recursive and not http_addr:
        raise click.UsageError(
            "Either --input must be given, --recursive must be used for "
            "recursive processing, or --http must be used to start the server"
        )

    config = load_config(config_path)
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )

    if http_addr:
        try:
            parse_address(http_addr, default_host=config.server.host)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--http") from e

    parser, renderer = _build_pipeline(config)
    writer = MarkdownWriter(output_dir=output_dir or config.output.output_dir)
    preview = preview or config.output.preview

    try:
        if input_file:
            name = output_name or config.output.default_filename
            written = _process_file(input_file, name, parser, renderer, writer, preview)
            if written is None:
                click.echo(f"Skipped {input_file}: Author or File is empty")
            else:
                click.echo(f"Markdown file generated: {written}")

        if recursive or http_addr:
            documents = collect_documents(
                root,
                parser,
                renderer,
                suffix=config.source.extension,
                test_suffix=config.source.test_suffix,
                exclude_dirs=config.source.exclude_dirs,
                preview=click.echo if preview else None,
            )
            click.echo(f"Rendered {len(documents)} documents")

            if recursive:
                for document in documents.values():
                    filename = document_filename(document.path, config.source.extension)
                    written = writer.write(document.content, filename)
                    click.echo(f"Markdown file generated: {written}")
    except (OSError, UnicodeDecodeError, FormatError) as e:
        raise click.ClickException(str(e)) from e

    if http_addr:
        serve(documents, http_addr, default_host=config.server.host)
