"""Recursive batch collection of rendered documents.

Walks a directory tree, parses every qualifying source file, and renders
the documentable ones into a path-keyed map of Documents.
"""

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from typing import Optional

from annodoc.output.markdown import MarkdownRenderer
from annodoc.parsers.annotation_parser import AnnotationParser
from annodoc.parsers.record import Document

logger = logging.getLogger(__name__)


def iter_source_files(
    root: str,
    suffix: str = ".go",
    test_suffix: str = "_test.go",
    exclude_dirs: Optional[Iterable[str]] = None,
) -> Iterator[str]:
    """Yield source files under a directory.

    Args:
        root: Directory to walk.
        suffix: Extension a file must end with.
        test_suffix: Files ending with this are skipped.
        exclude_dirs: Directory names that are not descended into.

    Yields:
        Paths of qualifying regular files. Order follows the filesystem.
    """
    excluded = set(exclude_dirs or ())
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in excluded]
        for name in filenames:
            if test_suffix and name.endswith(test_suffix):
                continue
            if not name.endswith(suffix):
                continue
            path = os.path.join(dirpath, name)
            if os.path.isfile(path):
                yield path


def collect_documents(
    root: str,
    parser: AnnotationParser,
    renderer: MarkdownRenderer,
    suffix: str = ".go",
    test_suffix: str = "_test.go",
    exclude_dirs: Optional[Iterable[str]] = None,
    preview: Optional[Callable[[str], None]] = None,
) -> dict[str, Document]:
    """Parse and render every documentable source file under a directory.

    Files whose record lacks an author or a file label are skipped. Any
    parse or render failure aborts the whole batch.

    Args:
        root: Directory to walk.
        parser: Parser used for each file.
        renderer: Renderer used for each documentable record.
        suffix: Source file extension.
        test_suffix: Suffix of test files to skip.
        exclude_dirs: Directory names that are not descended into.
        preview: Called with each formatted code block before rendering.

    Returns:
        Mapping of source path to its rendered Document.

    Raises:
        OSError: If a file cannot be read.
        FormatError: If a body cannot be formatted.
    """
    documents: dict[str, Document] = {}
    for path in iter_source_files(root, suffix, test_suffix, exclude_dirs):
        record = parser.parse_file(path)
        if not record.is_documentable:
            logger.info("Skipped %s: Author or File is empty", path)
            continue

        block = renderer.code_block(record)
        if preview is not None:
            preview(block)
        documents[path] = Document(path=path, content=renderer.render(record, code_block=block))
        logger.info("Rendered %s", path)

    logger.info("Collected %d documents under %s", len(documents), root)
    return documents
