"""Web viewer over a batch of rendered documents.

Serves a listing page and a per-document page that renders the stored
Markdown in the browser with marked.js and highlight.js. The document
map is frozen when the app is created and only read afterwards.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from annodoc.parsers.record import Document

logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def parse_address(address: str, default_host: str = "127.0.0.1") -> tuple[str, int]:
    """Split a listen address into host and port.

    Args:
        address: ``host:port`` or ``:port``.
        default_host: Host used when the address has none.

    Returns:
        A (host, port) tuple.

    Raises:
        ValueError: If the port is missing or not a number.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid listen address: {address!r}")
    return host or default_host, int(port)


def create_app(documents: Mapping[str, Document]) -> FastAPI:
    """Build the viewer app over a snapshot of documents.

    Args:
        documents: Mapping of source path to rendered Document.

    Returns:
        The FastAPI application.
    """
    snapshot = MappingProxyType(dict(documents))
    templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))
    app = FastAPI(title="Annotated Source Documents")
    app.state.documents = snapshot

    @app.get("/", response_class=HTMLResponse)
    async def list_documents(request: Request):
        """Listing page with a link per document."""
        docs = [snapshot[path] for path in sorted(snapshot)]
        return templates.TemplateResponse(
            request, "doclist.html", {"documents": docs}
        )

    @app.get("/doc", response_class=HTMLResponse)
    async def view_document(request: Request, path: str = ""):
        """Render one stored document."""
        document = snapshot.get(path)
        if document is None:
            raise HTTPException(status_code=404, detail="Document not found")
        return templates.TemplateResponse(
            request, "docview.html", {"document": document}
        )

    return app


def serve(
    documents: Mapping[str, Document],
    address: str,
    default_host: str = "127.0.0.1",
) -> None:
    """Run the viewer until interrupted.

    Args:
        documents: Mapping of source path to rendered Document.
        address: Listen address, ``host:port`` or ``:port``.
        default_host: Host used when the address has none.
    """
    host, port = parse_address(address, default_host=default_host)
    app = create_app(documents)
    logger.info("Starting HTTP server on %s:%d (%d documents)", host, port, len(documents))
    uvicorn.run(app, host=host, port=port)
