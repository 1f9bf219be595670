"""Annotated Source Documenter.

Extracts the leading annotation comment of source files (author, date,
problem, solution, complexity notes) and renders it, together with the
formatted source body, into Markdown documents.
"""

__version__ = "0.1.0"
