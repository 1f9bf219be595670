"""Entry point for the annotated source documenter.

Allows running the CLI with ``python -m annodoc.main``.
"""

from annodoc.cli.commands import cli


def main() -> None:
    """Launch the CLI."""
    cli(prog_name="annodoc")


if __name__ == "__main__":
    main()
