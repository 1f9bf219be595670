"""Source formatting for embedded code blocks.

Runs the language's standard formatter (gofmt for Go sources) over the
body of a record before it is embedded into the rendered document.
"""

import logging
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)


class FormatError(RuntimeError):
    """Raised when the source formatter rejects the code or cannot run."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class SourceFormatter:
    """Pipes source code through an external formatter command.

    The command reads the code on stdin and writes the formatted code to
    stdout, as ``gofmt`` and ``black -`` do. An empty command disables
    formatting and returns the code unchanged.
    """

    def __init__(self, command: Optional[list[str]] = None) -> None:
        """Initialize the formatter.

        Args:
            command: Formatter argv, e.g. ``["gofmt"]``. None or an empty
                list disables formatting.
        """
        self.command = list(command or [])

    @property
    def enabled(self) -> bool:
        return bool(self.command)

    def format(self, code: str) -> str:
        """Format source code.

        Args:
            code: Source code to format.

        Returns:
            The formatted source code.

        Raises:
            FormatError: If the formatter exits non-zero or is not installed.
        """
        if not self.enabled:
            return code

        try:
            result = subprocess.run(
                self.command,
                input=code,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            logger.error("%s failed: %s", self.command[0], stderr)
            raise FormatError(f"{self.command[0]} failed: {stderr}", stderr=stderr) from e
        except FileNotFoundError as e:
            raise FormatError(f"Formatter not found in PATH: {self.command[0]}") from e

        logger.debug("Formatted %d chars with %s", len(code), self.command[0])
        return result.stdout
