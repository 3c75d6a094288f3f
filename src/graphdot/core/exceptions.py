"""Exception types raised by GraphDot."""

from __future__ import annotations


class GraphDotError(Exception):
    """Base class for all GraphDot errors."""


class MalformedGraphError(GraphDotError, ValueError):
    """An edge references a vertex that is not part of the graph."""


class TempResourceError(GraphDotError):
    """The temporary script file could not be created or written."""


class ExecutableNotFoundError(GraphDotError):
    """The GraphViz layout executable is not installed or not on PATH."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(
            f"GraphViz executable '{executable}' not found. Please install GraphViz:\n"
            "  Ubuntu/Debian: sudo apt-get install graphviz\n"
            "  macOS: brew install graphviz\n"
            "  Windows: Download from https://graphviz.org/download/"
        )


class RenderProcessError(GraphDotError):
    """The GraphViz executable exited with a non-zero status."""

    def __init__(self, executable: str, returncode: int, stderr: str | None = None):
        self.executable = executable
        self.returncode = returncode
        self.stderr = stderr
        message = f'Unable to invoke "{executable}" to create image file (code {returncode})'
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message)
