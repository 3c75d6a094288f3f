"""Graph rendering using GraphViz."""

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

import graphviz

from ..core.exceptions import (
    ExecutableNotFoundError,
    RenderProcessError,
    TempResourceError,
)
from ..core.models import OutputFormat, default_executable

logger = logging.getLogger(__name__)


@contextmanager
def executable_on_path(executable: str) -> Iterator[None]:
    """Put the directory of an executable given by path first on PATH.

    The graphviz library looks engines up by name, so a full path such as
    ``/opt/graphviz/bin/dot`` only takes effect through PATH. Bare names
    leave PATH untouched.
    """
    directory = os.path.dirname(executable)
    if not directory:
        yield
        return

    old_path = os.environ.get("PATH")
    os.environ["PATH"] = os.pathsep.join(filter(None, [os.path.abspath(directory), old_path]))
    try:
        yield
    finally:
        if old_path is None:
            del os.environ["PATH"]
        else:
            os.environ["PATH"] = old_path


def engine_name(executable: str) -> str:
    """Return the layout engine name for an executable such as ``dot.exe``."""
    name = Path(executable).name
    if name.lower().endswith(".exe"):
        name = name[:-4]
    return name


class GraphRenderer:
    """Renders DOT language to output files using a GraphViz executable."""

    def __init__(
        self,
        executable: str | None = None,
        verbose: bool = False,
        check_installation: bool = True,
    ):
        """Initialize renderer and check GraphViz availability.

        Args:
            executable: GraphViz layout executable (dot, neato, dot.exe, ...).
            verbose: Whether to let GraphViz warnings through to stderr.
            check_installation: Whether to verify the executable is on PATH.
        """
        self.executable = executable or default_executable()
        self.engine = engine_name(self.executable)
        self.verbose = verbose

        if self.engine not in graphviz.ENGINES:
            raise ValueError(
                f"Unknown GraphViz layout engine '{self.engine}'. "
                f"Expected one of: {', '.join(sorted(graphviz.ENGINES))}"
            )

        if check_installation:
            self._check_graphviz_installation()

    def _check_graphviz_installation(self) -> None:
        """Check if the GraphViz executable is installed and accessible."""
        if not shutil.which(self.executable):
            raise ExecutableNotFoundError(self.executable)

        logger.info(f"GraphViz installation verified: {self.executable}")

    def render_file(self, dot_content: str, output_format: Union[str, OutputFormat]) -> Path:
        """Render DOT content to a new file next to a temporary script.

        The temporary script is always removed. The returned image file is
        owned by the caller.

        Args:
            dot_content: DOT language content.
            output_format: GraphViz output format (png, svg, ...).

        Returns:
            Path to the generated file.
        """
        fmt = self._check_format(output_format)

        try:
            fd, tmp = tempfile.mkstemp(prefix="graphviz")
        except OSError as e:
            raise TempResourceError(
                "Unable to get temporary file name for graphviz script"
            ) from e

        try:
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(dot_content)
            except OSError as e:
                raise TempResourceError(
                    "Unable to write graphviz script to temporary file"
                ) from e

            output_path = Path(f"{tmp}.{fmt}")
            logger.info(f"Rendering graph to {fmt} format with {self.executable}")

            try:
                with executable_on_path(self.executable):
                    graphviz.render(
                        self.engine,
                        fmt,
                        tmp,
                        outfile=output_path,
                        quiet=not self.verbose,
                    )
            except graphviz.ExecutableNotFound as e:
                raise ExecutableNotFoundError(self.executable) from e
            except graphviz.CalledProcessError as e:
                stderr = e.stderr.decode("utf-8", "replace") if isinstance(e.stderr, bytes) else e.stderr
                raise RenderProcessError(self.executable, e.returncode, stderr) from e
        finally:
            Path(tmp).unlink(missing_ok=True)

        logger.info(f"Graph rendered successfully to: {output_path}")
        return output_path

    def render(self, dot_content: str, output_format: Union[str, OutputFormat]) -> bytes:
        """Render DOT content to bytes for in-memory usage.

        Args:
            dot_content: DOT language content.
            output_format: GraphViz output format.

        Returns:
            Rendered graph as bytes.
        """
        output_path = self.render_file(dot_content, output_format)
        try:
            return output_path.read_bytes()
        finally:
            output_path.unlink(missing_ok=True)

    def validate_dot(self, dot_content: str) -> bool:
        """Validate DOT content syntax.

        Args:
            dot_content: DOT language content to validate.

        Returns:
            True if valid, False otherwise.
        """
        try:
            graph = graphviz.Source(dot_content, engine=self.engine)
            with executable_on_path(self.executable):
                graph.pipe(format="svg", quiet=True)
            return True
        except (graphviz.CalledProcessError, graphviz.ExecutableNotFound) as e:
            logger.error(f"DOT validation failed: {e}")
            return False

    @staticmethod
    def get_available_engines() -> list[str]:
        """Get list of available GraphViz layout engines.

        Returns:
            List of engine names found on PATH.
        """
        return [engine for engine in sorted(graphviz.ENGINES) if shutil.which(engine)]

    @staticmethod
    def save_dot_file(dot_content: str, output_file: Union[str, Path]) -> Path:
        """Save DOT content to a .dot file.

        Args:
            dot_content: DOT language content.
            output_file: Output file path.

        Returns:
            Path to the saved DOT file.
        """
        dot_path = Path(output_file)

        # Ensure .dot extension
        if dot_path.suffix.lower() != ".dot":
            dot_path = dot_path.with_suffix(".dot")

        dot_path.write_text(dot_content, encoding="utf-8")
        logger.info(f"DOT file saved to: {dot_path}")

        return dot_path

    @staticmethod
    def _check_format(output_format: Union[str, OutputFormat]) -> str:
        fmt = output_format.value if isinstance(output_format, OutputFormat) else str(output_format)
        if fmt not in graphviz.FORMATS:
            raise ValueError(f"Unknown GraphViz output format '{fmt}'")
        return fmt
