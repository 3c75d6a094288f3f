"""Main GraphDot class for turning graphs into GraphViz images."""

import base64
import logging
from pathlib import Path
from typing import Optional

from ..visualization import DOTGenerator, GraphRenderer, GraphViewer, default_viewer
from .models import Graph, VisualizationConfig

logger = logging.getLogger(__name__)

SVG_FORMATS = ("svg", "svgz")


class GraphDot:
    """Generates DOT scripts for graphs and renders them with GraphViz."""

    def __init__(
        self,
        config: Optional[VisualizationConfig] = None,
        renderer: Optional[GraphRenderer] = None,
        viewer: Optional[GraphViewer] = None,
    ):
        """Initialize GraphDot instance.

        Args:
            config: Visualization configuration. If None, uses defaults.
            renderer: Renderer to use. If None, one is created on first render
                      for the configured executable.
            viewer: Viewer used by display(). If None, uses the shared viewer.
                    Either way it is throttled by ``config.open_delay``.
        """
        self.config = config or VisualizationConfig()
        self.dot_generator = DOTGenerator(self.config.dot)
        self._renderer = renderer
        self.viewer = viewer

    @property
    def executable(self) -> str:
        return self.config.executable

    def set_executable(self, executable: str) -> "GraphDot":
        """Change the GraphViz executable to use.

        Usually ``dot`` on PATH is sufficient. Other layout engines such as
        ``neato`` or ``dot.exe`` on Windows can be given here.

        Returns:
            self, for chaining.
        """
        self.config.executable = executable
        self._renderer = None
        return self

    @property
    def output_format(self) -> str:
        return self.config.output_format

    def set_format(self, output_format: str) -> "GraphDot":
        """Change the image output format (png, svg, pdf, ...).

        Returns:
            self, for chaining.
        """
        self.config.output_format = output_format
        return self

    @property
    def renderer(self) -> GraphRenderer:
        if self._renderer is None:
            self._renderer = GraphRenderer(self.config.executable, verbose=self.config.verbose)
        return self._renderer

    def create_script(self, graph: Graph) -> str:
        """Create the DOT script for a graph.

        Args:
            graph: Graph to serialize.

        Returns:
            DOT language string.
        """
        logger.info(f"Generating DOT script for {graph!r}")
        return self.dot_generator.generate_dot(graph)

    def create_image_file(self, graph: Graph) -> Path:
        """Render a graph into a new image file.

        The file is not deleted, the caller owns it.

        Returns:
            Path to the generated image file.
        """
        script = self.create_script(graph)
        return self.renderer.render_file(script, self.config.output_format)

    def create_image_data(self, graph: Graph) -> bytes:
        """Render a graph and return the raw image bytes."""
        script = self.create_script(graph)
        return self.renderer.render(script, self.config.output_format)

    def create_image_src(self, graph: Graph) -> str:
        """Render a graph into a base64 ``data:`` URI.

        SVG output carries the charset from the ``graphviz.graph.charset``
        graph attribute, UTF-8 by default.
        """
        fmt = self.config.output_format
        if fmt in SVG_FORMATS:
            fmt = "svg+xml;charset=" + str(graph.get_attribute("graphviz.graph.charset", "UTF-8"))

        data = base64.b64encode(self.create_image_data(graph)).decode("ascii")
        return f"data:image/{fmt};base64,{data}"

    def create_image_html(self, graph: Graph) -> str:
        """Render a graph into an HTML tag embedding the image."""
        if self.config.output_format in SVG_FORMATS:
            return f'<object type="image/svg+xml" data="{self.create_image_src(graph)}"></object>'

        return f'<img src="{self.create_image_src(graph)}" />'

    def display(self, graph: Graph) -> Path:
        """Render a graph and open it in the default image viewer.

        Returns:
            Path to the image file being shown.
        """
        image = self.create_image_file(graph)
        viewer = self.viewer or default_viewer()
        viewer.open(image, delay=self.config.open_delay)
        return image

    def export(self, graph: Graph, output_file: str, save_dot: bool = False) -> Path:
        """Render a graph to the given file.

        Args:
            graph: Graph to render.
            output_file: Destination path. A missing suffix is taken from the
                         configured format.
            save_dot: Whether to save the DOT source next to the output.

        Returns:
            Path to the written file.
        """
        output_path = Path(output_file)
        if not output_path.suffix:
            output_path = output_path.with_suffix("." + self.config.output_format)

        script = self.create_script(graph)
        if save_dot:
            GraphRenderer.save_dot_file(script, output_path.with_suffix(".dot"))

        output_path.write_bytes(self.renderer.render(script, self.config.output_format))
        logger.info(f"Graph exported successfully: {output_path}")
        return output_path
