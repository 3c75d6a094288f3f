"""Python GraphDot - render in-memory graphs with GraphViz.

Turns graphs of vertices and edges into DOT scripts and renders them
through the GraphViz layout executables.
"""

from .core.exceptions import GraphDotError
from .core.graphdot import GraphDot
from .core.models import Graph, OutputFormat, VisualizationConfig

__version__ = "1.0.0"
__all__ = ["GraphDot", "GraphDotError", "Graph", "OutputFormat", "VisualizationConfig"]
