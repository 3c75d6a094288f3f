"""Core GraphDot module."""

from .exceptions import (
    ExecutableNotFoundError,
    GraphDotError,
    MalformedGraphError,
    RenderProcessError,
    TempResourceError,
)
from .graphdot import GraphDot
from .models import (
    DOTConfig,
    Edge,
    Engine,
    Graph,
    OutputFormat,
    Vertex,
    VisualizationConfig,
)

__all__ = [
    "DOTConfig",
    "Edge",
    "Engine",
    "ExecutableNotFoundError",
    "Graph",
    "GraphDot",
    "GraphDotError",
    "MalformedGraphError",
    "OutputFormat",
    "RenderProcessError",
    "TempResourceError",
    "Vertex",
    "VisualizationConfig",
]
