"""Visualization module for DOT generation and rendering."""

from .dot_generator import DOTGenerator
from .graph_builder import GraphBuilder
from .renderer import GraphRenderer
from .viewer import GraphViewer, default_viewer

__all__ = ["DOTGenerator", "GraphBuilder", "GraphRenderer", "GraphViewer", "default_viewer"]
