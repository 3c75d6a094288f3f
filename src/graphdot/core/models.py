"""Graph model, enums and configuration for GraphDot."""

from __future__ import annotations

import platform
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, Field

from .exceptions import MalformedGraphError


class OutputFormat(str, Enum):
    """Output formats offered on the command line."""

    PNG = "png"
    SVG = "svg"
    SVGZ = "svgz"
    PDF = "pdf"
    JPG = "jpg"
    GIF = "gif"
    DOT = "dot"
    PLAIN = "plain"


class Engine(str, Enum):
    """GraphViz layout engines."""

    DOT = "dot"
    NEATO = "neato"
    FDP = "fdp"
    SFDP = "sfdp"
    CIRCO = "circo"
    TWOPI = "twopi"


def default_executable() -> str:
    """Return the platform default layout executable."""
    if platform.system().lower().startswith("win"):
        return "dot.exe"
    return "dot"


@dataclass(eq=False)
class Vertex:
    """Graph vertex.

    ``index`` is the handle assigned by the owning graph. Vertices compare by
    identity, two vertices with equal attributes are still distinct.
    """

    index: int
    attributes: dict[str, Any] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> Vertex:
        self.attributes[name] = value
        return self


@dataclass(eq=False)
class Edge:
    """Graph edge between two vertices of the same graph."""

    index: int
    source: Vertex
    target: Vertex
    directed: bool = True
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def is_loop(self) -> bool:
        return self.source is self.target

    def connects(self, start: Vertex, end: Vertex) -> bool:
        """Return True if this edge leads from ``start`` to ``end``.

        Undirected edges connect their endpoints in both directions.
        """
        if self.source is start and self.target is end:
            return True
        return not self.directed and self.source is end and self.target is start

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> Edge:
        self.attributes[name] = value
        return self


class Graph:
    """Ordered collection of vertices and edges with an attribute bag."""

    def __init__(self, name: str | None = None, attributes: dict[str, Any] | None = None):
        self.attributes: dict[str, Any] = dict(attributes or {})
        if name is not None:
            self.attributes["graphviz.name"] = name
        self.vertices: list[Vertex] = []
        self.edges: list[Edge] = []

    @property
    def name(self) -> str | None:
        return self.attributes.get("graphviz.name")

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> Graph:
        self.attributes[name] = value
        return self

    def add_vertex(self, attributes: dict[str, Any] | None = None, **kwargs: Any) -> Vertex:
        """Create a vertex owned by this graph.

        Attributes may be given as a mapping (for dotted keys such as
        ``graphviz.color``) and/or as keyword arguments.
        """
        merged = dict(attributes or {})
        merged.update(kwargs)
        vertex = Vertex(index=len(self.vertices), attributes=merged)
        self.vertices.append(vertex)
        return vertex

    def add_edge(
        self,
        source: Vertex,
        target: Vertex,
        directed: bool = True,
        attributes: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Edge:
        """Create an edge between two vertices of this graph.

        Raises:
            MalformedGraphError: If either endpoint belongs to another graph.
        """
        for vertex in (source, target):
            if not self.has_vertex(vertex):
                raise MalformedGraphError(
                    f"Edge endpoint {vertex!r} is not a vertex of this graph"
                )

        merged = dict(attributes or {})
        merged.update(kwargs)
        edge = Edge(
            index=len(self.edges),
            source=source,
            target=target,
            directed=directed,
            attributes=merged,
        )
        self.edges.append(edge)
        source.edges.append(edge)
        if not edge.is_loop:
            target.edges.append(edge)
        return edge

    def add_undirected_edge(
        self, source: Vertex, target: Vertex, attributes: dict[str, Any] | None = None, **kwargs: Any
    ) -> Edge:
        return self.add_edge(source, target, False, attributes, **kwargs)

    def has_vertex(self, vertex: Vertex) -> bool:
        return 0 <= vertex.index < len(self.vertices) and self.vertices[vertex.index] is vertex

    def is_directed(self) -> bool:
        """Return True if any edge is directed."""
        return any(edge.directed for edge in self.edges)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __repr__(self) -> str:
        return f"Graph(name={self.name!r}, vertices={len(self.vertices)}, edges={len(self.edges)})"


class DOTConfig(BaseModel):
    """Settings for DOT script generation."""

    indent: str = "  "
    eol: str = "\n"
    attribute_flow: str = "flow"
    attribute_capacity: str = "capacity"
    attribute_weight: str = "weight"
    attribute_group: str = "group"
    attribute_balance: str = "balance"


class VisualizationConfig(BaseModel):
    """Configuration for rendering and displaying graphs."""

    executable: str = Field(default_factory=default_executable)
    output_format: str = OutputFormat.PNG.value
    open_delay: float = 2.0
    verbose: bool = False
    dot: DOTConfig = Field(default_factory=DOTConfig)
