"""Building GraphDot graphs from networkx graphs and plain mappings."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import networkx as nx

from ..core.exceptions import MalformedGraphError
from ..core.models import Graph, Vertex

logger = logging.getLogger(__name__)


def _directed_flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise MalformedGraphError(f"'directed' must be true or false, got {value!r}")
    return value


class GraphBuilder:
    """Builds GraphDot graphs from other graph representations."""

    def from_networkx(self, nx_graph: nx.Graph) -> Graph:
        """Build a graph from a networkx graph.

        Node keys become the ``id`` attribute unless the node already has an
        ``id``. Graph, node and edge attributes are copied in order.

        Args:
            nx_graph: Any networkx graph, multigraphs included.

        Returns:
            New graph model.
        """
        directed = nx_graph.is_directed()
        graph = Graph(attributes=dict(nx_graph.graph))

        vertices: Dict[Any, Vertex] = {}
        for key, data in nx_graph.nodes(data=True):
            attributes = dict(data)
            attributes.setdefault("id", key)
            vertices[key] = graph.add_vertex(attributes)

        for source, target, data in nx_graph.edges(data=True):
            graph.add_edge(vertices[source], vertices[target], directed, dict(data))

        logger.info(
            f"Built graph with {len(graph.vertices)} vertices and {len(graph.edges)} edges from networkx"
        )
        return graph

    def from_dict(self, data: Mapping[str, Any]) -> Graph:
        """Build a graph from a plain mapping.

        Expected shape::

            {
                "name": "G",
                "directed": true,
                "attributes": {"graphviz.graph.rankdir": "LR"},
                "vertices": [{"id": "a", "group": 1}, ...],
                "edges": [{"source": "a", "target": "b", "weight": 3}, ...]
            }

        Edges default to the top-level ``directed`` flag (true when absent).
        ``directed`` values must be booleans.

        Raises:
            MalformedGraphError: If an edge references an unknown vertex id or
                a ``directed`` value is not a boolean.
        """
        graph = Graph(name=data.get("name"), attributes=data.get("attributes"))
        default_directed = _directed_flag(data.get("directed", True))

        vertices: Dict[Any, Vertex] = {}
        for entry in data.get("vertices", []):
            vertex = graph.add_vertex(dict(entry))
            if "id" in entry:
                vertices[entry["id"]] = vertex

        for entry in data.get("edges", []):
            attributes = dict(entry)
            try:
                source = vertices[attributes.pop("source")]
                target = vertices[attributes.pop("target")]
            except KeyError as e:
                raise MalformedGraphError(f"Edge references unknown vertex {e}") from e
            directed = _directed_flag(attributes.pop("directed", default_directed))
            graph.add_edge(source, target, directed, attributes)

        logger.info(f"Built graph with {len(graph.vertices)} vertices and {len(graph.edges)} edges")
        return graph

    def load(self, path: Union[str, Path]) -> Graph:
        """Load a graph from a JSON, GraphML or GML file.

        Args:
            path: Input file, format chosen by suffix.

        Returns:
            New graph model.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        logger.info(f"Loading graph from {path}")

        if suffix == ".json":
            return self.from_dict(json.loads(path.read_text(encoding="utf-8")))
        if suffix == ".graphml":
            return self.from_networkx(nx.read_graphml(path))
        if suffix == ".gml":
            return self.from_networkx(nx.read_gml(path))

        raise ValueError(
            f"Unsupported graph file '{path.name}'. Expected .json, .graphml or .gml"
        )
