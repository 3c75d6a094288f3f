"""DOT language generation for GraphViz rendering."""

import logging
import re
from typing import Any, Dict, List, Optional, Set, Tuple

from ..core.models import DOTConfig, Edge, Graph, Vertex

logger = logging.getLogger(__name__)

# There is no semantic difference between abc_2 and "abc_2", only plain
# numerals are left unquoted to keep the escaping rules simple.
NUMERAL_PATTERN = re.compile(r"-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]+)?)")

ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&apos;",
        "\\": "\\\\",
        "\n": "\\l",
    }
)

GLOBAL_PREFIXES = (
    ("graph", "graphviz.graph."),
    ("node", "graphviz.node."),
    ("edge", "graphviz.edge."),
)


def format_value(value: Any) -> str:
    """Convert an attribute value to its text form.

    Integral floats drop their trailing ``.0`` so that ``5.0`` and ``5``
    render the same.
    """
    if isinstance(value, float) and not isinstance(value, bool) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_positive(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value > 0
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


class DOTGenerator:
    """Generates DOT language scripts from GraphDot graphs."""

    def __init__(self, config: Optional[DOTConfig] = None):
        """Initialize DOT generator with configuration.

        Args:
            config: DOT generation settings. Defaults are used if None.
        """
        self.config = config or DOTConfig()

    def generate_dot(self, graph: Graph) -> str:
        """Generate the DOT script for a graph.

        Args:
            graph: Graph to serialize. It is only read, never modified.

        Returns:
            DOT language string.
        """
        indent = self.config.indent
        eol = self.config.eol

        directed = graph.is_directed()

        name = graph.name
        header = "digraph " if directed else "graph "
        if name is not None:
            header += self.escape(name) + " "
        lines = [header + "{"]

        # add global attributes
        for keyword, prefix in GLOBAL_PREFIXES:
            layout = self.get_attributes_prefixed(graph.attributes, prefix)
            if layout:
                lines.append(indent + keyword + " " + self.escape_attributes(layout))

        vids = self._assign_vids(graph)
        groups = self._group_vertices(graph)

        # only cluster vertices into groups if there are at least 2 different groups
        if len(groups) > 1:
            inner = indent * 2
            for gid, (group, vertices) in enumerate(groups):
                lines.append(f"{indent}subgraph cluster_{gid} {{")
                lines.append(inner + "label = " + self.escape(group))
                for vertex in vertices:
                    lines.append(inner + self._vertex_statement(vertex, vids[vertex.index]))
                lines.append(indent + "}")
        else:
            # explicitly add isolated vertices and vertices with special layout,
            # all others are introduced by the edge statements below
            for vertex in graph.vertices:
                vid = vids[vertex.index]
                layout = self.get_layout_vertex(vertex, vid)
                if layout or not vertex.edges:
                    lines.append(indent + self._statement(self.escape(vid), layout))

        edgeop = " -> " if directed else " -- "
        connections = self._connections(graph.edges)

        for edge in graph.edges:
            source = edge.source
            target = edge.target
            layout = self.get_layout_edge(edge)

            # a non-loop edge that also points in the opposite direction is
            # shown as an undirected edge
            if directed and not edge.is_loop and (target.index, source.index) in connections:
                layout["dir"] = "none"

            statement = self.escape(vids[source.index]) + edgeop + self.escape(vids[target.index])
            lines.append(indent + self._statement(statement, layout))

        lines.append("}")

        logger.debug(
            f"Generated DOT script for {len(graph.vertices)} vertices and {len(graph.edges)} edges"
        )
        return "".join(line + eol for line in lines)

    def _assign_vids(self, graph: Graph) -> Dict[int, str]:
        """Map vertex handles to display identifiers.

        Explicit ``id`` attributes win; all other vertices are numbered from 1
        in vertex order. Explicit ids do not advance the counter.
        """
        vids: Dict[int, str] = {}
        tid = 0
        for vertex in graph.vertices:
            vid = vertex.get_attribute("id")
            if vid is None:
                tid += 1
                vid = tid
            vids[vertex.index] = format_value(vid)
        return vids

    def _group_vertices(self, graph: Graph) -> List[Tuple[str, List[Vertex]]]:
        """Partition vertices by the text form of their group attribute.

        Groups are keyed by ``format_value`` so that ``1``, ``1.0`` and ``"1"``
        share a cluster while ``True`` stays apart from ``1``.
        """
        groups: Dict[str, List[Vertex]] = {}
        for vertex in graph.vertices:
            group = format_value(vertex.get_attribute(self.config.attribute_group, 0))
            groups.setdefault(group, []).append(vertex)
        return list(groups.items())

    @staticmethod
    def _connections(edges: List[Edge]) -> Set[Tuple[int, int]]:
        """Collect every (start, end) handle pair some edge leads along."""
        connections: Set[Tuple[int, int]] = set()
        for edge in edges:
            connections.add((edge.source.index, edge.target.index))
            if not edge.directed:
                connections.add((edge.target.index, edge.source.index))
        return connections

    def _vertex_statement(self, vertex: Vertex, vid: str) -> str:
        return self._statement(self.escape(vid), self.get_layout_vertex(vertex, vid))

    def _statement(self, statement: str, layout: Dict[str, Any]) -> str:
        if layout:
            statement += " " + self.escape_attributes(layout)
        return statement

    def get_layout_vertex(self, vertex: Vertex, vid: str) -> Dict[str, Any]:
        """Compute the attribute layout of a vertex.

        Starts from the ``graphviz.`` attributes and appends the balance, if
        set, to the label (seeded with the vid when no label is given).
        """
        layout = self.get_attributes_prefixed(vertex.attributes, "graphviz.")

        balance = vertex.get_attribute(self.config.attribute_balance)
        if balance is not None:
            positive = _is_positive(balance)
            balance = format_value(balance)
            if positive:
                balance = "+" + balance
            label = format_value(layout.get("label", vid))
            layout["label"] = f"{label} ({balance})"

        return layout

    def get_layout_edge(self, edge: Edge) -> Dict[str, Any]:
        """Compute the attribute layout of an edge.

        Flow, capacity and weight are combined into a label such as
        ``3/10/2``. An explicit label is kept in front of it.
        """
        layout = self.get_attributes_prefixed(edge.attributes, "graphviz.")

        label = None

        flow = edge.get_attribute(self.config.attribute_flow)
        capacity = edge.get_attribute(self.config.attribute_capacity)
        if flow is not None:
            # missing capacity means infinite capacity
            label = format_value(flow) + "/" + ("∞" if capacity is None else format_value(capacity))
        elif capacity is not None:
            # capacity without flow means zero flow
            label = "0/" + format_value(capacity)

        weight = edge.get_attribute(self.config.attribute_weight)
        if weight is not None:
            if label is None:
                label = format_value(weight)
            else:
                label += "/" + format_value(weight)

        if label is not None:
            if "label" in layout:
                layout["label"] = format_value(layout["label"]) + " " + label
            else:
                layout["label"] = label

        return layout

    @staticmethod
    def get_attributes_prefixed(attributes: Dict[str, Any], prefix: str) -> Dict[str, Any]:
        """Return the attributes whose name starts with ``prefix``, prefix removed."""
        length = len(prefix)
        return {
            name[length:]: value
            for name, value in attributes.items()
            if name.startswith(prefix)
        }

    @staticmethod
    def escape(value: Any) -> str:
        """Quote and escape a DOT identifier unless it is a plain numeral.

        Args:
            value: Identifier or attribute value.

        Returns:
            The numeral as-is, or a double-quoted and escaped string.
        """
        text = format_value(value)
        if NUMERAL_PATTERN.fullmatch(text):
            return text
        return '"' + text.translate(ESCAPE_TABLE) + '"'

    @classmethod
    def escape_attributes(cls, attributes: Dict[str, Any]) -> str:
        """Render an attribute list such as ``[color=red label="a b"]``.

        Names ending in ``_html`` are emitted as HTML-like labels in angle
        brackets, names ending in ``_record`` as record labels where only
        double quotes are escaped.
        """
        parts = []
        for name, value in attributes.items():
            text = format_value(value)
            if name.endswith("_html"):
                name = name[: -len("_html")]
                text = "<" + text + ">"
            elif name.endswith("_record"):
                name = name[: -len("_record")]
                text = '"' + text.replace('"', '\\"') + '"'
            else:
                text = cls.escape(text)
            parts.append(f"{name}={text}")
        return "[" + " ".join(parts) + "]"
