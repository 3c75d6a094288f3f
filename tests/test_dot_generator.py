"""Tests for DOT script generation."""

import pytest

from graphdot.core.models import DOTConfig, Graph
from graphdot.visualization.dot_generator import DOTGenerator, format_value


def generate(graph, config=None):
    return DOTGenerator(config).generate_dot(graph)


def test_undirected_graph_uses_graph_keyword():
    """Graphs without directed edges render as `graph` with `--` edges."""
    graph = Graph()
    a = graph.add_vertex()
    b = graph.add_vertex()
    c = graph.add_vertex()
    graph.add_undirected_edge(a, b)
    graph.add_undirected_edge(b, c)

    assert generate(graph) == "graph {\n  1 -- 2\n  2 -- 3\n}\n"


def test_directed_graph_uses_digraph_keyword():
    """A single directed edge switches the whole script to `digraph`."""
    graph = Graph()
    a = graph.add_vertex()
    b = graph.add_vertex()
    graph.add_edge(a, b)

    assert generate(graph) == "digraph {\n  1 -> 2\n}\n"


def test_reciprocal_edges_are_collapsed():
    """Both edges of an A->B / B->A pair carry dir=none."""
    graph = Graph()
    a = graph.add_vertex()
    b = graph.add_vertex()
    graph.add_edge(a, b)
    graph.add_edge(b, a)

    assert generate(graph) == 'digraph {\n  1 -> 2 [dir="none"]\n  2 -> 1 [dir="none"]\n}\n'


def test_undirected_edge_in_mixed_graph_has_no_arrow():
    """Undirected edges in a directed script are marked dir=none."""
    graph = Graph()
    a = graph.add_vertex()
    b = graph.add_vertex()
    c = graph.add_vertex()
    graph.add_edge(a, b)
    graph.add_undirected_edge(b, c)

    assert generate(graph) == 'digraph {\n  1 -> 2\n  2 -> 3 [dir="none"]\n}\n'


def test_loop_is_not_collapsed():
    """A self-loop keeps its arrow."""
    graph = Graph()
    a = graph.add_vertex()
    graph.add_edge(a, a)

    assert generate(graph) == "digraph {\n  1 -> 1\n}\n"


def test_one_way_edges_keep_direction():
    """Edges in one direction only are not collapsed."""
    graph = Graph()
    a = graph.add_vertex()
    b = graph.add_vertex()
    c = graph.add_vertex()
    graph.add_edge(a, b)
    graph.add_edge(c, b)

    assert "dir=" not in generate(graph)


def test_graph_name_is_escaped():
    """The graph name is written after the keyword."""
    named = Graph(name="My Graph")
    numbered = Graph(name="5")

    assert generate(named) == 'graph "My Graph" {\n}\n'
    assert generate(numbered) == "graph 5 {\n}\n"


def test_global_attribute_blocks():
    """graph, node and edge defaults come from prefixed graph attributes."""
    graph = Graph(
        attributes={
            "graphviz.edge.color": "red",
            "graphviz.graph.rankdir": "LR",
            "graphviz.node.shape": "box",
            "unrelated": "ignored",
        }
    )

    assert generate(graph) == (
        "graph {\n"
        '  graph [rankdir="LR"]\n'
        '  node [shape="box"]\n'
        '  edge [color="red"]\n'
        "}\n"
    )


def test_explicit_ids_do_not_consume_counter():
    """Vertices with an explicit id keep it, the others are numbered 1, 2, ..."""
    graph = Graph()
    first = graph.add_vertex()
    seven = graph.add_vertex(id="7")
    second = graph.add_vertex()
    graph.add_edge(first, seven)
    graph.add_edge(seven, second)

    assert generate(graph) == "digraph {\n  1 -> 7\n  7 -> 2\n}\n"


def test_string_ids_are_quoted():
    """Non-numeric ids are quoted and escaped."""
    graph = Graph()
    a = graph.add_vertex(id="a&b")
    b = graph.add_vertex(id="c")
    graph.add_edge(a, b)

    assert generate(graph) == 'digraph {\n  "a&amp;b" -> "c"\n}\n'


def test_isolated_vertices_are_emitted():
    """Vertices without edges appear on their own line."""
    graph = Graph()
    a = graph.add_vertex()
    b = graph.add_vertex()
    graph.add_vertex()
    graph.add_undirected_edge(a, b)

    assert generate(graph) == "graph {\n  3\n  1 -- 2\n}\n"


def test_vertices_with_layout_are_emitted():
    """Vertices with graphviz attributes are emitted even if they have edges."""
    graph = Graph()
    a = graph.add_vertex({"graphviz.color": "red"})
    b = graph.add_vertex()
    graph.add_edge(a, b)

    assert generate(graph) == 'digraph {\n  1 [color="red"]\n  1 -> 2\n}\n'


def test_two_groups_are_clustered():
    """Two distinct groups produce cluster_0 and cluster_1 in first-seen order."""
    graph = Graph()
    a = graph.add_vertex(group=1)
    b = graph.add_vertex(group=2)
    graph.add_vertex(group=1)
    graph.add_edge(a, b)

    assert generate(graph) == (
        "digraph {\n"
        "  subgraph cluster_0 {\n"
        "    label = 1\n"
        "    1\n"
        "    3\n"
        "  }\n"
        "  subgraph cluster_1 {\n"
        "    label = 2\n"
        "    2\n"
        "  }\n"
        "  1 -> 2\n"
        "}\n"
    )


def test_clusters_include_default_group():
    """Vertices without a group fall into group 0."""
    graph = Graph()
    graph.add_vertex(group="left side")
    graph.add_vertex({"graphviz.shape": "box"})

    script = generate(graph)

    assert script.count("subgraph cluster_") == 2
    assert '    label = "left side"\n    1\n' in script
    assert '    label = 0\n    2 [shape="box"]\n' in script


def test_single_group_is_not_clustered():
    """One shared group behaves like no group at all."""
    graph = Graph()
    a = graph.add_vertex(group="x")
    b = graph.add_vertex(group="x")
    graph.add_vertex(group="x")
    graph.add_edge(a, b)

    script = generate(graph)

    assert "subgraph cluster_" not in script
    assert script == "digraph {\n  3\n  1 -> 2\n}\n"


def test_groups_compare_by_text_form():
    """1, 1.0 and "1" share a group; True is a group of its own."""
    graph = Graph()
    graph.add_vertex(group=1)
    graph.add_vertex(group="1")
    graph.add_vertex(group=1.0)

    assert "subgraph cluster_" not in generate(graph)

    graph.add_vertex(group=True)
    script = generate(graph)

    assert script.count("subgraph cluster_") == 2
    assert "    label = 1\n    1\n    2\n    3\n" in script
    assert '    label = "True"\n    4\n' in script


def test_balance_label():
    """Balances are appended to the label with an explicit sign for positives."""
    graph = Graph()
    graph.add_vertex(balance=5)
    graph.add_vertex(balance=-2)
    graph.add_vertex(balance=0)
    graph.add_vertex({"graphviz.label": "sink"}, balance=2.5)

    assert generate(graph) == (
        "graph {\n"
        '  1 [label="1 (+5)"]\n'
        '  2 [label="2 (-2)"]\n'
        '  3 [label="3 (0)"]\n'
        '  4 [label="sink (+2.5)"]\n'
        "}\n"
    )


def test_balance_uses_explicit_id():
    """The seeded label is the vertex's display id."""
    graph = Graph()
    vertex = graph.add_vertex(id="s", balance=3)

    layout = DOTGenerator().get_layout_vertex(vertex, "s")

    assert layout == {"label": "s (+3)"}


@pytest.mark.parametrize(
    "attributes, expected",
    [
        ({"flow": 3}, "3/∞"),
        ({"capacity": 10}, "0/10"),
        ({"flow": 3, "capacity": 10}, "3/10"),
        ({"flow": 3, "capacity": 10, "weight": 2}, "3/10/2"),
        ({"capacity": 10, "weight": 2}, "0/10/2"),
        ({"weight": 4.5}, "4.5"),
    ],
)
def test_edge_flow_labels(attributes, expected):
    """flow, capacity and weight combine into one label."""
    graph = Graph()
    a = graph.add_vertex()
    b = graph.add_vertex()
    edge = graph.add_edge(a, b, attributes=attributes)

    assert DOTGenerator().get_layout_edge(edge) == {"label": expected}


def test_edge_label_is_prefixed_by_explicit_label():
    """An explicit label stays in front of the derived label."""
    graph = Graph()
    a = graph.add_vertex()
    b = graph.add_vertex()
    graph.add_edge(
        a, b, attributes={"graphviz.label": "pipe", "graphviz.color": "blue"}, flow=1, capacity=4
    )

    assert generate(graph) == 'digraph {\n  1 -> 2 [label="pipe 1/4" color="blue"]\n}\n'


def test_numeric_weight_label_is_unquoted():
    """A weight-only label is a plain numeral."""
    graph = Graph()
    a = graph.add_vertex()
    b = graph.add_vertex()
    graph.add_undirected_edge(a, b, weight=4)

    assert generate(graph) == "graph {\n  1 -- 2 [label=4]\n}\n"


def test_escape():
    """Numerals stay unquoted, everything else is quoted and escaped."""
    escape = DOTGenerator.escape

    assert escape("2.5") == "2.5"
    assert escape("-3") == "-3"
    assert escape(".5") == ".5"
    assert escape(7) == "7"
    assert escape("1.") == '"1."'
    assert escape("abc_2") == '"abc_2"'
    assert escape("a&b") == '"a&amp;b"'
    assert escape("<i>") == '"&lt;i&gt;"'
    assert escape("say \"hi\" y'all") == '"say &quot;hi&quot; y&apos;all"'
    assert escape("C:\\dir") == '"C:\\\\dir"'
    assert escape("first\nsecond") == '"first\\lsecond"'


def test_escape_attributes():
    """Attribute lists honour the _html and _record suffixes."""
    escape_attributes = DOTGenerator.escape_attributes

    assert escape_attributes({"color": "red", "penwidth": 2}) == '[color="red" penwidth=2]'
    assert escape_attributes({"label_html": "<b>x</b> & y"}) == "[label=<<b>x</b> & y>]"
    assert escape_attributes({"label_record": 'a|{b:"c"}'}) == '[label="a|{b:\\"c\\"}"]'
    assert escape_attributes({}) == "[]"


def test_get_attributes_prefixed():
    """Prefixes match at character level and keep their order."""
    attributes = {"graphviz.b": 1, "other": 2, "graphviz.a": 3, "graphvizX": 4}

    result = DOTGenerator.get_attributes_prefixed(attributes, "graphviz.")

    assert list(result.items()) == [("b", 1), ("a", 3)]


def test_format_value():
    """Integral floats lose their fraction, other values use str()."""
    assert format_value(5.0) == "5"
    assert format_value(2.5) == "2.5"
    assert format_value(3) == "3"
    assert format_value("x") == "x"


def test_generation_is_deterministic_and_read_only():
    """Serializing twice gives identical text and leaves the graph untouched."""
    graph = Graph(name="net", attributes={"graphviz.graph.rankdir": "LR"})
    a = graph.add_vertex({"graphviz.label": "A"}, balance=1, group="g1")
    b = graph.add_vertex(group="g2")
    graph.add_edge(a, b, flow=1, capacity=2)
    graph.add_edge(b, a)
    before = [dict(v.attributes) for v in graph.vertices] + [dict(e.attributes) for e in graph.edges]

    first = generate(graph)
    second = generate(graph)

    assert first == second
    assert before == [dict(v.attributes) for v in graph.vertices] + [dict(e.attributes) for e in graph.edges]


def test_custom_config():
    """Indentation, line ending and attribute names are configurable."""
    config = DOTConfig(indent="\t", eol="\r\n", attribute_weight="cost", attribute_group="team")
    graph = Graph()
    a = graph.add_vertex(team="x")
    b = graph.add_vertex(team="y")
    graph.add_edge(a, b, cost=9, weight=1)

    assert generate(graph, config) == (
        "digraph {\r\n"
        "\tsubgraph cluster_0 {\r\n"
        '\t\tlabel = "x"\r\n'
        "\t\t1\r\n"
        "\t}\r\n"
        "\tsubgraph cluster_1 {\r\n"
        '\t\tlabel = "y"\r\n'
        "\t\t2\r\n"
        "\t}\r\n"
        "\t1 -> 2 [label=9]\r\n"
        "}\r\n"
    )
