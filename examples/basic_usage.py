#!/usr/bin/env python3
"""Basic usage examples for Python GraphDot."""

import networkx as nx

from graphdot import Graph, GraphDot
from graphdot.visualization import GraphBuilder


def main():
    """Demonstrate basic GraphDot usage."""

    viz = GraphDot()

    # Example 1: Flow network with capacities and balances
    print("Building flow network...")
    graph = Graph(name="flows", attributes={"graphviz.graph.rankdir": "LR"})
    source = graph.add_vertex(id="s", balance=5)
    middle = graph.add_vertex()
    sink = graph.add_vertex(id="t", balance=-5)
    graph.add_edge(source, middle, flow=3, capacity=4)
    graph.add_edge(middle, sink, flow=3)
    graph.add_edge(source, sink, capacity=2, weight=7)
    print(viz.create_script(graph))

    # Example 2: Clustered vertices rendered as SVG
    print("Generating clustered SVG...")
    clustered = Graph()
    a = clustered.add_vertex({"graphviz.shape": "box"}, group="frontend")
    b = clustered.add_vertex(group="backend")
    clustered.add_edge(a, b)
    clustered.add_edge(b, a)
    viz.set_format("svg").export(clustered, "clustered.svg", save_dot=True)

    # Example 3: networkx graph embedded into HTML
    print("Embedding a networkx graph...")
    nx_graph = nx.cycle_graph(4)
    html = viz.set_format("png").create_image_html(GraphBuilder().from_networkx(nx_graph))
    print(html[:60] + "...")

    # Example 4: Open the flow network in the default viewer
    viz.display(graph)

    print("All examples completed!")


if __name__ == "__main__":
    main()
