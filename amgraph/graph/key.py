"""Compact textual graph keys.

A key lists the vertex labels, then the weighted edges between them::

    A|B|C@A#B#5|B#C#2

Vertices are separated by ``|``, the two sections by ``@``, and each edge is
a ``#``-joined (source, destination, weight) triple of labels and an integer.
"""

from __future__ import annotations

from typing import Any, List

from amgraph.graph.matrix_graph import MatrixGraph

SECTION_SEPARATOR = "@"
ITEM_SEPARATOR = "|"
FIELD_SEPARATOR = "#"

_RESERVED = (SECTION_SEPARATOR, ITEM_SEPARATOR, FIELD_SEPARATOR)


def graph_to_key(graph: MatrixGraph[Any]) -> str:
    """Encode `graph` as a compact key; vertices are written with `str()`.

    Raises:
        ValueError: If a label is empty, contains a separator character, or
            two vertices share the same label.
    """
    labels: List[str] = []
    seen = set()
    for vertex in graph:
        label = str(vertex)
        if not label or any(sep in label for sep in _RESERVED):
            raise ValueError(f"Vertex label '{label}' cannot be written in a graph key.")
        if label in seen:
            raise ValueError(f"More than one vertex is labeled '{label}'.")
        seen.add(label)
        labels.append(label)

    edges = ITEM_SEPARATOR.join(
        FIELD_SEPARATOR.join((str(source), str(destination), str(weight)))
        for source, destination, weight in graph.weighted_edges()
    )
    return ITEM_SEPARATOR.join(labels) + SECTION_SEPARATOR + edges


def key_to_graph(key: str) -> MatrixGraph[str]:
    """Decode a compact key into a graph of string vertices.

    An empty vertex or edge section means no vertices or no edges.

    Raises:
        RuntimeError: If the key is malformed in any way.
    """
    try:
        sections = key.split(SECTION_SEPARATOR)
        if len(sections) != 2:
            raise ValueError(f"Expected 2 sections, found {len(sections)}.")
        vertex_section, edge_section = sections

        graph = MatrixGraph(vertex_section.split(ITEM_SEPARATOR) if vertex_section else [])
        if edge_section:
            for triple in edge_section.split(ITEM_SEPARATOR):
                fields = triple.split(FIELD_SEPARATOR)
                if len(fields) != 3:
                    raise ValueError(f"Edge '{triple}' does not have 3 fields.")
                source, destination, weight = fields
                graph.set(source, destination, int(weight))
    except (ValueError, KeyError) as exc:
        raise RuntimeError("Unable to read graph key") from exc
    return graph
