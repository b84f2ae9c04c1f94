"""Graphviz rendering of the dial plan graph."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping

from graphviz import Digraph, escape

from .errors import ConfigError
from .graph_model import Category, GraphEdge, GraphNode

logger = logging.getLogger(__name__)

GRAPH_ATTRS: Dict[str, str] = {
    "ranksep": "10.0",
    "concentrate": "true",
    "compound": "true",
}

SUPPORTED_FORMATS = ("pdf", "svg", "png", "dot")


class GraphvizRenderer:
    """Lays out one rank per category; destinations sink to the bottom."""

    def __init__(self, name: str = "G") -> None:
        self._name = name

    def render(
        self,
        nodes_by_category: Mapping[Category, Iterable[GraphNode]],
        edges: Iterable[GraphEdge],
    ) -> Digraph:
        document = Digraph(self._name, graph_attr=GRAPH_ATTRS)
        for category in Category:
            nodes: List[GraphNode] = list(nodes_by_category.get(category, []))
            if not nodes:
                continue
            with document.subgraph(name=f"graph_{category.value}") as rank_group:
                rank_group.attr(rank=category.rank)
                for node in nodes:
                    rank_group.node(node.id, label=escape(node.value))
        for edge in edges:
            document.edge(edge.source, edge.target)
        return document

    def write(self, document: Digraph, output_path: Path) -> Path:
        fmt = output_format(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "dot":
            output_path.write_text(document.source, encoding="utf-8")
        else:
            document.render(outfile=str(output_path), format=fmt, cleanup=True)
        logger.info("Wrote %s", output_path)
        return output_path


def output_format(output_path: Path) -> str:
    fmt = output_path.suffix.lstrip(".").lower() or "pdf"
    if fmt not in SUPPORTED_FORMATS:
        raise ConfigError(f"Unsupported output format: {fmt}")
    return fmt
