"""Deduplicating builder for the dial plan graph."""

import logging
from dataclasses import asdict
from hashlib import sha1
from typing import Any, Dict, Iterable, List, Set, Tuple

from .associations import extract_associations
from .graph_model import Category, GraphEdge, GraphNode, GraphState, Record

logger = logging.getLogger(__name__)

NodeKey = Tuple[Category, str]
EdgeKey = Tuple[NodeKey, NodeKey]


class GraphBuilder:
    """Owns node/edge identities of a single mapping run.

    Nodes are unique per (category, value) and edges per (source, target),
    no matter how many passes or record sets produce them.
    """

    def __init__(self) -> None:
        self.state = GraphState()
        self._node_registry: Dict[NodeKey, str] = {}
        self._edge_registry: Dict[Tuple[str, str], str] = {}

    def add_layer(
        self,
        records: Iterable[Record],
        category1: Category,
        category2: Category,
        origin: str | None = None,
    ) -> int:
        """Link every distinct category1 value to its category2 values.

        Returns the number of distinct associations seen in ``records``.
        """
        associations = extract_associations(records, category1, category2)
        for value1, value2 in associations:
            source_id = self.add_node(category1, value1, origin=origin)
            target_id = self.add_node(category2, value2, origin=origin)
            self.add_edge(source_id, target_id, origin=origin)

        self.state.layers.append(
            {
                "source": category1.value,
                "target": category2.value,
                "origin": origin,
                "associations": len(associations),
            }
        )
        logger.debug(
            "Layer %s -> %s (%s): %d associations",
            category1.value,
            category2.value,
            origin or "-",
            len(associations),
        )
        return len(associations)

    def add_node(self, category: Category, value: str, origin: str | None = None) -> str:
        registry_key = (category, value)
        existing_id = self._node_registry.get(registry_key)
        if existing_id:
            self._merge_origin(self.state.nodes[existing_id].properties, origin)
            return existing_id

        node_id = self._build_id("node", f"{category.value}:{value}")
        node = GraphNode(id=node_id, category=category, value=value)
        self._merge_origin(node.properties, origin)
        self.state.nodes[node_id] = node
        self._node_registry[registry_key] = node_id
        return node_id

    def add_edge(self, source_id: str, target_id: str, origin: str | None = None) -> str:
        if source_id not in self.state.nodes:
            raise ValueError(f"Unknown source node: {source_id}")
        if target_id not in self.state.nodes:
            raise ValueError(f"Unknown target node: {target_id}")

        edge_signature = (source_id, target_id)
        existing_id = self._edge_registry.get(edge_signature)
        if existing_id:
            self._merge_origin(self.state.edges[existing_id].properties, origin)
            return existing_id

        edge_id = self._build_id("edge", f"{source_id}:{target_id}")
        edge = GraphEdge(id=edge_id, source=source_id, target=target_id)
        self._merge_origin(edge.properties, origin)
        self.state.edges[edge_id] = edge
        self._edge_registry[edge_signature] = edge_id
        return edge_id

    @property
    def is_empty(self) -> bool:
        return not self.state.nodes

    def nodes_by_category(self) -> Dict[Category, List[GraphNode]]:
        grouped: Dict[Category, List[GraphNode]] = {category: [] for category in Category}
        for node in self.state.nodes.values():
            grouped[node.category].append(node)
        return grouped

    def edges(self) -> List[GraphEdge]:
        return list(self.state.edges.values())

    def node_keys(self) -> Set[NodeKey]:
        return set(self._node_registry)

    def edge_keys(self) -> Set[EdgeKey]:
        nodes = self.state.nodes
        return {
            (
                (nodes[edge.source].category, nodes[edge.source].value),
                (nodes[edge.target].category, nodes[edge.target].value),
            )
            for edge in self.state.edges.values()
        }

    def to_json(self) -> Dict[str, Any]:
        nodes = []
        for node in self.state.nodes.values():
            payload = asdict(node)
            payload["category"] = node.category.value
            nodes.append(payload)
        return {
            "nodes": nodes,
            "edges": [asdict(edge) for edge in self.state.edges.values()],
            "layers": list(self.state.layers),
        }

    @staticmethod
    def _merge_origin(properties: Dict[str, Any], origin: str | None) -> None:
        if not origin:
            return
        origins = properties.setdefault("origins", [])
        if origin not in origins:
            origins.append(origin)

    @staticmethod
    def _build_id(prefix: str, signature: str) -> str:
        digest = sha1(signature.encode("utf-8")).hexdigest()[:12]
        return f"{prefix}_{digest}"
