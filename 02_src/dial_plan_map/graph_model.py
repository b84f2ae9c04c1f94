"""Dial plan graph primitives: categories, records, nodes and edges."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Protocol, Sequence, Tuple

Record = Mapping[str, Any]


class Category(str, Enum):
    """Rank of a value in the call-routing hierarchy."""

    CSS = "css"
    PARTITION = "partition"
    PATTERN = "pattern"
    ROUTE_LIST = "route_list"
    ROUTE_GROUP = "route_group"
    DESTINATION = "destination"

    @property
    def field_name(self) -> str:
        return CATEGORY_FIELDS[self]

    @property
    def rank(self) -> str:
        return "max" if self is Category.DESTINATION else "same"


CATEGORY_FIELDS: Dict[Category, str] = {
    Category.CSS: "css",
    Category.PARTITION: "partition",
    Category.PATTERN: "pattern",
    Category.ROUTE_LIST: "route_list",
    Category.ROUTE_GROUP: "route_group",
    Category.DESTINATION: "destination",
}

Layer = Tuple[Category, Category]

GATEWAY_LAYERS: Tuple[Layer, ...] = (
    (Category.CSS, Category.PARTITION),
    (Category.PARTITION, Category.PATTERN),
    (Category.PATTERN, Category.ROUTE_LIST),
    (Category.ROUTE_LIST, Category.ROUTE_GROUP),
    (Category.ROUTE_GROUP, Category.DESTINATION),
)

TRUNK_LAYERS: Tuple[Layer, ...] = (
    (Category.CSS, Category.PARTITION),
    (Category.PARTITION, Category.PATTERN),
    (Category.PATTERN, Category.DESTINATION),
)


class RowSource(Protocol):
    def fetch_gateway_routes(self) -> Sequence[Record]:
        ...

    def fetch_trunk_routes(self) -> Sequence[Record]:
        ...


@dataclass
class GraphNode:
    id: str
    category: Category
    value: str
    properties: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphEdge:
    id: str
    source: str
    target: str
    properties: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphState:
    nodes: Dict[str, GraphNode] = field(default_factory=dict)
    edges: Dict[str, GraphEdge] = field(default_factory=dict)
    layers: List[Dict[str, Any]] = field(default_factory=list)
