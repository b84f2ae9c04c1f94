"""Pipeline phases for dial plan mapping."""

from .layering import GraphLayeringPhase
from .query import RouteQueryPhase
from .render import RenderPhase
from .validation import GraphValidationPhase

__all__ = [
    "RouteQueryPhase",
    "GraphLayeringPhase",
    "GraphValidationPhase",
    "RenderPhase",
]
