"""Dial plan mapping for CUCM call-routing configuration."""

from .associations import extract_associations
from .errors import AxlQueryError, ConfigError, DialPlanError, EmptyInputError, MissingFieldError
from .graph_builder import GraphBuilder
from .graph_model import Category, GraphEdge, GraphNode, GraphState
from .pipeline import PipelinePhase, PipelineRunner

__all__ = [
    "Category",
    "GraphNode",
    "GraphEdge",
    "GraphState",
    "GraphBuilder",
    "extract_associations",
    "PipelinePhase",
    "PipelineRunner",
    "DialPlanError",
    "MissingFieldError",
    "EmptyInputError",
    "AxlQueryError",
    "ConfigError",
]
