"""Validation and QA phase."""

import logging
from typing import Any, Dict, List

from ..graph_builder import GraphBuilder
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


class GraphValidationPhase(PipelinePhase):
    phase_name = "validation"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        builder: GraphBuilder = context["builder"]
        nodes_by_category = builder.nodes_by_category()
        warnings: List[str] = []

        for category, nodes in nodes_by_category.items():
            blank = sum(1 for node in nodes if not node.value.strip())
            if blank:
                warnings.append(f"{blank} {category.value} node(s) have an empty value")

        for warning in warnings:
            logger.warning(warning)

        qa_report = {
            "node_count": len(builder.state.nodes),
            "edge_count": len(builder.state.edges),
            "nodes_by_category": {
                category.value: len(nodes) for category, nodes in nodes_by_category.items()
            },
            "warnings": warnings,
        }
        return {"validation_report": qa_report}
