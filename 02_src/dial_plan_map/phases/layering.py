"""Graph layering phase driven by a LangGraph workflow."""

import logging
from typing import Any, Dict, List

from langgraph.graph import END, START, StateGraph
from typing_extensions import TypedDict

from ..graph_builder import GraphBuilder
from ..graph_model import GATEWAY_LAYERS, TRUNK_LAYERS, Category, Record
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


class LayeringState(TypedDict):
    gateway_rows: List[Record]
    trunk_rows: List[Record]
    plan: List[Dict[str, str]]
    applied: List[Dict[str, Any]]
    summary: Dict[str, Any]


class GraphLayeringPhase(PipelinePhase):
    phase_name = "layering"

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        builder: GraphBuilder = context["builder"]
        workflow = self._build_workflow(builder)
        result_state = workflow.invoke(
            {
                "gateway_rows": list(context.get("gateway_rows", [])),
                "trunk_rows": list(context.get("trunk_rows", [])),
                "plan": [],
                "applied": [],
                "summary": {},
            }
        )
        return {
            "layer_report": {
                "layers": result_state.get("applied", []),
                "summary": result_state.get("summary", {}),
            }
        }

    def _build_workflow(self, builder: GraphBuilder):
        def apply_layers(state: LayeringState) -> Dict[str, Any]:
            return self._apply_layers(builder, state)

        graph = StateGraph(LayeringState)
        graph.add_node("plan_layers", self._plan_layers)
        graph.add_node("apply_layers", apply_layers)
        graph.add_node("summarize", self._summarize)
        graph.add_edge(START, "plan_layers")
        graph.add_edge("plan_layers", "apply_layers")
        graph.add_edge("apply_layers", "summarize")
        graph.add_edge("summarize", END)
        return graph.compile()

    @staticmethod
    def _plan_layers(state: LayeringState) -> Dict[str, Any]:
        plan: List[Dict[str, str]] = []
        for origin, rows_key, layers in (
            ("gateway", "gateway_rows", GATEWAY_LAYERS),
            ("trunk", "trunk_rows", TRUNK_LAYERS),
        ):
            if not state.get(rows_key):
                continue
            for source, target in layers:
                plan.append({"origin": origin, "source": source.value, "target": target.value})
        return {"plan": plan}

    @staticmethod
    def _apply_layers(builder: GraphBuilder, state: LayeringState) -> Dict[str, Any]:
        applied: List[Dict[str, Any]] = []
        for step in state.get("plan", []):
            origin = step["origin"]
            records = state.get(f"{origin}_rows", [])
            count = builder.add_layer(
                records,
                Category(step["source"]),
                Category(step["target"]),
                origin=origin,
            )
            applied.append({**step, "associations": count})
        return {"applied": applied}

    @staticmethod
    def _summarize(state: LayeringState) -> Dict[str, Any]:
        applied = state.get("applied", [])
        by_origin: Dict[str, int] = {}
        for step in applied:
            by_origin[step["origin"]] = by_origin.get(step["origin"], 0) + step["associations"]
        summary = {"layer_count": len(applied), "associations_by_origin": by_origin}
        logger.info("Applied %d layers: %s", len(applied), by_origin)
        return {"summary": summary}
