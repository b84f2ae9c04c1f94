"""Render phase: turns the accumulated graph into a document."""

from pathlib import Path
from typing import Any, Dict

from ..graph_builder import GraphBuilder
from ..pipeline import PipelinePhase
from ..renderer import GraphvizRenderer


class RenderPhase(PipelinePhase):
    phase_name = "render"

    def __init__(self, renderer: GraphvizRenderer | None = None, output_path: Path | None = None) -> None:
        self._renderer = renderer or GraphvizRenderer()
        self._output_path = output_path

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        builder: GraphBuilder = context["builder"]
        document = self._renderer.render(builder.nodes_by_category(), builder.edges())
        written = None
        if self._output_path is not None:
            written = self._renderer.write(document, self._output_path)
        return {"document": document, "output_path": str(written) if written else None}
