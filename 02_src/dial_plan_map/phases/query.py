"""Route query phase: materializes gateway and trunk rows."""

import logging
from typing import Any, Dict

from ..errors import EmptyInputError
from ..graph_model import RowSource
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


class RouteQueryPhase(PipelinePhase):
    phase_name = "query"

    def __init__(self, row_source: RowSource) -> None:
        self._row_source = row_source

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        gateway_rows = list(self._row_source.fetch_gateway_routes() or [])
        trunk_rows = list(self._row_source.fetch_trunk_routes() or [])
        logger.info("Fetched %d gateway rows and %d trunk rows", len(gateway_rows), len(trunk_rows))

        if not gateway_rows and not trunk_rows:
            raise EmptyInputError("No records were found.")

        return {
            "gateway_rows": gateway_rows,
            "trunk_rows": trunk_rows,
            "query_report": {
                "gateway_rows": len(gateway_rows),
                "trunk_rows": len(trunk_rows),
            },
        }
