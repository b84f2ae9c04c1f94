"""CLI entrypoint for mapping a CUCM dial plan."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from graphviz import ExecutableNotFound

from .axl_client import AxlClient
from .config import AxlSettings, RouteFilters
from .errors import AxlQueryError, ConfigError, EmptyInputError, MissingFieldError
from .graph_builder import GraphBuilder
from .graph_model import RowSource
from .phases import GraphLayeringPhase, GraphValidationPhase, RenderPhase, RouteQueryPhase
from .pipeline import PipelinePhase, PipelineRunner
from .renderer import GraphvizRenderer, output_format


def build_default_phases(
    row_source: RowSource,
    output_path: Path | None = None,
    renderer: GraphvizRenderer | None = None,
) -> List[PipelinePhase]:
    return [
        RouteQueryPhase(row_source),
        GraphLayeringPhase(),
        GraphValidationPhase(),
        RenderPhase(renderer=renderer, output_path=output_path),
    ]


def run_pipeline(
    row_source: RowSource,
    output_path: Path | None = None,
    renderer: GraphvizRenderer | None = None,
) -> Dict[str, Any]:
    builder = GraphBuilder()
    runner = PipelineRunner(phases=build_default_phases(row_source, output_path, renderer))
    final_context = runner.run({"builder": builder})
    artifact = builder.to_json()
    artifact["meta"] = {
        "query_report": final_context.get("query_report", {}),
        "layer_report": final_context.get("layer_report", {}),
        "validation_report": final_context.get("validation_report", {}),
        "output_path": final_context.get("output_path"),
    }
    return artifact


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Map CUCM calling search spaces, partitions, patterns and route targets to a graph.",
        epilog="Filters accept SQL LIKE patterns; use % as the wildcard.",
    )
    connection = parser.add_argument_group("connection (falls back to AXL_* environment variables)")
    connection.add_argument("--ip-address", dest="host", help="IP address of the Call Manager.")
    connection.add_argument("--port", help="AXL API port. Default: 8443.")
    connection.add_argument("--username", help="AXL API username.")
    connection.add_argument("--password", help="AXL API password.")
    connection.add_argument("--version", help="CUCM version of the AXL schema. Default: 10.")

    filters = parser.add_argument_group("filters")
    filters.add_argument("--css", help="Calling search space name filter.")
    filters.add_argument("--partition", help="Partition name filter.")
    filters.add_argument("--pattern", help="Pattern filter in the 'dn/partition' format.")
    filters.add_argument("--route-list", help="Route list name filter.")
    filters.add_argument("--route-group", help="Route group name filter.")
    filters.add_argument("--device", help="Destination device name filter.")

    parser.add_argument(
        "--output-path",
        default="dial_plan_map.pdf",
        help="Where to save the rendered graph (pdf, svg, png or dot).",
    )
    parser.add_argument("--json-path", default="", help="Optional path for a JSON graph artifact.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")
    return parser.parse_args(argv)


def build_filters(args: argparse.Namespace) -> RouteFilters:
    return RouteFilters(
        css=args.css,
        partition=args.partition,
        pattern=args.pattern,
        route_list=args.route_list,
        route_group=args.route_group,
        device=args.device,
    )


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    output_path = Path(args.output_path)
    try:
        settings = AxlSettings.from_env(
            {
                "host": args.host,
                "port": args.port,
                "username": args.username,
                "password": args.password,
                "version": args.version,
            }
        )
        output_format(output_path)
    except ConfigError as error:
        print(f"{error}. Exiting!", file=sys.stderr)
        print("Run with --help for usage.", file=sys.stderr)
        return 2

    row_source = AxlClient(settings, build_filters(args))
    try:
        artifact = run_pipeline(row_source, output_path=output_path)
    except EmptyInputError:
        print("No records were found. Exiting!")
        return 0
    except AxlQueryError as error:
        print(f"Could not access AXL API. Check credentials. Exiting! ({error})", file=sys.stderr)
        return 1
    except MissingFieldError as error:
        print(f"Route data is incomplete, no map was written. Exiting! ({error})", file=sys.stderr)
        return 1
    except ExecutableNotFound:
        print("Graphviz 'dot' executable not found. Install Graphviz or use a .dot output path.", file=sys.stderr)
        return 1

    if args.json_path:
        json_path = Path(args.json_path)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(json.dumps(artifact, ensure_ascii=False, indent=2), encoding="utf-8")
        print(f"Graph artifact saved to: {json_path.resolve()}")

    print(f"Dial plan map saved to: {Path(artifact['meta']['output_path']).resolve()}")
    print(
        "Counts:",
        f"nodes={len(artifact['nodes'])}",
        f"edges={len(artifact['edges'])}",
        f"warnings={len(artifact['meta']['validation_report'].get('warnings', []))}",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
