"""
cli.py — command line entry point for the behaviorgraph compiler
=================================================================
Compiles a saved graph document into a JavaScript behavior module.

Usage
-----
    behaviorgraph-compile <graph.json> [options]
    python -m behaviorgraph.cli <graph.json> [options]

Options
-------
    --out       <dir>    Output directory (default: current directory)
    --print              Print the generated source to stdout instead of writing a file
    --strict             Treat unknown node types as schema errors (default: warnings only)
    --log-level <LEVEL>  Logging level (default: BEHAVIORGRAPH_LOG_LEVEL or WARNING)

Examples
--------
    # Compile next to the current directory:
    behaviorgraph-compile examples/score_counter.json

    # Write into a build folder:
    behaviorgraph-compile examples/score_counter.json --out build/modules/

    # Print the generated source without writing a file:
    behaviorgraph-compile examples/score_counter.json --print
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .compiler import compile_graph
from .config import CompilerSettings
from .errors import CompileError
from .library import default_library
from .serialization.deserialiser import load_document
from .serialization.schema import SchemaError, validate_file

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="behaviorgraph-compile",
        description="Compile a visual node graph to a JavaScript behavior module.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    p.add_argument(
        "graph_json",
        metavar="graph.json",
        help="Path to the graph document to compile.",
    )
    p.add_argument(
        "--out",
        metavar="DIR",
        default=".",
        help="Output directory for the compiled .js file (default: current directory).",
    )
    p.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print generated source to stdout instead of writing a file.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Treat unknown node types as errors rather than warnings.",
    )
    p.add_argument(
        "--log-level",
        metavar="LEVEL",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    return p


def main(argv=None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = CompilerSettings.from_env()
    except ValueError as exc:
        print(f"[error] Invalid configuration: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )

    json_path = Path(args.graph_json)
    if not json_path.exists():
        print(f"[error] File not found: {json_path}", file=sys.stderr)
        return 1

    library = default_library()

    # ── Validate JSON ────────────────────────────────────────────────────────
    try:
        data = validate_file(json_path, library, strict=args.strict)
    except json.JSONDecodeError as exc:
        print(f"[error] Not valid JSON: {exc}", file=sys.stderr)
        return 1
    except SchemaError as exc:
        print(f"[error] Schema validation failed: {exc}", file=sys.stderr)
        return 1

    # ── Deserialise + compile ────────────────────────────────────────────────
    graph, module = load_document(data)
    logger.info("module %s: %d nodes, %d connections", module.class_name, len(graph.nodes), len(graph.connections))

    try:
        source = compile_graph(graph, library, module, settings)
    except CompileError as exc:
        print(f"[error] {exc.kind}: {exc}", file=sys.stderr)
        return 1

    # ── Output ───────────────────────────────────────────────────────────────
    if args.print_only:
        print(source, end="")
        return 0

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{module.class_name}.js"
    out_path.write_text(source, encoding="utf-8")

    print(f"[behaviorgraph] wrote  : {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
