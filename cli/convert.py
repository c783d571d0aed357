#!/usr/bin/env python3
"""
CLI converter: flow text or tabular data in, canonical graph JSON or flow text out
"""

import argparse
import json
import os
import sys
import logging
from dataclasses import asdict
from typing import Optional

from dotenv import load_dotenv

from flowgraph.graph_builder import GraphBuilder
from loaders.flow_loader import FlowLoader

load_dotenv()

FORMAT_TO_TABULAR = {
    "auto": None,
    "dsl": False,
    "tabular": True,
}


def setup_logging(verbose: bool = False):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler()]
    log_file = os.getenv("FLOWGRAPH_LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert flow text or spreadsheet rows into a cycle-free flow graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Flow text to graph JSON
  flowgraph --in flows.txt

  # Pasted spreadsheet rows back to canonical flow text
  flowgraph --in rows.tsv --fmt tabular --out dsl

  # Balance / structure report
  flowgraph --in flows.txt --report
        """
    )
    parser.add_argument('--in', dest='input_path', required=True, help="Input file, or '-' for stdin")
    parser.add_argument(
        '--fmt',
        dest='format',
        default='auto',
        choices=sorted(FORMAT_TO_TABULAR),
        help='Input format (auto: .csv/.tsv are tabular, everything else is flow text)',
    )
    parser.add_argument('--out', dest='output', default='json', choices=['json', 'dsl'], help='Output format')
    parser.add_argument('--report', action='store_true', help='Print the validation report instead of the graph')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    return parser


def render(builder: GraphBuilder, output: str, report: bool) -> str:
    if report:
        validation = builder.validate()
        payload = asdict(validation) if validation is not None else {}
        return json.dumps(payload, ensure_ascii=False, indent=2)
    if output == 'dsl':
        return builder.to_dsl()
    return json.dumps(builder.export_graph_info(), ensure_ascii=False, indent=2)


def main(argv: Optional[list] = None) -> int:
    """Main CLI function"""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    loader = FlowLoader()
    try:
        flow_graph = loader.load_from_file(
            args.input_path,
            tabular=FORMAT_TO_TABULAR[args.format],
            enable_graph_validation=False,
        )
    except FileNotFoundError as e:
        print(f"File not found: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Input is not UTF-8 text: {e}", file=sys.stderr)
        return 1

    if flow_graph is None:
        print("No flows found. Use lines like 'Revenue [100] Profit'.", file=sys.stderr)
        return 1

    logger.debug(f"Rendering {args.output} output")
    print(render(loader.graph_builder, args.output, args.report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
