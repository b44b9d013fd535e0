"""Main CLI entry point for the arena-xml command-line tool.

Provides commands to print the parsed tree of a document, dump its tokens,
and summarize parse results for batches of files.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from arena_xml_parser import __version__
from arena_xml_parser.api import ArenaXMLParser
from arena_xml_parser.shared import ErrorPolicy, ParserConfig, get_logger
from arena_xml_parser.tokenization import iter_tokens
from arena_xml_parser.tree import ParseError, render_node

XML_SUFFIXES = {".xml", ".xhtml", ".svg"}

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT

logger = get_logger(__name__, component="cli")


def load_config(args: argparse.Namespace) -> ParserConfig:
    """Build the parser configuration from a config file and CLI flags."""
    config = ParserConfig()
    if args.config:
        config = ParserConfig.from_file(args.config)
    if args.strict:
        config.error_policy = ErrorPolicy.STRICT
    return config


def find_xml_files(path: Path, recursive: bool = True) -> Iterator[Path]:
    """Find document files under ``path``; a file path is yielded as is."""
    if path.is_file():
        yield path
    elif path.is_dir():
        pattern = "**/*" if recursive else "*"
        for candidate in sorted(path.glob(pattern)):
            if candidate.is_file() and candidate.suffix.lower() in XML_SUFFIXES:
                yield candidate


def process_file(parser: ArenaXMLParser, file_path: Path) -> Dict[str, Any]:
    """Parse one file and describe the outcome as a dictionary."""
    try:
        result = parser.parse(file_path)
    except (OSError, ParseError) as e:
        logger.debug("Failed to process file", extra={"file": str(file_path)})
        return {"file": str(file_path), "success": False, "error": str(e)}

    summary = result.summary()
    summary["file"] = str(file_path)
    return summary


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format processing results for output."""
    if format_type == "csv":
        lines = ["file,success,nodes,elements,texts,warnings,time_ms"]
        for result in results:
            lines.append(
                f"{result['file']},{result['success']},"
                f"{result.get('node_count', 0)},{result.get('element_count', 0)},"
                f"{result.get('text_count', 0)},{result.get('warning_count', 0)},"
                f"{result.get('processing_time_ms', 0):.1f}"
            )
        return "\n".join(lines)

    if format_type == "text":
        if not results:
            return "No results to display."
        successful = sum(1 for r in results if r["success"])
        lines = [f"Processed {len(results)} files, {successful} successful"]
        lines.append("-" * 60)
        for result in results:
            status = "OK" if result["success"] else "FAILED"
            lines.append(f"{status} {result['file']}")
            if "error" in result:
                lines.append(f"   Error: {result['error']}")
            else:
                lines.append(
                    f"   Nodes: {result['node_count']}, "
                    f"Warnings: {result['warning_count']}"
                )
        return "\n".join(lines)

    return json.dumps(results, indent=2)


def cmd_tree(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle tree command."""
    parser = ArenaXMLParser(config)
    exit_code = EXIT_OK
    for path in args.files:
        try:
            result = parser.parse(path)
        except (OSError, ParseError) as e:
            print(f"{path}: {e}", file=sys.stderr)
            exit_code = EXIT_FAILURE
            continue
        print(render_node(result.document))
        for diag in result.diagnostics:
            print(f"{path}: {diag.severity.name}: {diag.message}", file=sys.stderr)
    return exit_code


def cmd_tokens(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle tokens command."""
    exit_code = EXIT_OK
    for path in args.files:
        try:
            content = path.read_text(encoding=config.encoding, errors="replace")
        except OSError as e:
            print(f"{path}: {e}", file=sys.stderr)
            exit_code = EXIT_FAILURE
            continue
        for token in iter_tokens(content):
            print(token)
    return exit_code


def cmd_parse(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle parse command."""
    parser = ArenaXMLParser(config)
    files = [
        file_path
        for path in args.paths
        for file_path in find_xml_files(path, args.recursive)
    ]
    results = [process_file(parser, file_path) for file_path in files]

    formatted_output = format_results(results, args.format)
    if args.output:
        args.output.write_text(formatted_output)
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    if not results:
        return EXIT_FAILURE
    return EXIT_OK if all(r["success"] for r in results) else EXIT_FAILURE


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="arena-xml",
        description="Parse XML-like documents into a node arena and inspect them"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed markup instead of recovering"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tree_parser = subparsers.add_parser("tree", help="Print the parsed node tree")
    tree_parser.add_argument("files", nargs="+", type=Path, help="Documents to print")

    tokens_parser = subparsers.add_parser("tokens", help="Print tokens, one per line")
    tokens_parser.add_argument(
        "files", nargs="+", type=Path, help="Documents to tokenize"
    )

    parse_parser = subparsers.add_parser("parse", help="Summarize parse results")
    parse_parser.add_argument(
        "paths", nargs="+", type=Path, help="Files or directories to parse"
    )
    parse_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=["json", "csv", "text"],
        default="json",
        help="Output format (default: json)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        print(f"Could not load configuration: {e}", file=sys.stderr)
        return EXIT_FAILURE

    handlers = {"tree": cmd_tree, "tokens": cmd_tokens, "parse": cmd_parse}
    try:
        return handlers[args.command](args, config)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
