"""Command-line interface for cadtreelib.

Usage:
    cadtreelib PATHS OUTPUT DEPTH MODE

    PATHS   one or more document paths separated by ';'
    OUTPUT  JSON file to write
    DEPTH   non-negative depth bound, 0 = unlimited
    MODE    full (or all) | flatten

Example:
    cadtreelib "C:/models/Arm.CATProduct;C:/models/Bracket.CATPart" out.json 0 flatten
"""

import argparse
import logging
import sys
from typing import Any, List, Optional

from . import __version__
from .api import export_documents, parse_paths
from .config import ExportConfigError, ExportMode, parse_mode
from .connection import CatiaConnectionError
from .serialization import write_json


logger = logging.getLogger("cadtreelib.cli")


def _depth(value: str) -> int:
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"depth must be an integer, got {value!r}")
    if depth < 0:
        raise argparse.ArgumentTypeError("depth must be a non-negative integer")
    return depth


def _mode(value: str) -> ExportMode:
    try:
        return parse_mode(value)
    except ExportConfigError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def _paths(value: str) -> List[str]:
    paths = parse_paths(value)
    if not paths:
        raise argparse.ArgumentTypeError("no document path given")
    return paths


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cadtreelib",
        description="Export the structure tree of CATIA documents to JSON.",
    )
    parser.add_argument("paths", type=_paths,
                        help="Document path(s), separated by ';'")
    parser.add_argument("output", help="JSON file to write")
    parser.add_argument("depth", type=_depth,
                        help="Maximum depth (0 = unlimited)")
    parser.add_argument("mode", type=_mode,
                        help="Export mode: full (alias all) or flatten")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More log output (repeat for debug)")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only log errors")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbosity: int, quiet: bool = False) -> None:
    if quiet:
        level = logging.ERROR
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("cadtreelib").setLevel(level)


def main(argv: Optional[List[str]] = None, connection: Optional[Any] = None) -> int:
    """Run the exporter.

    Args:
        argv: Arguments (defaults to sys.argv[1:])
        connection: Connection to use instead of a new CatiaConnection

    Returns:
        Process exit status: 0 on success, 1 when nothing was exported or
        CATIA is unreachable, 2 on invalid arguments
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        roots = export_documents(args.paths, args.mode, args.depth,
                                 connection=connection)
    except ExportConfigError as exc:
        logger.error("%s", exc)
        return 2
    except CatiaConnectionError as exc:
        logger.error("Could not connect to CATIA: %s", exc)
        return 1

    if not roots:
        logger.error("No document was exported")
        return 1

    try:
        target = write_json(roots, args.output)
    except OSError as exc:
        logger.error("Could not write %s: %s", args.output, exc)
        return 1
    logger.info("Exported %d document(s) to %s", len(roots), target)
    return 0


if __name__ == "__main__":
    sys.exit(main())
