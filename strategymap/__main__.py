import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from strategymap import (
    Board,
    ValidationError,
    check_consistency,
    format_items,
    format_routes,
    format_scoreboard,
    route_relationships,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def load_board(document: Dict[str, Any]) -> Board:
    """Apply a JSON arrangement on top of the reference item set."""

    board = Board()
    for entry in document.get("items", []):
        if not isinstance(entry, dict):
            raise ValidationError(f"item entry must be an object (got {entry!r})")
        item_id = entry["id"]
        board.item(item_id)
        if entry.get("x") is not None and entry.get("y") is not None:
            board.place(item_id, (float(entry["x"]), float(entry["y"])))
        if entry.get("classification"):
            board.classify(item_id, entry["classification"])
    for pair in document.get("relationships", []):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ValidationError(f"relationship must name two items (got {pair!r})")
        board.connect(pair[0], pair[1])
    return board


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Score a strategy map arrangement")
    parser.add_argument("path", help="Path to the JSON arrangement")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--routes",
        action="store_true",
        help="Print the clipped connector geometry for every relationship",
    )
    parser.add_argument("--canvas-width", type=float, default=1200.0)
    parser.add_argument("--canvas-height", type=float, default=800.0)
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    logger.info("Loading arrangement from %s", args.path)
    try:
        document = json.loads(Path(args.path).read_text(encoding="utf-8"))
        board = load_board(document)
    except (OSError, ValueError, KeyError, TypeError, AttributeError, ValidationError) as exc:
        logger.error("Invalid arrangement %s: %s", args.path, exc)
        raise SystemExit(1)

    for warning in check_consistency(board.items, board.relationships):
        logger.warning("%s", warning)

    print(format_scoreboard(board.scoreboard()))
    print("Items:")
    print(format_items(board.items))

    if args.routes:
        routes = route_relationships(
            board.items,
            board.relationships,
            args.canvas_width,
            args.canvas_height,
        )
        print("Connectors:")
        print(format_routes(routes) if routes else "  (none)")


if __name__ == "__main__":
    main(sys.argv[1:])
