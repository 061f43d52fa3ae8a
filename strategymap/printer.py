from typing import List, Optional, Sequence

from .achievements import ACHIEVEMENT_INFO
from .board import Scoreboard
from .config import ScoringWeights, get_scoring_weights
from .model import Item
from .routing import RoutedConnector
from .scoring import is_classification_correct, is_stage_correct, position_accuracy


def _fmt_point(point) -> str:
    return f"({point[0]:.1f}, {point[1]:.1f})"


def format_scoreboard(board: Scoreboard, weights: Optional[ScoringWeights] = None) -> str:
    w = weights or get_scoring_weights()
    b = board.breakdown
    lines = [
        f"Score: {board.score}/100",
        f"  position:       {b.position:6.2f} / {w.position:g}",
        f"  classification: {b.classification:6.2f} / {w.classification:g}",
        f"  dependency:     {b.dependency:6.2f} / {w.dependency:g}",
        f"  completion:     {b.completion:6.2f} / {w.completion:g}",
        "Achievements:",
    ]
    for achievement, earned in board.achievements.items():
        info = ACHIEVEMENT_INFO[achievement]
        mark = "x" if earned else " "
        lines.append(f"  [{mark}] {info.name} - {info.description}")
    return "\n".join(lines)


def format_item(item: Item) -> str:
    if not item.on_map:
        where = "unplaced"
    else:
        stage_mark = "ok" if is_stage_correct(item) else "wrong stage"
        where = f"{_fmt_point(item.position.as_tuple())} {position_accuracy(item)}% {stage_mark}"
    if item.classification is None:
        decision = "undecided"
    else:
        verdict = "ok" if is_classification_correct(item) else "wrong"
        decision = f"{item.classification.value} ({verdict})"
    return f"{item.id}: {where}; {decision}"


def format_items(items: Sequence[Item]) -> str:
    return "\n".join(format_item(item) for item in items)


def format_routes(routes: Sequence[RoutedConnector]) -> str:
    lines: List[str] = []
    for conn in routes:
        rel = conn.relationship
        lines.append(
            f"{rel.source} -> {rel.target}: {_fmt_point(conn.start)} -> {_fmt_point(conn.end)}  {conn.path}"
        )
    return "\n".join(lines)
