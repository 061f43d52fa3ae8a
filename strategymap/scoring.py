"""Composite strategic-clarity score for an arrangement of items."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Sequence, Tuple

import numpy as np

from .catalog import REFERENCE_RELATIONSHIPS, reference_keys, stage_from_x
from .config import ScoringWeights, get_scoring_weights
from .logging_utils import apply_debug_logging
from .math_utils import MAX_MAP_DISTANCE, _clamp
from .model import Item, PairKey, Relationship

logger = logging.getLogger(__name__)

ReferenceTable = Iterable[Tuple[str, str]]


def reference_table(reference: Optional[ReferenceTable] = None) -> FrozenSet[PairKey]:
    """Materialise ``reference`` (default: the built-in pairs) as unordered keys."""

    return reference_keys(REFERENCE_RELATIONSHIPS if reference is None else reference)


@dataclass
class ScoreBreakdown:
    """Unrounded sub-scores, each on its own ``0..weight`` scale."""

    position: float
    classification: float
    dependency: float
    completion: float

    @property
    def total(self) -> float:
        return self.position + self.classification + self.dependency + self.completion

    @property
    def score(self) -> int:
        return round_half_up(self.total)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _weights(weights: Optional[ScoringWeights]) -> ScoringWeights:
    return weights if weights is not None else get_scoring_weights()


def _normalized_distance(item: Item) -> float:
    dx = item.position.x - item.target_position.x
    dy = item.position.y - item.target_position.y
    distance = math.hypot(dx, dy) / MAX_MAP_DISTANCE
    if math.isnan(distance):
        return 1.0
    return _clamp(distance, 0.0, 1.0)


def position_score(items: Sequence[Item], weights: Optional[ScoringWeights] = None) -> float:
    """Quadratic-decay placement accuracy averaged over placed items."""

    w = _weights(weights)
    placed = [item for item in items if item.on_map]
    if not placed:
        return 0.0

    actual = np.array([item.position.as_tuple() for item in placed], dtype=float)
    target = np.array([item.target_position.as_tuple() for item in placed], dtype=float)
    distances = np.hypot(*(actual - target).T) / MAX_MAP_DISTANCE
    # non-finite coordinates count as maximally misplaced
    distances = np.nan_to_num(distances, nan=1.0, posinf=1.0)
    per_item = (1.0 - np.clip(distances, 0.0, 1.0)) ** 2
    return float(per_item.mean()) * w.position


def classification_score(items: Sequence[Item], weights: Optional[ScoringWeights] = None) -> float:
    w = _weights(weights)
    classified = [item for item in items if item.classification is not None]
    if not classified:
        return 0.0
    correct = sum(1 for item in classified if is_classification_correct(item))
    return correct / len(classified) * w.classification


def count_correct_relationships(
    relationships: Iterable[Relationship],
    reference: Optional[ReferenceTable] = None,
) -> int:
    """Count declared relationships whose unordered pair is in ``reference``."""

    keys = reference_table(reference)
    return sum(1 for rel in relationships if rel.key in keys)


def dependency_score(
    relationships: Sequence[Relationship],
    reference: Optional[ReferenceTable] = None,
    weights: Optional[ScoringWeights] = None,
) -> float:
    """Correct relationships over ``max(declared, reference size)``.

    Declaring nothing scores exactly 0; declaring many wrong links only tends
    towards 0.
    """

    w = _weights(weights)
    declared = list(relationships)
    if not declared:
        return 0.0
    keys = reference_table(reference)
    correct = count_correct_relationships(declared, keys)
    return correct / max(len(declared), len(keys)) * w.dependency


def completion_bonus(items: Sequence[Item], weights: Optional[ScoringWeights] = None) -> float:
    w = _weights(weights)
    total = len(items)
    if total == 0:
        return 0.0
    placed = sum(1 for item in items if item.on_map)
    classified = sum(1 for item in items if item.classification is not None)
    if placed == total and classified == total:
        return w.completion
    return ((placed / total + classified / total) / 2.0) * w.completion


def score_breakdown(
    items: Sequence[Item],
    relationships: Sequence[Relationship],
    *,
    reference: Optional[ReferenceTable] = None,
    weights: Optional[ScoringWeights] = None,
) -> ScoreBreakdown:
    w = _weights(weights)
    items = list(items)
    relationships = list(relationships)
    keys = reference_table(reference)
    breakdown = ScoreBreakdown(
        position=position_score(items, w),
        classification=classification_score(items, w),
        dependency=dependency_score(relationships, keys, w),
        completion=completion_bonus(items, w),
    )
    logger.debug(
        "Score breakdown: position=%.3f classification=%.3f dependency=%.3f completion=%.3f",
        breakdown.position,
        breakdown.classification,
        breakdown.dependency,
        breakdown.completion,
    )
    return breakdown


def score(
    items: Sequence[Item],
    relationships: Sequence[Relationship],
    *,
    reference: Optional[ReferenceTable] = None,
    weights: Optional[ScoringWeights] = None,
) -> int:
    """Return the composite score, an integer in ``[0, 100]``."""

    return score_breakdown(items, relationships, reference=reference, weights=weights).score


def position_accuracy(item: Item) -> int:
    """Linear placement accuracy of a single item as a percentage."""

    if not item.on_map:
        return 0
    return round_half_up((1.0 - _normalized_distance(item)) * 100.0)


def is_classification_correct(item: Item) -> bool:
    return item.classification == item.target_classification


def is_stage_correct(item: Item) -> bool:
    if not item.on_map:
        return False
    return stage_from_x(item.position.x) == item.target_stage


__all__ = [
    "ScoreBreakdown",
    "classification_score",
    "completion_bonus",
    "count_correct_relationships",
    "dependency_score",
    "is_classification_correct",
    "is_stage_correct",
    "position_accuracy",
    "position_score",
    "reference_table",
    "round_half_up",
    "score",
    "score_breakdown",
]


apply_debug_logging(globals(), logger=logger)
