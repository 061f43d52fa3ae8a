"""Achievement predicates evaluated against the current arrangement.

Every predicate is recomputed from scratch on each call; nothing about an
achievement is cached between evaluations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Union

from .catalog import COMMODITY_ITEM_ID, stage_from_x
from .model import Classification, Item, Relationship, Stage
from .scoring import ReferenceTable, count_correct_relationships, reference_table, score

logger = logging.getLogger(__name__)

STRATEGIC_MAPPER_THRESHOLD = 70
DEPENDENCY_MASTER_THRESHOLD = 5


class Achievement(str, Enum):
    CLOUD_WISDOM = "cloud-wisdom"
    INNOVATION_STAR = "innovation-star"
    REINDEER_EFFICIENCY = "reindeer-efficiency"
    STRATEGIC_MAPPER = "strategic-mapper"
    DEPENDENCY_MASTER = "dependency-master"


@dataclass(frozen=True)
class AchievementInfo:
    name: str
    description: str
    icon: str


ACHIEVEMENT_INFO: Dict[Achievement, AchievementInfo] = {
    Achievement.CLOUD_WISDOM: AchievementInfo(
        "Cloud Wisdom", "Correctly identified commodity cloud services", "☁️"
    ),
    Achievement.INNOVATION_STAR: AchievementInfo(
        "Innovation Star", "Identified novel components to build", "⭐"
    ),
    Achievement.REINDEER_EFFICIENCY: AchievementInfo(
        "Reindeer Efficiency", "Made smart repurpose decisions", "🦌"
    ),
    Achievement.STRATEGIC_MAPPER: AchievementInfo(
        "Strategic Mapper", "Completed the map with high strategic clarity", "🗺️"
    ),
    Achievement.DEPENDENCY_MASTER: AchievementInfo(
        "Dependency Master", "Created logical component dependencies", "🔗"
    ),
}

Predicate = Callable[[Sequence[Item], Sequence[Relationship], Optional[ReferenceTable]], bool]


def _placed_in(item: Item, stage: Stage) -> bool:
    if not item.on_map:
        return False
    return stage_from_x(item.position.x) == stage


def _cloud_wisdom(items, relationships, reference) -> bool:
    item = next((it for it in items if it.id == COMMODITY_ITEM_ID), None)
    if item is None:
        return False
    return _placed_in(item, Stage.COMMODITY) and item.classification == Classification.BUY


def _innovation_star(items, relationships, reference) -> bool:
    # vacuously true when there are no genesis items
    genesis = [it for it in items if it.target_stage == Stage.GENESIS]
    return all(
        _placed_in(it, Stage.GENESIS) and it.classification == Classification.BUILD
        for it in genesis
    )


def _reindeer_efficiency(items, relationships, reference) -> bool:
    item = next(
        (it for it in items if it.target_classification == Classification.REPURPOSE), None
    )
    if item is None:
        return False
    return item.classification == Classification.REPURPOSE


def _strategic_mapper(items, relationships, reference) -> bool:
    return score(items, relationships, reference=reference) >= STRATEGIC_MAPPER_THRESHOLD


def _dependency_master(items, relationships, reference) -> bool:
    return count_correct_relationships(relationships, reference) >= DEPENDENCY_MASTER_THRESHOLD


_PREDICATES: Dict[Achievement, Predicate] = {
    Achievement.CLOUD_WISDOM: _cloud_wisdom,
    Achievement.INNOVATION_STAR: _innovation_star,
    Achievement.REINDEER_EFFICIENCY: _reindeer_efficiency,
    Achievement.STRATEGIC_MAPPER: _strategic_mapper,
    Achievement.DEPENDENCY_MASTER: _dependency_master,
}


def _coerce_achievement(achievement_id: Union[Achievement, str]) -> Optional[Achievement]:
    try:
        return Achievement(achievement_id)
    except ValueError:
        return None


def evaluate_achievement(
    achievement_id: Union[Achievement, str],
    items: Sequence[Item],
    relationships: Sequence[Relationship],
    *,
    reference: Optional[ReferenceTable] = None,
) -> bool:
    """Return whether ``achievement_id`` is earned by the current arrangement.

    Unknown ids are never earned.
    """

    achievement = _coerce_achievement(achievement_id)
    if achievement is None:
        logger.debug("Unknown achievement id %r", achievement_id)
        return False
    items = list(items)
    relationships = list(relationships)
    keys = reference_table(reference)
    return bool(_PREDICATES[achievement](items, relationships, keys))


def evaluate_achievements(
    items: Sequence[Item],
    relationships: Sequence[Relationship],
    *,
    reference: Optional[ReferenceTable] = None,
) -> Dict[Achievement, bool]:
    items = list(items)
    relationships = list(relationships)
    keys = reference_table(reference)
    return {
        achievement: evaluate_achievement(achievement, items, relationships, reference=keys)
        for achievement in Achievement
    }


def earned_achievements(
    items: Sequence[Item],
    relationships: Sequence[Relationship],
    *,
    reference: Optional[ReferenceTable] = None,
) -> List[Achievement]:
    results = evaluate_achievements(items, relationships, reference=reference)
    return [achievement for achievement, earned in results.items() if earned]


__all__ = [
    "ACHIEVEMENT_INFO",
    "Achievement",
    "AchievementInfo",
    "DEPENDENCY_MASTER_THRESHOLD",
    "STRATEGIC_MAPPER_THRESHOLD",
    "earned_achievements",
    "evaluate_achievement",
    "evaluate_achievements",
]
