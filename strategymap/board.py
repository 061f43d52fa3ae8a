"""Mutable arrangement that feeds the evaluator.

The board owns items and relationships. Each mutation emits a
:class:`BoardEvent` together with a freshly computed :class:`Scoreboard`;
nothing derived is stored between mutations.
"""

from __future__ import annotations

import copy
import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .achievements import Achievement, evaluate_achievements
from .catalog import new_items
from .model import Classification, Item, Position, Relationship
from .scoring import ReferenceTable, ScoreBreakdown, reference_table, score_breakdown
from .validate import validate_arrangement, validate_relationship

logger = logging.getLogger(__name__)

PositionLike = Union[Position, Tuple[float, float]]


class UnknownItemError(KeyError):
    """Raised when a mutation names an item that is not on the board."""


class UnknownRelationshipError(KeyError):
    """Raised when a mutation names a relationship that is not on the board."""


class EventType(str, Enum):
    PLACED = "placed"
    REMOVED = "removed"
    CLASSIFIED = "classified"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    RESET = "reset"


@dataclass
class BoardEvent:
    type: EventType
    payload: Dict[str, Any] = field(default_factory=dict)
    sequence: int = 0


@dataclass
class Scoreboard:
    """Derived values for one snapshot of the board."""

    breakdown: ScoreBreakdown
    achievements: Dict[Achievement, bool]

    @property
    def score(self) -> int:
        return self.breakdown.score

    @property
    def earned(self) -> List[Achievement]:
        return [a for a, earned in self.achievements.items() if earned]

    @classmethod
    def from_snapshot(
        cls,
        items: Sequence[Item],
        relationships: Sequence[Relationship],
        *,
        reference: Optional[ReferenceTable] = None,
    ) -> "Scoreboard":
        return cls(
            breakdown=score_breakdown(items, relationships, reference=reference),
            achievements=evaluate_achievements(items, relationships, reference=reference),
        )


Listener = Callable[[BoardEvent, Scoreboard], None]


def _as_position(value: PositionLike) -> Position:
    if isinstance(value, Position):
        return value
    x, y = value
    return Position(x, y)


class Board:
    def __init__(
        self,
        items: Optional[Iterable[Item]] = None,
        relationships: Iterable[Relationship] = (),
        *,
        reference: Optional[ReferenceTable] = None,
    ) -> None:
        item_list = list(items) if items is not None else new_items()
        rel_list = list(relationships)
        validate_arrangement(item_list, rel_list)
        self._initial_items = copy.deepcopy(item_list)
        self._items: Dict[str, Item] = {item.id: item for item in item_list}
        self._relationships: List[Relationship] = rel_list
        self._reference = reference_table(reference)
        self._listeners: List[Listener] = []
        self._sequence = itertools.count(1)
        self._rel_ids = itertools.count(len(rel_list) + 1)

    @property
    def items(self) -> List[Item]:
        return list(self._items.values())

    @property
    def relationships(self) -> List[Relationship]:
        return list(self._relationships)

    def item(self, item_id: str) -> Item:
        try:
            return self._items[item_id]
        except KeyError:
            raise UnknownItemError(item_id) from None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def scoreboard(self) -> Scoreboard:
        return Scoreboard.from_snapshot(self.items, self._relationships, reference=self._reference)

    def place(self, item_id: str, position: PositionLike) -> Item:
        updated = self.item(item_id).with_placement(_as_position(position))
        self._items[item_id] = updated
        self._emit(EventType.PLACED, item_id=item_id, position=updated.position)
        return updated

    def remove(self, item_id: str) -> Item:
        """Take an item off the map; its classification is kept."""

        updated = self.item(item_id).with_placement(None)
        self._items[item_id] = updated
        self._emit(EventType.REMOVED, item_id=item_id)
        return updated

    def classify(self, item_id: str, classification: Optional[Union[Classification, str]]) -> Item:
        value = Classification(classification) if classification is not None else None
        updated = self.item(item_id).with_classification(value)
        self._items[item_id] = updated
        self._emit(EventType.CLASSIFIED, item_id=item_id, classification=value)
        return updated

    def connect(self, source: str, target: str) -> Relationship:
        rel = Relationship(source=source, target=target, id=f"dep-{next(self._rel_ids)}")
        validate_relationship(rel, self.items, self._relationships)
        self._relationships.append(rel)
        self._emit(EventType.CONNECTED, relationship=rel)
        return rel

    def disconnect(self, relationship_id: str) -> Relationship:
        for idx, rel in enumerate(self._relationships):
            if rel.id == relationship_id:
                del self._relationships[idx]
                self._emit(EventType.DISCONNECTED, relationship=rel)
                return rel
        raise UnknownRelationshipError(relationship_id)

    def reset(self) -> None:
        """Restore the items the board started with and drop every relationship."""

        self._items = {item.id: item for item in copy.deepcopy(self._initial_items)}
        self._relationships = []
        self._emit(EventType.RESET)

    def _emit(self, event_type: EventType, **payload: Any) -> None:
        event = BoardEvent(type=event_type, payload=payload, sequence=next(self._sequence))
        if not self._listeners:
            return
        board = self.scoreboard()
        logger.info(
            "Board event #%d %s -> score=%d earned=%s",
            event.sequence,
            event_type.value,
            board.score,
            [a.value for a in board.earned],
        )
        for listener in list(self._listeners):
            listener(event, board)


__all__ = [
    "Board",
    "BoardEvent",
    "EventType",
    "Listener",
    "Scoreboard",
    "UnknownItemError",
    "UnknownRelationshipError",
]
