from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

ItemId = str
PairKey = Tuple[str, str]


class Stage(str, Enum):
    """Evolution tier on the X axis of the map."""

    GENESIS = "genesis"
    CUSTOM = "custom"
    PRODUCT = "product"
    COMMODITY = "commodity"


class Classification(str, Enum):
    BUILD = "build"
    BUY = "buy"
    REPURPOSE = "repurpose"


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y


@dataclass
class Item:
    """A strategic component with a target and an actual placement."""

    id: ItemId
    target_stage: Stage
    target_position: Position
    target_classification: Optional[Classification] = None
    name: str = ""
    description: str = ""
    position: Optional[Position] = None
    classification: Optional[Classification] = None
    placed: bool = False

    @property
    def on_map(self) -> bool:
        """Placed with a concrete position; only such items are scored or drawn."""
        return self.placed and self.position is not None

    @property
    def complete(self) -> bool:
        return self.on_map and self.classification is not None

    def with_placement(self, position: Optional[Position]) -> "Item":
        """Return a copy placed at ``position`` (``None`` removes it from the map)."""
        return replace(self, position=position, placed=position is not None)

    def with_classification(self, classification: Optional[Classification]) -> "Item":
        return replace(self, classification=classification)


def pair_key(a: ItemId, b: ItemId) -> PairKey:
    """Order-insensitive key for a pair of item ids."""

    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class Relationship:
    """Declared connection between two items.

    ``source``/``target`` keep the drawing direction; equality for scoring and
    duplicate detection goes through :attr:`key`.
    """

    source: ItemId
    target: ItemId
    id: str = field(default="")

    def __post_init__(self) -> None:
        if not self.id:
            object.__setattr__(self, "id", f"{self.source}->{self.target}")

    @property
    def key(self) -> PairKey:
        return pair_key(self.source, self.target)


__all__ = [
    "Classification",
    "Item",
    "ItemId",
    "PairKey",
    "Position",
    "Relationship",
    "Stage",
    "pair_key",
]
