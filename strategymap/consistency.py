from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .catalog import stage_from_x
from .model import Item, Relationship


@dataclass
class ConsistencyWarning:
    kind: str
    message: str
    item_id: Optional[str] = None
    relationship_id: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        return self.message


def _item_warnings(item: Item) -> List[ConsistencyWarning]:
    warnings: List[ConsistencyWarning] = []
    if item.on_map and item.classification is None:
        warnings.append(
            ConsistencyWarning(
                kind='unclassified',
                message=f'{item.id} is placed but has no build/buy/repurpose decision',
                item_id=item.id,
            )
        )
    elif not item.on_map and item.classification is not None:
        warnings.append(
            ConsistencyWarning(
                kind='unplaced',
                message=f'{item.id} is classified as {item.classification.value} but not on the map',
                item_id=item.id,
            )
        )
    if item.on_map and not (0.0 <= item.position.x <= 100.0 and 0.0 <= item.position.y <= 100.0):
        warnings.append(
            ConsistencyWarning(
                kind='off_map',
                message=(
                    f'{item.id} at ({item.position.x:g}, {item.position.y:g}) lies outside the map; '
                    f'treated as {stage_from_x(item.position.x).value}'
                ),
                item_id=item.id,
            )
        )
    return warnings


def check_consistency(items: Sequence[Item], relationships: Sequence[Relationship]) -> List[ConsistencyWarning]:
    """Report arrangement states that score or render in a surprising way.

    Nothing here is fatal: the evaluator accepts all of these.
    """
    warnings: List[ConsistencyWarning] = []
    by_id: Dict[str, Item] = {item.id: item for item in items}

    for item in items:
        warnings.extend(_item_warnings(item))

    for rel in relationships:
        hidden = [
            endpoint
            for endpoint in (rel.source, rel.target)
            if endpoint not in by_id or not by_id[endpoint].on_map
        ]
        if hidden:
            hidden = list(dict.fromkeys(hidden))
            warnings.append(
                ConsistencyWarning(
                    kind='hidden_connector',
                    message=f'relationship {rel.id} is not drawn; not on the map: {", ".join(hidden)}',
                    relationship_id=rel.id,
                )
            )
    return warnings
