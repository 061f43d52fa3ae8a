from typing import Iterable, Sequence

from .model import Item, Relationship


class ValidationError(Exception):
    pass


def validate_relationship(
    rel: Relationship,
    items: Sequence[Item],
    existing: Iterable[Relationship] = (),
) -> None:
    """Reject a relationship before it is added to an arrangement.

    Self-links, links to unknown items and duplicates of an existing unordered
    pair are errors.
    """
    if rel.source == rel.target:
        raise ValidationError(f'relationship {rel.id}: an item cannot depend on itself ({rel.source})')
    known = {item.id for item in items}
    for endpoint in (rel.source, rel.target):
        if endpoint not in known:
            raise ValidationError(f'relationship {rel.id}: unknown item "{endpoint}"')
    for other in existing:
        if other.key == rel.key:
            raise ValidationError(
                f'relationship {rel.id}: duplicates {other.id} ({rel.key[0]} <-> {rel.key[1]})'
            )


def validate_arrangement(items: Sequence[Item], relationships: Sequence[Relationship]) -> None:
    seen = set()
    for item in items:
        if item.id in seen:
            raise ValidationError(f'duplicate item id "{item.id}"')
        seen.add(item.id)
        if item.placed and item.position is None:
            raise ValidationError(f'item "{item.id}" is marked placed but has no position')

    accepted = []
    for rel in relationships:
        validate_relationship(rel, items, accepted)
        accepted.append(rel)
