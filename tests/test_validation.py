import pytest

from strategymap import Item, Position, Relationship, Stage, new_items
from strategymap.validate import ValidationError, validate_arrangement, validate_relationship


def rel(a, b, rel_id=''):
    return Relationship(a, b, rel_id)


def test_validate_accepts_valid_arrangement():
    items = new_items()
    validate_arrangement(
        items,
        [rel('cloud-compute', 'network-comms'), rel('cloud-compute', 'elf-dashboard')],
    )


def test_self_link_is_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_relationship(rel('cloud-compute', 'cloud-compute'), new_items())
    assert 'cannot depend on itself' in str(exc.value)


def test_unknown_endpoint_is_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_relationship(rel('cloud-compute', 'sleigh'), new_items())
    assert 'unknown item "sleigh"' in str(exc.value)


@pytest.mark.parametrize(
    'first, second',
    [(('cloud-compute', 'network-comms'), ('network-comms', 'cloud-compute')),
     (('cloud-compute', 'network-comms'), ('cloud-compute', 'network-comms'))],
)
def test_duplicate_unordered_pair_is_rejected(first, second):
    existing = [rel(*first, rel_id='dep-1')]
    with pytest.raises(ValidationError) as exc:
        validate_relationship(rel(*second, rel_id='dep-2'), new_items(), existing)
    assert 'dep-2: duplicates dep-1' in str(exc.value)


def test_duplicate_item_ids_are_rejected():
    items = new_items()
    with pytest.raises(ValidationError) as exc:
        validate_arrangement(items + [items[3]], [])
    assert 'duplicate item id' in str(exc.value)


def test_placed_without_position_is_rejected():
    item = Item('x', Stage.GENESIS, Position(1, 1), placed=True)
    with pytest.raises(ValidationError) as exc:
        validate_arrangement([item], [])
    assert 'marked placed' in str(exc.value)


def test_duplicate_relationships_in_arrangement_are_rejected():
    with pytest.raises(ValidationError):
        validate_arrangement(
            new_items(),
            [rel('cloud-compute', 'network-comms'), rel('network-comms', 'cloud-compute')],
        )
