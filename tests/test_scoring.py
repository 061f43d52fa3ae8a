import math

import pytest

from strategymap import (
    REFERENCE_RELATIONSHIPS,
    Classification,
    Item,
    Position,
    Relationship,
    ScoringWeights,
    Stage,
    get_scoring_weights,
    is_stage_correct,
    new_items,
    position_accuracy,
    score,
    score_breakdown,
    set_scoring_weights,
)
from strategymap.scoring import (
    ScoreBreakdown,
    classification_score,
    completion_bonus,
    dependency_score,
    position_score,
)


def item(item_id, target=(50, 50), position=None, classification=None, target_classification='build'):
    it = Item(
        id=item_id,
        target_stage=Stage.PRODUCT,
        target_position=Position(*target),
        target_classification=Classification(target_classification),
    )
    if position is not None:
        it = it.with_placement(Position(*position))
    if classification is not None:
        it = it.with_classification(Classification(classification))
    return it


def solved_items():
    return [
        it.with_placement(it.target_position).with_classification(it.target_classification)
        for it in new_items()
    ]


def reference_relationships():
    return [Relationship(a, b) for a, b in REFERENCE_RELATIONSHIPS]


def test_empty_inputs_score_zero():
    assert score([], []) == 0
    breakdown = score_breakdown([], [])
    assert breakdown.total == 0.0


def test_fresh_reference_board_scores_zero():
    assert score(new_items(), []) == 0


def test_perfect_arrangement_scores_100():
    assert score(solved_items(), reference_relationships()) == 100


def test_position_exact_placement_gets_full_weight():
    assert position_score([item('a', position=(50, 50))]) == pytest.approx(30.0)


def test_position_at_max_diagonal_is_zero():
    assert position_score([item('a', target=(0, 0), position=(100, 100))]) == pytest.approx(0.0)


def test_position_is_monotonically_non_increasing_in_distance():
    values = [
        position_score([item('a', target=(0, 0), position=(d, 0))])
        for d in (0, 5, 10, 25, 50, 99, 100)
    ]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_position_uses_quadratic_decay():
    d = 50.0
    expected = (1 - d / math.hypot(100, 100)) ** 2 * 30
    assert position_score([item('a', target=(0, 0), position=(d, 0))]) == pytest.approx(expected)


def test_position_averages_over_placed_items_only():
    items = [item('a', position=(50, 50)), item('b'), item('c')]
    assert position_score(items) == pytest.approx(30.0)


def test_classification_ratio_ignores_unclassified_items():
    items = [
        item('a', classification='build'),
        item('b', classification='build'),
        item('c'),
        item('d'),
    ]
    assert classification_score(items) == pytest.approx(30.0)


def test_classification_partial_credit():
    items = [item('a', classification='build'), item('b', classification='buy')]
    assert classification_score(items) == pytest.approx(15.0)


def test_dependency_three_correct_against_twelve_reference_pairs():
    rels = [Relationship(a, b) for a, b in REFERENCE_RELATIONSHIPS[:3]]
    assert dependency_score(rels) == pytest.approx(6.25)


def test_dependency_matching_is_order_insensitive():
    rels = [Relationship(b, a) for a, b in REFERENCE_RELATIONSHIPS[:3]]
    assert dependency_score(rels) == pytest.approx(6.25)


def test_dependency_wrong_links_dilute_the_score():
    correct = reference_relationships()
    wrong = [Relationship(f'x{i}', f'y{i}') for i in range(12)]
    assert dependency_score(correct) == pytest.approx(25.0)
    assert dependency_score(correct + wrong) == pytest.approx(12.5)


def test_dependency_without_declarations_is_exactly_zero():
    assert dependency_score([]) == 0.0


def test_dependency_with_custom_reference_table():
    rels = [Relationship('a', 'b')]
    assert dependency_score(rels, reference=[('b', 'a')]) == pytest.approx(25.0)


def test_completion_bonus_partial_credit():
    items = new_items()
    for idx in range(5):
        items[idx] = items[idx].with_placement(Position(10, 10))
    for idx in range(5, 10):
        items[idx] = items[idx].with_classification(Classification.BUY)
    assert not any(it.complete for it in items)
    assert completion_bonus(items) == pytest.approx(((5 / 11 + 5 / 11) / 2) * 15)
    assert completion_bonus(items) == pytest.approx(6.818, abs=1e-3)


def test_completion_bonus_full_when_everything_complete():
    assert completion_bonus(solved_items()) == 15.0


def test_completion_bonus_for_no_items_is_zero():
    assert completion_bonus([]) == 0.0


@pytest.mark.parametrize('total, expected', [(0.49, 0), (0.5, 1), (2.5, 3), (99.5, 100)])
def test_score_rounds_half_up(total, expected):
    assert ScoreBreakdown(total, 0.0, 0.0, 0.0).score == expected


def test_score_is_bounded_integer_for_mixed_inputs():
    items = new_items()
    items[0] = items[0].with_placement(Position(0, 0)).with_classification(Classification.REPURPOSE)
    items[1] = items[1].with_placement(Position(100, 100))
    rels = [Relationship('x', 'y'), Relationship(*REFERENCE_RELATIONSHIPS[0])]
    result = score(items, rels)
    assert isinstance(result, int)
    assert 0 <= result <= 100


def test_score_does_not_mutate_inputs():
    items = solved_items()
    rels = reference_relationships()
    before = [(it.id, it.position, it.classification, it.placed) for it in items]
    score(items, rels)
    assert [(it.id, it.position, it.classification, it.placed) for it in items] == before
    assert rels == reference_relationships()


def test_custom_weights_are_applied():
    weights = ScoringWeights(position=40, classification=20, dependency=25, completion=15)
    breakdown = score_breakdown([item('a', position=(50, 50))], [], weights=weights)
    assert breakdown.position == pytest.approx(40.0)


def test_weights_must_sum_to_100():
    with pytest.raises(ValueError):
        ScoringWeights(position=50)


def test_position_accuracy_is_linear_percentage():
    assert position_accuracy(item('a', target=(0, 0), position=(0, 0))) == 100
    assert position_accuracy(item('a', target=(0, 0), position=(100, 100))) == 0
    assert position_accuracy(item('a')) == 0


def test_stage_correctness_uses_x_ranges():
    it = Item(
        id='cloud',
        target_stage=Stage.COMMODITY,
        target_position=Position(85, 25),
    )
    assert not is_stage_correct(it)
    assert is_stage_correct(it.with_placement(Position(75, 0)))
    assert not is_stage_correct(it.with_placement(Position(74.9, 0)))


def test_global_weights_are_used_by_default():
    original = get_scoring_weights()
    try:
        set_scoring_weights(ScoringWeights(position=60, classification=10, dependency=15, completion=15))
        assert score_breakdown([item('a', position=(50, 50))], []).position == pytest.approx(60.0)
    finally:
        set_scoring_weights(original)
    assert get_scoring_weights() == ScoringWeights()


def test_get_scoring_weights_returns_a_copy():
    weights = get_scoring_weights()
    weights.position = 0
    assert get_scoring_weights().position == 30.0


@pytest.mark.parametrize('bad', [math.nan, math.inf, -math.inf])
def test_non_finite_position_counts_as_maximally_misplaced(bad):
    items = solved_items()
    items[0] = items[0].with_placement(Position(bad, 10))
    breakdown = score_breakdown(items, reference_relationships())
    assert breakdown.position == pytest.approx(30.0 * 10 / 11)
    result = score(items, reference_relationships())
    assert isinstance(result, int)
    assert 0 <= result <= 100
    assert position_accuracy(items[0]) == 0


def test_nan_placement_alone_still_scores():
    items = new_items()
    items[0] = items[0].with_placement(Position(math.nan, 10))
    assert score(items, []) == 1
    assert position_score(items) == 0.0


def test_one_shot_reference_iterator_is_read_once():
    rels = [Relationship(a, b) for a, b in REFERENCE_RELATIONSHIPS[:6]]
    breakdown = score_breakdown([], rels, reference=iter(REFERENCE_RELATIONSHIPS))
    assert breakdown.dependency == pytest.approx(6 / 12 * 25)


def test_position_without_placed_flag_is_not_scored():
    it = Item(
        id='loose',
        target_stage=Stage.PRODUCT,
        target_position=Position(50, 50),
        position=Position(50, 50),
        placed=False,
    )
    assert not it.on_map
    assert position_score([it]) == 0.0
    assert completion_bonus([it]) == 0.0
    assert position_accuracy(it) == 0
    assert not is_stage_correct(it)


@pytest.mark.parametrize(
    'kwargs',
    [
        {'position': 130, 'classification': -30},
        {'position': math.nan, 'classification': 30},
        {'completion': -15, 'dependency': 55},
    ],
)
def test_weights_must_be_non_negative_and_finite(kwargs):
    with pytest.raises(ValueError) as exc:
        ScoringWeights(**kwargs)
    assert 'non-negative' in str(exc.value)
