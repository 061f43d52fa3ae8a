from .model import Classification, Item, Position, Relationship, Stage, pair_key
from .catalog import (
    EVOLUTION_STAGES,
    REFERENCE_ITEMS,
    REFERENCE_RELATIONSHIPS,
    StageConfig,
    new_items,
    stage_from_x,
)
from .config import (
    RouterConfig,
    ScoringWeights,
    get_router_config,
    get_scoring_weights,
    set_router_config,
    set_scoring_weights,
)
from .scoring import (
    ScoreBreakdown,
    count_correct_relationships,
    is_classification_correct,
    is_stage_correct,
    position_accuracy,
    score,
    score_breakdown,
)
from .achievements import (
    ACHIEVEMENT_INFO,
    Achievement,
    earned_achievements,
    evaluate_achievement,
    evaluate_achievements,
)
from .routing import RoutedConnector, canvas_center, connector_path, route, route_relationships
from .validate import validate_arrangement, validate_relationship, ValidationError
from .consistency import check_consistency, ConsistencyWarning
from .board import Board, BoardEvent, EventType, Scoreboard, UnknownItemError, UnknownRelationshipError
from .printer import format_item, format_items, format_routes, format_scoreboard

__all__ = [
    'Classification',
    'Item',
    'Position',
    'Relationship',
    'Stage',
    'pair_key',
    'EVOLUTION_STAGES',
    'REFERENCE_ITEMS',
    'REFERENCE_RELATIONSHIPS',
    'StageConfig',
    'new_items',
    'stage_from_x',
    'RouterConfig',
    'ScoringWeights',
    'get_router_config',
    'get_scoring_weights',
    'set_router_config',
    'set_scoring_weights',
    'ScoreBreakdown',
    'count_correct_relationships',
    'is_classification_correct',
    'is_stage_correct',
    'position_accuracy',
    'score',
    'score_breakdown',
    'ACHIEVEMENT_INFO',
    'Achievement',
    'earned_achievements',
    'evaluate_achievement',
    'evaluate_achievements',
    'RoutedConnector',
    'canvas_center',
    'connector_path',
    'route',
    'route_relationships',
    'validate_arrangement',
    'validate_relationship',
    'ValidationError',
    'check_consistency',
    'ConsistencyWarning',
    'Board',
    'BoardEvent',
    'EventType',
    'Scoreboard',
    'UnknownItemError',
    'UnknownRelationshipError',
    'format_item',
    'format_items',
    'format_routes',
    'format_scoreboard',
]
