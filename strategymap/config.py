"""Configuration helpers for the evaluator and the edge router."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass


@dataclass
class ScoringWeights:
    """Sub-score weights; they must add up to 100."""

    position: float = 30.0
    classification: float = 30.0
    dependency: float = 25.0
    completion: float = 15.0

    def __post_init__(self) -> None:
        for name in ("position", "classification", "dependency", "completion"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"scoring weight {name} must be a non-negative number (got {value!r})")
        total = self.position + self.classification + self.dependency + self.completion
        if not math.isclose(total, 100.0, abs_tol=1e-9):
            raise ValueError(f"scoring weights must sum to 100 (got {total:g})")

    @property
    def total(self) -> float:
        return self.position + self.classification + self.dependency + self.completion


@dataclass
class RouterConfig:
    """Pixel geometry of the boxes connectors are clipped against."""

    box_width: float = 190.0
    box_height: float = 120.0
    clearance: float = 10.0  # arrowhead length


_SCORING_WEIGHTS = ScoringWeights()
_ROUTER_CONFIG = RouterConfig()


def get_scoring_weights() -> ScoringWeights:
    return copy.deepcopy(_SCORING_WEIGHTS)


def set_scoring_weights(weights: ScoringWeights) -> None:
    global _SCORING_WEIGHTS
    _SCORING_WEIGHTS = copy.deepcopy(weights)


def get_router_config() -> RouterConfig:
    return copy.deepcopy(_ROUTER_CONFIG)


def set_router_config(config: RouterConfig) -> None:
    global _ROUTER_CONFIG
    _ROUTER_CONFIG = copy.deepcopy(config)


__all__ = [
    "RouterConfig",
    "ScoringWeights",
    "get_router_config",
    "get_scoring_weights",
    "set_router_config",
    "set_scoring_weights",
]
