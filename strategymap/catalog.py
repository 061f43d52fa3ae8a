"""Static game configuration: evolution stages, reference items and links."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

from .model import Classification, Item, PairKey, Position, Stage, pair_key


@dataclass(frozen=True)
class StageConfig:
    key: Stage
    label: str
    description: str
    x_range: Tuple[float, float]  # half-open [min, max)

    def contains(self, x: float) -> bool:
        return self.x_range[0] <= x < self.x_range[1]


EVOLUTION_STAGES: Tuple[StageConfig, ...] = (
    StageConfig(Stage.GENESIS, "Genesis", "Novel, uncertain, rapidly changing", (0.0, 25.0)),
    StageConfig(Stage.CUSTOM, "Custom Built", "Emerging, stabilizing", (25.0, 50.0)),
    StageConfig(Stage.PRODUCT, "Product/Service", "Mature, well understood", (50.0, 75.0)),
    StageConfig(Stage.COMMODITY, "Commodity/Utility", "Ubiquitous, standardized", (75.0, 100.0)),
)


def stage_from_x(x: float) -> Stage:
    """Return the evolution stage owning ``x``.

    Values outside every range (including exactly 100) fall back to the last
    stage.
    """

    for cfg in EVOLUTION_STAGES:
        if cfg.contains(x):
            return cfg.key
    return EVOLUTION_STAGES[-1].key


def _item(
    item_id: str,
    name: str,
    description: str,
    stage: Stage,
    classification: Classification,
    x: float,
    y: float,
) -> Item:
    return Item(
        id=item_id,
        name=name,
        description=description,
        target_stage=stage,
        target_classification=classification,
        target_position=Position(x, y),
    )


REFERENCE_ITEMS: Tuple[Item, ...] = (
    _item("mince-pie-delivery", "Mince Pie Delivery",
          "The core service delivering festive treats",
          Stage.PRODUCT, Classification.BUILD, 65, 85),
    _item("encounter-agents", "Existing Encounter Agents",
          "Pre-existing customer interaction systems",
          Stage.CUSTOM, Classification.REPURPOSE, 40, 70),
    _item("ai-recipe-generator", "AI Recipe Generator",
          "Novel AI system for creating festive recipes",
          Stage.GENESIS, Classification.BUILD, 15, 55),
    _item("delivery-routing", "Delivery Routing Service",
          "Optimized path planning for deliveries",
          Stage.PRODUCT, Classification.BUY, 60, 50),
    _item("orchestration-framework", "Multi-Agent Orchestration Framework",
          "Coordinates multiple AI agents",
          Stage.CUSTOM, Classification.BUILD, 35, 45),
    _item("foundational-ai", "Foundational AI Models",
          "Large language models and AI infrastructure",
          Stage.PRODUCT, Classification.BUY, 65, 30),
    _item("cloud-compute", "Cloud Compute and Storage",
          "Infrastructure as a service",
          Stage.COMMODITY, Classification.BUY, 85, 25),
    _item("network-comms", "Network & Communications",
          "Basic networking infrastructure",
          Stage.COMMODITY, Classification.BUY, 90, 15),
    _item("trust-framework", "Trust & Transparency Framework",
          "System for ensuring ethical AI operations",
          Stage.GENESIS, Classification.BUILD, 20, 40),
    _item("elf-dashboard", "ELF Operations Dashboard",
          "Monitoring and control interface",
          Stage.CUSTOM, Classification.BUILD, 45, 60),
    _item("coordination-centre", "Multi-Agent Coordination Centre",
          "Central hub for agent communication",
          Stage.CUSTOM, Classification.BUILD, 38, 35),
)

# Item whose placement the cloud-wisdom achievement checks.
COMMODITY_ITEM_ID = "cloud-compute"

REFERENCE_RELATIONSHIPS: Tuple[Tuple[str, str], ...] = (
    ("mince-pie-delivery", "elf-dashboard"),
    ("mince-pie-delivery", "delivery-routing"),
    ("elf-dashboard", "orchestration-framework"),
    ("delivery-routing", "cloud-compute"),
    ("ai-recipe-generator", "foundational-ai"),
    ("orchestration-framework", "coordination-centre"),
    ("orchestration-framework", "foundational-ai"),
    ("foundational-ai", "cloud-compute"),
    ("cloud-compute", "network-comms"),
    ("coordination-centre", "cloud-compute"),
    ("encounter-agents", "orchestration-framework"),
    ("trust-framework", "orchestration-framework"),
)


def reference_keys(pairs=REFERENCE_RELATIONSHIPS) -> FrozenSet[PairKey]:
    return frozenset(pair_key(a, b) for a, b in pairs)


def new_items() -> List[Item]:
    """Fresh, unplaced copies of the reference item set."""
    return [deepcopy(item) for item in REFERENCE_ITEMS]


__all__ = [
    "COMMODITY_ITEM_ID",
    "EVOLUTION_STAGES",
    "REFERENCE_ITEMS",
    "REFERENCE_RELATIONSHIPS",
    "StageConfig",
    "new_items",
    "reference_keys",
    "stage_from_x",
]
