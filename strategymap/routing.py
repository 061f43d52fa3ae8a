"""Connector geometry between fixed-size boxes on the canvas.

A connector starts at the source box center and stops ``clearance`` pixels
short of the target box border so an arrowhead drawn at the end point does not
overlap the box.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .config import RouterConfig, get_router_config
from .logging_utils import apply_debug_logging
from .math_utils import Point, _DENOM_EPS, _midpoint2, _unit2, _vec2
from .model import Item, Position, Relationship

logger = logging.getLogger(__name__)


@dataclass
class RoutedConnector:
    relationship: Relationship
    start: Point
    end: Point

    @property
    def path(self) -> str:
        return connector_path(self.start, self.end)


def _edge_intersection(
    direction: Point, center: Point, half_width: float, half_height: float
) -> Point:
    """Where a ray travelling along ``direction`` enters the box at ``center``."""

    ux, uy = direction
    theta = math.atan2(uy, ux)
    corner = math.atan2(half_height, half_width)
    cx, cy = center

    if abs(theta) < corner:
        # travelling right: enters through the box's left side
        x = cx - half_width
        y = cy - half_width * _guarded_tan(uy, ux)
    elif abs(theta) > math.pi - corner:
        # travelling left: enters through the right side
        x = cx + half_width
        y = cy + half_width * _guarded_tan(uy, ux)
    elif theta > 0:
        # travelling down (screen coordinates): enters through the top
        y = cy - half_height
        x = cx - half_height * _guarded_tan(ux, uy)
    else:
        y = cy + half_height
        x = cx + half_height * _guarded_tan(ux, uy)
    return x, y


def _guarded_tan(num: float, denom: float) -> float:
    # num / denom is tan(theta) or its reciprocal; a vanishing denominator only
    # happens for axis-aligned rays hitting a degenerate box.
    if abs(denom) <= _DENOM_EPS:
        return 0.0
    return num / denom


def route(
    from_center: Point,
    to_center: Point,
    box_width: float,
    box_height: float,
    clearance: float,
) -> Tuple[Point, Point]:
    """Return the ``(start, end)`` points of a connector between two boxes.

    ``start`` is ``from_center`` unchanged. ``end`` is where the ray from
    ``from_center`` towards ``to_center`` crosses the target box border,
    pulled back by ``clearance`` along the ray. Coincident centers route as if
    the ray pointed along +x.
    """

    start = (float(from_center[0]), float(from_center[1]))
    target = (float(to_center[0]), float(to_center[1]))
    direction = _unit2(_vec2(start, target))
    half_width = box_width / 2.0
    half_height = box_height / 2.0

    ix, iy = _edge_intersection(direction, target, half_width, half_height)
    end = (ix - direction[0] * clearance, iy - direction[1] * clearance)
    return start, end


def canvas_center(position: Position, canvas_width: float, canvas_height: float) -> Point:
    """Convert a normalised 0..100 position into canvas pixels."""

    return position.x / 100.0 * canvas_width, position.y / 100.0 * canvas_height


def connector_path(start: Point, end: Point) -> str:
    """Quadratic Bezier SVG path with its control point at the midpoint."""

    mx, my = _midpoint2(start, end)
    return f"M {start[0]:g} {start[1]:g} Q {mx:g} {my:g} {end[0]:g} {end[1]:g}"


def route_relationships(
    items: Sequence[Item],
    relationships: Sequence[Relationship],
    canvas_width: float,
    canvas_height: float,
    *,
    config: Optional[RouterConfig] = None,
) -> List[RoutedConnector]:
    """Route every relationship whose endpoints are both placed."""

    cfg = config if config is not None else get_router_config()
    centers: Dict[str, Point] = {
        item.id: canvas_center(item.position, canvas_width, canvas_height)
        for item in items
        if item.on_map
    }

    routed: List[RoutedConnector] = []
    for rel in relationships:
        if rel.source not in centers or rel.target not in centers:
            logger.debug("Skipping relationship %s: endpoint not on the canvas", rel.id)
            continue
        start, end = route(
            centers[rel.source],
            centers[rel.target],
            cfg.box_width,
            cfg.box_height,
            cfg.clearance,
        )
        routed.append(RoutedConnector(relationship=rel, start=start, end=end))

    logger.info("Routed %d of %d relationship(s)", len(routed), len(relationships))
    return routed


__all__ = [
    "RoutedConnector",
    "canvas_center",
    "connector_path",
    "route",
    "route_relationships",
]


apply_debug_logging(globals(), logger=logger)
