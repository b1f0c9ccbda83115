"""Geometry and offset primitives.

Polygons are treated as axis-aligned rectangles: comparisons read only the
left (index 0), right (2), top (1) and bottom (5) coordinates.
"""

import math
from typing import Iterable, Sequence

from docalign.models import Point, Polygon

LEFT = 0
TOP = 1
RIGHT = 2
BOTTOM = 5


def round_half_up(value: float, precision: int = 0) -> float:
    """Round to ``precision`` decimals, halves rounding towards +infinity."""
    multiplier = 10**precision
    return math.floor(value * multiplier + 0.5) / multiplier


def rectangle(left: float, top: float, right: float, bottom: float) -> Polygon:
    """Build an 8-value polygon from edge coordinates."""
    return [left, top, right, top, right, bottom, left, bottom]


def adjacent(poly_a: Sequence[float], poly_b: Sequence[float], delta: float = 0.2) -> bool:
    """Return True if the polygons overlap or lie within ``delta`` on both axes.

    Edges are rounded to one decimal first. A negative ``delta`` demands
    overlap deeper than ``-delta``.
    """
    ax = (round_half_up(poly_a[LEFT], 1), round_half_up(poly_a[RIGHT], 1))
    ay = (round_half_up(poly_a[TOP], 1), round_half_up(poly_a[BOTTOM], 1))
    bx = (round_half_up(poly_b[LEFT], 1), round_half_up(poly_b[RIGHT], 1))
    by = (round_half_up(poly_b[TOP], 1), round_half_up(poly_b[BOTTOM], 1))

    # Disjoint when one minimum exceeds the other's maximum on some axis
    no_overlap = (
        ax[0] > bx[1] + delta
        or bx[0] > ax[1] + delta
        or ay[0] > by[1] + delta
        or by[0] > ay[1] + delta
    )
    return not no_overlap


def on_same_line(
    poly_a: Sequence[float],
    poly_b: Sequence[float],
    min_overlap_fraction: float = 0.9,
) -> bool:
    """Return True if vertical extents overlap by at least the given fraction
    of the shorter polygon's height."""
    overlap = min(poly_a[BOTTOM], poly_b[BOTTOM]) - max(poly_a[TOP], poly_b[TOP])
    shorter = min(poly_a[BOTTOM] - poly_a[TOP], poly_b[BOTTOM] - poly_b[TOP])
    return overlap >= min_overlap_fraction * shorter


def compare_polygons(poly: Sequence[float], ref_poly: Sequence[float]) -> int:
    """Compare ``poly`` against ``ref_poly`` in reading order.

    Returns:
        -1 if poly is entirely above, 1 if entirely below; otherwise -2 if
        entirely left, 2 if entirely right, and 0 when they overlap.
    """
    if poly[BOTTOM] < ref_poly[TOP]:
        return -1
    if poly[TOP] > ref_poly[BOTTOM]:
        return 1

    if poly[RIGHT] < ref_poly[LEFT]:
        return -2
    if poly[LEFT] > ref_poly[RIGHT]:
        return 2

    return 0


def compare_offsets(offset_range: Sequence[int], ref_offset: int) -> int:
    """Compare an inclusive offset range against a single offset.

    Returns:
        -1 if the range ends before ``ref_offset``, 1 if it starts after,
        0 if it contains or touches it.
    """
    if offset_range[1] < ref_offset:
        return -1
    if offset_range[0] > ref_offset:
        return 1
    return 0


def union_polygon(polygons: Iterable[Sequence[float]]) -> Polygon:
    """Bounding rectangle of all polygons; empty input gives ``[]``."""
    polygons = [p for p in polygons if p]
    if not polygons:
        return []
    left = min(min(p[0::2]) for p in polygons)
    right = max(max(p[0::2]) for p in polygons)
    top = min(min(p[1::2]) for p in polygons)
    bottom = max(max(p[1::2]) for p in polygons)
    return rectangle(left, top, right, bottom)


def flatten_polygon(polygon: Sequence[float]) -> Polygon:
    """Axis-aligned rectangle enclosing a quadrilateral."""
    return union_polygon([polygon])


def polygon_from_points(start: Point, end: Point) -> Polygon:
    """Rectangle spanned by two opposite corners, in any drag direction."""
    return rectangle(
        min(start.x, end.x),
        min(start.y, end.y),
        max(start.x, end.x),
        max(start.y, end.y),
    )


def overlaps(poly_a: Sequence[float], poly_b: Sequence[float]) -> bool:
    """True if the two rectangles intersect or touch."""
    return compare_polygons(poly_a, poly_b) == 0
