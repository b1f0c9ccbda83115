"""Combine raw selection rectangles into complex polygons.

Rectangles arrive in selection order (one or more per visual line). Those on
the same line are merged into line boxes; vertically stacked line boxes are
grouped and shaped into head/body/tail.
"""

from typing import Protocol, Sequence

from docalign.models import ComplexPolygon, Polygon

from .geometry import adjacent, flatten_polygon, on_same_line, union_polygon
from .locate import build_complex_polygon


class RectangleCombiner(Protocol):
    """Collaborator grouping rectangles into complex polygons."""

    def __call__(self, rectangles: Sequence[Polygon]) -> list[ComplexPolygon]:
        ...


def combine_rectangles(
    rectangles: Sequence[Polygon],
    line_overlap: float = 0.5,
    stack_delta: float = 0.2,
) -> list[ComplexPolygon]:
    """Group page-space rectangles into complex polygons.

    Args:
        rectangles: Selection rectangles in selection order.
        line_overlap: Vertical overlap fraction for two rectangles to share
            a line.
        stack_delta: Adjacency tolerance between consecutive line boxes of
            one group, and between rectangles merged into one line.

    Returns:
        One complex polygon per group of stacked lines, in input order.
    """
    lines: list[Polygon] = []
    for rect in rectangles:
        if not rect:
            continue
        rect = flatten_polygon(rect)
        if (
            lines
            and on_same_line(rect, lines[-1], line_overlap)
            and adjacent(rect, lines[-1], stack_delta)
        ):
            lines[-1] = union_polygon([lines[-1], rect])
        else:
            lines.append(rect)

    groups: list[list[Polygon]] = []
    for line in lines:
        if groups and adjacent(line, groups[-1][-1], stack_delta):
            groups[-1].append(line)
        else:
            groups.append([line])

    return [build_complex_polygon(group) for group in groups]
