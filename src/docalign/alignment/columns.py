"""Column partitioning of a page's lines.

Reading order stops being a single sorted sequence once a page has several
visual columns, so spatial queries first pick the relevant columns and only
search inside each.
"""

import logging
from typing import Optional, Sequence

from docalign.config import settings
from docalign.models import Column, Line, Polygon

from .geometry import adjacent, overlaps, union_polygon

logger = logging.getLogger(__name__)


def split_into_columns(
    lines: Sequence[Line], delta: Optional[float] = None
) -> list[Column]:
    """Split reading-order lines into columns of mutually adjacent lines.

    A new column starts wherever a line is not adjacent to the one before it.
    Each column's polygon is the union of all its lines, so a short header or
    last line does not narrow it.

    Args:
        lines: Page lines in reading order.
        delta: Adjacency tolerance (default from settings).

    Returns:
        Columns in reading order. No lines yields a single empty column.
    """
    if delta is None:
        delta = settings.column_delta

    if not lines:
        return [Column(polygon=[], lines=[])]

    columns: list[Column] = []
    first_line = 0
    for current in range(len(lines)):
        is_last = current == len(lines) - 1
        if is_last or not adjacent(lines[current + 1].polygon, lines[current].polygon, delta):
            column_lines = list(lines[first_line:current + 1])
            columns.append(
                Column(
                    polygon=union_polygon(line.polygon for line in column_lines),
                    lines=column_lines,
                )
            )
            first_line = current + 1

    logger.debug("split %d lines into %d columns", len(lines), len(columns))
    for index, column in enumerate(columns):
        logger.debug(
            'col [%d]: "%s" ... %d lines ... "%s"',
            index,
            column.lines[0].content,
            len(column.lines),
            column.lines[-1].content,
        )
    return columns


def relevant_columns(columns: Sequence[Column], polygon: Polygon) -> list[Column]:
    """Columns whose bounding polygon intersects ``polygon``."""
    return [
        column
        for column in columns
        if column.polygon and overlaps(column.polygon, polygon)
    ]
