"""Binary search for the contiguous run of entries matching a query.

The sequence must be ordered so that, relative to the query, every entry
comparing below precedes every matching entry, which precede every entry
comparing above. Reading-order lines within one column and offset-sorted
words within one page both satisfy this.
"""

import logging
from typing import Callable, NamedTuple, Optional, Sequence, TypeVar

from docalign.models import Line, Polygon, Word

from .geometry import compare_offsets, compare_polygons

logger = logging.getLogger(__name__)

T = TypeVar("T")
Q = TypeVar("Q")


class IndexRange(NamedTuple):
    """Inclusive range of matching indices."""

    first: int
    last: int

    @property
    def size(self) -> int:
        return self.last - self.first + 1


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def binary_search_range(
    items: Sequence[T],
    query: Q,
    compare: Callable[[Q, T], int],
    start: int = 0,
    end: Optional[int] = None,
) -> Optional[IndexRange]:
    """Find the contiguous run of ``items[start:end]`` comparing equal to ``query``.

    Args:
        items: Sequence ordered consistently with ``compare``.
        query: Value to locate.
        compare: ``compare(query, item)``; negative when the query comes
            before the item, positive when after, zero on overlap. Only the
            sign is used.
        start: First index of the search window.
        end: Exclusive end of the window; defaults to ``len(items)``.

    Returns:
        The inclusive index range of matches, or None when nothing matches.
    """
    if end is None:
        end = len(items)
    low, high = start, end

    while low < high:
        axis = low + (high - low) // 2
        order = _sign(compare(query, items[axis]))
        logger.debug("search | axis [%d] order %d", axis, order)

        if order < 0:
            high = axis
        elif order > 0:
            low = axis + 1
        else:
            first = axis
            while first > start and compare(query, items[first - 1]) == 0:
                first -= 1
            last = axis
            while last < end - 1 and compare(query, items[last + 1]) == 0:
                last += 1
            return IndexRange(first, last)

    logger.debug("search | no further entries to search")
    return None


def polygon_binary_search(lines: Sequence[Line], polygon: Polygon) -> list[Line]:
    """Lines of a single column that intersect ``polygon``."""
    match = binary_search_range(
        lines, polygon, lambda poly, line: compare_polygons(poly, line.polygon)
    )
    if match is None:
        return []
    return list(lines[match.first:match.last + 1])


def offset_binary_search(
    words: Sequence[Word], offset_range: Sequence[int]
) -> list[Word]:
    """Words whose start offset lies within the inclusive ``offset_range``."""
    match = binary_search_range(
        words, offset_range, lambda rng, word: compare_offsets(rng, word.span.offset)
    )
    if match is None:
        return []
    return list(words[match.first:match.last + 1])
