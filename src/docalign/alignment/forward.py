"""Forward Mapper - resolve excerpt text to highlight bounds."""

import logging
from itertools import groupby
from operator import attrgetter
from typing import Optional, Sequence

from docalign.config import settings
from docalign.models import (
    AnnotatedDocument,
    Bounds,
    CitationRegionsPerPage,
    PolygonOnPage,
    TextLocation,
)

from .geometry import BOTTOM, TOP, flatten_polygon
from .locate import TextLocator, WordSequenceLocator

logger = logging.getLogger(__name__)


def group_by_page(location: TextLocation) -> list[CitationRegionsPerPage]:
    """Group located fragments by page, then by paragraph.

    Arrival order is kept within a page: a new group starts whenever the
    paragraph differs from the previous fragment on that page. Pages are
    sorted ascending.
    """
    pages: dict[int, list[PolygonOnPage]] = {}
    for fragment in location.polygons:
        pages.setdefault(fragment.page, []).append(fragment)

    results = [
        CitationRegionsPerPage(
            page=page,
            citation_regions=[
                [fragment.polygon for fragment in group]
                for _, group in groupby(fragments, key=attrgetter("paragraph_index"))
            ],
        )
        for page, fragments in pages.items()
    ]
    results.sort(key=lambda result: result.page)
    return results


def _bottom(polygon: Sequence[float]) -> float:
    return max(polygon[BOTTOM], polygon[7])


def _top(polygon: Sequence[float]) -> float:
    return min(polygon[TOP], polygon[3])


def _set_bottom(polygon: list[float], y: float) -> None:
    polygon[BOTTOM] = y
    polygon[7] = y


def _set_top(polygon: list[float], y: float) -> None:
    polygon[TOP] = y
    polygon[3] = y


def regions_to_bounds(
    citation_regions_per_page: Sequence[CitationRegionsPerPage],
    force_overlap: bool = False,
) -> list[Bounds]:
    """Convert grouped complex polygons into one ``Bounds`` per part.

    With ``force_overlap``, gaps between consecutive lines are closed: the
    head reaches down to the tail when there is no body, otherwise the body
    is stretched up to the head and down to the tail. Edges that already
    overlap are never shrunk. The tail is only flattened.
    """
    bounds: list[Bounds] = []

    for group in citation_regions_per_page:
        for region in group.citation_regions:
            for complex_polygon in region:
                head = complex_polygon.head
                body = complex_polygon.body
                tail = complex_polygon.tail

                if head:
                    modified_head = list(head)
                    if force_overlap and not body and tail:
                        tail_top = _top(tail)
                        if _bottom(modified_head) < tail_top:
                            _set_bottom(modified_head, tail_top)
                    bounds.append(Bounds(page_number=group.page, polygon=modified_head))

                if body:
                    modified_body = list(body)
                    if force_overlap:
                        if head:
                            head_bottom = _bottom(head)
                            if head_bottom < _top(modified_body):
                                _set_top(modified_body, head_bottom)
                        if tail:
                            tail_top = _top(tail)
                            if _bottom(modified_body) < tail_top:
                                _set_bottom(modified_body, tail_top)
                    bounds.append(Bounds(page_number=group.page, polygon=modified_body))

                if tail:
                    bounds.append(
                        Bounds(page_number=group.page, polygon=flatten_polygon(tail))
                    )

    return bounds


def locate_text(
    text: str,
    document: AnnotatedDocument,
    locator: Optional[TextLocator] = None,
    force_overlap: Optional[bool] = None,
) -> list[Bounds]:
    """Find the highlight bounds of ``text`` in ``document``.

    Args:
        text: Excerpt to locate.
        document: Preprocessed document.
        locator: Text-locate collaborator (default: WordSequenceLocator).
        force_overlap: Close gaps between lines (default from settings).

    Returns:
        Bounds sorted by page; empty when the text is not found.
    """
    if locator is None:
        locator = WordSequenceLocator()
    if force_overlap is None:
        force_overlap = settings.force_overlap

    location = locator.locate(text, document)
    if not location.found or not location.excerpt.strip():
        logger.info("no match: %r", text)
        return []

    logger.debug("match: %r -> %d fragments", text, len(location.polygons))
    return regions_to_bounds(group_by_page(location), force_overlap)
