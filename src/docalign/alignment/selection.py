"""Selection Pipeline - turn a raw user selection into excerpt and bounds.

The drawn geometry is only used to find the excerpt text; the returned
bounds are re-derived from that text so highlights always snap to the
document's recognized word and line boxes.
"""

import logging
from typing import Optional, Sequence

from docalign.config import MatchTolerances, settings
from docalign.models import (
    AnnotatedDocument,
    Bounds,
    Point,
    Polygon,
    ScreenRect,
    Selection,
    ViewportContext,
)

from .combine import RectangleCombiner, combine_rectangles
from .forward import locate_text
from .geometry import polygon_from_points, rectangle, round_half_up
from .locate import TextLocator
from .regions import require_annotated
from .reverse import extract_words, find_text_from_bounds, resolve_paragraph

logger = logging.getLogger(__name__)


def screen_rects_to_polygons(
    rects: Sequence[ScreenRect],
    viewport: ViewportContext,
    precision: Optional[int] = None,
) -> list[Polygon]:
    """Convert pixel rectangles to page-space polygons.

    Rectangles without width are dropped. Coordinates are shifted by the
    viewport offsets, divided by its multiplier and rounded.
    """
    if precision is None:
        precision = settings.coordinate_precision

    def to_x(value: float) -> float:
        return round_half_up((value - viewport.dx) / viewport.multiplier, precision)

    def to_y(value: float) -> float:
        return round_half_up((value - viewport.dy) / viewport.multiplier, precision)

    return [
        rectangle(to_x(rect.x), to_y(rect.y), to_x(rect.right), to_y(rect.bottom))
        for rect in rects
        if rect.width > 0
    ]


def selection_bounding_polygon(
    rect: ScreenRect, viewport: ViewportContext
) -> Optional[Polygon]:
    """Page-space polygon of a selection's overall bounding rectangle.

    Returns:
        The unrounded polygon, or None when the rectangle lies entirely
        above or entirely left of the page.
    """
    top = (rect.y - viewport.dy) / viewport.multiplier
    bottom = (rect.bottom - viewport.dy) / viewport.multiplier
    left = (rect.x - viewport.dx) / viewport.multiplier
    right = (rect.right - viewport.dx) / viewport.multiplier

    if top < 0 and bottom < 0:
        return None
    if left < 0 and right < 0:
        return None
    return rectangle(left, top, right, bottom)


def resolve_selection(
    page_number: int,
    screen_rects: Sequence[ScreenRect],
    document: AnnotatedDocument,
    viewport: ViewportContext,
    combiner: Optional[RectangleCombiner] = None,
    locator: Optional[TextLocator] = None,
    tolerances: Optional[MatchTolerances] = None,
) -> Selection:
    """Resolve a browser text selection on one page.

    Args:
        page_number: 1-indexed page the selection was made on.
        screen_rects: Client rectangles of the selection, in pixels.
        document: Preprocessed document.
        viewport: Pixel to page-space offsets and scale.
        combiner: Geometry-combination collaborator.
        locator: Text-locate collaborator.
        tolerances: Matching thresholds (default from settings).

    Returns:
        The excerpt and its canonical bounds; empty when nothing matched.
    """
    document = require_annotated(document)
    document.get_page(page_number)
    if combiner is None:
        combiner = combine_rectangles

    polygons = screen_rects_to_polygons(screen_rects, viewport)
    logger.debug("selection polygons in page space: %s", polygons)

    pieces = []
    for complex_polygon in combiner(polygons):
        paragraph_index = resolve_paragraph(
            document, page_number, complex_polygon, tolerances
        )
        text = extract_words(
            document, page_number, paragraph_index, complex_polygon, tolerances
        )
        if text:
            pieces.append(text)

    excerpt = " ".join(pieces)
    bounds = locate_text(excerpt, document, locator=locator) if excerpt else []
    return Selection(excerpt=excerpt, bounds=bounds)


def resolve_box_selection(
    page_number: int,
    start: Point,
    end: Point,
    document: AnnotatedDocument,
    locator: Optional[TextLocator] = None,
    min_extent: Optional[float] = None,
    tolerances: Optional[MatchTolerances] = None,
) -> Selection:
    """Resolve a box dragged between two page-space points.

    A box no larger than ``min_extent`` on both axes is treated as a click
    and yields an empty selection. ``tolerances`` supplies the column
    adjacency used to split the page.
    """
    if min_extent is None:
        min_extent = settings.min_box_extent

    document = require_annotated(document)
    document.get_page(page_number)
    if abs(end.x - start.x) <= min_extent and abs(end.y - start.y) <= min_extent:
        return Selection()

    bound = Bounds(page_number=page_number, polygon=polygon_from_points(start, end))
    excerpt = find_text_from_bounds(document, [bound], tolerances)
    if not excerpt:
        logger.info("no text inside box on page %d", page_number)
        return Selection()

    return Selection(excerpt=excerpt, bounds=locate_text(excerpt, document, locator=locator))
