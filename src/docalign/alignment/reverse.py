"""Reverse Mapper - resolve selection geometry to excerpt text.

Two entry points:
- complex polygons (free-form text selections) go through the precomputed
  paragraph regions: find the owning paragraph, then the words it covers;
- plain bounds (drawn boxes) go through column partitioning and binary
  search over lines, then words.
"""

import logging
from typing import Optional, Sequence

from docalign.config import MatchTolerances, settings
from docalign.models import AnnotatedDocument, Bounds, ComplexPolygon, DocIntResponse, Word

from .columns import relevant_columns, split_into_columns
from .geometry import adjacent, on_same_line, overlaps
from .regions import require_annotated
from .search import offset_binary_search, polygon_binary_search

logger = logging.getLogger(__name__)


def resolve_paragraph(
    document: AnnotatedDocument,
    page_number: int,
    complex_polygon: ComplexPolygon,
    tolerances: Optional[MatchTolerances] = None,
) -> Optional[int]:
    """Find the paragraph whose region a selection falls in.

    Each part of the selection is tested against every region on the page
    for same-line overlap and adjacency. A selection is expected to hit
    exactly one region; when it hits several, the smallest paragraph index
    wins.

    Returns:
        The paragraph index, or None when no region matches.
    """
    tolerances = tolerances or settings.tolerances
    page = require_annotated(document).get_page(page_number)
    parts = complex_polygon.parts()

    found = sorted(
        {
            region.paragraph_index
            for region in page.regions
            if any(
                on_same_line(part, region.polygon, tolerances.paragraph_same_line)
                and adjacent(part, region.polygon, tolerances.paragraph_delta)
                for _, part in parts
            )
        }
    )

    if not found:
        logger.warning(
            "selection on page %d intersects no paragraph region", page_number
        )
        return None
    if len(found) > 1:
        logger.warning(
            "selection on page %d intersects several paragraph regions %s, using %d",
            page_number,
            found,
            found[0],
        )
    return found[0]


def extract_words(
    document: AnnotatedDocument,
    page_number: int,
    paragraph_index: Optional[int],
    complex_polygon: ComplexPolygon,
    tolerances: Optional[MatchTolerances] = None,
) -> str:
    """Rebuild the text a selection covers within one paragraph.

    Candidate words are restricted to the paragraph's region. A word is kept
    when it is adjacent to and on the same line as any part of the
    selection; partial lines (head, tail) use tighter adjacency than the body.

    Returns:
        Matching words joined by single spaces, in offset order.
    """
    tolerances = tolerances or settings.tolerances
    page = require_annotated(document).get_page(page_number)
    if paragraph_index is None:
        return ""

    region = page.region_for_paragraph(paragraph_index)
    if region is None:
        logger.warning(
            "paragraph %d has no region on page %d", paragraph_index, page_number
        )
        return ""

    first, last = region.word_indices
    candidates = page.words[first:last + 1]
    parts = complex_polygon.parts()

    accepted: list[Word] = [
        word
        for word in candidates
        if any(
            adjacent(word.polygon, part, tolerances.word_delta(name))
            and on_same_line(word.polygon, part, tolerances.word_same_line)
            for name, part in parts
        )
    ]
    logger.debug(
        "paragraph %d: %d of %d words selected",
        paragraph_index,
        len(accepted),
        len(candidates),
    )
    return " ".join(word.content for word in accepted)


def find_text_from_bounds(
    document: DocIntResponse,
    bounds: Sequence[Bounds],
    tolerances: Optional[MatchTolerances] = None,
) -> str:
    """Rebuild the text inside drawn boxes.

    For each bound, the page's lines are split into columns; each column the
    bound touches is binary-searched for intersecting lines, whose offset
    range is then binary-searched among the page's words. Words are kept
    when their own polygon intersects the bound. Column splitting uses
    ``tolerances.column_delta``.

    Returns:
        Matching words of all bounds joined by single spaces; empty when
        nothing matches.
    """
    tolerances = tolerances or settings.tolerances
    excerpt_words: list[Word] = []
    for bound in bounds:
        polygon = bound.polygon
        logger.debug(
            "searching for bounds x(%s,%s) y(%s,%s)",
            polygon[0],
            polygon[2],
            polygon[1],
            polygon[5],
        )
        page = document.get_page(bound.page_number)

        columns = split_into_columns(page.lines, tolerances.column_delta)
        columns_to_search = relevant_columns(columns, polygon)
        if not columns_to_search:
            logger.debug("no relevant columns to search")
            continue

        intersecting_lines = []
        for column in columns_to_search:
            intersecting_lines.extend(polygon_binary_search(column.lines, polygon))
        if not intersecting_lines:
            continue

        offset_start = intersecting_lines[0].offset
        offset_end = intersecting_lines[-1].end
        logger.debug("offset range for search: %d %d", offset_start, offset_end)

        candidates = offset_binary_search(page.words, (offset_start, offset_end))
        excerpt_words.extend(
            word for word in candidates if overlaps(word.polygon, polygon)
        )

    return " ".join(word.content for word in excerpt_words)
