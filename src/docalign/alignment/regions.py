"""Region Preprocessor - attach paragraph footprints to every page.

For each paragraph present on a page, computes the inclusive ranges of the
page's lines and words that fall inside the paragraph's offset span. The
paragraph's own bounding polygon is reused as the region polygon.
"""

import logging
from bisect import bisect_left
from typing import Sequence

from docalign.errors import DocumentNotPreprocessedError
from docalign.models import (
    AnnotatedAnalyzeResult,
    AnnotatedDocument,
    AnnotatedPage,
    DocIntResponse,
    Page,
    Paragraph,
    Region,
)

logger = logging.getLogger(__name__)


def _index_range(offsets: Sequence[int], start: int, end: int) -> tuple[int, int]:
    """Inclusive index range of sorted ``offsets`` within ``[start, end)``.

    When nothing falls inside, the range is empty: ``last == first - 1``.
    """
    first = bisect_left(offsets, start)
    last = bisect_left(offsets, end) - 1
    return first, last


def compute_regions(page: Page, paragraphs: Sequence[Paragraph]) -> list[Region]:
    """Compute the regions of all paragraphs that appear on ``page``.

    Args:
        page: Page whose words and lines are sorted by offset.
        paragraphs: All paragraphs of the document, in document order.

    Returns:
        Regions in paragraph order. Paragraphs without a bounding region on
        this page are skipped.
    """
    word_offsets = [word.span.offset for word in page.words]
    line_offsets = [line.offset for line in page.lines]

    regions = []
    for paragraph_index, paragraph in enumerate(paragraphs):
        polygon = paragraph.polygon_on_page(page.page_number)
        if polygon is None:
            continue

        offset_range = paragraph.offset_range
        if offset_range is None:
            logger.debug(
                "paragraph %d has no spans, skipping on page %d",
                paragraph_index,
                page.page_number,
            )
            continue

        start, end = offset_range
        regions.append(
            Region(
                polygon=polygon,
                line_indices=_index_range(line_offsets, start, end),
                word_indices=_index_range(word_offsets, start, end),
                paragraph_index=paragraph_index,
            )
        )

    logger.debug("page %d: %d regions", page.page_number, len(regions))
    return regions


def annotate_page(page: Page, paragraphs: Sequence[Paragraph]) -> AnnotatedPage:
    """Return a copy of ``page`` carrying its regions."""
    fields = dict(page)
    fields["regions"] = compute_regions(page, paragraphs)
    return AnnotatedPage(**fields)


def preprocess(document: DocIntResponse) -> AnnotatedDocument:
    """Attach paragraph regions to every page of ``document``.

    The input is left untouched. Preprocessing an already annotated document
    recomputes identical regions.
    """
    result = document.analyze_result
    pages = [annotate_page(page, result.paragraphs) for page in result.pages]

    result_fields = dict(result)
    result_fields["pages"] = pages
    document_fields = dict(document)
    document_fields["analyze_result"] = AnnotatedAnalyzeResult(**result_fields)
    return AnnotatedDocument(**document_fields)


def require_annotated(document: DocIntResponse) -> AnnotatedDocument:
    """Return ``document`` if it carries regions.

    Raises:
        DocumentNotPreprocessedError: If ``preprocess`` was never applied.
    """
    if not isinstance(document, AnnotatedDocument):
        raise DocumentNotPreprocessedError()
    return document
