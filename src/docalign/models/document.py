"""Document structure models.

Mirrors the layout-analysis response consumed by the engine: pages carry
words and lines, the analyze result carries paragraphs that reference pages
through their bounding regions. Offsets are document-global and increase
with reading order.
"""

from typing import Any, Optional

from pydantic import Field

from docalign.errors import PageNotFoundError

from .base import BaseDIModel, BoundingRegion, Polygon, QuadPolygon, Span


class Word(BaseDIModel):
    """Single recognized token."""

    content: str
    polygon: QuadPolygon
    span: Span
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)


class Line(BaseDIModel):
    """Visual line of text, possibly made of several discontiguous spans."""

    content: str
    polygon: QuadPolygon
    spans: list[Span] = Field(..., min_length=1)

    @property
    def offset(self) -> int:
        """Offset of the line's first span."""
        return self.spans[0].offset

    @property
    def end(self) -> int:
        """Exclusive end of the line's first span."""
        return self.spans[0].end


class Paragraph(BaseDIModel):
    """Semantic block of text, possibly spanning several pages."""

    content: str
    spans: list[Span] = Field(default_factory=list)
    bounding_regions: list[BoundingRegion] = Field(
        default_factory=list, alias="boundingRegions"
    )
    role: Optional[str] = Field(None, description="e.g. 'title', 'pageHeader'")

    @property
    def offset_range(self) -> Optional[tuple[int, int]]:
        """Half-open (start, end) covering all spans, or None without spans."""
        if not self.spans:
            return None
        return (
            min(span.offset for span in self.spans),
            max(span.end for span in self.spans),
        )

    def polygon_on_page(self, page_number: int) -> Optional[Polygon]:
        """Return the paragraph's polygon on the given page, if any."""
        for region in self.bounding_regions:
            if region.page_number == page_number:
                return region.polygon
        return None


class Page(BaseDIModel):
    """Single page with its words and lines in reading order."""

    page_number: int = Field(..., ge=1, alias="pageNumber", description="1-indexed")
    angle: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    unit: Optional[str] = Field(None, description="'inch' or 'pixel'")
    words: list[Word] = Field(default_factory=list)
    lines: list[Line] = Field(default_factory=list)
    spans: list[Span] = Field(default_factory=list)


class AnalyzeResult(BaseDIModel):
    """Layout analysis payload."""

    api_version: Optional[str] = Field(None, alias="apiVersion")
    model_id: Optional[str] = Field(None, alias="modelId")
    string_index_type: Optional[str] = Field(None, alias="stringIndexType")
    content: Optional[str] = None
    pages: list[Page] = Field(default_factory=list)
    paragraphs: list[Paragraph] = Field(default_factory=list)
    tables: list[dict[str, Any]] = Field(default_factory=list)
    styles: list[dict[str, Any]] = Field(default_factory=list)


class DocIntResponse(BaseDIModel):
    """
    Top-level document as returned by the extraction service.

    Received once per loaded document and never modified afterwards.
    """

    status: Optional[str] = None
    created_date_time: Optional[str] = Field(None, alias="createdDateTime")
    last_updated_date_time: Optional[str] = Field(None, alias="lastUpdatedDateTime")
    analyze_result: AnalyzeResult = Field(..., alias="analyzeResult")

    @property
    def pages(self) -> list[Page]:
        return self.analyze_result.pages

    @property
    def paragraphs(self) -> list[Paragraph]:
        return self.analyze_result.paragraphs

    def get_page(self, page_number: int) -> Page:
        """Return a page by its 1-indexed number.

        Raises:
            PageNotFoundError: If the document has no such page.
        """
        pages = self.pages
        if 1 <= page_number <= len(pages):
            page = pages[page_number - 1]
            if page.page_number == page_number:
                return page
        for page in pages:
            if page.page_number == page_number:
                return page
        raise PageNotFoundError(page_number, len(pages))


class Region(BaseDIModel):
    """
    One paragraph's footprint on one page.

    Index ranges are inclusive; an empty range has ``last == first - 1``.
    """

    polygon: Polygon
    line_indices: tuple[int, int] = Field(..., alias="lineIndices")
    word_indices: tuple[int, int] = Field(..., alias="wordIndices")
    paragraph_index: int = Field(..., ge=0, alias="paragraphIndex")

    @property
    def word_count(self) -> int:
        return self.word_indices[1] - self.word_indices[0] + 1

    @property
    def line_count(self) -> int:
        return self.line_indices[1] - self.line_indices[0] + 1


class AnnotatedPage(Page):
    """Page with its paragraph regions attached."""

    regions: list[Region] = Field(default_factory=list)

    def region_for_paragraph(self, paragraph_index: int) -> Optional[Region]:
        """Return the region of the given paragraph on this page."""
        for region in self.regions:
            if region.paragraph_index == paragraph_index:
                return region
        return None


class AnnotatedAnalyzeResult(AnalyzeResult):
    """Analyze result whose pages carry regions."""

    pages: list[AnnotatedPage] = Field(default_factory=list)


class AnnotatedDocument(DocIntResponse):
    """Document produced by preprocessing; every page carries regions."""

    analyze_result: AnnotatedAnalyzeResult = Field(..., alias="analyzeResult")

    @property
    def pages(self) -> list[AnnotatedPage]:
        return self.analyze_result.pages

    def get_page(self, page_number: int) -> AnnotatedPage:
        return super().get_page(page_number)
