"""Data models for the alignment engine.

Raw document models mirror the layout-analysis response and are loaded once
per document. Annotated variants add the per-page paragraph regions computed
by preprocessing. Selection models are created per query and discarded.

Model Hierarchy:
- DocIntResponse → AnalyzeResult → Pages → Words / Lines
- DocIntResponse → AnalyzeResult → Paragraphs → BoundingRegions
- AnnotatedDocument → AnnotatedPages → Regions
"""

from .base import (
    BaseDIModel,
    BoundingRegion,
    Point,
    Polygon,
    QuadPolygon,
    Span,
)
from .document import (
    AnalyzeResult,
    AnnotatedAnalyzeResult,
    AnnotatedDocument,
    AnnotatedPage,
    DocIntResponse,
    Line,
    Page,
    Paragraph,
    Region,
    Word,
)
from .selection import (
    Bounds,
    CitationRegionsPerPage,
    Column,
    ComplexPolygon,
    PolygonOnPage,
    ScreenRect,
    Selection,
    TextLocation,
    ViewportContext,
)

__all__ = [
    # Base types
    "BaseDIModel",
    "BoundingRegion",
    "Point",
    "Polygon",
    "QuadPolygon",
    "Span",
    # Document
    "AnalyzeResult",
    "DocIntResponse",
    "Line",
    "Page",
    "Paragraph",
    "Word",
    # Preprocessed
    "AnnotatedAnalyzeResult",
    "AnnotatedDocument",
    "AnnotatedPage",
    "Region",
    # Selection and highlight geometry
    "Bounds",
    "CitationRegionsPerPage",
    "Column",
    "ComplexPolygon",
    "PolygonOnPage",
    "ScreenRect",
    "Selection",
    "TextLocation",
    "ViewportContext",
]
