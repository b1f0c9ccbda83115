"""Base models and common types for the alignment engine."""

from typing import Annotated

from pydantic import BaseModel, Field

Polygon = list[float]
"""Quadrilateral as eight numbers (TL, TR, BR, BL corners), in inches."""

QuadPolygon = Annotated[list[float], Field(min_length=8, max_length=8)]


class BaseDIModel(BaseModel):
    """Base class for document structure and geometry models.

    Fields accept either the extraction service's camelCase keys or their
    snake_case names. Instances are immutable once loaded.
    """

    class Config:
        populate_by_name = True
        frozen = True


class Span(BaseDIModel):
    """Half-open range in the document's text-offset space (UTF-16 units)."""

    offset: int = Field(..., ge=0)
    length: int = Field(..., ge=0)

    @property
    def end(self) -> int:
        """Exclusive end offset."""
        return self.offset + self.length


class Point(BaseDIModel):
    """Point in page space."""

    x: float
    y: float


class BoundingRegion(BaseDIModel):
    """Polygon of an element on one page."""

    page_number: int = Field(..., ge=1, alias="pageNumber")
    polygon: QuadPolygon
