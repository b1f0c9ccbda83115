"""Geometry models exchanged with the selection and highlight layers."""

import math
from typing import Iterable, Optional

from pydantic import Field

from docalign.config import settings

from .base import BaseDIModel, Polygon
from .document import Line

PART_NAMES = ("head", "body", "tail")


class ComplexPolygon(BaseDIModel):
    """
    Selection or citation decomposed across text lines.

    ``head`` is the first partial line, ``body`` the full-width middle lines
    and ``tail`` the last partial line. Any subset may be absent.
    """

    head: Optional[Polygon] = None
    body: Optional[Polygon] = None
    tail: Optional[Polygon] = None

    def parts(self) -> list[tuple[str, Polygon]]:
        """Non-empty parts as (name, polygon) in head/body/tail order."""
        return [
            (name, polygon)
            for name, polygon in zip(PART_NAMES, (self.head, self.body, self.tail))
            if polygon
        ]

    @property
    def is_empty(self) -> bool:
        return not self.parts()


class PolygonOnPage(BaseDIModel):
    """One contiguous fragment of located text."""

    page: int = Field(..., ge=1)
    polygon: ComplexPolygon
    paragraph_index: Optional[int] = Field(None, alias="paragraphIndex")


class TextLocation(BaseDIModel):
    """Result of locating text inside a document."""

    excerpt: str = ""
    polygons: list[PolygonOnPage] = Field(default_factory=list)
    found: bool = False


class Bounds(BaseDIModel):
    """Page-scoped rectangle handed to the rendering layer."""

    page_number: int = Field(..., ge=1, alias="pageNumber")
    polygon: Polygon


class CitationRegionsPerPage(BaseDIModel):
    """Located fragments on one page, grouped by paragraph in arrival order."""

    page: int = Field(..., ge=1)
    citation_regions: list[list[ComplexPolygon]] = Field(
        default_factory=list, alias="citationRegions"
    )


class Column(BaseDIModel):
    """Lines sharing one visual column; polygon is their union box."""

    polygon: Polygon
    lines: list[Line] = Field(default_factory=list)


class ScreenRect(BaseDIModel):
    """Client rectangle of a browser selection, in pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


class ViewportContext(BaseDIModel):
    """
    Offsets and scale mapping screen pixels to page space.

    ``dx``/``dy`` hold accumulated scroll plus fixed chrome extents;
    ``multiplier`` is pixels per page-space unit and defaults to
    ``settings.pixels_per_unit``.
    """

    dx: float = 0.0
    dy: float = 0.0
    multiplier: float = Field(default_factory=lambda: settings.pixels_per_unit, gt=0)

    @classmethod
    def from_chrome(
        cls,
        scroll_x: float = 0.0,
        scroll_y: float = 0.0,
        chrome_heights: Iterable[float] = (),
        viewer_scroll_top: float = 0.0,
        sidebar_width: float = 0.0,
        panel_scroll_left: float = 0.0,
        multiplier: Optional[float] = None,
    ) -> "ViewportContext":
        """Build offsets from window scroll and surrounding chrome sizes."""
        dy = math.floor(scroll_y + 0.5) + sum(chrome_heights) - viewer_scroll_top
        dx = math.floor(scroll_x + 0.5) + sidebar_width - panel_scroll_left
        if multiplier is None:
            multiplier = settings.pixels_per_unit
        return cls(dx=dx, dy=dy, multiplier=multiplier)


class Selection(BaseDIModel):
    """Excerpt text with its canonical highlight bounds."""

    excerpt: str = ""
    bounds: list[Bounds] = Field(default_factory=list)
