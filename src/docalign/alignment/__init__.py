"""Geometry-to-text alignment engine.

Components, leaves first:
1. geometry - polygon and offset comparisons
2. search - contiguous-range binary search over lines or words
3. columns - split a page's lines into reading-order columns
4. regions - attach paragraph regions to every page (preprocess)
5. locate / combine - default text-locate and rectangle-combine collaborators
6. forward - excerpt text to highlight bounds
7. reverse - selection geometry to excerpt text
8. selection - end-to-end pixel selection pipeline

Every operation is a pure function over the immutable document structure.
"""

from .columns import relevant_columns, split_into_columns
from .combine import RectangleCombiner, combine_rectangles
from .forward import group_by_page, locate_text, regions_to_bounds
from .geometry import (
    adjacent,
    compare_offsets,
    compare_polygons,
    flatten_polygon,
    on_same_line,
    polygon_from_points,
    union_polygon,
)
from .locate import TextLocator, WordSequenceLocator
from .regions import compute_regions, preprocess, require_annotated
from .reverse import extract_words, find_text_from_bounds, resolve_paragraph
from .search import (
    IndexRange,
    binary_search_range,
    offset_binary_search,
    polygon_binary_search,
)
from .selection import (
    resolve_box_selection,
    resolve_selection,
    screen_rects_to_polygons,
    selection_bounding_polygon,
)

__all__ = [
    # Primitives
    "adjacent",
    "compare_offsets",
    "compare_polygons",
    "flatten_polygon",
    "on_same_line",
    "polygon_from_points",
    "union_polygon",
    # Search
    "IndexRange",
    "binary_search_range",
    "offset_binary_search",
    "polygon_binary_search",
    # Columns
    "relevant_columns",
    "split_into_columns",
    # Regions
    "compute_regions",
    "preprocess",
    "require_annotated",
    # Collaborators
    "RectangleCombiner",
    "TextLocator",
    "WordSequenceLocator",
    "combine_rectangles",
    # Forward
    "group_by_page",
    "locate_text",
    "regions_to_bounds",
    # Reverse
    "extract_words",
    "find_text_from_bounds",
    "resolve_paragraph",
    # Selection
    "resolve_box_selection",
    "resolve_selection",
    "screen_rects_to_polygons",
    "selection_bounding_polygon",
]
