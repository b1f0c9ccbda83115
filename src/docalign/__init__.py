"""Map between selections, page geometry and text offsets of extracted documents."""

from docalign.alignment import (
    extract_words,
    find_text_from_bounds,
    locate_text,
    preprocess,
    resolve_box_selection,
    resolve_paragraph,
    resolve_selection,
)

__version__ = "0.1.0"

__all__ = [
    "extract_words",
    "find_text_from_bounds",
    "locate_text",
    "preprocess",
    "resolve_box_selection",
    "resolve_paragraph",
    "resolve_selection",
]
