"""Exceptions raised on violated preconditions.

Lookups that simply find nothing (text not located, no intersecting words)
return empty results instead of raising.
"""


class AlignmentError(ValueError):
    """Base class for malformed-input errors."""


class PageNotFoundError(AlignmentError):
    """Requested page number is not part of the document."""

    def __init__(self, page_number: int, page_count: int):
        self.page_number = page_number
        self.page_count = page_count
        super().__init__(
            f"Page {page_number} not found (document has {page_count} pages)"
        )


class DocumentNotPreprocessedError(AlignmentError):
    """Document has no per-page regions attached."""

    def __init__(self):
        super().__init__(
            "Document has no paragraph regions; run preprocess() on it first"
        )
