"""Pytest configuration and fixtures.

Documents are laid out on a regular grid so expected polygons can be worked
out by hand: words are 0.5 wide with a 0.3 gap, 0.2 high, and lines advance
by 0.3. Offsets advance by the word length plus one separating space.
"""

import copy

import pytest

from docalign.alignment import preprocess
from docalign.models import DocIntResponse

WORD_WIDTH = 0.5
WORD_GAP = 0.3
WORD_HEIGHT = 0.2
LINE_PITCH = 0.3


def rect(left, top, right, bottom):
    """Eight-value polygon rounded to avoid float noise in fixtures."""
    return [round(v, 6) for v in (left, top, right, top, right, bottom, left, bottom)]


def union(polygons):
    xs = [x for p in polygons for x in p[0::2]]
    ys = [y for p in polygons for y in p[1::2]]
    return rect(min(xs), min(ys), max(xs), max(ys))


class DocumentBuilder:
    """Builds layout-analysis payloads from rows of words."""

    def __init__(self):
        self.offset = 0
        self.words = []
        self.pages = {}
        self.paragraphs = []

    def _page(self, page_number):
        return self.pages.setdefault(
            page_number,
            {
                "pageNumber": page_number,
                "angle": 0,
                "width": 8.5,
                "height": 11,
                "unit": "inch",
                "words": [],
                "lines": [],
                "spans": [],
            },
        )

    def _block(self, page_number, left, top, rows):
        page = self._page(page_number)
        polygons = []
        for row_index, row in enumerate(rows):
            y = top + row_index * LINE_PITCH
            line_start = self.offset
            line_polygons = []
            for column, text in enumerate(row):
                x = left + column * (WORD_WIDTH + WORD_GAP)
                polygon = rect(x, y, x + WORD_WIDTH, y + WORD_HEIGHT)
                page["words"].append(
                    {
                        "content": text,
                        "polygon": polygon,
                        "span": {"offset": self.offset, "length": len(text)},
                        "confidence": 0.99,
                    }
                )
                self.words.append(text)
                line_polygons.append(polygon)
                self.offset += len(text) + 1
            page["lines"].append(
                {
                    "content": " ".join(row),
                    "polygon": union(line_polygons),
                    "spans": [
                        {"offset": line_start, "length": self.offset - 1 - line_start}
                    ],
                }
            )
            polygons.extend(line_polygons)
        return {"pageNumber": page_number, "polygon": union(polygons)}

    def paragraph(self, *blocks, role=None):
        """Add a paragraph made of ``(page_number, left, top, rows)`` blocks."""
        start = self.offset
        regions = [self._block(*block) for block in blocks]
        end = self.offset - 1
        content = " ".join(self.words)[start:end]
        self.paragraphs.append(
            {
                "content": content,
                "spans": [{"offset": start, "length": end - start}],
                "boundingRegions": regions,
                "role": role,
            }
        )
        return self

    def build(self):
        pages = [self.pages[number] for number in sorted(self.pages)]
        for page in pages:
            first = page["words"][0]["span"]
            last = page["words"][-1]["span"]
            page["spans"] = [
                {
                    "offset": first["offset"],
                    "length": last["offset"] + last["length"] - first["offset"],
                }
            ]
        return {
            "status": "succeeded",
            "createdDateTime": "2024-03-01T10:00:00Z",
            "lastUpdatedDateTime": "2024-03-01T10:00:05Z",
            "analyzeResult": {
                "apiVersion": "2023-07-31",
                "modelId": "prebuilt-layout",
                "stringIndexType": "utf16CodeUnit",
                "content": " ".join(self.words),
                "pages": pages,
                "paragraphs": self.paragraphs,
            },
        }


@pytest.fixture
def simple_payload():
    """One paragraph of two lines, eight words."""
    return (
        DocumentBuilder()
        .paragraph(
            (1, 1.0, 1.0, [["First", "line", "of", "text,"], ["second", "line", "of", "text"]])
        )
        .build()
    )


@pytest.fixture
def layout_payload():
    """Two paragraphs stacked in a left column and one in a right column."""
    return (
        DocumentBuilder()
        .paragraph(
            (1, 1.0, 1.0, [["The", "quick", "brown", "fox"], ["jumps", "over", "the", "dog"]])
        )
        .paragraph(
            (
                1,
                1.0,
                2.0,
                [
                    ["Pack", "my", "box", "with"],
                    ["five", "dozen", "liquor", "jugs"],
                    ["and", "then", "some", "more"],
                ],
            )
        )
        .paragraph(
            (1, 4.5, 1.0, [["Sphinx", "of", "black", "quartz"], ["judge", "my", "vow", "now"]])
        )
        .build()
    )


@pytest.fixture
def two_page_payload():
    """A paragraph continued from the bottom of page 1 onto page 2."""
    return (
        DocumentBuilder()
        .paragraph((1, 1.0, 9.0, [["alpha", "beta"]]), (2, 1.0, 1.0, [["gamma", "delta"]]))
        .paragraph((2, 1.0, 2.0, [["epsilon", "zeta"]]))
        .build()
    )


@pytest.fixture
def layout_document(layout_payload):
    return DocIntResponse.model_validate(copy.deepcopy(layout_payload))


@pytest.fixture
def annotated(layout_document):
    """Preprocessed three-paragraph layout."""
    return preprocess(layout_document)


@pytest.fixture
def simple_annotated(simple_payload):
    return preprocess(DocIntResponse.model_validate(simple_payload))


@pytest.fixture
def two_page_annotated(two_page_payload):
    return preprocess(DocIntResponse.model_validate(two_page_payload))
