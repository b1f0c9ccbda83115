"""Text locating - find excerpt text among a document's recognized words.

The default locator compares normalized word tokens, so differences in case,
whitespace and punctuation between the excerpt and the document are
tolerated. Located words are split per page and per paragraph region, then
into visual lines, yielding one complex polygon per contiguous piece.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from docalign.models import (
    AnnotatedDocument,
    AnnotatedPage,
    ComplexPolygon,
    Polygon,
    PolygonOnPage,
    TextLocation,
    Word,
)

from .geometry import on_same_line, union_polygon
from .regions import require_annotated
from .search import IndexRange

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w]+", re.UNICODE)


class TextLocator(Protocol):
    """Collaborator resolving text to located fragments."""

    def locate(self, text: str, document: AnnotatedDocument) -> TextLocation:
        ...


def normalize_token(token: str) -> str:
    """Casefold and strip everything but word characters."""
    return _NON_WORD.sub("", token.casefold())


def build_complex_polygon(lines: Sequence[Polygon]) -> ComplexPolygon:
    """Shape per-line boxes into head/body/tail.

    One line becomes a head; two become head and tail; more put the union of
    the middle lines in the body.
    """
    if not lines:
        return ComplexPolygon()
    if len(lines) == 1:
        return ComplexPolygon(head=lines[0])
    if len(lines) == 2:
        return ComplexPolygon(head=lines[0], tail=lines[1])
    return ComplexPolygon(
        head=lines[0],
        body=union_polygon(lines[1:-1]),
        tail=lines[-1],
    )


@dataclass(frozen=True)
class _Entry:
    page: AnnotatedPage
    word_index: int
    paragraph_index: Optional[int]
    token: str

    @property
    def word(self) -> Word:
        return self.page.words[self.word_index]


class WordSequenceLocator:
    """Locates text as a contiguous run of document words.

    Args:
        line_overlap: Minimum vertical overlap fraction for two consecutive
            words to share a visual line.
    """

    def __init__(self, line_overlap: float = 0.5):
        self.line_overlap = line_overlap

    def locate(self, text: str, document: AnnotatedDocument) -> TextLocation:
        """Find the first occurrence of ``text`` in ``document``.

        Raises:
            DocumentNotPreprocessedError: If the document carries no regions.
        """
        document = require_annotated(document)
        query = [token for token in map(normalize_token, text.split()) if token]
        if not query:
            return TextLocation()

        entries = self._entries(document)
        searchable = [i for i, entry in enumerate(entries) if entry.token]
        match = self._find_window([entries[i].token for i in searchable], query)
        if match is None:
            logger.debug("no word sequence matches %r", text)
            return TextLocation()

        matched = entries[searchable[match.first]:searchable[match.last] + 1]
        excerpt = " ".join(entry.word.content for entry in matched)
        polygons = [
            PolygonOnPage(
                page=piece[0].page.page_number,
                polygon=build_complex_polygon(self._line_boxes(piece)),
                paragraph_index=piece[0].paragraph_index,
            )
            for piece in self._pieces(matched)
        ]
        return TextLocation(excerpt=excerpt, polygons=polygons, found=True)

    @staticmethod
    def _entries(document: AnnotatedDocument) -> list[_Entry]:
        entries = []
        for page in document.pages:
            owner: dict[int, int] = {}
            for region in page.regions:
                first, last = region.word_indices
                for index in range(first, last + 1):
                    owner.setdefault(index, region.paragraph_index)
            for index, word in enumerate(page.words):
                entries.append(
                    _Entry(page, index, owner.get(index), normalize_token(word.content))
                )
        return entries

    @staticmethod
    def _find_window(tokens: Sequence[str], query: Sequence[str]) -> Optional[IndexRange]:
        size = len(query)
        for start in range(len(tokens) - size + 1):
            if all(tokens[start + k] == query[k] for k in range(size)):
                return IndexRange(start, start + size - 1)
        return None

    @staticmethod
    def _pieces(entries: Sequence[_Entry]) -> list[list[_Entry]]:
        """Split consecutive entries wherever the page or paragraph changes."""
        pieces: list[list[_Entry]] = []
        for entry in entries:
            if pieces and (
                pieces[-1][-1].page is entry.page
                and pieces[-1][-1].paragraph_index == entry.paragraph_index
            ):
                pieces[-1].append(entry)
            else:
                pieces.append([entry])
        return pieces

    def _line_boxes(self, piece: Sequence[_Entry]) -> list[Polygon]:
        """Union boxes of consecutive words sharing a visual line."""
        lines: list[list[Polygon]] = []
        for entry in piece:
            polygon = entry.word.polygon
            if lines and on_same_line(polygon, lines[-1][-1], self.line_overlap):
                lines[-1].append(polygon)
            else:
                lines.append([polygon])
        return [union_polygon(line) for line in lines]
