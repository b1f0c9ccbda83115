"""Tests for the forward mapper (text to bounds)."""

import logging

import pytest

from docalign.alignment.forward import group_by_page, locate_text, regions_to_bounds
from docalign.alignment.geometry import rectangle
from docalign.alignment.locate import WordSequenceLocator
from docalign.models import (
    CitationRegionsPerPage,
    ComplexPolygon,
    PolygonOnPage,
    TextLocation,
)


class TestGroupByPage:
    """Tests for grouping located fragments."""

    def test_groups_sorted_by_page(self):
        first = ComplexPolygon(head=rectangle(1, 1, 2, 1.2))
        second = ComplexPolygon(head=rectangle(1, 2, 2, 2.2))
        third = ComplexPolygon(head=rectangle(1, 3, 2, 3.2))
        location = TextLocation(
            excerpt="x",
            found=True,
            polygons=[
                PolygonOnPage(page=3, polygon=first, paragraph_index=4),
                PolygonOnPage(page=1, polygon=second, paragraph_index=0),
                PolygonOnPage(page=3, polygon=third, paragraph_index=5),
            ],
        )

        groups = group_by_page(location)

        assert [group.page for group in groups] == [1, 3]
        assert groups[0].citation_regions == [[second]]
        assert groups[1].citation_regions == [[first], [third]]

    def test_returning_paragraph_keeps_arrival_order(self):
        """A paragraph seen again later on the page starts a new group."""
        fragments = [
            ComplexPolygon(head=rectangle(1, top, 2, top + 0.2)) for top in (1, 2, 3)
        ]
        location = TextLocation(
            excerpt="x",
            found=True,
            polygons=[
                PolygonOnPage(page=1, polygon=fragment, paragraph_index=index)
                for fragment, index in zip(fragments, (None, 0, None))
            ],
        )

        groups = group_by_page(location)
        assert groups[0].citation_regions == [[fragment] for fragment in fragments]

        bounds = regions_to_bounds(groups)
        assert [bound.polygon[1] for bound in bounds] == [1, 2, 3]

    def test_consecutive_fragments_of_one_paragraph_grouped(self):
        first = ComplexPolygon(head=rectangle(1, 1, 2, 1.2))
        second = ComplexPolygon(head=rectangle(1, 2, 2, 2.2))
        location = TextLocation(
            excerpt="x",
            found=True,
            polygons=[
                PolygonOnPage(page=1, polygon=first, paragraph_index=3),
                PolygonOnPage(page=1, polygon=second, paragraph_index=3),
            ],
        )
        assert group_by_page(location)[0].citation_regions == [[first, second]]

    def test_same_paragraph_kept_together(self, annotated):
        location = WordSequenceLocator().locate("dog Pack", annotated)
        groups = group_by_page(location)
        assert len(groups) == 1
        assert len(groups[0].citation_regions) == 2

    def test_empty(self):
        assert group_by_page(TextLocation()) == []


class TestRegionsToBounds:
    """Tests for converting complex polygons into bounds."""

    head = rectangle(1.8, 1.0, 3.9, 1.2)
    body = rectangle(1.0, 1.4, 3.9, 1.6)
    tail = rectangle(1.0, 1.8, 2.3, 2.0)

    def _bounds(self, complex_polygon, force_overlap):
        group = CitationRegionsPerPage(page=2, citation_regions=[[complex_polygon]])
        return regions_to_bounds([group], force_overlap=force_overlap)

    def test_one_bound_per_part(self):
        bounds = self._bounds(
            ComplexPolygon(head=self.head, body=self.body, tail=self.tail), False
        )
        assert [b.polygon for b in bounds] == [self.head, self.body, self.tail]
        assert {b.page_number for b in bounds} == {2}

    def test_body_stretched_to_neighbours(self):
        bounds = self._bounds(
            ComplexPolygon(head=self.head, body=self.body, tail=self.tail), True
        )
        assert bounds[0].polygon == self.head
        assert bounds[1].polygon == rectangle(1.0, 1.2, 3.9, 1.8)
        assert bounds[2].polygon == self.tail

    def test_head_stretched_to_tail_without_body(self):
        bounds = self._bounds(ComplexPolygon(head=self.head, tail=self.tail), True)
        assert bounds[0].polygon == rectangle(1.8, 1.0, 3.9, 1.8)
        assert bounds[1].polygon == self.tail

    def test_overlapping_edges_not_shrunk(self):
        body = rectangle(1.0, 1.1, 3.9, 1.9)
        bounds = self._bounds(
            ComplexPolygon(head=self.head, body=body, tail=self.tail), True
        )
        assert bounds[1].polygon == body

    def test_tail_flattened(self):
        skewed = [1.0, 1.8, 2.3, 1.75, 2.35, 2.0, 0.95, 2.05]
        bounds = self._bounds(ComplexPolygon(tail=skewed), True)
        assert bounds[0].polygon == rectangle(0.95, 1.75, 2.35, 2.05)

    def test_input_not_modified(self):
        complex_polygon = ComplexPolygon(head=list(self.head), tail=list(self.tail))
        self._bounds(complex_polygon, True)
        assert complex_polygon.head == self.head


class TestLocateText:
    """Tests for the text-to-bounds entry point."""

    def test_two_lines(self, annotated):
        bounds = locate_text("quick brown fox jumps over", annotated)

        assert len(bounds) == 2
        assert bounds[0].page_number == 1
        assert bounds[0].polygon == pytest.approx(rectangle(1.8, 1.0, 3.9, 1.2))
        assert bounds[1].polygon == pytest.approx(rectangle(1.0, 1.3, 2.3, 1.5))

    def test_force_overlap_closes_body_gaps(self, annotated):
        bounds = locate_text("with five dozen liquor jugs and", annotated, force_overlap=True)

        assert len(bounds) == 3
        assert bounds[1].polygon == pytest.approx(rectangle(1.0, 2.2, 3.9, 2.6))

    def test_force_overlap_closes_head_gap(self, annotated):
        bounds = locate_text("fox jumps", annotated, force_overlap=True)
        assert bounds[0].polygon == pytest.approx(rectangle(3.4, 1.0, 3.9, 1.3))

    def test_across_paragraphs(self, annotated):
        bounds = locate_text("dog Pack", annotated)
        assert [b.polygon for b in bounds] == [
            pytest.approx(rectangle(3.4, 1.3, 3.9, 1.5)),
            pytest.approx(rectangle(1.0, 2.0, 1.5, 2.2)),
        ]

    def test_across_pages(self, two_page_annotated):
        bounds = locate_text("beta gamma", two_page_annotated)
        assert [b.page_number for b in bounds] == [1, 2]

    def test_not_found(self, annotated, caplog):
        with caplog.at_level(logging.INFO, logger="docalign"):
            assert locate_text("no such words", annotated) == []
        assert "no match" in caplog.text

    def test_custom_locator(self, annotated):
        class FixedLocator:
            def locate(self, text, document):
                return TextLocation(
                    excerpt=text,
                    found=True,
                    polygons=[
                        PolygonOnPage(
                            page=1, polygon=ComplexPolygon(body=rectangle(0, 0, 1, 1))
                        )
                    ],
                )

        bounds = locate_text("anything", annotated, locator=FixedLocator())
        assert [b.polygon for b in bounds] == [rectangle(0, 0, 1, 1)]
