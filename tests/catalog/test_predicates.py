"""Tests for filter predicates."""

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.catalog.predicates import (
    Equals,
    Overlaps,
    ProductFilter,
    Range,
    match_all,
)


@dataclass
class Row:
    """Minimal stand-in for a product row."""

    brand_id: int = 1
    price: Decimal = Decimal("25.00")
    colors: list[str] = field(default_factory=list)
    sizes: list[str] = field(default_factory=list)


class TestProductFilter:
    """Tests for building predicates from filter parameters."""

    def test_empty_filter_has_no_predicates(self) -> None:
        """No criteria means no predicates."""
        assert ProductFilter().to_predicates() == []

    def test_empty_lists_are_ignored(self) -> None:
        """Empty color and size lists add nothing."""
        assert ProductFilter(colors=[], sizes=[]).to_predicates() == []

    def test_all_criteria(self) -> None:
        """Every supplied criterion becomes one predicate."""
        predicates = ProductFilter(
            brand_id=3,
            colors=["red"],
            sizes=["m", "l"],
            min_price=Decimal("10"),
            max_price=Decimal("50"),
        ).to_predicates()

        assert predicates == [
            Equals("brand_id", 3),
            Overlaps("colors", ("red",)),
            Overlaps("sizes", ("m", "l")),
            Range("price", lower=Decimal("10"), upper=Decimal("50")),
        ]

    def test_only_min_price(self) -> None:
        """A lone minimum leaves the upper bound open."""
        assert ProductFilter(min_price=Decimal("10")).to_predicates() == [
            Range("price", lower=Decimal("10"), upper=None)
        ]

    def test_only_max_price(self) -> None:
        """A lone maximum leaves the lower bound open."""
        assert ProductFilter(max_price=Decimal("50")).to_predicates() == [
            Range("price", lower=None, upper=Decimal("50"))
        ]

    def test_zero_min_price_is_kept(self) -> None:
        """A zero bound is a real bound."""
        assert ProductFilter(min_price=Decimal("0")).to_predicates() == [
            Range("price", lower=Decimal("0"), upper=None)
        ]


class TestMatching:
    """Tests for in-memory predicate evaluation."""

    def test_equals(self) -> None:
        """Equality compares the attribute."""
        assert Equals("brand_id", 1).matches(Row(brand_id=1))
        assert not Equals("brand_id", 2).matches(Row(brand_id=1))

    def test_overlaps(self) -> None:
        """Overlap needs at least one shared element."""
        row = Row(colors=["red", "blue"])
        assert Overlaps("colors", ("red",)).matches(row)
        assert Overlaps("colors", ("green", "blue")).matches(row)
        assert not Overlaps("colors", ("green",)).matches(row)
        assert not Overlaps("colors", ("red",)).matches(Row(colors=[]))

    def test_range_is_inclusive(self) -> None:
        """Both bounds are inclusive."""
        bounds = Range("price", lower=Decimal("10"), upper=Decimal("50"))
        assert bounds.matches(Row(price=Decimal("10")))
        assert bounds.matches(Row(price=Decimal("50")))
        assert not bounds.matches(Row(price=Decimal("9.99")))
        assert not bounds.matches(Row(price=Decimal("50.01")))

    def test_half_open_ranges(self) -> None:
        """Open bounds accept everything on that side."""
        assert Range("price", lower=Decimal("10")).matches(Row(price=Decimal("1000")))
        assert Range("price", upper=Decimal("10")).matches(Row(price=Decimal("0")))

    def test_match_all_is_conjunctive(self) -> None:
        """Every predicate must hold."""
        row = Row(brand_id=1, colors=["red"])
        assert match_all([Equals("brand_id", 1), Overlaps("colors", ("red",))], row)
        assert not match_all([Equals("brand_id", 1), Overlaps("colors", ("blue",))], row)
        assert match_all([], row)
