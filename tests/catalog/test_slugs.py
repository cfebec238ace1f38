"""Tests for slug derivation."""

import pytest

from storefront.catalog.slugs import slugify


class TestSlugify:
    """Tests for slugify."""

    def test_lowercases_and_hyphenates(self) -> None:
        """Words are lowercased and joined with hyphens."""
        assert slugify("Classic Oxford Shirt") == "classic-oxford-shirt"

    def test_trims_and_collapses_whitespace(self) -> None:
        """Surrounding whitespace is dropped, inner runs become one hyphen."""
        assert slugify("  Slim   Fit \t Chinos  ") == "slim-fit-chinos"

    def test_strips_special_characters(self) -> None:
        """Characters other than word chars and hyphens are removed."""
        assert slugify("Shirts & Tops!") == "shirts-tops"
        assert slugify("50% off (today)") == "50-off-today"

    def test_keeps_underscores(self) -> None:
        """Underscores count as word characters."""
        assert slugify("snake_case name") == "snake_case-name"

    def test_collapses_repeated_hyphens(self) -> None:
        """Runs of hyphens collapse to one."""
        assert slugify("a -- b---c") == "a-b-c"

    def test_drops_non_ascii_letters(self) -> None:
        """Only ASCII word characters survive."""
        assert slugify("Café Crème") == "caf-crme"

    @pytest.mark.parametrize(
        "text",
        ["Classic Oxford Shirt", "  Shirts & Tops!  ", "a -- b", "Café Crème", "-edge-"],
    )
    def test_idempotent(self, text: str) -> None:
        """Slugifying a slug returns it unchanged."""
        once = slugify(text)
        assert slugify(once) == once

    def test_deterministic(self) -> None:
        """Same input always yields the same slug."""
        assert slugify("Rain Shell Jacket") == slugify("Rain Shell Jacket")
