"""Tests for category subtree expansion."""

import pytest

from storefront.catalog.tree import expand_subtree


def lookup(edges: dict[int, list[int]]):
    """Build an async child lookup over a parent -> children map."""
    calls: list[int] = []

    async def child_ids_of(category_id: int) -> list[int]:
        calls.append(category_id)
        return edges.get(category_id, [])

    child_ids_of.calls = calls  # type: ignore[attr-defined]
    return child_ids_of


class TestExpandSubtree:
    """Tests for expand_subtree."""

    @pytest.mark.asyncio
    async def test_leaf_returns_only_itself(self) -> None:
        """A category without children expands to itself."""
        assert await expand_subtree(7, lookup({})) == [7]

    @pytest.mark.asyncio
    async def test_collects_all_descendants_in_preorder(self) -> None:
        """Root with children [A, B] where A has child C."""
        edges = {1: [2, 3], 2: [4]}
        assert await expand_subtree(1, lookup(edges)) == [1, 2, 4, 3]

    @pytest.mark.asyncio
    async def test_expands_from_inner_node(self) -> None:
        """Only the requested subtree is walked."""
        edges = {1: [2, 3], 2: [4], 3: [5]}
        assert await expand_subtree(2, lookup(edges)) == [2, 4]

    @pytest.mark.asyncio
    async def test_every_node_queried_once(self) -> None:
        """Each discovered category is asked for its children exactly once."""
        child_ids_of = lookup({1: [2, 3], 2: [4]})
        await expand_subtree(1, child_ids_of)
        assert sorted(child_ids_of.calls) == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_cycle_terminates(self) -> None:
        """Cyclic parent links do not loop forever."""
        edges = {1: [2], 2: [3], 3: [1]}
        assert await expand_subtree(1, lookup(edges)) == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_self_loop_terminates(self) -> None:
        """A category listed as its own child is visited once."""
        assert await expand_subtree(1, lookup({1: [1]})) == [1]

    @pytest.mark.asyncio
    async def test_deep_chain(self) -> None:
        """Very deep trees do not hit the recursion limit."""
        depth = 5000
        edges = {i: [i + 1] for i in range(depth)}
        result = await expand_subtree(0, lookup(edges))
        assert result == list(range(depth + 1))
