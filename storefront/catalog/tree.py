"""Category tree traversal."""

from collections.abc import Awaitable, Callable, Iterable

import structlog

logger = structlog.get_logger()

ChildLookup = Callable[[int], Awaitable[Iterable[int]]]


async def expand_subtree(root_id: int, child_ids_of: ChildLookup) -> list[int]:
    """Collect a category id and the ids of all its descendants.

    Walks the parent-pointer forest depth-first in pre-order using an
    explicit stack, so deep trees cannot exhaust the call stack. Ids that
    were already visited are skipped, which keeps malformed cyclic parent
    links from looping forever.

    Args:
        root_id: Category to expand.
        child_ids_of: Async lookup returning the direct children of a
            category id.

    Returns:
        Ids in pre-order, starting with ``root_id``.
    """
    ordered: list[int] = []
    visited: set[int] = set()
    stack = [root_id]

    while stack:
        category_id = stack.pop()
        if category_id in visited:
            logger.warning("Category cycle detected", category_id=category_id)
            continue
        visited.add(category_id)
        ordered.append(category_id)

        children = list(await child_ids_of(category_id))
        # Reversed so the first child is expanded first.
        stack.extend(reversed(children))

    return ordered
