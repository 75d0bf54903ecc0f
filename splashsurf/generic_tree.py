"""Sequential and parallel traversal of tree-like structures.

A tree is any object with a ``children`` attribute holding a sequence of
nodes of the same kind. :class:`TreeNode` is a ready-made node type, but every
function here works with any object that has such an attribute.

Visitors given to the mutating traversals may change a node, including its
list of children. Breadth-first visitors run before a node's children are
enqueued. Post-order visitors run after all of a node's children have been
visited.
"""

from __future__ import annotations

from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, TypeVar

T = TypeVar("T")
N = TypeVar("N")


@dataclass(eq=False)
class TreeNode(Generic[T]):
    """A tree node with an arbitrary payload and a list of child nodes."""

    data: T = None  # type: ignore[assignment]
    children: list["TreeNode[T]"] = field(default_factory=list)

    def add_child(self, data: T) -> "TreeNode[T]":
        """Appends a new child holding the given payload and returns it."""
        child = TreeNode(data)
        self.children.append(child)
        return child

    def is_leaf(self) -> bool:
        """Whether the node has no children."""
        return not self.children


def _children(node: Any) -> list:
    return list(node.children)


def dfs_iter(node: N) -> Iterator[N]:
    """Yields the node and all of its descendants in depth-first pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        stack.extend(reversed(_children(current)))
        yield current


def bfs_iter(node: N) -> Iterator[N]:
    """Yields the node and all of its descendants in breadth-first order.

    The children of each node are enqueued in reverse order.
    """
    queue = deque([node])
    while queue:
        current = queue.popleft()
        queue.extend(reversed(_children(current)))
        yield current


def visit_mut_dfs(node: N, visitor: Callable[[N], Any]) -> None:
    """Visits nodes depth-first; the visitor runs before the children are enqueued."""
    stack = [node]
    while stack:
        current = stack.pop()
        visitor(current)
        stack.extend(reversed(_children(current)))


def visit_mut_bfs(node: N, visitor: Callable[[N], Any]) -> None:
    """Visits nodes breadth-first; the visitor runs before the children are enqueued."""
    queue = deque([node])
    while queue:
        current = queue.popleft()
        visitor(current)
        queue.extend(_children(current))


def _run_level(pool: ThreadPoolExecutor, level: list, visitor: Callable) -> None:
    """Applies the visitor to all nodes of a level in parallel, raising the first error."""
    futures: list[Future] = [pool.submit(visitor, n) for n in level]
    first_error: BaseException | None = None
    for future in futures:
        error = future.exception()
        if error is not None and first_error is None:
            first_error = error
    if first_error is not None:
        raise first_error


def _next_level(level: list) -> list:
    return [child for n in level for child in _children(n)]


def _levels(node: Any) -> list[list]:
    levels = []
    level = [node]
    while level:
        levels.append(level)
        level = _next_level(level)
    return levels


def par_visit_bfs(node: N, visitor: Callable[[N], Any]) -> None:
    """Visits every node breadth-first, applying the visitor in parallel."""
    with ThreadPoolExecutor() as pool:
        level = [node]
        while level:
            futures = [pool.submit(visitor, n) for n in level]
            level = _next_level(level)
            for future in futures:
                future.result()


def try_par_visit_bfs(node: N, visitor: Callable[[N], Any]) -> None:
    """Visits nodes breadth-first in parallel, stopping at and re-raising the first error."""
    with ThreadPoolExecutor() as pool:
        level = [node]
        while level:
            _run_level(pool, level, visitor)
            level = _next_level(level)


def par_visit_mut_bfs(node: N, visitor: Callable[[N], Any]) -> None:
    """Visits nodes breadth-first in parallel; the visitor runs before children are enqueued."""
    with ThreadPoolExecutor() as pool:
        level = [node]
        while level:
            _run_level(pool, level, visitor)
            level = _next_level(level)


def par_visit_mut_dfs_post(node: N, visitor: Callable[[N], Any]) -> None:
    """Visits nodes in post-order in parallel; each node after all of its children."""
    levels = _levels(node)
    with ThreadPoolExecutor() as pool:
        for level in reversed(levels):
            _run_level(pool, level, visitor)


def try_par_visit_mut_dfs_post(node: N, visitor: Callable[[N], Any]) -> None:
    """Post-order parallel visitation that stops at and re-raises the first error.

    Once a visitor has failed, no ancestor of any node is visited any more.
    """
    levels = _levels(node)
    with ThreadPoolExecutor() as pool:
        for level in reversed(levels):
            _run_level(pool, level, visitor)