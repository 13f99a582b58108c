"""
Lazy traversals over any tree exposing parent and children accessors.

Each traversal is an iterator object holding only the cursor state it
needs. Iterators are forward-only: once exhausted they stay exhausted, and
a fresh call on ``Traversals`` is needed to walk again.
"""

from collections import deque
from typing import Callable, Generic, Iterator, Optional, Sequence, TypeVar

T = TypeVar("T")

ParentOf = Callable[[T], Optional[T]]
ChildrenOf = Callable[[T], Sequence[T]]


class _TreeWalk(Generic[T]):
    """Sibling and descendant lookups shared by the traversal iterators."""

    def __init__(self, parent_of: ParentOf, children_of: ChildrenOf):
        self.parent_of = parent_of
        self.children_of = children_of

    def is_root(self, node: T) -> bool:
        return self.parent_of(node) is None

    def _sibling(self, node: T, offset: int) -> Optional[T]:
        parent = self.parent_of(node)
        if parent is None:
            return None
        siblings = self.children_of(parent)
        i = siblings.index(node) + offset
        if 0 <= i < len(siblings):
            return siblings[i]
        return None

    def next_sibling(self, node: T) -> Optional[T]:
        return self._sibling(node, 1)

    def previous_sibling(self, node: T) -> Optional[T]:
        return self._sibling(node, -1)

    def last_descendant(self, node: T) -> T:
        """Deepest, rightmost descendant of ``node`` (``node`` itself if a leaf)."""
        children = self.children_of(node)
        while children:
            node = children[-1]
            children = self.children_of(node)
        return node

    def over(self, node: T) -> Optional[T]:
        """Next sibling of ``node`` or of its nearest ancestor that has one."""
        current: Optional[T] = node
        while current is not None:
            sibling = self.next_sibling(current)
            if sibling is not None:
                return sibling
            current = self.parent_of(current)
        return None

    def forward(self, node: T) -> Optional[T]:
        children = self.children_of(node)
        if children:
            return children[0]
        return self.over(node)

    def backward(self, node: T) -> Optional[T]:
        previous = self.previous_sibling(node)
        if previous is not None:
            return self.last_descendant(previous)
        parent = self.parent_of(node)
        if parent is None or self.is_root(parent):
            return None
        return parent


class _Traversal(Generic[T]):
    """Base iterator. Subclasses implement ``_advance``."""

    def __init__(self, walk: _TreeWalk):
        self._walk = walk
        self._done = False

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._done:
            raise StopIteration
        node = self._advance()
        if node is None:
            self._done = True
            raise StopIteration
        return node

    def _advance(self) -> Optional[T]:
        raise NotImplementedError


class DepthFirstTraversal(_Traversal[T]):
    """``start``, then its descendants in pre-order."""

    def __init__(self, walk: _TreeWalk, start: T):
        super().__init__(walk)
        self._stack: list[T] = [start]

    def _advance(self) -> Optional[T]:
        if not self._stack:
            return None
        node = self._stack.pop()
        self._stack.extend(reversed(self._walk.children_of(node)))
        return node


class BreadthFirstTraversal(_Traversal[T]):
    """``start``, then its descendants level by level."""

    def __init__(self, walk: _TreeWalk, start: T):
        super().__init__(walk)
        self._queue: deque[T] = deque([start])

    def _advance(self) -> Optional[T]:
        if not self._queue:
            return None
        node = self._queue.popleft()
        self._queue.extend(self._walk.children_of(node))
        return node


class _StepTraversal(_Traversal[T]):
    """Repeats a single-step move from the last yielded node."""

    def __init__(self, walk: _TreeWalk, start: T):
        super().__init__(walk)
        self._current = start

    def _step(self, node: T) -> Optional[T]:
        raise NotImplementedError

    def _advance(self) -> Optional[T]:
        node = self._step(self._current)
        if node is not None:
            self._current = node
        return node


class ForwardAndOverTraversal(_StepTraversal[T]):
    """Following sibling subtrees, skipping descendants."""

    def _step(self, node: T) -> Optional[T]:
        return self._walk.over(node)


class ForwardAndUpTraversal(_StepTraversal[T]):
    """Following nodes in document order."""

    def _step(self, node: T) -> Optional[T]:
        return self._walk.forward(node)


class BackwardAndUpTraversal(_StepTraversal[T]):
    """Preceding nodes in reverse document order, never reaching the root."""

    def _step(self, node: T) -> Optional[T]:
        return self._walk.backward(node)


class Traversals(Generic[T]):
    """Traversal constructors bound to one pair of tree accessors."""

    def __init__(self, parent_of: ParentOf, children_of: ChildrenOf):
        self._walk: _TreeWalk[T] = _TreeWalk(parent_of, children_of)

    def depth_first(self, node: T) -> DepthFirstTraversal[T]:
        return DepthFirstTraversal(self._walk, node)

    def breadth_first(self, node: T) -> BreadthFirstTraversal[T]:
        return BreadthFirstTraversal(self._walk, node)

    def forward_and_over(self, node: T) -> ForwardAndOverTraversal[T]:
        return ForwardAndOverTraversal(self._walk, node)

    def forward_and_up(self, node: T) -> ForwardAndUpTraversal[T]:
        return ForwardAndUpTraversal(self._walk, node)

    def backward_and_up(self, node: T) -> BackwardAndUpTraversal[T]:
        return BackwardAndUpTraversal(self._walk, node)

    def last_descendant(self, node: T) -> T:
        return self._walk.last_descendant(node)
