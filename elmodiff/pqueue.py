"""
elmodiff.pqueue — Max-priority queue with weighted random sampling.

A binary max-heap over (item, score) pairs.  Besides the usual push/pop
it supports removal at an arbitrary heap slot and a weighted random
draw where every element is picked with probability proportional to
score + 1.

Runtime, with n elements in the queue:

    size / is_empty()    O(1)
    push(item, score)    O(log n)
    pop()                O(log n)
    remove(index)        O(log n)
    sample()             O(n)

Items and scores live in two parallel lists indexed by heap slot.  The
queue never writes to the items it holds: sampling keys are computed
into a scratch list and thrown away.

All scores must be non-negative (the sampling weight is score + 1).
"""

import random
from typing import Any, Optional


class PriorityQueue:
    """
    Binary max-heap; slot 0 always holds the highest score.

    Examples:
        q = PriorityQueue()
        q.push("a", 1).push("b", 3)
        q.peek()    # ("b", 3)
        q.pop()     # ("b", 3)
    """

    __slots__ = ("_items", "_scores")

    def __init__(self) -> None:
        self._items: list[Any] = []
        self._scores: list[float] = []

    # ───────────────────────────────────────────────────────────────
    #  Accessors
    # ───────────────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    @property
    def scores(self) -> tuple[float, ...]:
        """Snapshot of the scores in heap-slot order."""
        return tuple(self._scores)

    def __getitem__(self, index: int) -> tuple[Any, float]:
        return self._items[index], self._scores[index]

    def __repr__(self) -> str:
        body = ", ".join(f"{item!r} ({score})"
                         for item, score in zip(self._items, self._scores))
        return f"PriorityQueue([{body}])"

    # ───────────────────────────────────────────────────────────────
    #  Mutation
    # ───────────────────────────────────────────────────────────────

    def push(self, item: Any, score: float) -> "PriorityQueue":
        """Insert `item` with priority `score`.  Returns self for chaining."""
        if score < 0:
            raise ValueError(f"score must be non-negative, got {score!r}")

        self._items.append(item)
        self._scores.append(score)
        self._sift_up(len(self._items) - 1)
        return self

    def pop(self) -> Optional[tuple[Any, float]]:
        """Remove and return the max-score (item, score), or None if empty."""
        return self.remove(0)

    def peek(self) -> Optional[tuple[Any, float]]:
        """Return the max-score (item, score) without removing it."""
        if not self._items:
            return None
        return self._items[0], self._scores[0]

    def remove(self, index: int) -> Optional[tuple[Any, float]]:
        """
        Remove the element at heap slot `index` and return it.

        The last element is moved into the vacated slot and sifted down
        (and up, since an element taken from the bottom of another
        subtree may outrank its new parent).  Returns None when `index`
        is out of range.
        """
        last = len(self._items) - 1
        if index < 0 or index > last:
            return None

        self._swap(index, last)
        item = self._items.pop()
        score = self._scores.pop()

        if index < last:
            self._sift_down(index)
            self._sift_up(index)

        return item, score

    # ───────────────────────────────────────────────────────────────
    #  Weighted sampling
    # ───────────────────────────────────────────────────────────────

    def sample_index(self, rng: Optional[random.Random] = None) -> Optional[int]:
        """
        Draw a heap slot at random, weighted by score + 1.

        Uses the exponential-key trick (Efraimidis & Spirakis): every
        slot gets key = u^(1/(score+1)) with u ~ U(0, 1), and the slot
        with the largest key wins.  Nothing is removed.
        """
        if not self._items:
            return None

        draw = (rng or random).random
        keys = [draw() ** (1.0 / (score + 1)) for score in self._scores]
        return max(range(len(keys)), key=keys.__getitem__)

    def sample(self, rng: Optional[random.Random] = None) -> Optional[tuple[Any, float]]:
        """Weighted random (item, score) without removal, or None if empty."""
        index = self.sample_index(rng)
        if index is None:
            return None
        return self._items[index], self._scores[index]

    # ───────────────────────────────────────────────────────────────
    #  Heap maintenance
    # ───────────────────────────────────────────────────────────────

    def _swap(self, i: int, j: int) -> None:
        self._items[i], self._items[j] = self._items[j], self._items[i]
        self._scores[i], self._scores[j] = self._scores[j], self._scores[i]

    def _sift_up(self, i: int) -> None:
        scores = self._scores
        while i > 0:
            parent = (i - 1) // 2
            if scores[parent] >= scores[i]:
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        scores = self._scores
        n = len(scores)
        while True:
            left = 2 * i + 1
            if left >= n:
                break  # leaf
            right = left + 1
            child = left
            if right < n and scores[right] > scores[left]:
                child = right

            if scores[child] > scores[i]:
                self._swap(i, child)
                i = child
            else:
                break
