"""
elmodiff.core — Randomized edit-graph search
=============================================

§1  THE EDIT GRAPH
──────────────────

Transforming a source sequence S (length n) into a target T (length m)
is a walk on the grid of points (x, y), 0 ≤ x ≤ n, 0 ≤ y ≤ m, where x
counts source symbols consumed and y counts target symbols produced:

    (x, y) → (x+1, y)       delete S[x]
    (x, y) → (x, y+1)       insert T[y]
    (x, y) → (x+1, y+1)     keep S[x], only when S[x] == T[y]

Every walk from the origin (0, 0) to the terminal (n, m) is an edit
script; diagonal moves are free.  Myers [Mye86] finds the walk with the
fewest non-diagonal moves in O(ND).  This module does NOT: it runs a
cheap randomized best-first search that usually finds a short walk,
with no optimality guarantee.


§2  COLLAPSING DIAGONALS
────────────────────────

Whenever S[x] == T[y] the diagonal is the only move considered, and
every freshly generated point is pushed along its diagonal run before
it is recorded:

    follow(x, y):  while S[x] == T[y]: x, y = x+1, y+1

so a whole run of matching symbols costs one graph transition.  Each
recorded transition is therefore one edit followed by a (possibly
empty) run of matches, which is exactly what the codec encodes.


§3  THE SEARCH
──────────────

The frontier is a PriorityQueue of discovered, unexpanded nodes, scored

    score(x, y) = max(x + y, x + y - hypot(n - x, m - y)) - 2·depth

rewarding progress towards the terminal and penalizing path length.
The score is clamped at 0 because weighted sampling needs non-negative
weights.

Each step asks the policy whether to SAMPLE (weighted draw, explore) or
POP (best node, exploit).  The first step always pops.  The drawn node
leaves the frontier and its neighbors are either recorded fresh or, if
already known through a longer path, re-parented.  The search stops as
soon as the terminal has been discovered.

[Mye86] E. Myers, "An O(ND) Difference Algorithm and Its Variations",
        Algorithmica 1 (1986).
"""

import logging
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Optional

from .codec import apply as apply_script, serialize as serialize_path
from .errors import DiffError, EmptyInputError, StepLimitExceeded
from .policy import DecayPolicy
from .pqueue import PriorityQueue

logger = logging.getLogger(__name__)

# Score of the origin when it seeds the frontier.
ORIGIN_SCORE = 1

# Score lost per edge of depth.
DEPTH_PENALTY = 2

DEFAULT_TRIALS = 3

StepPolicy = Callable[[int, random.Random], bool]
PostStepHook = Callable[["Diff"], None]


# ═══════════════════════════════════════════════════════════════════
#  NODES
# ═══════════════════════════════════════════════════════════════════

@dataclass(slots=True, eq=False)
class Node:
    """
    A point (x, y) of the edit graph.

    Only the owning Diff mutates `depth` and `predecessor`; the frontier
    holds references to the same objects as the visited table.
    """
    x: int
    y: int
    id: int
    depth: int = 0
    predecessor: Optional[int] = None

    def __repr__(self) -> str:
        return f"Node({self.x}, {self.y}, depth={self.depth})"


def _noop(diff: "Diff") -> None:
    pass


# ═══════════════════════════════════════════════════════════════════
#  SEARCH ENGINE
# ═══════════════════════════════════════════════════════════════════

class Diff:
    """
    A diff context between two non-empty symbol sequences.

        d = Diff("ABCABBA", "CBABAC")
        path = d.compute_path()          # terminal ... origin
        script = d.serialize(path)       # e.g. "0-1,1:B,5,5:C"
        Diff.apply("ABCABBA", script)    # "CBABAC"

    Symbols may be of any type comparable with ==; serialization needs
    the target's symbols to be strings.

    Keyword options:
        policy      callable (step, rng) -> bool; True samples, False
                    pops.  Defaults to DecayPolicy() (p = t^-0.45).
        post_step   called with this Diff after every completed step.
        rng         random.Random driving the policy and the sampling.
        max_steps   step budget; StepLimitExceeded once it is spent.
    """

    def __init__(
        self,
        source: Sequence,
        target: Sequence,
        *,
        policy: Optional[StepPolicy] = None,
        post_step: Optional[PostStepHook] = None,
        rng: Optional[random.Random] = None,
        max_steps: Optional[int] = None,
    ):
        if len(source) == 0:
            raise EmptyInputError("source")
        if len(target) == 0:
            raise EmptyInputError("target")
        if max_steps is not None and max_steps < 1:
            raise ValueError(f"max_steps must be positive, got {max_steps!r}")

        self.source = source
        self.target = target
        self.max_steps = max_steps

        self._policy: StepPolicy = policy or DecayPolicy()
        self._post_step: PostStepHook = post_step or _noop
        self._rng = rng or random.Random()

        self._stride = len(target) + 1
        self._steps = 0
        self._visited: dict[int, Node] = {}
        self._queue = PriorityQueue()

        self.terminal = Node(len(source), len(target),
                             len(source) * self._stride + len(target))
        self.origin = self.node(0, 0)

        self._visited[self.origin.id] = self.origin
        self._queue.push(self.origin, ORIGIN_SCORE)

    # ───────────────────────────────────────────────────────────────
    #  Configuration
    # ───────────────────────────────────────────────────────────────

    def set_policy(self, policy: StepPolicy) -> "Diff":
        self._policy = policy
        return self

    def set_post_step(self, post_step: PostStepHook) -> "Diff":
        self._post_step = post_step
        return self

    # ───────────────────────────────────────────────────────────────
    #  State
    # ───────────────────────────────────────────────────────────────

    @property
    def steps(self) -> int:
        """Number of completed steps."""
        return self._steps

    @property
    def visited(self) -> dict[int, Node]:
        return self._visited

    @property
    def queue(self) -> PriorityQueue:
        return self._queue

    def is_complete(self) -> bool:
        return self.terminal.id in self._visited

    # ───────────────────────────────────────────────────────────────
    #  Graph
    # ───────────────────────────────────────────────────────────────

    def node(self, x: int, y: int) -> Node:
        """The node at (x, y); the terminal coordinates give the terminal singleton."""
        if x == self.terminal.x and y == self.terminal.y:
            return self.terminal
        return Node(x, y, x * self._stride + y)

    def _matches(self, x: int, y: int) -> bool:
        return (x < len(self.source) and y < len(self.target)
                and self.source[x] == self.target[y])

    def _follow_diagonal(self, x: int, y: int) -> Node:
        while self._matches(x, y):
            x += 1
            y += 1
        return self.node(x, y)

    def neighbors(self, node: Node) -> list[Node]:
        """Fresh (unrecorded) neighbor nodes, each pushed along its diagonal run."""
        x, y = node.x, node.y

        if self._matches(x, y):
            return [self._follow_diagonal(x + 1, y + 1)]

        result = []
        if x + 1 <= len(self.source):
            result.append(self._follow_diagonal(x + 1, y))   # delete
        if y + 1 <= len(self.target):
            result.append(self._follow_diagonal(x, y + 1))   # insert
        return result

    def score(self, node: Node) -> float:
        progress = node.x + node.y
        remaining = math.hypot(len(self.source) - node.x, len(self.target) - node.y)
        raw = max(progress, progress - remaining) - DEPTH_PENALTY * node.depth
        return max(0.0, raw)

    # ───────────────────────────────────────────────────────────────
    #  Search
    # ───────────────────────────────────────────────────────────────

    def step(self) -> bool:
        """
        Expand one frontier node.  Returns True once the terminal is known.
        """
        if self._queue.is_empty():
            raise DiffError("frontier exhausted before reaching the terminal node")

        if self._steps > 0 and self._policy(self._steps, self._rng):
            index = self._queue.sample_index(self._rng)
        else:
            index = 0

        current, _ = self._queue[index]
        if current is self.terminal:
            self._steps += 1
            self._post_step(self)
            return True

        self._queue.remove(index)

        depth = current.depth + 1
        for neighbor in self.neighbors(current):
            known = self._visited.get(neighbor.id)
            if known is not None:
                if depth < known.depth:
                    known.depth = depth
                    known.predecessor = current.id
                continue

            neighbor.depth = depth
            neighbor.predecessor = current.id
            self._visited[neighbor.id] = neighbor
            self._queue.push(neighbor, self.score(neighbor))

        self._steps += 1
        self._post_step(self)
        return self.is_complete()

    def compute_path(self) -> list[Node]:
        """
        Search until the terminal is discovered and return the path,
        terminal first and origin last.
        """
        while not self.is_complete():
            if self.max_steps is not None and self._steps >= self.max_steps:
                logger.warning("Step budget of %d exhausted (%d nodes visited)",
                               self.max_steps, len(self._visited))
                raise StepLimitExceeded(self._steps)
            self.step()

        path = self._reconstruct()
        logger.debug("Path of %d nodes after %d steps (%d nodes visited)",
                     len(path), self._steps, len(self._visited))
        return path

    def _reconstruct(self) -> list[Node]:
        path: list[Node] = []
        current = self._visited[self.terminal.id]
        while True:
            path.append(current)
            if current.predecessor is None or current.predecessor == self.origin.id:
                break
            current = self._visited[current.predecessor]
        path.append(self.origin)
        return path

    def visualize(self) -> str:
        """
        Explored region of the grid: one row per x, one column per y,
        'o' for visited nodes and '-' for the rest.
        """
        rows = []
        for x in range(len(self.source) + 1):
            rows.append("".join(
                "o" if x * self._stride + y in self._visited else "-"
                for y in range(len(self.target) + 1)
            ))
        return "\n".join(rows)

    # ───────────────────────────────────────────────────────────────
    #  Codec
    # ───────────────────────────────────────────────────────────────

    def serialize(self, path: Sequence) -> str:
        return serialize_path(path, self.target)

    @staticmethod
    def apply(source: str, script: str) -> str:
        return apply_script(source, script)


# ═══════════════════════════════════════════════════════════════════
#  ONE-SHOT DIFF
# ═══════════════════════════════════════════════════════════════════

def diff(source: Sequence, target: Sequence, trials: int = DEFAULT_TRIALS,
         **options) -> str:
    """
    Run `trials` independent searches and return the script of the
    shortest path found.

    More trials trade time for a shorter (never guaranteed shortest)
    script.  `options` are passed to every Diff.
    """
    if trials < 1:
        raise ValueError(f"trials must be positive, got {trials!r}")

    best: Optional[list[Node]] = None
    for trial in range(trials):
        path = Diff(source, target, **options).compute_path()
        logger.debug("Trial %d/%d: path of %d nodes", trial + 1, trials, len(path))
        if best is None or len(path) < len(best):
            best = path

    logger.debug("Keeping path of %d nodes", len(best))
    return Diff(source, target, **options).serialize(best)
