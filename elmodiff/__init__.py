"""
elmodiff — Quick randomized diffing
===================================

Computes a short, reversible edit script between two sequences and
replays it to rebuild the target.

    script = diff("ABCABBA", "CBABAC")     → e.g. "0-1,1:B,5,5:C"
    apply("ABCABBA", script)               → "CBABAC"

The script is found by a randomized best-first walk of the edit graph
(see elmodiff.core), inspired by Myers' O(ND) algorithm but trading
optimality for simplicity: the script is short, not necessarily the
shortest.  Running several trials (the default is 3) and keeping the
best shortens it further.

The round-trip law always holds:

    apply(source, diff(source, target)) == target
"""

import logging

from elmodiff.core import (
    # Search
    Node,
    Diff,
    diff,
    DEFAULT_TRIALS,
)
from elmodiff.codec import (
    ScriptOp, ScriptEntry, serialize, apply, split_script,
)
from elmodiff.errors import (
    DiffError, EmptyInputError, InvalidTransitionError,
    ScriptParseError, PatchError, StepLimitExceeded,
)
from elmodiff.policy import (
    DecayPolicy, ConstantPolicy, SchedulePolicy,
    inverse, inverse_sqrt, inverse_log, exponential,
)
from elmodiff.pqueue import PriorityQueue

logging.getLogger("elmodiff").addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "Node", "Diff", "diff", "DEFAULT_TRIALS",
    "ScriptOp", "ScriptEntry", "serialize", "apply", "split_script",
    "DiffError", "EmptyInputError", "InvalidTransitionError",
    "ScriptParseError", "PatchError", "StepLimitExceeded",
    "DecayPolicy", "ConstantPolicy", "SchedulePolicy",
    "inverse", "inverse_sqrt", "inverse_log", "exponential",
    "PriorityQueue",
]
