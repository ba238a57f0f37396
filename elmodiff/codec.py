"""
elmodiff.codec — Edit scripts: path → text and text → target.

SCRIPT FORMAT
─────────────
A script is plain text, comma-separated:

    script = token (',' token)*
    token  = digits                     delete one symbol
           | digits '-' digits          delete an inclusive range
           | digits ':' escaped-text    insert a literal run

Delete indices are SOURCE coordinates; insert indices are TARGET
coordinates.  Inside insert text, '\\' is written '\\\\' and ',' is
written '\\,'.

Example (source "ABCABBA", target "CBABAC"):

    0-1,1:B,5,5:C

    "ABCABBA"  --0-1-->  "CABBA"  --1:B-->  "CBABBA"
               --5-->    "CBABA"  --5:C-->  "CBABAC"

APPLYING
────────
Tokens are applied in script order to a working copy.  Walking a path
forward, the working copy at node (x, y) is always

    target[:y] + source[x:]

so an insert at target index y lands at working position y unchanged,
and a delete of source index x lands at

    x - (symbols deleted so far) + (symbols inserted so far)
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

from .errors import InvalidTransitionError, PatchError, ScriptParseError


SEPARATOR = ","
ESCAPE = "\\"

_DELETE_ONE = re.compile(r"(\d+)")
_DELETE_RANGE = re.compile(r"(\d+)-(\d+)")
_INSERT = re.compile(r"(\d+):(.+)", re.DOTALL)


class ScriptOp(Enum):
    """Kinds of script entries."""
    INSERT = auto()
    DELETE = auto()


@dataclass
class ScriptEntry:
    """A run of inserts (start..end in target) or deletes (start..end in source)."""
    op: ScriptOp
    start: int
    end: int
    text: str = ""

    def encode(self) -> str:
        if self.op == ScriptOp.INSERT:
            return f"{self.start}:{escape(self.text)}"
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"


def escape(text: str) -> str:
    return text.replace(ESCAPE, ESCAPE * 2).replace(SEPARATOR, ESCAPE + SEPARATOR)


# ═══════════════════════════════════════════════════════════════════
#  SERIALIZE
# ═══════════════════════════════════════════════════════════════════

def _classify(a, b) -> ScriptOp | None:
    """
    The move from a to b: an insert or delete followed by a (possibly
    empty) diagonal run, or a bare diagonal run (None).
    """
    dx = b.x - a.x
    dy = b.y - a.y
    if dx >= 0 and dy == dx + 1:
        return ScriptOp.INSERT
    if dy >= 0 and dx == dy + 1:
        return ScriptOp.DELETE
    if dx == dy and dx > 0:
        return None
    raise InvalidTransitionError(a, b)


def script_entries(path: Sequence, target: Sequence) -> list[ScriptEntry]:
    """
    Group the transitions of a terminal-to-origin path into runs.

    Consecutive inserts merge when their target indices are contiguous;
    consecutive deletes merge when their source indices are contiguous.
    A diagonal run between two edits breaks contiguity by construction.
    """
    forward = list(reversed(path))
    entries: list[ScriptEntry] = []

    for a, b in zip(forward, forward[1:]):
        op = _classify(a, b)
        if op is None:
            continue

        last = entries[-1] if entries else None
        if op == ScriptOp.INSERT:
            if last is not None and last.op == ScriptOp.INSERT and last.end + 1 == a.y:
                last.end = a.y
                last.text += target[a.y]
            else:
                entries.append(ScriptEntry(ScriptOp.INSERT, a.y, a.y, target[a.y]))
        else:
            if last is not None and last.op == ScriptOp.DELETE and last.end + 1 == a.x:
                last.end = a.x
            else:
                entries.append(ScriptEntry(ScriptOp.DELETE, a.x, a.x))

    return entries


def serialize(path: Sequence, target: Sequence) -> str:
    """
    Encode a path (terminal first, origin last) as a script.

    `path` holds points with .x/.y attributes; `target` supplies the
    inserted symbols, which must be strings.  A path made only of
    diagonal runs encodes to "".
    """
    return SEPARATOR.join(entry.encode() for entry in script_entries(path, target))


# ═══════════════════════════════════════════════════════════════════
#  APPLY
# ═══════════════════════════════════════════════════════════════════

def split_script(script: str) -> list[str]:
    """
    Split a script on unescaped commas and unescape each token.

        split_script("0,1:a\\,b")  →  ["0", "1:a,b"]
    """
    if not script:
        return []

    tokens: list[str] = []
    current: list[str] = []
    chars = iter(script)
    for ch in chars:
        if ch == ESCAPE:
            escaped = next(chars, None)
            if escaped is None:
                raise ScriptParseError("".join(current) + ESCAPE, "dangling escape")
            current.append(escaped)
        elif ch == SEPARATOR:
            tokens.append("".join(current))
            current = []
        else:
            current.append(ch)
    tokens.append("".join(current))
    return tokens


def apply(source: str, script: str) -> str:
    """
    Replay a script onto `source` and return the result.

    apply(source, serialize(path, target)) == target for every path
    found by the search.
    """
    working = list(source)
    deleted = 0
    inserted = 0

    for token in split_script(script):
        match = _INSERT.fullmatch(token)
        if match:
            position = int(match.group(1))
            text = match.group(2)
            if position > len(working):
                raise PatchError(token, position, len(working))
            working[position:position] = text
            inserted += len(text)
            continue

        match = _DELETE_RANGE.fullmatch(token)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if start > end:
                raise ScriptParseError(token, "inverted delete range")
        else:
            match = _DELETE_ONE.fullmatch(token)
            if not match:
                raise ScriptParseError(token)
            start = end = int(match.group(1))

        offset = deleted - inserted
        lo, hi = start - offset, end - offset
        if lo < 0 or hi >= len(working):
            raise PatchError(token, lo if lo < 0 else hi, len(working))
        del working[lo:hi + 1]
        deleted += end - start + 1

    return "".join(working)
