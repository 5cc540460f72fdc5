"""
changeset.core — Edit scripts between ordered sequences
========================================================

THE PROBLEM
───────────

Given two snapshots of ordered data, a source and a target, describe the
change between them as a short list of atomic edits:

    • INSERTION     an element of the target that the source lacks
    • DELETION      an element of the source that the target lacks
    • SUBSTITUTION  a source element replaced in place
    • MOVE          a source element that reappears elsewhere in the target

Elements are compared with ``==`` only.  Nothing is hashed, nothing is
recursed into.


THE TABLE
─────────

Wagner–Fischer tabulation over an (m+1) × (n+1) grid, where cell (i, j)
describes the cheapest way to turn ``source[:i]`` into ``target[:j]``:

    D[i][0] = i deletions
    D[0][j] = j insertions
    D[i][j] = D[i-1][j-1]                         if source[i-1] == target[j-1]
            = 1 + min(D[i-1][j],                  (delete source[i-1])
                      D[i][j-1],                  (insert target[j-1])
                      D[i-1][j-1])                (substitute source[i-1])

Ties are broken deletion, then insertion, then substitution.  Consumers
rely on this exact order, so it is part of the contract.

Each cell keeps its cost and a one-byte pointer to the cell it came from.
The script is read back once, from (m, n) to (0, 0).  The table is filled
column by column (target outer, source inner) by iterating both
collections, so neither needs random access.


INDEX CONVENTION
────────────────

Indices follow a list view's batched-update model: deletions and
substitutions refer to the source, insertions refer to the target.

    Deletion(i)        source[i] is removed
    Insertion(j)       target[j] is inserted
    Substitution(i)    source[i] is replaced
    Move(o → j)        source[o] lands at target[j]


MOVES
─────

After tabulation, a deletion and an insertion of equal values collapse
into a single move.  Deletions are visited in script order and each is
paired with the first unpaired insertion, in script order, holding an
equal value.  The move takes the deletion's place in the script and the
insertion is dropped.

License: MIT
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Collection, Iterable, Iterator, Optional

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  EDIT MODEL
# ═══════════════════════════════════════════════════════════════════

class Operation(Enum):
    """Kinds of atomic edit."""
    INSERTION = auto()
    DELETION = auto()
    SUBSTITUTION = auto()
    MOVE = auto()


@dataclass(frozen=True, slots=True, eq=False)
class Edit:
    """
    A single atomic edit.

    ``destination`` is a source index for deletions and substitutions and a
    target index for insertions and moves.  ``origin`` is only meaningful
    for moves, where it is the source index the element came from.

    Examples:
        Edit(Operation.DELETION, 0)
        Edit(Operation.MOVE, 3, origin=1)
    """
    operation: Operation
    destination: int
    origin: Optional[int] = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edit):
            return NotImplemented
        if self.destination != other.destination:
            return False
        if self.operation is not other.operation:
            return False
        if self.operation is Operation.MOVE:
            return self.origin == other.origin
        return True

    def __hash__(self) -> int:
        origin = self.origin if self.operation is Operation.MOVE else None
        return hash((self.operation, self.destination, origin))

    def __repr__(self) -> str:
        name = self.operation.name.capitalize()
        if self.operation is Operation.MOVE:
            return f"{name}({self.origin} → {self.destination})"
        return f"{name}({self.destination})"


# ═══════════════════════════════════════════════════════════════════
#  TABULATION
# ═══════════════════════════════════════════════════════════════════

# Backtracking pointers, one byte per cell.
MATCH = 0
DELETE = 1
INSERT = 2
SUBSTITUTE = 3


def levenshtein(source: Collection[Any], target: Collection[Any]) -> int:
    """Classic Levenshtein distance between two sequences (cost only)."""
    m, n = len(source), len(target)
    if m == 0:
        return n
    if n == 0:
        return m

    # Two columns are enough when only the cost is wanted
    prev = list(range(m + 1))
    curr = [0] * (m + 1)

    for j, t_item in enumerate(target, 1):
        curr[0] = j
        for i, s_item in enumerate(source, 1):
            cost = 0 if s_item == t_item else 1
            curr[i] = min(
                curr[i - 1] + 1,      # deletion
                prev[i] + 1,          # insertion
                prev[i - 1] + cost,   # substitution
            )
        prev, curr = curr, prev

    return prev[m]


def _tabulate(source: Collection[Any], target: Collection[Any]) -> list[bytearray]:
    """
    Fill the pointer table, returned as columns: ``trace[j][i]`` is the
    step taken into cell (i, j).
    """
    m = len(source)

    trace = [bytearray([DELETE]) * (m + 1)]
    prev = list(range(m + 1))

    for j, t_item in enumerate(target, 1):
        column = bytearray(m + 1)
        column[0] = INSERT
        curr = [j] + [0] * m

        for i, s_item in enumerate(source, 1):
            if s_item == t_item:
                curr[i] = prev[i - 1]
                continue

            deletion = curr[i - 1]
            insertion = prev[i]
            substitution = prev[i - 1]

            cheapest = min(deletion, insertion, substitution)
            if deletion == cheapest:
                column[i] = DELETE
            elif insertion == cheapest:
                column[i] = INSERT
            else:
                column[i] = SUBSTITUTE
            curr[i] = cheapest + 1

        trace.append(column)
        prev = curr

    return trace


def edit_path(source: Collection[Any], target: Collection[Any]) -> list[Edit]:
    """
    The edit script before move detection: only insertions, deletions and
    substitutions.  Its length is the Levenshtein distance.
    """
    m, n = len(source), len(target)

    if m == 0 or n == 0:
        return ([Edit(Operation.DELETION, i) for i in range(m)]
                + [Edit(Operation.INSERTION, j) for j in range(n)])

    trace = _tabulate(source, target)

    path: list[Edit] = []
    i, j = m, n
    while i > 0 or j > 0:
        step = trace[j][i]
        if step == MATCH:
            i -= 1
            j -= 1
        elif step == DELETE:
            i -= 1
            path.append(Edit(Operation.DELETION, i))
        elif step == INSERT:
            j -= 1
            path.append(Edit(Operation.INSERTION, j))
        else:
            i -= 1
            j -= 1
            path.append(Edit(Operation.SUBSTITUTION, i))

    path.reverse()
    return path


# ═══════════════════════════════════════════════════════════════════
#  MOVE DETECTION
# ═══════════════════════════════════════════════════════════════════

def _check_index(index: Optional[int], size: int, side: str, edit: Edit) -> None:
    if index is None or not 0 <= index < size:
        raise ValueError(f"{edit!r}: {side} index {index} out of range 0..{size - 1}")


def _values_at(items: Iterable[Any], indices: set[int]) -> dict[int, Any]:
    """Pick out the elements at ``indices`` in one forward pass."""
    return {index: item for index, item in enumerate(items) if index in indices}


def collapse_moves(
    source: Collection[Any], target: Collection[Any], edits: list[Edit]
) -> list[Edit]:
    """
    Rewrite deletion/insertion pairs of equal values as moves.

    Deletions are visited in script order; each takes the first unpaired
    insertion (in script order) whose target value equals the deleted
    source value.  The resulting move replaces the deletion and the
    insertion is dropped.  Unpaired edits are kept as they are.

    Raises ValueError if a deletion or insertion index is out of range.
    """
    deletions = [k for k, e in enumerate(edits) if e.operation is Operation.DELETION]
    insertions = [k for k, e in enumerate(edits) if e.operation is Operation.INSERTION]
    if not deletions or not insertions:
        return list(edits)

    for k in deletions:
        _check_index(edits[k].destination, len(source), "source", edits[k])
    for k in insertions:
        _check_index(edits[k].destination, len(target), "target", edits[k])

    deleted = _values_at(source, {edits[k].destination for k in deletions})
    inserted = _values_at(target, {edits[k].destination for k in insertions})

    pairs: dict[int, int] = {}
    claimed: set[int] = set()
    for d in deletions:
        value = deleted[edits[d].destination]
        for k in insertions:
            if k not in claimed and inserted[edits[k].destination] == value:
                pairs[d] = k
                claimed.add(k)
                break

    result: list[Edit] = []
    for k, edit in enumerate(edits):
        if k in claimed:
            continue
        if k in pairs:
            landing = edits[pairs[k]].destination
            result.append(Edit(Operation.MOVE, landing, origin=edit.destination))
        else:
            result.append(edit)
    return result


def edit_distance(source: Collection[Any], target: Collection[Any]) -> list[Edit]:
    """
    Edit steps required to go from ``source`` to ``target``.

    This is the central function of the library.  ``source`` and ``target``
    may be any sized, re-iterable collections whose elements support
    ``==``; they are only ever walked front to back.

    The step count is ``len()`` of the result.  Before moves are collapsed
    it equals the Levenshtein distance; each move then stands in for one
    deletion plus one insertion.
    """
    logger.debug("tabulating %d x %d edit table", len(source) + 1, len(target) + 1)
    path = edit_path(source, target)
    edits = collapse_moves(source, target, path)
    logger.debug("edit path of %d steps, %d collapsed into moves",
                 len(path), len(path) - len(edits))
    return edits


# ═══════════════════════════════════════════════════════════════════
#  CHANGESET
# ═══════════════════════════════════════════════════════════════════

def _snapshot(items: Collection[Any]) -> Collection[Any]:
    """Immutable copy of ``items``; strings, bytes and tuples are kept as is."""
    if isinstance(items, (str, bytes, tuple)):
        return items
    return tuple(items)


@dataclass(frozen=True)
class Changeset:
    """
    The edits required to go from one collection to another.

    ``edits`` is computed once, when the changeset is built, and never
    changes afterwards.  A new pair of snapshots needs a new Changeset.

    Examples:
        Changeset("abc", "bcd").edits   # (Deletion(0), Insertion(2))
        Changeset("ab", "ba").edits     # (Move(1 → 0),)
    """
    origin: Collection[Any]
    destination: Collection[Any]
    edits: tuple[Edit, ...] = field(init=False)

    def __post_init__(self):
        # Edits describe these snapshots, never the caller's lists
        object.__setattr__(self, 'origin', _snapshot(self.origin))
        object.__setattr__(self, 'destination', _snapshot(self.destination))
        object.__setattr__(self, 'edits',
                           tuple(edit_distance(self.origin, self.destination)))

    def __len__(self) -> int:
        return len(self.edits)

    def __iter__(self) -> Iterator[Edit]:
        return iter(self.edits)

    def __repr__(self) -> str:
        return f"Changeset({list(self.edits)})"


# ═══════════════════════════════════════════════════════════════════
#  PATCH (apply an edit script)
# ═══════════════════════════════════════════════════════════════════

def patch(source: Iterable[Any], edits: Iterable[Edit], target: Iterable[Any]) -> list:
    """
    Apply an edit script the way a list view applies a batched update.

    Deletions, substitutions and move origins are read against ``source``;
    insertions and move destinations are slots in the result.  Surviving
    source elements fill the remaining slots in order.  ``target`` is the
    data source: inserted and substituted elements take their value from
    it, while moved elements carry their original value.

    The inverse of edit_distance:
        patch(a, edit_distance(a, b), b) == list(b)
    """
    source = list(source)
    target = list(target)

    vacated: set[int] = set()
    reloaded: set[int] = set()
    filled: dict[int, Any] = {}

    for edit in edits:
        op = edit.operation
        if op is Operation.INSERTION or op is Operation.MOVE:
            _check_index(edit.destination, len(target), "target", edit)
            if edit.destination in filled:
                raise ValueError(f"{edit!r}: target slot {edit.destination} filled twice")

        if op is Operation.INSERTION:
            filled[edit.destination] = target[edit.destination]
        elif op is Operation.MOVE:
            _check_index(edit.origin, len(source), "source", edit)
            if edit.origin in vacated:
                raise ValueError(f"{edit!r}: source index {edit.origin} removed twice")
            vacated.add(edit.origin)
            filled[edit.destination] = source[edit.origin]
        elif op is Operation.DELETION:
            _check_index(edit.destination, len(source), "source", edit)
            if edit.destination in vacated:
                raise ValueError(f"{edit!r}: source index {edit.destination} removed twice")
            vacated.add(edit.destination)
        else:
            _check_index(edit.destination, len(source), "source", edit)
            reloaded.add(edit.destination)

    if reloaded & vacated:
        raise ValueError(f"source indices {sorted(reloaded & vacated)} "
                         f"are both substituted and removed")

    survivors = [i for i in range(len(source)) if i not in vacated]
    open_slots = [j for j in range(len(target)) if j not in filled]
    if len(survivors) != len(open_slots):
        raise ValueError(f"{len(survivors)} surviving source elements "
                         f"for {len(open_slots)} open target slots")

    result: list[Any] = [None] * len(target)
    for j, value in filled.items():
        result[j] = value
    for i, j in zip(survivors, open_slots):
        result[j] = target[j] if i in reloaded else source[i]
    return result
