"""
changeset.batch — Group an edit script into a list-view update.

List views typically take a change as one batch: rows to delete and rows
to reload (indexed against the old contents), rows to insert (indexed
against the new contents), and rows to move from an old index to a new
one.  ``batch`` sorts an edit script into exactly those four buckets.

    batch(edit_distance("abc", "bcd"))
        → Batch(deletions=(0,), insertions=(2,), reloads=(), moves=())
"""

from dataclasses import dataclass
from typing import Iterable

from .core import Edit, Operation


@dataclass(frozen=True)
class Batch:
    """A batched update, each bucket sorted ascending."""
    deletions: tuple[int, ...] = ()
    insertions: tuple[int, ...] = ()
    reloads: tuple[int, ...] = ()
    moves: tuple[tuple[int, int], ...] = ()  # (origin, destination)

    def __len__(self) -> int:
        return (len(self.deletions) + len(self.insertions)
                + len(self.reloads) + len(self.moves))


def batch(edits: Iterable[Edit]) -> Batch:
    """Sort an edit script into deletions, insertions, reloads and moves."""
    deletions: list[int] = []
    insertions: list[int] = []
    reloads: list[int] = []
    moves: list[tuple[int, int]] = []

    for edit in edits:
        if edit.operation is Operation.DELETION:
            deletions.append(edit.destination)
        elif edit.operation is Operation.INSERTION:
            insertions.append(edit.destination)
        elif edit.operation is Operation.SUBSTITUTION:
            reloads.append(edit.destination)
        else:
            moves.append((edit.origin, edit.destination))

    return Batch(
        deletions=tuple(sorted(deletions)),
        insertions=tuple(sorted(insertions)),
        reloads=tuple(sorted(reloads)),
        moves=tuple(sorted(moves)),
    )
