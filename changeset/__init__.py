"""
Changeset
=========

Minimal edit scripts between two ordered sequences.

    edit_distance("abc", "bcd")   → [Deletion(0), Insertion(2)]
    edit_distance("ab", "ba")     → [Move(1 → 0)]
    edit_distance("cat", "cut")   → [Substitution(1)]

Given a source and a target snapshot of ordered data, a Changeset lists
the insertions, deletions, substitutions and moves that turn one into the
other.  Elements are compared by equality only.  Indices follow the
batched-update model of list views, so a script can drive an incremental
UI update directly:

  • Deletions and substitutions index the source
  • Insertions index the target
  • Moves go from a source index to a target index
"""

from changeset.core import (
    # Types
    Operation,
    Edit,
    Changeset,
    # Distance
    edit_distance,
    edit_path,
    levenshtein,
    collapse_moves,
    # Apply
    patch,
)
from changeset.batch import Batch, batch
from changeset.formats import (
    edit_to_python, edit_from_python, edits_to_json, edits_from_json,
)

__version__ = "0.1.0"
__all__ = [
    "Operation", "Edit", "Changeset",
    "edit_distance", "edit_path", "levenshtein", "collapse_moves",
    "patch",
    "Batch", "batch",
    "edit_to_python", "edit_from_python", "edits_to_json", "edits_from_json",
]
