"""
changeset.formats — Convert edit scripts to and from plain data.

Supported conversions:
    • Edit ↔ dict  {"op": "move", "destination": 3, "origin": 1}
    • list[Edit] ↔ JSON string
"""

import json
from collections.abc import Mapping
from typing import Any, Iterable

from .core import Edit, Operation


OPERATION_NAMES = {
    Operation.INSERTION: "insertion",
    Operation.DELETION: "deletion",
    Operation.SUBSTITUTION: "substitution",
    Operation.MOVE: "move",
}

_OPERATIONS_BY_NAME = {name: op for op, name in OPERATION_NAMES.items()}


# ═══════════════════════════════════════════════════════════════════
#  EDIT ↔ PYTHON OBJECTS
# ═══════════════════════════════════════════════════════════════════

def edit_to_python(edit: Edit) -> dict[str, Any]:
    """
    Convert an edit to a plain dict.

    Only moves carry an "origin" key.
    """
    if not isinstance(edit, Edit):
        raise TypeError(f"Expected Edit, got {type(edit)}")
    obj: dict[str, Any] = {
        "op": OPERATION_NAMES[edit.operation],
        "destination": edit.destination,
    }
    if edit.operation is Operation.MOVE:
        obj["origin"] = edit.origin
    return obj


def edit_from_python(obj: Any) -> Edit:
    """Inverse of edit_to_python.  Accepts any mapping."""
    if not isinstance(obj, Mapping):
        raise TypeError(f"Expected mapping, got {type(obj)}")

    name = obj.get("op")
    if not isinstance(name, str) or name not in _OPERATIONS_BY_NAME:
        raise ValueError(f"Unknown edit operation: {name!r}")
    op = _OPERATIONS_BY_NAME[name]

    if "destination" not in obj:
        raise ValueError("Edit without destination")
    if op is Operation.MOVE:
        if "origin" not in obj:
            raise ValueError("Move edit without origin")
        return Edit(op, int(obj["destination"]), origin=int(obj["origin"]))
    return Edit(op, int(obj["destination"]))


# ═══════════════════════════════════════════════════════════════════
#  EDIT SCRIPTS ↔ JSON STRINGS
# ═══════════════════════════════════════════════════════════════════

def edits_to_json(edits: Iterable[Edit], **kwargs) -> str:
    """Serialize an edit script to a JSON array."""
    return json.dumps([edit_to_python(edit) for edit in edits], **kwargs)


def edits_from_json(text: str) -> list[Edit]:
    """Parse a JSON array produced by edits_to_json."""
    data = json.loads(text)
    if not isinstance(data, list):
        raise TypeError(f"Expected JSON array, got {type(data).__name__}")
    return [edit_from_python(obj) for obj in data]
