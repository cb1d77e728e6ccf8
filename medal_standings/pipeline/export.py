"""
Serialized snapshot contract for presentation consumers.

The JSON shape is described by medal_standings/schemas/standings_snapshot.schema.json,
shipped with the package. Beyond the schema, the ordering invariants are
checked here: scores never increase down the list, ranks never decrease,
ties share a rank, and every leader has a zero gap.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from .models import StandingsSnapshot

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "standings_snapshot.schema.json"

_ORDERING_KEYS = ("weightedScore", "rank", "gapFromLeader")


class SnapshotValidationError(Exception):
    """Raised when a serialized snapshot breaks the output contract."""
    pass


def load_schema(schema_path: Path = SCHEMA_PATH) -> Dict[str, Any]:
    """Load a snapshot JSON schema; a missing or unreadable file is a validation error."""
    try:
        with open(schema_path) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotValidationError(f"Cannot load snapshot schema {schema_path}: {e}")


def _check_ordering(data: Any) -> None:
    if not isinstance(data, dict):
        raise SnapshotValidationError("Snapshot must be a JSON object")
    medals = data.get("medals")
    if not isinstance(medals, list):
        raise SnapshotValidationError("'medals' must be a list")
    for i, entry in enumerate(medals):
        if not isinstance(entry, dict):
            raise SnapshotValidationError(f"Entry {i} must be an object")
        missing = [key for key in _ORDERING_KEYS if key not in entry]
        if missing:
            raise SnapshotValidationError(f"Entry {i} missing required field(s): {', '.join(missing)}")

    for i in range(1, len(medals)):
        prev, cur = medals[i - 1], medals[i]
        if cur["weightedScore"] > prev["weightedScore"]:
            raise SnapshotValidationError(f"Entry {i} scores above entry {i - 1}")
        if cur["weightedScore"] == prev["weightedScore"] and cur["rank"] != prev["rank"]:
            raise SnapshotValidationError(f"Entries {i - 1} and {i} are tied but ranked differently")
        if cur["weightedScore"] < prev["weightedScore"] and cur["rank"] != i + 1:
            raise SnapshotValidationError(f"Entry {i} should be ranked {i + 1}, got {cur['rank']}")

    for i, entry in enumerate(medals):
        if entry["rank"] == 1 and entry["gapFromLeader"] != 0:
            raise SnapshotValidationError(f"Leader entry {i} has non-zero gap")


def validate_snapshot(data: Dict[str, Any], schema_path: Optional[Path] = SCHEMA_PATH) -> bool:
    """
    Validate a serialized snapshot against the schema and ordering rules.

    Args:
        data: Decoded snapshot JSON
        schema_path: Schema to validate against (None = ordering rules only)

    Returns:
        True if valid

    Raises:
        SnapshotValidationError: If validation fails
    """
    if schema_path is not None:
        schema = load_schema(schema_path)
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else "<root>"
            raise SnapshotValidationError(f"Schema validation failed at {path}: {e.message}")

    _check_ordering(data)
    return True


def write_snapshot(snapshot: StandingsSnapshot, path: Path) -> Path:
    """Validate and write a snapshot as indented JSON."""
    data = snapshot.to_dict()
    validate_snapshot(data)

    path = Path(path)
    if path.parent and not path.parent.exists():
        os.makedirs(path.parent, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return path
