"""Schema compatibility against a committed baseline.

The baseline lists the fields that must stay required at chord level and at
voicing level. Adding required fields is allowed; dropping a baseline field
from the schema's ``required`` list is a breaking change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chord_catalog.errors import SchemaCompatError, SchemaRemoval
from chord_catalog.validate.schema import BASELINE_PATH, SCHEMA_PATH, load_json

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


def required_fields(schema: Mapping[str, Any]) -> dict[str, set[str]]:
    """Extract the chord- and voicing-level required field sets from a schema.

    Examples
    --------
    >>> schema = {"required": ["id"], "properties": {"voicings": {"items": {"required": ["frets"]}}}}
    >>> required_fields(schema) == {"chord": {"id"}, "voicing": {"frets"}}
    True
    """
    voicing_items = schema.get("properties", {}).get("voicings", {}).get("items", {})
    return {
        "chord": set(schema.get("required", [])),
        "voicing": set(voicing_items.get("required", [])),
    }


def find_breaking_removals(schema: Mapping[str, Any], baseline: Mapping[str, Any]) -> list[SchemaRemoval]:
    """List every baseline-required field the schema no longer requires.

    Removals are returned chord section first, each in baseline order.
    """
    current = required_fields(schema)
    removals: list[SchemaRemoval] = []
    for section, key in (("chord", "chord_required"), ("voicing", "voicing_required")):
        for field in baseline.get(key, []):
            if field not in current[section]:
                removals.append(SchemaRemoval(section=section, field=field))
    return removals


def check_schema_compatibility(schema: Mapping[str, Any], baseline: Mapping[str, Any]) -> None:
    """Verify the schema still requires every baseline field.

    Parameters
    ----------
    schema : Mapping[str, Any]
        The currently declared chord schema.
    baseline : Mapping[str, Any]
        Snapshot with ``chord_required`` and ``voicing_required`` lists.

    Raises
    ------
    SchemaCompatError
        Listing every removed field, never only the first.
    """
    removals = find_breaking_removals(schema, baseline)
    if removals:
        raise SchemaCompatError(removals)


def check_schema_files(schema_path: Path | None = None, baseline_path: Path | None = None) -> None:
    """Load the schema and baseline files and check them.

    Defaults to the packaged ``chords.schema.json`` and
    ``schema-compat-baseline.json``.
    """
    schema = load_json(schema_path or SCHEMA_PATH)
    baseline = load_json(baseline_path or BASELINE_PATH)
    check_schema_compatibility(schema, baseline)
