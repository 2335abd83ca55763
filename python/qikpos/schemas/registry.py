"""Schema registry for the print job documents."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable

_DATA_DIR = Path(__file__).resolve().parent / "data"

_SCHEMA_FILES: Dict[str, Path] = {
    "receipt": _DATA_DIR / "receipt.schema.json",
    "label": _DATA_DIR / "label.schema.json",
}


def list_schemas() -> Iterable[str]:
    """Return the available schema names."""

    return sorted(_SCHEMA_FILES.keys())


@lru_cache(maxsize=None)
def get_schema(name: str) -> Dict[str, Any]:
    """Return a parsed schema document by name."""

    try:
        path = _SCHEMA_FILES[name]
    except KeyError as exc:
        options = ", ".join(sorted(_SCHEMA_FILES))
        raise KeyError(f"Unknown schema '{name}'. Available schemas: {options}") from exc
    return json.loads(path.read_text(encoding="utf-8"))


def get_definition(name: str, definition: str) -> Dict[str, Any]:
    """Return a schema that validates against one entry of ``definitions``.

    The definitions block is carried along so internal ``$ref`` pointers still
    resolve against the new root.
    """

    definitions = get_schema(name).get("definitions", {})
    if definition not in definitions:
        raise KeyError(f"Schema '{name}' has no definition '{definition}'")
    return {"definitions": definitions, "$ref": f"#/definitions/{definition}"}


def enum_values(name: str, definition: str) -> tuple[str, ...]:
    """Return the closed set of values of an enumerated definition."""

    return tuple(get_schema(name)["definitions"][definition]["enum"])
