"""Mapper functions between side-index JSON documents and Python values.

``index.json`` holds ``{"txn_ids": [...]}`` and ``sources.json`` holds
``{"paths": [...]}``. Decoding is permissive: a malformed document maps to
an empty value and the caller decides how to report it.
"""

import json
from typing import Any


class CorruptDocument(ValueError):
    """A side-index document could not be decoded."""


def _load(text: str) -> dict[str, Any]:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptDocument(str(e)) from e
    if not isinstance(doc, dict):
        raise CorruptDocument(f"expected a JSON object, got {type(doc).__name__}")
    return doc


def _string_list(doc: dict[str, Any], key: str) -> list[str]:
    values = doc.get(key, [])
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise CorruptDocument(f"'{key}' must be a list of strings")
    return values


def index_from_json(text: str) -> set[str]:
    """Decode index.json into the set of seen transaction identifiers."""
    return set(_string_list(_load(text), "txn_ids"))


def index_to_json(txn_ids: set[str]) -> str:
    """Encode seen transaction identifiers, sorted."""
    return json.dumps({"txn_ids": sorted(txn_ids)}, indent=2)


def sources_from_json(text: str) -> list[str]:
    """Decode sources.json into the list of imported source paths."""
    paths = []
    for path in _string_list(_load(text), "paths"):
        if path not in paths:
            paths.append(path)
    return paths


def sources_to_json(paths: list[str]) -> str:
    """Encode imported source paths, sorted."""
    return json.dumps({"paths": sorted(paths)}, indent=2)
