"""Document loading and normalization helpers.

Responsibilities:
- Read a file from disk and parse it as JSON
- Rewrite any legal GeoJSON root (bare geometry, Feature,
  FeatureCollection) into one canonical FeatureCollection dict
- Flatten a feature's property bag into ``dict[str, str]``
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from geoson.core.constants import TYPE_FEATURE, TYPE_FEATURE_COLLECTION
from geoson.core.exceptions import MalformedDocument, ReadError

_COMPACT_SEPARATORS = (",", ":")


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_document(path: Path | str, *, encoding: str = "utf-8") -> Any:
    """Read *path* and return the parsed JSON value.

    Raises:
        ReadError: If the file cannot be opened or read.
        MalformedDocument: If the content is not valid JSON.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        msg = f"Not valid JSON: cannot decode \"{path}\" as {encoding}: {exc}"
        raise MalformedDocument(msg) from exc
    except OSError as exc:
        msg = f'cannot open "{path}"'
        raise ReadError(msg) from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Not valid JSON: {exc}"
        raise MalformedDocument(msg) from exc


# ---------------------------------------------------------------------------
# Root-shape normalization
# ---------------------------------------------------------------------------


def normalize_document(root: Any) -> dict[str, Any]:
    """Return *root* as a FeatureCollection dict.

    - ``FeatureCollection``: returned unchanged.
    - ``Feature``: wrapped as the only member of ``features``.
    - Any other ``type``: treated as a bare geometry, wrapped in a
      Feature with empty properties, then in a FeatureCollection.

    The input is never mutated.

    Raises:
        MalformedDocument: If *root* is not an object with a string ``type``.
    """
    if not isinstance(root, dict) or not isinstance(root.get("type"), str):
        msg = "top-level object has no string 'type' field"
        raise MalformedDocument(msg)

    doc_type = root["type"]

    if doc_type == TYPE_FEATURE_COLLECTION:
        return root

    if doc_type == TYPE_FEATURE:
        return {"type": TYPE_FEATURE_COLLECTION, "features": [root]}

    feature = {"type": TYPE_FEATURE, "geometry": root, "properties": {}}
    return {"type": TYPE_FEATURE_COLLECTION, "features": [feature]}


# ---------------------------------------------------------------------------
# Property flattening
# ---------------------------------------------------------------------------


def to_json_text(value: Any) -> str:
    """Serialise *value* to compact JSON text (``[1,2,3]``, ``true``, ``42``)."""
    return json.dumps(value, separators=_COMPACT_SEPARATORS, ensure_ascii=False)


def parse_properties(props: dict[str, Any] | None) -> dict[str, str]:
    """Flatten a JSON property object into string keys and string values.

    Strings are copied verbatim; every other value becomes its JSON text.
    Lossy: only string values keep their type across a round trip.
    """
    if props is None:
        return {}
    return {
        str(key): value if isinstance(value, str) else to_json_text(value)
        for key, value in props.items()
    }
