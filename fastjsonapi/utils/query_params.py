"""Helpers for JSON:API query parameter parsing."""

from __future__ import annotations

from typing import Any, Mapping


def _split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def parse_query_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize the JSON:API query parameters the read path understands."""
    normalized: dict[str, Any] = {"include": []}

    for key, value in params.items():
        if value is None:
            continue
        if key == "include":
            # duplicates would only repeat the same walk
            normalized["include"] = list(dict.fromkeys(_split_csv(str(value))))
    return normalized
