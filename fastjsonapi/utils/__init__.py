"""Utility helpers for inflection, routing and query parsing."""

from .concurrency import gather_all
from .inflection import dasherize, pluralize, resource_type, underscore
from .query_params import parse_query_params
from .routing import get_dynamic_segments, to_fastapi_path
from .server import normalize_port

__all__ = [
    "dasherize",
    "gather_all",
    "get_dynamic_segments",
    "normalize_port",
    "parse_query_params",
    "pluralize",
    "resource_type",
    "to_fastapi_path",
    "underscore",
]
