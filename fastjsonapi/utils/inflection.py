"""Name inflection for attribute keys and resource types."""

from __future__ import annotations

import re
from functools import lru_cache

import inflect

from fastjsonapi.config import get_settings

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\s_\-]+")

# Words inflect gets wrong for resource names, or that must stay unchanged.
IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "child": "children",
    "data": "data",
    "media": "media",
    "metadata": "metadata",
    "news": "news",
    "series": "series",
    "species": "species",
    "status": "statuses",
    "information": "information",
}

_engine = inflect.engine()


def _words(name: str) -> list[str]:
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _CAMEL_BOUNDARY.sub(r"\1_\2", name)
    return [word.lower() for word in _SEPARATORS.split(name) if word]


def dasherize(name: str) -> str:
    """Return ``name`` as lowercase hyphen-separated words (``isPublic`` -> ``is-public``)."""
    return "-".join(_words(name))


def underscore(name: str) -> str:
    """Return ``name`` as lowercase snake_case (``BlogPost`` -> ``blog_post``)."""
    return "_".join(_words(name))


@lru_cache(maxsize=512)
def _inflect_plural(word: str) -> str:
    return _engine.plural_noun(word)


def _pluralize_word(word: str) -> str:
    configured = get_settings().irregular_plurals
    if word in configured:
        return configured[word]
    if word in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[word]
    return _inflect_plural(word)


def pluralize(name: str) -> str:
    """Pluralize the last word of a possibly compound name, keeping its separators."""
    match = re.search(r"([A-Za-z0-9]+)$", name)
    if match is None:
        return name
    head, last = name[: match.start()], match.group(1)
    plural = _pluralize_word(last.lower())
    if last[:1].isupper():
        plural = plural[:1].upper() + plural[1:]
    return head + plural


def resource_type(model_name: str) -> str:
    """Return the JSON:API type for a singular model name (``categorization`` -> ``categorizations``)."""
    return dasherize(pluralize(underscore(model_name)))
