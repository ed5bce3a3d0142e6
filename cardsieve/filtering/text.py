"""
Path lookup and text helpers shared by search and sorting.

Cards are nested mappings addressed by dot paths such as
``contentArea.title``. Lookups never raise on a missing segment; they return
the caller's default instead.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from cardsieve.config import settings

_WHITESPACE = re.compile(r"\s+")

_MISSING = object()


def _list_index(current: Any, segment: str) -> int | None:
    """In-range integer index of ``segment`` into a list, or None."""
    if isinstance(current, Sequence) and not isinstance(current, str):
        if segment.lstrip("-").isdigit():
            index = int(segment)
            if -len(current) <= index < len(current):
                return index
    return None


def _step(current: Any, segment: str) -> Any:
    """Resolve one path segment, or _MISSING."""
    if isinstance(current, Mapping):
        return current.get(segment, _MISSING)
    index = _list_index(current, segment)
    if index is not None:
        return current[index]
    return _MISSING


def get_by_path(obj: Any, path: str, default: Any = None) -> Any:
    """
    Get the value at a dot-delimited path.

    Integer segments index into lists (``tags.0.id``).

    Returns:
        The value at the path, or ``default`` if any segment is missing.
    """
    current = obj
    for segment in path.split("."):
        current = _step(current, segment)
        if current is _MISSING:
            return default
    return current


def set_by_path(obj: Any, path: str, value: Any) -> Any:
    """
    Return a copy of ``obj`` with ``value`` stored at ``path``.

    Segments resolve the way get_by_path resolves them: integer segments
    index into lists. Only the mappings and lists along the path are copied;
    everything else is shared with the original. Missing intermediate
    segments are created as dicts.
    """
    head, _, rest = path.partition(".")

    index = _list_index(obj, head)
    if index is not None:
        updated_list = list(obj)
        updated_list[index] = set_by_path(obj[index], rest, value) if rest else value
        return updated_list

    updated = dict(obj) if isinstance(obj, Mapping) else {}
    if not rest:
        updated[head] = value
        return updated

    updated[head] = set_by_path(updated.get(head, {}), rest, value)
    return updated


def sanitize_text(text: Any) -> str:
    """
    Normalize text for matching: lower-case, trimmed, single-spaced.

    ``None`` becomes ``""``; other non-strings are stringified.
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return _WHITESPACE.sub(" ", text).strip().lower()


def highlight_search_field(value: Any, query: str, css_class: str | None = None) -> Any:
    """
    Wrap every case-insensitive literal occurrence of ``query`` in a span.

    Non-string values and empty queries come back unchanged.
    """
    if not isinstance(value, str) or not query:
        return value

    css_class = css_class or settings.highlight_css_class
    pattern = re.compile(re.escape(query), flags=re.IGNORECASE)
    return pattern.sub(lambda m: f'<span class="{css_class}">{m.group(0)}</span>', value)
