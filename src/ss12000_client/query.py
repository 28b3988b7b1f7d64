"""
Query string encoding for SS12000 filters.

Filter values are a closed set of types:
- str, int: canonical string form
- bool: lowercase "true"/"false"
- date: YYYY-MM-DD
- datetime: ISO 8601 with UTC offset (naive values are taken as UTC)
- list/tuple of str: one key=value pair per element, in order

None means "filter not set" and never reaches the wire.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import parse_qsl, quote

FilterValue = Union[str, bool, int, date, datetime, Sequence[str]]
QueryParams = List[Tuple[str, str]]
Filters = Union[Mapping[str, Optional[FilterValue]], Iterable[Tuple[str, Any]]]

_VALID_ESCAPE_RE = re.compile(r"%[0-9A-Fa-f]{2}")


def format_date(value: date) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def encode_scalar(value: Any) -> str:
    """Encode one non-list filter value; raises TypeError for unsupported types."""
    if isinstance(value, Enum):
        value = value.value
    # bool is an int subclass and datetime is a date subclass: order matters.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return format_date(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Unsupported filter value type: {type(value).__name__}")


def to_query_params(filters: Optional[Filters]) -> QueryParams:
    """
    Flatten a filter mapping into an ordered list of (key, value) pairs.

    Accepts a mapping or an iterable of pairs (an existing parameter set).
    """
    params: QueryParams = []
    if not filters:
        return params

    items = filters.items() if isinstance(filters, Mapping) else filters
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                if not isinstance(item, str):
                    raise TypeError(
                        f"List filter {key!r} accepts strings only, "
                        f"got {type(item).__name__}"
                    )
                params.append((key, item))
        else:
            params.append((key, encode_scalar(value)))
    return params


def quote_component(text: str) -> str:
    """
    Percent-encode a key, value or path segment.

    Valid %XX escapes already present are kept as-is, so quoting an
    already-quoted component returns it unchanged.
    """
    stray_percent = "%" in _VALID_ESCAPE_RE.sub("", text)
    safe = "" if stray_percent else "%"
    return quote(text, safe=safe)


def encode_query(params: Iterable[Tuple[str, str]]) -> str:
    return "&".join(f"{quote_component(k)}={quote_component(v)}" for k, v in params)


def parse_query(query: str) -> QueryParams:
    """Parse an encoded query string back into ordered (key, value) pairs."""
    if query.startswith("?"):
        query = query[1:]
    return parse_qsl(query, keep_blank_values=True)


def append_query(uri: str, params: Iterable[Tuple[str, str]]) -> str:
    """Append encoded params to uri, keeping its path, query and fragment."""
    encoded = encode_query(params)
    if not encoded:
        return uri

    base, has_fragment, fragment = uri.partition("#")
    if "?" not in base:
        joiner = "?"
    elif base.endswith(("?", "&")):
        joiner = ""
    else:
        joiner = "&"

    result = f"{base}{joiner}{encoded}"
    if has_fragment:
        result = f"{result}#{fragment}"
    return result


def join_url(base_url: str, path: str) -> str:
    """Join base endpoint and relative path without dropping base path segments."""
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


__all__ = [
    "FilterValue",
    "Filters",
    "QueryParams",
    "format_date",
    "format_timestamp",
    "encode_scalar",
    "to_query_params",
    "quote_component",
    "encode_query",
    "parse_query",
    "append_query",
    "join_url",
]
