"""Call outcomes: Success | Empty | Failure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .errors import SS12000ClientError

JsonValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


class JsonObject(dict):
    """
    Decoded JSON object whose key lookup tolerates casing differences.

    Exact keys win; otherwise the first key that matches case-insensitively is
    used. Iteration and equality behave like a plain dict.
    """

    def _fold(self, key: Any) -> Any:
        if isinstance(key, str) and not dict.__contains__(self, key):
            folded = key.casefold()
            for existing in self.keys():
                if isinstance(existing, str) and existing.casefold() == folded:
                    return existing
        return key

    def __getitem__(self, key: Any) -> Any:
        return dict.__getitem__(self, self._fold(key))

    def __contains__(self, key: object) -> bool:
        return dict.__contains__(self, self._fold(key))

    def get(self, key: Any, default: Any = None) -> Any:
        return dict.get(self, self._fold(key), default)


@dataclass(frozen=True)
class Success:
    value: JsonValue
    status_code: int = 200

    ok = True

    def unwrap(self) -> JsonValue:
        return self.value


@dataclass(frozen=True)
class Empty:
    status_code: int = 204

    ok = True

    def unwrap(self) -> None:
        return None


@dataclass(frozen=True)
class Failure:
    error: SS12000ClientError

    ok = False

    @property
    def status_code(self) -> Optional[int]:
        return self.error.status_code

    def unwrap(self) -> JsonValue:
        raise self.error


Outcome = Union[Success, Empty, Failure]


def page_token(value: JsonValue) -> Optional[str]:
    """Return the continuation token of a decoded list response, if any."""
    if isinstance(value, dict):
        token = value.get("pageToken")
        if isinstance(token, str) and token:
            return token
    return None


__all__ = [
    "JsonValue",
    "JsonObject",
    "Success",
    "Empty",
    "Failure",
    "Outcome",
    "page_token",
]
