# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Include request parsing and matching.

Callers request includes as fully-qualified dotted paths ("books.author").
A path is requested when it equals, or is a leading segment prefix of,
one of those entries: "books.author" authorizes both "books" and
"books.author", but "books" alone never authorizes "books.author".
"""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import InvalidIncludeError

SEPARATOR = "."


def _split(path: str) -> tuple[str, ...]:
    return tuple(path.split(SEPARATOR))


def parse_includes(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """Normalize a caller include request into an ordered, unique tuple.

    Accepts None, a comma-separated string ("author,books.author") or an
    iterable of such strings. Whitespace is stripped and empty entries are
    dropped.

    Raises:
        InvalidIncludeError: if an entry has an empty segment ("a..b").
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]

    parsed: dict[str, None] = {}
    for entry in raw:
        for part in entry.split(","):
            include = part.strip()
            if not include:
                continue
            if any(not segment.strip() for segment in _split(include)):
                raise InvalidIncludeError(include)
            normalized = SEPARATOR.join(segment.strip() for segment in _split(include))
            parsed[normalized] = None
    return tuple(parsed)


def is_requested(path: str, requested: Iterable[str]) -> bool:
    """Return True if the dotted path is covered by a requested include."""
    segments = _split(path)
    depth = len(segments)
    for entry in requested:
        entry_segments = _split(entry)
        if entry_segments[:depth] == segments:
            return True
    return False


def expand_includes(requested: Iterable[str]) -> frozenset[str]:
    """Return every path authorized by the request, ancestors included.

    >>> sorted(expand_includes(["books.author"]))
    ['books', 'books.author']
    """
    expanded: set[str] = set()
    for entry in requested:
        segments = _split(entry)
        for i in range(1, len(segments) + 1):
            expanded.add(SEPARATOR.join(segments[:i]))
    return frozenset(expanded)
