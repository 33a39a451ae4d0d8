# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Loader for active-record style models exposing load_many().

Expected model surface:
- load_many(names): async batch loader
- <relation>(): a callable attribute per relation
- get_related(name): the loaded value, or None when not loaded
- relations: optional mapping of loaded relations; an explicit None marks a
  relation known to be empty
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .base import EagerLoader

_MISSING = object()


class LoadManyLoader(EagerLoader):
    """Duck-typed loader for models with an async load_many()."""

    def supports(self, data: Any) -> bool:
        return callable(getattr(data, "load_many", None))

    def pending_relations(self, data: Any, includes: Sequence[str]) -> list[str]:
        relations = getattr(data, "relations", None)
        if not isinstance(relations, Mapping):
            relations = {}
        get_related = getattr(data, "get_related", None)
        pending = []
        for name in includes:
            if not callable(getattr(data, name, None)):
                continue
            if callable(get_related) and get_related(name) is not None:
                continue
            if relations.get(name, _MISSING) is None:
                continue
            pending.append(name)
        return pending

    async def ensure_loaded(self, data: Any, relation_names: Sequence[str]) -> None:
        await data.load_many(list(relation_names))
