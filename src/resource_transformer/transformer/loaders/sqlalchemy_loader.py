# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Loader for SQLAlchemy mapped instances bound to an AsyncSession.

Only relationship attributes that are still unloaded are refreshed. A
relationship loaded as None (or an empty list) counts as loaded, so
known-empty relations never trigger a query.

Usage:
    async with session_factory() as session:
        books = (await session.scalars(select(Book))).all()
        payload = await transform(
            books,
            BookTransformer,
            includes=["author"],
            loaders=[SQLAlchemyLoader(session)],
        )
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from .base import EagerLoader


class SQLAlchemyLoader(EagerLoader):
    """Refreshes unloaded relationships through session.refresh()."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def supports(self, data: Any) -> bool:
        state = inspect(data, raiseerr=False)
        return state is not None and getattr(state, "mapper", None) is not None and hasattr(state, "unloaded")

    def pending_relations(self, data: Any, includes: Sequence[str]) -> list[str]:
        state = inspect(data)
        relationships = state.mapper.relationships
        unloaded = state.unloaded
        return [name for name in includes if name in relationships and name in unloaded]

    async def ensure_loaded(self, data: Any, relation_names: Sequence[str]) -> None:
        await self._session.refresh(data, attribute_names=list(relation_names))
