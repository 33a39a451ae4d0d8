# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""EagerLoader abstract base class.

A loader is the engine's only contact with the data layer. Before any
resolver runs, the engine asks the first loader that supports the domain
object which of the requested includes still need loading, then asks it to
load them in one batch. How they are loaded is the loader's business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class EagerLoader(ABC):
    """Abstract adapter between the engine and a data-access technology.

    Example:
        class DocumentLoader(EagerLoader):
            def supports(self, data) -> bool:
                return isinstance(data, Document)

            def pending_relations(self, data, includes) -> list[str]:
                return [name for name in includes if name in data.refs and not data.is_fetched(name)]

            async def ensure_loaded(self, data, relation_names) -> None:
                await data.fetch(*relation_names)
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def supports(self, data: Any) -> bool:
        """Return True if this loader knows how to load relations of data."""
        ...

    @abstractmethod
    def pending_relations(self, data: Any, includes: Sequence[str]) -> list[str]:
        """Return the includes that are loadable relations not loaded yet.

        Relations known to be empty must not be returned.
        """
        ...

    @abstractmethod
    async def ensure_loaded(self, data: Any, relation_names: Sequence[str]) -> None:
        """Load the named relations. Must be a no-op for loaded relations."""
        ...
