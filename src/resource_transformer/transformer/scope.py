# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Scope: traversal state for one node of the include tree.

Scopes are immutable. A child scope receives its ancestor path by value,
so the tree never holds back-references to parent scopes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..errors import IncludeDepthExceededError
from .includes import SEPARATOR, is_requested
from .resources import ResourceAbstract

if TYPE_CHECKING:
    from .manager import TransformManager


@dataclass(frozen=True)
class Scope:
    """One (resource, transformer, include) node.

    Attributes:
        manager: Owner of the requested includes, serializer, engine and settings.
        resource: The wrapper being resolved.
        ctx: Opaque caller context handed to every transform and resolver.
        scope_identifier: Include name that produced this scope (None at the root).
        parent_scopes: Include names of all ancestors, root first.
    """

    manager: TransformManager
    resource: ResourceAbstract
    ctx: Any = None
    scope_identifier: str | None = None
    parent_scopes: tuple[str, ...] = ()

    @property
    def is_root(self) -> bool:
        return self.scope_identifier is None and not self.parent_scopes

    @property
    def identifier_path(self) -> tuple[str, ...]:
        """Ancestors plus this scope's own identifier."""
        if self.scope_identifier:
            return (*self.parent_scopes, self.scope_identifier)
        return self.parent_scopes

    @property
    def depth(self) -> int:
        return len(self.identifier_path)

    def full_path(self, include: str) -> str:
        """Fully-qualified dotted path of an include below this scope."""
        return SEPARATOR.join((*self.identifier_path, include))

    def is_requested(self, include: str) -> bool:
        return is_requested(self.full_path(include), self.manager.requested_includes)

    def child(self, resource: ResourceAbstract, include: str) -> Scope:
        """Create the scope for an included resource.

        Raises:
            IncludeDepthExceededError: if the child would nest deeper than
                settings.max_include_depth.
        """
        max_depth = self.manager.settings.max_include_depth
        if self.depth + 1 > max_depth:
            raise IncludeDepthExceededError(self.full_path(include), max_depth)
        return Scope(
            manager=self.manager,
            resource=resource,
            ctx=self.ctx,
            scope_identifier=include,
            parent_scopes=self.identifier_path,
        )

    async def to_plain(self) -> Any:
        """Resolve this scope into plain data."""
        return await self.manager.engine.resolve(self)
