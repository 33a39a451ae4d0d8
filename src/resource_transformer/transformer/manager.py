# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""TransformManager: entry point that builds the root Scope.

Holds everything shared by one transformation call: the parsed include
request, the serializer, the resolution engine and the settings.

Usage:
    payload = await transform(book, BookTransformer, includes="author,reviews.user", ctx=request_ctx)
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Sequence
from typing import Any

import structlog

from ..config import Settings, get_settings
from ..metrics import TRANSFORMATION_DURATION, TRANSFORMATIONS_TOTAL
from .engine import ResolutionEngine
from .includes import expand_includes, parse_includes
from .loaders import EagerLoader, get_registered_loaders
from .resources import Collection, Item, Null, ResourceAbstract
from .scope import Scope
from .serializers import Serializer, get_serializer

logger = structlog.get_logger(__name__)


def to_resource(data: Any, transformer: Any, variant: str | None = None) -> ResourceAbstract:
    """Wrap raw caller input: list/tuple -> Collection, None -> Null, else Item."""
    if isinstance(data, ResourceAbstract):
        return data
    if data is None:
        return Null()
    if isinstance(data, (list, tuple)):
        return Collection(data, transformer, variant=variant)
    return Item(data, transformer, variant=variant)


def _transformer_label(transformer: Any) -> str:
    if isinstance(transformer, str):
        return transformer.partition(".")[0]
    if isinstance(transformer, type):
        return transformer.__name__
    return getattr(transformer, "name", None) or getattr(transformer, "__name__", type(transformer).__name__)


class TransformManager:
    """Configuration for one or more transformations with the same include request."""

    def __init__(
        self,
        includes: str | Iterable[str] | None = None,
        *,
        serializer: str | Serializer | None = None,
        loaders: Sequence[EagerLoader] | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.requested_includes = parse_includes(includes)
        self.serializer = get_serializer(serializer or self.settings.serializer)
        self.engine = ResolutionEngine(
            loaders if loaders is not None else get_registered_loaders(),
            parallel_collections=self.settings.parallel_collections,
            warn_on_key_collision=self.settings.warn_on_key_collision,
            enable_metrics=self.settings.enable_metrics,
        )

    def create_scope(self, resource: ResourceAbstract, ctx: Any = None) -> Scope:
        """Create the root scope for a resource."""
        return Scope(manager=self, resource=resource, ctx=ctx)

    async def transform(
        self,
        data: Any,
        transformer: Any,
        *,
        ctx: Any = None,
        variant: str | None = None,
    ) -> Any:
        """Transform an item or collection into plain data."""
        resource = to_resource(data, transformer, variant)
        label = _transformer_label(resource.transformer) if resource.transformer is not None else "null"
        logger.debug(
            "Starting transformation",
            transformer=label,
            authorized_includes=sorted(expand_includes(self.requested_includes)),
        )
        start = time.perf_counter()
        try:
            result = await self.create_scope(resource, ctx).to_plain()
        except Exception:
            logger.error(
                "Transformation failed",
                transformer=label,
                includes=list(self.requested_includes),
                exc_info=True,
            )
            if self.settings.enable_metrics:
                TRANSFORMATIONS_TOTAL.labels(transformer=label, result="error").inc()
            raise

        if self.settings.enable_metrics:
            TRANSFORMATIONS_TOTAL.labels(transformer=label, result="success").inc()
            TRANSFORMATION_DURATION.labels(transformer=label).observe(time.perf_counter() - start)
        return result


async def transform(
    data: Any,
    transformer: Any,
    *,
    includes: str | Iterable[str] | None = None,
    ctx: Any = None,
    variant: str | None = None,
    serializer: str | Serializer | None = None,
    loaders: Sequence[EagerLoader] | None = None,
    settings: Settings | None = None,
) -> Any:
    """Transform data with a one-off TransformManager."""
    manager = TransformManager(includes, serializer=serializer, loaders=loaders, settings=settings)
    return await manager.transform(data, transformer, ctx=ctx, variant=variant)
