# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Resolution Engine: turns a Scope into plain data.

Per domain object:
1. transform() produces the base fields
2. the transformer picks the includes to expand for this scope
3. the first supporting loader batch-loads the relations still missing
4. each include resolver runs in declared order; wrappers recurse into
   child scopes, raw values pass through
5. include results are merged over the base fields

Errors raised by transform(), resolvers or loaders propagate unmodified.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from ..errors import InvalidTransformOutputError
from ..metrics import EAGER_LOADS_TOTAL, INCLUDES_RESOLVED_TOTAL
from .base import TransformerAbstract
from .loaders import EagerLoader
from .registry import resolve_transformer
from .resources import Collection, Null, ResourceAbstract

if TYPE_CHECKING:
    from .scope import Scope

logger = structlog.get_logger(__name__)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class ResolutionEngine:
    """Resolves scopes recursively.

    Args:
        loaders: Eager loaders, consulted in order.
        parallel_collections: Transform collection elements concurrently.
            Output order always follows input order.
        warn_on_key_collision: Log include keys replacing a base field at
            warning level instead of debug.
        enable_metrics: Record Prometheus counters.
    """

    def __init__(
        self,
        loaders: Sequence[EagerLoader] = (),
        *,
        parallel_collections: bool = False,
        warn_on_key_collision: bool = True,
        enable_metrics: bool = True,
    ):
        self.loaders = list(loaders)
        self.parallel_collections = parallel_collections
        self.warn_on_key_collision = warn_on_key_collision
        self.enable_metrics = enable_metrics

    async def resolve(self, scope: Scope) -> Any:
        resource = scope.resource
        serializer = scope.manager.serializer
        top_level = scope.is_root

        if isinstance(resource, Null):
            return serializer.null(top_level=top_level)

        data = await _maybe_await(resource.data)

        if isinstance(resource, Collection):
            transformer, variant = resolve_transformer(resource.transformer, resource.variant)
            elements = list(data) if data is not None else []
            if self.parallel_collections:
                results = await self._gather_elements(scope, transformer, variant, elements)
                return serializer.collection(results, top_level=top_level)
            results = []
            for element in elements:
                results.append(await self._transform_item(scope, transformer, variant, element))
            return serializer.collection(results, top_level=top_level)

        if data is None:
            return serializer.null(top_level=top_level)

        transformer, variant = resolve_transformer(resource.transformer, resource.variant)
        transformed = await self._transform_item(scope, transformer, variant, data)
        return serializer.item(transformed, top_level=top_level)

    async def _gather_elements(
        self,
        scope: Scope,
        transformer: TransformerAbstract,
        variant: str | None,
        elements: list[Any],
    ) -> list[Any]:
        """Transform collection elements concurrently, in input order.

        The first failure cancels the remaining elements before it propagates.
        """
        tasks = [
            asyncio.ensure_future(self._transform_item(scope, transformer, variant, element))
            for element in elements
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _transform_item(
        self,
        scope: Scope,
        transformer: TransformerAbstract,
        variant: str | None,
        data: Any,
    ) -> Any:
        transform = transformer.get_transform(variant)
        transformed = await _maybe_await(transform(data, scope.ctx))

        includes = transformer.figure_out_includes(scope)
        if not includes:
            return transformed

        if not isinstance(transformed, Mapping):
            raise InvalidTransformOutputError(transformer.name, type(transformed).__name__)

        await self.eager_load(data, includes)
        include_data = await self.process_included_resources(scope, transformer, data, includes)

        result = dict(transformed)
        for key, value in include_data.items():
            if key in result:
                log = logger.warning if self.warn_on_key_collision else logger.debug
                log(
                    "Include key overrides transformed field",
                    transformer=transformer.name,
                    key=key,
                    path=scope.full_path(key),
                )
            result[key] = value
        return result

    def _loader_for(self, data: Any) -> EagerLoader | None:
        for loader in self.loaders:
            if loader.supports(data):
                return loader
        return None

    async def eager_load(self, data: Any, includes: Sequence[str]) -> list[str]:
        """Ask the data layer to load the includes that are still missing.

        Returns the relation names that were requested from the loader.
        """
        loader = self._loader_for(data)
        if loader is None:
            return []

        pending = loader.pending_relations(data, includes)
        if not pending:
            return []

        logger.debug("Eager loading relations", loader=loader.name, relations=pending)
        await loader.ensure_loaded(data, pending)
        if self.enable_metrics:
            EAGER_LOADS_TOTAL.labels(loader=loader.name).inc()
        return pending

    async def process_included_resources(
        self,
        scope: Scope,
        transformer: TransformerAbstract,
        data: Any,
        includes: Sequence[str],
    ) -> dict[str, Any]:
        """Run the resolvers for one domain object, in order."""
        include_data: dict[str, Any] = {}

        for include in includes:
            resolver = transformer.get_resolver(include)
            resource = await _maybe_await(resolver(data, scope.ctx))
            if self.enable_metrics:
                INCLUDES_RESOLVED_TOTAL.labels(transformer=transformer.name, include=include).inc()

            if isinstance(resource, ResourceAbstract):
                property_name = resource.property_name or include
                child = scope.child(resource, include)
                logger.debug("Resolving included resource", path=scope.full_path(include), key=property_name)
                include_data[property_name] = await child.to_plain()
            else:
                include_data[include] = resource

        return include_data
