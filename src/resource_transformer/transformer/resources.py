# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Resource wrappers.

A resolver marks domain data for recursive transformation by returning
one of these wrappers. Anything else it returns is emitted as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResourceAbstract:
    """Base wrapper: data plus the transformer that renders it.

    Attributes:
        data: Domain object (Item) or iterable of domain objects (Collection).
            May be awaitable; the engine awaits it before transforming.
        transformer: Transformer class, instance, registered name
            ("BookTransformer" or "BookTransformer.slim") or callable.
        property_name: Output key override for the include.
        variant: Name of a transform_<variant> method to use instead of transform().
    """

    data: Any = None
    transformer: Any = None
    property_name: str | None = None
    variant: str | None = None


@dataclass(frozen=True)
class Item(ResourceAbstract):
    """A single domain object."""


@dataclass(frozen=True)
class Collection(ResourceAbstract):
    """An ordered sequence of domain objects sharing one transformer."""


@dataclass(frozen=True)
class Null(ResourceAbstract):
    """Explicit absence; renders as the serializer's null value."""
