# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Transformer registry: maps names to transformer classes.

Lets resolvers reference transformers by name ("AuthorTransformer") when
importing the class would create a cycle, and select a variant with
"AuthorTransformer.slim".

Reference resolution order:
1. TransformerAbstract instance (used as-is)
2. TransformerAbstract subclass (instantiated)
3. Registered name, optionally with ".variant"
4. Any other callable (wrapped in CallableTransformer)
"""

from __future__ import annotations

from typing import Any, TypeVar

from ..errors import InvalidTransformerError, TransformerNotFoundError
from .base import CallableTransformer, TransformerAbstract

T = TypeVar("T", bound=type[TransformerAbstract])

# Registry: name → transformer class
_transformers: dict[str, type[TransformerAbstract]] = {}


def register_transformer(transformer: T | None = None, *, name: str | None = None) -> Any:
    """Register a transformer class by name (defaults to the class name).

    Usable directly or as a decorator:

        @register_transformer
        class BookTransformer(TransformerAbstract): ...

        @register_transformer(name="Book")
        class BookTransformer(TransformerAbstract): ...
    """

    def _register(cls: T) -> T:
        if not (isinstance(cls, type) and issubclass(cls, TransformerAbstract)):
            raise InvalidTransformerError(cls)
        _transformers[name or cls.__name__] = cls
        return cls

    if transformer is None:
        return _register
    return _register(transformer)


def get_transformer(name: str) -> type[TransformerAbstract]:
    """Find a registered transformer class by name."""
    try:
        return _transformers[name]
    except KeyError:
        raise TransformerNotFoundError(name, sorted(_transformers)) from None


def get_registered_transformers() -> dict[str, type[TransformerAbstract]]:
    """Return all registered transformers (for introspection/testing)."""
    return dict(_transformers)


def clear_registered_transformers() -> None:
    """Remove every registration (useful for testing)."""
    _transformers.clear()


def resolve_transformer(
    reference: Any,
    variant: str | None = None,
) -> tuple[TransformerAbstract, str | None]:
    """Turn a transformer reference into an instance and the variant to use.

    An explicit variant wins over one embedded in a "Name.variant" string.
    """
    if isinstance(reference, TransformerAbstract):
        return reference, variant

    if isinstance(reference, type) and issubclass(reference, TransformerAbstract):
        return reference(), variant

    if isinstance(reference, str):
        name, _, embedded_variant = reference.partition(".")
        return get_transformer(name)(), variant or embedded_variant or None

    if callable(reference) and not isinstance(reference, type):
        return CallableTransformer(reference), variant

    raise InvalidTransformerError(reference)
