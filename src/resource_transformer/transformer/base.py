# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""TransformerAbstract base class.

Each domain concept (Book, Author, ...) gets a transformer that declares:
- transform(): the mapping from one domain object to its output fields
- available_include: relations that may be expanded on request
- default_include: relations that are always expanded
- one include_<name> resolver per declared relation

Example:
    class BookTransformer(TransformerAbstract):
        available_include = ("author",)

        def transform(self, book, ctx=None):
            return {"id": book.id, "title": book.title}

        def include_author(self, book, ctx):
            return self.item(book.author, AuthorTransformer, "writer")
"""

from __future__ import annotations

import inspect
import re
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from ..errors import ResolverNotFoundError, TransformNotImplementedError, VariantNotFoundError
from .resources import Collection, Item, Null

if TYPE_CHECKING:
    from .scope import Scope

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_WORD = re.compile(r"[^0-9a-zA-Z]+")


def _snake(name: str) -> str:
    return _NON_WORD.sub("_", _CAMEL_BOUNDARY.sub("_", name)).strip("_").lower()


def resolver_name_for(include: str) -> str:
    """Build the resolver method name for an include.

    "books" -> "include_books", "authorSummary" and "author-summary"
    -> "include_author_summary".
    """
    return f"include_{_snake(include)}"


def variant_method_for(variant: str) -> str:
    """Build the transform method name for a variant ("slim" -> "transform_slim")."""
    return f"transform_{_snake(variant)}"


class TransformerAbstract:
    """Base class for transformers.

    The resolver table is built when the transformer is instantiated, so a
    declared include without a resolver fails before any data is touched.
    """

    available_include: ClassVar[Sequence[str]] = ()
    default_include: ClassVar[Sequence[str]] = ()
    # Explicit include -> method name entries, for names the convention can't express
    include_resolvers: ClassVar[Mapping[str, str]] = {}

    def __init__(self) -> None:
        self._resolvers = self._build_resolver_table()

    @property
    def name(self) -> str:
        return type(self).__name__

    @classmethod
    def declared_includes(cls) -> tuple[str, ...]:
        """Default includes first, then available ones, without duplicates."""
        return tuple(dict.fromkeys([*cls.default_include, *cls.available_include]))

    def _build_resolver_table(self) -> dict[str, Callable[..., Any]]:
        table: dict[str, Callable[..., Any]] = {}
        for include in self.declared_includes():
            method_name = self.include_resolvers.get(include) or resolver_name_for(include)
            resolver = getattr(self, method_name, None)
            if not callable(resolver):
                raise ResolverNotFoundError(self.name, method_name, include)
            table[include] = resolver
        return table

    def transform(self, data: Any, ctx: Any = None) -> Mapping[str, Any]:
        """Map one domain object to its output fields. Must be overridden."""
        raise TransformNotImplementedError(self.name)

    def get_transform(self, variant: str | None = None) -> Callable[..., Any]:
        """Return transform() or the transform_<variant> method."""
        if not variant:
            return self.transform
        method_name = variant_method_for(variant)
        method = getattr(self, method_name, None)
        if not callable(method):
            raise VariantNotFoundError(self.name, variant, method_name)
        return method

    def get_resolver(self, include: str) -> Callable[..., Any]:
        try:
            return self._resolvers[include]
        except KeyError:
            raise ResolverNotFoundError(self.name, resolver_name_for(include), include) from None

    def figure_out_includes(self, scope: Scope) -> list[str]:
        """Return the includes to expand for this scope, in declared order."""
        requested = [include for include in self.available_include if scope.is_requested(include)]
        return list(dict.fromkeys([*self.default_include, *requested]))

    # -------------------------------------------------------------------------
    # Helpers for resolvers
    # -------------------------------------------------------------------------

    def item(
        self,
        data: Any,
        transformer: Any,
        property_name: str | None = None,
        variant: str | None = None,
    ) -> Item:
        return Item(data, transformer, property_name, variant)

    def collection(
        self,
        data: Any,
        transformer: Any,
        property_name: str | None = None,
        variant: str | None = None,
    ) -> Collection:
        return Collection(data, transformer, property_name, variant)

    def null(self) -> Null:
        return Null()


class CallableTransformer(TransformerAbstract):
    """Adapts a plain function into a transformer without includes.

    The function receives (data, ctx), or just (data) if it takes a single
    positional argument.
    """

    def __init__(self, func: Callable[..., Any]) -> None:
        super().__init__()
        self._func = func
        self._wants_ctx = _accepts_two_args(func)

    @property
    def name(self) -> str:
        return getattr(self._func, "__name__", type(self._func).__name__)

    def transform(self, data: Any, ctx: Any = None) -> Any:
        if self._wants_ctx:
            return self._func(data, ctx)
        return self._func(data)


def _accepts_two_args(func: Callable[..., Any]) -> bool:
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return True
    positional = 0
    for param in params:
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= 2
