# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Output serializers.

A serializer puts the final envelope around every resolved resource:

- plain:   no envelope (default)
- data:    {"data": ...} at every level, included resources too
- sl_data: {"data": ...} at the top level only
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar


class Serializer(ABC):
    """Abstract output serializer."""

    name: ClassVar[str]

    @abstractmethod
    def collection(self, data: list[Any], *, top_level: bool) -> Any:
        ...

    @abstractmethod
    def item(self, data: Any, *, top_level: bool) -> Any:
        ...

    def null(self, *, top_level: bool) -> Any:
        return None


class PlainSerializer(Serializer):
    """Returns transformed data unchanged."""

    name = "plain"

    def collection(self, data: list[Any], *, top_level: bool) -> Any:
        return data

    def item(self, data: Any, *, top_level: bool) -> Any:
        return data


class DataSerializer(Serializer):
    """Wraps every resource, included ones too, in a 'data' key."""

    name = "data"

    def collection(self, data: list[Any], *, top_level: bool) -> Any:
        return {"data": data}

    def item(self, data: Any, *, top_level: bool) -> Any:
        return {"data": data}

    def null(self, *, top_level: bool) -> Any:
        return {"data": None}


class SLDataSerializer(Serializer):
    """Single-level data serializer: only the root resource gets a 'data' key."""

    name = "sl_data"

    def collection(self, data: list[Any], *, top_level: bool) -> Any:
        return {"data": data} if top_level else data

    def item(self, data: Any, *, top_level: bool) -> Any:
        return {"data": data} if top_level else data

    def null(self, *, top_level: bool) -> Any:
        return {"data": None} if top_level else None


SERIALIZERS: dict[str, type[Serializer]] = {
    PlainSerializer.name: PlainSerializer,
    DataSerializer.name: DataSerializer,
    SLDataSerializer.name: SLDataSerializer,
}


def get_serializer(reference: str | Serializer) -> Serializer:
    """Return a serializer instance from a name or an instance."""
    if isinstance(reference, Serializer):
        return reference
    try:
        return SERIALIZERS[reference]()
    except KeyError:
        raise ValueError(
            f"Unknown serializer: {reference}. Must be one of {sorted(SERIALIZERS)}"
        ) from None
