# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Resource Transformer.

Turns domain objects into plain data, expanding nested includes on
request. Importing this module registers the default eager loaders.
"""

from .base import CallableTransformer, TransformerAbstract
from .engine import ResolutionEngine
from .includes import expand_includes, is_requested, parse_includes
from .loaders import EagerLoader, LoadManyLoader, SQLAlchemyLoader, register_loader
from .manager import TransformManager, transform
from .registry import register_transformer, resolve_transformer
from .resources import Collection, Item, Null, ResourceAbstract
from .scope import Scope
from .serializers import DataSerializer, PlainSerializer, Serializer, SLDataSerializer

__all__ = [
    "CallableTransformer",
    "Collection",
    "DataSerializer",
    "EagerLoader",
    "Item",
    "LoadManyLoader",
    "Null",
    "PlainSerializer",
    "ResolutionEngine",
    "ResourceAbstract",
    "SLDataSerializer",
    "SQLAlchemyLoader",
    "Scope",
    "Serializer",
    "TransformManager",
    "TransformerAbstract",
    "expand_includes",
    "is_requested",
    "parse_includes",
    "register_loader",
    "register_transformer",
    "resolve_transformer",
    "transform",
]
