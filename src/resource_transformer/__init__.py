# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""resource-transformer: API-ready output from domain objects with on-demand includes."""

from .errors import ConfigurationError, TransformerError
from .transformer import (
    Collection,
    Item,
    Null,
    TransformManager,
    TransformerAbstract,
    register_transformer,
    transform,
)

__version__ = "0.1.0"

__all__ = [
    "Collection",
    "ConfigurationError",
    "Item",
    "Null",
    "TransformManager",
    "TransformerAbstract",
    "TransformerError",
    "register_transformer",
    "transform",
]
