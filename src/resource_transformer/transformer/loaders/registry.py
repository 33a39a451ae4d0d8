# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Loader registry: the default loaders used when a manager gets none.

Loaders are consulted in registration order; the first one whose
supports() accepts the domain object is used.
"""

from __future__ import annotations

from .base import EagerLoader

_loaders: list[EagerLoader] = []


def register_loader(loader: EagerLoader) -> None:
    """Register a default loader (ignored if the same instance is registered)."""
    if loader not in _loaders:
        _loaders.append(loader)


def get_registered_loaders() -> list[EagerLoader]:
    """Return the default loaders in consultation order."""
    return list(_loaders)


def clear_loaders() -> None:
    """Remove every default loader (useful for testing)."""
    _loaders.clear()
