# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Eager-load adapters.

Importing this module registers LoadManyLoader as a default loader.
SQLAlchemyLoader needs a session, so it is passed per manager instead.
"""

from .base import EagerLoader
from .load_many import LoadManyLoader
from .registry import clear_loaders, get_registered_loaders, register_loader
from .sqlalchemy_loader import SQLAlchemyLoader

# Auto-register the session-free loader
register_loader(LoadManyLoader())

__all__ = [
    "EagerLoader",
    "LoadManyLoader",
    "SQLAlchemyLoader",
    "clear_loaders",
    "get_registered_loaders",
    "register_loader",
]
