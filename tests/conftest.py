# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Pytest configuration and shared fixtures."""

import pytest

from resource_transformer.config import clear_settings_cache

from books import Author, Book


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset settings cache before each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def tolkien() -> Author:
    return Author(first_name="J. R. R.", last_name="Tolkien", birth_year=1892)


@pytest.fixture
def book(tolkien: Author) -> Book:
    """The Lord of the Rings, with its author attached."""
    lotr = Book(id=1, title="The Lord of the Rings", yr=1954, author=tolkien, characters=["Frodo", "Sam"])
    tolkien.books.append(lotr)
    return lotr


@pytest.fixture
def library(tolkien: Author, book: Book) -> list[Book]:
    """Three books by the same author, in publication order."""
    hobbit = Book(id=2, title="The Hobbit", yr=1937, author=tolkien)
    silmarillion = Book(id=3, title="The Silmarillion", yr=1977, author=tolkien)
    tolkien.books.extend([hobbit, silmarillion])
    return [book, hobbit, silmarillion]
