# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for SQLAlchemyLoader against mapped (transient) instances.

The AsyncSession is mocked: only the refresh() contract is exercised.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base, relationship

from resource_transformer.transformer import SQLAlchemyLoader, TransformerAbstract, transform

Base = declarative_base()


class AuthorRow(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)

    books = relationship("BookRow", back_populates="author")


class BookRow(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=True)

    author = relationship("AuthorRow", back_populates="books")


class AuthorRowTransformer(TransformerAbstract):
    def transform(self, author, ctx=None):
        return {"id": author.id, "name": author.name}


class BookRowTransformer(TransformerAbstract):
    available_include = ("author", "title_length")

    def transform(self, book, ctx=None):
        return {"id": book.id, "title": book.title}

    def include_author(self, book, ctx):
        return self.item(book.author, AuthorRowTransformer)

    def include_title_length(self, book, ctx):
        return len(book.title)


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


class TestSQLAlchemyLoader:
    """Tests for relationship detection."""

    def test_supports_mapped_instances_only(self, session):
        loader = SQLAlchemyLoader(session)

        assert loader.supports(BookRow(id=1, title="T")) is True
        assert loader.supports(BookRow) is False
        assert loader.supports(object()) is False
        assert loader.supports({"id": 1}) is False

    def test_pending_only_unloaded_relationships(self, session):
        book = BookRow(id=1, title="T")
        pending = SQLAlchemyLoader(session).pending_relations(book, ["author", "title", "title_length"])
        assert pending == ["author"]

    def test_loaded_relationship_not_pending(self, session):
        book = BookRow(id=1, title="T", author=AuthorRow(id=2, name="J"))
        assert SQLAlchemyLoader(session).pending_relations(book, ["author"]) == []

    def test_known_empty_relationship_not_pending(self, session):
        book = BookRow(id=1, title="T", author=None)
        assert SQLAlchemyLoader(session).pending_relations(book, ["author"]) == []

    @pytest.mark.asyncio
    async def test_ensure_loaded_refreshes_attributes(self, session):
        book = BookRow(id=1, title="T")
        await SQLAlchemyLoader(session).ensure_loaded(book, ("author",))
        session.refresh.assert_awaited_once_with(book, attribute_names=["author"])


class TestSQLAlchemyTransform:
    """End-to-end transformation with a session-backed loader."""

    @pytest.mark.asyncio
    async def test_unloaded_relationship_refreshed_before_resolving(self, session):
        async def _refresh(obj, attribute_names=None):
            obj.author = AuthorRow(id=7, name="J. R. R. Tolkien")

        session.refresh.side_effect = _refresh
        book = BookRow(id=1, title="The Hobbit")

        result = await transform(
            book,
            BookRowTransformer,
            includes=["author", "title_length"],
            loaders=[SQLAlchemyLoader(session)],
        )

        session.refresh.assert_awaited_once_with(book, attribute_names=["author"])
        assert result == {
            "id": 1,
            "title": "The Hobbit",
            "author": {"id": 7, "name": "J. R. R. Tolkien"},
            "title_length": 10,
        }

    @pytest.mark.asyncio
    async def test_no_refresh_when_not_requested(self, session):
        book = BookRow(id=1, title="The Hobbit")
        result = await transform(book, BookRowTransformer, loaders=[SQLAlchemyLoader(session)])

        session.refresh.assert_not_awaited()
        assert result == {"id": 1, "title": "The Hobbit"}
