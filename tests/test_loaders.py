# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for eager loading through the load_many() model protocol."""

from collections.abc import Sequence
from typing import Any
from unittest.mock import AsyncMock

import pytest

from resource_transformer.transformer import EagerLoader, LoadManyLoader, TransformerAbstract, transform
from resource_transformer.transformer.engine import ResolutionEngine
from resource_transformer.transformer.loaders import get_registered_loaders


# =============================================================================
# Fixtures: active-record style model
# =============================================================================


class Post:
    """Model with author/comments relations and a load_many() batch loader."""

    def __init__(self, id: int, store: dict[str, Any] | None = None, relations: dict[str, Any] | None = None):
        self.id = id
        self._store = store or {"author": {"name": "Ann"}, "comments": [{"body": "hi"}]}
        self.relations = dict(relations or {})
        self.load_many = AsyncMock(side_effect=self._load)

    def _load(self, names: list[str]) -> None:
        for name in names:
            self.relations[name] = self._store[name]

    def get_related(self, name: str) -> Any:
        return self.relations.get(name)

    # Relation accessors
    def author(self) -> Any:
        ...

    def comments(self) -> Any:
        ...


class PostTransformer(TransformerAbstract):
    available_include = ("author", "comments", "wordCount")

    def transform(self, post, ctx=None):
        return {"id": post.id}

    def include_author(self, post, ctx):
        return post.get_related("author")

    def include_comments(self, post, ctx):
        return post.get_related("comments")

    def include_word_count(self, post, ctx):
        return 120


# =============================================================================
# LoadManyLoader
# =============================================================================


class TestLoadManyLoader:
    """Tests for pending-relation detection."""

    def test_supports(self):
        loader = LoadManyLoader()
        assert loader.supports(Post(1)) is True
        assert loader.supports(object()) is False
        assert loader.supports({"load_many": None}) is False

    def test_pending_skips_non_relations(self):
        pending = LoadManyLoader().pending_relations(Post(1), ["author", "wordCount", "comments"])
        assert pending == ["author", "comments"]

    def test_pending_skips_loaded(self):
        post = Post(1, relations={"author": {"name": "Ann"}})
        assert LoadManyLoader().pending_relations(post, ["author", "comments"]) == ["comments"]

    def test_pending_skips_known_empty(self):
        post = Post(1, relations={"comments": None})
        assert LoadManyLoader().pending_relations(post, ["author", "comments"]) == ["author"]

    @pytest.mark.parametrize("relations", [["author"], None, "author"])
    def test_pending_ignores_non_mapping_relations(self, relations):
        post = Post(1)
        post.relations = relations
        post.get_related = lambda name: None
        assert LoadManyLoader().pending_relations(post, ["author", "comments"]) == ["author", "comments"]

    def test_pending_ignores_relations_method(self):
        class MethodRelations(Post):
            def relations(self):
                return {}

        post = MethodRelations.__new__(MethodRelations)
        post.id = 1
        post.load_many = AsyncMock()
        post.get_related = lambda name: None
        assert LoadManyLoader().pending_relations(post, ["author"]) == ["author"]

    def test_registered_by_default(self):
        assert any(isinstance(loader, LoadManyLoader) for loader in get_registered_loaders())


# =============================================================================
# Eager loading during transformation
# =============================================================================


class TestEagerLoading:
    """The engine loads exactly the requested, loadable, missing relations."""

    @pytest.mark.asyncio
    async def test_loads_only_requested_relations(self):
        post = Post(1)
        result = await transform(post, PostTransformer, includes=["author", "wordCount"])

        post.load_many.assert_awaited_once_with(["author"])
        assert result == {"id": 1, "author": {"name": "Ann"}, "wordCount": 120}

    @pytest.mark.asyncio
    async def test_batches_all_missing_relations(self):
        post = Post(1)
        result = await transform(post, PostTransformer, includes="author,comments")

        post.load_many.assert_awaited_once_with(["author", "comments"])
        assert result["comments"] == [{"body": "hi"}]

    @pytest.mark.asyncio
    async def test_no_call_when_nothing_requested(self):
        post = Post(1)
        await transform(post, PostTransformer)
        post.load_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_call_when_already_loaded(self):
        post = Post(1, relations={"author": {"name": "Bo"}})
        result = await transform(post, PostTransformer, includes=["author"])

        post.load_many.assert_not_awaited()
        assert result["author"] == {"name": "Bo"}

    @pytest.mark.asyncio
    async def test_no_call_for_known_empty(self):
        post = Post(1, relations={"comments": None})
        result = await transform(post, PostTransformer, includes=["comments"])

        post.load_many.assert_not_awaited()
        assert result["comments"] is None

    @pytest.mark.asyncio
    async def test_each_collection_element_loaded(self):
        posts = [Post(1), Post(2)]
        await transform(posts, PostTransformer, includes=["author"])

        for post in posts:
            post.load_many.assert_awaited_once_with(["author"])

    @pytest.mark.asyncio
    async def test_objects_without_loader_are_skipped(self):
        class Plain:
            id = 5

            def author(self):
                ...

            def get_related(self, name):
                return {"name": "Cy"}

        result = await transform(Plain(), PostTransformer, includes=["author"])
        assert result == {"id": 5, "author": {"name": "Cy"}}

    @pytest.mark.asyncio
    async def test_loader_failure_propagates(self):
        post = Post(1)
        post.load_many.side_effect = ConnectionError("database unavailable")

        with pytest.raises(ConnectionError, match="database unavailable"):
            await transform(post, PostTransformer, includes=["author"])

    @pytest.mark.asyncio
    async def test_empty_loader_list_disables_loading(self):
        post = Post(1, relations={"author": {"name": "Ann"}})
        await transform(post, PostTransformer, includes=["author", "comments"], loaders=[])
        post.load_many.assert_not_awaited()


# =============================================================================
# Custom loaders
# =============================================================================


class RecordingLoader(EagerLoader):
    """Loader that accepts everything and records its calls."""

    def __init__(self):
        self.calls: list[list[str]] = []

    def supports(self, data: Any) -> bool:
        return True

    def pending_relations(self, data: Any, includes: Sequence[str]) -> list[str]:
        return [name for name in includes if name != "wordCount"]

    async def ensure_loaded(self, data: Any, relation_names: Sequence[str]) -> None:
        self.calls.append(list(relation_names))


class TestCustomLoaders:
    """Loaders passed explicitly replace the registered defaults."""

    @pytest.mark.asyncio
    async def test_first_supporting_loader_wins(self):
        recorder = RecordingLoader()
        post = Post(1, relations={"author": {"name": "Ann"}, "comments": []})

        await transform(post, PostTransformer, includes=["author", "wordCount"], loaders=[recorder, LoadManyLoader()])

        assert recorder.calls == [["author"]]
        post.load_many.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_engine_eager_load_returns_requested_names(self):
        engine = ResolutionEngine([RecordingLoader()], enable_metrics=False)
        assert await engine.eager_load(object(), ["a", "wordCount"]) == ["a"]
        assert await engine.eager_load(object(), ["wordCount"]) == []
