# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for include request parsing and dotted-path matching."""

import pytest

from resource_transformer.errors import InvalidIncludeError
from resource_transformer.transformer.includes import expand_includes, is_requested, parse_includes


class TestParseIncludes:
    """Tests for parse_includes()."""

    def test_none(self):
        assert parse_includes(None) == ()

    def test_comma_separated_string(self):
        assert parse_includes("author, books.author") == ("author", "books.author")

    def test_list_with_commas_and_blanks(self):
        assert parse_includes(["author,reviews", " ", "", "books.author"]) == (
            "author",
            "reviews",
            "books.author",
        )

    def test_duplicates_removed_in_order(self):
        assert parse_includes(["b", "a", "b"]) == ("b", "a")

    def test_segment_whitespace_stripped(self):
        assert parse_includes(["books . author"]) == ("books.author",)

    @pytest.mark.parametrize("include", ["a..b", ".a", "a."])
    def test_empty_segment_rejected(self, include):
        with pytest.raises(InvalidIncludeError) as exc_info:
            parse_includes([include])
        assert exc_info.value.include == include


class TestIsRequested:
    """Tests for is_requested() segment matching."""

    def test_exact_match(self):
        assert is_requested("author", ["author"]) is True

    def test_ancestor_of_requested_path(self):
        assert is_requested("books", ["books.author"]) is True
        assert is_requested("books.author", ["books.author.address"]) is True

    def test_descendant_not_requested(self):
        assert is_requested("books.author", ["books"]) is False

    def test_segments_not_string_prefix(self):
        assert is_requested("author", ["authorSummary"]) is False
        assert is_requested("book", ["books.author"]) is False

    def test_leaf_name_does_not_match_other_branch(self):
        assert is_requested("books.author", ["author"]) is False

    def test_case_sensitive(self):
        assert is_requested("Author", ["author"]) is False

    def test_empty_request(self):
        assert is_requested("author", []) is False


class TestExpandIncludes:
    """Tests for expand_includes()."""

    def test_expands_ancestors(self):
        assert expand_includes(["books.author.address", "reviews"]) == frozenset(
            {"books", "books.author", "books.author.address", "reviews"}
        )
