"""Tests for extract_articles.tree_walk module."""

from extract_articles.tree_walk import find_first, is_body_key, walk_strings


class TestIsBodyKey:
    def test_matches_substrings_case_insensitive(self) -> None:
        assert is_body_key("articleBody")
        assert is_body_key("CONTENT")
        assert is_body_key("metaDescription")
        assert not is_body_key("headline")
        assert not is_body_key(3)


class TestWalkStrings:
    def test_collects_nested_matching_values(self) -> None:
        data = {
            "headline": "Ignored",
            "page": {"articleBody": "Body text", "author": {"name": "Ignored"}},
            "items": [{"summary": "First"}, {"summary": "Second"}],
        }
        assert walk_strings(data) == ["Body text", "First", "Second"]

    def test_lists_inherit_key_match(self) -> None:
        assert walk_strings({"content": ["one", "two", 3]}) == ["one", "two"]

    def test_nested_objects_under_matching_key_walked(self) -> None:
        data = {"content": {"blocks": [{"text": "Deep"}], "id": "no"}}
        assert walk_strings(data) == ["Deep"]

    def test_depth_limit(self) -> None:
        node = {"text": "Bottom"}
        for _ in range(20):
            node = {"wrap": node}
        assert walk_strings(node) == []
        assert walk_strings(node, max_depth=25) == ["Bottom"]

    def test_scalars_and_blank_strings(self) -> None:
        assert walk_strings("top level") == []
        assert walk_strings({"text": "   "}) == []

    def test_custom_predicate(self) -> None:
        assert walk_strings({"a": "x", "b": "y"}, key_predicate=lambda k: k == "b") == ["y"]


class TestFindFirst:
    def test_breadth_first(self) -> None:
        data = [{"nested": {"headline": "Deep"}}, {"headline": "Shallow"}]
        assert find_first(data, ("headline",)) == "Shallow"

    def test_key_priority_within_object(self) -> None:
        assert find_first({"dateCreated": "b", "datePublished": "a"}, ("datePublished", "dateCreated")) == "a"

    def test_missing(self) -> None:
        assert find_first({"x": 1}, ("headline",)) is None
