"""Unit tests for jj_hunk.core.utils module."""

from jj_hunk.core.utils import deep_merge


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_nested_dicts_merge(self) -> None:
        base = {"diff": {"binary": "mark", "max_lines": 10}, "jj": {"timeout": 5}}
        override = {"diff": {"max_lines": 20}}

        result = deep_merge(base, override)

        assert result == {"diff": {"binary": "mark", "max_lines": 20}, "jj": {"timeout": 5}}

    def test_lists_replaced(self) -> None:
        assert deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_inputs_not_modified(self) -> None:
        base = {"a": {"b": 1}}
        override = {"a": {"c": 2}}

        deep_merge(base, override)

        assert base == {"a": {"b": 1}}
        assert override == {"a": {"c": 2}}
