#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_renderer_options.py
"""Unit tests for MarkdownRendererOptions."""

from dataclasses import FrozenInstanceError

import pytest

from mdtree.options import MarkdownRendererOptions


@pytest.mark.unit
class TestMarkdownRendererOptions:
    """Tests for option defaults, validation and cloning."""

    def test_defaults(self):
        """Test the default style."""
        options = MarkdownRendererOptions()
        assert options.bullet_marker == "-"
        assert options.list_indent == "one-space"
        assert options.rule_style == "-"
        assert options.use_fences is True
        assert options.emphasis_marker == "*"
        assert options.strong_marker == "*"
        assert options.code_fence_char == "`"
        assert options.escape_special is True
        assert options.table_pipe_escape is True

    def test_frozen(self):
        """Test that options cannot be mutated in place."""
        options = MarkdownRendererOptions()
        with pytest.raises(FrozenInstanceError):
            options.bullet_marker = "*"

    def test_create_updated(self):
        """Test that create_updated returns a modified copy."""
        options = MarkdownRendererOptions()
        updated = options.create_updated(bullet_marker="+", rule_style="_")
        assert updated.bullet_marker == "+"
        assert updated.rule_style == "_"
        assert options.bullet_marker == "-"

    @pytest.mark.parametrize(
        "field_name,value",
        [
            ("bullet_marker", "#"),
            ("list_indent", "two-space"),
            ("rule_style", "="),
            ("emphasis_marker", "-"),
            ("strong_marker", "~"),
            ("code_fence_char", "'"),
        ],
    )
    def test_invalid_choice(self, field_name, value):
        """Test that values outside the declared choices raise ValueError."""
        with pytest.raises(ValueError, match=field_name):
            MarkdownRendererOptions(**{field_name: value})

    def test_invalid_flag_type(self):
        """Test that boolean flags must be real booleans."""
        with pytest.raises(ValueError, match="use_fences"):
            MarkdownRendererOptions(use_fences="yes")

    def test_from_mapping_camel_case(self):
        """Test that camelCase option names are accepted."""
        options = MarkdownRendererOptions.from_mapping(
            {"bulletMarker": "*", "listIndent": "tab-width", "ruleStyle": "*", "useFences": False}
        )
        assert options.bullet_marker == "*"
        assert options.list_indent == "tab-width"
        assert options.rule_style == "*"
        assert options.use_fences is False

    def test_from_mapping_snake_case_and_unknown_keys(self):
        """Test that snake_case names work and unknown keys are ignored."""
        options = MarkdownRendererOptions.from_mapping({"emphasis_marker": "_", "colour": "blue"})
        assert options.emphasis_marker == "_"

    def test_from_mapping_invalid_value(self):
        """Test that invalid values still raise."""
        with pytest.raises(ValueError):
            MarkdownRendererOptions.from_mapping({"strongMarker": "+"})

    def test_to_dict(self):
        """Test that to_dict lists every option."""
        data = MarkdownRendererOptions(bullet_marker="+").to_dict()
        assert data["bullet_marker"] == "+"
        assert set(data) == {
            "bullet_marker",
            "list_indent",
            "rule_style",
            "use_fences",
            "emphasis_marker",
            "strong_marker",
            "code_fence_char",
            "escape_special",
            "table_pipe_escape",
        }
