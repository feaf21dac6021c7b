#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_config_loading.py
"""Unit tests for configuration file discovery and loading."""

import json

import pytest

from mdtree.exceptions import ConfigError
from mdtree.options import MarkdownRendererOptions
from mdtree.options.config import find_config_file, load_config_file, load_renderer_options


@pytest.mark.unit
class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_toml(self, tmp_path):
        """Test loading a TOML config."""
        path = tmp_path / ".mdtree.toml"
        path.write_text('bulletMarker = "*"\nuseFences = false\n', encoding="utf-8")
        assert load_config_file(path) == {"bulletMarker": "*", "useFences": False}

    def test_yaml(self, tmp_path):
        """Test loading a YAML config."""
        path = tmp_path / ".mdtree.yaml"
        path.write_text("rule_style: _\nemphasisMarker: _\n", encoding="utf-8")
        assert load_config_file(path) == {"rule_style": "_", "emphasisMarker": "_"}

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file loads as an empty mapping."""
        path = tmp_path / ".mdtree.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        """Test loading a JSON config."""
        path = tmp_path / ".mdtree.json"
        path.write_text(json.dumps({"listIndent": "tab-width"}), encoding="utf-8")
        assert load_config_file(str(path)) == {"listIndent": "tab-width"}

    def test_markdown_sub_table(self, tmp_path):
        """Test that a markdown sub-table is unwrapped."""
        path = tmp_path / ".mdtree.toml"
        path.write_text('[markdown]\nstrongMarker = "_"\n', encoding="utf-8")
        assert load_config_file(path) == {"strongMarker": "_"}

    def test_markdown_section_must_be_table(self, tmp_path):
        """Test that a scalar markdown entry is rejected."""
        path = tmp_path / ".mdtree.json"
        path.write_text('{"markdown": 3}', encoding="utf-8")
        with pytest.raises(ConfigError, match="must be a table"):
            load_config_file(path)

    def test_pyproject(self, tmp_path):
        """Test loading the [tool.mdtree] table of pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdtree]\nruleStyle = "*"\n', encoding="utf-8")
        assert load_config_file(path) == {"ruleStyle": "*"}

    def test_pyproject_without_section(self, tmp_path):
        """Test that a pyproject.toml without the section loads as empty."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ConfigError with its path."""
        path = tmp_path / "nope.toml"
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.config_path == str(path)

    def test_directory(self, tmp_path):
        """Test that a directory is not accepted as a config file."""
        with pytest.raises(ConfigError, match="not a file"):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path):
        """Test that unknown extensions are rejected."""
        path = tmp_path / "config.ini"
        path.write_text("[x]\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Unsupported"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "filename,content",
        [
            (".mdtree.toml", "bulletMarker = "),
            (".mdtree.yaml", "a: [unclosed"),
            (".mdtree.json", "{not json"),
        ],
    )
    def test_malformed(self, tmp_path, filename, content):
        """Test that parse errors are wrapped in ConfigError."""
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.original_error is not None

    def test_json_must_be_object(self, tmp_path):
        """Test that a JSON array is rejected."""
        path = tmp_path / ".mdtree.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="object"):
            load_config_file(path)

    def test_yaml_must_be_mapping(self, tmp_path):
        """Test that a YAML list is rejected."""
        path = tmp_path / ".mdtree.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config_file(path)


@pytest.mark.unit
class TestFindConfigFile:
    """Tests for config discovery."""

    def test_finds_in_start_dir(self, tmp_path):
        """Test discovery in the start directory."""
        path = tmp_path / ".mdtree.json"
        path.write_text("{}", encoding="utf-8")
        assert find_config_file(tmp_path) == path.resolve()

    def test_walks_parents(self, tmp_path):
        """Test that parent directories are searched."""
        path = tmp_path / ".mdtree.toml"
        path.write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == path.resolve()

    def test_priority_order(self, tmp_path):
        """Test that TOML wins over YAML and JSON in the same directory."""
        for name in (".mdtree.json", ".mdtree.yaml", ".mdtree.toml"):
            (tmp_path / name).write_text("{}" if name.endswith("json") else "", encoding="utf-8")
        assert find_config_file(tmp_path).name == ".mdtree.toml"

    def test_pyproject_requires_section(self, tmp_path):
        """Test that pyproject.toml only counts when it has a [tool.mdtree] table."""
        nested = tmp_path / "inner"
        nested.mkdir()
        (nested / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        outer = tmp_path / "pyproject.toml"
        outer.write_text('[tool.mdtree]\nbulletMarker = "+"\n', encoding="utf-8")
        assert find_config_file(nested) == outer.resolve()


@pytest.mark.unit
class TestLoadRendererOptions:
    """Tests for load_renderer_options priority handling."""

    def test_explicit_path(self, tmp_path):
        """Test loading options from an explicit path."""
        path = tmp_path / "style.yaml"
        path.write_text("bulletMarker: '+'\nlistIndent: tab-width\n", encoding="utf-8")
        options = load_renderer_options(path)
        assert options.bullet_marker == "+"
        assert options.list_indent == "tab-width"

    def test_env_var(self, tmp_path, monkeypatch):
        """Test that MDTREE_CONFIG names the config file."""
        path = tmp_path / "env.json"
        path.write_text('{"ruleStyle": "*"}', encoding="utf-8")
        monkeypatch.setenv("MDTREE_CONFIG", str(path))
        assert load_renderer_options().rule_style == "*"

    def test_explicit_path_beats_env_var(self, tmp_path, monkeypatch):
        """Test that an explicit path takes priority over the environment."""
        env_path = tmp_path / "env.json"
        env_path.write_text('{"ruleStyle": "*"}', encoding="utf-8")
        explicit = tmp_path / "explicit.json"
        explicit.write_text('{"ruleStyle": "_"}', encoding="utf-8")
        monkeypatch.setenv("MDTREE_CONFIG", str(env_path))
        assert load_renderer_options(explicit).rule_style == "_"

    def test_discovery(self, tmp_path, monkeypatch):
        """Test that config is discovered from the working directory."""
        (tmp_path / ".mdtree.toml").write_text('emphasisMarker = "_"\n', encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert load_renderer_options().emphasis_marker == "_"

    def test_defaults_when_nothing_found(self, tmp_path, monkeypatch):
        """Test that defaults are used when no config exists."""
        monkeypatch.chdir(tmp_path)
        assert load_renderer_options() == MarkdownRendererOptions()

    def test_invalid_value_wrapped(self, tmp_path):
        """Test that invalid option values surface as ConfigError."""
        path = tmp_path / ".mdtree.json"
        path.write_text('{"bulletMarker": "#"}', encoding="utf-8")
        with pytest.raises(ConfigError, match="bullet_marker"):
            load_renderer_options(path)
