"""Tests for the configuration system.

Covers YAML loading, merging over built-in defaults, environment variable
resolution and the process-wide default builder.
"""

import pytest

from patternsmith.errors import ConfigurationError
from patternsmith.utils.config import (
    DEFAULT_CONFIG,
    ConfigBuilder,
    get_config_builder,
    get_config_value,
    get_provider_config,
    get_synthesis_config,
    reset_config,
    to_bool,
    to_optional_float,
)


class TestConfigBuilder:
    """Test ConfigBuilder class."""

    def test_defaults_without_config_file(self):
        builder = ConfigBuilder()
        assert builder.config_path is None
        assert builder.get("synthesis.model_id") == "gpt-3.5-turbo"
        assert builder.get("session.mirror_presets") is True

    def test_user_values_merge_over_defaults(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            """
synthesis:
  provider: anthropic
  model_id: claude-haiku-4-5-20251001
"""
        )

        builder = ConfigBuilder(str(config_file))

        assert builder.get("synthesis.provider") == "anthropic"
        assert builder.get("synthesis.max_tokens") == DEFAULT_CONFIG["synthesis"]["max_tokens"]
        assert builder.get("clipboard.feedback_seconds") == 2.0

    def test_cwd_config_is_picked_up(self, isolated_config):
        (isolated_config / "config.yml").write_text("synthesis:\n  timeout: 3\n")
        assert ConfigBuilder().get("synthesis.timeout") == 3

    def test_config_file_env_var(self, tmp_path, monkeypatch):
        other = tmp_path / "elsewhere.yml"
        other.write_text("session:\n  test_mode: existence\n")
        monkeypatch.setenv("CONFIG_FILE", str(other))
        assert ConfigBuilder().get("session.test_mode") == "existence"

    def test_explicit_missing_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigBuilder(tmp_path / "missing.yml")

    def test_invalid_yaml_raises(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("synthesis: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Error parsing YAML"):
            ConfigBuilder(config_file)

    def test_non_mapping_raises(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError, match="dictionary"):
            ConfigBuilder(config_file)

    def test_empty_file_uses_defaults(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("")
        assert ConfigBuilder(config_file).get("synthesis.provider") == "openai"

    def test_get_missing_path_returns_default(self):
        builder = ConfigBuilder()
        assert builder.get("nope.nothing", "fallback") == "fallback"
        assert builder.get("synthesis.model_id.deeper") is None

    def test_defaults_are_not_mutated(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("synthesis:\n  provider: ollama\n")
        ConfigBuilder(config_file)
        assert DEFAULT_CONFIG["synthesis"]["provider"] == "openai"


class TestEnvironmentResolution:
    def test_braced_variable(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_API_KEY", "secret-key-123")
        config_file = tmp_path / "config.yml"
        config_file.write_text("providers:\n  openai:\n    api_key: ${TEST_API_KEY}\n")

        assert ConfigBuilder(config_file).get("providers.openai.api_key") == "secret-key-123"

    def test_bare_variable_inside_string(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEST_HOST", "ollama.local")
        config_file = tmp_path / "config.yml"
        config_file.write_text("providers:\n  ollama:\n    base_url: http://$TEST_HOST:11434\n")

        assert ConfigBuilder(config_file).get("providers.ollama.base_url") == (
            "http://ollama.local:11434"
        )

    def test_default_value_syntax(self, monkeypatch):
        monkeypatch.delenv("OLLAMA_HOST", raising=False)
        assert ConfigBuilder().get("providers.ollama.base_url") == "http://localhost:11434"

    def test_unset_whole_value_resolves_to_none(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        assert ConfigBuilder().get("providers.openai.api_key") is None

    def test_unset_partial_placeholder_is_kept(self, tmp_path, monkeypatch):
        monkeypatch.delenv("UNSET_PART", raising=False)
        config_file = tmp_path / "config.yml"
        config_file.write_text("extra:\n  url: http://${UNSET_PART}/v1\n")

        assert ConfigBuilder(config_file).get("extra.url") == "http://${UNSET_PART}/v1"

    def test_dotenv_is_loaded(self, isolated_config, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        (isolated_config / ".env").write_text("ANTHROPIC_API_KEY=sk-ant-from-dotenv\n")

        builder = ConfigBuilder()

        assert builder.get("providers.anthropic.api_key") == "sk-ant-from-dotenv"

    def test_unexpanded_config_keeps_placeholders(self):
        unexpanded = ConfigBuilder().get_unexpanded_config()
        assert unexpanded["providers"]["openai"]["api_key"] == "${OPENAI_API_KEY}"


class TestGlobalConfig:
    def test_default_builder_is_cached(self):
        assert get_config_builder() is get_config_builder()

    def test_reset_reloads(self, isolated_config):
        first = get_config_builder()
        reset_config()
        assert get_config_builder() is not first

    def test_set_as_default(self, tmp_path):
        config_file = tmp_path / "custom.yml"
        config_file.write_text("synthesis:\n  model_id: custom-model\n")

        get_config_builder(config_file, set_as_default=True)

        assert get_config_value("synthesis.model_id") == "custom-model"

    def test_empty_path_raises(self):
        with pytest.raises(ValueError):
            get_config_value("")

    def test_section_helpers_return_copies(self):
        synthesis = get_synthesis_config()
        synthesis["provider"] = "changed"
        assert get_synthesis_config()["provider"] == "openai"

    def test_unknown_provider_config_is_empty(self):
        assert get_provider_config("nonexistent") == {}


class TestValueConversion:
    """Env-expanded values arrive as strings and must be converted."""

    @pytest.mark.parametrize(
        "value, expected",
        [("false", False), (" False ", False), ("0", False), ("no", False), ("", False),
         ("true", True), ("YES", True), ("on", True), (True, True), (False, False), (0, False)],
    )
    def test_to_bool(self, value, expected):
        assert to_bool(value) is expected

    def test_to_bool_rejects_unknown_string(self):
        with pytest.raises(ConfigurationError, match="boolean"):
            to_bool("maybe")

    @pytest.mark.parametrize(
        "value, expected", [("0.5", 0.5), ("30", 30.0), (7, 7.0), (None, None)]
    )
    def test_to_optional_float(self, value, expected):
        assert to_optional_float(value) == expected

    def test_to_optional_float_rejects_text(self):
        with pytest.raises(ConfigurationError, match="number"):
            to_optional_float("soon")
