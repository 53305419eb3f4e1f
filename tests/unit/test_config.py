#!/usr/bin/env python3
"""
Unit tests for deployment configuration loading and validation.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import pytest

from flowdeploy.core.errors import (
    ErrorCategory,
    InvalidConfigurationError,
    MissingCredentialError,
)
from flowdeploy.deployment.config import (
    PROVIDER_CREDENTIALS,
    DeploymentConfig,
    Provider,
    ensure_env_file,
    load_env_file,
    parse_env_text,
    validate_config,
)


@pytest.mark.unit
class TestParseEnvText:
    """Test env-file parsing."""

    def test_plain_assignments(self):
        assert parse_env_text("PROVIDER=onnx\nPORT=8080\n") == {"PROVIDER": "onnx", "PORT": "8080"}

    def test_skips_comments_and_blank_lines(self):
        text = "# provider\n\n   \nPROVIDER=gemini\n"
        assert parse_env_text(text) == {"PROVIDER": "gemini"}

    def test_export_prefix_and_quotes(self):
        text = "export PROVIDER='anthropic'\nANTHROPIC_API_KEY=\"sk-ant-123\"\n"
        assert parse_env_text(text) == {
            "PROVIDER": "anthropic",
            "ANTHROPIC_API_KEY": "sk-ant-123",
        }

    def test_inline_comment_outside_quotes(self):
        text = "ENABLE_MONITORING=true # turn on dashboards\nNOTE=\"a # b\"\n"
        assert parse_env_text(text) == {"ENABLE_MONITORING": "true", "NOTE": "a # b"}

    @pytest.mark.parametrize("line,expected", [
        ('PROVIDER="onnx" # local inference', "onnx"),
        ("PROVIDER='onnx'  # local inference", "onnx"),
        ('NOTE="a # b" # trailing', "a # b"),
        ('NOTE="unterminated # comment', '"unterminated'),
    ])
    def test_quoted_value_with_trailing_comment(self, line, expected):
        assert parse_env_text(line + "\n") == {line.split("=")[0]: expected}

    def test_quoted_provider_with_comment_validates(self):
        config = validate_config(parse_env_text('PROVIDER="onnx" # local inference\n'))

        assert config.provider is Provider.ONNX

    def test_empty_value(self):
        assert parse_env_text("OPENROUTER_API_KEY=\n") == {"OPENROUTER_API_KEY": ""}

    def test_comment_only_value_is_empty(self):
        assert parse_env_text("OPENROUTER_API_KEY= # fill me in\n") == {"OPENROUTER_API_KEY": ""}

    def test_ignores_garbage_lines(self):
        assert parse_env_text("not an assignment\nPROVIDER=onnx\n") == {"PROVIDER": "onnx"}


@pytest.mark.unit
class TestLoadEnvFile:
    """Test reading env files from disk."""

    def test_loads_existing_file(self, write_env):
        path = write_env({"PROVIDER": "onnx", "LOG_LEVEL": "debug"})
        assert load_env_file(path) == {"PROVIDER": "onnx", "LOG_LEVEL": "debug"}

    def test_missing_file_raises_invalid_configuration(self, tmp_path):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            load_env_file(tmp_path / ".env")

        assert exc_info.value.context.file_path == str(tmp_path / ".env")
        assert exc_info.value.exit_code == 4


@pytest.mark.unit
class TestEnsureEnvFile:
    """Test bootstrapping .env from .env.example."""

    def test_existing_file_is_left_alone(self, write_env, tmp_path):
        path = write_env({"PROVIDER": "onnx"})
        confirm_calls = []

        created = ensure_env_file(path, tmp_path / ".env.example", confirm=confirm_calls.append)

        assert created is False
        assert confirm_calls == []

    def test_copies_template_and_waits_for_confirmation(self, write_env, tmp_path):
        template = write_env({"PROVIDER": "openrouter"}, name=".env.example")
        confirm_calls = []
        messages = []

        created = ensure_env_file(
            tmp_path / ".env", template, confirm=confirm_calls.append, announce=messages.append
        )

        assert created is True
        assert (tmp_path / ".env").read_text() == template.read_text()
        assert len(confirm_calls) == 1
        assert any("PROVIDER" in message for message in messages)

    def test_missing_template_raises(self, tmp_path):
        with pytest.raises(InvalidConfigurationError, match=".env.example"):
            ensure_env_file(tmp_path / ".env", tmp_path / ".env.example")


@pytest.mark.unit
class TestProvider:
    """Test the closed provider set."""

    def test_every_provider_has_a_credential_entry(self):
        assert set(PROVIDER_CREDENTIALS) == set(Provider)

    @pytest.mark.parametrize("provider,key", [
        (Provider.ANTHROPIC, "ANTHROPIC_API_KEY"),
        (Provider.OPENROUTER, "OPENROUTER_API_KEY"),
        (Provider.GEMINI, "GOOGLE_GEMINI_API_KEY"),
        (Provider.ONNX, None),
    ])
    def test_credential_keys(self, provider, key):
        assert provider.credential_key == key

    def test_values(self):
        assert Provider.values() == ["anthropic", "openrouter", "gemini", "onnx"]


@pytest.mark.unit
class TestValidateConfig:
    """Test provider and credential validation."""

    def test_onnx_needs_no_credential(self):
        config = validate_config({"PROVIDER": "onnx"})

        assert config.provider is Provider.ONNX
        assert config.credential_key is None

    @pytest.mark.parametrize("provider,key", [
        ("anthropic", "ANTHROPIC_API_KEY"),
        ("openrouter", "OPENROUTER_API_KEY"),
        ("gemini", "GOOGLE_GEMINI_API_KEY"),
    ])
    def test_missing_credential_names_the_variable(self, provider, key):
        with pytest.raises(MissingCredentialError) as exc_info:
            validate_config({"PROVIDER": provider})

        error = exc_info.value
        assert error.variable == key
        assert key in str(error)
        assert error.category == ErrorCategory.CREDENTIAL
        assert error.exit_code == 5

    def test_empty_credential_is_missing(self):
        with pytest.raises(MissingCredentialError):
            validate_config({"PROVIDER": "anthropic", "ANTHROPIC_API_KEY": "   "})

    def test_credential_present(self):
        config = validate_config({"PROVIDER": "gemini", "GOOGLE_GEMINI_API_KEY": "g-123"})

        assert config.provider is Provider.GEMINI
        assert config.get("GOOGLE_GEMINI_API_KEY") == "g-123"

    @pytest.mark.parametrize("values", [{}, {"PROVIDER": ""}, {"PROVIDER": "  "}])
    def test_missing_provider(self, values):
        with pytest.raises(InvalidConfigurationError, match="PROVIDER not set") as exc_info:
            validate_config(values)

        assert not isinstance(exc_info.value, MissingCredentialError)

    def test_unknown_provider_lists_valid_options(self):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            validate_config({"PROVIDER": "openai"})

        message = str(exc_info.value)
        assert "openai" in message
        for valid in ("anthropic", "openrouter", "gemini", "onnx"):
            assert valid in message

    def test_other_keys_are_carried_through(self, tmp_path):
        source = tmp_path / ".env"
        config = validate_config({"PROVIDER": "onnx", "ENABLE_MONITORING": "true"}, source=source)

        assert config.get("ENABLE_MONITORING") == "true"
        assert config.get("MISSING", "fallback") == "fallback"
        assert config.source == source


@pytest.mark.unit
class TestDeploymentConfigImmutability:
    """DeploymentConfig must not change after load."""

    def test_values_are_read_only(self):
        config = validate_config({"PROVIDER": "onnx"})

        with pytest.raises(TypeError):
            config.values["PROVIDER"] = "anthropic"

    def test_source_mapping_changes_do_not_leak(self):
        raw = {"PROVIDER": "onnx"}
        config = DeploymentConfig(provider=Provider.ONNX, values=raw)

        raw["EXTRA"] = "1"

        assert "EXTRA" not in config.values

    def test_attributes_are_frozen(self):
        config = validate_config({"PROVIDER": "onnx"})

        with pytest.raises(AttributeError):
            config.provider = Provider.GEMINI
