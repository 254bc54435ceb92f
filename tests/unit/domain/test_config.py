"""Unit tests for ConfigurationLoader."""

import logging

import pytest

from null_or_empty_linter.domain.config import ConfigurationLoader


class TestConfigurationLoader:
    """Test configuration defaults, validation and exclusion."""

    def test_defaults(self) -> None:
        config = ConfigurationLoader()
        assert config.exclude_paths == []
        assert config.bind_complex_receivers is True

    def test_reads_values(self) -> None:
        config = ConfigurationLoader({"exclude_paths": ["build/"], "bind_complex_receivers": False})
        assert config.exclude_paths == ["build/"]
        assert config.bind_complex_receivers is False

    def test_invalid_types_fall_back_to_defaults(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            config = ConfigurationLoader({"exclude_paths": "build/", "bind_complex_receivers": "no"})
        assert config.exclude_paths == []
        assert config.bind_complex_receivers is True
        assert "exclude_paths" in caplog.text
        assert "bind_complex_receivers" in caplog.text

    def test_unknown_key_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            ConfigurationLoader({"severity": "error"})
        assert "unknown key 'severity'" in caplog.text

    def test_is_excluded_matches_fragments(self) -> None:
        config = ConfigurationLoader({"exclude_paths": ["tests/fixtures/"]})
        assert config.is_excluded("/repo/tests/fixtures/bad.py")
        assert config.is_excluded("C:\\repo\\tests\\fixtures\\bad.py")
        assert not config.is_excluded("/repo/src/good.py")
