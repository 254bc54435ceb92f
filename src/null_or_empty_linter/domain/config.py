"""Configuration for linter settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset({"exclude_paths", "bind_complex_receivers"})


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created by Infrastructure from the ``[tool.null-or-empty-linter]`` table.
    Domain does not read the filesystem; Infrastructure calls
    ConfigFileLoader.load_config_from_fs() and constructs
    ConfigurationLoader(config_dict) at composition root.
    """

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        self._config: dict[str, object] = dict(config_dict or {})
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about unknown keys and wrongly typed values."""
        for key in sorted(set(config) - _KNOWN_KEYS):
            logger.warning("Configuration Warning: unknown key '%s' ignored.", key)

        raw_exclude = config.get("exclude_paths")
        if raw_exclude is not None and not isinstance(raw_exclude, list):
            logger.warning("Configuration Warning: 'exclude_paths' must be a list of strings.")

        raw_bind = config.get("bind_complex_receivers")
        if raw_bind is not None and not isinstance(raw_bind, bool):
            logger.warning("Configuration Warning: 'bind_complex_receivers' must be a boolean.")

    @property
    def exclude_paths(self) -> list[str]:
        """Path fragments skipped by check and fix."""
        raw = self._config.get("exclude_paths", [])
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        return []

    @property
    def bind_complex_receivers(self) -> bool:
        """
        Bind receivers that are not plain references to a temporary.

        When disabled, the receiver expression is evaluated twice by the
        rewritten code.
        """
        raw = self._config.get("bind_complex_receivers", True)
        if isinstance(raw, bool):
            return raw
        return True

    def is_excluded(self, file_path: str) -> bool:
        normalized = file_path.replace("\\", "/")
        return any(fragment in normalized for fragment in self.exclude_paths)
