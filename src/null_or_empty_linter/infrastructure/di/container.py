from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, cast

from null_or_empty_linter.domain.config import ConfigurationLoader
from null_or_empty_linter.domain.rules.null_or_empty import NullOrEmptyRule
from null_or_empty_linter.infrastructure.config_file_loader import ConfigFileLoader
from null_or_empty_linter.infrastructure.gateways.astroid_gateway import AstroidSourceModel
from null_or_empty_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from null_or_empty_linter.infrastructure.gateways.libcst_fixer_gateway import LibCSTFixerGateway
from null_or_empty_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from null_or_empty_linter.domain.protocols import (
        FileSystemProtocol,
        FixerGatewayProtocol,
        SourceModelProtocol,
        TelemetryPort,
    )


class NullOrEmptyContainer:
    """Dependency Injection Container for the null-or-empty linter."""

    def __init__(self, config_root: Optional[Path] = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_root)

    def _register_defaults(self, config_root: Optional[Path]) -> None:
        """Register default implementations for protocols."""
        config_loader = ConfigurationLoader(ConfigFileLoader.load_config_from_fs(config_root))
        self.register_singleton("ConfigurationLoader", config_loader)
        self.register_singleton("TelemetryPort", ProjectTelemetry())

        source_model = AstroidSourceModel()
        fixer_gateway = LibCSTFixerGateway()
        self.register_singleton("AstroidSourceModel", source_model)
        self.register_singleton("LibCSTFixerGateway", fixer_gateway)
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton(
            "NullOrEmptyRule",
            NullOrEmptyRule(
                source_model=source_model,
                fixer_gateway=fixer_gateway,
                bind_complex_receivers=config_loader.bind_complex_receivers,
            ),
        )

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_source_model(self) -> "SourceModelProtocol":
        """Return the astroid/LibCST source model."""
        return cast("SourceModelProtocol", self.get("AstroidSourceModel"))

    def get_fixer_gateway(self) -> "FixerGatewayProtocol":
        """Return the LibCST fixer gateway."""
        return cast("FixerGatewayProtocol", self.get("LibCSTFixerGateway"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        """Return the filesystem gateway."""
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_rule(self) -> NullOrEmptyRule:
        return cast(NullOrEmptyRule, self.get("NullOrEmptyRule"))
