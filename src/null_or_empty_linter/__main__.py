"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from null_or_empty_linter.infrastructure.di.container import NullOrEmptyContainer
from null_or_empty_linter.interface.cli import CLIAppFactory, CLIDependencies
from null_or_empty_linter.interface.reporters import TerminalReporter


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = NullOrEmptyContainer()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        source_model=container.get_source_model(),
        rule=container.get_rule(),
        filesystem=container.get_filesystem_gateway(),
        reporter=TerminalReporter(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
