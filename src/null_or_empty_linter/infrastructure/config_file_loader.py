"""Load [tool.null-or-empty-linter] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path
from typing import Optional

from null_or_empty_linter.domain.constants import CONFIG_SECTION

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger = logging.getLogger(__name__)


class ConfigFileLoader:
    """
    Loads config from pyproject.toml.
    """

    @staticmethod
    def load_config_from_fs(start: Optional[Path] = None) -> dict[str, object]:
        """Walk up from ``start`` (default: cwd) and return the first [tool.null-or-empty-linter] table."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = toml_lib.load(f)
            except (OSError, toml_lib.TOMLDecodeError) as exc:
                logger.warning("Cannot read %s: %s", config_file, exc)
                continue
            section = (data.get("tool", {}) or {}).get(CONFIG_SECTION)
            if section is not None:
                logger.debug("Loaded configuration from %s", config_file)
                return dict(section)
        return {}
