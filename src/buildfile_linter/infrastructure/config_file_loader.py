"""Load [tool.buildfile-linter] from pyproject.toml. Infrastructure I/O only."""

import logging
import tomllib
from pathlib import Path
from typing import Optional

from buildfile_linter.domain.constants import CONFIG_SECTION

logger = logging.getLogger(__name__)


class ConfigFileLoader:
    """Finds the nearest pyproject.toml and returns the linter's config table."""

    @staticmethod
    def load_config_from_fs(
        start: Optional[Path] = None,
    ) -> tuple[dict[str, object], Optional[Path]]:
        """Return (config_dict, directory of the pyproject.toml), or ({}, None) when none is found."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.is_file():
                continue
            try:
                with config_file.open("rb") as f:
                    data = tomllib.load(f)
            except OSError:
                logger.debug("Could not read %s", config_file)
                continue
            tool_section = data.get("tool", {}) or {}
            config_dict = tool_section.get(CONFIG_SECTION, {}) or {}
            logger.debug("Loaded [tool.%s] from %s", CONFIG_SECTION, config_file)
            return (dict(config_dict), directory)
        return ({}, None)
