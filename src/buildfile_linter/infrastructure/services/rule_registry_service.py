"""RuleRegistryService: loads the rule registry YAML that backs the built-in catalog."""

import logging
from pathlib import Path
from typing import Optional, cast

import yaml

from buildfile_linter.domain.catalog import RuleCatalog
from buildfile_linter.domain.constants import REGISTRY_RESOURCE
from buildfile_linter.domain.exceptions import InvalidRuleError
from buildfile_linter.domain.protocols import RuleRegistryProtocol
from buildfile_linter.domain.registry_types import RuleRegistryEntry
from buildfile_linter.domain.rule_msgs import RuleMsgBuilder

logger = logging.getLogger(__name__)


class RuleRegistryService(RuleRegistryProtocol):
    """Loads rule_registry.yaml and turns it into a sealed RuleCatalog."""

    def __init__(self, registry_path: Optional[Path] = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / REGISTRY_RESOURCE
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        # A missing or broken rule table is a packaging bug, not a runtime condition.
        if not self._path.is_file():
            raise InvalidRuleError(f"Rule registry not found: {self._path}")
        with open(self._path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise InvalidRuleError(
                    f"Rule registry {self._path} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise InvalidRuleError(
                f"Rule registry {self._path} must be a mapping of rule name to entry")
        self._registry = cast(dict[str, RuleRegistryEntry], data)
        logger.debug("Loaded %d rule(s) from %s", len(self._registry), self._path)

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def build_catalog(self) -> RuleCatalog:
        """Build a sealed catalog from the loaded entries."""
        return RuleMsgBuilder.build_catalog(self._registry)
