import logging
import threading
from pathlib import Path
from typing import Optional

from buildfile_linter.domain.catalog import RuleCatalog
from buildfile_linter.domain.config import LinterSettings
from buildfile_linter.domain.sink import DiagnosticSink
from buildfile_linter.infrastructure.config_file_loader import ConfigFileLoader
from buildfile_linter.infrastructure.services.rule_registry_service import (
    RuleRegistryService,
)
from buildfile_linter.use_cases.emit_diagnostic import DiagnosticEmitter
from buildfile_linter.use_cases.lint_run import LintRunUseCase

logger = logging.getLogger(__name__)


class LinterContainer:
    """
    Composition root for the rule framework.

    Construct one per process and hand it (or its catalog) to every scanning
    worker. The catalog is built on first use behind a lock and is sealed, so
    workers may read it concurrently afterwards. Sinks, emitters and runs are
    new objects on every call.
    """

    def __init__(self, settings: Optional[LinterSettings] = None) -> None:
        self._settings = settings or LinterSettings()
        self._catalog: Optional[RuleCatalog] = None
        self._lock = threading.Lock()

    @classmethod
    def from_pyproject(cls, start: Optional[Path] = None) -> "LinterContainer":
        """Container configured from the nearest pyproject.toml."""
        config_dict, base_dir = ConfigFileLoader.load_config_from_fs(start)
        return cls(LinterSettings.from_dict(config_dict, base_dir))

    @property
    def settings(self) -> LinterSettings:
        return self._settings

    def catalog(self) -> RuleCatalog:
        """The process-wide catalog. Built exactly once."""
        if self._catalog is None:
            with self._lock:
                if self._catalog is None:
                    service = RuleRegistryService(self.settings.registry_path)
                    self._catalog = service.build_catalog()
                    logger.debug("Built rule catalog from %s", service.path)
        return self._catalog

    def new_sink(self) -> DiagnosticSink:
        return DiagnosticSink(self.settings.dedup)

    def new_emitter(self, sink: DiagnosticSink) -> DiagnosticEmitter:
        return DiagnosticEmitter(
            sink, catalog=self.catalog(), severity=self.settings.default_severity)

    def new_run(self) -> LintRunUseCase:
        return LintRunUseCase(self.catalog(), self.settings)
