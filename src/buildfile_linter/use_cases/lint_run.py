"""Use Case: Lint Run - execute a set of checks against one document with a fresh sink."""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from buildfile_linter.domain.catalog import RuleCatalog
from buildfile_linter.domain.config import LinterSettings
from buildfile_linter.domain.entities import Diagnostic
from buildfile_linter.domain.sink import DiagnosticSink
from buildfile_linter.use_cases.emit_diagnostic import DiagnosticEmitter

logger = logging.getLogger(__name__)

# A check walks the parsed document it closes over and emits what it finds.
Check = Callable[[DiagnosticEmitter], None]


class LintRunUseCase:
    """
    One lint run: one sink, one emitter, many checks.

    Construct a new instance per document or build stage. Checks may run on a
    thread pool (``settings.max_workers > 1``); they then share the run's sink,
    which serializes recording. Diagnostics keep first-recorded order, which is
    only deterministic when checks run sequentially.
    """

    def __init__(self, catalog: RuleCatalog, settings: Optional[LinterSettings] = None) -> None:
        self.catalog = catalog
        self.settings = settings or LinterSettings()
        self.sink = DiagnosticSink(self.settings.dedup)
        self.emitter = DiagnosticEmitter(
            self.sink, catalog=catalog, severity=self.settings.default_severity)

    def execute(self, checks: Sequence[Check]) -> tuple[Diagnostic, ...]:
        """
        Run every check and return the run's diagnostics.

        Raises:
            Whatever the first failing check raised; rule contract errors are
            never turned into diagnostics.
        """
        logger.debug("Running %d check(s) with %d worker(s)",
                     len(checks), self.settings.max_workers)
        if self.settings.max_workers == 1 or len(checks) < 2:
            for check in checks:
                check(self.emitter)
        else:
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
                futures = [pool.submit(check, self.emitter) for check in checks]
                for future in futures:
                    future.result()
        logger.debug("Lint run finished with %d diagnostic(s)", self.sink.count())
        return self.sink.results()
