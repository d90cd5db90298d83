"""DiagnosticSink: per-run, insertion-ordered, deduplicated diagnostics."""

import logging
import threading
from collections.abc import Iterator
from typing import Any

from buildfile_linter.domain.entities import DedupStrategy, Diagnostic

logger = logging.getLogger(__name__)


class DiagnosticSink:
    """
    Accumulates the diagnostics of one lint run.

    Each run owns its own sink; there is no shared instance and no way to
    clear one. ``record`` is safe to call from several threads of the same run.
    """

    def __init__(self, strategy: DedupStrategy = DedupStrategy.MESSAGE) -> None:
        self._strategy = strategy
        self._diagnostics: list[Diagnostic] = []
        self._seen: set[tuple[Any, ...]] = set()
        self._lock = threading.Lock()

    @property
    def strategy(self) -> DedupStrategy:
        return self._strategy

    def record(self, diagnostic: Diagnostic) -> bool:
        """Append ``diagnostic`` unless an equivalent one is already recorded.

        Returns True when appended, False for a duplicate.
        """
        key = diagnostic.key(self._strategy)
        with self._lock:
            if key in self._seen:
                logger.debug("Dropping duplicate diagnostic %s at %s",
                             diagnostic.rule_code, diagnostic.location)
                return False
            self._seen.add(key)
            self._diagnostics.append(diagnostic)
        return True

    def results(self) -> tuple[Diagnostic, ...]:
        """Recorded diagnostics in the order they were first recorded."""
        with self._lock:
            return tuple(self._diagnostics)

    def count(self) -> int:
        return len(self._diagnostics)

    def is_empty(self) -> bool:
        return not self._diagnostics

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.results())
