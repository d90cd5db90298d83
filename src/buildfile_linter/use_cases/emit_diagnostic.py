"""Use Case: turn a detected violation into a recorded Diagnostic."""

from collections.abc import Hashable
from typing import Any, Optional

from buildfile_linter.domain.entities import Diagnostic, Severity
from buildfile_linter.domain.protocols import DiagnosticSinkProtocol, RuleLookupProtocol
from buildfile_linter.domain.rules import RuleDescriptor


class DiagnosticEmitter:
    """Bridge between scanning code and a run's sink."""

    def __init__(
        self,
        sink: DiagnosticSinkProtocol,
        catalog: Optional[RuleLookupProtocol] = None,
        severity: Severity = Severity.WARNING,
    ) -> None:
        self.sink = sink
        self.catalog = catalog
        self.severity = severity

    def emit(self, rule: RuleDescriptor, location: Hashable, *args: Any) -> Diagnostic:
        """
        Format ``args`` with ``rule`` and record the result at ``location``.

        The rule is already resolved by the caller; nothing is looked up. The
        formatter runs once and the sink is called once, whether or not the
        sink keeps the diagnostic.

        Raises:
            FormatterArityError: ``args`` do not fit the rule. Nothing is recorded.
        """
        message = rule.format(*args)
        diagnostic = Diagnostic(
            rule_code=rule.code,
            rule_name=rule.name,
            message=message,
            location=location,
            severity=self.severity,
            description=rule.description,
            url=rule.url,
        )
        self.sink.record(diagnostic)
        return diagnostic

    def emit_code(self, code: str, location: Hashable, *args: Any) -> Diagnostic:
        """Look the rule up by code, then emit. UnknownRuleError propagates."""
        return self.emit(self._require_catalog().lookup(code), location, *args)

    def emit_name(self, name: str, location: Hashable, *args: Any) -> Diagnostic:
        """Look the rule up by name, then emit. UnknownRuleError propagates."""
        return self.emit(self._require_catalog().lookup_by_name(name), location, *args)

    def _require_catalog(self) -> RuleLookupProtocol:
        if self.catalog is None:
            raise RuntimeError("DiagnosticEmitter has no catalog to resolve rules from")
        return self.catalog
