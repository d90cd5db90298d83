from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

from buildfile_linter.domain.registry_types import RuleRegistryEntry

if TYPE_CHECKING:
    from buildfile_linter.domain.entities import Diagnostic
    from buildfile_linter.domain.rules import RuleDescriptor


class DiagnosticSinkProtocol(Protocol):
    """Anything the emitter can record diagnostics into."""

    def record(self, diagnostic: "Diagnostic") -> bool: ...


class RuleLookupProtocol(Protocol):
    """Read side of a rule catalog, as used by emitters."""

    def lookup(self, code: str) -> "RuleDescriptor": ...
    def lookup_by_name(self, name: str) -> "RuleDescriptor": ...
    def all(self) -> Iterable["RuleDescriptor"]: ...


class RuleRegistryProtocol(Protocol):
    """Source of raw rule registry entries (e.g. the packaged YAML table)."""

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        ...
