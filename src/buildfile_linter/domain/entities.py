from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from buildfile_linter.domain.constants import DEDUP_LOCATION, DEDUP_MESSAGE


class Severity(Enum):
    """Severity carried on a diagnostic. The core records it and never acts on it."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DedupStrategy(Enum):
    """Which fields identify a diagnostic inside one sink."""
    MESSAGE = DEDUP_MESSAGE
    LOCATION = DEDUP_LOCATION


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based character offset within a one-based line."""
    line: int
    character: int = 0


@dataclass(frozen=True, order=True)
class SourceRange:
    """Start/end span in a build definition. Any hashable location works; this is the common one."""
    start: Position
    end: Position

    @classmethod
    def at(cls, line: int, column: int = 0) -> "SourceRange":
        point = Position(line, column)
        return cls(start=point, end=point)

    @classmethod
    def span(
        cls, start_line: int, start_column: int, end_line: int, end_column: int
    ) -> "SourceRange":
        return cls(
            start=Position(start_line, start_column),
            end=Position(end_line, end_column),
        )

    def __str__(self) -> str:
        if self.start == self.end:
            return f"{self.start.line}:{self.start.character}"
        return (
            f"{self.start.line}:{self.start.character}-"
            f"{self.end.line}:{self.end.character}"
        )


@dataclass(frozen=True)
class Diagnostic:
    """One formatted report of a rule violation at a location."""

    rule_code: str
    rule_name: str
    message: str
    location: Hashable
    severity: Severity = Severity.WARNING
    description: str = ""
    url: str = ""

    def key(self, strategy: DedupStrategy = DedupStrategy.MESSAGE) -> tuple[Any, ...]:
        """Identity of this diagnostic for deduplication under ``strategy``."""
        if strategy is DedupStrategy.LOCATION:
            return (self.rule_code, self.location)
        return (self.rule_code, self.location, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporters."""
        return {
            "code": self.rule_code,
            "name": self.rule_name,
            "message": self.message,
            "location": str(self.location),
            "severity": self.severity.value,
            "description": self.description,
            "url": self.url,
        }
