"""Linter settings read from [tool.buildfile-linter]. Rule enable/disable lives with the caller."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from buildfile_linter.domain.entities import DedupStrategy, Severity

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset({"registry_path", "dedup", "default_severity", "max_workers"})


@dataclass(frozen=True)
class LinterSettings:
    """Settings for the rule framework itself."""

    registry_path: Optional[Path] = None
    dedup: DedupStrategy = DedupStrategy.MESSAGE
    default_severity: Severity = Severity.WARNING
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    @classmethod
    def from_dict(
        cls, data: Mapping[str, object], base_dir: Optional[Path] = None
    ) -> "LinterSettings":
        """Build settings from a config table. Raises ValueError for invalid values."""
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            logger.warning("Configuration Warning: ignoring unknown keys: %s",
                           ", ".join(unknown))

        registry_path: Optional[Path] = None
        raw_path = data.get("registry_path")
        if raw_path:
            registry_path = Path(str(raw_path))
            if not registry_path.is_absolute() and base_dir is not None:
                registry_path = base_dir / registry_path

        raw_workers = data.get("max_workers", 1)
        if isinstance(raw_workers, bool) or not isinstance(raw_workers, int):
            raise ValueError(f"max_workers must be an integer, got {raw_workers!r}")

        return cls(
            registry_path=registry_path,
            dedup=DedupStrategy(str(data.get("dedup", DedupStrategy.MESSAGE.value))),
            default_severity=Severity(
                str(data.get("default_severity", Severity.WARNING.value))),
            max_workers=raw_workers,
        )
