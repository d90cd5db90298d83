"""RuleCatalog: append-only registry of rule descriptors keyed by numeric code."""

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping

from buildfile_linter.domain.constants import RULE_CODE_WIDTH
from buildfile_linter.domain.exceptions import (
    CatalogSealedError,
    DuplicateRuleError,
    UnknownRuleError,
)
from buildfile_linter.domain.rules import RuleDescriptor

logger = logging.getLogger(__name__)


def _code_order(code: str) -> int:
    return int(code)


class RuleView:
    """Restartable view over sealed rules in ascending code order. Each iteration starts over."""

    def __init__(self, by_code: Mapping[str, RuleDescriptor]) -> None:
        self._by_code = by_code

    def __iter__(self) -> Iterator[RuleDescriptor]:
        for code in sorted(self._by_code, key=_code_order):
            yield self._by_code[code]

    def __len__(self) -> int:
        return len(self._by_code)


class RuleCatalog:
    """
    Registry of every RuleDescriptor, keyed by code and by name.

    Populated once at start-up. The first read (lookup, iteration) seals the
    catalog; registering afterwards raises CatalogSealedError. Once sealed the
    mappings never change, so concurrent readers need no lock.
    """

    def __init__(self) -> None:
        self._by_code: dict[str, RuleDescriptor] = {}
        self._by_name: dict[str, RuleDescriptor] = {}
        self._numbers: set[int] = set()
        self._lock = threading.Lock()
        self._sealed = False

    @classmethod
    def from_descriptors(cls, descriptors: Iterable[RuleDescriptor]) -> "RuleCatalog":
        """Register every descriptor, then seal."""
        catalog = cls()
        for descriptor in descriptors:
            catalog.register(descriptor)
        catalog.seal()
        return catalog

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, descriptor: RuleDescriptor) -> None:
        """Add a descriptor.

        Raises:
            DuplicateRuleError: name already registered, or a code with the
                same numeric value (``"0001"`` and ``"00001"`` collide).
            CatalogSealedError: the catalog has already been read.
        """
        with self._lock:
            if self._sealed:
                raise CatalogSealedError(
                    f"Cannot register {descriptor.name}: catalog is sealed")
            if int(descriptor.code) in self._numbers:
                raise DuplicateRuleError("code", descriptor.code)
            if descriptor.name in self._by_name:
                raise DuplicateRuleError("name", descriptor.name)
            self._by_code[descriptor.code] = descriptor
            self._by_name[descriptor.name] = descriptor
            self._numbers.add(int(descriptor.code))
        logger.debug("Registered rule %s (%s)", descriptor.code, descriptor.name)

    def seal(self) -> None:
        """End registration. Idempotent."""
        with self._lock:
            if not self._sealed:
                self._sealed = True
                logger.debug("Rule catalog sealed with %d rule(s)", len(self._by_code))

    def lookup(self, code: str) -> RuleDescriptor:
        """Return the descriptor registered under ``code`` or raise UnknownRuleError."""
        self._seal_on_read()
        try:
            return self._by_code[code]
        except KeyError:
            raise UnknownRuleError("code", code) from None

    def lookup_by_name(self, name: str) -> RuleDescriptor:
        """Return the descriptor registered under ``name`` or raise UnknownRuleError."""
        self._seal_on_read()
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownRuleError("name", name) from None

    def all(self) -> RuleView:
        """All descriptors in strictly ascending code order."""
        self._seal_on_read()
        return RuleView(self._by_code)

    def next_code(self) -> str:
        """Smallest code greater than every allocated one, zero-padded."""
        with self._lock:
            highest = max((int(code) for code in self._by_code), default=0)
        return str(highest + 1).zfill(RULE_CODE_WIDTH)

    def _seal_on_read(self) -> None:
        if not self._sealed:
            self.seal()

    def __len__(self) -> int:
        return len(self._by_code)

    def __contains__(self, key: object) -> bool:
        return key in self._by_code or key in self._by_name

    def __iter__(self) -> Iterator[RuleDescriptor]:
        return iter(self.all())
