"""Pure descriptor-building from a registry dict. No I/O or infrastructure imports."""

from collections.abc import Mapping
from typing import Any

from buildfile_linter.domain.catalog import RuleCatalog
from buildfile_linter.domain.exceptions import InvalidRuleError
from buildfile_linter.domain.registry_types import RuleRegistryEntry
from buildfile_linter.domain.rules import RuleDescriptor

_REQUIRED_FIELDS = ("code", "description", "url", "message_template")


class RuleMsgBuilder:
    """
    Builds RuleDescriptors and catalogs from a registry mapping.

    Registry keys are rule names (e.g. 'UndefinedArgInFrom'); values are
    RuleRegistryEntry dicts holding code, description, url, message_template,
    params and optional clauses.
    """

    @staticmethod
    def build_descriptor(name: str, entry: Mapping[str, Any]) -> RuleDescriptor:
        """Build one descriptor. Raises InvalidRuleError for a malformed entry."""
        if not isinstance(entry, Mapping):
            raise InvalidRuleError(f"Registry entry for {name} is not a mapping")
        missing = [key for key in _REQUIRED_FIELDS if not entry.get(key)]
        if missing:
            raise InvalidRuleError(
                f"Registry entry for {name} is missing: {', '.join(missing)}")
        code = entry["code"]
        if not isinstance(code, str):
            # An unquoted 0001 in YAML loads as an int and loses its padding.
            raise InvalidRuleError(
                f"Registry entry for {name} must quote its code, got {code!r}")
        params = entry.get("params") or []
        optional = entry.get("optional") or {}
        if not isinstance(params, list) or not isinstance(optional, Mapping):
            raise InvalidRuleError(
                f"Registry entry for {name} has malformed params or optional clauses")
        return RuleDescriptor.from_template(
            code=code,
            name=str(entry.get("name") or name),
            description=str(entry["description"]),
            url=str(entry["url"]),
            template=str(entry["message_template"]),
            params=[str(param) for param in params],
            optional={str(key): str(value) for key, value in optional.items()},
        )

    @staticmethod
    def build_catalog(registry: Mapping[str, RuleRegistryEntry]) -> RuleCatalog:
        """Build and seal a catalog holding every entry of ``registry``."""
        return RuleCatalog.from_descriptors(
            RuleMsgBuilder.build_descriptor(name, entry)
            for name, entry in registry.items()
        )
