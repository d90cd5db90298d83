"""Rule framework errors. All of them signal a bug in the linter or its rule table."""


class RuleError(Exception):
    """Base class for rule registration and emission contract violations."""


class InvalidRuleError(RuleError, ValueError):
    """A rule definition is malformed (bad code, empty name, broken registry entry)."""


class DuplicateRuleError(RuleError, ValueError):
    """Two descriptors share a code or a name."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"Rule {field} {value!r} is already registered")
        self.field = field
        self.value = value


class UnknownRuleError(RuleError, LookupError):
    """No descriptor is registered under the requested code or name."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"No rule registered with {field} {value!r}")
        self.field = field
        self.value = value


class FormatterArityError(RuleError, TypeError):
    """Emission arguments do not match the shape the rule's formatter expects."""

    def __init__(self, rule_name: str, detail: str) -> None:
        super().__init__(f"Rule {rule_name}: {detail}")
        self.rule_name = rule_name


class CatalogSealedError(RuleError, RuntimeError):
    """A rule was registered after the catalog had been read."""
