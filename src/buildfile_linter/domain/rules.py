"""Domain models for rules: descriptors and their message formatters."""

import inspect
import json
import re
import string
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from buildfile_linter.domain.constants import RULE_CODE_WIDTH
from buildfile_linter.domain.exceptions import FormatterArityError, InvalidRuleError

Formatter = Callable[..., str]

_CODE_RE = re.compile(rf"[0-9]{{{RULE_CODE_WIDTH},}}")

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class _MessageFormatter(string.Formatter):
    """str.format with an extra ``!q`` conversion that double-quotes and escapes."""

    def convert_field(self, value: Any, conversion: Optional[str]) -> Any:
        if conversion == "q":
            return json.dumps(str(value), ensure_ascii=False)
        return super().convert_field(value, conversion)


_FORMATTER = _MessageFormatter()


def _template_fields(template: str) -> set[str]:
    names: set[str] = set()
    for _literal, field_name, _spec, _conversion in _FORMATTER.parse(template):
        if field_name is None:
            continue
        if not field_name or field_name.isdigit():
            raise InvalidRuleError(
                f"Template {template!r} must use named fields only")
        names.add(field_name.split(".")[0].split("[")[0])
    return names


@dataclass(frozen=True)
class MessageTemplate:
    """
    Formatter declared as data.

    ``params`` fixes the positional arity. Each entry of ``optional`` maps a
    parameter to a clause that is appended only when that argument is non-empty,
    so an empty suggestion never renders as ``(did you mean ?)``.
    """

    template: str
    params: tuple[str, ...] = ()
    optional: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        known = set(self.params)
        if len(known) != len(self.params):
            raise InvalidRuleError(f"Duplicate parameter names in {self.params!r}")
        unknown = _template_fields(self.template) - known
        for param, clause in self.optional:
            if param not in known:
                unknown.add(param)
            unknown |= _template_fields(clause) - known
        if unknown:
            raise InvalidRuleError(
                f"Template {self.template!r} references undeclared parameters: "
                f"{', '.join(sorted(unknown))}"
            )

    @classmethod
    def build(
        cls,
        template: str,
        params: Sequence[str] = (),
        optional: Optional[Mapping[str, str]] = None,
    ) -> "MessageTemplate":
        return cls(
            template=template,
            params=tuple(params),
            optional=tuple((optional or {}).items()),
        )

    @property
    def arity(self) -> tuple[int, Optional[int]]:
        return (len(self.params), len(self.params))

    def check_args(self, args: Sequence[object]) -> Optional[str]:
        """Return a description of what is wrong with ``args``, or None."""
        for name, value in zip(self.params, args):
            if not isinstance(value, str):
                return f"argument {name!r} must be str, got {type(value).__name__}"
        return None

    def __call__(self, *args: str) -> str:
        values = dict(zip(self.params, args))
        message = _FORMATTER.format(self.template, **values)
        for param, clause in self.optional:
            if values.get(param):
                message += _FORMATTER.format(clause, **values)
        return message


def _signature_arity(formatter: Formatter) -> Optional[tuple[int, Optional[int]]]:
    """Positional (minimum, maximum) of ``formatter``, or None when it cannot be inspected."""
    try:
        signature = inspect.signature(formatter)
    except (TypeError, ValueError):
        return None
    required = 0
    maximum: Optional[int] = 0
    for param in signature.parameters.values():
        if param.kind in _POSITIONAL:
            if param.default is inspect.Parameter.empty:
                required += 1
            if maximum is not None:
                maximum += 1
        elif param.kind is inspect.Parameter.VAR_POSITIONAL:
            maximum = None
        elif (
            param.kind is inspect.Parameter.KEYWORD_ONLY
            and param.default is inspect.Parameter.empty
        ):
            raise InvalidRuleError(
                f"Formatter {formatter!r} has required keyword-only parameter {param.name!r}"
            )
    return (required, maximum)


@dataclass(frozen=True)
class RuleDescriptor:
    """
    Immutable metadata of one rule plus the function that phrases its violations.

    ``code`` is at least ``RULE_CODE_WIDTH`` ASCII digits. The formatter may
    describe itself through two optional attributes, as MessageTemplate does:
    ``arity``, a ``(minimum, maximum)`` tuple used instead of its signature,
    and ``check_args(args)``, returning a problem description or None. A
    formatter whose signature cannot be inspected is checked by the call
    itself, and a TypeError from that call becomes a FormatterArityError.
    """

    code: str
    name: str
    description: str
    url: str
    formatter: Formatter
    _arity: tuple[int, Optional[int]] = field(
        init=False, repr=False, compare=False)
    _introspected: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.code, str) or not _CODE_RE.fullmatch(self.code):
            raise InvalidRuleError(
                f"Rule code must be at least {RULE_CODE_WIDTH} ASCII digits, "
                f"got {self.code!r}")
        if not self.name:
            raise InvalidRuleError(f"Rule {self.code} has an empty name")
        if not callable(self.formatter):
            raise InvalidRuleError(f"Rule {self.name} formatter is not callable")
        declared = getattr(self.formatter, "arity", None)
        arity = declared if isinstance(declared, tuple) else _signature_arity(self.formatter)
        object.__setattr__(self, "_introspected", arity is not None)
        object.__setattr__(self, "_arity", arity if arity is not None else (0, None))

    @classmethod
    def from_template(
        cls,
        code: str,
        name: str,
        description: str,
        url: str,
        template: str,
        params: Sequence[str] = (),
        optional: Optional[Mapping[str, str]] = None,
    ) -> "RuleDescriptor":
        """Create a descriptor whose formatter is a MessageTemplate."""
        return cls(
            code=code,
            name=name,
            description=description,
            url=url,
            formatter=MessageTemplate.build(template, params, optional),
        )

    @property
    def arity(self) -> tuple[int, Optional[int]]:
        """(minimum, maximum) positional arguments; maximum is None when variadic."""
        return self._arity

    def format(self, *args: Any) -> str:
        """Render the violation message for ``args``.

        Raises:
            FormatterArityError: ``args`` do not fit the formatter's shape.
        """
        self._check_args(args)
        if self._introspected:
            return self.formatter(*args)
        try:
            return self.formatter(*args)
        except TypeError as exc:
            raise FormatterArityError(self.name, str(exc)) from exc

    def _check_args(self, args: Sequence[Any]) -> None:
        minimum, maximum = self._arity
        if len(args) < minimum or (maximum is not None and len(args) > maximum):
            expected = str(minimum) if minimum == maximum else (
                f"at least {minimum}" if maximum is None else f"{minimum} to {maximum}"
            )
            raise FormatterArityError(
                self.name, f"expected {expected} argument(s), got {len(args)}")
        check_args = getattr(self.formatter, "check_args", None)
        if callable(check_args):
            problem = check_args(args)
            if problem:
                raise FormatterArityError(self.name, problem)
