from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    code: str
    name: str
    description: str
    url: str
    message_template: str
    # Positional parameter names, in call order.
    params: list[str]
    # Parameter name -> clause appended only when that argument is non-empty.
    optional: dict[str, str]
