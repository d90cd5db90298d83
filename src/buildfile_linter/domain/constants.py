"""Shared constants for the rule catalog."""

# Published documentation root; links below it are an external contract.
DOC_URL_BASE: str = "http://docs.docker.com/go/build-rules/"

# Rule codes are zero-padded decimal strings ("0001").
RULE_CODE_WIDTH: int = 4

REGISTRY_RESOURCE: str = "resources/rule_registry.yaml"

# Section name under [tool] in pyproject.toml.
CONFIG_SECTION: str = "buildfile-linter"

DEDUP_MESSAGE: str = "message"
DEDUP_LOCATION: str = "location"
