"""Pytest configuration and shared fixtures.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
on the import path.
"""

from pathlib import Path

import pytest

SMALL_REGISTRY = """\
DuplicateStageName:
  code: "0005"
  description: Stage names should be unique
  url: http://docs.docker.com/go/build-rules/duplicate-stage-name
  message_template: "Duplicate stage name {stage_name!q}, stage names should be unique"
  params: [stage_name]

UndefinedArgInFrom:
  code: "0009"
  description: FROM command must use declared ARGs
  url: http://docs.docker.com/go/build-rules/undefined-arg-in-from
  message_template: "FROM argument '{base_arg}' is not declared"
  params: [base_arg, suggest]
  optional:
    suggest: " (did you mean {suggest}?)"
"""


@pytest.fixture
def registry_file(tmp_path: Path) -> Path:
    """A two-rule registry YAML on disk."""
    path = tmp_path / "rule_registry.yaml"
    path.write_text(SMALL_REGISTRY, encoding="utf-8")
    return path
