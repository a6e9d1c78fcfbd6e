# Aurora Polaris 2025. All rights reserved.
"""Alias table for the backend test-suite runner."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_ALIAS = "all"
TEST_ENV_VAR = "NODE_ENV"
TEST_ENV_VALUE = "test"

DEFAULT_ALIASES: List[Dict[str, Any]] = [
    {"name": "all", "command": "jest"},
    {"name": "coverage", "command": "jest --coverage"},
    {"name": "watch", "command": "jest --watch"},
    {"name": "verbose", "command": "jest --verbose"},
    {"name": "auth", "command": "jest auth.test.js", "test_file": "auth.test.js"},
    {"name": "issues", "command": "jest issues.test.js", "test_file": "issues.test.js"},
    {"name": "comments", "command": "jest comments.test.js", "test_file": "comments.test.js"},
    {"name": "users", "command": "jest users.test.js", "test_file": "users.test.js"},
    {"name": "stewards", "command": "jest stewards.test.js", "test_file": "stewards.test.js"},
    {"name": "upload", "command": "jest upload.test.js", "test_file": "upload.test.js"},
    {"name": "health", "command": "jest health.test.js", "test_file": "health.test.js"},
]


class SuiteAlias(BaseModel):
    """One runnable entry: a short alias and the command line it expands to.

    ``test_file`` is optional. When present it names the single test file the
    command targets, and must match both the command arguments and the alias.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=r"^[a-z][a-z0-9_-]*$")
    command: str
    test_file: str | None = Field(
        default=None,
        description="Test file the command runs, for per-suite aliases.",
    )

    @field_validator("command")
    @classmethod
    def _command_names_program(cls, value: str) -> str:
        tokens = value.split()
        if not tokens:
            raise ValueError("command must not be empty.")
        if tokens[0].startswith("-"):
            raise ValueError(f"command must start with an executable, got {tokens[0]!r}.")
        return value

    @model_validator(mode="after")
    def _test_file_matches(self) -> "SuiteAlias":
        if self.test_file is None:
            return self
        if self.test_file not in self.arguments:
            raise ValueError(f"test_file {self.test_file!r} is not passed by command {self.command!r}.")
        stem = self.test_file.split(".", 1)[0]
        if stem != self.name:
            raise ValueError(f"test_file {self.test_file!r} does not match alias {self.name!r}.")
        return self

    @property
    def argv(self) -> List[str]:
        return self.command.split()

    @property
    def program(self) -> str:
        return self.argv[0]

    @property
    def arguments(self) -> List[str]:
        return self.argv[1:]


AliasTable = Mapping[str, SuiteAlias]


def build_alias_table(entries: Iterable[SuiteAlias | Mapping[str, Any]]) -> AliasTable:
    table: Dict[str, SuiteAlias] = {}
    for entry in entries:
        alias = entry if isinstance(entry, SuiteAlias) else SuiteAlias.model_validate(entry)
        if alias.name in table:
            raise ValueError(f"duplicate alias {alias.name!r}.")
        table[alias.name] = alias
    return MappingProxyType(table)


def available_aliases(table: AliasTable) -> List[str]:
    return list(table)


def format_alias_listing(table: AliasTable, *, with_commands: bool = False) -> str:
    if not with_commands:
        return "\n".join(f"   {name}" for name in table)
    width = max((len(name) for name in table), default=0)
    return "\n".join(f"   {name.ljust(width)}  {alias.command}" for name, alias in table.items())


ALIAS_TABLE = build_alias_table(DEFAULT_ALIASES)
