"""Fake sandbox implementation for testing."""

from collections.abc import Mapping, Sequence
from typing import NoReturn

from localci_shared.gateway.sandbox.abc import Sandbox
from localci_shared.gateway.sandbox.types import CommandResult


class FakeSandbox(Sandbox):
    """In-memory fake sandbox returning pre-configured command results.

    Constructor Injection:
    ---------------------
    - results: Mapping of argument tuple -> CommandResult
    - default_result: Result for commands missing from `results`
      (defaults to a successful command with empty output)

    Mutation Tracking:
    -----------------
    - executed_commands: Argument tuples in the order they were run
    - terminal_opened: Whether terminal() was called
    """

    def __init__(
        self,
        *,
        results: Mapping[tuple[str, ...], CommandResult] | None = None,
        default_result: CommandResult | None = None,
    ) -> None:
        self._results = dict(results) if results is not None else {}
        self._default_result = (
            default_result
            if default_result is not None
            else CommandResult(stdout="", stderr="", exit_code=0)
        )
        self._executed_commands: list[tuple[str, ...]] = []
        self._terminal_opened = False

    def exec(self, args: Sequence[str]) -> CommandResult:
        key = tuple(args)
        self._executed_commands.append(key)
        return self._results.get(key, self._default_result)

    def terminal(self) -> NoReturn:
        """Record the request and exit cleanly instead of replacing the process."""
        self._terminal_opened = True
        raise SystemExit(0)

    @property
    def executed_commands(self) -> list[tuple[str, ...]]:
        """Commands run during the test, in order.

        This property is for test assertions only.
        """
        return self._executed_commands.copy()

    @property
    def terminal_opened(self) -> bool:
        return self._terminal_opened

    def was_executed(self, *prefix: str) -> bool:
        """Check whether any executed command starts with the given arguments."""
        return any(cmd[: len(prefix)] == prefix for cmd in self._executed_commands)
