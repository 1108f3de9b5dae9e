"""Abstract base class for sandboxed command execution.

A sandbox is an isolated environment with the source tree mounted, the
`git` and `gh` tools installed, and credentials injected. Every operation
is a single command run to completion.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import NoReturn

from localci_shared.gateway.sandbox.types import CommandResult, SandboxCommandError


class Sandbox(ABC):
    """Abstract interface for running commands inside a sandbox.

    All implementations (real and fake) must implement this interface.
    Implementations never mutate shared state between calls: each exec()
    returns an independent, immutable CommandResult.
    """

    @abstractmethod
    def exec(self, args: Sequence[str]) -> CommandResult:
        """Run a command inside the sandbox and wait for it to finish.

        A nonzero exit code is reported through the result, not raised.

        Args:
            args: Command and arguments, e.g. ["git", "status", "--porcelain"]

        Returns:
            CommandResult with stdout, stderr and exit code
        """
        ...

    @abstractmethod
    def terminal(self) -> NoReturn:
        """Replace the current process with an interactive shell in the sandbox.

        Note:
            This method never returns.
        """
        ...


def exec_with_context(
    sandbox: Sandbox,
    args: Sequence[str],
    *,
    operation_context: str,
) -> CommandResult:
    """Run a command and raise if it fails.

    Args:
        sandbox: Sandbox to run the command in
        args: Command and arguments
        operation_context: Short description used in the error message,
            e.g. "resolve HEAD commit"

    Returns:
        CommandResult of the successful command

    Raises:
        SandboxCommandError: If the command exits with a nonzero status
    """
    result = sandbox.exec(args)
    if not result.succeeded:
        raise SandboxCommandError(args, result, operation_context)
    return result
