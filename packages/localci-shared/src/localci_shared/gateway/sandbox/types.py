"""Types and errors for sandbox command execution."""

import shlex
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single command run inside a sandbox.

    Attributes:
        stdout: Captured standard output
        stderr: Captured standard error
        exit_code: Process exit status (0 on success)
    """

    stdout: str
    stderr: str
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def out(self) -> str:
        """Combined output: stdout, a newline, then stderr."""
        return self.stdout + "\n" + self.stderr


class SandboxCommandError(RuntimeError):
    """Raised when a sandboxed command exits with a nonzero status."""

    def __init__(self, args: Sequence[str], result: CommandResult, operation_context: str) -> None:
        self.command = tuple(args)
        self.result = result
        self.operation_context = operation_context
        super().__init__(
            f"Failed to {operation_context}: `{shlex.join(self.command)}` "
            f"exited with code {result.exit_code}\n{result.out.strip()}"
        )


class MissingCredentialError(RuntimeError):
    """Raised when an authenticated command is requested without a credential."""


class SandboxUnavailableError(RuntimeError):
    """Raised when the container runtime backing the sandbox cannot be used."""
