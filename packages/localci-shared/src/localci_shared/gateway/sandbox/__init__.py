"""Sandboxed command execution with git and gh available."""

from localci_shared.gateway.sandbox.abc import Sandbox as Sandbox
from localci_shared.gateway.sandbox.abc import exec_with_context as exec_with_context
from localci_shared.gateway.sandbox.fake import FakeSandbox as FakeSandbox
from localci_shared.gateway.sandbox.real import RealSandbox as RealSandbox
from localci_shared.gateway.sandbox.types import CommandResult as CommandResult
from localci_shared.gateway.sandbox.types import MissingCredentialError as MissingCredentialError
from localci_shared.gateway.sandbox.types import SandboxCommandError as SandboxCommandError
from localci_shared.gateway.sandbox.types import (
    SandboxUnavailableError as SandboxUnavailableError,
)
