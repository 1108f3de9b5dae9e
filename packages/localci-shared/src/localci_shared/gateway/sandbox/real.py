"""Production sandbox running commands in throwaway docker containers."""

import logging
import os
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from localci_shared.gateway.sandbox.abc import Sandbox
from localci_shared.gateway.sandbox.types import (
    CommandResult,
    MissingCredentialError,
    SandboxUnavailableError,
)
from localci_shared.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)

SANDBOX_WORKDIR = "/work/repo"

DEFAULT_TOOLS_IMAGE = "localci-signoff:latest"

# Wolfi base with git and gh. setup-git is forced so it succeeds without a token.
TOOLS_DOCKERFILE = """\
FROM cgr.dev/chainguard/wolfi-base
RUN apk add --no-cache gh git
ENV GH_PROMPT_DISABLED=true GH_NO_UPDATE_NOTIFIER=true
RUN gh auth setup-git --force --hostname github.com
WORKDIR /work/repo
"""

_AUTHENTICATED_TOOLS = frozenset({"gh"})


def build_run_command(
    *,
    docker: str,
    image: str,
    source_dir: Path,
    args: Sequence[str],
    with_token: bool,
    interactive: bool,
) -> list[str]:
    """Build the `docker run` argv for one sandboxed command.

    The token is forwarded by name only (`--env GITHUB_TOKEN`), so its value
    is read from the docker client's environment and never appears in argv.
    """
    cmd = [docker, "run", "--rm"]
    if interactive:
        cmd.append("-it")
    cmd.extend(["--volume", f"{source_dir.resolve()}:{SANDBOX_WORKDIR}"])
    cmd.extend(["--workdir", SANDBOX_WORKDIR])
    cmd.extend(["--env", "GH_PROMPT_DISABLED=true"])
    cmd.extend(["--env", "GH_NO_UPDATE_NOTIFIER=true"])
    # The mount is owned by the host user; let git operate on it anyway.
    cmd.extend(["--env", "GIT_CONFIG_COUNT=1"])
    cmd.extend(["--env", "GIT_CONFIG_KEY_0=safe.directory"])
    cmd.extend(["--env", "GIT_CONFIG_VALUE_0=*"])
    if with_token:
        cmd.extend(["--env", "GITHUB_TOKEN"])
    cmd.append(image)
    cmd.extend(args)
    return cmd


class RealSandbox(Sandbox):
    """Sandbox backed by the docker CLI.

    Each exec() starts a fresh container from the tools image with the source
    tree mounted at /work/repo. Containers are removed after every command,
    so no state leaks from one command to the next.
    """

    def __init__(
        self,
        *,
        source_dir: Path,
        token: str | None,
        image: str,
        dockerfile: str | None = None,
        docker: str = "docker",
    ) -> None:
        """Create a RealSandbox.

        Args:
            source_dir: Local git clone to mount into the sandbox
            token: GitHub token injected as GITHUB_TOKEN, or None
            image: Image providing git and gh
            dockerfile: Dockerfile used to build `image` when it is not present
                locally. None means the image is pulled by docker as usual.
            docker: Name or path of the docker executable
        """
        self._source_dir = source_dir
        self._token = token
        self._image = image
        self._dockerfile = dockerfile
        self._docker = docker
        self._image_ready = dockerfile is None

    def exec(self, args: Sequence[str]) -> CommandResult:
        if not args:
            raise ValueError("Cannot run an empty command in the sandbox")
        if args[0] in _AUTHENTICATED_TOOLS and self._token is None:
            raise MissingCredentialError(
                f"A GitHub token is required to run '{args[0]}'. "
                "Pass --token or set GITHUB_TOKEN."
            )
        self._ensure_image()

        cmd = build_run_command(
            docker=self._docker,
            image=self._image,
            source_dir=self._source_dir,
            args=args,
            with_token=self._token is not None,
            interactive=False,
        )
        logger.debug("Running in sandbox: %s", " ".join(args))
        try:
            result = subprocess.run(
                cmd,
                env=self._client_env(),
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise SandboxUnavailableError(f"{self._docker} is not installed or not in PATH") from e

        logger.debug("Sandbox command exited with %d", result.returncode)
        return CommandResult(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            exit_code=result.returncode,
        )

    def terminal(self) -> NoReturn:
        """Replace the current process with a shell in the sandbox.

        Uses os.execvpe() so the terminal is handed to docker directly.
        """
        self._ensure_image()
        cmd = build_run_command(
            docker=self._docker,
            image=self._image,
            source_dir=self._source_dir,
            args=["sh"],
            with_token=self._token is not None,
            interactive=True,
        )
        try:
            os.execvpe(self._docker, cmd, self._client_env())
        except FileNotFoundError as e:
            raise SandboxUnavailableError(f"{self._docker} is not installed or not in PATH") from e

    def _client_env(self) -> dict[str, str]:
        env = os.environ.copy()
        if self._token is not None:
            env["GITHUB_TOKEN"] = self._token
        return env

    def _ensure_image(self) -> None:
        if self._image_ready:
            return
        try:
            inspect = subprocess.run(
                [self._docker, "image", "inspect", self._image],
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise SandboxUnavailableError(f"{self._docker} is not installed or not in PATH") from e

        if inspect.returncode != 0:
            logger.info("Building sandbox image %s", self._image)
            run_subprocess_with_context(
                cmd=[self._docker, "build", "--tag", self._image, "-"],
                operation_context=f"build sandbox image '{self._image}'",
                input=self._dockerfile,
            )
        self._image_ready = True
