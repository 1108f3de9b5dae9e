"""Service for signing off commits from the developer machine.

A sign-off marks the current commit as approved by posting a successful
commit status to GitHub. It is only allowed when the local clone is clean,
so the posted commit is exactly what was verified locally.
"""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import NoReturn

from localci_shared.gateway.sandbox import (
    CommandResult,
    Sandbox,
    SandboxCommandError,
    exec_with_context,
)

logger = logging.getLogger(__name__)

DEFAULT_CHECK_NAME = "signoff"

_GITHUB_API_HEADERS = [
    "-H",
    "Accept: application/vnd.github+json",
    "-H",
    "X-GitHub-Api-Version: 2022-11-28",
]


class Cleanliness(Enum):
    """State of the local clone, as seen by the sign-off gate."""

    CLEAN = None
    DIRTY = "found uncommitted changes in the repo"
    UNTRACKED = "no tracking branch found"
    AHEAD = "found unpushed commits in the repo"

    @property
    def message(self) -> str | None:
        return self.value


class SignoffError(RuntimeError):
    """Error raised when a sign-off operation fails."""


class RepositoryNotCleanError(SignoffError):
    """Error raised when the local clone is not safe to sign off."""

    def __init__(self, state: Cleanliness) -> None:
        assert state is not Cleanliness.CLEAN
        self.state = state
        super().__init__(state.message)


class MissingBranchError(SignoffError):
    """Error raised when no branch name could be determined."""


@dataclass(frozen=True)
class SignoffResult:
    """A successfully posted sign-off."""

    sha: str
    user: str
    check_name: str


class SignoffService:
    """Sign off commits and manage the matching branch protection.

    Takes the Sandbox gateway as a constructor arg (testable, no globals).
    Raises exceptions instead of printing or exiting.

    Commands run strictly one after another. A service instance must not be
    shared between concurrent workflows; create one per workflow instead.
    """

    def __init__(self, sandbox: Sandbox, check_name: str = DEFAULT_CHECK_NAME) -> None:
        self._sandbox = sandbox
        self._check_name = check_name

    @property
    def check_name(self) -> str:
        return self._check_name

    # ============================================================================
    # Cleanliness gate
    # ============================================================================

    def check_cleanliness(self) -> Cleanliness:
        """Report the first reason the clone is not clean, if any.

        Checks run in a fixed order and stop at the first failure:
        uncommitted changes, then missing tracking branch, then unpushed commits.
        """
        status = self._git(["status", "--porcelain"])
        if not status.succeeded or status.stdout.strip():
            return Cleanliness.DIRTY

        upstream = self._git(["rev-parse", "--abbrev-ref", "@{push}"])
        if not upstream.succeeded:
            return Cleanliness.UNTRACKED

        unpushed = self._git(["log", "@{push}.."])
        if not unpushed.succeeded or unpushed.stdout.strip():
            return Cleanliness.AHEAD

        return Cleanliness.CLEAN

    def ensure_clean(self) -> None:
        """Raise RepositoryNotCleanError unless the clone is clean."""
        state = self.check_cleanliness()
        if state is not Cleanliness.CLEAN:
            logger.debug("Cleanliness gate failed: %s", state.name)
            raise RepositoryNotCleanError(state)

    # ============================================================================
    # Sign-off
    # ============================================================================

    def create(self) -> SignoffResult:
        """Sign off the current commit.

        Ensures the clone is clean, then marks the configured check as
        successful on HEAD. Nothing is posted if any earlier step fails.
        """
        self.ensure_clean()
        sha = self.sha()
        user = self.whois()

        logger.info("Posting %s status for %s as %s", self._check_name, sha, user)
        exec_with_context(
            self._sandbox,
            [
                "gh",
                "api",
                "--method",
                "POST",
                f"repos/:owner/:repo/statuses/{sha}",
                "-f",
                "state=success",
                "-f",
                f"context={self._check_name}",
                "-f",
                f"description={user} signed off",
            ],
            operation_context=f"post {self._check_name} status for {sha}",
        )
        return SignoffResult(sha=sha, user=user, check_name=self._check_name)

    # ============================================================================
    # Branch protection
    # ============================================================================

    def install(self, branch: str | None = None) -> str:
        """Require the check on a branch (the default branch if None).

        Returns:
            The branch the requirement was installed on
        """
        target = self._resolve_branch(branch, action="install")
        try:
            exec_with_context(
                self._sandbox,
                [
                    "gh",
                    "api",
                    f"/repos/:owner/:repo/branches/{target}/protection",
                    "--method",
                    "PUT",
                    *_GITHUB_API_HEADERS,
                    "--field",
                    "required_status_checks[strict]=false",
                    "--field",
                    f"required_status_checks[contexts][]={self._check_name}",
                    "--field",
                    "enforce_admins=null",
                    "--field",
                    "required_pull_request_reviews=null",
                    "--field",
                    "restrictions=null",
                ],
                operation_context=f"protect branch {target}",
            )
        except SandboxCommandError as e:
            raise SignoffError(
                f"could not install signoff check {self._check_name!r} to branch {target!r}: {e}"
            ) from e
        return target

    def uninstall(self, branch: str | None = None) -> str:
        """Remove all protection rules from a branch (the default branch if None).

        Returns:
            The branch whose protection was removed
        """
        target = self._resolve_branch(branch, action="uninstall")
        try:
            exec_with_context(
                self._sandbox,
                [
                    "gh",
                    "api",
                    f"/repos/:owner/:repo/branches/{target}/protection",
                    "--method",
                    "DELETE",
                ],
                operation_context=f"remove protection from branch {target}",
            )
        except SandboxCommandError as e:
            raise SignoffError(
                f"could not uninstall branch protection for branch {target!r}: {e}"
            ) from e
        return target

    def _resolve_branch(self, branch: str | None, *, action: str) -> str:
        if not branch:
            try:
                branch = self.default_branch()
            except SandboxCommandError as e:
                raise SignoffError(f"could not get the default branch: {e}") from e
            logger.debug("Resolved default branch: %r", branch)
        if not branch:
            raise MissingBranchError(f"could not {action} without a branch name")
        return branch

    # ============================================================================
    # Queries
    # ============================================================================

    def sha(self) -> str:
        """Commit SHA of HEAD."""
        result = exec_with_context(
            self._sandbox, ["git", "rev-parse", "HEAD"], operation_context="resolve HEAD commit"
        )
        return result.stdout.strip()

    def whois(self) -> str:
        """Login of the user the token authenticates as."""
        result = exec_with_context(
            self._sandbox,
            ["gh", "api", "user", "--jq", ".login"],
            operation_context="get authenticated user",
        )
        return result.stdout.strip()

    def current_branch(self) -> str:
        result = exec_with_context(
            self._sandbox,
            ["git", "rev-parse", "--abbrev-ref", "HEAD"],
            operation_context="get current branch",
        )
        return result.stdout.strip()

    def default_branch(self) -> str:
        """Default branch configured on the GitHub repository."""
        result = exec_with_context(
            self._sandbox,
            ["gh", "api", "repos/:owner/:repo", "--jq", ".default_branch"],
            operation_context="get default branch",
        )
        return result.stdout.strip()

    def pull_request(self) -> str:
        """URL of the open pull request from the current branch to the default branch.

        Returns:
            The PR URL, or an empty string if there is none
        """
        base = self.default_branch()
        head = self.current_branch()
        query = (
            '.[] | select(.state == "open")'
            f" | select(.base.ref == {json.dumps(base)})"
            f" | select(.head.ref == {json.dumps(head)})"
            " | .html_url"
        )
        result = exec_with_context(
            self._sandbox,
            ["gh", "api", "repos/:owner/:repo/pulls", "--paginate", "--jq", query],
            operation_context="list pull requests",
        )
        urls = result.stdout.split()
        return urls[0] if urls else ""

    def open_pr(self, *, verbose: bool = False) -> str:
        """Open a pull request for the current branch.

        Args:
            verbose: Fill the PR body with full commit messages

        Returns:
            Combined output of `gh pr create`
        """
        fill = "--fill-verbose" if verbose else "--fill"
        return self.run(["gh", "pr", "create", fill])

    # ============================================================================
    # Escape hatches
    # ============================================================================

    def run(self, args: Sequence[str]) -> str:
        """Run any command, returning combined output; raise on nonzero exit."""
        result = exec_with_context(self._sandbox, args, operation_context=f"run {args[0]}")
        return result.out

    def exec(self, args: Sequence[str]) -> CommandResult:
        """Run any command and return the raw result, whatever its exit code."""
        return self._sandbox.exec(args)

    def terminal(self) -> NoReturn:
        self._sandbox.terminal()

    def _git(self, args: list[str]) -> CommandResult:
        return self._sandbox.exec(["git", *args])
