"""Tests for the `localci signoff` command group."""

from dataclasses import replace

from click.testing import CliRunner
from localci_shared.gateway.sandbox import CommandResult, FakeSandbox, MissingCredentialError

from localci.cli.cli import cli
from localci.core.context import LocalciContext

STATUS = ("git", "status", "--porcelain")
UPSTREAM = ("git", "rev-parse", "--abbrev-ref", "@{push}")
HEAD = ("git", "rev-parse", "HEAD")
WHOAMI = ("gh", "api", "user", "--jq", ".login")
DEFAULT_BRANCH = ("gh", "api", "repos/:owner/:repo", "--jq", ".default_branch")
CURRENT_BRANCH = ("git", "rev-parse", "--abbrev-ref", "HEAD")


def _ok(stdout: str = "") -> CommandResult:
    return CommandResult(stdout=stdout, stderr="", exit_code=0)


def _fail(stderr: str = "", exit_code: int = 1) -> CommandResult:
    return CommandResult(stdout="", stderr=stderr, exit_code=exit_code)


def _invoke(sandbox: FakeSandbox, args: list[str], ctx: LocalciContext | None = None):
    runner = CliRunner()
    obj = ctx if ctx is not None else LocalciContext.for_test(sandbox=sandbox)
    return runner.invoke(cli, ["signoff", *args], obj=obj, catch_exceptions=False)


def test_is_clean_success() -> None:
    result = _invoke(FakeSandbox(), ["is-clean"])

    assert result.exit_code == 0, result.output
    assert "Repository is clean" in result.output


def test_is_clean_reports_first_failure() -> None:
    sandbox = FakeSandbox(results={STATUS: _ok(" M a.py\n"), UPSTREAM: _fail()})

    result = _invoke(sandbox, ["is-clean"])

    assert result.exit_code == 1
    assert "Error: found uncommitted changes in the repo" in result.output
    assert "no tracking branch found" not in result.output


def test_create_signs_off_head() -> None:
    sandbox = FakeSandbox(results={HEAD: _ok("abc123\n"), WHOAMI: _ok("alice\n")})

    result = _invoke(sandbox, ["create"])

    assert result.exit_code == 0, result.output
    assert "✓ Signed off on abc123" in result.output
    post = sandbox.executed_commands[-1]
    assert "context=signoff" in post
    assert "description=alice signed off" in post


def test_create_with_check_name_option() -> None:
    sandbox = FakeSandbox(results={HEAD: _ok("abc123\n"), WHOAMI: _ok("alice\n")})

    result = _invoke(sandbox, ["--check-name", "local-ci", "create"])

    assert result.exit_code == 0, result.output
    assert "context=local-ci" in sandbox.executed_commands[-1]


def test_create_with_check_name_from_environment() -> None:
    sandbox = FakeSandbox(results={HEAD: _ok("abc123\n"), WHOAMI: _ok("alice\n")})
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["signoff", "create"],
        obj=LocalciContext.for_test(sandbox=sandbox),
        env={"LOCALCI_CHECK_NAME": "from-env"},
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    assert "context=from-env" in sandbox.executed_commands[-1]


def test_create_with_check_name_from_config() -> None:
    sandbox = FakeSandbox(results={HEAD: _ok("abc123\n"), WHOAMI: _ok("alice\n")})
    base = LocalciContext.for_test(sandbox=sandbox)
    ctx = replace(base, config=replace(base.config, check_name="configured"))

    result = _invoke(sandbox, ["create"], ctx=ctx)

    assert result.exit_code == 0, result.output
    assert "context=configured" in sandbox.executed_commands[-1]


def test_create_refuses_dirty_repo() -> None:
    sandbox = FakeSandbox(results={STATUS: _ok("?? scratch.txt\n")})

    result = _invoke(sandbox, ["create"])

    assert result.exit_code == 1
    assert "found uncommitted changes in the repo" in result.output
    assert not sandbox.was_executed("gh")


def test_create_reports_post_failure_output() -> None:
    sandbox = FakeSandbox(
        results={
            STATUS: _ok(),
            UPSTREAM: _ok("origin/main\n"),
            ("git", "log", "@{push}.."): _ok(),
            HEAD: _ok("abc123\n"),
            WHOAMI: _ok("alice\n"),
        },
        default_result=_fail("HTTP 403: Resource not accessible by integration"),
    )

    result = _invoke(sandbox, ["create"])

    assert result.exit_code == 1
    assert "HTTP 403: Resource not accessible by integration" in result.output
    assert "Signed off" not in result.output


def test_install_default_branch() -> None:
    sandbox = FakeSandbox(results={DEFAULT_BRANCH: _ok("main\n")})

    result = _invoke(sandbox, ["install"])

    assert result.exit_code == 0, result.output
    assert "GitHub branch 'main' now requires check 'signoff'" in result.output
    assert sandbox.executed_commands[1][2] == "/repos/:owner/:repo/branches/main/protection"


def test_install_explicit_branch() -> None:
    sandbox = FakeSandbox()

    result = _invoke(sandbox, ["install", "--branch", "release"])

    assert result.exit_code == 0, result.output
    assert not sandbox.was_executed(*DEFAULT_BRANCH)


def test_install_without_resolvable_branch() -> None:
    sandbox = FakeSandbox(results={DEFAULT_BRANCH: _ok("")})

    result = _invoke(sandbox, ["install"])

    assert result.exit_code == 1
    assert "could not install without a branch name" in result.output
    assert sandbox.executed_commands == [DEFAULT_BRANCH]


def test_uninstall_default_branch() -> None:
    sandbox = FakeSandbox(results={DEFAULT_BRANCH: _ok("main\n")})

    result = _invoke(sandbox, ["uninstall"])

    assert result.exit_code == 0, result.output
    assert "GitHub branch 'main' no longer requires check 'signoff'" in result.output
    assert sandbox.executed_commands[-1][-2:] == ("--method", "DELETE")


def test_sha_prints_trimmed_value() -> None:
    result = _invoke(FakeSandbox(results={HEAD: _ok("abc123\n")}), ["sha"])

    assert result.exit_code == 0, result.output
    assert result.output == "abc123\n"


def test_whoami() -> None:
    result = _invoke(FakeSandbox(results={WHOAMI: _ok(" alice \n")}), ["whoami"])

    assert result.output == "alice\n"


def test_default_branch() -> None:
    result = _invoke(FakeSandbox(results={DEFAULT_BRANCH: _ok("main\n")}), ["default-branch"])

    assert result.output == "main\n"


def test_current_branch() -> None:
    result = _invoke(
        FakeSandbox(results={CURRENT_BRANCH: _ok("feature\n")}), ["current-branch"]
    )

    assert result.output == "feature\n"


def test_pr_url() -> None:
    sandbox = FakeSandbox(
        results={DEFAULT_BRANCH: _ok("main\n"), CURRENT_BRANCH: _ok("feature\n")},
        default_result=_ok("https://github.com/owner/repo/pull/3\n"),
    )

    result = _invoke(sandbox, ["pr-url"])

    assert result.exit_code == 0, result.output
    assert result.output == "https://github.com/owner/repo/pull/3\n"


def test_pr_url_without_open_pr() -> None:
    sandbox = FakeSandbox(
        results={DEFAULT_BRANCH: _ok("main\n"), CURRENT_BRANCH: _ok("feature\n")}
    )

    result = _invoke(sandbox, ["pr-url"])

    assert result.exit_code == 1
    assert "No open pull request" in result.output


def test_open_pr_verbose() -> None:
    sandbox = FakeSandbox(default_result=_ok("https://github.com/owner/repo/pull/4\n"))

    result = _invoke(sandbox, ["open-pr", "--verbose"])

    assert result.exit_code == 0, result.output
    assert sandbox.executed_commands == [("gh", "pr", "create", "--fill-verbose")]
    assert "https://github.com/owner/repo/pull/4" in result.output


def test_exec_prints_combined_output() -> None:
    sandbox = FakeSandbox(default_result=CommandResult(stdout="v2.45", stderr="", exit_code=0))

    result = _invoke(sandbox, ["exec", "--", "git", "--version"])

    assert result.exit_code == 0, result.output
    assert sandbox.executed_commands == [("git", "--version")]
    assert "v2.45" in result.output


def test_exec_fails_on_nonzero_exit() -> None:
    sandbox = FakeSandbox(default_result=_fail("fatal: boom", exit_code=128))

    result = _invoke(sandbox, ["exec", "--", "git", "fetch"])

    assert result.exit_code == 1
    assert "fatal: boom" in result.output


def test_exec_show_exit_code_does_not_fail() -> None:
    sandbox = FakeSandbox(default_result=_fail("nope", exit_code=128))

    result = _invoke(sandbox, ["exec", "--show", "exit-code", "--", "git", "describe"])

    assert result.exit_code == 0, result.output
    assert result.output == "128\n"


def test_exec_show_stderr() -> None:
    sandbox = FakeSandbox(default_result=CommandResult(stdout="a", stderr="b\n", exit_code=0))

    result = _invoke(sandbox, ["exec", "--show", "stderr", "--", "git", "status"])

    assert result.output == "b\n"


def test_terminal_opens_sandbox_shell() -> None:
    sandbox = FakeSandbox()

    result = _invoke(sandbox, ["terminal"])

    assert result.exit_code == 0
    assert sandbox.terminal_opened


def test_missing_credential_is_reported() -> None:
    class NoTokenSandbox(FakeSandbox):
        def exec(self, args):
            if args[0] == "gh":
                raise MissingCredentialError("A GitHub token is required to run 'gh'.")
            return super().exec(args)

    result = _invoke(NoTokenSandbox(), ["whoami"])

    assert result.exit_code == 1
    assert "Error: A GitHub token is required" in result.output
