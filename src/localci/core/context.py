"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from localci_shared.gateway.sandbox import RealSandbox, Sandbox
from localci_shared.gateway.sandbox.real import DEFAULT_TOOLS_IMAGE, TOOLS_DOCKERFILE

from localci.cli.config import LoadedConfig, config_path, load_config


@dataclass(frozen=True)
class LocalciContext:
    """Immutable context holding all dependencies for localci operations.

    Created at the CLI entry point and threaded through commands via click's
    `obj`. Frozen to prevent accidental modification at runtime; commands
    that need a different value build a new context with dataclasses.replace().

    Note: sandbox is None until the signoff group builds it from its options.
    Tests pre-populate it with a FakeSandbox, in which case the group keeps it.
    """

    cwd: Path
    config: LoadedConfig
    sandbox: Sandbox | None

    @property
    def config_dir(self) -> Path:
        return config_path(self.cwd).parent

    @staticmethod
    def for_test(
        sandbox: Sandbox | None = None,
        cwd: Path | None = None,
        config: LoadedConfig | None = None,
    ) -> "LocalciContext":
        """Create test context with optional pre-configured dependencies.

        Args:
            sandbox: Optional Sandbox. If None, creates an empty FakeSandbox.
            cwd: Optional working directory. If None, uses Path("/test/default/cwd")
                to prevent accidental use of the real Path.cwd() in tests.
            config: Optional LoadedConfig. If None, uses built-in defaults.

        Example:
            >>> sandbox = FakeSandbox(results={("git", "rev-parse", "HEAD"): ...})
            >>> ctx = LocalciContext.for_test(sandbox=sandbox)
            >>> runner.invoke(cli, ["signoff", "sha"], obj=ctx)
        """
        from localci_shared.gateway.sandbox import FakeSandbox

        return LocalciContext(
            cwd=cwd if cwd is not None else Path("/test/default/cwd"),
            config=config if config is not None else LoadedConfig.defaults(),
            sandbox=sandbox if sandbox is not None else FakeSandbox(),
        )


def create_sandbox(*, source_dir: Path, token: str | None, image: str) -> Sandbox:
    """Create the production sandbox.

    The built-in tools image is built locally on first use; any other image
    is left to docker to pull.
    """
    dockerfile = TOOLS_DOCKERFILE if image == DEFAULT_TOOLS_IMAGE else None
    return RealSandbox(source_dir=source_dir, token=token, image=image, dockerfile=dockerfile)


def create_context() -> LocalciContext:
    """Create production context for the current working directory.

    Reads `.localci/config.toml` when present. The sandbox is created later,
    by the command group that needs it.
    """
    cwd = Path.cwd()
    return LocalciContext(
        cwd=cwd,
        config=load_config(config_path(cwd).parent),
        sandbox=None,
    )
