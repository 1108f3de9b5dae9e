"""Helpers shared by signoff commands."""

from collections.abc import Iterator
from contextlib import contextmanager

from localci.cli.ensure import UserFacingCliError
from localci.core.context import LocalciContext
from localci.core.services.signoff_service import SignoffService


def signoff_service(ctx: LocalciContext) -> SignoffService:
    """Build the service from the context prepared by the signoff group."""
    assert ctx.sandbox is not None, "signoff group must set up the sandbox"
    return SignoffService(ctx.sandbox, check_name=ctx.config.check_name)


@contextmanager
def user_facing_errors() -> Iterator[None]:
    """Turn service and sandbox failures into a red `Error:` line and exit code 1.

    Every failure the service or sandbox raises is a RuntimeError.
    """
    try:
        yield
    except RuntimeError as e:
        raise UserFacingCliError(str(e)) from e
