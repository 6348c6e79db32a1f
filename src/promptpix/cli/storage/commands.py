"""Storage CLI commands - bucket checks and administrative creation."""

from __future__ import annotations

import typer

from ...services import StorageDiagnostics
from ...services.results import Failure
from ...session import AppContext
from ..core.console import console, print_error, print_success
from ..core.context import run_in_context
from .display import show_storage_report


def storage_check() -> None:
    """Check that the image bucket exists and is accessible."""

    async def _check(ctx: AppContext) -> None:
        report = await StorageDiagnostics(ctx).check()
        show_storage_report(console, report, ctx.bucket_id)
        if not report.ok:
            raise typer.Exit(1)

    run_in_context(_check)


def storage_create() -> None:
    """Create the public image bucket."""

    async def _create(ctx: AppContext) -> None:
        report = await StorageDiagnostics(ctx).create_bucket()
        show_storage_report(console, report, ctx.bucket_id)
        if not report.ok:
            raise typer.Exit(1)

    run_in_context(_create)


def storage_test() -> None:
    """Upload and delete a test image in your folder."""

    async def _test(ctx: AppContext) -> None:
        result = await StorageDiagnostics(ctx).test_access()
        if isinstance(result, Failure):
            print_error(result.error, result.details)
            raise typer.Exit(1)
        print_success(result.value)

    run_in_context(_test, require_user=True)
