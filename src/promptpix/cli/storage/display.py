"""Display functions for storage commands - pure functions for Rich output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...services import StorageReport


def show_storage_report(console: Console, report: StorageReport, bucket_id: str) -> None:
    """Display buckets and the status of the image bucket."""
    if report.buckets:
        table = Table(title="Buckets")
        table.add_column("ID", style="cyan")
        table.add_column("Public", style="yellow")
        for bucket in report.buckets:
            table.add_row(bucket.id, "yes" if bucket.public else "no")
        console.print(table)

    if report.ok:
        console.print(Panel(
            f"[bold green]Bucket '{bucket_id}' is ready[/bold green]",
            border_style="green",
        ))
        return

    hint = ""
    if report.bucket_missing:
        hint = "\n\n[dim]Run 'promptpix storage-create' to create it.[/dim]"
    console.print(Panel(
        f"[red]{report.error}[/red]{hint}",
        title="Storage",
        border_style="red",
    ))
