#!/usr/bin/env python3
"""
rich_ui.py: Console reporting for batch runs.

Every write goes through a single lock so per-job lines from concurrent workers
never interleave mid-line.
"""

import threading
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.models import BatchSummary


class ConsoleReporter:
    """Thread-safe per-job progress lines and an end-of-run summary."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self._lock = threading.Lock()

    def _print(self, text: str) -> None:
        with self._lock:
            self.console.print(text)

    def run_started(self, job_count: int, threads: int) -> None:
        self._print(f"Found {job_count} images to process using {threads} threads...\n")

    def no_images(self) -> None:
        self._print("\nNo image files found to process.")

    def job_started(self, filename: str) -> None:
        self._print(f"Processing: {escape(filename)}")

    def job_succeeded(self, message: str, output_path: Path) -> None:
        self._print(f"  {escape(message)} -> [green]{escape(output_path.name)}[/green]")

    def job_failed(self, reason: str) -> None:
        self._print(f"  [red]Error:[/red] {escape(reason)}")

    def summary(self, summary: BatchSummary) -> None:
        table = Table(title="Processing complete!", show_header=False, box=None)
        table.add_column("Result", style="bold")
        table.add_column("Files", justify="right")
        table.add_row("Successfully processed", str(summary.processed))
        table.add_row("  Cropped", str(summary.cropped))
        table.add_row("  Unchanged", str(summary.unchanged))
        if summary.errors:
            table.add_row("[red]Errors encountered[/red]", str(summary.errors))
        with self._lock:
            self.console.print()
            self.console.print(table)
