"""Observer pattern for reporting inspections."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .models import InspectionResult


class InspectionObserver(ABC):
    """Abstract base class for inspection observers."""

    @abstractmethod
    def on_inspection_completed(self, subject: str, result: InspectionResult) -> None:
        """Called when a message has been inspected."""
        pass


class ConsoleReportObserver(InspectionObserver):
    """Observer that reports inspections to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def on_inspection_completed(self, subject: str, result: InspectionResult) -> None:
        if result.exempt:
            self.console.print("[green]The message is a merge commit and is exempt from the checks.[/green]")
        elif result.passed:
            self.console.print("[green]The message is OK.[/green]")
        else:
            self.console.print("[red]The message does not comply with the commit message guidelines:[/red]")
            for message in result.messages:
                self.console.print(f"[red]*[/red] {escape(message)}", soft_wrap=True)


class FileLogObserver(InspectionObserver):
    """Observer that logs inspections to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_inspection_completed(self, subject: str, result: InspectionResult) -> None:
        if result.exempt:
            self._log(f"Skipped merge commit: {subject}")
            return

        status = "Passed" if result.passed else f"Failed with {len(result.violations)} violation(s)"
        self._log(f"{status}: {subject}")
        for violation in result.violations:
            self._log(f"  [{violation.kind.value}] {violation.message}")
