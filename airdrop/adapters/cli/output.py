"""
Rich-based console output
"""
from pathlib import Path
import sys
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from ...core.logging import get_stdout_console, get_stderr_console
from ...domain.dispatch.models import ItemBatch, SubmissionResult


def program_name() -> str:
    return Path(sys.argv[0]).name or "airdrop"


class ConsoleOutput:
    """User-facing messages on the stdout and stderr consoles"""

    def __init__(self, stdout: Optional[Console] = None, stderr: Optional[Console] = None):
        self.stdout = stdout or get_stdout_console()
        self.stderr = stderr or get_stderr_console()

    def message(self, text: str = "") -> None:
        self.stdout.print(escape(text))

    def success(self, text: str) -> None:
        self.stdout.print(f"[green]✓[/green] {escape(text)}")

    def failure(self, text: str) -> None:
        self.stdout.print(f"[red]✗[/red] {escape(text)}")

    def warning(self, text: str) -> None:
        self.stdout.print(f"[yellow]Warning:[/yellow] {escape(text)}")

    def error(self, text: str) -> None:
        self.stderr.print(f"[red]Error:[/red] {escape(text)}")

    def usage(self) -> None:
        name = program_name()
        self.stdout.print(f"[bold]USAGE:[/bold] {escape(f'{name} <file1> [file2] [file3] ...')}")
        for line in (
            "    file1, file2, file3, ... – URLs or paths to files to AirDrop",
            "    You can specify multiple items - both local files and web URLs, and you can mix them too.",
            f"    You can also pipe input from other commands: command | {name} -",
            "",
            "EXAMPLES:",
            f"    {name} document.pdf",
            f"    {name} image1.jpg image2.png",
            f"    {name} file.txt https://apple.com/",
            f"    find . -name '*.pdf' | {name} -",
            f"    {name} --device \"iPhone\" document.pdf",
            "",
            "OPTIONS:",
            "    -h, --help – print help info",
            "    -l, --list-devices – show available AirDrop devices (API limited)",
            "    -d, --device <name> – specify target device (not fully supported)",
            "    - – read file paths from stdin",
            "",
            "NOTE:",
            "    Device discovery and selection are limited by Apple's NSSharingService API.",
            "    The system picker UI will always appear for final device selection.",
        ):
            self.message(line)

    def device_list_notice(self) -> None:
        name = program_name()
        self.stdout.print("[yellow]⚠[/yellow]  API Limitation Notice")
        for line in (
            "",
            "Apple's NSSharingService does not provide APIs to list AirDrop recipients.",
            "AirDrop device discovery happens internally within the system UI picker.",
            "",
            "What we investigated:",
            "  • NetServiceBrowser - Only finds AirPlay devices, not AirDrop",
            "  • Network.framework - No AWDL peer enumeration API available",
            "  • MultipeerConnectivity - Requires custom app on both devices",
            "",
            "To use AirDrop, run:",
            f"  {name} <file>",
            "",
            "This will open the system picker showing all available devices.",
        ):
            self.message(line)

    def device_hint_notice(self, device_name: str) -> None:
        self.stdout.print(f"[yellow]⚠[/yellow]  Device selection requested: '{escape(device_name)}'")
        self.message("Note: NSSharingService does not support programmatic recipient selection.")
        self.message(f"The system picker will open - please select '{device_name}' manually.")
        self.message()

    def invalid_inputs(self, invalid: Iterable[str]) -> None:
        self.warning("The following paths are invalid")
        for raw in invalid:
            self.message(f"    {raw}")

    def batch(self, batch: ItemBatch) -> None:
        self.message(f"Sharing {len(batch)} items:")
        for index, item in enumerate(batch, start=1):
            self.message(f"  {index}. {item}")

    def submission_result(self, result: SubmissionResult) -> None:
        """Report a failed submission as soon as it is known"""
        if result.success:
            return
        if result.rejected:
            self.error(result.reason)
        else:
            self.error(f"Failed to share item: {result.reason}")
