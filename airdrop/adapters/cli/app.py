"""
Main CLI application
"""
import sys
from enum import Enum
from typing import BinaryIO, List, Optional

import typer
from typer.core import TyperCommand

from ...core.constants import (
    EXIT_OK,
    EXIT_FAILURE,
    EXIT_CAPABILITY_UNAVAILABLE,
    EXIT_INVALID_DEVICE_ARGS,
)
from ...core.exceptions import CapabilityUnavailableError, ConfigError, DispatchError
from ...core.logging import setup_logging, get_logger
from ...domain.dispatch import DispatchService, classify, report
from ...infrastructure.sharing import create_transfer_service
from ..config import ConfigLoader
from .output import ConsoleOutput

logger = get_logger(__name__)

app = typer.Typer(
    name="airdrop",
    add_completion=False,
    help="Share files and URLs via AirDrop",
    rich_markup_mode="rich",
)


class CliOption(str, Enum):
    """Leading flag recognised on the command line"""
    HELP = "help"
    LIST_DEVICES = "list-devices"
    DEVICE = "device"
    UNKNOWN = "unknown"

    @classmethod
    def from_flag(cls, flag: str) -> "CliOption":
        return {
            "-h": cls.HELP,
            "--help": cls.HELP,
            "-l": cls.LIST_DEVICES,
            "--list-devices": cls.LIST_DEVICES,
            "-d": cls.DEVICE,
            "--device": cls.DEVICE,
        }.get(flag, cls.UNKNOWN)


def read_inputs(stream: BinaryIO) -> List[str]:
    """
    Read newline-delimited paths or URLs, dropping blank lines.

    Undecodable bytes become U+FFFD, so a bad line ends up as an invalid input.
    """
    lines = (raw.decode("utf-8", errors="replace").strip() for raw in stream)
    return [line for line in lines if line]


class RawArgsCommand(TyperCommand):
    """Command that keeps the unparsed argument list in ctx.meta"""

    def parse_args(self, ctx: typer.Context, args: List[str]) -> List[str]:
        # click drops a leading "--", which must reach main as an unknown option
        ctx.meta["raw_args"] = list(args)
        return super().parse_args(ctx, args)


@app.command(
    cls=RawArgsCommand,
    add_help_option=False,
    options_metavar="[OPTION] ITEMS...",
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "allow_interspersed_args": False,
    },
)
def main(ctx: typer.Context):
    """
    AirDrop files and URLs from the command line.

    Items may be local files, http(s) URLs, or a mix of both. The system
    picker always opens for the final device selection.
    """
    output = ConsoleOutput()
    args: List[str] = ctx.meta.get("raw_args", ctx.args)

    if not args:
        output.usage()
        raise typer.Exit(EXIT_OK)

    argument = args[0]
    if argument.startswith("-") and argument != "-":
        option = CliOption.from_flag(argument)

        if option is CliOption.HELP:
            output.usage()
            raise typer.Exit(EXIT_OK)

        if option is CliOption.LIST_DEVICES:
            output.device_list_notice()
            raise typer.Exit(EXIT_OK)

        if option is CliOption.DEVICE:
            if len(args) < 3:
                output.error("--device requires a device name and at least one file")
                output.usage()
                raise typer.Exit(EXIT_INVALID_DEVICE_ARGS)
            share_items(args[2:], target_hint=args[1], output=output)
            return

        output.error("Unknown option, see usage.")
        output.usage()
        raise typer.Exit(EXIT_OK)

    if argument == "-":
        inputs = read_inputs(sys.stdin.buffer)
        if not inputs:
            output.usage()
            raise typer.Exit(EXIT_OK)
        share_items(inputs, output=output)
        return

    share_items(args, output=output)


def share_items(
    inputs: List[str],
    target_hint: Optional[str] = None,
    output: Optional[ConsoleOutput] = None,
) -> None:
    """
    Classify inputs and dispatch them through the transfer service.

    Always ends by raising typer.Exit with the run's exit code.
    """
    output = output or ConsoleOutput()

    if target_hint:
        output.device_hint_notice(target_hint)

    try:
        config = ConfigLoader().load()
    except ConfigError as e:
        output.error(str(e))
        raise typer.Exit(EXIT_FAILURE)

    setup_logging(level=config.log_level, log_file=config.log_file)

    try:
        transfer_service = create_transfer_service(config.service_name, target_hint=target_hint)
    except CapabilityUnavailableError as e:
        output.error(str(e))
        raise typer.Exit(EXIT_CAPABILITY_UNAVAILABLE)

    batch, invalid = classify(inputs)
    if invalid:
        output.invalid_inputs(invalid)

    if not batch:
        output.warning("No valid files or URLs to share.")
        raise typer.Exit(EXIT_FAILURE)

    output.batch(batch)

    dispatch_service = DispatchService(
        transfer_service,
        progress_callback=output.submission_result,
    )

    try:
        outcome = dispatch_service.dispatch(batch, target_hint=target_hint)
    except DispatchError as e:
        output.error(str(e))
        raise typer.Exit(EXIT_FAILURE)
    except Exception as e:
        logger.exception("Dispatch failed")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(EXIT_FAILURE)

    result = report(outcome)
    if result.exit_code == EXIT_OK:
        output.success(result.summary)
    else:
        output.failure(result.summary)
    raise typer.Exit(result.exit_code)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
