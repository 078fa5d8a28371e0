"""Click-based CLI for polling and controlling a set-top box."""

import json
import logging
import sys
import time
from typing import Any, Callable

import click

from lib.amino import __version__
from lib.amino.device import AminoDevice
from lib.amino.exceptions import AminoError
from lib.amino.logging import log_error, setup_logging
from lib.amino.models import REBOOT_CONTROL, ControlRequest, StatisticsSnapshot


def common_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator for common CLI options.

    Parameters
    ----------
    func : Callable[..., Any]
        Function to decorate

    Returns
    -------
    Callable[..., Any]
        Decorated function
    """
    func = click.option(
        "--target",
        "-t",
        "host",
        required=True,
        help="Set-top box IP address",
    )(func)
    func = click.option(
        "--username",
        "-u",
        default="root",
        help="Username for authentication",
    )(func)
    func = click.option(
        "--password",
        "-p",
        default="",
        help="Password for authentication",
    )(func)
    func = click.option(
        "--port",
        default=23,
        type=int,
        help="Telnet port",
    )(func)
    func = click.option(
        "--json",
        "json_output",
        is_flag=True,
        help="Output in JSON format",
    )(func)
    func = click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Verbose output",
    )(func)
    func = click.option(
        "--quiet",
        "-q",
        is_flag=True,
        help="Quiet output (errors only)",
    )(func)
    return func


def setup_cli_logging(verbose: bool, quiet: bool, json_output: bool) -> None:
    """Set up logging for CLI.

    Parameters
    ----------
    verbose : bool
        Enable verbose logging
    quiet : bool
        Enable quiet logging
    json_output : bool
        Enable JSON output
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    setup_logging(level=level, json_output=json_output)


def format_snapshot(snapshot: StatisticsSnapshot) -> str:
    """Render a snapshot as aligned ``name: value`` lines."""
    rows = {**snapshot.extended_statistics(), **snapshot.generic_statistics()}
    width = max(len(name) for name in rows)
    lines = []
    for name, value in rows.items():
        if value is None:
            value = "-"
        elif isinstance(value, float):
            value = f"{value:.3f}"
        lines.append(f"{name.ljust(width)}  {value}")
    return "\n".join(lines)


def _fail(error: Exception, host: str, json_output: bool, **fields: Any) -> None:
    log_error(f"{error}", device_ip=host)
    if json_output:
        click.echo(json.dumps({"host": host, **fields, "error": str(error), "success": False}))
    else:
        click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Amino set-top box monitor CLI."""
    pass


@cli.command()
@common_options
@click.option("--count", "-c", default=1, type=click.IntRange(min=1), help="Number of polls")
@click.option("--interval", "-i", default=5.0, type=float, help="Seconds between polls")
def stats(
    host: str,
    username: str,
    password: str,
    port: int,
    json_output: bool,
    verbose: bool,
    quiet: bool,
    count: int,
    interval: float,
) -> None:
    """Poll device statistics.

    Network throughput needs two polls, so use --count 2 or more to see it.
    """
    setup_cli_logging(verbose, quiet, json_output)

    try:
        with AminoDevice(host=host, port=port, username=username, password=password) as device:
            for index in range(count):
                if index:
                    time.sleep(interval)

                snapshot = device.get_statistics()
                if json_output:
                    data = snapshot.model_dump(mode="json", by_alias=True, exclude={"controls"})
                    click.echo(json.dumps({"host": host, **data, "success": True}))
                else:
                    click.echo(format_snapshot(snapshot))
                    if index < count - 1:
                        click.echo("")

    except AminoError as e:
        _fail(e, host, json_output)

    sys.exit(0)


@cli.command()
@common_options
def reboot(
    host: str,
    username: str,
    password: str,
    port: int,
    json_output: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Reboot the device."""
    setup_cli_logging(verbose, quiet, json_output)

    try:
        with AminoDevice(host=host, port=port, username=username, password=password) as device:
            device.control_property(ControlRequest(property=REBOOT_CONTROL))

    except AminoError as e:
        _fail(e, host, json_output, control=REBOOT_CONTROL)

    if json_output:
        click.echo(json.dumps({"host": host, "control": REBOOT_CONTROL, "success": True}))
    else:
        click.echo(f"Reboot sent to {host}")
    sys.exit(0)


@cli.command()
@common_options
@click.argument("command", required=True)
def execute(
    host: str,
    username: str,
    password: str,
    port: int,
    json_output: bool,
    verbose: bool,
    quiet: bool,
    command: str,
) -> None:
    """Execute a shell command on the device.

    COMMAND: Command to execute
    """
    setup_cli_logging(verbose, quiet, json_output)

    try:
        with AminoDevice(host=host, port=port, username=username, password=password) as device:
            result = device.execute(command)

    except AminoError as e:
        _fail(e, host, json_output, command=command)

    if json_output:
        click.echo(
            json.dumps(
                {
                    "host": host,
                    "command": result.command,
                    "output": result.output,
                    "success": True,
                }
            )
        )
    else:
        click.echo(result.output)
    sys.exit(0)


@cli.command()
@click.option(
    "--config",
    "config_file",
    type=click.Path(),
    help="YAML configuration file",
)
def serve(config_file: str | None) -> None:
    """Run the HTTP API for the configured device."""
    import uvicorn

    from lib.amino.api.app import create_app
    from lib.amino.config import load_config

    config = load_config(config_file)
    app = create_app(config=config)
    uvicorn.run(app, host=config.api_host, port=config.api_port)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
