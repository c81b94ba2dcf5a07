"""Typer application and CLI entry point for skillpack.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``package``, ``validate``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
:class:`~skillpack.exceptions.SkillpackError` instances exit with their
``exit_code``; any other exception is written to a crash log under the data
directory and exits with :data:`~skillpack.exit_codes.EXIT_SYSTEM_ERROR`.

See Also:
    :mod:`skillpack.config`: Packaging defaults and their precedence.
    :mod:`skillpack.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer
from rich.logging import RichHandler

from skillpack import __version__
from skillpack.commands.config import config_app
from skillpack.commands.package import package_command
from skillpack.commands.validate import validate_command
from skillpack.exit_codes import EXIT_CANCELLED, EXIT_SYSTEM_ERROR
from skillpack.output import OutputFormat, OutputManager, set_output


app = typer.Typer(
    name="skillpack",
    help="Validate skill directories and package them into .skill archives.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("package")(package_command)
app.command("validate")(validate_command)
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"skillpack {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~skillpack.output.OutputManager` from
    CLI flags and, with ``--verbose``, routes library logging to stderr.
    """
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    _configure_logging(verbose, output)


def _configure_logging(verbose: bool, output: OutputManager) -> None:
    """Attach a :class:`~rich.logging.RichHandler` to the package logger.

    Without ``--verbose`` the ``skillpack`` logger stays at WARNING with no
    handler of its own, so library debug messages are discarded.
    """
    logger = logging.getLogger("skillpack")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    if not verbose:
        logger.setLevel(logging.WARNING)
        return

    handler = RichHandler(
        console=output.stderr_console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from skillpack.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``skillpack`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except Exception as exc:
        from skillpack.exceptions import SkillpackError
        from skillpack.output import error

        if isinstance(exc, SkillpackError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            try:
                log_path = _write_crash_log(exc)
            except OSError:
                error(f"Unexpected error: {exc}")
            else:
                error(f"Unexpected error: {exc}. Debug log: {log_path}")
            sys.exit(EXIT_SYSTEM_ERROR)
