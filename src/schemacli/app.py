"""Typer application factory and CLI entry point for schemacli.

This module wires together the top-level Typer application, registers the
built-in sub-commands (``inspect``, ``config``), and attaches the generated
``objects`` group for the configured spec at startup.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.  Unhandled exceptions are written to a crash log under
the data directory.

See Also:
    :mod:`schemacli.config`: Configuration precedence resolution.
    :mod:`schemacli.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from schemacli import __version__
from schemacli.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="schemacli",
    help="Project OpenAPI object schemas onto command-line parameters.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"schemacli {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
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

    Initialises the global :class:`~schemacli.output.OutputManager` from the
    CLI flags, falling back to the ``output.format`` stored in the user
    config, and records ``verbose`` in the Typer context.
    """
    from schemacli.config import resolve_output_format
    from schemacli.exceptions import ConfigError
    from schemacli.output import OutputFormat, OutputManager, error, set_output

    cli_format = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    try:
        fmt = OutputFormat(resolve_output_format(cli_format))
    except ConfigError as exc:
        set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from schemacli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def _load_dynamic_commands(target: typer.Typer) -> None:
    """Attach the ``objects`` group for the configured spec to *target*.

    Resolves the configuration via :func:`~schemacli.config.resolve_config`,
    loads and validates the spec, builds its schema graph, and adds one
    ``new-...-object`` command per object schema.

    Failures are silently ignored so that the built-in commands (``inspect``,
    ``config``) remain available when no spec is configured or it cannot be
    loaded.
    """
    try:
        from schemacli.config import resolve_config
        from schemacli.generator import build_object_commands
        from schemacli.parser import build_schema_graph, load_spec, validate_openapi_version

        _, project = resolve_config()
        if project.spec is None:
            return

        raw = load_spec(project.spec)
        validate_openapi_version(raw)
        graph = build_schema_graph(raw)

        title = (raw.get("info") or {}).get("title") or "the API"
        objects_app = build_object_commands(list(graph.values()), project)
        target.add_typer(
            objects_app,
            name="objects",
            help=f"Create object instances for {title}.",
        )
    except Exception:
        # Silent fail -- built-in commands must always work.
        pass


def register_commands(target: typer.Typer) -> None:
    """Register the built-in sub-command groups on *target*."""
    from schemacli.commands.config import config_app
    from schemacli.commands.inspect import inspect_app

    target.add_typer(config_app, name="config", help="Configuration management.")
    target.add_typer(inspect_app, name="inspect", help="Inspect schemas and parameters.")


def main() -> None:
    """CLI entry point invoked by the ``schemacli`` console script.

    1. Install signal handlers for clean Ctrl-C behaviour.
    2. Register the built-in sub-commands.
    3. Attempt to attach the ``objects`` group for the configured spec.
    4. Invoke the Typer application.

    Unhandled :class:`~schemacli.exceptions.SchemacliError` instances cause a
    clean exit with the error's ``exit_code``.  All other exceptions produce a
    crash log and a generic failure exit.
    """
    _setup_signal_handlers()
    try:
        register_commands(app)
        _load_dynamic_commands(app)
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from schemacli.exceptions import SchemacliError
        from schemacli.output import error

        if isinstance(exc, SchemacliError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
