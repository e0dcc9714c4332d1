"""Config commands -- view and modify project configuration.

Provides the ``schemacli config`` sub-command group.  ``show`` prints the
effective :class:`~schemacli.models.ProjectConfig` after precedence
resolution; ``set`` writes one key to the project-local ``schemacli.json``.
"""

from __future__ import annotations

import typer

from schemacli.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration.

    Example::

        schemacli config show
        schemacli --json config show
    """
    from schemacli.config import get_config_dir, project_config_path, resolve_config
    from schemacli.exceptions import ConfigError

    try:
        global_cfg, project = resolve_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Config directory: {get_config_dir()}")
    if project_config_path().is_file():
        info(f"Project config: {project_config_path()}")
    data = project.model_dump(mode="json")
    data["output_format"] = global_cfg.output.format
    format_response(data)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key: spec, max_inlined_parameters, or name_prefix."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a project configuration value in ``./schemacli.json``.

    Existing keys in the file are kept; the merged result is validated
    against :class:`~schemacli.models.ProjectConfig` before it is written.

    Raises:
        typer.Exit: With code 1 if the key is unknown or the value is
            invalid.

    Example::

        schemacli config set spec ./openapi.yaml
        schemacli config set max_inlined_parameters 2
    """
    from schemacli.config import load_project_config, save_project_config
    from schemacli.exceptions import ConfigError

    try:
        values = load_project_config() or {}
        values[key] = value
        config = save_project_config(values)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(f"Set {key} = {getattr(config, key)}")
