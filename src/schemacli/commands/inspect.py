"""Inspect commands -- examine schemas and their projected parameters.

Provides the ``schemacli inspect`` sub-command group with read-only
commands: ``schemas`` lists the component schemas of the configured spec,
``params`` shows the parameter list a given schema projects onto.  Both
resolve the spec through :func:`~schemacli.config.resolve_config` so the
usual precedence (flag, environment, project file, user file) applies.
"""

from __future__ import annotations

from typing import Optional

import typer

from schemacli.models import ProjectConfig, SchemaNode
from schemacli.output import debug, error, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


def _load_graph(
    spec: Optional[str] = None,
    max_inlined: Optional[int] = None,
    prefix: Optional[str] = None,
) -> tuple[dict[str, SchemaNode], ProjectConfig]:
    """Resolve the configuration and build the schema graph of its spec.

    Raises:
        typer.Exit: With code 2 when no spec is configured, or with the
            error's own code when the configuration or the spec is invalid.
    """
    from schemacli.config import resolve_config
    from schemacli.exceptions import SchemacliError
    from schemacli.parser import build_schema_graph, load_spec, validate_openapi_version

    try:
        _, project = resolve_config(
            cli_spec=spec, cli_max_inlined=max_inlined, cli_prefix=prefix
        )
    except SchemacliError as exc:
        error(f"Config error: {exc}")
        raise typer.Exit(code=exc.exit_code) from None

    if project.spec is None:
        error("No spec configured. Pass --spec or run: schemacli config set spec <path>")
        raise typer.Exit(code=2)

    try:
        debug(f"Loading spec: {project.spec}")
        raw = load_spec(project.spec)
        version = validate_openapi_version(raw)
        debug(f"OpenAPI version: {version}")
        graph = build_schema_graph(raw)
    except SchemacliError as exc:
        error(f"Failed to load spec: {exc}")
        raise typer.Exit(code=exc.exit_code) from None

    return graph, project


@inspect_app.command("schemas")
def inspect_schemas(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI spec file or URL."
    ),
) -> None:
    """List all schemas defined in the spec.

    Shows each ``components/schemas`` entry with its kind, the number of
    direct properties, and whether it is polymorphic.

    Example::

        schemacli inspect schemas --spec petstore.yaml
    """
    graph, _ = _load_graph(spec)

    if not graph:
        info("No schemas defined in this spec.")
        return

    headers = ["Schema", "Kind", "Properties", "Polymorphic"]
    rows: list[list[str]] = []
    for name, node in sorted(graph.items()):
        rows.append([
            name,
            node.kind.value,
            str(len(node.properties)),
            "Yes" if node.is_polymorphic else "",
        ])

    get_output().print_table(headers, rows, title=f"Schemas ({len(rows)})")


@inspect_app.command("params")
def inspect_params(
    schema: str = typer.Argument(help="Schema name (case-sensitive)."),
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI spec file or URL."
    ),
    max_inlined: Optional[int] = typer.Option(
        None,
        "--max-inlined",
        min=0,
        help="Inline nested objects with at most this many properties.",
    ),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", help="Noun prefix for the generated command name."
    ),
) -> None:
    """Show the parameters a schema projects onto.

    Lists every descriptor in output order with its representation, its
    declared type, whether it is mandatory, and the dotted path to the field
    it writes.

    Example::

        schemacli inspect params Pet
        schemacli inspect params Car --max-inlined 2 --json
    """
    from schemacli.exceptions import SchemacliError
    from schemacli.generator import Scope, object_command_name, project_parameters
    from schemacli.parser import get_schema

    graph, project = _load_graph(spec, max_inlined, prefix)

    try:
        node = get_schema(graph, schema)
        scope = Scope(object_command_name(node, project.name_prefix))
        descriptors = project_parameters(node, scope, project)
    except SchemacliError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not descriptors:
        info(f"'{schema}' projects onto no parameters.")
        return

    headers = ["Parameter", "Kind", "Type", "Mandatory", "Field", "Help"]
    rows = [
        [
            d.name,
            d.representation_kind.value,
            d.declared_type,
            "Yes" if d.mandatory else "",
            d.accessor_path.describe(d.property_name),
            d.help_text,
        ]
        for d in descriptors
    ]
    get_output().print_table(headers, rows, title=f"{scope.name} ({len(rows)})")
