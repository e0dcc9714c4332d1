"""Render projected parameters as Typer commands that construct objects.

For every object schema ``X`` this module generates a command named
``New<Prefix>XObject`` (``new-<prefix>-x-object`` on the command line).  Its
options are the :class:`~schemacli.models.ParameterDescriptor` list produced
by :class:`~schemacli.generator.projector.ParameterProjector`:

* **Plain** descriptors become ``--option`` values typed from the JSON type
  (``str``/``int``/``float``); object and array values are given as JSON
  text and decoded before binding.
* **Flag** descriptors become ``--flag/--no-flag`` tri-state toggles.
* **FilePath** descriptors take a path (wildcards allowed) that must match
  exactly one file.

Mandatory descriptors become required options.  When the command runs, an
empty backing object is created, every option that was actually given is
bound through :func:`~schemacli.generator.binding.bind_value`, and the
object is written to stdout (binary streams as base64).
"""

from __future__ import annotations

import base64
import io
import json
from typing import Any, Callable, Optional

import typer

from schemacli.exceptions import CyclicSchemaError, InvalidUsageError, SchemacliError
from schemacli.generator.binding import bind_value
from schemacli.generator.naming import NameAllocator, Scope, kebab_case, pascal_case, sanitize_param_name
from schemacli.generator.projector import project_parameters
from schemacli.models import (
    ParameterDescriptor,
    ProjectConfig,
    RepresentationKind,
    SchemaKind,
    SchemaNode,
)
from schemacli.output import error, format_response, warning

_PLAIN_TYPES: dict[str, type] = {
    "integer": int,
    "number": float,
}

_JSON_ENCODED = frozenset({"object", "array"})


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def object_command_name(schema: SchemaNode, name_prefix: str = "") -> str:
    """Identity of the command that creates *schema* instances.

    Example::

        >>> object_command_name(SchemaNode(name="Pet"), "Store")
        'NewStorePetObject'
    """
    return f"New{pascal_case(name_prefix)}{pascal_case(schema.name)}Object"


def build_object_commands(
    schemas: list[SchemaNode],
    config: ProjectConfig,
    title: Optional[str] = None,
) -> typer.Typer:
    """Build a :class:`typer.Typer` app with one command per object schema.

    Non-object schemas are ignored.  A schema whose projection is cyclic is
    skipped with a warning so the remaining commands stay usable.

    Args:
        schemas: Candidate schema nodes (usually every component schema).
        config: Supplies the inlining threshold and the name prefix.
        title: Optional help text for the group.

    Returns:
        The app, with commands sorted by name.
    """
    app = typer.Typer(
        help=title or "Create in-memory instances of the API's object schemas.",
        no_args_is_help=True,
    )

    objects = sorted(
        (s for s in schemas if s.kind == SchemaKind.OBJECT), key=lambda s: s.name
    )
    for schema in objects:
        try:
            name, fn = build_object_command(schema, config)
        except CyclicSchemaError as exc:
            warning(f"Skipping '{schema.name}': {exc}")
            continue
        app.command(name=kebab_case(name), help=fn.__doc__)(fn)

    return app


def build_object_command(
    schema: SchemaNode,
    config: ProjectConfig,
) -> tuple[str, Callable[..., Any]]:
    """Generate the Typer-compatible function for one object schema.

    The function source is built as a string and compiled so that
    :mod:`inspect` (which Typer relies on) sees a real signature with one
    keyword parameter per descriptor.

    Returns:
        ``(command_identity, function)``.

    Raises:
        CyclicSchemaError: If projecting *schema* recurses into itself.
    """
    scope = Scope(object_command_name(schema, config.name_prefix))
    descriptors = project_parameters(schema, scope, config)

    # ``help`` would shadow Click's own --help option.
    identifiers = NameAllocator(reserved=["help"])
    options = NameAllocator(reserved=["help"])
    namespace: dict[str, Any] = {}
    sig_parts: list[str] = []
    bound: list[tuple[str, ParameterDescriptor]] = []

    # Required options first so Python accepts the signature ordering.
    ordered = sorted(descriptors, key=lambda d: not d.mandatory)
    for idx, desc in enumerate(ordered):
        py_name = identifiers.allocate(sanitize_param_name(desc.name))
        token = _allocate_option(options, py_name, desc)
        ann, default = _typer_parameter(desc, token)
        namespace[f"_ann_{idx}"] = ann
        namespace[f"_default_{idx}"] = default
        sig_parts.append(f"{py_name}: _ann_{idx} = _default_{idx}")
        bound.append((py_name, desc))

    by_position = {id(desc): py_name for py_name, desc in bound}
    values_expr = ", ".join(
        f"{by_position[id(desc)]!r}: {by_position[id(desc)]}" for desc in descriptors
    )
    func_name = f"_cmd_{sanitize_param_name(scope.name)}"
    source = (
        f"def {func_name}({', '.join(sig_parts)}):\n"
        f"    return _run({{{values_expr}}})\n"
    )

    namespace["_run"] = _make_runner(
        [(by_position[id(desc)], desc) for desc in descriptors]
    )
    code = compile(source, f"<schemacli:{scope.name}>", "exec")
    exec(code, namespace)  # noqa: S102 -- controlled code generation
    fn = namespace[func_name]

    fn.__doc__ = (schema.description or "").strip() or (
        f"Create an in-memory instance of the {schema.name} object."
    )
    fn.__name__ = func_name
    fn.__qualname__ = func_name
    fn.descriptors = descriptors  # type: ignore[attr-defined]
    return scope.name, fn


# ---------------------------------------------------------------------------
# Option construction
# ---------------------------------------------------------------------------


def _allocate_option(
    options: NameAllocator, py_name: str, desc: ParameterDescriptor
) -> str:
    """Reserve the CLI token for *desc* (``body-color-hex`` for ``--body-color-hex``).

    A Flag owns two tokens, ``x`` and ``no-x``, and both must be free: a
    sibling option spelled ``--no-x`` would otherwise capture the negative
    switch.
    """
    base = py_name.strip("_").replace("_", "-") or "param"
    if desc.representation_kind != RepresentationKind.FLAG:
        return options.allocate(base)
    while True:
        token = options.allocate(base)
        if f"no-{token}" not in options:
            options.allocate(f"no-{token}")
            return token


def _typer_parameter(desc: ParameterDescriptor, token: str) -> tuple[Any, Any]:
    """Return ``(annotation, typer.Option default)`` for *desc*."""
    option = f"--{token}"
    help_text = desc.help_text
    if desc.enum_values:
        help_text = f"{help_text}  [choices: {', '.join(desc.enum_values)}]"

    if desc.representation_kind == RepresentationKind.FLAG:
        py_type: Any = bool
        decl = f"{option}/--no-{token}"
    elif desc.representation_kind == RepresentationKind.FILE_PATH:
        py_type = str
        decl = option
        help_text = f"{help_text}  [path to file]"
    else:
        py_type = _PLAIN_TYPES.get(desc.json_type, str)
        decl = option
        if desc.json_type in _JSON_ENCODED:
            help_text = f"{help_text}  [JSON]"

    if desc.mandatory:
        return py_type, typer.Option(..., decl, help=help_text)
    return Optional[py_type], typer.Option(None, decl, help=help_text)


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


def _make_runner(
    pairs: list[tuple[str, ParameterDescriptor]],
) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """Return the function the generated command delegates to."""

    def _run(values: dict[str, Any]) -> dict[str, Any]:
        try:
            obj = construct_object(pairs, values)
        except SchemacliError as exc:
            error(str(exc))
            raise typer.Exit(code=exc.exit_code) from None
        try:
            data = to_jsonable(obj)
        finally:
            close_streams(obj)
        format_response(data)
        return obj

    return _run


def construct_object(
    pairs: list[tuple[str, ParameterDescriptor]],
    values: dict[str, Any],
) -> dict[str, Any]:
    """Build the backing object from the options that were given.

    Options left at ``None`` are unbound and do not touch the object.  If a
    binding fails, streams opened by earlier bindings are closed before the
    error propagates.

    Raises:
        InvalidUsageError: An object/array option is not valid JSON.
        BindingError: A file-path option did not match exactly one file.
    """
    obj: dict[str, Any] = {}
    try:
        for py_name, desc in pairs:
            value = values.get(py_name)
            if value is None:
                continue
            if (
                desc.representation_kind == RepresentationKind.PLAIN
                and desc.json_type in _JSON_ENCODED
            ):
                try:
                    value = json.loads(value)
                except json.JSONDecodeError as exc:
                    raise InvalidUsageError(
                        f"Option for '{desc.name}' expects JSON: {exc}"
                    ) from exc
            bind_value(obj, desc, value)
    except Exception:
        close_streams(obj)
        raise
    return obj


def close_streams(value: Any) -> None:
    """Close every stream reachable from *value*."""
    if isinstance(value, dict):
        for item in value.values():
            close_streams(item)
    elif isinstance(value, list):
        for item in value:
            close_streams(item)
    elif isinstance(value, io.IOBase):
        value.close()


def to_jsonable(value: Any) -> Any:
    """Copy *value* with open binary streams replaced by base64 text.

    Streams are read to the end and closed.
    """
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    if isinstance(value, io.IOBase):
        with value:
            return base64.b64encode(value.read()).decode("ascii")
    return value
