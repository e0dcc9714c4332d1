"""Map a leaf schema to its parameter representation.

Three representations exist:

* **Flag** -- ``boolean`` fields.  The bound value is a tri-state toggle
  (``--enabled`` / ``--no-enabled`` / absent); only a present toggle writes
  the underlying field.
* **FilePath** -- ``binary`` fields.  A stream is useless at the command
  line, so the parameter takes a path string that is resolved to exactly one
  file and opened for reading at bind time.
* **Plain** -- everything else, assigned as bound.

The mapping is pure: it looks at the schema alone, never at siblings.
"""

from __future__ import annotations

from schemacli.models import BindingTemplate, RepresentationKind, SchemaKind, SchemaNode

_ADAPTATIONS: dict[SchemaKind, tuple[RepresentationKind, BindingTemplate]] = {
    SchemaKind.BOOLEAN: (RepresentationKind.FLAG, BindingTemplate.SWITCH_TO_BOOL),
    SchemaKind.BINARY: (RepresentationKind.FILE_PATH, BindingTemplate.PATH_TO_STREAM),
}

_PLAIN = (RepresentationKind.PLAIN, BindingTemplate.ASSIGN)

_TYPE_NAMES: dict[str, str] = {
    "string": "str",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
    "array": "list",
    "object": "dict",
}

_FORMAT_OVERRIDES: dict[tuple[str, str], str] = {
    ("string", "byte"): "bytes",
    ("string", "date"): "date",
    ("string", "date-time"): "datetime",
    ("string", "uuid"): "UUID",
}


def adapt(schema: SchemaNode) -> tuple[RepresentationKind, BindingTemplate]:
    """Return the representation and binding template for *schema*.

    Example::

        >>> adapt(SchemaNode(kind=SchemaKind.BOOLEAN, json_type="boolean"))
        (<RepresentationKind.FLAG: 'Flag'>, <BindingTemplate.SWITCH_TO_BOOL: 'switch_to_bool'>)
    """
    return _ADAPTATIONS.get(schema.kind, _PLAIN)


def declared_type(schema: SchemaNode) -> str:
    """Name of the type a parameter for *schema* is declared with.

    Flags are ``bool`` and file paths are ``str``.  Objects that are not
    inlined are declared with their own schema name; scalars map through the
    JSON type (and format, where it narrows the type).
    """
    if schema.kind == SchemaKind.BOOLEAN:
        return "bool"
    if schema.kind == SchemaKind.BINARY:
        return "str"
    if schema.kind == SchemaKind.OBJECT:
        return schema.name or "dict"
    if schema.format:
        override = _FORMAT_OVERRIDES.get((schema.json_type, schema.format))
        if override is not None:
            return override
    return _TYPE_NAMES.get(schema.json_type, "str")
