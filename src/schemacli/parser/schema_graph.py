"""Build a graph of :class:`~schemacli.models.SchemaNode` from an OpenAPI document.

Every entry of ``components/schemas`` becomes one named node.  ``$ref``
pointers are resolved lazily and memoised per pointer, so two properties that
reference ``#/components/schemas/Color`` share the very same node, and a
schema that (directly or indirectly) references itself produces a genuine
cycle in the graph rather than an infinite expansion.  Cycles are left for
the projector to reject; see :class:`~schemacli.exceptions.CyclicSchemaError`.

Inline (anonymous) object schemas are named after their owner and property
(``Pet`` + ``owner`` -> ``PetOwner``).

Kind detection:

* ``type: boolean`` -> :attr:`~schemacli.models.SchemaKind.BOOLEAN`
* ``type: string, format: binary`` or ``type: file`` -> ``BINARY``
* ``type: object``, or any schema declaring ``properties``/``allOf`` -> ``OBJECT``
* ``type: array`` -> ``COMPOSITE``
* everything else -> ``SCALAR``
"""

from __future__ import annotations

from typing import Any

from schemacli.exceptions import SchemaNotFoundError, SpecParseError
from schemacli.generator.naming import pascal_case
from schemacli.models import PropertyNode, SchemaKind, SchemaNode
from schemacli.parser.resolver import ref_name, resolve_pointer

_COMPONENT_PREFIX = "#/components/schemas/"


def build_schema_graph(spec: dict[str, Any]) -> dict[str, SchemaNode]:
    """Build one :class:`SchemaNode` per ``components/schemas`` entry.

    Args:
        spec: The raw OpenAPI document (``$ref`` pointers unresolved).

    Returns:
        A dict mapping component name to node, in declaration order.

    Raises:
        SpecParseError: If ``components/schemas`` is malformed or a ``$ref``
            cannot be resolved.
    """
    schemas = (spec.get("components") or {}).get("schemas")
    if schemas is None:
        return {}
    if not isinstance(schemas, dict):
        raise SpecParseError("'components/schemas' must be an object")

    builder = _GraphBuilder(spec)
    return {
        name: builder.node_for_ref(_COMPONENT_PREFIX + _escape(name))
        for name in schemas
    }


def get_schema(graph: dict[str, SchemaNode], name: str) -> SchemaNode:
    """Look up *name* in *graph*, case-sensitively.

    Raises:
        SchemaNotFoundError: With a hint listing close candidates.
    """
    try:
        return graph[name]
    except KeyError:
        candidates = [n for n in graph if n.lower() == name.lower()]
        hint = f" Did you mean: {', '.join(candidates)}?" if candidates else ""
        raise SchemaNotFoundError(f"Schema '{name}' not found.{hint}") from None


def object_schemas(graph: dict[str, SchemaNode]) -> list[SchemaNode]:
    """Object-kind nodes of *graph*, sorted by name."""
    return sorted(
        (node for node in graph.values() if node.kind == SchemaKind.OBJECT),
        key=lambda node: node.name,
    )


class _GraphBuilder:
    """Stateful helper holding the per-pointer memo for one document."""

    def __init__(self, root: dict[str, Any]) -> None:
        self._root = root
        self._by_ref: dict[str, SchemaNode] = {}

    def node_for_ref(self, ref: str) -> SchemaNode:
        if ref in self._by_ref:
            return self._by_ref[ref]
        raw = resolve_pointer(ref, self._root)
        node = SchemaNode(name=ref_name(ref))
        # Registered before filling so that self-references link back here.
        self._by_ref[ref] = node
        self._fill(node, raw)
        return node

    def node_for(self, raw: Any, name: str) -> SchemaNode:
        if isinstance(raw, dict) and "$ref" in raw:
            return self.node_for_ref(raw["$ref"])
        node = SchemaNode(name=name)
        self._fill(node, raw)
        return node

    def _deref(self, raw: Any) -> dict[str, Any]:
        """Resolve *raw* one level for flag lookups (readOnly, description)."""
        if isinstance(raw, dict) and "$ref" in raw:
            target = resolve_pointer(raw["$ref"], self._root)
            return target if isinstance(target, dict) else {}
        return raw if isinstance(raw, dict) else {}

    def _fill(self, node: SchemaNode, raw: Any) -> None:
        if not isinstance(raw, dict):
            raw = {}

        json_type = _schema_type(raw)
        node.json_type = json_type
        node.format = raw.get("format")
        node.description = raw.get("description")
        node.is_polymorphic = "discriminator" in raw
        additional = raw.get("additionalProperties", False)
        node.additional_properties = isinstance(additional, dict) or bool(additional)
        if raw.get("enum"):
            node.enum_values = [str(v) for v in raw["enum"]]

        node.all_of = [
            self.node_for(part, f"{node.name}AllOf{index}")
            for index, part in enumerate(raw.get("allOf") or [])
        ]

        required = set(raw.get("required") or [])
        properties: dict[str, PropertyNode] = {}
        for prop_name, prop_raw in (raw.get("properties") or {}).items():
            child = self.node_for(prop_raw, pascal_case(node.name, prop_name))
            flags = self._deref(prop_raw)
            own = prop_raw if isinstance(prop_raw, dict) else {}
            properties[prop_name] = PropertyNode(
                name=prop_name,
                schema=child,
                read_only=bool(own.get("readOnly", flags.get("readOnly", False))),
                required=prop_name in required,
                description=own.get("description") or flags.get("description"),
            )
        node.properties = properties
        node.kind = _schema_kind(raw, json_type)


def _schema_type(raw: dict[str, Any]) -> str:
    """Effective JSON type of *raw*.

    OpenAPI 3.1 type arrays (``["string", "null"]``) yield their first
    non-null entry; an untyped schema with structure is an object.
    """
    type_value = raw.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        type_value = non_null[0] if non_null else None
    if type_value:
        return str(type_value)
    if "properties" in raw or "allOf" in raw or "additionalProperties" in raw:
        return "object"
    return "string"


def _schema_kind(raw: dict[str, Any], json_type: str) -> SchemaKind:
    if json_type == "boolean":
        return SchemaKind.BOOLEAN
    if json_type == "file" or (json_type == "string" and raw.get("format") == "binary"):
        return SchemaKind.BINARY
    if json_type == "object":
        return SchemaKind.OBJECT
    if json_type == "array":
        return SchemaKind.COMPOSITE
    return SchemaKind.SCALAR


def _escape(name: str) -> str:
    return name.replace("~", "~0").replace("/", "~1")
