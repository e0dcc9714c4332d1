"""Project a schema tree onto a flat, ordered list of parameters.

This is the core algorithm of schemacli.  Given an object schema it decides
which fields become parameters of the generated command, which nested
objects are flattened into the parent's parameter set, and how each leaf is
represented and bound.

**Algorithm summary**

1. Project every ``allOf`` component first, in declaration order, with the
   same scope and accessor path, so composed fields precede the type's own.
2. Warn (and carry on with the base shape) when the schema is polymorphic.
3. Walk the properties in declaration order:

   * read-only properties are skipped;
   * an object property named ``"properties"`` is always inlined;
   * any other object property without ``additionalProperties`` whose own
     property count is at most ``max_inlined_parameters`` is inlined, and its
     leaves get qualified names (``BodyColor`` + ``hex`` -> ``BodyColorHex``);
   * inlining recurses with the accessor path extended by one guarded step,
     and the result is spliced in place;
   * every other property becomes one leaf parameter.

4. Return the accumulated list.

Each call returns its own list and the caller concatenates; nothing is
accumulated onto shared state, so projecting the same schema twice yields
identical output.  A schema that is reached again while it is still being
projected raises :class:`~schemacli.exceptions.CyclicSchemaError`.
"""

from __future__ import annotations

import re
from typing import Optional

from schemacli.exceptions import CyclicSchemaError
from schemacli.generator.naming import Scope, pascal_case
from schemacli.generator.type_adapter import adapt, declared_type
from schemacli.models import (
    AccessorPath,
    ParameterDescriptor,
    ProjectConfig,
    PropertyNode,
    SchemaKind,
    SchemaNode,
)
from schemacli.output import warning

HELP_MESSAGE_MISSING = "HELP MESSAGE MISSING"
"""Help text used when a property carries no description."""

RESERVED_INLINE_NAME = "properties"
"""Object properties with this name are always inlined."""

_LINE_BREAKS_RE = re.compile(r"[ \t]*[\r\n]+[ \t]*")


class ParameterProjector:
    """Recursive schema-to-parameter projection with a fixed inlining threshold.

    Args:
        max_inlined_parameters: Nested objects with at most this many direct
            properties are inlined (the comparison is inclusive).
    """

    def __init__(self, max_inlined_parameters: int) -> None:
        self.max_inlined_parameters = max_inlined_parameters

    def project(
        self,
        schema: SchemaNode,
        scope: Scope,
        accessor_path: Optional[AccessorPath] = None,
        expand_names: bool = False,
        owner_name: Optional[str] = None,
        _active: tuple[SchemaNode, ...] = (),
    ) -> list[ParameterDescriptor]:
        """Project *schema* into parameter descriptors for *scope*.

        Args:
            schema: The schema whose properties become parameters.
            scope: The target being generated; owns the name allocator.
            accessor_path: Path from the root backing object to the
                container that holds *schema*'s fields.  Empty at the root.
            expand_names: Qualify leaf names with *owner_name*.
            owner_name: Name used to qualify leaves; defaults to the schema's
                own name.

        Returns:
            Descriptors in output order: ``allOf`` contributions, then own
            properties, with inlined branches expanded in place.

        Raises:
            CyclicSchemaError: If *schema* is already being projected further
                up the recursion.
        """
        if any(node is schema for node in _active):
            raise CyclicSchemaError([node.name for node in _active] + [schema.name])
        active = _active + (schema,)
        path = accessor_path if accessor_path is not None else AccessorPath()
        owner = owner_name if owner_name is not None else schema.name

        descriptors: list[ParameterDescriptor] = []

        for component in schema.all_of:
            descriptors.extend(
                self.project(component, scope, path, expand_names, owner, active)
            )

        if schema.is_polymorphic:
            warning(
                f"Polymorphic schema '{schema.name}' is projected with its base "
                "shape only; variant-specific fields are not exposed."
            )

        for prop in schema.properties.values():
            if prop.read_only:
                continue

            inline = self._inline_mode(prop)
            if inline is not None:
                child_expand, child_owner = (
                    (expand_names, owner) if inline == "reserved" else (True, prop.name)
                )
                descriptors.extend(
                    self.project(
                        prop.schema_,
                        scope,
                        path.extend(prop.name, prop.schema_.name or "object"),
                        child_expand,
                        child_owner,
                        active,
                    )
                )
                continue

            descriptors.append(
                self._project_leaf(prop, scope, path, expand_names, owner)
            )

        return descriptors

    def _inline_mode(self, prop: PropertyNode) -> Optional[str]:
        """``"reserved"``, ``"small"``, or ``None`` when *prop* stays a leaf."""
        target = prop.schema_
        if target.kind != SchemaKind.OBJECT:
            return None
        if prop.name == RESERVED_INLINE_NAME:
            return "reserved"
        if (
            not target.additional_properties
            and len(target.properties) <= self.max_inlined_parameters
        ):
            return "small"
        return None

    def _project_leaf(
        self,
        prop: PropertyNode,
        scope: Scope,
        path: AccessorPath,
        expand_names: bool,
        owner: str,
    ) -> ParameterDescriptor:
        base_name = pascal_case(owner, prop.name) if expand_names else prop.name
        kind, binding = adapt(prop.schema_)
        enum_values = prop.schema_.enum_values
        return ParameterDescriptor(
            name=scope.allocate(base_name),
            property_name=prop.name,
            representation_kind=kind,
            binding=binding,
            declared_type=declared_type(prop.schema_),
            mandatory=prop.required,
            help_text=format_help_text(prop.description),
            accessor_path=path,
            json_type=prop.schema_.json_type,
            enum_values=tuple(enum_values) if enum_values else None,
        )


def format_help_text(description: Optional[str]) -> str:
    """Single-line help text, or :data:`HELP_MESSAGE_MISSING` when empty.

    Each line break, together with the spaces and tabs around it, is
    replaced by one space rather than deleted outright, so words on adjacent
    lines stay separate (``"line one\\nline two"`` -> ``"line one line two"``).
    """
    text = (description or "").strip()
    if not text:
        return HELP_MESSAGE_MISSING
    return _LINE_BREAKS_RE.sub(" ", text)


def project_parameters(
    schema: SchemaNode,
    scope: Scope,
    config: ProjectConfig,
) -> list[ParameterDescriptor]:
    """Project *schema* at the root of *scope* using *config*'s threshold."""
    projector = ParameterProjector(config.max_inlined_parameters)
    return projector.project(schema, scope)
