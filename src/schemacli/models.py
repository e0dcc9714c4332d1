"""Canonical Pydantic models shared across all schemacli modules.

This is the single source of truth for data shapes in the project.  The
models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory
or in the project-local ``schemacli.json``:
    :class:`OutputConfig`, :class:`ProjectConfig`, :class:`GlobalConfig`.

**Schema graph models** -- produced by :mod:`schemacli.parser.schema_graph`
and read (never modified) by the generator:
    :class:`SchemaKind`, :class:`SchemaNode`, :class:`PropertyNode`.

**Projection models** -- produced by :mod:`schemacli.generator.projector`
and consumed by the command builder and the ``inspect`` commands:
    :class:`AccessStep`, :class:`AccessorPath`, :class:`RepresentationKind`,
    :class:`BindingTemplate`, :class:`ParameterDescriptor`.

Schema nodes may reference each other cyclically (a ``Node`` whose
``children`` are ``Node`` again), so the node-valued fields are excluded from
``repr`` and nodes are compared by identity, never by value.
"""

from __future__ import annotations

import enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class ProjectConfig(BaseModel):
    """Generation settings for one project.

    ``max_inlined_parameters`` and ``name_prefix`` are the two knobs the
    generator reads.  The prefix is only used when naming the generated
    command (``New<Prefix><Schema>Object``); the projector itself never
    sees it.
    """

    spec: Optional[str] = Field(
        default=None, description="URL or file path to the OpenAPI spec"
    )
    max_inlined_parameters: int = Field(
        default=4,
        ge=0,
        description="Inline nested objects with at most this many properties",
    )
    name_prefix: str = Field(
        default="", description="Noun prefix for generated command names"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/schemacli/config.json``.

    ``project`` holds user-level defaults for :class:`ProjectConfig`; a
    project-local ``schemacli.json``, environment variables, and CLI flags
    override them.  See :func:`~schemacli.config.resolve_config`.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)


# --- Schema graph ---


class SchemaKind(str, enum.Enum):
    """How a schema participates in parameter projection."""

    SCALAR = "scalar"
    OBJECT = "object"
    BOOLEAN = "boolean"
    BINARY = "binary"
    COMPOSITE = "composite"


class SchemaNode(BaseModel):
    """A resolved type description.

    ``properties`` keeps declaration order; ``all_of`` lists the schemas
    composed into this one, in declaration order.  ``is_polymorphic`` is
    informational only (a ``discriminator`` was declared).
    """

    name: str = ""
    kind: SchemaKind = SchemaKind.SCALAR
    json_type: str = Field(default="string", description="JSON Schema type")
    format: Optional[str] = None
    description: Optional[str] = None
    properties: dict[str, PropertyNode] = Field(default_factory=dict, repr=False)
    all_of: list[SchemaNode] = Field(default_factory=list, repr=False)
    additional_properties: bool = False
    is_polymorphic: bool = False
    enum_values: Optional[list[str]] = None


class PropertyNode(BaseModel):
    """A named member of a :class:`SchemaNode`."""

    name: str
    schema_: SchemaNode = Field(alias="schema", repr=False)
    read_only: bool = False
    required: bool = False
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


# --- Projection output ---


class AccessStep(BaseModel):
    """One member access on the way from the backing object to a field.

    When ``ensure`` is set, the container at ``member`` is created (as an
    empty ``type_name`` instance) before it is dereferenced.
    """

    model_config = ConfigDict(frozen=True)

    member: str
    type_name: str = "object"
    ensure: bool = True


class AccessorPath(BaseModel):
    """Immutable chain of :class:`AccessStep` from the root backing object.

    Extending a path returns a new path; the recursion in the projector gives
    every branch its own copy.
    """

    model_config = ConfigDict(frozen=True)

    steps: tuple[AccessStep, ...] = ()

    @property
    def depth(self) -> int:
        """Number of member accesses (the nesting depth of the leaf)."""
        return len(self.steps)

    def extend(self, member: str, type_name: str = "object") -> AccessorPath:
        """Return a copy of this path with one more guarded step appended."""
        return AccessorPath(
            steps=self.steps + (AccessStep(member=member, type_name=type_name),)
        )

    def describe(self, leaf: Optional[str] = None) -> str:
        """Render the path as a dotted string (``owner.address.city``)."""
        parts = [step.member for step in self.steps]
        if leaf is not None:
            parts.append(leaf)
        return ".".join(parts)


class RepresentationKind(str, enum.Enum):
    """How a parameter is exposed at the invocation boundary."""

    PLAIN = "Plain"
    FLAG = "Flag"
    FILE_PATH = "FilePath"


class BindingTemplate(str, enum.Enum):
    """How a bound value is converted before it is written to the field."""

    ASSIGN = "assign"
    SWITCH_TO_BOOL = "switch_to_bool"
    PATH_TO_STREAM = "path_to_stream"


class ParameterDescriptor(BaseModel):
    """One projected parameter -- the generator's output unit.

    ``name`` is unique within its scope.  ``property_name`` is the field the
    value is written to, on the container reached by ``accessor_path``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    property_name: str
    representation_kind: RepresentationKind
    binding: BindingTemplate
    declared_type: str
    mandatory: bool = False
    help_text: str = ""
    accessor_path: AccessorPath = Field(default_factory=AccessorPath)
    json_type: str = "string"
    enum_values: Optional[tuple[str, ...]] = None


SchemaNode.model_rebuild()
PropertyNode.model_rebuild()
