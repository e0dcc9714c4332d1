"""Generator -- project schemas onto parameters and build commands from them.

This sub-package is the second half of the schemacli pipeline: it takes
:class:`~schemacli.models.SchemaNode` objects (produced by the parser) and
turns each object schema into an ordered list of
:class:`~schemacli.models.ParameterDescriptor` objects, then into a Typer
command that constructs an instance of that schema.

Typical usage::

    from schemacli.generator import Scope, project_parameters
    from schemacli.models import ProjectConfig

    scope = Scope("NewPetObject")
    params = project_parameters(graph["Pet"], scope, ProjectConfig())

Sub-modules:

* :mod:`~schemacli.generator.naming` -- Per-scope unique name allocation and
  identifier helpers.
* :mod:`~schemacli.generator.type_adapter` -- Leaf schema to representation
  (Plain, Flag, FilePath) and binding template.
* :mod:`~schemacli.generator.projector` -- The recursive projection that
  decides what is a parameter and what is inlined.
* :mod:`~schemacli.generator.binding` -- Writes bound values into a backing
  object along accessor paths.
* :mod:`~schemacli.generator.command_builder` -- Renders descriptors as
  Typer commands with dynamically generated signatures.
"""

from schemacli.generator.command_builder import (
    build_object_command,
    build_object_commands,
    object_command_name,
)
from schemacli.generator.naming import NameAllocator, Scope
from schemacli.generator.projector import ParameterProjector, project_parameters

__all__ = [
    "NameAllocator",
    "ParameterProjector",
    "Scope",
    "build_object_command",
    "build_object_commands",
    "object_command_name",
    "project_parameters",
]
