"""OpenAPI parser -- load a document and build its schema graph.

Typical usage::

    from schemacli.parser import build_schema_graph, load_spec, validate_openapi_version

    raw = load_spec("petstore.yaml")
    validate_openapi_version(raw)
    graph = build_schema_graph(raw)
    pet = graph["Pet"]

Sub-modules:

* :mod:`~schemacli.parser.loader` -- I/O layer (URL, file, stdin), format
  detection, and OpenAPI version validation.
* :mod:`~schemacli.parser.resolver` -- JSON-pointer resolution of internal
  ``$ref`` strings.
* :mod:`~schemacli.parser.schema_graph` -- turns ``components/schemas`` into
  linked :class:`~schemacli.models.SchemaNode` objects.
"""

from schemacli.parser.loader import load_spec, validate_openapi_version
from schemacli.parser.schema_graph import build_schema_graph, get_schema, object_schemas

__all__ = [
    "build_schema_graph",
    "get_schema",
    "load_spec",
    "object_schemas",
    "validate_openapi_version",
]
