"""Resolve ``$ref`` JSON Reference pointers inside an OpenAPI document.

Only internal references (``#/...``) are supported; anything else raises
:class:`~schemacli.exceptions.SpecParseError`.  Pointer segments follow
RFC 6901 escaping (``~1`` for ``/``, ``~0`` for ``~``).

Unlike a full-document dereference, the schema graph builder resolves
references one at a time and memoises the result per pointer, so this module
only exposes the single-pointer primitive plus a helper for the component
name a pointer designates.
"""

from __future__ import annotations

from typing import Any

from schemacli.exceptions import SpecParseError

_SCHEMA_PREFIX = "#/components/schemas/"


def resolve_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Return the value at *ref* inside *root*.

    Args:
        ref: A ``$ref`` string such as ``"#/components/schemas/Pet"``.
        root: The raw spec dictionary to navigate.

    Raises:
        SpecParseError: If the reference is external, or a segment does not
            exist in the document.

    Example::

        >>> resolve_pointer("#/components/schemas/Pet", spec)["type"]
        'object'
    """
    if not ref.startswith("#/"):
        raise SpecParseError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = root
    for raw_segment in ref[2:].split("/"):
        segment = raw_segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found at path"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': "
                f"cannot navigate into {type(current).__name__}"
            )

    return current


def ref_name(ref: str) -> str:
    """Short type name for a reference (``#/components/schemas/Pet`` -> ``Pet``)."""
    if ref.startswith(_SCHEMA_PREFIX):
        name = ref[len(_SCHEMA_PREFIX):]
    else:
        name = ref.rsplit("/", 1)[-1]
    return name.replace("~1", "/").replace("~0", "~")
