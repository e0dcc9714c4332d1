"""Apply bound parameter values to a backing object.

A generated command owns one backing object (a plain ``dict``).  Each
:class:`~schemacli.models.ParameterDescriptor` says where its value goes --
the accessor path to the container, then the field name -- and how the value
is converted on the way (its :class:`~schemacli.models.BindingTemplate`).

Intermediate containers are created lazily: an inlined ``owner`` object only
appears in the backing object once one of its leaves is actually bound.
"""

from __future__ import annotations

import glob
import os
from typing import Any, BinaryIO

from schemacli.exceptions import AmbiguousPathError, PathNotFoundError
from schemacli.models import AccessorPath, BindingTemplate, ParameterDescriptor


def bind_value(target: dict[str, Any], descriptor: ParameterDescriptor, value: Any) -> None:
    """Write *value* into *target* as *descriptor* prescribes.

    Args:
        target: The root backing object.
        descriptor: The parameter the value was bound to.
        value: The raw bound value (a toggle for flags, a path for file
            parameters, anything for plain parameters).

    Raises:
        PathNotFoundError: A file-path value matched no file.
        AmbiguousPathError: A file-path value matched several files.
    """
    converted = convert_value(descriptor.binding, value)
    container = ensure_container(target, descriptor.accessor_path)
    container[descriptor.property_name] = converted


def ensure_container(target: dict[str, Any], path: AccessorPath) -> dict[str, Any]:
    """Walk *path* from *target*, creating guarded containers that are missing."""
    container = target
    for step in path.steps:
        if step.ensure and container.get(step.member) is None:
            container[step.member] = {}
        container = container[step.member]
    return container


def convert_value(binding: BindingTemplate, value: Any) -> Any:
    if binding == BindingTemplate.SWITCH_TO_BOOL:
        return bool(value)
    if binding == BindingTemplate.PATH_TO_STREAM:
        return open_single_file(value)
    return value


def resolve_single_file(pattern: str) -> str:
    """Resolve *pattern* (a path, possibly with wildcards) to exactly one file.

    ``~`` is expanded and shell-style wildcards (``*``, ``?``, ``[...]``) are
    honoured; directories never count as matches.

    Raises:
        PathNotFoundError: Nothing matched.
        AmbiguousPathError: More than one file matched; all are listed.
    """
    expanded = os.path.expanduser(pattern)
    matches = sorted(p for p in glob.glob(expanded) if os.path.isfile(p))
    if not matches:
        raise PathNotFoundError(pattern)
    if len(matches) > 1:
        raise AmbiguousPathError(pattern, matches)
    return matches[0]


def open_single_file(pattern: str) -> BinaryIO:
    """Open the single file *pattern* resolves to for binary reading."""
    return open(resolve_single_file(pattern), "rb")
