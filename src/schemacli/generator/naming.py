"""Name allocation and identifier helpers.

:class:`NameAllocator` hands out names that are unique within one target
scope: the first request for a name returns it unchanged, later requests get
the smallest free numeric suffix (``Name``, ``Name1``, ``Name2``, ...).
Comparison is exact and case-sensitive, and allocators never share state, so
two commands may both own a ``Name`` parameter.

The string helpers convert between the naming conventions the generator
meets: schema and property names (``bodyColor``), parameter names
(``BodyColorHex``), Python identifiers (``body_color_hex``), and CLI tokens
(``--body-color-hex``).
"""

from __future__ import annotations

import keyword
import re
from typing import Iterable

_WORD_SPLIT_RE = re.compile(r"[^0-9A-Za-z]+")
_INVALID_IDENT_RE = re.compile(r"[^a-zA-Z0-9_]")


class NameAllocator:
    """Per-scope registry of reserved names.

    Example::

        >>> names = NameAllocator()
        >>> names.allocate("Name"), names.allocate("Name"), names.allocate("Name")
        ('Name', 'Name1', 'Name2')
    """

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._reserved: set[str] = set(reserved)
        # Next suffix to try per base name, so repeated collisions stay O(1).
        self._next_suffix: dict[str, int] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._reserved

    def __len__(self) -> int:
        return len(self._reserved)

    def allocate(self, base_name: str) -> str:
        """Reserve and return a name derived from *base_name*."""
        if base_name not in self._reserved:
            self._reserved.add(base_name)
            return base_name

        n = self._next_suffix.get(base_name, 1)
        while f"{base_name}{n}" in self._reserved:
            n += 1
        candidate = f"{base_name}{n}"
        self._reserved.add(candidate)
        self._next_suffix[base_name] = n + 1
        return candidate


class Scope:
    """Identity of one generated target plus its own :class:`NameAllocator`.

    Args:
        name: The target's identity, e.g. ``"NewPetObject"``.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.names = NameAllocator()

    def __repr__(self) -> str:
        return f"Scope({self.name!r}, {len(self.names)} names)"

    def allocate(self, base_name: str) -> str:
        return self.names.allocate(base_name)


def pascal_case(*parts: str) -> str:
    """Title-case and concatenate *parts*.

    Each part is split on non-alphanumerics; every word gets an upper-case
    first letter and keeps the rest of its casing.

    Example::

        >>> pascal_case("BodyColor", "hex")
        'BodyColorHex'
        >>> pascal_case("pet", "owner_address")
        'PetOwnerAddress'
    """
    words: list[str] = []
    for part in parts:
        words.extend(w for w in _WORD_SPLIT_RE.split(part) if w)
    return "".join(w[:1].upper() + w[1:] for w in words)


def sanitize_param_name(name: str) -> str:
    """Convert a parameter name to a valid snake_case Python identifier.

    CamelCase boundaries become underscores, separators collapse, a leading
    digit gets an underscore prefix, and Python keywords get a trailing
    underscore (``class`` -> ``class_``).  An empty result becomes
    ``"param"``.
    """
    result = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    result = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", result)
    result = result.lower().replace("-", "_").replace(".", "_")
    result = _INVALID_IDENT_RE.sub("_", result)
    result = re.sub(r"_+", "_", result).strip("_")
    if not result:
        result = "param"
    if result[0].isdigit():
        result = f"_{result}"
    if keyword.iskeyword(result):
        result = f"{result}_"
    return result


def kebab_case(name: str) -> str:
    """CLI token form of *name* (``NewPetObject`` -> ``new-pet-object``)."""
    return sanitize_param_name(name).strip("_").replace("_", "-") or "param"
