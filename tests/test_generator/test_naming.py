"""Tests for schemacli.generator.naming."""

from __future__ import annotations

import pytest

from schemacli.generator.naming import (
    NameAllocator,
    Scope,
    kebab_case,
    pascal_case,
    sanitize_param_name,
)


class TestNameAllocator:
    def test_first_request_unchanged(self) -> None:
        assert NameAllocator().allocate("Name") == "Name"

    def test_suffixes_increment(self) -> None:
        names = NameAllocator()
        assert [names.allocate("Name") for _ in range(4)] == [
            "Name",
            "Name1",
            "Name2",
            "Name3",
        ]

    def test_skips_taken_suffix(self) -> None:
        """A literal ``Name1`` claimed earlier forces the next free suffix."""
        names = NameAllocator()
        names.allocate("Name1")
        names.allocate("Name")
        assert names.allocate("Name") == "Name2"

    def test_case_sensitive(self) -> None:
        names = NameAllocator()
        assert names.allocate("name") == "name"
        assert names.allocate("Name") == "Name"

    def test_reserved_names(self) -> None:
        names = NameAllocator(reserved=["help"])
        assert "help" in names
        assert names.allocate("help") == "help1"

    def test_len_and_contains(self) -> None:
        names = NameAllocator()
        names.allocate("a")
        names.allocate("a")
        assert len(names) == 2
        assert "a1" in names
        assert "b" not in names


class TestScope:
    def test_scopes_are_independent(self) -> None:
        first, second = Scope("NewAObject"), Scope("NewBObject")
        assert first.allocate("Name") == "Name"
        assert second.allocate("Name") == "Name"
        assert first.allocate("Name") == "Name1"

    def test_repr(self) -> None:
        scope = Scope("NewPetObject")
        scope.allocate("x")
        assert repr(scope) == "Scope('NewPetObject', 1 names)"


class TestPascalCase:
    @pytest.mark.parametrize(
        ("parts", "expected"),
        [
            (("BodyColor", "hex"), "BodyColorHex"),
            (("pet", "owner_address"), "PetOwnerAddress"),
            (("Car", "properties"), "CarProperties"),
            (("x-rate", "limit"), "XRateLimit"),
            (("",), ""),
        ],
    )
    def test_cases(self, parts: tuple[str, ...], expected: str) -> None:
        assert pascal_case(*parts) == expected


class TestSanitizeParamName:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("BodyColorHex", "body_color_hex"),
            ("petId", "pet_id"),
            ("X-Request-ID", "x_request_id"),
            ("HTTPServer", "http_server"),
            ("class", "class_"),
            ("2fa", "_2fa"),
            ("$$$", "param"),
        ],
    )
    def test_cases(self, name: str, expected: str) -> None:
        assert sanitize_param_name(name) == expected


class TestKebabCase:
    def test_command_name(self) -> None:
        assert kebab_case("NewPetObject") == "new-pet-object"

    def test_prefixed(self) -> None:
        assert kebab_case("NewGarageCarObject") == "new-garage-car-object"
