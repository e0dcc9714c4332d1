"""Tests for schemacli.generator.type_adapter."""

from __future__ import annotations

import pytest

from conftest import binary, obj, scalar
from schemacli.generator.type_adapter import adapt, declared_type
from schemacli.models import BindingTemplate, RepresentationKind, SchemaKind, SchemaNode


class TestAdapt:
    def test_boolean_is_flag(self) -> None:
        assert adapt(scalar("boolean")) == (
            RepresentationKind.FLAG,
            BindingTemplate.SWITCH_TO_BOOL,
        )

    def test_binary_is_file_path(self) -> None:
        assert adapt(binary()) == (
            RepresentationKind.FILE_PATH,
            BindingTemplate.PATH_TO_STREAM,
        )

    @pytest.mark.parametrize("json_type", ["string", "integer", "number", "array"])
    def test_everything_else_is_plain(self, json_type: str) -> None:
        assert adapt(scalar(json_type)) == (RepresentationKind.PLAIN, BindingTemplate.ASSIGN)

    def test_object_leaf_is_plain(self) -> None:
        assert adapt(obj("Big"))[0] == RepresentationKind.PLAIN


class TestDeclaredType:
    @pytest.mark.parametrize(
        ("json_type", "expected"),
        [
            ("string", "str"),
            ("integer", "int"),
            ("number", "float"),
            ("array", "list"),
            ("custom", "str"),
        ],
    )
    def test_json_types(self, json_type: str, expected: str) -> None:
        assert declared_type(scalar(json_type)) == expected

    def test_boolean(self) -> None:
        assert declared_type(scalar("boolean")) == "bool"

    def test_binary_declared_as_path_string(self) -> None:
        assert declared_type(binary()) == "str"

    def test_object_uses_schema_name(self) -> None:
        assert declared_type(obj("Engine")) == "Engine"

    def test_anonymous_object(self) -> None:
        node = SchemaNode(kind=SchemaKind.OBJECT, json_type="object")
        assert declared_type(node) == "dict"

    @pytest.mark.parametrize(
        ("fmt", "expected"),
        [("date-time", "datetime"), ("uuid", "UUID"), ("byte", "bytes"), ("email", "str")],
    )
    def test_format_overrides(self, fmt: str, expected: str) -> None:
        assert declared_type(scalar("string", format=fmt)) == expected
