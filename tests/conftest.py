"""Shared test fixtures for schemacli.

Provides the fixture spec, small builders for hand-made schema nodes,
isolated config environments, output state management, and a CLI runner.
These fixtures are automatically discovered by pytest and available to all
test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import pytest

from schemacli.models import PropertyNode, SchemaKind, SchemaNode
from schemacli.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Schema node builders
# ---------------------------------------------------------------------------


def scalar(json_type: str = "string", name: str = "", **kwargs: Any) -> SchemaNode:
    """A leaf schema node of the given JSON type."""
    kind = {
        "boolean": SchemaKind.BOOLEAN,
        "array": SchemaKind.COMPOSITE,
    }.get(json_type, SchemaKind.SCALAR)
    return SchemaNode(name=name, kind=kind, json_type=json_type, **kwargs)


def binary(name: str = "") -> SchemaNode:
    return SchemaNode(name=name, kind=SchemaKind.BINARY, json_type="string", format="binary")


def obj(
    name: str,
    properties: Optional[dict[str, Any]] = None,
    required: tuple[str, ...] = (),
    read_only: tuple[str, ...] = (),
    **kwargs: Any,
) -> SchemaNode:
    """An object node whose properties map names to schema nodes."""
    props = {
        prop_name: PropertyNode(
            name=prop_name,
            schema=node,
            required=prop_name in required,
            read_only=prop_name in read_only,
        )
        for prop_name, node in (properties or {}).items()
    }
    return SchemaNode(
        name=name, kind=SchemaKind.OBJECT, json_type="object", properties=props, **kwargs
    )


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def garage_raw() -> dict[str, Any]:
    """Load the raw garage spec dict (OpenAPI 3.0)."""
    with open(FIXTURES_DIR / "garage.json") as f:
        return json.load(f)


@pytest.fixture
def garage_graph(garage_raw: dict[str, Any]) -> dict[str, SchemaNode]:
    """Schema graph of the garage spec."""
    from schemacli.parser import build_schema_graph

    return build_schema_graph(garage_raw)


@pytest.fixture
def garage_spec_path(tmp_path: Path) -> Path:
    """Copy of the garage spec inside tmp_path."""
    spec_path = tmp_path / "garage.json"
    spec_path.write_text((FIXTURES_DIR / "garage.json").read_text())
    return spec_path


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of tmp_path,
    clears all SCHEMACLI_* environment variables, and changes the working
    directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("schemacli.config._is_xdg_platform", lambda: True)

    for var in [
        "SCHEMACLI_SPEC",
        "SCHEMACLI_MAX_INLINED_PARAMETERS",
        "SCHEMACLI_NAME_PREFIX",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a plain-text OutputManager with colour disabled."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
