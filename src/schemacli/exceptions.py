"""Exception hierarchy for schemacli.

All exceptions inherit from :class:`SchemacliError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`schemacli.exit_codes`.
The top-level handler in :func:`schemacli.app.main` catches
``SchemacliError`` and exits with that code, while unexpected exceptions
produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    SchemacliError              (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- SchemaNotFoundError     (exit 4)
    +-- SpecParseError          (exit 7)
    +-- CyclicSchemaError       (exit 8)
    +-- BindingError            (exit 9)
    |   +-- PathNotFoundError
    |   +-- AmbiguousPathError
    +-- ConfigError             (exit 1)
"""

from __future__ import annotations

from schemacli.exit_codes import (
    EXIT_BINDING_FAILURE,
    EXIT_CYCLIC_SCHEMA,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SPEC_PARSE_ERROR,
)


class SchemacliError(Exception):
    """Base exception for all schemacli errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`schemacli.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SchemacliError):
    """Raised for invalid CLI arguments or missing required options."""

    exit_code = EXIT_INVALID_USAGE


class SchemaNotFoundError(SchemacliError):
    """Raised when a schema name is not present in ``components/schemas``."""

    exit_code = EXIT_NOT_FOUND


class SpecParseError(SchemacliError):
    """Raised when the OpenAPI spec cannot be parsed or fails validation."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class CyclicSchemaError(SchemacliError):
    """Raised when projection reaches a schema already on the recursion stack.

    Args:
        chain: Schema names from the outermost schema down to the repeated one.
    """

    exit_code = EXIT_CYCLIC_SCHEMA

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__(f"Cyclic schema reference: {' -> '.join(self.chain)}")


class BindingError(SchemacliError):
    """Raised when a bound option value cannot be written into the target object."""

    exit_code = EXIT_BINDING_FAILURE


class PathNotFoundError(BindingError):
    """Raised when a file-path option matches no file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Unable to locate file '{path}'")


class AmbiguousPathError(BindingError):
    """Raised when a file-path option matches more than one file.

    The message lists every match so the user can narrow the pattern.
    """

    def __init__(self, path: str, matches: list[str]):
        self.path = path
        self.matches = list(matches)
        super().__init__(
            f"'{path}' matches more than one file: {', '.join(self.matches)}"
        )


class ConfigError(SchemacliError):
    """Raised for configuration problems (invalid JSON, bad values, unknown keys)."""

    exit_code = EXIT_GENERIC_FAILURE
