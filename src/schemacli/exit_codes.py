"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to one error category and is referenced by the matching
:class:`~schemacli.exceptions.SchemacliError` subclass, so shell wrappers can
tell a bad spec from a bad file path without parsing stderr.

Example::

    $ schemacli objects new-upload-object --content './missing/*.bin'
    $ echo $?
    9   # EXIT_BINDING_FAILURE -- no file matched the path
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required options."""

EXIT_NOT_FOUND = 4
"""A named schema does not exist in the loaded spec."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI specification could not be parsed or validated."""

EXIT_CYCLIC_SCHEMA = 8
"""Parameter projection re-entered a schema that is already being projected."""

EXIT_BINDING_FAILURE = 9
"""A bound option value could not be applied (e.g. a file path matched zero or many files)."""
