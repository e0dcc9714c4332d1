"""schemacli -- Generate object-construction commands from OpenAPI schemas.

This package reads the ``components/schemas`` section of an OpenAPI 3.0/3.1
document and turns every object schema into a ``new-<name>-object`` command
whose options build an in-memory instance of that type.  Nested objects are
flattened ("inlined") into the parent's option set when they are small
enough, boolean fields become ``--flag/--no-flag`` toggles, and binary fields
accept a file path that is opened at bind time.

Typical workflow::

    schemacli inspect params Pet --spec petstore.yaml
    schemacli config set spec petstore.yaml
    schemacli objects new-pet-object --name Rex --status available

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
