"""Built-in CLI sub-commands for schemacli.

* :mod:`~schemacli.commands.config` -- view and modify configuration.
* :mod:`~schemacli.commands.inspect` -- list schemas and show the parameters
  a schema projects onto.

Each module exports a :class:`typer.Typer` sub-application that
:mod:`schemacli.app` registers on the root app.
"""
