"""Pipeline Monitor CLI: Typer-based command-line interface.

Provides the ``pipelinemonitor`` command with subcommands for showing the
status of a build and listing the pipelines defined in the local checkout.

All output uses Rich for formatted terminal display.
"""
