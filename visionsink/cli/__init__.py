"""visionsink CLI — Typer-based command-line interface.

Provides the ``visionsink`` command with subcommands for listing schemas,
dry-run resolution of routing keys, and running a load pipeline.

All output uses Rich for formatted terminal display.
"""
