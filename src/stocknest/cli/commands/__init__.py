"""CLI command implementations for stocknest.

This package contains subcommands for the stocknest CLI, including:
- validate: Validate a job file
"""

from stocknest.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
