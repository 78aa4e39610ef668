"""Subcommands of the gameci CLI."""
