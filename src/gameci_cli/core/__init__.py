"""Core helpers for the gameci CLI."""
