"""Shared primitives for the gameci core."""
