"""Command-line interface for gameci."""
