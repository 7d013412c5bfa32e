"""Command-line interface for DotSync."""
