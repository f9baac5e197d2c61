"""Command line interface for ledctl."""
