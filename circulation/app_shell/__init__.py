"""Imperative shell: rules loading, batch evaluation and the CLI."""
