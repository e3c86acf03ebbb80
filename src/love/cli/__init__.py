"""CLI (typer + rich)."""
