"""Markdown reports built from a finished run."""
