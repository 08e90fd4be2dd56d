"""Content cache and run-output persistence."""
